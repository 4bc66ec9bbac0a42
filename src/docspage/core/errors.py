"""Render outcomes other than a rendered page.

A request ends in exactly one of: a rendered page, a RenderError, or a
Redirect. Both error and redirect serialize to plain dictionaries so they
can be placed in page props.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypedDict

from docspage.core.properties import SlugProperties, SlugPropertiesDict


class ErrorKind(StrEnum):
    """Kinds of render errors."""

    REPOSITORY_NOT_FOUND = "repositoryNotFound"
    PAGE_NOT_FOUND = "pageNotFound"
    SERVER_ERROR = "serverError"


_STATUS_CODES = {
    ErrorKind.REPOSITORY_NOT_FOUND: 404,
    ErrorKind.PAGE_NOT_FOUND: 404,
    ErrorKind.SERVER_ERROR: 500,
}


class RenderErrorDict(TypedDict):
    """Plain form of RenderError used in page props."""

    kind: str
    status_code: int
    properties: SlugPropertiesDict


@dataclass(frozen=True)
class RenderError:
    """Classified failure to render a page."""

    kind: ErrorKind
    properties: SlugProperties

    @classmethod
    def repository_not_found(cls, properties: SlugProperties) -> "RenderError":
        return cls(ErrorKind.REPOSITORY_NOT_FOUND, properties)

    @classmethod
    def page_not_found(cls, properties: SlugProperties) -> "RenderError":
        return cls(ErrorKind.PAGE_NOT_FOUND, properties)

    @classmethod
    def server_error(cls, properties: SlugProperties) -> "RenderError":
        return cls(ErrorKind.SERVER_ERROR, properties)

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]

    @property
    def message(self) -> str:
        """User-facing description of the error."""
        if self.kind is ErrorKind.REPOSITORY_NOT_FOUND:
            return (
                f"The repository {self.properties.full_name} was not found. "
                "It may be private or may not exist."
            )
        if self.kind is ErrorKind.PAGE_NOT_FOUND:
            path = self.properties.path or "index"
            return (
                f"The page docs/{path} does not exist in "
                f"{self.properties.full_name}"
                + (f" at {self.properties.ref}." if self.properties.ref else ".")
            )
        return "Something went wrong while rendering this page."

    def to_dict(self) -> RenderErrorDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": str(self.kind),
            "status_code": self.status_code,
            "properties": self.properties.to_dict(),
        }


class RedirectDict(TypedDict):
    destination: str
    permanent: bool


@dataclass(frozen=True)
class Redirect:
    """Redirect response requested by page frontmatter."""

    destination: str
    permanent: bool = False

    def to_dict(self) -> RedirectDict:
        """Convert to dictionary for JSON serialization."""
        return {"destination": self.destination, "permanent": self.permanent}


def redirect(destination: str, properties: SlugProperties) -> Redirect:
    """Build a redirect for a frontmatter destination.

    Absolute URLs are used as is. Other destinations are resolved against
    the repository base of the current page.

    Args:
        destination: Frontmatter redirect value (e.g., "/guide" or "https://...")
        properties: Properties of the page requesting the redirect

    Returns:
        Non-permanent Redirect
    """
    if destination.startswith(("http://", "https://")):
        return Redirect(destination=destination)

    path = destination if destination.startswith("/") else f"/{destination}"
    if path == "/":
        path = ""
    return Redirect(destination=f"{properties.base}{path}")
