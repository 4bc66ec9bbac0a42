"""Slug properties.

Parses the URL slug of a documentation page into the repository
coordinates it points at:

    /{owner}/{repository}/{path...}
    /{owner}/{repository}/~{ref}/{path...}

A ref made only of digits is a pull request number.
"""

from dataclasses import dataclass, replace
from typing import TypedDict

from docspage.core.types import Slug

REF_PREFIX = "~"

_DOT_SEGMENTS = (".", "..")
_SEPARATORS = ("/", "\\")


class InvalidSlugError(ValueError):
    """Slug that does not name a page of a repository."""


def _check_segment(segment: str) -> None:
    if not segment or segment in _DOT_SEGMENTS or any(sep in segment for sep in _SEPARATORS):
        raise InvalidSlugError(f"Invalid slug segment: {segment!r}")


class PullRequestMetadata(TypedDict):
    """Head coordinates of a pull request."""

    owner: str
    repository: str
    ref: str


class SlugPropertiesDict(TypedDict):
    """Plain form of SlugProperties used in page props."""

    owner: str
    repository: str
    ref: str | None
    path: str
    base_ref: bool
    base: str


@dataclass(frozen=True)
class SlugProperties:
    """Repository coordinates of a requested page.

    Instances are immutable; updates return a new value.
    """

    owner: str
    repository: str
    ref: str | None = None
    path: str = ""
    base_ref: bool = False

    @classmethod
    def from_slug(cls, slug: Slug) -> "SlugProperties":
        """Parse slug segments.

        Args:
            slug: URL path segments, owner and repository first

        Returns:
            SlugProperties for the slug

        Raises:
            InvalidSlugError: If the slug has fewer than two segments, or a
                segment is empty, a dot segment, or contains a path separator
        """
        if len(slug) < 2:
            raise InvalidSlugError(f"Slug must contain an owner and a repository: {slug!r}")

        for segment in slug:
            _check_segment(segment)

        owner, repository, *rest = slug
        ref = None
        if rest and rest[0].startswith(REF_PREFIX):
            ref = rest[0][len(REF_PREFIX):] or None
            rest = rest[1:]
            if ref is not None:
                _check_segment(ref)

        path = "/".join(rest)
        return cls(owner=owner, repository=repository, ref=ref, path=path)

    @property
    def full_name(self) -> str:
        """Repository name as owner/repository."""
        return f"{self.owner}/{self.repository}"

    @property
    def base(self) -> str:
        """URL prefix of the repository documentation.

        The ref is only part of the base when it was explicitly requested.
        """
        base = f"/{self.owner}/{self.repository}"
        if self.ref and not self.base_ref:
            base = f"{base}/{REF_PREFIX}{self.ref}"
        return base

    def is_pull_request(self) -> bool:
        return bool(self.ref) and self.ref.isdigit()

    def with_pull_request(self, metadata: PullRequestMetadata) -> "SlugProperties":
        """Point the properties at the head of a pull request."""
        return replace(
            self,
            owner=metadata["owner"],
            repository=metadata["repository"],
            ref=metadata["ref"],
        )

    def with_base_ref(self, ref: str) -> "SlugProperties":
        """Use the repository base branch as the ref."""
        return replace(self, ref=ref, base_ref=True)

    def to_dict(self) -> SlugPropertiesDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "owner": self.owner,
            "repository": self.repository,
            "ref": self.ref,
            "path": self.path,
            "base_ref": self.base_ref,
            "base": self.base,
        }
