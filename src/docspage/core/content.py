"""Page content fetching.

Resolves a page of a repository's docs/ directory at a ref, along with
the repository's documentation config and the page frontmatter.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, TypedDict

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from docspage.core.docs_config import DocsConfigDict, fetch_docs_config
from docspage.core.github import GitHubClient
from docspage.core.properties import SlugProperties

logger = logging.getLogger(__name__)

DOCS_DIR = "docs"
EXTENSIONS = (".mdx", ".md")


class HeadingNodeDict(TypedDict):
    id: str
    title: str
    rank: int


@dataclass(frozen=True)
class HeadingNode:
    """Entry of a page heading outline."""

    id: str
    title: str
    rank: int

    def to_dict(self) -> HeadingNodeDict:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "title": self.title, "rank": self.rank}


@dataclass
class PageContent:
    """Fetched page of a documented repository.

    markdown is None when the repository exists but the page does not.
    headings is filled in once the markdown has been serialized.
    """

    config: DocsConfigDict
    frontmatter: dict[str, Any]
    base_branch: str
    markdown: str | None = None
    headings: list[HeadingNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "config": dict(self.config),
            "frontmatter": self.frontmatter,
            "base_branch": self.base_branch,
            "markdown": self.markdown,
            "headings": [heading.to_dict() for heading in self.headings],
        }


def candidate_paths(path: str) -> list[str]:
    """List repository files that may hold the page at path.

    Args:
        path: Page path (e.g., "guides/install"), empty for the index page

    Returns:
        File paths in lookup order
    """
    page = path.strip("/") or "index"
    candidates = [f"{DOCS_DIR}/{page}{ext}" for ext in EXTENSIONS]
    if page != "index":
        candidates += [f"{DOCS_DIR}/{page}/index{ext}" for ext in EXTENSIONS]
    return candidates


def parse_page(text: str, file_path: str) -> tuple[dict[str, Any], str]:
    """Split a page into frontmatter and markdown.

    Invalid YAML frontmatter is logged and dropped; the page body is kept.

    Args:
        text: Raw page file contents
        file_path: Repository path of the page, for logging

    Returns:
        Tuple of frontmatter and markdown body
    """
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring invalid frontmatter in {file_path}: {e}")
        try:
            _, body = YAMLHandler().split(text)
        except ValueError:
            return {}, text
        return {}, body.strip()

    return dict(post.metadata), post.content


async def get_page_content(
    github: GitHubClient, properties: SlugProperties
) -> PageContent | None:
    """Fetch the content of the page the properties point at.

    Args:
        github: GitHub client
        properties: Resolved slug properties

    Returns:
        PageContent, or None if the repository does not exist

    Raises:
        httpx.HTTPError: If GitHub fails for a reason other than a missing resource
    """
    repository = await github.get_repository(properties.owner, properties.repository)
    if repository is None:
        return None

    base_branch = repository["default_branch"]
    ref = properties.ref or base_branch

    config = await fetch_docs_config(github, properties.owner, properties.repository, ref)

    for file_path in candidate_paths(properties.path):
        text = await github.get_file(properties.owner, properties.repository, ref, file_path)
        if text is None:
            continue

        logger.debug(f"Resolved {properties.full_name}@{ref} page to {file_path}")
        metadata, markdown = parse_page(text, file_path)
        return PageContent(
            config=config,
            frontmatter=metadata,
            base_branch=base_branch,
            markdown=markdown,
        )

    return PageContent(config=config, frontmatter={}, base_branch=base_branch)
