"""Documentation page resolution.

Turns the slug of a documentation URL into page props:

    slug -> normalize -> properties (-> pull request head)
         -> content -> redirect | error | serialized source

Every request ends in exactly one of a Redirect, props carrying an error,
or props carrying a serialized source.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, TypedDict

from docspage.config import SiteConfig
from docspage.core.content import HeadingNode, PageContent, get_page_content
from docspage.core.domain import DomainRecord, get_custom_domain
from docspage.core.errors import Redirect, RenderError, redirect
from docspage.core.github import GitHubClient, StaticPathDict, get_repositories_paths
from docspage.core.lists import get_repository_list
from docspage.core.properties import SlugProperties
from docspage.core.serializer import mdx_serialize
from docspage.core.types import DomainName, Slug

logger = logging.getLogger(__name__)

# Seconds a rendered page may be served before it is regenerated
REVALIDATE = 30


class StaticPathsDict(TypedDict):
    paths: list[StaticPathDict]
    fallback: bool


@dataclass
class PageProps:
    """Props of a documentation page.

    source and error are never both set.
    """

    domain: DomainName | None
    properties: SlugProperties
    source: str | None = None
    # Stays empty: the outline is carried by content.headings
    headings: list[HeadingNode] = field(default_factory=list)
    content: PageContent | None = None
    error: RenderError | None = None

    @property
    def revalidate(self) -> int:
        return REVALIDATE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "props": {
                "domain": self.domain,
                "properties": self.properties.to_dict(),
                "source": self.source,
                "headings": [heading.to_dict() for heading in self.headings],
                "content": self.content.to_dict() if self.content else None,
                "error": self.error.to_dict() if self.error else None,
            },
            "revalidate": self.revalidate,
        }


def normalize_slug(slug: Slug) -> Slug:
    """Undo the duplicated owner/repository produced by custom domain rewrites.

    A custom domain pointing at the root is rewritten to /{owner}/{repo},
    and the catch-all rewrite then appends /{owner}/{repo} again, so the
    slug arrives as [owner, repo, owner, repo].

    Args:
        slug: URL path segments

    Returns:
        [owner, repo] for a duplicated slug, otherwise the slug unchanged
    """
    if len(slug) == 4 and slug[0] == slug[2] and slug[1] == slug[3]:
        return [slug[0], slug[1]]
    return slug


async def resolve_properties(github: GitHubClient, slug: Slug) -> SlugProperties:
    """Parse the slug and follow pull request refs to their head.

    Args:
        github: GitHub client
        slug: Normalized URL path segments

    Returns:
        SlugProperties, pointing at the pull request head when one was found
    """
    properties = SlugProperties.from_slug(slug)

    if properties.is_pull_request():
        metadata = await github.get_pull_request_metadata(
            properties.owner,
            properties.repository,
            int(properties.ref),
        )
        if metadata:
            logger.debug(
                f"Pull request {properties.full_name}#{properties.ref} "
                f"resolved to {metadata['owner']}/{metadata['repository']}@{metadata['ref']}"
            )
            properties = properties.with_pull_request(metadata)

    return properties


async def get_static_props(
    github: GitHubClient,
    domains: tuple[DomainRecord, ...],
    slug: Slug,
) -> PageProps | Redirect:
    """Resolve a documentation page.

    Args:
        github: GitHub client
        domains: Custom domain records
        slug: URL path segments

    Returns:
        Redirect when the page frontmatter asks for one, otherwise PageProps

    Raises:
        InvalidSlugError: If the slug does not name a page of a repository
    """
    properties = await resolve_properties(github, normalize_slug(slug))

    source = None
    error = None
    content = await get_page_content(github, properties)

    if content is None:
        error = RenderError.repository_not_found(properties)
    elif content.frontmatter.get("redirect"):
        return redirect(str(content.frontmatter["redirect"]), properties)
    else:
        # The repository exists; the page itself still might not
        if not properties.ref:
            properties = properties.with_base_ref(content.base_branch)

        if content.markdown:
            serialization = await mdx_serialize(content)
            if serialization.error:
                error = RenderError.server_error(properties)
            else:
                source = serialization.source
                content = replace(content, headings=serialization.headings)
        else:
            error = RenderError.page_not_found(properties)

    if error is not None:
        logger.info(f"{properties.full_name}/{properties.path}: {error.kind}")

    return PageProps(
        domain=get_custom_domain(domains, properties),
        properties=properties,
        source=source,
        content=content,
        error=error,
    )


async def get_static_paths(github: GitHubClient, site: SiteConfig) -> StaticPathsDict:
    """List the pages to pre-render.

    Gathering paths takes one request per repository, so it only runs in
    production. Everything else is rendered on demand.

    Args:
        github: GitHub client
        site: Site configuration

    Returns:
        Static paths with fallback rendering enabled
    """
    paths: list[StaticPathDict] = []

    if site.is_production:
        repositories = get_repository_list(site.repositories_file)
        paths = await get_repositories_paths(github, repositories)
        logger.info(f"- gathered {len(paths)} static pages.")

    return {"paths": paths, "fallback": True}
