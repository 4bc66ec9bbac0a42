"""HTML head tags for documentation pages."""

from html import escape

from docspage.core.content import PageContent
from docspage.core.properties import SlugProperties


def get_title(properties: SlugProperties, content: PageContent) -> str:
    """Page title from frontmatter, config name, or repository name."""
    page_title = content.frontmatter.get("title")
    site_name = content.config.get("name") or properties.full_name
    if page_title:
        return f"{page_title} | {site_name}"
    return str(site_name)


def get_head_tags(properties: SlugProperties, content: PageContent) -> list[str]:
    """Build head tags for a rendered page.

    Pages viewed at a ref other than the base branch are not indexed.

    Args:
        properties: Resolved slug properties
        content: Page content

    Returns:
        HTML tag strings in document order
    """
    title = escape(get_title(properties, content))
    description = content.frontmatter.get("description") or content.config.get("description")

    tags = [
        f"<title>{title}</title>",
        f'<meta property="og:title" content="{title}">',
        f'<meta name="twitter:title" content="{title}">',
    ]

    if description:
        description = escape(str(description))
        tags += [
            f'<meta name="description" content="{description}">',
            f'<meta property="og:description" content="{description}">',
            f'<meta name="twitter:description" content="{description}">',
        ]

    favicon = content.config.get("favicon")
    if favicon:
        tags.append(f'<link rel="icon" href="{escape(favicon)}">')

    if content.config.get("noindex") or (properties.ref and not properties.base_ref):
        tags.append('<meta name="robots" content="noindex">')

    return tags
