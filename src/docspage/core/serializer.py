"""Markdown serialization.

Converts page markdown into the HTML source hydrated by the client and
the heading outline used for the page table of contents.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field

import mistune
from mistune.toc import add_toc_hook

from docspage.core.content import HeadingNode, PageContent

logger = logging.getLogger(__name__)

MIN_HEADING_DEPTH = 2
MAX_HEADING_DEPTH = 6
DEFAULT_HEADING_DEPTH = 3

_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_SPACE = re.compile(r"[\s_-]+")
_TAGS = re.compile(r"<[^>]+>")


@dataclass
class SerializationResult:
    """Serialized markdown, or an error flag.

    source and headings are only set when error is False.
    """

    source: str | None = None
    headings: list[HeadingNode] = field(default_factory=list)
    error: bool = False


def slugify(text: str) -> str:
    """Convert heading text to an anchor id.

    Args:
        text: Heading text (e.g., "Getting Started!")

    Returns:
        Anchor id (e.g., "getting-started")
    """
    text = _TAGS.sub("", text).strip().lower()
    text = _SLUG_STRIP.sub("", text)
    return _SLUG_SPACE.sub("-", text).strip("-")


def _heading_depth(content: PageContent) -> int:
    depth = content.config.get("headingDepth", DEFAULT_HEADING_DEPTH)
    if not isinstance(depth, int) or isinstance(depth, bool):
        return DEFAULT_HEADING_DEPTH
    return max(MIN_HEADING_DEPTH, min(depth, MAX_HEADING_DEPTH))


def _create_markdown(max_level: int) -> mistune.Markdown:
    seen: dict[str, int] = {}

    def heading_id(token: dict, index: int) -> str:
        base = slugify(token.get("text", "")) or f"heading-{index + 1}"
        count = seen.get(base, 0)
        seen[base] = count + 1
        return base if count == 0 else f"{base}-{count}"

    md = mistune.create_markdown(
        escape=False,
        plugins=["strikethrough", "table", "url", "task_lists", "footnotes"],
    )
    add_toc_hook(md, min_level=MIN_HEADING_DEPTH, max_level=max_level, heading_id=heading_id)
    return md


def render_markdown(
    markdown: str, max_level: int = DEFAULT_HEADING_DEPTH
) -> tuple[str, list[HeadingNode]]:
    """Render markdown to HTML and collect its heading outline.

    Args:
        markdown: Markdown text without frontmatter
        max_level: Deepest heading level included in the outline

    Returns:
        Tuple of HTML and headings in document order
    """
    md = _create_markdown(max_level)
    html, state = md.parse(markdown)
    headings = [
        HeadingNode(id=heading_id, title=_TAGS.sub("", text), rank=level)
        for level, heading_id, text in state.env.get("toc_items", [])
    ]
    return str(html), headings


async def mdx_serialize(content: PageContent) -> SerializationResult:
    """Serialize page markdown for client hydration.

    Rendering runs in the default executor. Any rendering failure is
    reported through the error flag and partial output is dropped.

    Args:
        content: Page content with markdown

    Returns:
        SerializationResult with source and headings, or with error set
    """
    markdown = content.markdown or ""
    try:
        source, headings = await asyncio.to_thread(
            render_markdown, markdown, _heading_depth(content)
        )
    except Exception:
        logger.exception("Markdown serialization failed")
        return SerializationResult(error=True)

    logger.debug(f"Serialized {len(markdown)} characters of markdown into {len(source)} characters")
    return SerializationResult(source=source, headings=headings)
