"""Repository documentation config.

Each documented repository may carry a docs.json (or docs.yaml) file at
its root. Unknown keys are kept; missing keys take the defaults below.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, TypedDict

import yaml

if TYPE_CHECKING:
    from docspage.core.github import GitHubClient

logger = logging.getLogger(__name__)

CONFIG_FILES = ("docs.json", "docs.yaml")


class DocsConfigDict(TypedDict, total=False):
    """Repository documentation config."""

    name: str
    description: str
    logo: str
    favicon: str
    theme: str
    sidebar: list[Any]
    headingDepth: int
    noindex: bool


DEFAULT_CONFIG: DocsConfigDict = {
    "name": "",
    "description": "",
    "logo": "",
    "favicon": "",
    "theme": "#00bcd4",
    "sidebar": [],
    "headingDepth": 3,
    "noindex": False,
}


def parse_docs_config(text: str | None, filename: str = "docs.json") -> DocsConfigDict:
    """Parse config text and merge it over the defaults.

    Invalid config is logged and treated as absent.

    Args:
        text: Raw file contents, or None when the file is missing
        filename: Name of the file, used to pick the parser

    Returns:
        Merged config
    """
    config: DocsConfigDict = dict(DEFAULT_CONFIG)  # type: ignore[assignment]
    if not text:
        return config

    try:
        if filename.endswith((".yaml", ".yml")):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning(f"Invalid {filename}: {e}")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Invalid {filename}: expected a mapping")
        return config

    config.update(data)  # type: ignore[typeddict-item]
    return config


async def fetch_docs_config(
    github: "GitHubClient", owner: str, repository: str, ref: str
) -> DocsConfigDict:
    """Fetch and parse the first config file present at a ref."""
    for filename in CONFIG_FILES:
        text = await github.get_file(owner, repository, ref, filename)
        if text is not None:
            return parse_docs_config(text, filename)
    return parse_docs_config(None)


def sidebar_paths(config: DocsConfigDict) -> list[str]:
    """Collect internal page paths linked from the sidebar.

    Sidebar entries are [title, link] pairs where link is either a path
    or a nested list of entries:

        [["Home", "/"], ["Guides", [["Install", "/install"]]]]

    Args:
        config: Repository documentation config

    Returns:
        Page paths without leading slash, in sidebar order, no duplicates
    """
    paths: list[str] = []

    def walk(entries: object) -> None:
        if not isinstance(entries, list):
            return
        for entry in entries:
            if not isinstance(entry, list) or len(entry) != 2:
                continue
            link = entry[1]
            if isinstance(link, list):
                walk(link)
            elif isinstance(link, str) and link.startswith("/"):
                path = link.strip("/")
                if path and path not in paths:
                    paths.append(path)

    walk(config.get("sidebar", []))
    return paths
