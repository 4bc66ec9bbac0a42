"""Static repository and domain lists.

Both lists are JSON files bundled with the package unless the site config
points elsewhere. They are read once and kept as immutable tuples.

    repositories.json: ["owner/repository", ...]
    domains.json:      [["docs.example.com", "owner/repository"], ...]
"""

import json
from importlib.resources import files
from pathlib import Path

from docspage.core.domain import DomainRecord
from docspage.core.types import DomainName


def _read_json(path: Path | None, bundled: str) -> object:
    if path is None:
        text = files("docspage").joinpath("data", bundled).read_text(encoding="utf-8")
    else:
        text = path.read_text(encoding="utf-8")
    return json.loads(text)


def get_repository_list(path: Path | None = None) -> tuple[str, ...]:
    """Load the list of documented repositories.

    Args:
        path: JSON file to read, or None for the bundled list

    Returns:
        Repository names as owner/repository

    Raises:
        ValueError: If the file does not hold a list of strings
    """
    data = _read_json(path, "repositories.json")
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ValueError("Repository list must be a list of strings")
    return tuple(data)


def get_domains_list(path: Path | None = None) -> tuple[DomainRecord, ...]:
    """Load the list of custom domains.

    Args:
        path: JSON file to read, or None for the bundled list

    Returns:
        Custom domain records

    Raises:
        ValueError: If the file does not hold [domain, repository] pairs
    """
    data = _read_json(path, "domains.json")
    if not isinstance(data, list):
        raise ValueError("Domain list must be a list")

    records: list[DomainRecord] = []
    for item in data:
        if (
            not isinstance(item, list)
            or len(item) != 2
            or not all(isinstance(value, str) for value in item)
        ):
            raise ValueError(f"Invalid domain entry: {item!r}")
        records.append(DomainRecord(domain=DomainName(item[0].lower()), repository=item[1]))
    return tuple(records)
