"""Core type definitions."""

from typing import NewType

# Ordered URL path segments of a documentation page (e.g., ["owner", "repo", "guide"])
Slug = list[str]

# Host name of a custom documentation domain (e.g., "docs.example.com")
DomainName = NewType("DomainName", str)
