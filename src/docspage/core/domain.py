"""Custom domain lookups."""

from dataclasses import dataclass

from docspage.core.properties import SlugProperties
from docspage.core.types import DomainName


@dataclass(frozen=True)
class DomainRecord:
    """Custom domain serving the documentation of one repository."""

    domain: DomainName
    repository: str


def get_custom_domain(
    domains: tuple[DomainRecord, ...], properties: SlugProperties
) -> DomainName | None:
    """Find the custom domain of the repository the properties point at."""
    full_name = properties.full_name.lower()
    for record in domains:
        if record.repository.lower() == full_name:
            return record.domain
    return None


def get_domain_repository(
    domains: tuple[DomainRecord, ...], host: str | None
) -> tuple[str, str] | None:
    """Find the repository served on a request host.

    Args:
        domains: Custom domain records
        host: Request host, optionally with a port

    Returns:
        (owner, repository) or None when the host is not a custom domain
    """
    if not host:
        return None
    hostname = host.split(":", 1)[0].lower()
    for record in domains:
        if record.domain == hostname:
            owner, _, repository = record.repository.partition("/")
            return owner, repository
    return None
