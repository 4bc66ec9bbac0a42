"""GitHub client for docspage.

Async HTTP client for the GitHub REST API and raw content host.
Missing resources are reported as None rather than raised.
"""

import logging
from typing import Any, TypedDict

import httpx

from docspage.config import GitHubConfig
from docspage.core.docs_config import fetch_docs_config, sidebar_paths
from docspage.core.properties import PullRequestMetadata

logger = logging.getLogger(__name__)


class RepositoryDict(TypedDict):
    """Repository metadata used by docspage."""

    owner: str
    name: str
    default_branch: str
    private: bool


class StaticPathDict(TypedDict):
    """Pre-renderable page path."""

    params: dict[str, list[str]]


def create_http_client(config: GitHubConfig, **kwargs: Any) -> httpx.AsyncClient:
    """Create the shared HTTP client used to talk to GitHub.

    Args:
        config: GitHub access configuration
        **kwargs: Extra httpx.AsyncClient arguments (e.g., transport)

    Returns:
        Configured httpx AsyncClient
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "docspage",
    }
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return httpx.AsyncClient(headers=headers, timeout=config.timeout, **kwargs)


class GitHubClient:
    """Async HTTP client for GitHub repositories and their files."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = "https://api.github.com",
        raw_url: str = "https://raw.githubusercontent.com",
    ):
        """Initialize GitHub client.

        Args:
            client: httpx AsyncClient (see create_http_client)
            api_url: GitHub REST API base URL
            raw_url: Raw file content base URL
        """
        self.client = client
        self.api_url = api_url.rstrip("/")
        self.raw_url = raw_url.rstrip("/")

    async def get_repository(self, owner: str, repository: str) -> RepositoryDict | None:
        """Get repository metadata.

        Args:
            owner: Repository owner
            repository: Repository name

        Returns:
            Repository metadata, or None if the repository does not exist

        Raises:
            httpx.HTTPError: If request fails for another reason
        """
        logger.debug(f"Getting repository {owner}/{repository}")
        response = await self.client.get(f"{self.api_url}/repos/{owner}/{repository}")
        if response.status_code == 404:
            logger.info(f"Repository {owner}/{repository} not found")
            return None
        if response.status_code >= 400:
            logger.error(f"Error response: {response.text}")
        response.raise_for_status()

        data = response.json()
        return {
            "owner": data["owner"]["login"],
            "name": data["name"],
            "default_branch": data["default_branch"],
            "private": data.get("private", False),
        }

    async def get_pull_request_metadata(
        self, owner: str, repository: str, number: int
    ) -> PullRequestMetadata | None:
        """Get the head coordinates of a pull request.

        Lookup failures are not errors: the caller keeps its coordinates.

        Args:
            owner: Base repository owner
            repository: Base repository name
            number: Pull request number

        Returns:
            Head owner, repository and branch, or None if unavailable
        """
        logger.debug(f"Getting pull request {owner}/{repository}#{number}")
        try:
            response = await self.client.get(
                f"{self.api_url}/repos/{owner}/{repository}/pulls/{number}"
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Pull request {owner}/{repository}#{number} unavailable: {e}")
            return None

        head = response.json().get("head") or {}
        head_repo = head.get("repo")
        if not head_repo or not head.get("ref"):
            # Head repository was deleted
            return None

        return {
            "owner": head_repo["owner"]["login"],
            "repository": head_repo["name"],
            "ref": head["ref"],
        }

    async def get_file(
        self, owner: str, repository: str, ref: str, path: str
    ) -> str | None:
        """Get raw file contents at a ref.

        Args:
            owner: Repository owner
            repository: Repository name
            ref: Branch, tag or commit
            path: File path relative to repository root

        Returns:
            File text, or None if the file does not exist

        Raises:
            httpx.HTTPError: If request fails for another reason
        """
        url = f"{self.raw_url}/{owner}/{repository}/{ref}/{path}"
        logger.debug(f"Fetching {url}")
        response = await self.client.get(url)
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            logger.error(f"Error response: {response.text}")
        response.raise_for_status()
        return response.text


async def get_repositories_paths(
    github: GitHubClient, repositories: tuple[str, ...]
) -> list[StaticPathDict]:
    """Expand repositories into pre-renderable page paths.

    Every repository contributes its root page and one page per internal
    sidebar link of its docs config. Repositories that cannot be read
    contribute their root page only.

    Args:
        github: GitHub client
        repositories: Repository names as owner/repository

    Returns:
        Static path descriptors
    """
    paths: list[StaticPathDict] = []
    for full_name in repositories:
        owner, _, repository = full_name.partition("/")
        if not owner or not repository:
            logger.warning(f"Skipping invalid repository name: {full_name!r}")
            continue

        paths.append({"params": {"slug": [owner, repository]}})

        try:
            meta = await github.get_repository(owner, repository)
            if meta is None:
                continue
            docs_config = await fetch_docs_config(
                github, owner, repository, meta["default_branch"]
            )
        except httpx.HTTPError as e:
            logger.warning(f"Could not read {full_name}: {e}")
            continue

        for path in sidebar_paths(docs_config):
            paths.append({"params": {"slug": [owner, repository, *path.split("/")]}})

    return paths
