"""Shared test fixtures."""

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from docspage.config import Config, GitHubConfig, ServerConfig, SiteConfig
from docspage.core.domain import DomainRecord
from docspage.core.github import GitHubClient
from docspage.core.types import DomainName

API_URL = "https://api.github.test"
RAW_URL = "https://raw.github.test"


@dataclass
class FakeGitHub:
    """In-memory GitHub served through httpx.MockTransport.

    repositories: "owner/repo" -> default branch
    files: ("owner/repo", ref, path) -> text
    pulls: ("owner/repo", number) -> head (owner, repo, ref)
    """

    repositories: dict[str, str] = field(default_factory=dict)
    files: dict[tuple[str, str, str], str] = field(default_factory=dict)
    pulls: dict[tuple[str, int], tuple[str, str, str]] = field(default_factory=dict)
    failing: set[str] = field(default_factory=set)
    requests: list[str] = field(default_factory=list)

    def add_repository(self, full_name: str, default_branch: str = "main") -> None:
        self.repositories[full_name] = default_branch

    def add_file(self, full_name: str, path: str, text: str, ref: str = "main") -> None:
        self.files[(full_name, ref, path)] = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)

        for prefix in self.failing:
            if url.startswith(prefix):
                return httpx.Response(502, text="Bad gateway")

        if url.startswith(API_URL):
            return self._api(request.url.path)
        if url.startswith(RAW_URL):
            owner, repo, ref, path = request.url.path.lstrip("/").split("/", 3)
            text = self.files.get((f"{owner}/{repo}", ref, path))
            if text is None:
                return httpx.Response(404, text="404: Not Found")
            return httpx.Response(200, text=text)
        return httpx.Response(404)

    def _api(self, path: str) -> httpx.Response:
        parts = path.strip("/").split("/")
        if len(parts) >= 3 and parts[0] == "repos":
            full_name = f"{parts[1]}/{parts[2]}"
            if len(parts) == 3 and full_name in self.repositories:
                return httpx.Response(
                    200,
                    json={
                        "name": parts[2],
                        "owner": {"login": parts[1]},
                        "default_branch": self.repositories[full_name],
                        "private": False,
                    },
                )
            if len(parts) == 5 and parts[3] == "pulls":
                head = self.pulls.get((full_name, int(parts[4])))
                if head is not None:
                    owner, repo, ref = head
                    return httpx.Response(
                        200,
                        json={"head": {"ref": ref, "repo": {"name": repo, "owner": {"login": owner}}}},
                    )
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def transport(fake_github: FakeGitHub) -> httpx.MockTransport:
    return httpx.MockTransport(fake_github.handler)


@pytest_asyncio.fixture
async def github(transport: httpx.MockTransport) -> AsyncIterator[GitHubClient]:
    async with httpx.AsyncClient(transport=transport) as client:
        yield GitHubClient(client, api_url=API_URL, raw_url=RAW_URL)


@pytest.fixture
def domains() -> tuple[DomainRecord, ...]:
    return (DomainRecord(domain=DomainName("docs.example.com"), repository="acme/widgets"),)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with list files in tmp_path."""
    repositories_file = tmp_path / "repositories.json"
    repositories_file.write_text(json.dumps(["acme/widgets"]))
    domains_file = tmp_path / "domains.json"
    domains_file.write_text(json.dumps([["docs.example.com", "acme/widgets"]]))

    return Config(
        server=ServerConfig(),
        github=GitHubConfig(api_url=API_URL, raw_url=RAW_URL, token=None),
        site=SiteConfig(
            environment="development",
            repositories_file=repositories_file,
            domains_file=domains_file,
        ),
    )
