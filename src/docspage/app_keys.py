"""Application keys for type-safe app configuration access."""

import httpx
from aiohttp import web

from docspage.config import Config
from docspage.core.domain import DomainRecord
from docspage.core.github import GitHubClient

config_key = web.AppKey("config", Config)
http_client_key = web.AppKey("http_client", httpx.AsyncClient)
github_key = web.AppKey("github", GitHubClient)
domains_key = web.AppKey("domains", tuple[DomainRecord, ...])
