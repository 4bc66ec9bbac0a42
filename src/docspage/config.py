"""Configuration management for docspage.

Supports TOML configuration format with auto-discovery.
"""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "docspage.toml"
PRODUCTION = "production"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class GitHubConfig:
    """GitHub access configuration."""

    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    token: str | None = field(default_factory=lambda: os.environ.get("GITHUB_TOKEN"))
    timeout: float = 10.0


@dataclass
class SiteConfig:
    """Hosting site configuration.

    When the list files are None the bundled lists are used.
    """

    environment: str = field(
        default_factory=lambda: os.environ.get("DOCSPAGE_ENV", "development"),
    )
    repositories_file: Path | None = None
    domains_file: Path | None = None

    @property
    def is_production(self) -> bool:
        """Whether static paths are gathered eagerly."""
        return self.environment == PRODUCTION


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    github: GitHubConfig
    site: SiteConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docspage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            server=ServerConfig(),
            github=GitHubConfig(),
            site=SiteConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            github=cls._parse_github(data.get("github")),
            site=cls._parse_site(data.get("site"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_github(cls, data: object) -> GitHubConfig:
        """Parse github configuration section.

        The token falls back to the GITHUB_TOKEN environment variable.

        Args:
            data: Raw github section data

        Returns:
            GitHubConfig instance
        """
        if data is None:
            return GitHubConfig()

        if not isinstance(data, dict):
            raise ValueError("github section must be a dictionary")

        defaults = GitHubConfig()

        api_url = data.get("api_url", defaults.api_url)
        if not isinstance(api_url, str):
            raise ValueError("github.api_url must be a string")

        raw_url = data.get("raw_url", defaults.raw_url)
        if not isinstance(raw_url, str):
            raise ValueError("github.raw_url must be a string")

        token = data.get("token", defaults.token)
        if token is not None and not isinstance(token, str):
            raise ValueError("github.token must be a string")

        timeout = data.get("timeout", defaults.timeout)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ValueError("github.timeout must be a number")

        return GitHubConfig(
            api_url=api_url.rstrip("/"),
            raw_url=raw_url.rstrip("/"),
            token=token,
            timeout=float(timeout),
        )

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        defaults = SiteConfig()

        environment = data.get("environment", defaults.environment)
        if not isinstance(environment, str):
            raise ValueError("site.environment must be a string")

        repositories_file = data.get("repositories_file")
        if repositories_file is not None and not isinstance(repositories_file, str):
            raise ValueError("site.repositories_file must be a string")

        domains_file = data.get("domains_file")
        if domains_file is not None and not isinstance(domains_file, str):
            raise ValueError("site.domains_file must be a string")

        return SiteConfig(
            environment=environment,
            repositories_file=config_dir / repositories_file if repositories_file else None,
            domains_file=config_dir / domains_file if domains_file else None,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        environment: str | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config.

        Args:
            host: Override server.host
            port: Override server.port
            environment: Override site.environment

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        site = self.site
        if environment is not None:
            site = replace(self.site, environment=environment)

        return replace(self, server=server, site=site)
