"""CLI interface for docspage.

Command-line tool for serving documentation and listing static pages.
"""

import asyncio
import json
import logging
from pathlib import Path

import click

from docspage.config import Config
from docspage.core.documentation import StaticPathsDict, get_static_paths
from docspage.core.github import GitHubClient, create_http_client


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """docspage - documentation straight from GitHub repositories."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docspage.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--environment",
    "-e",
    default=None,
    help="Site environment, e.g. production (overrides config)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    environment: str | None,
) -> None:
    """Start the documentation server."""
    from docspage.server import run_server

    config = Config.load(config_path).with_overrides(
        host=host,
        port=port,
        environment=environment,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Environment: {config.site.environment}")
    if config.github.token:
        click.echo("GitHub: authenticated")
    else:
        click.echo("GitHub: anonymous (rate limited)")

    run_server(config)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docspage.toml)",
)
@click.option(
    "--environment",
    "-e",
    default=None,
    help="Site environment, e.g. production (overrides config)",
)
def paths(config_path: Path | None, environment: str | None) -> None:
    """Print the pages to pre-render as JSON."""
    config = Config.load(config_path).with_overrides(environment=environment)
    result = asyncio.run(_gather_paths(config))
    click.echo(json.dumps(result, indent=2))


async def _gather_paths(config: Config) -> StaticPathsDict:
    async with create_http_client(config.github) as client:
        github = GitHubClient(
            client,
            api_url=config.github.api_url,
            raw_url=config.github.raw_url,
        )
        return await get_static_paths(github, config.site)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
