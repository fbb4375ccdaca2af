"""MCP server exposing the GitLab REST API as tools."""

import asyncio
import logging
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.6.2"


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="MCP transport type",
)
@click.option("--port", default=8000, help="Port for HTTP transports")
@click.option("--host", default="127.0.0.1", help="Host for HTTP transports")
@click.option("--gitlab-api-url", envvar="GITLAB_API_URL", help="GitLab API base URL")
@click.option(
    "--gitlab-token",
    envvar="GITLAB_PERSONAL_ACCESS_TOKEN",
    help="GitLab personal access token",
)
@click.option("--read-only", is_flag=True, help="Disable write operations")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level (logs go to stderr)",
)
def main(
    transport: str,
    port: int,
    host: str,
    gitlab_api_url: str | None,
    gitlab_token: str | None,
    read_only: bool,
    log_level: str,
) -> None:
    """Run the GitLab MCP server."""
    load_dotenv()

    # stdout carries the stdio transport
    logging.basicConfig(
        level=log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if gitlab_api_url:
        os.environ["GITLAB_API_URL"] = gitlab_api_url
    if gitlab_token:
        os.environ["GITLAB_PERSONAL_ACCESS_TOKEN"] = gitlab_token
    if read_only:
        os.environ["GITLAB_READ_ONLY"] = "true"

    from .servers.gitlab import mcp

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = host
        run_kwargs["port"] = port

    asyncio.run(mcp.run_async(show_banner=False, **run_kwargs))


if __name__ == "__main__":
    main()
