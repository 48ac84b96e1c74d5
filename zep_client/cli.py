"""
Command-line interface for zep-client.
"""

import asyncio
import json
import sys

import click

from zep_client import __version__
from zep_client.client import AsyncZep, ZepClientConfig
from zep_client.config import settings
from zep_client.exceptions import ZepError
from zep_client.legacy import MIN_SERVER_VERSION, create_legacy_client
from zep_client.logging import configure_logging, get_logger
from zep_client.models import MemorySearchPayload, SearchScope


logger = get_logger(__name__)

VERSION = __version__


def _make_client(ctx: click.Context) -> AsyncZep:
    config = ZepClientConfig.from_settings(settings).model_dump()
    for key in ("base_url", "api_key"):
        if ctx.obj.get(key):
            config[key] = ctx.obj[key]
    return AsyncZep(ZepClientConfig(**config))


def _run(coro) -> None:
    """Run a command coroutine, reporting client errors with exit code 1."""
    try:
        asyncio.run(coro)
    except ZepError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--base-url", envvar="ZEP_API_URL", help="Zep API base URL")
@click.option("--api-key", envvar="ZEP_API_KEY", help="Zep API key")
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def cli(ctx: click.Context, base_url: str | None, api_key: str | None, log_level):
    """Command-line interface for the Zep memory API."""
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["api_key"] = api_key
    configure_logging(log_level)


@cli.command()
def version():
    """Show the version of zep-client."""
    click.echo(f"zep-client version {VERSION}")


@cli.command()
@click.argument("server_url", required=False)
@click.pass_context
def health(ctx: click.Context, server_url: str | None):
    """Check that a self-hosted Zep server is up and compatible.

    SERVER_URL is the server root, not the API base URL. It defaults to
    ``ZEP_SERVER_URL``.
    """
    server_url = server_url or settings.server_url

    async def check():
        client = await create_legacy_client(server_url, api_key=ctx.obj.get("api_key"))
        await client.close()
        click.echo(
            f"Zep server at {server_url} is healthy "
            f"(minimum supported version {MIN_SERVER_VERSION})"
        )

    _run(check())


@cli.command()
@click.argument("session_id")
@click.argument("text")
@click.option("--limit", type=int, default=None, help="Maximum number of results")
@click.option(
    "--scope",
    type=click.Choice([scope.value for scope in SearchScope]),
    default=None,
    help="Search messages or summaries",
)
@click.pass_context
def search(
    ctx: click.Context, session_id: str, text: str, limit: int | None, scope: str | None
):
    """Search the memory of SESSION_ID for TEXT."""

    async def run_search():
        async with _make_client(ctx) as client:
            results = await client.search.get(
                session_id,
                MemorySearchPayload(
                    text=text,
                    limit=limit,
                    search_scope=SearchScope(scope) if scope else None,
                ),
            )
        logger.info(f"Search returned {len(results)} result(s)", session_id=session_id)
        click.echo(
            json.dumps(
                [r.model_dump(mode="json", exclude_none=True) for r in results],
                indent=2,
            )
        )

    _run(run_search())


@cli.command()
@click.argument("session_id")
@click.option("--lastn", type=int, default=None, help="Number of recent messages")
@click.pass_context
def memory(ctx: click.Context, session_id: str, lastn: int | None):
    """Print the memory of SESSION_ID."""

    async def get_memory():
        async with _make_client(ctx) as client:
            result = await client.memory.get(session_id, lastn=lastn)
        if result is None:
            logger.info("Server returned no memory", session_id=session_id)
            click.echo("{}")
            return
        click.echo(result.model_dump_json(indent=2, exclude_none=True))

    _run(get_memory())


if __name__ == "__main__":
    cli()
