"""
Click CLI implementation for the job search tool.

This module provides the command-line entry point: running the token
service, tracking day progress and managing the signed-in session.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import click

from src.client.api_client import JobSearchAPIClient
from src.client.config import ClientConfig, ConfigurationError
from src.client.session import SessionContext
from src.storage.json_file import JsonFileStorage

from .auth_commands import auth
from .progress_commands import progress

logger = logging.getLogger(__name__)


@dataclass
class CLIContext:
    """Context object passed to all CLI commands.

    Attributes:
        config: Client configuration
        storage: Local key-value storage (tokens and progress)
        session: Session token slots
        api_client: API client bound to the session
        verbose: Verbose output enabled
        json: JSON output enabled
    """
    config: ClientConfig
    storage: JsonFileStorage
    session: SessionContext
    api_client: JobSearchAPIClient
    verbose: bool
    json: bool


@click.group()
@click.option(
    "--storage-file",
    help="Local storage file (tokens and progress)",
    envvar="JOBSEARCH_STORAGE_FILE",
)
@click.option(
    "--api-url",
    help="API server URL (overrides JOBSEARCH_API_URL and the endpoint overrides)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--json", "output_json", is_flag=True, help="JSON output (where supported)")
@click.pass_context
def cli(
    ctx: click.Context,
    storage_file: Optional[str],
    api_url: Optional[str],
    verbose: bool,
    output_json: bool,
) -> None:
    """
    Job Search Coach - 50 days of structured job searching.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = ClientConfig.from_env()
        if api_url or storage_file:
            config = ClientConfig(
                api_url=api_url or config.api_url,
                refresh_url=None if api_url else config.refresh_url,
                exchange_url=None if api_url else config.exchange_url,
                timeout=config.timeout,
                storage_file=storage_file or config.storage_file,
            )
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    storage = JsonFileStorage(config.storage_file)
    session = SessionContext(storage)
    api_client = JobSearchAPIClient(
        session,
        base_url=config.api_url,
        refresh_url=config.refresh_url,
        timeout=config.timeout,
        on_session_expired=lambda: click.secho(
            "Session expired. Sign in again with 'jobsearch auth url'.", fg="yellow", err=True
        ),
    )
    ctx.call_on_close(api_client.close)

    if verbose:
        click.echo(f"+ Storage: {storage.storage_file}")
        click.echo(f"+ API: {config.api_url}")

    ctx.obj = CLIContext(
        config=config,
        storage=storage,
        session=session,
        api_client=api_client,
        verbose=verbose,
        json=output_json,
    )


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", default=None, type=int, help="Port (default from settings)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the OAuth token service."""
    import uvicorn

    from src.server.config import settings

    uvicorn.run(
        "src.server.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="debug" if settings.debug else "info",
    )


cli.add_command(progress)
cli.add_command(auth)


def main() -> None:
    """Console script entry point."""
    cli()
