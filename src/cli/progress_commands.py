"""
Progress commands for the job search CLI.

This module provides commands for showing, toggling and resetting
completed days of the 50-day program.
"""

import json
import sys

import click

from src.progress.store import ProgressStore
from src.storage.exceptions import StorageError

from .utils import format_days, get_cli_context, print_error, print_success


def _store(ctx: click.Context) -> ProgressStore:
    return ProgressStore(get_cli_context(ctx).storage)


@click.group("progress")
def progress() -> None:
    """Track completed days of the program."""
    pass


@progress.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """
    Show completed days.

    Example: jobsearch progress show
    """
    cli_ctx = get_cli_context(ctx)
    store = _store(ctx)

    if cli_ctx.json:
        click.echo(
            json.dumps(
                {
                    "completed_days": sorted(store.completed_days),
                    "completion_count": store.completion_count,
                    "total_days": store.total_days,
                }
            )
        )
        return

    click.echo(f"Completed: {store.completion_count}/{store.total_days}")
    click.echo(f"Days: {format_days(store.completed_days)}")


@progress.command("toggle")
@click.argument("day", type=int)
@click.pass_context
def toggle(ctx: click.Context, day: int) -> None:
    """
    Mark a day complete, or un-mark it if already complete.

    Example: jobsearch progress toggle 5
    """
    store = _store(ctx)

    try:
        completed = store.toggle_day(day)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)
    except StorageError as e:
        print_error(f"Could not save progress: {e}")
        sys.exit(1)

    if completed:
        print_success(f"Day {day} marked complete")
    else:
        click.echo(f"Day {day} marked incomplete")
    click.echo(f"Completed: {store.completion_count}/{store.total_days}")


@progress.command("reset")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """
    Clear all progress.

    Example: jobsearch progress reset --yes
    """
    if not yes and not click.confirm("Reset all progress?"):
        click.echo("Aborted")
        return

    try:
        _store(ctx).reset_progress()
    except StorageError as e:
        print_error(f"Could not reset progress: {e}")
        sys.exit(1)

    print_success("Progress reset")
