"""
CLI utility functions for the job search tool.

This module provides helpers for output formatting and for reaching
the shared CLI context.
"""

from typing import Iterable

import click


def get_cli_context(ctx: click.Context):
    """Get the CLIContext from the click context."""
    return ctx.obj


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def print_success(message: str) -> None:
    """Print success message."""
    click.secho(message, fg="green")


def print_warning(message: str) -> None:
    """Print warning message."""
    click.secho(f"Warning: {message}", fg="yellow")


def format_days(days: Iterable[int]) -> str:
    """Render day numbers as compact ranges, e.g. ``1-3, 5, 7-8``."""
    ordered = sorted(days)
    if not ordered:
        return "none"

    ranges = []
    start = prev = ordered[0]
    for day in ordered[1:]:
        if day == prev + 1:
            prev = day
            continue
        ranges.append((start, prev))
        start = prev = day
    ranges.append((start, prev))

    return ", ".join(str(a) if a == b else f"{a}-{b}" for a, b in ranges)
