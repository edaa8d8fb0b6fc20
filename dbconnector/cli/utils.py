"""Shared CLI utilities for DBConnector."""

from __future__ import annotations

import logging

from rich.console import Console

from dbconnector.config.models import EnvironmentSettings

# Single console instance reused across CLI modules
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs.

    Args:
        verbose: Log at DEBUG regardless of ``DBCONNECTOR_LOG_LEVEL``.
    """
    settings = EnvironmentSettings()
    level = logging.DEBUG if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def print_exception(message: str, error: Exception, verbose: bool = False) -> None:
    """Render a formatted exception message.

    Args:
        message: Friendly context message to display before the exception.
        error: Original exception instance.
        verbose: When True, render the full traceback for debugging.
    """
    console.print(f"[red]{message}: {error}[/red]")
    if verbose:
        import traceback

        console.print(f"[dim]{traceback.format_exc()}[/dim]")
