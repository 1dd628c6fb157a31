"""
Rich progress helpers for the scan stages.

A run has a small fixed number of stages (app tree, lib tree, project root,
document update), so progress is a spinner with a step counter rather than a
per-file bar. States are color coded the same way everywhere.
"""

from enum import StrEnum

from rich.console import Console
from rich.progress import (
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)


class ProgressState(StrEnum):
    """
    Progress states with their associated colors.

    Attributes:
        IN_PROGRESS: Magenta while a stage is running.
        COMPLETE: Green once every stage finished.
        WARNING: Yellow when the run finished with warnings.
        ERROR: Red when the run failed.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    WARNING = "yellow"
    ERROR = "red"


def create_progress(console: Console | None = None) -> Progress:
    """
    Create a Rich Progress instance with the standard ctxsync columns.

    Args:
        console: Console to render on. Sharing the diagnostics console keeps
            echoed log lines above the live spinner.

    Returns:
        Progress: A configured, not yet started, Progress instance.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        MofNCompleteColumn(),
        console=console,
        transient=False,
    )


def styled(description: str, state: ProgressState) -> str:
    """Wrap a description in the markup color of a progress state."""
    return f"[{state}]{description}[/{state}]"
