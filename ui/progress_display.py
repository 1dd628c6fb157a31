"""
Progress reporting protocol for decoupling UI from the scan pipeline.

The orchestrator reports stage progress through `ProgressDisplay` and never
touches Rich directly, so tests can run the whole pipeline with
`NoOpProgressDisplay`.
"""

from types import TracebackType
from typing import Protocol

from rich.console import Console
from rich.progress import Progress, TaskID

from ui.progress import ProgressState, create_progress, styled


class ProgressDisplay(Protocol):
    """
    Protocol for stage progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - once, with the number of stages
    3. on_update() - once per stage
    4. on_complete() - once, with the final state
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str, total: int) -> None:
        """Start reporting a task made of `total` stages."""

    def on_update(self, description: str, advance: int = 0) -> None:
        """Show the stage now running, optionally advancing the stage counter."""

    def on_complete(self, description: str, state: ProgressState = ProgressState.COMPLETE) -> None:
        """Mark every stage as done and show the final description."""


class RichProgressDisplay:
    """
    Rich spinner implementation of ProgressDisplay.

    Args:
        console: Console to render on. Defaults to Rich's global console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None
        self._total = 0

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress(self._console)
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def on_start(self, description: str, total: int) -> None:
        """
        Create the progress task.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        progress = self._require_progress()
        self._total = total
        self._task = progress.add_task(
            styled(description, ProgressState.IN_PROGRESS), total=total
        )

    def on_update(self, description: str, advance: int = 0) -> None:
        """
        Raises:
            RuntimeError: If not used as a context manager or on_start() was not called.
        """
        progress, task = self._require_task()
        progress.update(
            task,
            advance=advance,
            description=styled(description, ProgressState.IN_PROGRESS),
        )

    def on_complete(self, description: str, state: ProgressState = ProgressState.COMPLETE) -> None:
        progress, task = self._require_task()
        progress.update(task, completed=self._total, description=styled(description, state))

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        return self._progress

    def _require_task(self) -> tuple[Progress, TaskID]:
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called first")
        return progress, self._task


class NoOpProgressDisplay:
    """
    No-op implementation of ProgressDisplay for testing.

    This implementation does nothing, allowing tests to run without
    Rich UI dependencies or live displays.
    """

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        """Exit the progress context (no-op)."""

    def on_start(self, description: str, total: int) -> None:
        """No-op: does nothing."""

    def on_update(self, description: str, advance: int = 0) -> None:
        """No-op: does nothing."""

    def on_complete(self, description: str, state: ProgressState = ProgressState.COMPLETE) -> None:
        """No-op: does nothing."""
