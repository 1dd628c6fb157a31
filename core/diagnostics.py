"""
Run diagnostics: an append-only log of leveled entries and the final summary.

Every stage of the pipeline receives the same `DiagnosticsCollector` from the
orchestrator and records what it did or what went wrong. Failures are never
propagated as exceptions past the stage that caught them; they become entries
here. The verdict of the whole run is then a pure function of the log: it
succeeded iff no error-level entry was recorded.

Entries are echoed to the terminal as they are recorded, and `finalize` prints
a summary with counts by level and, on failure, every error message.
"""

import time
from collections import Counter

from rich.console import Console
from rich.markup import escape

from core.models import DiagnosticEntry
from models import DiagnosticLevel

_LEVEL_STYLES: dict[DiagnosticLevel, tuple[str, str]] = {
    DiagnosticLevel.ERROR: ("❌", "bold red"),
    DiagnosticLevel.WARNING: ("⚠️ ", "yellow"),
    DiagnosticLevel.INFO: ("ℹ️ ", "dim"),
}


class DiagnosticsCollector:
    """
    Accumulates diagnostic entries for a single run.

    Args:
        console: Rich console used for echoing entries and printing the summary.
            Defaults to a console writing to stdout.
        echo_info: When False, info-level entries are recorded and counted but
            not printed.
    """

    def __init__(self, console: Console | None = None, echo_info: bool = True) -> None:
        self.console = console if console is not None else Console()
        self.echo_info = echo_info
        self._entries: list[DiagnosticEntry] = []
        self._started_at = time.perf_counter()

    @property
    def entries(self) -> tuple[DiagnosticEntry, ...]:
        return tuple(self._entries)

    def log(self, level: DiagnosticLevel, message: str, file: str | None = None) -> None:
        entry = DiagnosticEntry(level, message, file)
        self._entries.append(entry)

        if level == DiagnosticLevel.INFO and not self.echo_info:
            return
        self.console.print(self._format(entry), highlight=False)

    def error(self, message: str, file: str | None = None) -> None:
        self.log(DiagnosticLevel.ERROR, message, file)

    def warning(self, message: str, file: str | None = None) -> None:
        self.log(DiagnosticLevel.WARNING, message, file)

    def info(self, message: str, file: str | None = None) -> None:
        self.log(DiagnosticLevel.INFO, message, file)

    def has_errors(self) -> bool:
        return any(e.level == DiagnosticLevel.ERROR for e in self._entries)

    def counts(self) -> dict[DiagnosticLevel, int]:
        """Number of entries per level. Every level is present, even with a zero count."""
        counter = Counter(e.level for e in self._entries)
        return {level: counter.get(level, 0) for level in DiagnosticLevel}

    def errors(self) -> list[DiagnosticEntry]:
        return [e for e in self._entries if e.level == DiagnosticLevel.ERROR]

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started_at) * 1000)

    def finalize(self, total_file_count: int) -> bool:
        """
        Print the run summary and return the verdict.

        Args:
            total_file_count: Number of files recorded across all walks. Zero when
                the run aborted before scanning.

        Returns:
            bool: True if no error-level entry was recorded, False otherwise.
        """
        counts = self.counts()

        self.console.print()
        self.console.rule("[bold]📊 Update summary")
        self.console.print(f"📁 Files scanned: {total_file_count}")
        self.console.print(f"⏱️  Duration: {self.elapsed_ms()}ms")
        self.console.print(f"ℹ️  Info: {counts[DiagnosticLevel.INFO]}")
        self.console.print(f"⚠️  Warnings: {counts[DiagnosticLevel.WARNING]}")
        self.console.print(f"❌ Errors: {counts[DiagnosticLevel.ERROR]}")

        success = not self.has_errors()
        if success:
            self.console.print("\n[bold green]✅ Context document is up to date.")
        else:
            self.console.print("\n[bold red]🚨 Update failed.")
            self.console.print("Fix the following problems and run again:")
            for entry in self.errors():
                self.console.print(f"  • {escape(self._describe(entry))}", highlight=False)
        self.console.rule()

        return success

    @staticmethod
    def _describe(entry: DiagnosticEntry) -> str:
        return f"{entry.message} ({entry.file})" if entry.file else entry.message

    def _format(self, entry: DiagnosticEntry) -> str:
        icon, style = _LEVEL_STYLES[entry.level]
        label = escape(f"[{entry.level.upper()}]")
        return f"{icon} [{style}]{label}[/{style}] {escape(self._describe(entry))}"
