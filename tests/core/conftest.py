"""
Shared fixtures for core module tests.

This module provides reusable pytest fixtures for testing core functionality,
including diagnostics collectors that capture their output, in-memory project
trees and record factories.
"""

from pathlib import Path

import pytest

from adapters.filesystem import InMemoryFilesystem
from core.diagnostics import DiagnosticsCollector
from core.models import FileRecord, PropDefinition
from models import DiagnosticLevel, FileCategory
from ui.progress_display import NoOpProgressDisplay

PROJECT = Path("/project")


@pytest.fixture
def diagnostics(console):
    """Diagnostics collector whose output can be read back from console.file."""
    return DiagnosticsCollector(console=console)


@pytest.fixture
def entries_of(diagnostics):
    """Callable returning the recorded entries, optionally of one level."""

    def _entries_of(level: DiagnosticLevel | None = None):
        return [e for e in diagnostics.entries if level is None or e.level == level]

    return _entries_of


@pytest.fixture
def progress_display():
    """Progress display for testing."""
    return NoOpProgressDisplay()


@pytest.fixture
def project_root():
    return PROJECT


@pytest.fixture
def memory_fs_factory():
    """Factory for InMemoryFilesystem instances rooted at /project."""

    def _factory(files: dict[str, str], **kwargs) -> InMemoryFilesystem:
        def rooted(paths):
            return [PROJECT / p for p in paths]

        return InMemoryFilesystem(
            {PROJECT / path: content for path, content in files.items()},
            unlistable=rooted(kwargs.pop("unlistable", ())),
            broken=rooted(kwargs.pop("broken", ())),
            unreadable=rooted(kwargs.pop("unreadable", ())),
            **kwargs,
        )

    return _factory


@pytest.fixture
def record_factory():
    """Factory for FileRecord instances with sensible defaults."""

    def _factory(
        relative_path: str,
        category: FileCategory,
        http_methods: tuple[str, ...] = (),
        props: tuple[PropDefinition, ...] = (),
    ) -> FileRecord:
        return FileRecord(
            name=relative_path.rsplit("/", 1)[-1],
            relative_path=relative_path,
            category=category,
            http_methods=http_methods,
            props=props,
        )

    return _factory
