"""
Core data models for the scanning and documentation pipeline.

This module defines the records produced by one run of ctxsync: discovered
source files with whatever the static analyzer could infer about them, and the
diagnostic entries accumulated along the way. All of them are rebuilt from
scratch on every invocation.
"""

from dataclasses import dataclass, field
from typing import Optional

from models import DiagnosticLevel, FileCategory


@dataclass(frozen=True)
class PropDefinition:
    """
    One field of a component's `*Props` interface.

    Attributes:
        name: The declared member name (e.g., "title").
        type: The declared type text, verbatim after the colon (e.g., "string").
        required: False when the member is declared optional (`name?: type`).
    """

    name: str
    type: str
    required: bool = True


@dataclass(frozen=True)
class FileRecord:
    """
    One discovered source file.

    Records are immutable; the category is decided once at discovery time.
    Empty tuples stand for "not applicable" or "nothing found": HTTP methods
    are only filled for routes, symbols for components and utilities, props for
    components only.

    Attributes:
        name: Base file name (e.g., "Card.tsx").
        relative_path: Forward-slash path rooted at the tree prefix
            (e.g., "app/components/Card.tsx"), or the bare name for root files.
        category: The classification of the file.
        modified_at: Modification timestamp captured at scan time. Informational only.
        http_methods: Recognized HTTP verbs exported by a route handler.
        imported_symbols: Identifiers brought in by import statements.
        exported_symbols: Names of exported functions, constants, interfaces and types.
        props: Inferred members of the file's `*Props` interface.
    """

    name: str
    relative_path: str
    category: FileCategory
    modified_at: float = 0.0
    http_methods: tuple[str, ...] = ()
    imported_symbols: tuple[str, ...] = ()
    exported_symbols: tuple[str, ...] = ()
    props: tuple[PropDefinition, ...] = ()


@dataclass
class SourceMetadata:
    """Symbols and props extracted from one file's text."""

    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    props: list[PropDefinition] = field(default_factory=list)


@dataclass(frozen=True)
class DiagnosticEntry:
    """
    A single leveled log entry.

    Attributes:
        level: Severity of the entry.
        message: Human-readable description.
        file: Path or marker the entry refers to, if any.
    """

    level: DiagnosticLevel
    message: str
    file: Optional[str] = None


@dataclass
class SyncResult:
    """
    Outcome of one orchestrator run.

    Attributes:
        success: True iff no error-level diagnostic was recorded.
        total_files: Number of records across the app, lib and root walks.
            Zero when the run aborted.
        document: The updated document text, or None when the run aborted
            before rendering.
        written: True if the document was written back to disk.
    """

    success: bool
    total_files: int = 0
    document: Optional[str] = None
    written: bool = False
