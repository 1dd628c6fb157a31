"""
Source tree traversal.

The walker turns a directory into a flat, deduplicated, sorted list of
`FileRecord`s. It applies the exclusion rules, classifies every source file
by path, and calls the static analyzer only for the categories that need
content (components, routes, utilities).

Failures never abort a walk. A missing tree yields an empty inventory; a
directory that cannot be listed or an entry that cannot be inspected is
reported and skipped while its siblings are still processed. The severity of
these reports depends on whether the tree is required (the app tree) or
optional (the lib tree).

All paths leaving this module are forward-slash relative paths built by
`to_relative_path`.
"""

from pathlib import Path
from typing import Collection

from adapters.filesystem import EntryStat, Filesystem, LocalFilesystem
from constants import DEPENDENCY_DIR_NAME, HIDDEN_PREFIX, ROUTE_HANDLER_FILES, SOURCE_SUFFIXES
from core.analysis import StaticAnalyzer
from core.classification import classify, needs_analysis
from core.diagnostics import DiagnosticsCollector
from core.exceptions import DirectoryListError, FileIOError
from core.file_io import FileReader
from core.models import FileRecord, SourceMetadata
from models import FileCategory


def to_relative_path(prefix: str, *parts: str) -> str:
    """
    Join a tree prefix and path parts into a normalized forward-slash path.

    Backslashes are converted, stray separators are stripped and empty parts
    are dropped, so `to_relative_path("app", "api\\\\users", "route.ts")` and
    `to_relative_path("app/", "api/users/", "route.ts")` both give
    "app/api/users/route.ts". An empty prefix yields a path relative to the
    project root.
    """
    pieces = (piece.replace("\\", "/").strip("/") for piece in (prefix, *parts))
    return "/".join(piece for piece in pieces if piece)


def is_source_file(name: str) -> bool:
    return name.endswith(SOURCE_SUFFIXES)


class TreeWalker:
    """
    Walks project trees and builds inventories.

    Args:
        diagnostics: Collector receiving one entry per recorded file and one
            per failure.
        filesystem: Directory operations. Defaults to LocalFilesystem.
        file_reader: Reader handed to the default analyzer.
        analyzer: Static analyzer to use. Defaults to a StaticAnalyzer sharing
            the same diagnostics and reader.
    """

    def __init__(
        self,
        diagnostics: DiagnosticsCollector,
        filesystem: Filesystem | None = None,
        file_reader: FileReader | None = None,
        analyzer: StaticAnalyzer | None = None,
    ) -> None:
        self.diagnostics = diagnostics
        self.filesystem = filesystem if filesystem is not None else LocalFilesystem()
        self.analyzer = (
            analyzer if analyzer is not None else StaticAnalyzer(diagnostics, file_reader)
        )

    def walk(
        self,
        root_dir: Path,
        prefix: str,
        excluded_names: Collection[str] = frozenset(),
        required: bool = True,
        fixed_category: FileCategory | None = None,
    ) -> list[FileRecord]:
        """
        Recursively collect the source files below `root_dir`.

        Args:
            root_dir: Directory to walk.
            prefix: Prefix of every relative path produced (e.g., "app").
            excluded_names: Entry names skipped at any depth, on top of hidden
                entries and dependency caches.
            required: Whether failures in this tree fail the run. Missing
                required trees are reported as warnings, missing optional
                trees as info.
            fixed_category: If set, every file gets this category instead of
                being classified by path. Used for the lib tree.

        Returns:
            list[FileRecord]: Records sorted by relative path, one per path.
        """
        if not self.filesystem.exists(root_dir):
            if required:
                self.diagnostics.warning("Directory not found", str(root_dir))
            else:
                self.diagnostics.info("Optional directory not found", str(root_dir))
            return []

        # Keyed on relative path: a path seen twice keeps its last record
        records: dict[str, FileRecord] = {}
        self._scan_dir(
            root_dir, prefix, (), excluded_names, required, fixed_category, records
        )
        return sorted(records.values(), key=lambda record: record.relative_path)

    def walk_flat(
        self,
        root_dir: Path,
        excluded_names: Collection[str] = frozenset(),
        excluded_prefixes: tuple[str, ...] = (),
    ) -> list[FileRecord]:
        """
        Collect the source files directly inside `root_dir`, without recursing.

        Entries whose name starts with one of `excluded_prefixes` or appears in
        `excluded_names` are skipped, as are directories. Every kept file is
        recorded as `other`.

        Returns:
            list[FileRecord]: Records sorted by file name.
        """
        try:
            names = self.filesystem.list_dir(root_dir)
        except DirectoryListError as e:
            self.diagnostics.error(f"Could not read project root: {e.reason}", str(root_dir))
            return []

        records: dict[str, FileRecord] = {}
        for name in names:
            if name.startswith(excluded_prefixes) or name in excluded_names:
                continue

            try:
                entry = self.filesystem.stat(root_dir / name)
            except FileIOError as e:
                self.diagnostics.warning(f"Could not process entry: {e.reason}", name)
                continue

            if entry.is_dir or not is_source_file(name):
                continue

            record = FileRecord(
                name=name,
                relative_path=to_relative_path("", name),
                category=FileCategory.OTHER,
                modified_at=entry.modified_at,
            )
            records[record.relative_path] = record
            self.diagnostics.info(f"ROOT: {name}", record.relative_path)

        return sorted(records.values(), key=lambda record: record.name)

    def _scan_dir(
        self,
        directory: Path,
        prefix: str,
        segments: tuple[str, ...],
        excluded_names: Collection[str],
        required: bool,
        fixed_category: FileCategory | None,
        records: dict[str, FileRecord],
    ) -> None:
        try:
            names = self.filesystem.list_dir(directory)
        except DirectoryListError as e:
            self._report(
                required,
                f"Could not read directory: {e.reason}",
                to_relative_path(prefix, *segments) or str(directory),
            )
            return

        for name in names:
            if self._is_excluded(name, excluded_names):
                continue

            full_path = directory / name
            try:
                entry = self.filesystem.stat(full_path)
                if entry.is_dir:
                    self._scan_dir(
                        full_path,
                        prefix,
                        (*segments, name),
                        excluded_names,
                        required,
                        fixed_category,
                        records,
                    )
                    continue

                if not is_source_file(name):
                    continue

                record = self._build_record(
                    full_path, name, prefix, segments, entry, fixed_category
                )
            except FileIOError as e:
                self._report(
                    required,
                    f"Could not process entry: {e.reason}",
                    to_relative_path(prefix, *segments, name),
                )
                continue

            records[record.relative_path] = record
            self.diagnostics.info(
                f"{record.category.upper()}: {name}", record.relative_path
            )

    def _build_record(
        self,
        full_path: Path,
        name: str,
        prefix: str,
        segments: tuple[str, ...],
        entry: EntryStat,
        fixed_category: FileCategory | None,
    ) -> FileRecord:
        category = fixed_category if fixed_category is not None else classify(name, segments)
        relative_path = to_relative_path(prefix, *segments, name)

        http_methods: list[str] = []
        metadata = SourceMetadata()
        if needs_analysis(category):
            if category == FileCategory.ROUTE:
                if name in ROUTE_HANDLER_FILES:
                    http_methods = self.analyzer.analyze_route(full_path, relative_path)
            else:
                metadata = self.analyzer.analyze_source(full_path, relative_path)

        return FileRecord(
            name=name,
            relative_path=relative_path,
            category=category,
            modified_at=entry.modified_at,
            http_methods=tuple(http_methods),
            imported_symbols=tuple(metadata.imports),
            exported_symbols=tuple(metadata.exports),
            props=tuple(metadata.props) if category == FileCategory.COMPONENT else (),
        )

    @staticmethod
    def _is_excluded(name: str, excluded_names: Collection[str]) -> bool:
        return (
            name.startswith(HIDDEN_PREFIX)
            or name == DEPENDENCY_DIR_NAME
            or name in excluded_names
        )

    def _report(self, required: bool, message: str, file: str) -> None:
        if required:
            self.diagnostics.error(message, file)
        else:
            self.diagnostics.warning(message, file)
