"""
Orchestration of one context document update.

The pipeline is strictly sequential:

1. Check that the context document exists and read it.
2. Walk the app tree (required), the lib tree (optional, every file is a
   utility) and the flat project root.
3. Render every section from the fresh inventories.
4. Replace the marked regions of the document, in a fixed order.
5. Write the document back.
6. Print the summary and derive the verdict from the diagnostics.

Only a missing, binary or unreadable document and a failed write abort the
run early; the first three leave the document on disk as it was. Every other
problem has already been turned into a diagnostic by the stage that hit it,
and warnings never revert the regions that were updated.
"""

from pathlib import Path

from adapters.filesystem import Filesystem, LocalFilesystem
from constants import (
    APP_DIR_NAME,
    EXCLUDED_APP_FILES,
    EXCLUDED_ROOT_FILES,
    EXCLUDED_ROOT_PREFIXES,
    LIB_DIR_NAME,
)
from core.diagnostics import DiagnosticsCollector
from core.exceptions import FileIOError, FileReadError
from core.file_io import FileReader, FilesystemFileReader, FileWriter, FilesystemFileWriter
from core.models import FileRecord, SyncResult
from core.rendering import render_sections
from core.sections import apply_sections
from core.walker import TreeWalker
from models import DiagnosticLevel, FileCategory
from ui.progress import ProgressState
from ui.progress_display import ProgressDisplay, RichProgressDisplay

_STAGES = 4


def sync_context_document(
    root: Path,
    document_path: Path,
    diagnostics: DiagnosticsCollector,
    *,
    filesystem: Filesystem | None = None,
    file_reader: FileReader | None = None,
    file_writer: FileWriter | None = None,
    progress_display: ProgressDisplay | None = None,
    dry_run: bool = False,
) -> SyncResult:
    """
    Regenerate the marked regions of the context document from the project tree.

    Args:
        root: Project root containing the app and lib trees.
        document_path: The context document to rewrite in place.
        diagnostics: Collector shared by every stage of the run.
        filesystem: Directory operations. Defaults to LocalFilesystem.
        file_reader: Reader for the document and the analyzed sources.
            Defaults to FilesystemFileReader.
        file_writer: Writer bound to the document. Defaults to a
            FilesystemFileWriter for `document_path`.
        progress_display: Stage progress reporting. Defaults to a Rich spinner
            on the diagnostics console.
        dry_run: Render and report without writing the document.

    Returns:
        SyncResult: The verdict, the number of files scanned and the updated text.
    """
    filesystem = filesystem if filesystem is not None else LocalFilesystem()
    reader = file_reader if file_reader is not None else FilesystemFileReader()

    if not filesystem.exists(document_path):
        diagnostics.error("Context document not found", str(document_path))
        diagnostics.finalize(0)
        return SyncResult(success=False)

    display = (
        progress_display
        if progress_display is not None
        else RichProgressDisplay(diagnostics.console)
    )

    # A binary or unreadable document is never overwritten
    try:
        document = reader.read_file(document_path)
    except FileReadError as e:
        diagnostics.error(f"Could not read context document: {e.reason}", str(document_path))
        diagnostics.finalize(0)
        return SyncResult(success=False)
    diagnostics.info("Context document read", str(document_path))

    try:
        walker = TreeWalker(diagnostics, filesystem, reader)
        with display as progress:
            progress.on_start(f"Scanning {APP_DIR_NAME}/...", total=_STAGES)
            app_records = walker.walk(
                root / APP_DIR_NAME, APP_DIR_NAME, EXCLUDED_APP_FILES, required=True
            )

            progress.on_update(f"Scanning {LIB_DIR_NAME}/...", advance=1)
            lib_records = walker.walk(
                root / LIB_DIR_NAME,
                LIB_DIR_NAME,
                required=False,
                fixed_category=FileCategory.UTIL,
            )

            progress.on_update("Scanning project root...", advance=1)
            root_records = walker.walk_flat(
                root, EXCLUDED_ROOT_FILES, EXCLUDED_ROOT_PREFIXES
            )

            progress.on_update("Updating context document...", advance=1)
            updated = apply_sections(
                document,
                render_sections(app_records, lib_records, root_records),
                diagnostics,
            )

            written = False
            if dry_run:
                diagnostics.info("Dry run, document not written", str(document_path))
            else:
                writer = (
                    file_writer
                    if file_writer is not None
                    else FilesystemFileWriter.from_path(document_path)
                )
                writer.write_file(updated)
                written = True
                diagnostics.info("Context document written", str(document_path))

            progress.on_complete(
                _completion_message(app_records, lib_records, root_records),
                _final_state(diagnostics),
            )
    except FileIOError as e:
        diagnostics.error(f"Update failed: {e.reason}", str(document_path))
        diagnostics.finalize(0)
        return SyncResult(success=False)

    total_files = len(app_records) + len(lib_records) + len(root_records)
    success = diagnostics.finalize(total_files)
    return SyncResult(
        success=success, total_files=total_files, document=updated, written=written
    )


def _completion_message(*inventories: list[FileRecord]) -> str:
    return f"Scanned {sum(len(records) for records in inventories)} files."


def _final_state(diagnostics: DiagnosticsCollector) -> ProgressState:
    counts = diagnostics.counts()
    if counts[DiagnosticLevel.ERROR]:
        return ProgressState.ERROR
    if counts[DiagnosticLevel.WARNING]:
        return ProgressState.WARNING
    return ProgressState.COMPLETE
