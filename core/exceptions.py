"""
Custom exception classes for ctxsync.

This module defines the exceptions raised at the filesystem boundary: reading
source files and the context document, listing directories, and writing the
document back. They carry the offending path and the underlying OS error so
that callers can turn them into diagnostic entries without losing detail.

None of these exceptions is meant to escape a run. The walker, the analyzer
and the orchestrator catch them at the smallest possible scope and record a
diagnostic instead.
"""

from typing import Optional


class FileIOError(Exception):
    """
    Base exception for file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path involved in the failed operation, if known.
        original_exception: The underlying exception that caused this error, if any.
    """

    default_message = "An error occurred during file I/O operation"

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception

    @property
    def reason(self) -> str:
        """Short description of the root cause, used in diagnostic messages."""
        if self.original_exception is not None:
            return str(self.original_exception) or type(self.original_exception).__name__
        return self.message


class InvalidFilePathError(FileIOError):
    """Raised when a path cannot be used, e.g. its parent directory is missing."""

    default_message = "Invalid file path provided"


class FileReadError(FileIOError):
    """Raised when the content of a file cannot be read."""

    default_message = "Failed to read file"


class BinaryFileError(FileReadError):
    """Raised when a file that should hold text contains null bytes."""

    default_message = "File appears to be binary"


class FileWriteError(FileIOError):
    """Raised when data cannot be written to a file."""

    default_message = "Failed to write to file"


class DirectoryListError(FileIOError):
    """
    Raised when a directory exists but its entries cannot be listed.

    A listing failure inside the app tree or at the project root fails the run;
    inside the optional lib tree it only degrades the result.
    """

    default_message = "Failed to list directory"


class EntryStatError(FileIOError):
    """Raised when a single directory entry cannot be inspected (broken link, permissions)."""

    default_message = "Failed to inspect directory entry"
