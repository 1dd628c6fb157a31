import os
from pathlib import Path
from typing import Callable, Final, Protocol

from core.exceptions import (
    BinaryFileError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)

# Text is decoded and encoded with the same settings, so bytes that are not
# valid UTF-8 and CRLF line endings survive a read followed by a write.
ENCODING: Final[str] = "utf-8"
DECODE_ERRORS: Final[str] = "surrogateescape"


class FileReader(Protocol):
    """
    Protocol defining the interface for file reading operations.

    This protocol specifies methods for reading files, allowing different
    implementations for production (filesystem) and testing (mocks).
    """

    def read_file(self, file_path: Path) -> str:
        """
        Read the text content of a file as UTF-8.

        Args:
            file_path: The path to the file to read.

        Returns:
            The file content as a string.

        Raises:
            FileReadError: If the file is missing, binary or cannot be read.
        """


class FileWriter(Protocol):
    """
    Protocol defining the interface for file writing operations.

    A writer is bound to a single target file; ctxsync only ever rewrites the
    context document in place.
    """

    file_path: Path | None

    def write_file(self, data: str) -> None:
        """
        Replace the content of the bound file with data.

        Raises:
            FileWriteError: If writing to the file fails.
        """


class FilesystemFileReader:

    def read_file(self, file_path: Path) -> str:
        """
        Read the text content of a file as UTF-8.

        Line endings are returned as stored (newline="") and undecodable bytes
        are kept as surrogate escapes, so FilesystemFileWriter writes back the
        same bytes for unchanged text.

        Args:
            file_path: The path to the file to read.

        Returns:
            The file content as a string.

        Raises:
            FileReadError: If the path is not a regular file or an I/O error occurs.
            BinaryFileError: If the first kilobyte contains a null byte.
        """
        if not file_path.is_file():
            raise FileReadError(
                message=f"Not a regular file: {file_path}",
                file_path=str(file_path),
            )

        # Source scanning is pattern matching over text; binaries carry nothing useful
        if self._is_binary_file(file_path):
            raise BinaryFileError(
                message=f"File appears to be binary: {file_path}",
                file_path=str(file_path),
            )

        try:
            with open(
                file_path, "r", encoding=ENCODING, errors=DECODE_ERRORS, newline=""
            ) as f:
                return f.read()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

    def _is_binary_file(self, file_path: Path) -> bool:
        """
        Determine if a file is binary by checking the first 1024 bytes for null bytes.

        Files with invalid UTF-8 are not considered binary since they can be read
        with surrogate escapes in read_file.

        Raises:
            FileReadError: If the file cannot be opened.
        """
        try:
            with open(file_path, "rb") as f:
                return b"\0" in f.read(1024)
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e


class FilesystemFileWriter:
    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path

    @classmethod
    def from_path(cls, file_path: Path) -> "FilesystemFileWriter":
        """
        Create a writer instance with an explicit file path.

        Args:
            file_path: The path to the file to manage.

        Returns:
            FilesystemFileWriter instance configured for the given path.

        Raises:
            InvalidFilePathError: If the parent directory doesn't exist or is not writable.
        """
        parent = file_path.parent
        if not parent.exists():
            raise InvalidFilePathError(
                message=f"Parent directory does not exist: {parent}",
                file_path=str(file_path),
            )
        if not os.access(parent, os.W_OK):
            raise InvalidFilePathError(
                message=f"Parent directory is not writable: {parent}",
                file_path=str(file_path),
            )

        return cls(file_path)

    def write_file(self, data: str) -> None:
        """
        Replaces the content of the output file with data.

        Line endings are written as given (newline="") and surrogate escapes
        produced by FilesystemFileReader are turned back into the original bytes.

        Args:
            data: String data to write

        Raises:
            InvalidFilePathError: If file path is not set.
            FileWriteError: If writing to the file fails.
        """
        if self.file_path is None:
            raise InvalidFilePathError("No file path set. Use a factory method first.")

        try:
            with open(
                self.file_path, "w", encoding=ENCODING, errors=DECODE_ERRORS, newline=""
            ) as f:
                f.write(data)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e


class MockFileReader:
    """
    Mock implementation of FileReader for testing.

    Returns configurable file contents, allowing tests to control file reading
    behavior without requiring filesystem operations or actual file I/O.
    """

    def __init__(
        self,
        return_value: str | None = None,
        read_file_fn: Callable[[Path], str] | None = None,
    ):
        """
        Initialize MockFileReader with configurable reading behavior.

        Args:
            return_value: If provided, always returns this value regardless of input.
                Takes precedence over read_file_fn if both are provided.
            read_file_fn: Optional callable that takes a file path and returns file content.
                It may raise FileReadError to simulate an unreadable file.

        Attributes (for test inspection):
            read_file_calls: List of file paths passed to read_file()
        """
        self.return_value = return_value
        self.read_file_fn = read_file_fn
        self.read_file_calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if self.return_value is not None:
            return self.return_value
        if self.read_file_fn is not None:
            return self.read_file_fn(file_path)
        return ""


class MockFileWriter:
    """
    Mock implementation of FileWriter for testing.

    Records every write and keeps the resulting content so tests can inspect it
    without touching the filesystem. Set `error` to make every write fail.
    """

    def __init__(self, file_path: Path | None = None, error: Exception | None = None):
        self.file_path = file_path
        self.error = error
        self.write_file_calls: list[str] = []
        self.written_data: str = ""

    def write_file(self, data: str) -> None:
        self.write_file_calls.append(data)
        if self.error is not None:
            raise self.error
        self.written_data = data
