"""
Filesystem adapter for directory traversal.

This module isolates the handful of operating system calls the tree walker
needs: checking that a directory exists, listing its entries, and inspecting a
single entry. Failures are translated into the project's exception types so
the walker never has to deal with raw `OSError`s.

`InMemoryFilesystem` implements the same interface (and the `FileReader`
protocol) over a dictionary, which lets tests describe a project tree without
touching the disk and inject listing, stat and read failures at will.
"""

import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Mapping, Protocol

from core.exceptions import DirectoryListError, EntryStatError, FileReadError


@dataclass(frozen=True)
class EntryStat:
    """
    The subset of `os.stat` the walker uses.

    Attributes:
        is_dir: True if the entry is a directory (symbolic links are followed).
        modified_at: Last modification time in seconds since the epoch.
    """

    is_dir: bool
    modified_at: float


class Filesystem(Protocol):
    """Protocol for the directory operations used during a walk."""

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""

    def list_dir(self, path: Path) -> list[str]:
        """
        Return the names of the entries of a directory, in listing order.

        Raises:
            DirectoryListError: If the directory cannot be listed.
        """

    def stat(self, path: Path) -> EntryStat:
        """
        Inspect a single entry.

        Raises:
            EntryStatError: If the entry cannot be inspected.
        """


class LocalFilesystem:
    """Production implementation backed by the operating system."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_dir(self, path: Path) -> list[str]:
        # Listing order is whatever the OS returns; callers sort their output
        try:
            return os.listdir(path)
        except OSError as e:
            raise DirectoryListError(
                message=f"Failed to list directory: {path}",
                file_path=str(path),
                original_exception=e,
            ) from e

    def stat(self, path: Path) -> EntryStat:
        try:
            st = path.stat()
        except OSError as e:
            raise EntryStatError(
                message=f"Failed to inspect entry: {path}",
                file_path=str(path),
                original_exception=e,
            ) from e
        return EntryStat(is_dir=path.is_dir(), modified_at=st.st_mtime)


class InMemoryFilesystem:
    """
    Dictionary-backed filesystem for testing.

    Directories are implied by the file paths. Listings follow the insertion
    order of `files`, so tests control sibling visitation order.

    Args:
        files: Mapping of file path to file content.
        unlistable: Directories whose listing raises DirectoryListError.
        broken: Entries whose stat raises EntryStatError.
        unreadable: Files whose read raises FileReadError.
        modified_at: Timestamp reported for every entry.

    Attributes (for test inspection):
        read_file_calls: List of file paths passed to read_file()
    """

    def __init__(
        self,
        files: Mapping[str | PurePath, str],
        unlistable: Iterable[str | PurePath] = (),
        broken: Iterable[str | PurePath] = (),
        unreadable: Iterable[str | PurePath] = (),
        modified_at: float = 0.0,
    ):
        self.files: dict[Path, str] = {Path(p): content for p, content in files.items()}
        self.unlistable = {Path(p) for p in unlistable}
        self.broken = {Path(p) for p in broken}
        self.unreadable = {Path(p) for p in unreadable}
        self.modified_at = modified_at
        self.read_file_calls: list[Path] = []

    def _is_dir(self, path: Path) -> bool:
        return any(path in file_path.parents for file_path in self.files)

    def exists(self, path: Path) -> bool:
        return path in self.files or self._is_dir(path)

    def list_dir(self, path: Path) -> list[str]:
        if path in self.unlistable or not self._is_dir(path):
            raise DirectoryListError(
                message=f"Failed to list directory: {path}",
                file_path=str(path),
                original_exception=PermissionError("Permission denied"),
            )

        names: list[str] = []
        for file_path in self.files:
            if path not in file_path.parents:
                continue
            child = file_path.relative_to(path).parts[0]
            if child not in names:
                names.append(child)
        return names

    def stat(self, path: Path) -> EntryStat:
        if path in self.broken or not self.exists(path):
            raise EntryStatError(
                message=f"Failed to inspect entry: {path}",
                file_path=str(path),
                original_exception=FileNotFoundError("No such file or directory"),
            )
        return EntryStat(is_dir=self._is_dir(path), modified_at=self.modified_at)

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if file_path in self.unreadable:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=PermissionError("Permission denied"),
            )
        if file_path not in self.files:
            raise FileReadError(
                message=f"Not a regular file: {file_path}",
                file_path=str(file_path),
            )
        return self.files[file_path]
