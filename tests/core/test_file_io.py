"""
Comprehensive tests for the file_io module using pytest.

Tests cover:
- FilesystemFileReader: reading source files, rejecting binaries and non-files, I/O errors
- FilesystemFileWriter: factory method and rewriting the context document
- Byte-for-byte round trips of line endings and undecodable bytes
- MockFileReader: call tracking and configurable return values
- MockFileWriter: call tracking, data storage and injected failures
"""

import os
from pathlib import Path

import pytest

from core.exceptions import (
    BinaryFileError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)
from core.file_io import (
    FilesystemFileReader,
    FilesystemFileWriter,
    MockFileReader,
    MockFileWriter,
)


# ============================================================================
# Tests for FilesystemFileReader.read_file
# ============================================================================


@pytest.mark.unit
def test_read_file_success(tmp_path):
    """Should successfully read a source file."""
    file_path = tmp_path / "route.ts"
    content = "export async function GET() {\n  return Response.json([]);\n}\n"
    file_path.write_text(content, encoding="utf-8")

    reader = FilesystemFileReader()
    result = reader.read_file(file_path)

    assert result == content


@pytest.mark.unit
def test_read_file_nonexistent(tmp_path):
    """Should raise FileReadError for a missing file."""
    reader = FilesystemFileReader()

    with pytest.raises(FileReadError) as exc_info:
        reader.read_file(tmp_path / "missing.ts")

    assert "Not a regular file" in str(exc_info.value)


@pytest.mark.unit
def test_read_file_directory(tmp_path):
    """Should raise FileReadError when the path is a directory."""
    reader = FilesystemFileReader()

    with pytest.raises(FileReadError):
        reader.read_file(tmp_path)


@pytest.mark.unit
def test_read_file_binary_with_null_bytes(tmp_path):
    """Should raise BinaryFileError for a file with null bytes."""
    file_path = tmp_path / "bundle.js"
    file_path.write_bytes(b"\x00\x01\x02\x03Hello\x00World")

    reader = FilesystemFileReader()

    with pytest.raises(BinaryFileError) as exc_info:
        reader.read_file(file_path)

    assert isinstance(exc_info.value, FileReadError)
    assert exc_info.value.file_path == str(file_path)


@pytest.mark.unit
def test_read_file_keeps_line_endings(tmp_path):
    """CRLF and lone CR are returned as stored, not translated."""
    file_path = tmp_path / "notes.md"
    file_path.write_bytes(b"one\r\ntwo\rthree\n")

    reader = FilesystemFileReader()

    assert reader.read_file(file_path) == "one\r\ntwo\rthree\n"


@pytest.mark.unit
def test_read_file_keeps_invalid_utf8_as_surrogates(tmp_path):
    """Invalid bytes are not dropped; they come back as surrogate escapes."""
    file_path = tmp_path / "legacy.js"
    file_path.write_bytes(b"export const a\xff = 1")

    reader = FilesystemFileReader()
    result = reader.read_file(file_path)

    assert result == "export const a\udcff = 1"


@pytest.mark.unit
def test_read_file_io_error(tmp_path, mocker):
    """Should raise FileReadError when I/O error occurs."""
    file_path = tmp_path / "Card.tsx"
    file_path.write_text("content", encoding="utf-8")

    reader = FilesystemFileReader()

    mock_open = mocker.patch("builtins.open")
    mock_open.side_effect = OSError("Permission denied")

    with pytest.raises(FileReadError) as exc_info:
        reader.read_file(file_path)

    assert "Failed to read file" in str(exc_info.value)
    assert str(file_path) in str(exc_info.value)
    assert exc_info.value.reason == "Permission denied"


# ============================================================================
# Tests for FilesystemFileReader._is_binary_file
# ============================================================================


@pytest.mark.unit
def test_is_binary_file_text_file(tmp_path):
    """Should return False for text file."""
    file_path = tmp_path / "utils.ts"
    file_path.write_text("export function cn() {}", encoding="utf-8")

    reader = FilesystemFileReader()

    assert reader._is_binary_file(file_path) is False


@pytest.mark.unit
def test_is_binary_file_with_null_bytes(tmp_path):
    """Should return True for file with null bytes."""
    file_path = tmp_path / "binary.js"
    file_path.write_bytes(b"Text\x00with\x00nulls")

    reader = FilesystemFileReader()

    assert reader._is_binary_file(file_path) is True


@pytest.mark.unit
def test_is_binary_file_unreadable(tmp_path, mocker):
    """Should raise FileReadError when file cannot be opened."""
    reader = FilesystemFileReader()

    mock_open = mocker.patch("builtins.open")
    mock_open.side_effect = PermissionError("Permission denied")

    with pytest.raises(FileReadError) as exc_info:
        reader._is_binary_file(tmp_path / "locked.ts")

    assert isinstance(exc_info.value.original_exception, PermissionError)


@pytest.mark.unit
def test_is_binary_file_null_byte_after_first_kilobyte(tmp_path):
    """Only the first 1024 bytes are inspected."""
    file_path = tmp_path / "large.js"
    file_path.write_bytes(b"A" * 2000 + b"\x00")

    reader = FilesystemFileReader()

    assert reader._is_binary_file(file_path) is False


# ============================================================================
# Tests for FilesystemFileWriter.from_path
# ============================================================================


@pytest.mark.unit
def test_from_path_success(tmp_path):
    """Should create writer with valid path."""
    file_path = tmp_path / "gemini.md"

    writer = FilesystemFileWriter.from_path(file_path)

    assert writer.file_path == file_path
    assert isinstance(writer, FilesystemFileWriter)


@pytest.mark.unit
def test_from_path_parent_not_exists(tmp_path):
    """Should raise InvalidFilePathError when parent directory doesn't exist."""
    file_path = tmp_path / "docs" / "gemini.md"

    with pytest.raises(InvalidFilePathError) as exc_info:
        FilesystemFileWriter.from_path(file_path)

    assert "Parent directory does not exist" in str(exc_info.value)
    assert exc_info.value.file_path == str(file_path)


@pytest.mark.unit
def test_from_path_parent_not_writable(tmp_path):
    """Should raise InvalidFilePathError when parent directory is not writable."""
    if os.name == "nt":  # Windows doesn't support chmod the same way
        pytest.skip("Skipping on Windows - chmod behavior differs")
    if os.geteuid() == 0:
        pytest.skip("Skipping as root - permission bits are not enforced")

    file_path = tmp_path / "gemini.md"
    tmp_path.chmod(0o555)

    try:
        with pytest.raises(InvalidFilePathError) as exc_info:
            FilesystemFileWriter.from_path(file_path)

        assert "Parent directory is not writable" in str(exc_info.value)
        assert exc_info.value.file_path == str(file_path)
    finally:
        # Restore permissions for cleanup
        tmp_path.chmod(0o755)


# ============================================================================
# Tests for FilesystemFileWriter.write_file
# ============================================================================


@pytest.mark.unit
def test_write_file_replaces_document(tmp_path):
    """Should truncate the document before writing."""
    file_path = tmp_path / "gemini.md"
    file_path.write_text("old document that is longer", encoding="utf-8")
    writer = FilesystemFileWriter.from_path(file_path)

    writer.write_file("# Context\n")

    assert file_path.read_text(encoding="utf-8") == "# Context\n"


@pytest.mark.unit
def test_write_file_keeps_non_ascii(tmp_path):
    """Diagram icons must survive the round trip to disk."""
    file_path = tmp_path / "gemini.md"
    writer = FilesystemFileWriter.from_path(file_path)

    writer.write_file('Root["🏠 App Layout"]')

    assert file_path.read_text(encoding="utf-8") == 'Root["🏠 App Layout"]'


@pytest.mark.unit
def test_write_file_does_not_translate_newlines(tmp_path):
    file_path = tmp_path / "gemini.md"
    writer = FilesystemFileWriter.from_path(file_path)

    writer.write_file("a\r\nb\n")

    assert file_path.read_bytes() == b"a\r\nb\n"


@pytest.mark.unit
def test_write_file_no_file_path():
    """Should raise InvalidFilePathError when file path is not set."""
    writer = FilesystemFileWriter()

    with pytest.raises(InvalidFilePathError) as exc_info:
        writer.write_file("data")

    assert "No file path set" in str(exc_info.value)


@pytest.mark.unit
def test_write_file_io_error(tmp_path, mocker):
    """Should raise FileWriteError when write fails."""
    file_path = tmp_path / "gemini.md"
    writer = FilesystemFileWriter.from_path(file_path)

    mock_open = mocker.patch("builtins.open")
    mock_open.side_effect = OSError("Disk full")

    with pytest.raises(FileWriteError) as exc_info:
        writer.write_file("data")

    assert "Failed to write to file" in str(exc_info.value)
    assert str(file_path) in str(exc_info.value)
    assert exc_info.value.reason == "Disk full"


# ============================================================================
# Tests for read/write round trips
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        b"# Caf\xe9 notes\r\nline two\r\n",
        b"mixed\r\nendings\nand a lone\rcarriage return",
        "# Unicode é \U0001f4e6\n".encode("utf-8"),
    ],
)
def test_unchanged_text_round_trips_byte_for_byte(tmp_path, raw):
    """Reading then writing the same text must not alter a single byte."""
    file_path = tmp_path / "gemini.md"
    file_path.write_bytes(raw)

    text = FilesystemFileReader().read_file(file_path)
    FilesystemFileWriter.from_path(file_path).write_file(text)

    assert file_path.read_bytes() == raw


# ============================================================================
# Tests for MockFileReader
# ============================================================================


@pytest.mark.unit
def test_mock_file_reader_return_value():
    """Should return the configured value for every path."""
    reader = MockFileReader(return_value="export function GET() {}")

    assert reader.read_file(Path("a.ts")) == "export function GET() {}"
    assert reader.read_file(Path("b.ts")) == "export function GET() {}"


@pytest.mark.unit
def test_mock_file_reader_read_file_fn():
    """Should delegate to read_file_fn when no return value is set."""
    contents = {Path("a.ts"): "a", Path("b.ts"): "b"}
    reader = MockFileReader(read_file_fn=contents.__getitem__)

    assert reader.read_file(Path("b.ts")) == "b"


@pytest.mark.unit
def test_mock_file_reader_read_file_fn_can_fail():
    """read_file_fn may raise to simulate an unreadable file."""

    def fail(path):
        raise FileReadError(file_path=str(path))

    reader = MockFileReader(read_file_fn=fail)

    with pytest.raises(FileReadError):
        reader.read_file(Path("locked.ts"))
    assert reader.read_file_calls == [Path("locked.ts")]


@pytest.mark.unit
def test_mock_file_reader_default_empty():
    """Should return an empty string when nothing is configured."""
    assert MockFileReader().read_file(Path("a.ts")) == ""


@pytest.mark.unit
def test_mock_file_reader_return_value_takes_precedence():
    """return_value should win over read_file_fn."""
    reader = MockFileReader(return_value="fixed", read_file_fn=lambda path: "dynamic")

    assert reader.read_file(Path("a.ts")) == "fixed"


@pytest.mark.unit
def test_mock_file_reader_tracks_multiple_calls():
    reader = MockFileReader()

    reader.read_file(Path("a.ts"))
    reader.read_file(Path("b.ts"))

    assert reader.read_file_calls == [Path("a.ts"), Path("b.ts")]


# ============================================================================
# Tests for MockFileWriter
# ============================================================================


@pytest.mark.unit
def test_mock_file_writer_keeps_last_write():
    """Every write is tracked and replaces the previously written data."""
    writer = MockFileWriter(Path("gemini.md"))

    writer.write_file("first")
    writer.write_file("second")

    assert writer.write_file_calls == ["first", "second"]
    assert writer.written_data == "second"


@pytest.mark.unit
def test_mock_file_writer_error():
    """A configured error is raised on every write, after the call is recorded."""
    error = FileWriteError(file_path="gemini.md", original_exception=OSError("Disk full"))
    writer = MockFileWriter(error=error)

    with pytest.raises(FileWriteError) as exc_info:
        writer.write_file("data")

    assert exc_info.value is error
    assert writer.write_file_calls == ["data"]
    assert writer.written_data == ""
