"""
Marker-delimited region replacement for the context document.

The document is opaque text. ctxsync owns only what lies strictly between a
start marker and its end marker; the markers themselves and everything outside
them are preserved byte for byte, which makes every update repeatable.
"""

from typing import Mapping

from constants import SECTION_MARKERS
from core.diagnostics import DiagnosticsCollector
from models import SectionKind


def replace_region(
    document: str,
    start_marker: str,
    end_marker: str,
    new_body: str,
    diagnostics: DiagnosticsCollector,
) -> str:
    """
    Replace the text between two markers with a new body.

    The first occurrence of each marker is used. The region becomes a newline,
    the body and a newline, so replacing twice with the same body gives the
    same document as replacing once. A document that uses CRLF line endings
    gets CRLF in the new region too.

    A missing marker, or an end marker that comes before the start marker, is
    recorded as a single warning and the document is returned unchanged.

    Args:
        document: Full text of the document.
        start_marker: Literal marker opening the region.
        end_marker: Literal marker closing the region.
        new_body: Rendered content for the region.
        diagnostics: Collector receiving the warning on failure.

    Returns:
        str: The updated document.
    """
    start_index = document.find(start_marker)
    end_index = document.find(end_marker)

    if start_index == -1 or end_index == -1:
        diagnostics.warning("Marker not found", start_marker if start_index == -1 else end_marker)
        return document

    body_start = start_index + len(start_marker)
    if end_index < body_start:
        diagnostics.warning("End marker precedes start marker", end_marker)
        return document

    newline = "\r\n" if "\r\n" in document else "\n"
    body = new_body.replace("\n", newline)
    return f"{document[:body_start]}{newline}{body}{newline}{document[end_index:]}"


def apply_sections(
    document: str,
    rendered: Mapping[SectionKind, str],
    diagnostics: DiagnosticsCollector,
) -> str:
    """
    Apply every rendered section to the document, in `SectionKind` order.

    Each replacement works on the output of the previous one. A section whose
    rendered body is empty is skipped and its region left as it was.
    """
    for section in SectionKind:
        body = rendered.get(section, "")
        if not body:
            continue
        markers = SECTION_MARKERS[section]
        document = replace_region(
            document, markers["start"], markers["end"], body, diagnostics
        )
    return document
