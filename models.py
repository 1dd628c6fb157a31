"""
Type definitions and enumerations used across the ctxsync application.

This module contains the closed vocabularies shared by every stage of the
pipeline: the category a source file is classified into, the severity of a
diagnostic entry, and the documented regions the tool rewrites.
"""

from enum import StrEnum
from typing import TypedDict


class FileCategory(StrEnum):
    """
    Mutually exclusive classification label of a discovered source file.

    A category is assigned exactly once when the file is discovered and never
    changes afterwards. `UTIL` is only produced for files of the library tree;
    the path classifier itself never returns it.
    """

    COMPONENT = "component"
    ROUTE = "route"
    PAGE = "page"
    UTIL = "util"
    TEST = "test"
    OTHER = "other"


class DiagnosticLevel(StrEnum):
    """
    Severity of a diagnostic entry.

    Only `ERROR` affects the verdict of a run: a run fails iff at least one
    error-level entry was recorded.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class SectionKind(StrEnum):
    """
    The regions of the context document owned by ctxsync.

    Declaration order is the order in which regions are rewritten.
    """

    COMPONENTS = "components"
    TEST_FILES = "test-files"
    ROUTES = "routes"
    LIB_FILES = "lib-files"
    ROOT_FILES = "root-files"
    ARCHITECTURE = "architecture"


class MarkerPair(TypedDict):
    """
    Literal sentinel strings delimiting one owned region of the document.

    Attributes:
        start: Marker that opens the region. Kept verbatim on rewrite.
        end: Marker that closes the region. Kept verbatim on rewrite.
    """

    start: str
    end: str
