"""File classification module.

This module assigns every discovered source file to exactly one category based
on its name and the directory segments leading to it. The file is never
opened: classification has to stay cheap and deterministic because most files
are recorded without any content analysis.

Rules are evaluated in priority order and the first match wins:

1. Test files: the file name or any directory segment contains a test marker
   (`test`, `spec`, `__tests__`). This beats every other rule, so
   `components/Card.test.tsx` is a test, not a component.
2. Components: a directory segment is a component area (`components`, `ui`,
   `shared`).
3. Routes: a directory segment is an API area (`api`, `routes`, `handlers`).
4. Pages: the file name is a framework-reserved entry point (`page.tsx`,
   `layout.ts`, ...).
5. Everything else is `other`.
"""

from typing import Sequence

from constants import (
    ANALYZED_CATEGORIES,
    API_AREAS,
    COMPONENT_AREAS,
    PAGE_FILE_NAMES,
    TEST_MARKERS,
)
from models import FileCategory


def classify(file_name: str, path_segments: Sequence[str]) -> FileCategory:
    """
    Classify a file from its name and the directory segments above it.

    Args:
        file_name: The base name of the file (e.g., "Card.tsx").
        path_segments: Directory names between the tree root and the file,
            outermost first (e.g., ["components", "cards"]). The tree prefix
            itself ("app") is not part of the segments.

    Returns:
        FileCategory: Exactly one of TEST, COMPONENT, ROUTE, PAGE or OTHER.

    Example:
        >>> classify("route.ts", ["api", "users"])
        <FileCategory.ROUTE: 'route'>
        >>> classify("Card.test.tsx", ["components"])
        <FileCategory.TEST: 'test'>
    """
    if is_test_file(file_name, path_segments):
        return FileCategory.TEST

    if any(segment in COMPONENT_AREAS for segment in path_segments):
        return FileCategory.COMPONENT

    if any(segment in API_AREAS for segment in path_segments):
        return FileCategory.ROUTE

    if file_name in PAGE_FILE_NAMES:
        return FileCategory.PAGE

    return FileCategory.OTHER


def is_test_file(file_name: str, path_segments: Sequence[str]) -> bool:
    # Substring match: "Card.test.tsx", "__tests__/", "e2e-specs/"
    candidates = (file_name, *path_segments)
    return any(marker in candidate for candidate in candidates for marker in TEST_MARKERS)


def needs_analysis(category: FileCategory) -> bool:
    """Whether files of this category are opened and run through the static analyzer."""
    return category in ANALYZED_CATEGORIES
