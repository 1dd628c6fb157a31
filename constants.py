"""
Application-wide constants and configuration mappings.

This module defines the fixed heuristics used throughout ctxsync: which files
count as source files, which entries are excluded from each walk, which path
tokens drive classification, which HTTP verbs are recognized, and which marker
pairs delimit the regions of the context document. There is no configuration
file; changing behavior means changing these values.
"""

from typing import Final, Mapping
from models import FileCategory, MarkerPair, SectionKind


# Name of the living document that is rewritten when no --doc option is given.
DEFAULT_DOCUMENT_NAME: Final[str] = "gemini.md"

# Subtrees of the project root that are walked recursively.
APP_DIR_NAME: Final[str] = "app"
LIB_DIR_NAME: Final[str] = "lib"

# Only files with one of these suffixes are ever recorded.
# Covers typed/untyped source with and without JSX markup.
SOURCE_SUFFIXES: Final[tuple[str, ...]] = (".ts", ".tsx", ".js", ".jsx")

HIDDEN_PREFIX: Final[str] = "."
DEPENDENCY_DIR_NAME: Final[str] = "node_modules"

# Framework files inside app/ that are part of every project and add no signal.
EXCLUDED_APP_FILES: Final[frozenset[str]] = frozenset(
    {
        "layout.tsx",
        "page.tsx",
        "favicon.ico",
        "globals.css",
    }
)

# Tooling and configuration files that live at the project root.
EXCLUDED_ROOT_FILES: Final[frozenset[str]] = frozenset(
    {
        "test.tsx",
        "package.json",
        "tsconfig.json",
        "next.config.ts",
        "README.md",
        "eslint.config.mjs",
        "next-env.d.ts",
        "postcss.config.mjs",
        "pnpm-lock.yaml",
        "update-context.ts",
        DEFAULT_DOCUMENT_NAME,
    }
)

# Root entries starting with any of these are skipped by the flat root scan.
# The walked subtrees and static asset folders are covered by their own walks.
EXCLUDED_ROOT_PREFIXES: Final[tuple[str, ...]] = (
    HIDDEN_PREFIX,
    DEPENDENCY_DIR_NAME,
    "app",
    "public",
    "lib",
    "scripts",
)

# Classification tokens. Test markers match as substrings of the file name or
# of any directory segment; component and API tokens must equal a segment.
TEST_MARKERS: Final[tuple[str, ...]] = ("test", "spec", "__tests__")
COMPONENT_AREAS: Final[frozenset[str]] = frozenset({"components", "ui", "shared"})
API_AREAS: Final[frozenset[str]] = frozenset({"api", "routes", "handlers"})

# Framework-reserved entry point names.
PAGE_FILE_NAMES: Final[frozenset[str]] = frozenset(
    {"page.tsx", "page.ts", "layout.tsx", "layout.ts"}
)

# Only route files with one of these names are scanned for HTTP handlers.
ROUTE_HANDLER_FILES: Final[frozenset[str]] = frozenset(
    {"route.ts", "route.tsx", "route.js", "route.jsx"}
)

# Order matters: detected methods are reported in this order.
HTTP_METHODS: Final[tuple[str, ...]] = (
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "PATCH",
    "HEAD",
    "OPTIONS",
)

# Categories whose files are opened and run through the static analyzer.
ANALYZED_CATEGORIES: Final[frozenset[FileCategory]] = frozenset(
    {FileCategory.COMPONENT, FileCategory.ROUTE, FileCategory.UTIL}
)


def _markers(tag: str) -> MarkerPair:
    return {
        "start": f"<!-- AUTO-UPDATE-{tag} -->",
        "end": f"<!-- AUTO-UPDATE-{tag}-END -->",
    }


SECTION_MARKERS: Final[Mapping[SectionKind, MarkerPair]] = {
    SectionKind.COMPONENTS: _markers("COMPONENTS"),
    SectionKind.TEST_FILES: _markers("TEST-FILES"),
    SectionKind.ROUTES: _markers("ROUTES"),
    SectionKind.LIB_FILES: _markers("LIB-FILES"),
    SectionKind.ROOT_FILES: _markers("ROOT-FILES"),
    SectionKind.ARCHITECTURE: _markers("ARCHITECTURE"),
}

# Shown in place of an empty list so no region is ever left blank.
PLACEHOLDERS: Final[Mapping[SectionKind, str]] = {
    SectionKind.COMPONENTS: "(no components yet)",
    SectionKind.TEST_FILES: "(no test files yet)",
    SectionKind.ROUTES: "(no API routes yet)",
    SectionKind.LIB_FILES: "(no lib files yet)",
    SectionKind.ROOT_FILES: "(no extra files yet)",
}

# The architecture diagram shows at most this many component nodes.
ARCHITECTURE_NODE_LIMIT: Final[int] = 5
