"""
Lightweight static analysis of JavaScript/TypeScript source text.

Nothing here parses code. Each extraction is a named regular expression rule
applied to the raw file text, and every rule documents what it cannot see.
The results are a best-effort textual signal for the context document, not a
model of the program: nested braces, multi-line type literals, re-exports and
conditional types are out of reach of the rules.

There are three independent passes:

- HTTP method detection for route handler files (`route.ts` and friends).
- Import and export extraction.
- Props extraction from `interface SomethingProps { ... }` declarations.

The pure text functions can be used directly; `StaticAnalyzer` wraps them with
file access and turns read failures into warnings.
"""

import re
from pathlib import Path
from typing import Final, Mapping

from constants import HTTP_METHODS
from core.diagnostics import DiagnosticsCollector
from core.exceptions import FileReadError
from core.file_io import FileReader, FilesystemFileReader
from core.models import PropDefinition, SourceMetadata


def _http_method_rules(method: str) -> tuple[re.Pattern[str], ...]:
    return (
        # export function GET(   /   export async function GET(
        re.compile(rf"export\s+(?:async\s+)?function\s+{method}\s*\(", re.IGNORECASE),
        # export const GET = (   /   = async (   /   = async function
        # Misses handlers wrapped in a call, e.g. `export const GET = withAuth(...)`.
        re.compile(
            rf"export\s+const\s+{method}\s*=\s*(?:async\s*)?(?:\(|function\b)",
            re.IGNORECASE,
        ),
        # export const GET: Handler = ...
        re.compile(rf"export\s+(?:async\s+)?const\s+{method}\s*:", re.IGNORECASE),
    )


HTTP_METHOD_RULES: Final[Mapping[str, tuple[re.Pattern[str], ...]]] = {
    method: _http_method_rules(method) for method in HTTP_METHODS
}

# import { a, b } from "x"   /   import X from "x"
# Mixed default + named imports (`import X, { a } from "x"`), namespace imports
# and side-effect imports are not captured.
IMPORT_RULE: Final[re.Pattern[str]] = re.compile(
    r"""import\s+(?:\{([^}]+)\}|(\w+))\s+from\s+['"]([^'"]+)['"]"""
)

# export [default] [async] function|const|interface|type Name
# Export lists (`export { a, b }`) and classes are not captured.
EXPORT_RULE: Final[re.Pattern[str]] = re.compile(
    r"export\s+(?:default\s+)?(?:async\s+)?(?:function|const|interface|type)\s+(\w+)"
)

# interface CardProps [extends Base] { ... }
# The body ends at the first closing brace, so members with object literal
# types truncate the body.
PROPS_RULE: Final[re.Pattern[str]] = re.compile(
    r"interface\s+(\w*Props)\s*(?:extends\s+[^{]+)?\{([^}]*)\}"
)

# name: type   /   name?: type
PROP_MEMBER_RULE: Final[re.Pattern[str]] = re.compile(r"(\w+)(\?)?\s*:\s*(.+)", re.DOTALL)

_PROP_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"[;\n]")
_COMMENT: Final[re.Pattern[str]] = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)


def detect_http_methods(text: str) -> list[str]:
    """
    Return the HTTP verbs for which the text exports a handler.

    Matching is case-insensitive. Verbs are returned in the fixed order of
    `HTTP_METHODS`, uppercased, each at most once.

    Example:
        >>> detect_http_methods("export async function GET(req) {}")
        ['GET']
    """
    return [
        method
        for method, rules in HTTP_METHOD_RULES.items()
        if any(rule.search(text) for rule in rules)
    ]


def extract_imports(text: str) -> list[str]:
    imports: list[str] = []
    for match in IMPORT_RULE.finditer(text):
        named, default = match.group(1), match.group(2)
        if named:
            imports.extend(
                " ".join(name.split()) for name in named.split(",") if name.strip()
            )
        elif default:
            imports.append(default)
    return imports


def extract_exports(text: str) -> list[str]:
    return [match.group(1) for match in EXPORT_RULE.finditer(text)]


def extract_props(text: str) -> list[PropDefinition]:
    """
    Infer prop definitions from every `*Props` interface in the text.

    The interface body is split on semicolons and line breaks. Each statement
    that starts with an identifier followed by an optional `?` and a colon
    becomes a prop; everything after the first colon is its type. Comments and
    statements of any other shape are skipped.
    """
    props: list[PropDefinition] = []
    for match in PROPS_RULE.finditer(text):
        body = _COMMENT.sub("", match.group(2))
        for statement in _PROP_SEPARATOR.split(body):
            member = PROP_MEMBER_RULE.fullmatch(statement.strip())
            if member is None:
                continue
            name, optional, type_text = member.groups()
            props.append(PropDefinition(name, type_text.strip(), optional is None))
    return props


def extract_metadata(text: str) -> SourceMetadata:
    return SourceMetadata(
        imports=extract_imports(text),
        exports=extract_exports(text),
        props=extract_props(text),
    )


class StaticAnalyzer:
    """
    Runs the extraction passes against files on disk.

    A file that cannot be read yields empty results and a single warning; it
    never fails the run.

    Args:
        diagnostics: Collector receiving info and warning entries.
        file_reader: Reader used to load file text. Defaults to FilesystemFileReader.
    """

    def __init__(
        self,
        diagnostics: DiagnosticsCollector,
        file_reader: FileReader | None = None,
    ) -> None:
        self.diagnostics = diagnostics
        self.file_reader = file_reader if file_reader is not None else FilesystemFileReader()

    def analyze_route(self, file_path: Path, display_path: str) -> list[str]:
        content = self._read(file_path, display_path)
        if content is None:
            return []

        methods = detect_http_methods(content)
        self.diagnostics.info(
            f"Route analyzed: {', '.join(methods) or 'no methods'}", display_path
        )
        return methods

    def analyze_source(self, file_path: Path, display_path: str) -> SourceMetadata:
        content = self._read(file_path, display_path)
        if content is None:
            return SourceMetadata()
        return extract_metadata(content)

    def _read(self, file_path: Path, display_path: str) -> str | None:
        try:
            return self.file_reader.read_file(file_path)
        except FileReadError as e:
            self.diagnostics.warning(f"Could not analyze file: {e.reason}", display_path)
            return None
