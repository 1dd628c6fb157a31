"""
Rendering of inventories into the text of the context document.

Every renderer is a pure function of a sorted inventory. List renderers filter
the category they document, so they can be handed a whole inventory, and
return a placeholder instead of an empty string when there is nothing to list.
The architecture diagram is the exception: with no components there is no
diagram, and the empty string tells the section updater to leave that region
alone.
"""

from typing import Iterable, Sequence

from constants import ARCHITECTURE_NODE_LIMIT, PLACEHOLDERS
from core.models import FileRecord
from models import FileCategory, SectionKind


def _of_category(records: Iterable[FileRecord], category: FileCategory) -> list[FileRecord]:
    return [record for record in records if record.category == category]


def _bullet(record: FileRecord) -> str:
    return f"- **{record.name}** - `{record.relative_path}`"


def _bullets(records: Sequence[FileRecord], section: SectionKind) -> str:
    if not records:
        return PLACEHOLDERS[section]
    return "\n".join(_bullet(record) for record in records)


def render_components(records: Iterable[FileRecord]) -> str:
    components = _of_category(records, FileCategory.COMPONENT)
    if not components:
        return PLACEHOLDERS[SectionKind.COMPONENTS]

    lines = []
    for component in components:
        line = _bullet(component)
        if component.props:
            summary = ", ".join(f"{prop.name}: {prop.type}" for prop in component.props)
            line += f" | Props: {{{summary}}}"
        lines.append(line)
    return "\n".join(lines)


def render_tests(records: Iterable[FileRecord]) -> str:
    return _bullets(_of_category(records, FileCategory.TEST), SectionKind.TEST_FILES)


def render_routes(records: Iterable[FileRecord]) -> str:
    routes = _of_category(records, FileCategory.ROUTE)
    if not routes:
        return PLACEHOLDERS[SectionKind.ROUTES]

    lines = []
    for route in routes:
        methods = f" ({', '.join(route.http_methods)})" if route.http_methods else ""
        lines.append(f"- **{route.relative_path}**{methods}")
    return "\n".join(lines)


def render_lib_files(records: Iterable[FileRecord]) -> str:
    return _bullets(_of_category(records, FileCategory.UTIL), SectionKind.LIB_FILES)


def render_root_files(records: Iterable[FileRecord]) -> str:
    root_files = sorted(
        _of_category(records, FileCategory.OTHER), key=lambda record: record.name
    )
    return _bullets(root_files, SectionKind.ROOT_FILES)


def render_architecture(records: Iterable[FileRecord]) -> str:
    """
    Render a Mermaid graph of the app root and its first components.

    At most `ARCHITECTURE_NODE_LIMIT` components are drawn, in inventory order.

    Returns:
        str: A fenced ```mermaid block, or "" when there are no components.
    """
    components = _of_category(records, FileCategory.COMPONENT)[:ARCHITECTURE_NODE_LIMIT]
    if not components:
        return ""

    lines = ["graph TD", '    Root["🏠 App Layout"]']
    for index, component in enumerate(components):
        node_id = f"C{index}"
        lines.append(f'    {node_id}["📦 {component.name}"]')
        lines.append(f"    Root --> {node_id}")

    diagram = "\n".join(lines)
    return f"```mermaid\n{diagram}\n```"


def render_sections(
    app_records: Sequence[FileRecord],
    lib_records: Sequence[FileRecord],
    root_records: Sequence[FileRecord],
) -> dict[SectionKind, str]:
    """
    Render every region of the context document.

    Args:
        app_records: Inventory of the app tree (components, tests, routes).
        lib_records: Inventory of the lib tree.
        root_records: Inventory of the flat project root.

    Returns:
        dict[SectionKind, str]: Rendered body for each section, in update order.
    """
    renderers = {
        SectionKind.COMPONENTS: lambda: render_components(app_records),
        SectionKind.TEST_FILES: lambda: render_tests(app_records),
        SectionKind.ROUTES: lambda: render_routes(app_records),
        SectionKind.LIB_FILES: lambda: render_lib_files(lib_records),
        SectionKind.ROOT_FILES: lambda: render_root_files(root_records),
        SectionKind.ARCHITECTURE: lambda: render_architecture(app_records),
    }
    return {section: renderers[section]() for section in SectionKind}
