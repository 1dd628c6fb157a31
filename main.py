"""
ctxsync CLI Entry Point.

This module implements the command-line interface for ctxsync, a tool that keeps
the living context document of a web-application project (by default
`gemini.md`) in sync with its source tree. It scans the project and rewrites
the marked regions of the document with an up-to-date inventory of:

1.  **Components** found under component areas of `app/`, with the fields of
    their `*Props` interfaces.
2.  **Test files** anywhere under `app/`.
3.  **API routes** under API areas of `app/`, with the HTTP methods their
    `route.ts` handlers export.
4.  **Library files** under `lib/`.
5.  **Root files**: stray source files at the project root.
6.  **Architecture**: a Mermaid diagram of the first components.

Each region lives between a pair of markers such as
`<!-- AUTO-UPDATE-COMPONENTS -->` and `<!-- AUTO-UPDATE-COMPONENTS-END -->`.
Text outside the markers is never touched.

A relative `--doc` is taken relative to `--path`, so the same command works
from any working directory.

Usage:
    $ python main.py --path /path/to/project
    $ python main.py --path /path/to/project --doc docs/context.md --dry-run

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal output, colors, and progress visualization.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich import print as pr
from rich.markup import escape

from constants import DEFAULT_DOCUMENT_NAME
from core.diagnostics import DiagnosticsCollector
from core.sync import sync_context_document

app = typer.Typer()


@app.command()
def main(
    path: Annotated[
        Path,
        typer.Option(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Project root containing the app/ and lib/ trees",
        ),
    ] = Path.cwd(),
    doc: Annotated[
        Path | None,
        typer.Option(
            dir_okay=False,
            help=(
                "Context document to update. A relative path is resolved against "
                f"--path, not the current directory. Defaults to <path>/{DEFAULT_DOCUMENT_NAME}"
            ),
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Scan and render without writing the document."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print warnings, errors and the summary."),
    ] = False,
):
    """
    Update the marked regions of the context document from the project tree.

    Exits with code 0 when no error-level diagnostic was recorded, 1 otherwise.

    Raises:
        typer.Exit: Always, carrying the exit code of the run.
    """
    document_path = doc if doc is not None else path / DEFAULT_DOCUMENT_NAME
    if not document_path.is_absolute():
        document_path = path / document_path

    diagnostics = DiagnosticsCollector(echo_info=not quiet)
    diagnostics.console.rule("[bold]🔄 Updating context document")

    try:
        result = sync_context_document(path, document_path, diagnostics, dry_run=dry_run)
    except Exception as e:  # noqa: BLE001
        # Catch-all for any unexpected errors - ensures users always see
        # a friendly message instead of a raw Python stack trace
        print_unexpected_err(e)

    raise typer.Exit(code=0 if result.success else 1)


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while updating the context document.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {escape(str(e))}")

    pr("\n[yellow]What to do:[/yellow]")
    pr("1. Check that the project root and the document are readable")
    pr("2. Ensure the document's directory is writable")
    pr("3. If the problem persists, please report this issue")

    if e.__cause__:
        pr(f"\nCaused by: {escape(str(e.__cause__))}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
