"""
docextract CLI Application.

Provides a command-line interface for extracting text from documents
and inspecting format detection.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from docextract.config import ParserConfig, get_settings
from docextract.detection import classify_by_content, classify_by_name
from docextract.detection.extension import EXTENSION_TABLE
from docextract.errors import ExtractionError
from docextract.log import configure_logging
from docextract.parser import Parser
from docextract.router import read_path

# Create Typer app
app = typer.Typer(
    name="docextract",
    help="Extract text from PDF, Office, image and structured text documents",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


@app.command()
def parse(
    path: Annotated[Path, typer.Argument(help="Path to the document")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the extracted text to this file"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on invalid input instead of degrading"),
    ] = False,
    max_size: Annotated[
        Optional[int],
        typer.Option("--max-size", help="Maximum input size in bytes"),
    ] = None,
    encoding: Annotated[
        Optional[str],
        typer.Option("--encoding", "-e", help="Declared encoding of text input"),
    ] = None,
    detect_content: Annotated[
        bool,
        typer.Option("--detect-content", help="Let magic bytes override the extension"),
    ] = False,
    require_known: Annotated[
        bool,
        typer.Option("--require-known", help="Refuse files with an unknown extension"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log dispatch details"),
    ] = False,
) -> None:
    """
    Extract text from a document.

    Defaults come from DOCEXTRACT_* environment variables; options
    override them.
    """
    try:
        settings = get_settings()
    except ValueError as e:
        err_console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging("DEBUG" if verbose else settings.log_level, err_console)

    try:
        base = ParserConfig.from_settings(settings)
        overrides: dict[str, object] = {}
        if strict:
            overrides["strict_mode"] = True
        if max_size is not None:
            overrides["max_size"] = max_size
        if encoding is not None:
            overrides["encoding"] = encoding
        config = ParserConfig(**{**base.model_dump(), **overrides})

        parser = Parser(config)
        if require_known:
            parser.ensure_supported(path)

        text = parser.parse_file(path, prefer_content=detect_content)

    except ExtractionError as e:
        err_console.print(f"[red]Extraction Error:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        err_console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1)

    if output:
        output.write_text(text, encoding="utf-8")
        err_console.print(f"[green]Text saved to:[/green] {output}")
    else:
        console.print(text, markup=False, highlight=False)


@app.command()
def detect(
    path: Annotated[Path, typer.Argument(help="Path to the document")],
    content: Annotated[
        bool,
        typer.Option("--content", "-c", help="Also sniff the file's content"),
    ] = False,
) -> None:
    """
    Show the format a path resolves to.
    """
    table = Table(title=str(path))
    table.add_column("Method", style="cyan")
    table.add_column("Format")

    table.add_row("extension", classify_by_name(path).value)

    if content:
        try:
            data = read_path(path)
        except ExtractionError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        table.add_row("content", classify_by_content(data).value)

    console.print(table)


@app.command()
def formats() -> None:
    """
    List supported file extensions and the format each maps to.
    """
    table = Table(title="Supported Formats")
    table.add_column("Extension", style="cyan")
    table.add_column("Format")

    for extension in sorted(EXTENSION_TABLE):
        table.add_row(f".{extension}", EXTENSION_TABLE[extension].value)

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {len(EXTENSION_TABLE)} extensions")


if __name__ == "__main__":
    app()
