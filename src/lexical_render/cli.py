"""Command-line interface for lexical_render."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from lexical_render import __version__
from lexical_render.config import MAX_DEPTH_CEILING, get_settings
from lexical_render.core.pipeline import LexicalRenderer
from lexical_render.diagnostics import configure_logging
from lexical_render.formats import SUPPORTED_FORMATS, get_serializer

app = typer.Typer(
    name="lexical-render",
    help="Render serialized rich-text editor documents to HTML, Markdown or plain text.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"lexical-render v{__version__}")
        raise typer.Exit()


def read_content(path: Path) -> str:
    """Read a document from a file, or from stdin when path is '-'."""
    if str(path) == "-":
        return typer.get_text_stream("stdin").read()
    return path.read_text(encoding="utf-8")


def resolve_format(output_format: Optional[str], output: Optional[Path]) -> str:
    """Pick the output format: explicit flag, then output extension, then HTML."""
    if output_format:
        return output_format
    if output is not None and output.suffix:
        return output.suffix
    return "html"


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="JSON document to render, or '-' to read from stdin",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of stdout",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {', '.join(SUPPORTED_FORMATS)} "
        "(default: from the output extension, else html)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=1,
        max=MAX_DEPTH_CEILING,
        help="Deepest nesting level to render (default: 64)",
    ),
    excerpt: bool = typer.Option(
        False,
        "--excerpt",
        "-e",
        help="Print a one-line excerpt instead of rendering",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 if the document cannot be parsed",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every recovered problem",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render an editor document.

    Examples:

        lexical-render post.json

        lexical-render post.json -o post.md

        cat post.json | lexical-render - --format text

        lexical-render post.json --excerpt
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, console=err_console)

    if str(path) != "-" and not path.is_file():
        console.print(f"[red]Error:[/red] File not found: {escape(str(path))}")
        raise typer.Exit(1)

    try:
        content = read_content(path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error reading {escape(str(path))}:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    renderer = LexicalRenderer(settings=settings, max_depth=max_depth)

    if excerpt:
        typer.echo(renderer.excerpt(content))
        raise typer.Exit(0)

    try:
        serializer = get_serializer(resolve_format(output_format, output))()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    document = renderer.render(content)

    if verbose:
        console.print(
            f"[blue]Rendered:[/blue] {len(document.children)} block(s), "
            f"{len(document.diagnostics)} diagnostic(s)"
        )

    if output is not None:
        serializer.write(document, output)
        console.print(f"[green]Success:[/green] {escape(str(output))}")
    else:
        typer.echo(serializer.serialize(document))

    if not document.ok:
        console.print(
            f"[yellow]Warning:[/yellow] document could not be loaded "
            f"({escape(str(document.error))})"
        )
        raise typer.Exit(1 if strict else 0)

    raise typer.Exit(0)


if __name__ == "__main__":
    app()
