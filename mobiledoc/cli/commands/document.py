"""Document commands for the mobiledoc CLI."""

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mobiledoc.exceptions import MobiledocError
from mobiledoc.models import Document
from mobiledoc.rendering.exporter import (
    placeholder_atom,
    placeholder_card,
    render_page,
    to_html,
    write_html,
)
from mobiledoc.rendering.options import HtmlConfig, RendererOptions
from mobiledoc.rendering.renderer import Renderer

app = typer.Typer(help="Mobiledoc document commands")
console = Console()
err_console = Console(stderr=True)


def _load(path: Path) -> Document:
    return Document.from_json(path.read_text(encoding="utf-8"))


@app.command("validate")
def validate(
    path: Path = typer.Argument(..., help="Path to a Mobiledoc JSON file"),
):
    """Validate a document and summarize its contents."""
    try:
        doc = _load(path)
    except (MobiledocError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}", highlight=False)
        raise typer.Exit(1)

    kinds = Counter(section.kind.name.lower() for section in doc.sections)

    table = Table("Field", "Value")
    table.add_row("version", doc.version or "")
    table.add_row("markups", str(len(doc.markups)))
    table.add_row("atoms", str(len(doc.atoms)))
    table.add_row("cards", str(len(doc.cards)))
    table.add_row("sections", str(len(doc.sections)))
    for kind, count in sorted(kinds.items()):
        table.add_row(f"  {kind}", str(count))

    console.print(f"[green]Valid:[/green] {path}", highlight=False)
    console.print(table)


@app.command("render")
def render(
    path: Path = typer.Argument(..., help="Path to a Mobiledoc JSON file"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write HTML to this file instead of stdout"
    ),
    page: bool = typer.Option(
        False, "--page", help="Wrap output in a full HTML page"
    ),
    title: str = typer.Option("Mobiledoc", "--title", help="Page title for --page"),
    suppress_errors: bool = typer.Option(
        False,
        "--suppress-errors",
        help="Report renderer errors as warnings and skip the offending nodes",
    ),
):
    """Render a document to HTML; unknown atoms and cards become placeholders."""
    config = HtmlConfig(title=title)

    def report(message: str) -> None:
        err_console.print(f"[yellow]Warning:[/yellow] {message}", highlight=False)

    renderer = Renderer(
        unknown_atom_handler=placeholder_atom(config),
        unknown_card_handler=placeholder_card(config),
        options=RendererOptions(error_handler=report, suppress_errors=suppress_errors),
    )

    try:
        doc = _load(path)
        fragment = to_html(renderer.render(doc).result)
    except (MobiledocError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}", highlight=False)
        raise typer.Exit(1)

    if output is not None:
        written = write_html(fragment, str(output), full_page=page, config=config)
        console.print(f"[green]Saved:[/green] {written}", highlight=False)
        return

    typer.echo(render_page(fragment, config) if page else fragment)
