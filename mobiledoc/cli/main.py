#!/usr/bin/env python
"""Command line interface for mobiledoc."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from mobiledoc.cli.commands import document

app = typer.Typer(help="Validate and render Mobiledoc documents")
console = Console()

# Add command groups
app.add_typer(document.app, name="doc")


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logs from the library"
    ),
):
    """Work with Mobiledoc JSON documents."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                markup=False,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
    )
    if verbose:
        logging.getLogger("mobiledoc").setLevel(logging.DEBUG)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
