"""Command modules for the mobiledoc CLI."""

from mobiledoc.cli.commands import document

__all__ = ["document"]
