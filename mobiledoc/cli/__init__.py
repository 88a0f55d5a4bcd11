"""Command line interface for mobiledoc."""
