"""Command-line interface for svg-glyphframes."""

from svg_glyphframes.cli.main import cli

__all__ = ["cli"]
