"""CLI commands for svg-glyphframes."""

from svg_glyphframes.cli.commands.convert import convert
from svg_glyphframes.cli.commands.fonts import fonts

__all__ = ["convert", "fonts"]
