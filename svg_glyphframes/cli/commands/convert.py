"""Convert command - render one document to SVG."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from svg_glyphframes.api import GlyphFramesConverter
from svg_glyphframes.config import Config
from svg_glyphframes.exceptions import GlyphFramesError

err_console = Console(stderr=True)


@click.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output SVG file (default: stdout)",
)
@click.pass_context
def convert(ctx: click.Context, input_file: Path, output_file: Path | None) -> None:
    """Convert a JSON frame document to SVG.

    INPUT: Path to the JSON document.
    """
    obj = ctx.obj or {}
    config = obj.get("config") or Config.load()
    log_level = obj.get("log_level", config.log_level)

    converter = GlyphFramesConverter(config=config, log_level=log_level)
    try:
        result = converter.convert_file(input_file, output_file)
    except GlyphFramesError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    if output_file is None:
        click.echo(result.svg, nl=False)
    else:
        err_console.print(
            f"[green]Wrote[/green] {output_file} "
            f"({result.frame_count} frames, {result.glyph_count} glyphs, "
            f"{result.path_count} paths)"
        )
