"""Fonts command - inspect the faces a document loads."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg_glyphframes.document import load_document
from svg_glyphframes.exceptions import GlyphFramesError
from svg_glyphframes.fonts import FontCache

console = Console()
err_console = Console(stderr=True)


@click.group()
def fonts() -> None:
    """Font inspection commands."""
    pass


@fonts.command("list")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def list_fonts(document: Path) -> None:
    """List faces loaded from a document's fontFiles patterns."""
    try:
        doc = load_document(document.read_bytes())
        cache = FontCache(use_fontconfig=False)
        cache.load_patterns(doc.font_files)
    except GlyphFramesError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    table = Table(title=f"Fonts in {document.name}")
    table.add_column("Family", style="cyan", no_wrap=True)
    table.add_column("Weight", style="yellow")
    table.add_column("Width", style="yellow")
    table.add_column("Style", style="green")
    table.add_column("Path", style="dim", overflow="fold")

    for face in cache.faces:
        font_path = f"{face.path}:{face.index}" if face.index else str(face.path)
        table.add_row(
            face.family_name,
            str(face.weight),
            str(face.width),
            face.style.value,
            font_path,
        )

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {len(cache.faces)} faces")
