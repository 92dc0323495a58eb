"""Entry point for the ``svg-glyphframes`` command."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from svg_glyphframes import __version__
from svg_glyphframes.cli.commands import convert, fonts
from svg_glyphframes.config import Config
from svg_glyphframes.exceptions import GlyphFramesError

err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    logger = logging.getLogger("svg_glyphframes")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    )
    logger.setLevel(level.upper())
    logger.propagate = False


@click.group()
@click.version_option(__version__, prog_name="svg-glyphframes")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging verbosity (default: from config, else WARNING)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, config_path: Path | None) -> None:
    """Render framed text documents (JSON) to SVG with shared glyph paths."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
    except GlyphFramesError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    log_level = (log_level or config.log_level).upper()
    setup_logging(log_level)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = log_level


cli.add_command(convert)
cli.add_command(fonts)


if __name__ == "__main__":
    cli()
