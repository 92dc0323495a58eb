"""High-level conversion API.

Example:
    >>> from svg_glyphframes import GlyphFramesConverter
    >>> converter = GlyphFramesConverter()
    >>> result = converter.convert_file("poster.json", "poster.svg")
    >>> result.path_count
    42
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from svg_glyphframes.config import Config
from svg_glyphframes.document import Document, StyleRunBuilder, load_document
from svg_glyphframes.exceptions import DocumentIOError
from svg_glyphframes.fonts import FontCache
from svg_glyphframes.render import DocumentComposer, compute_frame_offset
from svg_glyphframes.shaping import TextLayoutEngine

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Rendered SVG plus counts of what went into it."""

    svg: str
    frame_count: int = 0
    run_count: int = 0
    glyph_count: int = 0
    path_count: int = 0


class GlyphFramesConverter:
    """Render framed text documents to SVG.

    Args:
        config: Defaults for unspecified styles and font lookup.
        log_level: Optional level applied to the ``svg_glyphframes`` logger.
    """

    def __init__(self, config: Config | None = None, log_level: str | None = None) -> None:
        self.config = config or Config()
        if log_level:
            logging.getLogger("svg_glyphframes").setLevel(log_level.upper())

    def convert_document(self, document: Document) -> ConversionResult:
        """Lay out every frame and compose the SVG.

        Raises:
            LayoutError: If fonts cannot be loaded or matched, or shaping fails
        """
        font_cache = FontCache(use_fontconfig=self.config.use_fontconfig)
        font_cache.load_patterns(document.font_files)
        engine = TextLayoutEngine(font_cache, self.config)
        composer = DocumentComposer(
            document.width, document.height, default_fill=self.config.default_color
        )

        for index, frame in enumerate(document.frames):
            builder = StyleRunBuilder()
            builder.analyze(frame.contents)
            text, style_runs = builder.finish()

            left, top, right, bottom = frame.resolve_rect(document.width, document.height)
            glyph_runs, metrics = engine.lay_out_text(
                text,
                style_runs,
                (right - left, bottom - top),
                text_align=frame.text_align,
                writing_mode=frame.writing_mode,
                line_height=frame.line_height,
                baseline_offset=frame.baseline_offset,
            )
            offset_x, offset_y = compute_frame_offset(
                document.width, document.height, frame, metrics
            )
            compositor = composer.create_frame_compositor(
                offset_x, offset_y, title=frame.title, desc=frame.desc, copyable=frame.copyable
            )
            records = compositor.compose(glyph_runs)
            logger.debug(
                "Frame %d: %d runs, %d glyphs placed",
                index,
                len(records),
                sum(len(r.glyphs) for r in records),
            )

        svg = composer.to_svg()
        return ConversionResult(
            svg=svg,
            frame_count=len(composer.frames),
            run_count=sum(len(f.runs) for f in composer.frames),
            glyph_count=sum(f.glyph_count for f in composer.frames),
            path_count=len(composer.path_store),
        )

    def convert_string(self, source: str | bytes) -> ConversionResult:
        """Convert a JSON document given as a string.

        Raises:
            DocumentDecodeError: If the document is malformed
            LayoutError: If layout fails
        """
        return self.convert_document(load_document(source))

    def convert_file(
        self, input_path: Path | str, output_path: Path | str | None = None
    ) -> ConversionResult:
        """Convert a JSON document file, optionally writing the SVG.

        The SVG is rendered completely before the output file is opened, so
        a failed conversion never leaves a partial file behind.

        Raises:
            DocumentIOError: If the input cannot be read or the output written
            DocumentDecodeError: If the document is malformed
            LayoutError: If layout fails
        """
        input_path = Path(input_path)
        try:
            source = input_path.read_bytes()
        except OSError as e:
            raise DocumentIOError(f"Cannot read {input_path}: {e}") from e

        result = self.convert_string(source)

        if output_path is not None:
            output_path = Path(output_path)
            try:
                output_path.write_text(result.svg, encoding="utf-8")
            except OSError as e:
                raise DocumentIOError(f"Cannot write {output_path}: {e}") from e
            logger.info("Wrote %s (%d paths)", output_path, result.path_count)
        return result
