"""HarfBuzz shaping of a single item (one face, one style, one direction)."""

from __future__ import annotations

from dataclasses import dataclass

import uharfbuzz as hb

from svg_glyphframes.exceptions import LayoutError
from svg_glyphframes.fonts.face import FontFace


@dataclass
class ShapedGlyph:
    """A shaped glyph in logical order, sized in run units.

    ``advance_offset`` points along the advance direction and
    ``ascender_offset`` points up, as in DirectWrite glyph offsets.
    """

    glyph_index: int
    cluster: int
    advance: float
    advance_offset: float = 0.0
    ascender_offset: float = 0.0


def shape_text(
    face: FontFace,
    text: str,
    em_size: float,
    is_rtl: bool = False,
    features: dict[str, int] | None = None,
    variations: dict[str, float] | None = None,
    language: str | None = None,
) -> list[ShapedGlyph]:
    """Shape ``text`` with one face.

    Clusters are character indices into ``text``.

    Raises:
        LayoutError: If HarfBuzz rejects the input
    """
    if not text:
        return []
    try:
        buf = hb.Buffer()
        buf.add_codepoints([ord(ch) for ch in text])
        buf.direction = "rtl" if is_rtl else "ltr"
        if language:
            buf.language = language
        buf.guess_segment_properties()
        hb.shape(face.hb_font(variations), buf, features or {})
    except (ValueError, RuntimeError, TypeError) as e:
        raise LayoutError(f"Shaping failed with {face!r}: {e}") from e

    scale = em_size / face.units_per_em
    glyphs = []
    for info, pos in zip(buf.glyph_infos, buf.glyph_positions):
        x_offset = pos.x_offset * scale
        glyphs.append(
            ShapedGlyph(
                glyph_index=info.codepoint,
                cluster=info.cluster,
                advance=pos.x_advance * scale,
                advance_offset=-x_offset if is_rtl else x_offset,
                ascender_offset=pos.y_offset * scale,
            )
        )
    # HarfBuzz returns right-to-left runs in visual order
    if is_rtl:
        glyphs.reverse()
    return glyphs
