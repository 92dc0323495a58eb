"""A single loaded font face: fontTools tables, HarfBuzz font and outlines."""

from __future__ import annotations

import logging
from pathlib import Path

import uharfbuzz as hb
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from svg_glyphframes.document.model import FontStyle
from svg_glyphframes.render.geometry import OutlineEvent, OutlineEventPen

logger = logging.getLogger(__name__)

# OS/2 fsSelection bits
FS_ITALIC = 1 << 0
FS_OBLIQUE = 1 << 9
# head.macStyle bits
MAC_ITALIC = 1 << 1


def _variation_key(variations: dict[str, float] | None) -> tuple[tuple[str, float], ...]:
    return tuple(sorted((variations or {}).items()))


class FontFace:
    """One face of a font file.

    Args:
        path: Font file path.
        index: Face index inside a collection file (.ttc/.otc).
    """

    def __init__(self, path: Path | str, index: int = 0) -> None:
        self.path = Path(path)
        self.index = index
        self.ttfont = TTFont(self.path, fontNumber=index, lazy=True)
        with open(self.path, "rb") as f:
            self.blob = f.read()

        self.units_per_em: int = self.ttfont["head"].unitsPerEm
        self.cmap: dict[int, str] = self.ttfont.getBestCmap() or {}

        name_table = self.ttfont["name"]
        names = [name_table.getDebugName(16), name_table.getDebugName(1)]
        self.family_names: list[str] = [n for n in names if n]
        self.family_name = self.family_names[0] if self.family_names else self.path.stem

        os2 = self.ttfont["OS/2"] if "OS/2" in self.ttfont else None
        self.weight: int = os2.usWeightClass if os2 is not None else 400
        self.width: int = os2.usWidthClass if os2 is not None else 5
        fs_selection = os2.fsSelection if os2 is not None else 0
        if fs_selection & FS_OBLIQUE:
            self.style = FontStyle.OBLIQUE
        elif fs_selection & FS_ITALIC or self.ttfont["head"].macStyle & MAC_ITALIC:
            self.style = FontStyle.ITALIC
        else:
            self.style = FontStyle.UPRIGHT

        self._hb_face: hb.Face | None = None
        self._hb_fonts: dict[tuple, hb.Font] = {}
        self._glyph_sets: dict[tuple, object] = {}

    def __repr__(self) -> str:
        return (
            f"FontFace({self.family_name!r}, weight={self.weight}, width={self.width}, "
            f"style={self.style.value}, path={self.path.name}:{self.index})"
        )

    @property
    def is_variable(self) -> bool:
        return "fvar" in self.ttfont

    def covers(self, codepoint: int) -> bool:
        return codepoint in self.cmap

    def clamp_variations(self, variations: dict[str, float] | None) -> dict[str, float]:
        """Keep only axes the face has, clamped to their ranges."""
        if not variations or not self.is_variable:
            return {}
        axes = {axis.axisTag: axis for axis in self.ttfont["fvar"].axes}
        clamped = {}
        for tag, value in variations.items():
            axis = axes.get(tag)
            if axis is None:
                logger.debug("%s has no %r axis", self.family_name, tag)
                continue
            clamped[tag] = min(max(value, axis.minValue), axis.maxValue)
        return clamped

    def hb_font(self, variations: dict[str, float] | None = None) -> hb.Font:
        """HarfBuzz font scaled to design units."""
        variations = self.clamp_variations(variations)
        key = _variation_key(variations)
        font = self._hb_fonts.get(key)
        if font is None:
            if self._hb_face is None:
                self._hb_face = hb.Face(hb.Blob(self.blob), self.index)
            font = hb.Font(self._hb_face)
            font.scale = (self.units_per_em, self.units_per_em)
            if variations:
                font.set_variations(variations)
            self._hb_fonts[key] = font
        return font

    def glyph_set(self, variations: dict[str, float] | None = None):
        variations = self.clamp_variations(variations)
        key = _variation_key(variations)
        glyph_set = self._glyph_sets.get(key)
        if glyph_set is None:
            if variations:
                glyph_set = self.ttfont.getGlyphSet(location=variations)
            else:
                glyph_set = self.ttfont.getGlyphSet()
            self._glyph_sets[key] = glyph_set
        return glyph_set

    def emit_outline(
        self,
        glyph_index: int,
        em_size: float,
        advance: float = 0.0,
        offset: tuple[float, float] = (0.0, 0.0),
        is_sideways: bool = False,
        is_right_to_left: bool = False,
        variations: dict[str, float] | None = None,
    ) -> list[OutlineEvent]:
        """Outline of one glyph in run coordinates (y down, em-size units).

        ``offset`` is (advance offset, ascender offset). Right-to-left glyphs
        extend to the left of the pen position. Sideways glyphs are drawn
        upright; the run rotation turns them.
        """
        scale = em_size / self.units_per_em
        advance_offset, ascender_offset = offset
        if is_right_to_left:
            origin_x = -advance - advance_offset
        else:
            origin_x = advance_offset
        origin_y = -ascender_offset

        glyph_set = self.glyph_set(variations)
        glyph_name = self.ttfont.getGlyphName(glyph_index)
        pen = OutlineEventPen(glyph_set)
        glyph_set[glyph_name].draw(TransformPen(pen, (scale, 0, 0, -scale, origin_x, origin_y)))
        return pen.events
