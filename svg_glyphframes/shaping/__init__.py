"""Text shaping and layout for svg-glyphframes.

This subpackage provides:
- Bidi level resolution and visual reordering
- HarfBuzz shaping of single-face items
- Line breaking, alignment and writing-mode placement of glyph runs
"""

from svg_glyphframes.shaping.bidi import reorder_visual, resolve_levels
from svg_glyphframes.shaping.harfbuzz import ShapedGlyph, shape_text
from svg_glyphframes.shaping.layout import GlyphRun, LayoutMetrics, TextLayoutEngine

__all__ = [
    "GlyphRun",
    "LayoutMetrics",
    "ShapedGlyph",
    "TextLayoutEngine",
    "reorder_visual",
    "resolve_levels",
    "shape_text",
]
