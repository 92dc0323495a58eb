"""Glyph outline conversion, path interning and SVG composition.

This subpackage provides:
- Outline events to SVG path data with quadratic recovery
- Document-wide path interning
- Run and frame composition into the output SVG tree
"""

from svg_glyphframes.render.composer import (
    DocumentComposer,
    FrameRecord,
    compute_frame_offset,
)
from svg_glyphframes.render.compositor import PlacedGlyph, RunCompositor, RunRecord
from svg_glyphframes.render.geometry import (
    AddCubic,
    AddLines,
    BeginFigure,
    EndFigure,
    OutlineEventPen,
    OutlineToPath,
)
from svg_glyphframes.render.store import PathStore

__all__ = [
    "AddCubic",
    "AddLines",
    "BeginFigure",
    "DocumentComposer",
    "EndFigure",
    "FrameRecord",
    "OutlineEventPen",
    "OutlineToPath",
    "PathStore",
    "PlacedGlyph",
    "RunCompositor",
    "RunRecord",
    "compute_frame_offset",
]
