"""Assemble per-frame run records and the shared path catalog into an SVG."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement

from svg_glyphframes.render.compositor import DEFAULT_FILL, RunCompositor, RunRecord
from svg_glyphframes.render.store import PathStore
from svg_glyphframes.render.writer import format_number, to_svg_document

if TYPE_CHECKING:
    from svg_glyphframes.document.model import Frame
    from svg_glyphframes.shaping.layout import LayoutMetrics

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def compute_frame_offset(
    canvas_width: float,
    canvas_height: float,
    frame: Frame,
    metrics: LayoutMetrics,
) -> tuple[float, float]:
    """Offset that moves the measured text block into its frame.

    The text block's alignment anchor (left/center/right, top/center/bottom)
    is matched to the same anchor of the frame rectangle.
    """
    factor_h = frame.horizontal_align.factor
    factor_v = frame.vertical_align.factor
    left, top, right, bottom = frame.resolve_rect(canvas_width, canvas_height)

    text_x = metrics.left + factor_h * metrics.width
    text_y = metrics.top + factor_v * metrics.height
    frame_x = left + factor_h * (right - left)
    frame_y = top + factor_v * (bottom - top)
    return frame_x - text_x, frame_y - text_y


@dataclass
class FrameRecord:
    title: str | None = None
    desc: str | None = None
    copyable: bool = False
    runs: list[RunRecord] = field(default_factory=list)

    @property
    def glyph_count(self) -> int:
        return sum(len(run.glyphs) for run in self.runs)

    def as_element(self, parent: Element, default_fill: str = DEFAULT_FILL) -> Element:
        g = SubElement(parent, "g")
        if self.title is not None:
            SubElement(g, "title").text = self.title
        if self.desc is not None:
            SubElement(g, "desc").text = self.desc
        for run in self.runs:
            run.as_element(g, copyable=self.copyable, default_fill=default_fill)
        return g


class DocumentComposer:
    """Own the document's path catalog and collect frames in order."""

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        default_fill: str = DEFAULT_FILL,
    ) -> None:
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.default_fill = default_fill
        self.path_store = PathStore()
        self.frames: list[FrameRecord] = []

    def create_frame_compositor(
        self,
        offset_x: float,
        offset_y: float,
        title: str | None = None,
        desc: str | None = None,
        copyable: bool = False,
    ) -> RunCompositor:
        """Start a frame; the returned compositor appends runs to it."""
        compositor = RunCompositor(self.path_store, offset_x, offset_y)
        record = FrameRecord(title=title, desc=desc, copyable=copyable, runs=compositor.runs)
        self.frames.append(record)
        return compositor

    def to_element(self) -> Element:
        svg = Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "viewBox": f"0 0 {format_number(self.canvas_width)} "
                f"{format_number(self.canvas_height)}",
                "width": format_number(self.canvas_width),
                "height": format_number(self.canvas_height),
            },
        )
        defs = SubElement(svg, "defs")
        for path_id, path_data in self.path_store.items():
            SubElement(defs, "path", {"id": f"path{path_id}", "d": path_data})
        for frame in self.frames:
            frame.as_element(svg, default_fill=self.default_fill)
        return svg

    def to_svg(self) -> str:
        logger.debug(
            "Composing %d frames with %d shared paths",
            len(self.frames),
            len(self.path_store),
        )
        return to_svg_document(self.to_element())
