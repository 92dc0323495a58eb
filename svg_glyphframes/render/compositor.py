"""Turn laid-out glyph runs into placed, interned glyph outlines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from xml.etree.ElementTree import Element, SubElement

from svg_glyphframes.render.color import SupportsRGBA, to_hex_string
from svg_glyphframes.render.geometry import OutlineToPath
from svg_glyphframes.render.store import PathStore
from svg_glyphframes.render.writer import format_number

if TYPE_CHECKING:
    from svg_glyphframes.shaping.layout import GlyphRun

logger = logging.getLogger(__name__)

DEFAULT_FILL = "black"


@dataclass
class PlacedGlyph:
    """A glyph outline reference in run-local design-unit space."""

    path_id: int
    offset_x: float
    offset_y: float

    def as_element(self, parent: Element) -> Element:
        return SubElement(
            parent,
            "use",
            {
                "href": f"#path{self.path_id}",
                "transform": f"translate({format_number(self.offset_x)} "
                f"{format_number(self.offset_y)})",
            },
        )


@dataclass
class RunRecord:
    offset_x: float
    offset_y: float
    rotation_degrees: float
    inverse_scale: float
    units_per_em: float
    color: str | None = None
    source_text: str = ""
    glyphs: list[PlacedGlyph] = field(default_factory=list)

    @property
    def transform(self) -> str:
        return (
            f"translate({format_number(self.offset_x)} {format_number(self.offset_y)}) "
            f"rotate({format_number(self.rotation_degrees)}) "
            f"scale({format_number(self.inverse_scale, 9)})"
        )

    def as_element(
        self, parent: Element, copyable: bool = False, default_fill: str = DEFAULT_FILL
    ) -> Element:
        g = SubElement(
            parent,
            "g",
            {
                "transform": self.transform,
                "fill": self.color or default_fill,
                "data-source-text": self.source_text,
            },
        )
        if copyable:
            text = SubElement(
                g,
                "text",
                {
                    "x": "0",
                    "y": "0",
                    "font-size": format_number(self.units_per_em),
                    "fill": "transparent",
                },
            )
            text.text = self.source_text
        for glyph in self.glyphs:
            glyph.as_element(g)
        return g


def orientation_to_degrees(orientation_angle: int, is_sideways: bool) -> float:
    """Rotation for a run: its orientation plus a quarter turn when sideways."""
    if orientation_angle % 90:
        raise ValueError(f"Orientation must be a multiple of 90, got {orientation_angle}")
    quarters = (orientation_angle // 90) % 4
    if is_sideways:
        quarters = (quarters + 1) % 4
    return 90.0 * quarters


def resolve_color(drawing_effect: Any) -> str | None:
    """Hex color of a run's drawing effect, or None when it carries none."""
    if drawing_effect is not None and isinstance(drawing_effect, SupportsRGBA):
        return to_hex_string(drawing_effect.rgba())
    return None


class RunCompositor:
    """Composite glyph runs of one frame.

    Args:
        path_store: Document-wide path catalog.
        offset_x: Frame offset added to every baseline origin.
        offset_y: Frame offset added to every baseline origin.
    """

    def __init__(self, path_store: PathStore, offset_x: float = 0.0, offset_y: float = 0.0) -> None:
        self.path_store = path_store
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.runs: list[RunRecord] = []

    def compose(self, glyph_runs: list[GlyphRun]) -> list[RunRecord]:
        for glyph_run in glyph_runs:
            self.draw_glyph_run(glyph_run)
        return self.runs

    def draw_glyph_run(self, glyph_run: GlyphRun) -> RunRecord:
        face = glyph_run.font_face
        units_per_em = face.units_per_em
        scalar = units_per_em / glyph_run.em_size
        is_rtl = glyph_run.bidi_level % 2 == 1

        run = RunRecord(
            offset_x=glyph_run.baseline_origin_x + self.offset_x,
            offset_y=glyph_run.baseline_origin_y + self.offset_y,
            rotation_degrees=orientation_to_degrees(
                glyph_run.orientation_angle, glyph_run.is_sideways
            ),
            inverse_scale=1.0 / scalar,
            units_per_em=units_per_em,
            color=resolve_color(glyph_run.drawing_effect),
            source_text=glyph_run.source_text,
        )

        sink = OutlineToPath(scalar)
        direction = -1.0 if is_rtl else 1.0
        pen_x = 0.0
        pen_y = 0.0
        for i, glyph_index in enumerate(glyph_run.glyph_indices):
            advance = glyph_run.glyph_advances[i]
            offset = glyph_run.glyph_offsets[i] if glyph_run.glyph_offsets else (0.0, 0.0)
            sink.consume(
                face.emit_outline(
                    glyph_index,
                    glyph_run.em_size,
                    advance=advance,
                    offset=offset,
                    is_sideways=glyph_run.is_sideways,
                    is_right_to_left=is_rtl,
                    variations=glyph_run.variations,
                )
            )
            path_id = self.path_store.intern(sink.reset())
            if path_id > 0:
                run.glyphs.append(
                    PlacedGlyph(path_id, sink.process_coord(pen_x), sink.process_coord(pen_y))
                )
            pen_x += direction * advance

        logger.debug(
            "Run %r: %d glyphs, %d placed, rotation %s",
            glyph_run.source_text,
            len(glyph_run.glyph_indices),
            len(run.glyphs),
            run.rotation_degrees,
        )
        self.runs.append(run)
        return run
