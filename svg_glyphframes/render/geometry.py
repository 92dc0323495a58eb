"""Glyph outline events and their conversion to SVG path data.

Outlines arrive as a closed set of events (figure start, straight lines,
cubic curves, figure end) in run coordinates. ``OutlineToPath`` scales
them back to font design units, quantizes to 1/256 unit and writes compact
path data. Identical glyphs at the same scale therefore produce identical
strings, which is what path interning relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from fontTools.pens.basePen import BasePen

COORD_RESOLUTION = 256.0

Point = tuple[float, float]


@dataclass(frozen=True)
class BeginFigure:
    point: Point


@dataclass(frozen=True)
class AddLines:
    points: tuple[Point, ...]


@dataclass(frozen=True)
class AddCubic:
    p1: Point
    p2: Point
    p3: Point


@dataclass(frozen=True)
class EndFigure:
    closed: bool


OutlineEvent = Union[BeginFigure, AddLines, AddCubic, EndFigure]


class OutlineEventPen(BasePen):
    """fontTools pen recording drawing calls as outline events.

    Quadratic segments are raised to cubics by ``BasePen``.
    """

    def __init__(self, glyphSet=None) -> None:
        super().__init__(glyphSet)
        self.events: list[OutlineEvent] = []

    def _moveTo(self, pt):
        self.events.append(BeginFigure(tuple(pt)))

    def _lineTo(self, pt):
        self.events.append(AddLines((tuple(pt),)))

    def _curveToOne(self, pt1, pt2, pt3):
        self.events.append(AddCubic(tuple(pt1), tuple(pt2), tuple(pt3)))

    def _closePath(self):
        self.events.append(EndFigure(closed=True))

    def _endPath(self):
        self.events.append(EndFigure(closed=False))


def format_coord(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    return repr(value)


class OutlineToPath:
    """Accumulate path data for one glyph at a time.

    Args:
        scalar: Factor from run coordinates to design units
            (design units per em / em size).
    """

    def __init__(self, scalar: float) -> None:
        self.scalar = scalar
        self._parts: list[str] = []
        self._last: Point = (0.0, 0.0)

    def reset(self) -> str:
        """Return the accumulated path data and start a new glyph."""
        body = " ".join(self._parts)
        self._parts = []
        self._last = (0.0, 0.0)
        return body

    def process_coord(self, value: float) -> float:
        return round(value * self.scalar * COORD_RESOLUTION) / COORD_RESOLUTION

    def consume(self, events: Iterable[OutlineEvent]) -> None:
        for event in events:
            self.feed(event)

    def feed(self, event: OutlineEvent) -> None:
        if isinstance(event, BeginFigure):
            self._emit("M", event.point)
            self._last = event.point
        elif isinstance(event, AddLines):
            for point in event.points:
                self._emit("L", point)
                self._last = point
        elif isinstance(event, AddCubic):
            self._add_cubic(event.p1, event.p2, event.p3)
        elif isinstance(event, EndFigure):
            if event.closed:
                self._parts.append("Z")
        else:
            raise TypeError(f"Unknown outline event: {event!r}")

    def _emit(self, command: str, *points: Point) -> None:
        coords = []
        for x, y in points:
            coords.append(format_coord(self.process_coord(x)))
            coords.append(format_coord(self.process_coord(y)))
        self._parts.append(f"{command} {' '.join(coords)}")

    def _add_cubic(self, p1: Point, p2: Point, p3: Point) -> None:
        x0, y0 = self._last
        # Quadratic control point implied by each cubic control point
        xm1 = x0 + (p1[0] - x0) * 1.5
        ym1 = y0 + (p1[1] - y0) * 1.5
        xm2 = p3[0] + (p2[0] - p3[0]) * 1.5
        ym2 = p3[1] + (p2[1] - p3[1]) * 1.5

        # Tolerance is checked in output units, before quantization.
        scale = self.scalar * COORD_RESOLUTION
        if abs(xm2 - xm1) * scale < 1.0 and abs(ym2 - ym1) * scale < 1.0:
            self._emit("Q", ((xm1 + xm2) / 2.0, (ym1 + ym2) / 2.0), p3)
        else:
            self._emit("C", p1, p2, p3)
        self._last = p3
