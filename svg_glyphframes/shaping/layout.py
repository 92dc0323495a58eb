"""Text layout: style runs in, positioned glyph runs and metrics out.

Coordinates are relative to the layout box (the frame rectangle moved to
the origin), y pointing down, in the same units as font sizes. Glyph runs
report their baseline origin; right-to-left runs have their origin at the
right end and advance leftwards.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from svg_glyphframes.config import Config
from svg_glyphframes.document.analyzer import StyleRun
from svg_glyphframes.document.model import FontStyle, Style, TextAlign, WritingMode
from svg_glyphframes.fonts.cache import FontCache
from svg_glyphframes.fonts.face import FontFace
from svg_glyphframes.render.color import ColorEffect
from svg_glyphframes.shaping.bidi import reorder_visual, resolve_levels
from svg_glyphframes.shaping.harfbuzz import ShapedGlyph, shape_text

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATORS = "\n\r  "


@dataclass
class GlyphRun:
    """Glyphs sharing one face, size, direction and drawing effect."""

    baseline_origin_x: float
    baseline_origin_y: float
    font_face: FontFace
    em_size: float
    glyph_indices: list[int]
    glyph_advances: list[float]
    glyph_offsets: list[tuple[float, float]] = field(default_factory=list)
    bidi_level: int = 0
    is_sideways: bool = False
    orientation_angle: int = 0
    drawing_effect: Any = None
    source_text: str = ""
    variations: dict[str, float] = field(default_factory=dict)


@dataclass
class LayoutMetrics:
    left: float
    top: float
    width: float
    height: float
    line_count: int = 0


@dataclass
class _Item:
    start: int
    end: int
    style: Style
    level: int
    face: FontFace
    glyphs: list[ShapedGlyph] = field(default_factory=list)


@dataclass
class _LineRun:
    item: _Item
    start: int
    end: int
    glyphs: list[ShapedGlyph]

    @property
    def width(self) -> float:
        return sum(g.advance for g in self.glyphs)


def _utf16_offsets(text: str) -> list[int]:
    """UTF-16 offset of every character boundary (len(text) + 1 entries)."""
    offsets = [0]
    for ch in text:
        offsets.append(offsets[-1] + (2 if ord(ch) > 0xFFFF else 1))
    return offsets


def _split_paragraphs(text: str) -> list[tuple[int, int]]:
    paragraphs = []
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in PARAGRAPH_SEPARATORS:
            paragraphs.append((start, i))
            if ch == "\r" and i + 1 < len(text) and text[i + 1] == "\n":
                i += 1
            start = i + 1
        i += 1
    paragraphs.append((start, len(text)))
    return paragraphs


class TextLayoutEngine:
    """Shape, break and position text for one frame at a time."""

    def __init__(self, font_cache: FontCache, config: Config | None = None) -> None:
        self.font_cache = font_cache
        self.config = config or Config()
        self._effects: dict[str, ColorEffect] = {}

    def lay_out_text(
        self,
        text: str,
        style_runs: list[StyleRun],
        frame_size: tuple[float, float],
        text_align: TextAlign = TextAlign.LEFT,
        writing_mode: WritingMode = WritingMode.LR_TB,
        line_height: float = 1.5,
        baseline_offset: float = 0.8,
    ) -> tuple[list[GlyphRun], LayoutMetrics]:
        """Lay out ``text`` inside a box of ``frame_size`` (width, height).

        Args:
            text: Text buffer.
            style_runs: Runs over UTF-16 offsets of ``text``; empty runs are
                skipped.
            frame_size: Layout box size.

        Returns:
            (glyph runs, metrics of the laid-out lines)

        Raises:
            LayoutError: If fonts cannot be resolved or shaping fails
        """
        box_width, box_height = frame_size
        line_length = box_height if writing_mode.is_vertical else box_width
        base_level = 1 if writing_mode.reading == "rl" else 0
        char_styles = self._char_styles(text, style_runs)

        glyph_runs: list[GlyphRun] = []
        bounds: list[tuple[float, float]] = []
        line_top = 0.0
        line_count = 0

        for para_start, para_end in _split_paragraphs(text):
            items = self._itemize(text, char_styles, para_start, para_end, base_level)
            lines = self._break_lines(text, items, para_start, para_end, line_length)
            for line_no, (line_start, line_end) in enumerate(lines):
                is_last = line_no == len(lines) - 1
                line_runs = self._line_runs(items, line_start, line_end)
                trailing = self._trailing_whitespace(text, line_runs, line_start, line_end)
                visible = sum(r.width for r in line_runs) - trailing
                if text_align == TextAlign.JUSTIFY and not is_last:
                    visible = self._justify(text, line_runs, line_end, line_length, visible)

                if line_runs:
                    em_max = max(self._em_size(r.item.style) for r in line_runs)
                else:
                    em_max = self._em_size(char_styles[para_start] if para_start < len(text) else Style())
                spacing = line_height * em_max

                u_start = self._line_start(text_align, base_level, line_length, visible)
                pen_u = u_start - trailing if base_level % 2 else u_start
                v_baseline = self._baseline(writing_mode, line_top, spacing, baseline_offset)

                visual = reorder_visual([r.item.level for r in line_runs])
                for index in visual:
                    line_run = line_runs[index]
                    width = line_run.width
                    origin_u = pen_u + width if line_run.item.level % 2 else pen_u
                    pen_u += width
                    if not line_run.glyphs:
                        continue
                    x, y = _to_physical(writing_mode, origin_u, v_baseline, box_width, box_height)
                    glyph_runs.append(self._glyph_run(text, line_run, writing_mode, x, y))

                for u in (u_start, u_start + visible):
                    for v in (line_top, line_top + spacing):
                        bounds.append(_to_physical(writing_mode, u, v, box_width, box_height))
                line_top += spacing
                line_count += 1

        xs = [p[0] for p in bounds]
        ys = [p[1] for p in bounds]
        metrics = LayoutMetrics(
            left=min(xs),
            top=min(ys),
            width=max(xs) - min(xs),
            height=max(ys) - min(ys),
            line_count=line_count,
        )
        logger.debug("Laid out %d lines, %d glyph runs, %s", line_count, len(glyph_runs), metrics)
        return glyph_runs, metrics

    def _char_styles(self, text: str, style_runs: list[StyleRun]) -> list[Style]:
        offsets = _utf16_offsets(text)
        styles = [Style()] * len(text)
        for run in style_runs:
            if run.end <= run.start:
                continue
            start = bisect.bisect_left(offsets, run.start)
            end = bisect.bisect_left(offsets, run.end)
            for i in range(start, min(end, len(text))):
                styles[i] = run.style
        return styles

    def _em_size(self, style: Style) -> float:
        return style.font_size if style.font_size is not None else self.config.default_font_size

    def _face_for(self, style: Style) -> FontFace:
        return self.font_cache.get_font(
            style.font_family or self.config.default_font_family,
            weight=style.font_weight if style.font_weight is not None else 400,
            width=style.font_width if style.font_width is not None else 5,
            style=style.font_style or FontStyle.UPRIGHT,
        )

    def _itemize(
        self,
        text: str,
        char_styles: list[Style],
        start: int,
        end: int,
        base_level: int,
    ) -> list[_Item]:
        levels = resolve_levels(text[start:end], base_level)
        items: list[_Item] = []
        for i in range(start, end):
            style = char_styles[i]
            level = levels[i - start]
            face = self._face_for(style)
            ch = text[i]
            if not face.covers(ord(ch)) and not ch.isspace():
                face = self.font_cache.find_fallback(ord(ch)) or face
            last = items[-1] if items else None
            if (
                last is not None
                and last.style is style
                and last.level == level
                and last.face is face
            ):
                last.end = i + 1
            else:
                items.append(_Item(i, i + 1, style, level, face))

        for item in items:
            style = item.style
            glyphs = shape_text(
                item.face,
                text[item.start : item.end],
                self._em_size(style),
                is_rtl=item.level % 2 == 1,
                features=style.font_feature_settings,
                variations=style.variations(),
                language=style.lang or self.config.default_locale,
            )
            item.glyphs = [replace(g, cluster=g.cluster + item.start) for g in glyphs]
        return items

    def _break_lines(
        self,
        text: str,
        items: list[_Item],
        start: int,
        end: int,
        line_length: float,
    ) -> list[tuple[int, int]]:
        """Greedy line breaking at whitespace."""
        widths = [0.0] * (end - start)
        for item in items:
            for glyph in item.glyphs:
                widths[glyph.cluster - start] += glyph.advance

        segments = []
        seg_start = start
        for i in range(start, end):
            next_is_word = i + 1 < end and not text[i + 1].isspace()
            if text[i].isspace() and next_is_word:
                segments.append((seg_start, i + 1))
                seg_start = i + 1
        segments.append((seg_start, end))

        lines = []
        line_start = start
        line_width = 0.0
        for seg_start, seg_end in segments:
            full = sum(widths[seg_start - start : seg_end - start])
            visible_end = seg_end
            while visible_end > seg_start and text[visible_end - 1].isspace():
                visible_end -= 1
            visible = sum(widths[seg_start - start : visible_end - start])
            if seg_start > line_start and line_width + visible > line_length:
                lines.append((line_start, seg_start))
                line_start = seg_start
                line_width = 0.0
            line_width += full
        lines.append((line_start, end))
        return lines

    def _line_runs(self, items: list[_Item], start: int, end: int) -> list[_LineRun]:
        runs = []
        for item in items:
            if item.end <= start or item.start >= end:
                continue
            glyphs = [g for g in item.glyphs if start <= g.cluster < end]
            runs.append(_LineRun(item, max(item.start, start), min(item.end, end), glyphs))
        return runs

    def _trailing_whitespace(
        self, text: str, line_runs: list[_LineRun], start: int, end: int
    ) -> float:
        visible_end = end
        while visible_end > start and text[visible_end - 1].isspace():
            visible_end -= 1
        return sum(
            g.advance for r in line_runs for g in r.glyphs if g.cluster >= visible_end
        )

    def _justify(
        self,
        text: str,
        line_runs: list[_LineRun],
        end: int,
        line_length: float,
        visible: float,
    ) -> float:
        """Spread spare space over inner spaces; returns the new visible width."""
        visible_end = end
        while visible_end > 0 and text[visible_end - 1].isspace():
            visible_end -= 1
        spaces = [
            (r, i)
            for r in line_runs
            for i, g in enumerate(r.glyphs)
            if g.cluster < visible_end and text[g.cluster] == " "
        ]
        extra = line_length - visible
        if not spaces or extra <= 0:
            return visible
        share = extra / len(spaces)
        for line_run, i in spaces:
            glyph = line_run.glyphs[i]
            line_run.glyphs[i] = replace(glyph, advance=glyph.advance + share)
        return line_length

    def _line_start(
        self, text_align: TextAlign, base_level: int, line_length: float, width: float
    ) -> float:
        rtl = base_level % 2 == 1
        if text_align == TextAlign.CENTER:
            return (line_length - width) / 2.0
        if text_align == TextAlign.RIGHT:
            return 0.0 if rtl else line_length - width
        return line_length - width if rtl else 0.0

    def _baseline(
        self, writing_mode: WritingMode, line_top: float, spacing: float, baseline_offset: float
    ) -> float:
        if _tops_face_flow_start(writing_mode):
            return line_top + baseline_offset * spacing
        return line_top + spacing - baseline_offset * spacing

    def _glyph_run(
        self,
        text: str,
        line_run: _LineRun,
        writing_mode: WritingMode,
        x: float,
        y: float,
    ) -> GlyphRun:
        item = line_run.item
        style = item.style
        if writing_mode.is_vertical:
            orientation = 0 if writing_mode.reading == "tb" else 180
        else:
            orientation = 0
        return GlyphRun(
            baseline_origin_x=x,
            baseline_origin_y=y,
            font_face=item.face,
            em_size=self._em_size(style),
            glyph_indices=[g.glyph_index for g in line_run.glyphs],
            glyph_advances=[g.advance for g in line_run.glyphs],
            glyph_offsets=[(g.advance_offset, g.ascender_offset) for g in line_run.glyphs],
            bidi_level=item.level,
            is_sideways=writing_mode.is_vertical,
            orientation_angle=orientation,
            drawing_effect=self._effect(style.color),
            source_text=text[line_run.start : line_run.end],
            variations=item.face.clamp_variations(style.variations()),
        )

    def _effect(self, color: str | None) -> ColorEffect | None:
        if color is None:
            return None
        effect = self._effects.get(color)
        if effect is None:
            effect = self._effects[color] = ColorEffect.from_css(color)
        return effect


def _tops_face_flow_start(writing_mode: WritingMode) -> bool:
    """Whether glyph ascenders point back towards where lines start."""
    if not writing_mode.is_vertical:
        return writing_mode.flow == "tb"
    if writing_mode.reading == "tb":
        # rotated clockwise: tops face right
        return writing_mode.flow == "rl"
    return writing_mode.flow == "lr"


def _to_physical(
    writing_mode: WritingMode, u: float, v: float, width: float, height: float
) -> tuple[float, float]:
    """Map (along-line, across-lines) to layout box coordinates."""
    if not writing_mode.is_vertical:
        return u, v if writing_mode.flow == "tb" else height - v
    y = u if writing_mode.reading == "tb" else height - u
    x = v if writing_mode.flow == "lr" else width - v
    return x, y
