"""Unit tests for svg_glyphframes.render.compositor and render.composer.

Tests use a stand-in font face so run composition can be checked without
real fonts: advance direction, blank glyphs, rotation, fill colors, frame
offsets and the document structure.
"""

from __future__ import annotations

import pytest
from defusedxml import ElementTree

from svg_glyphframes.document.model import Frame, HorizontalAlign, Text, VerticalAlign
from svg_glyphframes.render.color import ColorEffect
from svg_glyphframes.render.composer import DocumentComposer, compute_frame_offset
from svg_glyphframes.render.compositor import (
    RunCompositor,
    orientation_to_degrees,
    resolve_color,
)
from svg_glyphframes.render.geometry import AddLines, BeginFigure, EndFigure
from svg_glyphframes.render.store import PathStore
from svg_glyphframes.shaping.layout import GlyphRun, LayoutMetrics

SVG = "{http://www.w3.org/2000/svg}"


class FakeFace:
    """Face whose glyph N is a horizontal bar N/10 em long; glyph 0 is blank."""

    units_per_em = 1000

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def emit_outline(
        self,
        glyph_index,
        em_size,
        advance=0.0,
        offset=(0.0, 0.0),
        is_sideways=False,
        is_right_to_left=False,
        variations=None,
    ):
        self.calls.append(
            {"glyph": glyph_index, "sideways": is_sideways, "rtl": is_right_to_left}
        )
        if glyph_index == 0:
            return []
        return [
            BeginFigure((0.0, 0.0)),
            AddLines(((em_size * glyph_index / 10, 0.0),)),
            EndFigure(closed=True),
        ]


def _run(indices, advances, **kwargs) -> GlyphRun:
    params = {
        "baseline_origin_x": 3.0,
        "baseline_origin_y": 4.0,
        "font_face": FakeFace(),
        "em_size": 10.0,
        "glyph_indices": indices,
        "glyph_advances": advances,
    }
    params.update(kwargs)
    return GlyphRun(**params)


class TestRunCompositor:
    """Tests for RunCompositor.draw_glyph_run."""

    def test_left_to_right_pen_advances_right(self) -> None:
        store = PathStore()
        record = RunCompositor(store).draw_glyph_run(_run([1, 2], [5.0, 6.0]))
        assert [(g.path_id, g.offset_x) for g in record.glyphs] == [(1, 0), (2, 500)]
        assert store.items() == [(1, "M 0 0 L 100 0 Z"), (2, "M 0 0 L 200 0 Z")]

    def test_right_to_left_pen_advances_left(self) -> None:
        face = FakeFace()
        record = RunCompositor(PathStore()).draw_glyph_run(
            _run([1, 1], [5.0, 6.0], bidi_level=1, font_face=face)
        )
        assert [g.offset_x for g in record.glyphs] == [0, -500]
        assert all(call["rtl"] for call in face.calls)

    def test_blank_glyphs_advance_but_are_not_placed(self) -> None:
        store = PathStore()
        record = RunCompositor(store).draw_glyph_run(_run([1, 0, 1], [5.0, 2.0, 5.0]))
        assert [(g.path_id, g.offset_x) for g in record.glyphs] == [(1, 0), (1, 700)]
        assert len(store) == 1

    def test_identical_glyphs_across_runs_share_paths(self) -> None:
        store = PathStore()
        compositor = RunCompositor(store)
        compositor.compose([_run([3], [1.0]), _run([3], [1.0], baseline_origin_y=40.0)])
        assert len(store) == 1
        assert len(compositor.runs) == 2

    def test_run_transform_includes_frame_offset_and_inverse_scale(self) -> None:
        record = RunCompositor(PathStore(), 10.0, 20.0).draw_glyph_run(_run([1], [5.0]))
        assert record.transform == "translate(13 24) rotate(0) scale(0.01)"

    def test_sideways_run_is_rotated(self) -> None:
        face = FakeFace()
        record = RunCompositor(PathStore()).draw_glyph_run(
            _run([1], [5.0], is_sideways=True, orientation_angle=180, font_face=face)
        )
        assert record.rotation_degrees == 270
        assert face.calls[0]["sideways"] is True

    def test_run_color_comes_from_drawing_effect(self) -> None:
        record = RunCompositor(PathStore()).draw_glyph_run(
            _run([1], [5.0], drawing_effect=ColorEffect.from_css("#336699"))
        )
        assert record.color == "#336699"

    def test_run_without_effect_has_no_color(self) -> None:
        record = RunCompositor(PathStore()).draw_glyph_run(_run([1], [5.0]))
        assert record.color is None


class TestOrientation:
    """Tests for orientation_to_degrees."""

    @pytest.mark.parametrize(
        ("angle", "sideways", "expected"),
        [
            (0, False, 0),
            (90, False, 90),
            (0, True, 90),
            (180, True, 270),
            (270, True, 0),
            (450, False, 90),
        ],
    )
    def test_quarter_turns(self, angle: int, sideways: bool, expected: float) -> None:
        assert orientation_to_degrees(angle, sideways) == expected

    def test_rejects_non_right_angles(self) -> None:
        with pytest.raises(ValueError):
            orientation_to_degrees(45, False)


class TestResolveColor:
    """Tests for resolve_color."""

    def test_opaque_color(self) -> None:
        assert resolve_color(ColorEffect.from_css("red")) == "#ff0000"

    def test_translucent_color_keeps_alpha(self) -> None:
        assert resolve_color(ColorEffect.from_css("rgba(0, 0, 255, 0.5)")) == "#0000ff80"

    def test_objects_without_rgba_are_ignored(self) -> None:
        assert resolve_color(object()) is None
        assert resolve_color(None) is None


class TestComputeFrameOffset:
    """Tests for compute_frame_offset alignment."""

    def test_top_left(self) -> None:
        frame = Frame(contents=Text(""), left=10.0, top=20.0, right=110.0, bottom=70.0)
        metrics = LayoutMetrics(left=2.0, top=3.0, width=40.0, height=10.0)
        assert compute_frame_offset(500.0, 500.0, frame, metrics) == (8.0, 17.0)

    def test_center_center(self) -> None:
        frame = Frame(
            contents=Text(""),
            left=400.0,
            top=400.0,
            right=600.0,
            bottom=600.0,
            horizontal_align=HorizontalAlign.CENTER,
            vertical_align=VerticalAlign.CENTER,
        )
        metrics = LayoutMetrics(left=0.0, top=0.0, width=96.0, height=16.0)
        assert compute_frame_offset(1024.0, 1024.0, frame, metrics) == (452.0, 492.0)

    def test_bottom_right_uses_canvas_edges(self) -> None:
        frame = Frame(
            contents=Text(""),
            horizontal_align=HorizontalAlign.RIGHT,
            vertical_align=VerticalAlign.BOTTOM,
        )
        metrics = LayoutMetrics(left=0.0, top=0.0, width=50.0, height=30.0)
        assert compute_frame_offset(200.0, 100.0, frame, metrics) == (150.0, 70.0)


class TestDocumentComposer:
    """Tests for DocumentComposer output structure."""

    def _compose(self, **frame_kwargs) -> str:
        composer = DocumentComposer(200.0, 100.0)
        compositor = composer.create_frame_compositor(0.0, 0.0, **frame_kwargs)
        compositor.compose([_run([1, 1], [5.0, 5.0], source_text="a<b")])
        return composer.to_svg()

    def test_defs_precede_frames_and_uses_reference_them(self) -> None:
        svg = self._compose(title="T", desc="D")
        root = ElementTree.fromstring(svg.encode("utf-8"))
        assert root.tag == f"{SVG}svg"
        assert root.get("viewBox") == "0 0 200 100"
        children = list(root)
        assert children[0].tag == f"{SVG}defs"
        paths = children[0].findall(f"{SVG}path")
        assert [p.get("id") for p in paths] == ["path1"]

        frame = children[1]
        assert frame.find(f"{SVG}title").text == "T"
        assert frame.find(f"{SVG}desc").text == "D"
        run = frame.find(f"{SVG}g")
        assert run.get("fill") == "black"
        assert run.get("data-source-text") == "a<b"
        uses = run.findall(f"{SVG}use")
        assert [u.get("href") for u in uses] == ["#path1", "#path1"]
        assert [u.get("transform") for u in uses] == ["translate(0 0)", "translate(500 0)"]

    def test_output_starts_with_xml_declaration(self) -> None:
        svg = self._compose()
        assert svg.startswith('<?xml version="1.0" encoding="UTF-8" standalone="no"?>')
        assert "a&lt;b" in svg

    def test_frames_without_title_have_no_title_element(self) -> None:
        root = ElementTree.fromstring(self._compose().encode("utf-8"))
        assert root[1].find(f"{SVG}title") is None

    def test_copyable_frame_adds_transparent_text(self) -> None:
        root = ElementTree.fromstring(self._compose(copyable=True).encode("utf-8"))
        text = root[1].find(f"{SVG}g").find(f"{SVG}text")
        assert text is not None
        assert text.text == "a<b"
        assert text.get("fill") == "transparent"
        assert text.get("font-size") == "1000"

    def test_default_fill_is_configurable(self) -> None:
        composer = DocumentComposer(10.0, 10.0, default_fill="#123456")
        composer.create_frame_compositor(0.0, 0.0).compose([_run([1], [1.0])])
        root = ElementTree.fromstring(composer.to_svg().encode("utf-8"))
        assert root[1][0].get("fill") == "#123456"

    def test_empty_document(self) -> None:
        root = ElementTree.fromstring(DocumentComposer(10.0, 20.0).to_svg().encode("utf-8"))
        assert root.get("width") == "10"
        assert root.get("height") == "20"
        assert len(root[0]) == 0


class TestCanvasFrameOffset:
    """compute_frame_offset with a frame that leaves every edge unset."""

    def test_full_canvas_frame_centered(self) -> None:
        frame = Frame(
            contents=Text(""),
            horizontal_align=HorizontalAlign.CENTER,
            vertical_align=VerticalAlign.CENTER,
        )
        metrics = LayoutMetrics(left=10.0, top=10.0, width=100.0, height=20.0)
        assert compute_frame_offset(1024.0, 1024.0, frame, metrics) == (452.0, 492.0)
