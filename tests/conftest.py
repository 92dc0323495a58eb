"""Pytest configuration and shared fixtures for svg-glyphframes tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from svg_glyphframes.config import Config

TEST_FAMILY = "Test Sans"
UNITS_PER_EM = 1000

# glyph name -> advance width in design units
ADVANCES = {
    ".notdef": 500,
    "space": 300,
    "H": 700,
    "e": 550,
    "l": 250,
    "o": 600,
}

CHARACTER_MAP = {
    0x20: "space",
    0x48: "H",
    0x65: "e",
    0x6C: "l",
    0x6F: "o",
}


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def _oval(pen: TTGlyphPen, cx: int, cy: int, rx: int, ry: int) -> None:
    pen.moveTo((cx, cy - ry))
    pen.qCurveTo((cx + rx, cy - ry), (cx + rx, cy))
    pen.qCurveTo((cx + rx, cy + ry), (cx, cy + ry))
    pen.qCurveTo((cx - rx, cy + ry), (cx - rx, cy))
    pen.qCurveTo((cx - rx, cy - ry), (cx, cy - ry))
    pen.closePath()


def _draw_glyphs() -> dict:
    glyphs = {}

    pen = TTGlyphPen(None)
    _rect(pen, 50, 0, 450, 700)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((80, 0))
    pen.lineTo((80, 700))
    pen.lineTo((180, 700))
    pen.lineTo((180, 400))
    pen.lineTo((520, 400))
    pen.lineTo((520, 700))
    pen.lineTo((620, 700))
    pen.lineTo((620, 0))
    pen.lineTo((520, 0))
    pen.lineTo((520, 300))
    pen.lineTo((180, 300))
    pen.lineTo((180, 0))
    pen.closePath()
    glyphs["H"] = pen.glyph()

    pen = TTGlyphPen(None)
    _oval(pen, 275, 250, 225, 250)
    glyphs["e"] = pen.glyph()

    pen = TTGlyphPen(None)
    _rect(pen, 80, 0, 170, 750)
    glyphs["l"] = pen.glyph()

    pen = TTGlyphPen(None)
    _oval(pen, 300, 250, 250, 250)
    glyphs["o"] = pen.glyph()
    return glyphs


def build_test_font(path: Path, family: str = TEST_FAMILY, weight: int = 400) -> Path:
    """Write a small TrueType font covering the letters of "Hello"."""
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(list(ADVANCES))
    fb.setupCharacterMap(CHARACTER_MAP)
    fb.setupGlyf(_draw_glyphs())

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (advance, getattr(glyf[name], "xMin", 0)) for name, advance in ADVANCES.items()}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    style_name = "Bold" if weight >= 700 else "Regular"
    fb.setupNameTable({"familyName": family, "styleName": style_name})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=weight,
    )
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def test_font(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Return the path of the synthetic "Test Sans" font."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "TestSans-Regular.ttf")


@pytest.fixture
def config() -> Config:
    """Return a Config that never consults system fonts."""
    return Config(default_font_family=TEST_FAMILY, use_fontconfig=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a TOML config file matching the ``config`` fixture."""
    path = tmp_path / "config.toml"
    path.write_text(
        f'default_font_family = "{TEST_FAMILY}"\nuse_fontconfig = false\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_document(test_font: Path) -> Callable[..., dict]:
    """Return a factory for document dicts that load the test font."""

    def _make(*frames: dict, width: float = 200, height: float = 100) -> dict:
        return {
            "width": width,
            "height": height,
            "fontFiles": [str(test_font)],
            "frames": list(frames),
        }

    return _make


@pytest.fixture
def hello_document_file(tmp_path: Path, make_document) -> Path:
    """Create a JSON document with one "Hello" frame."""
    doc = make_document(
        {
            "left": 10,
            "top": 20,
            "right": 190,
            "bottom": 80,
            "title": "Greeting",
            "contents": [{"fontFamily": TEST_FAMILY, "fontSize": 24}, "Hello"],
        }
    )
    path = tmp_path / "hello.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
