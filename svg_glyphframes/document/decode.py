"""Decode JSON documents into the document model.

Content nodes are decoded structurally: a string is text, an object is a
style change and an array is an embedded scope.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from svg_glyphframes.document.model import (
    ContentNode,
    Document,
    Embed,
    FontStyle,
    Frame,
    HorizontalAlign,
    Style,
    StyleChange,
    Text,
    TextAlign,
    VerticalAlign,
    WritingMode,
)
from svg_glyphframes.exceptions import DocumentDecodeError
from svg_glyphframes.render.color import parse_color

logger = logging.getLogger(__name__)

FONT_WEIGHT_KEYWORDS = {
    "thin": 100,
    "extralight": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
    "extrabold": 800,
    "black": 900,
}

# CSS font-stretch keywords -> OpenType usWidthClass
FONT_WIDTH_KEYWORDS = {
    "ultra-condensed": 1,
    "extra-condensed": 2,
    "condensed": 3,
    "semi-condensed": 4,
    "normal": 5,
    "semi-expanded": 6,
    "expanded": 7,
    "extra-expanded": 8,
    "ultra-expanded": 9,
}

FONT_STYLE_KEYWORDS = {
    "upright": FontStyle.UPRIGHT,
    "normal": FontStyle.UPRIGHT,
    "italic": FontStyle.ITALIC,
    "oblique": FontStyle.OBLIQUE,
}

_STYLE_KEYS = {
    "fontFamily",
    "fontWeight",
    "fontWidth",
    "fontStyle",
    "fontSize",
    "color",
    "lang",
    "fontFeatureSettings",
    "fontVariationSettings",
}


def load_document(source: str | bytes) -> Document:
    """Parse a JSON document string.

    Raises:
        DocumentDecodeError: If the JSON is malformed or fields have wrong types
    """
    try:
        data = json.loads(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentDecodeError(f"Invalid JSON: {e}") from e
    return decode_document(data)


def decode_document(data: Any) -> Document:
    if not isinstance(data, dict):
        raise DocumentDecodeError("document must be an object")

    width = _number(data.get("width", 1024.0), "width", positive=True)
    height = _number(data.get("height", 1024.0), "height", positive=True)

    font_files = data.get("fontFiles", [])
    if not isinstance(font_files, list) or not all(
        isinstance(p, str) for p in font_files
    ):
        raise DocumentDecodeError("must be a list of strings", "fontFiles")

    key = "frames" if "frames" in data else "body"
    raw_frames = data.get(key, [])
    if not isinstance(raw_frames, list):
        raise DocumentDecodeError("must be a list", key)

    frames = [
        decode_frame(raw, f"{key}[{i}]", width, height)
        for i, raw in enumerate(raw_frames)
    ]
    return Document(width=width, height=height, font_files=font_files, frames=frames)


def decode_frame(data: Any, path: str, canvas_width: float, canvas_height: float) -> Frame:
    if not isinstance(data, dict):
        raise DocumentDecodeError("frame must be an object", path)
    if "contents" not in data:
        raise DocumentDecodeError("missing 'contents'", path)

    frame = Frame(
        contents=decode_content(data["contents"], f"{path}.contents"),
        left=_optional_number(data.get("left"), f"{path}.left"),
        top=_optional_number(data.get("top"), f"{path}.top"),
        right=_optional_number(data.get("right"), f"{path}.right"),
        bottom=_optional_number(data.get("bottom"), f"{path}.bottom"),
        title=_optional_str(data.get("title"), f"{path}.title"),
        desc=_optional_str(data.get("desc"), f"{path}.desc"),
        text_align=_enum(TextAlign, data.get("textAlign", "left"), f"{path}.textAlign"),
        writing_mode=_writing_mode(data.get("writingMode", "lr-tb"), f"{path}.writingMode"),
        horizontal_align=_enum(
            HorizontalAlign, data.get("horizontalAlign", "left"), f"{path}.horizontalAlign"
        ),
        vertical_align=_enum(
            VerticalAlign, data.get("verticalAlign", "top"), f"{path}.verticalAlign"
        ),
        line_height=_number(data.get("lineHeight", 1.5), f"{path}.lineHeight", positive=True),
        baseline_offset=_number(data.get("baselineOffset", 0.8), f"{path}.baselineOffset"),
        copyable=_bool(data.get("copyable", False), f"{path}.copyable"),
    )

    left, top, right, bottom = frame.resolve_rect(canvas_width, canvas_height)
    if right - left <= 0 or bottom - top <= 0:
        raise DocumentDecodeError(
            f"frame rectangle ({left}, {top}, {right}, {bottom}) is empty", path
        )
    return frame


def decode_content(data: Any, path: str) -> ContentNode:
    if isinstance(data, str):
        return Text(data)
    if isinstance(data, list):
        return Embed(
            tuple(decode_content(child, f"{path}[{i}]") for i, child in enumerate(data))
        )
    if isinstance(data, dict):
        return StyleChange(decode_style(data, path))
    raise DocumentDecodeError(
        f"content must be a string, object or array, got {type(data).__name__}", path
    )


def decode_style(data: dict[str, Any], path: str) -> Style:
    for key in data:
        if key not in _STYLE_KEYS:
            logger.debug("Ignoring unknown style field %s.%s", path, key)

    color = _optional_str(data.get("color"), f"{path}.color")
    if color is not None:
        try:
            parse_color(color)
        except ValueError as e:
            raise DocumentDecodeError(str(e), f"{path}.color") from e

    font_size = data.get("fontSize")
    return Style(
        font_family=_optional_str(data.get("fontFamily"), f"{path}.fontFamily"),
        font_weight=_font_weight(data.get("fontWeight"), f"{path}.fontWeight"),
        font_width=_font_width(data.get("fontWidth"), f"{path}.fontWidth"),
        font_style=_font_style(data.get("fontStyle"), f"{path}.fontStyle"),
        font_size=None
        if font_size is None
        else _number(font_size, f"{path}.fontSize", positive=True),
        color=color,
        lang=_optional_str(data.get("lang"), f"{path}.lang"),
        font_feature_settings=_feature_settings(
            data.get("fontFeatureSettings"), f"{path}.fontFeatureSettings"
        ),
        font_variation_settings=_variation_settings(
            data.get("fontVariationSettings"), f"{path}.fontVariationSettings"
        ),
    )


def _number(value: Any, path: str, positive: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DocumentDecodeError(f"expected a number, got {value!r}", path)
    if positive and value <= 0:
        raise DocumentDecodeError(f"must be positive, got {value!r}", path)
    return float(value)


def _optional_number(value: Any, path: str) -> float | None:
    return None if value is None else _number(value, path)


def _optional_str(value: Any, path: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise DocumentDecodeError(f"expected a string, got {value!r}", path)


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise DocumentDecodeError(f"expected a boolean, got {value!r}", path)
    return value


def _enum(enum_cls, value: Any, path: str):
    if not isinstance(value, str):
        raise DocumentDecodeError(f"expected a string, got {value!r}", path)
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise DocumentDecodeError(f"{value!r} is not one of: {allowed}", path) from None


def _writing_mode(value: Any, path: str) -> WritingMode:
    if not isinstance(value, str):
        raise DocumentDecodeError(f"expected a string, got {value!r}", path)
    try:
        return WritingMode.parse(value)
    except ValueError:
        raise DocumentDecodeError(f"unknown writing mode {value!r}", path) from None


def _font_weight(value: Any, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "")
        if key in FONT_WEIGHT_KEYWORDS:
            return FONT_WEIGHT_KEYWORDS[key]
        raise DocumentDecodeError(f"unknown font weight {value!r}", path)
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 1000:
        raise DocumentDecodeError(f"expected an integer in 1..1000, got {value!r}", path)
    return value


def _font_width(value: Any, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, str):
        key = value.strip().lower()
        if key in FONT_WIDTH_KEYWORDS:
            return FONT_WIDTH_KEYWORDS[key]
        raise DocumentDecodeError(f"unknown font width {value!r}", path)
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 9:
        raise DocumentDecodeError(f"expected an integer in 1..9, got {value!r}", path)
    return value


def _font_style(value: Any, path: str) -> FontStyle | None:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in FONT_STYLE_KEYWORDS:
        return FONT_STYLE_KEYWORDS[value.strip().lower()]
    raise DocumentDecodeError(f"unknown font style {value!r}", path)


def _check_tag(tag: Any, path: str) -> str:
    if not isinstance(tag, str) or len(tag) != 4:
        raise DocumentDecodeError(f"OpenType tags have four characters, got {tag!r}", path)
    return tag


def _feature_settings(value: Any, path: str) -> dict[str, int]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentDecodeError("expected an object of tag: integer", path)
    settings = {}
    for tag, setting in value.items():
        _check_tag(tag, path)
        if isinstance(setting, bool):
            setting = int(setting)
        if not isinstance(setting, int) or setting < 0:
            raise DocumentDecodeError(
                f"feature value must be a non-negative integer, got {setting!r}",
                f"{path}.{tag}",
            )
        settings[tag] = setting
    return settings


def _variation_settings(value: Any, path: str) -> dict[str, float | None]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentDecodeError("expected an object of tag: number", path)
    settings: dict[str, float | None] = {}
    for tag, setting in value.items():
        _check_tag(tag, path)
        if setting is None or setting == "default":
            settings[tag] = None
        else:
            settings[tag] = _number(setting, f"{path}.{tag}")
    return settings
