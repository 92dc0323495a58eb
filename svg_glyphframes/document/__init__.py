"""Document model, JSON decoding and style-run analysis."""

from svg_glyphframes.document.analyzer import StyleRun, StyleRunBuilder, build_style_runs
from svg_glyphframes.document.decode import decode_document, load_document
from svg_glyphframes.document.model import (
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

__all__ = [
    "Document",
    "Embed",
    "FontStyle",
    "Frame",
    "HorizontalAlign",
    "Style",
    "StyleChange",
    "StyleRun",
    "StyleRunBuilder",
    "Text",
    "TextAlign",
    "VerticalAlign",
    "WritingMode",
    "build_style_runs",
    "decode_document",
    "load_document",
]
