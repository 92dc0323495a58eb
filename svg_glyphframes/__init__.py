"""svg-glyphframes: render framed, styled text documents to SVG.

Every glyph outline is stored once as a ``<path>`` in ``<defs>`` and placed
with ``<use>`` references, so repeated glyphs cost one small element each.
Text is shaped with HarfBuzz, laid out per frame (alignment, bidi, vertical
writing modes) and coloured per style.

Example:
    >>> from svg_glyphframes import GlyphFramesConverter
    >>> converter = GlyphFramesConverter()
    >>> converter.convert_file("document.json", "document.svg")
"""

from svg_glyphframes.api import ConversionResult, GlyphFramesConverter
from svg_glyphframes.config import Config
from svg_glyphframes.exceptions import (
    DocumentDecodeError,
    DocumentIOError,
    FontNotFoundError,
    GlyphFramesError,
    LayoutError,
)
from svg_glyphframes.fonts.cache import FontCache

__version__ = "0.1.0"

__all__ = [
    # Main API
    "GlyphFramesConverter",
    "ConversionResult",
    "Config",
    # Font handling
    "FontCache",
    # Exceptions
    "GlyphFramesError",
    "DocumentDecodeError",
    "LayoutError",
    "FontNotFoundError",
    "DocumentIOError",
    # Metadata
    "__version__",
]
