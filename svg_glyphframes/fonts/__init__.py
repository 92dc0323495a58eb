"""Font handling for svg-glyphframes.

This subpackage provides:
- Face loading from document font-file globs (fontTools)
- Family/weight/width/style matching with fontconfig fallback
- Glyph outline emission as outline events
"""

from svg_glyphframes.exceptions import FontNotFoundError
from svg_glyphframes.fonts.cache import FontCache
from svg_glyphframes.fonts.face import FontFace

__all__ = ["FontCache", "FontFace", "FontNotFoundError"]
