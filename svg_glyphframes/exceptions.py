"""Exception hierarchy for svg-glyphframes.

Every failure is fatal for the document being converted: errors propagate
to the caller and no partial output is written.
"""

from __future__ import annotations


class GlyphFramesError(Exception):
    """Base class for all svg-glyphframes errors."""


class DocumentDecodeError(GlyphFramesError):
    """The input document is malformed or a field has the wrong type."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class LayoutError(GlyphFramesError):
    """Shaping or font handling failed while laying out a frame."""


class FontNotFoundError(LayoutError):
    """No loaded or system face satisfies a style's font request."""

    def __init__(
        self,
        family: str,
        weight: int = 400,
        width: int = 5,
        style: str = "upright",
        message: str | None = None,
    ) -> None:
        self.family = family
        self.weight = weight
        self.width = width
        self.style = style
        super().__init__(
            message
            or f"No font found for family={family!r} weight={weight} width={width} style={style}"
        )


class DocumentIOError(GlyphFramesError):
    """The input could not be read or the output could not be written."""
