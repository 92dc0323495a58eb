"""Font loading and matching.

Faces come from the document's ``fontFiles`` glob patterns. A style is
matched against them by family name, then by nearest weight, width and
slant. When the family is not among the document fonts, fontconfig
(``fc-match``) is asked for an installed face.
"""

from __future__ import annotations

import glob
import logging
import re
import struct
import subprocess
from pathlib import Path

from fontTools.ttLib import TTCollection, TTLibError

from svg_glyphframes.document.model import FontStyle
from svg_glyphframes.exceptions import FontNotFoundError, LayoutError
from svg_glyphframes.fonts.face import FontFace

logger = logging.getLogger(__name__)

COLLECTION_SUFFIXES = (".ttc", ".otc")

GENERIC_FAMILIES = {
    "sans": "sans-serif",
    "sans-serif": "sans-serif",
    "serif": "serif",
    "monospace": "monospace",
    "mono": "monospace",
}

# fontconfig width constants for OpenType usWidthClass 1..9
FC_WIDTHS = {1: 50, 2: 63, 3: 75, 4: 87, 5: 100, 6: 113, 7: 125, 8: 150, 9: 200}


def normalize_family(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", name.lower().lstrip("."))


def _weight_to_style(weight: int) -> str | None:
    """Style name fontconfig uses for a CSS weight."""
    weight_map = {
        100: "Thin",
        200: "ExtraLight",
        300: "Light",
        400: "Regular",
        500: "Medium",
        600: "SemiBold",
        700: "Bold",
        800: "ExtraBold",
        900: "Black",
    }
    return weight_map.get(weight)


def _match_score(face: FontFace, weight: int, width: int, style: FontStyle) -> float:
    score = 0.0
    if face.style != style:
        # italic and oblique substitute for each other before upright does
        score += 500.0 if FontStyle.UPRIGHT not in (face.style, style) else 1000.0
    score += abs(face.width - width) * 100.0
    score += abs(face.weight - weight)
    return score


class FontCache:
    """Faces loaded for one document, plus fontconfig lookups."""

    def __init__(self, use_fontconfig: bool = True) -> None:
        self.use_fontconfig = use_fontconfig
        self.faces: list[FontFace] = []
        self._by_path: dict[tuple[Path, int], FontFace] = {}
        self._fonts: dict[str, FontFace] = {}

    def load_patterns(self, patterns: list[str]) -> int:
        """Load every face of every file matching the glob patterns.

        Returns:
            Number of faces loaded

        Raises:
            LayoutError: If a matched file cannot be read
        """
        count = 0
        for pattern in patterns:
            paths = sorted(glob.glob(pattern, recursive=True))
            if not paths:
                logger.warning("Font pattern %r matched no files", pattern)
            for path in paths:
                if Path(path).is_file():
                    count += len(self.add_font_file(path))
        return count

    def add_font_file(self, path: Path | str) -> list[FontFace]:
        """Load every face of one font file.

        Files fontTools cannot parse are skipped with a warning, so a glob
        may match stray non-font files.

        Raises:
            LayoutError: If the file cannot be read
        """
        path = Path(path)
        try:
            if path.suffix.lower() in COLLECTION_SUFFIXES:
                face_count = len(TTCollection(path, lazy=True).fonts)
            else:
                face_count = 1
            faces = [self._load_face(path, index) for index in range(face_count)]
        except OSError as e:
            raise LayoutError(f"Cannot load font {path}: {e}") from e
        except (TTLibError, KeyError, struct.error) as e:
            logger.warning("Skipping %s: not a supported font (%s)", path, e)
            return []
        self.faces.extend(faces)
        return faces

    def _load_face(self, path: Path, index: int) -> FontFace:
        key = (path.resolve(), index)
        face = self._by_path.get(key)
        if face is None:
            face = FontFace(path, index)
            self._by_path[key] = face
            logger.debug("Loaded %r", face)
        return face

    def get_font(
        self,
        family: str,
        weight: int = 400,
        width: int = 5,
        style: FontStyle = FontStyle.UPRIGHT,
    ) -> FontFace:
        """Resolve a font request to a face.

        Raises:
            FontNotFoundError: If neither document fonts nor fontconfig
                provide a face
        """
        family = GENERIC_FAMILIES.get(family.strip().lower(), family.strip())
        cache_key = f"{family}:{weight}:{width}:{style.value}".lower()
        face = self._fonts.get(cache_key)
        if face is not None:
            return face

        face = self._match_collection(family, weight, width, style)
        if face is None and self.use_fontconfig:
            match = self._match_font_with_fc(family, weight, width, style)
            if match is not None:
                try:
                    face = self._load_face(*match)
                except (OSError, TTLibError, KeyError) as e:
                    logger.warning("fontconfig match %s unusable: %s", match[0], e)
        if face is None and self.faces:
            face = self.faces[0]
            logger.warning("No face for family %r; using %r", family, face)
        if face is None:
            raise FontNotFoundError(family, weight, width, style.value)

        logger.debug("%s -> %r", cache_key, face)
        self._fonts[cache_key] = face
        return face

    def find_fallback(self, codepoint: int) -> FontFace | None:
        """First document face that has a glyph for ``codepoint``."""
        for face in self.faces:
            if face.covers(codepoint):
                return face
        return None

    def _match_collection(
        self, family: str, weight: int, width: int, style: FontStyle
    ) -> FontFace | None:
        wanted = normalize_family(family)
        candidates = [
            face
            for face in self.faces
            if any(normalize_family(name) == wanted for name in face.family_names)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda face: _match_score(face, weight, width, style))

    def _match_font_with_fc(
        self, family: str, weight: int, width: int, style: FontStyle
    ) -> tuple[Path, int] | None:
        """Ask fontconfig for the best installed face.

        Returns:
            (font_file_path, face_index) tuple, or None
        """
        patterns = []
        style_name = _weight_to_style(weight)
        if style_name and style == FontStyle.UPRIGHT:
            patterns.append(f"{family}:style={style_name}")

        base = family
        if style == FontStyle.ITALIC:
            base += ":slant=italic"
        elif style == FontStyle.OBLIQUE:
            base += ":slant=oblique"
        if width != 5:
            base += f":width={FC_WIDTHS.get(width, 100)}"
        if style_name and weight != 400:
            base += f":style={style_name}"
        patterns.append(base)

        for pattern in patterns:
            try:
                result = subprocess.run(
                    ["fc-match", "--format=%{file}\\n%{index}", pattern],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
            except FileNotFoundError:
                logger.debug("fc-match is not installed")
                return None
            except subprocess.TimeoutExpired:
                logger.warning("fc-match timed out for %r", pattern)
                continue

            if result.returncode != 0:
                continue
            lines = result.stdout.strip().split("\n")
            if len(lines) >= 2:
                font_file = Path(lines[0])
                font_index = int(lines[1]) if lines[1].isdigit() else 0
                if font_file.exists():
                    return (font_file, font_index)
        return None
