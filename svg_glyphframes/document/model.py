"""Document data model: styles, content nodes and frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class FontStyle(str, Enum):
    UPRIGHT = "upright"
    ITALIC = "italic"
    OBLIQUE = "oblique"


@dataclass(frozen=True)
class Style:
    """Text style with independently optional fields.

    ``None`` means "inherit"; once a style is fully resolved it means
    "engine default applies". Variation entries set to ``None`` reset the
    axis to its default value.
    """

    font_family: str | None = None
    font_weight: int | None = None
    font_width: int | None = None
    font_style: FontStyle | None = None
    font_size: float | None = None
    color: str | None = None
    lang: str | None = None
    font_feature_settings: dict[str, int] = field(default_factory=dict)
    font_variation_settings: dict[str, float | None] = field(default_factory=dict)

    def merge(self, other: Style) -> Style:
        """Cascade ``other`` over this style.

        Scalar fields set on ``other`` win. The feature and variation maps
        are unioned, with ``other``'s entries replacing same-keyed ones.
        """
        return Style(
            font_family=_pick(other.font_family, self.font_family),
            font_weight=_pick(other.font_weight, self.font_weight),
            font_width=_pick(other.font_width, self.font_width),
            font_style=_pick(other.font_style, self.font_style),
            font_size=_pick(other.font_size, self.font_size),
            color=_pick(other.color, self.color),
            lang=_pick(other.lang, self.lang),
            font_feature_settings={
                **self.font_feature_settings,
                **other.font_feature_settings,
            },
            font_variation_settings={
                **self.font_variation_settings,
                **other.font_variation_settings,
            },
        )

    def variations(self) -> dict[str, float]:
        """Variation axes with explicit values (default entries dropped)."""
        return {
            tag: value
            for tag, value in self.font_variation_settings.items()
            if value is not None
        }


def _pick(override, base):
    return override if override is not None else base


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class StyleChange:
    style: Style


@dataclass(frozen=True)
class Embed:
    children: tuple[ContentNode, ...] = ()


ContentNode = Union[Text, StyleChange, Embed]


class HorizontalAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def factor(self) -> float:
        return _ALIGN_FACTORS[self.value]


class VerticalAlign(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"

    @property
    def factor(self) -> float:
        return _ALIGN_FACTORS[self.value]


_ALIGN_FACTORS = {
    "left": 0.0,
    "top": 0.0,
    "center": 0.5,
    "right": 1.0,
    "bottom": 1.0,
}


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class WritingMode(str, Enum):
    """Reading direction / line flow direction pairs."""

    LR_TB = "lr-tb"
    RL_TB = "rl-tb"
    LR_BT = "lr-bt"
    RL_BT = "rl-bt"
    TB_RL = "tb-rl"
    TB_LR = "tb-lr"
    BT_LR = "bt-lr"
    BT_RL = "bt-rl"

    @property
    def reading(self) -> str:
        return self.value.split("-")[0]

    @property
    def flow(self) -> str:
        return self.value.split("-")[1]

    @property
    def is_vertical(self) -> bool:
        return self.reading in ("tb", "bt")

    @classmethod
    def parse(cls, value: str) -> WritingMode:
        key = value.strip().lower()
        key = _WRITING_MODE_ALIASES.get(key, key)
        return cls(key)


_DIRECTION_WORDS = {
    "left-to-right": "lr",
    "right-to-left": "rl",
    "top-to-bottom": "tb",
    "bottom-to-top": "bt",
}

_WRITING_MODE_ALIASES = {
    "horizontal-tb": "lr-tb",
    "vertical-rl": "tb-rl",
    "vertical-lr": "tb-lr",
    **{
        f"{reading}/{flow}": f"{_DIRECTION_WORDS[reading]}-{_DIRECTION_WORDS[flow]}"
        for reading in _DIRECTION_WORDS
        for flow in _DIRECTION_WORDS
    },
}


@dataclass
class Frame:
    """A rectangular region of the canvas holding one content tree.

    Unset edges default to the canvas edges.
    """

    contents: ContentNode
    left: float | None = None
    top: float | None = None
    right: float | None = None
    bottom: float | None = None
    title: str | None = None
    desc: str | None = None
    text_align: TextAlign = TextAlign.LEFT
    writing_mode: WritingMode = WritingMode.LR_TB
    horizontal_align: HorizontalAlign = HorizontalAlign.LEFT
    vertical_align: VerticalAlign = VerticalAlign.TOP
    line_height: float = 1.5
    baseline_offset: float = 0.8
    copyable: bool = False

    def resolve_rect(
        self, canvas_width: float, canvas_height: float
    ) -> tuple[float, float, float, float]:
        """Return (left, top, right, bottom) with unset edges filled in."""
        return (
            self.left if self.left is not None else 0.0,
            self.top if self.top is not None else 0.0,
            self.right if self.right is not None else canvas_width,
            self.bottom if self.bottom is not None else canvas_height,
        )


@dataclass
class Document:
    width: float = 1024.0
    height: float = 1024.0
    font_files: list[str] = field(default_factory=list)
    frames: list[Frame] = field(default_factory=list)
