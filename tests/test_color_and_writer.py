"""Unit tests for svg_glyphframes.render.color and render.writer."""

from xml.etree.ElementTree import Element, SubElement

import pytest

from svg_glyphframes.render.color import ColorEffect, SupportsRGBA, parse_color, to_hex_string
from svg_glyphframes.render.writer import escape_xml, format_number, serialize


class TestParseColor:
    """Tests for parse_color."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#fff", (1.0, 1.0, 1.0, 1.0)),
            ("#000000", (0.0, 0.0, 0.0, 1.0)),
            ("#ff000080", (1.0, 0.0, 0.0, 128 / 255)),
            ("red", (1.0, 0.0, 0.0, 1.0)),
            ("  Blue ", (0.0, 0.0, 1.0, 1.0)),
            ("rgb(255, 0, 0)", (1.0, 0.0, 0.0, 1.0)),
            ("rgba(0, 255, 0, 0.25)", (0.0, 1.0, 0.0, 0.25)),
            ("rgb(100%, 50%, 0%)", (1.0, 0.5, 0.0, 1.0)),
            ("aliceblue", (240 / 255, 248 / 255, 1.0, 1.0)),
            ("YellowGreen", (154 / 255, 205 / 255, 50 / 255, 1.0)),
            ("hsl(120, 100%, 50%)", (0.0, 1.0, 0.0, 1.0)),
            ("hsl(0deg 100% 25%)", (0.5, 0.0, 0.0, 1.0)),
            ("hsla(240, 100%, 50%, 0.5)", (0.0, 0.0, 1.0, 0.5)),
            ("hsl(480, 100%, 50%)", (0.0, 1.0, 0.0, 1.0)),
        ],
    )
    def test_valid_colors(self, value: str, expected: tuple) -> None:
        assert parse_color(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value", ["", "#12", "rgb(1, 2)", "nocolor", "rgb(a, b, c)", "hsl(1, 2)", "hsl(x, 50%, 50%)"]
    )
    def test_invalid_colors(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_color(value)

    def test_hex_round_trip_for_opaque_and_translucent(self) -> None:
        assert to_hex_string(parse_color("#1a2b3c")) == "#1a2b3c"
        assert to_hex_string(parse_color("#1a2b3c4d")) == "#1a2b3c4d"

    def test_color_effect_supports_rgba(self) -> None:
        effect = ColorEffect.from_css("navy")
        assert isinstance(effect, SupportsRGBA)
        assert effect.rgba() == pytest.approx((0.0, 0.0, 128 / 255, 1.0))


class TestEscapeXml:
    """Tests for escape_xml."""

    def test_escapes_markup_characters(self) -> None:
        assert escape_xml("<a & 'b' \"c\">") == "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;"

    def test_escapes_line_breaks(self) -> None:
        assert escape_xml("one\ntwo\rthree") == "one&#xA;two&#xD;three"

    def test_leaves_other_text_alone(self) -> None:
        assert escape_xml("héllo wörld") == "héllo wörld"


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12.0, "12"),
            (0.5, "0.5"),
            (-0.0, "0"),
            (-1e-9, "0"),
            (1 / 3, "0.333333"),
            (48.800000000000004, "48.8"),
            (-7.25, "-7.25"),
        ],
    )
    def test_plain_decimal_output(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestSerialize:
    """Tests for serialize."""

    def test_empty_elements_self_close(self) -> None:
        root = Element("svg", {"width": "1"})
        SubElement(root, "defs")
        assert serialize(root) == '<svg width="1"><defs/></svg>'

    def test_text_and_attributes_are_escaped(self) -> None:
        root = Element("g", {"data-source-text": 'say "hi"\n'})
        SubElement(root, "title").text = "a & b"
        assert serialize(root) == (
            '<g data-source-text="say &quot;hi&quot;&#xA;"><title>a &amp; b</title></g>'
        )
