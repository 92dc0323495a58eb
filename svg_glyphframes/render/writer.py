"""SVG serialization with strict escaping of text and attribute values."""

from __future__ import annotations

from xml.etree.ElementTree import Element

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
    "&": "&amp;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def escape_xml(text: str) -> str:
    """Escape the five XML-significant characters and line breaks."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def format_number(value: float, ndigits: int = 6) -> str:
    """Format a number as plain decimal text (``12``, ``0.5``, never ``-0``)."""
    value = round(float(value), ndigits)
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    return f"{value:.{ndigits}f}".rstrip("0").rstrip(".")


def serialize(element: Element) -> str:
    parts: list[str] = []
    _write(element, parts)
    return "".join(parts)


def to_svg_document(root: Element) -> str:
    return XML_DECLARATION + serialize(root) + "\n"


def _write(element: Element, parts: list[str]) -> None:
    parts.append(f"<{element.tag}")
    for name, value in element.attrib.items():
        parts.append(f' {name}="{escape_xml(str(value))}"')
    children = list(element)
    if not children and not element.text:
        parts.append("/>")
        return
    parts.append(">")
    if element.text:
        parts.append(escape_xml(element.text))
    for child in children:
        _write(child, parts)
    parts.append(f"</{element.tag}>")
