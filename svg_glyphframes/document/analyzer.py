"""Flatten a content tree into a text buffer and style runs.

Run offsets are UTF-16 code units, matching what text layout engines
consume. Zero-length runs are recorded as-is; consumers skip any run with
``end <= start``.
"""

from __future__ import annotations

from dataclasses import dataclass

from svg_glyphframes.document.model import ContentNode, Embed, Style, StyleChange, Text


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


@dataclass
class StyleRun:
    start: int
    end: int
    style: Style

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


class StyleRunBuilder:
    """Walk content nodes and collect (text, style runs).

    A style change cascades over the current scope's style and opens a new
    run. An embed starts from the enclosing style; whatever it changes is
    dropped when it ends and trailing siblings resume the outer style.
    """

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._length = 0
        self._style = Style()
        self.runs: list[StyleRun] = [StyleRun(0, 0, self._style)]

    def analyze(self, node: ContentNode) -> None:
        self._style = self._visit(node, self._style)

    def finish(self) -> tuple[str, list[StyleRun]]:
        return "".join(self._chunks), list(self.runs)

    def _visit(self, node: ContentNode, style: Style) -> Style:
        if isinstance(node, Text):
            self._chunks.append(node.text)
            self._length += utf16_length(node.text)
            self._sync_run_length()
            return style
        if isinstance(node, StyleChange):
            merged = style.merge(node.style)
            self._start_run(merged)
            return merged
        if isinstance(node, Embed):
            self._sync_run_length()
            inner = style
            self._start_run(inner)
            for child in node.children:
                inner = self._visit(child, inner)
            self._start_run(style)
            return style
        raise TypeError(f"Unknown content node: {node!r}")

    def _sync_run_length(self) -> None:
        self.runs[-1].end = self._length

    def _start_run(self, style: Style) -> None:
        self.runs.append(StyleRun(self._length, self._length, style))


def build_style_runs(node: ContentNode) -> tuple[str, list[StyleRun]]:
    builder = StyleRunBuilder()
    builder.analyze(node)
    return builder.finish()
