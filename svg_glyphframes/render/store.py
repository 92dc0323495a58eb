"""Document-wide interning of glyph path data."""

from __future__ import annotations


class PathStore:
    """Map path-data strings to stable 1-based ids.

    Id 0 stands for "no visible outline" and is never stored. Entries are
    kept in first-insertion order and never removed.
    """

    def __init__(self) -> None:
        self._last_id = 0
        self._paths: dict[str, int] = {}

    def intern(self, path_data: str) -> int:
        if not path_data:
            return 0
        path_id = self._paths.get(path_data)
        if path_id is None:
            self._last_id += 1
            path_id = self._last_id
            self._paths[path_data] = path_id
        return path_id

    def items(self) -> list[tuple[int, str]]:
        """Return (id, path data) pairs in insertion order."""
        return [(path_id, path_data) for path_data, path_id in self._paths.items()]

    def __len__(self) -> int:
        return len(self._paths)
