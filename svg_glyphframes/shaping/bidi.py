"""Bidirectional text levels and visual reordering.

Levels come from python-bidi's implementation of the Unicode Bidirectional
Algorithm (rules X1-X10, W1-W7, N1-N2 and I1-I2). Reordering (rule L2) is
done here over already-shaped items, not over the characters.
"""

from __future__ import annotations

from bidi.algorithm import (
    explicit_embed_and_overrides,
    get_embedding_levels,
    get_empty_storage,
    resolve_implicit_levels,
    resolve_neutral_types,
    resolve_weak_types,
)


def resolve_levels(text: str, base_level: int = 0) -> list[int]:
    """Embedding level for every character of one paragraph."""
    if not text:
        return []
    base_level = base_level % 2
    storage = get_empty_storage()
    storage["base_level"] = base_level
    storage["base_dir"] = ("L", "R")[base_level]
    get_embedding_levels(text, storage)
    chars = list(storage["chars"])
    explicit_embed_and_overrides(storage, False)
    resolve_weak_types(storage, False)
    resolve_neutral_types(storage, False)
    resolve_implicit_levels(storage, False)

    # Rule X9 drops embedding controls from storage; they take the previous level
    kept = {id(ch) for ch in storage["chars"]}
    levels: list[int] = []
    for ch in chars:
        if id(ch) in kept:
            levels.append(ch["level"])
        else:
            levels.append(levels[-1] if levels else base_level)
    return levels


def reorder_visual(levels: list[int]) -> list[int]:
    """Visual order of items with the given levels (rule L2).

    Returns:
        Indices into ``levels``, left to right
    """
    order = list(range(len(levels)))
    if not levels:
        return order
    highest = max(levels)
    lowest = min(levels)
    lowest_odd = lowest if lowest % 2 else lowest + 1
    for level in range(highest, lowest_odd - 1, -1):
        i = 0
        while i < len(order):
            if levels[order[i]] < level:
                i += 1
                continue
            j = i
            while j < len(order) and levels[order[j]] >= level:
                j += 1
            order[i:j] = order[i:j][::-1]
            i = j
    return order
