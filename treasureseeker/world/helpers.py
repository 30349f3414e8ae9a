"""Text renderers for the visibility window.

These only read core state. They stand in for the map/marker layer of a
graphical client and are handy for terminal play, logs and debugging.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .caches import Cache
from .cells import Cell
from .window import VisibleCaches

_DEFAULT_SYMBOLS: Dict[str, str] = {
    "player": "@",
    "empty": ".",
    "many": "*",
}


def describe_cache(cell: Cell, cache: Cache) -> str:
    """Popup text for a cache: a header line, then one line per coin."""

    lines = [f'Treasure at "{cell.i},{cell.j}"']
    if not cache.coins:
        lines.append("  (empty)")
    for index, coin in enumerate(cache.coins):
        lines.append(f"  [{index}] {coin.coin_id}")
    return "\n".join(lines)


def render_ascii_window(
    caches: VisibleCaches,
    center: Cell,
    *,
    radius: int,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render the window around ``center`` with north at the top.

    Each cell is one character: the player, the coin count of a cache (``*``
    for ten or more) or an empty marker. Caches outside the square are ignored.
    """

    radius = max(int(radius), 0)
    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    by_coords = {(cell.i, cell.j): cache for cell, cache in caches.items()}

    lines: List[str] = []
    for i in range(center.i + radius, center.i - radius - 1, -1):
        row: List[str] = []
        for j in range(center.j - radius, center.j + radius + 1):
            if (i, j) == (center.i, center.j):
                row.append(mapping["player"])
                continue
            cache = by_coords.get((i, j))
            if cache is None:
                row.append(mapping["empty"])
            elif cache.count >= 10:
                row.append(mapping["many"])
            else:
                row.append(str(cache.count))
        lines.append(" ".join(row))
    return "\n".join(lines)
