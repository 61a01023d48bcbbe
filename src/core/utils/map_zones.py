"""Summoner's Rift coordinate labelling.

Riot map coordinates span roughly 0..15000 on each axis with the blue
fountain in the bottom-left corner. The boxes below are coarse on purpose:
they name the area a fight happened in, not the exact brush.
"""

from __future__ import annotations

from typing import Final

MAP_COORD_MAX: Final[int] = 15000

# (label, x_min, x_max, y_min, y_max); first match wins
_ZONES: Final[tuple[tuple[str, int, int, int, int], ...]] = (
    ("Dragon Pit", 9000, 10500, 3500, 5000),
    ("Baron Pit", 4000, 5500, 10000, 11500),
    ("Blue Base", 0, 4000, 0, 4000),
    ("Red Base", 11000, MAP_COORD_MAX, 11000, MAP_COORD_MAX),
    ("Mid Lane", 6000, 9000, 6000, 9000),
    ("Top Lane", 0, 4000, 10000, MAP_COORD_MAX),
    ("Top Lane", 0, 5000, 11000, MAP_COORD_MAX),
    ("Bot Lane", 10000, MAP_COORD_MAX, 0, 4000),
    ("Bot Lane", 11000, MAP_COORD_MAX, 0, 5000),
)


def zone_label(x: int | None, y: int | None) -> str | None:
    """Named zone for a map coordinate, or None outside the labelled areas."""
    if x is None or y is None:
        return None
    for label, x_min, x_max, y_min, y_max in _ZONES:
        if x_min <= x <= x_max and y_min <= y <= y_max:
            return label
    if x + y < MAP_COORD_MAX:
        return "Blue Jungle"
    return "Red Jungle"
