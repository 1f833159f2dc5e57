"""Cardinal directions and grid coordinates.

Positions are ``(row, col)`` tuples, zero-indexed and row-major. Row 0 is the
top edge so north decreases the row index.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

Position = Tuple[int, int]


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    def __str__(self) -> str:
        return self.value


DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)

OFFSETS: Dict[Direction, Position] = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}

OPPOSITE: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_ALIASES = {"n": Direction.NORTH, "s": Direction.SOUTH, "e": Direction.EAST, "w": Direction.WEST}


def opposite(direction: Direction) -> Direction:
    return OPPOSITE[direction]


def step(pos: Position, direction: Direction) -> Position:
    """Return the coordinate one cell away (no bounds check)."""
    dr, dc = OFFSETS[direction]
    return (pos[0] + dr, pos[1] + dc)


def parse_direction(raw) -> Direction:
    """Coerce user input ('north', 'N', ' e ') into a Direction.

    Raises ValueError for anything outside the four cardinals.
    """
    if isinstance(raw, Direction):
        return raw
    text = str(raw if raw is not None else "").strip().lower()
    if text in _ALIASES:
        return _ALIASES[text]
    try:
        return Direction(text)
    except ValueError:
        raise ValueError(f'Invalid direction: "{raw}". Use north, south, east, or west.') from None


__all__ = ["Position", "Direction", "DIRECTIONS", "OFFSETS", "OPPOSITE", "opposite", "step", "parse_direction"]
