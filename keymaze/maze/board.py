"""Maze board: grid topology, fog of war and the item/blocker registry.

One ``MazeBoard`` holds everything a round needs:
    * a fixed ``rows x cols`` grid of cells created fully walled
    * the revealed-cell set (monotonic within a round)
    * collectibles keyed by cell, blockers keyed by (cell, direction)

Walls are changed only by ``remove_wall`` (always mirrored on the neighbor).
Blockers are stored once per side of a passage so lookups succeed from either
cell; ``place_blocker_pair`` / ``clear_blocker_pair`` keep the two sides in step.
Out-of-bounds queries never raise: they read as walled / absent.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from .cells import MazeCell
from .directions import DIRECTIONS, Direction, Position, opposite, step
from .items import Blocker, BlockerType, Collectible, CollectibleType

START: Position = (0, 0)

_KEY_GLYPHS = {
    CollectibleType.KEY_RED: "r",
    CollectibleType.KEY_BLUE: "b",
    CollectibleType.KEY_GREEN: "g",
    CollectibleType.DYNAMITE: "d",
}
_BLOCKER_GLYPHS = {
    BlockerType.DOOR_RED: "R",
    BlockerType.DOOR_BLUE: "B",
    BlockerType.DOOR_GREEN: "G",
    BlockerType.ROCK: "#",
}


class MazeBoard:
    def __init__(self, rows: int, cols: int):
        self._rows = rows
        self._cols = cols
        self._exit: Position = (rows - 1, cols - 1)
        self._grid: List[List[MazeCell]] = [[MazeCell(r, c) for c in range(cols)] for r in range(rows)]
        self._revealed: Set[Position] = set()
        self._collectibles: Dict[Position, Collectible] = {}
        self._blockers: Dict[Tuple[Position, Direction], Blocker] = {}

    # ------------------------------------------------------------------
    # Grid topology
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def exit(self) -> Position:
        return self._exit

    @property
    def start(self) -> Position:
        return START

    @property
    def total_cells(self) -> int:
        return self._rows * self._cols

    def positions(self) -> Iterable[Position]:
        for r in range(self._rows):
            for c in range(self._cols):
                yield (r, c)

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self._rows and 0 <= c < self._cols

    def get_cell(self, pos: Position) -> Optional[MazeCell]:
        if not self.in_bounds(pos):
            return None
        return self._grid[pos[0]][pos[1]]

    def neighbor(self, pos: Position, direction: Direction) -> Optional[Position]:
        nxt = step(pos, direction)
        return nxt if self.in_bounds(nxt) else None

    def has_wall(self, pos: Position, direction: Direction) -> bool:
        cell = self.get_cell(pos)
        return cell.walls[direction] if cell is not None else True

    def remove_wall(self, pos: Position, direction: Direction) -> None:
        """Open the passage from ``pos`` toward ``direction`` on both sides."""
        cell = self.get_cell(pos)
        npos = self.neighbor(pos, direction)
        if cell is None or npos is None:
            return
        cell.walls[direction] = False
        self._grid[npos[0]][npos[1]].walls[opposite(direction)] = False

    def open_directions(self, pos: Position) -> List[Direction]:
        """Directions without a wall. Blockers are ignored (pure topology)."""
        if not self.in_bounds(pos):
            return []
        return [d for d in DIRECTIONS if not self.has_wall(pos, d)]

    def is_blocked(self, pos: Position, direction: Direction) -> bool:
        if self.has_wall(pos, direction):
            return True
        return (pos, direction) in self._blockers

    def passable_directions(self, pos: Position) -> List[Direction]:
        """Directions with neither a wall nor a blocker."""
        if not self.in_bounds(pos):
            return []
        return [d for d in DIRECTIONS if not self.is_blocked(pos, d)]

    def is_exit(self, pos: Position) -> bool:
        return tuple(pos) == self._exit

    def open_passage_count(self) -> int:
        # South/east only so every passage is counted once.
        count = 0
        for pos in self.positions():
            for d in (Direction.SOUTH, Direction.EAST):
                if not self.has_wall(pos, d):
                    count += 1
        return count

    # ------------------------------------------------------------------
    # Fog of war
    # ------------------------------------------------------------------
    @property
    def revealed_count(self) -> int:
        return len(self._revealed)

    def is_revealed(self, pos: Position) -> bool:
        return tuple(pos) in self._revealed

    def revealed_cells(self) -> List[Position]:
        return sorted(self._revealed)

    def reveal_cell(self, pos: Position) -> None:
        if self.in_bounds(pos):
            self._revealed.add(tuple(pos))

    def reveal_from(self, pos: Position) -> None:
        """Reveal ``pos`` plus every neighbor one hop through an unblocked passage."""
        self.reveal_cell(pos)
        for d in self.passable_directions(pos):
            npos = self.neighbor(pos, d)
            if npos is not None:
                self.reveal_cell(npos)

    # ------------------------------------------------------------------
    # Collectibles
    # ------------------------------------------------------------------
    def add_collectible(self, collectible: Collectible) -> None:
        self._collectibles[tuple(collectible.position)] = collectible

    def get_collectible(self, pos: Position) -> Optional[Collectible]:
        return self._collectibles.get(tuple(pos))

    def remove_collectible(self, pos: Position) -> Optional[Collectible]:
        return self._collectibles.pop(tuple(pos), None)

    def all_collectibles(self) -> List[Collectible]:
        return list(self._collectibles.values())

    # ------------------------------------------------------------------
    # Blockers
    # ------------------------------------------------------------------
    def add_blocker(self, blocker: Blocker) -> None:
        self._blockers[(tuple(blocker.position), blocker.direction)] = blocker

    def get_blocker(self, pos: Position, direction: Direction) -> Optional[Blocker]:
        return self._blockers.get((tuple(pos), direction))

    def remove_blocker(self, pos: Position, direction: Direction) -> Optional[Blocker]:
        return self._blockers.pop((tuple(pos), direction), None)

    def all_blockers(self) -> List[Blocker]:
        return list(self._blockers.values())

    def place_blocker_pair(self, pos: Position, direction: Direction, blocker_type: BlockerType) -> bool:
        """Gate the open passage ``pos -> direction`` from both sides.

        Returns False (and stores nothing) if the passage is walled or leaves the grid.
        """
        npos = self.neighbor(pos, direction)
        if npos is None or self.has_wall(pos, direction):
            return False
        self.add_blocker(Blocker(blocker_type, tuple(pos), direction))
        self.add_blocker(Blocker(blocker_type, npos, opposite(direction)))
        return True

    def clear_blocker_pair(self, pos: Position, direction: Direction) -> Optional[Blocker]:
        removed = self.remove_blocker(pos, direction)
        npos = self.neighbor(pos, direction)
        if npos is not None:
            self.remove_blocker(npos, opposite(direction))
        return removed

    def clear_items(self) -> None:
        self._collectibles.clear()
        self._blockers.clear()

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------
    def to_dict(self, reveal_all: bool = False) -> dict:
        """Snapshot for a renderer. Fogged cells and their items are omitted."""

        def visible(pos):
            return reveal_all or pos in self._revealed

        cells = [
            {"pos": [r, c], "walls": {d.value: self._grid[r][c].walls[d] for d in DIRECTIONS}}
            for r, c in self.positions()
            if visible((r, c))
        ]
        return {
            "rows": self._rows,
            "cols": self._cols,
            "start": list(START),
            "exit": list(self._exit) if visible(self._exit) else None,
            "cells": cells,
            "blockers": [b.to_dict() for b in self._blockers.values() if visible(b.position)],
            "collectibles": [c.to_dict() for c in self._collectibles.values() if visible(c.position)],
            "revealed": [list(p) for p in self.revealed_cells()],
        }

    def render_ascii(self, player: Optional[Position] = None, reveal_all: bool = True) -> str:
        """Text rendering for debugging and the CLI ``generate`` command."""
        lines: List[str] = []
        lines.append("+" + "---+" * self._cols)
        for r in range(self._rows):
            mid = "|"
            bottom = "+"
            for c in range(self._cols):
                pos = (r, c)
                if not (reveal_all or pos in self._revealed):
                    mid += " ~ |"
                    bottom += "---+"
                    continue
                glyph = " "
                if player is not None and tuple(player) == pos:
                    glyph = "@"
                elif pos == self._exit:
                    glyph = "E"
                elif pos == START:
                    glyph = "S"
                item = self._collectibles.get(pos)
                if item is not None and glyph == " ":
                    glyph = _KEY_GLYPHS[item.type]
                mid += f" {glyph} "
                east = self._blockers.get((pos, Direction.EAST))
                if east is not None:
                    mid += _BLOCKER_GLYPHS[east.type]
                else:
                    mid += "|" if self.has_wall(pos, Direction.EAST) else " "
                south = self._blockers.get((pos, Direction.SOUTH))
                if south is not None:
                    bottom += f" {_BLOCKER_GLYPHS[south.type]} +"
                else:
                    bottom += "---+" if self.has_wall(pos, Direction.SOUTH) else "   +"
            lines.append(mid)
            lines.append(bottom)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MazeBoard(rows={self._rows}, cols={self._cols}, "
            f"collectibles={len(self._collectibles)}, blockers={len(self._blockers)})"
        )


__all__ = ["MazeBoard", "START"]
