"""Recursive-backtracker maze carving (randomized depth-first spanning tree).

Starting from the top-left cell the carver repeatedly looks at the cell on top
of an explicit stack, opens the wall toward a random unvisited neighbor and
pushes that neighbor; with no unvisited neighbor left it backtracks (pops).
The result is a perfect maze: ``rows*cols - 1`` open passages, every cell
reachable, no loops. The stack lives on the heap so large grids cannot hit the
interpreter recursion limit.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .board import START, MazeBoard
from .directions import DIRECTIONS, Direction, Position

logger = logging.getLogger(__name__)


class RecursiveBacktracker:
    """Carves passages through a fully walled board, in place."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, board: MazeBoard) -> None:
        visited = [[False] * board.cols for _ in range(board.rows)]
        stack: List[Position] = [START]
        visited[START[0]][START[1]] = True
        carved = 0
        while stack:
            current = stack[-1]
            options = self._unvisited_neighbors(board, current, visited)
            if not options:
                stack.pop()
                continue
            direction, nxt = self.rng.choice(options)
            board.remove_wall(current, direction)
            visited[nxt[0]][nxt[1]] = True
            stack.append(nxt)
            carved += 1
        logger.debug("carved %d passages on %dx%d board", carved, board.rows, board.cols)

    @staticmethod
    def _unvisited_neighbors(board: MazeBoard, pos: Position, visited) -> List[Tuple[Direction, Position]]:
        out = []
        for d in DIRECTIONS:
            nxt = board.neighbor(pos, d)
            if nxt is not None and not visited[nxt[0]][nxt[1]]:
                out.append((d, nxt))
        return out


def carve(board: MazeBoard, rng: Optional[random.Random] = None) -> MazeBoard:
    RecursiveBacktracker(rng).generate(board)
    return board


__all__ = ["RecursiveBacktracker", "carve"]
