"""Blocker / collectible placement on a carved maze.

Gates are chosen among the passages of the wall-only shortest path from start
to exit; each gate's matching collectible is dropped on a cell that is strictly
closer to the start than the gate. A candidate layout is kept only if the
augmented search in :func:`solver.is_solvable` still reaches the exit. Each
attempt starts from a clean registry; after ``max_attempts`` failures the board
is left item-free, which is always solvable because the carved maze is a
spanning tree.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .board import MazeBoard
from .config import MAX_PLACEMENT_ATTEMPTS
from .directions import Position
from .items import BLOCKER_PAIRS, DOOR_PAIRS, ROCK_PAIR, BlockerPair, Collectible
from .solver import Passage, bfs_distances, is_solvable, path_to_passages, shortest_path

logger = logging.getLogger(__name__)

MIN_BLOCKERS = 2
MAX_BLOCKERS = 4
CELLS_PER_BLOCKER = 30


def blocker_count_for(total_cells: int) -> int:
    return min(MAX_BLOCKERS, max(MIN_BLOCKERS, total_cells // CELLS_PER_BLOCKER))


@dataclass
class PlacementResult:
    success: bool
    attempts: int
    gates: int = 0
    shortest_path_length: int = 0


class ItemPlacer:
    def __init__(self, rng: Optional[random.Random] = None, max_attempts: int = MAX_PLACEMENT_ATTEMPTS):
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def place(self, board: MazeBoard) -> PlacementResult:
        """Place gates and their items, retrying until the layout is solvable.

        Returns a PlacementResult; ``success`` is False when every attempt failed
        and the board was left without items.
        """
        wanted = blocker_count_for(board.total_cells)
        path = shortest_path(board, board.start, board.exit)
        path_len = len(path) - 1 if path else 0
        for attempt in range(1, self.max_attempts + 1):
            board.clear_items()
            gates = self._try_place(board, wanted)
            if gates:
                logger.debug("placed %d gates on attempt %d", gates, attempt)
                return PlacementResult(True, attempt, gates, path_len)
            logger.debug("placement attempt %d rejected", attempt)
        board.clear_items()
        logger.info(
            "item placement fell back to an item-free maze after %d attempts (%dx%d)",
            self.max_attempts,
            board.rows,
            board.cols,
        )
        return PlacementResult(False, self.max_attempts, 0, path_len)

    def _try_place(self, board: MazeBoard, wanted: int) -> int:
        """One attempt. Returns the number of gates placed, 0 when the attempt is abandoned."""
        distances = bfs_distances(board, board.start)
        path = shortest_path(board, board.start, board.exit)
        if not path:
            return 0
        passages = path_to_passages(path)
        # Keep the cells next to start and exit ungated unless the path is too short to care.
        candidates = passages[1:-1] if len(passages) > 2 else list(passages)
        if not candidates:
            return 0
        self.rng.shuffle(candidates)
        selected = candidates[: min(wanted, len(candidates))]
        pairs = self.assign_blocker_types(len(selected))
        for passage, pair in zip(selected, pairs):
            if not board.place_blocker_pair(passage.pos, passage.dir, pair.blocker):
                continue
            spot = self._collectible_position(board, distances, passage)
            if spot is None:
                return 0
            board.add_collectible(Collectible(pair.collectible, spot))
        if not is_solvable(board):
            return 0
        return len(selected)

    def assign_blocker_types(self, count: int) -> List[BlockerPair]:
        """Pick gate types; with two or more gates there is always a rock and a door."""
        if count <= 0:
            return []
        if count == 1:
            return [self.rng.choice(BLOCKER_PAIRS)]
        result = [ROCK_PAIR, self.rng.choice(DOOR_PAIRS)]
        for _ in range(2, count):
            result.append(self.rng.choice(BLOCKER_PAIRS))
        self.rng.shuffle(result)
        return result

    def _collectible_position(
        self, board: MazeBoard, distances: Dict[Position, int], passage: Passage
    ) -> Optional[Position]:
        gate_dist = distances.get(passage.pos)
        if gate_dist is None:
            return None
        candidates = [
            pos
            for pos, dist in distances.items()
            if 0 < dist < gate_dist and not board.is_exit(pos) and board.get_collectible(pos) is None
        ]
        if not candidates:
            return None
        return self.rng.choice(sorted(candidates))


def place_items(board: MazeBoard, rng: Optional[random.Random] = None, max_attempts: int = MAX_PLACEMENT_ATTEMPTS):
    return ItemPlacer(rng, max_attempts).place(board)


__all__ = [
    "ItemPlacer",
    "PlacementResult",
    "place_items",
    "blocker_count_for",
    "MIN_BLOCKERS",
    "MAX_BLOCKERS",
]
