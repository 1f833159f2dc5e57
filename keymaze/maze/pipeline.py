"""Round generation: construct -> carve -> place items.

``generate_board`` is the one sequence a round owner calls to get a ready
board. Randomness flows through a single ``random.Random`` so a recorded seed
reproduces the round exactly. Per-phase timings land in ``metrics['phase_ms']``.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .board import MazeBoard
from .carver import RecursiveBacktracker
from .config import MazeConfig
from .metrics import init_metrics
from .placement import ItemPlacer

logger = logging.getLogger(__name__)


@dataclass
class GeneratedMaze:
    board: MazeBoard
    seed: int
    metrics: Dict[str, Any] = field(default_factory=init_metrics)


def generate_board(config: Optional[MazeConfig] = None, rng: Optional[random.Random] = None) -> GeneratedMaze:
    config = (config or MazeConfig()).validate()
    seed = config.seed
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    if rng is None:
        rng = random.Random(seed)
    metrics = init_metrics()
    phase_times: Dict[str, int] = {}

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    start = time.perf_counter()
    board = MazeBoard(config.rows, config.cols)
    _phase("carve", RecursiveBacktracker(rng).generate, board)
    metrics["open_passages"] = board.open_passage_count()
    if config.place_items:
        placer = ItemPlacer(rng, config.max_placement_attempts)
        result = _phase("place_items", placer.place, board)
        metrics["placement_attempts"] = result.attempts
        metrics["placement_fallback"] = not result.success
        metrics["blockers_placed"] = result.gates
        metrics["shortest_path_length"] = result.shortest_path_length
        metrics["collectibles_placed"] = len(board.all_collectibles())
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    metrics["phase_ms"] = phase_times
    logger.debug("generated %dx%d maze seed=%s metrics=%s", config.rows, config.cols, seed, metrics)
    return GeneratedMaze(board=board, seed=seed, metrics=metrics)


__all__ = ["GeneratedMaze", "generate_board"]
