"""Public maze package interface.

Grid model, fog of war, item/blocker registry, carving, item placement and the
solvability search, plus the pipeline that strings them into a ready board.
"""

from .board import START, MazeBoard
from .carver import RecursiveBacktracker, carve
from .config import MazeConfig
from .directions import DIRECTIONS, Direction, Position, opposite, parse_direction
from .items import (
    BLOCKER_PAIRS,
    Blocker,
    BlockerType,
    Collectible,
    CollectibleType,
    ItemColor,
    blocker_color,
    blocker_display_name,
    can_unlock,
    collectible_color,
    collectible_display_name,
)
from .pipeline import GeneratedMaze, generate_board
from .placement import ItemPlacer, PlacementResult, blocker_count_for, place_items
from .solver import bfs_distances, is_solvable, reachable_cells, shortest_path

__all__ = [
    "START",
    "MazeBoard",
    "RecursiveBacktracker",
    "carve",
    "MazeConfig",
    "DIRECTIONS",
    "Direction",
    "Position",
    "opposite",
    "parse_direction",
    "BLOCKER_PAIRS",
    "Blocker",
    "BlockerType",
    "Collectible",
    "CollectibleType",
    "ItemColor",
    "blocker_color",
    "blocker_display_name",
    "can_unlock",
    "collectible_color",
    "collectible_display_name",
    "GeneratedMaze",
    "generate_board",
    "ItemPlacer",
    "PlacementResult",
    "blocker_count_for",
    "place_items",
    "bfs_distances",
    "is_solvable",
    "reachable_cells",
    "shortest_path",
]
