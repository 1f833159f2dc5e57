"""Player state: position, move counter and a single-slot inventory."""

from __future__ import annotations

from typing import Optional

from keymaze.maze.board import START, MazeBoard
from keymaze.maze.directions import Direction, Position, step
from keymaze.maze.items import BlockerType, CollectibleType, can_unlock


class Player:
    def __init__(self, start: Position = START):
        self.position: Position = tuple(start)
        self.move_count = 0
        self.inventory: Optional[CollectibleType] = None

    def move(self, direction: Direction, board: MazeBoard) -> bool:
        """Step one cell unless a wall or blocker is in the way."""
        if board.is_blocked(self.position, direction):
            return False
        nxt = step(self.position, direction)
        if not board.in_bounds(nxt):
            return False
        self.position = nxt
        self.move_count += 1
        return True

    def reset(self, start: Position = START) -> None:
        self.position = tuple(start)
        self.move_count = 0
        self.inventory = None

    def pickup(self, item: CollectibleType) -> bool:
        if self.inventory is not None:
            return False
        self.inventory = item
        return True

    def drop(self) -> Optional[CollectibleType]:
        item = self.inventory
        self.inventory = None
        return item

    def use_item(self, blocker_type: BlockerType) -> bool:
        """Spend the held item on ``blocker_type``; the item is kept on a mismatch."""
        if self.inventory is None or not can_unlock(self.inventory, blocker_type):
            return False
        self.inventory = None
        return True

    def to_dict(self):
        return {
            "position": list(self.position),
            "move_count": self.move_count,
            "inventory": self.inventory.value if self.inventory else None,
        }
