from typing import Dict

from .directions import DIRECTIONS, Direction


class MazeCell:
    """Lightweight container for one maze cell and its four wall flags.

    ``walls[dir]`` is True while the wall on that side is intact. Flags are
    only cleared through ``MazeBoard.remove_wall`` so both sides stay mirrored.
    """

    __slots__ = ("row", "col", "walls")

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.walls: Dict[Direction, bool] = {d: True for d in DIRECTIONS}

    @property
    def position(self):
        return (self.row, self.col)

    def wall_count(self) -> int:
        return sum(1 for intact in self.walls.values() if intact)

    def to_dict(self):
        return {"row": self.row, "col": self.col, "walls": {d.value: v for d, v in self.walls.items()}}
