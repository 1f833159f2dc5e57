"""Round ownership and the player command layer.

A ``GameSession`` owns one board and one player at a time. ``new_round``
discards the previous board wholesale; every other call reads the board or
applies one well-defined mutation (move, pickup, drop, use) synchronously.

Commands never raise for gameplay outcomes. They return a ``CommandResult``
whose ``reason`` explains a failure in plain words (wall vs blocker vs wrong
item) so a caller can relay it directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from keymaze.logging_utils import get_logger
from keymaze.maze.config import MazeConfig
from keymaze.maze.directions import DIRECTIONS, Direction, parse_direction
from keymaze.maze.items import Collectible, blocker_display_name, collectible_display_name
from keymaze.maze.pipeline import GeneratedMaze, generate_board

from .player import Player

_log = get_logger("game")

NO_GAME = "No game in progress."


@dataclass
class CommandResult:
    success: bool
    reason: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.reason is not None:
            out["reason"] = self.reason
        out.update(self.data)
        return out


def _fail(reason: str, **data) -> CommandResult:
    return CommandResult(False, reason, data)


def _ok(**data) -> CommandResult:
    return CommandResult(True, None, data)


class GameSession:
    def __init__(self, config: Optional[MazeConfig] = None):
        self.config = config or MazeConfig()
        self.round: Optional[GeneratedMaze] = None
        self.player = Player()
        self.won = False

    @property
    def board(self):
        return self.round.board if self.round else None

    @property
    def in_progress(self) -> bool:
        return self.round is not None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------
    def new_round(self, config: Optional[MazeConfig] = None) -> Dict[str, Any]:
        """Build a fresh board (construct, carve, place) and reset the player."""
        if config is not None:
            self.config = config
        self.round = generate_board(self.config)
        board = self.round.board
        self.player.reset(board.start)
        self.won = False
        board.reveal_from(self.player.position)
        _log.info(
            event="round_start",
            rows=board.rows,
            cols=board.cols,
            seed=self.round.seed,
            gates=self.round.metrics.get("blockers_placed"),
            fallback=self.round.metrics.get("placement_fallback"),
        )
        return {
            "message": "A new maze has been generated. Look around, then move toward the exit.",
            "maze_size": {"rows": board.rows, "cols": board.cols},
            "start_position": list(board.start),
            "exit_position": list(board.exit),
            "seed": self.round.seed,
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def move(self, raw_direction) -> CommandResult:
        if not self.in_progress:
            return _fail(NO_GAME)
        try:
            direction = parse_direction(raw_direction)
        except ValueError as exc:
            return _fail(str(exc))
        board, player = self.board, self.player
        if player.move(direction, board):
            board.reveal_from(player.position)
            at_exit = board.is_exit(player.position)
            if at_exit and not self.won:
                self.won = True
                _log.info(event="round_won", moves=player.move_count, seed=self.round.seed)
            return _ok(position=list(player.position), at_exit=at_exit, move_count=player.move_count)
        blocker = board.get_blocker(player.position, direction)
        if blocker is not None and not board.has_wall(player.position, direction):
            return _fail(
                f"A {blocker_display_name(blocker.type)} blocks the {direction.value} direction. "
                "Use an item to clear it.",
                blocker=blocker.type.value,
                obstruction="blocker",
            )
        return _fail(f"There is a wall blocking the {direction.value} direction.", obstruction="wall")

    def pickup(self) -> CommandResult:
        if not self.in_progress:
            return _fail(NO_GAME)
        board, player = self.board, self.player
        item = board.get_collectible(player.position)
        if item is None:
            return _fail("There is no item to pick up at your current location.")
        if player.inventory is not None:
            return _fail(
                f"Your hands are full. You are already carrying: "
                f"{collectible_display_name(player.inventory)}. Drop it first.",
                current_item=player.inventory.value,
            )
        player.pickup(item.type)
        board.remove_collectible(player.position)
        return _ok(item=item.type.value, message=f"Picked up: {collectible_display_name(item.type)}")

    def drop(self) -> CommandResult:
        if not self.in_progress:
            return _fail(NO_GAME)
        board, player = self.board, self.player
        if player.inventory is None:
            return _fail("You are not carrying any item.")
        if board.get_collectible(player.position) is not None:
            return _fail("There is already an item on this cell. Move to an empty cell first.")
        item = player.drop()
        board.add_collectible(Collectible(item, player.position))
        return _ok(
            item=item.value,
            message=f"Dropped: {collectible_display_name(item)}",
            position=list(player.position),
        )

    def use(self, raw_direction) -> CommandResult:
        if not self.in_progress:
            return _fail(NO_GAME)
        try:
            direction = parse_direction(raw_direction)
        except ValueError as exc:
            return _fail(str(exc))
        board, player = self.board, self.player
        if player.inventory is None:
            return _fail("You are not holding any item to use.")
        blocker = board.get_blocker(player.position, direction)
        if blocker is None:
            return _fail(f"No blocker found in the {direction.value} direction.")
        item_name = collectible_display_name(player.inventory)
        blocker_name = blocker_display_name(blocker.type)
        if not player.use_item(blocker.type):
            return _fail(
                f"Your {item_name} cannot clear the {blocker_name}.",
                holding=player.inventory.value,
                blocker=blocker.type.value,
            )
        board.clear_blocker_pair(player.position, direction)
        board.reveal_from(player.position)
        return _ok(message=f"Used {item_name} to clear the {blocker_name}!", direction=direction.value)

    def look(self) -> CommandResult:
        """Describe the current cell: exits, gates, loot and (if seen) the exit."""
        if not self.in_progress:
            return _fail(NO_GAME)
        board, player = self.board, self.player
        pos = player.position
        blockers = {}
        for d in DIRECTIONS:
            b = board.get_blocker(pos, d)
            if b is not None and not board.has_wall(pos, d):
                blockers[d.value] = b.type.value
        item = board.get_collectible(pos)
        return _ok(
            position=list(pos),
            open_directions=[d.value for d in board.passable_directions(pos)],
            blockers=blockers,
            item_here=item.type.value if item else None,
            holding=player.inventory.value if player.inventory else None,
            at_exit=board.is_exit(pos),
            exit_position=list(board.exit) if board.is_revealed(board.exit) else None,
            maze_size={"rows": board.rows, "cols": board.cols},
            move_count=player.move_count,
            explored=f"{board.revealed_count}/{board.total_cells}",
        )

    def state(self) -> Dict[str, Any]:
        """Presentation snapshot: fogged board plus player and round status."""
        if not self.in_progress:
            return {"in_progress": False}
        return {
            "in_progress": True,
            "board": self.board.to_dict(),
            "player": self.player.to_dict(),
            "won": self.won,
            "seed": self.round.seed,
        }

    def dispatch(self, command: str, direction: Optional[Direction] = None) -> CommandResult:
        handlers = {
            "move": lambda: self.move(direction),
            "use": lambda: self.use(direction),
            "pickup": self.pickup,
            "drop": self.drop,
            "look": self.look,
        }
        handler = handlers.get(command)
        if handler is None:
            return _fail(f"Unknown command: {command}")
        result = handler()
        _log.debug(event="command", command=command, success=result.success)
        return result


__all__ = ["GameSession", "CommandResult", "NO_GAME"]
