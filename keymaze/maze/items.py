"""Collectibles, blockers and the rule that pairs them.

Three colored keys open the door of the same color; dynamite clears the rock.
``can_unlock`` is the single source of that rule and is consulted both by the
placement solver and by the runtime ``use`` command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from .directions import Direction, Position


class ItemColor(str, Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"


class CollectibleType(str, Enum):
    KEY_RED = "key_red"
    KEY_BLUE = "key_blue"
    KEY_GREEN = "key_green"
    DYNAMITE = "dynamite"


class BlockerType(str, Enum):
    DOOR_RED = "door_red"
    DOOR_BLUE = "door_blue"
    DOOR_GREEN = "door_green"
    ROCK = "rock"


_COLLECTIBLE_COLORS: Dict[CollectibleType, Optional[ItemColor]] = {
    CollectibleType.KEY_RED: ItemColor.RED,
    CollectibleType.KEY_BLUE: ItemColor.BLUE,
    CollectibleType.KEY_GREEN: ItemColor.GREEN,
    CollectibleType.DYNAMITE: None,
}

_BLOCKER_COLORS: Dict[BlockerType, Optional[ItemColor]] = {
    BlockerType.DOOR_RED: ItemColor.RED,
    BlockerType.DOOR_BLUE: ItemColor.BLUE,
    BlockerType.DOOR_GREEN: ItemColor.GREEN,
    BlockerType.ROCK: None,
}

_COLLECTIBLE_NAMES = {
    CollectibleType.KEY_RED: "Red Key",
    CollectibleType.KEY_BLUE: "Blue Key",
    CollectibleType.KEY_GREEN: "Green Key",
    CollectibleType.DYNAMITE: "Dynamite",
}

_BLOCKER_NAMES = {
    BlockerType.DOOR_RED: "Red Door",
    BlockerType.DOOR_BLUE: "Blue Door",
    BlockerType.DOOR_GREEN: "Green Door",
    BlockerType.ROCK: "Rock",
}


class BlockerPair(NamedTuple):
    blocker: BlockerType
    collectible: CollectibleType


# Rock must stay last: placement relies on the index to guarantee one rock.
BLOCKER_PAIRS: List[BlockerPair] = [
    BlockerPair(BlockerType.DOOR_RED, CollectibleType.KEY_RED),
    BlockerPair(BlockerType.DOOR_BLUE, CollectibleType.KEY_BLUE),
    BlockerPair(BlockerType.DOOR_GREEN, CollectibleType.KEY_GREEN),
    BlockerPair(BlockerType.ROCK, CollectibleType.DYNAMITE),
]
ROCK_PAIR = BLOCKER_PAIRS[3]
DOOR_PAIRS = BLOCKER_PAIRS[:3]


def collectible_color(item: CollectibleType) -> Optional[ItemColor]:
    return _COLLECTIBLE_COLORS[item]


def blocker_color(blocker: BlockerType) -> Optional[ItemColor]:
    return _BLOCKER_COLORS[blocker]


def collectible_display_name(item: CollectibleType) -> str:
    return _COLLECTIBLE_NAMES[item]


def blocker_display_name(blocker: BlockerType) -> str:
    return _BLOCKER_NAMES[blocker]


def can_unlock(item: Optional[CollectibleType], blocker: BlockerType) -> bool:
    """True when ``item`` clears ``blocker``.

    Keys match doors by color; dynamite matches only the rock.
    """
    if item is None:
        return False
    if item == CollectibleType.DYNAMITE:
        return blocker == BlockerType.ROCK
    color = _COLLECTIBLE_COLORS[item]
    return color is not None and _BLOCKER_COLORS[blocker] == color


@dataclass(frozen=True)
class Collectible:
    type: CollectibleType
    position: Position

    def to_dict(self):
        return {"type": self.type.value, "position": list(self.position)}


@dataclass(frozen=True)
class Blocker:
    type: BlockerType
    position: Position
    direction: Direction

    def to_dict(self):
        return {
            "type": self.type.value,
            "position": list(self.position),
            "direction": self.direction.value,
        }


__all__ = [
    "ItemColor",
    "CollectibleType",
    "BlockerType",
    "BlockerPair",
    "BLOCKER_PAIRS",
    "ROCK_PAIR",
    "DOOR_PAIRS",
    "Collectible",
    "Blocker",
    "collectible_color",
    "blocker_color",
    "collectible_display_name",
    "blocker_display_name",
    "can_unlock",
]
