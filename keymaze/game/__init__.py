"""Player state and the round/command layer that drives a maze board."""

from .player import Player
from .session import NO_GAME, CommandResult, GameSession

__all__ = ["Player", "GameSession", "CommandResult", "NO_GAME"]
