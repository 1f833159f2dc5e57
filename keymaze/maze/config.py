import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROWS = 10
DEFAULT_COLS = 10
MAX_PLACEMENT_ATTEMPTS = 20


def _env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class MazeConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    seed: Optional[int] = None
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    place_items: bool = True

    def validate(self) -> "MazeConfig":
        """Raise ValueError unless dimensions and attempt budget are positive integers."""
        for name in ("rows", "cols", "max_placement_attempts"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int) or val < 1:
                raise ValueError(f"{name} must be a positive integer (got {val!r})")
        return self

    @classmethod
    def from_env(cls) -> "MazeConfig":
        return cls(
            rows=_env_int("KEYMAZE_ROWS", DEFAULT_ROWS),
            cols=_env_int("KEYMAZE_COLS", DEFAULT_COLS),
            seed=_env_int("KEYMAZE_SEED", None),
            max_placement_attempts=_env_int("KEYMAZE_MAX_PLACEMENT_ATTEMPTS", MAX_PLACEMENT_ATTEMPTS),
            place_items=os.getenv("KEYMAZE_PLACE_ITEMS", "1").lower() not in {"0", "false", "no", ""},
        )


__all__ = ["MazeConfig", "DEFAULT_ROWS", "DEFAULT_COLS", "MAX_PLACEMENT_ATTEMPTS"]
