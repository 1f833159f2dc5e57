import random

import pytest

from keymaze.maze import GeneratedMaze, MazeConfig, generate_board, is_solvable

from maze_test_utils import reachable_by_walls, wall_snapshot

METRIC_KEYS = {
    "placement_attempts",
    "placement_fallback",
    "blockers_placed",
    "collectibles_placed",
    "open_passages",
    "shortest_path_length",
    "runtime_ms",
    "phase_ms",
}


def test_generate_board_defaults():
    result = generate_board(MazeConfig(seed=5))
    assert isinstance(result, GeneratedMaze)
    assert result.seed == 5
    board = result.board
    assert (board.rows, board.cols) == (10, 10)
    assert board.open_passage_count() == 99
    assert reachable_by_walls(board) == set(board.positions())
    assert is_solvable(board)


def test_metrics_shape():
    m = generate_board(MazeConfig(rows=6, cols=7, seed=3)).metrics
    assert set(m) == METRIC_KEYS
    assert m["open_passages"] == 41
    assert set(m["phase_ms"]) == {"carve", "place_items"}
    assert m["placement_attempts"] >= 1
    assert m["collectibles_placed"] == m["blockers_placed"]
    assert m["shortest_path_length"] >= 11


def test_same_seed_same_round():
    a = generate_board(MazeConfig(rows=11, cols=13, seed=2024)).board
    b = generate_board(MazeConfig(rows=11, cols=13, seed=2024)).board
    assert wall_snapshot(a) == wall_snapshot(b)
    assert {(c.position, c.type) for c in a.all_collectibles()} == {(c.position, c.type) for c in b.all_collectibles()}


def test_unseeded_round_records_its_seed():
    first = generate_board(MazeConfig(rows=7, cols=7))
    replay = generate_board(MazeConfig(rows=7, cols=7, seed=first.seed))
    assert wall_snapshot(first.board) == wall_snapshot(replay.board)


def test_explicit_rng_is_used():
    a = generate_board(MazeConfig(rows=5, cols=5, seed=1), rng=random.Random(77)).board
    b = generate_board(MazeConfig(rows=5, cols=5, seed=2), rng=random.Random(77)).board
    assert wall_snapshot(a) == wall_snapshot(b)


def test_place_items_can_be_disabled():
    result = generate_board(MazeConfig(rows=8, cols=8, seed=1, place_items=False))
    assert result.board.all_blockers() == []
    assert result.board.all_collectibles() == []
    assert result.metrics["placement_attempts"] == 0
    assert "place_items" not in result.metrics["phase_ms"]


def test_single_cell_round():
    result = generate_board(MazeConfig(rows=1, cols=1, seed=0, max_placement_attempts=3))
    assert result.board.exit == result.board.start
    assert result.metrics["placement_fallback"] is True
    assert result.metrics["placement_attempts"] == 3


@pytest.mark.parametrize(
    "kwargs",
    [{"rows": 0}, {"cols": -3}, {"rows": 2.5}, {"cols": "4"}, {"rows": True}, {"max_placement_attempts": 0}],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        generate_board(MazeConfig(**kwargs))


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("KEYMAZE_ROWS", "12")
    monkeypatch.setenv("KEYMAZE_COLS", "4")
    monkeypatch.setenv("KEYMAZE_SEED", "99")
    monkeypatch.setenv("KEYMAZE_MAX_PLACEMENT_ATTEMPTS", "5")
    monkeypatch.setenv("KEYMAZE_PLACE_ITEMS", "false")
    cfg = MazeConfig.from_env()
    assert (cfg.rows, cfg.cols, cfg.seed, cfg.max_placement_attempts, cfg.place_items) == (12, 4, 99, 5, False)


def test_config_from_env_defaults(monkeypatch):
    for key in ("KEYMAZE_ROWS", "KEYMAZE_COLS", "KEYMAZE_SEED", "KEYMAZE_MAX_PLACEMENT_ATTEMPTS", "KEYMAZE_PLACE_ITEMS"):
        monkeypatch.delenv(key, raising=False)
    assert MazeConfig.from_env() == MazeConfig()
