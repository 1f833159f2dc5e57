import pytest

from keymaze.maze import Blocker, BlockerType, Collectible, CollectibleType, Direction, MazeBoard

from maze_test_utils import asymmetric_walls, corridor_board


def test_new_board_is_fully_walled():
    b = MazeBoard(3, 4)
    assert b.rows == 3 and b.cols == 4
    assert b.exit == (2, 3)
    assert b.start == (0, 0)
    for pos in b.positions():
        assert b.open_directions(pos) == []
    assert b.open_passage_count() == 0


def test_bounds_and_neighbors():
    b = MazeBoard(3, 3)
    assert b.in_bounds((0, 0)) and b.in_bounds((2, 2))
    assert not b.in_bounds((-1, 0)) and not b.in_bounds((0, 3))
    assert b.neighbor((1, 1), Direction.NORTH) == (0, 1)
    assert b.neighbor((1, 1), Direction.SOUTH) == (2, 1)
    assert b.neighbor((1, 1), Direction.EAST) == (1, 2)
    assert b.neighbor((1, 1), Direction.WEST) == (1, 0)
    assert b.neighbor((0, 0), Direction.NORTH) is None
    assert b.neighbor((2, 2), Direction.EAST) is None


def test_out_of_bounds_reads_as_walled():
    b = MazeBoard(2, 2)
    assert b.has_wall((5, 5), Direction.NORTH) is True
    assert b.is_blocked((-1, 0), Direction.SOUTH) is True
    assert b.get_cell((9, 9)) is None
    assert b.open_directions((9, 9)) == []


def test_remove_wall_is_symmetric_and_local():
    b = MazeBoard(3, 3)
    before = {pos: dict(b.get_cell(pos).walls) for pos in b.positions()}
    b.remove_wall((1, 1), Direction.EAST)
    assert b.has_wall((1, 1), Direction.EAST) is False
    assert b.has_wall((1, 2), Direction.WEST) is False
    for pos in b.positions():
        for d, intact in b.get_cell(pos).walls.items():
            if (pos, d) in {((1, 1), Direction.EAST), ((1, 2), Direction.WEST)}:
                continue
            assert intact == before[pos][d], f"{pos} {d} changed"
    assert asymmetric_walls(b) == []


def test_remove_wall_toward_edge_is_noop():
    b = MazeBoard(2, 2)
    b.remove_wall((0, 0), Direction.NORTH)
    b.remove_wall((1, 1), Direction.EAST)
    assert b.has_wall((0, 0), Direction.NORTH)
    assert b.has_wall((1, 1), Direction.EAST)
    assert b.open_passage_count() == 0


def test_open_directions_ignore_blockers_but_is_blocked_does_not():
    b = MazeBoard(3, 3)
    b.remove_wall((1, 1), Direction.EAST)
    b.place_blocker_pair((1, 1), Direction.EAST, BlockerType.DOOR_RED)
    assert b.open_directions((1, 1)) == [Direction.EAST]
    assert b.is_blocked((1, 1), Direction.EAST)
    assert b.is_blocked((1, 2), Direction.WEST)
    assert b.passable_directions((1, 1)) == []


def test_blocker_pair_stored_on_both_sides():
    b = corridor_board(3)
    assert b.place_blocker_pair((0, 0), Direction.EAST, BlockerType.ROCK)
    assert b.get_blocker((0, 0), Direction.EAST) == Blocker(BlockerType.ROCK, (0, 0), Direction.EAST)
    assert b.get_blocker((0, 1), Direction.WEST) == Blocker(BlockerType.ROCK, (0, 1), Direction.WEST)
    assert len(b.all_blockers()) == 2
    removed = b.clear_blocker_pair((0, 1), Direction.WEST)
    assert removed is not None and removed.type is BlockerType.ROCK
    assert b.all_blockers() == []


def test_blocker_refused_on_walled_passage():
    b = MazeBoard(2, 2)
    assert b.place_blocker_pair((0, 0), Direction.EAST, BlockerType.DOOR_BLUE) is False
    assert b.all_blockers() == []


def test_collectible_registry_roundtrip():
    b = MazeBoard(2, 2)
    key = Collectible(CollectibleType.KEY_GREEN, (0, 1))
    b.add_collectible(key)
    assert b.get_collectible((0, 1)) == key
    assert b.get_collectible((1, 1)) is None
    assert b.remove_collectible((0, 1)) == key
    assert b.remove_collectible((0, 1)) is None
    assert b.all_collectibles() == []


def test_clear_items_leaves_walls():
    b = corridor_board(4)
    b.place_blocker_pair((0, 1), Direction.EAST, BlockerType.DOOR_RED)
    b.add_collectible(Collectible(CollectibleType.KEY_RED, (0, 1)))
    b.clear_items()
    assert b.all_blockers() == [] and b.all_collectibles() == []
    assert b.open_passage_count() == 3


def test_reveal_from_spreads_one_hop_through_unblocked_passages():
    b = corridor_board(4)
    b.place_blocker_pair((0, 1), Direction.EAST, BlockerType.DOOR_RED)
    b.reveal_from((0, 1))
    assert b.revealed_cells() == [(0, 0), (0, 1)]
    assert not b.is_revealed((0, 2))
    b.clear_blocker_pair((0, 1), Direction.EAST)
    b.reveal_from((0, 1))
    assert b.revealed_cells() == [(0, 0), (0, 1), (0, 2)]
    assert b.revealed_count == 3


def test_reveal_ignores_out_of_bounds():
    b = MazeBoard(2, 2)
    b.reveal_cell((5, 5))
    assert b.revealed_count == 0


def test_walled_neighbor_not_revealed():
    b = MazeBoard(2, 2)
    b.reveal_from((0, 0))
    assert b.revealed_cells() == [(0, 0)]


def test_is_exit():
    b = MazeBoard(4, 5)
    assert b.is_exit((3, 4))
    assert not b.is_exit((0, 0))


def test_snapshot_hides_fogged_cells_and_exit():
    b = corridor_board(3)
    b.add_collectible(Collectible(CollectibleType.DYNAMITE, (0, 2)))
    b.reveal_from((0, 0))
    snap = b.to_dict()
    assert snap["exit"] is None
    assert [c["pos"] for c in snap["cells"]] == [[0, 0], [0, 1]]
    assert snap["collectibles"] == []
    full = b.to_dict(reveal_all=True)
    assert full["exit"] == [0, 2]
    assert full["collectibles"] == [{"type": "dynamite", "position": [0, 2]}]


def test_render_ascii_marks_start_exit_items_and_gates():
    b = corridor_board(4)
    b.add_collectible(Collectible(CollectibleType.KEY_BLUE, (0, 1)))
    b.place_blocker_pair((0, 2), Direction.EAST, BlockerType.DOOR_BLUE)
    text = b.render_ascii()
    lines = text.splitlines()
    assert len(lines) == 3
    assert lines[0] == "+---+---+---+---+"
    assert lines[1] == "| S   b     B E |"
    assert "@" in b.render_ascii(player=(0, 1))


@pytest.mark.parametrize("rows,cols", [(1, 1), (1, 7), (6, 1), (5, 9)])
def test_total_cells(rows, cols):
    assert MazeBoard(rows, cols).total_cells == rows * cols
