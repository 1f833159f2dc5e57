"""Breadth-first searches over a maze board.

Wall-only searches (``bfs_distances``, ``shortest_path``) measure raw topology
and ignore blockers. ``is_solvable`` searches the augmented state space
(position, held item) so it can simulate picking up collectibles and spending
them on matching blockers without touching the board.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple

from .board import START, MazeBoard
from .directions import DIRECTIONS, OFFSETS, Direction, Position
from .items import CollectibleType, can_unlock


class Passage(NamedTuple):
    pos: Position
    dir: Direction


def bfs_distances(board: MazeBoard, start: Position = START) -> Dict[Position, int]:
    """Step count from ``start`` to every reachable cell, walls only."""
    dist = {tuple(start): 0}
    q = deque([tuple(start)])
    while q:
        cur = q.popleft()
        for d in board.open_directions(cur):
            nxt = board.neighbor(cur, d)
            if nxt is None or nxt in dist:
                continue
            dist[nxt] = dist[cur] + 1
            q.append(nxt)
    return dist


def reachable_cells(board: MazeBoard, start: Position = START, respect_blockers: bool = False) -> Set[Position]:
    seen = {tuple(start)}
    q = deque([tuple(start)])
    while q:
        cur = q.popleft()
        dirs = board.passable_directions(cur) if respect_blockers else board.open_directions(cur)
        for d in dirs:
            nxt = board.neighbor(cur, d)
            if nxt is not None and nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def shortest_path(board: MazeBoard, start: Position = START, end: Optional[Position] = None) -> Optional[List[Position]]:
    """Cells from ``start`` to ``end`` (inclusive) along a wall-only shortest path, or None."""
    start = tuple(start)
    end = tuple(end) if end is not None else board.exit
    parent: Dict[Position, Optional[Position]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == end:
            path = []
            node: Optional[Position] = cur
            while node is not None:
                path.append(node)
                node = parent[node]
            path.reverse()
            return path
        for d in board.open_directions(cur):
            nxt = board.neighbor(cur, d)
            if nxt is None or nxt in parent:
                continue
            parent[nxt] = cur
            q.append(nxt)
    return None


def direction_between(a: Position, b: Position) -> Optional[Direction]:
    for d in DIRECTIONS:
        dr, dc = OFFSETS[d]
        if a[0] + dr == b[0] and a[1] + dc == b[1]:
            return d
    return None


def path_to_passages(path: List[Position]) -> List[Passage]:
    out = []
    for a, b in zip(path, path[1:]):
        d = direction_between(a, b)
        if d is not None:
            out.append(Passage(a, d))
    return out


_State = Tuple[Position, Optional[CollectibleType]]


def is_solvable(board: MazeBoard, start: Position = START) -> bool:
    """Whether the exit is reachable once keys/dynamite and blockers are modeled.

    State is (position, held item). Each queued entry also carries the cells it
    has already looted (so a branch cannot pick the same collectible twice) and
    the gates it has opened (so walking back through them is free). The visited
    set is keyed by state only, which keeps the search bounded by
    ``cells * (item types + 1)``.
    """
    exit_pos = board.exit
    origin: _State = (tuple(start), None)
    visited: Set[_State] = {origin}
    empty: FrozenSet = frozenset()
    q = deque([(origin, empty, empty)])

    def push(state: _State, looted: FrozenSet[Position], opened: FrozenSet):
        if state not in visited:
            visited.add(state)
            q.append((state, looted, opened))

    while q:
        (pos, held), looted, opened = q.popleft()
        if pos == exit_pos:
            return True
        item = board.get_collectible(pos)
        if item is not None and held is None and pos not in looted:
            push((pos, item.type), looted | {pos}, opened)
        for d in board.open_directions(pos):
            nxt = board.neighbor(pos, d)
            if nxt is None:
                continue
            gate = frozenset((pos, nxt))
            blocker = board.get_blocker(pos, d)
            if blocker is None or gate in opened:
                push((nxt, held), looted, opened)
            elif can_unlock(held, blocker.type):
                # Item is spent; the gate is only cleared on this branch.
                push((nxt, None), looted, opened | {gate})
    return False


__all__ = [
    "Passage",
    "bfs_distances",
    "reachable_cells",
    "shortest_path",
    "direction_between",
    "path_to_passages",
    "is_solvable",
]
