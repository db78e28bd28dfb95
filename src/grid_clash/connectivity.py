"""Reachability between the two home bases.

A single new wall can complete a blockade built up from several earlier ones,
so this check always runs against the full hypothetical wall set.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Mapping, Set, Union

from .board import home_base, orthogonal_neighbors
from .types import Coord, Player, Wall

WallSet = Union[Mapping[Coord, Wall], Iterable[Wall]]


def _blocked_cells(walls: WallSet) -> Set[Coord]:
    items = walls.values() if isinstance(walls, Mapping) else walls
    return {wall.position for wall in items if wall.hp > 0}


def has_path(walls: WallSet) -> bool:
    """Return True if Blue's base can be reached from Red's base.

    Traversal is orthogonal only and may not enter a cell holding a wall with
    hit points left. ``walls`` may be a position-keyed mapping or any iterable
    of :class:`Wall`.
    """

    blocked = _blocked_cells(walls)
    start = home_base(Player.RED)
    goal = home_base(Player.BLUE)

    visited = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return True
        for nxt in orthogonal_neighbors(cell):
            if nxt in visited or nxt in blocked:
                continue
            visited.add(nxt)
            queue.append(nxt)
    return False
