"""Static geometry of the 4x5 Grid Clash board.

Layout (row 0 at the top)::

    A     B     C     D     E
  1 BASE  JMP   .     .     NRG
  2 JMP   .     NRG   .     .
  3 .     .     NRG   .     jmp
  4 NRG   .     .     jmp   base

Upper-case markers belong to Red, lower-case to Blue. Everything here is a
pure lookup; nothing depends on a game state.
"""

from __future__ import annotations

from typing import List, Tuple

from .types import Coord, Player

BOARD_ROWS = 4
BOARD_COLS = 5

MAX_ENERGY = 2
START_ENERGY = 1
WALL_HP = 2

HOME_BASES = {
    Player.RED: (0, 0),
    Player.BLUE: (3, 4),
}
JUMP_CELLS = {
    Player.RED: ((1, 0), (0, 1)),
    Player.BLUE: ((2, 4), (3, 3)),
}
ENERGY_CELLS: Tuple[Coord, ...] = ((0, 4), (3, 0), (1, 2), (2, 2))

ORTHOGONAL_STEPS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_STEPS: Tuple[Coord, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def is_on_board(pos) -> bool:
    """Whether ``pos`` is a well-formed ``(row, col)`` pair inside the board."""

    if not isinstance(pos, tuple) or len(pos) != 2:
        return False
    r, c = pos
    if type(r) is not int or type(c) is not int:
        return False
    return 0 <= r < BOARD_ROWS and 0 <= c < BOARD_COLS


def all_cells() -> List[Coord]:
    return [(r, c) for r in range(BOARD_ROWS) for c in range(BOARD_COLS)]


def home_base(player: Player) -> Coord:
    return HOME_BASES[player]


def jump_cells(player: Player) -> Tuple[Coord, Coord]:
    return JUMP_CELLS[player]


def is_jump_cell(pos: Coord) -> bool:
    return any(pos in cells for cells in JUMP_CELLS.values())


def is_energy_cell(pos: Coord) -> bool:
    return pos in ENERGY_CELLS


def is_base_cell(pos: Coord) -> bool:
    return pos in HOME_BASES.values()


def _offsets(pos: Coord, steps: Tuple[Coord, ...]) -> List[Coord]:
    r, c = pos
    cells = [(r + dr, c + dc) for dr, dc in steps]
    return [cell for cell in cells if is_on_board(cell)]


def orthogonal_neighbors(pos: Coord) -> List[Coord]:
    return _offsets(pos, ORTHOGONAL_STEPS)


def diagonal_neighbors(pos: Coord) -> List[Coord]:
    return _offsets(pos, DIAGONAL_STEPS)


def surrounding_cells(pos: Coord) -> List[Coord]:
    """Return the up to eight in-bounds cells around ``pos``."""

    return orthogonal_neighbors(pos) + diagonal_neighbors(pos)
