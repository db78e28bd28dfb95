"""Grid Clash game package."""

from .types import (
    Action,
    ActionResult,
    Coord,
    EndTurn,
    ErrorKind,
    GameState,
    Hit,
    Move,
    PlaceWall,
    Player,
    Wall,
)
from .board import (
    BOARD_COLS,
    BOARD_ROWS,
    MAX_ENERGY,
    WALL_HP,
    diagonal_neighbors,
    home_base,
    is_base_cell,
    is_energy_cell,
    is_jump_cell,
    is_on_board,
    jump_cells,
    orthogonal_neighbors,
    surrounding_cells,
)
from .connectivity import has_path
from .engine import check_invariants, is_terminal, new_game, resolve_action, winner
from .turns import LegalTargets, apply, end_turn, legal_targets
from .snapshot import deserialize, serialize
from .game_controller import GameController, GameStats

__all__ = [
    "Action",
    "ActionResult",
    "BOARD_COLS",
    "BOARD_ROWS",
    "Coord",
    "EndTurn",
    "ErrorKind",
    "GameController",
    "GameState",
    "GameStats",
    "Hit",
    "LegalTargets",
    "MAX_ENERGY",
    "Move",
    "PlaceWall",
    "Player",
    "WALL_HP",
    "Wall",
    "apply",
    "check_invariants",
    "deserialize",
    "diagonal_neighbors",
    "end_turn",
    "has_path",
    "home_base",
    "is_base_cell",
    "is_energy_cell",
    "is_jump_cell",
    "is_on_board",
    "is_terminal",
    "jump_cells",
    "legal_targets",
    "new_game",
    "orthogonal_neighbors",
    "resolve_action",
    "serialize",
    "surrounding_cells",
    "winner",
]
