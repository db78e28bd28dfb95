"""Core data structures for Grid Clash.

Rule reminders:
- Board is 4 rows by 5 columns with coordinates (r, c) from top-left.
- Red starts on its base (0,0); Blue starts on its base (3,4).
- Energy never leaves [0, 2]; walls are created with 2 hit points.
- Walls may never seal the two bases off from each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple, Union


Coord = Tuple[int, int]


class Player(Enum):
    """Players in the game."""

    RED = auto()
    BLUE = auto()

    def opponent(self) -> "Player":
        """Return the opposing player."""

        return Player.RED if self is Player.BLUE else Player.BLUE


@dataclass(frozen=True)
class Wall:
    """A wall occupying one cell. Removed from the board when ``hp`` reaches 0."""

    position: Coord
    owner: Player
    hp: int


@dataclass(frozen=True)
class Move:
    """Step to an orthogonal neighbour, or jump between the mover's jump cells."""

    target: Coord


@dataclass(frozen=True)
class Hit:
    """Damage every wall around the mover and knock back an adjacent opponent."""


@dataclass(frozen=True)
class PlaceWall:
    """Build a wall on an orthogonal neighbour of the mover. Locks the rest of the turn."""

    target: Coord


@dataclass(frozen=True)
class EndTurn:
    """Hand play to the opponent and refill their energy."""


Action = Union[Move, Hit, PlaceWall, EndTurn]


class ErrorKind(Enum):
    """Reasons an action can be rejected. Rejections never change the state."""

    OUT_OF_ENERGY = auto()
    ILLEGAL_DESTINATION = auto()
    JUMP_ALREADY_USED = auto()
    HIT_LIMIT_REACHED = auto()
    WALL_WOULD_DISCONNECT_BASES = auto()
    CELL_OCCUPIED_OR_RESERVED = auto()
    ACTIONS_LOCKED_THIS_TURN = auto()
    GAME_ALREADY_OVER = auto()
    ENERGY_REMAINING = auto()


def _per_player(value) -> Dict[Player, object]:
    return {Player.RED: value, Player.BLUE: value}


@dataclass
class GameState:
    """Complete game state for Grid Clash.

    ``walls`` maps a cell to the wall standing on it, so at most one wall can
    occupy a cell. ``last_action_was_wall`` is consumed by the next end of turn
    to decide how much energy the opponent receives.
    """

    current_player: Player
    positions: Dict[Player, Coord]
    walls: Dict[Coord, Wall] = field(default_factory=dict)
    energy: Dict[Player, int] = field(default_factory=lambda: _per_player(0))
    used_jump: Dict[Player, bool] = field(default_factory=lambda: _per_player(False))
    hits_this_turn: int = 0
    actions_locked: bool = False
    last_action_was_wall: bool = False
    game_over: bool = False
    winner: Optional[Player] = None

    def clone(self) -> "GameState":
        """Return a deep copy of the state."""

        return GameState(
            current_player=self.current_player,
            positions=dict(self.positions),
            walls=dict(self.walls),
            energy=dict(self.energy),
            used_jump=dict(self.used_jump),
            hits_this_turn=self.hits_this_turn,
            actions_locked=self.actions_locked,
            last_action_was_wall=self.last_action_was_wall,
            game_over=self.game_over,
            winner=self.winner,
        )

    def position_of(self, player: Player) -> Coord:
        return self.positions[player]

    def energy_of(self, player: Player) -> int:
        return self.energy[player]

    def wall_at(self, coord: Coord) -> Optional[Wall]:
        wall = self.walls.get(coord)
        if wall is None or wall.hp <= 0:
            return None
        return wall


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an action: the resulting state and the rejection reason, if any."""

    state: GameState
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None
