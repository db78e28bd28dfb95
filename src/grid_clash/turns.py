"""Turn controller: the entry points a UI or network layer calls.

``apply`` runs one action through the resolver, ``end_turn`` hands play to the
opponent and refills their energy. The opponent gets 2 energy if the player
who just finished placed a wall that turn, otherwise 1; the refill replaces
whatever they had banked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from . import board, engine
from .types import ActionResult, Coord, EndTurn, ErrorKind, GameState, Hit, Move, PlaceWall

logger = logging.getLogger(__name__)


def end_turn_error(state: GameState) -> Optional[ErrorKind]:
    """Return why the current player may not end their turn, or None if they may."""

    if state.game_over:
        return ErrorKind.GAME_ALREADY_OVER
    if not state.actions_locked and state.energy[state.current_player] > 0:
        return ErrorKind.ENERGY_REMAINING
    return None


def end_turn(state: GameState) -> ActionResult:
    error = end_turn_error(state)
    if error is not None:
        return engine.reject(state, error)

    incoming = state.current_player.opponent()
    refill = 2 if state.last_action_was_wall else 1

    next_state = state.clone()
    next_state.current_player = incoming
    next_state.energy[incoming] = min(board.MAX_ENERGY, refill)
    next_state.used_jump[incoming] = False
    next_state.hits_this_turn = 0
    next_state.actions_locked = False
    next_state.last_action_was_wall = False
    logger.debug("turn passes to %s with %d energy", incoming.name, next_state.energy[incoming])
    return ActionResult(state=next_state)


def apply(state: GameState, action) -> ActionResult:
    """Attempt one action. Never raises; a rejection returns ``state`` unchanged."""

    if isinstance(action, EndTurn):
        return end_turn(state)
    return engine.resolve_action(state, action)


@dataclass
class LegalTargets:
    """What the current player may do right now."""

    moves: List[Coord] = field(default_factory=list)
    wall_placements: List[Coord] = field(default_factory=list)
    hit_targets: List[Coord] = field(default_factory=list)
    can_hit: bool = False
    can_end_turn: bool = False


def legal_targets(state: GameState) -> LegalTargets:
    """Enumerate accepted actions by asking the resolver about every cell."""

    cells = board.all_cells()
    here = state.positions[state.current_player]
    return LegalTargets(
        moves=[cell for cell in cells if engine.resolve_action(state, Move(cell)).ok],
        wall_placements=[cell for cell in cells if engine.resolve_action(state, PlaceWall(cell)).ok],
        hit_targets=[cell for cell in board.surrounding_cells(here) if state.wall_at(cell) is not None],
        can_hit=engine.resolve_action(state, Hit()).ok,
        can_end_turn=end_turn_error(state) is None,
    )
