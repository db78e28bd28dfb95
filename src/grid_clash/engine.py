"""Action resolver for Grid Clash.

Rules:
- Move: one orthogonal step for 1 energy. Landing on an energy cell refunds it.
  Standing on one of your jump cells you may jump diagonally to the other one,
  once per turn. Moving onto the opponent captures them and ends the game.
- Hit: every wall in the eight surrounding cells loses 1 hp; an orthogonally
  adjacent opponent is pushed one cell away unless the edge or a wall stops
  them. Pushing the opponent onto your own base wins. The n-th hit of a turn
  costs n energy and no more hits than your current energy are allowed.
- Wall: 1 energy, on an orthogonal neighbour that is not a base, a jump cell,
  a token or an existing wall, as long as the bases stay connected. Placing a
  wall locks the rest of your turn.

Every function here is pure: a rejected action returns the input state and
an accepted one returns a fresh copy.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from . import board
from .connectivity import has_path
from .types import (
    ActionResult,
    Coord,
    ErrorKind,
    GameState,
    Hit,
    Move,
    PlaceWall,
    Player,
    Wall,
)

logger = logging.getLogger(__name__)


def new_game(first: Player = Player.RED) -> GameState:
    """Create a new game with both tokens on their bases and no walls."""

    return GameState(
        current_player=first,
        positions={player: board.home_base(player) for player in Player},
        walls={},
        energy={player: board.START_ENERGY for player in Player},
        used_jump={player: False for player in Player},
    )


def reject(state: GameState, error: ErrorKind) -> ActionResult:
    logger.debug("%s action rejected: %s", state.current_player.name, error.name)
    return ActionResult(state=state, error=error)


def _coerce_target(target) -> Optional[Coord]:
    if isinstance(target, list):
        target = tuple(target)
    if not board.is_on_board(target):
        return None
    return target


def hit_cost(hits_this_turn: int) -> int:
    """Energy charged for the next hit given how many were already made this turn."""

    return 1 + hits_this_turn


def _is_jump(state: GameState, player: Player, target: Coord) -> bool:
    cells = board.jump_cells(player)
    here = state.positions[player]
    return here in cells and target in cells and target != here


def _move(state: GameState, action: Move) -> ActionResult:
    player = state.current_player
    target = _coerce_target(action.target)
    if target is None:
        return reject(state, ErrorKind.ILLEGAL_DESTINATION)

    here = state.positions[player]
    diagonal = False
    if target not in board.orthogonal_neighbors(here):
        if not _is_jump(state, player, target):
            return reject(state, ErrorKind.ILLEGAL_DESTINATION)
        if state.used_jump[player]:
            return reject(state, ErrorKind.JUMP_ALREADY_USED)
        diagonal = True

    if state.wall_at(target) is not None:
        return reject(state, ErrorKind.ILLEGAL_DESTINATION)
    if state.energy[player] == 0:
        return reject(state, ErrorKind.OUT_OF_ENERGY)

    next_state = state.clone()
    next_state.positions[player] = target

    if target == state.positions[player.opponent()]:
        next_state.game_over = True
        next_state.winner = player
        logger.info("%s captures %s at %s", player.name, player.opponent().name, target)
        return ActionResult(state=next_state)

    energy = state.energy[player] - 1
    if board.is_energy_cell(target):
        energy += 1
    next_state.energy[player] = min(board.MAX_ENERGY, energy)
    if diagonal:
        next_state.used_jump[player] = True
    return ActionResult(state=next_state)


def _knockback_landing(state: GameState, attacker: Coord, victim: Coord) -> Coord:
    dr, dc = victim[0] - attacker[0], victim[1] - attacker[1]
    landing = (victim[0] + dr, victim[1] + dc)
    if board.is_on_board(landing) and state.wall_at(landing) is None:
        return landing
    return victim


def _hit(state: GameState) -> ActionResult:
    player = state.current_player
    energy = state.energy[player]
    if energy == 0:
        return reject(state, ErrorKind.OUT_OF_ENERGY)
    if state.hits_this_turn >= energy:
        return reject(state, ErrorKind.HIT_LIMIT_REACHED)
    cost = hit_cost(state.hits_this_turn)

    next_state = state.clone()
    here = state.positions[player]

    # Damage lands before the knockback so a wall broken by this hit no longer blocks it.
    for cell in board.surrounding_cells(here):
        wall = next_state.walls.get(cell)
        if wall is None:
            continue
        if wall.hp <= 1:
            del next_state.walls[cell]
        else:
            next_state.walls[cell] = replace(wall, hp=wall.hp - 1)

    opponent = player.opponent()
    there = state.positions[opponent]
    if there in board.orthogonal_neighbors(here):
        landing = _knockback_landing(next_state, here, there)
        next_state.positions[opponent] = landing
        if landing == board.home_base(player):
            next_state.game_over = True
            next_state.winner = player
            logger.info("%s knocks %s onto its base", player.name, opponent.name)

    next_state.energy[player] = energy - cost
    next_state.hits_this_turn += 1
    return ActionResult(state=next_state)


def _place_wall(state: GameState, action: PlaceWall) -> ActionResult:
    player = state.current_player
    if state.energy[player] == 0:
        return reject(state, ErrorKind.OUT_OF_ENERGY)
    target = _coerce_target(action.target)
    if target is None:
        return reject(state, ErrorKind.ILLEGAL_DESTINATION)
    if target not in board.orthogonal_neighbors(state.positions[player]):
        return reject(state, ErrorKind.ILLEGAL_DESTINATION)
    if (
        target in state.walls
        or board.is_base_cell(target)
        or board.is_jump_cell(target)
        or target in state.positions.values()
    ):
        return reject(state, ErrorKind.CELL_OCCUPIED_OR_RESERVED)

    candidate = dict(state.walls)
    candidate[target] = Wall(position=target, owner=player, hp=board.WALL_HP)
    if not has_path(candidate):
        return reject(state, ErrorKind.WALL_WOULD_DISCONNECT_BASES)

    next_state = state.clone()
    next_state.walls = candidate
    next_state.energy[player] -= 1
    next_state.actions_locked = True
    next_state.last_action_was_wall = True
    return ActionResult(state=next_state)


def resolve_action(state: GameState, action) -> ActionResult:
    """Resolve a move, hit or wall placement for the current player.

    Ending the turn is handled by :func:`grid_clash.turns.end_turn`; anything
    that is not one of the three in-turn actions is rejected.
    """

    if state.game_over:
        return reject(state, ErrorKind.GAME_ALREADY_OVER)
    if state.actions_locked:
        return reject(state, ErrorKind.ACTIONS_LOCKED_THIS_TURN)
    if isinstance(action, Move):
        return _move(state, action)
    if isinstance(action, Hit):
        return _hit(state)
    if isinstance(action, PlaceWall):
        return _place_wall(state, action)
    return reject(state, ErrorKind.ILLEGAL_DESTINATION)


def winner(state: GameState) -> Optional[Player]:
    """Return the winner if the game is terminal."""

    return state.winner if state.game_over else None


def is_terminal(state: GameState) -> bool:
    """Whether the state represents a finished game."""

    return state.game_over


def check_invariants(state: GameState) -> List[str]:
    """Return a description of every state invariant that does not hold."""

    problems: List[str] = []
    for player in Player:
        pos = state.positions.get(player)
        if not board.is_on_board(pos):
            problems.append(f"{player.name} token off board: {pos}")
        energy = state.energy.get(player)
        if type(energy) is not int or not 0 <= energy <= board.MAX_ENERGY:
            problems.append(f"{player.name} energy out of range: {energy}")

    tokens = set(state.positions.values())
    for coord, wall in state.walls.items():
        if wall.position != coord:
            problems.append(f"wall keyed at {coord} but positioned at {wall.position}")
        if not board.is_on_board(coord):
            problems.append(f"wall off board: {coord}")
        if not 1 <= wall.hp <= board.WALL_HP:
            problems.append(f"wall at {coord} has hp {wall.hp}")
        if board.is_base_cell(coord) or board.is_jump_cell(coord):
            problems.append(f"wall on reserved cell {coord}")
        if coord in tokens:
            problems.append(f"wall on token cell {coord}")

    if not has_path(state.walls):
        problems.append("bases are disconnected")

    if not 0 <= state.hits_this_turn <= board.MAX_ENERGY:
        problems.append(f"hit count out of range: {state.hits_this_turn}")
    if state.actions_locked != state.last_action_was_wall:
        problems.append("turn lock without a wall placement")
    if state.game_over != (state.winner is not None):
        problems.append("game_over and winner disagree")
    if not state.game_over and state.positions.get(Player.RED) == state.positions.get(Player.BLUE):
        problems.append("tokens share a cell outside a capture")
    return problems
