"""Snapshot codec for shipping a full game state between two processes.

A snapshot is UTF-8 text with one ``key=value`` pair per line::

    turn=R
    red=A1
    blue=E4
    energy=1,1
    jump=0,0
    hits=0
    locked=0
    wall_last=0
    over=0
    winner=-
    walls=C2:R:2;B3:B:1

Lines starting with ``#`` and unknown keys are ignored.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from . import engine
from .notation import color_code, parse_color, rc_to_sq, sq_to_rc
from .types import GameState, Player, Wall

logger = logging.getLogger(__name__)

REQUIRED_KEYS = (
    "turn",
    "red",
    "blue",
    "energy",
    "jump",
    "hits",
    "locked",
    "wall_last",
    "over",
    "winner",
    "walls",
)


def dump_snapshot(state: GameState) -> str:
    """Serialize every field of ``state`` to snapshot text."""

    walls = ";".join(
        f"{rc_to_sq(*coord)}:{color_code(wall.owner)}:{wall.hp}"
        for coord, wall in sorted(state.walls.items())
    )
    lines = [
        f"turn={color_code(state.current_player)}",
        f"red={rc_to_sq(*state.positions[Player.RED])}",
        f"blue={rc_to_sq(*state.positions[Player.BLUE])}",
        f"energy={state.energy[Player.RED]},{state.energy[Player.BLUE]}",
        f"jump={int(state.used_jump[Player.RED])},{int(state.used_jump[Player.BLUE])}",
        f"hits={state.hits_this_turn}",
        f"locked={int(state.actions_locked)}",
        f"wall_last={int(state.last_action_was_wall)}",
        f"over={int(state.game_over)}",
        f"winner={'-' if state.winner is None else color_code(state.winner)}",
        f"walls={walls}",
    ]
    return "\n".join(lines) + "\n"


def _parse_int(raw: str, key: str) -> int:
    text = raw.strip()
    if not text.isdigit():
        raise ValueError(f"'{key}' must be a non-negative integer, got '{raw}'")
    return int(text)


def _parse_flag(raw: str, key: str) -> bool:
    text = raw.strip()
    if text not in {"0", "1"}:
        raise ValueError(f"'{key}' must be 0 or 1, got '{raw}'")
    return text == "1"


def _parse_pair(raw: str, key: str) -> Tuple[str, str]:
    parts = raw.split(",")
    if len(parts) != 2:
        raise ValueError(f"'{key}' must hold two comma-separated values, got '{raw}'")
    return parts[0], parts[1]


def _parse_walls(raw: str) -> Dict[Tuple[int, int], Wall]:
    walls: Dict[Tuple[int, int], Wall] = {}
    for entry in (part.strip() for part in raw.split(";")):
        if not entry:
            continue
        fields = entry.split(":")
        if len(fields) != 3:
            raise ValueError(f"Invalid wall entry '{entry}'")
        coord = sq_to_rc(fields[0])
        if coord in walls:
            raise ValueError(f"duplicate wall at {fields[0]}")
        walls[coord] = Wall(position=coord, owner=parse_color(fields[1]), hp=_parse_int(fields[2], "walls"))
    return walls


def parse_snapshot(text: str) -> GameState:
    """Parse snapshot text strictly.

    Raises:
        ValueError: if a required key is missing, a value is malformed, or the
            decoded state breaks a game invariant.
    """

    values: Dict[str, str] = {}
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            raise ValueError(f"Invalid snapshot line '{stripped}'")
        key, value = stripped.split("=", 1)
        values[key.strip()] = value.strip()

    missing: List[str] = [key for key in REQUIRED_KEYS if key not in values]
    if missing:
        raise ValueError(f"snapshot missing keys: {missing}")

    red_energy, blue_energy = _parse_pair(values["energy"], "energy")
    red_jump, blue_jump = _parse_pair(values["jump"], "jump")
    winner: Optional[Player] = None
    if values["winner"] != "-":
        winner = parse_color(values["winner"])

    state = GameState(
        current_player=parse_color(values["turn"]),
        positions={Player.RED: sq_to_rc(values["red"]), Player.BLUE: sq_to_rc(values["blue"])},
        walls=_parse_walls(values["walls"]),
        energy={
            Player.RED: _parse_int(red_energy, "energy"),
            Player.BLUE: _parse_int(blue_energy, "energy"),
        },
        used_jump={
            Player.RED: _parse_flag(red_jump, "jump"),
            Player.BLUE: _parse_flag(blue_jump, "jump"),
        },
        hits_this_turn=_parse_int(values["hits"], "hits"),
        actions_locked=_parse_flag(values["locked"], "locked"),
        last_action_was_wall=_parse_flag(values["wall_last"], "wall_last"),
        game_over=_parse_flag(values["over"], "over"),
        winner=winner,
    )

    problems = engine.check_invariants(state)
    if problems:
        raise ValueError(f"snapshot violates game invariants: {'; '.join(problems)}")
    return state


def serialize(state: GameState) -> bytes:
    return dump_snapshot(state).encode("utf-8")


def deserialize(data: bytes, first: Player = Player.RED) -> GameState:
    """Decode a snapshot, falling back to a fresh game if it is corrupt or partial."""

    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else str(data)
        return parse_snapshot(text)
    except ValueError as exc:
        logger.warning("discarding unreadable snapshot, starting a new game: %s", exc)
        return engine.new_game(first=first)
