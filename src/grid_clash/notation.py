"""Text notation for squares, actions and game records.

A game record looks like::

    # Friendly match
    FIRST:R
    1:R;M:B1
    2:R;E
    3:B;H
    4:B;E

Each action line is ``ply:COLOR;ACTION`` where ``ACTION`` is one of ``M:<sq>``,
``H``, ``W:<sq>`` or ``E``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from . import board
from .types import Action, Coord, EndTurn, GameState, Hit, Move, PlaceWall, Player

COLUMNS = "ABCDE"
ROWS = "1234"

_COLOR_CODES = {Player.RED: "R", Player.BLUE: "B"}


def rc_to_sq(r: int, c: int) -> str:
    """Convert 0-based row/col to a square string (e.g., 0,0 -> "A1")."""

    if not (0 <= r < len(ROWS) and 0 <= c < len(COLUMNS)):
        raise ValueError(f"row/col out of bounds: {(r, c)}")
    return f"{COLUMNS[c]}{ROWS[r]}"


def sq_to_rc(sq: str) -> Coord:
    """Convert a square string (e.g., "C3") to 0-based row/col."""

    if not sq or len(sq) != 2:
        raise ValueError(f"Invalid square '{sq}'")
    col_char = sq[0].upper()
    row_part = sq[1:]
    if col_char not in COLUMNS:
        raise ValueError(f"Invalid column in square '{sq}'")
    if row_part not in ROWS:
        raise ValueError(f"Invalid row in square '{sq}'")
    return ROWS.index(row_part), COLUMNS.index(col_char)


def color_code(player: Player) -> str:
    return _COLOR_CODES[player]


def parse_color(code: str) -> Player:
    for player, value in _COLOR_CODES.items():
        if code.strip().upper() == value:
            return player
    raise ValueError(f"Invalid color '{code}'")


def format_action(action: Action) -> str:
    """Serialize an action to its short form (``M:B2``, ``H``, ``W:C3``, ``E``)."""

    if isinstance(action, Move):
        return f"M:{rc_to_sq(*action.target)}"
    if isinstance(action, Hit):
        return "H"
    if isinstance(action, PlaceWall):
        return f"W:{rc_to_sq(*action.target)}"
    if isinstance(action, EndTurn):
        return "E"
    raise ValueError(f"Unknown action {action!r}")


_ACTION_PATTERN = re.compile(r"^(?P<verb>MOVE|WALL|HIT|END|M|W|H|E)(?:\s*[:\s]\s*(?P<sq>[A-E][1-4]))?$")


def parse_action(raw: str) -> Action:
    """Parse an action string.

    Accepted examples (case-insensitive):
    - "M:B2" or "MOVE B2"
    - "W:C3" or "WALL C3"
    - "H" or "HIT"
    - "E" or "END"

    Raises:
        ValueError: if the text cannot be parsed.
    """

    text = raw.strip().upper()
    if not text:
        raise ValueError("Action text is empty")
    match = _ACTION_PATTERN.match(text)
    if not match:
        raise ValueError("Could not parse action; use formats like 'M:B2', 'W:C3', 'H' or 'E'")

    verb = match.group("verb")[0]
    square = match.group("sq")
    if verb in {"M", "W"}:
        if square is None:
            raise ValueError(f"Action '{raw.strip()}' needs a target square")
        target = sq_to_rc(square)
        return Move(target) if verb == "M" else PlaceWall(target)
    if square is not None:
        raise ValueError(f"Action '{raw.strip()}' takes no target square")
    return Hit() if verb == "H" else EndTurn()


@dataclass
class GameRecord:
    comments: List[str] = field(default_factory=list)
    first: Player = Player.RED
    actions: List[Tuple[int, Player, Action]] = field(default_factory=list)


def _parse_action_line(line: str) -> Tuple[int, Player, Action]:
    if ":" not in line or ";" not in line:
        raise ValueError(f"Invalid action line '{line}'")
    ply_str, rest = line.split(":", 1)
    color_str, action_part = rest.split(";", 1)
    try:
        ply = int(ply_str)
    except ValueError as exc:
        raise ValueError(f"Invalid ply number in '{line}'") from exc
    return ply, parse_color(color_str), parse_action(action_part)


def parse_record(text: str) -> GameRecord:
    """Parse record text into a structured ``GameRecord``."""

    comments: List[str] = []
    first = None
    actions: List[Tuple[int, Player, Action]] = []

    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped:
            continue
        if stripped.startswith("#"):
            comments.append(raw_line.rstrip())
            continue
        if stripped.upper().startswith("FIRST:"):
            first = parse_color(stripped.split(":", 1)[1])
            continue
        actions.append(_parse_action_line(stripped))

    if first is None:
        raise ValueError("Missing FIRST: line")
    return GameRecord(comments=comments, first=first, actions=actions)


def dump_record(record: GameRecord) -> str:
    """Serialize a ``GameRecord`` to text."""

    lines: List[str] = list(record.comments)
    lines.append(f"FIRST:{color_code(record.first)}")
    for ply, player, action in record.actions:
        lines.append(f"{ply}:{color_code(player)};{format_action(action)}")
    return "\n".join(lines) + "\n"


def _cell_label(state: GameState, coord: Coord) -> str:
    for player in Player:
        if state.positions[player] == coord:
            return f"[{color_code(player)}]"
    wall = state.wall_at(coord)
    if wall is not None:
        return f"#{wall.hp}{color_code(wall.owner).lower()}"
    if board.is_base_cell(coord):
        return " ^ "
    if board.is_jump_cell(coord):
        return " ~ "
    if board.is_energy_cell(coord):
        return " + "
    return " . "


def format_board(state: GameState) -> str:
    """Render the board as text: tokens, walls with their hp, and special cells."""

    lines: List[str] = ["    " + "   ".join(COLUMNS)]
    for r in range(board.BOARD_ROWS):
        cells = [_cell_label(state, (r, c)) for c in range(board.BOARD_COLS)]
        lines.append(f"{ROWS[r]}  " + " ".join(cells))
    lines.append(
        f"turn={state.current_player.name} "
        f"energy R={state.energy[Player.RED]} B={state.energy[Player.BLUE]} "
        f"hits={state.hits_this_turn} locked={'yes' if state.actions_locked else 'no'}"
    )
    return "\n".join(lines)
