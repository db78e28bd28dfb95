"""Replay game records and validate every action against the rules."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from . import engine, turns
from .notation import GameRecord, color_code, format_action, format_board, parse_record
from .types import GameState, Player


def replay_game(record: GameRecord, verbose: bool = False) -> Tuple[GameState, Optional[Player]]:
    """Replay a parsed record and return the final state and winner (if any)."""

    state = engine.new_game(first=record.first)

    for idx, (ply, player, action) in enumerate(record.actions):
        if ply != idx + 1:
            raise ValueError(f"Ply numbering mismatch at action {idx + 1}: expected {idx + 1}, got {ply}")
        expected = color_code(state.current_player)
        if player is not state.current_player:
            raise ValueError(f"Ply {ply} color mismatch: expected {expected}, got {color_code(player)}")
        result = turns.apply(state, action)
        if not result.ok:
            raise ValueError(f"Illegal action at ply {ply}: {expected} {format_action(action)} ({result.error.name})")
        state = result.state
        if verbose:
            print(f"Ply {ply}: {player.name} {format_action(action)}")
            print(format_board(state))
            print()

    return state, engine.winner(state)


def replay_file(path: str, verbose: bool = False) -> Tuple[GameState, Optional[Player]]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    record = parse_record(text)
    return replay_game(record, verbose=verbose)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a Grid Clash game record")
    parser.add_argument("--file", required=True, help="Path to game record file")
    parser.add_argument("--verbose", action="store_true", help="Print each board during replay")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        state, winner = replay_file(args.file, verbose=args.verbose)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if winner:
        print(f"Winner: {winner.name}")
    else:
        print("Winner: None (game not terminal)")
    print("Final board:")
    print(format_board(state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
