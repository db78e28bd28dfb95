"""Hot-seat console session for two players sharing one terminal.

Usage: ``python -m grid_clash.play --first random --save-record game.txt``

Besides action text (``M:B2``, ``H``, ``W:C3``, ``E``) the session understands
``MOVES`` (list what is legal right now), ``SNAPSHOT`` (print the current
snapshot) and ``QUIT``.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Iterable, Optional

from .game_controller import GameController
from .notation import format_board, rc_to_sq
from .types import Player

logger = logging.getLogger(__name__)


class ConsoleSession:
    """Line-oriented hot-seat game over stdin/stdout."""

    def __init__(
        self,
        *,
        controller: Optional[GameController] = None,
        stdin=None,
        stdout=None,
        stderr=None,
        save_record: Optional[str] = None,
    ) -> None:
        self.controller = controller or GameController()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.save_record_path = save_record

    def _say(self, message: str) -> None:
        print(message, file=self.stdout)
        self.stdout.flush()

    def _prompt(self) -> None:
        self._say(format_board(self.controller.state))
        self._say(f"{self.controller.current_player.name}> ")

    def _show_moves(self) -> None:
        targets = self.controller.legal_targets()
        moves = ",".join(rc_to_sq(*cell) for cell in targets.moves) or "-"
        walls = ",".join(rc_to_sq(*cell) for cell in targets.wall_placements) or "-"
        self._say(f"move: {moves}")
        self._say(f"wall: {walls}")
        self._say(f"hit: {'yes' if targets.can_hit else 'no'}  end: {'yes' if targets.can_end_turn else 'no'}")

    def _show_stats(self) -> None:
        stats = self.controller.stats
        self._say(f"Winner: {self.controller.winner.name}")
        for player in Player:
            self._say(
                f"{player.name}: moves={stats.moves_made[player]} "
                f"walls={stats.walls_placed[player]} hits={stats.hit_count[player]}"
            )
        self._say(f"walls broken={stats.walls_broken} turns={stats.turns_played}")

    def _save_record(self) -> bool:
        if self.save_record_path is None:
            return True
        try:
            with open(self.save_record_path, "w", encoding="utf-8") as handle:
                handle.write(self.controller.to_record(comments=["# hot-seat console game"]))
        except (OSError, ValueError) as exc:
            print(f"record save failed: {exc}", file=self.stderr)
            return False
        return True

    def _handle(self, line: str) -> None:
        command = line.upper()
        if command == "MOVES":
            self._show_moves()
            return
        if command == "SNAPSHOT":
            self._say(self.controller.snapshot().decode("utf-8").rstrip())
            return
        try:
            error = self.controller.apply_text_action(line)
        except ValueError as exc:
            self._say(f"? {exc}")
            return
        if error is not None:
            self._say(f"rejected: {error.name}")

    def run(self) -> int:
        self._prompt()
        for raw_line in self.stdin:
            line = raw_line.strip()
            if not line:
                continue
            if line.upper() == "QUIT":
                break
            self._handle(line)
            if self.controller.game_over:
                self._say(format_board(self.controller.state))
                self._show_stats()
                break
            self._prompt()
        return 0 if self._save_record() else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play Grid Clash hot-seat in the terminal")
    parser.add_argument(
        "--first",
        choices=["red", "blue", "random"],
        default="random",
        help="Color that moves first",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for choosing the first player")
    parser.add_argument("--save-record", type=str, help="Path to write the game record when the session ends")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    first = None if args.first == "random" else Player[args.first.upper()]
    controller = GameController(first=first, rng=random.Random(args.seed))
    logger.debug("console session starting, save_record=%s", args.save_record)
    session = ConsoleSession(controller=controller, save_record=args.save_record)
    return session.run()


if __name__ == "__main__":
    sys.exit(main())
