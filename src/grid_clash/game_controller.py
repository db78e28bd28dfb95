"""Game controller utilities for UI-driven or scripted play.

This module keeps UI concerns separate from core game logic so the
underlying sequencing, history and statistics can be tested without a UI.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from . import engine, turns
from .notation import GameRecord, dump_record, parse_action
from .snapshot import deserialize, serialize
from .types import Action, EndTurn, ErrorKind, GameState, Hit, Move, PlaceWall, Player

logger = logging.getLogger(__name__)


def _per_player_counter() -> Dict[Player, int]:
    return {Player.RED: 0, Player.BLUE: 0}


@dataclass
class GameStats:
    """End-of-game summary figures."""

    moves_made: Dict[Player, int] = field(default_factory=_per_player_counter)
    walls_placed: Dict[Player, int] = field(default_factory=_per_player_counter)
    hit_count: Dict[Player, int] = field(default_factory=_per_player_counter)
    walls_broken: int = 0
    turns_played: int = 0


class GameController:
    """Manage a single Grid Clash game, including history and statistics."""

    def __init__(self, first: Optional[Player] = None, rng: Optional[random.Random] = None) -> None:
        self.state: GameState
        self.first: Player
        self.history: List[Tuple[Player, Action]]
        self.stats: GameStats
        self.resumed: bool
        self.new_game(first=first, rng=rng)

    def new_game(self, first: Optional[Player] = None, rng: Optional[random.Random] = None) -> None:
        """Start a new game. Without ``first`` the starting color is drawn at random."""

        if first is None:
            generator = rng or random.Random()
            first = generator.choice([Player.RED, Player.BLUE])
        self.first = first
        self.state = engine.new_game(first=first)
        self.resumed = False
        self.history = []
        self.stats = GameStats()
        logger.info("new game, %s moves first", first.name)

    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def winner(self) -> Optional[Player]:
        return engine.winner(self.state)

    def legal_targets(self) -> turns.LegalTargets:
        return turns.legal_targets(self.state)

    def apply(self, action: Action) -> Optional[ErrorKind]:
        """Apply an action for the current player. Returns the rejection reason, if any."""

        player = self.state.current_player
        before = self.state
        result = turns.apply(before, action)
        if not result.ok:
            return result.error
        self.state = result.state
        self.history.append((player, action))
        self._record_stats(player, action, before, result.state)
        return None

    def end_turn(self) -> Optional[ErrorKind]:
        return self.apply(EndTurn())

    def apply_text_action(self, raw: str) -> Optional[ErrorKind]:
        """Parse and apply an action string such as ``M:B2`` or ``W:C3``.

        Raises:
            ValueError: if the text cannot be parsed.
        """

        return self.apply(parse_action(raw))

    def _record_stats(self, player: Player, action: Action, before: GameState, after: GameState) -> None:
        if isinstance(action, Move):
            self.stats.moves_made[player] += 1
        elif isinstance(action, PlaceWall):
            self.stats.walls_placed[player] += 1
        elif isinstance(action, Hit):
            self.stats.hit_count[player] += 1
            self.stats.walls_broken += len(set(before.walls) - set(after.walls))
        elif isinstance(action, EndTurn):
            self.stats.turns_played += 1
        if after.game_over:
            # The winning turn counts even though it is never ended.
            self.stats.turns_played += 1

    def to_record(self, comments: Optional[List[str]] = None) -> str:
        """Serialize the accepted actions so far to record text.

        Raises:
            ValueError: if the game was resumed from a snapshot, since a record
                must start from the initial position.
        """

        if self.resumed:
            raise ValueError("game was resumed from a snapshot and has no complete record")

        actions = [(ply, player, action) for ply, (player, action) in enumerate(self.history, start=1)]
        record = GameRecord(comments=list(comments or []), first=self.first, actions=actions)
        return dump_record(record)

    def snapshot(self) -> bytes:
        return serialize(self.state)

    def load_snapshot(self, data: bytes) -> None:
        """Replace the current state with a received snapshot.

        History and statistics restart because the snapshot carries no history.
        A corrupt snapshot yields a fresh game.
        """

        self.state = deserialize(data, first=self.first)
        self.first = self.state.current_player
        self.resumed = True
        self.history = []
        self.stats = GameStats()
