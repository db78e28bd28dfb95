import random

import pytest

from grid_clash import engine, replay
from grid_clash.game_controller import GameController
from grid_clash.notation import parse_record
from grid_clash.types import ErrorKind, Hit, Move, Player, Wall


def test_random_first_player_is_seeded():
    first_a = GameController(rng=random.Random(3)).first
    first_b = GameController(rng=random.Random(3)).first
    assert first_a is first_b
    seen = {GameController(rng=random.Random(seed)).first for seed in range(20)}
    assert seen == {Player.RED, Player.BLUE}


def test_explicit_first_player():
    controller = GameController(first=Player.BLUE)
    assert controller.current_player is Player.BLUE
    assert controller.state == engine.new_game(first=Player.BLUE)


def test_accepted_actions_recorded():
    controller = GameController(first=Player.RED)

    for text in ["M:B1", "E", "M:D4", "E", "W:C1"]:
        assert controller.apply_text_action(text) is None, text

    players = [player for player, _ in controller.history]
    assert players == [Player.RED, Player.RED, Player.BLUE, Player.BLUE, Player.RED]
    assert controller.stats.moves_made == {Player.RED: 1, Player.BLUE: 1}
    assert controller.stats.walls_placed[Player.RED] == 1
    assert controller.stats.turns_played == 2


def test_rejected_actions_not_recorded():
    controller = GameController(first=Player.RED)
    before = controller.state

    assert controller.apply_text_action("M:C1") is ErrorKind.ILLEGAL_DESTINATION
    assert controller.end_turn() is ErrorKind.ENERGY_REMAINING

    assert controller.history == []
    assert controller.state is before


def test_unparsable_text_raises():
    controller = GameController(first=Player.RED)
    with pytest.raises(ValueError):
        controller.apply_text_action("teleport")


def test_walls_broken_counted():
    controller = GameController(first=Player.RED)
    controller.state.walls[(1, 1)] = Wall(position=(1, 1), owner=Player.BLUE, hp=1)
    controller.state.walls[(0, 2)] = Wall(position=(0, 2), owner=Player.BLUE, hp=2)
    controller.state.positions[Player.RED] = (0, 1)

    assert controller.apply(Hit()) is None

    assert controller.stats.walls_broken == 1
    assert controller.stats.hit_count[Player.RED] == 1


def test_record_replays_to_same_state():
    controller = GameController(first=Player.RED)
    for text in ["M:B1", "E", "M:D4", "E", "W:C1", "E", "H", "M:C4"]:
        assert controller.apply_text_action(text) is None, text

    text = controller.to_record(comments=["# test"])
    state, winner = replay.replay_game(parse_record(text))

    assert state == controller.state
    assert winner is None
    assert text.startswith("# test\nFIRST:R\n")


def test_winning_turn_counted():
    controller = GameController(first=Player.RED)
    controller.state.positions[Player.BLUE] = (0, 1)

    assert controller.apply(Move((0, 1))) is None

    assert controller.game_over
    assert controller.winner is Player.RED
    assert controller.stats.turns_played == 1


def test_snapshot_round_trip_resumes_game():
    source = GameController(first=Player.RED)
    assert source.apply_text_action("M:B1") is None
    assert source.end_turn() is None

    peer = GameController(first=Player.RED)
    peer.load_snapshot(source.snapshot())

    assert peer.state == source.state
    assert peer.current_player is Player.BLUE
    assert peer.history == []
    with pytest.raises(ValueError):
        peer.to_record()


def test_corrupt_snapshot_starts_fresh_game():
    controller = GameController(first=Player.BLUE)
    controller.apply_text_action("H")
    controller.load_snapshot(b"not a snapshot")
    assert controller.state == engine.new_game(first=Player.BLUE)


def test_legal_targets_delegates_to_rules():
    controller = GameController(first=Player.BLUE)
    targets = controller.legal_targets()
    assert sorted(targets.moves) == [(2, 4), (3, 3)]
