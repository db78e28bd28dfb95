from grid_clash import engine, turns
from grid_clash.types import EndTurn, ErrorKind, Hit, Move, PlaceWall, Player


def play(state, *actions):
    for action in actions:
        result = turns.apply(state, action)
        assert result.ok, (action, result.error)
        state = result.state
    return state


def test_capture_by_walking_onto_opponent():
    state = engine.new_game(first=Player.RED)
    state = play(state, Move((0, 1)), EndTurn(), Move((3, 3)), EndTurn())
    state = play(state, Move((0, 2)), EndTurn(), Hit(), EndTurn())
    state = play(state, Move((0, 3)), EndTurn(), Hit(), EndTurn())
    # (0, 4) is an energy cell, so Red keeps its energy and steps again.
    state = play(state, Move((0, 4)), Move((1, 4)), EndTurn(), Hit(), EndTurn())
    state = play(state, Move((2, 4)), EndTurn())
    # Blue walls instead of hitting, which hands Red two energy.
    state = play(state, PlaceWall((3, 2)), EndTurn())
    assert state.energy[Player.RED] == 2

    state = play(state, Move((3, 4)))
    result = turns.apply(state, Move((3, 3)))

    assert result.ok
    final = result.state
    assert final.game_over
    assert final.winner is Player.RED
    assert engine.winner(final) is Player.RED
    assert engine.is_terminal(final)
    assert final.positions[Player.RED] == final.positions[Player.BLUE] == (3, 3)
    assert final.energy[Player.RED] == 1
    assert engine.check_invariants(final) == []


def test_capture_with_jump():
    state = engine.new_game(first=Player.BLUE)
    state.positions = {Player.RED: (2, 4), Player.BLUE: (3, 3)}

    result = turns.apply(state, Move((2, 4)))

    assert result.state.winner is Player.BLUE
    assert result.state.energy[Player.BLUE] == 1


def test_finished_game_accepts_nothing():
    state = engine.new_game(first=Player.RED)
    state.positions = {Player.RED: (0, 0), Player.BLUE: (0, 1)}
    final = turns.apply(state, Move((0, 1))).state
    assert final.game_over

    for action in [Move((1, 0)), Hit(), PlaceWall((2, 2)), EndTurn()]:
        result = turns.apply(final, action)
        assert result.error is ErrorKind.GAME_ALREADY_OVER
        assert result.state is final
