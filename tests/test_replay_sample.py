from pathlib import Path

import pytest

from grid_clash import engine, replay
from grid_clash.notation import parse_record
from grid_clash.types import Player

SAMPLE = Path(__file__).parent / "data" / "sample_game.txt"


def test_replay_sample_file():
    state, winner = replay.replay_file(str(SAMPLE))

    assert winner == Player.RED
    assert engine.winner(state) == winner
    assert state.positions[Player.RED] == (3, 3)
    assert (3, 2) in state.walls


def test_replay_rejects_illegal_action():
    record = parse_record("FIRST:R\n1:R;M:C1\n")
    with pytest.raises(ValueError, match="ILLEGAL_DESTINATION"):
        replay.replay_game(record)


def test_replay_rejects_wrong_color():
    record = parse_record("FIRST:R\n1:B;H\n")
    with pytest.raises(ValueError, match="color mismatch"):
        replay.replay_game(record)


def test_replay_rejects_ply_gap():
    record = parse_record("FIRST:R\n1:R;M:B1\n3:R;E\n")
    with pytest.raises(ValueError, match="Ply numbering"):
        replay.replay_game(record)


def test_replay_cli(capsys):
    assert replay.main(["--file", str(SAMPLE)]) == 0
    out = capsys.readouterr().out
    assert "Winner: RED" in out
    assert "Final board:" in out


def test_replay_cli_reports_missing_file(tmp_path, capsys):
    assert replay.main(["--file", str(tmp_path / "missing.txt")]) == 1
    assert "error:" in capsys.readouterr().err
