import io
from pathlib import Path

from grid_clash import play, replay
from grid_clash.game_controller import GameController
from grid_clash.notation import format_action, parse_record
from grid_clash.types import Player

SAMPLE = Path(__file__).parent / "data" / "sample_game.txt"


def _sample_actions():
    record = parse_record(SAMPLE.read_text(encoding="utf-8"))
    return [format_action(action) for _, _, action in record.actions]


def _run(lines, **kwargs):
    stdout = io.StringIO()
    stderr = io.StringIO()
    session = play.ConsoleSession(
        controller=GameController(first=Player.RED),
        stdin=io.StringIO("\n".join(lines) + "\n"),
        stdout=stdout,
        stderr=stderr,
        **kwargs,
    )
    code = session.run()
    return code, stdout.getvalue(), stderr.getvalue(), session


def test_full_game_prints_winner_and_stats():
    actions = _sample_actions()
    code, out, _, session = _run(actions)

    assert code == 0
    assert session.controller.winner is Player.RED
    assert "Winner: RED" in out
    assert "RED: moves=8 walls=0 hits=0" in out
    assert "BLUE: moves=1 walls=1 hits=3" in out


def test_rejections_and_parse_errors_reported():
    code, out, _, session = _run(["E", "fly away", "MOVES", "QUIT"])

    assert code == 0
    assert "rejected: ENERGY_REMAINING" in out
    assert "? Could not parse action" in out
    assert "move: B1,A2" in out
    assert "hit: yes  end: no" in out
    assert session.controller.history == []


def test_snapshot_command():
    _, out, _, _ = _run(["SNAPSHOT", "QUIT"])
    assert "energy=1,1" in out


def test_record_saved_on_exit(tmp_path):
    actions = _sample_actions()
    path = tmp_path / "game.txt"

    code, _, _, _ = _run(actions, save_record=str(path))

    assert code == 0
    state, winner = replay.replay_file(str(path))
    assert winner is Player.RED


def test_record_save_failure_exit_code(tmp_path):
    code, _, err, _ = _run(["QUIT"], save_record=str(tmp_path / "missing" / "game.txt"))
    assert code == 1
    assert "record save failed" in err


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("H\nE\nQUIT\n"))
    assert play.main(["--first", "blue", "--log-level", "info"]) == 0
    out = capsys.readouterr().out
    assert "BLUE>" in out
    assert "RED>" in out
