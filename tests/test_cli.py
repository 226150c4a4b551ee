"""Tests for the command-line front-end."""

import pytest
import yaml


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"storage": {"data_dir": str(tmp_path / "data")}}))
    return str(path)


def test_record_then_stats(config_path, capsys):
    from cognitrain.cli import main

    assert main(["--config", config_path, "record", "memory-match", "450", "-d", "easy"]) == 0
    out = capsys.readouterr().out
    assert "Saved memory-match: 450 (easy)" in out
    assert "Streak: 1" in out

    assert main(["--config", config_path, "stats", "memory-match"]) == 0
    out = capsys.readouterr().out
    assert "played=1" in out
    assert "best=450" in out


def test_streak_command(config_path, capsys):
    from cognitrain.cli import main

    main(["--config", config_path, "record", "stroop-test", "10"])
    capsys.readouterr()
    assert main(["--config", config_path, "streak"]) == 0
    assert capsys.readouterr().out.strip() == "1"


def test_invalid_outcome_exits_with_error(config_path, capsys):
    from cognitrain.cli import main

    assert main(["--config", config_path, "record", "chess", "10"]) == 1
    captured = capsys.readouterr()
    assert "unknown game id" in captured.err
    assert "unknown game id" not in captured.out


def test_reset_requires_confirmation(config_path, capsys):
    from cognitrain.cli import main

    main(["--config", config_path, "record", "memory-match", "5"])
    assert main(["--config", config_path, "reset"]) == 1
    assert main(["--config", config_path, "reset", "--yes"]) == 0
    capsys.readouterr()

    main(["--config", config_path, "today"])
    assert "0 exercise(s) today" in capsys.readouterr().out


def test_dashboard_writes_png(config_path, tmp_path, capsys):
    from cognitrain.cli import main

    out = tmp_path / "dash.png"
    assert main(["--config", config_path, "dashboard", "--out", str(out)]) == 0
    assert out.exists()
    assert "Start your day" in capsys.readouterr().out


def test_recent_with_nothing_recorded(config_path, capsys):
    from cognitrain.cli import main

    assert main(["--config", config_path, "recent", "--days", "3"]) == 0
    assert "No exercises in the last 3 day(s)" in capsys.readouterr().out
