import json

import pytest

pytest.importorskip("pygame")

import main


def test_main_runs_a_bounded_session(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = {
        "particle_field": {"capacity": 20, "connection_distance": 100, "seed": 1},
        "run_control": {"max_frames": 5, "log_throttle_frames": 2, "profile": True},
        "visualization": {"fullscreen": False, "window_size": [240, 160]},
        "theme": {"preference_file": "state/theme.json", "prefers_dark": True},
        "logging": {"level": "DEBUG", "log_file": "logs/run.log"},
    }
    (tmp_path / "config.json").write_text(json.dumps(config))

    assert main.main(["--config", "config.json"]) == 0
    assert "Frame loop finished." in (tmp_path / "logs" / "run.log").read_text()


def test_main_reports_a_missing_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main.main(["--config", "missing.json"]) == 1
    assert "FATAL" in capsys.readouterr().out
