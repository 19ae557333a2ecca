"""Tests for the lanedash CLI — argument parsing and the report/doctor commands."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import config
from lanedash.core.results import save_result_json
from lanedash.ui.cli.main import build_parser, main


@pytest.fixture
def results_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "RESULTS_DIR", tmp_path)
    monkeypatch.setattr(config, "SIM_RESULTS", tmp_path / "simulation.json")
    return tmp_path


class TestParser:
    def test_simulate_args(self):
        args = build_parser().parse_args(
            ["simulate", "--policy", "stay", "--policy", "dodge", "--runs", "4", "--seed", "3"]
        )
        assert args.policy == ["stay", "dodge"]
        assert args.runs == 4
        assert args.seed == 3
        assert args.func.__name__ == "cmd_simulate"

    def test_unknown_policy_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["simulate", "--policy", "autopilot"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    def test_report_missing_file(self, results_dir, capsys):
        main(["report"])
        assert "[report] Missing simulation results" in capsys.readouterr().out

    def test_report_prints_policies(self, results_dir, capsys):
        save_result_json(
            results_dir / "simulation.json",
            {"policies": {"dodge": {"n_runs": 2, "avg_score": 120.5, "scores": [100, 141]}}},
        )
        main(["report"])
        out = capsys.readouterr().out
        assert "DODGE" in out
        assert "avg_score: 120.5" in out

    def test_simulate_writes_summary(self, results_dir, capsys):
        main(["simulate", "--policy", "stay", "--runs", "2", "--workers", "1", "--max-frames", "10"])
        assert (results_dir / "simulation.json").exists()
        assert "SIMULATION: stay policy" in capsys.readouterr().out

    def test_doctor(self, results_dir, capsys):
        main(["doctor"])
        out = capsys.readouterr().out
        assert "[OK] fps" in out
        assert "checks passing" in out
