"""Tests for simulator.py and parallel_runner.py — headless games and batch summaries."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanedash.core.intents import Intent
from lanedash.core.results import load_result_json
import config
from parallel_runner import resolve_seed, run_comparison, run_simulations, summarize_runs
from simulator import DodgePolicy, StayPolicy, load_policy, simulate


class TestSimulate:
    def test_simulate_basic(self):
        """A short run ends at the frame limit before the first obstacle arrives."""
        result = simulate(StayPolicy(), seed=42, max_frames=50, fps=60)
        assert result["alive_time"] == 50
        assert result["score"] == 50
        assert result["crashed"] is False
        assert result["seed"] == 42

    def test_simulate_deterministic(self):
        """Same seed + same policy = same game."""
        r1 = simulate(StayPolicy(), seed=123, max_frames=3000)
        r2 = simulate(StayPolicy(), seed=123, max_frames=3000)
        assert r1["alive_time"] == r2["alive_time"]
        assert r1["frames"] == r2["frames"]

    def test_score_matches_frames(self):
        """Every frame scores except the one that crashes."""
        for seed in range(5):
            result = simulate(StayPolicy(), seed=seed, max_frames=5000)
            expected = result["alive_time"] - (1 if result["crashed"] else 0)
            assert result["score"] == expected

    def test_simulate_returns_frames(self):
        result = simulate(DodgePolicy(), seed=42, max_frames=100)
        frames = result["frames"]
        assert len(frames) > 0
        frame = frames[0]
        for key in ("phase", "score", "car_x", "obstacles", "frame", "decision"):
            assert key in frame
        assert frames[-1]["frame"] == result["alive_time"]

    def test_load_policy(self):
        assert isinstance(load_policy("stay"), StayPolicy)
        with pytest.raises(ValueError):
            load_policy("autopilot")


class TestDodgePolicy:
    def snap(self, car_x, *obstacles):
        return {"car_x": car_x, "obstacles": list(obstacles)}

    def test_no_threat_no_move(self):
        assert DodgePolicy().decide(self.snap(125)) is None
        # Far above the car
        assert DodgePolicy().decide(self.snap(125, (1, 125, -55))) is None

    def test_steers_away_from_obstacle_to_the_right(self):
        assert DodgePolicy().decide(self.snap(100, (1, 140, 400))) is Intent.MOVE_LEFT

    def test_steers_right_when_no_room_left(self):
        assert DodgePolicy().decide(self.snap(20, (1, 10, 400))) is Intent.MOVE_RIGHT


class TestParallelRunner:
    def test_summarize_runs(self):
        runs = [
            {"score": 10, "alive_time": 11, "crashed": True},
            {"score": 30, "alive_time": 30, "crashed": False},
        ]
        summary = summarize_runs(runs)
        assert summary["n_runs"] == 2
        assert summary["avg_score"] == 20.0
        assert summary["min_score"] == 10
        assert summary["max_score"] == 30
        assert summary["crash_rate"] == 0.5

    def test_summarize_empty(self):
        assert summarize_runs([]) == {"n_runs": 0}

    def test_run_simulations_in_process(self):
        results = run_simulations("stay", n_sims=3, workers=1, seed=5, max_frames=30)
        assert results["n_runs"] == 3
        assert results["avg_score"] == 30.0
        assert results["crash_rate"] == 0.0
        assert len(results["runs"]) == 3

    def test_run_comparison_saves_summary(self, tmp_path):
        out = tmp_path / "sim.json"
        run_comparison(("stay", "dodge"), n_sims=2, workers=1, seed=1, max_frames=20, out_path=out)
        data = load_result_json(out)
        assert data["schema_version"] == 1
        assert set(data["policies"]) == {"stay", "dodge"}
        assert data["policies"]["stay"]["scores"] == [20, 20]
        assert "runs" not in data["policies"]["stay"]

    def test_resolve_seed(self, monkeypatch):
        monkeypatch.setattr(config, "SEED", 11)
        assert resolve_seed(4) == 4
        assert resolve_seed() == 11
        monkeypatch.setattr(config, "SEED", None)
        assert isinstance(resolve_seed(), int)

    def test_unseeded_comparison_shares_seeds(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(config, "SEED", None)
        results = run_comparison(("stay", "dodge"), n_sims=3, workers=1, max_frames=10, out_path=tmp_path / "s.json")
        stay_seeds = [r["seed"] for r in results["stay"]["runs"]]
        dodge_seeds = [r["seed"] for r in results["dodge"]["runs"]]
        assert stay_seeds == dodge_seeds
        assert "[simulate] seed" in capsys.readouterr().out
