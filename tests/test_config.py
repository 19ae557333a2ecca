"""Tests for lanedash/config — settings loading and overrides."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import config
from lanedash.config.loader import load_settings


class TestSettings:
    def test_defaults_from_config_module(self):
        settings = load_settings(ensure_dirs=False)
        assert settings.fps == config.FPS
        assert settings.seed == config.SEED
        assert settings.paths.sim_results == Path(config.SIM_RESULTS)

    def test_overrides(self):
        settings = load_settings(ensure_dirs=False, fps=30, seed=9)
        assert settings.fps == 30
        assert settings.seed == 9
        assert settings.frame_interval_ms == pytest.approx(1000 / 30)

    def test_none_overrides_ignored(self):
        settings = load_settings(ensure_dirs=False, fps=None)
        assert settings.fps == config.FPS

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            load_settings(ensure_dirs=False, fps=0)
        with pytest.raises(ValueError):
            load_settings(ensure_dirs=False, max_frames=-1)

    def test_driver_is_not_a_setting(self):
        with pytest.raises(TypeError):
            load_settings(ensure_dirs=False, driver="asyncio")

    def test_seed_defaults_to_unseeded(self, monkeypatch):
        monkeypatch.setattr(config, "SEED", None)
        assert load_settings(ensure_dirs=False).seed is None
        monkeypatch.setattr(config, "SEED", "7")
        assert load_settings(ensure_dirs=False).seed == 7

    def test_unknown_override_rejected(self):
        with pytest.raises(TypeError):
            load_settings(ensure_dirs=False, colour="red")

    def test_ensure_dirs(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "RESULTS_DIR", tmp_path / "results")
        monkeypatch.setattr(config, "SIM_RESULTS", tmp_path / "results" / "sim.json")
        settings = load_settings()
        assert settings.paths.results_dir.is_dir()
