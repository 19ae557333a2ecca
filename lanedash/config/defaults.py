from __future__ import annotations

from pathlib import Path

import config as legacy_config

from .schema import Paths, Settings


def _optional_int(value) -> int | None:
    return None if value is None else int(value)


def from_legacy_config() -> Settings:
    project_dir = Path(getattr(legacy_config, "PROJECT_DIR", Path(__file__).resolve().parents[2]))
    paths = Paths(
        project_dir=project_dir,
        results_dir=Path(legacy_config.RESULTS_DIR),
        sim_results=Path(legacy_config.SIM_RESULTS),
    )
    return Settings(
        paths=paths,
        fps=int(getattr(legacy_config, "FPS", 60)),
        seed=_optional_int(getattr(legacy_config, "SEED", None)),
        max_frames=int(getattr(legacy_config, "MAX_FRAMES", 12_000)),
        sims_per_policy=int(getattr(legacy_config, "SIMS_PER_POLICY", 20)),
        web_host=str(getattr(legacy_config, "WEB_HOST", "127.0.0.1")),
        web_port=int(getattr(legacy_config, "WEB_PORT", 8000)),
    )
