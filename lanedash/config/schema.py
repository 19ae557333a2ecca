from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

@dataclass(frozen=True)
class Paths:
    project_dir: Path
    results_dir: Path
    sim_results: Path

    def ensure_dirs(self) -> None:
        self.results_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    paths: Paths

    fps: int
    seed: int | None
    max_frames: int
    sims_per_policy: int

    web_host: str
    web_port: int

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self.fps

    def validate(self) -> "Settings":
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.max_frames < 0:
            raise ValueError(f"max_frames must be >= 0, got {self.max_frames}")
        if self.sims_per_policy < 1:
            raise ValueError(f"sims_per_policy must be >= 1, got {self.sims_per_policy}")
        return self
