from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from lanedash.config.schema import Settings


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    checks: list[Check] = []
    checks.append(Check("fps", settings.fps > 0, f"fps={settings.fps}"))
    checks.append(Check("pygame", _has_module("pygame"), "required for the desktop game"))
    checks.append(Check("fastapi", _has_module("fastapi"), "required for the web server"))
    checks.append(Check("uvicorn", _has_module("uvicorn"), "required to serve the web app"))
    checks.append(Check("results_dir", settings.paths.results_dir.exists(), str(settings.paths.results_dir)))
    return checks
