from __future__ import annotations

import json
from pathlib import Path
from typing import Any

SCHEMA_VERSION = 1


def comparison_payload(all_results: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Per-policy summaries with the replay frames dropped, keeping only each run's score."""
    return {
        "policies": {
            name: {
                **{k: v for k, v in res.items() if k != "runs"},
                "scores": [r["score"] for r in res.get("runs", [])],
            }
            for name, res in all_results.items()
        }
    }


def save_result_json(path: Path, payload: dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"schema_version": SCHEMA_VERSION, **payload}, f, indent=2)
    return path


def load_result_json(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        data = json.load(f)
    # Files written before versioning count as version 0
    if isinstance(data, dict) and "schema_version" not in data:
        data = {"schema_version": 0, **data}
    return data
