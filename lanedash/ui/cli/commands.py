from __future__ import annotations

import time
from pathlib import Path

from lanedash.config.loader import load_settings
from lanedash.core.doctor import run_doctor
from lanedash.core.results import load_result_json


def _settings(args, **extra):
    return load_settings(fps=args.fps, seed=args.seed, **extra)


def cmd_play(args):
    import car_game

    car_game.main(_settings(args))


def cmd_simulate(args):
    from parallel_runner import run_comparison

    settings = _settings(args, max_frames=getattr(args, "max_frames", None), sims_per_policy=args.runs)
    policies = tuple(args.policy) if args.policy else ("stay", "dodge")
    start = time.time()
    run_comparison(
        policies,
        n_sims=settings.sims_per_policy,
        workers=args.workers,
        seed=settings.seed,
        max_frames=settings.max_frames,
        out_path=settings.paths.sim_results,
    )
    print(f"Elapsed: {time.time() - start:.1f}s")


def cmd_serve(args):
    from web import server

    settings = _settings(args, web_host=args.host, web_port=args.port)
    server.settings = settings
    server.serve(settings.web_host, settings.web_port)


def cmd_report(args):
    settings = _settings(args)
    path = Path(settings.paths.sim_results)
    if not path.exists():
        print(f"[report] Missing simulation results: {path}")
        return
    data = load_result_json(path)
    print(f"\nSIMULATION ({path})")
    print(f"  schema_version: {data.get('schema_version', 'n/a')}")
    for name, summary in data.get("policies", {}).items():
        print(f"\n  {name.upper()}")
        for key in ("n_runs", "avg_score", "std_score", "min_score", "max_score", "crash_rate"):
            if key in summary:
                print(f"    {key}: {summary[key]}")


def cmd_doctor(args):
    settings = _settings(args)
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")
