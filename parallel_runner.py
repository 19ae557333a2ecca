#!/usr/bin/env python3
"""Parallel simulation runner — runs many seeded headless games per policy across worker processes."""

import multiprocessing
import random
import time

import numpy as np

import config
from lanedash.core.results import comparison_payload, save_result_json
from simulator import simulate_batch


def _run_chunk(args):
    """Worker function for multiprocessing. Takes (policy_name, seeds, max_frames) tuple."""
    policy_name, seeds, max_frames = args
    return simulate_batch(policy_name, seeds, max_frames=max_frames)


def summarize_runs(runs):
    """Aggregate score statistics over a list of simulate() results."""
    if not runs:
        return {"n_runs": 0}
    scores = [r["score"] for r in runs]
    alive_times = [r["alive_time"] for r in runs]
    return {
        "n_runs": len(runs),
        "avg_score": float(np.mean(scores)),
        "std_score": float(np.std(scores)),
        "min_score": int(np.min(scores)),
        "max_score": int(np.max(scores)),
        "avg_alive": float(np.mean(alive_times)),
        "crash_rate": float(np.mean([r["crashed"] for r in runs])),
    }


def resolve_seed(seed=None):
    """Pick the batch seed: explicit, else config.SEED, else a fresh random one."""
    if seed is None:
        seed = config.SEED
    if seed is None:
        seed = random.randrange(100_000)
    return seed


def run_simulations(policy_name, n_sims=None, workers=None, seed=None, max_frames=None):
    """
    Run n_sims seeded games with the named policy.

    Seeds are drawn from ``random.Random(seed)`` so a batch is reproducible.
    Work is split into one chunk per worker process.

    Returns:
        dict: summarize_runs() output plus 'runs' (list of run dicts from simulate())
    """
    n_sims = n_sims or config.SIMS_PER_POLICY
    workers = max(1, min(workers or multiprocessing.cpu_count(), n_sims))
    seed = resolve_seed(seed)

    seeds = random.Random(seed).sample(range(100_000), n_sims)
    chunks = [seeds[i::workers] for i in range(workers)]
    args_list = [(policy_name, chunk, max_frames) for chunk in chunks if chunk]

    if workers == 1:
        batches = [_run_chunk(args) for args in args_list]
    else:
        with multiprocessing.Pool(processes=workers) as pool:
            batches = pool.map(_run_chunk, args_list)

    all_runs = [run for batch in batches for run in batch]
    all_runs.sort(key=lambda r: seeds.index(r["seed"]))

    results = summarize_runs(all_runs)
    results["policy"] = policy_name
    results["runs"] = all_runs
    return results


def run_comparison(policies=("stay", "dodge"), n_sims=None, workers=None, seed=None, max_frames=None, out_path=None):
    """
    Run every policy on the same seeds and save a summary JSON.

    Returns:
        dict: policy name -> results from run_simulations()
    """
    out_path = out_path or config.SIM_RESULTS
    seed = resolve_seed(seed)
    print(f"[simulate] seed {seed}")
    all_results = {}

    for name in policies:
        print("\n" + "=" * 50)
        print(f"SIMULATION: {name} policy")
        print("=" * 50)
        start = time.time()
        results = run_simulations(name, n_sims=n_sims, workers=workers, seed=seed, max_frames=max_frames)
        print(
            f"  avg score = {results['avg_score']:.0f} "
            f"({results['avg_score'] / config.FPS:.1f}s), std = {results['std_score']:.0f}, "
            f"crash rate = {results['crash_rate']:.0%}"
        )
        print(f"  Time: {time.time() - start:.1f}s")
        all_results[name] = results

    # Frame data stays out of the JSON, it is too large
    save_result_json(out_path, comparison_payload(all_results))
    print(f"\nSaved summary to {out_path}")
    return all_results


if __name__ == "__main__":
    run_comparison()
