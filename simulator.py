#!/usr/bin/env python3
"""Headless game simulator — runs the game with a scripted policy, records replay data."""

import random

import config
from game_engine import CAR_H, CAR_W, CAR_Y, MAX_CAR_X, OBS_H, OBS_W, Phase
from lanedash.core.driver import ManualFrameDriver
from lanedash.core.intents import Intent
from lanedash.core.session import GameSession


class StayPolicy:
    """Never steers. The baseline: survives only until something lands on the car."""

    name = "stay"

    def decide(self, snap):
        return None


class DodgePolicy:
    """Steers away from the nearest obstacle coming down over the car."""

    name = "dodge"

    def __init__(self, lookahead=180, margin=4):
        self.lookahead = lookahead
        self.margin = margin

    def _threats(self, snap):
        car_x = snap["car_x"]
        for _id, x, y in snap["obstacles"]:
            overlaps_x = x < car_x + CAR_W + self.margin and x + OBS_W > car_x - self.margin
            close = y + OBS_H > CAR_Y - self.lookahead and y < CAR_Y + CAR_H
            if overlaps_x and close:
                yield x, y

    def decide(self, snap):
        threats = list(self._threats(snap))
        if not threats:
            return None
        x, _y = max(threats, key=lambda t: t[1])
        car_x = snap["car_x"]
        # Go to whichever side of the obstacle has room
        room_left = x
        room_right = MAX_CAR_X - x
        if car_x + CAR_W / 2 <= x + OBS_W / 2 and room_left >= CAR_W:
            return Intent.MOVE_LEFT
        if room_right >= OBS_W:
            return Intent.MOVE_RIGHT
        return Intent.MOVE_LEFT


POLICIES = {
    "stay": StayPolicy,
    "dodge": DodgePolicy,
}


def load_policy(name):
    try:
        return POLICIES[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown policy: {name!r}. Expected one of {sorted(POLICIES)}") from exc


def simulate(policy, seed=0, max_frames=None, fps=None):
    """
    Run one headless game.

    Args:
        policy: object with ``decide(snapshot) -> Intent | None``
        seed: seeds obstacle placement, for deterministic replay
        max_frames: safety limit (default: config.MAX_FRAMES)
        fps: simulated display rate (default: config.FPS)

    Returns:
        dict: {
            'alive_time': int (frames survived),
            'score': int,
            'crashed': bool,
            'seed': int,
            'frames': list of snapshots for replay
        }

    Each recorded frame is a game snapshot plus 'frame' and the policy's 'decision'.
    """
    max_frames = config.MAX_FRAMES if max_frames is None else max_frames
    fps = fps or config.FPS
    interval = 1000.0 / fps

    driver = ManualFrameDriver()
    game = GameSession(driver, rng=random.Random(seed))
    game.start()

    frames = []
    t = 0.0
    decision = None

    while game.running and game.frames < max_frames:
        decision = policy.decide(game.snapshot())
        if decision is not None:
            game.handle(decision)
        t += interval
        driver.fire(t)

        # Record every other frame for replay (keeps data manageable)
        if game.frames % 2 == 0:
            frames.append(_record(game, decision))

    # Record final frame on death
    if not frames or frames[-1]["frame"] != game.frames:
        frames.append(_record(game, decision))

    game.stop()
    state = game.state
    return {
        "alive_time": game.frames,
        "score": state.score,
        "crashed": state.phase is Phase.GAME_OVER,
        "seed": seed,
        "frames": frames,
    }


def _record(game, decision):
    snap = game.snapshot()
    snap["frame"] = game.frames
    snap["decision"] = decision.value if decision is not None else None
    return snap


def simulate_batch(policy_name, seeds, max_frames=None):
    """Run several seeds sequentially with a fresh policy per run."""
    return [simulate(load_policy(policy_name), seed, max_frames=max_frames) for seed in seeds]


if __name__ == "__main__":
    result = simulate(DodgePolicy(), seed=42)
    print(f"Alive time: {result['alive_time']} frames ({result['alive_time'] / config.FPS:.1f} sec)")
    print(f"Score: {result['score']}  crashed: {result['crashed']}")
    print(f"Frames recorded: {len(result['frames'])}")
