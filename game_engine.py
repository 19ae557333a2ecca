"""
Pure game logic for LANEDASH — no pygame dependency.
Used by the game session, the pygame frontend, the web server and the headless simulator.

Every operation takes a GameState and returns a new one; nothing is mutated in place.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple

# ─────────────────────────────────────────
# Constants
# ─────────────────────────────────────────
LANE_WIDTH = 300
LANE_HEIGHT = 600          # despawn threshold

CAR_W, CAR_H = 50, 80
CAR_Y = 500                # top of the car's fixed vertical band
OBS_W, OBS_H = CAR_W, 60

GAME_SPEED = 5             # road scroll and obstacle fall, per tick
MOVE_STEP = 20
SPAWN_INTERVAL_MS = 2000
STRIPE_PERIOD = 60

MAX_CAR_X = LANE_WIDTH - CAR_W


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Direction(int, Enum):
    LEFT = -1
    RIGHT = 1


# ─────────────────────────────────────────
# Game objects
# ─────────────────────────────────────────

class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


def rects_intersect(a: Rect, b: Rect) -> bool:
    """Axis-aligned overlap test. Touching edges do not count."""
    return a.x < b.x + b.w and a.x + a.w > b.x and a.y < b.y + b.h and a.y + a.h > b.y


def clamp_car_x(x: float) -> float:
    return max(0, min(MAX_CAR_X, x))


@dataclass(frozen=True)
class Car:
    x: float = MAX_CAR_X / 2

    def rect(self) -> Rect:
        return Rect(self.x, CAR_Y, CAR_W, CAR_H)


@dataclass(frozen=True)
class Obstacle:
    id: int
    x: int
    y: float = -OBS_H

    def rect(self) -> Rect:
        return Rect(self.x, self.y, OBS_W, OBS_H)


@dataclass(frozen=True)
class GameState:
    phase: Phase = Phase.IDLE
    score: int = 0
    high_score: int = 0
    car: Car = field(default_factory=Car)
    obstacles: tuple[Obstacle, ...] = ()
    lane_scroll_offset: int = 0
    last_spawn_timestamp: float = 0
    next_obstacle_id: int = 1

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING


# ─────────────────────────────────────────
# Transitions
# ─────────────────────────────────────────

def initial_state() -> GameState:
    """State before the first game: Idle, nothing on the road."""
    return GameState()


def reset(previous: GameState | None = None) -> GameState:
    """Start a new game, carrying the high score over from ``previous``."""
    high_score = previous.high_score if previous is not None else 0
    return GameState(phase=Phase.PLAYING, high_score=high_score)


def apply_move(state: GameState, direction: Direction) -> GameState:
    """Shift the car one step left or right, clamped to the lane."""
    if not state.playing:
        return state
    try:
        direction = Direction(direction)
    except ValueError:
        return state
    new_x = clamp_car_x(state.car.x + direction.value * MOVE_STEP)
    if new_x == state.car.x:
        return state
    return replace(state, car=replace(state.car, x=new_x))


def spawn_due(state: GameState, timestamp: float) -> bool:
    # A clock running backwards counts as zero elapsed time
    elapsed = max(0, timestamp - state.last_spawn_timestamp)
    return elapsed > SPAWN_INTERVAL_MS


def check_collision(state: GameState) -> bool:
    car_rect = state.car.rect()
    return any(rects_intersect(car_rect, o.rect()) for o in state.obstacles)


def tick(state: GameState, timestamp: float, rng: random.Random | None = None) -> GameState:
    """Advance the game by one frame.

    Order: scroll, spawn (at most one), advance, despawn, collision, score.
    On collision the phase becomes GAME_OVER and the score is not incremented;
    the obstacles as advanced this tick are kept for the final frame.
    """
    if not state.playing:
        return state
    rng = rng if rng is not None else random

    scroll = (state.lane_scroll_offset + GAME_SPEED) % STRIPE_PERIOD

    obstacles = state.obstacles
    last_spawn = state.last_spawn_timestamp
    next_id = state.next_obstacle_id
    if spawn_due(state, timestamp):
        obstacles = obstacles + (Obstacle(id=next_id, x=rng.randint(0, MAX_CAR_X)),)
        next_id += 1
        last_spawn = timestamp

    obstacles = tuple(
        o2 for o2 in (replace(o, y=o.y + GAME_SPEED) for o in obstacles)
        if o2.y < LANE_HEIGHT
    )

    state = replace(
        state,
        lane_scroll_offset=scroll,
        obstacles=obstacles,
        last_spawn_timestamp=last_spawn,
        next_obstacle_id=next_id,
    )

    if check_collision(state):
        return replace(
            state,
            phase=Phase.GAME_OVER,
            high_score=max(state.high_score, state.score),
        )

    return replace(state, score=state.score + 1)


# ─────────────────────────────────────────
# Render boundary
# ─────────────────────────────────────────

def snapshot(state: GameState) -> dict:
    """Read-only projection of the state for renderers and the web client."""
    return {
        "phase": state.phase.value,
        "score": state.score,
        "high_score": state.high_score,
        "car_x": state.car.x,
        "obstacles": [(o.id, o.x, o.y) for o in state.obstacles],
        "lane_scroll_offset": state.lane_scroll_offset,
    }
