from __future__ import annotations

import random
from typing import Any, Callable

from game_engine import GameState, Phase, apply_move, initial_state, reset, snapshot, tick
from lanedash.core.driver import FrameDriver
from lanedash.core.intents import MOVE_DIRECTIONS, InputBuffer, Intent, parse_intent


class GameSession:
    """Owns one player's game: state, pending input and the armed frame.

    Frames run only while Playing. Each frame drains the pending moves, then
    ticks, so a move always lands before that frame's collision check.
    """

    def __init__(
        self,
        driver: FrameDriver,
        *,
        rng: random.Random | None = None,
        state: GameState | None = None,
        on_frame: Callable[[dict], None] | None = None,
        verbose: bool = False,
    ):
        self.driver = driver
        self.rng = rng if rng is not None else random.Random()
        self.on_frame = on_frame
        self.verbose = verbose
        self.frames = 0
        self._state = state if state is not None else initial_state()
        # High score carried into the current game
        self.previous_best = self._state.high_score
        self._input = InputBuffer()
        self._handle: Any = None
        # Bumped on every arm/stop; a callback from an older generation is stale
        self._generation = 0

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def new_best(self) -> bool:
        """True once this game's score beats the best held when it started."""
        return self._state.score > self.previous_best

    def snapshot(self) -> dict:
        return snapshot(self._state)

    def handle(self, raw) -> bool:
        """Feed one input event. Returns False when it was ignored."""
        intent = parse_intent(raw)
        if intent is None:
            return False
        if intent is Intent.START_OR_RESTART:
            if self._state.phase is Phase.PLAYING:
                return False
            self.start()
            return True
        if not self._state.playing:
            return False
        return self._input.push(MOVE_DIRECTIONS[intent])

    def start(self) -> None:
        self.stop()
        self.previous_best = self._state.high_score
        self._state = reset(self._state)
        self._input.clear()
        self.frames = 0
        if self.verbose:
            print(f"[session] start (best {self._state.high_score})", flush=True)
        self._arm()

    def stop(self) -> None:
        """Disarm the pending frame. No callback fires into this session afterwards."""
        self._generation += 1
        if self._handle is not None:
            self.driver.cancel(self._handle)
            self._handle = None

    def _arm(self) -> None:
        self._generation += 1
        generation = self._generation

        def fire(timestamp: float) -> None:
            if generation != self._generation:
                return
            self._handle = None
            self._frame(timestamp)

        self._handle = self.driver.request_frame(fire)

    def _frame(self, timestamp: float) -> None:
        state = self._state
        for direction in self._input.drain():
            state = apply_move(state, direction)
        state = tick(state, timestamp, self.rng)
        self._state = state
        self.frames += 1

        # Re-arm first; the listener may raise, stop or restart
        if state.playing:
            self._arm()
        elif self.verbose:
            print(f"[session] game over: score {state.score} (best {state.high_score})", flush=True)
        if self.on_frame is not None:
            self.on_frame(snapshot(state))
