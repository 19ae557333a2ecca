"""
Frame drivers — the clock side of the game loop.

A driver hands out one-shot frame callbacks: ``request_frame(cb)`` arms a single
call of ``cb(timestamp_ms)`` on the next frame and returns a handle that
``cancel(handle)`` disarms. The session re-arms after every frame it wants.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any, Callable, Protocol

FrameCallback = Callable[[float], None]


class FrameDriver(Protocol):
    def request_frame(self, callback: FrameCallback) -> Any: ...
    def cancel(self, handle: Any) -> None: ...


class ManualFrameDriver:
    """Driver stepped by hand. Used by tests and the headless simulator."""

    def __init__(self):
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def fire(self, timestamp: float) -> int:
        """Run every callback armed before this call. Returns how many ran."""
        ready, self._pending = self._pending, {}
        for callback in ready.values():
            callback(timestamp)
        return len(ready)

    def run(self, frames: int, *, start: float = 0.0, interval: float = 1000 / 60) -> float:
        """Fire ``frames`` frames at a fixed interval, stopping early once nothing is armed."""
        t = start
        for _ in range(frames):
            if not self._pending:
                break
            t += interval
            self.fire(t)
        return t


class AsyncioFrameDriver:
    """Fixed-rate driver on the running asyncio event loop.

    Timestamps are milliseconds of monotonic time since the driver's first request.
    """

    def __init__(self, fps: int = 60, loop: asyncio.AbstractEventLoop | None = None):
        self.interval = 1.0 / fps
        self._loop = loop
        self._origin: float | None = None

    def now_ms(self) -> float:
        now = time.monotonic()
        if self._origin is None:
            self._origin = now
        return (now - self._origin) * 1000.0

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        self.now_ms()  # pin the origin at the first request
        return loop.call_later(self.interval, self._fire, callback)

    def cancel(self, handle: asyncio.TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()

    def _fire(self, callback: FrameCallback) -> None:
        callback(self.now_ms())


class PygameFrameDriver:
    """Display-rate driver built on pygame's clock and event queue.

    ``run()`` owns the window loop: each iteration waits for the next frame,
    forwards key events to ``on_event``, fires the armed callback with
    ``pygame.time.get_ticks()`` and then calls ``on_draw``.
    """

    def __init__(self, fps: int = 60, on_event: Callable | None = None, on_draw: Callable | None = None):
        self.fps = fps
        self.on_event = on_event
        self.on_draw = on_draw
        self.running = False
        self._callback: FrameCallback | None = None
        self._handle = 0

    def request_frame(self, callback: FrameCallback) -> int:
        self._handle += 1
        self._callback = callback
        return self._handle

    def cancel(self, handle: int | None) -> None:
        if handle == self._handle:
            self._callback = None

    def quit(self) -> None:
        self.running = False

    def run(self) -> None:
        import pygame

        clock = pygame.time.Clock()
        self.running = True
        while self.running:
            clock.tick(self.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif self.on_event is not None:
                    self.on_event(event)
            if not self.running:
                break

            callback, self._callback = self._callback, None
            if callback is not None:
                callback(float(pygame.time.get_ticks()))

            if self.on_draw is not None:
                self.on_draw()
