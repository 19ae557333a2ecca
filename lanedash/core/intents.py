from __future__ import annotations

from enum import Enum

from game_engine import Direction


class Intent(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    START_OR_RESTART = "start"


_ALIASES = {
    "left": Intent.MOVE_LEFT,
    "right": Intent.MOVE_RIGHT,
    "restart": Intent.START_OR_RESTART,
}

MOVE_DIRECTIONS = {
    Intent.MOVE_LEFT: Direction.LEFT,
    Intent.MOVE_RIGHT: Direction.RIGHT,
}


def parse_intent(raw) -> Intent | None:
    """Map a raw event name to an Intent. Anything unrecognized yields None."""
    if isinstance(raw, Intent):
        return raw
    if not isinstance(raw, str):
        return None
    key = raw.strip().lower()
    try:
        return Intent(key)
    except ValueError:
        return _ALIASES.get(key)


class InputBuffer:
    """Pending moves between frames.

    At most one pending move per direction; repeats of a direction already
    waiting are coalesced. Drained in arrival order before each tick.
    """

    def __init__(self):
        self._pending: list[Direction] = []

    def push(self, direction: Direction) -> bool:
        if direction in self._pending:
            return False
        self._pending.append(direction)
        return True

    def drain(self) -> list[Direction]:
        pending, self._pending = self._pending, []
        return pending

    def clear(self):
        self._pending.clear()

    def __len__(self):
        return len(self._pending)
