"""Tests for car_game.py key mapping and lanedash/ui/render.py drawing helpers."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from car_game import key_to_intent  # noqa: E402
from game_engine import reset, snapshot, tick  # noqa: E402
from lanedash.core.intents import Intent  # noqa: E402
from lanedash.ui.render import C_OBS, HEIGHT, WIDTH, draw_snapshot, obstacle_color  # noqa: E402


class TestKeys:
    def test_arrow_and_letter_keys(self):
        assert key_to_intent(pygame.K_LEFT) is Intent.MOVE_LEFT
        assert key_to_intent(pygame.K_a) is Intent.MOVE_LEFT
        assert key_to_intent(pygame.K_RIGHT) is Intent.MOVE_RIGHT
        assert key_to_intent(pygame.K_d) is Intent.MOVE_RIGHT
        assert key_to_intent(pygame.K_RETURN) is Intent.START_OR_RESTART

    def test_other_keys_ignored(self):
        assert key_to_intent(pygame.K_UP) is None


class TestRender:
    def test_obstacle_colors_cycle(self):
        assert obstacle_color(0) == C_OBS[0]
        assert obstacle_color(len(C_OBS) + 1) == C_OBS[1]

    def test_draw_snapshot_offscreen(self):
        surf = pygame.Surface((WIDTH, HEIGHT))
        state = tick(reset(), 2001)
        draw_snapshot(surf, snapshot(state))
        assert surf.get_size() == (WIDTH, HEIGHT)
