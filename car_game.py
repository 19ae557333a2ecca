#!/usr/bin/env python3
"""
LANEDASH — 2D car dodge game
Steer left and right, avoid the traffic coming down the lane.

Requirements:
    pip install pygame
"""

import random

import pygame

from game_engine import Phase
from lanedash.config.loader import load_settings
from lanedash.core.driver import PygameFrameDriver
from lanedash.core.intents import Intent
from lanedash.core.session import GameSession
from lanedash.ui.render import C_DIM, C_PLAYER, C_WHITE, HEIGHT, WIDTH, draw_snapshot

KEY_INTENTS = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_a: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_d: Intent.MOVE_RIGHT,
    pygame.K_RETURN: Intent.START_OR_RESTART,
    pygame.K_SPACE: Intent.START_OR_RESTART,
}


def key_to_intent(key):
    return KEY_INTENTS.get(key)


# ─────────────────────────────────────────
# Main
# ─────────────────────────────────────────

def main(settings=None):
    settings = settings or load_settings()

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("LANEDASH")

    try:
        font_score = pygame.font.SysFont("Courier New", 38, bold=True)
        font_title = pygame.font.SysFont("Courier New", 52, bold=True)
        font_sub   = pygame.font.SysFont("Courier New", 17)
    except Exception:
        font_score = pygame.font.SysFont(None, 38)
        font_title = pygame.font.SysFont(None, 52)
        font_sub   = pygame.font.SysFont(None, 17)

    driver = PygameFrameDriver(fps=settings.fps)
    session = GameSession(driver, rng=random.Random(settings.seed), verbose=True)
    blink = 0

    pygame.key.set_repeat(0, 0)

    def on_event(event):
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            driver.quit()
            return
        intent = key_to_intent(event.key)
        if intent is not None:
            session.handle(intent)

    def on_draw():
        nonlocal blink
        blink += 1
        snap = session.snapshot()
        phase = session.phase

        draw_snapshot(screen, snap)

        # ── HUD ─────────────────────────
        if phase is Phase.PLAYING:
            sc = font_score.render(f"{snap['score']:05d}", True, C_WHITE)
            screen.blit(sc, (WIDTH // 2 - sc.get_width() // 2, 16))

        # ── Overlays ────────────────────
        if phase is not Phase.PLAYING:
            dim = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
            dim.fill((0, 0, 0, 155))
            screen.blit(dim, (0, 0))

            label = "LANEDASH" if phase is Phase.IDLE else "GAME OVER"
            t = font_title.render(label, True, C_PLAYER)
            screen.blit(t, (WIDTH//2 - t.get_width()//2, HEIGHT//2 - 110))

            if phase is Phase.GAME_OVER:
                sc_txt = font_score.render(f"{snap['score']:05d}", True, C_WHITE)
                screen.blit(sc_txt, (WIDTH//2 - sc_txt.get_width()//2, HEIGHT//2 - 40))
                best = font_sub.render(f"best {snap['high_score']:05d}", True, C_DIM)
                screen.blit(best, (WIDTH//2 - best.get_width()//2, HEIGHT//2 + 4))
                if session.new_best:
                    nb = font_sub.render("new best", True, C_PLAYER)
                    screen.blit(nb, (WIDTH//2 - nb.get_width()//2, HEIGHT//2 + 26))

            if blink % 60 < 42:
                hint = "press enter to start" if phase is Phase.IDLE else "press enter to play again"
                h = font_sub.render(hint, True, C_DIM)
                screen.blit(h, (WIDTH//2 - h.get_width()//2, HEIGHT//2 + 60))

            if phase is Phase.IDLE:
                ctrl = font_sub.render("← →  or  A D  to steer", True, C_DIM)
                screen.blit(ctrl, (WIDTH//2 - ctrl.get_width()//2, HEIGHT//2 + 90))

        pygame.display.flip()

    driver.on_event = on_event
    driver.on_draw = on_draw

    try:
        driver.run()
    finally:
        session.stop()
        pygame.quit()


if __name__ == "__main__":
    main()
