from __future__ import annotations

"""Shared pygame rendering primitives for the LaneDash window."""

import pygame

from game_engine import CAR_H, CAR_W, CAR_Y, LANE_HEIGHT, LANE_WIDTH, OBS_H, OBS_W, STRIPE_PERIOD

# Window geometry: the lane plus a kerb on each side
KERB_W = 60
WIDTH, HEIGHT = LANE_WIDTH + KERB_W * 2, LANE_HEIGHT
ROAD_LEFT = KERB_W
ROAD_RIGHT = KERB_W + LANE_WIDTH

C_BG = (10, 10, 16)
C_ROAD = (20, 20, 30)
C_KERB = (28, 28, 40)
C_STRIPE = (45, 45, 65)
C_EDGE = (55, 55, 80)
C_WHITE = (255, 255, 255)
C_DIM = (160, 160, 180)
C_PLAYER = (0, 215, 255)
C_OBS = [(255, 65, 85), (255, 155, 20), (170, 65, 255)]

STRIPE_LEN = STRIPE_PERIOD // 2


def obstacle_color(obstacle_id: int):
    return C_OBS[obstacle_id % len(C_OBS)]


def draw_car(surf, x, y, w, h, color, is_player):
    """Draw a car sprite with its top-left corner at lane coordinates (x, y)."""
    rx, ry = ROAD_LEFT + int(x), int(y)
    cx = rx + w // 2

    gs = 20
    glow = pygame.Surface((w + gs * 2, h + gs * 2), pygame.SRCALPHA)
    pygame.draw.rect(glow, (*color, 40), (gs, gs, w, h), border_radius=10)
    surf.blit(glow, (rx - gs, ry - gs))

    pygame.draw.rect(surf, color, (rx, ry, w, h), border_radius=9)

    ww = w - 10
    dark = (0, 30, 45) if is_player else (35, 8, 8)
    pygame.draw.rect(surf, dark, (cx - ww // 2, ry + 10, ww, 15), border_radius=4)
    pygame.draw.rect(surf, dark, (cx - ww // 2, ry + h - 25, ww, 13), border_radius=4)

    # Player faces up the road; oncoming traffic shows its headlights at the bottom
    if is_player:
        pygame.draw.ellipse(surf, (210, 255, 255), (rx + 4, ry + 5, 10, 6))
        pygame.draw.ellipse(surf, (210, 255, 255), (rx + w - 14, ry + 5, 10, 6))
    else:
        pygame.draw.ellipse(surf, (255, 195, 100), (rx + 4, ry + h - 11, 10, 6))
        pygame.draw.ellipse(surf, (255, 195, 100), (rx + w - 14, ry + h - 11, 10, 6))


def draw_road(screen, scroll_offset: int) -> None:
    """Kerbs, road surface, edges and the centre stripes shifted by ``scroll_offset``."""
    screen.fill(C_BG)
    pygame.draw.rect(screen, C_KERB, (0, 0, ROAD_LEFT, HEIGHT))
    pygame.draw.rect(screen, C_KERB, (ROAD_RIGHT, 0, WIDTH - ROAD_RIGHT, HEIGHT))
    pygame.draw.rect(screen, C_ROAD, (ROAD_LEFT, 0, LANE_WIDTH, HEIGHT))
    pygame.draw.line(screen, C_EDGE, (ROAD_LEFT, 0), (ROAD_LEFT, HEIGHT), 2)
    pygame.draw.line(screen, C_EDGE, (ROAD_RIGHT, 0), (ROAD_RIGHT, HEIGHT), 2)

    cx = ROAD_LEFT + LANE_WIDTH // 2
    for y in range(scroll_offset - STRIPE_PERIOD, HEIGHT, STRIPE_PERIOD):
        pygame.draw.rect(screen, C_STRIPE, (cx - 2, y, 4, STRIPE_LEN))


def draw_snapshot(screen, snap: dict) -> None:
    """Draw one frame of a game snapshot (road, traffic, player)."""
    draw_road(screen, snap["lane_scroll_offset"])
    for obstacle_id, x, y in snap["obstacles"]:
        draw_car(screen, x, y, OBS_W, OBS_H, obstacle_color(obstacle_id), False)
    if snap["phase"] != "idle":
        draw_car(screen, snap["car_x"], CAR_Y, CAR_W, CAR_H, C_PLAYER, True)
