"""Small chasing enemies and the experience orbs they leave behind."""

import math
import os
import random
from typing import List, Optional, Tuple

import pygame

from .config import SCREEN_HEIGHT, SCREEN_HEIGHT_MID, SCREEN_WIDTH, SCREEN_WIDTH_MID
from .sprite import Sprite, make_clips

MAX_SMALL_ENEMIES = 40
SMALL_EXP = 2
ENEMY_HP = 10
ENEMY_SPEED = 0.5
ENEMY_DAMAGE = 2
SPEED_STEP = 0.1
DAMAGE_STEP = 0.1
RUN_FRAMES = 6
LAST_RUN_FRAME = RUN_FRAMES - 1
FRAME_DURATION = 0.1
DRAW_SIZE = 48
SPAWN_MIN_RADIUS = 400
SPAWN_MAX_RADIUS = 500
ORB_SIZE = 7
HP_BAR_COLOR = (144, 238, 144)


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


def random_point(min_radius: int, max_radius: int, rng=None) -> Tuple[int, int]:
    """A point on a ring around the screen centre, clamped to the screen."""
    if rng is None:
        rng = random
    angle = math.radians(rng.randrange(360))
    radius = min_radius + rng.randrange(max_radius - min_radius)
    x = SCREEN_WIDTH_MID + int(radius * math.cos(angle))
    y = SCREEN_HEIGHT_MID + int(radius * math.sin(angle))
    return min(max(x, 0), SCREEN_WIDTH), min(max(y, 0), SCREEN_HEIGHT)


class SmallEnemy:
    """An enemy that runs straight at the player."""

    IMAGE_DIR = "images"

    def __init__(self) -> None:
        self._sprite = Sprite()
        self.x_pos = 0.0
        self.y_pos = 0.0
        self.frame = 0
        self.width_frame = 0
        self.height_frame = 0
        self.max_hp = ENEMY_HP
        self.hp = ENEMY_HP
        self.is_right = False
        self.is_move = False
        self.speed = ENEMY_SPEED
        self.damage = ENEMY_DAMAGE
        self.exp_value = SMALL_EXP
        self.frame_clips = make_clips(RUN_FRAMES, 0, 0)
        self.animation_timer = 0.0
        self.is_forward = True
        self._run_left: Optional[pygame.Surface] = None
        self._run_right: Optional[pygame.Surface] = None

    @classmethod
    def spawn_new(cls, rng=None) -> "SmallEnemy":
        """A fresh enemy placed on the spawn ring."""
        enemy = cls()
        point = random_point(SPAWN_MIN_RADIUS, SPAWN_MAX_RADIUS, rng)
        enemy.load_image(os.path.join(cls.IMAGE_DIR, "Run_Right.png"))
        enemy.set_spawn_point(point)
        return enemy

    @classmethod
    def enemy_wave(cls, rng=None) -> List["SmallEnemy"]:
        return [cls.spawn_new(rng) for _ in range(MAX_SMALL_ENEMIES)]

    def load_image(self, path) -> bool:
        """Load a run sheet of six frames and cut it into clips."""
        ok = self._sprite.load_image(path)
        if ok:
            self.width_frame = self._sprite.rect.width // RUN_FRAMES
            self.height_frame = self._sprite.rect.height
            if self.width_frame > 0 and self.height_frame > 0:
                self.frame_clips = make_clips(RUN_FRAMES, self.width_frame, self.height_frame)
        return ok

    def set_spawn_point(self, position) -> None:
        self.x_pos, self.y_pos = position[0], position[1]

    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x_pos), int(self.y_pos), self.width_frame, self.height_frame)

    def minus_hp(self, damage) -> None:
        self.hp -= damage

    def is_dead(self) -> bool:
        return self.hp <= 0

    def speed_up(self) -> None:
        self.speed += SPEED_STEP

    def power_up(self) -> None:
        # Damage is counted in whole points, so a fractional step is dropped.
        self.damage = int(self.damage + DAMAGE_STEP)

    def follow(self, player, delta_time: float) -> None:
        """Step toward the player and advance the run animation."""
        diff_x = int(player.x_pos) - self.x_pos
        diff_y = int(player.y_pos) - self.y_pos
        self.is_right = diff_x > 0
        distance = math.hypot(diff_x, diff_y)
        if distance == 0:
            self.is_move = False
            return

        self.x_pos += diff_x / distance * self.speed
        self.y_pos += diff_y / distance * self.speed
        self.is_move = True

        self.animation_timer += delta_time
        if self.animation_timer >= FRAME_DURATION:
            self.animation_timer = 0.0
            if self.is_forward:
                self.frame += 1
                if self.frame >= LAST_RUN_FRAME:
                    self.is_forward = False
            else:
                self.frame -= 1
                if self.frame <= 0:
                    self.is_forward = True

    def show(self, surface: pygame.Surface) -> None:
        if self._run_left is None and self._run_right is None:
            self._run_left = _load(os.path.join(self.IMAGE_DIR, "Run_Left.png"))
            self._run_right = _load(os.path.join(self.IMAGE_DIR, "Run_Right.png"))
        texture = self._run_right if self.is_right else self._run_left
        dest = pygame.Rect(int(self.x_pos), int(self.y_pos), DRAW_SIZE, DRAW_SIZE)
        self._sprite.play_animation(surface, self.frame_clips, self.frame, dest, texture)

    def show_hp_bar(self, surface: pygame.Surface) -> None:
        bar = pygame.Rect(int(self.x_pos + 17), int(self.y_pos + 34), int(self.hp * 1.6), 2)
        pygame.draw.rect(surface, HP_BAR_COLOR, bar, 1)


class ExpOrb(Sprite):
    """An experience orb waiting to be picked up."""

    def __init__(self, exp: int = 0) -> None:
        super().__init__()
        self.exp = exp

    def load(self, path) -> bool:
        surface = _load(path)
        if surface is None:
            return False
        self.texture = surface
        self.rect.size = (ORB_SIZE, ORB_SIZE)
        return True

    def set_position(self, x, y) -> None:
        self.rect.topleft = (int(x), int(y))

    def show(self, surface: pygame.Surface) -> None:
        if self.texture is not None and self.rect.width and self.rect.height:
            self.blit(surface, self.texture, self.rect)