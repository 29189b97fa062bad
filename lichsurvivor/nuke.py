"""Falling bombs cast by the lich and the manager that owns them."""

import math
import os
from typing import Dict, List, Optional, Tuple

import pygame

from .sprite import Sprite, make_clips

NUKE_DAMAGE = 10
FRAME_SIZE = 96
NUKE_FRAMES = 4
BOOM_FRAMES = 6
LAST_BOOM_FRAME = BOOM_FRAMES - 1
FALL_HEIGHT = 100
SPREAD_RADIUS = 48
_PI = 3.14159265


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


class Nuke(Sprite):
    """A bomb that falls onto a target point and then explodes."""

    def __init__(self, textures: Optional[Dict[str, Optional[pygame.Surface]]] = None) -> None:
        super().__init__()
        textures = textures or {}
        self.nuke_texture = textures.get("nuke")
        self.boom_texture = textures.get("boom")
        self.target_texture = textures.get("target")
        self.x_pos = 0
        self.y_pos = 0
        self.x_target = 0
        self.y_target = 0
        self.nuke_frame = 0
        self.boom_frame = 0
        self.explosive_active = False
        self.nuke_clips = make_clips(NUKE_FRAMES, FRAME_SIZE, FRAME_SIZE)
        self.boom_clips = make_clips(BOOM_FRAMES, FRAME_SIZE, FRAME_SIZE)

    def set_position(self, pos: Tuple[int, int]) -> None:
        """Aim at pos and start the fall above it."""
        self.x_target, self.y_target = int(pos[0]), int(pos[1])
        self.x_pos = self.x_target
        self.y_pos = self.y_target - FALL_HEIGHT

    def update(self) -> None:
        if not self.explosive_active:
            self.y_pos += 1
            self.nuke_frame = (self.nuke_frame + 1) % NUKE_FRAMES
            if self.y_pos >= self.y_target:
                self.explosive_active = True
                self.boom_frame = 0
        elif self.boom_frame < LAST_BOOM_FRAME:
            self.boom_frame += 1
        else:
            self.explosive_active = False

    def rect(self) -> pygame.Rect:
        """The blast area around the target."""
        return pygame.Rect(self.x_target - 30, self.y_target - 30, FRAME_SIZE, FRAME_SIZE)

    def render(self, surface: pygame.Surface) -> None:
        if not self.explosive_active:
            quad = pygame.Rect(self.x_target - 33, self.y_pos - 59, FRAME_SIZE, FRAME_SIZE)
            self.play_animation(surface, self.nuke_clips, self.nuke_frame, quad, self.nuke_texture)
            self.blit(surface, self.target_texture, pygame.Rect(self.x_target, self.y_target, 48, 43))
        else:
            self.play_animation(surface, self.boom_clips, self.boom_frame, self.rect(), self.boom_texture)

    @property
    def finished(self) -> bool:
        return not self.explosive_active and self.boom_frame >= LAST_BOOM_FRAME


class NukeManager:
    """Spawns, advances and draws a set of bombs."""

    def __init__(self, image_dir="images", textures=None) -> None:
        if textures is None:
            textures = {
                "nuke": _load(os.path.join(str(image_dir), "Nuke.png")),
                "boom": _load(os.path.join(str(image_dir), "Boom.png")),
                "target": _load(os.path.join(str(image_dir), "Target.png")),
            }
        self._textures = textures
        self.nukes: List[Nuke] = []

    def spawn_bomb(self, number: int, pos: Tuple[int, int]) -> None:
        """Drop one bomb on pos and the rest evenly on a circle around it."""
        cx, cy = int(pos[0]), int(pos[1])
        for i in range(number):
            if i == 0:
                point = (cx, cy)
            else:
                angle = (i - 1) * (2 * _PI / (number - 1))
                point = (
                    cx + int(SPREAD_RADIUS * math.cos(angle)),
                    cy + int(SPREAD_RADIUS * math.sin(angle)),
                )
            nuke = Nuke(self._textures)
            nuke.set_position(point)
            self.nukes.append(nuke)

    def update(self, player) -> None:
        """Advance every bomb and drop those whose explosion is over."""
        for nuke in self.nukes:
            nuke.update()
        self.nukes = [nuke for nuke in self.nukes if not nuke.finished]

    def render(self, surface: pygame.Surface) -> None:
        for nuke in self.nukes:
            nuke.render(surface)

    def clear(self) -> None:
        for nuke in self.nukes:
            nuke.explosive_active = False
        self.nukes.clear()