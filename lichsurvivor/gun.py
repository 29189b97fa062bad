"""The player's gun: aiming, burst fire and the bullets in flight."""

import math
import os
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import pygame

from .config import SCREEN_HEIGHT, SCREEN_WIDTH
from .sprite import Sprite, make_clips

GUN_OFFSET = 20
TARGET_OFFSET = 15
BULLET_SIZE = 10
GUN_SIZE = 48
GUN_FRAMES = 9
BULLET_DELAY = 200
FRAME_STEP_DEGREES = 22.5

DEFAULT_DAMAGE = 2
DEFAULT_BULLET_SPEED = 20
DEFAULT_BULLETS_PER_BURST = 3


def _ticks() -> int:
    return int(time.monotonic() * 1000)


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class Bullet:
    """A bullet travelling in a straight line."""

    x_pos: float = 0.0
    y_pos: float = 0.0
    angle: float = 0.0

    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x_pos), int(self.y_pos), BULLET_SIZE, BULLET_SIZE)


class Gun(Sprite):
    """A gun held by the player that fires bursts toward the mouse."""

    def __init__(self, image_dir="images", clock: Optional[Callable[[], int]] = None) -> None:
        super().__init__()
        self._clock = clock or _ticks
        self.x_pos = 0.0
        self.y_pos = 0.0
        self.x_target = 0
        self.y_target = 0
        self.last_shot = 0
        self.bullet_delay = BULLET_DELAY
        self.shots_in_burst = 0
        self.is_shot = False
        self.frame = 0
        self.flipped = False

        self.damage = DEFAULT_DAMAGE
        self.bullet_speed = DEFAULT_BULLET_SPEED
        self.bullets_per_burst = DEFAULT_BULLETS_PER_BURST

        self.bullets: List[Bullet] = []
        self.bullet_texture = _load(os.path.join(str(image_dir), "bullet.png"))
        self.load_image(os.path.join(str(image_dir), "gun.png"))
        self.clips = make_clips(GUN_FRAMES, GUN_SIZE, GUN_SIZE)

    def _set_target(self, pos) -> None:
        self.x_target = int(pos[0]) - TARGET_OFFSET
        self.y_target = int(pos[1]) - TARGET_OFFSET

    def handle_mouse_event(self, event) -> None:
        """Track the mouse and start a burst on a click."""
        if event.type == pygame.MOUSEMOTION:
            self._set_target(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._set_target(event.pos)
            if not self.is_shot:
                self.is_shot = True
                self.shots_in_burst = 0
                self.last_shot = self._clock()

    def update(self, audio) -> None:
        """Fire the next shot of a burst when due, then move every bullet."""
        if self.is_shot:
            now = self._clock()
            if now - self.last_shot >= self.bullet_delay:
                if self.shots_in_burst < self.bullets_per_burst:
                    self.fire()
                    audio.play_sound("gun")
                    self.last_shot = now
                    self.shots_in_burst += 1
                else:
                    self.is_shot = False
                    self.shots_in_burst = 0

        for bullet in self.bullets:
            bullet.x_pos += math.cos(bullet.angle) * self.bullet_speed
            bullet.y_pos += math.sin(bullet.angle) * self.bullet_speed

    def aim(self, player, surface: Optional[pygame.Surface]) -> int:
        """Follow the player, pick the frame facing the target and draw it."""
        center_x = int(player.x_pos + player.width_frame * 0.1)
        center_y = int(player.y_pos)

        diff_x = self.x_target - self.x_pos
        diff_y = self.y_target - self.y_pos
        flipped = diff_x < 0
        if flipped:
            angle = math.degrees(math.atan2(diff_y, -diff_x))
        else:
            angle = math.degrees(math.atan2(-diff_y, diff_x))
        angle = min(max(angle, -90.0), 90.0)
        frame = min(max(int((angle + 90.0) / FRAME_STEP_DEGREES), 0), GUN_FRAMES - 1)
        if flipped:
            frame = GUN_FRAMES - 1 - frame

        self.x_pos = center_x
        self.y_pos = center_y
        self.rect.topleft = (int(self.x_pos), int(self.y_pos))
        self.frame = frame
        self.flipped = flipped

        if surface is not None and self.texture is not None:
            clip = self.clips[frame].clip(self.texture.get_rect())
            if clip.width > 0 and clip.height > 0:
                image = self.texture.subsurface(clip)
                if flipped:
                    image = pygame.transform.flip(image, True, False)
                self.blit(surface, image, pygame.Rect(self.rect.x, self.rect.y, GUN_SIZE, GUN_SIZE))
        return frame

    def fire(self) -> Bullet:
        """Launch one bullet from the muzzle toward the target."""
        angle = math.atan2(self.y_target - self.y_pos, self.x_target - self.x_pos)
        bullet = Bullet(
            x_pos=self.x_pos + GUN_OFFSET + math.cos(angle),
            y_pos=self.y_pos + GUN_OFFSET + math.sin(angle),
            angle=angle,
        )
        self.bullets.append(bullet)
        return bullet

    def show_bullets(self, surface: pygame.Surface) -> None:
        """Drop bullets that left the screen and draw the rest."""
        kept = []
        for bullet in self.bullets:
            rect = bullet.rect()
            if rect.x < 0 or rect.y < 0 or rect.right > SCREEN_WIDTH or rect.bottom > SCREEN_HEIGHT:
                continue
            kept.append(bullet)
            self.blit(surface, self.bullet_texture, rect)
        self.bullets = kept

    def remove_bullet(self, index: int) -> None:
        """Remove the bullet at index; out-of-range indices are ignored."""
        if 0 <= index < len(self.bullets):
            del self.bullets[index]

    def increase_damage(self) -> None:
        self.damage += 1

    def increase_total_bullets(self) -> None:
        self.bullets_per_burst += 1

    def increase_bullet_speed(self) -> None:
        self.bullet_speed += _round_half_away(self.bullet_speed * 0.1)