"""The player character: movement, health, experience and combat boosts."""

import enum
import math
import os
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import pygame

from .config import SCREEN_HEIGHT, SCREEN_WIDTH, InputState
from .sprite import Sprite, make_clips, make_grid_clips

START_X = 570
START_Y = 270
START_SPEED = 3
RESET_SPEED = 5
START_HP = 100
START_MAX_EXP = 10
WALK_FRAMES = 4

BOOST_FRAMES = 50
PROGRESS_FRAMES = 9
PROGRESS_SIZE = 64

ENDOPHINE_SLOW = 1000
ENDOPHINE_FAST = 80
ENDOPHINE_PEAK = 40
ENDOPHINE_TOP = 49
ENDOPHINE_DAMAGE = 5
ENDOPHINE_HP = 20
ENDOPHINE_HIT_DRAIN = 3

ADRENALINE_DURATION = 80
ADRENALINE_DECAY = 5000
ADRENALINE_GAIN = 5
ADRENALINE_FILL_LIMIT = 38
ADRENALINE_LOOP_START = 39
ADRENALINE_TOP = 49
ADRENALINE_DAMAGE = 1
ADRENALINE_HP = 5

PROGRESS_STEP = 80
PROGRESS_LAST = 8

EXP_BAR_WIDTH = 254.0
EXP_OUTER = pygame.Rect(0, 30, 254, 8)
EXP_COLOR = (255, 255, 0)
SCORE_COLOR = (0, 0, 0)


def _ticks() -> int:
    return int(time.monotonic() * 1000)


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class WalkType(enum.Enum):
    WALK_RIGHT = 0
    WALK_LEFT = 1
    GO_UP = 2
    GO_DOWN = 3


@dataclass
class BoostBar:
    """Animation state of one boost meter and its on-player effect."""

    clips: List[pygame.Rect]
    position: pygame.Rect
    frame_duration: int
    current_frame: int = 0
    current_progress_frame: int = 0
    texture: Optional[pygame.Surface] = None
    progress: Optional[pygame.Surface] = None
    progress_clips: List[pygame.Rect] = field(
        default_factory=lambda: make_clips(PROGRESS_FRAMES, PROGRESS_SIZE, PROGRESS_SIZE)
    )
    last_time: int = 0
    last: int = 0


_KEY_DIRECTIONS = {
    pygame.K_d: (WalkType.WALK_RIGHT, "right"),
    pygame.K_a: (WalkType.WALK_LEFT, "left"),
    pygame.K_w: (WalkType.GO_UP, "up"),
    pygame.K_s: (WalkType.GO_DOWN, "down"),
}


class PlayerCharacter:
    """The hero the player steers around the arena."""

    def __init__(
        self,
        gun,
        image_dir="images",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.gun = gun
        self.image_dir = str(image_dir)
        self._clock = clock or _ticks
        self._sprite = Sprite()

        self.score = 0
        self.frame = 0
        self.x_pos = float(START_X)
        self.y_pos = float(START_Y)
        self.x_val = 0.0
        self.y_val = 0.0
        self.width_frame = 0
        self.height_frame = 0
        self.status: Optional[WalkType] = None
        self.input = InputState()
        self.level = 0
        self.max_exp = START_MAX_EXP
        self.exp = 0
        self.speed = START_SPEED
        self.hp = START_HP
        self.max_hp = START_HP

        self._reverse = False
        self._in_progress = True
        self.is_adrenaline = False
        self.is_endophine = False
        self._was_endophine = False
        self._was_adrenaline = False
        self._original_damage = 0
        self._original_hp = 0

        self.frame_clips = make_clips(WALK_FRAMES, 0, 0)
        self.load_image(self._image("4_direct_move.png"))
        self.hp_inner_texture = _load(self._image("hp_bar_inner.png"))
        self.hp_outer_texture = _load(self._image("hp_bar_outer.png"))
        self.exp_outer_texture = _load(self._image("experience_bar_background.png"))

        self.adrenaline = BoostBar(
            clips=make_grid_clips(154, 68, 10, 5),
            position=pygame.Rect(-30, 30, 154, 68),
            frame_duration=ADRENALINE_DURATION,
            current_progress_frame=0,
            texture=_load(self._image("Adrenaline.png")),
            progress=_load(self._image("Adrenaline_boost.png")),
        )
        self.endophine = BoostBar(
            clips=make_grid_clips(138, 36, 10, 5),
            position=pygame.Rect(100, 41, 138, 36),
            frame_duration=ENDOPHINE_SLOW,
            current_progress_frame=-1,
            texture=_load(self._image("Rage.png")),
            progress=_load(self._image("Endophine_boost.png")),
        )

    def _image(self, name: str) -> str:
        return os.path.join(self.image_dir, name)

    def load_image(self, path) -> bool:
        """Load the four-frame walking sheet."""
        ok = self._sprite.load_image(path)
        if ok:
            self.width_frame = self._sprite.rect.width // WALK_FRAMES
            self.height_frame = self._sprite.rect.height
            if self.width_frame > 0 and self.height_frame > 0:
                self.frame_clips = make_clips(WALK_FRAMES, self.width_frame, self.height_frame)
        return ok

    def rect(self) -> pygame.Rect:
        """Where the player was last drawn, sized as the whole sheet."""
        return self._sprite.rect.copy()

    def handle_input(self, event) -> None:
        """Track the WASD keys."""
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        entry = _KEY_DIRECTIONS.get(getattr(event, "key", None))
        if entry is None:
            return
        status, direction = entry
        self.status = status
        setattr(self.input, direction, event.type == pygame.KEYDOWN)

    def _normalize_motion(self) -> None:
        distance = math.hypot(self.x_val, self.y_val)
        if distance != 0:
            self.x_pos += self.x_val / distance * self.speed
            self.y_pos += self.y_val / distance * self.speed

    def do_player(self) -> None:
        """Move one step according to the held keys and keep on screen."""
        self.x_val = 0.0
        self.y_val = 0.0
        held = (self.input.left, self.input.right, self.input.up, self.input.down)
        if held == (True, False, False, False):
            self.x_val -= self.speed
            self.x_pos += self.x_val
        elif held == (False, True, False, False):
            self.x_val += self.speed
            self.x_pos += self.x_val
        elif held == (False, False, True, False):
            self.y_val -= self.speed
            self.y_pos += self.y_val
        elif held == (False, False, False, True):
            self.y_val += self.speed
            self.y_pos += self.y_val
        elif held == (True, False, True, False):
            self.x_val -= self.speed
            self.y_val -= self.speed
            self._normalize_motion()
        elif held == (False, True, True, False):
            self.x_val += self.speed
            self.y_val -= self.speed
            self._normalize_motion()
        elif held == (False, True, False, True):
            self.x_val += self.speed
            self.y_val += self.speed
            self._normalize_motion()
        elif held == (True, False, False, True):
            self.x_val -= self.speed
            self.y_val += self.speed
            self._normalize_motion()

        if self.x_pos < 0:
            self.x_pos = 0.0
        elif self.x_pos + self.width_frame > SCREEN_WIDTH:
            self.x_pos = float(SCREEN_WIDTH - self.width_frame)
        elif self.y_pos < 0:
            self.y_pos = 0.0
        elif self.y_pos + self.height_frame > SCREEN_HEIGHT:
            self.y_pos = float(SCREEN_HEIGHT - self.width_frame)

    def show(self, surface: pygame.Surface) -> None:
        """Advance the walk animation while moving and draw the player."""
        if self.input.any_pressed():
            self.frame += 1
        if self.frame >= WALK_FRAMES:
            self.frame = 0
        self._sprite.set_rect(self.x_pos, self.y_pos)
        dest = pygame.Rect(int(self.x_pos), int(self.y_pos), self.width_frame, self.height_frame)
        self._sprite.play_animation(
            surface, self.frame_clips, self.frame, dest, self._sprite.texture
        )

    def show_bar(self, surface: pygame.Surface) -> None:
        """Draw the experience bar, the boost meters and the health bar."""
        self._sprite.blit(surface, self.exp_outer_texture, EXP_OUTER)

        hp_inner = pygame.Rect(40, 10, int(self.hp * 2.1), 12)
        hp_outer = pygame.Rect(0, 0, int(self.max_hp * 2.1 + 44), 32)

        progress = int(EXP_BAR_WIDTH * self.exp / self.max_exp) if self.max_exp else 0
        if progress > 0:
            pygame.draw.rect(surface, EXP_COLOR, pygame.Rect(0, 31, progress, 6))

        for bar in (self.adrenaline, self.endophine):
            if 0 <= bar.current_frame < len(bar.clips):
                self._sprite.play_animation(
                    surface, bar.clips, bar.current_frame, bar.position, bar.texture
                )
        self._sprite.blit(surface, self.hp_outer_texture, hp_outer)
        self._sprite.blit(surface, self.hp_inner_texture, hp_inner)

    def _toggle_boost(self, active: bool, damage: int, hp: int) -> None:
        if active:
            self._original_damage = self.gun.damage
            self._original_hp = self.hp
            self.gun.damage += damage
            self.hp += hp
        else:
            self.gun.damage = self._original_damage
            self.hp = self._original_hp

    @staticmethod
    def _advance_progress(bar: BoostBar, active: bool, now: int) -> None:
        if active:
            if now - bar.last >= PROGRESS_STEP:
                bar.current_progress_frame += 1
                if bar.current_progress_frame >= PROGRESS_LAST:
                    bar.current_progress_frame = 0
                bar.last = now
        else:
            bar.current_progress_frame = -1

    def update_boost(self, player_nuke, player_enemy, bullet_enemy, bullet_lich) -> None:
        """Fill and drain the Endophine and Adrenaline meters for this frame."""
        now = self._clock()
        endo = self.endophine
        adre = self.adrenaline

        if self.is_endophine != self._was_endophine:
            self._toggle_boost(self.is_endophine, ENDOPHINE_DAMAGE, ENDOPHINE_HP)
            self._was_endophine = self.is_endophine
        if self.is_adrenaline != self._was_adrenaline:
            self._toggle_boost(self.is_adrenaline, ADRENALINE_DAMAGE, ADRENALINE_HP)
            self._was_adrenaline = self.is_adrenaline

        if not player_enemy and not player_nuke:
            if now - endo.last_time >= endo.frame_duration:
                if not self._reverse:
                    endo.current_frame += 1
                    if endo.current_frame == ENDOPHINE_PEAK:
                        endo.frame_duration = ENDOPHINE_FAST
                        self.is_endophine = True
                    elif endo.current_frame >= ENDOPHINE_TOP:
                        endo.current_frame = ENDOPHINE_PEAK
                        self._reverse = True
                else:
                    endo.current_frame -= 1
                    if endo.current_frame <= 0:
                        endo.current_frame = 0
                        endo.frame_duration = ENDOPHINE_SLOW
                        self._reverse = False
                        self.is_endophine = False
                endo.last_time = now
        else:
            endo.current_frame -= ENDOPHINE_HIT_DRAIN
            if endo.current_frame <= 0:
                endo.current_frame = 0
                if self.is_endophine:
                    self.is_endophine = False
                    self.gun.damage = self._original_damage
                    self.hp = self._original_hp
        self._advance_progress(endo, self.is_endophine, now)

        if bullet_enemy or bullet_lich:
            if self._in_progress and 0 <= adre.current_frame <= ADRENALINE_FILL_LIMIT:
                adre.current_frame += ADRENALINE_GAIN
        elif now - adre.last_time >= ADRENALINE_DECAY:
            adre.current_frame = max(adre.current_frame - 1, 0)
            adre.last_time = now

        if self._in_progress and ADRENALINE_LOOP_START <= adre.current_frame <= ADRENALINE_TOP:
            if now - adre.last_time >= adre.frame_duration:
                adre.current_frame += 1
                if adre.current_frame >= ADRENALINE_TOP:
                    adre.current_frame = ADRENALINE_LOOP_START
                    self._in_progress = False
                    self.is_adrenaline = True
                adre.last_time = now
        if not self._in_progress:
            adre.current_frame -= 1
            if adre.current_frame <= 0:
                adre.current_frame = 0
                self.is_adrenaline = False
                self._in_progress = True
        self._advance_progress(adre, self.is_adrenaline, now)

    def render_boost(self, surface: pygame.Surface) -> None:
        """Draw the aura of whichever boost is active."""
        if self.is_adrenaline:
            bar = self.adrenaline
            dest = pygame.Rect(int(self.x_pos), int(self.y_pos + 10), PROGRESS_SIZE, PROGRESS_SIZE)
        elif self.is_endophine:
            bar = self.endophine
            dest = pygame.Rect(int(self.x_pos), int(self.y_pos - 30), PROGRESS_SIZE, PROGRESS_SIZE)
        else:
            return
        if 0 <= bar.current_progress_frame < len(bar.progress_clips):
            self._sprite.play_animation(
                surface, bar.progress_clips, bar.current_progress_frame, dest, bar.progress
            )

    def render_score(self, surface: pygame.Surface, font) -> None:
        """Draw the kill counter in the top right."""
        label = font.render("KILLS: ", False, SCORE_COLOR)
        value = font.render(str(self.score), False, SCORE_COLOR)
        surface.blit(label, (1000, 0))
        surface.blit(value, (1060, 0))

    def minus_hp(self, damage) -> None:
        self.hp -= damage

    def is_dead(self) -> bool:
        return self.hp <= 0

    def add_score(self) -> None:
        self.score += 1

    def add_exp(self, amount) -> None:
        self.exp += amount

    def reset_status(self) -> None:
        """Restore the stats a new run starts with."""
        self.hp = START_HP
        self.max_hp = START_HP
        self.speed = RESET_SPEED
        self.score = 0
        self.frame = 0
        self.x_pos = float(START_X)
        self.y_pos = float(START_Y)
        self.x_val = 0.0
        self.y_val = 0.0
        self.reset_input()
        self.level = 0
        self.max_exp = START_MAX_EXP
        self.exp = 0
        self.is_adrenaline = False
        self.is_endophine = False
        self._was_adrenaline = False
        self._was_endophine = False

    def reset_input(self) -> None:
        self.status = None
        self.input.clear()

    def increase_speed(self) -> None:
        self.speed += _round_half_away(self.speed * 0.2)

    def increase_max_health(self) -> None:
        self.max_hp += _round_half_away(self.max_hp * 0.1)

    def heal(self) -> None:
        """Restore 15% of maximum health, never beyond the maximum."""
        if self.hp == self.max_hp:
            return
        new_hp = int(self.hp + 0.15 * self.max_hp)
        self.hp = min(new_hp, self.max_hp)