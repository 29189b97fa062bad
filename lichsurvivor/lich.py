"""The lich boss: a summoner that casts bombs and teleports."""

import enum
import math
import os
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import pygame

from .enemy import ExpOrb, random_point
from .sprite import Sprite, load_texture, make_clips

LICH_HP = 100
LICH_EXP = 5
LICH_SIZE = 80
COOLDOWN_BETWEEN_SKILLS = 2000
NUKES_PER_CAST = 9
EXP_ORB_COUNT = 10
TELEPORT_FRAME = 5
TELEPORT_LAST_FRAME = 12
CASTING_LAST_FRAME = 11
DEATH_LAST_FRAME = 8
TELEPORT_MIN_RADIUS = 200
TELEPORT_MAX_RADIUS = 300
HP_BAR_COLOR = (144, 238, 144)


def _ticks() -> int:
    return int(time.monotonic() * 1000)


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


@dataclass
class SkillData:
    """Timing and animation progress of one skill."""

    casting_time: int
    frame_duration: int
    damage: float
    current_frame: int


class LichState(enum.Enum):
    IDLE = enum.auto()
    TELEPORTING = enum.auto()
    CASTING_SKILL = enum.auto()
    COOLDOWN = enum.auto()
    DEAD = enum.auto()


class Lich:
    """The boss: cycles between casting bombs, teleporting and cooling down."""

    def __init__(
        self,
        image_dir="images",
        rng=None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._rng = rng if rng is not None else random
        self._clock = clock or _ticks
        self._sprite = Sprite()
        self.image_dir = str(image_dir)

        self.x_pos = float(self._rng.randrange(1280))
        self.y_pos = float(self._rng.randrange(640))
        self.hp = LICH_HP

        self.death_finished = False
        self.has_dropped_exp = False
        self.state = LichState.IDLE
        self.cooldown_start = 0
        self.cooldown = COOLDOWN_BETWEEN_SKILLS

        self.lich_texture = load_texture(os.path.join(self.image_dir, "The Summoner.png"))
        self.death_texture = load_texture(os.path.join(self.image_dir, "The Summoner Death.png"))
        self.tele_texture = _load(os.path.join(self.image_dir, "Tele effect.png"))
        self.lich_clips = make_clips(12, LICH_SIZE, LICH_SIZE)
        self.tele_clips = make_clips(13, 64, 64)
        self.death_clips = make_clips(9, LICH_SIZE, LICH_SIZE)

        self.teleport_skill = SkillData(0, 77, 0, 0)
        self.casting_skill = SkillData(0, 83, 10, 0)
        self.death_skill = SkillData(0, 100, 0, 0)

        self.exp_list: List[ExpOrb] = []

    def rect(self) -> pygame.Rect:
        """The lich's body, narrower than its sprite."""
        return pygame.Rect(int(self.x_pos + 31), int(self.y_pos + 19), 17, 43)

    def reset(self) -> None:
        self.hp = LICH_HP
        self.state = LichState.IDLE

    def is_teleporting(self) -> bool:
        return self.state is LichState.TELEPORTING

    def is_dead(self) -> bool:
        return self.hp <= 0

    def minus_hp(self, damage) -> None:
        self.hp -= damage

    def update_skill(self, nuke_manager, player) -> None:
        """Advance the current skill, or the death animation once dead."""
        now = self._clock()
        if self.is_dead():
            self.update_death(now)
            if self.death_finished and not self.has_dropped_exp:
                self.drop_exp()
            return

        nuke_manager.update(player)
        if self.state is LichState.IDLE:
            self.state = LichState.CASTING_SKILL
        elif self.state is LichState.TELEPORTING:
            self.update_teleport(now)
        elif self.state is LichState.CASTING_SKILL:
            self.update_casting(now, nuke_manager, player)
        elif self.state is LichState.COOLDOWN:
            if now - self.cooldown_start >= self.cooldown:
                self.state = LichState.IDLE
                self.cooldown_start = now

    def update_teleport(self, now: int) -> None:
        skill = self.teleport_skill
        if now - skill.casting_time < skill.frame_duration:
            return
        skill.current_frame += 1
        if skill.current_frame == TELEPORT_FRAME:
            self.x_pos, self.y_pos = random_point(
                TELEPORT_MIN_RADIUS, TELEPORT_MAX_RADIUS, self._rng
            )
        elif skill.current_frame >= TELEPORT_LAST_FRAME:
            self.state = LichState.COOLDOWN
            skill.current_frame = 0
        skill.casting_time = now

    def update_casting(self, now: int, nuke_manager, player) -> None:
        skill = self.casting_skill
        if now - skill.casting_time < skill.frame_duration:
            return
        skill.current_frame += 1
        if skill.current_frame >= CASTING_LAST_FRAME:
            target = player.rect()
            nuke_manager.spawn_bomb(NUKES_PER_CAST, (target.x, target.y))
            self.state = LichState.TELEPORTING
            skill.current_frame = 0
        skill.casting_time = now

    def update_death(self, now: int) -> None:
        skill = self.death_skill
        if now - skill.casting_time < skill.frame_duration:
            return
        if skill.current_frame < DEATH_LAST_FRAME:
            skill.current_frame += 1
        else:
            self.death_finished = True
            self.death_texture = None
        skill.casting_time = now

    def drop_exp(self) -> None:
        """Scatter experience orbs on an ellipse around the body, once."""
        if self.has_dropped_exp:
            return
        orb_path = os.path.join(self.image_dir, "lich_exp_orb.png")
        for i in range(EXP_ORB_COUNT):
            angle = 2 * math.pi * i / EXP_ORB_COUNT
            orb = ExpOrb(LICH_EXP)
            orb.load(orb_path)
            x = self.x_pos + 40 + int(20 * math.cos(angle))
            y = self.y_pos + 60 + int(10 * math.sin(angle))
            orb.set_position(x, y)
            self.exp_list.append(orb)
        self.has_dropped_exp = True

    def activate(self, surface: pygame.Surface, nuke_manager, player) -> None:
        """Draw the lich in its current state along with its bombs."""
        dest = pygame.Rect(int(self.x_pos), int(self.y_pos), LICH_SIZE, LICH_SIZE)
        if self.is_dead():
            frame = min(self.death_skill.current_frame, DEATH_LAST_FRAME)
            self._sprite.play_animation(surface, self.death_clips, frame, dest, self.death_texture)
            return
        if self.state is LichState.TELEPORTING:
            self.show_hp_bar(surface)
            self._sprite.play_animation(
                surface, self.tele_clips, self.teleport_skill.current_frame, dest, self.tele_texture
            )
        elif self.state is LichState.CASTING_SKILL:
            self.show_hp_bar(surface)
            self._sprite.play_animation(
                surface, self.lich_clips, self.casting_skill.current_frame, dest, self.lich_texture
            )
        nuke_manager.render(surface)

    def show_hp_bar(self, surface: pygame.Surface) -> None:
        bar = pygame.Rect(int(self.x_pos + 30), int(self.y_pos + 65), int(self.hp * 0.16), 2)
        pygame.draw.rect(surface, HP_BAR_COLOR, bar, 1)