"""Level-up buff choices, the stats table and stat previews."""

import enum
import os
import random
from typing import List, Optional, Tuple

import pygame

from .config import SCREEN_HEIGHT, SCREEN_WIDTH
from .sprite import Sprite, make_clips

MAIN_BUFFS = 3
BUFF_SIZE = 32
BUFF_FRAMES = 2

BASE_STATS = (2, 3, 5, 20, 100)
STAT_LABELS = ("DAMAGE: ", "BULLET/BURST: ", "MOVE SPEED: ", "BULLET SPEED: ", "HP: ")
STAT_POSITIONS = ((140, 230), (140, 258), (140, 286), (140, 314), (140, 342))
SLOT_POINTS = ((564, 329), (624, 329), (684, 329))

FRAME_RECT = pygame.Rect(512, 235, 255, 170)
INFO_RECT = pygame.Rect(131, 209, 237, 223)
OVERLAY_COLOR = (0, 0, 0, 100)
PREVIEW_COLOR = (255, 0, 0)
STAT_COLOR = (255, 255, 255)


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


class Buff(enum.Enum):
    """An upgrade offered on level-up, valued by its icon file."""

    DAMAGE = "Dame.png"
    TOTAL_BULLETS = "total_bullets.png"
    SPEED = "Speed.png"
    BULLET_SPEED = "Bullet_speed.png"
    MAX_HEALTH = "health.png"
    HEALING = "healing.png"

    @property
    def image(self) -> str:
        return self.value


_STAT_INDEX = {
    Buff.DAMAGE: 0,
    Buff.TOTAL_BULLETS: 1,
    Buff.SPEED: 2,
    Buff.BULLET_SPEED: 3,
    Buff.MAX_HEALTH: 4,
}

_PREVIEW_OFFSET = {
    Buff.DAMAGE: 100,
    Buff.TOTAL_BULLETS: 167,
    Buff.SPEED: 140,
    Buff.BULLET_SPEED: 170,
    Buff.MAX_HEALTH: 70,
}


def _preview_value(buff: Buff, player, gun) -> int:
    if buff is Buff.DAMAGE:
        return gun.damage + 1
    if buff is Buff.TOTAL_BULLETS:
        return gun.bullets_per_burst + 1
    if buff is Buff.SPEED:
        return int(player.speed * 1.2)
    if buff is Buff.BULLET_SPEED:
        return int(gun.bullet_speed * 1.1)
    return int(player.max_hp * 1.1)


class BuffPanel:
    """The three buff choices shown on level-up and the stats table."""

    def __init__(self, image_dir="images", rng=None) -> None:
        self.image_dir = str(image_dir)
        self._rng = rng if rng is not None else random.Random()
        self._sprite = Sprite()

        self.visible = False
        self.active = False
        self.choices: List[Buff] = []
        self.hover: Optional[Buff] = None
        self.selected: Optional[Buff] = None
        self.frames = [0] * MAIN_BUFFS
        self.points = list(SLOT_POINTS)
        self.stats = list(BASE_STATS)
        self._show_base = False

        self.frame_texture = _load(os.path.join(self.image_dir, "Buff_window.png"))
        self.info_texture = _load(os.path.join(self.image_dir, "Info_table.png"))
        self._slot_textures: List[Optional[pygame.Surface]] = [None] * MAIN_BUFFS
        self._clips = make_clips(BUFF_FRAMES, BUFF_SIZE, BUFF_SIZE)

    def random_pick(self, rng=None) -> List[Buff]:
        """Choose three different buffs at random to offer."""
        pool = list(Buff)
        (rng or self._rng).shuffle(pool)
        self.choices = pool[:MAIN_BUFFS]
        self._slot_textures = [None] * MAIN_BUFFS
        return self.choices

    def check_level_up(self, player, audio) -> bool:
        """Level the player up when their bar is full and open the panel."""
        if player.exp < player.max_exp:
            return False
        audio.play_sound("levelUp")
        self.visible = True
        self.active = True
        self.random_pick()
        player.level += 1
        player.exp = 0
        player.max_exp = int(player.max_exp * 1.5 ** (player.level - 1))
        return True

    def apply(self, player, gun) -> Optional[Buff]:
        """Apply the selected buff, if any, and close the choice."""
        if not self.active or self.selected is None:
            return None
        buff = self.selected
        if buff is Buff.DAMAGE:
            gun.increase_damage()
            self.stats[0] = gun.damage
        elif buff is Buff.TOTAL_BULLETS:
            gun.increase_total_bullets()
            self.stats[1] = gun.bullets_per_burst
        elif buff is Buff.SPEED:
            player.increase_speed()
            self.stats[2] = player.speed
        elif buff is Buff.BULLET_SPEED:
            gun.increase_bullet_speed()
            self.stats[3] = gun.bullet_speed
        elif buff is Buff.MAX_HEALTH:
            player.increase_max_health()
            self.stats[4] = player.max_hp
        elif buff is Buff.HEALING:
            player.heal()
        self._slot_textures = [None] * MAIN_BUFFS
        self.selected = None
        self.hover = None
        self.active = False
        return buff

    def reset_stats(self) -> None:
        """Show the starting stats the next time the table is drawn."""
        self._show_base = True

    def preview_text(self, player, gun) -> Optional[Tuple[str, Tuple[int, int]]]:
        """The upgraded value of the hovered buff's stat and where it goes."""
        buff = self.hover
        if buff is None or buff not in _STAT_INDEX:
            return None
        x, y = STAT_POSITIONS[_STAT_INDEX[buff]]
        text = f"-> {_preview_value(buff, player, gun)}"
        return text, (x + _PREVIEW_OFFSET[buff], y)

    def render(self, surface: pygame.Surface) -> None:
        """Dim the screen and draw the window with the three choices."""
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        surface.blit(overlay, (0, 0))
        self._sprite.blit(surface, self.frame_texture, FRAME_RECT)

        for slot, buff in enumerate(self.choices[:MAIN_BUFFS]):
            if self._slot_textures[slot] is None:
                self._slot_textures[slot] = _load(os.path.join(self.image_dir, buff.image))
            texture = self._slot_textures[slot]
            if texture is None:
                continue
            x, y = self.points[slot]
            dest = pygame.Rect(x, y, BUFF_SIZE, BUFF_SIZE)
            self._sprite.play_animation(surface, self._clips, self.frames[slot], dest, texture)

    def render_stats(self, surface: pygame.Surface, font) -> List[str]:
        """Draw the stats table; return the lines drawn."""
        self._sprite.blit(surface, self.info_texture, INFO_RECT)
        if self._show_base:
            values = BASE_STATS
            self._show_base = False
        else:
            values = tuple(self.stats)
        lines = [f"{label}{value}" for label, value in zip(STAT_LABELS, values)]
        for line, position in zip(lines, STAT_POSITIONS):
            surface.blit(font.render(line, False, STAT_COLOR), position)
        return lines

    def render_preview(self, surface: pygame.Surface, font, player, gun) -> Optional[str]:
        """Draw the hovered buff's preview; return its text if any."""
        preview = self.preview_text(player, gun)
        if preview is None:
            return None
        text, position = preview
        surface.blit(font.render(text, False, PREVIEW_COLOR), position)
        return text