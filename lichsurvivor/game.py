"""Menus, pause screen, replay screen and the level-up flow."""

import logging
import os
import time
from typing import Dict, List, Optional, Tuple

import pygame

from .buffs import BUFF_SIZE, MAIN_BUFFS, BuffPanel
from .config import SCREEN_HEIGHT, SCREEN_WIDTH
from .sprite import Sprite, make_clips

log = logging.getLogger(__name__)

BUTTON_WIDTH = 192
BUTTON_HEIGHT = 96
SETTING_SIZE = 32
BUTTON_FRAMES = 3
SETTING_FRAMES = 2

PLAY_POINT = (544, 400)
REPLAY_POINT = (544, 272)
QUIT_POINT = (544, 450)
YOU_LOSE_POINT = (580, 200)
PAUSE_POINT = (SCREEN_WIDTH - SETTING_SIZE, 0)
MUSIC_POINT = (585, 300)
RESUME_POINT = (SCREEN_WIDTH // 2 - 64, SCREEN_HEIGHT // 2 - 64)
QUIT_SETTING_POINT = (585, 340)
LOGO_RECT = pygame.Rect(140, 10, 1000, 215)

TEXT_COLOR = (255, 0, 0)
OVERLAY_COLOR = (0, 0, 0, 100)
BUFF_SELECT_DELAY = 100

PLAY_IMAGE = "Play_button.png"
REPLAY_IMAGE = "Replay_button.png"
QUIT_IMAGE = "Quit_button.png"
PAUSE_IMAGE = "Paused_button.png"
RESUME_IMAGE = "Resume_button.png"
QUIT_SETTING_IMAGE = "quit_button_setting.png"
SOUND_IMAGES = ("music_off.png", "music_off_hover.png", "music_on.png", "music_on_hover.png")


def _load(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


def _step(frame: int, top: int) -> int:
    """Advance a hover frame and hold it at its last value."""
    return min(frame + 1, top)


class Game:
    """Screen flow around the play field: menu, pause, buffs and replay."""

    def __init__(self, gun, player, image_dir="images", rng=None) -> None:
        self.gun = gun
        self.player = player
        self.image_dir = str(image_dir)
        self._sprite = Sprite()
        self.buffs = BuffPanel(self.image_dir, rng)

        self.mouse_x = 0
        self.mouse_y = 0

        self.menu = True
        self.paused = False
        self.music = True
        self.is_hover_music = False
        self.is_resume = False
        self.pressed = [False] * 3
        self.setting_pressed = [False] * 5
        self.buff_pressed = [False] * MAIN_BUFFS

        self.play_button_frame = 0
        self.replay_button_frame = 0
        self.quit_button_frame = 0
        self.paused_frame = 0
        self.resume_frame = 0
        self.quit_frame = 0

        self.quit_requested = False
        self.player_events_enabled = True
        self.can_spawn = True
        self.select_delay = BUFF_SELECT_DELAY

        self._textures: Dict[str, Optional[pygame.Surface]] = {}
        self.logo = _load(self._image("Logo.png"))
        self.sound_buttons: List[Optional[pygame.Surface]] = [
            _load(self._image(name)) for name in SOUND_IMAGES
        ]

    def _image(self, name: str) -> str:
        return os.path.join(self.image_dir, name)

    def check_button(self, point, width, height) -> bool:
        """True if the last known mouse position lies on the button (edges included)."""
        left, top = point[0], point[1]
        return left <= self.mouse_x <= left + width and top <= self.mouse_y <= top + height

    def _set_mouse(self, event) -> None:
        pos = getattr(event, "pos", None)
        if pos is not None:
            self.mouse_x, self.mouse_y = int(pos[0]), int(pos[1])

    def _on_click(self) -> None:
        if self.menu:
            if self.check_button(PLAY_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.pressed[0] = True
        else:
            if self.check_button(REPLAY_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.pressed[1] = True
                self.is_resume = True
            elif self.check_button(QUIT_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.pressed[2] = True

        if not self.paused:
            if self.check_button(PAUSE_POINT, SETTING_SIZE, SETTING_SIZE):
                self.setting_pressed[0] = True
        else:
            if self.check_button(RESUME_POINT, SETTING_SIZE, SETTING_SIZE):
                self.setting_pressed[1] = True
            elif self.check_button(QUIT_SETTING_POINT, SETTING_SIZE, SETTING_SIZE):
                self.setting_pressed[2] = True
            elif self.check_button(MUSIC_POINT, SETTING_SIZE, SETTING_SIZE):
                self.music = not self.music

        if self.buffs.visible:
            for slot, point in enumerate(self.buffs.points):
                if self.check_button(point, BUFF_SIZE, BUFF_SIZE):
                    self.buff_pressed[slot] = True
                    if slot < len(self.buffs.choices):
                        self.buffs.selected = self.buffs.choices[slot]
                    break

    def _on_release(self) -> None:
        self.pressed = [False] * 3
        for i in range(4):
            self.setting_pressed[i] = False
        self.buff_pressed = [False] * MAIN_BUFFS

    def _on_motion(self) -> None:
        if self.menu:
            if self.check_button(PLAY_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.play_button_frame = _step(self.play_button_frame, BUTTON_FRAMES - 1)
            else:
                self.play_button_frame = 0
        else:
            if self.check_button(REPLAY_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.is_resume = True
                self.replay_button_frame = _step(self.replay_button_frame, BUTTON_FRAMES - 1)
            elif self.check_button(QUIT_POINT, BUTTON_WIDTH, BUTTON_HEIGHT):
                self.quit_button_frame = _step(self.quit_button_frame, BUTTON_FRAMES - 1)
            else:
                self.replay_button_frame = 0
                self.quit_button_frame = 0

        if not self.paused:
            if self.check_button(PAUSE_POINT, SETTING_SIZE, SETTING_SIZE):
                self.paused_frame = _step(self.paused_frame, SETTING_FRAMES - 1)
            else:
                self.paused_frame = 0
        else:
            if self.check_button(RESUME_POINT, SETTING_SIZE, SETTING_SIZE):
                self.resume_frame = _step(self.resume_frame, SETTING_FRAMES - 1)
            elif self.check_button(QUIT_SETTING_POINT, SETTING_SIZE, SETTING_SIZE):
                self.quit_frame = _step(self.quit_frame, SETTING_FRAMES - 1)
            elif self.check_button(MUSIC_POINT, SETTING_SIZE, SETTING_SIZE):
                self.is_hover_music = True
            else:
                self.resume_frame = 0
                self.quit_frame = 0
                self.is_hover_music = False

        if self.buffs.visible:
            for slot, point in enumerate(self.buffs.points):
                if self.check_button(point, BUFF_SIZE, BUFF_SIZE):
                    if slot < len(self.buffs.choices):
                        self.buffs.hover = self.buffs.choices[slot]
                    self.buffs.frames[slot] = _step(self.buffs.frames[slot], 1)
                    break
            else:
                self.buffs.hover = None
                self.buffs.frames = [0] * MAIN_BUFFS

    def handle_event(self, event, audio) -> None:
        """React to clicks, hovering and the Escape key on every screen."""
        if event.type == pygame.KEYDOWN:
            if getattr(event, "key", None) == pygame.K_ESCAPE:
                self.setting_pressed[0] = True
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(event, "button", None) == pygame.BUTTON_LEFT:
                self._set_mouse(event)
                self._on_click()
        elif event.type == pygame.MOUSEBUTTONUP:
            self._on_release()
        elif event.type == pygame.MOUSEMOTION:
            self._set_mouse(event)
            self._on_motion()

        if self.pressed[0]:
            self.menu = False
        if self.setting_pressed[0]:
            self.paused = True
        if any(self.buff_pressed):
            audio.play_sound("buff")
            if self.select_delay > 0:
                time.sleep(self.select_delay / 1000)
            self.apply_buff(audio)
            self.buffs.visible = False
            self.paused = False
            self.buffs.active = False
        audio.toggle_mute(self.music)

    def apply_buff(self, audio):
        """Open the buff choice on level-up and apply a chosen buff."""
        if self.buffs.check_level_up(self.player, audio):
            self.paused = True
        return self.buffs.apply(self.player, self.gun)

    def _free_button(self, name: str) -> None:
        self._textures.pop(name, None)

    def _render_button(self, surface, point, name, frame, frames, width, height) -> None:
        texture = self._textures.get(name)
        if texture is None:
            texture = _load(self._image(name))
            if texture is None:
                log.warning("Failed to load texture: %s", name)
                return
            self._textures[name] = texture
        clips = make_clips(frames, width, height)
        dest = pygame.Rect(point[0], point[1], width, height)
        self._sprite.play_animation(surface, clips, frame, dest, texture)

    def _dim(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        surface.blit(overlay, (0, 0))

    def render_start_menu(self, surface: pygame.Surface) -> None:
        self._render_button(
            surface, PLAY_POINT, PLAY_IMAGE, self.play_button_frame,
            BUTTON_FRAMES, BUTTON_WIDTH, BUTTON_HEIGHT,
        )
        self._sprite.blit(surface, self.logo, LOGO_RECT)

    def render_pause_button(self, surface: pygame.Surface) -> None:
        self._render_button(
            surface, PAUSE_POINT, PAUSE_IMAGE, self.paused_frame,
            SETTING_FRAMES, SETTING_SIZE, SETTING_SIZE,
        )

    def render_pause_list(self, surface: pygame.Surface) -> None:
        """Draw the pause menu and act on resume or quit presses."""
        self._dim(surface)
        self._render_button(
            surface, RESUME_POINT, RESUME_IMAGE, self.resume_frame,
            SETTING_FRAMES, SETTING_SIZE, SETTING_SIZE,
        )
        self._render_button(
            surface, QUIT_SETTING_POINT, QUIT_SETTING_IMAGE, self.quit_frame,
            SETTING_FRAMES, SETTING_SIZE, SETTING_SIZE,
        )
        if self.setting_pressed[1]:
            for name in (RESUME_IMAGE, QUIT_SETTING_IMAGE, PAUSE_IMAGE):
                self._free_button(name)
            self.paused = False
            self.setting_pressed[1] = False
        elif self.setting_pressed[2]:
            for name in (RESUME_IMAGE, QUIT_SETTING_IMAGE, PAUSE_IMAGE):
                self._free_button(name)
            self.quit_requested = True
            self.setting_pressed[2] = False

        index = (2 if self.music else 0) + (1 if self.is_hover_music else 0)
        target = self.sound_buttons[index]
        if target is not None:
            dest = pygame.Rect(MUSIC_POINT[0], MUSIC_POINT[1], SETTING_SIZE, SETTING_SIZE)
            self._sprite.blit(surface, target, dest)

    def render_text(self, surface, font, text, point, color):
        """Draw text with its top-left corner at point; return the rendered image."""
        image = font.render(text, False, color)
        surface.blit(image, (point[0], point[1]))
        return image

    def replay(self, surface, font, player, enemies, exp_list, nuke_manager, lich) -> None:
        """Show the losing screen, clear the field and restart or quit on request."""
        self.render_text(surface, font, "YOU LOSE", YOU_LOSE_POINT, TEXT_COLOR)
        self._render_button(
            surface, REPLAY_POINT, REPLAY_IMAGE, self.replay_button_frame,
            BUTTON_FRAMES, BUTTON_WIDTH, BUTTON_HEIGHT,
        )
        self._render_button(
            surface, QUIT_POINT, QUIT_IMAGE, self.quit_button_frame,
            BUTTON_FRAMES, BUTTON_WIDTH, BUTTON_HEIGHT,
        )
        self.player_events_enabled = False
        enemies.clear()
        exp_list.clear()
        nuke_manager.clear()
        lich.exp_list.clear()

        if self.pressed[1]:
            self._free_button(REPLAY_IMAGE)
            self._free_button(QUIT_IMAGE)
            player.reset_status()
            player.load_image(self._image("4_direct_move.png"))
            self.menu = True
            self.buffs.reset_stats()
            self.player_events_enabled = True
            self.can_spawn = True
            lich.reset()
        if self.pressed[2]:
            self.quit_requested = True

    @property
    def button_points(self) -> Dict[str, Tuple[int, int]]:
        """Top-left corners of the menu and settings buttons."""
        return {
            "play": PLAY_POINT,
            "replay": REPLAY_POINT,
            "quit": QUIT_POINT,
            "pause": PAUSE_POINT,
            "music": MUSIC_POINT,
            "resume": RESUME_POINT,
            "quit_setting": QUIT_SETTING_POINT,
        }