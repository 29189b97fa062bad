"""The game window and its main loop."""

import argparse
import os
import random
import sys
import time
from typing import Callable, List, Optional

import pygame

from .audio import AudioManager
from .collision import (
    bullet_hits_enemy,
    bullet_hits_lich,
    enemies_in_nukes,
    player_collects_exp,
    player_hits_enemy,
    player_hits_nuke,
)
from .config import FRAME_PER_SECOND, SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE
from .enemy import MAX_SMALL_ENEMIES, ExpOrb, SmallEnemy
from .game import Game
from .gun import Gun
from .lich import Lich
from .nuke import NukeManager
from .player import PlayerCharacter
from .sprite import Sprite
from .tilemap import GameMap
from .timer import FrameTimer

BOSS_LEVEL = 3
SPAWN_INTERVAL = 1000
FRAME_MS = 1000 // FRAME_PER_SECOND
BACKGROUND_COLOR = (255, 255, 255)
FONT_FILE = "Pixel Game.otf"
FONT_SIZE = 28


def _ticks() -> int:
    return int(time.monotonic() * 1000)


class App:
    """Owns every game object and advances them one frame at a time."""

    def __init__(
        self,
        screen: pygame.Surface,
        font,
        audio=None,
        asset_dir=".",
        rng=None,
        clock: Optional[Callable[[], int]] = None,
        background: Optional[Sprite] = None,
    ) -> None:
        self.screen = screen
        self.font = font
        self.asset_dir = str(asset_dir)
        self.rng = rng if rng is not None else random.Random()
        self._clock = clock or _ticks
        image_dir = os.path.join(self.asset_dir, "images")

        self.audio = audio if audio is not None else AudioManager()
        self.audio.play_music()

        self.background = background if background is not None else Sprite()
        self.gun = Gun(image_dir, clock=self._clock)
        self.player = PlayerCharacter(self.gun, image_dir, clock=self._clock)
        self.game = Game(self.gun, self.player, image_dir, self.rng)
        self.enemies: List[SmallEnemy] = []
        self.exp_list: List[ExpOrb] = []
        self.lich = Lich(image_dir, rng=self.rng, clock=self._clock)
        self.nuke_manager = NukeManager(image_dir)

        self.game_map = GameMap()
        map_dir = os.path.join(self.asset_dir, "map")
        try:
            self.game_map.load_map(os.path.join(map_dir, "map01.dat"))
        except OSError:
            pass
        try:
            self.game_map.load_tiles(map_dir)
        except OSError:
            pass

        self.timer = FrameTimer()
        self.quit = False
        self.bullet_lich = False
        self.last_spawn = 0
        self.last_frame = self._clock()

    @property
    def running(self) -> bool:
        return not (self.quit or self.game.quit_requested)

    def _nukes(self) -> list:
        nukes = getattr(self.nuke_manager, "nukes", None)
        if nukes is None:
            nukes = getattr(self.nuke_manager, "nuke_list", ())
        return list(nukes)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit = True
            self.game.handle_event(event, self.audio)
            if not self.game.paused and self.game.player_events_enabled:
                self.player.handle_input(event)
                self.gun.handle_mouse_event(event)

    def _draw_field(self) -> None:
        screen = self.screen
        screen.fill(BACKGROUND_COLOR)
        self.game_map.draw(screen)
        self.player.render_boost(screen)
        self.player.show(screen)
        self.player.show_bar(screen)
        self.player.render_score(screen, self.font)
        self.gun.aim(self.player, screen)
        self.gun.show_bullets(screen)
        for enemy in self.enemies:
            enemy.show(screen)
            if not enemy.is_dead():
                enemy.show_hp_bar(screen)
        if self.player.level == BOSS_LEVEL:
            self.lich.activate(screen, self.nuke_manager, self.player)
        for orb in self.exp_list:
            orb.show(screen)
        for orb in self.lich.exp_list:
            orb.show(screen)

    def _update_play(self) -> None:
        player = self.player
        if player.level == BOSS_LEVEL:
            self.lich.update_skill(self.nuke_manager, player)
            self.bullet_lich = bullet_hits_lich(self.gun, self.lich)
            if self.lich.is_dead():
                self.game.can_spawn = True
                self.bullet_lich = False
            else:
                self.game.can_spawn = False
                self.enemies.clear()

        player.do_player()
        self.gun.update(self.audio)

        now = self._clock()
        delta_time = (now - self.last_frame) / 1000.0
        self.last_frame = now
        for enemy in self.enemies:
            enemy.follow(player, delta_time)

        bullet_enemy = bullet_hits_enemy(player, self.enemies, self.gun, self.exp_list)
        player_enemy = player_hits_enemy(self.enemies, player, self.audio)
        player_collects_exp(self.exp_list, player)
        nukes = self._nukes()
        enemies_in_nukes(self.enemies, nukes)
        player_nuke = player_hits_nuke(player, nukes)
        player_collects_exp(self.lich.exp_list, player)

        player.update_boost(player_enemy, player_nuke, bullet_enemy, self.bullet_lich)

        if (
            self.game.can_spawn
            and not player.is_dead()
            and now - self.last_spawn >= SPAWN_INTERVAL
            and len(self.enemies) < MAX_SMALL_ENEMIES
        ):
            self.enemies.append(SmallEnemy.spawn_new(self.rng))
            self.last_spawn = now

        self.game.render_pause_button(self.screen)
        self.game.apply_buff(self.audio)

    def _draw_paused(self) -> None:
        for enemy in self.enemies:
            enemy.is_move = False
        buffs = self.game.buffs
        if buffs.visible:
            buffs.render(self.screen)
            buffs.render_stats(self.screen, self.font)
            buffs.render_preview(self.screen, self.font, self.player, self.gun)
        else:
            self.game.render_pause_list(self.screen)
            buffs.render_stats(self.screen, self.font)

    def step(self) -> bool:
        """Handle pending events and advance one frame; False once quitting."""
        self._handle_events()
        if self.game.menu:
            self.background.render(self.screen)
            self.game.render_start_menu(self.screen)
        else:
            self._draw_field()
            if not self.game.paused:
                self._update_play()
            else:
                self._draw_paused()
            if self.player.is_dead():
                self.audio.mute_music()
                self.audio.play_sound("youLose")
                self.game.replay(
                    self.screen, self.font, self.player, self.enemies,
                    self.exp_list, self.nuke_manager, self.lich,
                )
                self.player.reset_input()

        if pygame.display.get_init() and pygame.display.get_surface() is self.screen:
            pygame.display.flip()
        return self.running

    def run(self) -> None:
        """Run frames at a fixed rate until the player quits."""
        try:
            while True:
                self.timer.start()
                if not self.step():
                    break
                elapsed = self.timer.get_ticks()
                if elapsed < FRAME_MS:
                    time.sleep((FRAME_MS - elapsed) / 1000)
        finally:
            self.close()

    def close(self) -> None:
        """Release the background and the audio device."""
        self.background.free()
        self.audio.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="A top-down survival shooter.")
    parser.add_argument("--assets", default=".", help="directory holding images, sfx and map")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        try:
            font = pygame.font.Font(os.path.join(args.assets, FONT_FILE), FONT_SIZE)
        except (OSError, pygame.error) as exc:
            print(f"Font error: {exc}", file=sys.stderr)
            return 1
        background = Sprite()
        if not background.load_image(os.path.join(args.assets, "images", "back_ground.png")):
            print("Failed to load the background image", file=sys.stderr)
            return 1
        try:
            app = App(screen, font, asset_dir=args.assets, background=background)
        except pygame.error as exc:
            print(f"Initialisation error: {exc}", file=sys.stderr)
            return 1
        app.run()
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())