import random

import pygame
import pytest

from lichsurvivor.buffs import Buff
from lichsurvivor.game import (
    MUSIC_POINT,
    PAUSE_POINT,
    PLAY_POINT,
    QUIT_POINT,
    REPLAY_POINT,
    RESUME_POINT,
    Game,
)
from lichsurvivor.gun import Gun
from lichsurvivor.lich import Lich
from lichsurvivor.player import PlayerCharacter


class FakeAudio:
    def __init__(self):
        self.sounds = []
        self.mute_calls = []

    def play_sound(self, name):
        self.sounds.append(name)
        return True

    def toggle_mute(self, music_on):
        self.mute_calls.append(music_on)


class FakeFont:
    def __init__(self):
        self.texts = []

    def render(self, text, antialias, color):
        self.texts.append((text, color))
        return pygame.Surface((max(len(text), 1) * 4, 8))


class FakeNukeManager:
    def __init__(self):
        self.cleared = 0

    def clear(self):
        self.cleared += 1


@pytest.fixture
def setup(tmp_path):
    gun = Gun(image_dir=tmp_path, clock=lambda: 0)
    player = PlayerCharacter(gun, image_dir=tmp_path, clock=lambda: 0)
    game = Game(gun, player, image_dir=tmp_path, rng=random.Random(1))
    game.select_delay = 0
    return game, gun, player, FakeAudio()


def click(game, audio, pos):
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos), audio)


def move(game, audio, pos):
    game.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=pos), audio)


def inside(point, dx=5, dy=5):
    return (point[0] + dx, point[1] + dy)


def test_check_button_includes_edges(setup):
    game, _, _, audio = setup
    move(game, audio, PLAY_POINT)
    assert game.check_button(PLAY_POINT, 192, 96)
    move(game, audio, (PLAY_POINT[0] + 192, PLAY_POINT[1] + 96))
    assert game.check_button(PLAY_POINT, 192, 96)
    move(game, audio, (PLAY_POINT[0] - 1, PLAY_POINT[1]))
    assert not game.check_button(PLAY_POINT, 192, 96)


def test_click_play_leaves_menu(setup):
    game, _, _, audio = setup
    assert game.menu
    click(game, audio, inside(PLAY_POINT))
    assert not game.menu
    assert audio.mute_calls[-1] is True


def test_click_outside_play_stays_in_menu(setup):
    game, _, _, audio = setup
    click(game, audio, (0, 600))
    assert game.menu


def test_escape_pauses(setup):
    game, _, _, audio = setup
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE), audio)
    assert game.paused


def test_pause_button_pauses_and_release_clears(setup):
    game, _, _, audio = setup
    game.menu = False
    click(game, audio, inside(PAUSE_POINT, 2, 2))
    assert game.paused
    assert game.setting_pressed[0]
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(0, 0)), audio)
    assert not any(game.setting_pressed)
    assert not any(game.pressed)


def test_music_button_toggles_mute_when_paused(setup):
    game, _, _, audio = setup
    game.menu = False
    game.paused = True
    click(game, audio, inside(MUSIC_POINT))
    assert game.music is False
    assert audio.mute_calls[-1] is False
    click(game, audio, inside(MUSIC_POINT))
    assert game.music is True


def test_play_hover_frame_holds_at_last(setup):
    game, _, _, audio = setup
    frames = []
    for _ in range(4):
        move(game, audio, inside(PLAY_POINT))
        frames.append(game.play_button_frame)
    assert frames == [1, 2, 2, 2]
    move(game, audio, (0, 600))
    assert game.play_button_frame == 0


def test_level_up_pauses_and_offers_choices(setup):
    game, _, player, audio = setup
    player.exp = player.max_exp
    game.apply_buff(audio)
    assert game.paused
    assert game.buffs.visible and game.buffs.active
    assert player.level == 1
    assert player.exp == 0
    assert "levelUp" in audio.sounds
    assert len(set(game.buffs.choices)) == 3


def test_no_level_up_below_threshold(setup):
    game, _, player, audio = setup
    player.exp = player.max_exp - 1
    assert game.apply_buff(audio) is None
    assert not game.paused
    assert player.level == 0


def test_selecting_first_buff_applies_it(setup):
    game, gun, player, audio = setup
    game.menu = False
    player.exp = player.max_exp
    game.apply_buff(audio)
    game.buffs.choices = [Buff.DAMAGE, Buff.SPEED, Buff.HEALING]
    before = gun.damage
    click(game, audio, inside(game.buffs.points[0]))
    assert gun.damage == before + 1
    assert game.buffs.stats[0] == gun.damage
    assert not game.buffs.visible
    assert not game.paused
    assert "buff" in audio.sounds


def test_hover_buff_sets_preview_choice(setup):
    game, _, player, audio = setup
    game.menu = False
    player.exp = player.max_exp
    game.apply_buff(audio)
    game.buffs.choices = [Buff.DAMAGE, Buff.SPEED, Buff.HEALING]
    move(game, audio, inside(game.buffs.points[1]))
    assert game.buffs.hover is Buff.SPEED
    assert game.buffs.frames[1] == 1
    move(game, audio, (0, 600))
    assert game.buffs.hover is None
    assert game.buffs.frames == [0, 0, 0]


def test_render_text_returns_rendered_image(setup):
    game, _, _, _ = setup
    font = FakeFont()
    surface = pygame.Surface((200, 100))
    image = game.render_text(surface, font, "HELLO", (3, 4), (255, 0, 0))
    assert font.texts == [("HELLO", (255, 0, 0))]
    assert image.get_size() == (20, 8)


def test_replay_without_press_clears_field(setup, tmp_path):
    game, _, player, audio = setup
    game.menu = False
    lich = Lich(image_dir=tmp_path, rng=random.Random(0), clock=lambda: 0)
    lich.exp_list.append(object())
    enemies = [object(), object()]
    exp_list = [object()]
    nukes = FakeNukeManager()
    font = FakeFont()
    game.replay(pygame.Surface((1280, 640)), font, player, enemies, exp_list, nukes, lich)
    assert enemies == [] and exp_list == [] and lich.exp_list == []
    assert nukes.cleared == 1
    assert game.player_events_enabled is False
    assert game.menu is False
    assert font.texts[0][0] == "YOU LOSE"


def test_replay_button_restarts(setup, tmp_path):
    game, _, player, audio = setup
    game.menu = False
    lich = Lich(image_dir=tmp_path, rng=random.Random(0), clock=lambda: 0)
    lich.hp = -5
    player.hp = 0
    player.score = 7
    game.can_spawn = False
    click(game, audio, inside(REPLAY_POINT))
    game.replay(pygame.Surface((1280, 640)), FakeFont(), player, [], [], FakeNukeManager(), lich)
    assert game.menu is True
    assert game.player_events_enabled is True
    assert game.can_spawn is True
    assert player.score == 0
    assert not player.is_dead()
    assert not lich.is_dead()
    assert game.quit_requested is False


def test_quit_button_requests_quit(setup, tmp_path):
    game, _, player, audio = setup
    game.menu = False
    lich = Lich(image_dir=tmp_path, rng=random.Random(0), clock=lambda: 0)
    click(game, audio, inside(QUIT_POINT))
    game.replay(pygame.Surface((1280, 640)), FakeFont(), player, [], [], FakeNukeManager(), lich)
    assert game.quit_requested is True
    assert game.menu is False


def test_resume_from_pause_list(setup):
    game, _, _, audio = setup
    game.menu = False
    game.paused = True
    click(game, audio, inside(RESUME_POINT, 2, 2))
    assert game.setting_pressed[1]
    game.render_pause_list(pygame.Surface((1280, 640)))
    assert game.paused is False
    assert game.setting_pressed[1] is False
    assert game.quit_requested is False


def test_render_start_menu_without_images_keeps_state(setup):
    game, _, _, _ = setup
    surface = pygame.Surface((1280, 640))
    surface.fill((1, 2, 3))
    game.render_start_menu(surface)
    game.render_pause_button(surface)
    assert surface.get_at((0, 0))[:3] == (1, 2, 3)
    assert game.menu is True