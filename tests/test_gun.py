import math
from types import SimpleNamespace

import pygame
import pytest

from lichsurvivor.config import SCREEN_WIDTH
from lichsurvivor.gun import (
    BULLET_DELAY,
    DEFAULT_BULLET_SPEED,
    DEFAULT_BULLETS_PER_BURST,
    DEFAULT_DAMAGE,
    TARGET_OFFSET,
    Bullet,
    Gun,
)


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


class FakeAudio:
    def __init__(self):
        self.played = []

    def play_sound(self, name):
        self.played.append(name)
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gun(tmp_path, clock):
    return Gun(image_dir=tmp_path, clock=clock)


def test_defaults(gun):
    assert gun.damage == DEFAULT_DAMAGE
    assert gun.bullet_speed == DEFAULT_BULLET_SPEED
    assert gun.bullets_per_burst == DEFAULT_BULLETS_PER_BURST
    assert gun.bullet_delay == BULLET_DELAY
    assert gun.bullets == []


def test_bullet_rect_truncates_position():
    assert Bullet(12.7, 30.2, 0.0).rect() == pygame.Rect(12, 30, 10, 10)


def test_motion_sets_target(gun):
    gun.handle_mouse_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(100, 200)))
    assert (gun.x_target, gun.y_target) == (100 - TARGET_OFFSET, 200 - TARGET_OFFSET)
    assert gun.is_shot is False


def test_click_starts_burst(gun, clock):
    clock.now = 1234
    gun.handle_mouse_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(50, 60), button=1))
    assert gun.is_shot is True
    assert gun.last_shot == 1234
    assert gun.shots_in_burst == 0


def test_burst_fires_configured_count(gun, clock):
    audio = FakeAudio()
    gun.handle_mouse_event(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(500, TARGET_OFFSET), button=1)
    )
    for step in range(1, 10):
        clock.now = step * BULLET_DELAY
        gun.update(audio)
    assert len(gun.bullets) == gun.bullets_per_burst
    assert audio.played == ["gun"] * gun.bullets_per_burst
    assert gun.is_shot is False
    assert all(b.angle == pytest.approx(0.0) for b in gun.bullets)


def test_no_shot_before_delay(gun, clock):
    audio = FakeAudio()
    gun.handle_mouse_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(300, 300), button=1))
    clock.now = BULLET_DELAY - 1
    gun.update(audio)
    assert gun.bullets == []
    assert audio.played == []


def test_update_moves_bullets_by_speed(gun):
    gun.x_target, gun.y_target = 500, 0
    bullet = gun.fire()
    start_x, start_y = bullet.x_pos, bullet.y_pos
    gun.update(FakeAudio())
    assert bullet.x_pos == pytest.approx(start_x + gun.bullet_speed)
    assert bullet.y_pos == pytest.approx(start_y)


def test_fire_points_at_target(gun):
    gun.x_target, gun.y_target = 0, 300
    bullet = gun.fire()
    assert bullet.angle == pytest.approx(math.pi / 2)
    assert gun.bullets == [bullet]


def test_show_bullets_drops_offscreen(gun):
    surface = pygame.Surface((64, 64))
    inside = Bullet(100.0, 100.0, 0.0)
    gun.bullets = [Bullet(-5.0, 10.0, 0.0), inside, Bullet(SCREEN_WIDTH - 5.0, 10.0, 0.0)]
    gun.show_bullets(surface)
    assert gun.bullets == [inside]


def test_remove_bullet(gun):
    first, second = Bullet(1.0, 1.0, 0.0), Bullet(2.0, 2.0, 0.0)
    gun.bullets = [first, second]
    gun.remove_bullet(5)
    gun.remove_bullet(-1)
    assert gun.bullets == [first, second]
    gun.remove_bullet(0)
    assert gun.bullets == [second]


def test_increase_damage_and_burst(gun):
    damage, burst = gun.damage, gun.bullets_per_burst
    gun.increase_damage()
    gun.increase_total_bullets()
    assert gun.damage == damage + 1
    assert gun.bullets_per_burst == burst + 1


def test_increase_bullet_speed_rounds_half_up(gun):
    gun.bullet_speed = 25
    gun.increase_bullet_speed()
    assert gun.bullet_speed == 28


def test_aim_frames_cover_up_and_down(gun):
    player = SimpleNamespace(x_pos=0.0, y_pos=0.0, width_frame=0, height_frame=0)
    surface = pygame.Surface((64, 64))
    gun.x_target, gun.y_target = 0, -100
    up = gun.aim(player, surface)
    gun.x_target, gun.y_target = 0, 100
    down = gun.aim(player, surface)
    assert up == len(gun.clips) - 1
    assert down == 0


def test_aim_follows_player(gun):
    player = SimpleNamespace(x_pos=320.0, y_pos=240.0, width_frame=0, height_frame=0)
    gun.x_target, gun.y_target = 10, 10
    frame = gun.aim(player, None)
    assert (gun.x_pos, gun.y_pos) == (320, 240)
    assert gun.rect.topleft == (320, 240)
    assert 0 <= frame < len(gun.clips)


def test_aim_left_is_flipped(gun):
    player = SimpleNamespace(x_pos=0.0, y_pos=0.0, width_frame=0, height_frame=0)
    gun.x_pos = 200.0
    gun.x_target, gun.y_target = 0, 0
    gun.aim(player, None)
    assert gun.flipped is True