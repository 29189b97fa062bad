import random

import pygame
import pytest

from lichsurvivor.collision import (
    bullet_hits_enemy,
    bullet_hits_lich,
    check_collision,
    enemies_in_nukes,
    player_collects_exp,
    player_hits_enemy,
    player_hits_nuke,
)
from lichsurvivor.enemy import (
    ENEMY_DAMAGE,
    ENEMY_HP,
    ENEMY_SPEED,
    SMALL_EXP,
    SPEED_STEP,
    ExpOrb,
    SmallEnemy,
)
from lichsurvivor.gun import Bullet, Gun
from lichsurvivor.lich import LICH_HP, Lich, LichState
from lichsurvivor.nuke import NUKE_DAMAGE, Nuke
from lichsurvivor.player import PlayerCharacter


class FakeAudio:
    def __init__(self):
        self.played = []

    def play_sound(self, name):
        self.played.append(name)
        return True


@pytest.fixture
def gun(tmp_path):
    return Gun(image_dir=tmp_path, clock=lambda: 0)


@pytest.fixture
def player(tmp_path, gun):
    hero = PlayerCharacter(gun, image_dir=tmp_path, clock=lambda: 0)
    hero.x_pos = 100.0
    hero.y_pos = 100.0
    hero.width_frame = 64
    hero.height_frame = 64
    return hero


def make_enemy(x, y, hp=ENEMY_HP):
    enemy = SmallEnemy()
    enemy.x_pos = float(x)
    enemy.y_pos = float(y)
    enemy.width_frame = 48
    enemy.height_frame = 48
    enemy.hp = hp
    return enemy


def make_nuke(pos, exploding):
    nuke = Nuke({})
    nuke.set_position(pos)
    nuke.explosive_active = exploding
    return nuke


def test_overlapping_boxes_collide():
    assert check_collision((0, 0, 10, 10), (5, 5, 10, 10)) is True


def test_touching_edges_do_not_collide():
    assert check_collision((0, 0, 10, 10), (10, 0, 10, 10)) is False
    assert check_collision((0, 0, 10, 10), (0, 10, 10, 10)) is False


def test_contained_box_collides_and_is_symmetric():
    outer = pygame.Rect(0, 0, 100, 100)
    inner = pygame.Rect(40, 40, 5, 5)
    assert check_collision(outer, inner) is True
    assert check_collision(inner, outer) is True


def test_distant_boxes_do_not_collide():
    assert check_collision((0, 0, 10, 10), (50, 50, 10, 10)) is False


def test_bullet_wounds_enemy_without_killing(player, gun):
    enemy = make_enemy(300, 300)
    enemies = [enemy]
    gun.bullets.append(Bullet(305.0, 305.0, 0.0))
    exp_list = []
    assert bullet_hits_enemy(player, enemies, gun, exp_list) is False
    assert enemy.hp == ENEMY_HP - gun.damage
    assert gun.bullets == []
    assert enemies == [enemy]
    assert exp_list == []


def test_bullet_kill_drops_orb_and_scores(player, gun):
    enemy = make_enemy(300, 300, hp=gun.damage)
    other = make_enemy(900, 500)
    enemies = [enemy, other]
    gun.bullets.append(Bullet(305.0, 305.0, 0.0))
    exp_list = []
    assert bullet_hits_enemy(player, enemies, gun, exp_list) is True
    assert enemies == [other]
    assert player.score == 1
    assert len(exp_list) == 1
    orb = exp_list[0]
    assert orb.exp == SMALL_EXP
    assert orb.rect.topleft == (300 + 31, 300 + 31)


def test_bullet_miss_keeps_everything(player, gun):
    enemy = make_enemy(300, 300)
    gun.bullets.append(Bullet(700.0, 50.0, 0.0))
    exp_list = []
    assert bullet_hits_enemy(player, [enemy], gun, exp_list) is False
    assert len(gun.bullets) == 1
    assert enemy.hp == ENEMY_HP


def test_player_touching_enemy_is_hurt(player):
    audio = FakeAudio()
    start_hp = player.hp
    enemy = make_enemy(105, 105)
    assert player_hits_enemy([enemy], player, audio) is True
    assert player.hp == start_hp - ENEMY_DAMAGE
    assert audio.played == ["hit"]


def test_player_far_from_enemy_is_safe(player):
    audio = FakeAudio()
    start_hp = player.hp
    assert player_hits_enemy([make_enemy(800, 500)], player, audio) is False
    assert player.hp == start_hp
    assert audio.played == []


def test_player_collects_touching_orbs_only(player):
    near = ExpOrb(5)
    near.rect = pygame.Rect(110, 110, 7, 7)
    far = ExpOrb(3)
    far.rect = pygame.Rect(600, 600, 7, 7)
    orbs = [near, far]
    assert player_collects_exp(orbs, player) == 1
    assert orbs == [far]
    assert player.exp == 5


def test_exploding_nuke_hurts_player(player):
    start_hp = player.hp
    assert player_hits_nuke(player, [make_nuke((100, 100), True)]) is True
    assert player.hp == start_hp - NUKE_DAMAGE


def test_falling_nuke_does_not_hurt(player):
    start_hp = player.hp
    assert player_hits_nuke(player, [make_nuke((100, 100), False)]) is False
    assert player.hp == start_hp


def test_enemies_in_explosion_speed_up():
    inside = make_enemy(100, 100)
    outside = make_enemy(900, 500)
    enemies_in_nukes([inside, outside], [make_nuke((100, 100), True)])
    assert inside.speed == pytest.approx(ENEMY_SPEED + SPEED_STEP)
    assert inside.damage == ENEMY_DAMAGE
    assert outside.speed == pytest.approx(ENEMY_SPEED)


def test_enemies_ignore_inactive_nukes():
    enemy = make_enemy(100, 100)
    enemies_in_nukes([enemy], [make_nuke((100, 100), False)])
    assert enemy.speed == pytest.approx(ENEMY_SPEED)


@pytest.fixture
def lich(tmp_path):
    boss = Lich(image_dir=tmp_path, rng=random.Random(1), clock=lambda: 0)
    boss.x_pos = 200.0
    boss.y_pos = 200.0
    return boss


def test_bullet_damages_lich(gun, lich):
    gun.bullets.append(Bullet(235.0, 225.0, 0.0))
    assert bullet_hits_lich(gun, lich) is True
    assert lich.hp == LICH_HP - gun.damage
    assert gun.bullets == []


def test_teleporting_lich_absorbs_bullet(gun, lich):
    lich.state = LichState.TELEPORTING
    gun.bullets.append(Bullet(235.0, 225.0, 0.0))
    assert bullet_hits_lich(gun, lich) is False
    assert lich.hp == LICH_HP
    assert gun.bullets == []


def test_dead_lich_ignores_bullets(gun, lich):
    lich.hp = 0
    gun.bullets.append(Bullet(235.0, 225.0, 0.0))
    assert bullet_hits_lich(gun, lich) is False
    assert len(gun.bullets) == 1