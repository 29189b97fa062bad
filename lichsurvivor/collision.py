"""Hit tests between bullets, enemies, the player, orbs, bombs and the lich."""

import os
from typing import List, Sequence

from .config import PLAYER_FRAME_OFFSET, SMALL_ENEMY_FRAME_OFFSET
from .enemy import ORB_SIZE, ExpOrb
from .nuke import NUKE_DAMAGE

EXP_ORB_IMAGE = "exp_orb.png"
ORB_DROP_OFFSET = 31


def check_collision(a, b) -> bool:
    """True if two (x, y, w, h) boxes overlap; touching edges do not count."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (
        ay + ah <= by
        or ay >= by + bh
        or ax + aw <= bx
        or ax >= bx + bw
    )


def _player_box(player, offset: int):
    return (
        int(player.x_pos),
        int(player.y_pos),
        int(player.width_frame) - offset,
        int(player.height_frame) - offset,
    )


def _enemy_box(enemy):
    return (
        int(enemy.x_pos),
        int(enemy.y_pos),
        enemy.width_frame - SMALL_ENEMY_FRAME_OFFSET,
        enemy.height_frame - SMALL_ENEMY_FRAME_OFFSET,
    )


def bullet_hits_enemy(player, enemies: List, gun, exp_list: List[ExpOrb]) -> bool:
    """Damage enemies hit by bullets; return True once one of them is killed.

    A killed enemy leaves an experience orb, scores a kill for the player
    and is removed from ``enemies``.
    """
    for index, bullet in enumerate(list(gun.bullets)):
        bullet_rect = bullet.rect()
        for enemy in enemies:
            enemy_rect = enemy.rect()
            if not check_collision(enemy_rect, bullet_rect):
                continue
            gun.remove_bullet(index)
            enemy.minus_hp(gun.damage)
            if enemy.is_dead():
                orb = ExpOrb(enemy.exp_value)
                orb.load(os.path.join(enemy.IMAGE_DIR, EXP_ORB_IMAGE))
                orb.rect.size = (ORB_SIZE, ORB_SIZE)
                orb.set_position(
                    enemy_rect.x + ORB_DROP_OFFSET, enemy_rect.y + ORB_DROP_OFFSET
                )
                exp_list.append(orb)
                player.add_score()
                enemies.remove(enemy)
                return True
    return False


def player_hits_enemy(enemies: Sequence, player, audio) -> bool:
    """Hurt the player by the first enemy touching them."""
    player_box = _player_box(player, PLAYER_FRAME_OFFSET)
    for enemy in enemies:
        if check_collision(_enemy_box(enemy), player_box):
            player.minus_hp(enemy.damage)
            audio.play_sound("hit")
            return True
    return False


def player_collects_exp(exp_list: List[ExpOrb], player) -> int:
    """Hand the player every orb they touch; return how many were taken."""
    player_box = _player_box(player, PLAYER_FRAME_OFFSET)
    collected = 0
    for index in range(len(exp_list) - 1, -1, -1):
        orb = exp_list[index]
        if orb is None:
            continue
        if check_collision(player_box, orb.rect):
            player.add_exp(orb.exp)
            orb.free()
            del exp_list[index]
            collected += 1
    return collected


def player_hits_nuke(player, nukes: Sequence) -> bool:
    """Hurt the player by the first exploding bomb they stand in."""
    player_box = _player_box(player, 0)
    for nuke in nukes:
        if nuke is None:
            continue
        if check_collision(player_box, nuke.rect()) and nuke.explosive_active:
            player.minus_hp(NUKE_DAMAGE)
            return True
    return False


def enemies_in_nukes(enemies: Sequence, nukes: Sequence) -> None:
    """Enemies caught in an explosion get faster and stronger."""
    for enemy in enemies:
        if enemy is None:
            continue
        enemy_box = _enemy_box(enemy)
        for nuke in nukes:
            if nuke is None:
                continue
            if check_collision(nuke.rect(), enemy_box) and nuke.explosive_active:
                enemy.speed_up()
                enemy.power_up()


def bullet_hits_lich(gun, lich) -> bool:
    """Consume bullets that reach the lich; True once one deals damage.

    Bullets that hit while the lich is teleporting are used up harmlessly.
    """
    if lich.is_dead():
        return False
    for index, bullet in enumerate(list(gun.bullets)):
        if check_collision(bullet.rect(), lich.rect()):
            gun.remove_bullet(index)
            if not lich.is_teleporting():
                lich.minus_hp(gun.damage)
                return True
    return False