"""
Combat resolver

Collision checks run in a fixed order every tick; the order decides which
interaction wins when one bullet or enemy could trigger several.
"""

from __future__ import annotations

import math

from . import audio
from .bosses import damage_boss, damage_mini_boss
from .constants import (
    DEFLECT_PUSH,
    DEFLECT_RADIUS,
    ENEMY_HIT_DEPTH,
    HIT_RADIUS_BOSS,
    HIT_RADIUS_DROPPING,
    HIT_RADIUS_LANE_BASE,
    HIT_RADIUS_LANE_DEPTH,
    PICKUP_DEPTH,
    PICKUP_RADIUS,
    PLAYER_ENEMY_RADIUS,
    PLAYER_PROJECTILE_RADIUS,
    SCORE_BLOCKDOT,
    SCORE_DEFLECT_BULLET,
    SCORE_ENEMY,
    SINGLE_BLOCK_WIDTH,
    TRENCH_HIT_DEPTH,
    TRENCH_WALL_WIDTH,
)
from .effects import deflection_spark, explosion
from .entities import Bullet, BulletKind, Enemy, Lane, MiniBoss
from .player import adjust_health, apply_pickup, handle_player_damage
from .spawner import spawn_boomba_pickup, spawn_missile_pickup
from .utils import within
from .world import WorldState

# Bullet life after bouncing off a mini-boss, ticks
DEFLECT_LIFE = 60
MISSILE_DROP_CHANCE = 0.25


def enemy_hit_radius(enemy: Enemy) -> float:
    m = enemy.motion
    if isinstance(m, Lane):
        return HIT_RADIUS_LANE_BASE + m.z * HIT_RADIUS_LANE_DEPTH
    return HIT_RADIUS_DROPPING


def destroy_enemy(world: WorldState, enemy: Enemy, award: bool = True) -> bool:
    """Kill an enemy once: explosion, per-type score and blockdot loot"""
    if not enemy.alive:
        return False
    enemy.alive = False
    x, y = world.screen_pos(enemy.motion)
    explosion(world, x, y)
    if award:
        world.add_score(SCORE_BLOCKDOT if enemy.is_blockdot else SCORE_ENEMY)
    if enemy.is_blockdot:
        drop_blockdot_loot(world, enemy)
    audio.emit(world.sound, audio.ENEMY_HIT)
    return True


def drop_blockdot_loot(world: WorldState, enemy: Enemy):
    spawn_boomba_pickup(world, enemy)
    if world.rng.random() < MISSILE_DROP_CHANCE:
        spawn_missile_pickup(world, enemy)


# ----------------------------
# Player bullets
# ----------------------------

def deflect_bullet(world: WorldState, bullet: Bullet, mb: MiniBoss):
    rng = world.rng
    angle = math.atan2(bullet.y - mb.y, bullet.x - mb.x) + (rng.random() - 0.5) * 0.8
    speed = 10 + rng.random() * 4
    bullet.kind = BulletKind.BOUNCED
    bullet.vx = math.cos(angle) * speed
    bullet.vy = math.sin(angle) * speed
    bullet.bounce_life = DEFLECT_LIFE
    bullet.x = mb.x + math.cos(angle) * DEFLECT_PUSH
    bullet.y = mb.y + math.sin(angle) * DEFLECT_PUSH
    deflection_spark(world, bullet.x, bullet.y)
    audio.emit(world.sound, audio.DEFLECT)


def resolve_deflections(world: WorldState):
    """Bullets glance off mini-bosses; a strike past the armour roll chips 1 hp"""
    for mb in list(world.mini_bosses):
        for b in world.bullets:
            if not mb.alive:
                break
            if not b.alive or b.bounced:
                continue
            if not within(b.x, b.y, mb.x, mb.y, DEFLECT_RADIUS):
                continue
            deflect_bullet(world, b, mb)
            if world.rng.random() >= mb.defense:
                damage_mini_boss(world, mb, 1)


def resolve_single_blocks(world: WorldState):
    if world.chapter != 2:
        return
    for block in world.trench_blocks:
        if not block.alive or not block.is_single_block:
            continue
        bx, by = world.project(block.world_lane, block.z)
        radius = 40 + block.z * 20
        for b in world.bullets:
            if b.alive and not b.bounced and within(b.x, b.y, bx, by, radius):
                b.alive = False
                audio.emit(world.sound, audio.BLOCK_HIT)
                break


def resolve_bullets_vs_enemies(world: WorldState):
    for b in world.bullets:
        if not b.alive or b.bounced:
            continue
        for e in world.enemies:
            if not e.alive:
                continue
            ex, ey = world.screen_pos(e.motion)
            if within(b.x, b.y, ex, ey, enemy_hit_radius(e)):
                b.alive = False
                destroy_enemy(world, e)
                break


def resolve_bullets_vs_boss(world: WorldState):
    for boss in world.harassers:
        for b in world.bullets:
            if not boss.alive:
                break
            if not b.alive or b.bounced:
                continue
            if within(b.x, b.y, boss.x, boss.y, HIT_RADIUS_BOSS):
                b.alive = False
                explosion(world, b.x, b.y)
                audio.emit(world.sound, audio.BOSS_HIT)
                damage_boss(world, boss, 1)


# ----------------------------
# Player contact
# ----------------------------

def _protected(world: WorldState) -> bool:
    return world.ship.shield_active or world.ship.invulnerability_timer > 0


def _resolve_projectiles(world: WorldState, projectiles):
    ship = world.ship
    for p in projectiles:
        if not p.alive or not within(p.x, p.y, ship.x, ship.y, PLAYER_PROJECTILE_RADIUS):
            continue
        p.alive = False
        if _protected(world):
            world.add_score(SCORE_DEFLECT_BULLET)
            audio.emit(world.sound, audio.SHIELD_BUMP)
        else:
            handle_player_damage(world)


def resolve_boss_bullets_vs_player(world: WorldState):
    _resolve_projectiles(world, world.boss_bullets)
    world.boss_bullets = [b for b in world.boss_bullets if b.alive]


def resolve_mini_boss_bullets_vs_player(world: WorldState):
    _resolve_projectiles(world, world.mini_boss_bullets)
    world.mini_boss_bullets = [b for b in world.mini_boss_bullets if b.alive]


def resolve_trench_vs_player(world: WorldState):
    if world.chapter not in (2, 3):
        return
    ship = world.ship
    for block in world.trench_blocks:
        if not block.alive or block.z <= TRENCH_HIT_DEPTH:
            continue
        if ship.invulnerability_timer > 0:
            continue
        bx, _ = world.project(block.world_lane, block.z)
        width = SINGLE_BLOCK_WIDTH if block.is_single_block else TRENCH_WALL_WIDTH
        if abs(ship.x - bx) < width:
            block.alive = False
            audio.emit(world.sound, audio.TRENCH_CRASH)
            handle_player_damage(world)


def resolve_enemies_vs_player(world: WorldState):
    ship = world.ship
    for e in world.enemies:
        if not e.alive:
            continue
        if isinstance(e.motion, Lane) and e.motion.z <= ENEMY_HIT_DEPTH:
            continue
        ex, ey = world.screen_pos(e.motion)
        if not within(ex, ey, ship.x, ship.y, PLAYER_ENEMY_RADIUS):
            continue
        e.alive = False
        explosion(world, ex, ey)
        if e.is_blockdot:
            drop_blockdot_loot(world, e)
        if _protected(world):
            audio.emit(world.sound, audio.SHIELD_BUMP)
        else:
            handle_player_damage(world)


def collect_pickups(world: WorldState):
    ship = world.ship
    for p in world.pickups:
        if not p.alive:
            continue
        if isinstance(p.motion, Lane) and p.motion.z <= PICKUP_DEPTH:
            continue
        px, py = world.screen_pos(p.motion)
        if within(px, py, ship.x, ship.y, PICKUP_RADIUS):
            p.alive = False
            apply_pickup(world, p)
    for h in world.hearts:
        if not h.alive:
            continue
        if isinstance(h.motion, Lane) and h.motion.z <= PICKUP_DEPTH:
            continue
        hx, hy = world.screen_pos(h.motion)
        if within(hx, hy, ship.x, ship.y, PICKUP_RADIUS):
            h.alive = False
            adjust_health(world, 1)
            audio.emit(world.sound, audio.PICKUP_HEART)


def resolve(world: WorldState):
    """All collision checks for one tick, in order"""
    resolve_deflections(world)
    resolve_single_blocks(world)
    resolve_bullets_vs_enemies(world)
    resolve_bullets_vs_boss(world)
    resolve_boss_bullets_vs_player(world)
    resolve_mini_boss_bullets_vs_player(world)
    resolve_trench_vs_player(world)
    resolve_enemies_vs_player(world)
    collect_pickups(world)
