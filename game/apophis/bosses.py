"""
Mini-boss and Harasser controllers: steering, fire sequencing, destruction
"""

from __future__ import annotations

import math

from . import audio
from .constants import (
    BOSS_BULLET_SEQUENCE,
    BOSS_COOLDOWN_LONG,
    BOSS_COOLDOWN_SHORT,
    BOSS_DEATH_BURST_SPACING,
    BOSS_DEATH_BURSTS,
    BOSS_DEFEATED_TIMER,
    BOSS_FIRE_INTERVAL,
    SCORE_BOSS,
    SCORE_MINIBOSS,
)
from .effects import mega_boss_explosion, spectacular_explosion
from .entities import BossBullet, BossBulletShape, Harasser, MiniBoss, MiniBossBullet
from .log import get_logger
from .spawner import drop_boss_loot, spawn_boss
from .utils import clamp
from .world import WorldState

logger = get_logger(__name__)

# Lateral spread of the boss death bursts, pixels
DEATH_BURST_SPREAD = 150


# ----------------------------
# Mini-boss
# ----------------------------

def update_mini_bosses(world: WorldState):
    rng = world.rng
    for mb in world.mini_bosses:
        if not mb.alive:
            continue
        mb.phase += 0.06
        if mb.target_x is None or rng.random() < mb.chaos_rate:
            mb.target_x = world.width * (0.2 + rng.random() * 0.6)
        dx = mb.target_x - mb.x
        mb.x += dx * 0.08 + (rng.random() - 0.5) * mb.chaos_rate * 50
        mb.x = clamp(mb.x, world.width * 0.1, world.width * 0.9)
        mb.y = world.height * 0.25 + math.sin(mb.phase * 2) * 20

        if world.time % mb.fire_rate == 0:
            fire_mini_boss_bullet(world, mb)


def fire_mini_boss_bullet(world: WorldState, mb: MiniBoss):
    vy = 5 + world.game_speed * 20
    if mb.bullet_shape is BossBulletShape.CIRCLE:
        vy *= 0.7
    elif mb.bullet_shape is BossBulletShape.TRIANGLE:
        vy *= 0.6
    world.mini_boss_bullets.append(MiniBossBullet(mb.x, mb.y + 40, vy, mb.bullet_shape))
    audio.emit(world.sound, audio.MINIBOSS_FIRE)


def update_mini_boss_bullets(world: WorldState):
    ship = world.ship
    for b in world.mini_boss_bullets:
        b.y += b.vy
        if b.shape is BossBulletShape.TRIANGLE:
            # Triangles lean toward the ship while falling
            angle = math.atan2(ship.y - b.y, ship.x - b.x)
            b.x += math.cos(angle) * 1.5
        if b.y > world.height or b.y < 0:
            b.alive = False
    world.mini_boss_bullets = [b for b in world.mini_boss_bullets if b.alive]


def destroy_mini_boss(world: WorldState, mb: MiniBoss) -> bool:
    """Kill a mini-boss exactly once: VFX, loot and score"""
    if not mb.alive:
        return False
    mb.alive = False
    mb.hp = 0
    spectacular_explosion(world, mb.x, mb.y)
    drop_boss_loot(world, mb.x, mb.y)
    world.add_score(SCORE_MINIBOSS)
    world.mini_bosses = [m for m in world.mini_bosses if m.alive]
    audio.emit(world.sound, audio.BOSS_DEATH)
    logger.info("Mini-boss destroyed at level %d", world.level)
    return True


def damage_mini_boss(world: WorldState, mb: MiniBoss, amount: int) -> bool:
    """Apply damage; returns True when this blow killed it"""
    mb.hp = max(0, mb.hp - amount)
    if mb.hp <= 0:
        return destroy_mini_boss(world, mb)
    return False


# ----------------------------
# Harasser
# ----------------------------

def ensure_boss(world: WorldState):
    """Chapter 4 entry spawns exactly one Harasser"""
    if not world.boss_active and not world.harassers and world.boss_defeated_timer == 0:
        spawn_boss(world)


def update_boss(world: WorldState):
    rng = world.rng
    for boss in world.harassers:
        boss.phase += 0.04
        if boss.target_x is None or rng.random() < 0.02:
            boss.target_x = world.width * (0.2 + rng.random() * 0.6)
        dx = boss.target_x - boss.x
        boss.x += dx * 0.05 + (rng.random() - 0.5) * 8
        boss.x = clamp(boss.x, world.width * 0.15, world.width * 0.85)
        boss.y = world.height * 0.2 + math.sin(boss.phase * 2) * 15


def handle_boss_firing(world: WorldState) -> bool:
    """
    Burst sequencer: one bullet every BOSS_FIRE_INTERVAL ticks until the
    current burst is spent, then a short cooldown, or a long one after the
    last burst of the cycle. Returns True when a bullet was fired.
    """
    if not world.harassers:
        return False
    if world.boss_bullet_cooldown > 0:
        world.boss_bullet_cooldown -= 1
        return False
    if world.time % BOSS_FIRE_INTERVAL != 0:
        return False

    boss = world.harassers[0]
    x = boss.x + (world.rng.random() - 0.5) * 120
    world.boss_bullets.append(BossBullet(x, boss.y + 50, 7 + world.game_speed * 25))
    audio.emit(world.sound, audio.BOSS_FIRE)
    world.boss_bullet_burst += 1

    if world.boss_bullet_burst >= BOSS_BULLET_SEQUENCE[world.boss_bullet_phase]:
        world.boss_bullet_burst = 0
        world.boss_bullet_phase = (world.boss_bullet_phase + 1) % len(BOSS_BULLET_SEQUENCE)
        if world.boss_bullet_phase == 0:
            world.boss_bullet_cooldown = BOSS_COOLDOWN_LONG
        else:
            world.boss_bullet_cooldown = BOSS_COOLDOWN_SHORT
    return True


def update_boss_bullets(world: WorldState):
    for b in world.boss_bullets:
        b.y += b.vy
        if b.y > world.height + 20:
            b.alive = False
    world.boss_bullets = [b for b in world.boss_bullets if b.alive]


def damage_boss(world: WorldState, boss: Harasser, amount: int) -> bool:
    boss.hp = max(0, boss.hp - amount)
    if boss.hp <= 0:
        return destroy_boss(world, boss)
    return False


def destroy_boss(world: WorldState, boss: Harasser) -> bool:
    if not boss.alive:
        return False
    boss.alive = False
    boss.hp = 0
    x, y = boss.x, boss.y
    mega_boss_explosion(world, x, y)

    # Staggered secondary bursts on the wall clock; positions are fixed now
    for i in range(BOSS_DEATH_BURSTS):
        bx = x + (world.rng.random() - 0.5) * DEATH_BURST_SPREAD
        by = y + (world.rng.random() - 0.5) * DEATH_BURST_SPREAD
        world.delayed.schedule(
            i * BOSS_DEATH_BURST_SPACING,
            lambda bx=bx, by=by: spectacular_explosion(world, bx, by, rng=world.fx_rng),
        )

    world.harassers = [h for h in world.harassers if h.alive]
    world.boss_bullets = []
    world.boss_active = False
    world.boss_bullet_burst = 0
    world.boss_bullet_phase = 0
    world.boss_bullet_cooldown = 0
    world.add_score(SCORE_BOSS)
    world.boss_score_gained = SCORE_BOSS
    world.boss_defeated_timer = BOSS_DEFEATED_TIMER
    audio.emit(world.sound, audio.BOSS_DEATH)
    logger.info("Harasser defeated at level %d, score %d", world.level, world.score)
    return True
