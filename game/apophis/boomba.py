"""
Boomba system

Boombas are held in a FIFO queue of mixed types. Area and screen boombas
fire on press; a charged boomba at the head of the queue starts charging on
press and detonates on release with power proportional to the held charge.
"""

from __future__ import annotations

import math

from . import audio
from .bosses import damage_boss, damage_mini_boss
from .combat import destroy_enemy
from .constants import (
    AREA_BOOMBA_RADIUS,
    BOOMBA_CHARGE_MAX,
    BOOMBA_CHARGE_RATE,
    CYAN,
    MAGENTA,
    MINIBOSS_FIRE_RATE_CAP,
    ORANGE,
    SCORE_OBSTACLE,
    SCREEN_BOOMBA_BOSS_DAMAGE,
    SCREEN_BOOMBA_MINIBOSS_DAMAGE,
    WHITE,
    YELLOW,
)
from .effects import explosion, flash, mega_boss_explosion, shockwave, spectacular_explosion
from .entities import BoombaType
from .input import InputState
from .log import get_logger
from .utils import within
from .world import WorldState

logger = get_logger(__name__)


def _slow_mini_boss(mb, ticks: int):
    mb.fire_rate = min(mb.fire_rate + ticks, MINIBOSS_FIRE_RATE_CAP)


def _destroy_blocks(world: WorldState, keep) -> int:
    """Remove single blocks for which keep(block, x, y) is False; score each"""
    destroyed = 0
    for block in world.trench_blocks:
        if not block.alive or not block.is_single_block:
            continue
        bx, by = world.project(block.world_lane, block.z)
        if keep(block, bx, by):
            continue
        block.alive = False
        explosion(world, bx, by)
        world.add_score(SCORE_OBSTACLE)
        destroyed += 1
    world.trench_blocks = [t for t in world.trench_blocks if t.alive]
    return destroyed


def launch_area(world: WorldState):
    ship = world.ship
    sx, sy = ship.x, ship.y
    radius = AREA_BOOMBA_RADIUS

    for e in world.enemies:
        ex, ey = world.screen_pos(e.motion)
        if within(ex, ey, sx, sy, radius):
            destroy_enemy(world, e)
    world.enemies = [e for e in world.enemies if e.alive]

    _destroy_blocks(world, lambda block, bx, by: not within(bx, by, sx, sy, radius))

    for mb in world.mini_bosses:
        _slow_mini_boss(mb, 5)

    for bullets in (world.mini_boss_bullets, world.boss_bullets):
        for b in bullets:
            if within(b.x, b.y, sx, sy, radius):
                b.alive = False
                explosion(world, b.x, b.y)
    world.mini_boss_bullets = [b for b in world.mini_boss_bullets if b.alive]
    world.boss_bullets = [b for b in world.boss_bullets if b.alive]

    shockwave(world, sx, sy, rings=5, per_ring=40, speed=15, step=5, life=60, color=ORANGE)
    audio.emit(world.sound, audio.BOOMBA_AREA)


def launch_screen(world: WorldState):
    for e in world.enemies:
        destroy_enemy(world, e)
    world.enemies = []

    for mb in list(world.mini_bosses):
        _slow_mini_boss(mb, 10)
        spectacular_explosion(world, mb.x, mb.y)
        damage_mini_boss(world, mb, SCREEN_BOOMBA_MINIBOSS_DAMAGE)

    for boss in list(world.harassers):
        mega_boss_explosion(world, boss.x, boss.y)
        damage_boss(world, boss, SCREEN_BOOMBA_BOSS_DAMAGE)

    world.mini_boss_bullets = []
    world.boss_bullets = []
    _destroy_blocks(world, lambda block, bx, by: False)

    flash(world, 200, 70, (WHITE, CYAN, MAGENTA, YELLOW))
    audio.emit(world.sound, audio.BOOMBA_SCREEN)


def launch_charged(world: WorldState, power: float):
    """Detonate with power in [0, 1]; kills and damage scale with power"""
    power = max(0.0, min(1.0, power))
    rng = world.rng

    for e in world.enemies:
        if rng.random() < power:
            destroy_enemy(world, e)
    world.enemies = [e for e in world.enemies if e.alive]

    for mb in list(world.mini_bosses):
        _slow_mini_boss(mb, int(math.floor(power * 8)))
        damage_mini_boss(world, mb, int(math.floor(power * 10)))

    for boss in list(world.harassers):
        damage_boss(world, boss, int(math.floor(power * 20)))

    _destroy_blocks(world, lambda block, bx, by: rng.random() >= power)

    flash(world, int(100 * power), 80, (YELLOW,), spread=30,
          origin=(world.width / 2, world.height / 2))
    audio.emit(world.sound, audio.BOOMBA_CHARGED)


def launch(world: WorldState, boomba_type: BoombaType, power: float = 1.0):
    if boomba_type is BoombaType.AREA:
        launch_area(world)
    elif boomba_type is BoombaType.SCREEN:
        launch_screen(world)
    else:
        launch_charged(world, power)
    logger.debug("Boomba %s launched (power %.2f)", boomba_type.value, power)


def launch_next_boomba(world: WorldState) -> bool:
    """Fire the head of the queue at full power; False when the queue is empty"""
    ship = world.ship
    if not ship.boomba_queue:
        return False
    launch(world, ship.boomba_queue.pop(0))
    return True


def handle_boomba(world: WorldState, inp: InputState) -> bool:
    """
    Press launches or starts charging; releasing a charged boomba detonates it.
    Returns True when a boomba was launched or began charging this tick.
    """
    ship = world.ship
    pressed = inp.boomba_held and not ship.boomba_latched
    ship.boomba_latched = inp.boomba_held
    if world.respawn_timer > 0:
        return False

    if ship.charging_boomba:
        if inp.boomba_held:
            ship.boomba_charge = min(ship.boomba_charge + BOOMBA_CHARGE_RATE, BOOMBA_CHARGE_MAX)
            return False
        power = ship.boomba_charge / BOOMBA_CHARGE_MAX
        ship.charging_boomba = False
        ship.boomba_charge = 0
        if not ship.boomba_queue:
            return False
        launch(world, ship.boomba_queue.pop(0), power)
        return True

    if not pressed:
        return False
    if ship.boomba_queue and ship.boomba_queue[0] is BoombaType.CHARGED:
        ship.charging_boomba = True
        ship.boomba_charge = 0
        return True
    return launch_next_boomba(world)
