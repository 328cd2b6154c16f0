"""
Player ship: steering, shield, weapons, pickups and damage
"""

from __future__ import annotations

import math

from . import audio
from .constants import (
    DEATH_TIMER_DURATION,
    FIRE_DELAY,
    INVULN_PICKUP_DURATION,
    INVULN_RESPAWN_DURATION,
    MAX_BOOMBA_QUEUE,
    MAX_HEALTH,
    MAX_MISSILE_AMMO,
    RESPAWN_TIMER_DURATION,
    SHIELD_DRAIN_RATE,
    SHIELD_MAX,
    SHIELD_REGEN_RATE,
    SHIP_MARGIN,
    STEER_DAMPING,
    STEER_RATE,
    STEER_SPEED,
    WEAPON_LASER,
    WEAPON_SCATTER,
    WEAPON_SINE_WAVE,
)
from .effects import damage_explosion, ultimate_explosion
from .entities import Bullet, BulletKind, Pickup, PickupType
from .input import InputState
from .log import get_logger
from .missiles import fire_missile
from .utils import clamp, normalize
from .world import WorldState

logger = get_logger(__name__)

# Bullet spawn offset above the ship
MUZZLE_OFFSET = 35


def update_movement(world: WorldState, inp: InputState):
    ship = world.ship
    ship.angle += inp.movement_axis * STEER_RATE
    ship.angle *= STEER_DAMPING
    ship.x = clamp(ship.x + ship.angle * STEER_SPEED, SHIP_MARGIN, world.width - SHIP_MARGIN)


def update_shield(world: WorldState, inp: InputState):
    ship = world.ship
    ship.shield_active = (
        inp.shielding
        and ship.shield_level > 1
        and not ship.charging_boomba
        and world.respawn_timer == 0
    )
    if ship.shield_active:
        ship.shield_level = clamp(ship.shield_level - SHIELD_DRAIN_RATE, 0.0, SHIELD_MAX)
    elif ship.shield_level < SHIELD_MAX:
        ship.shield_level = clamp(ship.shield_level + SHIELD_REGEN_RATE, 0.0, SHIELD_MAX)


def handle_shooting(world: WorldState, inp: InputState) -> bool:
    """Fire one volley on the fire cadence; returns False when locked out"""
    if world.ship.charging_boomba or world.respawn_timer > 0:
        return False
    if inp.firing and world.time % FIRE_DELAY == 0:
        fire_weapon(world)
        return True
    return False


def fire_weapon(world: WorldState):
    ship = world.ship
    weapon = ship.weapon
    start_y = ship.y - MUZZLE_OFFSET
    aimed = world.chapter in (2, 3)

    # Chapters 2-3 aim at the vanishing point, 1 and 4 fire straight up
    if aimed:
        hx, hy = world.horizon
        dx, dy = normalize(hx - ship.x, hy - start_y)
    else:
        dx, dy = 0.0, -1.0

    if weapon == WEAPON_SINE_WAVE:
        world.bullets.append(Bullet(
            ship.x, start_y, dx * 12, dy * 12,
            kind=BulletKind.SINE, origin_x=ship.x, phase=world.time,
        ))
        audio.emit(world.sound, audio.FIRE_SINE)
    elif weapon == WEAPON_SCATTER:
        base = math.atan2(dy, dx)
        for i in range(-2, 3):
            x = ship.x + i * 15
            if aimed:
                angle = base + i * 0.15
                vx, vy = math.cos(angle) * 14, math.sin(angle) * 14
            else:
                vx, vy = i * 2, -14
            world.bullets.append(Bullet(
                x, start_y, vx, vy, kind=BulletKind.SCATTER, origin_x=x,
            ))
        audio.emit(world.sound, audio.FIRE_SCATTER)
    elif weapon == WEAPON_LASER:
        world.bullets.append(Bullet(
            ship.x, start_y, dx * 16, dy * 16,
            kind=BulletKind.LASER, origin_x=ship.x, width=8,
        ))
        audio.emit(world.sound, audio.FIRE_LASER)
    else:
        world.bullets.append(Bullet(
            ship.x, start_y, dx * 12, dy * 12, kind=BulletKind.PLAIN, origin_x=ship.x,
        ))
        audio.emit(world.sound, audio.FIRE_DEFAULT)


def cycle_weapon(world: WorldState, step: int):
    ship = world.ship
    ship.current_weapon = (ship.current_weapon + step) % len(ship.weapon_inventory)


def handle_weapon_cycling(world: WorldState, inp: InputState):
    if inp.weapon_next:
        cycle_weapon(world, 1)
    if inp.weapon_prev:
        cycle_weapon(world, -1)


def handle_missile_request(world: WorldState, inp: InputState) -> bool:
    if world.game_over or world.respawn_timer > 0:
        return False
    if inp.missile_requested and world.ship.missile_cooldown == 0:
        return fire_missile(world)
    return False


def add_weapon(world: WorldState, weapon: int):
    if weapon not in world.ship.weapon_inventory:
        world.ship.weapon_inventory.append(weapon)


def adjust_health(world: WorldState, amount: int):
    world.ship.health = int(clamp(world.ship.health + amount, 0, MAX_HEALTH))


def apply_pickup(world: WorldState, pickup: Pickup):
    ship = world.ship
    if pickup.type is PickupType.SHIELD:
        ship.shield_level = clamp(ship.shield_level + 20, 0.0, SHIELD_MAX)
        audio.emit(world.sound, audio.PICKUP)
    elif pickup.type is PickupType.WEAPON:
        add_weapon(world, world.rng.choice((WEAPON_SINE_WAVE, WEAPON_SCATTER, WEAPON_LASER)))
        audio.emit(world.sound, audio.PICKUP)
    elif pickup.type is PickupType.BOOMBA:
        if pickup.boomba_type is not None and len(ship.boomba_queue) < MAX_BOOMBA_QUEUE:
            ship.boomba_queue.append(pickup.boomba_type)
        audio.emit(world.sound, audio.PICKUP)
    elif pickup.type is PickupType.INVULN:
        ship.invulnerability_timer = INVULN_PICKUP_DURATION
        audio.emit(world.sound, audio.PICKUP)
    elif pickup.type is PickupType.EXTRALIFE:
        ship.lives += 1
        audio.emit(world.sound, audio.PICKUP_LIFE)
    elif pickup.type is PickupType.MISSILE:
        ship.missile_ammo = int(clamp(ship.missile_ammo + 2, 0, MAX_MISSILE_AMMO))
        audio.emit(world.sound, audio.PICKUP_MISSILE)


def handle_player_damage(world: WorldState):
    """One point of damage; on zero health spend a life and respawn or end the run"""
    ship = world.ship
    # Later contacts in the same collision pass land on a finished run
    if world.game_over:
        return
    adjust_health(world, -1)
    damage_explosion(world, ship.x, ship.y)
    audio.emit(world.sound, audio.PLAYER_DAMAGE)

    if ship.health > 0:
        return

    ship.lives -= 1
    ultimate_explosion(world, ship.x, ship.y)
    if ship.lives > 0:
        world.respawn_timer = RESPAWN_TIMER_DURATION
        ship.health = MAX_HEALTH
        ship.invulnerability_timer = INVULN_RESPAWN_DURATION
        logger.info("Ship destroyed, respawning (%d lives left)", ship.lives)
    else:
        world.death_timer = DEATH_TIMER_DURATION
        world.game_over = True
        logger.info("Game over at level %d chapter %d, score %d",
                    world.level, world.chapter, world.score)
