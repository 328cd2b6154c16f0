"""
Missile guidance: target acquisition, Bezier homing and boss bounce
"""

from __future__ import annotations

import math
from collections import deque
from typing import Optional, Tuple, Union

from . import audio
from .bosses import damage_mini_boss
from .constants import (
    MISSILE_ARC_LIFT,
    MISSILE_ARC_OFFSET,
    MISSILE_BOUNCE_LIFE,
    MISSILE_BOUNCE_SPEED,
    MISSILE_BOUNCED_TRAIL_LENGTH,
    MISSILE_COOLDOWN_FRAMES,
    MISSILE_GRAVITY,
    MISSILE_IMPACT_RADIUS,
    MISSILE_LOST_DRIFT,
    MISSILE_PROGRESS_STEP,
    MISSILE_SPLASH_DAMAGE,
)
from .effects import deflection_spark, missile_explosion
from .entities import Harasser, MiniBoss, Missile, TargetKind
from .utils import distance, quadratic_bezier
from .world import WorldState

Target = Union[MiniBoss, Harasser]

# Launch point above the ship
LAUNCH_OFFSET = 30
# Bounced missiles spawn this far outside the boss
BOUNCE_CLEARANCE = 60


def find_target(world: WorldState) -> Optional[Tuple[TargetKind, Target]]:
    """Nearest live mini-boss, else the Harasser, else nothing"""
    ship = world.ship
    live = [mb for mb in world.mini_bosses if mb.alive]
    if live:
        nearest = min(live, key=lambda mb: distance(ship.x, ship.y, mb.x, mb.y))
        return TargetKind.MINIBOSS, nearest
    for boss in world.harassers:
        if boss.alive:
            return TargetKind.BOSS, boss
    return None


def resolve_target(world: WorldState, missile: Missile) -> Optional[Target]:
    if missile.target_kind is TargetKind.MINIBOSS:
        return world.find_mini_boss(missile.target_id)
    return world.find_harasser(missile.target_id)


def fire_missile(world: WorldState) -> bool:
    """Launch one missile; False with no state change when it cannot fire"""
    ship = world.ship
    if ship.missile_ammo <= 0 or ship.missile_cooldown > 0:
        return False
    found = find_target(world)
    if found is None:
        return False
    kind, target = found

    ship.missile_ammo -= 1
    ship.missile_cooldown = MISSILE_COOLDOWN_FRAMES
    start_y = ship.y - LAUNCH_OFFSET
    world.missiles.append(Missile(
        x=ship.x, y=start_y, start_x=ship.x, start_y=start_y,
        target_kind=kind, target_id=target.eid,
    ))
    for cue in audio.MISSILE_LAUNCH:
        audio.emit(world.sound, cue)
    return True


def control_point(world: WorldState, missile: Missile, tx: float, ty: float) -> Tuple[float, float]:
    """Arc bulges away from the launch half of the screen"""
    side = 1 if missile.start_x < world.width / 2 else -1
    cx = (missile.start_x + tx) / 2 + side * MISSILE_ARC_OFFSET
    cy = min(missile.start_y, ty) - MISSILE_ARC_LIFT
    return cx, cy


def bounce_off_boss(world: WorldState, missile: Missile, boss: Harasser):
    """First contact with the Harasser: flip to ballistic, never damage it"""
    for _ in range(4):
        deflection_spark(world, missile.x, missile.y)
    angle = math.pi / 2 + (world.rng.random() - 0.5) * 1.5
    missile.bounced = True
    missile.bounce_vx = math.cos(angle) * MISSILE_BOUNCE_SPEED
    missile.bounce_vy = math.sin(angle) * MISSILE_BOUNCE_SPEED
    missile.bounce_life = MISSILE_BOUNCE_LIFE
    missile.x = boss.x + math.cos(angle) * BOUNCE_CLEARANCE
    missile.y = boss.y + math.sin(angle) * BOUNCE_CLEARANCE
    missile.trail = deque(maxlen=MISSILE_BOUNCED_TRAIL_LENGTH)
    for cue in audio.MISSILE_DEFLECT:
        audio.emit(world.sound, cue)


def _update_bounced(world: WorldState, missile: Missile):
    missile.trail.append((missile.x, missile.y))
    missile.x += missile.bounce_vx
    missile.y += missile.bounce_vy
    missile.bounce_vy += MISSILE_GRAVITY
    missile.bounce_life -= 1
    if (
        missile.bounce_life <= 0
        or missile.y > world.height + 50
        or missile.x < -50
        or missile.x > world.width + 50
    ):
        deflection_spark(world, missile.x, missile.y)
        missile.alive = False
        return

    # A bounced missile touching the boss again is spent
    for boss in world.harassers:
        if boss.alive and distance(missile.x, missile.y, boss.x, boss.y) < MISSILE_IMPACT_RADIUS:
            missile.alive = False


def _update_homing(world: WorldState, missile: Missile):
    target = resolve_target(world, missile)
    if target is None:
        missile.y -= MISSILE_LOST_DRIFT
        if missile.y < -50:
            missile.alive = False
        return

    missile.trail.append((missile.x, missile.y))
    missile.progress += MISSILE_PROGRESS_STEP
    t = min(missile.progress, 1.0)
    cx, cy = control_point(world, missile, target.x, target.y)
    missile.x = quadratic_bezier(missile.start_x, cx, target.x, t)
    missile.y = quadratic_bezier(missile.start_y, cy, target.y, t)

    dist = distance(missile.x, missile.y, target.x, target.y)
    if dist >= MISSILE_IMPACT_RADIUS and missile.progress < 1:
        return

    if isinstance(target, MiniBoss):
        missile_explosion(world, missile.x, missile.y)
        for cue in audio.MISSILE_IMPACT:
            audio.emit(world.sound, cue)
        damage_mini_boss(world, target, MISSILE_SPLASH_DAMAGE)
        missile.alive = False
    else:
        bounce_off_boss(world, missile, target)


def update_missiles(world: WorldState):
    for missile in list(world.missiles):
        if not missile.alive:
            continue
        if missile.bounced:
            _update_bounced(world, missile)
        else:
            _update_homing(world, missile)
    world.missiles = [
        m for m in world.missiles
        if m.alive and -100 < m.y < world.height + 100
    ]
