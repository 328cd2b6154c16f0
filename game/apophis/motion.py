"""
Per-kind integration and off-screen cleanup
"""

from __future__ import annotations

import math

from .constants import BLOCKDOT_LANE_LIMIT, DEPTH_CULL, PARTICLE_DAMPING
from .entities import BulletKind, Dropping, Lane, PickupType
from .utils import clamp, distance
from .world import WorldState

# Player bullets in chapters 2-3 are spent once this close to the vanishing point
HORIZON_REACHED = 80
HOMING_SPEED = 12


def enemy_speed(world: WorldState) -> float:
    return 0.005 + world.game_speed * 0.15


def update_enemies(world: WorldState):
    dz = enemy_speed(world)
    for e in world.enemies:
        m = e.motion
        if isinstance(m, Dropping):
            m.x += m.vx
            m.y += m.vy
            continue
        m.z += dz
        if e.is_blockdot:
            e.lateral_phase += 0.05
            m.world_lane += math.sin(e.lateral_phase) * e.lateral_speed * 0.01
            m.world_lane = clamp(m.world_lane, -BLOCKDOT_LANE_LIMIT, BLOCKDOT_LANE_LIMIT)


def update_trench_blocks(world: WorldState):
    wall_dz = 0.03 + world.game_speed * 0.2
    block_dz = enemy_speed(world) / 3
    for block in world.trench_blocks:
        block.z += block_dz if block.is_single_block else wall_dz


def update_pickups(world: WorldState):
    dz = 0.005 + world.game_speed * 0.1
    for p in world.pickups:
        m = p.motion
        if isinstance(m, Dropping):
            m.x += m.vx
            m.y += m.vy
        elif p.type is PickupType.EXTRALIFE:
            m.z += enemy_speed(world) / 2
        else:
            m.z += dz
    for h in world.hearts:
        m = h.motion
        if isinstance(m, Dropping):
            m.y += m.vy
        else:
            m.z += dz


def update_bullets(world: WorldState):
    aimed = world.chapter in (2, 3)
    hx, hy = world.horizon
    for b in world.bullets:
        if b.kind is BulletKind.BOUNCED:
            b.x += b.vx
            b.y += b.vy
            b.bounce_life -= 1
            if b.bounce_life <= 0:
                b.alive = False
            continue

        if aimed:
            dx, dy = hx - b.x, hy - b.y
            dist = math.hypot(dx, dy)
            if dist <= HORIZON_REACHED:
                b.alive = False
                continue
            if dist > 5:
                b.vx = dx / dist * HOMING_SPEED
                b.vy = dy / dist * HOMING_SPEED
            b.x += b.vx
            b.y += b.vy
        elif b.kind is BulletKind.SINE:
            b.y += b.vy
            b.x = b.origin_x + math.sin((world.time - b.phase) * 0.2) * 50
        else:
            b.x += b.vx
            b.y += b.vy


def update_particles(world: WorldState):
    for p in world.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        p.vx *= PARTICLE_DAMPING
        p.vy *= PARTICLE_DAMPING
    world.particles = [p for p in world.particles if p.life > 0]


def _on_screen(world: WorldState, motion) -> bool:
    if isinstance(motion, Lane):
        return motion.z < DEPTH_CULL
    return -100 < motion.y < world.height + 100


def cleanup(world: WorldState):
    """Single compaction pass per collection"""
    w, h = world.width, world.height
    world.bullets = [
        b for b in world.bullets
        if b.alive and (
            (0 <= b.x <= w and 0 <= b.y <= h) if b.bounced else b.y > -50
        )
    ]
    world.enemies = [e for e in world.enemies if e.alive and _on_screen(world, e.motion)]
    world.trench_blocks = [t for t in world.trench_blocks if t.alive and t.z < DEPTH_CULL]
    world.pickups = [p for p in world.pickups if p.alive and _on_screen(world, p.motion)]
    world.hearts = [ht for ht in world.hearts if ht.alive and _on_screen(world, ht.motion)]


def clear_near(world: WorldState, radius: float, enemy_radius: float):
    """Respawn lockout: purge hostile projectiles (and chapter-1 enemies) near the ship"""
    sx, sy = world.ship.x, world.ship.y
    world.boss_bullets = [b for b in world.boss_bullets if distance(b.x, b.y, sx, sy) >= radius]
    world.mini_boss_bullets = [
        b for b in world.mini_boss_bullets if distance(b.x, b.y, sx, sy) >= radius
    ]
    if world.chapter == 1:
        world.enemies = [
            e for e in world.enemies
            if not isinstance(e.motion, Dropping)
            or distance(e.motion.x, e.motion.y, sx, sy) >= enemy_radius
        ]
