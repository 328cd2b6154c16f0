"""
Spawner: per-tick Bernoulli spawn rolls and deterministic timed spawns
"""

from __future__ import annotations

import math

from . import audio
from .constants import (
    ENEMY_WORLD_LANES,
    MINIBOSS_CONFIGS,
    MINIBOSS_MIN_LEVEL,
    MINIBOSS_SPAWN_CHANCE,
    TRENCH_FULL_WIDTH,
    TRENCH_MIN_WIDTH,
    TRENCH_NARROW_TICKS,
)
from .entities import (
    BoombaType,
    BossBulletShape,
    Dropping,
    Enemy,
    Harasser,
    Heart,
    Lane,
    MiniBoss,
    Pickup,
    PickupType,
    TrenchBlock,
)
from .log import get_logger
from .world import WorldState

logger = get_logger(__name__)

# Screen margin for vertical-drop spawns
DROP_MARGIN = 100


def _drop_x(world: WorldState) -> float:
    return world.rng.random() * (world.width - 2 * DROP_MARGIN) + DROP_MARGIN


def _random_lane(world: WorldState) -> float:
    return world.rng.choice(ENEMY_WORLD_LANES)


def _enemy_lane(world: WorldState) -> float:
    # The canyon scatters enemies around its wandering centre line
    if world.chapter == 3:
        return (world.rng.random() - 0.5) * 350 + world.trench_offset(0)
    return _random_lane(world)


def spawn_enemy(world: WorldState):
    rng = world.rng
    if world.chapter == 1:
        world.enemies.append(Enemy(Dropping(
            x=_drop_x(world), y=0, vx=0, vy=4 + rng.random() * 2, size=30 + rng.random() * 30,
        )))
    else:
        world.enemies.append(Enemy(Lane(world_lane=_enemy_lane(world), z=0, size=40)))


def spawn_blockdot(world: WorldState):
    rng = world.rng
    if world.chapter == 1:
        world.enemies.append(Enemy(
            Dropping(
                x=_drop_x(world), y=0,
                vx=(rng.random() - 0.5) * 4,
                vy=3 + rng.random() * 2,
                size=35 + rng.random() * 20,
            ),
            is_blockdot=True,
        ))
    else:
        world.enemies.append(Enemy(
            Lane(world_lane=_enemy_lane(world), z=0, size=40),
            is_blockdot=True,
            lateral_speed=(rng.random() - 0.5) * 300,
            lateral_phase=rng.random() * math.pi * 2,
        ))


def trench_width(world: WorldState) -> float:
    """Canyon width narrows linearly over the first part of chapter 3"""
    progress = min(world.chapter_timer / TRENCH_NARROW_TICKS, 1.0)
    return TRENCH_FULL_WIDTH - progress * (TRENCH_FULL_WIDTH - TRENCH_MIN_WIDTH)


def spawn_trench_walls(world: WorldState):
    offset = world.trench_offset(0)
    half = trench_width(world) / 2
    world.trench_blocks.append(TrenchBlock(world_lane=-half + offset, z=0))
    world.trench_blocks.append(TrenchBlock(world_lane=half + offset, z=0))


def spawn_obstacle_block(world: WorldState):
    world.trench_blocks.append(TrenchBlock(world_lane=_random_lane(world), z=0, is_single_block=True))


def _ambient_motion(world: WorldState, size_lo: float, size_span: float):
    rng = world.rng
    if world.chapter == 1:
        return Dropping(
            x=_drop_x(world), y=0, vx=0, vy=3 + rng.random() * 2,
            size=size_lo + rng.random() * size_span,
        )
    return Lane(world_lane=_random_lane(world), z=0)


def spawn_shield_pickup(world: WorldState):
    world.pickups.append(Pickup(_ambient_motion(world, 20, 15), PickupType.SHIELD))


def spawn_invuln_pickup(world: WorldState):
    world.pickups.append(Pickup(_ambient_motion(world, 20, 15), PickupType.INVULN))


def spawn_heart(world: WorldState):
    world.hearts.append(Heart(_ambient_motion(world, 15, 10)))


def spawn_boomba_pickup(world: WorldState, enemy: Enemy):
    """Blockdot loot: a random boomba at the enemy's position"""
    boomba_type = world.rng.choice(tuple(BoombaType))
    m = enemy.motion
    if isinstance(m, Dropping):
        motion = Dropping(x=m.x, y=m.y, vx=0, vy=2, size=25)
    else:
        motion = Lane(world_lane=m.world_lane, z=m.z)
    world.pickups.append(Pickup(motion, PickupType.BOOMBA, boomba_type=boomba_type))
    audio.emit(world.sound, audio.BOOMBA_DROP)


def spawn_missile_pickup(world: WorldState, enemy: Enemy):
    m = enemy.motion
    if isinstance(m, Dropping):
        motion = Dropping(x=m.x + 20, y=m.y, vx=0, vy=2.2, size=20)
    else:
        motion = Lane(world_lane=m.world_lane + 50, z=m.z)
    world.pickups.append(Pickup(motion, PickupType.MISSILE))


def drop_boss_loot(world: WorldState, x: float, y: float):
    """Mini-boss loot: extra life or weapon, plus missile ammo beside it"""
    drop = PickupType.EXTRALIFE if world.rng.random() < 0.5 else PickupType.WEAPON
    world.pickups.append(Pickup(Dropping(x=x, y=y, vx=0, vy=2.5, size=25), drop))
    world.pickups.append(Pickup(Dropping(x=x + 30, y=y, vx=0, vy=2.5, size=20), PickupType.MISSILE))


def spawn_mini_boss(world: WorldState) -> MiniBoss:
    cfg = MINIBOSS_CONFIGS[min(world.level - MINIBOSS_MIN_LEVEL, len(MINIBOSS_CONFIGS) - 1)]
    base_hp = 12 + (world.level - MINIBOSS_MIN_LEVEL) * 3
    variance = base_hp * 0.2
    hp = int(math.floor(base_hp + (world.rng.random() * variance * 2 - variance)))
    mb = MiniBoss(
        eid=world.next_id(),
        x=world.width / 2,
        y=world.height * 0.25,
        hp=hp,
        max_hp=hp,
        fire_rate=cfg["fire_rate"],
        chaos_rate=cfg["chaos_rate"],
        defense=cfg["defense"],
        color1=cfg["color1"],
        color2=cfg["color2"],
        bullet_shape=BossBulletShape(cfg["bullet_shape"]),
    )
    world.mini_bosses.append(mb)
    logger.info("Mini-boss spawned at level %d with %d hp", world.level, hp)
    return mb


def spawn_boss(world: WorldState) -> Harasser:
    hp = 40 + world.level * 15
    boss = Harasser(eid=world.next_id(), x=world.width / 2, y=world.height * 0.2, hp=hp, max_hp=hp)
    world.harassers.append(boss)
    world.boss_active = True
    logger.info("Harasser spawned at level %d with %d hp", world.level, hp)
    return boss


def maybe_spawn_mini_boss(world: WorldState) -> bool:
    if (
        world.level >= MINIBOSS_MIN_LEVEL
        and world.chapter != 4
        and not world.mini_bosses
        and world.rng.random() < MINIBOSS_SPAWN_CHANCE
    ):
        spawn_mini_boss(world)
        return True
    return False


def handle_spawning(world: WorldState):
    """Chapter 1-3 spawn rolls for one tick"""
    rng = world.rng
    if rng.random() < 0.02 + world.game_speed * 0.1 + world.level * 0.005:
        spawn_enemy(world)
    if rng.random() < 0.005 + world.level * 0.001:
        spawn_blockdot(world)
    if world.chapter == 3 and world.time % 3 == 0:
        spawn_trench_walls(world)
    if world.chapter == 2 and rng.random() < 0.01:
        spawn_obstacle_block(world)

    if rng.random() < 0.008:
        spawn_shield_pickup(world)
    if rng.random() < 0.003:
        spawn_heart(world)
    if rng.random() < 0.001:
        spawn_invuln_pickup(world)
