import math

import pytest

from game.apophis import motion
from game.apophis.entities import (
    Bullet,
    BulletKind,
    Dropping,
    Enemy,
    Lane,
    Particle,
    Pickup,
    PickupType,
    TrenchBlock,
)


def test_lane_enemies_advance_in_depth(world):
    enemy = Enemy(Lane(0.0, z=0.0))
    drop = Enemy(Dropping(100, 100, vx=1, vy=4))
    world.enemies += [enemy, drop]

    motion.update_enemies(world)

    assert enemy.motion.z == pytest.approx(0.005 + world.game_speed * 0.15)
    assert (drop.motion.x, drop.motion.y) == (101, 104)


def test_blockdot_lateral_wander_is_bounded(world):
    enemy = Enemy(Lane(440.0), is_blockdot=True, lateral_speed=150, lateral_phase=1.5)
    world.enemies.append(enemy)
    for _ in range(100):
        motion.update_enemies(world)
        assert -450 <= enemy.motion.world_lane <= 450


def test_single_blocks_move_at_a_third_of_enemy_speed(world):
    wall = TrenchBlock(0.0)
    block = TrenchBlock(0.0, is_single_block=True)
    world.trench_blocks += [wall, block]

    motion.update_trench_blocks(world)

    assert block.z == pytest.approx(motion.enemy_speed(world) / 3)
    assert wall.z == pytest.approx(0.03 + world.game_speed * 0.2)


def test_extra_life_pickup_drifts_slower(world):
    life = Pickup(Lane(0.0), PickupType.EXTRALIFE)
    shield = Pickup(Lane(0.0), PickupType.SHIELD)
    world.pickups += [life, shield]

    motion.update_pickups(world)

    assert life.motion.z == pytest.approx(motion.enemy_speed(world) / 2)
    assert shield.motion.z == pytest.approx(0.005 + world.game_speed * 0.1)


def test_aimed_bullets_home_on_vanishing_point(world):
    world.chapter = 2
    hx, hy = world.horizon
    far = Bullet(hx, 480, 0, -12)
    near = Bullet(hx, hy + 70, 0, -12)
    world.bullets += [far, near]

    motion.update_bullets(world)

    assert far.y == pytest.approx(468)
    assert math.hypot(far.vx, far.vy) == pytest.approx(motion.HOMING_SPEED)
    assert not near.alive


def test_sine_bullet_weaves_around_origin(world):
    world.time = 5
    bullet = Bullet(400, 400, 0, -12, kind=BulletKind.SINE, origin_x=400, phase=0)
    world.bullets.append(bullet)

    motion.update_bullets(world)

    assert bullet.y == 388
    assert bullet.x == pytest.approx(400 + math.sin(1.0) * 50)


def test_bounced_bullet_expires(world):
    bullet = Bullet(400, 300, 1, 1, kind=BulletKind.BOUNCED, bounce_life=1)
    world.bullets.append(bullet)
    motion.update_bullets(world)
    assert (bullet.x, bullet.y) == (401, 301)
    assert not bullet.alive


def test_particles_damp_and_expire(world):
    short = Particle(0, 0, 10, 10, 1, (255, 255, 255))
    long = Particle(0, 0, 10, 10, 5, (255, 255, 255))
    world.particles += [short, long]

    motion.update_particles(world)

    assert world.particles == [long]
    assert long.vx == pytest.approx(9.8)
    assert long.life == 4


def test_cleanup_bounds(world):
    keep = Bullet(100, -40, 0, -12)
    gone = Bullet(100, -60, 0, -12)
    bounced_out = Bullet(-5, 100, 0, 0, kind=BulletKind.BOUNCED, bounce_life=5)
    world.bullets += [keep, gone, bounced_out]
    deep = Enemy(Lane(0.0, z=1.2))
    fallen = Enemy(Dropping(100, world.height + 101))
    visible = Enemy(Dropping(100, 300))
    world.enemies += [deep, fallen, visible]
    world.trench_blocks += [TrenchBlock(0.0, z=1.19), TrenchBlock(0.0, z=1.21)]

    motion.cleanup(world)

    assert world.bullets == [keep]
    assert world.enemies == [visible]
    assert [t.z for t in world.trench_blocks] == [1.19]
