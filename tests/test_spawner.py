import pytest

from game.apophis import spawner
from game.apophis.constants import ENEMY_WORLD_LANES
from game.apophis.entities import (
    BoombaType,
    BossBulletShape,
    Dropping,
    Enemy,
    Lane,
    PickupType,
)

from conftest import FixedRandom


def test_chapter_one_enemies_drop_from_the_top(world):
    spawner.spawn_enemy(world)
    m = world.enemies[0].motion
    assert isinstance(m, Dropping)
    # 0.5 * (800 - 200) + 100
    assert (m.x, m.y) == (400, 0)
    assert m.vy == 5
    assert m.size == 45


def test_chapter_two_enemies_use_lanes(world):
    world.chapter = 2
    for _ in range(20):
        spawner.spawn_enemy(world)
    for e in world.enemies:
        assert isinstance(e.motion, Lane)
        assert e.motion.world_lane in ENEMY_WORLD_LANES
        assert e.motion.z == 0


def test_chapter_three_enemies_follow_the_canyon(world):
    world.chapter = 3
    world.time = 123
    spawner.spawn_enemy(world)
    assert world.enemies[0].motion.world_lane == pytest.approx(world.trench_offset(0))


@pytest.mark.parametrize("timer, width", [(0, 1800), (300, 1350), (600, 900), (1100, 900)])
def test_trench_narrows(world, timer, width):
    world.chapter_timer = timer
    assert spawner.trench_width(world) == pytest.approx(width)


def test_trench_walls_are_symmetric(world):
    world.time = 40
    world.chapter_timer = 300
    spawner.spawn_trench_walls(world)

    left, right = world.trench_blocks
    assert right.world_lane - left.world_lane == pytest.approx(1350)
    assert (left.world_lane + right.world_lane) / 2 == pytest.approx(world.trench_offset(0))
    assert not left.is_single_block and not right.is_single_block


def test_mini_boss_spawn_gating(world):
    world.rng = FixedRandom(0.001)
    world.level = 1
    assert spawner.maybe_spawn_mini_boss(world) is False

    world.level = 2
    world.chapter = 4
    assert spawner.maybe_spawn_mini_boss(world) is False

    world.chapter = 2
    assert spawner.maybe_spawn_mini_boss(world) is True
    assert spawner.maybe_spawn_mini_boss(world) is False
    assert len(world.mini_bosses) == 1


def test_mini_boss_profile_saturates(world):
    world.level = 2
    assert spawner.spawn_mini_boss(world).bullet_shape is BossBulletShape.LINE
    world.level = 10
    late = spawner.spawn_mini_boss(world)
    assert late.bullet_shape is BossBulletShape.TRIANGLE
    assert late.fire_rate == 25
    assert late.hp == late.max_hp == 36


def test_mini_boss_hp_variance(world):
    world.level = 2
    world.rng = FixedRandom(0.0)
    # 12 - 20%
    assert spawner.spawn_mini_boss(world).hp == 9


def test_mini_boss_ids_are_unique(world):
    world.level = 3
    ids = {spawner.spawn_mini_boss(world).eid for _ in range(5)}
    assert len(ids) == 5


def test_boss_hp_scales_with_level(world):
    world.level = 3
    boss = spawner.spawn_boss(world)
    assert boss.hp == boss.max_hp == 85
    assert world.boss_active


def test_blockdot_loot_drops_where_it_died(world):
    spawner.spawn_boomba_pickup(world, Enemy(Dropping(300, 200), is_blockdot=True))
    spawner.spawn_missile_pickup(world, Enemy(Dropping(300, 200), is_blockdot=True))

    boomba, missile = world.pickups
    assert boomba.type is PickupType.BOOMBA
    assert boomba.boomba_type in tuple(BoombaType)
    assert (boomba.motion.x, boomba.motion.y, boomba.motion.vy, boomba.motion.size) == (300, 200, 2, 25)
    assert missile.type is PickupType.MISSILE
    assert missile.motion.x == 320


def test_lane_loot_stays_on_the_road(world):
    spawner.spawn_boomba_pickup(world, Enemy(Lane(120.0, z=0.4), is_blockdot=True))
    m = world.pickups[0].motion
    assert isinstance(m, Lane)
    assert (m.world_lane, m.z) == (120.0, 0.4)


def test_handle_spawning_rolls(world):
    world.rng = FixedRandom(0.0)
    spawner.handle_spawning(world)
    assert len(world.enemies) == 2
    assert sorted(p.type.value for p in world.pickups) == ["invuln", "shield"]
    assert len(world.hearts) == 1
    assert world.trench_blocks == []

    world.rng = FixedRandom(0.999)
    world.enemies.clear()
    spawner.handle_spawning(world)
    assert world.enemies == []


def test_canyon_walls_every_third_tick(world):
    world.rng = FixedRandom(0.999)
    world.chapter = 3
    world.time = 3
    spawner.handle_spawning(world)
    assert len(world.trench_blocks) == 2
    world.time = 4
    spawner.handle_spawning(world)
    assert len(world.trench_blocks) == 2


def test_obstacle_blocks_only_in_chapter_two(world):
    world.rng = FixedRandom(0.0)
    world.chapter = 2
    world.time = 1
    spawner.handle_spawning(world)
    assert [t.is_single_block for t in world.trench_blocks] == [True]
