from game.apophis import combat
from game.apophis.constants import (
    DEATH_TIMER_DURATION,
    MAX_HEALTH,
    SCORE_BLOCKDOT,
    SCORE_DEFLECT_BULLET,
    SCORE_ENEMY,
    SCORE_MINIBOSS,
)
from game.apophis.entities import (
    BossBullet,
    Bullet,
    BulletKind,
    Dropping,
    Enemy,
    Heart,
    Lane,
    MiniBossBullet,
    Pickup,
    PickupType,
    TrenchBlock,
)
from game.apophis.spawner import spawn_boss, spawn_mini_boss


def _mini_boss(world, hp=12, defense=0.05):
    world.level = 2
    mb = spawn_mini_boss(world)
    mb.hp = hp
    mb.defense = defense
    return mb


def test_mini_boss_killed_by_bullet_exactly_once(world):
    mb = _mini_boss(world, hp=1)
    world.bullets.append(Bullet(mb.x, mb.y + 10, 0, -12))
    world.bullets.append(Bullet(mb.x + 5, mb.y + 10, 0, -12))

    combat.resolve_deflections(world)

    assert world.mini_bosses == []
    assert world.score == SCORE_MINIBOSS
    assert len(world.pickups) == 2
    types = {p.type for p in world.pickups}
    assert PickupType.MISSILE in types
    assert types & {PickupType.EXTRALIFE, PickupType.WEAPON}
    assert all(isinstance(p.motion, Dropping) and p.motion.vy == 2.5 for p in world.pickups)


def test_strike_on_mini_boss_deflects_bullet(world):
    mb = _mini_boss(world, hp=12)
    bullet = Bullet(mb.x, mb.y + 20, 0, -12)
    world.bullets.append(bullet)

    combat.resolve_deflections(world)

    assert bullet.kind is BulletKind.BOUNCED
    assert bullet.bounce_life == combat.DEFLECT_LIFE
    # Pushed clear of the deflection zone
    assert ((bullet.x - mb.x) ** 2 + (bullet.y - mb.y) ** 2) ** 0.5 >= 35
    assert mb.hp == 11


def test_defence_roll_absorbs_chip_damage(world):
    mb = _mini_boss(world, hp=12, defense=0.9)
    world.bullets.append(Bullet(mb.x, mb.y + 20, 0, -12))

    combat.resolve_deflections(world)

    assert mb.hp == 12
    assert world.bullets[0].bounced


def test_bounced_bullet_is_never_deflected_again(world):
    mb = _mini_boss(world, hp=12)
    bullet = Bullet(mb.x, mb.y, 3, 4, kind=BulletKind.BOUNCED, bounce_life=30)
    world.bullets.append(bullet)

    combat.resolve_deflections(world)

    assert (bullet.x, bullet.y, bullet.vx, bullet.vy) == (mb.x, mb.y, 3, 4)
    assert bullet.bounce_life == 30
    assert mb.hp == 12


def test_bullet_kills_dropping_enemy(world):
    enemy = Enemy(Dropping(400, 300))
    world.enemies.append(enemy)
    bullet = Bullet(420, 320, 0, -12)
    world.bullets.append(bullet)

    combat.resolve_bullets_vs_enemies(world)

    assert not enemy.alive
    assert not bullet.alive
    assert world.score == SCORE_ENEMY
    assert world.pickups == []


def test_blockdot_kill_drops_boomba(world):
    enemy = Enemy(Dropping(400, 300), is_blockdot=True)
    world.enemies.append(enemy)
    world.bullets.append(Bullet(400, 300, 0, -12))

    combat.resolve_bullets_vs_enemies(world)

    assert world.score == SCORE_BLOCKDOT
    assert len(world.pickups) == 1
    drop = world.pickups[0]
    assert drop.type is PickupType.BOOMBA
    assert drop.boomba_type is not None


def test_lane_enemy_hit_radius_grows_with_depth(world):
    enemy = Enemy(Lane(0.0, z=0.5))
    world.enemies.append(enemy)
    ex, ey = world.project(0.0, 0.5)
    # 30 + 30 * 0.5 = 45
    world.bullets.append(Bullet(ex + 44, ey, 0, 0))
    world.bullets.append(Bullet(ex + 46, ey, 0, 0))

    combat.resolve_bullets_vs_enemies(world)

    assert not enemy.alive
    assert [b.alive for b in world.bullets] == [False, True]


def test_bounced_bullet_does_not_hit_enemies_or_boss(world):
    enemy = Enemy(Dropping(400, 300))
    world.enemies.append(enemy)
    boss = spawn_boss(world)
    hp = boss.hp
    world.bullets.append(Bullet(400, 300, 0, 0, kind=BulletKind.BOUNCED, bounce_life=10))
    world.bullets.append(Bullet(boss.x, boss.y, 0, 0, kind=BulletKind.BOUNCED, bounce_life=10))

    combat.resolve_bullets_vs_enemies(world)
    combat.resolve_bullets_vs_boss(world)

    assert enemy.alive
    assert boss.hp == hp


def test_bullet_chips_boss(world):
    boss = spawn_boss(world)
    boss.hp = 2
    world.bullets.append(Bullet(boss.x + 60, boss.y, 0, -12))

    combat.resolve_bullets_vs_boss(world)

    assert boss.hp == 1
    assert not world.bullets[0].alive


def test_unshielded_ship_takes_boss_bullet(world):
    ship = world.ship
    world.boss_bullets.append(BossBullet(ship.x, ship.y - 20, 8))

    combat.resolve_boss_bullets_vs_player(world)

    assert ship.health == MAX_HEALTH - 1
    assert world.boss_bullets == []
    assert world.score == 0


def test_shield_turns_projectile_into_bonus(world):
    ship = world.ship
    ship.shield_active = True
    world.mini_boss_bullets.append(MiniBossBullet(ship.x + 10, ship.y, 5))

    combat.resolve_mini_boss_bullets_vs_player(world)

    assert ship.health == MAX_HEALTH
    assert world.mini_boss_bullets == []
    assert world.score == SCORE_DEFLECT_BULLET


def test_trench_wall_collision(world):
    world.chapter = 3
    ship = world.ship
    block = TrenchBlock(world_lane=0.0, z=0.9)
    world.trench_blocks.append(block)

    combat.resolve_trench_vs_player(world)

    assert not block.alive
    assert ship.health == MAX_HEALTH - 1


def test_trench_ignores_shallow_blocks_and_invulnerable_ship(world):
    world.chapter = 3
    shallow = TrenchBlock(world_lane=0.0, z=0.5)
    deep = TrenchBlock(world_lane=0.0, z=0.9)
    world.trench_blocks += [shallow, deep]
    world.ship.invulnerability_timer = 10

    combat.resolve_trench_vs_player(world)

    assert shallow.alive and deep.alive
    assert world.ship.health == MAX_HEALTH


def test_enemy_ram_damages_without_score(world):
    ship = world.ship
    enemy = Enemy(Dropping(ship.x, ship.y - 30))
    world.enemies.append(enemy)

    combat.resolve_enemies_vs_player(world)

    assert not enemy.alive
    assert ship.health == MAX_HEALTH - 1
    assert world.score == 0


def test_several_lethal_contacts_end_the_run_once(world):
    ship = world.ship
    ship.lives = 1
    ship.health = 1
    world.boss_bullets.append(BossBullet(ship.x, ship.y - 20, 8))
    world.mini_boss_bullets.append(MiniBossBullet(ship.x + 10, ship.y, 5))
    world.enemies.append(Enemy(Dropping(ship.x, ship.y - 30)))

    combat.resolve(world)

    assert world.game_over
    assert ship.lives == 0
    assert ship.health == 0
    assert world.death_timer == DEATH_TIMER_DURATION
    assert world.boss_bullets == [] and world.mini_boss_bullets == []


def test_lane_enemy_only_collides_up_close(world):
    ship = world.ship
    far = Enemy(Lane(0.0, z=0.5))
    world.enemies.append(far)

    combat.resolve_enemies_vs_player(world)

    assert far.alive
    assert ship.health == MAX_HEALTH


def test_collect_pickups_and_hearts(world):
    ship = world.ship
    ship.health = 2
    world.pickups.append(Pickup(Dropping(ship.x, ship.y), PickupType.MISSILE))
    world.hearts.append(Heart(Dropping(ship.x + 10, ship.y)))

    combat.collect_pickups(world)

    assert ship.missile_ammo == 5
    assert ship.health == 3
    assert not world.pickups[0].alive


def test_single_block_stops_bullets_in_chapter_two(world):
    world.chapter = 2
    block = TrenchBlock(world_lane=0.0, z=0.5, is_single_block=True)
    world.trench_blocks.append(block)
    bx, by = world.project(0.0, 0.5)
    bullet = Bullet(bx, by + 10, 0, -12)
    world.bullets.append(bullet)

    combat.resolve_single_blocks(world)

    assert not bullet.alive
    assert block.alive
    assert world.score == 0
