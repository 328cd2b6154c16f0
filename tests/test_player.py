import pytest

from game.apophis import player
from game.apophis.constants import (
    INVULN_PICKUP_DURATION,
    MAX_HEALTH,
    MAX_MISSILE_AMMO,
    SHIELD_MAX,
    SHIP_MARGIN,
    WEAPON_DEFAULT,
    WEAPON_LASER,
    WEAPON_SCATTER,
    WEAPON_SINE_WAVE,
)
from game.apophis.entities import BulletKind, Dropping, Pickup, PickupType
from game.apophis.input import InputState
from game.apophis.spawner import spawn_mini_boss

LEFT = InputState(movement_axis=-1)
RIGHT = InputState(movement_axis=1)
FIRE = InputState(firing=True)
SHIELD = InputState(shielding=True)


def test_ship_clamped_to_margins(world):
    for _ in range(200):
        player.update_movement(world, RIGHT)
    assert world.ship.x == world.width - SHIP_MARGIN
    for _ in range(400):
        player.update_movement(world, LEFT)
    assert world.ship.x == SHIP_MARGIN


def test_input_axis_is_clamped():
    assert InputState(movement_axis=5).movement_axis == 1.0
    assert InputState(movement_axis=-3).movement_axis == -1.0


def test_shield_drains_and_regenerates(world):
    ship = world.ship
    player.update_shield(world, SHIELD)
    assert ship.shield_active
    assert ship.shield_level == SHIELD_MAX - 0.5

    ship.shield_level = 50.0
    player.update_shield(world, InputState())
    assert not ship.shield_active
    assert ship.shield_level == pytest.approx(50.05)


def test_shield_needs_charge_and_no_lockout(world):
    ship = world.ship
    ship.shield_level = 1.0
    player.update_shield(world, SHIELD)
    assert not ship.shield_active

    ship.shield_level = 80.0
    ship.charging_boomba = True
    player.update_shield(world, SHIELD)
    assert not ship.shield_active

    ship.charging_boomba = False
    world.respawn_timer = 5
    player.update_shield(world, SHIELD)
    assert not ship.shield_active


def test_fire_cadence(world):
    fired = 0
    for t in range(12):
        world.time = t
        fired += player.handle_shooting(world, FIRE)
    assert fired == 2
    assert len(world.bullets) == 2
    assert world.bullets[0].vy == -12


def test_no_fire_while_charging(world):
    world.ship.charging_boomba = True
    assert player.handle_shooting(world, FIRE) is False
    assert world.bullets == []


def test_scatter_fires_five(world):
    world.ship.weapon_inventory = [WEAPON_DEFAULT, WEAPON_SCATTER]
    world.ship.current_weapon = 1
    player.fire_weapon(world)
    assert len(world.bullets) == 5
    assert [b.vx for b in world.bullets] == [-4, -2, 0, 2, 4]
    assert all(b.kind is BulletKind.SCATTER for b in world.bullets)


def test_laser_is_fast_and_wide(world):
    world.ship.weapon_inventory = [WEAPON_LASER]
    player.fire_weapon(world)
    bullet = world.bullets[0]
    assert bullet.vy == -16
    assert bullet.width == 8


def test_aimed_fire_in_perspective_chapters(world):
    world.chapter = 2
    world.ship.x = 200
    player.fire_weapon(world)
    bullet = world.bullets[0]
    assert bullet.vx > 0 and bullet.vy < 0


def test_weapon_cycle_wraps(world):
    ship = world.ship
    ship.weapon_inventory = [WEAPON_DEFAULT, WEAPON_SINE_WAVE, WEAPON_SCATTER]
    player.handle_weapon_cycling(world, InputState(weapon_prev=True))
    assert ship.weapon == WEAPON_SCATTER
    player.handle_weapon_cycling(world, InputState(weapon_next=True))
    assert ship.weapon == WEAPON_DEFAULT


def test_weapon_pickups_stay_unique(world):
    pickup = Pickup(Dropping(0, 0), PickupType.WEAPON)
    for _ in range(30):
        player.apply_pickup(world, pickup)
    inventory = world.ship.weapon_inventory
    assert len(inventory) == len(set(inventory)) <= 4
    assert inventory[0] == WEAPON_DEFAULT


def test_pickup_caps(world):
    ship = world.ship
    ship.missile_ammo = MAX_MISSILE_AMMO - 1
    player.apply_pickup(world, Pickup(Dropping(0, 0), PickupType.MISSILE))
    assert ship.missile_ammo == MAX_MISSILE_AMMO

    ship.shield_level = 90.0
    player.apply_pickup(world, Pickup(Dropping(0, 0), PickupType.SHIELD))
    assert ship.shield_level == SHIELD_MAX

    player.adjust_health(world, 5)
    assert ship.health == MAX_HEALTH


def test_invuln_and_extra_life_pickups(world):
    ship = world.ship
    player.apply_pickup(world, Pickup(Dropping(0, 0), PickupType.INVULN))
    player.apply_pickup(world, Pickup(Dropping(0, 0), PickupType.EXTRALIFE))
    assert ship.invulnerability_timer == INVULN_PICKUP_DURATION
    assert ship.lives == 4


def test_missile_request_locked_out_while_respawning(world):
    world.level = 2
    spawn_mini_boss(world)
    world.respawn_timer = 10
    assert player.handle_missile_request(world, InputState(missile_requested=True)) is False
    world.respawn_timer = 0
    assert player.handle_missile_request(world, InputState(missile_requested=True)) is True
    assert len(world.missiles) == 1


def test_damage_plays_cue(world, sound):
    player.handle_player_damage(world)
    assert sound.played
