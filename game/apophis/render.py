"""
Arcade front-end
----------------
- SceneRenderer: draws a read-only WorldState with Arcade primitives
- KeyboardInput: keyboard state -> per-tick InputState (edges for weapon cycle / restart)
- SynthSound: SoundSink backed by pyglet's procedural synthesis
- ApophisWindow: host run-loop driving FixedStepLoop from real elapsed time

The simulation uses a y-down screen; Arcade is y-up, so every draw call flips y.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Set, Tuple

import arcade
import pyglet

from .constants import (
    CHAPTER_TRANSITION_TIMER,
    CYAN,
    MAGENTA,
    MAX_HEALTH,
    SHIELD_MAX,
    WEAPON_ICONS,
    WEAPON_NAMES,
    WHITE,
    YELLOW,
)
from .entities import BossBulletShape, BoombaType, Dropping, PickupType
from .input import EdgeTrigger, InputState
from .log import get_logger
from .loop import FixedStepLoop
from .progression import chapter_name
from .simulation import Simulation
from .world import WorldState

logger = get_logger(__name__)

BG = (5, 5, 16)
GRID_C = (0, 255, 255, 60)
SHIP_C = (0, 255, 128)
ENEMY_C = (255, 60, 60)
BLOCKDOT_C = MAGENTA
WALL_C = (120, 0, 200)
BLOCK_C = (255, 140, 0)
BULLET_C = CYAN
BOSS_C = (255, 0, 102)
HUD_C = (220, 220, 220)

PICKUP_COLORS = {
    PickupType.WEAPON: (0, 200, 255),
    PickupType.MISSILE: (255, 102, 0),
    PickupType.BOOMBA: YELLOW,
    PickupType.INVULN: WHITE,
    PickupType.EXTRALIFE: (0, 255, 0),
    PickupType.SHIELD: (0, 136, 255),
}
BOOMBA_ICONS = {BoombaType.AREA: "A", BoombaType.SCREEN: "S", BoombaType.CHARGED: "C"}


class SceneRenderer:
    """Projects the entity registry onto Arcade draw calls. Never writes to the world."""

    def __init__(self, width: int, height: int, n_stars: int = 120, seed: int = 7):
        self.width = width
        self.height = height
        # Ambient decoration; owned by the renderer, not the simulation
        rng = random.Random(seed)
        self.stars: List[List[float]] = [
            [rng.random() * width, rng.random() * height, 0.5 + rng.random() * 2.5]
            for _ in range(n_stars)
        ]

    def fy(self, y: float) -> float:
        return self.height - y

    def __call__(self, world: WorldState):
        self.draw(world)

    def draw(self, world: WorldState):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, BG)
        self._draw_background(world)
        self._draw_trench(world)
        self._draw_pickups(world)
        self._draw_enemies(world)
        self._draw_bullets(world)
        self._draw_missiles(world)
        self._draw_bosses(world)
        self._draw_hostile_bullets(world)
        if not world.game_over:
            self._draw_ship(world)
        self._draw_particles(world)
        self._draw_hud(world)
        self._draw_overlays(world)

    # ----------------------------
    # Scene
    # ----------------------------

    def _draw_background(self, world: WorldState):
        for star in self.stars:
            star[1] += star[2]
            if star[1] > self.height:
                star[1] = 0
            arcade.draw_point(star[0], self.fy(star[1]), WHITE, star[2])

        if world.chapter not in (2, 3):
            return
        hx, hy = world.horizon
        # Converging lane lines and receding depth rows
        for lane in (-600, -350, -120, 120, 350, 600):
            bx, by = world.project(lane, 1.2)
            arcade.draw_line(hx, self.fy(hy), bx, self.fy(by), GRID_C, 1)
        offset = (world.time * 0.02) % 0.1
        z = offset
        while z < 1.2:
            _, y = world.project(0, z)
            arcade.draw_line(0, self.fy(y), self.width, self.fy(y), GRID_C, 1)
            z += 0.1

    def _draw_trench(self, world: WorldState):
        for block in world.trench_blocks:
            x, y = world.project(block.world_lane, block.z)
            half = (25 if block.is_single_block else 60) * max(block.z, 0.05)
            color = BLOCK_C if block.is_single_block else WALL_C
            arcade.draw_lrbt_rectangle_filled(
                x - half, x + half, self.fy(y) - half, self.fy(y) + half, color
            )

    def _draw_enemies(self, world: WorldState):
        for e in world.enemies:
            x, y = world.screen_pos(e.motion)
            if isinstance(e.motion, Dropping):
                r = e.motion.size / 2
            else:
                r = max(3.0, e.motion.size * e.motion.z * 0.6)
            color = BLOCKDOT_C if e.is_blockdot else ENEMY_C
            if e.is_blockdot:
                arcade.draw_lrbt_rectangle_filled(x - r, x + r, self.fy(y) - r, self.fy(y) + r, color)
            else:
                arcade.draw_circle_filled(x, self.fy(y), r, color)

    def _draw_pickups(self, world: WorldState):
        for p in world.pickups:
            x, y = world.screen_pos(p.motion)
            arcade.draw_circle_outline(x, self.fy(y), 12, PICKUP_COLORS[p.type], 2)
            if p.type is PickupType.BOOMBA and p.boomba_type is not None:
                arcade.draw_text(BOOMBA_ICONS[p.boomba_type], x - 5, self.fy(y) - 6, YELLOW, 11)
        for h in world.hearts:
            x, y = world.screen_pos(h.motion)
            arcade.draw_circle_filled(x - 5, self.fy(y) + 3, 6, (255, 40, 80))
            arcade.draw_circle_filled(x + 5, self.fy(y) + 3, 6, (255, 40, 80))
            arcade.draw_triangle_filled(x - 11, self.fy(y) + 1, x + 11, self.fy(y) + 1,
                                        x, self.fy(y) - 12, (255, 40, 80))

    def _draw_bullets(self, world: WorldState):
        for b in world.bullets:
            if b.bounced:
                arcade.draw_circle_filled(b.x, self.fy(b.y), 3, YELLOW)
            else:
                arcade.draw_line(b.x, self.fy(b.y), b.x - b.vx, self.fy(b.y - b.vy),
                                 BULLET_C, b.width / 2)

    def _draw_missiles(self, world: WorldState):
        for m in world.missiles:
            trail = list(m.trail)
            for (x0, y0), (x1, y1) in zip(trail, trail[1:]):
                arcade.draw_line(x0, self.fy(y0), x1, self.fy(y1), (255, 140, 0), 2)
            arcade.draw_circle_filled(m.x, self.fy(m.y), 4, WHITE)

    def _draw_bosses(self, world: WorldState):
        for mb in world.mini_bosses:
            arcade.draw_circle_filled(mb.x, self.fy(mb.y), 30, mb.color1)
            arcade.draw_circle_outline(mb.x, self.fy(mb.y), 34, mb.color2, 3)
            self._draw_bar(mb.x - 30, self.fy(mb.y) + 42, 60, 5, mb.hp, mb.max_hp, mb.color2)
        for boss in world.harassers:
            angle = boss.phase * 2
            pts = [
                (boss.x + math.cos(angle + i * math.pi / 3) * 60,
                 self.fy(boss.y) + math.sin(angle + i * math.pi / 3) * 60)
                for i in range(6)
            ]
            arcade.draw_polygon_filled(pts, BOSS_C)
            arcade.draw_circle_filled(boss.x, self.fy(boss.y), 18, WHITE)
            self._draw_bar(self.width * 0.25, self.height - 60, self.width * 0.5, 10,
                           boss.hp, boss.max_hp, BOSS_C)

    def _draw_hostile_bullets(self, world: WorldState):
        for b in world.boss_bullets:
            arcade.draw_circle_filled(b.x, self.fy(b.y), b.size + 2, YELLOW)
        for b in world.mini_boss_bullets:
            y = self.fy(b.y)
            if b.shape is BossBulletShape.CIRCLE:
                arcade.draw_circle_filled(b.x, y, 6, (0, 136, 255))
            elif b.shape is BossBulletShape.TRIANGLE:
                arcade.draw_triangle_filled(b.x - 6, y + 6, b.x + 6, y + 6, b.x, y - 8, (0, 255, 0))
            else:
                arcade.draw_line(b.x, y + 8, b.x, y - 8, YELLOW, 3)

    def _draw_ship(self, world: WorldState):
        ship = world.ship
        if ship.invulnerability_timer > 0 and (world.time // 4) % 2 == 0:
            return
        x, y = ship.x, self.fy(ship.y)
        tilt = ship.angle * 10
        arcade.draw_triangle_filled(x, y + 25, x - 20 + tilt, y - 15, x + 20 + tilt, y - 15, SHIP_C)
        if ship.shield_active:
            arcade.draw_circle_outline(x, y, 40, (0, 136, 255), 3)
        if ship.charging_boomba:
            arcade.draw_circle_outline(x, y, 45 + ship.boomba_charge / 10, YELLOW, 2)

    def _draw_particles(self, world: WorldState):
        for p in world.particles:
            arcade.draw_point(p.x, self.fy(p.y), p.color, 3)

    # ----------------------------
    # HUD
    # ----------------------------

    @staticmethod
    def _draw_bar(x: float, y: float, w: float, h: float, value: float, maximum: float,
                  color: Tuple[int, int, int]):
        arcade.draw_lrbt_rectangle_filled(x, x + w, y, y + h, (60, 60, 60))
        fill = w * max(0.0, min(1.0, value / max(1e-6, maximum)))
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x, x + fill, y, y + h, color)

    def _draw_hud(self, world: WorldState):
        hud = world.hud()
        top = self.height - 24
        arcade.draw_text(f"SCORE {hud.score}", 12, top, HUD_C, 14)
        arcade.draw_text(
            f"LEVEL {hud.level}-{hud.chapter} {chapter_name(hud.chapter)}",
            12, top - 20, HUD_C, 12,
        )
        arcade.draw_text(f"LIVES {hud.lives}", self.width - 110, top, HUD_C, 14)
        self._draw_bar(self.width - 110, top - 14, 90, 8, hud.health, MAX_HEALTH, (255, 40, 80))
        self._draw_bar(self.width - 110, top - 28, 90, 8, hud.shield_level, SHIELD_MAX, (0, 136, 255))

        weapons = " ".join(
            f"[{WEAPON_ICONS[w]}]" if w == hud.weapon else WEAPON_ICONS[w]
            for w in hud.weapon_inventory
        )
        arcade.draw_text(f"{WEAPON_NAMES[hud.weapon]}  {weapons}", 12, 12, HUD_C, 12)
        queue = "".join(BOOMBA_ICONS[b] for b in hud.boomba_queue[:12])
        arcade.draw_text(f"BOOMBA {queue}", 12, 32, YELLOW, 12)
        arcade.draw_text(f"MISSILES {hud.missile_ammo}", self.width - 130, 12, (255, 102, 0), 12)

    def _draw_overlays(self, world: WorldState):
        cx, cy = self.width / 2, self.height / 2
        if world.game_over:
            arcade.draw_text("GAME OVER", cx, cy + 20, (255, 40, 80), 40, anchor_x="center")
            arcade.draw_text(f"FINAL SCORE {world.score}  -  press R to restart",
                             cx, cy - 20, HUD_C, 14, anchor_x="center")
        elif world.boss_defeated_timer > 0:
            arcade.draw_text("HARASSER DESTROYED", cx, cy + 10, YELLOW, 30, anchor_x="center")
            arcade.draw_text(f"+{world.boss_score_gained}", cx, cy - 25, WHITE, 18, anchor_x="center")
        elif world.level_transition_timer > 0:
            arcade.draw_text(f"LEVEL {world.level}", cx, cy, CYAN, 36, anchor_x="center")
        elif world.chapter_transition_timer > 0:
            alpha = int(255 * world.chapter_transition_timer / CHAPTER_TRANSITION_TIMER)
            arcade.draw_text(chapter_name(world.chapter), cx, cy, (0, 255, 255, alpha), 30,
                             anchor_x="center")


class KeyboardInput:
    """Keyboard -> InputState. Arrows/A-D steer, SPACE fires, SHIFT shields,
    B boomba, M missile, Q/E cycle weapons, R restarts."""

    LEFT = (arcade.key.LEFT, arcade.key.A)
    RIGHT = (arcade.key.RIGHT, arcade.key.D)

    def __init__(self):
        self.pressed: Set[int] = set()
        self._next = EdgeTrigger()
        self._prev = EdgeTrigger()
        self._restart = EdgeTrigger()

    def press(self, key: int):
        self.pressed.add(key)

    def release(self, key: int):
        self.pressed.discard(key)

    def _any(self, keys) -> bool:
        return any(k in self.pressed for k in keys)

    def poll(self) -> InputState:
        axis = 0.0
        if self._any(self.LEFT):
            axis -= 1.0
        if self._any(self.RIGHT):
            axis += 1.0
        return InputState(
            movement_axis=axis,
            firing=arcade.key.SPACE in self.pressed,
            shielding=self._any((arcade.key.LSHIFT, arcade.key.RSHIFT)),
            boomba_held=arcade.key.B in self.pressed,
            missile_requested=arcade.key.M in self.pressed,
            weapon_next=self._next(arcade.key.E in self.pressed),
            weapon_prev=self._prev(arcade.key.Q in self.pressed),
            restart=self._restart(self._any((arcade.key.R, arcade.key.ENTER))),
        )


class SynthSound:
    """SoundSink over pyglet.media.synthesis; goes silent after the first device error"""

    WAVES = {
        "sine": pyglet.media.synthesis.Sine,
        "square": pyglet.media.synthesis.Square,
        "sawtooth": pyglet.media.synthesis.Sawtooth,
        "triangle": pyglet.media.synthesis.Triangle,
    }

    def __init__(self, master_volume: float = 1.0):
        self.master_volume = master_volume
        self.enabled = True

    def play(self, frequency: float, wave: str, duration: float, volume: float) -> None:
        if not self.enabled:
            return
        try:
            envelope = pyglet.media.synthesis.LinearDecayEnvelope(
                peak=min(1.0, volume * self.master_volume)
            )
            source = self.WAVES.get(wave, pyglet.media.synthesis.Sine)(
                duration, frequency=frequency, envelope=envelope
            )
            source.play()
        except Exception:
            self.enabled = False
            logger.warning("Audio playback failed; sound disabled", exc_info=True)


class ApophisWindow(arcade.Window):
    """Arcade host: polls the keyboard each tick and draws once per frame"""

    def __init__(
        self,
        sim: Simulation,
        width: int,
        height: int,
        fullscreen: bool = False,
        drive: bool = True,
    ):
        super().__init__(width, height, "APOPHIS", fullscreen=fullscreen)
        self.sim = sim
        self.keyboard = KeyboardInput()
        self.scene = SceneRenderer(width, height)
        self.loop = FixedStepLoop(sim, self.keyboard, self.scene)
        self.drive = drive
        arcade.set_background_color(BG)

    def on_key_press(self, key, modifiers):
        if key == arcade.key.ESCAPE:
            arcade.close_window()
            return
        self.keyboard.press(key)

    def on_key_release(self, key, modifiers):
        self.keyboard.release(key)

    def on_update(self, delta_time: float):
        if self.drive:
            self.loop.advance(delta_time)

    def on_draw(self):
        self.clear()
        self.loop.render()

    def draw_frame(self):
        """Manual frame for callers that step the simulation themselves"""
        self.dispatch_events()
        self.on_draw()
        self.flip()


def run(
    width: int = 800,
    height: int = 600,
    seed: Optional[int] = None,
    fullscreen: bool = False,
    mute: bool = False,
):
    sound = None if mute else SynthSound()
    sim = Simulation(width, height, seed=seed, sound=sound)
    ApophisWindow(sim, width, height, fullscreen=fullscreen)
    arcade.run()
