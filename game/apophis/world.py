"""
World state aggregate

Every mutable simulation field lives on a single ``WorldState`` that is
passed explicitly to each subsystem. Renderers read it, only the tick writes it.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .audio import NullSound, SoundSink
from .constants import (
    DEPTH_Y_FRAC,
    FOV_SCALE,
    HORIZON_Y_FRAC,
    INITIAL_GAME_SPEED,
    MAX_HEALTH,
    SHIELD_MAX,
    SHIP_Y_FRAC,
    STARTING_LIVES,
    STARTING_MISSILE_AMMO,
    WEAPON_DEFAULT,
)
from .effects import DelayedEffects
from .entities import (
    BoombaType,
    BossBullet,
    Bullet,
    Dropping,
    Enemy,
    Harasser,
    Heart,
    MiniBoss,
    MiniBossBullet,
    Missile,
    Motion,
    Particle,
    Pickup,
    TrenchBlock,
)


@dataclass
class Ship:
    """Player ship; never destroyed, only respawned"""
    x: float
    y: float
    angle: float = 0.0
    health: int = MAX_HEALTH
    lives: int = STARTING_LIVES
    shield_level: float = SHIELD_MAX
    shield_active: bool = False
    invulnerability_timer: int = 0
    weapon_inventory: List[int] = field(default_factory=lambda: [WEAPON_DEFAULT])
    current_weapon: int = 0
    boomba_queue: List[BoombaType] = field(default_factory=list)
    charging_boomba: bool = False
    boomba_charge: int = 0
    boomba_latched: bool = False  # boomba key was down last tick
    missile_ammo: int = STARTING_MISSILE_AMMO
    missile_cooldown: int = 0

    @property
    def weapon(self) -> int:
        return self.weapon_inventory[self.current_weapon]


@dataclass(frozen=True)
class HudState:
    """Scalar fields the HUD needs each frame"""
    score: int
    level: int
    chapter: int
    lives: int
    health: int
    shield_level: float
    shield_active: bool
    weapon: int
    weapon_inventory: Tuple[int, ...]
    boomba_queue: Tuple[BoombaType, ...]
    boomba_charge: int
    charging_boomba: bool
    missile_ammo: int
    missile_cooldown: int
    invulnerability_timer: int
    respawn_timer: int
    death_timer: int
    level_transition_timer: int
    chapter_transition_timer: int
    boss_defeated_timer: int
    boss_score_gained: int
    game_over: bool
    boss_hp: Optional[Tuple[int, int]]


class WorldState:
    """Entity registry plus progression, timers and the seeded RNG."""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        seed: Optional[int] = None,
        sound: Optional[SoundSink] = None,
        delayed: Optional[DelayedEffects] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"screen size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rng = random.Random(seed)
        # Cosmetic-only RNG for effects fired outside the tick
        self.fx_rng = random.Random(seed)
        self.sound: SoundSink = sound if sound is not None else NullSound()
        # Survives resets: pending callbacks fire into the fresh particle list
        self.delayed = delayed if delayed is not None else DelayedEffects()
        self._next_id = 0
        self.reset()

    def reset(self, seed: Optional[int] = None):
        """Rebuild all run state from constants, in place."""
        if seed is not None:
            self.rng.seed(seed)
            self.fx_rng.seed(seed)

        self.game_speed = INITIAL_GAME_SPEED
        self.score = 0
        self.game_over = False
        self.time = 0

        self.ship = Ship(x=self.width / 2, y=self.height * SHIP_Y_FRAC)

        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.particles: List[Particle] = []
        self.pickups: List[Pickup] = []
        self.trench_blocks: List[TrenchBlock] = []
        self.hearts: List[Heart] = []
        self.harassers: List[Harasser] = []
        self.boss_bullets: List[BossBullet] = []
        self.mini_bosses: List[MiniBoss] = []
        self.mini_boss_bullets: List[MiniBossBullet] = []
        self.missiles: List[Missile] = []

        self.death_timer = 0
        self.respawn_timer = 0

        self.level = 1
        self.chapter = 1
        self.chapter_timer = 0

        self.boss_active = False
        self.boss_defeated_timer = 0
        self.boss_score_gained = 0
        self.boss_bullet_burst = 0
        self.boss_bullet_phase = 0
        self.boss_bullet_cooldown = 0

        self.level_transition_timer = 0
        self.chapter_transition_timer = 0

    # ----------------------------
    # Helpers shared by subsystems
    # ----------------------------

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_score(self, amount: int):
        if amount < 0:
            raise ValueError("score never decreases")
        self.score += amount

    def project(self, world_lane: float, z: float) -> Tuple[float, float]:
        """Perspective projection of a lane position to screen space"""
        sx = self.width / 2 + world_lane * FOV_SCALE * z
        sy = self.height * HORIZON_Y_FRAC + z * self.height * DEPTH_Y_FRAC
        return sx, sy

    def screen_pos(self, motion: Motion) -> Tuple[float, float]:
        if isinstance(motion, Dropping):
            return motion.x, motion.y
        return self.project(motion.world_lane, motion.z)

    def trench_offset(self, z: float = 0.0) -> float:
        """Canyon wander: lateral offset of the trench centre line"""
        curve_time = self.time * 0.02
        wobble = math.sin(self.time * 0.05) * 100 + math.cos(self.time * 0.03) * 80
        return math.sin(curve_time + z * 3) * 250 + wobble

    @property
    def horizon(self) -> Tuple[float, float]:
        return self.width / 2, self.height * HORIZON_Y_FRAC

    def find_mini_boss(self, eid: int) -> Optional[MiniBoss]:
        for mb in self.mini_bosses:
            if mb.eid == eid and mb.alive:
                return mb
        return None

    def find_harasser(self, eid: int) -> Optional[Harasser]:
        for h in self.harassers:
            if h.eid == eid and h.alive:
                return h
        return None

    def hud(self) -> HudState:
        boss_hp = None
        if self.harassers:
            boss_hp = (self.harassers[0].hp, self.harassers[0].max_hp)
        s = self.ship
        return HudState(
            score=self.score,
            level=self.level,
            chapter=self.chapter,
            lives=s.lives,
            health=s.health,
            shield_level=s.shield_level,
            shield_active=s.shield_active,
            weapon=s.weapon,
            weapon_inventory=tuple(s.weapon_inventory),
            boomba_queue=tuple(s.boomba_queue),
            boomba_charge=s.boomba_charge,
            charging_boomba=s.charging_boomba,
            missile_ammo=s.missile_ammo,
            missile_cooldown=s.missile_cooldown,
            invulnerability_timer=s.invulnerability_timer,
            respawn_timer=self.respawn_timer,
            death_timer=self.death_timer,
            level_transition_timer=self.level_transition_timer,
            chapter_transition_timer=self.chapter_transition_timer,
            boss_defeated_timer=self.boss_defeated_timer,
            boss_score_gained=self.boss_score_gained,
            game_over=self.game_over,
            boss_hp=boss_hp,
        )
