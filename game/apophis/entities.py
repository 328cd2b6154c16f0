"""
Game entity dataclasses

Entities that live on the perspective road (chapters 2-3) carry a ``Lane``
motion record; entities that fall straight down the screen (chapters 1 and 4,
and every loot drop) carry a ``Dropping`` record.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional, Tuple, Union

from .constants import MISSILE_TRAIL_LENGTH


class BulletKind(str, Enum):
    PLAIN = "plain"
    SINE = "sine"
    SCATTER = "scatter"
    LASER = "laser"
    BOUNCED = "bounced"


class PickupType(str, Enum):
    WEAPON = "weapon"
    MISSILE = "missile"
    BOOMBA = "boomba"
    INVULN = "invuln"
    EXTRALIFE = "extralife"
    SHIELD = "shield"


class BoombaType(str, Enum):
    AREA = "area"
    SCREEN = "screen"
    CHARGED = "charged"


class BossBulletShape(str, Enum):
    LINE = "line"
    CIRCLE = "circle"
    TRIANGLE = "triangle"


class TargetKind(str, Enum):
    MINIBOSS = "miniboss"
    BOSS = "boss"


@dataclass
class Dropping:
    """Screen-space motion: straight fall with optional lateral drift"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    size: float = 30.0


@dataclass
class Lane:
    """Perspective motion: lateral world lane and depth z in [0, 1.2)"""
    world_lane: float
    z: float = 0.0
    size: float = 40.0


Motion = Union[Dropping, Lane]


@dataclass
class Enemy:
    """Enemy entity; blockdots always drop a boomba"""
    motion: Motion
    is_blockdot: bool = False
    lateral_speed: float = 0.0
    lateral_phase: float = 0.0
    alive: bool = True


@dataclass
class TrenchBlock:
    """Canyon wall segment (chapter 3) or single obstacle block (chapter 2)"""
    world_lane: float
    z: float = 0.0
    is_single_block: bool = False
    alive: bool = True


@dataclass
class Pickup:
    motion: Motion
    type: PickupType
    boomba_type: Optional[BoombaType] = None
    alive: bool = True


@dataclass
class Heart:
    motion: Motion
    alive: bool = True


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int
    color: Tuple[int, int, int]


@dataclass
class Bullet:
    """Player projectile"""
    x: float
    y: float
    vx: float
    vy: float
    kind: BulletKind = BulletKind.PLAIN
    origin_x: float = 0.0
    phase: int = 0
    width: float = 4.0
    bounce_life: int = 0
    alive: bool = True

    @property
    def bounced(self) -> bool:
        return self.kind is BulletKind.BOUNCED


@dataclass
class MiniBoss:
    eid: int
    x: float
    y: float
    hp: int
    max_hp: int
    fire_rate: int
    chaos_rate: float
    defense: float
    color1: Tuple[int, int, int]
    color2: Tuple[int, int, int]
    bullet_shape: BossBulletShape
    phase: float = 0.0
    target_x: Optional[float] = None
    alive: bool = True


@dataclass
class Harasser:
    """Main chapter-4 boss"""
    eid: int
    x: float
    y: float
    hp: int
    max_hp: int
    phase: float = 0.0
    target_x: Optional[float] = None
    alive: bool = True


@dataclass
class BossBullet:
    x: float
    y: float
    vy: float
    size: float = 4.0
    alive: bool = True


@dataclass
class MiniBossBullet:
    x: float
    y: float
    vy: float
    shape: BossBulletShape = BossBulletShape.LINE
    alive: bool = True


@dataclass
class Missile:
    """
    Homing missile. Targets are held by entity id, never by reference, and
    re-resolved against the live collection every tick.
    """
    x: float
    y: float
    start_x: float
    start_y: float
    target_kind: TargetKind
    target_id: int
    progress: float = 0.0
    trail: Deque[Tuple[float, float]] = field(
        default_factory=lambda: deque(maxlen=MISSILE_TRAIL_LENGTH)
    )
    bounced: bool = False
    bounce_vx: float = 0.0
    bounce_vy: float = 0.0
    bounce_life: int = 0
    alive: bool = True
