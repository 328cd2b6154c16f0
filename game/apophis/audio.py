"""
Audio boundary

The core never waits on or reads back from audio; it only fires cues.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol


class SoundSink(Protocol):
    def play(self, frequency: float, wave: str, duration: float, volume: float) -> None:
        ...


class NullSound:
    """Silent sink used headless and in training"""

    def play(self, frequency: float, wave: str, duration: float, volume: float) -> None:
        return None


class Cue(NamedTuple):
    frequency: float
    wave: str  # sine, square, sawtooth, triangle
    duration: float
    volume: float


def emit(sink: SoundSink, cue: Cue):
    sink.play(cue.frequency, cue.wave, cue.duration, cue.volume)


# Weapons
FIRE_DEFAULT = Cue(800, "square", 0.1, 0.05)
FIRE_SINE = Cue(900, "sine", 0.1, 0.05)
FIRE_SCATTER = Cue(700, "square", 0.15, 0.08)
FIRE_LASER = Cue(1200, "sawtooth", 0.2, 0.1)
MISSILE_LAUNCH = (Cue(150, "sawtooth", 0.4, 0.25), Cue(80, "square", 0.3, 0.15))
MISSILE_IMPACT = (Cue(60, "sawtooth", 0.6, 0.4), Cue(120, "square", 0.4, 0.3))

# Hits
ENEMY_HIT = Cue(150, "sawtooth", 0.2, 0.1)
BLOCK_HIT = Cue(800, "sine", 0.05, 0.06)
BOSS_HIT = Cue(400, "square", 0.05, 0.1)
DEFLECT = Cue(1200, "sine", 0.05, 0.08)
MISSILE_DEFLECT = (Cue(1200, "sine", 0.05, 0.08), Cue(1200, "sine", 0.08, 0.12))
SHIELD_BUMP = Cue(100, "sine", 0.1, 0.2)
PLAYER_DAMAGE = Cue(50, "sawtooth", 0.5, 0.3)
TRENCH_CRASH = Cue(40, "sawtooth", 0.8, 0.4)

# Bosses
MINIBOSS_FIRE = Cue(250, "sine", 0.08, 0.04)
BOSS_FIRE = Cue(200, "sine", 0.1, 0.03)
BOSS_DEATH = Cue(50, "sawtooth", 1.5, 0.5)

# Pickups
PICKUP = Cue(600, "sine", 0.3, 0.2)
PICKUP_LIFE = Cue(900, "sine", 0.5, 0.3)
PICKUP_MISSILE = Cue(550, "sine", 0.3, 0.2)
PICKUP_HEART = Cue(800, "sine", 0.3, 0.2)
BOOMBA_DROP = Cue(400, "sine", 0.3, 0.15)

# Boombas
BOOMBA_AREA = Cue(120, "square", 0.6, 0.3)
BOOMBA_SCREEN = Cue(60, "square", 1.2, 0.4)
BOOMBA_CHARGED = Cue(80, "square", 1.0, 0.3)
