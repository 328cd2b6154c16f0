"""
Input boundary

Devices are multiplexed outside the core; each tick the simulation receives
one ``InputState`` snapshot. Weapon-cycle and restart signals are edges: true
for exactly one tick per physical press.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Protocol

from .utils import clamp


@dataclass(frozen=True)
class InputState:
    movement_axis: float = 0.0  # -1 left .. 1 right
    firing: bool = False
    shielding: bool = False
    boomba_held: bool = False
    missile_requested: bool = False
    weapon_next: bool = False
    weapon_prev: bool = False
    restart: bool = False

    def __post_init__(self):
        object.__setattr__(self, "movement_axis", clamp(float(self.movement_axis), -1.0, 1.0))


IDLE = InputState()


class InputSource(Protocol):
    def poll(self) -> InputState:
        ...


class EdgeTrigger:
    """Turns a held level signal into a one-tick rising edge"""

    def __init__(self):
        self._prev = False

    def __call__(self, level: bool) -> bool:
        edge = level and not self._prev
        self._prev = level
        return edge


class ScriptedInput:
    """Replays a fixed sequence of snapshots, then idles"""

    def __init__(self, states: Iterable[InputState], default: Optional[InputState] = None):
        self._states: Iterator[InputState] = iter(states)
        self._default = default or IDLE

    def poll(self) -> InputState:
        return next(self._states, self._default)
