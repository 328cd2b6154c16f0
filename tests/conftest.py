import random
from typing import List, Tuple

import pytest

from game.apophis.effects import DelayedEffects
from game.apophis.input import InputState
from game.apophis.world import WorldState


class FixedRandom(random.Random):
    """random() always returns the same value; choice() and friends stay seeded"""

    def __init__(self, value: float = 0.5, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingSound:
    def __init__(self):
        self.played: List[Tuple[float, str, float, float]] = []

    def play(self, frequency, wave, duration, volume):
        self.played.append((frequency, wave, duration, volume))


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def world(sound, clock):
    w = WorldState(800, 600, seed=1, sound=sound, delayed=DelayedEffects(clock=clock))
    w.rng = FixedRandom(0.5)
    return w


@pytest.fixture
def idle():
    return InputState()
