"""Apophis - fixed-tick arcade shooter simulation core"""

from .env import ApophisEnv, run_random_episode
from .input import InputState
from .loop import FixedStepLoop
from .simulation import Simulation
from .world import WorldState

__all__ = [
    'ApophisEnv',
    'FixedStepLoop',
    'InputState',
    'Simulation',
    'WorldState',
    'run_random_episode',
]
