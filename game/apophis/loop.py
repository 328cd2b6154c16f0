"""
Fixed-timestep driver

Real elapsed time accumulates and is spent in whole 1/60 s ticks. The
accumulator is capped so a long stall never runs more than a few ticks in
one frame. Rendering happens once per frame no matter how many ticks ran.
"""

from __future__ import annotations

from typing import Callable, Optional

from .constants import MAX_CATCHUP_TICKS, TICK_SECONDS
from .input import IDLE, InputSource
from .log import get_logger
from .simulation import Simulation
from .world import WorldState

logger = get_logger(__name__)

Renderer = Callable[[WorldState], None]


class FixedStepLoop:
    def __init__(
        self,
        simulation: Simulation,
        input_source: Optional[InputSource] = None,
        renderer: Optional[Renderer] = None,
        tick_seconds: float = TICK_SECONDS,
        max_catchup: int = MAX_CATCHUP_TICKS,
    ):
        self.simulation = simulation
        self.input_source = input_source
        self.renderer = renderer
        self.tick_seconds = tick_seconds
        self.max_catchup = max_catchup
        self.accumulator = 0.0
        self.frames = 0

    def advance(self, elapsed: float) -> int:
        """Spend elapsed wall-clock seconds on ticks; returns how many ran"""
        cap = self.tick_seconds * self.max_catchup
        self.accumulator = min(self.accumulator + max(elapsed, 0.0), cap)
        ran = 0
        # Small epsilon so exact multiples of the tick are not lost to float error
        while self.accumulator + 1e-9 >= self.tick_seconds:
            inp = self.input_source.poll() if self.input_source is not None else IDLE
            self.simulation.update(inp)
            self.accumulator -= self.tick_seconds
            ran += 1
        self.accumulator = max(self.accumulator, 0.0)
        return ran

    def render(self) -> bool:
        """Drain due cosmetic callbacks and draw; False if the renderer failed"""
        world = self.simulation.world
        self.frames += 1
        try:
            world.delayed.drain()
            if self.renderer is not None:
                self.renderer(world)
        except Exception:
            logger.exception("Render failed on frame %d", self.frames)
            return False
        return True

    def frame(self, elapsed: float) -> int:
        ran = self.advance(elapsed)
        self.render()
        return ran
