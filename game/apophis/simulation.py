"""
Simulation - one fixed tick of the Apophis core
-----------------------------------------------
- Owns the WorldState and advances it by exactly one 1/60 s tick per call
- Non-normal phases (game over, respawn, transitions) gate which subsystems run
- A tick never raises: unexpected errors force the terminal game-over state
"""

from __future__ import annotations

from typing import Optional

from . import bosses, combat, missiles, motion, player, progression, spawner
from .audio import SoundSink
from .boomba import handle_boomba
from .constants import DEATH_TIMER_DURATION, GAME_SPEED_STEP
from .effects import DelayedEffects
from .input import IDLE, InputState
from .log import get_logger
from .progression import Phase
from .world import HudState, WorldState

logger = get_logger(__name__)


class Simulation:
    """Deterministic fixed-tick driver over a single WorldState"""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        seed: Optional[int] = None,
        sound: Optional[SoundSink] = None,
        delayed: Optional[DelayedEffects] = None,
    ):
        self.world = WorldState(width, height, seed=seed, sound=sound, delayed=delayed)
        self.ticks = 0
        logger.info("Simulation started (%dx%d, seed=%s)", width, height, seed)

    # ----------------------------
    # Public API
    # ----------------------------

    def update(self, inp: InputState = IDLE) -> Phase:
        """Advance one tick; returns the phase the tick ran in"""
        world = self.world
        phase = progression.current_phase(world)
        try:
            self._tick(phase, inp)
        except Exception:
            logger.exception("Tick %d failed in phase %s; ending run", self.ticks, phase.value)
            world.game_over = True
            world.death_timer = DEATH_TIMER_DURATION
        self.ticks += 1
        return phase

    def reset(self, seed: Optional[int] = None):
        self.world.reset(seed)
        logger.info("Simulation reset (seed=%s)", seed)

    @property
    def phase(self) -> Phase:
        return progression.current_phase(self.world)

    def hud(self) -> HudState:
        return self.world.hud()

    # ----------------------------
    # Tick
    # ----------------------------

    def _tick(self, phase: Phase, inp: InputState):
        world = self.world
        if phase is Phase.GAME_OVER:
            progression.tick_game_over(world, inp)
        elif phase is Phase.RESPAWNING:
            progression.tick_respawning(world)
        elif phase is Phase.LEVEL_TRANSITION:
            progression.tick_level_transition(world)
        elif phase is Phase.BOSS_DEFEATED:
            progression.tick_boss_defeated(world)
        elif phase is Phase.CHAPTER_TRANSITION:
            progression.tick_chapter_transition(world)
        else:
            self._normal_tick(inp)

    def _normal_tick(self, inp: InputState):
        world = self.world
        ship = world.ship

        world.time += 1
        world.game_speed += GAME_SPEED_STEP
        world.chapter_timer += 1
        if ship.invulnerability_timer > 0:
            ship.invulnerability_timer -= 1

        # Boss sector
        if world.chapter == progression.BOSS_CHAPTER:
            bosses.ensure_boss(world)
            bosses.update_boss(world)
            bosses.handle_boss_firing(world)
            bosses.update_boss_bullets(world)

        # Player
        player.update_movement(world, inp)
        player.update_shield(world, inp)
        player.handle_shooting(world, inp)
        player.handle_weapon_cycling(world, inp)
        player.handle_missile_request(world, inp)
        handle_boomba(world, inp)
        if ship.missile_cooldown > 0:
            ship.missile_cooldown -= 1

        motion.update_bullets(world)
        missiles.update_missiles(world)

        # Mini-bosses
        spawner.maybe_spawn_mini_boss(world)
        bosses.update_mini_bosses(world)
        bosses.update_mini_boss_bullets(world)

        if world.chapter != progression.BOSS_CHAPTER:
            spawner.handle_spawning(world)

        motion.update_enemies(world)
        motion.update_trench_blocks(world)
        motion.update_pickups(world)

        combat.resolve(world)
        motion.cleanup(world)
        motion.update_particles(world)

        progression.check_chapter_time(world)
