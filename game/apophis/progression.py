"""
Progression / phase controller

While playing, exactly one sub-phase is active per tick. The phase is derived
from the timers on ``WorldState`` in priority order, so there is no separate
state variable that could drift out of sync with them.
"""

from __future__ import annotations

from enum import Enum

from .constants import (
    CHAPTER_DURATION,
    CHAPTER_NAMES,
    CHAPTER_TRANSITION_TIMER,
    LEVEL_TRANSITION_TIMER,
    RESPAWN_ENEMY_SAFE_RADIUS,
    RESPAWN_SAFE_RADIUS,
)
from .input import InputState
from .log import get_logger
from .motion import clear_near, update_particles
from .world import WorldState

logger = get_logger(__name__)

BOSS_CHAPTER = 4


class Phase(str, Enum):
    GAME_OVER = "game_over"
    RESPAWNING = "respawning"
    LEVEL_TRANSITION = "level_transition"
    BOSS_DEFEATED = "boss_defeated"
    CHAPTER_TRANSITION = "chapter_transition"
    NORMAL = "normal"


def current_phase(world: WorldState) -> Phase:
    if world.game_over:
        return Phase.GAME_OVER
    if world.respawn_timer > 0:
        return Phase.RESPAWNING
    if world.level_transition_timer > 0:
        return Phase.LEVEL_TRANSITION
    if world.boss_defeated_timer > 0:
        return Phase.BOSS_DEFEATED
    if world.chapter_transition_timer > 0:
        return Phase.CHAPTER_TRANSITION
    return Phase.NORMAL


def chapter_name(chapter: int) -> str:
    return CHAPTER_NAMES[(chapter - 1) % len(CHAPTER_NAMES)]


def advance_chapter(world: WorldState):
    """Move to the next chapter, wrapping past the boss chapter into a new level"""
    world.chapter += 1
    world.chapter_timer = 0
    world.enemies = []
    world.trench_blocks = []
    world.pickups = []
    world.hearts = []

    if world.chapter > BOSS_CHAPTER:
        world.level += 1
        world.chapter = 1
        world.mini_bosses = []
        world.mini_boss_bullets = []
        world.missiles = []
        logger.info("Level %d begins (score %d)", world.level, world.score)
    else:
        world.chapter_transition_timer = CHAPTER_TRANSITION_TIMER
        logger.info("Level %d chapter %d: %s", world.level, world.chapter,
                    chapter_name(world.chapter))


def check_chapter_time(world: WorldState) -> bool:
    """Chapters 1-3 end on elapsed time; the boss chapter never does"""
    if world.chapter != BOSS_CHAPTER and world.chapter_timer >= CHAPTER_DURATION:
        advance_chapter(world)
        return True
    return False


def restart(world: WorldState):
    world.reset()
    logger.info("Run restarted")


# ----------------------------
# Gated ticks for non-normal phases
# ----------------------------

def tick_game_over(world: WorldState, inp: InputState):
    if inp.restart:
        restart(world)
        return
    if world.death_timer > 0:
        world.death_timer -= 1
    update_particles(world)


def tick_respawning(world: WorldState):
    world.respawn_timer -= 1
    update_particles(world)
    clear_near(world, RESPAWN_SAFE_RADIUS, RESPAWN_ENEMY_SAFE_RADIUS)


def tick_level_transition(world: WorldState):
    world.level_transition_timer -= 1
    update_particles(world)


def tick_boss_defeated(world: WorldState):
    world.boss_defeated_timer -= 1
    update_particles(world)
    if world.boss_defeated_timer == 0:
        advance_chapter(world)
        world.level_transition_timer = LEVEL_TRANSITION_TIMER


def tick_chapter_transition(world: WorldState):
    world.chapter_transition_timer -= 1
    update_particles(world)
