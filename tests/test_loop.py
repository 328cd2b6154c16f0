import logging
import random

from game.apophis.constants import DEATH_TIMER_DURATION, MAX_HEALTH, SHIELD_MAX, TICK_SECONDS
from game.apophis.effects import DelayedEffects
from game.apophis.input import InputState, ScriptedInput
from game.apophis.loop import FixedStepLoop
from game.apophis.progression import Phase
from game.apophis.simulation import Simulation


def _random_inputs(seed, n):
    rng = random.Random(seed)
    return [
        InputState(
            movement_axis=rng.choice((-1, 0, 1)),
            firing=rng.random() < 0.7,
            shielding=rng.random() < 0.1,
            boomba_held=rng.random() < 0.05,
            missile_requested=rng.random() < 0.05,
            weapon_next=rng.random() < 0.01,
        )
        for _ in range(n)
    ]


def test_one_tick_per_sixtieth(clock):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))
    loop = FixedStepLoop(sim)
    assert loop.advance(TICK_SECONDS) == 1
    assert sim.ticks == 1


def test_catchup_is_capped(clock):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))
    loop = FixedStepLoop(sim)
    assert loop.advance(1.0) == 5
    assert loop.advance(0.0) == 0


def test_short_frames_accumulate(clock):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))
    frames = []
    loop = FixedStepLoop(sim, renderer=lambda world: frames.append(world.time))

    assert loop.frame(TICK_SECONDS / 2) == 0
    assert loop.frame(TICK_SECONDS / 2) == 1
    assert loop.frames == 2
    assert len(frames) == 2


def test_render_failure_is_contained(clock, caplog):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))

    def broken(world):
        raise RuntimeError("no GPU")

    loop = FixedStepLoop(sim, renderer=broken)
    loop.advance(TICK_SECONDS)
    score, time = sim.world.score, sim.world.time

    with caplog.at_level(logging.ERROR):
        assert loop.render() is False
    assert "Render failed" in caplog.text
    assert (sim.world.score, sim.world.time) == (score, time)
    assert loop.advance(TICK_SECONDS) == 1


def test_render_drains_delayed_effects(clock):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))
    fired = []
    sim.world.delayed.schedule(0.1, lambda: fired.append(True))
    loop = FixedStepLoop(sim)

    loop.render()
    assert fired == []
    clock.now = 0.2
    loop.render()
    assert fired == [True]


def test_failing_delayed_effect_is_contained(clock, caplog):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))

    def broken():
        raise RuntimeError("bad burst")

    sim.world.delayed.schedule(0.0, broken)
    loop = FixedStepLoop(sim)

    with caplog.at_level(logging.ERROR):
        assert loop.render() is False
    assert "Render failed" in caplog.text
    assert loop.render() is True


def test_input_source_polled_per_tick(clock):
    sim = Simulation(seed=1, delayed=DelayedEffects(clock))
    loop = FixedStepLoop(sim, input_source=ScriptedInput([InputState(movement_axis=1)] * 3))
    x = sim.world.ship.x
    loop.advance(TICK_SECONDS * 3)
    assert sim.world.ship.x > x


def test_tick_failure_ends_run(caplog):
    sim = Simulation(seed=3)

    def boom(inp):
        raise RuntimeError("corrupt state")

    sim._normal_tick = boom
    with caplog.at_level(logging.ERROR):
        assert sim.update() is Phase.NORMAL
    assert sim.world.game_over
    assert sim.world.death_timer == DEATH_TIMER_DURATION
    assert "ending run" in caplog.text
    assert sim.phase is Phase.GAME_OVER


def test_same_seed_same_run():
    inputs = _random_inputs(9, 900)
    runs = []
    for _ in range(2):
        sim = Simulation(seed=42)
        for inp in inputs:
            sim.update(inp)
        w = sim.world
        runs.append((
            w.score, w.ship.x, w.ship.health, w.ship.lives, w.chapter,
            [w.screen_pos(e.motion) for e in w.enemies],
            len(w.particles),
        ))
    assert runs[0] == runs[1]


def test_long_random_run_keeps_invariants(caplog):
    sim = Simulation(seed=11)
    last_score = 0
    with caplog.at_level(logging.ERROR):
        for inp in _random_inputs(5, 3000):
            sim.update(inp)
            w = sim.world
            ship = w.ship
            assert 0 <= ship.health <= MAX_HEALTH
            assert 0.0 <= ship.shield_level <= SHIELD_MAX
            assert ship.lives >= 0
            assert 80 <= ship.x <= w.width - 80
            assert w.score >= last_score
            last_score = w.score
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
