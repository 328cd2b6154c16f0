import numpy as np
import pytest

from game.apophis import ApophisEnv, run_random_episode
from game.apophis.env import DEFAULT_REWARD_CONFIG


@pytest.fixture
def env():
    e = ApophisEnv(max_steps=50)
    yield e
    e.close()


def test_reset_observation_in_space(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs.shape == (11 + 4 + 5 * 3 + 5 * 2,)
    assert info["score"] == 0
    assert info["phase"] == "normal"


def test_step_contract(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([2, 1, 0, 0, 0, 0]))
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert terminated is False
    assert truncated is False
    assert info["step"] == 1


def test_truncates_at_max_steps(env):
    env.reset(seed=0)
    truncated = False
    for _ in range(50):
        _, _, _, truncated, _ = env.step(np.zeros(6, dtype=np.int64))
    assert truncated


def test_step_drains_delayed_effects(env):
    env.reset(seed=0)
    fired = []
    env.sim.world.delayed.schedule(0.0, lambda: fired.append(True))

    env.step(np.zeros(6, dtype=np.int64))

    assert fired == [True]
    assert len(env.sim.world.delayed) == 0


def test_action_mapping():
    inp = ApophisEnv.action_to_input([1, 1, 1, 1, 1, 2])
    assert inp.movement_axis == -1.0
    assert inp.firing and inp.shielding and inp.boomba_held and inp.missile_requested
    assert inp.weapon_prev and not inp.weapon_next

    idle = ApophisEnv.action_to_input([0, 0, 0, 0, 0, 0])
    assert idle.movement_axis == 0.0
    assert not (idle.firing or idle.weapon_next or idle.weapon_prev)


def test_same_seed_reproduces_observations():
    a, b = ApophisEnv(), ApophisEnv()
    obs_a, _ = a.reset(seed=7)
    obs_b, _ = b.reset(seed=7)
    for _ in range(100):
        obs_a, *_ = a.step([1, 1, 0, 0, 0, 0])
        obs_b, *_ = b.step([1, 1, 0, 0, 0, 0])
    assert np.array_equal(obs_a, obs_b)


def test_reward_config_override():
    env = ApophisEnv(reward_config={"score_scale": 1.0})
    assert env.reward_config["score_scale"] == 1.0
    assert env.reward_config["death_penalty"] == DEFAULT_REWARD_CONFIG["death_penalty"]


def test_rgb_array_frame():
    env = ApophisEnv(render_mode="rgb_array", width=320, height=240)
    env.reset(seed=1)
    frame = env.render()
    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8
    assert frame.any()


def test_random_episode_summary():
    result = run_random_episode(seed=0, max_steps=120)
    assert result["steps"] <= 120
    for key in ("reward", "score", "level", "chapter", "lives"):
        assert key in result
