"""
ApophisEnv - Gymnasium wrapper around the Apophis simulation core
-----------------------------------------------------------------
- One env step is one fixed simulation tick
- MultiDiscrete action space: [steer(3), fire(2), shield(2), missile(2), boomba(2), weapon(3)]
- Vector observation: ship state + boss state + top-K nearest enemies + top-M nearest hostile bullets
- Reward: score gained, minus penalties for damage and lost lives

Quick test:
    python -m game.apophis.env
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .constants import (
    BOOMBA_CHARGE_MAX,
    MAX_BOOMBA_QUEUE,
    MAX_HEALTH,
    MAX_MISSILE_AMMO,
    SHIELD_MAX,
)
from .input import InputState
from .simulation import Simulation
from .utils import clamp, seed_everything

DEFAULT_REWARD_CONFIG = {
    "score_scale": 0.01,
    "damage_penalty": 1.0,
    "life_penalty": 3.0,
    "death_penalty": 5.0,
    "time_penalty": 0.0,
}

# Lives are open-ended; observation saturates here
LIVES_NORM = 9


class ApophisEnv(gym.Env):
    """Apophis arcade shooter as an RL environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        max_steps: int = 7200,  # two minutes at 60 ticks/s
        k_enemies: int = 5,
        k_bullets: int = 5,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.width = width
        self.height = height
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.k_bullets = k_bullets
        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)

        # steer: 0 none, 1 left, 2 right
        # fire / shield / missile / boomba: 0/1
        # weapon: 0 keep, 1 next, 2 previous
        self.action_space = spaces.MultiDiscrete([3, 2, 2, 2, 2, 3])

        # Ship: x, angle, health, lives, shield, invuln, ammo, boombas, charge, weapon(1) + chapter(1)
        # Boss: present, dx, dy, hp
        # Each enemy: dx, dy, blockdot
        # Each hostile bullet: dx, dy
        obs_dim = 11 + 4 + self.k_enemies * 3 + self.k_bullets * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.sim: Simulation = None  # type: ignore
        self._step_count = 0
        self._window = None
        self._last_score = 0
        self._last_health = MAX_HEALTH
        self._last_lives = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))

        if self.sim is None:
            self.sim = Simulation(self.width, self.height, seed=seed)
        else:
            self.sim.reset(seed)

        self._step_count = 0
        ship = self.sim.world.ship
        self._last_score = 0
        self._last_health = ship.health
        self._last_lives = ship.lives
        return self._get_obs(), self._get_info()

    def step(self, action):
        inp = self.action_to_input(action)
        self.sim.update(inp)
        # No render loop when training headless
        self.sim.world.delayed.drain()
        self._step_count += 1

        world = self.sim.world
        reward = self._compute_reward()
        terminated = world.game_over
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    @staticmethod
    def action_to_input(action) -> InputState:
        steer, fire, shield, missile, boomba, weapon = (int(a) for a in action)
        axis = {0: 0.0, 1: -1.0, 2: 1.0}[steer]
        return InputState(
            movement_axis=axis,
            firing=bool(fire),
            shielding=bool(shield),
            boomba_held=bool(boomba),
            missile_requested=bool(missile),
            weapon_next=weapon == 1,
            weapon_prev=weapon == 2,
        )

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        world = self.sim.world
        ship = world.ship
        w, h = world.width, world.height

        obs_parts: List[float] = [
            ship.x / w * 2 - 1,
            clamp(ship.angle, -1, 1),
            ship.health / MAX_HEALTH * 2 - 1,
            clamp(ship.lives / LIVES_NORM, 0, 1) * 2 - 1,
            ship.shield_level / SHIELD_MAX * 2 - 1,
            1.0 if ship.invulnerability_timer > 0 else -1.0,
            ship.missile_ammo / MAX_MISSILE_AMMO * 2 - 1,
            len(ship.boomba_queue) / MAX_BOOMBA_QUEUE * 2 - 1,
            ship.boomba_charge / BOOMBA_CHARGE_MAX * 2 - 1,
            ship.weapon / 3 * 2 - 1,
            (world.chapter - 1) / 3 * 2 - 1,
        ]

        if world.harassers:
            boss = world.harassers[0]
            obs_parts += [
                1.0,
                clamp((boss.x - ship.x) / w, -1, 1),
                clamp((boss.y - ship.y) / h, -1, 1),
                boss.hp / max(1, boss.max_hp) * 2 - 1,
            ]
        elif world.mini_bosses:
            mb = world.mini_bosses[0]
            obs_parts += [
                0.0,
                clamp((mb.x - ship.x) / w, -1, 1),
                clamp((mb.y - ship.y) / h, -1, 1),
                mb.hp / max(1, mb.max_hp) * 2 - 1,
            ]
        else:
            obs_parts += [-1.0, 0.0, 0.0, -1.0]

        # Enemies: top-K nearest in screen space
        enemies = []
        for e in world.enemies:
            ex, ey = world.screen_pos(e.motion)
            enemies.append(((ex - ship.x) ** 2 + (ey - ship.y) ** 2, ex, ey, e.is_blockdot))
        enemies.sort(key=lambda t: t[0])
        for i in range(self.k_enemies):
            if i < len(enemies):
                _, ex, ey, blockdot = enemies[i]
                obs_parts += [
                    clamp((ex - ship.x) / w, -1, 1),
                    clamp((ey - ship.y) / h, -1, 1),
                    1.0 if blockdot else -1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Hostile bullets: top-K nearest
        hostile = [(b.x, b.y) for b in world.boss_bullets]
        hostile += [(b.x, b.y) for b in world.mini_boss_bullets]
        hostile.sort(key=lambda p: (p[0] - ship.x) ** 2 + (p[1] - ship.y) ** 2)
        for i in range(self.k_bullets):
            if i < len(hostile):
                bx, by = hostile[i]
                obs_parts += [clamp((bx - ship.x) / w, -1, 1), clamp((by - ship.y) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _compute_reward(self) -> float:
        cfg = self.reward_config
        world = self.sim.world
        ship = world.ship

        reward = (world.score - self._last_score) * cfg["score_scale"]
        if ship.lives < self._last_lives:
            reward -= cfg["life_penalty"]
        elif ship.health < self._last_health:
            reward -= cfg["damage_penalty"] * (self._last_health - ship.health)
        if world.game_over:
            reward -= cfg["death_penalty"]
        reward -= cfg["time_penalty"]

        self._last_score = world.score
        self._last_health = ship.health
        self._last_lives = ship.lives
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.sim.world
        return {
            "score": world.score,
            "level": world.level,
            "chapter": world.chapter,
            "lives": world.ship.lives,
            "health": world.ship.health,
            "num_enemies": len(world.enemies),
            "phase": self.sim.phase.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None
        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            # Deferred so headless training never needs a display
            from .render import ApophisWindow
            self._window = ApophisWindow(self.sim, self.width, self.height, drive=False)
        self._window.draw_frame()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        """Coarse point rendering of the registry, enough for video logging"""
        world = self.sim.world
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        def dot(x: float, y: float, r: int, color: Tuple[int, int, int]):
            x0, x1 = int(max(0, x - r)), int(min(self.width, x + r))
            y0, y1 = int(max(0, y - r)), int(min(self.height, y + r))
            if x0 < x1 and y0 < y1:
                frame[y0:y1, x0:x1] = color

        for p in world.particles:
            dot(p.x, p.y, 1, p.color)
        for e in world.enemies:
            ex, ey = world.screen_pos(e.motion)
            dot(ex, ey, 10, (255, 0, 255) if e.is_blockdot else (255, 60, 60))
        for b in world.bullets:
            dot(b.x, b.y, 2, (0, 255, 255))
        for b in world.boss_bullets:
            dot(b.x, b.y, 3, (255, 255, 0))
        for b in world.mini_boss_bullets:
            dot(b.x, b.y, 3, (255, 136, 0))
        for mb in world.mini_bosses:
            dot(mb.x, mb.y, 25, mb.color1)
        for boss in world.harassers:
            dot(boss.x, boss.y, 40, (255, 0, 102))
        dot(world.ship.x, world.ship.y, 12, (0, 255, 0))
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(seed: Optional[int] = 0, max_steps: int = 3600) -> Dict[str, Any]:
    """Play one episode with uniformly random actions"""
    env = ApophisEnv(max_steps=max_steps)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    steps = 0
    terminated = truncated = False
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total_reward += reward
        steps += 1
    env.close()
    return {"reward": total_reward, "steps": steps, **info}


# ----------------------------
# Quick sanity test
# ----------------------------

if __name__ == "__main__":
    result = run_random_episode(seed=0)
    print(f"Random episode: {result['steps']} steps, score {result['score']}, "
          f"level {result['level']} chapter {result['chapter']}, reward {result['reward']:.2f}")
