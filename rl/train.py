"""
Training script for the Apophis environment using Stable-Baselines3 PPO
with reward-shaping variants and per-episode metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.apophis import ApophisEnv
from rl.configs.apophis_config import (
    ENV_CONFIG,
    PPO_CONFIG,
    REWARD_CONFIGS,
    TRAINING_CONFIG,
    reward_params,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             reward: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = ApophisEnv(render_mode=render_mode, reward_config=reward_params(reward), **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
    reward: str = "baseline",
):
    """Train a PPO agent on the Apophis environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    save_dir = os.path.join(save_dir, reward)
    log_dir = os.path.join(log_dir, reward)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Reward config: {reward} - {REWARD_CONFIGS[reward]['description']}")
    print(f"Using {n_envs} parallel environments")
    print(f"{'='*60}\n")

    # Create vectorized environments
    env = DummyVecEnv([make_env(seed=i, reward=reward) for i in range(n_envs)])

    # Normalize observations and rewards
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    # Create evaluation environment
    eval_env = DummyVecEnv([make_env(seed=100, reward=reward)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    # Callbacks
    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"] // n_envs,
        save_path=save_dir,
        name_prefix="ppo_apophis",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 20000) // n_envs,
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name=f"ppo_{reward}",
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    # Save final model
    final_path = os.path.join(save_dir, "ppo_apophis_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"PPO Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.0f}, Max Level: {summary['max_level']}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train a PPO agent on Apophis")
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments (default: 4)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping config (default: baseline)",
    )

    args = parser.parse_args()
    train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward=args.reward)


if __name__ == "__main__":
    main()
