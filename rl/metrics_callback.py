"""
Custom callback for tracking task-specific metrics during training.
Records: final score, level and chapter reached, lives left, survival.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_levels: List[int] = []
        self.episode_survived: List[float] = []

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "level", "chapter", "lives", "survived"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info on the final step
            if not (done and "episode" in info):
                continue
            self.record_episode(info)

        return True

    def record_episode(self, info: Dict[str, Any]):
        ep_info = info["episode"]
        ep_reward = float(ep_info["r"])
        ep_length = int(ep_info["l"])
        score = info.get("score", 0)
        level = info.get("level", 1)
        chapter = info.get("chapter", 1)
        lives = info.get("lives", 0)
        # Survived if the episode was truncated rather than ended by game over
        survived = 1.0 if lives > 0 and info.get("phase") != "game_over" else 0.0

        self.episode_rewards.append(ep_reward)
        self.episode_lengths.append(ep_length)
        self.episode_scores.append(score)
        self.episode_levels.append(level)
        self.episode_survived.append(survived)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep_reward,
                ep_length,
                score,
                level,
                chapter,
                lives,
                survived,
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_reward = sum(self.episode_rewards[-10:]) / 10
            avg_score = sum(self.episode_scores[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Reward (10 ep): {avg_reward:.2f}, Avg Score: {avg_score:.0f}")

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "max_level": int(np.max(self.episode_levels)),
            "survival_rate": np.mean(self.episode_survived),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs final score and level per episode to TensorBoard.
    """

    def __init__(self, verbose: int = 0):
        super().__init__(verbose)

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/episode_length", info["episode"]["l"])
                self.logger.record("custom/final_score", info.get("score", 0))
                self.logger.record("custom/final_level", info.get("level", 1))

        return True
