"""
Plotting script for Apophis training runs.
Generates learning curves per reward config and a side-by-side comparison.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional

from rl.configs.apophis_config import REWARD_CONFIGS

COLORS = {"baseline": "#3498db", "survival": "#2ecc71", "aggressive": "#e74c3c"}


def load_metrics(log_dir: str, reward: str) -> Optional[pd.DataFrame]:
    """Load the MetricsCallback CSV written by train.py for one reward config."""
    name = f"ppo_{reward}_metrics.csv"
    for csv_path in (
        os.path.join(log_dir, "ppo", reward, name),
        os.path.join(log_dir, reward, name),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _curve(ax, df: pd.DataFrame, column: str, window: int, **kwargs):
    values = smooth(df[column].values.astype(float), window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, **kwargs)


def plot_learning_curve(df: pd.DataFrame, reward: str, output_dir: str, window: int = 50):
    """Reward, score, level reached and survival for a single run."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"PPO ({reward}) Learning Curves", fontsize=16, fontweight="bold")

    ax = axes[0, 0]
    _curve(ax, df, "reward", window, color=COLORS.get(reward))
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward vs Timesteps")
    ax.grid(True, alpha=0.3)

    ax = axes[0, 1]
    _curve(ax, df, "score", window, color="orange")
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Final Score")
    ax.set_title("Game Score vs Timesteps")
    ax.grid(True, alpha=0.3)

    # Progress through the run: chapters 1-4 per level
    ax = axes[1, 0]
    progress = df.assign(stage=(df["level"] - 1) * 4 + df["chapter"])
    _curve(ax, progress, "stage", window, color="purple")
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Stage Reached (level x 4 + chapter)")
    ax.set_title("Progression vs Timesteps")
    ax.grid(True, alpha=0.3)

    ax = axes[1, 1]
    _curve(ax, df, "survived", window, color="green")
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Survival Rate")
    ax.set_title("Episodes Ending Without Game Over")
    ax.set_ylim(0, 1.1)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"ppo_{reward}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {reward} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50):
    """Overlay every reward config that has data."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    fig.suptitle("Reward Shaping Comparison", fontsize=16, fontweight="bold")

    for ax, column, label in zip(
        axes,
        ("reward", "score", "length"),
        ("Episode Reward", "Final Score", "Episode Length (ticks)"),
    ):
        for reward, df in data.items():
            if df is not None and len(df) > 0:
                _curve(ax, df, column, window, label=reward, color=COLORS.get(reward))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "reward_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Text summary of the last 100 episodes per reward config."""
    report_lines = [
        "=" * 60,
        "APOPHIS TRAINING SUMMARY",
        "=" * 60,
    ]

    for reward, df in data.items():
        if df is None or len(df) == 0:
            continue
        final = df.tail(100)
        report_lines += [
            f"\n{reward.upper()} Results:",
            "-" * 40,
            f"  Total Episodes: {len(df)}",
            f"  Total Timesteps: {df['timestep'].max():,}",
            f"  Mean Reward (last 100): {final['reward'].mean():.2f} ± {final['reward'].std():.2f}",
            f"  Mean Score (last 100): {final['score'].mean():.0f}",
            f"  Best Score: {df['score'].max()}",
            f"  Highest Level: {df['level'].max()}",
            f"  Survival Rate (last 100): {final['survived'].mean():.2%}",
        ]

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "training_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot Apophis training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument(
        "--rewards",
        nargs="+",
        default=list(REWARD_CONFIGS),
        choices=list(REWARD_CONFIGS),
        help="Reward configs to plot",
    )
    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for reward in args.rewards:
        df = load_metrics(args.log_dir, reward)
        if df is not None:
            print(f"  Loaded {reward}: {len(df)} episodes")
        else:
            print(f"  No data found for {reward}")
        data[reward] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for reward, df in data.items():
        if df is not None:
            plot_learning_curve(df, reward, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
