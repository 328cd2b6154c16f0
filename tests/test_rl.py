import csv

import pytest

from game.apophis import ApophisEnv
from rl.configs.apophis_config import ENV_CONFIG, REWARD_CONFIGS, reward_params


@pytest.mark.parametrize("name", sorted(REWARD_CONFIGS))
def test_reward_configs_fit_the_env(name):
    params = reward_params(name)
    assert "name" not in params and "description" not in params
    env = ApophisEnv(reward_config=params, **ENV_CONFIG)
    env.reset(seed=0)
    _, reward, *_ = env.step([0, 0, 0, 0, 0, 0])
    assert isinstance(reward, float)


def test_metrics_callback_writes_csv(tmp_path):
    pytest.importorskip("stable_baselines3")
    from rl.metrics_callback import MetricsCallback

    cb = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
    cb._on_training_start()
    cb.record_episode({
        "episode": {"r": 12.5, "l": 300},
        "score": 450, "level": 1, "chapter": 2, "lives": 3, "phase": "normal",
    })
    cb.record_episode({
        "episode": {"r": -4.0, "l": 120},
        "score": 50, "level": 1, "chapter": 1, "lives": 0, "phase": "game_over",
    })
    cb._on_training_end()

    with open(tmp_path / "ppo_metrics.csv") as f:
        rows = list(csv.DictReader(f))
    assert [r["score"] for r in rows] == ["450", "50"]
    assert [float(r["survived"]) for r in rows] == [1.0, 0.0]

    summary = cb.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["max_level"] == 1
    assert summary["survival_rate"] == pytest.approx(0.5)


def test_plot_results_reads_training_layout(tmp_path):
    pytest.importorskip("pandas")
    pytest.importorskip("matplotlib")
    from rl import plot_results

    run_dir = tmp_path / "ppo" / "survival"
    run_dir.mkdir(parents=True)
    with open(run_dir / "ppo_survival_metrics.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["timestep", "episode", "reward", "length",
                         "score", "level", "chapter", "lives", "survived"])
        for i in range(20):
            writer.writerow([i * 100, i + 1, float(i), 100, i * 50, 1 + i // 10, 2, 1, i % 2])

    df = plot_results.load_metrics(str(tmp_path), "survival")
    assert len(df) == 20
    assert plot_results.load_metrics(str(tmp_path), "baseline") is None
    assert len(plot_results.smooth(df["reward"].values, 5)) == 16

    report = plot_results.generate_summary_report({"survival": df}, str(tmp_path / "out"))
    with open(report) as f:
        text = f.read()
    assert "SURVIVAL" in text
    assert "Highest Level: 2" in text
