"""
Training configuration for the Apophis environment
Reward shaping variants plus PPO hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "width": 800,
    "height": 600,
    "max_steps": 7200,  # two minutes of simulated time at 60 ticks/s
    "k_enemies": 5,
    "k_bullets": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (score driven, moderate penalties)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score gain with moderate damage and death penalties",
    "score_scale": 0.01,     # 50-point enemy kill -> +0.5
    "damage_penalty": 1.0,   # Per health point lost
    "life_penalty": 3.0,     # Losing a life
    "death_penalty": 5.0,    # Game over
    "time_penalty": 0.0,
}

# Reward Config 2: SURVIVAL_FOCUS (stay alive, dodge boss bursts)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - higher damage/death penalties, lower score reward",
    "score_scale": 0.005,
    "damage_penalty": 3.0,
    "life_penalty": 6.0,
    "death_penalty": 10.0,
    "time_penalty": -0.001,  # Negative penalty = small reward per tick alive
}

# Reward Config 3: AGGRESSIVE (chase kills and boss damage)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize score - higher score reward, lower penalties",
    "score_scale": 0.02,
    "damage_penalty": 0.5,
    "life_penalty": 1.5,
    "death_penalty": 3.0,
    "time_penalty": 0.001,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}


def reward_params(name: str) -> dict:
    """Reward config without its descriptive keys, ready for ApophisEnv(reward_config=...)"""
    cfg = REWARD_CONFIGS[name]
    return {k: v for k, v in cfg.items() if k not in ("name", "description")}


# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,  # long horizon: 60 ticks per second
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 50_000,
    "eval_freq": 20_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
