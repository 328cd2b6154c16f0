"""
Gameplay constants for the Apophis simulation core.

All timers are expressed in fixed ticks (60 per simulated second).
"""

# Fixed timestep
TARGET_FPS = 60
TICK_SECONDS = 1.0 / TARGET_FPS
MAX_CATCHUP_TICKS = 5

# Perspective projection (chapters 2-3)
FOV_SCALE = 0.75
HORIZON_Y_FRAC = 0.3
DEPTH_Y_FRAC = 0.5
DEPTH_CULL = 1.2
ENEMY_WORLD_LANES = (-350, -220, -120, 0, 120, 220, 350)
BLOCKDOT_LANE_LIMIT = 450

# Progression
CHAPTER_DURATION = 1200
TRENCH_NARROW_TICKS = 600
TRENCH_FULL_WIDTH = 1800
TRENCH_MIN_WIDTH = 900
CHAPTER_NAMES = ("OPEN SPACE", "PLANETSIDE", "TRENCH CANYON", "BOSS SECTOR")
INITIAL_GAME_SPEED = 0.08
GAME_SPEED_STEP = 0.00001

# Player
MAX_HEALTH = 3
STARTING_LIVES = 3
SHIELD_MAX = 100.0
SHIELD_DRAIN_RATE = 0.5
SHIELD_REGEN_RATE = 0.05
SHIP_MARGIN = 80
SHIP_Y_FRAC = 0.8
STEER_RATE = 0.15
STEER_DAMPING = 0.88
STEER_SPEED = 12
FIRE_DELAY = 6

# Missiles
MAX_MISSILE_AMMO = 10
STARTING_MISSILE_AMMO = 3
MISSILE_COOLDOWN_FRAMES = 30
MISSILE_PROGRESS_STEP = 0.025
MISSILE_IMPACT_RADIUS = 40
MISSILE_SPLASH_DAMAGE = 8
MISSILE_ARC_OFFSET = 150
MISSILE_ARC_LIFT = 100
MISSILE_TRAIL_LENGTH = 8
MISSILE_BOUNCED_TRAIL_LENGTH = 12
MISSILE_BOUNCE_LIFE = 120
MISSILE_BOUNCE_SPEED = 12
MISSILE_GRAVITY = 0.12
MISSILE_LOST_DRIFT = 15

# Boomba
MAX_BOOMBA_QUEUE = 40
BOOMBA_CHARGE_MAX = 300
BOOMBA_CHARGE_RATE = 2
AREA_BOOMBA_RADIUS = 400
SCREEN_BOOMBA_MINIBOSS_DAMAGE = 15
SCREEN_BOOMBA_BOSS_DAMAGE = 25
MINIBOSS_FIRE_RATE_CAP = 60

# Invulnerability / phase timers
INVULN_PICKUP_DURATION = 600
INVULN_RESPAWN_DURATION = 180
RESPAWN_TIMER_DURATION = 120
DEATH_TIMER_DURATION = 180
BOSS_DEFEATED_TIMER = 180
LEVEL_TRANSITION_TIMER = 180
CHAPTER_TRANSITION_TIMER = 120
RESPAWN_SAFE_RADIUS = 200
RESPAWN_ENEMY_SAFE_RADIUS = 150

# Boss firing
BOSS_BULLET_SEQUENCE = (6, 7, 2)
BOSS_FIRE_INTERVAL = 5
BOSS_COOLDOWN_SHORT = 30
BOSS_COOLDOWN_LONG = 90
BOSS_DEATH_BURSTS = 15
BOSS_DEATH_BURST_SPACING = 0.05  # seconds, wall clock

# Collision thresholds
HIT_RADIUS_DROPPING = 50
HIT_RADIUS_LANE_BASE = 30
HIT_RADIUS_LANE_DEPTH = 30
HIT_RADIUS_BOSS = 70
DEFLECT_RADIUS = 35
DEFLECT_PUSH = 40
PLAYER_PROJECTILE_RADIUS = 45
PLAYER_ENEMY_RADIUS = 60
PICKUP_RADIUS = 60
TRENCH_WALL_WIDTH = 120
SINGLE_BLOCK_WIDTH = 50
TRENCH_HIT_DEPTH = 0.82
ENEMY_HIT_DEPTH = 0.85
PICKUP_DEPTH = 0.8

# Scores
SCORE_ENEMY = 50
SCORE_BLOCKDOT = 200
SCORE_MINIBOSS = 1000
SCORE_BOSS = 5000
SCORE_OBSTACLE = 100
SCORE_DEFLECT_BULLET = 5

# Weapons
WEAPON_DEFAULT = 0
WEAPON_SINE_WAVE = 1
WEAPON_SCATTER = 2
WEAPON_LASER = 3
WEAPON_NAMES = ("DEFAULT", "SINE WAVE", "SCATTER", "LASER")
WEAPON_ICONS = ("D", "S", "C", "L")

# Mini-boss profiles, indexed by level - 2 and saturating at the last entry
MINIBOSS_CONFIGS = (
    {"fire_rate": 20, "chaos_rate": 0.03, "defense": 0.05,
     "color1": (255, 0, 0), "color2": (255, 255, 0), "bullet_shape": "line"},
    {"fire_rate": 15, "chaos_rate": 0.08, "defense": 0.08,
     "color1": (255, 0, 0), "color2": (0, 136, 255), "bullet_shape": "circle"},
    {"fire_rate": 25, "chaos_rate": 0.02, "defense": 0.12,
     "color1": (255, 0, 0), "color2": (0, 255, 0), "bullet_shape": "triangle"},
)
MINIBOSS_SPAWN_CHANCE = 0.003
MINIBOSS_MIN_LEVEL = 2

# Particle colours (RGB)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
RED = (255, 0, 0)
ORANGE = (255, 102, 0)
GREEN = (0, 255, 0)

EXPLOSION_COLORS = (CYAN, MAGENTA, WHITE, YELLOW)
DAMAGE_EXPLOSION_COLORS = (RED, ORANGE, YELLOW, MAGENTA, CYAN, WHITE)
MEGA_EXPLOSION_COLORS = (
    RED, ORANGE, YELLOW, MAGENTA, CYAN, WHITE, GREEN,
    (255, 0, 102), (102, 0, 255), (255, 51, 0),
)
MISSILE_EXPLOSION_COLORS = (ORANGE, (255, 51, 0), (255, 170, 0), RED, WHITE, YELLOW)
SPARK_COLORS = (YELLOW, WHITE, CYAN)
PARTICLE_DAMPING = 0.98
