"""Simulation constants and the per-run config dictionary.

The module-level constants are the defaults the simulation was tuned with.
A run reads them through a config dict so smaller grids and agent counts
can be used for tests and quick renders:

    cfg = make_config(width=200, height=200, num_agents=5000)
"""

import math

# --- Grid dimensions ---
WIDTH = 800
HEIGHT = 800

# --- Number of agents ---
NUM_AGENTS = 150_000

# --- Movement ---
MOVE_SPEED = 0.7

# --- Sensor parameters ---
SENSOR_ANGLE = math.pi / 5  # offset from heading for left/right sensors
SENSOR_DISTANCE = 8.0  # how far ahead the sensors look
TURN_SPEED = 0.4  # how sharply agents turn toward a stronger sensor

# --- Randomness ---
RANDOM_STRENGTH = 0.1  # steering jitter is uniform in +/- RANDOM_STRENGTH / 2
JITTER_STEP = 0.1  # extra per-step turn of -1, 0 or +1 times this

# --- Trail parameters ---
DEPOSIT_VALUE = 0.9  # set, not added
DECAY_RATE = 0.98

# --- Spawn ---
SPAWN_RADIUS = 5.0

DEFAULT_CONFIG = {
    "width": WIDTH,
    "height": HEIGHT,
    "num_agents": NUM_AGENTS,
    "move_speed": MOVE_SPEED,
    "sensor_angle": SENSOR_ANGLE,
    "sensor_distance": SENSOR_DISTANCE,
    "turn_speed": TURN_SPEED,
    "random_strength": RANDOM_STRENGTH,
    "jitter_step": JITTER_STEP,
    "deposit": DEPOSIT_VALUE,
    "decay": DECAY_RATE,
    "spawn_radius": SPAWN_RADIUS,
    "wrap_headings": False,
}


def make_config(**overrides):
    """Return a copy of DEFAULT_CONFIG with ``overrides`` applied.

    Raises KeyError for an unknown key and ValueError for values the
    simulation cannot run with.
    """
    unknown = set(overrides) - set(DEFAULT_CONFIG)
    if unknown:
        raise KeyError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    cfg = dict(DEFAULT_CONFIG)
    cfg.update(overrides)

    for key in ("width", "height", "num_agents"):
        if int(cfg[key]) != cfg[key] or cfg[key] < 1:
            raise ValueError(f"{key} must be a positive integer, got {cfg[key]!r}")
        cfg[key] = int(cfg[key])
    if not 0.0 < cfg["decay"] <= 1.0:
        raise ValueError(f"decay must be in (0, 1], got {cfg['decay']!r}")

    return cfg
