"""Agent swarm: N point agents stored as three float32 arrays (x, y, angle).

Each step an agent probes the trail at three sensors (left, front, right),
turns toward the strongest reading, moves forward, bounces off the grid
edges, picks up a little extra random turn and finally marks its cell on
the trail field.

Two update orders are available:

    step()             all agents sense the field as it was before this
                       frame's deposits, then everybody moves and deposits
                       (vectorized, order-independent)
    step_sequential()  agents are updated one at a time in index order and
                       later agents see the deposits of earlier ones
"""

import numpy as np

from physarum_field import cell_index, deposit, sample


# --- Spawn ---


def place_in_circle(n, center, radius):
    """Place ``n`` agents on a circle around ``center``, all facing inward.

    Agent k sits at angle 2*pi*k/n. Its heading is the direction from its
    position back to the center. Same arguments, same result.
    """
    cx, cy = np.float32(center[0]), np.float32(center[1])
    angles = np.arange(n, dtype=np.float32) / np.float32(n) * np.float32(2 * np.pi)
    x = cx + np.cos(angles) * np.float32(radius)
    y = cy + np.sin(angles) * np.float32(radius)
    angle = np.arctan2(cy - y, cx - x).astype(np.float32)
    return x, y, angle


# --- Simulation functions ---


def steer(left, forward, right, r, turn_speed):
    """Return the heading change for the given sensor readings.

    forward strictly strongest  -> r                  (straight, jitter only)
    left > right                -> -(turn_speed + r)  (turn left)
    right > left                -> +(turn_speed + r)  (turn right)
    all equal                   -> r
    """
    forward_is_best = (forward > left) & (forward > right)
    turn = turn_speed + r
    return np.where(
        forward_is_best,
        r,
        np.where(left > right, -turn, np.where(right > left, turn, r)),
    )


def move(x, y, angle, speed):
    """Advance each agent one step along its heading (in place)."""
    x += np.float32(speed) * np.cos(angle)
    y += np.float32(speed) * np.sin(angle)


def bounce(x, y, angle, width, height):
    """Clamp agents into [0, width] x [0, height] and turn them around.

    An agent sitting on or beyond any edge is clamped onto it and gets pi
    added to its heading once, even when it hits a corner. Returns the mask
    of agents that bounced.
    """
    hit = (x >= width) | (x <= 0) | (y >= height) | (y <= 0)
    np.clip(x, 0, width, out=x)
    np.clip(y, 0, height, out=y)
    angle[hit] += np.float32(np.pi)
    return hit


def wrap_headings(angle):
    """Wrap headings into [-pi, pi] in place (float32 rounding can land on +pi)."""
    pi = np.float32(np.pi)
    angle[:] = np.mod(angle + pi, 2 * pi) - pi


class AgentSwarm:
    def __init__(self, x, y, angle, config):
        self.x = np.asarray(x, dtype=np.float32)
        self.y = np.asarray(y, dtype=np.float32)
        self.angle = np.asarray(angle, dtype=np.float32)
        self.config = config

    @classmethod
    def in_circle(cls, config):
        """Seed config["num_agents"] agents on a small circle at the grid center."""
        center = (config["width"] / 2, config["height"] / 2)
        x, y, angle = place_in_circle(
            config["num_agents"], center, config["spawn_radius"]
        )
        return cls(x, y, angle, config)

    def __len__(self):
        return self.x.size

    def sense(self, grid, agents=slice(None)):
        """Sample the left, front and right sensors of the selected agents."""
        cfg = self.config
        x = self.x[agents]
        y = self.y[agents]
        heading = self.angle[agents]

        def probe(angle_offset):
            angles = heading + np.float32(angle_offset)
            sx = x + np.cos(angles) * np.float32(cfg["sensor_distance"])
            sy = y + np.sin(angles) * np.float32(cfg["sensor_distance"])
            return sample(grid, sx, sy)

        left = probe(-cfg["sensor_angle"])
        forward = probe(0.0)
        right = probe(cfg["sensor_angle"])
        return left, forward, right

    def step(self, grid, rng):
        """Update every agent once, all sensing the pre-deposit field."""
        self._update(grid, rng, slice(None))

    def step_sequential(self, grid, rng):
        """Update agents one by one; deposits are visible to later agents."""
        for k in range(len(self)):
            self._update(grid, rng, slice(k, k + 1))

    def _update(self, grid, rng, agents):
        cfg = self.config
        height, width = grid.shape
        x = self.x[agents]
        y = self.y[agents]
        angle = self.angle[agents]
        n = x.size

        left, forward, right = self.sense(grid, agents)

        r = (rng.random(n, dtype=np.float32) - np.float32(0.5)) * np.float32(
            cfg["random_strength"]
        )
        angle += steer(left, forward, right, r, np.float32(cfg["turn_speed"]))

        move(x, y, angle, cfg["move_speed"])
        bounce(x, y, angle, width, height)

        angle += rng.integers(-1, 2, n).astype(np.float32) * np.float32(
            cfg["jitter_step"]
        )

        ix, iy = cell_index(x, y, width, height)
        deposit(grid, ix, iy, cfg["deposit"])

        if cfg["wrap_headings"]:
            wrap_headings(angle)
