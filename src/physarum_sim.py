"""The Simulation owns everything one run needs: config, trail grid, agents
and the random generator. Nothing lives in module globals, so several
simulations (e.g. in tests) can coexist.

A frame is always: agents step -> (optional) display image -> one decay.
"""

import numpy as np

from physarum_agents import AgentSwarm
from physarum_config import make_config
from physarum_field import create_field, decay, to_rgba

POLICIES = ("snapshot", "sequential")


class Simulation:
    def __init__(self, config=None, seed=None, policy="snapshot", rng=None):
        if policy not in POLICIES:
            raise ValueError(
                f"Unknown policy '{policy}'. Choose from: {', '.join(POLICIES)}"
            )
        self.config = config if config is not None else make_config()
        self.policy = policy
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid = create_field(self.config["width"], self.config["height"])
        self.swarm = AgentSwarm.in_circle(self.config)
        self.tick = 0

    @property
    def intensity(self):
        """Read-only (HEIGHT, WIDTH) view of the trail grid."""
        view = self.grid.view()
        view.flags.writeable = False
        return view

    def step(self, render=False):
        """Advance one frame.

        With ``render`` the RGBA image of the freshly deposited trail is
        returned; it is taken before the decay, like the frame a window
        would show.
        """
        if self.policy == "sequential":
            self.swarm.step_sequential(self.grid, self.rng)
        else:
            self.swarm.step(self.grid, self.rng)

        image = to_rgba(self.grid) if render else None
        decay(self.grid, self.config["decay"])
        self.tick += 1
        return image

    def run(self, steps, progress=None):
        """Run ``steps`` frames headless, calling progress(step) after each."""
        for step in range(steps):
            self.step()
            if progress is not None:
                progress(step)
