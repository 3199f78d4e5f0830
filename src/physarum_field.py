"""Trail field: a fixed (HEIGHT, WIDTH) grid of float32 intensities.

Cell (ix, iy) lives at grid[iy, ix]. Agents write a constant value into
their cell and the whole grid decays once per frame, so every value stays
in [0, 1].
"""

import numpy as np

from physarum_config import DECAY_RATE, DEPOSIT_VALUE


def create_field(width, height):
    """Create a zero-initialized trail grid of shape (height, width)."""
    return np.zeros((height, width), dtype=np.float32)


def cell_index(x, y, width, height):
    """Truncate positions toward zero and clamp them into the grid.

    Works on scalars and arrays. Already valid indices come back unchanged.
    """
    ix = np.clip(np.trunc(x).astype(np.int64), 0, width - 1)
    iy = np.clip(np.trunc(y).astype(np.int64), 0, height - 1)
    return ix, iy


def deposit(grid, ix, iy, value=DEPOSIT_VALUE):
    """Set the trail at the given cells to ``value``.

    Indices must already be clamped. Many agents landing on the same cell
    all write the same constant, so the result does not depend on order.
    """
    grid[iy, ix] = value


def sample(grid, x, y):
    """Return the trail value of the cell under each (x, y) position."""
    height, width = grid.shape
    ix, iy = cell_index(x, y, width, height)
    return grid[iy, ix]


def decay(grid, rate=DECAY_RATE):
    """Reduce all trail values by ``rate`` (in-place multiplication)."""
    grid *= np.float32(rate)


# --- Display conversion ---


def to_rgba(grid):
    """Map intensity to (HEIGHT, WIDTH, 4) uint8 RGBA channels.

        red   = sin(i) * 255
        green = i^2 * 255
        blue  = sqrt(i) * 255
        alpha = i * 255

    Each channel is truncated to 8 bits.
    """
    i = np.clip(grid, 0.0, 1.0).astype(np.float32)
    channels = [
        np.sin(i) * np.float32(255),
        (i * i) * np.float32(255),
        np.sqrt(i) * np.float32(255),
        i * np.float32(255),
    ]
    return np.stack(channels, axis=-1).astype(np.uint8)


def to_display_buffer(grid):
    """Pack the RGBA channels into one uint32 per cell as R<<24|G<<16|B<<8|A."""
    rgba = to_rgba(grid).astype(np.uint32)
    return (
        (rgba[..., 0] << 24)
        | (rgba[..., 1] << 16)
        | (rgba[..., 2] << 8)
        | rgba[..., 3]
    )


def composite_over_black(rgba):
    """Alpha-blend RGBA pixels over a black background, returning uint8 RGB."""
    alpha = rgba[..., 3:4].astype(np.float32) / np.float32(255)
    rgb = rgba[..., :3].astype(np.float32) * alpha
    return np.clip(rgb, 0, 255).astype(np.uint8)
