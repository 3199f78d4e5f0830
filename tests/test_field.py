import numpy as np

from physarum_field import (
    cell_index,
    composite_over_black,
    create_field,
    decay,
    deposit,
    sample,
    to_display_buffer,
    to_rgba,
)


def test_create_field_is_zeroed_height_by_width():
    grid = create_field(80, 60)
    assert grid.shape == (60, 80)
    assert grid.dtype == np.float32
    assert not grid.any()


def test_cell_index_truncates_and_clamps():
    ix, iy = cell_index(-0.5, 900.2, 800, 800)
    assert (ix, iy) == (0, 799)
    ix, iy = cell_index(799.99, 0.3, 800, 800)
    assert (ix, iy) == (799, 0)
    ix, iy = cell_index(800.0, 800.0, 800, 800)
    assert (ix, iy) == (799, 799)


def test_cell_index_is_idempotent_on_valid_indices():
    ix = np.array([0, 1, 400, 799])
    iy = np.array([799, 0, 3, 400])
    cx, cy = cell_index(ix, iy, 800, 800)
    assert np.array_equal(cx, ix)
    assert np.array_equal(cy, iy)
    again_x, again_y = cell_index(cx, cy, 800, 800)
    assert np.array_equal(again_x, cx)
    assert np.array_equal(again_y, cy)


def test_deposit_sets_instead_of_adding():
    grid = create_field(10, 10)
    deposit(grid, 3, 4)
    deposit(grid, 3, 4)
    assert grid[4, 3] == np.float32(0.9)
    assert grid.sum() == np.float32(0.9)


def test_deposit_with_repeated_cells():
    grid = create_field(10, 10)
    ix = np.array([1, 1, 1, 5])
    iy = np.array([2, 2, 2, 6])
    deposit(grid, ix, iy, 0.9)
    assert grid[2, 1] == np.float32(0.9)
    assert grid[6, 5] == np.float32(0.9)
    assert np.count_nonzero(grid) == 2


def test_sample_reads_single_cell_without_interpolation():
    grid = create_field(10, 10)
    grid[3, 5] = 0.5
    assert sample(grid, 5.7, 3.2) == np.float32(0.5)
    assert sample(grid, 6.0, 3.2) == 0.0
    # out of range positions read the nearest edge cell
    grid[3, 0] = 0.25
    assert sample(grid, -4.0, 3.9) == np.float32(0.25)


def test_decay_multiplies_every_cell_once():
    rng = np.random.default_rng(0)
    grid = rng.random((20, 30), dtype=np.float32)
    expected = grid * np.float32(0.98)
    decay(grid)
    assert np.array_equal(grid, expected)


def test_to_rgba_channels():
    grid = np.array([[0.0, 0.9, 1.0]], dtype=np.float32)
    rgba = to_rgba(grid)
    assert rgba.shape == (1, 3, 4)
    assert rgba.dtype == np.uint8
    assert rgba[0, 0].tolist() == [0, 0, 0, 0]
    assert rgba[0, 1].tolist() == [199, 206, 241, 229]
    assert rgba[0, 2].tolist() == [214, 255, 255, 255]


def test_to_display_buffer_packs_rgba():
    grid = np.array([[0.0, 0.9]], dtype=np.float32)
    buf = to_display_buffer(grid)
    assert buf.dtype == np.uint32
    assert buf.shape == (1, 2)
    assert buf[0, 0] == 0
    assert buf[0, 1] == (199 << 24) | (206 << 16) | (241 << 8) | 229


def test_composite_over_black_uses_alpha():
    rgba = np.array([[[200, 100, 50, 255], [200, 100, 50, 0]]], dtype=np.uint8)
    rgb = composite_over_black(rgba)
    assert rgb.shape == (1, 2, 3)
    assert rgb[0, 0].tolist() == [200, 100, 50]
    assert rgb[0, 1].tolist() == [0, 0, 0]
