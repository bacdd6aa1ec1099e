from __future__ import annotations

import math

import numpy as np
import pytest

from bottle.noise import Scale, SimplexSource, Tesselation, octave_source


class _Ramp:
    """Aperiodic test source: a plane with a ripple."""

    def eval2(self, x: float, y: float) -> float:
        return 0.01 * x - 0.02 * y + math.sin(0.3 * x + 0.1 * y)

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return 0.01 * xs[:, None] - 0.02 * ys[None, :] + np.sin(0.3 * xs[:, None] + 0.1 * ys[None, :])


def test_scale_resamples_inner_source() -> None:
    inner = _Ramp()
    scaled = Scale(inner, 0.5)

    assert scaled.eval2(10.0, 4.0) == inner.eval2(5.0, 2.0)


def test_tesselation_matches_across_vertical_seam() -> None:
    tile = Tesselation(_Ramp(), 40, 30)

    for y in (0.0, 7.5, 15.0, 29.0):
        assert tile.eval2(0.0, y) == pytest.approx(tile.eval2(40.0, y), abs=1e-9)


def test_tesselation_matches_across_horizontal_seam() -> None:
    tile = Tesselation(_Ramp(), 40, 30)

    for x in (0.0, 11.0, 20.0, 39.0):
        assert tile.eval2(x, 0.0) == pytest.approx(tile.eval2(x, 30.0), abs=1e-9)


def test_tesselation_is_continuous_near_every_edge() -> None:
    width, height = 64, 48
    tile = octave_source(3, 1.0 / 10, width, height)
    eps = 1e-4

    for y in np.linspace(0.0, height - 1, 7):
        assert abs(tile.eval2(width - eps, y) - tile.eval2(0.0, y)) < 1e-2
    for x in np.linspace(0.0, width - 1, 7):
        assert abs(tile.eval2(x, height - eps) - tile.eval2(x, 0.0)) < 1e-2
    assert abs(tile.eval2(width - eps, height - eps) - tile.eval2(0.0, 0.0)) < 1e-2


def test_tesselation_uses_its_own_height() -> None:
    # A non-square period must still wrap in y at its own height.
    tile = Tesselation(_Ramp(), 10, 70)

    assert tile.eval2(3.0, 0.0) == pytest.approx(tile.eval2(3.0, 70.0), abs=1e-9)


def test_eval_grid_matches_pointwise_eval() -> None:
    tile = octave_source(5, 1.0 / 6, 16, 12)
    xs = np.arange(16, dtype=np.float64)
    ys = np.arange(12, dtype=np.float64)

    grid = tile.eval_grid(xs, ys)

    assert grid.shape == (16, 12)
    for x, y in ((0, 0), (3, 7), (15, 11), (8, 2)):
        assert grid[x, y] == pytest.approx(tile.eval2(float(x), float(y)), abs=1e-9)


def test_simplex_source_is_seeded() -> None:
    a = SimplexSource(4)
    b = SimplexSource(4)
    c = SimplexSource(5)

    assert a.eval2(1.7, 2.3) == b.eval2(1.7, 2.3)
    assert a.eval2(1.7, 2.3) != c.eval2(1.7, 2.3)


def test_tesselation_rejects_empty_period() -> None:
    with pytest.raises(ValueError):
        Tesselation(_Ramp(), 0, 10)
