"""Noise sources and the adapters that reshape them."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from opensimplex import OpenSimplex


class NoiseSource(Protocol):
    """Continuous scalar field over the real plane."""

    def eval2(self, x: float, y: float) -> float:
        ...

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Sample every (xs[i], ys[j]) pair into an array indexed [i, j]."""
        ...


class SimplexSource:
    """Seeded OpenSimplex noise in approximately [-1, 1]."""

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._simplex = OpenSimplex(seed=self.seed)

    def eval2(self, x: float, y: float) -> float:
        return float(self._simplex.noise2(float(x), float(y)))

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        # noise2array returns rows along y
        return np.asarray(self._simplex.noise2array(xs, ys), dtype=np.float64).T


class Scale:
    """Resample `source` at a different spatial frequency."""

    def __init__(self, source: NoiseSource, scale: float) -> None:
        self.source = source
        self.scale = float(scale)

    def eval2(self, x: float, y: float) -> float:
        return self.source.eval2(x * self.scale, y * self.scale)

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return self.source.eval_grid(
            np.asarray(xs, dtype=np.float64) * self.scale,
            np.asarray(ys, dtype=np.float64) * self.scale,
        )


class Tesselation:
    """Make `source` tile seamlessly over one `width` x `height` period.

    The four lattice translations of the query point are blended bilinearly,
    so the value at x=0 matches the value at x=width (and likewise for y).
    """

    def __init__(self, source: NoiseSource, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("tesselation period must be positive")
        self.source = source
        self.width = float(width)
        self.height = float(height)

    def eval2(self, x: float, y: float) -> float:
        tx = x / self.width
        ty = y / self.height
        a = self.source.eval2(x, y)
        b = self.source.eval2(x - self.width, y)
        c = self.source.eval2(x, y - self.height)
        d = self.source.eval2(x - self.width, y - self.height)
        ab = a * (1.0 - tx) + b * tx
        cd = c * (1.0 - tx) + d * tx
        return ab * (1.0 - ty) + cd * ty

    def eval_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        tx = (xs / self.width)[:, None]
        ty = (ys / self.height)[None, :]

        a = self.source.eval_grid(xs, ys)
        b = self.source.eval_grid(xs - self.width, ys)
        c = self.source.eval_grid(xs, ys - self.height)
        d = self.source.eval_grid(xs - self.width, ys - self.height)

        ab = a * (1.0 - tx) + b * tx
        cd = c * (1.0 - tx) + d * tx
        return ab * (1.0 - ty) + cd * ty


def octave_source(seed: int, frequency: float, width: float, height: float) -> Tesselation:
    """Build the tileable noise source for one terrain octave."""

    return Tesselation(Scale(SimplexSource(seed), frequency), width, height)
