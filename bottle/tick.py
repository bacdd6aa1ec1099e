"""Per-tick update: water routing, bathymetry, heat diffusion and insolation."""

from __future__ import annotations

import logging

import numpy as np
from scipy.ndimage import convolve

from bottle.config import PhysicsConfig
from bottle.world import WaterShed, World

logger = logging.getLogger(__name__)

# Neighbor priority for drainage ties: the first strictly lower neighbor wins.
_NEIGHBORS: tuple[tuple[WaterShed, int, int], ...] = (
    (WaterShed.NORTH, 0, -1),
    (WaterShed.SOUTH, 0, 1),
    (WaterShed.WEST, -1, 0),
    (WaterShed.EAST, 1, 0),
)

_HEAT_STENCIL = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=np.int64)


def _trunc_div(values: np.ndarray, divisor: int) -> np.ndarray:
    """Integer division rounding toward zero."""

    return np.sign(values) * (np.abs(values) // divisor)


def _shifted(field: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Return `out[x, y] = field[x + dx, y + dy]` with toroidal wrap."""

    return np.roll(field, shift=(-dx, -dy), axis=(0, 1))


def toroidal_manhattan(
    x1: int | np.ndarray,
    y1: int | np.ndarray,
    x2: int | np.ndarray,
    y2: int | np.ndarray,
    width: int,
    height: int,
) -> int | np.ndarray:
    """Manhattan distance with each axis wrapped to at most half the grid."""

    dx = np.abs(np.asarray(x2) - np.asarray(x1))
    dx = np.where(dx > width // 2, width - dx, dx)
    dy = np.abs(np.asarray(y2) - np.asarray(y1))
    dy = np.where(dy > height // 2, height - dy, dy)
    d = dx + dy
    if np.ndim(d) == 0:
        return int(d)
    return d


def sub_solar_point(t: int, width: int, height: int) -> tuple[int, int]:
    """Column and row directly under the sun at tick `t`."""

    return width - (t % width), height // 2


def refresh_elevation(next_world: World, prev: World) -> np.ndarray:
    """Phase A: carry terrain and water forward; return prev water elevation."""

    next_world.surface_elevation[...] = prev.surface_elevation
    next_world.water[...] = prev.water
    return prev.surface_elevation + prev.water


def route_water(
    next_world: World,
    prev: World,
    water_elevation: np.ndarray,
    physics: PhysicsConfig,
) -> None:
    """Phase B: move water from every cell toward its lowest neighbor."""

    width, height = prev.shape
    xs, ys = np.indices(prev.shape)

    best = water_elevation.copy()
    shed = np.full(prev.shape, WaterShed.NONE, dtype=np.uint8)
    target_x = xs.copy()
    target_y = ys.copy()
    for direction, dx, dy in _NEIGHBORS:
        neighbor = _shifted(water_elevation, dx, dy)
        lower = neighbor < best
        best = np.where(lower, neighbor, best)
        shed[lower] = direction
        target_x = np.where(lower, (xs + dx) % width, target_x)
        target_y = np.where(lower, (ys + dy) % height, target_y)

    equilibrium = _trunc_div(water_elevation + best, 2)
    delta = np.minimum(water_elevation - equilibrium, prev.water)
    # dampen water flow
    delta = np.where(
        delta > physics.damping_threshold,
        delta // physics.damping_divisor,
        delta,
    )

    next_world.water -= delta
    np.add.at(next_world.water, (target_x, target_y), delta)
    next_world.water_shed[...] = shed
    next_world.water_speed[...] = delta


def recompute_bathymetry(next_world: World) -> dict[str, int]:
    """Phase C: derive water elevation and its extrema on the new grid."""

    np.add(next_world.surface_elevation, next_world.water, out=next_world.water_elevation)
    return {
        "highest_water_elevation": int(next_world.water_elevation.max()),
        "lowest_water_elevation": int(next_world.water_elevation.min()),
        "wettest": int(next_world.water.max()),
        "most_rapid_water": int(next_world.water_speed.max()),
    }


def diffuse_heat(next_world: World, prev: World, t: int, physics: PhysicsConfig) -> dict[str, int]:
    """Phase D: diffuse prior heat, add sunlight, radiate, and record extrema."""

    width, height = prev.shape
    stencil = convolve(prev.surface_heat, _HEAT_STENCIL, mode="wrap")
    diffused = _trunc_div(stencil, 5)

    sx, sy = sub_solar_point(t, width, height)
    xs, ys = np.indices(prev.shape)
    distance = toroidal_manhattan(sx, sy, xs, ys, width, height)
    light = np.maximum(physics.horizon_radius(width) - distance, 0)
    next_world.sun_light[...] = light

    # dissipate heat through radiation
    next_world.surface_heat[...] = _trunc_div(
        (diffused + light) * physics.radiative_numerator,
        physics.radiative_denominator,
    )

    hottest = int(next_world.surface_heat.max())
    equatorial = next_world.surface_heat[:, next_world.equator]
    latitudinal = next_world.surface_heat[:, next_world.latitude]
    return {
        "hottest_surface": hottest,
        "brightest_surface": int(light.max()),
        "equatorial_min_heat": min(hottest, int(equatorial.min())),
        "equatorial_max_heat": max(0, int(equatorial.max())),
        "latitudinal_min_heat": min(hottest, int(latitudinal.min())),
        "latitudinal_max_heat": max(0, int(latitudinal.max())),
    }


def tick(next_world: World, prev: World, t: int, *, physics: PhysicsConfig | None = None) -> None:
    """Advance `prev` by one step into `next_world`.

    `prev` is only read. Every field of `next_world` and its extrema are
    overwritten.
    """

    if next_world is prev:
        raise ValueError("next and prev must be distinct buffers")
    if next_world.shape != prev.shape:
        raise ValueError(f"buffer shape mismatch: {next_world.shape} != {prev.shape}")

    params = physics or PhysicsConfig()

    water_elevation = refresh_elevation(next_world, prev)
    route_water(next_world, prev, water_elevation, params)
    bathymetry = recompute_bathymetry(next_world)
    heat = diffuse_heat(next_world, prev, t, params)

    next_world.extrema = prev.extrema.updated(**bathymetry, **heat)


class Simulation:
    """Owns the two world buffers and alternates their roles each tick."""

    def __init__(self, world: World, *, start: int = 0, physics: PhysicsConfig | None = None) -> None:
        self.physics = physics or PhysicsConfig()
        self.t = int(start)
        self._current = world
        self._spare = World.like(world)

    @property
    def current(self) -> World:
        """Most recently written buffer."""

        return self._current

    def step(self) -> World:
        tick(self._spare, self._current, self.t, physics=self.physics)
        self._current, self._spare = self._spare, self._current
        self.t += 1
        return self._current

    def advance(self, ticks: int) -> World:
        if ticks < 0:
            raise ValueError("ticks must be non-negative")
        for _ in range(ticks):
            self.step()
        logger.debug("advanced %d ticks to t=%d", ticks, self.t)
        return self._current


def run(
    world: World,
    ticks: int,
    *,
    start: int = 0,
    physics: PhysicsConfig | None = None,
) -> tuple[World, int]:
    """Run `ticks` steps from `world`; return the latest world and next tick index.

    `world` becomes one of the two buffers and is overwritten on alternate ticks.
    """

    sim = Simulation(world, start=start, physics=physics)
    latest = sim.advance(ticks)
    return latest, sim.t
