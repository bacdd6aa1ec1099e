"""Tileable multi-octave terrain synthesis."""

from __future__ import annotations

import logging

import numpy as np

from bottle.config import WorldConfig
from bottle.noise import octave_source
from bottle.world import Extrema, World

logger = logging.getLogger(__name__)


def elevation_field(config: WorldConfig) -> np.ndarray:
    """Sum the configured octaves into a float field indexed [x, y]."""

    xs = np.arange(config.width, dtype=np.float64)
    ys = np.arange(config.height, dtype=np.float64)
    field = np.zeros((config.width, config.height), dtype=np.float64)
    for octave in config.octaves:
        source = octave_source(octave.seed, octave.frequency, config.width, config.height)
        field += octave.amplitude * source.eval_grid(xs, ys)
    return field


def synthesize_into(world: World, config: WorldConfig | None = None) -> None:
    """Fill a caller-owned buffer with fresh terrain and an even water layer."""

    cfg = config or WorldConfig()
    if world.shape != (cfg.width, cfg.height):
        raise ValueError(f"world shape {world.shape} does not match config {(cfg.width, cfg.height)}")

    # int64 cast truncates toward zero
    elevation = elevation_field(cfg).astype(np.int64)

    world.surface_elevation[...] = elevation
    world.water[...] = cfg.water_per_cell
    np.add(world.surface_elevation, world.water, out=world.water_elevation)
    world.surface_heat[...] = 0
    world.sun_light[...] = 0
    world.water_shed[...] = 0
    world.water_speed[...] = 0

    world.extrema = Extrema(
        highest_surface_elevation=int(elevation.max()),
        lowest_surface_elevation=int(elevation.min()),
        highest_water_elevation=int(world.water_elevation.max()),
        lowest_water_elevation=int(world.water_elevation.min()),
        wettest=int(world.water.max()),
    )
    logger.debug(
        "synthesized %dx%d terrain: elevation [%d, %d], %d water per cell",
        cfg.width,
        cfg.height,
        world.extrema.lowest_surface_elevation,
        world.extrema.highest_surface_elevation,
        cfg.water_per_cell,
    )


def synthesize(config: WorldConfig | None = None) -> World:
    """Generate a deterministic world from the configured octave seeds."""

    cfg = config or WorldConfig()
    world = World(cfg.width, cfg.height)
    synthesize_into(world, cfg)
    return world
