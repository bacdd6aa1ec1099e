from __future__ import annotations

import numpy as np
import pytest

from bottle.config import OctaveConfig, WorldConfig
from bottle.terrain import elevation_field, synthesize, synthesize_into
from bottle.world import WaterShed, World


def test_synthesis_fills_terrain_and_even_water() -> None:
    config = WorldConfig(width=32, height=16)
    world = synthesize(config)

    assert world.shape == (32, 16)
    assert np.all(world.water == 100)
    assert world.total_water() == config.water_budget
    assert np.array_equal(world.water_elevation, world.surface_elevation + world.water)
    assert np.all(world.surface_heat == 0)
    assert np.all(world.water_shed == WaterShed.NONE)


def test_synthesis_records_surface_extrema() -> None:
    world = synthesize(WorldConfig(width=32, height=32))
    ex = world.extrema

    assert ex.highest_surface_elevation == int(world.surface_elevation.max())
    assert ex.lowest_surface_elevation == int(world.surface_elevation.min())
    assert ex.highest_surface_elevation > ex.lowest_surface_elevation


def test_elevation_truncates_toward_zero() -> None:
    config = WorldConfig(width=16, height=16)
    field = elevation_field(config)
    world = synthesize(config)

    assert np.array_equal(world.surface_elevation, np.trunc(field).astype(np.int64))


def test_terrain_tiles_without_a_seam() -> None:
    config = WorldConfig(width=48, height=48)
    elevation = synthesize(config).surface_elevation.astype(np.float64)

    interior = np.abs(np.diff(elevation, axis=0)).max()
    seam = np.abs(elevation[0, :] - elevation[-1, :]).max()
    assert seam <= 2.0 * interior


def test_water_budget_is_split_evenly() -> None:
    world = synthesize(WorldConfig(width=10, height=10, total_water=1234))

    assert np.all(world.water == 12)


def test_octave_seeds_change_terrain() -> None:
    base = WorldConfig(width=16, height=16)
    other = WorldConfig(width=16, height=16, octaves=(OctaveConfig(9, 1000.0, 1.0 / 20),))

    assert not np.array_equal(synthesize(base).surface_elevation, synthesize(other).surface_elevation)


def test_synthesize_into_checks_shape() -> None:
    with pytest.raises(ValueError):
        synthesize_into(World(8, 8), WorldConfig(width=16, height=8))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"height": -3},
        {"octaves": ()},
        {"total_water": -1},
    ],
)
def test_world_config_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        WorldConfig(**kwargs)
