"""Map world state to RGB frames for each visualization model."""

from __future__ import annotations

from typing import Callable

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import ListedColormap, hsv_to_rgb

from bottle.config import RenderConfig
from bottle.world import WaterShed, World

Renderer = Callable[[World, RenderConfig], np.ndarray]

_WATER_HUE = 240.0 / 360.0


def _normalize(values: np.ndarray, lo: float, hi: float) -> np.ndarray:
    span = float(hi - lo)
    if span <= 0.0:
        return np.zeros(values.shape, dtype=np.float64)
    return np.clip((values.astype(np.float64) - lo) / span, 0.0, 1.0)


def _to_u8(rgb: np.ndarray) -> np.ndarray:
    return np.round(np.clip(rgb, 0.0, 1.0) * 255.0).astype(np.uint8)


def _gray(level: np.ndarray) -> np.ndarray:
    rgba = colormaps["gray"](level)
    return _to_u8(rgba[..., :3])


def _water_color(saturation: np.ndarray, lightness: np.ndarray) -> np.ndarray:
    hsv = np.stack(
        (
            np.full(saturation.shape, _WATER_HUE),
            0.1 + 0.8 * saturation,
            0.1 + 0.8 * lightness,
        ),
        axis=-1,
    )
    return _to_u8(hsv_to_rgb(hsv))


def capture(cell_rgb: np.ndarray, *, scale: float = 1.25) -> np.ndarray:
    """Tile a per-cell (width, height, 3) array into an image with wrap margin.

    The result is row-major (rows along y) so it can be handed to PIL.
    """

    width, height = cell_rgb.shape[:2]
    frame_w = max(1, int(width * scale))
    frame_h = max(1, int(height * scale))
    ix = np.arange(frame_w) % width
    iy = np.arange(frame_h) % height
    tiled = cell_rgb[ix[:, None], iy[None, :]]
    return np.ascontiguousarray(tiled.transpose(1, 0, 2))


def render_topography(world: World, config: RenderConfig) -> np.ndarray:
    ex = world.extrema
    level = _normalize(world.surface_elevation, ex.lowest_surface_elevation, ex.highest_surface_elevation)
    return capture(_gray(level), scale=config.capture_scale)


def render_heat(world: World, config: RenderConfig) -> np.ndarray:
    level = _normalize(world.surface_heat, 0, world.extrema.hottest_surface)
    return capture(_gray(level), scale=config.capture_scale)


def _shade_by_depth(world: World, config: RenderConfig, hydraulic: np.ndarray) -> np.ndarray:
    ex = world.extrema
    topographic = _normalize(world.surface_elevation, ex.lowest_surface_elevation, ex.highest_surface_elevation)
    shallow = world.water < config.shallow_water
    middling = ~shallow & (world.water < config.deep_water)

    lightness = np.where(shallow, topographic, np.where(middling, hydraulic / 2 + topographic / 2, hydraulic))
    saturation = np.where(shallow, 0.0, np.where(middling, 0.5, 1.0))
    return capture(_water_color(saturation, lightness), scale=config.capture_scale)


def render_bathymetry(world: World, config: RenderConfig) -> np.ndarray:
    """Blue shading that darkens with water depth."""

    hydraulic = 0.5 - 0.5 * _normalize(world.water, 0, world.extrema.wettest)
    return _shade_by_depth(world, config, hydraulic)


def render_sea_levels(world: World, config: RenderConfig) -> np.ndarray:
    """Blue shading by absolute water surface height."""

    ex = world.extrema
    hydraulic = _normalize(world.water_elevation, ex.lowest_water_elevation, ex.highest_water_elevation)
    return _shade_by_depth(world, config, hydraulic)


def _direction_hue(shed: np.ndarray) -> np.ndarray:
    return (shed.astype(np.float64) - 1.0) / 4.0 % 1.0


WATERSHED_CMAP = ListedColormap(
    ["#ffffff"]
    + [
        tuple(hsv_to_rgb((float(direction - 1) / 4.0, 1.0, 0.85)))
        for direction in (WaterShed.NORTH, WaterShed.SOUTH, WaterShed.WEST, WaterShed.EAST)
    ],
    name="watershed",
)


def render_watershed(world: World, config: RenderConfig) -> np.ndarray:
    """One flat color per drainage direction; undrained cells are white."""

    rgba = WATERSHED_CMAP(world.water_shed.astype(np.int64))
    return capture(_to_u8(rgba[..., :3]), scale=config.capture_scale)


def render_water_speed(world: World, config: RenderConfig) -> np.ndarray:
    """Hue by drainage direction, brightness by outflow speed."""

    speed = _normalize(world.water_speed, 0, world.extrema.most_rapid_water)
    hsv = np.stack(
        (
            _direction_hue(world.water_shed),
            np.full(speed.shape, 0.5),
            speed,
        ),
        axis=-1,
    )
    rgb = _to_u8(hsv_to_rgb(hsv))
    rgb[world.water_shed == WaterShed.NONE] = 0
    return capture(rgb, scale=config.capture_scale)


RENDERERS: dict[str, Renderer] = {
    "topo": render_topography,
    "thermo": render_heat,
    "hydro": render_sea_levels,
    "bathymetry": render_bathymetry,
    "watershed": render_watershed,
    "waterspeed": render_water_speed,
}
