"""World state: the toroidal cell grid and its running extrema."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum

import numpy as np


class WaterShed(IntEnum):
    """Neighbor a cell is draining into this tick."""

    NONE = 0
    NORTH = 1
    SOUTH = 2
    WEST = 3
    EAST = 4


@dataclass(frozen=True)
class Extrema:
    """Aggregate statistics recomputed from the grid on every tick."""

    highest_surface_elevation: int = 0
    lowest_surface_elevation: int = 0
    highest_water_elevation: int = 0
    lowest_water_elevation: int = 0
    wettest: int = 0
    hottest_surface: int = 0
    brightest_surface: int = 0
    most_rapid_water: int = 0
    equatorial_min_heat: int = 0
    equatorial_max_heat: int = 0
    latitudinal_min_heat: int = 0
    latitudinal_max_heat: int = 0

    def updated(self, **changes: int) -> "Extrema":
        return replace(self, **{k: int(v) for k, v in changes.items()})


@dataclass(frozen=True)
class Cell:
    """Read-only snapshot of one grid point."""

    surface_elevation: int
    water: int
    water_elevation: int
    surface_heat: int
    sun_light: int
    water_shed: WaterShed
    water_speed: int


_FIELDS = (
    "surface_elevation",
    "water",
    "water_elevation",
    "surface_heat",
    "sun_light",
    "water_shed",
    "water_speed",
)


class World:
    """One buffer of the double-buffered simulation.

    Every per-cell quantity is a numpy array of shape (width, height) indexed
    [x, y]. Both axes wrap.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = int(width)
        self.height = int(height)
        shape = (self.width, self.height)
        self.surface_elevation = np.zeros(shape, dtype=np.int64)
        self.water = np.zeros(shape, dtype=np.int64)
        self.water_elevation = np.zeros(shape, dtype=np.int64)
        self.surface_heat = np.zeros(shape, dtype=np.int64)
        self.sun_light = np.zeros(shape, dtype=np.int64)
        self.water_shed = np.zeros(shape, dtype=np.uint8)
        self.water_speed = np.zeros(shape, dtype=np.int64)
        self.extrema = Extrema()

    @classmethod
    def like(cls, other: "World") -> "World":
        """Allocate a zeroed buffer with the same dimensions as `other`."""

        return cls(other.width, other.height)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def equator(self) -> int:
        return self.height // 2

    @property
    def latitude(self) -> int:
        return self.height // 4

    def cell(self, x: int, y: int) -> Cell:
        xx = x % self.width
        yy = y % self.height
        return Cell(
            surface_elevation=int(self.surface_elevation[xx, yy]),
            water=int(self.water[xx, yy]),
            water_elevation=int(self.water_elevation[xx, yy]),
            surface_heat=int(self.surface_heat[xx, yy]),
            sun_light=int(self.sun_light[xx, yy]),
            water_shed=WaterShed(int(self.water_shed[xx, yy])),
            water_speed=int(self.water_speed[xx, yy]),
        )

    def total_water(self) -> int:
        return int(self.water.sum())

    def copy(self) -> "World":
        clone = World(self.width, self.height)
        for name in _FIELDS:
            getattr(clone, name)[...] = getattr(self, name)
        clone.extrema = self.extrema
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, World):
            return NotImplemented
        if self.shape != other.shape or self.extrema != other.extrema:
            return False
        return all(np.array_equal(getattr(self, name), getattr(other, name)) for name in _FIELDS)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"World({self.width}x{self.height}, water={self.total_water()})"
