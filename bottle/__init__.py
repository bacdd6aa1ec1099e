"""Toroidal terrain, water and heat simulation package."""

from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, PhysicsConfig, WorldConfig
from .terrain import synthesize, synthesize_into
from .tick import Simulation, run, tick
from .world import Cell, Extrema, WaterShed, World

__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "PhysicsConfig",
    "WorldConfig",
    "synthesize",
    "synthesize_into",
    "Simulation",
    "run",
    "tick",
    "Cell",
    "Extrema",
    "WaterShed",
    "World",
]
