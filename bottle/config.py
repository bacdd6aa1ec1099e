"""Configuration models for the bottle world simulation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_WIDTH = 128
DEFAULT_HEIGHT = 128
DEFAULT_WATER_PER_CELL = 100


@dataclass(frozen=True)
class OctaveConfig:
    """One noise layer of the terrain stack."""

    seed: int
    amplitude: float
    frequency: float


DEFAULT_OCTAVES: tuple[OctaveConfig, ...] = (
    OctaveConfig(2, 1250.0, 1.0 / 80),
    OctaveConfig(3, 1000.0, 1.0 / 40),
    OctaveConfig(5, 750.0, 1.0 / 30),
    OctaveConfig(4, 500.0, 1.0 / 10),
    OctaveConfig(4, 200.0, 1.0 / 6),
    OctaveConfig(5, 100.0, 1.0 / 4),
    OctaveConfig(5, 50.0, 1.0 / 2),
)


@dataclass(frozen=True)
class WorldConfig:
    """Grid dimensions, water budget and terrain octaves."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    total_water: int | None = None
    octaves: tuple[OctaveConfig, ...] = DEFAULT_OCTAVES

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if not self.octaves:
            raise ValueError("at least one octave is required")
        if self.total_water is not None and self.total_water < 0:
            raise ValueError("total_water must be non-negative")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def water_budget(self) -> int:
        if self.total_water is None:
            return self.cell_count * DEFAULT_WATER_PER_CELL
        return self.total_water

    @property
    def water_per_cell(self) -> int:
        return self.water_budget // self.cell_count


@dataclass(frozen=True)
class PhysicsConfig:
    """Integer constants of the water and heat model."""

    damping_threshold: int = 3
    damping_divisor: int = 3
    radiative_numerator: int = 100
    radiative_denominator: int = 102
    horizon_numerator: int = 3
    horizon_denominator: int = 5

    def __post_init__(self) -> None:
        for name in ("damping_divisor", "radiative_denominator", "horizon_denominator"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.damping_threshold < 0:
            raise ValueError("damping_threshold must be non-negative")

    @classmethod
    def terrain_model(cls) -> "PhysicsConfig":
        """Halving damping used by the single-file terrain model."""

        return cls(damping_threshold=2, damping_divisor=2)

    def horizon_radius(self, width: int) -> int:
        return width * self.horizon_numerator // self.horizon_denominator


@dataclass(frozen=True)
class RenderConfig:
    """Frame capture settings."""

    capture_scale: float = 1.25
    frame_delay_ms: int = 100
    shallow_water: int = 10
    deep_water: int = 20


@dataclass(frozen=True)
class ModelPreset:
    """Tick schedule for one visualization model.

    `overture` ticks run before capture. Afterwards a frame is sampled every
    `speed` ticks for `width * speed * duration` ticks. A preset with
    `speed == 0` captures a single still of the synthesized world.
    """

    overture: int = 0
    speed: int = 1
    duration: int = 1


MODEL_PRESETS: dict[str, ModelPreset] = {
    "topo": ModelPreset(overture=0, speed=0, duration=0),
    "thermo": ModelPreset(overture=0, speed=1, duration=1),
    "hydro": ModelPreset(overture=20000, speed=5, duration=1),
    "bathymetry": ModelPreset(overture=1000, speed=1, duration=1),
    "watershed": ModelPreset(overture=0, speed=100, duration=4),
    "waterspeed": ModelPreset(overture=0, speed=50, duration=4),
}


@dataclass(frozen=True)
class DriverConfig:
    """Primary run configuration."""

    model: str = "hydro"
    preset: ModelPreset = field(default_factory=lambda: MODEL_PRESETS["hydro"])
    world: WorldConfig = field(default_factory=WorldConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
