"""CLI entry point for bottle world visualizations."""

from __future__ import annotations

import argparse
from dataclasses import asdict, replace
from datetime import datetime, timezone
import logging
import platform
import time

import numpy as np

from bottle.config import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MODEL_PRESETS,
    DriverConfig,
    PhysicsConfig,
    RenderConfig,
    WorldConfig,
)
from bottle.io import clean_output_dir, resolve_output_dir, write_gif, write_json
from bottle.render import RENDERERS
from bottle.terrain import synthesize
from bottle.tick import Simulation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Toroidal terrain, water and heat simulation")
    parser.add_argument("--model", choices=sorted(MODEL_PRESETS), default="hydro", help="Visualization model")
    parser.add_argument("--out", default="out", help="Output root directory")
    parser.add_argument("--w", type=int, default=DEFAULT_WIDTH, help="World width in cells")
    parser.add_argument("--h", type=int, default=DEFAULT_HEIGHT, help="World height in cells")
    parser.add_argument("--overture", type=int, default=None, help="Ticks to run before capturing frames")
    parser.add_argument("--speed", type=int, default=None, help="Ticks between captured frames")
    parser.add_argument("--duration", type=int, default=None, help="Number of sun transits to capture")
    parser.add_argument(
        "--terrain-damping",
        action="store_true",
        help="Use the halving damping of the single-file terrain model",
    )
    parser.add_argument("--overwrite", action="store_true", help="Overwrite files in existing output directory")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write metadata JSON files",
    )
    parser.add_argument("--verbose", action="store_true", help="Log simulation progress")
    return parser


def _driver_config(args: argparse.Namespace) -> DriverConfig:
    preset = MODEL_PRESETS[args.model]
    overrides = {
        name: value
        for name, value in (("overture", args.overture), ("speed", args.speed), ("duration", args.duration))
        if value is not None
    }
    for name, value in overrides.items():
        if value < 0:
            raise ValueError(f"--{name} must be non-negative")
    preset = replace(preset, **overrides)
    physics = PhysicsConfig.terrain_model() if args.terrain_damping else PhysicsConfig()
    return DriverConfig(
        model=args.model,
        preset=preset,
        world=WorldConfig(width=args.w, height=args.h),
        physics=physics,
        render=RenderConfig(),
    )


def capture_frames(config: DriverConfig) -> tuple[list[np.ndarray], Simulation]:
    """Synthesize a world, run the preset schedule, and return rendered frames."""

    renderer = RENDERERS[config.model]
    world = synthesize(config.world)
    sim = Simulation(world, physics=config.physics)
    preset = config.preset

    if preset.speed <= 0 or preset.duration <= 0:
        return [renderer(sim.current, config.render)], sim

    sim.advance(preset.overture)
    end = sim.t + config.world.width * preset.speed * preset.duration
    frames: list[np.ndarray] = []
    while sim.t < end:
        t = sim.t
        current = sim.step()
        if t % preset.speed == 0:
            frames.append(renderer(current, config.render))
            logger.debug("captured frame %d at t=%d", len(frames), t)
    return frames, sim


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _driver_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    out_dir = resolve_output_dir(
        args.out,
        config.model,
        config.world.width,
        config.world.height,
        overwrite=args.overwrite,
    )

    run_start = time.perf_counter()
    frames, sim = capture_frames(config)
    run_seconds = time.perf_counter() - run_start

    world = sim.current
    clean_output_dir(out_dir, out_root=args.out)
    gif_path = out_dir / f"{config.model}.gif"
    write_gif(gif_path, frames, delay_ms=config.render.frame_delay_ms)

    if args.json:
        deterministic_meta = {
            "model": config.model,
            "width": config.world.width,
            "height": config.world.height,
            "final_tick": sim.t,
            "frame_count": len(frames),
            "total_water": world.total_water(),
            "config": config.to_dict(),
            "extrema": asdict(world.extrema),
        }
        meta = {
            **deterministic_meta,
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "run_seconds": run_seconds,
            "python_version": platform.python_version(),
            "numpy_version": np.__version__,
        }
        write_json(out_dir / "deterministic_meta.json", deterministic_meta)
        write_json(out_dir / "meta.json", meta)

    ex = world.extrema
    print(f"Wrote {gif_path} ({len(frames)} frames, t={sim.t})")
    print(
        "Water: "
        f"total={world.total_water()}, "
        f"wettest={ex.wettest}, "
        f"surface=[{ex.lowest_water_elevation}, {ex.highest_water_elevation}], "
        f"most rapid={ex.most_rapid_water}"
    )
    print(
        "Heat: "
        f"hottest={ex.hottest_surface}, "
        f"equator=[{ex.equatorial_min_heat}, {ex.equatorial_max_heat}], "
        f"latitude=[{ex.latitudinal_min_heat}, {ex.latitudinal_max_heat}]"
    )
    print(f"Run time: {run_seconds:.3f} s ({config.world.width}x{config.world.height})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
