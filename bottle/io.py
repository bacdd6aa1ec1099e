"""Output serialization for simulation artifacts."""

from __future__ import annotations

import json
from pathlib import Path
import shutil
from typing import Any, Sequence

import numpy as np
from PIL import Image


def resolve_output_dir(
    out_root: str | Path,
    model: str,
    width: int,
    height: int,
    *,
    overwrite: bool,
) -> Path:
    """Create and return the output directory for one run."""

    target = Path(out_root) / model / f"{width}x{height}"
    if target.exists() and any(target.iterdir()) and not overwrite:
        raise FileExistsError(
            f"Output directory already exists and is not empty: {target}. Use --overwrite to replace files."
        )
    target.mkdir(parents=True, exist_ok=True)
    return target


def clean_output_dir(target: Path, *, out_root: str | Path) -> None:
    """Delete all children of target directory, which must sit under out_root."""

    target_r = target.resolve()
    target_r.relative_to(Path(out_root).resolve())

    for child in target_r.iterdir():
        if child.is_symlink() or child.is_file():
            child.unlink()
        elif child.is_dir():
            shutil.rmtree(child)


def write_gif(path: str | Path, frames: Sequence[np.ndarray], *, delay_ms: int) -> None:
    """Encode RGB frames as a looping animated GIF."""

    if not frames:
        raise ValueError("at least one frame is required")
    images = [Image.fromarray(frame.astype(np.uint8)) for frame in frames]
    images[0].save(
        Path(path),
        save_all=True,
        append_images=images[1:],
        duration=delay_ms,
        loop=0,
    )


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
