from __future__ import annotations

import json

import pytest

from cli.main import main


def _args(out_dir, model: str) -> list[str]:
    return [
        "--model",
        model,
        "--out",
        str(out_dir),
        "--w",
        "16",
        "--h",
        "16",
        "--overture",
        "2",
        "--speed",
        "4",
        "--duration",
        "1",
    ]


def test_runtime_fields_only_in_meta_json(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    out_dir = tmp_path / "out"
    code = main(_args(out_dir, "thermo") + ["--overwrite"])
    assert code == 0

    base = out_dir / "thermo" / "16x16"
    meta = json.loads((base / "meta.json").read_text(encoding="utf-8"))
    deterministic_meta = json.loads((base / "deterministic_meta.json").read_text(encoding="utf-8"))

    assert (base / "thermo.gif").exists()
    assert meta["run_seconds"] >= 0.0
    assert "generated_at_utc" in meta
    assert "run_seconds" not in deterministic_meta
    assert "generated_at_utc" not in deterministic_meta

    assert deterministic_meta["frame_count"] == 16
    assert deterministic_meta["final_tick"] == 2 + 16 * 4
    assert deterministic_meta["total_water"] == 16 * 16 * 100
    assert deterministic_meta["config"]["preset"] == {"overture": 2, "speed": 4, "duration": 1}
    extrema = deterministic_meta["extrema"]
    for key in ("hottest_surface", "equatorial_min_heat", "latitudinal_max_heat", "wettest"):
        assert key in extrema


def test_topo_model_writes_single_still(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    out_dir = tmp_path / "out"
    assert main(["--model", "topo", "--out", str(out_dir), "--w", "16", "--h", "16"]) == 0

    meta = json.loads((out_dir / "topo" / "16x16" / "deterministic_meta.json").read_text(encoding="utf-8"))
    assert meta["frame_count"] == 1
    assert meta["final_tick"] == 0


def test_existing_output_requires_overwrite(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    out_dir = tmp_path / "out"
    assert main(_args(out_dir, "watershed")) == 0

    with pytest.raises(FileExistsError):
        main(_args(out_dir, "watershed"))
    assert main(_args(out_dir, "watershed") + ["--overwrite", "--no-json"]) == 0
    assert not (out_dir / "watershed" / "16x16" / "meta.json").exists()


def test_invalid_dimensions_are_rejected(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--out", str(tmp_path), "--w", "0"])
