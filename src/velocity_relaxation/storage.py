"""
Saving and loading sweep results (.npz, and .h5 for external tools).
"""

from pathlib import Path

import h5py
import numpy as np

from velocity_relaxation.config import RelaxationConfig
from velocity_relaxation.sweep import SweepResult


def save_sweep_npz(output_file: Path, result: SweepResult) -> None:
    """Save the relaxation grid, parameter grids and constants to a compressed NPZ file."""
    cfg = result.config
    output_file.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        output_file,
        relaxation=np.asarray(result.relaxation),
        speeds=np.asarray(cfg.speeds),
        depths=np.asarray(cfg.depths),
        directions=np.asarray(cfg.directions),
        nodes=cfg.nodes,
        dt=cfg.dt,
        threshold=cfg.threshold,
        gravity=cfg.gravity,
        code_bias=cfg.code_bias,
        warnings=np.asarray(result.warnings, dtype=str),
    )
    print(f"Relaxation times saved to {output_file}")


def load_sweep_npz(input_file: Path) -> SweepResult:
    """Inverse of save_sweep_npz."""
    with np.load(input_file) as data:
        if "relaxation" not in data:
            raise KeyError(
                f"Variable 'relaxation' not found in {Path(input_file).name}. "
                f"Available keys: {list(data.keys())}"
            )
        config = RelaxationConfig(
            nodes=int(data["nodes"]),
            dt=float(data["dt"]),
            threshold=float(data["threshold"]),
            gravity=float(data["gravity"]),
            code_bias=int(data["code_bias"]),
            speeds=tuple(data["speeds"]),
            depths=tuple(data["depths"]),
            directions=tuple(data["directions"]),
        )
        relaxation = np.array(data["relaxation"], dtype=np.int64)
        warnings = [str(w) for w in data["warnings"]]

    if relaxation.shape != config.grid_shape:
        raise ValueError(
            f"Relaxation grid has shape {relaxation.shape}; "
            f"parameter grids imply {config.grid_shape}"
        )
    relaxation.flags.writeable = False
    return SweepResult(config=config, relaxation=relaxation, warnings=warnings)


def save_sweep_h5(output_file: Path, result: SweepResult) -> None:
    """Export the relaxation grid to HDF5 with the run constants as attributes."""
    cfg = result.config
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with h5py.File(output_file, "w") as f:
        f.create_dataset("relaxation", data=np.asarray(result.relaxation))
        f.create_dataset("relaxation_seconds", data=result.relaxation_seconds())
        f.create_dataset("speeds", data=np.asarray(cfg.speeds))
        f.create_dataset("depths", data=np.asarray(cfg.depths))
        f.create_dataset("directions", data=np.asarray(cfg.directions))
        f.attrs["nodes"] = cfg.nodes
        f.attrs["dt"] = cfg.dt
        f.attrs["threshold"] = cfg.threshold
        f.attrs["gravity"] = cfg.gravity
    print(f"Relaxation times exported to {output_file}")
