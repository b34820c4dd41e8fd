#!/usr/bin/env python3
"""
Compute velocity relaxation times over the speed x depth x direction grid.

Input files live in one directory and are named

    <dir>_<speed>_<depth>outU.txt / outV.txt

with every code offset by 100 (direction index 3, speed 10, depth 15 ->
103_110_115outU.txt). Missing pairs are reported and left at 0.

Usage example
-------------
python scripts/compute_relaxation_times.py \\
  --data-dir /path/to/runs \\
  --output   /path/to/output/relaxation_times.npz \\
  --speeds 5 10 20 40 \\
  --depths 5 10 15 20 25 30 \\
  --save-h5
"""

import argparse
import time
from pathlib import Path

import numpy as np

from velocity_relaxation.config import add_config_arguments, config_from_args
from velocity_relaxation.series import TextSeriesLoader
from velocity_relaxation.storage import save_sweep_h5, save_sweep_npz
from velocity_relaxation.sweep import run_sweep


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        description="Compute velocity relaxation times from U/V text files."
    )
    p.add_argument(
        "--data-dir",
        type=Path,
        required=True,
        help="Directory containing the <dir>_<speed>_<depth>out{U,V}.txt files.",
    )
    p.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output .npz file for the relaxation grid.",
    )
    p.add_argument(
        "--save-h5",
        action="store_true",
        help="Also export the grid to an .h5 file next to the .npz output.",
    )
    add_config_arguments(p)
    return p.parse_args()


def main() -> None:
    args = parse_args()
    t0 = time.time()

    config = config_from_args(args)
    n_speed, n_depth, n_dir = config.grid_shape
    print(f"Grid: {n_speed} speeds x {n_depth} depths x {n_dir} directions, nodes={config.nodes}")

    result = run_sweep(config, TextSeriesLoader(args.data_dir, config))
    if result.warnings:
        print(f"{len(result.warnings)} condition(s) skipped.")

    seconds = result.relaxation_seconds()
    if np.isfinite(seconds).any():
        print(f"Relaxation time range: {np.nanmin(seconds):.2f} - {np.nanmax(seconds):.2f} s")

    save_sweep_npz(args.output, result)
    if args.save_h5:
        save_sweep_h5(args.output.with_suffix(".h5"), result)

    dt = time.time() - t0
    print(f"Total execution time: {dt:.2f} s")


if __name__ == "__main__":
    main()
