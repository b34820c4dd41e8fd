#!/usr/bin/env python3
"""
Plot relaxation-time contour maps from a grid saved by compute_relaxation_times.py.

Writes one (speed, depth) map per direction (RelaxFig_Dir<dir>.png) and one
(depth, direction) map per speed (RelaxFig_Speed<speed>.png).

Usage example
-------------
python scripts/plot_relaxation_contours.py \\
  --input      /path/to/output/relaxation_times.npz \\
  --output-dir /path/to/output/plots \\
  --seconds
"""

import argparse
import time
from pathlib import Path

from velocity_relaxation.plotting import plot_relaxation_contours
from velocity_relaxation.storage import load_sweep_npz


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Plot relaxation-time contour maps."
    )
    p.add_argument("--input", type=Path, required=True, help="Relaxation grid .npz file.")
    p.add_argument("--output-dir", type=Path, required=True, help="Where the PNG figures are written.")
    p.add_argument(
        "--seconds",
        action="store_true",
        help="Plot times in seconds (step index times dt) instead of step indices.",
    )
    return p.parse_args()


def main() -> None:
    args = parse_args()
    t0 = time.time()

    print(f"Loading relaxation grid: {args.input}")
    result = load_sweep_npz(args.input)
    written = plot_relaxation_contours(result, args.output_dir, seconds=args.seconds)

    print(f"{len(written)} contour maps written.")
    print(f"Total time: {time.time() - t0:.2f} s")


if __name__ == "__main__":
    main()
