#!/usr/bin/env python3
"""
Plot scaled velocity profiles (U at step T-1, times G / n_speed^2) versus depth.

One figure per interior direction and depth, one curve per available speed:

    ScaledFig_Dir<dir>_Depth<depth>.png

Usage example
-------------
python scripts/plot_scaled_profiles.py \\
  --data-dir   /path/to/runs \\
  --output-dir /path/to/output/plots
"""

import argparse
import time
from pathlib import Path

from velocity_relaxation.config import add_config_arguments, config_from_args
from velocity_relaxation.plotting import plot_scaled_profiles
from velocity_relaxation.series import TextSeriesLoader


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Plot scaled velocity profiles for each direction and depth."
    )
    p.add_argument("--data-dir", type=Path, required=True, help="Directory with the U/V text files.")
    p.add_argument("--output-dir", type=Path, required=True, help="Where the PNG figures are written.")
    add_config_arguments(p)
    return p.parse_args()


def main() -> None:
    args = parse_args()
    t0 = time.time()

    config = config_from_args(args)
    plot_scaled_profiles(TextSeriesLoader(args.data_dir, config), config, args.output_dir)

    print("All figures generated and saved.")
    print(f"Total time: {time.time() - t0:.2f} s")


if __name__ == "__main__":
    main()
