"""
Scaled velocity profile figures and relaxation-time contour maps.
"""

from pathlib import Path
from typing import List, Optional

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from velocity_relaxation.config import RelaxationConfig
from velocity_relaxation.profiles import ScaledProfile, collect_scaled_profiles
from velocity_relaxation.sweep import SweepResult

# x-limits shared by every scaled-profile figure
SCALED_XLIM = (-0.17, 0.23)


def speed_colors(n: int) -> np.ndarray:
    """Blue shades from the upper part of an 18-colour 'winter' palette."""
    palette = matplotlib.colormaps["winter"](np.linspace(0.0, 1.0, 18))
    return palette[[(10 + i) % len(palette) for i in range(n)]]


def relaxation_cmap():
    """16-level reversed jet."""
    return matplotlib.colormaps["jet_r"].resampled(16)


def scaled_figure_name(config: RelaxationConfig, direction_index: int, depth: float) -> str:
    return f"ScaledFig_Dir{config.direction_code(direction_index)}_Depth{config.code(depth)}.png"


def plot_scaled_profile_figure(
    profiles: List[ScaledProfile],
    config: RelaxationConfig,
    depth: float,
    direction: float,
    out_path: Path,
) -> None:
    """One figure: scaled U profile versus depth for each available speed."""
    fig, ax = plt.subplots(figsize=(6, 5))
    colors = speed_colors(len(config.speeds))

    for p in profiles:
        i = config.speeds.index(p.speed)
        ax.plot(p.scaled, p.depth, linewidth=2, color=colors[i], label=f"U @ {p.speed:g}m/s")

    ax.grid(True, which="major")
    ax.minorticks_on()
    ax.grid(True, which="minor", linestyle=":", linewidth=0.5)
    ax.set_xlabel("Scaled Velocity Factor (-)")
    ax.set_ylabel("Depth (m)")
    ax.set_title(f"Scaled Velocity @ Depth {depth:.1f}m, Direction {direction:.1f}°")
    if profiles:
        ax.legend(loc="upper left", fontsize=12)
    ax.set_xlim(*SCALED_XLIM)
    ax.set_ylim(-depth, 0.0)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, format="png", bbox_inches="tight", dpi=150)
    plt.close(fig)


def plot_scaled_profiles(loader, config: RelaxationConfig, output_dir: Path) -> List[Path]:
    """
    Write ScaledFig_Dir<dir>_Depth<depth>.png for every interior direction and depth.

    The first and last directions of the grid are not plotted.
    """
    print("Plotting scaled velocity profiles...")
    written = []
    for l in range(2, len(config.directions)):
        direction = config.directions[l - 1]
        for depth in config.depths:
            profiles = collect_scaled_profiles(loader, config, l, depth)
            out_path = output_dir / scaled_figure_name(config, l, depth)
            plot_scaled_profile_figure(profiles, config, depth, direction, out_path)
            written.append(out_path)
    print(f"Saved {len(written)} scaled profile figures to {output_dir}")
    return written


def plot_contour(
    x: np.ndarray,
    y: np.ndarray,
    field_2d: np.ndarray,
    xlabel: str,
    ylabel: str,
    title: str,
    label: str,
    out_path: Path,
) -> Optional[Path]:
    """
    Filled contour of a (len(y), len(x)) field; zero cells are masked.

    Returns None (and writes nothing) when there is nothing to contour.
    """
    masked = np.ma.masked_where(~np.isfinite(field_2d) | (field_2d == 0), field_2d)
    if len(x) < 2 or len(y) < 2 or masked.count() == 0:
        print(f"Warning: nothing to contour for {out_path.name}, skipped.")
        return None

    fig, ax = plt.subplots(figsize=(6, 4))
    cs = ax.contourf(x, y, masked, levels=16, cmap=relaxation_cmap())
    cbar = fig.colorbar(cs, ax=ax, shrink=0.9, pad=0.03)
    cbar.set_label(label, fontsize=10)

    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title, fontsize=11)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, format="png", bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved colormap to {out_path}")
    return out_path


def plot_relaxation_contours(
    result: SweepResult,
    output_dir: Path,
    seconds: bool = False,
) -> List[Path]:
    """
    Contour maps of the relaxation grid:
      - (speed, depth) plane, one map per direction
      - (depth, direction) plane, one map per speed
    """
    cfg = result.config
    if seconds:
        grid = result.relaxation_seconds()
        label = "Relaxation time (s)"
    else:
        grid = np.asarray(result.relaxation, dtype=np.float64)
        label = "Relaxation time (steps)"

    speeds = np.asarray(cfg.speeds)
    depths = np.asarray(cfg.depths)
    directions = np.asarray(cfg.directions)
    written = []

    for l, direction in enumerate(directions, start=1):
        out = plot_contour(
            speeds, depths, grid[:, :, l - 1].T,
            "Speed (m/s)", "Depth (m)",
            f"Relaxation time, Direction {direction:.1f}°", label,
            output_dir / f"RelaxFig_Dir{cfg.direction_code(l)}.png",
        )
        if out is not None:
            written.append(out)

    for i, speed in enumerate(speeds):
        out = plot_contour(
            depths, directions, grid[i, :, :].T,
            "Depth (m)", "Direction (°)",
            f"Relaxation time, Speed {speed:g}m/s", label,
            output_dir / f"RelaxFig_Speed{cfg.code(speed)}.png",
        )
        if out is not None:
            written.append(out)

    return written
