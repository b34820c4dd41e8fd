"""
Scaled velocity profiles for plotting.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from velocity_relaxation.config import Condition, RelaxationConfig
from velocity_relaxation.relaxation import reference_step
from velocity_relaxation.series import (
    LoadedSeries,
    MalformedSeriesError,
    extract_profile,
    step_count,
)


@dataclass(frozen=True)
class ScaledProfile:
    speed: float
    scaled: np.ndarray   # (nodes,)
    depth: np.ndarray    # (nodes,) vertical coordinate, negative downwards


def scaled_velocity(profile: np.ndarray, config: RelaxationConfig) -> np.ndarray:
    """
    profile * G / n_speed^2

    The normalisation uses the number of speeds in the grid, not the speed of
    the profile itself, so all curves of one figure share the same factor.
    """
    n_speed = len(config.speeds)
    return np.asarray(profile, dtype=np.float64) * config.gravity / (n_speed ** 2)


def final_profile(series: np.ndarray, config: RelaxationConfig) -> np.ndarray:
    """Profile at step T-1, the same reference used by the relaxation scan."""
    T = step_count(series, config.nodes)
    return extract_profile(series, reference_step(T), config.nodes)


def depth_coordinates(loaded: LoadedSeries, depth: float, config: RelaxationConfig) -> np.ndarray:
    """
    Vertical coordinates of the profile nodes.

    Taken from the coordinate column of the first block when the file has one,
    otherwise spaced evenly from -depth to 0.
    """
    if loaded.coordinates is not None:
        return np.asarray(loaded.coordinates[1:config.block_size], dtype=np.float64)
    return np.linspace(-depth, 0.0, config.nodes)


def collect_scaled_profiles(
    loader,
    config: RelaxationConfig,
    direction_index: int,
    depth: float,
) -> List[ScaledProfile]:
    """
    Scaled U profiles for every speed with data at this (direction, depth).

    Missing files are skipped silently; malformed ones are skipped with a
    warning so one bad run does not stop the figure.
    """
    out = []
    for speed in config.speeds:
        condition = Condition(direction_index=direction_index, speed=speed, depth=depth)
        try:
            loaded = loader(condition, "U")
            if loaded is None:
                continue
            profile = final_profile(loaded.values, config)
        except MalformedSeriesError as exc:
            print(
                f"Warning: Skipping Speed={config.code(speed)}, "
                f"Dir={config.direction_code(direction_index)}, "
                f"Depth={config.code(depth)}: {exc}"
            )
            continue
        out.append(
            ScaledProfile(
                speed=speed,
                scaled=scaled_velocity(profile, config),
                depth=depth_coordinates(loaded, depth, config),
            )
        )
    return out
