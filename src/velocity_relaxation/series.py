"""
Reading per-condition velocity series and slicing them into depth profiles.

A series is a flat sequence laid out as consecutive blocks of `nodes + 1`
samples, one block per time step. The first entry of each block is a
header/boundary value; the remaining `nodes` entries form the depth profile.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from velocity_relaxation.config import Condition, RelaxationConfig

COMPONENTS = ("U", "V")


class MalformedSeriesError(ValueError):
    """
    Series that cannot be analysed: unparseable text, a sample count that is
    not a whole number of time-step blocks, or fewer than 2 steps (no T-1
    reference profile).
    """


class StepIndexError(IndexError):
    """Time-step index outside [1, T]."""


@dataclass(frozen=True)
class LoadedSeries:
    values: np.ndarray
    coordinates: Optional[np.ndarray] = None


# ---------------------------------------------------------------------
# Block arithmetic
# ---------------------------------------------------------------------
def step_count(series: np.ndarray, nodes: int) -> int:
    """Return the number of time steps T implied by the series length."""
    n = len(series)
    block = nodes + 1
    if n == 0 or n % block != 0:
        raise MalformedSeriesError(
            f"Series length {n} is not a positive multiple of the block size {block}."
        )
    return n // block


def extract_profile(series: np.ndarray, tt: int, nodes: int) -> np.ndarray:
    """
    Return the depth profile of 1-based time step `tt`.

    This is block `tt` without its first (header) entry, i.e. the 1-based
    positions (nodes+1)*(tt-1)+2 .. (nodes+1)*tt.
    """
    T = step_count(series, nodes)
    if tt < 1 or tt > T:
        raise StepIndexError(f"Time step {tt} outside [1, {T}].")
    block = nodes + 1
    start = block * (tt - 1) + 1
    return np.asarray(series[start:block * tt], dtype=np.float64)


# ---------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------
def series_filename(config: RelaxationConfig, condition: Condition, component: str) -> str:
    """'<dirCode>_<speedCode>_<depthCode>out<U|V>.txt', e.g. '103_110_115outU.txt'."""
    if component not in COMPONENTS:
        raise ValueError(f"Unknown component: {component!r}. Use 'U' or 'V'.")
    return (
        f"{config.direction_code(condition.direction_index)}_"
        f"{config.code(condition.speed)}_"
        f"{config.code(condition.depth)}out{component}.txt"
    )


def read_series(path: Path) -> LoadedSeries:
    """
    Read whitespace/newline-delimited floats from a text file.

    Two-column files with more than one row are always taken to be
    (velocity, depth coordinate) rows as written by the solver, and only the
    first column is used as the series. A flat row-major file that happens to
    hold exactly two numbers per line is read the same way, so flat data must
    be written with some other row width (one value per line is simplest).
    Any other layout is flattened row-major.
    """
    try:
        data = np.loadtxt(path, dtype=np.float64, ndmin=2)
    except ValueError as exc:
        raise MalformedSeriesError(f"Could not parse {path}: {exc}") from exc

    if data.shape[1] == 2 and data.shape[0] > 1:
        return LoadedSeries(values=data[:, 0].copy(), coordinates=data[:, 1].copy())
    return LoadedSeries(values=data.ravel())


class TextSeriesLoader:
    """
    Loads U/V series for a condition from a directory of text files.

    Calling the loader returns None when the file is absent; absence is an
    expected outcome of the sweep and is not raised.
    """

    def __init__(self, data_dir: Path, config: RelaxationConfig):
        self.data_dir = Path(data_dir)
        self.config = config

    def path_for(self, condition: Condition, component: str) -> Path:
        return self.data_dir / series_filename(self.config, condition, component)

    def __call__(self, condition: Condition, component: str) -> Optional[LoadedSeries]:
        path = self.path_for(condition, component)
        if not path.is_file():
            return None
        return read_series(path)
