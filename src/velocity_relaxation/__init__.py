"""
velocity_relaxation: relaxation times and scaled velocity profiles from
per-condition U/V velocity series produced by hydrodynamic runs.

Modules: config.py (run constants and grids), series.py (reading files and
slicing time-step blocks), relaxation.py (convergence detection), sweep.py
(grid driver), profiles.py, storage.py, plotting.py.
"""
from velocity_relaxation.config import Condition, RelaxationConfig
from velocity_relaxation.relaxation import NOT_COMPUTED, decay_signals, relaxation_time
from velocity_relaxation.series import (
    LoadedSeries,
    MalformedSeriesError,
    StepIndexError,
    TextSeriesLoader,
    extract_profile,
    step_count,
)
from velocity_relaxation.sweep import SweepResult, run_sweep

__all__ = [
    "Condition",
    "RelaxationConfig",
    "NOT_COMPUTED",
    "decay_signals",
    "relaxation_time",
    "LoadedSeries",
    "MalformedSeriesError",
    "StepIndexError",
    "TextSeriesLoader",
    "extract_profile",
    "step_count",
    "SweepResult",
    "run_sweep",
]
