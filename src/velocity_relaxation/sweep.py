"""
Relaxation-time sweep over the speed x depth x direction grid.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from velocity_relaxation.config import Condition, RelaxationConfig
from velocity_relaxation.relaxation import NOT_COMPUTED, relaxation_time
from velocity_relaxation.series import LoadedSeries, MalformedSeriesError, step_count

SeriesLoader = Callable[[Condition, str], Optional[LoadedSeries]]


@dataclass
class SweepResult:
    """
    relaxation : int array (n_speed, n_depth, n_direction), 0 = not computed
    warnings   : diagnostic messages in emission order
    """

    config: RelaxationConfig
    relaxation: np.ndarray
    warnings: List[str] = field(default_factory=list)

    @property
    def computed(self) -> np.ndarray:
        return self.relaxation != NOT_COMPUTED

    def relaxation_seconds(self) -> np.ndarray:
        """Relaxation times converted with dt; NaN where nothing was computed."""
        seconds = self.relaxation.astype(np.float64) * self.config.dt
        seconds[~self.computed] = np.nan
        return seconds


def _warn(messages: List[str], text: str) -> None:
    messages.append(text)
    print(f"Warning: {text}")


def run_sweep(config: RelaxationConfig, loader: SeriesLoader) -> SweepResult:
    """
    Compute the relaxation time of every condition in the parameter grid.

    Missing or malformed inputs leave their cell at 0 and add a warning; the
    sweep always visits every cell.
    """
    print("Computing relaxation times...")
    relaxation = np.full(config.grid_shape, NOT_COMPUTED, dtype=np.int64)
    messages: List[str] = []

    for (i, j, l), condition in config.conditions():
        speed_code = config.code(condition.speed)
        dir_code = config.direction_code(condition.direction_index)
        depth_code = config.code(condition.depth)

        try:
            u = loader(condition, "U")
            v = loader(condition, "V")
            if u is None or v is None:
                _warn(messages, f"Missing files for Speed={speed_code}, Dir={dir_code}, Depth={depth_code}")
                continue
            t_u = step_count(u.values, config.nodes)
            t_v = step_count(v.values, config.nodes)
            if t_u != t_v:
                _warn(
                    messages,
                    f"U has {t_u} time steps but V has {t_v} for Speed={speed_code}, "
                    f"Dir={dir_code}, Depth={depth_code}; using {min(t_u, t_v)}",
                )
            relaxation[i, j, l] = relaxation_time(u.values, v.values, config)
        except MalformedSeriesError as exc:
            _warn(messages, f"Skipping Speed={speed_code}, Dir={dir_code}, Depth={depth_code}: {exc}")

    relaxation.flags.writeable = False
    n_done = int(np.count_nonzero(relaxation))
    print(f"Relaxation time computation complete ({n_done}/{relaxation.size} cells relaxed).")
    return SweepResult(config=config, relaxation=relaxation, warnings=messages)
