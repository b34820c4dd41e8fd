"""
Relaxation-time detection for one condition.

For every time step the depth profile is compared with the reference profile
of step T-1 (second-to-last block) through

    sig(tt) = dz * sum_k (last[k] - cur[k])^2 ,   dz = 1 / nodes

and the relaxation time is the first step where both the U and the V signal
drop below the threshold. 0 means the field never relaxed in the recorded
window.
"""

from typing import Tuple

import numpy as np

from velocity_relaxation.config import RelaxationConfig
from velocity_relaxation.series import MalformedSeriesError, extract_profile, step_count

NOT_COMPUTED = 0


def common_step_count(u: np.ndarray, v: np.ndarray, nodes: int) -> int:
    """
    Number of time steps shared by the U and V series (the smaller one).

    A length mismatch is not reported here; callers that keep diagnostics
    compare step_count of each component themselves.
    """
    return min(step_count(u, nodes), step_count(v, nodes))


def reference_step(T: int) -> int:
    """Step whose profile is taken as converged: T-1, not T."""
    if T < 2:
        raise MalformedSeriesError(
            f"Need at least 2 time steps to pick a reference profile, got {T}."
        )
    return T - 1


def decay_signal(blocks: np.ndarray, reference: np.ndarray, dz: float) -> np.ndarray:
    """
    Weighted squared distance of each profile row to the reference profile.

    Args:
        blocks: array (T, nodes), one depth profile per row
        reference: array (nodes,)
        dz: vertical step size
    """
    return dz * np.sum((reference[np.newaxis, :] - blocks) ** 2, axis=1)


def _profiles(series: np.ndarray, T: int, nodes: int) -> np.ndarray:
    # (T, nodes+1) -> drop the header column
    block = nodes + 1
    return np.asarray(series[:T * block], dtype=np.float64).reshape(T, block)[:, 1:]


def decay_signals(
    u: np.ndarray,
    v: np.ndarray,
    config: RelaxationConfig,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the U and V decay signals for steps 1..T.

    Returns:
        sig_u, sig_v: arrays of shape (T,), entry tt-1 belongs to step tt
    """
    nodes = config.nodes
    T = common_step_count(u, v, nodes)
    t_last = reference_step(T)

    u = np.asarray(u, dtype=np.float64)[:T * config.block_size]
    v = np.asarray(v, dtype=np.float64)[:T * config.block_size]
    last_u = extract_profile(u, t_last, nodes)
    last_v = extract_profile(v, t_last, nodes)

    sig_u = decay_signal(_profiles(u, T, nodes), last_u, config.dz)
    sig_v = decay_signal(_profiles(v, T, nodes), last_v, config.dz)
    return sig_u, sig_v


def first_relaxed_step(sig_u: np.ndarray, sig_v: np.ndarray, threshold: float) -> int:
    """First 1-based step where both signals are below threshold, else 0."""
    for tt, (su, sv) in enumerate(zip(sig_u, sig_v), start=1):
        if abs(su) < threshold and abs(sv) < threshold:
            return tt
    return NOT_COMPUTED


def relaxation_time(u: np.ndarray, v: np.ndarray, config: RelaxationConfig) -> int:
    """Relaxation time (1-based step index) of one condition, 0 if never relaxed."""
    sig_u, sig_v = decay_signals(u, v, config)
    return first_relaxed_step(sig_u, sig_v, config.threshold)
