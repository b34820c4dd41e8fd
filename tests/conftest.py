import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


def make_series(profiles, header=0.0):
    """Flatten a list of depth profiles into blocks of [header, *profile]."""
    return np.concatenate([np.concatenate(([header], np.asarray(p, dtype=float))) for p in profiles])


def write_series(path, values, coordinates=None):
    if coordinates is None:
        np.savetxt(path, np.asarray(values).reshape(-1, 1))
    else:
        np.savetxt(path, np.column_stack([values, coordinates]))


@pytest.fixture
def small_config():
    from velocity_relaxation.config import RelaxationConfig
    return RelaxationConfig(
        nodes=2,
        speeds=(10, 20),
        depths=(15,),
        directions=(0.0, 22.5, 45.0),
    )
