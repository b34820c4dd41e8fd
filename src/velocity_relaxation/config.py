"""
Run constants and parameter grids for the relaxation analysis.

Everything the sweep needs is carried by a single frozen RelaxationConfig that
is passed explicitly to the extractor, the engine, the driver and the
renderers.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

# Reference grids used by the original simulations
DEFAULT_SPEEDS = (5.0, 10.0, 20.0, 40.0)                          # [m/s]
DEFAULT_DEPTHS = (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)              # [m]
DEFAULT_DIRECTIONS = (-90.0, -45.0, -22.5, 0.0, 22.5, 45.0, 90.0)  # [deg]


@dataclass(frozen=True)
class Condition:
    """One sweep point (direction, speed, depth).

    direction_index is 1-based and is what file names use; direction is the
    physical angle in degrees, kept for labels.
    """

    direction_index: int
    speed: float
    depth: float
    direction: float = 0.0


@dataclass(frozen=True)
class RelaxationConfig:
    nodes: int = 41             # vertical node count
    dt: float = 0.5             # time step [s], informational
    threshold: float = 0.01     # convergence threshold on the decay signal
    gravity: float = 9.81       # [m/s^2]
    code_bias: int = 100        # offset added to values in file names
    speeds: Tuple[float, ...] = DEFAULT_SPEEDS
    depths: Tuple[float, ...] = DEFAULT_DEPTHS
    directions: Tuple[float, ...] = DEFAULT_DIRECTIONS

    def __post_init__(self) -> None:
        # Normalise lists coming from argparse into tuples
        for name in ("speeds", "depths", "directions"):
            object.__setattr__(self, name, tuple(float(v) for v in getattr(self, name)))

        if self.nodes < 1:
            raise ValueError(f"nodes must be >= 1, got {self.nodes}")
        if self.threshold <= 0:
            raise ValueError(f"threshold must be > 0, got {self.threshold}")
        for name in ("speeds", "depths", "directions"):
            if not getattr(self, name):
                raise ValueError(f"Parameter grid {name!r} is empty.")

    @property
    def block_size(self) -> int:
        """Samples per time step: one header entry plus `nodes` profile values."""
        return self.nodes + 1

    @property
    def dz(self) -> float:
        """Vertical step size used to weight the decay signal."""
        return 1.0 / self.nodes

    @property
    def grid_shape(self) -> Tuple[int, int, int]:
        return len(self.speeds), len(self.depths), len(self.directions)

    def code(self, value: float) -> str:
        """Format a grid value as the decimal code used in file names (10 -> '110')."""
        return f"{self.code_bias + value:g}"

    def direction_code(self, direction_index: int) -> str:
        return self.code(direction_index)

    def conditions(self) -> Iterator[Tuple[Tuple[int, int, int], Condition]]:
        """
        Enumerate every sweep point with its (speed, depth, direction) grid index.

        Ordering is speed outermost, then direction, then depth.
        """
        for i, speed in enumerate(self.speeds):
            for l, direction in enumerate(self.directions):
                for j, depth in enumerate(self.depths):
                    yield (i, j, l), Condition(
                        direction_index=l + 1,
                        speed=speed,
                        depth=depth,
                        direction=direction,
                    )


def add_config_arguments(parser) -> None:
    """Register the RelaxationConfig flags on an argparse parser."""
    defaults = RelaxationConfig()
    parser.add_argument("--nodes", type=int, default=defaults.nodes,
                        help=f"Number of vertical nodes per profile. Default: {defaults.nodes}.")
    parser.add_argument("--dt", type=float, default=defaults.dt,
                        help=f"Time step [s] (used only to report times in seconds). Default: {defaults.dt}.")
    parser.add_argument("--threshold", type=float, default=defaults.threshold,
                        help=f"Convergence threshold on the decay signal. Default: {defaults.threshold}.")
    parser.add_argument("--gravity", type=float, default=defaults.gravity,
                        help=f"Gravitational acceleration [m/s^2]. Default: {defaults.gravity}.")
    parser.add_argument("--speeds", type=float, nargs="+", default=list(defaults.speeds),
                        help="Flow speeds [m/s].")
    parser.add_argument("--depths", type=float, nargs="+", default=list(defaults.depths),
                        help="Depths [m].")
    parser.add_argument("--directions", type=float, nargs="+", default=list(defaults.directions),
                        help="Flow directions [deg]; files use their 1-based position.")


def config_from_args(args) -> RelaxationConfig:
    return RelaxationConfig(
        nodes=args.nodes,
        dt=args.dt,
        threshold=args.threshold,
        gravity=args.gravity,
        speeds=args.speeds,
        depths=args.depths,
        directions=args.directions,
    )
