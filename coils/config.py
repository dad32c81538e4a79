from dataclasses import dataclass
from typing import Optional

import numpy as np

MU_0 = 4 * np.pi * 1e-7  # magnetic constant [H/m]


@dataclass(frozen=True)
class SolverSettings:
    """
    Data Class to hold numerical settings of the field solver.

    Geometry lives on the coil objects; this only controls how finely
    conductor paths are sampled and how grid evaluations are split up.
    """
    points_per_turn: int = 100          # Samples per turn of a conductor path
    chunk_size: int = 4096              # Query points per worker task
    max_workers: Optional[int] = None   # Thread pool size (None = executor default)

    def __post_init__(self):
        if self.points_per_turn < 1:
            raise ValueError("points_per_turn must be at least 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be positive or None")

    @classmethod
    def default(cls):
        """Factory method returning the standard solver settings."""
        return cls(
            points_per_turn=100,
            chunk_size=4096,
            max_workers=None
        )
