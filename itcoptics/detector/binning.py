"""
Detector binning configuration.
"""

from dataclasses import dataclass

import numpy as np

from itcoptics.core.exceptions import PreconditionViolation


def check_binning(field: str, value) -> int:
    """Return `value` as an int if it is an integer >= 1, else raise PreconditionViolation."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise PreconditionViolation(field, value, "must be an integer")
    if value < 1:
        raise PreconditionViolation(field, value, "must be >= 1")
    return int(value)


@dataclass(frozen=True)
class Binning:
    """
    Spatial and spectral binning factors of a readout.

    Satisfies the BinningProvider protocol. Numpy integer factors are
    stored as plain ints.
    """

    spatial_binning: int = 1
    spectral_binning: int = 1

    def __post_init__(self):
        # frozen, so bypass __setattr__ to store the normalized values
        object.__setattr__(
            self, "spatial_binning", check_binning("spatial_binning", self.spatial_binning)
        )
        object.__setattr__(
            self, "spectral_binning", check_binning("spectral_binning", self.spectral_binning)
        )

    def __str__(self) -> str:
        return f"{self.spatial_binning}x{self.spectral_binning}"
