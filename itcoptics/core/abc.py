"""
Abstract base classes and protocols for the optics model's collaborators.

The calibration source is an ABC that concrete lookups must inherit.
Detector and binning capabilities are Protocols so that any object with the
right shape can be passed in without explicit inheritance.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, List, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from itcoptics.calibration.structures import DispersionCurve


class CalibrationSource(ABC):
    """
    Abstract interface for calibration table lookups.

    Implementations may read from disk, a database, or memory. They must be
    idempotent: identical arguments return equal curves.
    """

    @property
    @abstractmethod
    def namespaces(self) -> FrozenSet[str]:
        """Calibration namespaces this source can resolve."""
        pass

    @abstractmethod
    def resolve(self, namespace: str, grating_name: str) -> "DispersionCurve":
        """
        Get the dispersion and transmission data of a grating.

        Raises
        ------
        NotFoundError
            If the namespace or grating has no entry
        DataCorruptError
            If the stored values violate the curve invariants
        """
        pass

    @abstractmethod
    def list_gratings(self, namespace: str) -> List[str]:
        """Get the grating names available in a namespace."""
        pass


@runtime_checkable
class DetectorCapability(Protocol):
    """
    Protocol for detectors (structural typing).

    The optics model only needs a name for messages and a total family
    predicate for namespace selection.
    """

    @property
    def name(self) -> str:
        """Detector name."""
        ...

    def is_legacy_family(self) -> bool:
        """True for detectors calibrated in the legacy namespace."""
        ...


@runtime_checkable
class BinningProvider(Protocol):
    """Protocol for instrument configurations that support binning."""

    @property
    def spatial_binning(self) -> int:
        """Binning factor along the slit."""
        ...

    @property
    def spectral_binning(self) -> int:
        """Binning factor along the dispersion axis."""
        ...
