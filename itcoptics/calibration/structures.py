"""
Data structures for grating calibration data.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from itcoptics.core.exceptions import DataCorruptError


@dataclass(frozen=True)
class GratingRecord:
    """
    One row of a grating table.

    Attributes
    ----------
    name : str
        Grating identifier (e.g., 'B1200_G5301')
    dispersion : float
        Wavelength span of one unbinned pixel in nm
    resolving_power : float
        Nominal resolving power R = lambda / delta-lambda
    blaze : float
        Blaze wavelength in nm
    resolution : float
        Nominal resolution element in nm
    """

    name: str
    dispersion: float
    resolving_power: float
    blaze: float
    resolution: float


@dataclass(frozen=True, eq=False)
class TransmissionCurve:
    """
    Grating efficiency sampled on a wavelength grid.

    Attributes
    ----------
    wavelength : np.ndarray
        Strictly increasing wavelengths in nm
    transmission : np.ndarray
        Fraction of incident light passed at each wavelength (0-1)
    """

    wavelength: np.ndarray
    transmission: np.ndarray

    @property
    def domain(self) -> Tuple[float, float]:
        """(min, max) wavelength covered by the samples."""
        return float(self.wavelength[0]), float(self.wavelength[-1])

    def __len__(self) -> int:
        return len(self.wavelength)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransmissionCurve):
            return NotImplemented
        return np.array_equal(self.wavelength, other.wavelength) and np.array_equal(
            self.transmission, other.transmission
        )

    __hash__ = None


@dataclass(frozen=True)
class DispersionCurve:
    """
    Everything the optics model needs about one grating in one namespace.

    Attributes
    ----------
    namespace : str
        Calibration namespace the grating record came from
    grating : GratingRecord
        Dispersion and nominal grating properties
    transmission : TransmissionCurve
        Grating efficiency curve
    """

    namespace: str
    grating: GratingRecord
    transmission: TransmissionCurve

    @property
    def grating_name(self) -> str:
        return self.grating.name

    @property
    def dispersion(self) -> float:
        """Dispersion in nm per unbinned pixel."""
        return self.grating.dispersion

    @property
    def domain(self) -> Tuple[float, float]:
        return self.transmission.domain

    # Unhashable like the TransmissionCurve it holds
    __hash__ = None


def make_transmission_curve(
    wavelength, transmission, namespace: str = "", grating_name: Optional[str] = None
) -> TransmissionCurve:
    """
    Build a validated, read-only transmission curve from array-likes.

    Raises
    ------
    DataCorruptError
        If the samples are empty, unsorted, non-finite or outside [0, 1]
    """
    try:
        wl = np.array(wavelength, dtype=float)
        tr = np.array(transmission, dtype=float)
    except (TypeError, ValueError) as e:
        raise DataCorruptError(namespace, grating_name, f"non-numeric transmission data ({e})")

    if wl.ndim != 1 or tr.ndim != 1 or wl.shape != tr.shape:
        raise DataCorruptError(
            namespace, grating_name, "wavelength and transmission must be 1D arrays of equal size"
        )
    if len(wl) < 2:
        raise DataCorruptError(namespace, grating_name, "transmission domain is empty")
    if not (np.all(np.isfinite(wl)) and np.all(np.isfinite(tr))):
        raise DataCorruptError(namespace, grating_name, "transmission data is not finite")
    if np.any(np.diff(wl) <= 0):
        raise DataCorruptError(
            namespace, grating_name, "transmission wavelengths are not strictly increasing"
        )
    if np.any(tr < 0.0) or np.any(tr > 1.0):
        raise DataCorruptError(namespace, grating_name, "transmission values outside [0, 1]")

    wl.setflags(write=False)
    tr.setflags(write=False)
    return TransmissionCurve(wavelength=wl, transmission=tr)


def validate_grating_record(record: GratingRecord, namespace: str) -> None:
    """
    Check the positivity invariants of a grating table row.

    Raises
    ------
    DataCorruptError
        If dispersion or resolving power is not a finite positive number
    """
    for field in ["dispersion", "resolving_power"]:
        value = getattr(record, field)
        if not np.isfinite(value) or value <= 0:
            raise DataCorruptError(namespace, record.name, f"{field} must be positive, got {value}")
    for field in ["blaze", "resolution"]:
        value = getattr(record, field)
        if not np.isfinite(value):
            raise DataCorruptError(namespace, record.name, f"{field} is not finite")


def validate_dispersion_curve(curve: DispersionCurve) -> DispersionCurve:
    """Validate a curve built elsewhere; returns it unchanged."""
    validate_grating_record(curve.grating, curve.namespace)
    # Re-run the sample checks on the stored arrays
    make_transmission_curve(
        curve.transmission.wavelength,
        curve.transmission.transmission,
        curve.namespace,
        curve.grating_name,
    )
    return curve
