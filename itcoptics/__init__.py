"""
itc-optics: grating optics for integration time calculators

Models the dispersion, wavelength coverage and transmission of spectrograph
gratings for a given detector, central wavelength and binning.
"""

__version__ = "0.1.0"

from itcoptics.core.exceptions import NotFoundError, DataCorruptError, PreconditionViolation
from itcoptics.detector import Detector, DetectorFamily, Binning
from itcoptics.calibration import CalibrationTable, InMemoryCalibrationTable
from itcoptics.instrument import GratingOptics, GmosGratingOptics, GratingOpticsFactory

__all__ = [
    "NotFoundError",
    "DataCorruptError",
    "PreconditionViolation",
    "Detector",
    "DetectorFamily",
    "Binning",
    "CalibrationTable",
    "InMemoryCalibrationTable",
    "GratingOptics",
    "GmosGratingOptics",
    "GratingOpticsFactory",
]
