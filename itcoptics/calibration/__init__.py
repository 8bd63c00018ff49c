"""
Grating calibration data.

This module provides:
- Grating table rows and transmission curves
- In-memory and file-backed calibration lookups
"""

from itcoptics.calibration.structures import (
    GratingRecord,
    TransmissionCurve,
    DispersionCurve,
    make_transmission_curve,
    validate_dispersion_curve,
)
from itcoptics.calibration.table import CalibrationTable, InMemoryCalibrationTable

__all__ = [
    "GratingRecord",
    "TransmissionCurve",
    "DispersionCurve",
    "make_transmission_curve",
    "validate_dispersion_curve",
    "CalibrationTable",
    "InMemoryCalibrationTable",
]
