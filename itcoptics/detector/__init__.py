"""
Detector and binning capabilities consumed by the grating optics model.
"""

from itcoptics.detector.detector import (
    Detector,
    DetectorFamily,
    GMOS_EEV,
    GMOS_E2V_DD,
    GMOS_HAMAMATSU,
)
from itcoptics.detector.binning import Binning

__all__ = [
    "Detector",
    "DetectorFamily",
    "GMOS_EEV",
    "GMOS_E2V_DD",
    "GMOS_HAMAMATSU",
    "Binning",
]
