"""
GMOS grating optics.

GMOS keeps separate grating tables for the legacy EEV CCDs and for the
current detectors, and its two-slit IFU mode (IFU-2) puts two wavelength
windows, offset by a physical shift, on the detector at once.
"""

from typing import Tuple

from itcoptics.core.abc import DetectorCapability
from itcoptics.core.constants import LEGACY_NAMESPACE, STANDARD_NAMESPACE
from itcoptics.instrument.grating import InstrumentGratingOptics

Window = Tuple[float, float]


def gmos_namespace(detector: DetectorCapability) -> str:
    """EEV detectors use the legacy grating tables, all others the standard ones."""
    return LEGACY_NAMESPACE if detector.is_legacy_family() else STANDARD_NAMESPACE


class GmosGratingOptics(InstrumentGratingOptics):
    """
    Grating optics of the GMOS spectrographs.

    Parameters
    ----------
    grating_name : str
        Grating identifier (e.g., 'B1200_G5301')
    detector : DetectorCapability
        CCD the grating disperses onto
    central_wavelength : float
        Central wavelength setting in nm
    detector_pixel_count : int
        Unbinned pixels along the dispersion axis
    spectral_binning : int
        Binning factor along the dispersion axis
    source : CalibrationSource
        Calibration lookup
    """

    namespace_selector = staticmethod(gmos_namespace)

    # IFU-2 case
    def window_start(self, shift: float) -> float:
        """Start wavelength of a detector window offset by `shift` nm."""
        return self.central_wavelength - self.coverage_half_width() + shift

    # IFU-2 case
    def window_end(self, shift: float) -> float:
        """End wavelength of a detector window offset by `shift` nm."""
        return self.central_wavelength + self.coverage_half_width() + shift

    def ifu2_windows(self, shift: float) -> Tuple[Window, Window]:
        """
        Both IFU-2 windows, the first shifted by -shift and the second by +shift.

        The shift is not range checked.
        """
        return (
            (self.window_start(-shift), self.window_end(-shift)),
            (self.window_start(shift), self.window_end(shift)),
        )
