"""
Example: GMOS grating coverage and IFU-2 windows.

This example demonstrates how to resolve GMOS grating optics from the sample
calibration tables and query dispersion, coverage and transmission.
"""

import numpy as np
from pathlib import Path

from itcoptics.calibration import CalibrationTable
from itcoptics.core.logging_config import setup_logging
from itcoptics.detector import Binning, GMOS_EEV, GMOS_HAMAMATSU
from itcoptics.instrument import GmosGratingOptics, GratingOpticsFactory

DATA_DIR = Path(__file__).parent / "data" / "gmos"


# Example 1: Building optics directly
def example_direct():
    """Compare B600 on the legacy EEV and the Hamamatsu CCDs."""
    table = CalibrationTable(DATA_DIR)
    binning = Binning(spatial_binning=2, spectral_binning=2)

    for detector in [GMOS_EEV, GMOS_HAMAMATSU]:
        optics = GmosGratingOptics.from_binning(
            "B600_G5303", detector, 550.0, 6144, binning, table
        )
        print(f"{detector.name:10s} namespace={optics.namespace:13s} "
              f"dispersion={optics.dispersion():.3f} nm/pix "
              f"coverage={optics.start():.1f}-{optics.end():.1f} nm")


# Example 2: Loading a configuration file
def example_from_config():
    """Load an IFU-2 setup and print both windows."""
    config_file = Path(__file__).parent / "gmos_ifu2.yaml"
    optics = GratingOpticsFactory.from_file(config_file)

    (start_a, end_a), (start_b, end_b) = optics.ifu2_windows(2.5)
    print(f"{optics}: {optics.binned_pixel_count()} binned pixels")
    print(f"  slit 1: {start_a:.2f} - {end_a:.2f} nm")
    print(f"  slit 2: {start_b:.2f} - {end_b:.2f} nm")

    grid = optics.wavelength_grid()
    throughput = optics.transmission_at(grid)
    print(f"  mean grating transmission on detector: {np.mean(throughput):.3f}")


if __name__ == "__main__":
    setup_logging(level="WARNING")
    example_direct()
    example_from_config()
