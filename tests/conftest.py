"""
Pytest configuration and shared fixtures for itc-optics tests.

This module provides:
- Grating records and transmission curves with known values
- In-memory and file-backed calibration sources
- Calibration sources that record or forbid lookups
- Temporary configuration files
"""

import numpy as np
import pandas as pd
import pytest
import yaml

from itcoptics.calibration.structures import GratingRecord, make_transmission_curve
from itcoptics.calibration.table import InMemoryCalibrationTable
from itcoptics.core.abc import CalibrationSource
from itcoptics.core.constants import LEGACY_NAMESPACE, STANDARD_NAMESPACE

B1200 = "B1200_G5301"
R400 = "R400_G5305"

# B1200 is tabulated with a different dispersion on the legacy EEV CCDs
GRATING_ROWS = {
    STANDARD_NAMESPACE: [
        {"name": B1200, "resolving_power": 3744.0, "blaze": 463.0, "resolution": 0.12, "dispersion": 0.261},
        {"name": R400, "resolving_power": 1918.0, "blaze": 764.0, "resolution": 0.39, "dispersion": 0.074},
    ],
    LEGACY_NAMESPACE: [
        {"name": B1200, "resolving_power": 3744.0, "blaze": 463.0, "resolution": 0.12, "dispersion": 0.024},
        {"name": R400, "resolving_power": 1918.0, "blaze": 764.0, "resolution": 0.39, "dispersion": 0.067},
    ],
}

TRANSMISSION_ROWS = {
    B1200: ([300.0, 400.0, 500.0, 600.0, 1000.0], [0.1, 0.5, 0.8, 0.6, 0.2]),
    R400: ([400.0, 700.0, 1100.0], [0.3, 0.75, 0.4]),
}


@pytest.fixture
def grating_tables():
    """namespace -> {name -> GratingRecord} for the test gratings."""
    return {
        namespace: {row["name"]: GratingRecord(**row) for row in rows}
        for namespace, rows in GRATING_ROWS.items()
    }


@pytest.fixture
def transmission_curves():
    """grating name -> TransmissionCurve for the test gratings."""
    return {name: make_transmission_curve(wl, tr) for name, (wl, tr) in TRANSMISSION_ROWS.items()}


@pytest.fixture
def memory_source(grating_tables, transmission_curves):
    """In-memory calibration source with both namespaces."""
    return InMemoryCalibrationTable(grating_tables, transmission_curves)


class RecordingSource(CalibrationSource):
    """Wraps a source and records every resolve() call."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    @property
    def namespaces(self):
        return self.inner.namespaces

    def list_gratings(self, namespace):
        return self.inner.list_gratings(namespace)

    def resolve(self, namespace, grating_name):
        self.calls.append((namespace, grating_name))
        return self.inner.resolve(namespace, grating_name)


class ForbiddenSource(CalibrationSource):
    """Fails the test if a lookup is attempted."""

    @property
    def namespaces(self):
        return frozenset({STANDARD_NAMESPACE, LEGACY_NAMESPACE})

    def list_gratings(self, namespace):
        raise AssertionError("list_gratings() must not be called")

    def resolve(self, namespace, grating_name):
        raise AssertionError(f"resolve({namespace!r}, {grating_name!r}) must not be called")


@pytest.fixture
def recording_source(memory_source):
    return RecordingSource(memory_source)


@pytest.fixture
def forbidden_source():
    return ForbiddenSource()


def write_calibration_dir(directory, grating_rows=GRATING_ROWS, transmission_rows=TRANSMISSION_ROWS):
    """Write grating tables and transmission files the way CalibrationTable reads them."""
    directory.mkdir(parents=True, exist_ok=True)
    for namespace, rows in grating_rows.items():
        df = pd.DataFrame(rows, columns=["name", "resolving_power", "blaze", "resolution", "dispersion"])
        with open(directory / f"{namespace}.csv", "w") as f:
            f.write(f"# {namespace} grating table\n")
            df.to_csv(f, index=False)
    for name, (wl, tr) in transmission_rows.items():
        np.savetxt(
            directory / f"{name}_trans.csv",
            np.column_stack([wl, tr]),
            delimiter=",",
            header="wavelength,transmission",
            comments="",
        )
    return directory


@pytest.fixture
def calibration_dir(tmp_path):
    """Temporary calibration directory with both namespaces."""
    return write_calibration_dir(tmp_path / "calibration")


@pytest.fixture
def sample_config_dict():
    """Configuration for the B1200 end-to-end setup (calibration directory relative)."""
    return {
        "instrument": "gmos",
        "calibration": {"directory": "calibration"},
        "grating": {"name": B1200, "central_wavelength": 500.0, "wavelength_unit": "nm"},
        "detector": {"name": "Hamamatsu", "pixels": 6144},
        "binning": {"spatial": 1, "spectral": 2},
        "ifu_shift": 25.0,
    }


@pytest.fixture
def temp_config_file(tmp_path, calibration_dir, sample_config_dict):
    """YAML config next to the calibration directory."""
    config_path = tmp_path / "setup.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def make_calibration_dir(tmp_path):
    """
    Factory fixture for calibration directories with custom contents.

    Returns a function taking grating_rows/transmission_rows in the same
    shape as GRATING_ROWS/TRANSMISSION_ROWS.
    """

    def _create(grating_rows=None, transmission_rows=None, name="custom"):
        return write_calibration_dir(
            tmp_path / name,
            GRATING_ROWS if grating_rows is None else grating_rows,
            TRANSMISSION_ROWS if transmission_rows is None else transmission_rows,
        )

    return _create
