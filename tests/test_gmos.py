"""
Tests for GMOS grating optics and the IFU-2 windows.
"""

import json

import numpy as np
import pytest

from itcoptics.core.constants import LEGACY_NAMESPACE, STANDARD_NAMESPACE
from itcoptics.core.exceptions import NotFoundError, PreconditionViolation
from itcoptics.detector import (
    Binning,
    Detector,
    DetectorFamily,
    GMOS_E2V_DD,
    GMOS_EEV,
    GMOS_HAMAMATSU,
)
from itcoptics.instrument.gmos import GmosGratingOptics, gmos_namespace


@pytest.fixture
def b1200(memory_source):
    """B1200 on the Hamamatsu CCDs, 6144 pixels, binned 2 spectrally."""
    return GmosGratingOptics("B1200_G5301", GMOS_HAMAMATSU, 500.0, 6144, 2, memory_source)


def test_gmos_namespace_legacy():
    """Test EEV detectors select the legacy grating tables."""
    assert gmos_namespace(GMOS_EEV) == LEGACY_NAMESPACE


def test_gmos_namespace_standard():
    """Test current detectors select the standard grating tables."""
    assert gmos_namespace(GMOS_E2V_DD) == STANDARD_NAMESPACE
    assert gmos_namespace(GMOS_HAMAMATSU) == STANDARD_NAMESPACE


def test_gmos_namespace_is_total():
    """Test every detector family maps to exactly one known namespace."""
    for family in DetectorFamily:
        namespace = gmos_namespace(Detector(family.value, family))
        assert namespace in {STANDARD_NAMESPACE, LEGACY_NAMESPACE}
        assert (namespace == LEGACY_NAMESPACE) == family.is_legacy


def test_gmos_namespace_accepts_any_detector_capability():
    """Test the selector only needs is_legacy_family()."""

    class FakeDetector:
        name = "fake"

        def __init__(self, legacy):
            self.legacy = legacy

        def is_legacy_family(self):
            return self.legacy

    assert gmos_namespace(FakeDetector(True)) == LEGACY_NAMESPACE
    assert gmos_namespace(FakeDetector(False)) == STANDARD_NAMESPACE


def test_gmos_resolves_namespace_from_detector(memory_source):
    """Test the same grating differs between EEV and Hamamatsu tables."""
    eev = GmosGratingOptics("B1200_G5301", GMOS_EEV, 500.0, 6144, 1, memory_source)
    hamamatsu = GmosGratingOptics("B1200_G5301", GMOS_HAMAMATSU, 500.0, 6144, 1, memory_source)

    assert eev.namespace == LEGACY_NAMESPACE
    assert hamamatsu.namespace == STANDARD_NAMESPACE
    assert eev.dispersion() == pytest.approx(0.024)
    assert hamamatsu.dispersion() == pytest.approx(0.261)


def test_window_end_to_end(b1200):
    """Test the IFU-2 window bounds of the B1200 example."""
    assert b1200.coverage_half_width() == pytest.approx(801.792)
    assert b1200.window_start(0) == pytest.approx(-301.792)
    assert b1200.window_start(25.0) == pytest.approx(-276.792)
    assert b1200.window_end(0) == pytest.approx(1301.792)


def test_window_width(b1200):
    """Test an unshifted window spans dispersion times pixel count."""
    assert b1200.window_end(0) - b1200.window_start(0) == pytest.approx(0.261 * 6144)


@pytest.mark.parametrize("shift", [-1e4, -25.0, -0.5, 0.0, 0.5, 25.0, 3.3e5])
def test_shift_is_pure_translation(b1200, shift):
    """Test window_start/window_end move by exactly the shift, unchecked."""
    assert b1200.window_start(shift) == pytest.approx(b1200.window_start(0) + shift)
    assert b1200.window_end(shift) == pytest.approx(b1200.window_end(0) + shift)


def test_unshifted_window_matches_single_window(b1200):
    """Test window_start(0)/window_end(0) equal start()/end()."""
    assert b1200.window_start(0) == b1200.start()
    assert b1200.window_end(0) == b1200.end()


def test_ifu2_windows(b1200):
    """Test both IFU-2 windows are offset symmetrically."""
    (start_a, end_a), (start_b, end_b) = b1200.ifu2_windows(25.0)
    assert start_a == pytest.approx(b1200.window_start(-25.0))
    assert end_a == pytest.approx(b1200.window_end(-25.0))
    assert start_b == pytest.approx(b1200.window_start(25.0))
    assert end_b == pytest.approx(b1200.window_end(25.0))
    assert start_b - start_a == pytest.approx(50.0)


def test_from_binning(memory_source):
    """Test the spectral binning is taken from the binning provider."""
    optics = GmosGratingOptics.from_binning(
        "R400_G5305", GMOS_E2V_DD, 700.0, 6144, Binning(spatial_binning=4, spectral_binning=2), memory_source
    )
    assert optics.spectral_binning == 2
    assert optics.pixel_width() == pytest.approx(0.074 * 2)


def test_numpy_integer_arguments(memory_source):
    """Test numpy integer pixel counts and binning are accepted."""
    optics = GmosGratingOptics(
        "B1200_G5301", GMOS_HAMAMATSU, 500.0, np.int64(6144), np.int64(2), memory_source
    )
    assert optics.spectral_binning == 2
    assert type(optics.spectral_binning) is int
    assert optics.window_start(0.0) == pytest.approx(-301.792)

    binned = GmosGratingOptics.from_binning(
        "B1200_G5301",
        GMOS_HAMAMATSU,
        500.0,
        6144,
        Binning(spatial_binning=np.int64(1), spectral_binning=np.int64(2)),
        memory_source,
    )
    assert binned.binned_pixel_count() == 3072


def test_missing_grating(memory_source):
    """Test an unknown grating raises NotFoundError with context."""
    with pytest.raises(NotFoundError) as exc_info:
        GmosGratingOptics("Z9999", GMOS_EEV, 500.0, 6144, 1, memory_source)
    assert exc_info.value.namespace == LEGACY_NAMESPACE
    assert exc_info.value.grating_name == "Z9999"


def test_zero_binning_never_queries(forbidden_source):
    """Test spectral_binning = 0 fails before any lookup."""
    with pytest.raises(PreconditionViolation):
        GmosGratingOptics("B1200_G5301", GMOS_HAMAMATSU, 500.0, 6144, 0, forbidden_source)


def test_zero_pixels_never_queries(forbidden_source):
    """Test detector_pixel_count = 0 fails before any lookup."""
    with pytest.raises(PreconditionViolation):
        GmosGratingOptics("B1200_G5301", GMOS_HAMAMATSU, 500.0, 0, 1, forbidden_source)


def test_from_config(sample_config_dict, calibration_dir):
    """Test building from a configuration dictionary."""
    sample_config_dict["calibration"]["directory"] = str(calibration_dir)
    optics = GmosGratingOptics.from_config(sample_config_dict)

    assert optics.namespace == STANDARD_NAMESPACE
    assert optics.spectral_binning == 2
    assert optics.window_start(sample_config_dict["ifu_shift"]) == pytest.approx(-276.792)


def test_from_config_with_injected_source(sample_config_dict, recording_source):
    """Test an injected source is used instead of the calibration directory."""
    sample_config_dict["detector"] = {"name": "GMOS-N EEV", "family": "eev", "pixels": 6144}
    optics = GmosGratingOptics.from_config(sample_config_dict, recording_source)

    assert optics.namespace == LEGACY_NAMESPACE
    assert optics.detector_name == "GMOS-N EEV"
    assert recording_source.calls == [(LEGACY_NAMESPACE, "B1200_G5301")]


def test_from_config_angstrom(sample_config_dict, memory_source):
    """Test the central wavelength is converted to nm."""
    sample_config_dict["grating"]["central_wavelength"] = 5000.0
    sample_config_dict["grating"]["wavelength_unit"] = "A"
    optics = GmosGratingOptics.from_config(sample_config_dict, memory_source)
    assert optics.central_wavelength == pytest.approx(500.0)


def test_from_config_invalid(sample_config_dict, memory_source):
    """Test configuration errors are reported before construction."""
    del sample_config_dict["grating"]["name"]
    with pytest.raises(ValueError, match="missing required field: name"):
        GmosGratingOptics.from_config(sample_config_dict, memory_source)


def test_from_file_yaml(temp_config_file):
    """Test loading from a YAML file with a relative calibration directory."""
    optics = GmosGratingOptics.from_file(temp_config_file)
    assert optics.grating_name == "B1200_G5301"
    assert optics.coverage_half_width() == pytest.approx(801.792)


def test_from_file_json(tmp_path, calibration_dir, sample_config_dict):
    """Test loading from a JSON file."""
    config_path = tmp_path / "setup.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_dict, f)

    optics = GmosGratingOptics.from_file(config_path)
    assert optics.namespace == STANDARD_NAMESPACE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
