"""
Configuration management for itc-optics.

Provides utilities for loading and validating YAML/JSON configuration files
describing a grating/detector/binning setup.
"""

import json
import math
from pathlib import Path
from typing import Dict, Any, Union
import logging

import yaml

from itcoptics.core.units import WAVELENGTH_UNITS

logger = logging.getLogger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters
    ----------
    config_path : str or Path
        Path to configuration file (.yaml, .yml, or .json)

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    FileNotFoundError
        If config file does not exist
    ValueError
        If file format is not supported
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, "r") as f:
        if suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f)
        elif suffix == ".json":
            config = json.load(f)
        else:
            raise ValueError(
                f"Unsupported config file format: {suffix}. " "Use .yaml, .yml, or .json"
            )

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")

    logger.info(f"Loaded configuration from {config_path}")
    return config


def save_config(config: Dict[str, Any], config_path: Union[str, Path]) -> None:
    """
    Save configuration to YAML or JSON file.

    Parameters
    ----------
    config : dict
        Configuration dictionary
    config_path : str or Path
        Path to output file; unknown suffixes are written as YAML
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()

    if suffix == ".json":
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
    else:
        if suffix not in [".yaml", ".yml"]:
            config_path = config_path.with_suffix(".yaml")
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def _require_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    if name not in config:
        raise ValueError(f"Configuration must contain '{name}' section")
    section = config[name]
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' section must be a mapping")
    return section


def _require_int(section: Dict[str, Any], name: str, field: str, minimum: int) -> None:
    value = section[field]
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{name} '{field}' must be an integer >= {minimum}, got {value!r}")


def validate_grating_config(config: Dict[str, Any]) -> bool:
    """
    Validate grating optics configuration structure.

    Parameters
    ----------
    config : dict
        Configuration dictionary

    Returns
    -------
    bool
        True if valid

    Raises
    ------
    ValueError
        If configuration is invalid
    """
    if "instrument" in config:
        instrument = config["instrument"]
        if not isinstance(instrument, str) or not instrument.strip():
            raise ValueError(f"'instrument' must be a non-empty string, got {instrument!r}")

    calibration = _require_section(config, "calibration")
    if "directory" not in calibration:
        raise ValueError("Calibration config missing 'directory'")

    grating = _require_section(config, "grating")
    for field in ["name", "central_wavelength"]:
        if field not in grating:
            raise ValueError(f"Grating config missing required field: {field}")

    if not isinstance(grating["name"], str) or not grating["name"]:
        raise ValueError("Grating 'name' must be a non-empty string")

    wavelength = grating["central_wavelength"]
    if isinstance(wavelength, bool) or not isinstance(wavelength, (int, float)):
        raise ValueError(f"Grating 'central_wavelength' must be a number, got {wavelength!r}")
    if not math.isfinite(wavelength) or wavelength <= 0:
        raise ValueError("Grating 'central_wavelength' must be finite and positive")

    unit = grating.get("wavelength_unit", "nm")
    if str(unit).lower() not in WAVELENGTH_UNITS:
        raise ValueError(
            f"Invalid wavelength unit: {unit}. " f"Must be one of: {sorted(WAVELENGTH_UNITS)}"
        )

    detector = _require_section(config, "detector")
    if "name" not in detector and "family" not in detector:
        raise ValueError("Detector config must specify 'name' or 'family'")
    if "pixels" not in detector:
        raise ValueError("Detector config missing required field: pixels")
    _require_int(detector, "Detector", "pixels", 1)

    # Binning is optional and defaults to 1x1
    if "binning" in config:
        binning = _require_section(config, "binning")
        for field in ["spatial", "spectral"]:
            if field in binning:
                _require_int(binning, "Binning", field, 1)

    if "ifu_shift" in config:
        shift = config["ifu_shift"]
        if isinstance(shift, bool) or not isinstance(shift, (int, float)):
            raise ValueError(f"'ifu_shift' must be a number, got {shift!r}")

    return True
