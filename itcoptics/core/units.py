"""
Unit conversion utilities for itc-optics.

Calibration tables and optics queries work in nanometres; configuration files
may state wavelengths in other units.
"""

import numpy as np
from typing import Union

# Length of one unit in nanometres
_WAVELENGTH_SCALE = {
    "m": 1e9,
    "nm": 1.0,
    "um": 1e3,
    "μm": 1e3,
    "a": 0.1,
    "angstrom": 0.1,
    "ang": 0.1,
}

WAVELENGTH_UNITS = frozenset(_WAVELENGTH_SCALE)


def _scale(unit: str, role: str) -> float:
    try:
        return _WAVELENGTH_SCALE[unit.lower()]
    except KeyError:
        raise ValueError(f"Unknown {role} unit: {unit}")


def convert_wavelength(
    value: Union[float, np.ndarray], from_unit: str, to_unit: str
) -> Union[float, np.ndarray]:
    """
    Convert wavelength between units.

    Parameters
    ----------
    value : float or array
        Wavelength value(s) to convert
    from_unit : str
        Source unit: 'm', 'nm', 'um', 'A' (Angstrom)
    to_unit : str
        Target unit: 'm', 'nm', 'um', 'A' (Angstrom)

    Returns
    -------
    float or array
        Converted wavelength value(s)

    Examples
    --------
    >>> convert_wavelength(5000.0, 'A', 'nm')
    500.0
    >>> convert_wavelength(0.5, 'um', 'nm')
    500.0
    """
    nm = value * _scale(from_unit, "source")
    return nm / _scale(to_unit, "target")


def to_nm(value: Union[float, np.ndarray], unit: str) -> Union[float, np.ndarray]:
    """Convert a wavelength in `unit` to nanometres."""
    return convert_wavelength(value, unit, "nm")
