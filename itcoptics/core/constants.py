"""
Calibration namespaces and shared defaults.
"""

# Grating tables measured with the standard detector electronics
STANDARD_NAMESPACE = "gratings"

# Grating tables for the legacy EEV detectors
LEGACY_NAMESPACE = "eev_gratings"

KNOWN_NAMESPACES = frozenset({STANDARD_NAMESPACE, LEGACY_NAMESPACE})

# Suffix of calibration table files
DEFAULT_TABLE_SUFFIX = ".csv"

# Transmission files are named <grating><TRANSMISSION_TAG><suffix>
TRANSMISSION_TAG = "_trans"

DEFAULT_WAVELENGTH_UNIT = "nm"
