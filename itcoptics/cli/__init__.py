"""
Command-line interface for itc-optics.

This module provides CLI tools for:
- Wavelength coverage of a configured grating setup
- Listing the gratings of a calibration table
"""

__all__ = []
