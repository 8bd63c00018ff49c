"""
Grating optics models.

This module provides:
- The base grating optics model (dispersion, coverage, transmission)
- Instrument-family specializations with their namespace rules
- A registry to build optics by family name
"""

from itcoptics.instrument.grating import (
    GratingSpec,
    GratingOptics,
    InstrumentGratingOptics,
    create,
    standard_namespace,
)
from itcoptics.instrument.gmos import GmosGratingOptics, gmos_namespace
from itcoptics.instrument.factory import GratingOpticsFactory, StandardGratingOptics

__all__ = [
    "GratingSpec",
    "GratingOptics",
    "InstrumentGratingOptics",
    "create",
    "standard_namespace",
    "GmosGratingOptics",
    "gmos_namespace",
    "GratingOpticsFactory",
    "StandardGratingOptics",
]
