"""
Registry of instrument-family grating optics.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

from itcoptics.core.abc import CalibrationSource
from itcoptics.core.logging_config import get_logger
from itcoptics.instrument.grating import InstrumentGratingOptics
from itcoptics.instrument.gmos import GmosGratingOptics

logger = get_logger("instrument.factory")

DEFAULT_FAMILY = "gmos"


class StandardGratingOptics(InstrumentGratingOptics):
    """Grating optics of an instrument with a single grating namespace."""


class GratingOpticsFactory:
    """Factory for creating grating optics by instrument family."""

    _families: Dict[str, Type[InstrumentGratingOptics]] = {}

    @classmethod
    def register(cls, name: str, optics_class: Type[InstrumentGratingOptics]) -> None:
        """
        Register a grating optics class.

        Parameters
        ----------
        name : str
            Instrument family name
        optics_class : Type[InstrumentGratingOptics]
            Grating optics class
        """
        cls._families[name.lower()] = optics_class
        logger.debug(f"Registered grating optics: {name}")

    @classmethod
    def get(cls, name: str) -> Type[InstrumentGratingOptics]:
        """
        Raises
        ------
        ValueError
            If the family is not registered
        """
        key = name.lower()
        if key not in cls._families:
            available = ", ".join(cls._families.keys())
            raise ValueError(f"Unknown instrument family: {name}. Available: {available}")
        return cls._families[key]

    @classmethod
    def create(
        cls, name: str, source: CalibrationSource, **kwargs: Any
    ) -> InstrumentGratingOptics:
        """
        Create grating optics for an instrument family.

        Parameters
        ----------
        name : str
            Instrument family name
        source : CalibrationSource
            Calibration lookup
        **kwargs
            grating_name, detector, central_wavelength, detector_pixel_count
            and spectral_binning

        Returns
        -------
        InstrumentGratingOptics
        """
        return cls.get(name)(source=source, **kwargs)

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], source: Optional[CalibrationSource] = None
    ) -> InstrumentGratingOptics:
        """Create grating optics for the family named by ``config['instrument']``."""
        name = config.get("instrument", DEFAULT_FAMILY)
        return cls.get(name).from_config(config, source)

    @classmethod
    def from_file(
        cls, config_path: Union[str, Path], source: Optional[CalibrationSource] = None
    ) -> InstrumentGratingOptics:
        from itcoptics.core.config import load_config
        from itcoptics.instrument.grating import resolve_calibration_directory

        config = load_config(config_path)
        resolve_calibration_directory(config, config_path)
        return cls.from_config(config, source)

    @classmethod
    def list_families(cls) -> list:
        """List available instrument family names."""
        return list(cls._families.keys())


# Register default implementations
GratingOpticsFactory.register("gmos", GmosGratingOptics)
GratingOpticsFactory.register("generic", StandardGratingOptics)
