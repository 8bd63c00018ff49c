"""
Grating optics: dispersion, wavelength coverage and transmission of a grating
on a given detector.
"""

import math
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, Union

import numpy as np
from scipy.interpolate import interp1d

from itcoptics.calibration.structures import DispersionCurve
from itcoptics.core.abc import BinningProvider, CalibrationSource, DetectorCapability
from itcoptics.core.constants import DEFAULT_WAVELENGTH_UNIT, KNOWN_NAMESPACES, STANDARD_NAMESPACE
from itcoptics.core.exceptions import PreconditionViolation
from itcoptics.core.logging_config import get_logger
from itcoptics.core.units import to_nm
from itcoptics.detector.binning import Binning, check_binning
from itcoptics.detector.detector import Detector

logger = get_logger("instrument.grating")

NamespaceSelector = Callable[[DetectorCapability], str]


def standard_namespace(detector: DetectorCapability) -> str:
    """Selector for instruments calibrated in a single namespace."""
    return STANDARD_NAMESPACE


@dataclass(frozen=True)
class GratingSpec:
    """
    The setup a GratingOptics instance is built for.

    Attributes
    ----------
    grating_name : str
        Grating identifier
    central_wavelength : float
        Central wavelength setting in nm
    detector_pixel_count : int
        Unbinned pixels along the dispersion axis
    spectral_binning : int
        Binning factor along the dispersion axis
    """

    grating_name: str
    central_wavelength: float
    detector_pixel_count: int
    spectral_binning: int = 1

    def validate(self) -> None:
        """
        Raises
        ------
        PreconditionViolation
            If any field is out of range
        """
        if not isinstance(self.grating_name, str) or not self.grating_name.strip():
            raise PreconditionViolation("grating_name", self.grating_name, "must be non-empty")

        wavelength = self.central_wavelength
        if isinstance(wavelength, bool) or not isinstance(wavelength, Real):
            raise PreconditionViolation("central_wavelength", wavelength, "must be a number")
        if not math.isfinite(wavelength) or wavelength <= 0:
            raise PreconditionViolation(
                "central_wavelength", wavelength, "must be finite and positive"
            )

        pixels = self.detector_pixel_count
        if isinstance(pixels, bool) or not isinstance(pixels, (int, np.integer)):
            raise PreconditionViolation("detector_pixel_count", pixels, "must be an integer")
        if pixels <= 0:
            raise PreconditionViolation("detector_pixel_count", pixels, "must be > 0")

        check_binning("spectral_binning", self.spectral_binning)


class GratingOptics:
    """
    Transmission and dispersion properties of a grating.

    The calibration namespace is chosen by `namespace_selector` from the
    detector, then the grating's data is resolved once, at construction.
    Instances are immutable afterwards and all queries are pure.

    Parameters
    ----------
    namespace_selector : callable
        Maps the detector to a calibration namespace
    grating_name : str
        Grating identifier
    detector : DetectorCapability
        Detector the grating disperses onto; only consulted here
    central_wavelength : float
        Central wavelength setting in nm
    detector_pixel_count : int
        Unbinned pixels along the dispersion axis
    spectral_binning : int
        Binning factor along the dispersion axis
    source : CalibrationSource
        Calibration lookup

    Raises
    ------
    PreconditionViolation
        Invalid arguments, or a namespace outside `namespaces`. Raised before
        the calibration source is queried.
    NotFoundError, DataCorruptError
        Propagated unchanged from the calibration source
    """

    #: Namespaces a selector may legally return
    namespaces: FrozenSet[str] = KNOWN_NAMESPACES

    def __init__(
        self,
        namespace_selector: NamespaceSelector,
        grating_name: str,
        detector: DetectorCapability,
        central_wavelength: float,
        detector_pixel_count: int,
        spectral_binning: int,
        source: CalibrationSource,
    ):
        spec = GratingSpec(
            grating_name=grating_name,
            central_wavelength=central_wavelength,
            detector_pixel_count=detector_pixel_count,
            spectral_binning=spectral_binning,
        )
        spec.validate()

        namespace = namespace_selector(detector)
        if namespace not in self.namespaces:
            raise PreconditionViolation(
                "namespace",
                namespace,
                f"detector '{detector.name}' maps to no known namespace {sorted(self.namespaces)}",
            )

        curve = source.resolve(namespace, grating_name)

        self._spec = spec
        self._namespace = namespace
        self._curve = curve
        self._detector_name = str(detector.name)
        self._interpolator = interp1d(
            curve.transmission.wavelength,
            curve.transmission.transmission,
            kind="linear",
            bounds_error=False,
            fill_value=0.0,
            assume_sorted=True,
        )

        low, high = curve.domain
        if not low <= spec.central_wavelength <= high:
            logger.warning(
                f"Central wavelength {spec.central_wavelength} nm is outside the "
                f"transmission domain of {grating_name} ({low}-{high} nm)"
            )

        logger.info(f"Created {self!r}")

    @property
    def spec(self) -> GratingSpec:
        return self._spec

    @property
    def namespace(self) -> str:
        """Calibration namespace the grating was resolved in."""
        return self._namespace

    @property
    def curve(self) -> DispersionCurve:
        return self._curve

    @property
    def grating_name(self) -> str:
        return self._spec.grating_name

    @property
    def detector_name(self) -> str:
        return self._detector_name

    @property
    def central_wavelength(self) -> float:
        return float(self._spec.central_wavelength)

    @property
    def detector_pixel_count(self) -> int:
        return int(self._spec.detector_pixel_count)

    @property
    def spectral_binning(self) -> int:
        return int(self._spec.spectral_binning)

    def dispersion(self) -> float:
        """Dispersion in nm per unbinned pixel; does not depend on binning."""
        return self._curve.dispersion

    def transmission_at(self, wavelength: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Grating transmission at the given wavelength(s).

        Parameters
        ----------
        wavelength : float or array
            Wavelength(s) in nm

        Returns
        -------
        float or array
            Linearly interpolated transmission in [0, 1]; 0 outside the
            tabulated domain and for NaN input
        """
        # NaN wavelengths interpolate to NaN; report them as no transmission
        result = np.nan_to_num(np.clip(self._interpolator(wavelength), 0.0, 1.0), nan=0.0)
        if np.ndim(result) == 0:
            return float(result)
        return result

    def coverage_half_width(self) -> float:
        """Half the wavelength span of one unshifted detector window."""
        return self.dispersion() * self.detector_pixel_count / 2

    def start(self) -> float:
        """Shortest wavelength reaching the detector."""
        return self.central_wavelength - self.coverage_half_width()

    def end(self) -> float:
        """Longest wavelength reaching the detector."""
        return self.central_wavelength + self.coverage_half_width()

    def effective_wavelength(self) -> float:
        return self.central_wavelength

    def pixel_width(self) -> float:
        """Wavelength span of one binned pixel in nm."""
        return self.dispersion() * self.spectral_binning

    def binned_pixel_count(self) -> int:
        """Pixels read out along the dispersion axis; partial bins are dropped."""
        return self.detector_pixel_count // self.spectral_binning

    def grating_resolution(self) -> float:
        """Nominal resolving power R of the grating."""
        return self._curve.grating.resolving_power

    def grating_resolution_nm(self) -> float:
        """Nominal resolution element in nm."""
        return self._curve.grating.resolution

    def grating_blaze(self) -> float:
        """Blaze wavelength in nm."""
        return self._curve.grating.blaze

    def wavelength_grid(self) -> np.ndarray:
        """Centre wavelength of each binned pixel, starting at `start()`."""
        width = self.pixel_width()
        centers = (np.arange(self.binned_pixel_count()) + 0.5) * width
        return self.start() + centers

    def coverage(self) -> Tuple[float, float]:
        return self.start(), self.end()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(grating={self.grating_name!r}, "
            f"namespace={self.namespace!r}, detector={self.detector_name!r}, "
            f"central_wavelength={self.central_wavelength}, "
            f"pixels={self.detector_pixel_count}, binning={self.spectral_binning})"
        )

    def __str__(self) -> str:
        return f"Grating Optics: {self.grating_name}"


def create(
    namespace_selector: NamespaceSelector,
    grating_name: str,
    detector: DetectorCapability,
    central_wavelength: float,
    detector_pixel_count: int,
    spectral_binning: int,
    source: CalibrationSource,
) -> GratingOptics:
    """Resolve a grating for an arbitrary namespace rule."""
    return GratingOptics(
        namespace_selector,
        grating_name,
        detector,
        central_wavelength,
        detector_pixel_count,
        spectral_binning,
        source,
    )


class InstrumentGratingOptics(GratingOptics):
    """
    Grating optics of an instrument family with a fixed namespace rule.

    Subclasses set `namespace_selector`; the constructor then takes the same
    arguments as GratingOptics without the selector.
    """

    namespace_selector: NamespaceSelector = staticmethod(standard_namespace)

    def __init__(
        self,
        grating_name: str,
        detector: DetectorCapability,
        central_wavelength: float,
        detector_pixel_count: int,
        spectral_binning: int,
        source: CalibrationSource,
    ):
        super().__init__(
            type(self).namespace_selector,
            grating_name,
            detector,
            central_wavelength,
            detector_pixel_count,
            spectral_binning,
            source,
        )

    @classmethod
    def from_binning(
        cls,
        grating_name: str,
        detector: DetectorCapability,
        central_wavelength: float,
        detector_pixel_count: int,
        binning: BinningProvider,
        source: CalibrationSource,
    ) -> "InstrumentGratingOptics":
        """Build with the spectral binning taken from a binning provider."""
        return cls(
            grating_name,
            detector,
            central_wavelength,
            detector_pixel_count,
            binning.spectral_binning,
            source,
        )

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], source: Optional[CalibrationSource] = None
    ) -> "InstrumentGratingOptics":
        """
        Build from a configuration dictionary.

        Parameters
        ----------
        config : dict
            Configuration with 'calibration', 'grating', 'detector' and
            optional 'binning' sections
        source : CalibrationSource, optional
            Calibration lookup. If None, a CalibrationTable is opened on
            ``config['calibration']['directory']``.
        """
        from itcoptics.core.config import validate_grating_config

        validate_grating_config(config)
        if source is None:
            from itcoptics.calibration.table import CalibrationTable

            source = CalibrationTable(config["calibration"]["directory"])

        return cls.from_binning(source=source, **setup_from_config(config))

    @classmethod
    def from_file(
        cls, config_path: Union[str, Path], source: Optional[CalibrationSource] = None
    ) -> "InstrumentGratingOptics":
        """
        Load grating optics from a YAML or JSON configuration file.

        A relative calibration directory is taken relative to the file.
        """
        from itcoptics.core.config import load_config

        config = load_config(config_path)
        resolve_calibration_directory(config, config_path)
        return cls.from_config(config, source)


def resolve_calibration_directory(config: Dict[str, Any], config_path: Union[str, Path]) -> None:
    """Make ``calibration.directory`` relative to the config file, in place."""
    calibration = config.get("calibration")
    if isinstance(calibration, dict) and "directory" in calibration:
        directory = Path(calibration["directory"])
        if not directory.is_absolute():
            calibration["directory"] = str(Path(config_path).parent / directory)


def setup_from_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate a validated configuration into grating optics arguments.

    Returns
    -------
    dict
        grating_name, detector, central_wavelength (nm), detector_pixel_count
        and binning
    """
    grating = config["grating"]
    detector_config = config["detector"]
    binning_config = config.get("binning") or {}

    unit = grating.get("wavelength_unit", DEFAULT_WAVELENGTH_UNIT)
    detector_name = detector_config.get("name") or detector_config["family"]

    return {
        "grating_name": grating["name"],
        "detector": Detector.from_name(detector_name, detector_config.get("family")),
        "central_wavelength": float(to_nm(grating["central_wavelength"], unit)),
        "detector_pixel_count": detector_config["pixels"],
        "binning": Binning(
            spatial_binning=binning_config.get("spatial", 1),
            spectral_binning=binning_config.get("spectral", 1),
        ),
    }
