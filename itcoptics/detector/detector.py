"""
Detector identity and family classification.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from itcoptics.core.exceptions import PreconditionViolation


class DetectorFamily(Enum):
    """CCD families with distinct grating calibrations."""

    EEV = "eev"
    E2V_DD = "e2v_dd"
    HAMAMATSU = "hamamatsu"

    @property
    def is_legacy(self) -> bool:
        """The EEV CCDs predate the current detector electronics."""
        return self is DetectorFamily.EEV

    @classmethod
    def from_name(cls, name: str) -> "DetectorFamily":
        """
        Look up a family by value or member name, ignoring case; spaces and
        hyphens match underscores (so "E2V DD" finds E2V_DD).

        Raises
        ------
        PreconditionViolation
            If the name matches no family
        """
        key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
        for family in cls:
            if key == family.value or key == family.name.lower():
                return family
        raise PreconditionViolation(
            "detector_family", name, f"must be one of {[f.value for f in cls]}"
        )


@dataclass(frozen=True)
class Detector:
    """
    A detector whose family is fixed when the object is built.

    Attributes
    ----------
    name : str
        Human-readable detector name
    family : DetectorFamily
        Calibration family
    """

    name: str
    family: DetectorFamily

    def __post_init__(self):
        if not isinstance(self.family, DetectorFamily):
            raise PreconditionViolation("family", self.family, "must be a DetectorFamily")

    def is_legacy_family(self) -> bool:
        return self.family.is_legacy

    @classmethod
    def from_name(cls, name: str, family: Optional[str] = None) -> "Detector":
        """
        Build a detector from its name, or from an explicit family name.

        Parameters
        ----------
        name : str
            Detector name; used as the family name when `family` is not given
        family : str, optional
            Family name (e.g. 'eev', 'hamamatsu')
        """
        return cls(name=name, family=DetectorFamily.from_name(family or name))

    def __str__(self) -> str:
        return self.name


GMOS_EEV = Detector("EEV", DetectorFamily.EEV)
GMOS_E2V_DD = Detector("E2V DD", DetectorFamily.E2V_DD)
GMOS_HAMAMATSU = Detector("Hamamatsu", DetectorFamily.HAMAMATSU)
