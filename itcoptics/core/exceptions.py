"""
Error types raised by the grating optics model.

Every error carries the identifiers needed to tell the caller which
grating/detector/binning combination was rejected.
"""

from typing import Any, Optional


class ItcOpticsError(Exception):
    """Base class for all itc-optics errors."""


class NotFoundError(ItcOpticsError, LookupError):
    """
    A grating (or a whole namespace) has no entry in the calibration data.

    This is an invalid instrument configuration; there is no default grating.
    """

    def __init__(self, namespace: str, grating_name: Optional[str] = None, message: str = ""):
        self.namespace = namespace
        self.grating_name = grating_name
        if not message:
            if grating_name is None:
                message = f"Unknown calibration namespace '{namespace}'"
            else:
                message = f"Grating '{grating_name}' not found in namespace '{namespace}'"
        super().__init__(message)


class DataCorruptError(ItcOpticsError, ValueError):
    """Calibration data violates its invariants (positivity, coverage, ordering)."""

    def __init__(self, namespace: str, grating_name: Optional[str], reason: str):
        self.namespace = namespace
        self.grating_name = grating_name
        self.reason = reason
        super().__init__(
            f"Corrupt calibration data for grating '{grating_name}' "
            f"in namespace '{namespace}': {reason}"
        )


class PreconditionViolation(ItcOpticsError, ValueError):
    """Caller supplied an invalid construction argument."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


# Names used by the ITC error taxonomy
ConfigurationError = NotFoundError
DataIntegrityError = DataCorruptError
