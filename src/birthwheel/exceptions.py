"""Custom exceptions for BirthWheel.

Ephemeris provider errors have no class here; they reach the caller unchanged.
"""


class BirthWheelError(Exception):
    """Base exception for all BirthWheel errors."""


class ChartValidationError(BirthWheelError, ValueError):
    """Raised when a chart input is rejected before any computation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class GeocodingError(BirthWheelError):
    """Geocoder call failure."""
