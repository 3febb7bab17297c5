"""Error types raised inside the overlay engine.

Boundary functions catch these and turn them into ``{"error": ...}`` results.
"""


class OverlayToolError(Exception):
    """Base class for expected overlay tool failures."""


class DataAbsenceError(OverlayToolError):
    """Raised when required data is missing (no active video, no analytics rows)."""


class MalformedInputError(OverlayToolError):
    """Raised when stored data cannot be interpreted (bad URL, non-numeric field)."""
