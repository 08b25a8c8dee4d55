# center_finder/errors.py
"""Domain errors and failure typing."""


class CenterFinderError(Exception):
    """Base class for center finder failures."""


class GeocodeError(CenterFinderError):
    """Raised when a single address cannot be resolved. Recoverable."""

    def __init__(self, address: str, reason: str):
        super().__init__(f"Geocoding failed for address: {address} ({reason})")
        self.address = address
        self.reason = reason


class NoMatchError(GeocodeError):
    """Raised when the service returns zero candidates."""

    def __init__(self, address: str):
        super().__init__(address, "no results found")


class RunError(CenterFinderError):
    """Raised for failures that stop a run."""


class InputError(RunError):
    """Raised when fewer than two addresses can be parsed."""


class InsufficientResultsError(RunError):
    """Raised when fewer than two addresses survive geocoding."""
