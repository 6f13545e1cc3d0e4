"""
Exceptions raised by the trip and slope storage layer.

The analysis engine never raises for malformed GPS logs; these errors only
describe problems with the files that hold them.
"""


class TripNotFoundError(FileNotFoundError):
    """Raised when a trip file (or the trip directory) does not exist."""


class EmptyTripFileError(ValueError):
    """Raised when a trip file exists but holds no content."""


class InvalidTripFileError(ValueError):
    """Raised when a trip file is not valid JSON."""


class InvalidIdentifierError(ValueError):
    """Raised for trip or slope ids that could escape the data directory."""


class SlopeNotFoundError(KeyError):
    """Raised when a slope id is unknown."""
