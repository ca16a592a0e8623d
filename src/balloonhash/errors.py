"""
Exception hierarchy for balloonhash.

Every error raised by the package derives from BalloonError. Precondition
violations are also ValueErrors so callers that only catch ValueError keep
working.
"""


class BalloonError(Exception):
    """Base class for all balloonhash errors."""


class BalloonParameterError(BalloonError, ValueError):
    """Cost parameter, input or hash capability violates a precondition."""


class UnsupportedHashError(BalloonError, ValueError):
    """Requested hash algorithm is not in the registry."""
