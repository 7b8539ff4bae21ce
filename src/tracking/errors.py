"""
Error types raised by the sensing path.
"""


class TrackingError(Exception):
    """Base class for hand tracking errors."""


class DegenerateInput(TrackingError):
    """Landmark set is malformed or describes a zero-length hand."""


class DetectorFailure(TrackingError):
    """The hand-landmark detector raised or could not produce a result."""
