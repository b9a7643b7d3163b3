"""
Exception Types for the Chest Volume Pipeline

Fatal input and geometry errors are raised to the caller; only the volume
calculator downgrades geometry errors to warnings for single segments.
"""

from typing import Optional


class ChestVolumeError(Exception):
    """Base class for all pipeline errors."""


class MalformedInputError(ChestVolumeError, ValueError):
    """Raw marker table or record set does not follow the expected layout."""

    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class GeometryError(ChestVolumeError, ValueError):
    """A point set cannot be turned into a solid convex hull."""

    def __init__(self, message: str, timeframe: Optional[int] = None,
                 segment: Optional[str] = None):
        super().__init__(message)
        self.timeframe = timeframe
        self.segment = segment


class InsufficientPointsError(GeometryError):
    """Fewer than four points were supplied to the hull engine."""

    def __init__(self, message: str, n_points: int = 0, **context):
        super().__init__(message, **context)
        self.n_points = n_points


class DegenerateGeometryError(GeometryError):
    """Points are coplanar or collinear, so the hull encloses no volume."""


class MissingSegmentError(ChestVolumeError, LookupError):
    """A requested segment name is not part of the segment definition."""

    def __init__(self, segment: str):
        super().__init__(f"Segment not found in segment definition: {segment!r}")
        self.segment = segment
