"""
Marker Processing Module

Reshaping of raw marker tables and protrusion compensation of marker positions.
"""

from .marker_reshaper import MarkerReshaper, parse_column_header, reshape, widen
from .position_adjuster import PositionAdjuster, adjust_positions, adjust_toward

__all__ = [
    'MarkerReshaper', 'parse_column_header', 'reshape', 'widen',
    'PositionAdjuster', 'adjust_positions', 'adjust_toward'
]
