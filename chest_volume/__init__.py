"""
Chest Volume Analysis from Motion Capture Markers

Computes time-varying chest segment volumes from labelled 3D marker
trajectories for respiratory research.

This package implements:
- Reshaping of wide marker tables into long-form marker records
- Protrusion compensation by moving markers toward the chest centre
- Convex hull volume and volume-weighted centroid by tetrahedron integration
- Per-timeframe, per-segment volume series with skip-and-warn handling
"""

__version__ = "1.0.0"
__author__ = "Chest Volume Team"

from .data_models import (
    MarkerRecord, VolumeRecord, SkippedSegment, HullResult, VolumeReport,
    PipelineResult, records_to_frame, records_from_frame, volumes_to_frame
)
from .exceptions import (
    ChestVolumeError, MalformedInputError, GeometryError, InsufficientPointsError,
    DegenerateGeometryError, MissingSegmentError
)
from .geometry import (
    ConvexHullEngine, convex_hull, CentroidMethod, AverageCentroid, ConvexHullCentroid
)
from .processing import MarkerReshaper, PositionAdjuster, reshape, widen, adjust_positions
from .volume import VolumeCalculator, compute_volumes
from .segments import normalize_segments, segments_from_table, select_segments
from .pipeline import ChestVolumePipeline

__all__ = [
    # Operations
    'reshape', 'adjust_positions', 'compute_volumes', 'convex_hull', 'widen',
    # Components
    'MarkerReshaper', 'PositionAdjuster', 'VolumeCalculator', 'ConvexHullEngine',
    'ChestVolumePipeline', 'CentroidMethod', 'AverageCentroid', 'ConvexHullCentroid',
    # Segments
    'normalize_segments', 'segments_from_table', 'select_segments',
    # Data Models
    'MarkerRecord', 'VolumeRecord', 'SkippedSegment', 'HullResult', 'VolumeReport',
    'PipelineResult', 'records_to_frame', 'records_from_frame', 'volumes_to_frame',
    # Errors
    'ChestVolumeError', 'MalformedInputError', 'GeometryError', 'InsufficientPointsError',
    'DegenerateGeometryError', 'MissingSegmentError'
]
