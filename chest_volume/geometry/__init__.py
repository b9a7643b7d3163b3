"""
Geometry Module

Convex hull triangulation, hull volume integration and centroid strategies.
"""

from .convex_hull import ConvexHullEngine, convex_hull
from .centroid import (
    CentroidMethod, CentroidStrategy, AverageCentroid, ConvexHullCentroid,
    get_centroid_strategy
)

__all__ = [
    'ConvexHullEngine', 'convex_hull',
    'CentroidMethod', 'CentroidStrategy', 'AverageCentroid', 'ConvexHullCentroid',
    'get_centroid_strategy'
]
