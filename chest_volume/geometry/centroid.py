"""
Centroid Strategies

Reference centres toward which markers are pulled during position adjustment.
"""

from enum import Enum
from typing import Optional, Union
import numpy as np

from .convex_hull import ConvexHullEngine
from ..exceptions import InsufficientPointsError
from ..utils.config_manager import ConfigManager


class CentroidMethod(str, Enum):
    """Available ways of computing a timeframe's reference centre."""
    AVERAGE = "average"
    CONVEX_HULL = "convex_hull"


class CentroidStrategy:
    """Computes a single 3D centre for a set of marker positions."""

    method: CentroidMethod

    def compute(self, points: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class AverageCentroid(CentroidStrategy):
    """Arithmetic mean of all finite marker positions."""

    method = CentroidMethod.AVERAGE

    def compute(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        finite = np.all(np.isfinite(pts), axis=1)
        if not np.any(finite):
            raise InsufficientPointsError("Cannot average an empty point set", n_points=0)
        return pts[finite].mean(axis=0)


class ConvexHullCentroid(CentroidStrategy):
    """Volume-weighted centroid of the solid convex hull."""

    method = CentroidMethod.CONVEX_HULL

    def __init__(self, engine: Optional[ConvexHullEngine] = None,
                 config_manager: Optional[ConfigManager] = None):
        self.engine = engine or ConvexHullEngine(config_manager)

    def compute(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        finite = np.all(np.isfinite(pts), axis=1)
        return self.engine.compute(pts[finite]).centroid


def get_centroid_strategy(method: Union[str, CentroidMethod, CentroidStrategy],
                          config_manager: Optional[ConfigManager] = None) -> CentroidStrategy:
    """
    Resolve a centroid method name or enum member to a strategy instance.

    Args:
        method: "average", "convex_hull", a CentroidMethod, or a ready strategy
        config_manager: Configuration used by hull-based strategies

    Returns:
        Centroid strategy instance
    """
    if isinstance(method, CentroidStrategy):
        return method

    try:
        method = CentroidMethod(method)
    except ValueError:
        valid = ", ".join(m.value for m in CentroidMethod)
        raise ValueError(f"Unknown centroid method {method!r}; expected one of: {valid}") from None

    if method is CentroidMethod.AVERAGE:
        return AverageCentroid()
    return ConvexHullCentroid(config_manager=config_manager)
