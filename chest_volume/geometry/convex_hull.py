"""
Convex Hull Engine

Triangulates the convex hull of a 3D point set with Qhull and integrates its
volume and volume-weighted centroid by signed tetrahedron decomposition.
"""

import numpy as np
from scipy.spatial import ConvexHull, QhullError
from typing import Optional, Sequence, Tuple
import logging

from ..data_models import HullResult
from ..exceptions import InsufficientPointsError, DegenerateGeometryError
from ..utils.config_manager import ConfigManager


class ConvexHullEngine:
    """Convex hull volume and centroid calculator for marker point sets."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize convex hull engine.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        hull_config = self.config.get_hull_params()

        # A tetrahedron is the smallest solid a hull can enclose
        self.min_points = int(hull_config.get('min_points', 4))

        # Relative volume below which the point set is considered flat
        self.degenerate_tolerance = float(hull_config.get('degenerate_tolerance', 1e-12))

        self.logger.debug(f"Convex hull engine initialized: min_points={self.min_points}, "
                          f"tolerance={self.degenerate_tolerance}")

    def compute(self, points: Sequence[Sequence[float]]) -> HullResult:
        """
        Compute hull faces, enclosed volume and volume-weighted centroid.

        Args:
            points: Nx3 array-like of point coordinates

        Returns:
            HullResult with outward-wound faces indexing into points

        Raises:
            InsufficientPointsError: If fewer than min_points points are given
            DegenerateGeometryError: If the points are coplanar or collinear
        """
        pts = self._as_points(points)
        n_points = len(pts)

        if n_points < self.min_points:
            raise InsufficientPointsError(
                f"Convex hull needs at least {self.min_points} points, got {n_points}",
                n_points=n_points
            )

        extent = np.ptp(pts, axis=0)

        # All points coincide: zero volume, centroid is the point itself
        if not np.any(extent):
            return HullResult(
                points=pts,
                faces=np.empty((0, 3), dtype=int),
                volume=0.0,
                centroid=pts[0].copy()
            )

        try:
            hull = ConvexHull(pts)
        except QhullError as e:
            reason = str(e).strip().splitlines()[0] if str(e).strip() else "flat input"
            raise DegenerateGeometryError(
                f"Points are coplanar or collinear ({n_points} points): {reason}"
            ) from e

        faces, tet_volumes, tet_centroids = self.decompose(pts, hull.simplices)
        volume = float(np.sum(tet_volumes))

        if volume <= self.degenerate_tolerance * float(np.max(extent)) ** 3:
            raise DegenerateGeometryError(
                f"Convex hull of {n_points} points encloses no volume (volume={volume:.3e})"
            )

        centroid = np.sum(tet_volumes[:, np.newaxis] * tet_centroids, axis=0) / volume

        return HullResult(points=pts, faces=faces, volume=volume, centroid=centroid)

    @staticmethod
    def decompose(points: np.ndarray,
                  faces: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Split the hull into tetrahedra spanning an interior point and each face.

        The mean of the input points is interior to the hull, so every
        tetrahedron has non-negative orientation once its face is wound outward.

        Args:
            points: Nx3 point coordinates
            faces: Mx3 triangle indices into points

        Returns:
            Tuple of (outward_faces, tetrahedron_volumes, tetrahedron_centroids)
        """
        reference = points.mean(axis=0)

        a = points[faces[:, 0]] - reference
        b = points[faces[:, 1]] - reference
        c = points[faces[:, 2]] - reference

        # det([a; b; c]) / 6 for every tetrahedron
        signed = np.einsum('ij,ij->i', a, np.cross(b, c)) / 6.0

        outward = faces.astype(int, copy=True)
        inward = signed < 0
        outward[inward] = outward[inward][:, [0, 2, 1]]

        tet_centroids = (points[faces[:, 0]] + points[faces[:, 1]] +
                         points[faces[:, 2]] + reference) / 4.0

        return outward, np.abs(signed), tet_centroids

    @staticmethod
    def _as_points(points: Sequence[Sequence[float]]) -> np.ndarray:
        """Validate input and return an Nx3 float array."""
        pts = np.asarray(points, dtype=float)

        if pts.size == 0:
            pts = pts.reshape(0, 3)

        if pts.ndim != 2 or pts.shape[1] != 3:
            raise ValueError(f"Points must be an Nx3 array, got shape {pts.shape}")

        if not np.all(np.isfinite(pts)):
            raise ValueError("Points must have finite coordinates")

        return pts


def convex_hull(points: Sequence[Sequence[float]],
                config_manager: Optional[ConfigManager] = None) -> HullResult:
    """
    Compute the convex hull of a 3D point set.

    Args:
        points: Nx3 array-like of point coordinates
        config_manager: Optional configuration manager

    Returns:
        HullResult with faces, volume and volume-weighted centroid
    """
    return ConvexHullEngine(config_manager).compute(points)
