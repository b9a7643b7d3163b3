"""
Position Adjuster

Moves every marker a fixed distance toward its timeframe's reference centre
to compensate for marker protrusion from the skin surface.
"""

import numpy as np
from typing import Iterable, List, Optional, Union
import logging

from ..data_models import MarkerRecord
from ..exceptions import GeometryError, InsufficientPointsError
from ..geometry.centroid import CentroidMethod, CentroidStrategy, get_centroid_strategy
from ..utils.config_manager import ConfigManager
from ..utils.timeframes import group_by_timeframe, map_timeframes


def adjust_toward(points: np.ndarray, center: np.ndarray, distance: float) -> np.ndarray:
    """
    Move points a fixed distance along their direction to a centre.

    Points coinciding with the centre, and points with non-finite
    coordinates, are returned unchanged.

    Args:
        points: Nx3 marker coordinates
        center: Reference centre (3,)
        distance: Displacement length; negative values move points away

    Returns:
        New Nx3 array of adjusted coordinates
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    center = np.asarray(center, dtype=float).reshape(3)

    direction = center - pts
    norms = np.linalg.norm(direction, axis=1)

    movable = np.isfinite(norms) & (norms != 0)

    adjusted = pts.copy()
    unit = direction[movable] / norms[movable, np.newaxis]
    adjusted[movable] = pts[movable] + distance * unit

    return adjusted


class PositionAdjuster:
    """Per-timeframe marker adjustment toward a computed chest centre."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize position adjuster.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        adj_config = self.config.get_adjustment_params()

        self.distance = float(adj_config.get('distance', 1.0))
        self.centroid_method = CentroidMethod(adj_config.get('centroid_method', 'average'))
        self.max_workers = int(self.config.get_parallel_params().get('max_workers', 1))

        self.logger.info(f"Position adjuster initialized: distance={self.distance}, "
                         f"centroid_method={self.centroid_method.value}")

    def adjust(self,
               records: Iterable[MarkerRecord],
               distance: Optional[float] = None,
               centroid_method: Union[str, CentroidMethod, CentroidStrategy, None] = None
               ) -> List[MarkerRecord]:
        """
        Adjust all markers toward their timeframe's centre.

        Args:
            records: Marker records of one or more timeframes
            distance: Displacement length. If None, uses the configured value.
            centroid_method: Centre strategy. If None, uses the configured value.

        Returns:
            New marker records grouped by ascending timeframe, same labels as input.
            Timeframes without any finite marker are returned unchanged.

        Raises:
            InsufficientPointsError: Hull centroid requested for a timeframe
                with fewer than four markers
            DegenerateGeometryError: Hull centroid requested for a flat timeframe
        """
        distance = self.distance if distance is None else float(distance)
        if not np.isfinite(distance):
            raise ValueError(f"Adjustment distance must be finite, got {distance}")

        strategy = get_centroid_strategy(
            self.centroid_method if centroid_method is None else centroid_method,
            config_manager=self.config
        )

        groups = group_by_timeframe(records)

        def adjust_timeframe(timeframe: int, group: List[MarkerRecord]) -> List[MarkerRecord]:
            points = np.array([r.coords for r in group], dtype=float).reshape(-1, 3)
            if not np.isfinite(points).all(axis=1).any():
                self.logger.debug(f"Timeframe {timeframe}: no finite markers, left unchanged")
                return list(group)
            center = self._compute_center(strategy, timeframe, points)
            adjusted = adjust_toward(points, center, distance)
            return [record.with_coords(coords) for record, coords in zip(group, adjusted)]

        results = map_timeframes(adjust_timeframe, groups, self.max_workers)
        adjusted_records = [record for group in results for record in group]

        self.logger.info(f"Adjusted {len(adjusted_records)} markers over {len(groups)} timeframes "
                         f"by {distance} toward {type(strategy).__name__} centre")

        return adjusted_records

    def _compute_center(self, strategy: CentroidStrategy, timeframe: int,
                        points: np.ndarray) -> np.ndarray:
        """Compute the centre of one timeframe, tagging failures with it."""
        try:
            center = strategy.compute(points)
        except InsufficientPointsError as e:
            raise InsufficientPointsError(
                f"Timeframe {timeframe}: {e}", n_points=e.n_points, timeframe=timeframe
            ) from e
        except GeometryError as e:
            raise type(e)(f"Timeframe {timeframe}: {e}", timeframe=timeframe) from e
        except ValueError as e:
            raise ValueError(f"Timeframe {timeframe}: {e}") from e

        self.logger.debug(f"Timeframe {timeframe}: centre at {np.round(center, 3).tolist()}")
        return center


def adjust_positions(records: Iterable[MarkerRecord],
                     distance: float = 1.0,
                     centroid_method: Union[str, CentroidMethod, CentroidStrategy] = CentroidMethod.AVERAGE
                     ) -> List[MarkerRecord]:
    """
    Move every marker a fixed distance toward its timeframe's centre.

    Args:
        records: Marker records
        distance: Displacement length in coordinate units
        centroid_method: "average" or "convex_hull"

    Returns:
        Adjusted marker records
    """
    return PositionAdjuster().adjust(records, distance=distance, centroid_method=centroid_method)
