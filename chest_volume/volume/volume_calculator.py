"""
Segment Volume Calculator

Computes, per timeframe and per chest segment, the volume of the convex hull
spanned by the segment's markers.
"""

import numpy as np
from typing import Iterable, List, Mapping, Optional, Tuple
import logging

from ..data_models import MarkerRecord, SkippedSegment, VolumeRecord, VolumeReport
from ..exceptions import GeometryError
from ..geometry.convex_hull import ConvexHullEngine
from ..segments import select_segments
from ..utils.config_manager import ConfigManager
from ..utils.timeframes import group_by_timeframe, map_timeframes


class VolumeCalculator:
    """Convex hull volume series for user-defined marker segments."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize volume calculator.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        vol_config = self.config.get_volume_params()

        # None computes every defined segment
        self.selected_segments = vol_config.get('selected_segments')
        self.max_workers = int(self.config.get_parallel_params().get('max_workers', 1))

        self.engine = ConvexHullEngine(self.config)

        self.logger.info(f"Volume calculator initialized: min_points={self.engine.min_points}, "
                         f"max_workers={self.max_workers}")

    def calculate(self,
                  records: Iterable[MarkerRecord],
                  segments: Mapping[str, Iterable[str]],
                  selected: Optional[Iterable[str]] = None) -> VolumeReport:
        """
        Compute segment volumes for every timeframe.

        Pairs whose markers cannot span a solid hull are skipped with a
        warning instead of aborting the batch.

        Args:
            records: Adjusted marker records
            segments: Mapping of segment name to marker ids
            selected: Segment names to compute. If None, uses the configured
                selection, or every segment when none is configured.

        Returns:
            VolumeReport with volumes sorted by (timeframe, segment) and the
            skipped pairs

        Raises:
            MissingSegmentError: If a selected segment is not defined
        """
        selected = self.selected_segments if selected is None else selected
        definition = select_segments(segments, selected)
        groups = group_by_timeframe(records)

        def volumes_for_timeframe(timeframe: int, group: List[MarkerRecord]
                                  ) -> Tuple[List[VolumeRecord], List[SkippedSegment]]:
            positions = {r.marker_id: r.coords for r in group if r.is_finite}
            volumes, skipped = [], []

            for name, marker_ids in definition.items():
                present = [m for m in marker_ids if m in positions]
                if len(present) < len(marker_ids):
                    self.logger.debug(f"Timeframe {timeframe}, segment {name!r}: "
                                      f"{len(marker_ids) - len(present)} markers absent")

                points = np.array([positions[m] for m in present], dtype=float).reshape(-1, 3)
                volume, reason = self._segment_volume(points)

                if reason is not None:
                    skipped.append(SkippedSegment(timeframe, name, reason, len(points)))
                    self.logger.warning(f"Skipping segment {name!r} at timeframe {timeframe}: {reason}")
                    continue

                volumes.append(VolumeRecord(timeframe=timeframe, segment=name, volume=volume))

            return volumes, skipped

        results = map_timeframes(volumes_for_timeframe, groups, self.max_workers)

        volumes = sorted((v for vols, _ in results for v in vols),
                         key=lambda v: (v.timeframe, v.segment))
        skipped = sorted((s for _, skips in results for s in skips),
                         key=lambda s: (s.timeframe, s.segment))

        total = len(groups) * len(definition)
        if skipped:
            self.logger.warning(f"Omitted {len(skipped)} of {total} timeframe/segment pairs")

        self.logger.info(f"Computed {len(volumes)} segment volumes over {len(groups)} timeframes")

        return VolumeReport(volumes=volumes, skipped=skipped)

    def _segment_volume(self, points: np.ndarray) -> Tuple[float, Optional[str]]:
        """Return (volume, None) or (0.0, reason) when no solid hull exists."""
        try:
            hull = self.engine.compute(points)
        except GeometryError as e:
            return 0.0, str(e)

        if hull.volume <= 0.0:
            return 0.0, f"all {len(points)} points coincide"

        return hull.volume, None


def compute_volumes(records: Iterable[MarkerRecord],
                    segments: Mapping[str, Iterable[str]],
                    selected: Optional[Iterable[str]] = None) -> List[VolumeRecord]:
    """
    Compute convex hull volumes per timeframe and segment.

    Args:
        records: Adjusted marker records
        segments: Mapping of segment name to marker ids
        selected: Optional subset of segment names

    Returns:
        Volume records sorted by (timeframe, segment)
    """
    return VolumeCalculator().calculate(records, segments, selected=selected).volumes
