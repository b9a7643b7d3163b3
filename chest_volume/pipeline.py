"""
Chest Volume Pipeline

Chains the processing stages for one recording:

    raw table -> marker records -> adjusted records -> segment volumes
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from .data_models import PipelineResult
from .processing.marker_reshaper import MarkerReshaper
from .processing.position_adjuster import PositionAdjuster
from .utils.config_manager import ConfigManager
from .utils.logging_config import setup_logging
from .volume.volume_calculator import VolumeCalculator


class ChestVolumePipeline:
    """Runs reshaping, protrusion adjustment and segment volume calculation."""

    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 configure_logging: bool = False):
        """
        Initialize pipeline stages from one configuration.

        Args:
            config_manager: Configuration manager instance
            configure_logging: Install the package log handlers described by
                the logging section of the configuration
        """
        self.config = config_manager or ConfigManager()

        if configure_logging:
            log_params = self.config.get_logging_params()
            setup_logging(log_params.get("level", "INFO"), log_file=log_params.get("log_file"))

        self.logger = logging.getLogger(__name__)

        self.reshaper = MarkerReshaper(self.config)
        self.adjuster = PositionAdjuster(self.config)
        self.calculator = VolumeCalculator(self.config)

    def run(self,
            raw_table: Any,
            segments: Mapping[str, Iterable[str]],
            convert_to_cm: Optional[bool] = None,
            distance: Optional[float] = None,
            centroid_method: Optional[str] = None,
            selected: Optional[Iterable[str]] = None) -> PipelineResult:
        """
        Process one wide marker table into a segment volume series.

        Arguments left as None fall back to the configuration.

        Args:
            raw_table: Wide table with '<marker> X|Y|Z' columns
            segments: Mapping of segment name to marker ids
            convert_to_cm: Divide coordinates by 10 (mm -> cm)
            distance: Protrusion compensation distance
            centroid_method: "average" or "convex_hull"
            selected: Segment names to compute

        Returns:
            PipelineResult with raw records, adjusted records and volume report
        """
        # Step 1: wide table -> marker records
        markers = self.reshaper.reshape(raw_table, convert_to_cm=convert_to_cm)

        # Step 2: pull markers toward the chest centre
        adjusted = self.adjuster.adjust(markers, distance=distance, centroid_method=centroid_method)

        # Step 3: convex hull volume per timeframe and segment
        report = self.calculator.calculate(adjusted, segments, selected=selected)

        self.logger.info(f"Pipeline finished: {len(report.volumes)} volumes, "
                         f"{len(report.skipped)} skipped pairs")

        return PipelineResult(markers=markers, adjusted=adjusted, report=report)
