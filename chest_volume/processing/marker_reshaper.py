"""
Marker Reshaper

Converts wide motion-capture tables (one row per timeframe, three columns per
marker) into long-form marker records and back.
"""

import re
import numpy as np
import pandas as pd
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from ..data_models import MarkerRecord, records_to_frame
from ..exceptions import MalformedInputError
from ..utils.config_manager import ConfigManager

AXES = ("X", "Y", "Z")

# "<marker> <axis>" or "<marker>_<axis>", e.g. "M01 X", "STRN_Z"
HEADER_PATTERN = re.compile(r"^(?P<marker>\S+?)[ _](?P<axis>[XYZ])$")

MM_PER_CM = 10.0


def parse_column_header(column: Any) -> Tuple[str, str]:
    """
    Split a wide-table column header into marker id and axis.

    Args:
        column: Column header such as "M01 X" or "M01_X"

    Returns:
        Tuple of (marker_id, axis)

    Raises:
        MalformedInputError: If the header does not follow the convention
    """
    match = HEADER_PATTERN.match(str(column).strip())
    if match is None:
        raise MalformedInputError(
            f"Column {column!r} is not of the form '<marker> <X|Y|Z>' or '<marker>_<X|Y|Z>'",
            column=str(column)
        )
    return match.group("marker"), match.group("axis")


class MarkerReshaper:
    """Reshapes wide per-timeframe marker tables into sorted marker records."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize marker reshaper.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        reshape_config = self.config.get_reshape_params()

        self.convert_to_cm = bool(reshape_config.get('convert_to_cm', True))
        self.drop_columns = list(reshape_config.get('drop_columns', ["Frame#", "Time"]))

    def parse_columns(self, columns: Iterable[Any]) -> Dict[str, Dict[str, Any]]:
        """
        Map every marker id to its X, Y and Z column.

        Args:
            columns: Column headers of the wide table

        Returns:
            Dictionary {marker_id: {axis: column}} ordered by marker id

        Raises:
            MalformedInputError: On unparseable, duplicated or incomplete columns
        """
        layout: Dict[str, Dict[str, Any]] = {}

        for column in columns:
            marker, axis = parse_column_header(column)
            axes = layout.setdefault(marker, {})
            if axis in axes:
                raise MalformedInputError(
                    f"Duplicate column for marker {marker!r} axis {axis}: {column!r}",
                    column=str(column)
                )
            axes[axis] = column

        for marker, axes in layout.items():
            missing = [axis for axis in AXES if axis not in axes]
            if missing:
                raise MalformedInputError(
                    f"Marker {marker!r} is missing column(s) for axis {', '.join(missing)}",
                    column=str(marker)
                )

        return {marker: layout[marker] for marker in sorted(layout)}

    def reshape(self, raw_table: Any, convert_to_cm: Optional[bool] = None) -> List[MarkerRecord]:
        """
        Reshape a wide marker table into long-form marker records.

        Timeframes are the 1-based row positions of the input table; the
        table's own index is ignored.

        Args:
            raw_table: DataFrame (or anything DataFrame accepts) with one row
                per timeframe and columns '<marker> X', '<marker> Y', '<marker> Z'
            convert_to_cm: Divide every coordinate by 10 (mm -> cm). If None,
                uses the configured default.

        Returns:
            Marker records sorted by (timeframe, marker_id)
        """
        if convert_to_cm is None:
            convert_to_cm = self.convert_to_cm

        table = raw_table if isinstance(raw_table, pd.DataFrame) else pd.DataFrame(raw_table)
        table = table.drop(columns=self.drop_columns, errors="ignore")

        layout = self.parse_columns(table.columns)
        if not layout:
            raise MalformedInputError("Raw table contains no marker columns")

        markers = list(layout)
        n_frames = len(table)

        # coords[frame, marker, axis]
        coords = np.empty((n_frames, len(markers), 3), dtype=float)
        for m, marker in enumerate(markers):
            for a, axis in enumerate(AXES):
                coords[:, m, a] = self._numeric_column(table, layout[marker][axis])

        if convert_to_cm:
            coords = coords / MM_PER_CM

        records = [
            MarkerRecord(
                timeframe=row + 1,
                marker_id=marker,
                x=float(coords[row, m, 0]),
                y=float(coords[row, m, 1]),
                z=float(coords[row, m, 2])
            )
            for row in range(n_frames)
            for m, marker in enumerate(markers)
        ]

        n_missing = int(np.count_nonzero(~np.isfinite(coords).all(axis=2)))
        if n_missing:
            self.logger.debug(f"{n_missing} marker positions have missing coordinates")

        self.logger.info(f"Reshaped {n_frames} timeframes x {len(markers)} markers "
                         f"into {len(records)} records (convert_to_cm={convert_to_cm})")

        return records

    @staticmethod
    def _numeric_column(table: pd.DataFrame, column: Any) -> np.ndarray:
        """Coerce one table column to floats, naming the column on failure."""
        try:
            values = pd.to_numeric(table[column], errors="raise")
        except (ValueError, TypeError) as e:
            raise MalformedInputError(
                f"Column {column!r} contains non-numeric values: {e}",
                column=str(column)
            ) from e
        return values.to_numpy(dtype=float)


def widen(records: Iterable[MarkerRecord], separator: str = " ") -> pd.DataFrame:
    """
    Convert marker records back into a wide table.

    Args:
        records: Marker records
        separator: Text between marker id and axis in the column headers

    Returns:
        DataFrame with one row per timeframe (ascending, index reset) and
        columns '<marker><separator><axis>' ordered by marker id
    """
    frame = records_to_frame(records)
    if frame.empty:
        return pd.DataFrame()

    wide = frame.pivot(index="Timeframe", columns="Marker", values=list(AXES))
    markers = sorted(frame["Marker"].unique())
    wide = wide.reindex(columns=pd.MultiIndex.from_product([AXES, markers]))

    columns = {}
    for marker in markers:
        for axis in AXES:
            columns[f"{marker}{separator}{axis}"] = wide[(axis, marker)].to_numpy()

    return pd.DataFrame(columns)


def reshape(raw_table: Any, convert_to_cm: bool = True) -> List[MarkerRecord]:
    """
    Reshape a wide marker table into sorted marker records.

    Args:
        raw_table: Wide table with '<marker> X|Y|Z' columns
        convert_to_cm: Divide coordinates by 10 (mm -> cm)

    Returns:
        Marker records sorted by (timeframe, marker_id)
    """
    return MarkerReshaper().reshape(raw_table, convert_to_cm=convert_to_cm)
