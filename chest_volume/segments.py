"""
Segment Definitions

A segment definition maps each chest segment name to the ordered marker ids
that delineate it.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import pandas as pd

from .exceptions import MalformedInputError, MissingSegmentError

SegmentDefinition = Dict[str, Tuple[str, ...]]

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return bool(pd.isna(value))


def normalize_segments(segments: Mapping[str, Iterable[str]]) -> SegmentDefinition:
    """
    Clean a segment mapping into ordered, de-duplicated marker tuples.

    Blank marker entries are dropped and surrounding whitespace is stripped.

    Args:
        segments: Mapping of segment name to marker ids

    Returns:
        Segment definition with tuple values

    Raises:
        MalformedInputError: On empty or duplicated segment names
    """
    normalized: SegmentDefinition = {}

    for name, markers in segments.items():
        key = "" if _is_blank(name) else str(name).strip()
        if not key:
            raise MalformedInputError("Segment names must be non-empty")
        if key in normalized:
            raise MalformedInputError(f"Duplicate segment name: {key!r}")

        if isinstance(markers, str):
            markers = [markers]

        marker_ids = []
        for marker in markers:
            if _is_blank(marker):
                continue
            marker = str(marker).strip()
            if marker not in marker_ids:
                marker_ids.append(marker)

        normalized[key] = tuple(marker_ids)

    return normalized


def segments_from_table(table: pd.DataFrame) -> SegmentDefinition:
    """
    Build a segment definition from a tabular layout.

    Each row is one segment: the first column holds the segment name and the
    remaining columns hold its marker ids. Blank cells are ignored.

    Args:
        table: Table with at least two columns, typically read without headers

    Returns:
        Segment definition in row order
    """
    if table.shape[1] < 2:
        raise MalformedInputError(
            "Segment table must have at least two columns: one for segment names "
            "and at least one for marker names"
        )

    rows = {}
    for values in table.itertuples(index=False, name=None):
        name, markers = values[0], values[1:]
        if _is_blank(name):
            logger.debug("Skipping segment row without a name")
            continue
        name = str(name).strip()
        if name in rows:
            raise MalformedInputError(f"Duplicate segment name: {name!r}")
        rows[name] = markers

    segments = normalize_segments(rows)
    logger.info(f"Loaded {len(segments)} segment definitions")
    return segments


def select_segments(segments: Mapping[str, Iterable[str]],
                    names: Optional[Iterable[str]] = None) -> SegmentDefinition:
    """
    Restrict a segment definition to the named segments.

    Args:
        segments: Full segment definition
        names: Segment names to keep. If None, all segments are kept.

    Returns:
        Normalized segment definition in the requested order

    Raises:
        MissingSegmentError: If a name is not defined
    """
    normalized = normalize_segments(segments)
    if names is None:
        return normalized

    if isinstance(names, str):
        names = [names]

    selected: SegmentDefinition = {}
    for name in names:
        key = str(name).strip()
        if key not in normalized:
            raise MissingSegmentError(key)
        selected[key] = normalized[key]

    return selected
