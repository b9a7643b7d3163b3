"""
Per-Timeframe Partitioning and Execution

Records are split into independent timeframe groups; each group is processed
without shared state, so groups may run on a thread pool and are merged back
in timeframe order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, TypeVar

from ..data_models import MarkerRecord
from ..exceptions import MalformedInputError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def group_by_timeframe(records: Iterable[MarkerRecord]) -> Dict[int, List[MarkerRecord]]:
    """
    Partition marker records into per-timeframe groups.

    Args:
        records: Marker records in any order

    Returns:
        Mapping from timeframe to its records, ordered by timeframe. Records
        keep their input order within a group.

    Raises:
        MalformedInputError: If a marker id occurs twice in one timeframe
    """
    groups: Dict[int, List[MarkerRecord]] = {}
    seen = set()
    for record in records:
        key = (record.timeframe, record.marker_id)
        if key in seen:
            raise MalformedInputError(
                f"Duplicate marker {record.marker_id!r} at timeframe {record.timeframe}"
            )
        seen.add(key)
        groups.setdefault(record.timeframe, []).append(record)

    return {tf: groups[tf] for tf in sorted(groups)}


def map_timeframes(func: Callable[[int, List[MarkerRecord]], T],
                   groups: Dict[int, List[MarkerRecord]],
                   max_workers: int = 1) -> List[T]:
    """
    Apply func(timeframe, records) to every group.

    Args:
        func: Pure function of one timeframe group
        groups: Output of group_by_timeframe
        max_workers: Thread count; 1 runs serially in the calling thread

    Returns:
        Results in the iteration order of groups
    """
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    if max_workers == 1 or len(groups) <= 1:
        return [func(tf, group) for tf, group in groups.items()]

    logger.debug(f"Processing {len(groups)} timeframes on {max_workers} workers")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(func, tf, group) for tf, group in groups.items()]
        return [future.result() for future in futures]
