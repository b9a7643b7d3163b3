"""
Data Models for Chest Volume Pipeline

Defines all data structures used throughout the system.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd
import trimesh

# Column layout of the long-form marker table shared with plotting tools
MARKER_COLUMNS = ["Timeframe", "Marker", "X", "Y", "Z"]
VOLUME_COLUMNS = ["Timeframe", "Segment", "Volume"]


@dataclass(frozen=True)
class MarkerRecord:
    """Position of one marker at one timeframe."""
    timeframe: int  # 1-based row index of the raw table
    marker_id: str
    x: float
    y: float
    z: float

    @property
    def coords(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.coords)))

    def with_coords(self, coords: np.ndarray) -> "MarkerRecord":
        """Return a copy with replaced coordinates and the same labels."""
        return MarkerRecord(
            timeframe=self.timeframe,
            marker_id=self.marker_id,
            x=float(coords[0]),
            y=float(coords[1]),
            z=float(coords[2])
        )


@dataclass(frozen=True)
class VolumeRecord:
    """Convex-hull volume of one segment at one timeframe."""
    timeframe: int
    segment: str
    volume: float


@dataclass(frozen=True)
class SkippedSegment:
    """A (timeframe, segment) pair left out of the volume series."""
    timeframe: int
    segment: str
    reason: str
    n_points: int


@dataclass
class HullResult:
    """Results from convex hull computation."""
    points: np.ndarray  # Nx3 input points
    faces: np.ndarray  # Mx3 point indices, outward winding
    volume: float
    centroid: np.ndarray  # volume-weighted centroid

    @property
    def vertex_indices(self) -> np.ndarray:
        """Indices of input points lying on the hull boundary."""
        return np.unique(self.faces)

    def as_trimesh(self) -> trimesh.Trimesh:
        """Build a mesh of the hull surface for rendering."""
        return trimesh.Trimesh(vertices=self.points, faces=self.faces, process=False)


@dataclass
class VolumeReport:
    """Volume series together with the pairs that could not be computed."""
    volumes: List[VolumeRecord]
    skipped: List[SkippedSegment] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return volumes_to_frame(self.volumes)


@dataclass
class PipelineResult:
    """All outputs of one reshape -> adjust -> volume run."""
    markers: List[MarkerRecord]
    adjusted: List[MarkerRecord]
    report: VolumeReport

    @property
    def volumes(self) -> List[VolumeRecord]:
        return self.report.volumes


def records_to_frame(records: Iterable[MarkerRecord]) -> pd.DataFrame:
    """Convert marker records to a long-form table (Timeframe, Marker, X, Y, Z)."""
    rows = [(r.timeframe, r.marker_id, r.x, r.y, r.z) for r in records]
    frame = pd.DataFrame(rows, columns=MARKER_COLUMNS)
    return frame.astype({"Timeframe": int, "X": float, "Y": float, "Z": float})


def records_from_frame(frame: pd.DataFrame,
                       columns: Optional[List[str]] = None) -> List[MarkerRecord]:
    """
    Convert a long-form marker table back to records.

    Args:
        frame: Table holding one row per marker and timeframe
        columns: Column names for (timeframe, marker, x, y, z); defaults to
            the long-form layout produced by records_to_frame

    Returns:
        List of marker records in table order
    """
    timeframe_col, marker_col, x_col, y_col, z_col = columns or MARKER_COLUMNS
    return [
        MarkerRecord(int(tf), str(marker), float(x), float(y), float(z))
        for tf, marker, x, y, z in zip(
            frame[timeframe_col], frame[marker_col],
            frame[x_col], frame[y_col], frame[z_col]
        )
    ]


def volumes_to_frame(volumes: Iterable[VolumeRecord]) -> pd.DataFrame:
    """Convert volume records to a table (Timeframe, Segment, Volume)."""
    rows = [(v.timeframe, v.segment, v.volume) for v in volumes]
    return pd.DataFrame(rows, columns=VOLUME_COLUMNS)
