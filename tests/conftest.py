"""
Pytest configuration and fixtures for chest volume tests.
"""

import itertools

import numpy as np
import pandas as pd
import pytest

from chest_volume.data_models import MarkerRecord
from chest_volume.utils.config_manager import ConfigManager


# Synthetic chest: 12 markers on a cylinder wall, 3 angles x 4 heights
CHEST_ANGLES = np.radians([-45.0, 0.0, 45.0])
CHEST_HEIGHTS = [0.0, 10.0, 20.0, 30.0]  # cm
CHEST_MARKERS = [f"M{i:02d}" for i in range(1, 13)]


def chest_positions(radius):
    """Marker positions (cm) for a given chest radius."""
    positions = {}
    for i, (h, theta) in enumerate(itertools.product(CHEST_HEIGHTS, CHEST_ANGLES)):
        positions[CHEST_MARKERS[i]] = (radius * np.cos(theta), radius * np.sin(theta), h)
    return positions


@pytest.fixture
def config_manager():
    """Fixture providing a configuration manager instance."""
    return ConfigManager()


@pytest.fixture
def unit_cube_points():
    """Fixture providing the 8 corners of the unit cube."""
    return np.array(list(itertools.product([0.0, 1.0], repeat=3)))


@pytest.fixture
def cube_records(unit_cube_points):
    """Fixture providing cube corners C1..C8 as marker records at timeframe 1."""
    return [
        MarkerRecord(1, f"C{i + 1}", *point)
        for i, point in enumerate(unit_cube_points)
    ]


@pytest.fixture
def breathing_radii():
    """Chest radius (cm) per timeframe over one breathing cycle."""
    return 15.0 + np.sin(np.linspace(0, 2 * np.pi, 9))[:-1]


@pytest.fixture
def chest_wide_table(breathing_radii):
    """Fixture providing a wide marker table in millimetres, as exported by capture software."""
    rows = []
    for frame, radius in enumerate(breathing_radii):
        row = {"Frame#": frame + 1, "Time": frame / 100.0}
        for marker, (x, y, z) in chest_positions(radius).items():
            row[f"{marker} X"] = x * 10.0
            row[f"{marker} Y"] = y * 10.0
            row[f"{marker} Z"] = z * 10.0
        rows.append(row)
    return pd.DataFrame(rows)


@pytest.fixture
def chest_segments():
    """Fixture providing segment definitions over the synthetic chest."""
    return {
        "upper": ["M07", "M08", "M09", "M10", "M11", "M12"],
        "lower": ["M01", "M02", "M03", "M04", "M05", "M06"],
        "middle": ["M04", "M05", "M06", "M07", "M08", "M09"],
    }
