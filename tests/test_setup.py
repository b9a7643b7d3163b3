"""
Test basic setup and imports.
"""

import numpy as np
import pandas as pd
import scipy.spatial
import trimesh

from chest_volume.utils.config_manager import ConfigManager


def test_scipy_qhull_available():
    """Test that SciPy's Qhull bindings are properly installed."""
    hull = scipy.spatial.ConvexHull(np.random.rand(20, 3))
    assert hull.simplices.shape[1] == 3


def test_trimesh_import():
    """Test that Trimesh is properly installed and working."""
    vertices = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
    faces = np.array([[0, 1, 2]])
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces)
    assert len(mesh.vertices) == 3
    assert len(mesh.faces) == 1


def test_config_manager():
    """Test that configuration manager works."""
    config = ConfigManager()

    assert config.get('adjustment.distance') == 1.0

    config.set('adjustment.distance', 2.0)
    assert config.get('adjustment.distance') == 2.0


def test_project_structure():
    """Test that project structure is correctly set up."""
    from chest_volume import __version__
    assert __version__ == "1.0.0"

    from chest_volume import (
        reshape, adjust_positions, compute_volumes, convex_hull, MarkerRecord
    )

    records = reshape(pd.DataFrame({"M01 X": [10.0], "M01 Y": [20.0], "M01 Z": [30.0]}))
    assert records == [MarkerRecord(1, "M01", 1.0, 2.0, 3.0)]
    assert callable(adjust_positions)
    assert callable(compute_volumes)
    assert callable(convex_hull)
