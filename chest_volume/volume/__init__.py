"""
Volumetric Analysis Module

Implements per-segment convex hull volume calculation.
"""

from .volume_calculator import VolumeCalculator, compute_volumes

__all__ = ['VolumeCalculator', 'compute_volumes']
