"""
Configuration Management System

Handles loading, validation, and management of pipeline parameters.
"""

import math
import yaml
from typing import Dict, Any, Optional
from pathlib import Path

CENTROID_METHODS = ("average", "convex_hull")


class ConfigManager:
    """Manages configuration parameters for the chest volume pipeline."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default config.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config = self._load_config()
        self._validate_config()

    def _get_default_config_path(self) -> str:
        """Get path to default configuration file."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "default_config.yaml")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing configuration file: {e}")
        return config or {}

    def _validate_config(self) -> None:
        """Validate configuration parameters for consistency and feasibility."""
        # Validate adjustment parameters
        adj = self.config.get('adjustment') or {}
        distance = adj.get('distance', 1.0)
        if not isinstance(distance, (int, float)) or not math.isfinite(distance):
            raise ValueError("adjustment.distance must be a finite number")
        method = adj.get('centroid_method', 'average')
        if method not in CENTROID_METHODS:
            raise ValueError(f"adjustment.centroid_method must be one of {CENTROID_METHODS}, got {method!r}")

        # Validate hull parameters
        hull = self.config.get('convex_hull') or {}
        if int(hull.get('min_points', 4)) < 4:
            raise ValueError("convex_hull.min_points must be at least 4")
        if float(hull.get('degenerate_tolerance', 1e-12)) < 0:
            raise ValueError("convex_hull.degenerate_tolerance must be non-negative")

        # Validate reshape parameters
        reshape = self.config.get('reshape') or {}
        if not isinstance(reshape.get('drop_columns', []), list):
            raise ValueError("reshape.drop_columns must be a list of column names")

        # Validate worker count
        par = self.config.get('parallel') or {}
        if int(par.get('max_workers', 1)) < 1:
            raise ValueError("parallel.max_workers must be at least 1")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'adjustment.distance')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'adjustment.distance')
            value: Value to set
        """
        keys = key.split('.')
        config_ref = self.config

        for k in keys[:-1]:
            if config_ref.get(k) is None:
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value
        self._validate_config()

    def save(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration. If None, overwrites current file.
        """
        save_path = output_path or self.config_path

        with open(save_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False, indent=2)

    def get_reshape_params(self) -> Dict[str, Any]:
        """Get marker reshaping parameters as a dictionary."""
        return self.config.get('reshape') or {}

    def get_adjustment_params(self) -> Dict[str, Any]:
        """Get position adjustment parameters as a dictionary."""
        return self.config.get('adjustment') or {}

    def get_hull_params(self) -> Dict[str, Any]:
        """Get convex hull parameters as a dictionary."""
        return self.config.get('convex_hull') or {}

    def get_volume_params(self) -> Dict[str, Any]:
        """Get segment volume parameters as a dictionary."""
        return self.config.get('volume') or {}

    def get_parallel_params(self) -> Dict[str, Any]:
        """Get per-timeframe execution parameters as a dictionary."""
        return self.config.get('parallel') or {}

    def get_logging_params(self) -> Dict[str, Any]:
        """Get logging parameters as a dictionary."""
        return self.config.get('logging') or {}
