"""
Utility Functions and Helpers

Common utilities for the chest volume pipeline.
"""

from .config_manager import ConfigManager
from .logging_config import setup_logging

__all__ = ['ConfigManager', 'setup_logging']
