"""
Storage Layer.

This package handles loading the run configuration from the environment.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
