"""
Service layer for the setup wizard.

This module contains the settings loader and the env file model used by
setup steps to persist configuration.
"""

from .config_manager import ConfigurationManager
from .env_file import EnvFile, mirror_env_file

__all__ = [
    "ConfigurationManager",
    "EnvFile",
    "mirror_env_file",
]
