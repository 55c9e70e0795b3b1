"""
pymemfs Core Module

Runtime configuration shared by the filesystem components.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesystemConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'FilesystemConfig',
    'LoggingConfig',
    'get_config',
]
