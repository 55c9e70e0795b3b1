"""
pymemfs - An in-memory POSIX-like filesystem

This package provides a virtual filesystem that lives entirely in memory:
directories, files, hard and symbolic links, permissions, ownership and
timestamps, with file handles, directory cursors and glob matching on top.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from typing import Optional

from .core.config_loader import Config, get_config
from .filesystem import (
    FileSystem,
    FileHandle,
    DirectoryCursor,
    Stat,
    Identity,
    PathResolver,
    GlobFlag,
)
from .logger import Logger, LogLevel, get_logger


def configure_logging(config: Optional[Config] = None) -> None:
    """
    Install log handlers according to the logging configuration.

    Args:
        config: Configuration to use (defaults to the loaded one)
    """
    settings = (config or get_config()).logging
    Logger.initialize(
        level=LogLevel.from_name(settings.level),
        log_file=settings.log_file,
        console=settings.console_output
    )


__all__ = [
    'FileSystem',
    'FileHandle',
    'DirectoryCursor',
    'Stat',
    'Identity',
    'PathResolver',
    'GlobFlag',
    'Logger',
    'LogLevel',
    'get_logger',
    'configure_logging',
]
