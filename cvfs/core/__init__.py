"""
CVFS Core

Configuration and subsystem lifecycle support.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    FilesystemConfig,
    LoggingConfig,
    ShellConfig,
    get_config,
)
from .registry import Subsystem, SubsystemState

__all__ = [
    'Config',
    'ConfigLoader',
    'FilesystemConfig',
    'LoggingConfig',
    'ShellConfig',
    'get_config',
    'Subsystem',
    'SubsystemState',
]
