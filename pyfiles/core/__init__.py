"""
pyfiles Core Module

Configuration loading and bootstrap shared by the adapters and the editor.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesConfig,
    LoggingConfig,
    get_config,
)
from .bootstrap import bootstrap, init_logging

__all__ = [
    'ConfigLoader',
    'Config',
    'FilesConfig',
    'LoggingConfig',
    'get_config',
    'bootstrap',
    'init_logging',
]
