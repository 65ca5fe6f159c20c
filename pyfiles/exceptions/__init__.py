"""
pyfiles Exception Hierarchy

All custom exceptions inherit from Error as the base class.

Architecture:
    Error (Base, validation failures)
    ├── IOError                 wraps a low level OSError
    ├── MissingTargetError      target not found in file
    ├── UnknownNodeError        memory adapter: unknown child node
    ├── NotAFileError           memory adapter: node is a directory
    └── ConfigValidationError   configuration cannot be loaded
"""

from .fs_exceptions import (
    Error,
    IOError,
    MissingTargetError,
    UnknownNodeError,
    NotAFileError,
    ConfigValidationError,
)

__all__ = [
    "Error",
    "IOError",
    "MissingTargetError",
    "UnknownNodeError",
    "NotAFileError",
    "ConfigValidationError",
]
