"""
pyfiles - File manipulations, on disk or in memory

Plain filesystem operations plus line and block oriented editing of text
files, over either the real disk or an ephemeral in-memory tree.

Example:
    >>> from pyfiles import Files
    >>> files = Files(memory=True)
    >>> files.write('app.rb', ['class App', 'end'])
    >>> files.inject_line_at_class_bottom('app.rb', 'App', 'attr_reader :root')
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .exceptions import (
    Error,
    IOError,
    MissingTargetError,
    UnknownNodeError,
    NotAFileError,
    ConfigValidationError,
)
from .editor.files import Files
from .filesystem import FileSystem, MemoryFileSystem, create_adapter
from .core.bootstrap import bootstrap

__all__ = [
    'Files',
    'FileSystem',
    'MemoryFileSystem',
    'create_adapter',
    'bootstrap',
    'Error',
    'IOError',
    'MissingTargetError',
    'UnknownNodeError',
    'NotAFileError',
    'ConfigValidationError',
]
