"""
pyfiles Filesystem Module

Two interchangeable filesystem adapters:
- FileSystem: pass-through to the host disk
- MemoryFileSystem: ephemeral tree of nodes with POSIX-like permissions
"""

from .path_resolver import Path
from .node import Node, Permission, DEFAULT_FILE_MODE, DEFAULT_DIRECTORY_MODE
from .base import FileSystemAdapter, OpenMode
from .memory_fs import MemoryFileSystem
from .disk_fs import FileSystem
from .adapter import create_adapter

__all__ = [
    # Paths
    'Path',
    # Nodes
    'Node',
    'Permission',
    'DEFAULT_FILE_MODE',
    'DEFAULT_DIRECTORY_MODE',
    # Adapters
    'FileSystemAdapter',
    'OpenMode',
    'MemoryFileSystem',
    'FileSystem',
    'create_adapter',
]
