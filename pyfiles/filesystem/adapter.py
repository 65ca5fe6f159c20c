"""
Adapter Factory

Explicit backend selection: the caller always says which one it wants.
"""

from .base import FileSystemAdapter
from .disk_fs import FileSystem
from .memory_fs import MemoryFileSystem


def create_adapter(memory: bool) -> FileSystemAdapter:
    """
    Build a filesystem adapter.

    Args:
        memory: True for the ephemeral in-memory tree, False for the real disk

    Returns:
        A new adapter instance
    """
    if not isinstance(memory, bool):
        raise TypeError(f"memory must be a bool, got {type(memory).__name__}")

    if memory:
        return MemoryFileSystem()
    return FileSystem()
