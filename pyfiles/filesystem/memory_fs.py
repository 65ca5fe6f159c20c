"""
Memory File System Module

An ephemeral, in-memory filesystem:
- Hierarchical tree of nodes, created lazily segment by segment
- POSIX-like permission bits
- Scoped working directory (chdir)
- Failures reported as pyfiles IOError wrapping the matching OSError

Nothing here touches the disk.

Author: YSNRFD
Version: 1.0.0
"""

import errno
import os
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple, Union

from .base import FileSystemAdapter, OpenMode
from .node import Node, Content, EMPTY_CONTENT
from .path_resolver import Path
from pyfiles.exceptions import IOError


def _io_error(code: int, path: Any) -> IOError:
    """Build an IOError wrapping the OSError subclass matching ``code``."""
    return IOError(OSError(code, os.strerror(code), str(path)))


class MemoryFileSystem(FileSystemAdapter):
    """
    Memory File System adapter.

    Paths are resolved segment by segment from the current root. The
    current root is the tree root, except inside a ``chdir`` block.

    Example:
        >>> fs = MemoryFileSystem()
        >>> _ = fs.write('lib/app.rb', ['class App', 'end'])
        >>> fs.readlines('lib/app.rb')
        ['class App\\n', 'end\\n']
        >>> fs.entries('lib')
        ['.', '..', 'app.rb']
    """

    def __init__(self, root: Optional[Node] = None):
        super().__init__('memory_fs')
        self._root = root if root is not None else Node.root()

    @property
    def root(self) -> Node:
        """The node paths are currently resolved from."""
        return self._root

    def open(self, path: Any, mode: Union[OpenMode, str] = OpenMode.READ_WRITE, **kwargs: Any) -> Node:
        """
        Open (or create) a file for read/write operations.

        The returned node is also a context manager. Opening in write mode
        truncates the file.
        """
        node = self.touch(path)
        if OpenMode.coerce(mode) == OpenMode.WRITE:
            node.write(EMPTY_CONTENT)
        return node

    def read(self, path: Any) -> str:
        """
        Read file contents.

        Raises:
            IOError: If the path is a directory or cannot be found
        """
        path = Path.join(path)
        if self.directory(path):
            raise _io_error(errno.EISDIR, path)

        node = self._find_file(path)
        if node is None:
            raise _io_error(errno.ENOENT, path)

        return node.read()

    def readlines(self, path: Any) -> List[str]:
        """
        Read file contents as lines.

        Raises:
            IOError: If the path is a directory or cannot be found
        """
        path = Path.join(path)
        node = self._find(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)
        if node.is_directory:
            raise _io_error(errno.EISDIR, path)

        return node.readlines()

    def touch(self, path: Any) -> Node:
        """
        Create an empty file, if it doesn't exist.

        If the file already exists its content is left untouched.

        Raises:
            IOError: If the path is a directory
        """
        path = Path.join(path)
        if self.directory(path):
            raise _io_error(errno.EISDIR, path)

        content = self.read(path) if self.exist(path) else EMPTY_CONTENT
        return self.write(path, content)

    def write(self, path: Any, content: Content = None) -> Node:
        """
        Create a new file or rewrite the contents of an existing one.

        All the intermediate directories are created.

        Raises:
            IOError: If the path is an existing directory, or goes through a file
        """
        path = Path.join(path)
        existing = self._find(path)
        if existing is not None and existing.is_directory:
            raise _io_error(errno.EISDIR, path)

        node = self._root
        for segment in Path.segments(path):
            if node.is_file:
                raise _io_error(errno.ENOTDIR, path)
            node = node.set(segment)

        node.write(content)
        self._logger.debug("Wrote file", context={'path': path, 'size': len(node.content)})
        return node

    def join(self, *path: Any) -> str:
        return Path.join(*path)

    def expand_path(self, path: Any, dir: Any) -> str:
        """Convert a path to an absolute path, relative to ``dir``."""
        if Path.is_absolute(os.fspath(path)):
            return os.fspath(path)

        return self.join(dir, path)

    def pwd(self) -> str:
        """Segment name of the current root."""
        return self._root.segment

    @contextmanager
    def chdir(self, path: Any) -> Iterator[Node]:
        """
        Temporarily make ``path`` the current root for a ``with`` block.

        The previous root is restored on every exit path, including an
        exception raised inside the block.

        Raises:
            IOError: If the path cannot be found or isn't a directory
        """
        path = Path.join(path)
        directory = self._find(path)

        if directory is None:
            raise _io_error(errno.ENOENT, path)
        if not directory.is_directory:
            raise _io_error(errno.ENOTDIR, path)

        current_root = self._root
        self._root = directory
        self._logger.debug("Changed directory", context={'path': path})
        try:
            yield directory
        finally:
            self._root = current_root

    def mkdir(self, path: Any) -> None:
        """
        Create a directory and all its parent directories.

        Raises:
            IOError: If any segment of the path is an existing file
        """
        path = Path.join(path)
        node = self._root

        for segment in Path.segments(path):
            node = node.set(segment)
            if node.is_file:
                raise _io_error(errno.EEXIST, path)

        self._logger.debug("Created directory", context={'path': path})

    def mkdir_p(self, path: Any) -> None:
        """
        Create the directory ancestors of the file ``path``.

        The last segment is meant to be a file and is not created.
        """
        self.mkdir(Path.dirname(Path.join(path)))

    def cp(self, source: Any, destination: Any) -> None:
        """
        Copy file content from ``source`` to ``destination``.

        All the intermediate destination directories are created.

        Raises:
            IOError: If source cannot be found
        """
        content = self.read(source)
        self.write(destination, content)
        self._logger.debug(
            "Copied file",
            context={'source': Path.join(source), 'destination': Path.join(destination)}
        )

    def rm(self, path: Any) -> None:
        """
        Remove a file.

        Raises:
            IOError: If path cannot be found or is a directory
        """
        path = Path.join(path)
        parent, segment, node = self._find_with_parent(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)
        if node.is_directory:
            raise _io_error(errno.EPERM, path)

        parent.unset(segment)
        self._logger.debug("Removed file", context={'path': path})

    def rm_rf(self, path: Any) -> None:
        """
        Remove a file or a directory with all its content.

        Raises:
            IOError: If path cannot be found
        """
        path = Path.join(path)
        parent, segment, node = self._find_with_parent(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)
        if parent is None:
            raise _io_error(errno.EPERM, path)

        parent.unset(segment)
        self._logger.debug("Removed tree", context={'path': path})

    def chmod(self, path: Any, mode: int) -> None:
        """
        Set node UNIX mode.

        Raises:
            IOError: If path cannot be found
        """
        path = Path.join(path)
        node = self._find(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)

        node.chmod(mode)
        self._logger.debug("Changed mode", context={'path': path, 'mode': oct(node.mode)})

    def mode(self, path: Any) -> int:
        """
        Get node UNIX mode.

        Raises:
            IOError: If path cannot be found
        """
        path = Path.join(path)
        node = self._find(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)

        return node.mode

    def exist(self, path: Any) -> bool:
        return self._find(Path.join(path)) is not None

    def directory(self, path: Any) -> bool:
        node = self._find(Path.join(path))
        return node is not None and node.is_directory

    def executable(self, path: Any) -> bool:
        node = self._find(Path.join(path))
        return node is not None and node.is_executable

    def entries(self, path: Any) -> List[str]:
        """
        Read entries from a directory.

        Raises:
            IOError: If path cannot be found or isn't a directory
        """
        path = Path.join(path)
        node = self._find(path)

        if node is None:
            raise _io_error(errno.ENOENT, path)
        if not node.is_directory:
            raise _io_error(errno.ENOTDIR, path)

        return [".", ".."] + list(node.children or {})

    def _find(self, path: str) -> Optional[Node]:
        node: Optional[Node] = self._root

        for segment in Path.segments(path):
            node = node.get(segment)
            if node is None:
                return None

        return node

    def _find_file(self, path: str) -> Optional[Node]:
        node = self._find(path)
        if node is None or not node.is_file:
            return None
        return node

    def _find_with_parent(self, path: str) -> Tuple[Optional[Node], Optional[str], Optional[Node]]:
        """Resolve a path to ``(parent, segment, node)``; parent is None for the root."""
        parent: Optional[Node] = None
        segment: Optional[str] = None
        node: Optional[Node] = self._root

        for segment in Path.segments(path):
            parent = node
            node = node.get(segment)
            if node is None:
                break

        return parent, segment, node
