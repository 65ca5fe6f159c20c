"""
Node Module

Memory filesystem node: either a directory (named children) or a file
(text content). Each directory owns its children outright; there are no
back references, so removing a node is a single mapping deletion.

Author: YSNRFD
Version: 1.0.0
"""

import io
from enum import IntFlag
from typing import Optional, Union, Iterable, List

from pyfiles.exceptions import UnknownNodeError, NotAFileError

NEW_LINE = "\n"
EMPTY_CONTENT = ""
ROOT_PATH = "/"


class Permission(IntFlag):
    """File permission bits."""
    # Owner permissions
    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXEC = 0o100

    # Group permissions
    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXEC = 0o010

    # Other permissions
    OTHER_READ = 0o004
    OTHER_WRITE = 0o002
    OTHER_EXEC = 0o001

    # Common combinations
    OWNER_RW = OWNER_READ | OWNER_WRITE
    OWNER_RWX = OWNER_READ | OWNER_WRITE | OWNER_EXEC

    # Default permissions
    DEFAULT_FILE = OWNER_RW | GROUP_READ | OTHER_READ
    DEFAULT_DIR = OWNER_RWX | GROUP_READ | GROUP_EXEC | OTHER_READ | OTHER_EXEC


MODE_MASK = 0o777
DEFAULT_FILE_MODE = int(Permission.DEFAULT_FILE)
DEFAULT_DIRECTORY_MODE = int(Permission.DEFAULT_DIR)

Content = Union[str, Iterable[str], None]


def to_text(content: Content) -> str:
    """
    Serialize file content.

    A string is kept as is. A sequence of lines gets exactly one line
    terminator after every line.
    """
    if content is None:
        return EMPTY_CONTENT
    if isinstance(content, str):
        return content

    lines = [line[:-len(NEW_LINE)] if line.endswith(NEW_LINE) else line for line in content]
    if not lines:
        return EMPTY_CONTENT
    return NEW_LINE.join(lines) + NEW_LINE


class Node:
    """
    Memory file system node.

    A node starts as a directory. The first ``write`` turns it into a file
    for good: later writes replace the content but never turn it back.

    Example:
        >>> root = Node.root()
        >>> root.set('lib').set('app.rb').write(['class App', 'end'])
        >>> root.get('lib').get('app.rb').readlines()
        ['class App\\n', 'end\\n']
    """

    def __init__(self, segment: str, mode: int = DEFAULT_DIRECTORY_MODE):
        self.segment = segment
        self.children: Optional[dict[str, 'Node']] = None
        self.content: Optional[str] = None
        self.mode = DEFAULT_DIRECTORY_MODE
        self.chmod(mode)

    @classmethod
    def root(cls) -> 'Node':
        """Instantiate a root node."""
        return cls(ROOT_PATH)

    def __repr__(self) -> str:
        kind = 'file' if self.is_file else 'directory'
        return f"Node({self.segment!r}, {kind}, mode={oct(self.mode)})"

    # Context manager support, so ``open`` can hand out a node directly

    def __enter__(self) -> 'Node':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    # Tree operations

    def get(self, segment: str) -> Optional['Node']:
        """Get a child node, if any."""
        if self.children is None:
            return None
        return self.children.get(segment)

    def set(self, segment: str) -> 'Node':
        """Get a child node, creating it as a directory if missing."""
        if self.children is None:
            self.children = {}
        child = self.children.get(segment)
        if child is None:
            child = self.__class__(segment)
            self.children[segment] = child
        return child

    def unset(self, segment: str) -> 'Node':
        """
        Remove a child node.

        Raises:
            UnknownNodeError: If there is no such child
        """
        if self.children is None or segment not in self.children:
            raise UnknownNodeError(segment)
        return self.children.pop(segment)

    @property
    def is_directory(self) -> bool:
        return not self.is_file

    @property
    def is_file(self) -> bool:
        return self.content is not None

    # File operations

    def read(self) -> str:
        """
        Read file contents.

        Raises:
            NotAFileError: If the node is a directory
        """
        if not self.is_file:
            raise NotAFileError(self.segment)
        return self.content

    def readlines(self) -> List[str]:
        """
        Read file content lines, each keeping its line terminator.

        Raises:
            NotAFileError: If the node is a directory
        """
        return io.StringIO(self.read()).readlines()

    def write(self, content: Content = None) -> None:
        """
        Write file contents.

        A string is stored as is. A sequence of lines is stored with exactly
        one line terminator after every line. The mode is reset to the
        default file mode.

        IMPORTANT: This operation turns a node into a file.
        """
        self.content = to_text(content)
        self.mode = DEFAULT_FILE_MODE

    def chmod(self, mode: int) -> None:
        """Change permission mode (only the lower 9 bits are kept)."""
        self.mode = int(mode) & MODE_MASK

    @property
    def is_executable(self) -> bool:
        """Check if node is executable for its owner."""
        return bool(self.mode & Permission.OWNER_EXEC)
