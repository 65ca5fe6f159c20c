"""
Filesystem Adapter Base

Abstract interface shared by the real disk adapter and the memory adapter.
Both expose the same operation set so the editor never needs to know which
one it is talking to.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, List, Union

from pyfiles.logger import Logger, get_logger


class OpenMode(Enum):
    """File open modes."""
    READ = 'r'
    WRITE = 'w'
    APPEND = 'a'
    READ_WRITE = 'r+'

    @classmethod
    def coerce(cls, mode: Union['OpenMode', str]) -> 'OpenMode':
        if isinstance(mode, cls):
            return mode
        return cls(mode)


class FileSystemAdapter(ABC):
    """
    Base class for filesystem adapters.

    Every failure coming from the underlying storage surfaces as
    ``pyfiles.exceptions.IOError``.
    """

    def __init__(self, name: str):
        self._name = name
        self._logger = get_logger(name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def logger(self) -> Logger:
        return self._logger

    @abstractmethod
    def open(self, path: Any, mode: Union[OpenMode, str] = OpenMode.READ_WRITE, **kwargs: Any) -> Any:
        """Open (or create) a file."""

    @abstractmethod
    def read(self, path: Any) -> str:
        """Read the whole file."""

    @abstractmethod
    def readlines(self, path: Any) -> List[str]:
        """Read the file as lines, each keeping its terminator."""

    @abstractmethod
    def touch(self, path: Any) -> Any:
        """Create an empty file unless it exists already."""

    @abstractmethod
    def write(self, path: Any, content: Any = None) -> Any:
        """Create or overwrite a file, creating intermediate directories."""

    @abstractmethod
    def chmod(self, path: Any, mode: int) -> None:
        """Set the UNIX permission bits."""

    @abstractmethod
    def join(self, *path: Any) -> str:
        """Join path tokens."""

    @abstractmethod
    def expand_path(self, path: Any, dir: Any) -> str:
        """Convert a path to an absolute one, relative to ``dir``."""

    @abstractmethod
    def pwd(self) -> str:
        """Current working directory."""

    @abstractmethod
    def chdir(self, path: Any) -> AbstractContextManager:
        """Temporarily change the working directory for a ``with`` block."""

    @abstractmethod
    def mkdir(self, path: Any) -> None:
        """Create a directory and all its parents."""

    @abstractmethod
    def mkdir_p(self, path: Any) -> None:
        """Create the parent directories of a file path."""

    @abstractmethod
    def cp(self, source: Any, destination: Any) -> None:
        """Copy a file."""

    @abstractmethod
    def rm(self, path: Any) -> None:
        """Remove a file."""

    @abstractmethod
    def rm_rf(self, path: Any) -> None:
        """Remove a file or a directory tree."""

    @abstractmethod
    def exist(self, path: Any) -> bool:
        """Check whether a path exists."""

    @abstractmethod
    def directory(self, path: Any) -> bool:
        """Check whether a path is a directory."""

    @abstractmethod
    def executable(self, path: Any) -> bool:
        """Check whether a path is executable."""

    @abstractmethod
    def entries(self, path: Any) -> List[str]:
        """List a directory, including ``.`` and ``..``."""

    @abstractmethod
    def mode(self, path: Any) -> int:
        """Permission bits of a path."""
