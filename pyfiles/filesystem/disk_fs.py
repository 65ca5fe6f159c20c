"""
Disk File System Module

Thin pass-through to the host filesystem. Every OSError raised by the host
is re-raised as pyfiles IOError, keeping the original as its cause.

Author: YSNRFD
Version: 1.0.0
"""

import errno
import os
import pathlib
import shutil
import stat
from contextlib import contextmanager
from typing import Any, IO, Iterator, List, Union

from .base import FileSystemAdapter, OpenMode
from .node import Content, NEW_LINE, to_text
from .path_resolver import Path
from pyfiles.exceptions import IOError

ENCODING = "utf-8"


class FileSystem(FileSystemAdapter):
    """
    Real disk adapter.

    Example:
        >>> fs = FileSystem()
        >>> fs.write('/tmp/pyfiles/app.rb', ['class App', 'end'])
        >>> fs.readlines('/tmp/pyfiles/app.rb')
        ['class App\\n', 'end\\n']
    """

    def __init__(self):
        super().__init__('disk_fs')

    @contextmanager
    def _error_handling(self) -> Iterator[None]:
        """Re-raise host I/O failures as pyfiles IOError."""
        try:
            yield
        except OSError as e:
            self._logger.debug(
                "Host I/O error",
                context={'errno': e.errno, 'path': e.filename}
            )
            raise IOError(e) from e

    def open(self, path: Any, mode: Union[OpenMode, str] = OpenMode.READ_WRITE, **kwargs: Any) -> IO:
        """
        Open (or create) a file.

        Raises:
            IOError: In case of I/O error
        """
        self.touch(path)

        mode = mode.value if isinstance(mode, OpenMode) else mode
        if 'b' not in mode:
            kwargs.setdefault('encoding', ENCODING)
            kwargs.setdefault('newline', NEW_LINE)

        with self._error_handling():
            return open(path, mode, **kwargs)

    def read(self, path: Any) -> str:
        with self._error_handling():
            with open(path, 'r', encoding=ENCODING, newline=NEW_LINE) as f:
                return f.read()

    def readlines(self, path: Any) -> List[str]:
        with self._error_handling():
            with open(path, 'r', encoding=ENCODING, newline=NEW_LINE) as f:
                return f.readlines()

    def touch(self, path: Any) -> None:
        """
        Create an empty file, or update the timestamps of an existing one.

        All the intermediate directories are created.

        Raises:
            IOError: If the path is a directory, or in case of I/O error
        """
        if self.directory(path):
            raise IOError(OSError(errno.EISDIR, os.strerror(errno.EISDIR), os.fspath(path)))

        self.mkdir_p(path)
        with self._error_handling():
            pathlib.Path(path).touch(exist_ok=True)

    def write(self, path: Any, content: Content = None) -> None:
        """
        Create a new file or rewrite the contents of an existing one.

        All the intermediate directories are created.

        Raises:
            IOError: In case of I/O error
        """
        self.mkdir_p(path)

        with self._error_handling():
            with open(path, 'w', encoding=ENCODING, newline=NEW_LINE) as f:
                f.write(to_text(content))

        self._logger.debug("Wrote file", context={'path': os.fspath(path)})

    def chmod(self, path: Any, mode: int) -> None:
        with self._error_handling():
            os.chmod(path, mode)

    def mode(self, path: Any) -> int:
        with self._error_handling():
            return stat.S_IMODE(os.stat(path).st_mode)

    def join(self, *path: Any) -> str:
        tokens = [os.fspath(token) for token in Path.flatten(path)]
        return os.path.join(*tokens) if tokens else ""

    def expand_path(self, path: Any, dir: Any) -> str:
        return os.path.abspath(os.path.join(os.fspath(dir), os.path.expanduser(os.fspath(path))))

    def pwd(self) -> str:
        return os.getcwd()

    @contextmanager
    def chdir(self, path: Any) -> Iterator[str]:
        """
        Temporarily change the process working directory for a ``with`` block.

        Raises:
            IOError: In case of I/O error
        """
        previous = os.getcwd()
        with self._error_handling():
            os.chdir(path)
        try:
            yield os.getcwd()
        finally:
            os.chdir(previous)

    def mkdir(self, path: Any) -> None:
        """
        Create a directory and all its parent directories.

        Raises:
            IOError: In case of I/O error
        """
        with self._error_handling():
            os.makedirs(path, exist_ok=True)

    def mkdir_p(self, path: Any) -> None:
        """
        Create the directory ancestors of the file ``path``.

        Raises:
            IOError: In case of I/O error
        """
        dirname = os.path.dirname(os.fspath(path))
        if dirname:
            self.mkdir(dirname)

    def cp(self, source: Any, destination: Any) -> None:
        """
        Copy ``source`` into ``destination``, creating its directories.

        Raises:
            IOError: In case of I/O error
        """
        self.mkdir_p(destination)

        with self._error_handling():
            shutil.copy(source, destination)

    def rm(self, path: Any) -> None:
        with self._error_handling():
            os.remove(path)

    def rm_rf(self, path: Any) -> None:
        """
        Remove a file or a whole directory tree.

        Raises:
            IOError: If the path is missing, or in case of I/O error
        """
        with self._error_handling():
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)

    def exist(self, path: Any) -> bool:
        return os.path.exists(path)

    def directory(self, path: Any) -> bool:
        return os.path.isdir(path)

    def executable(self, path: Any) -> bool:
        return os.access(path, os.X_OK)

    def entries(self, path: Any) -> List[str]:
        with self._error_handling():
            return [".", ".."] + os.listdir(path)
