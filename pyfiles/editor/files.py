"""
Files Module

The structural editor: a façade over a filesystem adapter that adds line
and block oriented editing on top of plain file operations.

Every editing operation reads the whole file as lines, changes the list,
and writes it back in full.

Author: YSNRFD
Version: 1.0.0
"""

import functools
import re
from contextlib import AbstractContextManager
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from . import lines as line_model
from .blocks import (
    CLOSE_BLOCK,
    INLINE_CLOSE_BLOCK,
    closing_block_index,
    closing_class_index,
    dialect_for,
    is_inline_block,
    offset_block_lines,
)
from .lines import newline, is_blank, indentation_of, find_first, find_last
from pyfiles.core.config_loader import Config, get_config
from pyfiles.exceptions import Error, MissingTargetError
from pyfiles.filesystem import FileSystemAdapter, OpenMode, create_adapter
from pyfiles.logger import get_logger

INDENTATION = 2
SPACE = " "
CONTENT_OFFSET = 1

BlockContents = Union[str, Iterable[str]]
Finder = Callable[[Sequence[str], Any, Any], int]


def _reports_missing_target(method: Callable) -> Callable:
    """Log a warning for MissingTargetError before it reaches the caller."""
    @functools.wraps(method)
    def wrapper(self: "Files", path: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return method(self, path, *args, **kwargs)
        except MissingTargetError as e:
            self._logger.warning(
                f"{method.__name__} failed",
                context={"path": str(e.path), "target": e.target}
            )
            raise
    return wrapper


class Files:
    """
    File manipulations, on disk or in memory.

    Example:
        >>> files = Files(memory=True)
        >>> files.write('app.rb', ['class App', '  configure do', '  end', 'end'])
        >>> files.inject_line_at_block_top('app.rb', 'configure', 'root __dir__')
        >>> files.read('app.rb')
        'class App\\n  configure do\\n    root __dir__\\n  end\\nend\\n'
    """

    def __init__(
        self,
        memory: bool = False,
        adapter: Optional[FileSystemAdapter] = None,
        indentation: int = INDENTATION
    ):
        self._adapter = adapter if adapter is not None else create_adapter(memory)
        self._indentation = indentation
        self._logger = get_logger('editor')

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'Files':
        """Build a Files instance from the ``files`` configuration section."""
        config = config or get_config()
        return cls(
            memory=config.files.memory,
            indentation=config.files.indentation,
        )

    @property
    def adapter(self) -> FileSystemAdapter:
        return self._adapter

    # Filesystem operations

    def read(self, path: Any) -> str:
        """
        Read file content.

        Raises:
            IOError: In case of I/O error
        """
        return self._adapter.read(path)

    def readlines(self, path: Any) -> List[str]:
        return self._adapter.readlines(path)

    def touch(self, path: Any) -> None:
        """
        Create an empty file for the given path.

        All the intermediate directories are created. If the path already
        exists, its content is left untouched.
        """
        self._adapter.touch(path)

    def write(self, path: Any, content: Any = None) -> None:
        """
        Create a new file or rewrite the content of an existing one.

        All the intermediate directories are created.
        """
        self._adapter.write(path, content)

    def chmod(self, path: Any, mode: int) -> None:
        """
        Set UNIX permissions of the file at the given path.

        Accepts numeric modes only, best given as octal numbers
        (e.g. ``0o755``).

        Raises:
            Error: If mode is not an integer
            IOError: In case of I/O error
        """
        if isinstance(mode, bool) or not isinstance(mode, int):
            raise Error("mode should be an integer (e.g. 0o755)")

        self._adapter.chmod(path, mode)

    def mode(self, path: Any) -> int:
        return self._adapter.mode(path)

    def join(self, *path: Any) -> str:
        return self._adapter.join(*path)

    def expand_path(self, path: Any, dir: Any = None) -> str:
        """
        Convert a path to an absolute path.

        Relative paths are referenced from the current working directory
        unless ``dir`` is given.
        """
        return self._adapter.expand_path(path, self.pwd() if dir is None else dir)

    def pwd(self) -> str:
        return self._adapter.pwd()

    def open(self, path: Any, mode: Union[OpenMode, str] = OpenMode.READ_WRITE, **kwargs: Any) -> Any:
        """Open (or create) a file for read/write operations."""
        return self._adapter.open(path, mode, **kwargs)

    def chdir(self, path: Any) -> AbstractContextManager:
        """
        Temporarily change the current working directory.

        Example:
            >>> with files.chdir('lib'):
            ...     files.touch('app.rb')
        """
        return self._adapter.chdir(path)

    def mkdir(self, path: Any) -> None:
        """
        Create a directory for the given path.

        Every token of ``path`` is meant to be a directory; see ``mkdir_p``
        for file paths.
        """
        self._adapter.mkdir(path)

    def mkdir_p(self, path: Any) -> None:
        """
        Create the directories of a file path.

        All the tokens but the last are meant to be directories.
        """
        self._adapter.mkdir_p(path)

    def cp(self, source: Any, destination: Any) -> None:
        """
        Copy source into destination.

        All the intermediate directories are created; an existing
        destination is overwritten.
        """
        self._adapter.cp(source, destination)

    def delete(self, path: Any) -> None:
        """Delete the given file."""
        self._adapter.rm(path)

    def delete_directory(self, path: Any) -> None:
        """Delete the given directory, with all its content."""
        self._adapter.rm_rf(path)

    def exist(self, path: Any) -> bool:
        return self._adapter.exist(path)

    def directory(self, path: Any) -> bool:
        return self._adapter.directory(path)

    def executable(self, path: Any) -> bool:
        return self._adapter.executable(path)

    def entries(self, path: Any) -> List[str]:
        """Directory entries, ``.`` and ``..`` included."""
        return self._adapter.entries(path)

    # Line operations

    def unshift(self, path: Any, line: str) -> None:
        """Add a line at the top of the file."""
        content = self._adapter.readlines(path)
        content.insert(0, newline(line))

        self._write(path, content, "Unshifted line", 0)

    def append(self, path: Any, contents: str) -> None:
        """
        Add a line at the bottom of the file.

        The file is created if missing. Unless the file is empty or already
        ends with a blank line, a blank line separates the new content from
        the existing one.
        """
        self.mkdir_p(path)
        self.touch(path)

        content = self._adapter.readlines(path)
        if content and not is_blank(content[-1]):
            content[-1] = newline(content[-1])
            content.append(newline())
        content.append(newline(contents))

        self._write(path, content, "Appended line", len(content) - 1)

    @_reports_missing_target
    def replace_first_line(self, path: Any, target: Any, replacement: str) -> None:
        """
        Replace the first line of the file containing target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._replace_line(path, target, replacement, find_first)

    @_reports_missing_target
    def replace_last_line(self, path: Any, target: Any, replacement: str) -> None:
        """
        Replace the last line of the file containing target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._replace_line(path, target, replacement, find_last)

    @_reports_missing_target
    def inject_line_before(self, path: Any, target: Any, contents: str) -> None:
        """
        Inject contents before the first line matching target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._inject_line(path, target, contents, find_first, 0)

    @_reports_missing_target
    def inject_line_before_last(self, path: Any, target: Any, contents: str) -> None:
        """
        Inject contents before the last line matching target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._inject_line(path, target, contents, find_last, 0)

    @_reports_missing_target
    def inject_line_after(self, path: Any, target: Any, contents: str) -> None:
        """
        Inject contents after the first line matching target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._inject_line(path, target, contents, find_first, CONTENT_OFFSET)

    @_reports_missing_target
    def inject_line_after_last(self, path: Any, target: Any, contents: str) -> None:
        """
        Inject contents after the last line matching target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        self._inject_line(path, target, contents, find_last, CONTENT_OFFSET)

    # Block operations

    @_reports_missing_target
    def inject_line_at_block_top(self, path: Any, target: Any, *contents: BlockContents) -> None:
        """
        Inject contents at the top of the first block matching target.

        Each line of contents is indented one level deeper than the line
        opening the block. Contents may be single lines, lists of lines or
        multiline strings.

        Example:
            Given ``app.rb``::

                class App
                  configure do
                    root __dir__
                  end
                end

            ``files.inject_line_at_block_top('app.rb', 'configure', 'load!')``
            gives::

                class App
                  configure do
                    load!
                    root __dir__
                  end
                end

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        content = self._adapter.readlines(path)
        starting = find_first(content, target, path)
        block = self._offset(contents, content[starting])

        content[starting + CONTENT_OFFSET:starting + CONTENT_OFFSET] = block
        self._write(path, content, "Injected lines at block top", starting + CONTENT_OFFSET)

    @_reports_missing_target
    def inject_line_at_block_bottom(self, path: Any, target: Any, *contents: BlockContents) -> None:
        """
        Inject contents at the bottom of the first block matching target.

        The block may be a ``do``/``end`` (or keyword opened) block or a
        brace block; nested blocks are skipped. Each line of contents is
        indented one level deeper than the closing line.

        Raises:
            MissingTargetError: If target cannot be found in path, or the
                block is never closed
        """
        content = self._adapter.readlines(path)
        starting = find_first(content, target, path)
        delimiter = dialect_for(content[starting])
        ending = closing_block_index(content, starting, path, target, delimiter)
        block = self._offset(contents, content[ending])

        content[ending:ending] = block
        self._write(path, content, "Injected lines at block bottom", ending)

    @_reports_missing_target
    def inject_line_at_class_bottom(self, path: Any, target: Any, *contents: BlockContents) -> None:
        """
        Inject contents at the bottom of the class (or module) matching target.

        Example:
            Given ``math.rb``::

                class Math
                end

            ``files.inject_line_at_class_bottom('math.rb', 'Math',
            ['def sum(a, b)', '  a + b', 'end'])`` gives::

                class Math
                  def sum(a, b)
                    a + b
                  end
                end

        Raises:
            MissingTargetError: If target cannot be found in path, or the
                class is never closed
        """
        content = self._adapter.readlines(path)
        starting = find_first(content, target, path)
        ending = closing_class_index(content, starting, path, target)
        block = self._offset(contents, content[ending])

        content[ending:ending] = block
        self._write(path, content, "Injected lines at class bottom", ending)

    @_reports_missing_target
    def remove_line(self, path: Any, target: Any) -> None:
        """
        Remove the first line matching target.

        Raises:
            MissingTargetError: If target cannot be found in path
        """
        content = self._adapter.readlines(path)
        i = find_first(content, target, path)

        del content[i]
        self._write(path, content, "Removed line", i)

    @_reports_missing_target
    def remove_block(self, path: Any, target: Any) -> None:
        """
        Remove every block whose opening line matches target.

        A block runs from its opening line to the first following line
        made of the opening line's indentation and ``end`` (or ``}`` for a
        brace block).

        Example:
            Given ``app.rb``::

                class App
                  configure do
                    root __dir__
                  end
                end

            ``files.remove_block('app.rb', 'configure')`` gives::

                class App
                end

        Raises:
            MissingTargetError: If target cannot be found in path, or a
                matching block is never closed
        """
        content = self._adapter.readlines(path)
        starting = find_first(content, target, path)
        removed = 0

        while starting is not None:
            line = content[starting]
            ending = line_model.line_number(
                content[starting:], self._closing_line_matcher(line)
            )
            if ending is None:
                raise MissingTargetError(target, path)
            ending += starting

            del content[starting:ending + CONTENT_OFFSET]
            removed += 1
            starting = line_model.line_number(content, target)

        self._logger.debug(
            "Removed blocks",
            context={'path': str(path), 'count': removed}
        )
        self._adapter.write(path, content)

    # Helpers

    def _write(self, path: Any, content: List[str], action: str, line: int) -> None:
        self._adapter.write(path, content)
        self._logger.debug(action, context={'path': str(path), 'line': line})

    def _replace_line(self, path: Any, target: Any, replacement: str, finder: Finder) -> None:
        content = self._adapter.readlines(path)
        i = finder(content, target, path)
        content[i] = newline(replacement)

        self._write(path, content, "Replaced line", i)

    def _inject_line(self, path: Any, target: Any, contents: str, finder: Finder, offset: int) -> None:
        content = self._adapter.readlines(path)
        i = finder(content, target, path) + offset
        content.insert(i, newline(contents))

        self._write(path, content, "Injected line", i)

    def _offset(self, contents: Sequence[BlockContents], line: str) -> List[str]:
        indentation = SPACE * (indentation_of(line) + self._indentation)
        return offset_block_lines(contents, indentation)

    @staticmethod
    def _closing_line_matcher(line: str) -> "re.Pattern[str]":
        """Closing line of the block opened by ``line``: same indentation, then the closer."""
        indentation = line[:indentation_of(line)]
        if is_inline_block(line):
            return re.compile("^" + re.escape(indentation + INLINE_CLOSE_BLOCK))
        return re.compile("^" + re.escape(indentation + CLOSE_BLOCK) + r"\b")
