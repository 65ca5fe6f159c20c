"""
Path Resolver Module

Cross operating system paths for the memory adapter.

Hardcoded string paths are turned into portable paths that respect the
host directory separator, whatever separator style the caller used.

Author: YSNRFD
Version: 1.0.0
"""

import os
import re
from typing import Any, Iterator, List, Union

PathLike = Union[str, "os.PathLike[str]"]

SEPARATOR = os.sep
EMPTY_TOKEN = ""

_SEPARATOR_MATCHER = re.compile(r"[\\/]")


class Path:
    """
    Splits, joins and inspects paths.

    Both ``/`` and ``\\`` are accepted as separators on every host; joined
    paths always use the host separator.

    Example:
        >>> Path.join("path", ["to", ["nested", "file"]])
        'path/to/nested/file'
    """

    @staticmethod
    def join(*tokens: Any) -> str:
        """
        Join (arbitrarily nested) path tokens with the host separator.

        Args:
            *tokens: Strings, path-like objects or nested lists of them

        Returns:
            The joined path
        """
        parts: List[str] = []
        for token in Path.flatten(tokens):
            parts.extend(Path.split(token))
        return SEPARATOR.join(parts)

    @staticmethod
    def split(path: PathLike) -> List[str]:
        """
        Split a path on either separator style.

        A path that is exactly the separator yields a single empty token.
        Trailing separators do not produce trailing empty tokens.
        """
        path = os.fspath(path)
        if path == SEPARATOR:
            return [EMPTY_TOKEN]
        if not path:
            return []

        tokens = _SEPARATOR_MATCHER.split(path)
        while len(tokens) > 1 and tokens[-1] == EMPTY_TOKEN:
            tokens.pop()
        return tokens

    @staticmethod
    def segments(path: PathLike) -> List[str]:
        """Non-empty segments of a path, as walked by the memory adapter."""
        return [token for token in Path.split(path) if token]

    @staticmethod
    def is_absolute(path: PathLike) -> bool:
        """Check if a path is absolute."""
        return os.fspath(path).startswith(SEPARATOR)

    @staticmethod
    def dirname(path: PathLike) -> str:
        """All the path, except for the last token."""
        return SEPARATOR.join(Path.split(path)[:-1])

    @staticmethod
    def flatten(tokens: Any) -> Iterator[PathLike]:
        """Yield the tokens of arbitrarily nested lists and tuples."""
        for token in tokens:
            if isinstance(token, (list, tuple)):
                yield from Path.flatten(token)
            else:
                yield token
