"""
Line Model Module

File content seen as an ordered list of canonical lines, and the targets
used to locate one of them.

A target is either a Literal (matched by containment) or a Pattern
(matched by ``re.search``). Callers may pass a plain ``str`` or a compiled
regular expression; ``as_target`` turns them into the tagged variant once,
at the call boundary.

Author: YSNRFD
Version: 1.0.0
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from pyfiles.exceptions import Error, MissingTargetError

NEW_LINE = "\n"

_INDENTATION_MATCHER = re.compile(r"[^\S\n]*")


@dataclass(frozen=True)
class Literal:
    """Matches lines containing ``text``."""
    text: str

    @property
    def value(self) -> str:
        return self.text

    def matches(self, line: str) -> bool:
        return self.text in line


@dataclass(frozen=True)
class Pattern:
    """Matches lines where ``regex`` can be found."""
    regex: "re.Pattern[str]"

    @property
    def value(self) -> "re.Pattern[str]":
        return self.regex

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


Target = Union[Literal, Pattern]


def as_target(target: Any) -> Target:
    """
    Resolve a caller supplied target.

    Raises:
        Error: If the target is neither a string nor a compiled pattern
    """
    if isinstance(target, (Literal, Pattern)):
        return target
    if isinstance(target, str):
        return Literal(target)
    if isinstance(target, re.Pattern):
        return Pattern(target)
    raise Error(
        f"target should be a string or a compiled pattern, got {type(target).__name__}"
    )


def newline(line: Optional[str] = None) -> str:
    """Canonicalize a line so it ends with exactly one line terminator."""
    line = "" if line is None else str(line)
    if line.endswith(NEW_LINE):
        return line
    return line + NEW_LINE


def is_newline(line: Optional[str]) -> bool:
    """Check if a line carries its terminator."""
    return line is not None and line.endswith(NEW_LINE)


def is_blank(line: Optional[str]) -> bool:
    return line is not None and not line.strip()


def indentation_of(line: str) -> int:
    """Width of the leading whitespace of a line."""
    return _INDENTATION_MATCHER.match(line).end()


def line_number(lines: Sequence[str], target: Any, last: bool = False) -> Optional[int]:
    """Index of the first (or last) line matching target, None if nothing matches."""
    target = as_target(target)
    indexes = range(len(lines) - 1, -1, -1) if last else range(len(lines))

    for i in indexes:
        if target.matches(lines[i]):
            return i
    return None


def matches(lines: Sequence[str], target: Any) -> bool:
    return line_number(lines, target) is not None


def find_first(lines: Sequence[str], target: Any, path: Any) -> int:
    """
    Index of the first line matching target.

    Raises:
        MissingTargetError: If no line matches
    """
    i = line_number(lines, target)
    if i is None:
        raise MissingTargetError(as_target(target).value, path)
    return i


def find_last(lines: Sequence[str], target: Any, path: Any) -> int:
    """
    Index of the last line matching target.

    Raises:
        MissingTargetError: If no line matches
    """
    i = line_number(lines, target, last=True)
    if i is None:
        raise MissingTargetError(as_target(target).value, path)
    return i


def split_lines(text: str) -> List[str]:
    """Split text on line terminators, dropping trailing empty tokens."""
    tokens = text.split(NEW_LINE)
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens
