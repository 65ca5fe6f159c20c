"""
Block Boundary Module

Finds the line closing a block, given the line opening it.

This is marker counting, not parsing: scanning down from the opening line,
every line that opens a block adds one to a running balance, every line
that closes one removes one, and the first line bringing the balance back
to zero is the closing line. Nested blocks are skipped without ever
building a tree, and blocks after the closing line are never looked at.

Author: YSNRFD
Version: 1.0.0
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Union

from .lines import NEW_LINE, split_lines
from pyfiles.exceptions import MissingTargetError

INLINE_OPEN_BLOCK = "{"
INLINE_CLOSE_BLOCK = "}"
OPEN_BLOCK = "do"
CLOSE_BLOCK = "end"
EMPTY_LINE = ""

# Keywords opening a block when they start a statement; a trailing
# ``if``/``unless`` modifier does not open anything.
BLOCK_KEYWORDS = (
    "def", "class", "module", "if", "unless", "case",
    "while", "until", "for", "begin",
)

INLINE_OPEN_BLOCK_MATCHER = re.compile(r"\{\s*(?:\|[^|]*\|)?\s*$")


def _token_matcher(token: str) -> str:
    """Regex source for token, with word boundaries on its word-character ends."""
    source = re.escape(token)
    if re.match(r"\w", token[0]):
        source = r"\b" + source
    if re.match(r"\w", token[-1]):
        source = source + r"\b"
    return source


@dataclass(frozen=True)
class Delimiter:
    """Opening and closing markers of a block dialect."""
    name: str
    opening: str
    closing: str
    keywords: tuple = ()

    @property
    def opening_matcher(self) -> "re.Pattern[str]":
        source = _token_matcher(self.opening)
        if self.keywords:
            keywords = "|".join(re.escape(k) for k in self.keywords)
            source = rf"^\s*(?:{keywords})\b|{source}"
        return re.compile(source)

    @property
    def closing_matcher(self) -> "re.Pattern[str]":
        return re.compile(_token_matcher(self.closing))

    def opens(self, line: str) -> bool:
        return self.opening_matcher.search(line) is not None

    def closes(self, line: str) -> bool:
        return self.closing_matcher.search(line) is not None


BLOCK_DELIMITER = Delimiter("BlockDelimiter", OPEN_BLOCK, CLOSE_BLOCK, BLOCK_KEYWORDS)
INLINE_BLOCK_DELIMITER = Delimiter("InlineBlockDelimiter", INLINE_OPEN_BLOCK, INLINE_CLOSE_BLOCK)


def is_inline_block(line: str) -> bool:
    """Check if a line opens a brace delimited block."""
    return INLINE_OPEN_BLOCK_MATCHER.search(line.rstrip(NEW_LINE)) is not None


def dialect_for(line: str) -> Delimiter:
    return INLINE_BLOCK_DELIMITER if is_inline_block(line) else BLOCK_DELIMITER


def closing_block_index(
    lines: Sequence[str],
    starting: int,
    path: Any,
    target: Any,
    delimiter: Delimiter,
    offset: int = 0
) -> int:
    """
    Index of the line closing the block opened at ``starting``.

    Args:
        lines: The whole file, as lines
        starting: Index of the opening line
        path: File path, for error reporting
        target: The caller's target, for error reporting
        delimiter: Block dialect
        offset: Implicit openers. With an offset the opening line itself is
            not counted: it stands for exactly ``offset`` openers.

    Raises:
        MissingTargetError: If the block is never closed
    """
    depth = offset

    for i, line in enumerate(lines[starting:]):
        if delimiter.opens(line) and not (offset and i == 0):
            depth += 1
        if depth <= 0:
            break

        if delimiter.closes(line):
            depth -= 1
            if depth == 0:
                return starting + i

    raise MissingTargetError(target, path)


def closing_class_index(
    lines: Sequence[str],
    starting: int,
    path: Any,
    target: Any
) -> int:
    """Index of the line closing the class or module declared at ``starting``."""
    return closing_block_index(lines, starting, path, target, BLOCK_DELIMITER, offset=1)


def offset_block_lines(
    contents: Iterable[Union[str, Iterable[str]]],
    indentation: str
) -> List[str]:
    """
    Indent block contents.

    Every entry is split on embedded line terminators; each resulting line
    is prefixed with ``indentation``, except empty lines which stay empty.
    """
    result: List[str] = []

    for entry in contents:
        if not isinstance(entry, str):
            result.extend(offset_block_lines(entry, indentation))
        elif NEW_LINE in entry:
            result.extend(offset_block_lines(split_lines(entry), indentation))
        elif entry == EMPTY_LINE:
            result.append(NEW_LINE)
        else:
            result.append(indentation + entry + NEW_LINE)

    return result
