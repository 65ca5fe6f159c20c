"""
pyfiles Editor Module

Line and block oriented editing of text files:
- Line model and targets (lines)
- Block boundary resolution (blocks)
- The Files façade (files)
"""

from .lines import Literal, Pattern, as_target, newline
from .blocks import Delimiter, BLOCK_DELIMITER, INLINE_BLOCK_DELIMITER
from .files import Files

__all__ = [
    'Files',
    'Literal',
    'Pattern',
    'as_target',
    'newline',
    'Delimiter',
    'BLOCK_DELIMITER',
    'INLINE_BLOCK_DELIMITER',
]
