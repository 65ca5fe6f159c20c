"""
Files Exceptions

Exceptions raised by the filesystem adapters and the structural editor.
Every failure propagates unchanged to the caller; nothing in the package
retries or recovers silently.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any, Union
import re


class Error(Exception):
    """
    Base exception for all pyfiles errors.

    Also raised directly for validation failures (e.g. a non-integer mode
    given to chmod).

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 5000
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class IOError(Error):
    """
    Wraps a low level I/O failure.

    The original ``OSError`` is kept as ``cause`` so callers can inspect
    ``errno`` and ``filename`` without unwrapping.

    Example:
        >>> raise IOError(FileNotFoundError(2, "No such file or directory", "a.txt"))
    """

    def __init__(
        self,
        cause: BaseException,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        filename = getattr(cause, 'filename', None)
        if filename is not None:
            ctx["path"] = filename
        super().__init__(
            message=str(cause),
            error_code=5001,
            context=ctx
        )
        self._cause = cause

    @property
    def cause(self) -> BaseException:
        """The original exception."""
        return self._cause

    @property
    def errno(self) -> Optional[int]:
        return getattr(self._cause, 'errno', None)

    @property
    def filename(self) -> Optional[str]:
        return getattr(self._cause, 'filename', None)


class MissingTargetError(Error):
    """
    The given target cannot be found in the file.

    Raised by every line-locating operation of the editor, and by the block
    resolver when no balanced closing line exists.

    Example:
        >>> raise MissingTargetError("configure do", "config/app.rb")
    """

    def __init__(
        self,
        target: Union[str, "re.Pattern[str]", Any],
        path: Any,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        shown = target.pattern if isinstance(target, re.Pattern) else target
        super().__init__(
            message=f"cannot find `{shown}' in `{path}'",
            error_code=5002,
            context=context
        )
        self.target = target
        self.path = path


class UnknownNodeError(Error):
    """
    A memory node has no child with the given segment.

    Example:
        >>> raise UnknownNodeError("missing.txt")
    """

    def __init__(
        self,
        segment: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"unknown memory node `{segment}'",
            error_code=5003,
            context=context
        )
        self.segment = segment


class NotAFileError(Error):
    """
    A file operation was attempted on a directory memory node.

    Example:
        >>> raise NotAFileError("lib")
    """

    def __init__(
        self,
        segment: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"not a memory file `{segment}'",
            error_code=5004,
            context=context
        )
        self.segment = segment


class ConfigValidationError(Error):
    """Raised when configuration loading or validation fails."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, error_code=5005, context=ctx)
        self.key = key
