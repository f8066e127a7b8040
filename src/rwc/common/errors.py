"""Shared error codes and exceptions for the counting core and the CLI."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    USAGE_ERROR = "USAGE_ERROR"
    IO_ERROR = "IO_ERROR"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    LIST_FORMAT_ERROR = "LIST_FORMAT_ERROR"


class BackendError(RuntimeError):
    """Exception carrying a structured error code for the CLI and renderers."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.reason = reason or message
        self.context = context or {}

    def __str__(self) -> str:  # pragma: no cover - formatting sugar
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value


class StreamReadError(BackendError):
    """Raised when reading an already opened source fails mid-stream."""

    def __init__(self, identifier: str, cause: OSError) -> None:
        super().__init__(
            ErrorCode.IO_ERROR,
            f"{identifier}: read failed: {_describe(cause)}",
            context={"source": identifier},
            reason=f"read failed: {_describe(cause)}",
        )
        self.cause = cause


class SourceUnavailable(BackendError):
    """Raised when a source cannot be opened at all."""

    def __init__(self, identifier: str, cause: OSError) -> None:
        super().__init__(
            ErrorCode.SOURCE_UNAVAILABLE,
            f"{identifier}: {_describe(cause)}",
            context={"source": identifier},
            reason=_describe(cause),
        )
        self.cause = cause


class ListFormatError(BackendError):
    """Raised when a path-list file cannot be turned into paths."""

    def __init__(self, list_path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.LIST_FORMAT_ERROR,
            f"{list_path}: {reason}",
            context={"list": list_path},
            reason=reason,
        )


class UsageError(BackendError):
    """Raised for argument combinations the CLI rejects."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.USAGE_ERROR, message)


def _describe(cause: OSError) -> str:
    return cause.strerror or str(cause) or type(cause).__name__
