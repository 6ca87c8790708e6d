"""
Failure description — structured error information for the failure track.

A failure is an ErrorCode (what kind of problem, and therefore which HTTP
status range it belongs to), a message that is safe to show to the caller,
and optionally the exception that caused it. The exception stays on the
server side: response builders only ever render ``code`` and ``message``.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """
    Error codes for the failure track, grouped by HTTP status range.

    - Client errors (4xx): VALIDATION_ERROR, PAYLOAD_TOO_LARGE
    - Server errors (5xx): TECHNICAL_ERROR, UNKNOWN_ERROR
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input could not be decoded or understood (→ 400)."""

    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    """Input exceeds the accepted size (→ 413)."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected fault while executing a computation (→ 500)."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unclassified failure (→ 500)."""

    @property
    def is_client_error(self) -> bool:
        return self in (ErrorCode.VALIDATION_ERROR, ErrorCode.PAYLOAD_TOO_LARGE)


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: code, public message, cause, timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Invalid certificate")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'Invalid certificate'
    """

    code: ErrorCode
    message: str
    exception: BaseException | None = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, for server-side diagnostics."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
        )
        return f"{self.message}\n{tb}"
