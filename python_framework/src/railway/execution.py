"""
Execution contexts — separate WHAT (pure logic) from HOW (side effects).

A pipeline describes what happens and returns Result[T]; an ExecutionContext
decides how it runs (timing, logging, exception containment). The two are
never mixed, so the decoding stages stay free of logging calls.

    ctx = LoggingExecutionContext(operation="DecodeCertificate")
    result = ctx.execute(lambda: decode_certificate(text, decoder, normalizer))
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, TypeVar, runtime_checkable

from railway.failure import ErrorCode, FailureDescription
from railway.result import Failure, Result

T = TypeVar("T")
logger = logging.getLogger("railway.execution")


@runtime_checkable
class ExecutionContext(Protocol):
    """Anything with ``execute(computation) -> Result`` is an execution context."""

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]: ...


class NoOpExecutionContext:
    """Passthrough execution context — runs the computation as is."""

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        return computation()


class LoggingExecutionContext:
    """
    Execution context that logs start, duration and outcome.

    An exception escaping the computation is contained and turned into a
    TECHNICAL_ERROR failure with a generic message; the exception text is
    logged, never returned to the caller.
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: int = logging.INFO,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = log_level

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        logger.log(self._log_level, "[%s] Starting execution", self._operation)
        start = time.monotonic()

        try:
            result = self._inner.execute(computation)
        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "[%s] Execution failed after %.3fs: %s",
                self._operation,
                elapsed,
                e,
            )
            return Failure(FailureDescription(ErrorCode.TECHNICAL_ERROR, "Execution failed", e))

        elapsed = time.monotonic() - start
        state = "SUCCESS" if result.is_success() else f"FAILURE ({result.error().code.value})"
        logger.log(
            self._log_level,
            "[%s] Completed in %.3fs — %s",
            self._operation,
            elapsed,
            state,
        )
        return result
