"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable error handling — stages return Result instead of raising.

    from railway import Result, ErrorCode

    def require_label(label: str) -> Result[str]:
        if label != "CERTIFICATE":
            return Result.failure(ErrorCode.VALIDATION_ERROR, "Invalid certificate")
        return Result.success(label)
"""

from railway.assertions import ResultAssertions
from railway.execution import (
    ExecutionContext,
    LoggingExecutionContext,
    NoOpExecutionContext,
)
from railway.failure import ErrorCode, FailureDescription
from railway.http_support import ErrorResponse, HttpStatusMapper, build_response
from railway.result import Failure, Result, Success

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "HttpStatusMapper",
    "ErrorResponse",
    "build_response",
    "ResultAssertions",
]

__version__ = "1.1.0"
