"""
HTTP integration — ErrorCode→HTTP status mapping and response builders.

    status = HttpStatusMapper().map_failure(failure)           # → 400
    body, status = build_response(result, HttpStatusMapper())   # framework-agnostic

The mapper accepts per-code overrides so an application can move a failure
category to another status without touching the pipeline that produced it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Mapping, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class HttpStatusMapper:
    """Maps failures to HTTP status codes."""

    DEFAULT_STATUSES: Mapping[ErrorCode, int] = {
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.PAYLOAD_TOO_LARGE: 413,
        ErrorCode.TECHNICAL_ERROR: 500,
        ErrorCode.UNKNOWN_ERROR: 500,
    }

    def __init__(
        self,
        overrides: Mapping[ErrorCode, int] | None = None,
        exception_statuses: Mapping[type[BaseException], int] | None = None,
    ) -> None:
        self._statuses = {**self.DEFAULT_STATUSES, **(overrides or {})}
        self._exception_statuses = dict(exception_statuses or {})

    def map_error_code(self, code: ErrorCode) -> int:
        return self._statuses.get(code, 500)

    def map_failure(self, failure: FailureDescription) -> int:
        """
        Map a FailureDescription to a status.

        A status registered for the failure's exception type (or a base class
        of it) wins over the status of its ErrorCode.
        """
        if failure.exception is not None:
            for exc_type, status in self._exception_statuses.items():
                if isinstance(failure.exception, exc_type):
                    return status
        return self.map_error_code(failure.code)


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """
    Standardized error response body.

        {
            "error_code": "VALIDATION_ERROR",
            "message": "Invalid certificate",
            "timestamp": "2026-02-17T10:30:00+00:00"
        }
    """

    error_code: str
    message: str
    timestamp: str

    @staticmethod
    def from_failure(failure: FailureDescription) -> ErrorResponse:
        return ErrorResponse(
            error_code=failure.code.value,
            message=failure.message,
            timestamp=failure.timestamp.isoformat(),
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def build_response(
    result: Result[T],
    mapper: HttpStatusMapper | None = None,
    success_status: int = 200,
    serializer: Callable[[T], Any] | None = None,
) -> tuple[Any, int]:
    """
    Build a (body, status_code) tuple from a Result.

        body, status = build_response(result, mapper, serializer=CertificateSummary.to_dict)
    """
    mapper = mapper or HttpStatusMapper()
    return result.either(
        on_success=lambda value: (
            serializer(value) if serializer is not None else value,
            success_status,
        ),
        on_failure=lambda error: (
            ErrorResponse.from_failure(error).to_dict(),
            mapper.map_failure(error),
        ),
    )
