"""
Test assertions for Result values.

    from railway import ResultAssertions

    def test_rejects_empty_submission():
        result = decoder.decode("")
        ResultAssertions.assert_failure(result, ErrorCode.VALIDATION_ERROR)
        ResultAssertions.assert_failure_message_equals(result, "Invalid certificate")
"""

from __future__ import annotations

from typing import TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """Assert the Result is a Success and return the value."""
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure("
            f"{result.error().code.value}: {result.error().message!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """Assert the Result is a Failure, optionally checking the error code."""
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_caused_by(
        result: Result[T],
        exception_type: type[BaseException],
    ) -> BaseException:
        """Assert the Result is a Failure whose exception is an instance of ``exception_type``."""
        error = ResultAssertions.assert_failure(result)
        assert isinstance(error.exception, exception_type), (
            f"Expected failure caused by {exception_type.__name__} "
            f"but got {type(error.exception).__name__}: {error.message!r}"
        )
        return error.exception

    @staticmethod
    def assert_failure_message_equals(result: Result[T], expected_message: str) -> None:
        error = ResultAssertions.assert_failure(result)
        assert error.message == expected_message, (
            f"Expected failure message {expected_message!r} "
            f"but got {error.message!r}"
        )
