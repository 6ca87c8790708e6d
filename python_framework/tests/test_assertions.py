"""Tests for ResultAssertions test helpers."""

import pytest

from railway import ErrorCode, Result, ResultAssertions


class TestAssertSuccess:
    def test_returns_value(self):
        assert ResultAssertions.assert_success(Result.success(5)) == 5

    def test_raises_on_failure(self):
        with pytest.raises(AssertionError, match="Expected Success"):
            ResultAssertions.assert_success(Result.failure(ErrorCode.VALIDATION_ERROR, "bad"))


class TestAssertFailure:
    def test_returns_description(self):
        error = ResultAssertions.assert_failure(
            Result.failure(ErrorCode.VALIDATION_ERROR, "bad"), ErrorCode.VALIDATION_ERROR,
        )
        assert error.message == "bad"

    def test_raises_on_success(self):
        with pytest.raises(AssertionError, match="Expected Failure"):
            ResultAssertions.assert_failure(Result.success(1))

    def test_raises_on_wrong_code(self):
        with pytest.raises(AssertionError, match="Expected error code"):
            ResultAssertions.assert_failure(
                Result.failure(ErrorCode.TECHNICAL_ERROR, "x"), ErrorCode.VALIDATION_ERROR,
            )


class TestAssertFailureCausedBy:
    def test_returns_exception(self):
        ex = KeyError("k")
        result = Result.failure(ErrorCode.VALIDATION_ERROR, "bad", ex)
        assert ResultAssertions.assert_failure_caused_by(result, LookupError) is ex

    def test_raises_on_other_exception_type(self):
        result = Result.failure(ErrorCode.VALIDATION_ERROR, "bad", ValueError())
        with pytest.raises(AssertionError, match="caused by KeyError"):
            ResultAssertions.assert_failure_caused_by(result, KeyError)

    def test_raises_when_no_exception(self):
        with pytest.raises(AssertionError):
            ResultAssertions.assert_failure_caused_by(
                Result.failure(ErrorCode.VALIDATION_ERROR, "bad"), ValueError,
            )


class TestAssertFailureMessageEquals:
    def test_passes_on_exact_message(self):
        ResultAssertions.assert_failure_message_equals(
            Result.failure(ErrorCode.VALIDATION_ERROR, "Invalid certificate"), "Invalid certificate",
        )

    def test_raises_on_different_message(self):
        with pytest.raises(AssertionError, match="Expected failure message"):
            ResultAssertions.assert_failure_message_equals(
                Result.failure(ErrorCode.VALIDATION_ERROR, "a"), "b",
            )
