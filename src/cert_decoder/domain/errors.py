"""
Domain errors — the three ways a submission can be rejected.

Each error class carries the ErrorCode and the public message used on the
failure track. Adapters build these errors and return them inside
Result.failure(); they are not raised across the pipeline boundary.

The public message is fixed per class. Whatever the underlying library said
stays on the error instance (``__cause__``, ``detail``) for server-side
diagnostics and never reaches the submitter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar, Self, TypeVar

from railway import ErrorCode, Result

T = TypeVar("T")


class CertificateDecodeError(Exception):
    """Base class for every rejection produced by the decoding pipeline."""

    code: ClassVar[ErrorCode] = ErrorCode.VALIDATION_ERROR
    public_message: ClassVar[str] = "Failed to decode certificate"
    kind: ClassVar[str] = "decode"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.public_message)
        self.detail = detail

    def to_result(self) -> Result:
        """Wrap this error as a Failure carrying the public message."""
        return Result.failure(self.code, self.public_message, self)

    @classmethod
    def from_exception(cls, exc: BaseException | None, detail: str | None = None) -> Self:
        """Build this error with the library exception chained as ``__cause__``."""
        error = cls(detail)
        error.__cause__ = exc
        return error

    @classmethod
    def contain(cls, computation: Callable[[], T], detail: str | None = None) -> Result[T]:
        """
        Run a computation that may raise, with this error on the failure track.

        Result.from_computation does the catching; the exception it captured
        is swapped for this domain error so only the public message travels on.
        """
        return Result.from_computation(computation, cls.code, cls.public_message).either(
            Result.success,
            lambda failure: cls.from_exception(failure.exception, detail).to_result(),
        )


class EnvelopeError(CertificateDecodeError):
    """
    The text holds no decodable PEM block, or the block is not a certificate.

    Both cases share one message so the submitter cannot tell them apart.
    """

    public_message = "Invalid certificate"
    kind = "envelope"


class ParseError(CertificateDecodeError):
    """The PEM payload is not a structurally valid X.509 certificate."""

    public_message = "Failed to parse certificate"
    kind = "parse"


class UnsupportedKeyTypeError(CertificateDecodeError):
    """The certificate parsed, but its public key algorithm cannot be sized."""

    public_message = "Unsupported certificate key type"
    kind = "unsupported_key_type"
