"""
Ports — Protocol-based interfaces for the two pipeline stages.

These define WHAT the pipeline needs without specifying HOW it's done:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing), so adapters and test fakes
satisfy the contract simply by implementing the method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result

from cert_decoder.domain.models import CertificateSummary, PemBlock


@runtime_checkable
class EnvelopeDecoder(Protocol):
    """
    Port: strip PEM armor from submitted text.

    Returns Result[PemBlock] holding a block labeled CERTIFICATE, or a failure
    caused by EnvelopeError. Must accept any string without raising.
    """

    def decode(self, submitted_text: str) -> Result[PemBlock]: ...


@runtime_checkable
class CertificateNormalizer(Protocol):
    """
    Port: turn DER certificate bytes into a CertificateSummary.

    Failures are caused by ParseError (not a certificate structure) or
    UnsupportedKeyTypeError (key algorithm cannot be sized).
    """

    def normalize(self, der_bytes: bytes) -> Result[CertificateSummary]: ...
