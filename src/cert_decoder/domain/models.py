"""
Domain models — immutable value objects flowing through the decoding pipeline.

    submitted text → PemBlock → CertificateSummary

All models are frozen dataclasses; sequences are tuples so a summary cannot
be mutated after construction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

CERTIFICATE_LABEL = "CERTIFICATE"


@dataclass(frozen=True, slots=True)
class PemBlock:
    """
    One block of PEM armor: the BEGIN/END label and the decoded payload.

    Any ``Name: value`` header lines in the armor are not kept.
    """

    label: str
    payload: bytes = field(repr=False)

    @property
    def is_certificate(self) -> bool:
        return self.label == CERTIFICATE_LABEL


@dataclass(frozen=True, slots=True)
class CertificateSummary:
    """
    Presentation-ready description of an X.509 certificate.

    Subject fields keep the order and multiplicity of the source certificate;
    an attribute the certificate does not carry is an empty string or an
    empty tuple, never None.
    """

    common_name: str = ""
    subject_alt_names: tuple[str, ...] = ()
    organization: tuple[str, ...] = ()
    organizational_unit: tuple[str, ...] = ()
    locality: tuple[str, ...] = ()
    state: tuple[str, ...] = ()
    country: tuple[str, ...] = ()
    valid_from: str = ""
    valid_to: str = ""
    issuer: str = ""
    key_size: int = 0
    key_algorithm: str = ""
    serial_number: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation (tuples become lists)."""
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in asdict(self).items()
        }
