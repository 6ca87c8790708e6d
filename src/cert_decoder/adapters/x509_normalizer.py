"""
X.509 normalizer adapter — DER bytes → CertificateSummary.

Adapter layer — implements the CertificateNormalizer port using
cryptography (PyCA) for X.509 parsing.

Pipeline:
  DER bytes
    → cryptography: x509.load_der_x509_certificate() + eager decode of the
      lazily parsed parts (names, extensions, validity)        [ParseError]
    → key size dispatch over the public key type              [UnsupportedKeyTypeError]
    → CertificateSummary (domain model)

Only the two stages above can fail. Once the certificate is loaded, reading
subject, issuer and SAN values never fails: absent attributes become empty
strings or empty tuples.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypeAlias

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import (
    dsa,
    ec,
    ed448,
    ed25519,
    rsa,
    x448,
    x25519,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.extensions import ExtensionNotFound
from cryptography.x509.oid import NameOID
from railway.result import Result

from cert_decoder.domain.errors import (
    CertificateDecodeError,
    ParseError,
    UnsupportedKeyTypeError,
)
from cert_decoder.domain.models import CertificateSummary

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S +0000 UTC"
ISSUER_SEPARATOR = ", "

PublicKey: TypeAlias = (
    rsa.RSAPublicKey
    | ec.EllipticCurvePublicKey
    | dsa.DSAPublicKey
    | ed25519.Ed25519PublicKey
    | ed448.Ed448PublicKey
    | x25519.X25519PublicKey
    | x448.X448PublicKey
)

# ─────────────────────── Structural Parse ───────────────────────


def _load_certificate(der_bytes: bytes) -> x509.Certificate:
    """
    Load DER bytes and force every lazily decoded part to decode now.

    cryptography defers decoding of names, extensions and times until first
    access. Touching them here makes a malformed certificate fail in this
    stage, so field extraction afterwards cannot raise.
    """
    cert = x509.load_der_x509_certificate(der_bytes)
    _ = (
        cert.subject,
        cert.issuer,
        cert.extensions,
        cert.not_valid_before_utc,
        cert.not_valid_after_utc,
        cert.serial_number,
    )
    return cert


def _parse(der_bytes: bytes) -> Result[x509.Certificate]:
    """Any library exception while loading becomes a ParseError."""
    return ParseError.contain(
        lambda: _load_certificate(der_bytes),
        "malformed certificate structure",
    )


# ─────────────────────── Key Size ───────────────────────


def _raw_key_bits(public_key: PublicKey) -> int:
    return len(public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)) * 8


def key_size_bits(public_key: object) -> Result[tuple[str, int]]:
    """
    Size of a public key in bits, with a short algorithm name.

    RSA is reported as modulus byte length × 8, so a 2047-bit modulus still
    reads as 2048. Edwards and Montgomery keys report their encoded length.
    """
    match public_key:
        case rsa.RSAPublicKey():
            return Result.success(("RSA", (public_key.key_size + 7) // 8 * 8))
        case ec.EllipticCurvePublicKey():
            return Result.success(("EC", public_key.curve.key_size))
        case dsa.DSAPublicKey():
            return Result.success(("DSA", public_key.key_size))
        case ed25519.Ed25519PublicKey():
            return Result.success(("Ed25519", _raw_key_bits(public_key)))
        case ed448.Ed448PublicKey():
            return Result.success(("Ed448", _raw_key_bits(public_key)))
        case x25519.X25519PublicKey():
            return Result.success(("X25519", _raw_key_bits(public_key)))
        case x448.X448PublicKey():
            return Result.success(("X448", _raw_key_bits(public_key)))
        case _:
            return UnsupportedKeyTypeError(type(public_key).__name__).to_result()


def _key_load_error(cert: x509.Certificate, exc: BaseException | None) -> CertificateDecodeError:
    if isinstance(exc, UnsupportedAlgorithm):
        return UnsupportedKeyTypeError.from_exception(exc, cert.public_key_algorithm_oid.dotted_string)
    return ParseError.from_exception(exc, "malformed public key")


def _public_key_size(cert: x509.Certificate) -> Result[tuple[str, int]]:
    """
    Load and size the public key.

    An algorithm cryptography cannot load is unsupported; a key it can load
    but not decode is a malformed certificate.
    """
    return Result.from_computation(
        cert.public_key, ParseError.code, ParseError.public_message,
    ).either(
        key_size_bits,
        lambda failure: _key_load_error(cert, failure.exception).to_result(),
    )


# ─────────────────────── Field Extraction ───────────────────────


def _attribute_values(name: x509.Name, oid: x509.ObjectIdentifier) -> tuple[str, ...]:
    """All values of one attribute type, in the order they appear in the name."""
    return tuple(str(attr.value) for attr in name.get_attributes_for_oid(oid))


def _common_name(name: x509.Name) -> str:
    """The last CN in the name, or "" when there is none."""
    values = _attribute_values(name, NameOID.COMMON_NAME)
    return values[-1] if values else ""


def issuer_display(common_name: str, organizations: tuple[str, ...]) -> str:
    """
    "<issuer CN>, <first issuer O>", dropping whichever part is missing.

    Self-signed and minimal issuers often have no organization at all; the
    result is then the common name alone, without a trailing separator.
    """
    first_organization = organizations[0] if organizations else ""
    return ISSUER_SEPARATOR.join(part for part in (common_name, first_organization) if part)


def _dns_names(cert: x509.Certificate) -> tuple[str, ...]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except ExtensionNotFound:
        return ()
    return tuple(ext.value.get_values_for_type(x509.DNSName))


def format_timestamp(moment: datetime) -> str:
    """Render a validity bound as e.g. "2026-10-19 14:03:00 +0000 UTC"."""
    return moment.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def _summarize(cert: x509.Certificate, key_algorithm: str, key_size: int) -> CertificateSummary:
    subject = cert.subject
    issuer = cert.issuer
    return CertificateSummary(
        common_name=_common_name(subject),
        subject_alt_names=_dns_names(cert),
        organization=_attribute_values(subject, NameOID.ORGANIZATION_NAME),
        organizational_unit=_attribute_values(subject, NameOID.ORGANIZATIONAL_UNIT_NAME),
        locality=_attribute_values(subject, NameOID.LOCALITY_NAME),
        state=_attribute_values(subject, NameOID.STATE_OR_PROVINCE_NAME),
        country=_attribute_values(subject, NameOID.COUNTRY_NAME),
        valid_from=format_timestamp(cert.not_valid_before_utc),
        valid_to=format_timestamp(cert.not_valid_after_utc),
        issuer=issuer_display(
            _common_name(issuer),
            _attribute_values(issuer, NameOID.ORGANIZATION_NAME),
        ),
        key_size=key_size,
        key_algorithm=key_algorithm,
        serial_number=str(cert.serial_number),
    )


# ─────────────────────── Public Normalizer Class ───────────────────────


class X509CertificateNormalizer:
    """
    Parse DER certificate bytes into a CertificateSummary.

    Implements the CertificateNormalizer port. Stateless, safe to share.
    """

    def normalize(self, der_bytes: bytes) -> Result[CertificateSummary]:
        """
        Returns Result[CertificateSummary] on success.
        Returns a failure caused by ParseError when the bytes are not a
        certificate, or by UnsupportedKeyTypeError when the key cannot be sized.
        """
        return _parse(der_bytes).flat_map(
            lambda cert: _public_key_size(cert).map(
                lambda sized: _summarize(cert, *sized)
            )
        )
