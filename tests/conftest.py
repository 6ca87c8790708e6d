"""
Shared test fixtures for the cert-decoder test suite.

Certificates are built at test time with cryptography's CertificateBuilder,
so every test states exactly which subject, issuer, key and serial it needs.
Keys are generated once per session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any, TypeAlias

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

NOT_BEFORE = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
NOT_AFTER = datetime(2034, 12, 31, 23, 59, 59, tzinfo=UTC)

NameSpec: TypeAlias = Sequence[tuple[x509.ObjectIdentifier, str]]
CertificateFactory: TypeAlias = Callable[..., x509.Certificate]


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_p256_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_p384_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ed25519_key() -> ed25519.Ed25519PrivateKey:
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def ed448_key() -> ed448.Ed448PrivateKey:
    return ed448.Ed448PrivateKey.generate()


@pytest.fixture(scope="session")
def dsa_key() -> dsa.DSAPrivateKey:
    return dsa.generate_private_key(key_size=1024)


def _name(attributes: NameSpec) -> x509.Name:
    return x509.Name([x509.NameAttribute(oid, value) for oid, value in attributes])


@pytest.fixture(scope="session")
def make_certificate(rsa_key: rsa.RSAPrivateKey) -> CertificateFactory:
    """
    Factory building a certificate signed with the session RSA key.

    ``subject_key`` is the key the certificate describes (defaults to the RSA
    key, making the certificate self-signed). ``issuer`` defaults to the
    subject name.
    """

    def _make(
        subject: NameSpec = ((NameOID.COMMON_NAME, "leaf.example.test"),),
        issuer: NameSpec | None = None,
        subject_key: Any = None,
        serial_number: int = 1000,
        dns_names: Sequence[str] = (),
        extra_general_names: Sequence[x509.GeneralName] = (),
    ) -> x509.Certificate:
        public_key = (subject_key or rsa_key).public_key()
        builder = (
            x509.CertificateBuilder()
            .subject_name(_name(subject))
            .issuer_name(_name(issuer if issuer is not None else subject))
            .public_key(public_key)
            .serial_number(serial_number)
            .not_valid_before(NOT_BEFORE)
            .not_valid_after(NOT_AFTER)
        )
        general_names = [x509.DNSName(name) for name in dns_names] + list(extra_general_names)
        if general_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName(general_names), critical=False,
            )
        return builder.sign(rsa_key, hashes.SHA256())

    return _make


@pytest.fixture(scope="session")
def to_pem() -> Callable[[x509.Certificate], str]:
    return lambda cert: cert.public_bytes(Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def to_der() -> Callable[[x509.Certificate], bytes]:
    return lambda cert: cert.public_bytes(Encoding.DER)


@pytest.fixture(scope="session")
def self_signed_rsa_pem(
    make_certificate: CertificateFactory,
    to_pem: Callable[[x509.Certificate], str],
) -> str:
    """A self-signed RSA-2048 certificate whose issuer has no organization."""
    return to_pem(make_certificate(subject=((NameOID.COMMON_NAME, "self-signed.example.test"),)))
