"""
Pipeline — decode submitted text into a CertificateSummary.

Domain layer — pure transformation, no I/O, no logging. Both stages are
injected via ports and connected with flat_map:

  decoder.decode(submitted_text)          → PemBlock       [EnvelopeError]
    → normalizer.normalize(block.payload) → CertificateSummary
                                                           [ParseError, UnsupportedKeyTypeError]

A failing stage short-circuits the rest; the summary is built completely or
not at all.
"""

from __future__ import annotations

from railway.result import Result

from cert_decoder.domain.models import CertificateSummary
from cert_decoder.domain.ports import CertificateNormalizer, EnvelopeDecoder


def decode_certificate(
    submitted_text: str,
    decoder: EnvelopeDecoder,
    normalizer: CertificateNormalizer,
) -> Result[CertificateSummary]:
    """
    Run the decode-and-normalize pipeline on one submission.

    Returns Result[CertificateSummary] on success, or the failure of the first
    stage that rejected the input.
    """
    return decoder.decode(submitted_text).flat_map(
        lambda block: normalizer.normalize(block.payload)
    )
