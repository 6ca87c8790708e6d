"""
PEM envelope decoder adapter — submitted text → PemBlock.

Adapter layer — implements the EnvelopeDecoder port. The first well-formed
BEGIN/END block is located here, skipping any leading text such as the
human-readable dump some tools print above a certificate; asn1crypto.pem
then decodes it.

pem.unarmor on its own is lenient: it accepts trailing text after the BEGIN
marker, ends a block at any line starting with dashes whatever its label, and
silently drops characters outside the base64 alphabet. A block only counts as
well-formed when
  - the BEGIN line is exactly ``-----BEGIN <LABEL>-----``
  - the END line is ``-----END <LABEL>-----`` with the same label
  - the body (after any ``Name: value`` header lines) is strict base64
Trailing whitespace on any line is tolerated. A malformed candidate is
skipped and the search continues with the next BEGIN line.

Every way this can go wrong (no block at all, text that cannot be decoded,
a block that is not a certificate) collapses into one EnvelopeError.
"""

from __future__ import annotations

import re
from itertools import dropwhile

from asn1crypto import pem
from railway.result import Result

from cert_decoder.domain.errors import EnvelopeError
from cert_decoder.domain.models import PemBlock

_BEGIN_LINE = re.compile(r"-----BEGIN ([A-Z0-9 ]+)-----")
_BASE64_BODY = re.compile(r"[A-Za-z0-9+/]*={0,2}")


def _is_base64(body: str) -> bool:
    return len(body) % 4 == 0 and _BASE64_BODY.fullmatch(body) is not None


def _well_formed_block_at(lines: list[str], start: int) -> str | None:
    """
    The block whose BEGIN line is ``lines[start]``, re-armored canonically.

    Returns None when the BEGIN line, the END line or the body is malformed.
    """
    begin = _BEGIN_LINE.fullmatch(lines[start].rstrip())
    if begin is None:
        return None
    label = begin.group(1)

    body_lines: list[str] = []
    for line in lines[start + 1:]:
        stripped = line.strip()
        if stripped.startswith("-----"):
            if stripped != f"-----END {label}-----":
                return None
            body = "".join(dropwhile(lambda body_line: ":" in body_line, body_lines))
            if not _is_base64(body):
                return None
            return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n"
        if stripped:
            body_lines.append(stripped)
    return None


def _first_well_formed_block(submitted_text: str) -> str:
    lines = submitted_text.splitlines()
    for start, line in enumerate(lines):
        if line.startswith("-----BEGIN"):
            block = _well_formed_block_at(lines, start)
            if block is not None:
                return block
    raise ValueError("no well-formed PEM block")


def _unarmor_first_block(submitted_text: str) -> PemBlock:
    """Decode the first well-formed PEM block in the text. May raise (contained by the caller)."""
    object_type, _headers, der_bytes = pem.unarmor(
        _first_well_formed_block(submitted_text).encode("ascii")
    )
    return PemBlock(label=object_type, payload=der_bytes)


def _require_certificate(block: PemBlock) -> Result[PemBlock]:
    if not block.is_certificate:
        return EnvelopeError(f"unexpected PEM label {block.label!r}").to_result()
    return Result.success(block)


class PemEnvelopeDecoder:
    """
    Strip PEM armor and insist on a CERTIFICATE label.

    Implements the EnvelopeDecoder port. Stateless, safe to share.
    All exceptions are contained at this adapter boundary via EnvelopeError.contain().
    """

    def decode(self, submitted_text: str) -> Result[PemBlock]:
        if not isinstance(submitted_text, str) or not submitted_text.strip():
            return EnvelopeError("empty submission").to_result()

        return EnvelopeError.contain(
            lambda: _unarmor_first_block(submitted_text),
            "no PEM block found",
        ).flat_map(_require_certificate)
