"""
Application entry point — wires dependencies and starts the web server.

Composition root: creates the concrete adapters and binds them into the
pipeline. This is the ONLY place where concrete adapter classes are
instantiated; everything else depends on the port Protocols.

Responsibilities:
  1. Configure structlog for structured logging
  2. Load and validate configuration from environment
  3. Wire the decoding pipeline
  4. Serve the ASGI app with uvicorn
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from functools import partial
from typing import TypeAlias

import structlog
from railway.result import Result

from cert_decoder import __version__
from cert_decoder.adapters.pem_decoder import PemEnvelopeDecoder
from cert_decoder.adapters.x509_normalizer import X509CertificateNormalizer
from cert_decoder.config import AppSettings
from cert_decoder.domain.models import CertificateSummary
from cert_decoder.pipeline import decode_certificate

DecodePipeline: TypeAlias = Callable[[str], Result[CertificateSummary]]


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output with ISO timestamps; events below
    ``log_level`` are dropped. Unknown level names fall back to INFO.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_pipeline() -> DecodePipeline:
    """Bind the default adapters into a one-argument decoding pipeline."""
    return partial(
        decode_certificate,
        decoder=PemEnvelopeDecoder(),
        normalizer=X509CertificateNormalizer(),
    )


def main() -> None:
    """Load settings, configure logging and serve the app."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level,
    )

    import uvicorn

    uvicorn.run(
        "cert_decoder.asgi:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
