"""
FastAPI + Uvicorn ASGI application — the web surface of cert-decoder.

Serves an HTML form where a user pastes a PEM certificate, and a JSON API
for the same pipeline. The pipeline itself knows nothing about HTTP or
templates; this module maps its Result onto responses.

Routes:
  GET  /            — form page
  POST /process     — form submission → page with the summary, or plain-text error
  GET  /process     — redirect to the form
  POST /api/decode  — JSON {"cert": "..."} → summary JSON, or ErrorResponse JSON
  GET  /health      — liveness probe

Entry point for production: uvicorn cert_decoder.asgi:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Form, Request
from fastapi.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from railway import (
    ErrorCode,
    FailureDescription,
    HttpStatusMapper,
    LoggingExecutionContext,
    Result,
    build_response,
)

from cert_decoder import __version__
from cert_decoder.config import AppSettings
from cert_decoder.domain.errors import ParseError, UnsupportedKeyTypeError
from cert_decoder.domain.models import CertificateSummary
from cert_decoder.main import DecodePipeline, configure_structlog, create_pipeline

# Loaded once at import; read-only afterwards.
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

# ─────────────────────── Global State ───────────────────────
# Set during app startup (or by configure() in tests).

_pipeline_fn: DecodePipeline | None = None
_status_mapper = HttpStatusMapper()
_max_submission_bytes = AppSettings.model_fields["max_submission_bytes"].default
log = structlog.get_logger()


def configure(settings: AppSettings, pipeline_fn: DecodePipeline) -> None:
    """Install the pipeline and the settings-derived request policy."""
    global _pipeline_fn, _status_mapper, _max_submission_bytes

    _pipeline_fn = pipeline_fn
    _max_submission_bytes = settings.max_submission_bytes
    _status_mapper = HttpStatusMapper(
        exception_statuses={
            ParseError: settings.parse_failure_status,
            UnsupportedKeyTypeError: settings.parse_failure_status,
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings, configure logging and wire the pipeline on startup."""
    try:
        settings = AppSettings()
    except Exception as e:
        log.error("asgi.startup_error", error=f"Configuration error: {e}")
        raise

    configure_structlog(settings.log_level)
    configure(settings, create_pipeline())

    log.info(
        "asgi.startup_complete",
        version=__version__,
        max_submission_bytes=settings.max_submission_bytes,
        parse_failure_status=settings.parse_failure_status,
    )

    yield

    log.info("asgi.shutdown_complete")


# ─────────────────────── Pipeline Execution ───────────────────────


_KIND_BY_CODE = {ErrorCode.PAYLOAD_TOO_LARGE: "too_large"}


def rejection_kind(failure: FailureDescription) -> str:
    """Domain errors name their own kind; other failures are named by error code."""
    kind = getattr(failure.exception, "kind", None)
    return kind or _KIND_BY_CODE.get(failure.code, "unexpected")


def _log_rejection(failure: FailureDescription) -> None:
    log.warning("process.rejected", error_code=failure.code.value, kind=rejection_kind(failure))


def _log_decoded(summary: CertificateSummary) -> None:
    log.info(
        "process.decoded",
        key_algorithm=summary.key_algorithm,
        key_size=summary.key_size,
    )


async def _run_pipeline(cert_text: str) -> Result[CertificateSummary]:
    """
    Size-check the submission and run the pipeline off the event loop.

    The submitted text is never logged.
    """
    if _pipeline_fn is None:
        return Result.failure(ErrorCode.TECHNICAL_ERROR, "Pipeline not initialized")

    if len(cert_text.encode("utf-8", errors="surrogatepass")) > _max_submission_bytes:
        result: Result[CertificateSummary] = Result.failure(
            ErrorCode.PAYLOAD_TOO_LARGE, "Certificate submission too large",
        )
    else:
        pipeline_fn = _pipeline_fn
        ctx = LoggingExecutionContext(operation="DecodeCertificate")
        result = await asyncio.to_thread(ctx.execute, lambda: pipeline_fn(cert_text))

    return result.peek(_log_decoded).peek_failure(_log_rejection)


# ─────────────────────── FastAPI Application ───────────────────────

app = FastAPI(
    title="cert-decoder",
    description="Decode a PEM certificate into a human-readable summary",
    version=__version__,
    lifespan=lifespan,
)


class DecodeRequest(BaseModel):
    cert: str


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> Response:
    return templates.TemplateResponse(request, "index.html", {"summary": None})


@app.get("/process")
async def process_redirect() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@app.post("/process")
async def process(request: Request, cert: str = Form("")) -> Response:
    """
    Decode a form submission and render the summary page.

    Failures are returned as a plain-text message with the mapped status;
    the message never contains parser diagnostics.
    """
    result = await _run_pipeline(cert)
    return result.either(
        on_success=lambda summary: templates.TemplateResponse(
            request, "index.html", {"summary": summary},
        ),
        on_failure=lambda failure: PlainTextResponse(
            failure.message, status_code=_status_mapper.map_failure(failure),
        ),
    )


@app.post("/api/decode")
async def decode_api(body: DecodeRequest) -> JSONResponse:
    """JSON variant of /process: summary as JSON, or a railway ErrorResponse."""
    result = await _run_pipeline(body.cert)
    content, status = build_response(
        result, _status_mapper, serializer=CertificateSummary.to_dict,
    )
    return JSONResponse(content=content, status_code=status)


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness probe — 503 until the pipeline has been wired."""
    if _pipeline_fn is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "reason": "pipeline not initialized"},
        )
    return JSONResponse(status_code=200, content={"status": "healthy"})
