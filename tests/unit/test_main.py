"""
Unit tests for the main module — composition root.

Tests verify structlog configuration, pipeline wiring and startup
behavior without starting a real server.
"""

from __future__ import annotations

import pytest
import structlog
import uvicorn
from railway import ResultAssertions
from structlog.testing import capture_logs

from cert_decoder import main as main_module
from cert_decoder.domain.errors import EnvelopeError
from cert_decoder.main import configure_structlog, create_pipeline


def _emitted_levels(log_level: str | None = None) -> list[str]:
    """Configure structlog, log one event per level, return the levels that got through."""
    if log_level is None:
        configure_structlog()
    else:
        configure_structlog(log_level)
    with capture_logs() as captured:
        log = structlog.get_logger()
        log.debug("sample.debug")
        log.info("sample.info")
        log.warning("sample.warning")
        log.error("sample.error")
    return [entry["log_level"] for entry in captured]


class TestConfigureStructlog:
    """Verify structlog configuration function."""

    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_configure_structlog_sets_log_level(self) -> None:
        """
        GIVEN log_level WARNING
        WHEN configure_structlog is called
        THEN debug and info events are dropped, warnings and errors are kept.
        """
        assert _emitted_levels("WARNING") == ["warning", "error"]

    def test_configure_structlog_defaults_to_info(self) -> None:
        assert _emitted_levels() == ["info", "warning", "error"]

    def test_configure_structlog_accepts_lowercase(self) -> None:
        assert _emitted_levels("debug") == ["debug", "info", "warning", "error"]

    def test_configure_structlog_invalid_level_falls_back(self) -> None:
        """
        GIVEN an invalid log_level string
        WHEN configure_structlog is called
        THEN it falls back to INFO (no crash).
        """
        assert _emitted_levels("NONEXISTENT") == ["info", "warning", "error"]


class TestCreatePipeline:
    def test_wired_pipeline_decodes(self, self_signed_rsa_pem) -> None:
        pipeline = create_pipeline()
        summary = ResultAssertions.assert_success(pipeline(self_signed_rsa_pem))
        assert summary.key_algorithm == "RSA"

    def test_wired_pipeline_rejects(self) -> None:
        pipeline = create_pipeline()
        ResultAssertions.assert_failure_caused_by(pipeline("nope"), EnvelopeError)

    def test_wired_pipeline_rejects_damaged_armor(self, self_signed_rsa_pem) -> None:
        """
        GIVEN a real certificate whose END line names another PEM type
        WHEN run through the wired pipeline
        THEN it fails with EnvelopeError instead of producing a summary.
        """
        damaged = self_signed_rsa_pem.replace("-----END CERTIFICATE-----", "-----END PRIVATE KEY-----")
        ResultAssertions.assert_failure_caused_by(create_pipeline()(damaged), EnvelopeError)


class TestMain:
    def test_exits_on_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        """
        GIVEN an invalid LOG_LEVEL in the environment
        WHEN main() runs
        THEN it exits with status 1 and reports the configuration error.
        """
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(SystemExit) as exc_info:
            main_module.main()

        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_serves_asgi_app_with_configured_address(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("SERVER__HOST", "127.0.0.1")
        monkeypatch.setenv("SERVER__PORT", "9001")
        calls: list[tuple[tuple, dict]] = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

        main_module.main()

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("cert_decoder.asgi:app",)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9001
        assert kwargs["log_level"] == "info"
