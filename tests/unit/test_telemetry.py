import logging

import pytest
from unittest.mock import patch

from infrastructure.logging import get_log_level
from infrastructure.telemetry import setup_opentelemetry, tracing_enabled


class TestTelemetrySetup:
    @pytest.mark.unit
    def test_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OTEL_TRACES_ENABLED", raising=False)

        assert tracing_enabled() is False
        with patch("infrastructure.telemetry.trace.set_tracer_provider") as set_provider:
            assert setup_opentelemetry() is False
        set_provider.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["true", "1", "YES"])
    def test_enabled_values(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTEL_TRACES_ENABLED", value)
        assert tracing_enabled() is True

    @pytest.mark.unit
    def test_enabled_installs_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTEL_TRACES_ENABLED", "true")

        with patch("infrastructure.telemetry.OTLPSpanExporter"), patch(
            "infrastructure.telemetry.BatchSpanProcessor"
        ), patch("infrastructure.telemetry.LoggingInstrumentor"), patch(
            "infrastructure.telemetry.trace.set_tracer_provider"
        ) as set_provider:
            assert setup_opentelemetry() is True

        set_provider.assert_called_once()


class TestLogLevel:
    @pytest.mark.unit
    def test_default_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.unit
    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_invalid_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert get_log_level() == logging.INFO
