"""Tests for transport selection in the application entry point."""

import logging

import pytest

from pingprobe.config import ProbeConfig
from pingprobe.fake_transport import LoopbackTransport
from pingprobe.transport_http import HttpTransport


@pytest.fixture
def build_transport():
    # Importing the entry point configures logging; undo it afterwards
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    from pingprobe.__main__ import build_transport

    yield build_transport
    root.handlers[:] = handlers
    root.setLevel(level)


class TestBuildTransport:
    """Test fallback between transports."""

    def test_loopback_by_default(self, build_transport):
        transport, message = build_transport(ProbeConfig())

        assert isinstance(transport, LoopbackTransport)
        assert message == "Using simulated server"

    def test_http_when_configured(self, build_transport):
        config = ProbeConfig(interval_ms=800, transport="http", url="http://localhost:5000/ping")

        transport, message = build_transport(config)

        assert isinstance(transport, HttpTransport)
        assert transport.timeout_ms == 800
        assert message is None

    def test_http_uses_configured_timeout(self, build_transport):
        config = ProbeConfig(timeout_ms=300, transport="http", url="http://localhost/ping")

        transport, _ = build_transport(config)

        assert transport.timeout_ms == 300

    def test_invalid_http_config_falls_back(self, build_transport):
        config = ProbeConfig(transport="http", url="")

        transport, message = build_transport(config)

        assert isinstance(transport, LoopbackTransport)
        assert message == "Using simulated server (configuration error)"
