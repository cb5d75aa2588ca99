"""Tests for library logging."""

import importlib
import sys

import pytest
import structlog
from structlog.testing import capture_logs

from content_hash.core.logger import (
    IconProcessor,
    LogIcon,
    LoggerConfig,
    LoggerError,
    LogLevel,
    console_renderer,
    get_logger,
    setup_logging,
)


@pytest.fixture
def host_logging():
    """A host application's own structlog setup."""
    renderer = structlog.processors.KeyValueRenderer()
    structlog.configure(processors=[renderer], logger_factory=structlog.ReturnLoggerFactory())
    yield renderer
    structlog.reset_defaults()


class TestImport:
    """Importing the package must leave structlog alone."""

    def test_import_keeps_host_config(self, host_logging, monkeypatch: pytest.MonkeyPatch) -> None:
        before = structlog.get_config()
        snapshot = {**before, "processors": list(before["processors"])}
        for name in [name for name in sys.modules if name == "content_hash" or name.startswith("content_hash.")]:
            monkeypatch.delitem(sys.modules, name)

        importlib.import_module("content_hash")

        after = structlog.get_config()
        assert after["processors"] == snapshot["processors"] == [host_logging]
        assert after["logger_factory"] is snapshot["logger_factory"]
        assert after["wrapper_class"] is snapshot["wrapper_class"]

    def test_host_events_untouched(self, host_logging) -> None:
        message = "host application event message that is fairly long and goes past eighty characters"

        assert structlog.get_logger().info(message) == f"event={message!r}"


class TestGetLogger:
    """Tests for the library logger."""

    def test_events_go_through_host_processors(self) -> None:
        with capture_logs() as logs:
            get_logger(LogLevel.DEBUG).debug("Computed content digest", icon=LogIcon.SECURITY, digest="abc")

        assert logs == [
            {
                "event": "Computed content digest",
                "icon": LogIcon.SECURITY,
                "digest": "abc",
                "library": "content-sha256",
                "log_level": "debug",
            }
        ]

    def test_debug_filtered_at_info(self) -> None:
        with capture_logs() as logs:
            get_logger("INFO").debug("Signing request body")

        assert logs == []


class TestIconProcessor:
    """Tests for IconProcessor."""

    def test_icon_prefixed_in_debug(self) -> None:
        processor = IconProcessor(debug=True)

        result = processor(None, "debug", {"event": "Signing request body", "icon": LogIcon.SECURITY})

        assert result == {"event": f"{LogIcon.SECURITY.value} Signing request body"}

    def test_icon_dropped_outside_debug(self) -> None:
        processor = IconProcessor(debug=False)

        result = processor(None, "debug", {"event": "Signing request body", "icon": LogIcon.SECURITY})

        assert result == {"event": "Signing request body"}

    def test_event_without_icon_unchanged(self) -> None:
        event = {"event": "host event that should keep its case"}
        assert IconProcessor(debug=True)(None, "info", dict(event)) == event

    def test_invalid_icon_raises(self) -> None:
        with pytest.raises(LoggerError, match="Unknown log icon"):
            IconProcessor(debug=True)(None, "info", {"event": "x", "icon": "not-an-icon"})


def test_console_renderer() -> None:
    rendered = console_renderer(
        None,
        "debug",
        {"timestamp": "t", "level": "debug", "event": "E", "kind": "text", "filename": "body.py", "lineno": 3},
    )
    assert rendered == "t | DEBUG | E | kind=text | @body.py:3"


@pytest.mark.parametrize(
    ("debug", "renderer_type"),
    [(True, type(console_renderer)), (False, structlog.processors.JSONRenderer)],
)
def test_setup_logging(debug: bool, renderer_type: type) -> None:
    try:
        setup_logging(LoggerConfig(debug=debug, log_level=LogLevel.DEBUG))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], renderer_type)
        assert any(isinstance(processor, IconProcessor) for processor in processors)
    finally:
        structlog.reset_defaults()
