"""
Library logging.

Importing ``content_hash`` never calls ``structlog.configure``: the module
logger resolves the host's processors and logger factory on every call and
only fixes its own level, read from ``CONTENT_HASH_LOG_LEVEL``. Applications
that have no structlog setup of their own can call ``setup_logging``.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

import orjson
import structlog
from beartype import beartype

from content_hash.core.settings import settings

LIBRARY_LOGGER = "content_hash"


class LoggerError(Exception):
    """Raised when an event carries an icon that is not a ``LogIcon``."""


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogIcon(StrEnum):
    """Icons attached to library events through the ``icon`` keyword."""

    DEFAULT = "📋"
    NETWORK = "🌐"
    SECURITY = "🔒"
    ADAPTER = "🔌"
    JSON = "📝"
    UPLOAD = "📤"


@dataclass
class LoggerConfig:
    """Options for ``setup_logging``."""

    debug: bool = field(default_factory=lambda: settings.DEBUG)
    log_level: LogLevel = field(default_factory=lambda: LogLevel(settings.LOG_LEVEL))


def get_logger(level: LogLevel | str | None = None):
    """
    Lazy library logger.

    Processors and the logger factory come from whatever structlog
    configuration is active when an event is emitted; only the level filter
    is owned here, so debug events stay silent under structlog's defaults.
    """
    threshold = LogLevel(level or settings.LOG_LEVEL)
    return structlog.wrap_logger(
        None,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(threshold.value)),
        logger_factory_args=(LIBRARY_LOGGER,),
        library=settings.API_NAME,
    )


class IconProcessor:
    """Resolve the ``icon`` keyword, prefixing it to the event in debug mode."""

    def __init__(self, debug: bool) -> None:
        self.debug = debug

    @beartype
    def __call__(self, logger, name: str, event_dict: dict) -> dict:
        raw = event_dict.pop("icon", None)
        if raw is None:
            return event_dict
        try:
            icon = LogIcon(raw)
        except ValueError as err:
            raise LoggerError(f"Unknown log icon: {raw!r}") from err
        if self.debug:
            event_dict["event"] = f"{icon.value} {event_dict.get('event', '')}"
        return event_dict


def console_renderer(logger, name: str, event_dict: dict) -> str:
    """Single-line console output: time, level, event, then key=value pairs."""
    head = [
        event_dict.pop("timestamp", ""),
        str(event_dict.pop("level", name)).upper(),
        str(event_dict.pop("event", "")),
    ]
    filename, lineno = event_dict.pop("filename", None), event_dict.pop("lineno", None)
    pairs = [f"{key}={value}" for key, value in event_dict.items()]
    if filename:
        pairs.append(f"@{filename}:{lineno}")
    return " | ".join(part for part in [*head, *pairs] if part)


def setup_logging(config: LoggerConfig | None = None) -> None:
    """
    Configure structlog for an application that uses this library directly.

    Debug mode renders to the console; otherwise events are written as
    orjson-encoded JSON lines.
    """
    config = config or LoggerConfig()
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        IconProcessor(debug=config.debug),
    ]
    if config.debug:
        processors += [
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ],
            ),
            console_renderer,
        ]
        factory = structlog.PrintLoggerFactory()
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(serializer=orjson.dumps),
        ]
        factory = structlog.BytesLoggerFactory()

    structlog.configure(
        processors=processors,
        logger_factory=factory,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(config.log_level.value)),
    )


logger = get_logger()
