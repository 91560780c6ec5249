"""
Sermon-Search-Service - Structured Logging Module

structlog, configured once at startup by configure_logging(). Modules call
get_logger(__name__) and log snake_case events with key/value context:

    logger.info("search_completed", query="Rom 8:1", sermons=12)

Queries are logged (capped at MAX_LOGGED_QUERY_LENGTH characters); document
text never is. Any value under a DOCUMENT_TEXT_KEYS key is replaced by its
length before rendering.

bind_request_context() attaches a request id and path to every event logged
while a request is handled.
"""

import logging
import sys
import uuid
from typing import Any, Final

import structlog
from structlog.typing import EventDict

_configured: bool = False
_service_name: str = "sermon-search-service"

MAX_LOGGED_QUERY_LENGTH: Final[int] = 200
QUERY_KEYS: Final[frozenset[str]] = frozenset({"query", "search_text"})
DOCUMENT_TEXT_KEYS: Final[frozenset[str]] = frozenset({"text", "transcript_text", "description"})


# =============================================================================
# Processors
# =============================================================================


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Stamp the configured service name into every event."""
    event_dict["service"] = _service_name
    return event_dict


def redact_document_text(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Replace sermon text with its length and cap logged queries.

    Args:
        logger: Unused, required by structlog
        method_name: Unused, required by structlog
        event_dict: The event being rendered

    Returns:
        The same event dict, modified in place
    """
    for key in DOCUMENT_TEXT_KEYS & event_dict.keys():
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = f"<{len(value)} chars>"
    for key in QUERY_KEYS & event_dict.keys():
        value = event_dict[key]
        if isinstance(value, str) and len(value) > MAX_LOGGED_QUERY_LENGTH:
            event_dict[key] = value[:MAX_LOGGED_QUERY_LENGTH] + "..."
    return event_dict


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    service_name: str = "sermon-search-service",
) -> None:
    """Configure structlog and the stdlib root logger.

    Only the first call has an effect until reset_logging() is called.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_output: JSON lines when True, coloured console output otherwise
        service_name: Value of the "service" key on every event
    """
    global _configured, _service_name

    if _configured:
        return

    _service_name = service_name
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_info,
            redact_document_text,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def bind_request_context(path: str, request_id: str | None = None) -> str:
    """Bind request_id and path for the current request; returns the id used."""
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=path)
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def reset_logging() -> None:
    """Allow configure_logging() to run again (tests only)."""
    global _configured
    _configured = False
    structlog.reset_defaults()
