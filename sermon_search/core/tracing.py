"""
Sermon-Search-Service - OpenTelemetry Tracing Module

configure_tracing() runs once from the lifespan when SSS_TRACING_ENABLED is
set. Until then the global no-op provider is active and spans are free.

Spans opened through search_span() carry the query and the parsed scripture
reference as attributes:

    search.query         raw query text
    scripture.book       canonical book of the parsed reference
    scripture.chapter    chapter, when the reference has one
    scripture.verse      verse, when the reference has one
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Span, Tracer

from sermon_search import __version__
from sermon_search.scripture.parser import ScriptureReference

_configured: bool = False

SERVICE_NAME = "sermon-search-service"


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = True,
) -> None:
    """Install a TracerProvider tagged with the service name and version.

    Args:
        service_name: Value of the service.name resource attribute
        console_export: Print finished spans to stdout (development only)
    """
    global _configured

    if _configured:
        return

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": service_name, "service.version": __version__}
        )
    )
    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Tracer:
    return trace.get_tracer(name)


@contextmanager
def search_span(
    tracer: Tracer,
    name: str,
    query: str | None = None,
    reference: ScriptureReference | None = None,
    **attributes: Any,
) -> Iterator[Span]:
    """Open a span annotated with the query and its scripture reference.

    Extra keyword attributes are set as given; None values are skipped,
    since OpenTelemetry attributes cannot be null.
    """
    with tracer.start_as_current_span(name) as span:
        if query is not None:
            span.set_attribute("search.query", query)
        if reference is not None:
            span.set_attribute("scripture.book", reference.book)
            if reference.chapter is not None:
                span.set_attribute("scripture.chapter", reference.chapter)
            if reference.verse is not None:
                span.set_attribute("scripture.verse", reference.verse)
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, value)
        yield span


def reset_tracing() -> None:
    """Allow configure_tracing() to run again (tests only)."""
    global _configured
    _configured = False
