"""OpenTelemetry tracing for requests and SQL statements.

Spans go to the OTLP collector at ``observability.tracing.otlp_endpoint``;
without one, development prints them to the console and other
environments keep them in-process only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from recipe_share.core.config import Settings

logger = get_logger(__name__)

UNTRACED_URLS = "health,ready,metrics,docs,redoc,openapi.json"


def _exporter(settings: Settings) -> SpanExporter | None:
    endpoint = settings.observability.tracing.otlp_endpoint
    if endpoint:
        return OTLPSpanExporter(endpoint=endpoint, insecure=True)
    if settings.is_development:
        return ConsoleSpanExporter()
    return None


def setup_tracing(app: FastAPI, settings: Settings) -> None:
    if not settings.observability.tracing.enabled:
        return

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": "recipe-share-service",
                "service.version": settings.app.version,
                "deployment.environment": settings.APP_ENV,
            }
        )
    )
    exporter = _exporter(settings)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)
    logger.info(
        "Tracing enabled",
        exporter=type(exporter).__name__ if exporter else None,
    )


def instrument_engine(engine: AsyncEngine) -> None:
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


def shutdown_tracing() -> None:
    """Flush buffered spans; a no-op unless ``setup_tracing`` installed one."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()
