"""Prometheus metrics.

HTTP request metrics come from ``prometheus-fastapi-instrumentator``; the
counters below are incremented by the services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_share.core.config import Settings

logger = get_logger(__name__)

NAMESPACE = "recipe_share"

RECIPES_SUBMITTED = Counter(
    "recipes_submitted_total",
    "Recipes stored as pending by the submission service",
    namespace=NAMESPACE,
)
MODERATION_DECISIONS = Counter(
    "moderation_decisions_total",
    "Moderation decisions applied",
    ["status"],
    namespace=NAMESPACE,
)
NOTIFICATION_FAILURES = Counter(
    "notification_failures_total",
    "Approval notifications that could not be delivered",
    namespace=NAMESPACE,
)

# Probes, the scrape endpoint and the docs are not worth a time series
_UNMEASURED = ("/health$", "/ready$", "/metrics$", "^/docs", "^/redoc", "^/openapi")


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator | None:
    """Instrument ``app`` and serve the scrape endpoint under the API prefix.

    Does nothing and returns ``None`` when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics disabled")
        return None

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=list(_UNMEASURED),
    )
    instrumentator.add(metrics.default(metric_namespace=NAMESPACE))
    endpoint = f"{settings.api.v1_prefix}/metrics"
    instrumentator.instrument(app).expose(app, endpoint=endpoint, tags=["Monitoring"])

    logger.info("Metrics exposed", endpoint=endpoint)
    return instrumentator


__all__ = [
    "MODERATION_DECISIONS",
    "NOTIFICATION_FAILURES",
    "RECIPES_SUBMITTED",
    "setup_metrics",
]
