"""Prometheus metrics.

HTTP request metrics come from prometheus-fastapi-instrumentator; the
ingestion pipeline publishes its own gauges and counters defined here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_manager.core.config import get_settings
from recipe_manager.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_manager"


# =============================================================================
# Ingestion Pipeline Metrics
# =============================================================================

staging_items = Gauge(
    "staging_cache_items",
    "Uploads currently held in the staging cache",
    namespace=METRIC_NAMESPACE,
)

staging_bytes = Gauge(
    "staging_cache_bytes",
    "Bytes currently held in the staging cache",
    namespace=METRIC_NAMESPACE,
)

staging_evictions = Counter(
    "staging_cache_evictions_total",
    "Staged uploads dropped before being claimed",
    ["reason"],
    namespace=METRIC_NAMESPACE,
)

metadata_fetches = Counter(
    "metadata_fetch_total",
    "Link metadata fetch attempts by outcome",
    ["outcome"],
    namespace=METRIC_NAMESPACE,
)

metadata_fetch_duration = Histogram(
    "metadata_fetch_duration_seconds",
    "Time spent fetching and parsing link metadata",
    namespace=METRIC_NAMESPACE,
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)


def setup_metrics(app: FastAPI) -> Instrumentator:
    """Instrument the app and expose ``{v1_prefix}/metrics``.

    Args:
        app: The FastAPI application instance.

    Returns:
        The Instrumentator (left unattached when metrics are disabled).
    """
    settings = get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )
    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = [
    "metadata_fetch_duration",
    "metadata_fetches",
    "setup_metrics",
    "staging_bytes",
    "staging_evictions",
    "staging_items",
]
