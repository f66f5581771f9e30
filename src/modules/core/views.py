"""Operational endpoints."""

import time
from typing import Any, Dict

import structlog
from django.apps import apps
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()

CATALOG_MODEL = "products.Product"


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


def _probe_database() -> Dict[str, Any]:
    started = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "vendor": conn.vendor,
        "response_time_ms": _elapsed_ms(started),
    }


def _probe_catalog() -> Dict[str, Any]:
    # A query against the products table also proves migrations are applied.
    started = time.monotonic()
    model = apps.get_model(CATALOG_MODEL)
    return {
        "status": "up",
        "table": model._meta.db_table,
        "products": model.objects.count(),
        "response_time_ms": _elapsed_ms(started),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health: 200 when the product store answers, 503 otherwise."""
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    for name, probe in (("database", _probe_database), ("catalog", _probe_catalog)):
        try:
            services[name] = probe()
        except DatabaseError:
            services[name] = {"status": "down"}
            overall_healthy = False
            logger.error("health_check_failure", service=name, exc_info=True)

    status_label = "healthy" if overall_healthy else "unhealthy"
    logger.info("health_check_completed", status=status_label)

    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if overall_healthy else 503,
    )
