# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Registro propio (no el global del proceso) para que los tests puedan leerlo.
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from datetime import datetime, timezone
from typing import Iterable, Optional
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------
PAYMENT_ATTEMPTS_TOTAL = Counter(
    "payments_attempts_total",
    "Intentos de pago por pasarela y resultado",
    ["gateway", "outcome"],  # outcome: completed/failed
    registry=registry,
)

GATEWAY_LATENCY_SECONDS = Histogram(
    "payments_gateway_latency_seconds",
    "Duración de un intento en el adaptador de pasarela (incluye espera del cliente)",
    ["gateway"],
    registry=registry,
)

TRANSACTION_STATUS_TOTAL = Counter(
    "payments_transaction_status_total",
    "Transiciones de estado escritas",
    ["status"],
    registry=registry,
)

ENTITLEMENT_GRANTS_TOTAL = Counter(
    "payments_entitlement_grants_total",
    "Otorgamientos de acceso tras pago completado",
    ["result"],  # result: granted/failed
    registry=registry,
)

WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Webhooks por outcome (settled/ignored/rejected)",
    ["provider", "outcome"],
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics(names: Optional[Iterable[str]] = None) -> bytes:
    """Salida en formato Prometheus; `names` restringe a esas series."""
    if names:
        return generate_latest(registry.restricted_registry(list(names)))
    return generate_latest(registry)


def metric_families() -> list[str]:
    return sorted(metric.name for metric in registry.collect())


def observe_payment_attempt(gateway: str, outcome: str) -> None:
    PAYMENT_ATTEMPTS_TOTAL.labels(gateway=gateway, outcome=outcome).inc()


def observe_gateway_latency(gateway: str, duration: float) -> None:
    GATEWAY_LATENCY_SECONDS.labels(gateway=gateway).observe(duration)


def observe_status_transition(status: str) -> None:
    TRANSACTION_STATUS_TOTAL.labels(status=status).inc()


def observe_entitlement_grant(result: str) -> None:
    ENTITLEMENT_GRANTS_TOTAL.labels(result=result).inc()
    if result != "granted":
        logger.warning("[Prometheus] entitlement grant result=%s", result)


def observe_webhook_outcome(provider: str, outcome: str) -> None:
    WEBHOOKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()


def prometheus_ping() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


__all__ = [
    "registry",
    "metric_families",
    "observe_entitlement_grant",
    "observe_gateway_latency",
    "observe_payment_attempt",
    "observe_status_transition",
    "observe_webhook_outcome",
    "prometheus_ping",
    "render_prometheus_metrics",
]

# Fin del archivo app/modules/payments/metrics/exporters/prometheus_exporter.py
