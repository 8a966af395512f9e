# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/routes/routes_prometheus.py

Scraping de las métricas de pagos (intentos, transiciones, otorgamientos,
webhooks). `?name=` repetible limita la salida a esas series, útil para
revisar a mano un contador concreto.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Query
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.responses import PlainTextResponse

from ..exporters.prometheus_exporter import metric_families, prometheus_ping, render_prometheus_metrics

router_prometheus = APIRouter(prefix="/metrics", tags=["payments-metrics"])


@router_prometheus.get("/prometheus", response_class=PlainTextResponse)
async def prometheus_metrics(name: Optional[list[str]] = Query(default=None)) -> PlainTextResponse:
    return PlainTextResponse(render_prometheus_metrics(name), media_type=CONTENT_TYPE_LATEST)


@router_prometheus.get("/prometheus/ping")
async def ping() -> dict[str, Any]:
    return {**prometheus_ping(), "families": metric_families()}


# Fin del archivo app/modules/payments/metrics/routes/routes_prometheus.py
