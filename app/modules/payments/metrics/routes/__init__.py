# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/routes/__init__.py

Router de métricas del módulo de pagos.
"""

from .routes_prometheus import router_prometheus

router = router_prometheus

__all__ = ["router", "router_prometheus"]
