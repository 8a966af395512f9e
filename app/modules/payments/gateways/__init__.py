# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/__init__.py

Adaptadores de pasarela, puente con el cliente y registro de despacho.
"""

from .backend_functions import BackendFunctions, LocalBackendFunctions, build_backend_functions
from .base import GatewayAdapter, GatewayRequest, GatewayResult
from .client_bridge import (
    CallbackClientBridge,
    CardConfirmation,
    CheckoutOverlay,
    ClientAction,
    ClientActionKind,
    ClientBridge,
    HostedForm,
    OverlayOutcome,
)
from .registry import GatewayRegistry, build_gateway_registry

__all__ = [
    "BackendFunctions",
    "CallbackClientBridge",
    "CardConfirmation",
    "CheckoutOverlay",
    "ClientAction",
    "ClientActionKind",
    "ClientBridge",
    "GatewayAdapter",
    "GatewayRegistry",
    "GatewayRequest",
    "GatewayResult",
    "HostedForm",
    "LocalBackendFunctions",
    "OverlayOutcome",
    "build_backend_functions",
    "build_gateway_registry",
]
