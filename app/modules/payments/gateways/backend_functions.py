# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/backend_functions.py

Invocación de funciones de backend de confianza (RPC con nombre).

Los adaptadores nunca ven secretos del lado servidor: piden a una función
de backend que haga la operación privilegiada (p. ej. crear un intent de
Stripe) y reciben solo lo que el navegador necesita.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol

from app.modules.payments.exceptions import BackendFunctionError
from app.modules.payments.repositories import GatewayConfigRepository
from app.modules.payments.services.stripe_intent_service import (
    CREATE_STRIPE_PAYMENT_INTENT,
    create_stripe_payment_intent,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any], Optional[str]], Awaitable[dict[str, Any]]]


class BackendFunctions(Protocol):
    async def call(
        self,
        name: str,
        payload: Mapping[str, Any],
        *,
        caller_id: Optional[str] = None,
    ) -> dict[str, Any]:
        ...


class LocalBackendFunctions:
    """Funciones registradas en el mismo proceso."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        self._handlers[name] = handler

    async def call(
        self,
        name: str,
        payload: Mapping[str, Any],
        *,
        caller_id: Optional[str] = None,
    ) -> dict[str, Any]:
        handler = self._handlers.get(name)
        if handler is None:
            raise BackendFunctionError("not-found", f"Function {name} not found")
        logger.debug("backend_function_call name=%s caller=%s", name, caller_id)
        return await handler(payload, caller_id)


def build_backend_functions(config_repo: GatewayConfigRepository) -> LocalBackendFunctions:
    functions = LocalBackendFunctions()

    async def _create_intent(payload: Mapping[str, Any], caller_id: Optional[str]) -> dict[str, Any]:
        return await create_stripe_payment_intent(payload, caller_id, config_repo=config_repo)

    functions.register(CREATE_STRIPE_PAYMENT_INTENT, _create_intent)
    return functions


__all__ = ["BackendFunctions", "LocalBackendFunctions", "build_backend_functions"]
