# -*- coding: utf-8 -*-
"""
app/modules/payments/gateways/client_bridge.py

Puente entre los adaptadores y el navegador del comprador.

Los pasos que ocurren en el cliente (overlay de Razorpay, formulario
auto-enviado de Cashfree/Paytm, confirmación de tarjeta de Stripe) se
publican como "acciones de cliente". Overlay y tarjeta esperan un único
resultado (asyncio.Future) que el cliente entrega vía
POST /payments/transactions/{id}/client-result. Los formularios no esperan.

Un cliente que nunca responde deja la espera abierta (sin timeout).
"""

from __future__ import annotations

import asyncio
import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Optional, Protocol

from app.modules.payments.utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)


class ClientActionKind(StrEnum):
    OVERLAY = "overlay"
    FORM = "form"
    CARD_CONFIRMATION = "card_confirmation"


# ---------------------------------------------------------------------------- #
# Mensajes hacia / desde el cliente
# ---------------------------------------------------------------------------- #
@dataclass(frozen=True)
class CheckoutOverlay:
    script_url: str
    options: dict[str, Any]


@dataclass(frozen=True)
class OverlayOutcome:
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    signature: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class HostedForm:
    action: str
    fields: dict[str, str]
    method: str = "POST"

    def to_html(self) -> str:
        """Formulario auto-enviado para incrustar en la página de checkout."""
        inputs = "".join(
            f'<input type="hidden" name="{html.escape(name)}" value="{html.escape(value)}">'
            for name, value in self.fields.items()
        )
        return (
            f'<form method="{html.escape(self.method)}" action="{html.escape(self.action)}">'
            f"{inputs}</form><script>document.forms[0].submit();</script>"
        )


@dataclass(frozen=True)
class CardConfirmation:
    publishable_key: str
    client_secret: str


class ClientBridge(Protocol):
    async def open_overlay(self, transaction_ref: str, overlay: CheckoutOverlay) -> OverlayOutcome:
        ...

    async def submit_form(self, transaction_ref: str, form: HostedForm) -> None:
        ...

    async def confirm_card_payment(self, transaction_ref: str, confirmation: CardConfirmation) -> Optional[str]:
        """Devuelve el mensaje de error, o None si la confirmación fue exitosa."""
        ...


# ---------------------------------------------------------------------------- #
# Implementación por callbacks HTTP
# ---------------------------------------------------------------------------- #
@dataclass
class ClientAction:
    kind: ClientActionKind
    transaction_ref: str
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=utcnow)
    future: Optional["asyncio.Future[dict[str, Any]]"] = field(default=None, repr=False)

    @property
    def awaits_result(self) -> bool:
        return self.future is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "transaction_ref": self.transaction_ref,
            "payload": self.payload,
            "awaits_result": self.awaits_result,
        }


class CallbackClientBridge:
    """ClientBridge que publica acciones y espera el resultado reportado por HTTP."""

    def __init__(self) -> None:
        self._actions: dict[str, ClientAction] = {}
        self._events: dict[str, asyncio.Event] = {}

    # ------------------------------------------------------------------ #
    # ClientBridge
    # ------------------------------------------------------------------ #
    async def open_overlay(self, transaction_ref: str, overlay: CheckoutOverlay) -> OverlayOutcome:
        action = self._publish(
            transaction_ref,
            ClientActionKind.OVERLAY,
            {"script_url": overlay.script_url, "options": overlay.options},
            awaits_result=True,
        )
        result = await action.future  # type: ignore[misc]
        return OverlayOutcome(
            payment_id=result.get("payment_id"),
            order_id=result.get("order_id"),
            signature=result.get("signature"),
            error=result.get("error"),
        )

    async def submit_form(self, transaction_ref: str, form: HostedForm) -> None:
        self._publish(
            transaction_ref,
            ClientActionKind.FORM,
            {"method": form.method, "action": form.action, "fields": form.fields, "html": form.to_html()},
            awaits_result=False,
        )

    async def confirm_card_payment(self, transaction_ref: str, confirmation: CardConfirmation) -> Optional[str]:
        action = self._publish(
            transaction_ref,
            ClientActionKind.CARD_CONFIRMATION,
            {"publishable_key": confirmation.publishable_key, "client_secret": confirmation.client_secret},
            awaits_result=True,
        )
        result = await action.future  # type: ignore[misc]
        return result.get("error")

    # ------------------------------------------------------------------ #
    # Lado HTTP
    # ------------------------------------------------------------------ #
    async def wait_for_action(self, transaction_ref: str) -> Optional[ClientAction]:
        await self._event_for(transaction_ref).wait()
        return self._actions.get(transaction_ref)

    def pending_action(self, transaction_ref: str) -> Optional[ClientAction]:
        return self._actions.get(transaction_ref)

    def claim(self, transaction_ref: str) -> Optional[ClientAction]:
        """
        Entrega la acción publicada. Las acciones sin resultado (formularios)
        se retiran al entregarse; las demás esperan a resolve().
        """
        action = self._actions.get(transaction_ref)
        if action is not None and not action.awaits_result:
            self._forget(transaction_ref)
        return action

    def resolve(self, transaction_ref: str, outcome: dict[str, Any]) -> bool:
        action = self._actions.get(transaction_ref)
        if action is None or action.future is None or action.future.done():
            return False
        self._forget(transaction_ref)
        action.future.set_result(outcome)
        return True

    def discard(self, transaction_ref: str) -> None:
        action = self._actions.get(transaction_ref)
        self._forget(transaction_ref)
        if action is not None and action.future is not None and not action.future.done():
            action.future.cancel()

    # ------------------------------------------------------------------ #
    def _event_for(self, transaction_ref: str) -> asyncio.Event:
        event = self._events.get(transaction_ref)
        if event is None:
            event = self._events[transaction_ref] = asyncio.Event()
        return event

    def _forget(self, transaction_ref: str) -> None:
        self._actions.pop(transaction_ref, None)
        self._events.pop(transaction_ref, None)

    def _publish(
        self,
        transaction_ref: str,
        kind: ClientActionKind,
        payload: dict[str, Any],
        *,
        awaits_result: bool,
    ) -> ClientAction:
        future = asyncio.get_running_loop().create_future() if awaits_result else None
        action = ClientAction(kind=kind, transaction_ref=transaction_ref, payload=payload, future=future)
        self._actions[transaction_ref] = action
        self._event_for(transaction_ref).set()
        logger.debug("client_action_published ref=%s kind=%s", transaction_ref, kind.value)
        return action


__all__ = [
    "CallbackClientBridge",
    "CardConfirmation",
    "CheckoutOverlay",
    "ClientAction",
    "ClientActionKind",
    "ClientBridge",
    "HostedForm",
    "OverlayOutcome",
]
