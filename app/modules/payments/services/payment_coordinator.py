# -*- coding: utf-8 -*-
"""
app/modules/payments/services/payment_coordinator.py

Coordinador del ciclo de vida de una transacción.

    create -> PENDING
    PENDING -> configuración ausente / inactiva -> FAILED
    PENDING -> adaptador exitoso -> COMPLETED -> otorgar acceso
    PENDING -> adaptador fallido / excepción -> FAILED

Garantías:
- El estado final se escribe SIEMPRE antes de devolver el resultado.
- El acceso se otorga solo después de que la escritura completed terminó.
- Ninguna excepción sale de process(): todo se devuelve como PaymentResult.
- Sin reintentos automáticos.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from app.modules.payments.enums import PaymentGateway, TransactionStatus
from app.modules.payments.exceptions import (
    EntitlementGrantError,
    InvalidStatusTransition,
    TransactionNotFound,
    TransactionValidationError,
)
from app.modules.payments.gateways.base import GatewayRequest, GatewayResult
from app.modules.payments.gateways.registry import GatewayRegistry
from app.modules.payments.metrics.exporters.prometheus_exporter import (
    observe_entitlement_grant,
    observe_payment_attempt,
    observe_status_transition,
)
from app.modules.payments.models import GatewayConfig, Transaction
from app.modules.payments.repositories import TransactionRepository
from app.modules.payments.schemas import (
    ENTITLEMENT_GRANT_FAILED_MESSAGE,
    CreateTransactionData,
    PaymentResult,
)
from .entitlement_service import EntitlementService

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Payment processing failed"
RECORD_FAILED_MESSAGE = "Payment could not be recorded. Please contact support."


class PaymentCoordinator:
    def __init__(
        self,
        transactions: TransactionRepository,
        gateways: GatewayRegistry,
        entitlements: EntitlementService,
    ) -> None:
        self.transactions = transactions
        self.gateways = gateways
        self.entitlements = entitlements

    # ------------------------------------------------------------------ #
    # Alta
    # ------------------------------------------------------------------ #
    async def create_transaction(
        self,
        data: Union[CreateTransactionData, Mapping[str, Any]],
    ) -> str:
        """
        Raises:
            TransactionValidationError: pagador, monto > 0, moneda o contenido inválidos
        """
        if not isinstance(data, CreateTransactionData):
            try:
                data = CreateTransactionData.model_validate(data)
            except ValidationError as exc:
                raise TransactionValidationError(str(exc)) from exc
        return await self.transactions.create_transaction(data)

    # ------------------------------------------------------------------ #
    # Procesamiento
    # ------------------------------------------------------------------ #
    async def process(
        self,
        transaction_id: str,
        method: Union[PaymentGateway, str],
        amount: Decimal,
        currency: str,
        config: Optional[GatewayConfig],
    ) -> PaymentResult:
        """
        Ejecuta un intento de pago con la configuración leída para ESTE intento.
        Transacciones desconocidas o ya resueltas no tocan pasarela ni registro.
        """
        gateway_label = str(method)
        try:
            transaction = await self.transactions.get(transaction_id)
        except Exception:
            logger.exception("payment_load_failed tx=%s", transaction_id)
            return await self._settle(transaction_id, GatewayResult.failure(GENERIC_FAILURE_MESSAGE), gateway_label)

        if transaction is None:
            return PaymentResult.failure("Transaction not found")
        if not transaction.is_pending:
            logger.info(
                "payment_skipped tx=%s status=%s", transaction_id, transaction.payment_status.value
            )
            return PaymentResult.failure(f"Transaction is already {transaction.payment_status.value}")

        try:
            outcome = await self._dispatch(transaction, method, amount, currency, config)
        except Exception as exc:
            logger.exception("payment_attempt_crashed tx=%s gateway=%s", transaction_id, gateway_label)
            outcome = GatewayResult.failure(str(exc) or GENERIC_FAILURE_MESSAGE)

        return await self._settle(transaction_id, outcome, gateway_label)

    async def _dispatch(
        self,
        transaction: Transaction,
        method: Union[PaymentGateway, str],
        amount: Decimal,
        currency: str,
        config: Optional[GatewayConfig],
    ) -> GatewayResult:
        try:
            gateway = PaymentGateway(method)
        except ValueError:
            return GatewayResult.failure("Invalid payment method")
        if config is None:
            return GatewayResult.failure("Payment gateway configuration not found")

        request = GatewayRequest(
            amount=Decimal(amount),
            currency=currency.upper(),
            transaction_ref=transaction.id,
            customer_id=transaction.user_id,
            customer_email=transaction.user_email,
        )
        logger.info("payment_attempt tx=%s gateway=%s", transaction.id, gateway.value)
        return await self.gateways.get(gateway).attempt(request, config)

    async def _settle(self, transaction_id: str, outcome: GatewayResult, gateway_label: str) -> PaymentResult:
        status = TransactionStatus.COMPLETED if outcome.success else TransactionStatus.FAILED
        if outcome.success:
            metadata = {"confirmation": outcome.confirmation.value}
        else:
            metadata = {"failureReason": outcome.error or "Payment failed"}

        try:
            updated = await self.transactions.update_status(
                transaction_id,
                status,
                outcome.provider_payment_id if outcome.success else None,
                metadata=metadata,
            )
        except InvalidStatusTransition as exc:
            return await self._settled_elsewhere(transaction_id, outcome, status, exc)
        except TransactionNotFound as exc:
            self._log_unrecorded(transaction_id, outcome, exc)
            return PaymentResult.failure("Transaction is no longer pending")
        except Exception as exc:
            self._log_unrecorded(transaction_id, outcome, exc)
            if outcome.success:
                return PaymentResult.failure(RECORD_FAILED_MESSAGE)
            return PaymentResult.failure(outcome.error or GENERIC_FAILURE_MESSAGE)

        observe_status_transition(status.value)
        observe_payment_attempt(gateway_label, status.value)

        if not outcome.success:
            return PaymentResult.failure(outcome.error or "Payment failed")

        granted = await self._grant(updated)
        return PaymentResult(
            success=True,
            provider_payment_id=outcome.provider_payment_id,
            confirmation=outcome.confirmation,
            entitlement_granted=granted,
            error=None if granted else ENTITLEMENT_GRANT_FAILED_MESSAGE,
        )

    async def _settled_elsewhere(
        self,
        transaction_id: str,
        outcome: GatewayResult,
        status: TransactionStatus,
        exc: InvalidStatusTransition,
    ) -> PaymentResult:
        """
        Otro camino (p. ej. el webhook) liquidó la transacción mientras el
        adaptador esperaba. Si el estado guardado coincide con el resultado,
        se devuelve ese estado; si lo contradice, se trata como no registrado.
        """
        stored = await self.transactions.get(transaction_id)
        if stored is None or stored.payment_status != status:
            self._log_unrecorded(transaction_id, outcome, exc)
            return PaymentResult.failure("Transaction is no longer pending")

        logger.info("payment_already_settled tx=%s status=%s", transaction_id, status.value)
        if not outcome.success:
            return PaymentResult.failure(outcome.error or "Payment failed")

        profile = await self.entitlements.profiles.get(stored.user_id)
        granted = profile is not None and stored.content_id in profile.purchased_content
        return PaymentResult(
            success=True,
            provider_payment_id=stored.payment_id or outcome.provider_payment_id,
            confirmation=outcome.confirmation,
            entitlement_granted=granted,
            error=None if granted else ENTITLEMENT_GRANT_FAILED_MESSAGE,
        )

    def _log_unrecorded(self, transaction_id: str, outcome: GatewayResult, exc: Exception) -> None:
        if outcome.success:
            # Cobro hecho en el proveedor sin registro completed
            logger.critical(
                "payment_captured_not_recorded tx=%s provider_id=%s error=%r",
                transaction_id,
                outcome.provider_payment_id,
                exc,
            )
        else:
            logger.error("payment_failure_not_recorded tx=%s error=%r", transaction_id, exc)

    # ------------------------------------------------------------------ #
    # Acceso
    # ------------------------------------------------------------------ #
    async def grant_entitlement(self, transaction: Transaction) -> None:
        await self.entitlements.grant(transaction)

    async def _grant(self, transaction: Transaction) -> bool:
        try:
            await self.grant_entitlement(transaction)
        except Exception:
            logger.critical(
                "entitlement_grant_failed tx=%s user=%s content=%s",
                transaction.id,
                transaction.user_id,
                transaction.content_id,
                exc_info=True,
            )
            observe_entitlement_grant("failed")
            return False
        observe_entitlement_grant("granted")
        return True

    async def regrant_entitlement(self, transaction_id: str) -> PaymentResult:
        """
        Reconciliación manual de un completed cuyo otorgamiento falló.

        Raises:
            TransactionNotFound
            EntitlementGrantError: la transacción no está completed
        """
        transaction = await self.transactions.get(transaction_id)
        if transaction is None:
            raise TransactionNotFound(transaction_id)
        if transaction.payment_status != TransactionStatus.COMPLETED:
            raise EntitlementGrantError(
                f"Transaction {transaction_id} is {transaction.payment_status.value}, not completed"
            )
        granted = await self._grant(transaction)
        return PaymentResult(
            success=True,
            provider_payment_id=transaction.payment_id,
            entitlement_granted=granted,
            error=None if granted else ENTITLEMENT_GRANT_FAILED_MESSAGE,
        )

    # ------------------------------------------------------------------ #
    # Confirmación fuera de banda y reembolsos
    # ------------------------------------------------------------------ #
    async def confirm_from_webhook(
        self,
        transaction_id: str,
        *,
        succeeded: bool,
        provider_payment_id: Optional[str] = None,
        error: Optional[str] = None,
    ) -> Optional[PaymentResult]:
        """
        Liquida una transacción aún pending con la confirmación del proveedor.
        Devuelve None si ya estaba resuelta (confirmaciones tardías o repetidas).

        Raises:
            TransactionNotFound
        """
        transaction = await self.transactions.get(transaction_id)
        if transaction is None:
            raise TransactionNotFound(transaction_id)
        if not transaction.is_pending:
            logger.info(
                "webhook_confirmation_ignored tx=%s status=%s",
                transaction_id,
                transaction.payment_status.value,
            )
            return None

        if succeeded:
            outcome = GatewayResult.ok(provider_payment_id)
        else:
            outcome = GatewayResult.failure(error or "Payment failed")
        return await self._settle(transaction_id, outcome, transaction.payment_method.value)

    async def refund(self, transaction_id: str) -> Transaction:
        """
        completed -> refunded. El acceso otorgado NO se revoca.

        Raises:
            TransactionNotFound
            InvalidStatusTransition: la transacción no está completed
        """
        updated = await self.transactions.update_status(transaction_id, TransactionStatus.REFUNDED)
        observe_status_transition(TransactionStatus.REFUNDED.value)
        logger.info("transaction_refunded tx=%s user=%s", transaction_id, updated.user_id)
        return updated


__all__ = ["GENERIC_FAILURE_MESSAGE", "RECORD_FAILED_MESSAGE", "PaymentCoordinator"]

# Fin del archivo app/modules/payments/services/payment_coordinator.py
