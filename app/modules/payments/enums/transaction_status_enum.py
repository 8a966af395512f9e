# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/transaction_status_enum.py

Enum de estados de una transacción y sus transiciones válidas.

    pending   -> completed | failed
    completed -> refunded

failed y refunded son terminales.
"""

from enum import StrEnum


class TransactionStatus(StrEnum):
    """Estado de la transacción en su ciclo de vida."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: "TransactionStatus") -> bool:
        return target in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.COMPLETED, TransactionStatus.FAILED}),
    TransactionStatus.COMPLETED: frozenset({TransactionStatus.REFUNDED}),
    TransactionStatus.FAILED: frozenset(),
    TransactionStatus.REFUNDED: frozenset(),
}


__all__ = ["TransactionStatus", "ALLOWED_TRANSITIONS"]

# Fin del archivo app/modules/payments/enums/transaction_status_enum.py
