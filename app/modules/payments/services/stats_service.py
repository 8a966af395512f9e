# -*- coding: utf-8 -*-
"""
app/modules/payments/services/stats_service.py

Agregados de ventas sobre el listado completo de transacciones.

Reglas:
- Ingresos: solo transacciones completed
- "Este mes": completed creadas desde el día 1, 00:00 UTC
- Promedio: ingresos / completadas (0 si no hay)
- Top de contenido: máx. 10, ordenado por ingresos desc
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from app.modules.payments.enums import TransactionStatus
from app.modules.payments.models import Transaction
from app.modules.payments.schemas import PaymentStats, TopContentEntry
from app.modules.payments.utils.datetime_helpers import as_utc, start_of_month, utcnow

TOP_CONTENT_LIMIT = 10


def compute_payment_stats(
    transactions: Iterable[Transaction],
    *,
    now: Optional[datetime] = None,
) -> PaymentStats:
    month_start = start_of_month(now or utcnow())

    total_count = 0
    success_count = 0
    failure_count = 0
    total_revenue = Decimal("0")
    month_revenue = Decimal("0")
    month_count = 0
    by_content: dict[str, TopContentEntry] = {}

    for tx in transactions:
        total_count += 1
        if tx.payment_status == TransactionStatus.FAILED:
            failure_count += 1
            continue
        if tx.payment_status != TransactionStatus.COMPLETED:
            continue

        success_count += 1
        total_revenue += tx.amount

        created = as_utc(tx.created_at)
        if created is not None and created >= month_start:
            month_revenue += tx.amount
            month_count += 1

        entry = by_content.get(tx.content_id)
        if entry is None:
            by_content[tx.content_id] = TopContentEntry(
                content_id=tx.content_id,
                content_title=tx.content_title,
                sales=1,
                revenue=tx.amount,
            )
        else:
            entry.sales += 1
            entry.revenue += tx.amount

    average = total_revenue / success_count if success_count else Decimal("0")
    top = sorted(by_content.values(), key=lambda e: e.revenue, reverse=True)[:TOP_CONTENT_LIMIT]

    return PaymentStats(
        total_revenue=total_revenue,
        total_count=total_count,
        success_count=success_count,
        failure_count=failure_count,
        this_month_revenue=month_revenue,
        this_month_count=month_count,
        average_value=average,
        top_content=top,
    )


__all__ = ["TOP_CONTENT_LIMIT", "compute_payment_stats"]
