# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/stats_schemas.py

Agregados de ventas para el panel de administración.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class TopContentEntry(BaseModel):
    content_id: str
    content_title: str
    sales: int
    revenue: Decimal


class PaymentStats(BaseModel):
    total_revenue: Decimal = Decimal("0")
    total_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    this_month_revenue: Decimal = Decimal("0")
    this_month_count: int = 0
    average_value: Decimal = Decimal("0")
    top_content: list[TopContentEntry] = Field(default_factory=list)


__all__ = ["PaymentStats", "TopContentEntry"]
