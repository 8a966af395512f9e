# -*- coding: utf-8 -*-
"""
app/modules/payments/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Retorna el timestamp UTC actual (timezone-aware)."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normaliza un datetime a UTC. Los naive se asumen UTC.

    Examples:
        >>> as_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc
        True
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_month(now: datetime) -> datetime:
    """Primer día del mes de `now`, 00:00 UTC."""
    now = as_utc(now)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


__all__ = ["as_utc", "start_of_month", "utcnow"]
