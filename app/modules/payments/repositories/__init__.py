# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/__init__.py
"""

from .gateway_config_repository import GatewayConfigRepository
from .transaction_repository import TransactionRepository

__all__ = ["GatewayConfigRepository", "TransactionRepository"]
