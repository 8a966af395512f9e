# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/__init__.py
"""

from .stripe_webhook import WebhookOutcome, handle_stripe_webhook

__all__ = ["WebhookOutcome", "handle_stripe_webhook"]
