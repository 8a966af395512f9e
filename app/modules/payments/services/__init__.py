# -*- coding: utf-8 -*-
"""
app/modules/payments/services/__init__.py

Servicios del módulo Payments.

Incluye:
- PaymentCoordinator (ciclo de vida de la transacción)
- EntitlementService (acceso tras pago completado)
- compute_payment_stats
- create_stripe_payment_intent (función de backend)

Se importan desde sus módulos para evitar ciclos con repositories.
"""
