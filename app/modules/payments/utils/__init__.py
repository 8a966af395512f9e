# -*- coding: utf-8 -*-
"""
app/modules/payments/utils/__init__.py

Utilidades del módulo Payments: fechas, montos y checksum Paytm.
"""
