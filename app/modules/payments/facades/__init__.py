# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/__init__.py

Funciones de alto nivel que usan las rutas: procesar un pago con la
configuración vigente y manejar webhooks de proveedores.
"""
