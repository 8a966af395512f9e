# -*- coding: utf-8 -*-
"""
app/modules/payments/__init__.py

Módulo de pagos de Incredible India VR.

Este módulo gestiona:
- Transacciones de compra (destinos, videos 360°, premium)
- Adaptadores de pasarela (Razorpay, Cashfree, Paytm, Stripe)
- Coordinación del ciclo de vida y otorgamiento de acceso
- Webhook de Stripe y métricas Prometheus

Estructura:
- enums: estados, pasarelas, monedas, tipos de contenido
- models: Transaction y GatewayConfig (documentos)
- schemas: validación y serialización Pydantic
- gateways: adaptadores, puente con el cliente y funciones de backend
- services: coordinador, acceso, estadísticas, PaymentIntent de Stripe
- facades: operaciones de alto nivel usadas por las rutas

Los subpaquetes se importan explícitamente para evitar ciclos.
"""

# Fin del archivo app/modules/payments/__init__.py
