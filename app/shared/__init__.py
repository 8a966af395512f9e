# -*- coding: utf-8 -*-
"""
app/shared/__init__.py

Infraestructura compartida: configuración, almacén de documentos,
cliente HTTP y middlewares.

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.
"""
