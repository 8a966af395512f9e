# -*- coding: utf-8 -*-
"""
app/__init__.py

Paquete principal del backend de Incredible India VR.

Módulos:
- app.modules.payments: transacciones, pasarelas y coordinador de pagos
- app.modules.entitlement: compuerta de preview
- app.modules.user_profile: perfil y acceso comprado
- app.modules.auth: identidad JWT
- app.shared: configuración, almacén de documentos y middlewares
"""

# Fin del archivo app/__init__.py
