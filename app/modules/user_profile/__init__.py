# -*- coding: utf-8 -*-
"""
app/modules/user_profile/__init__.py

Módulo de perfil de usuario de Incredible India VR.

Este módulo gestiona:
- Documento `users/{uid}` con tier de suscripción y contenido comprado
- Suscripción en vivo al perfil (consumida por la compuerta de preview)
- GET /profile/me
"""

from .models import USERS_COLLECTION, UserProfile
from .repositories import ProfileRepository

__all__ = ["USERS_COLLECTION", "ProfileRepository", "UserProfile"]
