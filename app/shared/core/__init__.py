# -*- coding: utf-8 -*-
"""
app/shared/core/__init__.py

Recursos compartidos del proceso.
"""

from .http_client_cache import close_http_client, create_http_client

__all__ = ["close_http_client", "create_http_client"]
