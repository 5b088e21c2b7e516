# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Middlewares HTTP de la app. Orden de registro en main.create_app():
JSONExceptionMiddleware, RequestLoggingMiddleware y CORS (este último
queda como el más externo). Ambos usan el mismo request_id: el header
X-Request-ID o uno generado.
"""

from .exception_handler import JSONExceptionMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = ["JSONExceptionMiddleware", "RequestLoggingMiddleware"]
# Fin del archivo backend/app/shared/middleware/__init__.py
