# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del backend de créditos on-chain.

Los módulos internos se importan como 'app.*' (config, database, módulos
billing y payments).
"""

# Fin del archivo backend/app/__init__.py
