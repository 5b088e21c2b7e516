# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos on-chain (USDC).

Estructura:
- enums: estados de PaymentAttempt, códigos de error y tipos de evento
- models: PaymentAttempt y PaymentEvent (auditoría)
- repositories: acceso a datos con transiciones condicionales
- adapters: puerto OnChainVerifier y adaptador HTTP del indexador
- facades: intents y motor de liquidación (API de alto nivel)
- routes: endpoints /payments/*

Las fachadas se importan explícitamente desde su paquete para evitar
ciclos de importación.
"""

__all__: list[str] = []
