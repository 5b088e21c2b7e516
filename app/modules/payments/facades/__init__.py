# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Punto de entrada del paquete de fachadas del módulo Payments.

Este __init__ NO realiza imports automáticos de submódulos; cada facade
se importa explícitamente desde su paquete:

    from app.modules.payments.facades.intents import PaymentIntentManager
    from app.modules.payments.facades.settlement import SettlementPolicy
    from app.modules.payments.facades.settlement.engine import SettlementEngine
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
