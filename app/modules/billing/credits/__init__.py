# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/__init__.py

Submódulo de créditos para billing.

Contiene:
- Modelos ORM: BillingAccount, CreditLedgerEntry
- Repositorios: BillingAccountRepository, CreditLedgerRepository
- Servicio: CreditLedgerService (settle exactly-once, cargos, resumen)
- Enums y errores de dominio

Autor: Equipo Billing
Fecha: 2025-12-30
"""

from .models import (
    BillingAccount,
    CreditLedgerEntry,
)
from .enums import LedgerReason
from .errors import BillingAccountNotFoundError, InsufficientCreditsError
from .repositories import (
    BillingAccountRepository,
    CreditLedgerRepository,
)
from .services import (
    CreditLedgerService,
    LedgerSummary,
    SettlementResult,
)

__all__ = [
    # Models
    "BillingAccount",
    "CreditLedgerEntry",
    # Enums
    "LedgerReason",
    # Errors
    "BillingAccountNotFoundError",
    "InsufficientCreditsError",
    # Repositories
    "BillingAccountRepository",
    "CreditLedgerRepository",
    # Services
    "CreditLedgerService",
    "LedgerSummary",
    "SettlementResult",
]
# Fin del archivo backend/app/modules/billing/credits/__init__.py
