"""SmartCoin 원장 Core 패키지"""

from coincraft.core.ledger.ledger import CoinLedger
from coincraft.core.ledger.models import (
    GRADED_TYPES,
    Account,
    AccountRecord,
    CoinTransaction,
    LedgerSummary,
    TransactionType,
)

__all__ = [
    "CoinLedger",
    "GRADED_TYPES",
    "Account",
    "AccountRecord",
    "CoinTransaction",
    "LedgerSummary",
    "TransactionType",
]
