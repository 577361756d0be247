"""Ledger Service - Core 원장과 DB 연결

계정 행(PlayerAccountModel)을 원장의 계정 레코드로 그대로 감싸고,
새 거래는 sink로 CoinTransactionModel 행에 추가한다.
flush만 하고 commit은 호출측이 한다.
세션 1개는 스레드 1개에서만 사용한다.
"""

from datetime import timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from coincraft.config import settings
from coincraft.core.ledger import CoinLedger, CoinTransaction, TransactionType
from coincraft.core.logging import get_logger
from coincraft.db.models import CoinTransactionModel, PlayerAccountModel

logger = get_logger(__name__)


class LedgerService:
    """계정 생성, 원장 복원, 이력 조회"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session

    def open_account(
        self,
        player_id: str,
        name: str = "",
        starting_balance: Optional[int] = None,
    ) -> CoinLedger:
        """새 계정 + 원장. 시작 잔액은 starting_bonus 거래로 기록된다."""
        if self._db.get(PlayerAccountModel, player_id) is not None:
            raise ValueError(f"Account already exists: {player_id}")

        amount = settings.STARTING_BALANCE if starting_balance is None else starting_balance
        if amount < 0:
            raise ValueError(f"Starting balance must not be negative: {amount}")

        row = PlayerAccountModel(player_id=player_id, name=name, smart_coin_balance=0)
        self._db.add(row)
        self._db.flush()

        ledger = CoinLedger(row, on_record=self._sink(player_id))
        if amount > 0:
            ledger.credit(amount, "Starting balance", TransactionType.STARTING_BONUS)
        logger.info("Account opened: %s (balance %d)", player_id, ledger.balance)
        return ledger

    def load_ledger(self, player_id: str) -> CoinLedger:
        """저장된 거래 이력으로 원장 복원"""
        row = self._db.get(PlayerAccountModel, player_id)
        if row is None:
            raise ValueError(f"Unknown account: {player_id}")

        rows = (
            self._db.query(CoinTransactionModel)
            .filter(CoinTransactionModel.player_id == player_id)
            .order_by(CoinTransactionModel.seq)
            .all()
        )
        ledger = CoinLedger.restore(
            row,
            [self._transaction_from_orm(r) for r in rows],
            on_record=self._sink(player_id),
        )
        logger.debug(
            "Ledger loaded: %s (%d transactions, balance %d)",
            player_id,
            len(rows),
            ledger.balance,
        )
        return ledger

    def history(self, player_id: str, limit: int = 50) -> List[CoinTransaction]:
        """최근 limit건, 오래된 순"""
        rows = (
            self._db.query(CoinTransactionModel)
            .filter(CoinTransactionModel.player_id == player_id)
            .order_by(CoinTransactionModel.seq.desc())
            .limit(limit)
            .all()
        )
        return [self._transaction_from_orm(r) for r in reversed(rows)]

    # ── 내부 ─────────────────────────────────────────────────

    def _sink(self, player_id: str):
        def record(tx: CoinTransaction) -> None:
            self._db.add(
                CoinTransactionModel(
                    player_id=player_id,
                    seq=tx.seq,
                    tx_type=tx.tx_type.value,
                    description=tx.description,
                    amount=tx.amount,
                    created_at=tx.timestamp,
                )
            )
            self._db.flush()

        return record

    @staticmethod
    def _transaction_from_orm(row: CoinTransactionModel) -> CoinTransaction:
        created_at = row.created_at
        # SQLite는 tz 정보를 버린다
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return CoinTransaction(
            seq=row.seq,
            description=row.description,
            amount=row.amount,
            timestamp=created_at,
            tx_type=TransactionType(row.tx_type),
        )
