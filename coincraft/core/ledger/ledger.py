"""SmartCoin 원장 - 잔액의 유일한 변경 주체

규칙:
- 잔액은 항상 0 이상 (차감은 잔액까지만 클램프)
- 잔액 변경 1회 = 거래 1건 추가 (원자적 단위, 원장별 락)
- 거래 로그는 추가 전용, seq 단조 증가, timestamp 비감소
- 계정 레코드는 감싸기만 하고 복사하지 않는다
"""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Union

from coincraft.core.ledger.models import (
    GRADED_TYPES,
    AccountRecord,
    CoinTransaction,
    LedgerSummary,
    TransactionType,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
TransactionSink = Callable[[CoinTransaction], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoinLedger:
    """계정 1개의 잔액 + 거래 로그"""

    def __init__(
        self,
        account: AccountRecord,
        *,
        clock: Optional[Clock] = None,
        on_record: Optional[TransactionSink] = None,
    ) -> None:
        if account.smart_coin_balance < 0:
            raise ValueError(
                f"Account balance must not be negative: {account.smart_coin_balance}"
            )
        self._account = account
        self._clock = clock or _utcnow
        self._on_record = on_record
        self._lock = threading.RLock()
        self._transactions: list[CoinTransaction] = []
        self._opening_balance = account.smart_coin_balance

    @classmethod
    def restore(
        cls,
        account: AccountRecord,
        history: Iterable[CoinTransaction],
        *,
        clock: Optional[Clock] = None,
        on_record: Optional[TransactionSink] = None,
    ) -> "CoinLedger":
        """저장된 이력으로 원장 재구성. 잔액은 다시 적용하지 않는다."""
        ledger = cls(account, clock=clock, on_record=on_record)
        ledger._transactions.extend(sorted(history, key=lambda t: t.seq))
        ledger._opening_balance = account.smart_coin_balance - sum(
            t.amount for t in ledger._transactions
        )
        return ledger

    # === 변경 ===
    # 거래 생성 → sink 기록 → 잔액/로그 반영.
    # 앞 단계에서 예외가 나면 잔액과 로그는 그대로다.

    def credit(
        self,
        amount: int,
        reason: str,
        tx_type: Union[TransactionType, str] = TransactionType.CREDIT,
    ) -> CoinTransaction:
        """적립. amount는 0 이상."""
        if amount < 0:
            raise ValueError(f"Credit amount must be >= 0, got {amount}")
        kind = TransactionType(tx_type)

        with self._lock:
            tx = self._build(amount, reason, kind)
            self._record(tx)
            self._commit(tx)
            balance = self._account.smart_coin_balance

        logger.info(
            "Credited %d (%s): %s → balance %d",
            amount,
            kind.value,
            reason,
            balance,
        )
        return tx

    def debit(
        self,
        amount: int,
        reason: str,
        tx_type: Union[TransactionType, str] = TransactionType.DEBIT,
    ) -> CoinTransaction:
        """차감. 실제 차감액 = min(amount, balance). 로그에는 실제 차감액을 남긴다."""
        if amount < 0:
            raise ValueError(f"Debit amount must be >= 0, got {amount}")
        kind = TransactionType(tx_type)

        with self._lock:
            actual = min(amount, self._account.smart_coin_balance)
            tx = self._build(-actual, reason, kind)
            self._record(tx)
            self._commit(tx)
            balance = self._account.smart_coin_balance

        if actual < amount:
            logger.info(
                "Debit clamped: requested %d, deducted %d (%s) → balance %d",
                amount,
                actual,
                reason,
                balance,
            )
        else:
            logger.info(
                "Debited %d (%s): %s → balance %d",
                actual,
                kind.value,
                reason,
                balance,
            )
        return tx

    def transfer_to(
        self, other: "CoinLedger", amount: int, reason: str
    ) -> tuple[CoinTransaction, CoinTransaction]:
        """다른 원장으로 이체. 차감과 동일하게 잔액까지만 이동한다.

        두 원장의 락을 id 순으로 잡아 교착을 피한다.
        양쪽 sink 기록이 모두 끝난 뒤에만 두 잔액을 바꾼다.
        """
        if other is self:
            raise ValueError("Cannot transfer to the same ledger")
        if amount < 0:
            raise ValueError(f"Transfer amount must be >= 0, got {amount}")

        first, second = sorted((self, other), key=id)
        with first._lock, second._lock:
            actual = min(amount, self._account.smart_coin_balance)
            out_tx = self._build(-actual, reason, TransactionType.TRANSFER_OUT)
            in_tx = other._build(actual, reason, TransactionType.TRANSFER_IN)
            self._record(out_tx)
            other._record(in_tx)
            self._commit(out_tx)
            other._commit(in_tx)

        logger.info("Transferred %d coins (%s)", actual, reason)
        return out_tx, in_tx

    # 아래 세 메서드는 락을 잡은 상태에서만 호출

    def _build(self, amount: int, reason: str, kind: TransactionType) -> CoinTransaction:
        now = self._clock()
        last = self._transactions[-1] if self._transactions else None
        if last is not None and now < last.timestamp:
            now = last.timestamp

        return CoinTransaction(
            seq=last.seq + 1 if last is not None else 1,
            description=reason,
            amount=amount,
            timestamp=now,
            tx_type=kind,
        )

    def _record(self, tx: CoinTransaction) -> None:
        if self._on_record is not None:
            self._on_record(tx)

    def _commit(self, tx: CoinTransaction) -> None:
        self._account.smart_coin_balance += tx.amount
        self._transactions.append(tx)

    # === 조회 (빈 로그에서도 안전) ===

    @property
    def balance(self) -> int:
        with self._lock:
            return self._account.smart_coin_balance

    @property
    def opening_balance(self) -> int:
        """첫 거래 이전 잔액"""
        return self._opening_balance

    @property
    def transactions(self) -> tuple[CoinTransaction, ...]:
        with self._lock:
            return tuple(self._transactions)

    def recent_transactions(self, count: int) -> list[CoinTransaction]:
        """최근 count건 (오래된 것 → 최신 순)"""
        if count <= 0:
            return []
        with self._lock:
            return list(self._transactions[-count:])

    def count_by_type(self, tx_type: Union[TransactionType, str]) -> int:
        wanted = TransactionType(tx_type)
        return sum(1 for t in self.transactions if t.tx_type == wanted)

    def sum_by_type(self, tx_type: Union[TransactionType, str]) -> int:
        wanted = TransactionType(tx_type)
        return sum(t.amount for t in self.transactions if t.tx_type == wanted)

    @property
    def correct_answers(self) -> int:
        return self.count_by_type(TransactionType.QUIZ_CORRECT)

    @property
    def wrong_answers(self) -> int:
        return self.count_by_type(TransactionType.QUIZ_WRONG)

    @property
    def coins_earned(self) -> int:
        return sum(t.amount for t in self.transactions if t.amount > 0)

    @property
    def coins_lost(self) -> int:
        return -sum(t.amount for t in self.transactions if t.amount < 0)

    @property
    def quiz_score(self) -> int:
        """정답률(%) 반올림. 채점 거래가 없으면 0."""
        graded = [t for t in self.transactions if t.tx_type in GRADED_TYPES]
        if not graded:
            return 0
        correct = sum(1 for t in graded if t.tx_type == TransactionType.QUIZ_CORRECT)
        # .5는 올림 (banker's rounding 아님)
        return math.floor(correct / len(graded) * 100 + 0.5)

    def summary(self) -> LedgerSummary:
        with self._lock:
            return LedgerSummary(
                balance=self.balance,
                transaction_count=len(self._transactions),
                correct_answers=self.correct_answers,
                wrong_answers=self.wrong_answers,
                coins_earned=self.coins_earned,
                coins_lost=self.coins_lost,
                quiz_score=self.quiz_score,
            )
