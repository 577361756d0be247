"""코인 원장 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class TransactionType(str, Enum):
    QUIZ_CORRECT = "quiz_correct"
    QUIZ_WRONG = "quiz_wrong"
    QUIZ_BONUS = "quiz_bonus"
    BONUS = "bonus"
    REFUND = "refund"
    CREDIT = "credit"
    DEBIT = "debit"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    TASK_REWARD = "task_reward"
    STARTING_BONUS = "starting_bonus"


# 퀴즈 점수 집계 대상
GRADED_TYPES = frozenset({TransactionType.QUIZ_CORRECT, TransactionType.QUIZ_WRONG})


class AccountRecord(Protocol):
    """호스트가 소유한 계정 레코드. 원장은 이 객체를 감싸기만 한다."""

    smart_coin_balance: int


@dataclass
class Account:
    """인메모리 계정 레코드 (호스트 DB가 없을 때 / 테스트용)"""

    player_id: str
    name: str = ""
    smart_coin_balance: int = 0


@dataclass(frozen=True)
class CoinTransaction:
    """원장 거래 1건. 추가 후 변경/삭제 불가."""

    seq: int
    description: str
    amount: int  # 부호 있음: 적립 +, 차감 -
    timestamp: datetime
    tx_type: TransactionType

    def __str__(self) -> str:
        return f"[{self.tx_type.value}] {self.description}: {self.amount:+d} coins"


@dataclass(frozen=True)
class LedgerSummary:
    """분석/리포트 화면용 집계 스냅샷"""

    balance: int
    transaction_count: int
    correct_answers: int
    wrong_answers: int
    coins_earned: int
    coins_lost: int
    quiz_score: int
