"""퀴즈 엔진 - 세션 생성, 채점 결과의 원장 반영, 완료 처리

원장은 생성 시 주입받는다 (전역 "현재 사용자" 조회 없음).
난수 소스도 주입받아 같은 시드면 같은 문항이 뽑힌다.
"""

from __future__ import annotations

import dataclasses
import logging
import random
import time
import uuid
from typing import Callable, Optional, Union

from coincraft.core.event_bus import EventBus, GameEvent
from coincraft.core.event_types import EventTypes
from coincraft.core.ledger import CoinLedger, TransactionType
from coincraft.core.quiz import scoring
from coincraft.core.quiz.bank import QuestionBank, build_default_bank
from coincraft.core.quiz.difficulty import DifficultyTier, clamp_level, get_tier
from coincraft.core.quiz.models import (
    NoQuestionsAvailable,
    QuizResult,
    QuizSession,
    QuizSessionSummary,
)

logger = logging.getLogger(__name__)

SessionOrEmpty = Union[QuizSession, NoQuestionsAvailable]


class QuizSessionNotFoundError(RuntimeError):
    """존재하지 않는 세션에 답하려 함 (호출측 버그)"""


class QuizEngine:
    """퀴즈 시도 관리 + 점수의 코인 반영"""

    def __init__(
        self,
        ledger: CoinLedger,
        bank: Optional[QuestionBank] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._ledger = ledger
        self._bank = bank if bank is not None else build_default_bank()
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._bus = event_bus

    @property
    def ledger(self) -> CoinLedger:
        return self._ledger

    @property
    def bank(self) -> QuestionBank:
        return self._bank

    # === 공개 API ===

    def create_session(
        self,
        category: str,
        difficulty_ceiling: int,
        question_count: int,
        *,
        tier: Optional[DifficultyTier] = None,
    ) -> SessionOrEmpty:
        """세션 생성.

        1. 카테고리 문항 중 difficulty <= ceiling 만 남김
        2. 남은 문항이 없으면 NoQuestionsAvailable (예외 아님)
        3. min(question_count, 남은 수)개를 비복원 추출

        tier를 주지 않으면 ceiling 레벨(1~5로 클램프)의 기본 티어로 보상/벌점을 매긴다.
        """
        eligible = [
            q
            for q in self._bank.questions_for(category)
            if q.difficulty <= difficulty_ceiling
        ]
        count = min(max(question_count, 0), len(eligible))
        if count == 0:
            logger.info(
                "No quiz questions for %r at difficulty <= %d",
                category,
                difficulty_ceiling,
            )
            self._emit(
                EventTypes.QUIZ_UNAVAILABLE,
                {"category": category, "difficulty_ceiling": difficulty_ceiling},
            )
            return NoQuestionsAvailable(
                category=category, difficulty_ceiling=difficulty_ceiling
            )

        if tier is None:
            tier = get_tier(clamp_level(difficulty_ceiling))

        session = QuizSession(
            session_id=str(uuid.uuid4()),
            category=category,
            tier=tier,
            questions=self._rng.sample(eligible, count),
            clock=self._clock,
        )
        logger.info(
            "Quiz session created: %s (category=%s, tier=%s, questions=%d)",
            session.session_id,
            category,
            tier.name,
            count,
        )
        self._emit(
            EventTypes.QUIZ_STARTED,
            {
                "session_id": session.session_id,
                "category": category,
                "question_count": count,
            },
        )
        return session

    def answer(
        self, session: Optional[QuizSession], selected_index: int
    ) -> Optional[QuizResult]:
        """현재 문항에 답하고 점수를 원장에 반영.

        완료된 세션이면 None 반환, 원장 변화 없음.
        정답 → points_earned 적립(quiz_correct), 오답 → points_lost 차감(quiz_wrong).
        """
        if session is None:
            raise QuizSessionNotFoundError("No active quiz session to answer")

        question_number = session.current_index + 1
        question = session.current_question
        result = session.answer_question(selected_index)
        if result is None:
            logger.debug("Quiz session %s already complete", session.session_id)
            return None

        topic = question.category if question is not None else session.category
        if result.correct:
            tx = self._ledger.credit(
                result.points_earned,
                f"Correct answer on Q{question_number} ({topic})",
                TransactionType.QUIZ_CORRECT,
            )
        else:
            tx = self._ledger.debit(
                result.points_lost,
                f"Wrong answer on Q{question_number} ({topic})",
                TransactionType.QUIZ_WRONG,
            )

        result = dataclasses.replace(result, coins_delta=tx.amount)
        session.results[-1] = result

        self._emit(
            EventTypes.QUIZ_ANSWERED,
            {
                "session_id": session.session_id,
                "question_number": question_number,
                "correct": result.correct,
                "streak": result.streak,
                "coins_delta": result.coins_delta,
            },
        )
        return result

    def finish(self, session: Optional[QuizSession]) -> QuizSessionSummary:
        """세션 완료 처리. 완료 보너스는 세션당 1회만 지급."""
        if session is None:
            raise QuizSessionNotFoundError("No active quiz session to finish")

        if session.finished:
            return session.get_summary()

        bonus = scoring.calculate_completion_bonus(
            session.correct_count, session.total_questions
        )
        if bonus > 0:
            self._ledger.credit(
                bonus,
                f"Quiz completion bonus ({session.correct_count}/"
                f"{session.total_questions} correct)",
                TransactionType.QUIZ_BONUS,
            )
        session.completion_bonus = bonus
        session.finished = True

        summary = session.get_summary()
        logger.info(
            "Quiz session finished: %s (grade=%s, %d/%d, bonus=%d)",
            session.session_id,
            summary.grade,
            summary.correct_answers,
            summary.total_questions,
            bonus,
        )
        self._emit(
            EventTypes.QUIZ_COMPLETED,
            {
                "session_id": session.session_id,
                "grade": summary.grade,
                "completion_bonus": bonus,
            },
        )
        return summary

    def suggest_difficulty(self, session: QuizSession) -> int:
        """세션 정답률로 다음 난이도 제안 (강제하지 않음)"""
        return scoring.suggest_next_difficulty(session.tier.level, session.success_rate)

    # === 내부 ===

    def _emit(self, event_type: str, data: dict) -> None:
        if self._bus is None:
            return
        self._bus.emit(GameEvent(event_type=event_type, data=data, source="quiz_engine"))
