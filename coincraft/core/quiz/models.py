"""퀴즈 도메인 모델 (DB 무관)

QuizSession은 퀴즈 1회 시도의 단일 소유 상태다. 대화가 버리면 함께 사라진다.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from coincraft.core.quiz import scoring
from coincraft.core.quiz.difficulty import DifficultyTier


@dataclass(frozen=True)
class QuizQuestion:
    """문항 1개. 정적 뱅크에서 꺼내 쓰며 변경하지 않는다."""

    prompt: str
    choices: tuple[str, ...]
    correct_index: int
    explanation: str
    category: str
    difficulty: int  # DifficultyTier.level
    keywords: frozenset[str] = frozenset()
    hint: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for "
                f"{len(self.choices)} choices: {self.prompt!r}"
            )


@dataclass(frozen=True)
class QuizResult:
    """문항 1개 채점 결과"""

    correct: bool
    points_earned: int
    points_lost: int
    feedback: str
    encouragement: str
    learning_tip: str
    streak_bonus: int
    is_perfect: bool  # 정답 + streak >= 3
    streak: int = 0  # 답한 뒤 streak
    coins_delta: int = 0  # 원장에 실제 반영된 값 (QuizEngine이 채움)


@dataclass(frozen=True)
class QuizSessionSummary:
    total_questions: int
    correct_answers: int
    total_points: int
    max_streak: int
    time_spent: float  # 초
    grade: str
    success_rate: float
    performance_message: str
    completion_bonus: int = 0


@dataclass(frozen=True)
class NoQuestionsAvailable:
    """조건에 맞는 문항이 없음. 예외가 아니라 정상 결과."""

    category: str
    difficulty_ceiling: int
    message: str = "I don't have any questions on that topic yet. Come back later!"


@dataclass
class QuizSession:
    """퀴즈 1회 시도 (인메모리 상태)"""

    session_id: str
    category: str
    tier: DifficultyTier
    questions: list[QuizQuestion]

    current_index: int = 0
    correct_count: int = 0
    total_points: int = 0
    current_streak: int = 0
    max_streak: int = 0
    results: list[QuizResult] = field(default_factory=list)
    category_performance: dict[str, int] = field(default_factory=dict)

    # 완료 보너스 지급 여부 (이중 완료 방지)
    finished: bool = False
    completion_bonus: int = 0

    clock: Callable[[], float] = field(default=time.time, repr=False)
    started_at: float = field(default=0.0)

    def __post_init__(self) -> None:
        if not self.started_at:
            self.started_at = self.clock()

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.current_index >= self.total_questions

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.is_complete:
            return None
        return self.questions[self.current_index]

    @property
    def last_result(self) -> Optional[QuizResult]:
        return self.results[-1] if self.results else None

    def answer_question(self, selected_index: int) -> Optional[QuizResult]:
        """현재 문항 채점 후 다음 문항으로. 이미 끝났으면 None (no-op).

        1. 보너스는 답하기 전 streak 기준으로 계산, 정답일 때만 적용
        2. 정답 → streak+1, 오답 → streak=0
        3. max_streak 갱신, 결과 추가, current_index 전진
        """
        question = self.current_question
        if question is None:
            return None

        correct = selected_index == question.correct_index
        bonus = scoring.calculate_streak_bonus(self.current_streak) if correct else 0

        if correct:
            self.current_streak += 1
            self.correct_count += 1
            points = self.tier.base_reward + bonus
        else:
            self.current_streak = 0
            points = -self.tier.base_penalty

        self.max_streak = max(self.max_streak, self.current_streak)
        self.total_points += points

        perf = self.category_performance.get(question.category, 0)
        self.category_performance[question.category] = perf + (1 if correct else -1)

        result = QuizResult(
            correct=correct,
            points_earned=points if correct else 0,
            points_lost=0 if correct else -points,
            feedback=scoring.feedback_text(correct, question.explanation),
            encouragement=scoring.encouragement_text(correct, self.current_streak),
            learning_tip=scoring.learning_tip_text(
                correct, question.category, question.hint
            ),
            streak_bonus=bonus,
            is_perfect=correct and self.current_streak >= scoring.PERFECT_STREAK,
            streak=self.current_streak,
        )
        self.results.append(result)
        self.current_index += 1
        return result

    @property
    def success_rate(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.correct_count / self.total_questions

    def get_summary(self) -> QuizSessionSummary:
        rate = self.success_rate
        return QuizSessionSummary(
            total_questions=self.total_questions,
            correct_answers=self.correct_count,
            total_points=self.total_points,
            max_streak=self.max_streak,
            time_spent=max(0.0, self.clock() - self.started_at),
            grade=scoring.calculate_grade(rate),
            success_rate=rate,
            performance_message=scoring.performance_message(rate),
            completion_bonus=self.completion_bonus,
        )
