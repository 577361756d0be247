"""퀴즈/평가 Core 패키지"""

from coincraft.core.quiz.bank import (
    DEFAULT_QUESTIONS,
    QuestionBank,
    build_default_bank,
)
from coincraft.core.quiz.difficulty import (
    DIFFICULTY_TIERS,
    MAX_LEVEL,
    MIN_LEVEL,
    DifficultyTier,
    clamp_level,
    get_tier,
)
from coincraft.core.quiz.engine import QuizEngine, QuizSessionNotFoundError
from coincraft.core.quiz.models import (
    NoQuestionsAvailable,
    QuizQuestion,
    QuizResult,
    QuizSession,
    QuizSessionSummary,
)
from coincraft.core.quiz.scoring import (
    calculate_completion_bonus,
    calculate_grade,
    calculate_streak_bonus,
    performance_message,
    suggest_next_difficulty,
)

__all__ = [
    "DEFAULT_QUESTIONS",
    "QuestionBank",
    "build_default_bank",
    "DIFFICULTY_TIERS",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "DifficultyTier",
    "clamp_level",
    "get_tier",
    "QuizEngine",
    "QuizSessionNotFoundError",
    "NoQuestionsAvailable",
    "QuizQuestion",
    "QuizResult",
    "QuizSession",
    "QuizSessionSummary",
    "calculate_completion_bonus",
    "calculate_grade",
    "calculate_streak_bonus",
    "performance_message",
    "suggest_next_difficulty",
]
