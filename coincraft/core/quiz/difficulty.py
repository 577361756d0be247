"""퀴즈 난이도 티어"""

from __future__ import annotations

from dataclasses import dataclass

MIN_LEVEL = 1
MAX_LEVEL = 5


@dataclass(frozen=True)
class DifficultyTier:
    """난이도 1단계. 정답 보상/오답 벌점의 기준값을 갖는다."""

    level: int
    name: str
    base_reward: int
    base_penalty: int
    description: str = ""


BEGINNER = DifficultyTier(1, "Beginner", 25, 10, "Perfect for newcomers")
INTERMEDIATE = DifficultyTier(
    2, "Intermediate", 50, 20, "For those with some knowledge"
)
ADVANCED = DifficultyTier(3, "Advanced", 75, 30, "For experienced learners")
EXPERT = DifficultyTier(4, "Expert", 100, 50, "For financial wizards")
MASTER = DifficultyTier(5, "Master", 150, 75, "Ultimate challenge")

DIFFICULTY_TIERS: dict[int, DifficultyTier] = {
    tier.level: tier for tier in (BEGINNER, INTERMEDIATE, ADVANCED, EXPERT, MASTER)
}


def clamp_level(level: int) -> int:
    """MIN_LEVEL ~ MAX_LEVEL 클램프."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def get_tier(level: int) -> DifficultyTier:
    """레벨 → 티어. 범위 밖이면 ValueError."""
    try:
        return DIFFICULTY_TIERS[level]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty level {level} (expected {MIN_LEVEL}..{MAX_LEVEL})"
        ) from None
