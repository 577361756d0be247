"""퀴즈 채점 규칙 - 순수 함수, 외부 의존 없음

연속 정답 보너스, 등급표, 완료 보너스, 적응형 난이도, 피드백 문구.
"""

from coincraft.core.quiz.difficulty import clamp_level

# === 연속 정답 보너스 (답하기 전 streak 기준) ===
STREAK_BONUS_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (5, 50),
    (3, 25),
    (2, 10),
)

# === 등급표 (하한 포함) ===
GRADE_BOUNDARIES: tuple[tuple[float, str], ...] = (
    (0.9, "A+"),
    (0.8, "A"),
    (0.7, "B"),
    (0.6, "C"),
    (0.5, "D"),
)
FAILING_GRADE = "F"

# === 세션 완료 보너스 ===
PERFECT_COMPLETION_BONUS = 50
COMPLETION_BONUS_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (0.8, 30),
    (0.6, 15),
)

# === 적응형 난이도 ===
RAISE_DIFFICULTY_ABOVE = 0.8
LOWER_DIFFICULTY_BELOW = 0.3

PERFECT_STREAK = 3


def calculate_streak_bonus(streak_before: int) -> int:
    """답하기 전 streak 값으로 보너스 계산."""
    for threshold, bonus in STREAK_BONUS_THRESHOLDS:
        if streak_before >= threshold:
            return bonus
    return 0


def calculate_grade(success_rate: float) -> str:
    for lower_edge, grade in GRADE_BOUNDARIES:
        if success_rate >= lower_edge:
            return grade
    return FAILING_GRADE


def performance_message(success_rate: float) -> str:
    if success_rate >= 0.9:
        return "Outstanding performance! You're a financial wizard!"
    if success_rate >= 0.8:
        return "Excellent work! You're mastering financial concepts!"
    if success_rate >= 0.7:
        return "Good job! You're on the right track!"
    if success_rate >= 0.6:
        return "Keep studying! You're making progress!"
    return "Don't give up! Practice makes perfect!"


def calculate_completion_bonus(correct: int, total: int) -> int:
    """세션 완료 보너스. 전부 정답 50, 80% 이상 30, 60% 이상 15."""
    if total <= 0:
        return 0
    if correct == total:
        return PERFECT_COMPLETION_BONUS
    rate = correct / total
    for lower_edge, bonus in COMPLETION_BONUS_THRESHOLDS:
        if rate >= lower_edge:
            return bonus
    return 0


def suggest_next_difficulty(current_level: int, recent_success_rate: float) -> int:
    """최근 정답률 > 0.8 이면 한 단계 위, < 0.3 이면 한 단계 아래."""
    if recent_success_rate > RAISE_DIFFICULTY_ABOVE:
        return clamp_level(current_level + 1)
    if recent_success_rate < LOWER_DIFFICULTY_BELOW:
        return clamp_level(current_level - 1)
    return clamp_level(current_level)


# === 피드백 문구 ===


def feedback_text(correct: bool, explanation: str) -> str:
    if correct:
        return f"Correct! {explanation}"
    return f"Incorrect. {explanation}"


def encouragement_text(correct: bool, streak_after: int) -> str:
    if correct:
        if streak_after >= 5:
            return "You're on fire! Amazing streak!"
        if streak_after >= 3:
            return "Great job! Keep it up!"
        if streak_after >= 2:
            return "Nice work!"
        return "Good answer!"
    return "Don't give up! Every expert was once a beginner."


def learning_tip_text(correct: bool, category: str, hint: str = "") -> str:
    if correct:
        return f"Tip: You're mastering {category}!"
    if hint:
        return f"Study tip: Review {category} concepts. {hint}"
    return f"Study tip: Review {category} concepts."
