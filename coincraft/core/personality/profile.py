"""NPC 성격 프로필 - 퀴즈 결과에 따른 기분/주제 선호 변화

퀴즈 결과 1건마다 record_outcome()으로 갱신한다.
문구 생성은 상태만 보고 결정된다 (난수 없음).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from coincraft.core.personality.models import Mood, PersonalityType

logger = logging.getLogger(__name__)

RECENT_WINDOW = 10
NEUTRAL_PREFERENCE = 0.5
PREFERENCE_GAIN = 0.1
PREFERENCE_LOSS = 0.05
LEVEL_FLOOR = 0.1

# (최근 정답률 초과 기준, 기분) - 위에서부터 검사
MOOD_THRESHOLDS: tuple[tuple[float, Mood], ...] = (
    (0.8, Mood.EXCITED),
    (0.6, Mood.HAPPY),
    (0.4, Mood.CONTENT),
    (0.2, Mood.CONCERNED),
)


@dataclass(frozen=True)
class PersonalityPreset:
    topic_preferences: dict[str, float]
    favorite_topics: tuple[str, ...]
    patience: float
    enthusiasm: float
    base_difficulty: int
    greeting: str
    tips: tuple[str, ...]


PRESETS: dict[PersonalityType, PersonalityPreset] = {
    PersonalityType.ADVENTUROUS: PersonalityPreset(
        topic_preferences={"challenges": 0.9, "risk": 0.8, "strategy": 0.7},
        favorite_topics=("adventure", "challenges", "risk management"),
        patience=0.6,
        enthusiasm=0.9,
        base_difficulty=2,
        greeting="Welcome, brave soul!",
        tips=(
            "Loves challenges and risk-taking",
            "Responds well to bold choices",
            "Enjoys discussing strategy",
        ),
    ),
    PersonalityType.WISE: PersonalityPreset(
        topic_preferences={"education": 0.9, "wisdom": 0.8, "learning": 0.8},
        favorite_topics=("financial literacy", "education", "wisdom"),
        patience=0.9,
        enthusiasm=0.7,
        base_difficulty=1,
        greeting="Greetings, seeker of knowledge.",
        tips=(
            "Patient and methodical",
            "Loves teaching and explaining",
            "Appreciates thoughtful questions",
        ),
    ),
    PersonalityType.BUSINESS: PersonalityPreset(
        topic_preferences={"efficiency": 0.9, "analysis": 0.8, "results": 0.8},
        favorite_topics=("business", "analysis", "efficiency"),
        patience=0.5,
        enthusiasm=0.6,
        base_difficulty=2,
        greeting="Good to see you, potential partner.",
        tips=(
            "Values efficiency and results",
            "Prefers direct communication",
            "Focuses on practical applications",
        ),
    ),
    PersonalityType.FRIENDLY: PersonalityPreset(
        topic_preferences={"help": 0.9, "encouragement": 0.8, "support": 0.8},
        favorite_topics=("help", "encouragement", "support"),
        patience=0.8,
        enthusiasm=0.8,
        base_difficulty=1,
        greeting="Hello there, friend!",
        tips=(
            "Encouraging and supportive",
            "Loves helping others",
            "Responds to positive energy",
        ),
    ),
    PersonalityType.MYSTERIOUS: PersonalityPreset(
        topic_preferences={"puzzles": 0.9, "mystery": 0.8, "thinking": 0.7},
        favorite_topics=("puzzles", "mystery", "deep thinking"),
        patience=0.7,
        enthusiasm=0.5,
        base_difficulty=3,
        greeting="Ah, another curious mind approaches.",
        tips=(
            "Enjoys puzzles and complexity",
            "Appreciates deep thinking",
            "Likes enigmatic responses",
        ),
    ),
}

MOOD_GREETINGS: dict[Mood, str] = {
    Mood.EXCITED: "I'm absolutely thrilled to see you!",
    Mood.HAPPY: "I'm in great spirits today!",
    Mood.CONTENT: "I'm feeling quite well.",
    Mood.NEUTRAL: "How may I assist you?",
    Mood.CONCERNED: "I'm a bit worried about your progress.",
    Mood.FRUSTRATED: "I hope we can make better progress today.",
}

# 인사말 변주. 세 번째 상호작용마다 하나씩 순서대로 끼워 넣는다.
GREETING_VARIETY: tuple[str, ...] = (
    "What brings you here today?",
    "I've been expecting you.",
    "Perfect timing!",
    "How wonderful to see you!",
    "I was just thinking about you.",
)

MOOD_REACTIONS_CORRECT: dict[Mood, str] = {
    Mood.EXCITED: "This is fantastic!",
    Mood.HAPPY: "Wonderful!",
    Mood.CONTENT: "Good job!",
    Mood.NEUTRAL: "Well done.",
    Mood.CONCERNED: "That's better.",
    Mood.FRUSTRATED: "Finally!",
}

MOOD_REACTIONS_WRONG: dict[Mood, str] = {
    Mood.EXCITED: "Don't worry, we'll get this!",
    Mood.HAPPY: "Let's try again!",
    Mood.CONTENT: "That's okay, let's learn.",
    Mood.NEUTRAL: "Let me explain.",
    Mood.CONCERNED: "I'm worried about this.",
    Mood.FRUSTRATED: "This is concerning.",
}

LOVED_TOPIC_LINES: dict[PersonalityType, str] = {
    PersonalityType.ADVENTUROUS: "I love talking about {topic}, it's so exciting!",
    PersonalityType.WISE: "Ah, {topic} is one of my favorite subjects to teach.",
    PersonalityType.BUSINESS: "Perfect, {topic} is crucial for success.",
    PersonalityType.FRIENDLY: "I'm so happy you're interested in {topic}!",
    PersonalityType.MYSTERIOUS: "Fascinating that you chose {topic}...",
}

DISLIKED_TOPIC_LINES: dict[PersonalityType, str] = {
    PersonalityType.ADVENTUROUS: "Well, {topic} isn't my favorite, but let's tackle it!",
    PersonalityType.WISE: "While {topic} isn't my specialty, I'll do my best.",
    PersonalityType.BUSINESS: "I'll be direct about {topic}: it's not my strength.",
    PersonalityType.FRIENDLY: "I'll try my best with {topic}, though it's challenging.",
    PersonalityType.MYSTERIOUS: "Interesting choice... {topic} is quite complex.",
}


def _clamp_unit(value: float, floor: float = 0.0) -> float:
    return max(floor, min(1.0, value))


@dataclass
class PersonalityProfile:
    """NPC 1명의 성격 상태 (인메모리)"""

    personality_type: PersonalityType
    mood: Mood = Mood.NEUTRAL
    topic_preferences: dict[str, float] = field(default_factory=dict)
    favorite_topics: list[str] = field(default_factory=list)
    interaction_history: dict[str, int] = field(default_factory=dict)
    patience: float = 0.7
    enthusiasm: float = 0.6
    total_interactions: int = 0
    successful_interactions: int = 0
    recent_outcomes: deque = field(
        default_factory=lambda: deque(maxlen=RECENT_WINDOW)
    )

    @classmethod
    def for_type(cls, personality_type: PersonalityType) -> "PersonalityProfile":
        preset = PRESETS[personality_type]
        return cls(
            personality_type=personality_type,
            topic_preferences=dict(preset.topic_preferences),
            favorite_topics=list(preset.favorite_topics),
            patience=preset.patience,
            enthusiasm=preset.enthusiasm,
        )

    # === 갱신 ===

    def record_outcome(self, topic: str, correct: bool) -> Mood:
        """퀴즈 결과 1건 반영. 갱신된 기분 반환.

        1. 주제 선호 +0.1 / -0.05, [0, 1] 클램프
        2. 최근 10건 정답률로 기분 결정
        3. 인내심/열정 조정, [0.1, 1] 클램프
        """
        self.total_interactions += 1
        if correct:
            self.successful_interactions += 1
        self.recent_outcomes.append(correct)
        self.interaction_history[topic] = self.interaction_history.get(topic, 0) + 1

        current = self.topic_preferences.get(topic, NEUTRAL_PREFERENCE)
        delta = PREFERENCE_GAIN if correct else -PREFERENCE_LOSS
        self.topic_preferences[topic] = _clamp_unit(current + delta)

        previous = self.mood
        self.mood = self._mood_for_rate(self.recent_success_rate)

        if correct:
            self.patience = _clamp_unit(self.patience + 0.05, LEVEL_FLOOR)
            self.enthusiasm = _clamp_unit(self.enthusiasm + 0.1, LEVEL_FLOOR)
        else:
            self.patience = _clamp_unit(self.patience - 0.1, LEVEL_FLOOR)
            self.enthusiasm = _clamp_unit(self.enthusiasm - 0.05, LEVEL_FLOOR)

        if self.mood != previous:
            logger.debug(
                "Mood changed: %s %s -> %s",
                self.personality_type.value,
                previous.value,
                self.mood.value,
            )
        return self.mood

    @staticmethod
    def _mood_for_rate(rate: float) -> Mood:
        for threshold, mood in MOOD_THRESHOLDS:
            if rate > threshold:
                return mood
        return Mood.FRUSTRATED

    # === 조회 ===

    @property
    def recent_success_rate(self) -> float:
        """최근 10건 정답률. 기록이 없으면 0.5."""
        if not self.recent_outcomes:
            return 0.5
        return sum(self.recent_outcomes) / len(self.recent_outcomes)

    @property
    def success_rate(self) -> float:
        if self.total_interactions == 0:
            return 0.5
        return self.successful_interactions / self.total_interactions

    def topic_interaction_count(self, topic: str) -> int:
        return self.interaction_history.get(topic, 0)

    def describe_greeting(self) -> str:
        preset = PRESETS[self.personality_type]
        parts = [preset.greeting]
        if self.total_interactions and self.total_interactions % 3 == 0:
            index = (self.total_interactions // 3 - 1) % len(GREETING_VARIETY)
            parts.append(GREETING_VARIETY[index])
        parts.append(MOOD_GREETINGS[self.mood])
        return " ".join(parts)

    def describe_topic(self, topic: str, correct: bool) -> str:
        """주제 반응 문구: 기본 반응 + 선호도 문구 + 기분 문구"""
        parts = [
            f"Excellent work on {topic}!"
            if correct
            else f"Let me help you understand {topic} better."
        ]
        preference = self.topic_preferences.get(topic, NEUTRAL_PREFERENCE)
        if preference > 0.8:
            parts.append(LOVED_TOPIC_LINES[self.personality_type].format(topic=topic))
        elif preference < 0.3:
            parts.append(DISLIKED_TOPIC_LINES[self.personality_type].format(topic=topic))
        reactions = MOOD_REACTIONS_CORRECT if correct else MOOD_REACTIONS_WRONG
        parts.append(reactions[self.mood])
        return " ".join(parts)

    def adaptive_difficulty(self) -> int:
        """성격 기본 난이도 ± 최근 성과. 1~5."""
        base = PRESETS[self.personality_type].base_difficulty
        rate = self.recent_success_rate
        if rate > 0.8:
            return min(5, base + 1)
        if rate < 0.3:
            return max(1, base - 1)
        return base

    def conversation_tips(self) -> list[str]:
        return list(PRESETS[self.personality_type].tips)
