"""대화 통계 (NPC 대화 1건 단위)"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConversationEntry:
    """대화 기록 1건"""

    topic: str
    valence: str
    correct: bool
    coins_delta: int


@dataclass
class ConversationStats:
    total_interactions: int = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    coins_earned: int = 0
    coins_lost: int = 0
    topic_frequency: Counter = field(default_factory=Counter)
    valence_responses: Counter = field(default_factory=Counter)
    history: list[ConversationEntry] = field(default_factory=list)

    def record_interaction(
        self, topic: str, valence: str, correct: bool, coins_delta: int
    ) -> None:
        """coins_delta는 원장에 실제 반영된 부호 있는 값"""
        self.total_interactions += 1
        if correct:
            self.correct_answers += 1
        else:
            self.wrong_answers += 1
        if coins_delta >= 0:
            self.coins_earned += coins_delta
        else:
            self.coins_lost -= coins_delta
        self.topic_frequency[topic] += 1
        self.valence_responses[valence] += 1
        self.history.append(ConversationEntry(topic, valence, correct, coins_delta))

    def recent_history(self, limit: int = 5) -> list[ConversationEntry]:
        """최근 limit건, 오래된 것부터"""
        if limit <= 0:
            return []
        return self.history[-limit:]

    @property
    def success_rate(self) -> float:
        if self.total_interactions == 0:
            return 0.0
        return self.correct_answers / self.total_interactions

    @property
    def favorite_topic(self) -> str:
        if not self.topic_frequency:
            return "None"
        return self.topic_frequency.most_common(1)[0][0]

    @property
    def preferred_valence(self) -> str:
        if not self.valence_responses:
            return "neutral"
        return self.valence_responses.most_common(1)[0][0]
