"""게임 효과 해석기 - 대화 효과를 원장/퀴즈/성격 모델에 연결

DialogueEngine이 훅 순서대로 handle()을 호출한다.
해석기는 대화를 직접 움직이지 않는다. 퀴즈 시작 시 새 대화 그래프를
pending_graph에 준비만 하고, 전환은 ConversationService가 한다.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from coincraft.core.dialogue.effects import (
    AnswerQuiz,
    Effect,
    FinishQuiz,
    LogMessage,
    StartQuiz,
    TransferCoins,
)
from coincraft.core.dialogue.graph import DialogueGraph
from coincraft.core.dialogue.models import DialogueNode
from coincraft.core.dialogue.quiz_flow import build_quiz_graph, build_unavailable_graph
from coincraft.core.dialogue.stats import ConversationStats
from coincraft.core.ledger import CoinLedger, TransactionType
from coincraft.core.personality import PersonalityProfile
from coincraft.core.quiz.engine import QuizEngine
from coincraft.core.quiz.models import (
    NoQuestionsAvailable,
    QuizResult,
    QuizSession,
    QuizSessionSummary,
)

logger = logging.getLogger(__name__)


class GameEffectInterpreter:
    """EffectHandler 구현. NPC 대화 1건에 하나씩 만든다."""

    def __init__(
        self,
        ledger: CoinLedger,
        quiz_engine: QuizEngine,
        personality: Optional[PersonalityProfile] = None,
        stats: Optional[ConversationStats] = None,
        npc_name: str = "",
    ) -> None:
        self.ledger = ledger
        self.quiz_engine = quiz_engine
        self.personality = personality
        self.stats = stats if stats is not None else ConversationStats()
        self.npc_name = npc_name

        self.active_session: Optional[QuizSession] = None
        self.last_result: Optional[QuizResult] = None
        self.last_summary: Optional[QuizSessionSummary] = None
        self.last_reaction: str = ""
        self.selected_valence: str = "neutral"
        self.pending_graph: Optional[DialogueGraph] = None

    def handle(self, effect: Effect, node: DialogueNode) -> None:
        if isinstance(effect, TransferCoins):
            self._transfer(effect)
        elif isinstance(effect, StartQuiz):
            self._start_quiz(effect, node)
        elif isinstance(effect, AnswerQuiz):
            self._answer(effect)
        elif isinstance(effect, FinishQuiz):
            self.last_summary = self.quiz_engine.finish(self.active_session)
        elif isinstance(effect, LogMessage):
            logger.info("[%s] %s", node.node_id, effect.message)
        else:
            raise TypeError(f"Unsupported dialogue effect: {effect!r}")

    def take_pending_graph(self) -> Optional[DialogueGraph]:
        graph, self.pending_graph = self.pending_graph, None
        return graph

    # === 효과별 처리 ===

    def _transfer(self, effect: TransferCoins) -> None:
        if effect.amount >= 0:
            self.ledger.credit(
                effect.amount, effect.reason, effect.tx_type or TransactionType.BONUS
            )
        else:
            self.ledger.debit(
                -effect.amount, effect.reason, effect.tx_type or TransactionType.DEBIT
            )

    def prepare_quiz(
        self, category: str, difficulty_ceiling: int, question_count: int, speaker: str
    ) -> DialogueGraph:
        """새 퀴즈 세션을 만들고 그 세션의 대화 그래프를 반환"""
        outcome = self.quiz_engine.create_session(
            category, difficulty_ceiling, question_count
        )
        self.last_result = None
        self.last_summary = None
        if isinstance(outcome, NoQuestionsAvailable):
            self.active_session = None
            return build_unavailable_graph(outcome, speaker)
        self.active_session = outcome
        return build_quiz_graph(outcome, speaker)

    def _start_quiz(self, effect: StartQuiz, node: DialogueNode) -> None:
        self.pending_graph = self.prepare_quiz(
            effect.category, effect.difficulty_ceiling, effect.question_count, node.speaker
        )

    def _answer(self, effect: AnswerQuiz) -> None:
        session = self.active_session
        question = session.current_question if session is not None else None
        result = self.quiz_engine.answer(session, effect.choice_index)
        if result is None or question is None:
            return

        self.last_result = result
        if self.personality is not None:
            self.personality.record_outcome(question.category, result.correct)
            self.last_reaction = self.personality.describe_topic(
                question.category, result.correct
            )
        self.stats.record_interaction(
            question.category, self.selected_valence, result.correct, result.coins_delta
        )

    # === 렌더링 컨텍스트 ===

    def render_context(self) -> dict[str, Any]:
        """노드 본문 자리표시자 값. 아직 없는 값은 키 자체를 넣지 않는다."""
        context: dict[str, Any] = {
            "npc_name": self.npc_name,
            "balance": self.ledger.balance,
            "quiz_score": self.ledger.quiz_score,
            "coins_earned": self.ledger.coins_earned,
            "coins_lost": self.ledger.coins_lost,
        }
        if self.personality is not None:
            context["greeting"] = self.personality.describe_greeting()
            context["mood"] = self.personality.mood.value

        result = self.last_result
        if result is not None:
            context.update(
                feedback=result.feedback,
                encouragement=result.encouragement,
                learning_tip=result.learning_tip,
                coins_delta=f"{result.coins_delta:+d}",
                streak=result.streak,
                streak_bonus=result.streak_bonus,
                npc_reaction=self.last_reaction,
            )

        summary = self.last_summary
        if summary is not None:
            context.update(
                grade=summary.grade,
                correct=summary.correct_answers,
                total=summary.total_questions,
                points=summary.total_points,
                max_streak=summary.max_streak,
                time_spent=f"{summary.time_spent:.0f}",
                completion_bonus=summary.completion_bonus,
                performance_message=summary.performance_message,
            )
        return context
