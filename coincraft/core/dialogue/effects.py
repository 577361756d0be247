"""노드/선택지 부수효과 - 태그가 붙은 선언형 값

엔진은 효과를 직접 실행하지 않고 주입된 EffectHandler에 넘긴다.
kind 문자열로 직렬화/역직렬화할 수 있다.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Protocol, Union

if TYPE_CHECKING:
    from coincraft.core.dialogue.models import DialogueNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferCoins:
    """양수면 적립, 음수면 차감 (차감은 원장에서 클램프)"""

    kind: ClassVar[str] = "transfer_coins"

    amount: int
    reason: str
    tx_type: Optional[str] = None


@dataclass(frozen=True)
class StartQuiz:
    kind: ClassVar[str] = "start_quiz"

    category: str
    difficulty_ceiling: int
    question_count: int


@dataclass(frozen=True)
class AnswerQuiz:
    kind: ClassVar[str] = "answer_quiz"

    choice_index: int


@dataclass(frozen=True)
class FinishQuiz:
    kind: ClassVar[str] = "finish_quiz"


@dataclass(frozen=True)
class LogMessage:
    kind: ClassVar[str] = "log"

    message: str


Effect = Union[TransferCoins, StartQuiz, AnswerQuiz, FinishQuiz, LogMessage]

EFFECT_TYPES: dict[str, type] = {
    cls.kind: cls for cls in (TransferCoins, StartQuiz, AnswerQuiz, FinishQuiz, LogMessage)
}


def effect_to_dict(effect: Effect) -> dict[str, Any]:
    return {"kind": effect.kind, **asdict(effect)}


def effect_from_dict(data: dict[str, Any]) -> Effect:
    payload = dict(data)
    kind = payload.pop("kind", None)
    cls = EFFECT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown effect kind: {kind!r}")
    return cls(**payload)


class EffectHandler(Protocol):
    """효과 해석기 인터페이스. 엔진이 훅 순서대로 호출한다."""

    def handle(self, effect: Effect, node: "DialogueNode") -> None: ...


class LoggingEffectHandler:
    """로그만 남기는 기본 해석기 (원장/퀴즈 없이 대화만 돌릴 때)"""

    def handle(self, effect: Effect, node: "DialogueNode") -> None:
        if isinstance(effect, LogMessage):
            logger.info("[%s] %s", node.node_id, effect.message)
        else:
            logger.debug("Effect %s ignored at node %s", effect.kind, node.node_id)
