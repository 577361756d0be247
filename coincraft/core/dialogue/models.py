"""대화 그래프 도메인 모델 (DB 무관)

노드는 그래프 생성 시 한 번 만들어지고 이후 바뀌지 않는다.
선택지는 대상 노드를 객체가 아닌 node_id로 가리킨다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from coincraft.core.dialogue.effects import Effect


@dataclass(frozen=True)
class DialogueOption:
    """선택지 1개. target이 None이면 대화 종료."""

    label: str
    target: Optional[str] = None
    on_select: tuple[Effect, ...] = ()
    tooltip: Optional[str] = None
    valence: str = "neutral"  # "positive"|"neutral"|"negative"
    points: int = 0

    @property
    def ends_conversation(self) -> bool:
        return self.target is None


@dataclass(frozen=True)
class DialogueNode:
    """대화 턴 1개: 화자, 본문, 선택지"""

    node_id: str
    speaker: str
    text: str
    options: tuple[DialogueOption, ...] = ()
    on_enter: tuple[Effect, ...] = ()
    on_exit: tuple[Effect, ...] = ()

    # 메타데이터
    mood: str = "neutral"
    difficulty: int = 1
    keywords: frozenset[str] = frozenset()

    @property
    def option_labels(self) -> list[str]:
        return [option.label for option in self.options]
