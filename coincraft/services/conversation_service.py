"""대화 진행 Service - DialogueEngine + 효과 해석기 + 화면용 뷰

NPC 대화 1건을 관리한다. 퀴즈 시작 효과가 준비한 그래프가 있으면
현재 대화를 끝낸 뒤 그 그래프로 전환한다.
"""

from dataclasses import dataclass
from typing import Optional

from coincraft.core.dialogue.engine import DialogueEngine
from coincraft.core.dialogue.graph import DialogueGraph
from coincraft.core.dialogue.interpreter import GameEffectInterpreter
from coincraft.core.dialogue.render import render_text
from coincraft.core.dialogue.stats import ConversationStats
from coincraft.core.event_bus import EventBus
from coincraft.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DialogueView:
    """표시 계층에 넘기는 노드 스냅샷 (본문 렌더링 완료)"""

    node_id: str
    speaker: str
    text: str
    options: tuple[str, ...]
    tooltips: tuple[Optional[str], ...]
    mood: str = "neutral"


class ConversationService:
    """NPC 대화 1건"""

    def __init__(
        self,
        graph: DialogueGraph,
        interpreter: GameEffectInterpreter,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._graph = graph
        self._interpreter = interpreter
        self._bus = event_bus
        self._engine: Optional[DialogueEngine] = None

    # === 상태 ===

    @property
    def is_active(self) -> bool:
        return self._engine is not None and self._engine.is_active

    @property
    def stats(self) -> ConversationStats:
        return self._interpreter.stats

    @property
    def interpreter(self) -> GameEffectInterpreter:
        return self._interpreter

    @property
    def graph(self) -> DialogueGraph:
        """현재 진행 중인 그래프 (퀴즈 전환 후에는 퀴즈 그래프)"""
        return self._engine.graph if self._engine is not None else self._graph

    # === 공개 API ===

    def open(self) -> DialogueView:
        if self.is_active:
            raise RuntimeError(f"Conversation with {self._graph.owner!r} is already open")
        self._start(self._graph)
        self._follow_pending()
        return self._require_view()

    def select(
        self, option_index: int, node_id: Optional[str] = None
    ) -> Optional[DialogueView]:
        """선택지 실행 후 다음 화면. 대화가 끝났으면 None."""
        if self._engine is None:
            raise RuntimeError(f"Conversation with {self._graph.owner!r} is not open")

        node = self._engine.current_node
        if node is not None and 0 <= option_index < len(node.options):
            self._interpreter.selected_valence = node.options[option_index].valence

        self._engine.select_option(option_index, node_id)
        self._follow_pending()
        return self.current_view()

    def end(self) -> None:
        """언제든 안전. 여러 번 불러도 됨."""
        if self._engine is not None:
            self._engine.end()

    def current_view(self) -> Optional[DialogueView]:
        if self._engine is None:
            return None
        node = self._engine.current_node
        if node is None:
            return None
        return DialogueView(
            node_id=node.node_id,
            speaker=node.speaker,
            text=render_text(node.text, self._interpreter.render_context()),
            options=tuple(node.option_labels),
            tooltips=tuple(o.tooltip for o in node.options),
            mood=node.mood,
        )

    # === 내부 ===

    def _start(self, graph: DialogueGraph) -> None:
        self._engine = DialogueEngine(graph, self._interpreter, event_bus=self._bus)
        self._engine.start()

    def _follow_pending(self) -> None:
        """StartQuiz가 예약한 그래프로 전환. 노드 진입(on_enter)에서 예약돼도 동일."""
        pending = self._interpreter.take_pending_graph()
        if pending is None:
            return
        if self._engine.is_active:
            self._engine.end()
        logger.info("Switching conversation: %s -> %s", self._graph.owner, pending.owner)
        self._start(pending)

    def _require_view(self) -> DialogueView:
        view = self.current_view()
        if view is None:
            raise RuntimeError(f"Conversation with {self._graph.owner!r} ended immediately")
        return view
