"""대화 엔진 - 그래프 순회와 훅 실행 순서 보장

select_option 실행 순서:
1. 선택지 on_select (현재 노드 기준) - 코인 거래/퀴즈 진행이 여기서 일어남
2. 현재 노드 on_exit
3. target이 None이면 대화 종료 (이후 훅 없음, 커서 해제)
   아니면 커서 = target, target on_enter

재진입 규칙: 직전 노드의 on_exit 없이 on_enter가 두 번 실행되지 않는다.
타이머 없음. 모든 전이는 호출측이 일으킨다.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from coincraft.core.dialogue.effects import Effect, EffectHandler, LoggingEffectHandler
from coincraft.core.dialogue.graph import DialogueGraph
from coincraft.core.dialogue.models import DialogueNode
from coincraft.core.event_bus import EventBus, GameEvent
from coincraft.core.event_types import EventTypes

logger = logging.getLogger(__name__)


class DialogueEngine:
    """대화 커서 1개 (단일 소유, 락 없음)"""

    def __init__(
        self,
        graph: DialogueGraph,
        effect_handler: Optional[EffectHandler] = None,
        *,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._graph = graph
        self._handler: EffectHandler = effect_handler or LoggingEffectHandler()
        self._bus = event_bus
        self._cursor: Optional[str] = None
        self._entered: Optional[str] = None  # on_enter 후 아직 on_exit 안 된 노드
        self._dispatching = False

    # === 상태 ===

    @property
    def graph(self) -> DialogueGraph:
        return self._graph

    @property
    def is_active(self) -> bool:
        return self._cursor is not None

    @property
    def current_node(self) -> Optional[DialogueNode]:
        if self._cursor is None:
            return None
        return self._graph.node(self._cursor)

    # === 공개 API ===

    def start(self, root_id: Optional[str] = None) -> DialogueNode:
        """커서를 root에 두고 root on_enter 실행. root 노드 반환.

        root_id를 주면 선언된 root에서 도달 가능한 노드여야 한다.
        """
        if self.is_active:
            raise RuntimeError(
                f"Conversation {self._graph.owner!r} is already active"
            )
        start_id = root_id if root_id is not None else self._graph.root_id
        if start_id not in self._graph.reachable_ids():
            raise ValueError(
                f"Node {start_id!r} is not reachable from root "
                f"{self._graph.root_id!r}"
            )

        root = self._graph.node(start_id)
        with self._dispatch():
            self._cursor = root.node_id
            logger.info("Conversation started: %s @ %s", self._graph.owner, root.node_id)
            self._emit(EventTypes.DIALOGUE_STARTED, {"node_id": root.node_id})
            self._enter(root)
        return root

    def select_option(
        self, option_index: int, node_id: Optional[str] = None
    ) -> Optional[DialogueNode]:
        """선택지 실행. 다음 노드 반환, 대화가 끝났으면 None.

        node_id를 주면 현재 커서와 같아야 한다 (오래된 화면에서 온 입력 차단).
        범위 밖 option_index는 IndexError.
        """
        node = self._require_active()
        if node_id is not None and node_id != node.node_id:
            raise ValueError(
                f"Stale selection: view shows {node_id!r}, cursor is {node.node_id!r}"
            )
        if not 0 <= option_index < len(node.options):
            raise IndexError(
                f"Option index {option_index} out of range for node "
                f"{node.node_id!r} ({len(node.options)} options)"
            )

        option = node.options[option_index]
        with self._dispatch():
            logger.debug("Option selected: %s[%d] %r", node.node_id, option_index, option.label)
            self._emit(
                EventTypes.DIALOGUE_OPTION_SELECTED,
                {
                    "node_id": node.node_id,
                    "option_index": option_index,
                    "valence": option.valence,
                },
            )
            self._run(option.on_select, node)
            self._exit(node)

            if option.target is None:
                self._terminate("option")
                return None

            target = self._graph.node(option.target)
            self._cursor = target.node_id
            self._enter(target)
            return target

    def end(self) -> None:
        """강제 종료. 현재 노드 on_exit은 실행한다. 두 번 불러도 추가 효과 없음."""
        if self._cursor is None:
            return
        node = self._graph.node(self._cursor)
        with self._dispatch():
            if self._entered is not None:
                self._exit(node)
            self._terminate("forced")

    # === 내부 ===

    @contextmanager
    def _dispatch(self) -> Iterator[None]:
        if self._dispatching:
            raise RuntimeError(
                f"Nested dialogue dispatch in {self._graph.owner!r}: "
                "effects must not drive the conversation"
            )
        self._dispatching = True
        try:
            yield
        finally:
            self._dispatching = False

    def _require_active(self) -> DialogueNode:
        node = self.current_node
        if node is None:
            raise RuntimeError(f"Conversation {self._graph.owner!r} is not active")
        return node

    def _enter(self, node: DialogueNode) -> None:
        if self._entered is not None:
            raise RuntimeError(
                f"on_enter for {node.node_id!r} while {self._entered!r} "
                "has not exited"
            )
        self._entered = node.node_id
        self._run(node.on_enter, node)
        self._emit(EventTypes.DIALOGUE_NODE_ENTERED, {"node_id": node.node_id})

    def _exit(self, node: DialogueNode) -> None:
        self._run(node.on_exit, node)
        self._entered = None
        self._emit(EventTypes.DIALOGUE_NODE_EXITED, {"node_id": node.node_id})

    def _terminate(self, reason: str) -> None:
        last = self._cursor
        self._cursor = None
        self._entered = None
        logger.info(
            "Conversation ended: %s (last=%s, reason=%s)", self._graph.owner, last, reason
        )
        self._emit(EventTypes.DIALOGUE_ENDED, {"last_node_id": last, "reason": reason})

    def _run(self, effects: tuple[Effect, ...], node: DialogueNode) -> None:
        for effect in effects:
            self._handler.handle(effect, node)

    def _emit(self, event_type: str, data: dict) -> None:
        if self._bus is None:
            return
        payload = {"owner": self._graph.owner, **data}
        self._bus.emit(
            GameEvent(event_type=event_type, data=payload, source="dialogue_engine")
        )
