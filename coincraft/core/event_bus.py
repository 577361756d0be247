"""EventBus - 대화/퀴즈 전이를 효과음·피드백 구독자에게 알리는 동기식 통로

엔진은 알림만 보내고 결과를 기다리지 않는다.

규칙:
- 페이로드는 node_id, session_id 같은 작은 값만 (노드/세션 객체 금지)
- 구독자 안에서 다시 발행하면 같은 체인, 체인 깊이는 MAX_DEPTH까지
- 한 체인에서 같은 source의 같은 이벤트는 한 번만
- 구독자 예외는 로그로 남기고 다음 구독자로 넘어간다
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set

from coincraft.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5


@dataclass
class GameEvent:
    """발행 단위. source는 "dialogue_engine" / "quiz_engine" 등."""

    event_type: str
    data: Dict[str, Any]
    source: str

    _depth: int = field(default=0, repr=False)


Subscriber = Callable[[GameEvent], None]


class EventBus:
    """사용 예:
    bus.subscribe(EventTypes.QUIZ_ANSWERED, sound_board.on_answer)
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._depth = 0
        self._chain: Set[str] = set()  # "source:event_type"

    def subscribe(self, event_type: str, subscriber: Subscriber) -> None:
        self._subscribers[event_type].append(subscriber)
        logger.debug(f"EventBus 구독: {event_type} → {subscriber.__qualname__}")

    def unsubscribe(self, event_type: str, subscriber: Subscriber) -> None:
        subscribers = self._subscribers.get(event_type, [])
        if subscriber in subscribers:
            subscribers.remove(subscriber)
        else:
            logger.warning(f"미등록 구독 해제 시도: {event_type} → {subscriber.__qualname__}")

    def has_subscribers(self, event_type: str) -> bool:
        return bool(self._subscribers.get(event_type))

    def emit(self, event: GameEvent) -> None:
        """구독자를 등록 순서대로 동기 호출. 최상위 발행은 새 체인을 연다."""
        if self._depth == 0:
            self._chain.clear()
        elif self._depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 체인 깊이 초과 ({MAX_DEPTH}): {event.source}:{event.event_type} 무시"
            )
            return

        key = f"{event.source}:{event.event_type}"
        if key in self._chain:
            logger.warning(f"EventBus 체인 내 중복 발행 차단: {key}")
            return
        self._chain.add(key)
        event._depth = self._depth

        # 구독자가 자신을 해제해도 이번 발행은 끝까지 돈다
        subscribers = list(self._subscribers.get(event.event_type, []))
        if not subscribers:
            return

        self._depth += 1
        try:
            for subscriber in subscribers:
                try:
                    subscriber(event)
                except Exception:
                    logger.exception(
                        f"EventBus 구독자 에러: {subscriber.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._depth -= 1
