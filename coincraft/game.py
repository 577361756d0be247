"""어드벤처 모드 진입점 - 계정 1개의 원장, 퀴즈 엔진, NPC 성격을 묶는다.

사용 예:
    game = create_game("kid-1", "Alex", starting_balance=25)
    talk = game.talk_to("businessman")
    talk.select(0)  # "Yes, I'm ready!"
"""

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from coincraft.config import settings
from coincraft.core.dialogue.graph import DialogueGraph
from coincraft.core.dialogue.interpreter import GameEffectInterpreter
from coincraft.core.dialogue.stats import ConversationStats
from coincraft.core.dialogue.trees import (
    BUSINESSMAN,
    GUIDE,
    WISE_LADY,
    build_businessman_conversation,
    build_guide_conversation,
    build_wise_lady_conversation,
)
from coincraft.core.event_bus import EventBus
from coincraft.core.ledger import Account, AccountRecord, CoinLedger, TransactionType
from coincraft.core.logging import get_logger, setup_logging
from coincraft.core.personality import PersonalityProfile, PersonalityType
from coincraft.core.quiz import QuestionBank, QuizEngine
from coincraft.services.conversation_service import ConversationService

logger = get_logger(__name__)


@dataclass(frozen=True)
class NPCDefinition:
    name: str
    personality_type: PersonalityType
    build_graph: Callable[[], DialogueGraph]


NPC_CATALOG: dict[str, NPCDefinition] = {
    "guide": NPCDefinition(GUIDE, PersonalityType.ADVENTUROUS, build_guide_conversation),
    "wise_lady": NPCDefinition(WISE_LADY, PersonalityType.WISE, build_wise_lady_conversation),
    "businessman": NPCDefinition(
        BUSINESSMAN, PersonalityType.BUSINESS, build_businessman_conversation
    ),
}


class AdventureGame:
    """플레이어 1명의 어드벤처 세션"""

    def __init__(
        self,
        account: AccountRecord,
        *,
        ledger: Optional[CoinLedger] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        bank: Optional[QuestionBank] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.account = account
        self.ledger = ledger if ledger is not None else CoinLedger(account)
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.quiz_engine = QuizEngine(
            self.ledger,
            bank,
            rng=rng if rng is not None else random.Random(settings.QUIZ_RANDOM_SEED),
            clock=clock,
            event_bus=self.event_bus,
        )
        self._personalities = {
            key: PersonalityProfile.for_type(npc.personality_type)
            for key, npc in NPC_CATALOG.items()
        }
        self._stats: dict[str, ConversationStats] = {}
        self.conversation: Optional[ConversationService] = None

    def personality(self, npc_key: str) -> PersonalityProfile:
        self._require_npc(npc_key)
        return self._personalities[npc_key]

    def stats(self, npc_key: str) -> ConversationStats:
        """NPC별 누적 대화 통계"""
        self._require_npc(npc_key)
        return self._stats.setdefault(npc_key, ConversationStats())

    def talk_to(self, npc_key: str) -> ConversationService:
        """NPC 대화 시작. 진행 중인 대화가 있으면 먼저 끝낸다."""
        npc = self._require_npc(npc_key)
        service = ConversationService(
            npc.build_graph(), self._interpreter(npc_key), event_bus=self.event_bus
        )
        return self._open(service)

    def start_quiz(
        self,
        npc_key: str,
        category: str,
        difficulty_ceiling: Optional[int] = None,
        question_count: Optional[int] = None,
    ) -> ConversationService:
        """메뉴를 거치지 않고 바로 퀴즈 대화 시작"""
        npc = self._require_npc(npc_key)
        interpreter = self._interpreter(npc_key)
        graph = interpreter.prepare_quiz(
            category,
            settings.DEFAULT_DIFFICULTY_CEILING
            if difficulty_ceiling is None
            else difficulty_ceiling,
            settings.DEFAULT_QUESTION_COUNT if question_count is None else question_count,
            npc.name,
        )
        service = ConversationService(graph, interpreter, event_bus=self.event_bus)
        return self._open(service)

    def end_conversation(self) -> None:
        if self.conversation is not None:
            self.conversation.end()
            self.conversation = None

    # === 내부 ===

    def _require_npc(self, npc_key: str) -> NPCDefinition:
        npc = NPC_CATALOG.get(npc_key)
        if npc is None:
            raise ValueError(
                f"Unknown NPC {npc_key!r}; expected one of {sorted(NPC_CATALOG)}"
            )
        return npc

    def _interpreter(self, npc_key: str) -> GameEffectInterpreter:
        return GameEffectInterpreter(
            self.ledger,
            self.quiz_engine,
            personality=self._personalities[npc_key],
            stats=self.stats(npc_key),
            npc_name=NPC_CATALOG[npc_key].name,
        )

    def _open(self, service: ConversationService) -> ConversationService:
        self.end_conversation()
        service.open()
        self.conversation = service
        return service


def create_game(
    player_id: str = "player",
    name: str = "",
    *,
    starting_balance: Optional[int] = None,
    **kwargs,
) -> AdventureGame:
    """로깅 설정 + 인메모리 계정으로 게임 생성"""
    setup_logging(settings.LOG_LEVEL)

    amount = settings.STARTING_BALANCE if starting_balance is None else starting_balance
    if amount < 0:
        raise ValueError(f"Starting balance must not be negative: {amount}")

    account = Account(player_id=player_id, name=name)
    ledger = CoinLedger(account)
    if amount > 0:
        ledger.credit(amount, "Starting balance", TransactionType.STARTING_BONUS)

    logger.info("Game created for %s (balance %d)", player_id, ledger.balance)
    return AdventureGame(account, ledger=ledger, **kwargs)
