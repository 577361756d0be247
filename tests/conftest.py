"""Shared test fixtures."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from coincraft.core.event_bus import EventBus
from coincraft.core.ledger import Account, CoinLedger
from coincraft.core.quiz import QuizEngine
from coincraft.db.models import Base


class FakeClock:
    """수동으로 진행시키는 시계 (초 단위 float)"""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StepClock:
    """호출할 때마다 1초씩 증가하는 UTC datetime 시계"""

    def __init__(self) -> None:
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture()
def account() -> Account:
    return Account(player_id="kid-1", name="Alex")


@pytest.fixture()
def ledger(account: Account) -> CoinLedger:
    return CoinLedger(account, clock=StepClock())


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def quiz_engine(ledger: CoinLedger, event_bus: EventBus, fake_clock: FakeClock) -> QuizEngine:
    return QuizEngine(ledger, rng=random.Random(7), clock=fake_clock, event_bus=event_bus)


@pytest.fixture()
def db_session() -> Session:
    """In-memory SQLite session with all tables created."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
