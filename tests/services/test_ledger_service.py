"""LedgerService 테스트 - 인메모리 SQLite"""

import pytest
from sqlalchemy.orm import Session

from coincraft.core.ledger import TransactionType
from coincraft.db.database import get_db
from coincraft.db.models import CoinTransactionModel, PlayerAccountModel
from coincraft.services.ledger_service import LedgerService


class TestOpenAccount:
    def test_starting_balance_recorded_as_transaction(self, db_session):
        service = LedgerService(db_session)
        ledger = service.open_account("kid-1", "Alex", starting_balance=25)

        assert ledger.balance == 25
        row = db_session.get(PlayerAccountModel, "kid-1")
        assert row.smart_coin_balance == 25
        tx_rows = db_session.query(CoinTransactionModel).all()
        assert [(r.seq, r.tx_type, r.amount) for r in tx_rows] == [
            (1, TransactionType.STARTING_BONUS.value, 25)
        ]

    def test_zero_starting_balance_has_empty_history(self, db_session):
        ledger = LedgerService(db_session).open_account("kid-1", starting_balance=0)
        assert ledger.transactions == ()

    def test_duplicate_account_rejected(self, db_session):
        service = LedgerService(db_session)
        service.open_account("kid-1")
        with pytest.raises(ValueError):
            service.open_account("kid-1")

    def test_negative_starting_balance_rejected(self, db_session):
        with pytest.raises(ValueError):
            LedgerService(db_session).open_account("kid-1", starting_balance=-5)


class TestLoadLedger:
    def test_reload_continues_history(self, db_session):
        service = LedgerService(db_session)
        ledger = service.open_account("kid-1", starting_balance=25)
        ledger.debit(8, "wrong answer", TransactionType.QUIZ_WRONG)
        ledger.debit(8, "wrong answer", TransactionType.QUIZ_WRONG)
        db_session.commit()

        reloaded = service.load_ledger("kid-1")
        assert reloaded.balance == 9
        assert reloaded.opening_balance == 0
        assert [t.seq for t in reloaded.transactions] == [1, 2, 3]
        assert reloaded.coins_lost == 16

        tx = reloaded.credit(15, "bonus", TransactionType.BONUS)
        db_session.commit()
        assert tx.seq == 4
        assert db_session.get(PlayerAccountModel, "kid-1").smart_coin_balance == 24
        assert db_session.query(CoinTransactionModel).count() == 4

    def test_restored_timestamps_are_aware(self, db_session):
        service = LedgerService(db_session)
        service.open_account("kid-1", starting_balance=5)
        db_session.commit()
        db_session.expire_all()

        reloaded = service.load_ledger("kid-1")
        assert reloaded.transactions[0].timestamp.tzinfo is not None
        reloaded.credit(1, "after reload")

    def test_unknown_account(self, db_session):
        with pytest.raises(ValueError):
            LedgerService(db_session).load_ledger("ghost")


class TestHistory:
    def test_latest_entries_oldest_first(self, db_session):
        service = LedgerService(db_session)
        ledger = service.open_account("kid-1")
        for i in range(5):
            ledger.credit(i + 1, f"reward {i}")

        history = service.history("kid-1", limit=3)
        assert [t.description for t in history] == ["reward 2", "reward 3", "reward 4"]
        assert service.history("nobody") == []


class TestDatabaseSession:
    def test_get_db_yields_session_and_closes(self):
        gen = get_db()
        db = next(gen)
        assert isinstance(db, Session)
        with pytest.raises(StopIteration):
            next(gen)
