"""QuizEngine 테스트 - 세션 생성, 원장 반영, 완료 처리"""

import random

import pytest

from coincraft.core.event_types import EventTypes
from coincraft.core.ledger import Account, CoinLedger, TransactionType
from coincraft.core.quiz import (
    DifficultyTier,
    NoQuestionsAvailable,
    QuestionBank,
    QuizEngine,
    QuizQuestion,
    QuizSession,
    QuizSessionNotFoundError,
    build_default_bank,
)
from coincraft.core.quiz.bank import BASIC, CREDIT, KIDS, PLANNING


def _engine(balance: int = 0, seed: int = 1, **kwargs) -> QuizEngine:
    ledger = CoinLedger(Account(player_id="p1", smart_coin_balance=balance))
    return QuizEngine(ledger, rng=random.Random(seed), **kwargs)


def _answer_all(engine: QuizEngine, session: QuizSession, correct: bool = True) -> None:
    while not session.is_complete:
        question = session.current_question
        choice = question.correct_index
        if not correct:
            choice = (choice + 1) % len(question.choices)
        engine.answer(session, choice)


class TestDefaultBank:
    def test_every_question_valid(self):
        bank = build_default_bank()
        assert len(bank) >= 10
        assert set(bank.categories) >= {BASIC, CREDIT, KIDS, PLANNING}
        for category in bank.categories:
            for question in bank.questions_for(category):
                assert 0 <= question.correct_index < len(question.choices)
                assert question.category == category

    def test_questions_for_returns_copy(self):
        bank = build_default_bank()
        bank.questions_for(BASIC).clear()
        assert bank.questions_for(BASIC)


class TestCreateSession:
    def test_same_seed_same_questions(self):
        a = _engine(seed=42).create_session(BASIC, 2, 3)
        b = _engine(seed=42).create_session(BASIC, 2, 3)
        assert [q.prompt for q in a.questions] == [q.prompt for q in b.questions]

    def test_filters_by_difficulty_ceiling(self):
        session = _engine().create_session(CREDIT, 2, 10)
        assert session.questions
        assert all(q.difficulty <= 2 for q in session.questions)

    def test_count_clamped_to_eligible(self):
        engine = _engine()
        eligible = [q for q in engine.bank.questions_for(BASIC) if q.difficulty <= 2]
        session = engine.create_session(BASIC, 2, 99)
        assert session.total_questions == len(eligible)
        assert len({q.prompt for q in session.questions}) == len(eligible)

    def test_no_questions_is_a_value(self, event_bus):
        engine = _engine(event_bus=event_bus)
        seen = []
        event_bus.subscribe(EventTypes.QUIZ_UNAVAILABLE, lambda e: seen.append(e.data))

        outcome = engine.create_session(PLANNING, 1, 5)

        assert isinstance(outcome, NoQuestionsAvailable)
        assert outcome.category == PLANNING
        assert seen == [{"category": PLANNING, "difficulty_ceiling": 1}]

    def test_unknown_category_and_zero_count(self):
        engine = _engine()
        assert isinstance(engine.create_session("Crypto", 3, 5), NoQuestionsAvailable)
        assert isinstance(engine.create_session(BASIC, 3, 0), NoQuestionsAvailable)

    def test_tier_from_ceiling_or_override(self):
        engine = _engine()
        assert engine.create_session(KIDS, 2, 1).tier.base_reward == 50
        custom = DifficultyTier(1, "Custom", 10, 5)
        assert engine.create_session(KIDS, 2, 1, tier=custom).tier is custom

    def test_ceiling_below_easiest_is_empty(self):
        outcome = _engine().create_session(BASIC, 0, 3)
        assert isinstance(outcome, NoQuestionsAvailable)
        assert outcome.difficulty_ceiling == 0

    def test_ceiling_above_hardest_uses_top_tier(self):
        """상한이 5를 넘으면 모든 문항 대상, 보상은 최고 티어"""
        engine = _engine()
        session = engine.create_session(CREDIT, 9, 10)
        assert session.total_questions == len(engine.bank.questions_for(CREDIT))
        assert session.tier.level == 5


class TestAnswer:
    def test_correct_answer_credits_ledger(self, quiz_engine, ledger):
        session = quiz_engine.create_session(BASIC, 1, 2)
        question = session.current_question

        result = quiz_engine.answer(session, question.correct_index)

        assert result.correct
        assert ledger.balance == 25
        tx = ledger.transactions[-1]
        assert tx.tx_type is TransactionType.QUIZ_CORRECT
        assert tx.description == f"Correct answer on Q1 ({question.category})"
        assert result.coins_delta == 25
        assert session.last_result is result

    def test_wrong_answer_debit_clamped(self, quiz_engine, ledger):
        session = quiz_engine.create_session(BASIC, 1, 2)
        question = session.current_question
        wrong = (question.correct_index + 1) % len(question.choices)

        result = quiz_engine.answer(session, wrong)

        assert not result.correct
        assert result.points_lost == 10
        assert result.coins_delta == 0
        assert ledger.balance == 0
        assert ledger.wrong_answers == 1

    def test_answer_without_session_raises(self, quiz_engine):
        with pytest.raises(QuizSessionNotFoundError):
            quiz_engine.answer(None, 0)

    def test_answer_after_complete_changes_nothing(self, quiz_engine, ledger):
        session = quiz_engine.create_session(KIDS, 1, 1)
        _answer_all(quiz_engine, session)
        count = len(ledger.transactions)

        assert quiz_engine.answer(session, 0) is None
        assert len(ledger.transactions) == count

    def test_answered_event(self, quiz_engine, event_bus):
        seen = []
        event_bus.subscribe(EventTypes.QUIZ_ANSWERED, lambda e: seen.append(e.data))
        session = quiz_engine.create_session(KIDS, 1, 2)
        _answer_all(quiz_engine, session)
        assert [d["question_number"] for d in seen] == [1, 2]
        assert all(d["correct"] for d in seen)


class TestFinish:
    def test_perfect_session_bonus_paid_once(self, quiz_engine, ledger):
        session = quiz_engine.create_session(KIDS, 1, 2)
        _answer_all(quiz_engine, session)

        first = quiz_engine.finish(session)
        second = quiz_engine.finish(session)

        assert first.completion_bonus == 50
        assert second.completion_bonus == 50
        assert ledger.count_by_type(TransactionType.QUIZ_BONUS) == 1
        assert ledger.balance == 25 + 25 + 50

    def test_poor_session_no_bonus(self, quiz_engine, ledger):
        session = quiz_engine.create_session(KIDS, 1, 2)
        _answer_all(quiz_engine, session, correct=False)
        summary = quiz_engine.finish(session)
        assert summary.completion_bonus == 0
        assert summary.grade == "F"
        assert ledger.count_by_type(TransactionType.QUIZ_BONUS) == 0

    def test_finish_partial_session(self, quiz_engine):
        """중간에 그만둬도 결과는 전체 문항 기준"""
        session = quiz_engine.create_session(BASIC, 2, 3)
        quiz_engine.answer(session, session.current_question.correct_index)
        summary = quiz_engine.finish(session)
        assert summary.total_questions == 3
        assert summary.correct_answers == 1
        assert summary.completion_bonus == 0

    def test_finish_without_session_raises(self, quiz_engine):
        with pytest.raises(QuizSessionNotFoundError):
            quiz_engine.finish(None)

    def test_completed_event(self, quiz_engine, event_bus):
        seen = []
        event_bus.subscribe(EventTypes.QUIZ_COMPLETED, lambda e: seen.append(e.data))
        session = quiz_engine.create_session(KIDS, 1, 1)
        _answer_all(quiz_engine, session)
        quiz_engine.finish(session)
        quiz_engine.finish(session)
        assert len(seen) == 1
        assert seen[0]["grade"] == "A+"

    def test_suggest_difficulty(self, quiz_engine):
        session = quiz_engine.create_session(KIDS, 1, 2)
        _answer_all(quiz_engine, session)
        assert quiz_engine.suggest_difficulty(session) == 2


class TestCustomBank:
    def test_engine_uses_injected_bank(self):
        question = QuizQuestion(
            prompt="Is a piggy bank for saving?",
            choices=("Yes", "No"),
            correct_index=0,
            explanation="Piggy banks hold savings.",
            category="Piggy",
            difficulty=1,
        )
        engine = _engine(bank=QuestionBank([question]))
        session = engine.create_session("Piggy", 1, 5)
        assert session.questions == [question]
