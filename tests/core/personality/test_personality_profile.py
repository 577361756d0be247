"""PersonalityProfile 테스트"""

import pytest

from coincraft.core.personality import (
    PRESETS,
    RECENT_WINDOW,
    Mood,
    PersonalityProfile,
    PersonalityType,
)


def _profile(kind: PersonalityType = PersonalityType.WISE) -> PersonalityProfile:
    return PersonalityProfile.for_type(kind)


class TestPresets:
    @pytest.mark.parametrize("kind", list(PersonalityType))
    def test_every_type_has_preset(self, kind):
        profile = _profile(kind)
        assert profile.mood is Mood.NEUTRAL
        assert profile.favorite_topics
        assert len(profile.conversation_tips()) == 3

    def test_preset_values_copied(self):
        profile = _profile(PersonalityType.ADVENTUROUS)
        profile.topic_preferences["risk"] = 0.0
        assert PRESETS[PersonalityType.ADVENTUROUS].topic_preferences["risk"] == 0.8
        assert profile.patience == pytest.approx(0.6)
        assert profile.enthusiasm == pytest.approx(0.9)


class TestRecordOutcome:
    def test_success_rate_defaults_to_half(self):
        profile = _profile()
        assert profile.success_rate == 0.5
        assert profile.recent_success_rate == 0.5

    def test_preference_moves_and_clamps(self):
        profile = _profile()
        profile.record_outcome("saving", True)
        assert profile.topic_preferences["saving"] == pytest.approx(0.6)
        profile.record_outcome("saving", False)
        assert profile.topic_preferences["saving"] == pytest.approx(0.55)

        for _ in range(10):
            profile.record_outcome("education", True)
        assert profile.topic_preferences["education"] == 1.0

        for _ in range(30):
            profile.record_outcome("debt", False)
        assert profile.topic_preferences["debt"] == 0.0

    @pytest.mark.parametrize(
        "outcomes, mood",
        [
            ([True] * 5, Mood.EXCITED),
            ([True, True, True, False], Mood.HAPPY),
            ([True, False], Mood.CONTENT),
            ([True, False, False], Mood.CONCERNED),
            ([False, False], Mood.FRUSTRATED),
        ],
    )
    def test_mood_from_recent_rate(self, outcomes, mood):
        profile = _profile()
        for correct in outcomes:
            profile.record_outcome("saving", correct)
        assert profile.mood is mood

    def test_mood_uses_last_ten_only(self):
        profile = _profile()
        for _ in range(20):
            profile.record_outcome("saving", False)
        for _ in range(RECENT_WINDOW):
            profile.record_outcome("saving", True)
        assert profile.mood is Mood.EXCITED
        assert profile.success_rate == pytest.approx(1 / 3)

    def test_patience_and_enthusiasm_bounds(self):
        profile = _profile()
        for _ in range(20):
            profile.record_outcome("saving", False)
        assert profile.patience == pytest.approx(0.1)
        assert profile.enthusiasm == pytest.approx(0.1)
        for _ in range(20):
            profile.record_outcome("saving", True)
        assert profile.patience == pytest.approx(1.0)
        assert profile.enthusiasm == pytest.approx(1.0)

    def test_topic_interaction_count(self):
        profile = _profile()
        profile.record_outcome("saving", True)
        profile.record_outcome("saving", False)
        assert profile.topic_interaction_count("saving") == 2
        assert profile.topic_interaction_count("credit") == 0


class TestText:
    def test_greeting_is_deterministic(self):
        a, b = _profile(), _profile()
        for profile in (a, b):
            for correct in (True, True, False):
                profile.record_outcome("saving", correct)
        assert a.describe_greeting() == b.describe_greeting()
        assert a.describe_greeting() == a.describe_greeting()

    def test_greeting_reflects_type_and_mood(self):
        profile = _profile(PersonalityType.BUSINESS)
        assert profile.describe_greeting() == (
            "Good to see you, potential partner. How may I assist you?"
        )
        profile.record_outcome("analysis", True)
        assert profile.describe_greeting().endswith("I'm absolutely thrilled to see you!")

    def test_topic_reaction(self):
        profile = _profile(PersonalityType.WISE)
        profile.record_outcome("education", True)
        text = profile.describe_topic("education", True)
        assert text.startswith("Excellent work on education!")
        assert "favorite subjects to teach" in text
        assert text.endswith("This is fantastic!")

    def test_disliked_topic_reaction(self):
        profile = _profile(PersonalityType.ADVENTUROUS)
        for _ in range(5):
            profile.record_outcome("taxes", False)
        text = profile.describe_topic("taxes", False)
        assert "isn't my favorite" in text
        assert text.endswith("This is concerning.")


class TestAdaptiveDifficulty:
    @pytest.mark.parametrize(
        "kind, base",
        [
            (PersonalityType.ADVENTUROUS, 2),
            (PersonalityType.WISE, 1),
            (PersonalityType.BUSINESS, 2),
            (PersonalityType.FRIENDLY, 1),
            (PersonalityType.MYSTERIOUS, 3),
        ],
    )
    def test_base_by_type(self, kind, base):
        assert _profile(kind).adaptive_difficulty() == base

    def test_adjusts_with_performance(self):
        strong = _profile(PersonalityType.MYSTERIOUS)
        for _ in range(5):
            strong.record_outcome("puzzles", True)
        assert strong.adaptive_difficulty() == 4

        weak = _profile(PersonalityType.WISE)
        for _ in range(5):
            weak.record_outcome("puzzles", False)
        assert weak.adaptive_difficulty() == 1
