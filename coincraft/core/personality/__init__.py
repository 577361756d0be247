"""NPC 성격/적응 모델"""

from coincraft.core.personality.models import Mood, PersonalityType
from coincraft.core.personality.profile import (
    PRESETS,
    RECENT_WINDOW,
    PersonalityPreset,
    PersonalityProfile,
)

__all__ = [
    "Mood",
    "PersonalityType",
    "PersonalityPreset",
    "PersonalityProfile",
    "PRESETS",
    "RECENT_WINDOW",
]
