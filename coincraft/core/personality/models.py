"""NPC 성격/기분 열거형"""

from enum import Enum


class PersonalityType(str, Enum):
    ADVENTUROUS = "adventurous"
    WISE = "wise"
    BUSINESS = "business"
    FRIENDLY = "friendly"
    MYSTERIOUS = "mysterious"


class Mood(str, Enum):
    EXCITED = "excited"
    HAPPY = "happy"
    CONTENT = "content"
    NEUTRAL = "neutral"
    CONCERNED = "concerned"
    FRUSTRATED = "frustrated"
