"""대화 엔진 Core 패키지"""

from coincraft.core.dialogue.effects import (
    AnswerQuiz,
    Effect,
    EffectHandler,
    FinishQuiz,
    LogMessage,
    LoggingEffectHandler,
    StartQuiz,
    TransferCoins,
    effect_from_dict,
    effect_to_dict,
)
from coincraft.core.dialogue.engine import DialogueEngine
from coincraft.core.dialogue.graph import DialogueGraph, DialogueGraphBuilder
from coincraft.core.dialogue.interpreter import GameEffectInterpreter
from coincraft.core.dialogue.models import DialogueNode, DialogueOption
from coincraft.core.dialogue.render import render_text
from coincraft.core.dialogue.stats import ConversationEntry, ConversationStats

__all__ = [
    "AnswerQuiz",
    "Effect",
    "EffectHandler",
    "FinishQuiz",
    "LogMessage",
    "LoggingEffectHandler",
    "StartQuiz",
    "TransferCoins",
    "effect_from_dict",
    "effect_to_dict",
    "DialogueEngine",
    "DialogueGraph",
    "DialogueGraphBuilder",
    "GameEffectInterpreter",
    "DialogueNode",
    "DialogueOption",
    "render_text",
    "ConversationEntry",
    "ConversationStats",
]
