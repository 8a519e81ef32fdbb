"""
Shopping assistant: intent classification, spoken responses, query handling.

Usage:
    from storefront_assistant import QueryHandler, SpeechEngine

    engine = SpeechEngine()
    engine.load_tts_backend("gtts")

    handler = QueryHandler(engine)
    result = await handler.handle("sort by price descending")
"""

from storefront_assistant.assistant.actions import (
    Action,
    ActionKind,
    AssistantResult,
    Greeting,
    ProductFilter,
    ShowCart,
    SortAndFilter,
    SortKey,
    SortOrder,
    Unknown,
    VoiceResult,
)
from storefront_assistant.assistant.classifier import classify
from storefront_assistant.assistant.commands import ASSISTANT_COMMANDS, list_commands
from storefront_assistant.assistant.handler import QueryHandler
from storefront_assistant.assistant.responses import describe

__all__ = [
    "Action",
    "ActionKind",
    "AssistantResult",
    "VoiceResult",
    "ShowCart",
    "SortAndFilter",
    "Greeting",
    "Unknown",
    "ProductFilter",
    "SortKey",
    "SortOrder",
    "classify",
    "describe",
    "QueryHandler",
    "ASSISTANT_COMMANDS",
    "list_commands",
]
