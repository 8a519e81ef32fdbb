"""
Catalog of supported assistant commands and their metadata.
"""

from dataclasses import dataclass, field
from typing import Any

from storefront_assistant.assistant.actions import ActionKind


@dataclass(frozen=True)
class AssistantCommand:
    """A command the assistant can emit."""

    action: ActionKind
    description: str
    params: tuple[str, ...] = field(default_factory=tuple)
    examples: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "description": self.description,
            "params": list(self.params),
            "examples": list(self.examples),
        }


ASSISTANT_COMMANDS: tuple[AssistantCommand, ...] = (
    AssistantCommand(
        action=ActionKind.SHOW_CART,
        description="Show the user's shopping cart",
        examples=("open my cart", "what's in the cart?"),
    ),
    AssistantCommand(
        action=ActionKind.SORT_AND_FILTER,
        description="Sort and/or filter products",
        params=("sortBy", "order", "filter"),
        examples=(
            "sort by price descending",
            "sort by name",
            "show me items less than 50 dollars",
            "show refrigerators",
        ),
    ),
    AssistantCommand(
        action=ActionKind.GREETING,
        description="Greet the shopper",
        params=("query",),
        examples=("hello there", "good morning"),
    ),
    AssistantCommand(
        action=ActionKind.UNKNOWN,
        description="Unknown or unsupported command",
        params=("query",),
    ),
)


def list_commands() -> list[dict[str, Any]]:
    """List supported commands as dictionaries."""
    return [cmd.to_dict() for cmd in ASSISTANT_COMMANDS]
