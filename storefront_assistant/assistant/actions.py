"""
Assistant actions and the wire-level result.

An action is one of ShowCart, SortAndFilter, Greeting or Unknown. Each one
serializes to the ``{"action": ..., "params": ...}`` shape the storefront
client consumes; params that the matched rule did not set are omitted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ActionKind(str, Enum):
    """Action tags as they appear on the wire."""

    SHOW_CART = "show_cart"
    SORT_AND_FILTER = "sort_and_filter"
    GREETING = "greeting"
    UNKNOWN = "unknown"


class SortKey(str, Enum):
    NAME = "name"
    PRICE = "price"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ProductFilter:
    """Product listing filter directive."""

    category: str | None = None
    price_less_than: int | None = None
    search_term: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire dictionary, omitting unset fields."""
        data: dict[str, Any] = {}
        if self.category is not None:
            data["category"] = self.category
        if self.price_less_than is not None:
            data["priceLessThan"] = self.price_less_than
        if self.search_term is not None:
            data["searchTerm"] = self.search_term
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductFilter":
        return cls(
            category=data.get("category"),
            price_less_than=data.get("priceLessThan"),
            search_term=data.get("searchTerm"),
        )


@dataclass(frozen=True)
class ShowCart:
    """Open the shopping cart."""

    kind = ActionKind.SHOW_CART

    def params(self) -> dict[str, Any] | None:
        return None


@dataclass(frozen=True)
class SortAndFilter:
    """Sort and/or filter the product listing."""

    sort_by: SortKey | None = None
    order: SortOrder | None = None
    filter: ProductFilter | None = None

    kind = ActionKind.SORT_AND_FILTER

    def params(self) -> dict[str, Any] | None:
        data: dict[str, Any] = {}
        if self.sort_by is not None:
            data["sortBy"] = self.sort_by.value
        if self.order is not None:
            data["order"] = self.order.value
        if self.filter is not None:
            data["filter"] = self.filter.to_dict()
        return data


@dataclass(frozen=True)
class Greeting:
    """Shopper said hello."""

    query: str

    kind = ActionKind.GREETING

    def params(self) -> dict[str, Any] | None:
        return {"query": self.query}


@dataclass(frozen=True)
class Unknown:
    """Nothing matched."""

    query: str

    kind = ActionKind.UNKNOWN

    def params(self) -> dict[str, Any] | None:
        return {"query": self.query}


Action = Union[ShowCart, SortAndFilter, Greeting, Unknown]


def action_to_dict(action: Action) -> dict[str, Any]:
    """Convert an action to its wire dictionary."""
    data: dict[str, Any] = {"action": action.kind.value}
    params = action.params()
    if params is not None:
        data["params"] = params
    return data


def action_from_dict(data: dict[str, Any]) -> Action:
    """
    Rebuild an action from its wire dictionary.

    Raises:
        ValueError: If the action tag is not recognized
    """
    kind = data.get("action")
    params = data.get("params") or {}

    if kind == ActionKind.SHOW_CART.value:
        return ShowCart()
    if kind == ActionKind.SORT_AND_FILTER.value:
        sort_by = params.get("sortBy")
        order = params.get("order")
        filter_data = params.get("filter")
        return SortAndFilter(
            sort_by=SortKey(sort_by) if sort_by else None,
            order=SortOrder(order) if order else None,
            filter=ProductFilter.from_dict(filter_data) if filter_data is not None else None,
        )
    if kind == ActionKind.GREETING.value:
        return Greeting(query=params.get("query", ""))
    if kind == ActionKind.UNKNOWN.value:
        return Unknown(query=params.get("query", ""))

    raise ValueError(f"Unknown action '{kind}'")


@dataclass
class AssistantResult:
    """Result of one assistant query, as returned to the client."""

    action: str | None
    response_text: str = ""
    audio: str = ""  # data URI, or "" when synthesis failed
    params: dict[str, Any] | None = None
    error: str | None = None

    @property
    def has_audio(self) -> bool:
        return self.audio.startswith("data:audio")

    @classmethod
    def from_action(cls, action: Action, response_text: str, audio: str) -> "AssistantResult":
        return cls(
            action=action.kind.value,
            params=action.params(),
            response_text=response_text,
            audio=audio,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire dictionary."""
        data: dict[str, Any] = {"action": self.action}
        if self.params is not None:
            data["params"] = self.params
        data["responseText"] = self.response_text
        data["audio"] = self.audio
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssistantResult":
        return cls(
            action=data.get("action"),
            params=data.get("params"),
            response_text=data.get("responseText", ""),
            audio=data.get("audio") or "",
            error=data.get("error"),
        )


@dataclass
class VoiceResult:
    """Result of a spoken query: the transcript and, if recognized, the assistant result."""

    text: str
    confidence: float | None = None
    result: AssistantResult | None = None
    error: str | None = None

    @property
    def recognized(self) -> bool:
        return self.error is None and bool(self.text)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text}
        if self.confidence is not None:
            data["confidence"] = self.confidence
        if self.result is not None:
            data["response"] = self.result.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data
