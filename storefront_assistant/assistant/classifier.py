"""
Rule-based intent classifier.

Rules are evaluated in priority order and the first match wins. A query that
asks to sort and mentions both "price" and "name" sorts by price.
"""

import logging
import re

from storefront_assistant.assistant.actions import (
    Action,
    Greeting,
    ProductFilter,
    ShowCart,
    SortAndFilter,
    SortKey,
    SortOrder,
    Unknown,
)
from storefront_assistant.core.text import normalize

logger = logging.getLogger(__name__)

GREETING_WORDS = (
    "hello", "hi", "hey", "greetings", "good morning", "good afternoon",
    "good evening", "howdy", "yo", "sup", "good day",
)

_PRICE_LIMIT_RE = re.compile(r"less than (\d+)")
_SHOW_RE = re.compile(r"show (.+)")


def _order(q: str) -> SortOrder:
    return SortOrder.DESC if "desc" in q else SortOrder.ASC


def is_greeting(raw_query: str) -> bool:
    """Check the unstripped query for a greeting word or phrase."""
    lowered = raw_query.lower()
    return any(word in lowered for word in GREETING_WORDS)


def classify(raw_query: str) -> Action:
    """
    Resolve a raw query into exactly one action.

    Args:
        raw_query: Query as typed or transcribed

    Returns:
        The first matching action; Unknown when nothing matches
    """
    q = normalize(raw_query)
    logger.debug("Classifying %r (normalized %r)", raw_query, q)

    if "cart" in q:
        return ShowCart()

    if "sort" in q and "price" in q:
        return SortAndFilter(sort_by=SortKey.PRICE, order=_order(q))

    if "sort" in q and "name" in q:
        return SortAndFilter(sort_by=SortKey.NAME, order=_order(q))

    match = _PRICE_LIMIT_RE.search(q)
    if match:
        return SortAndFilter(filter=ProductFilter(price_less_than=int(match.group(1))))

    match = _SHOW_RE.search(q)
    if match and "cart" not in q:
        return SortAndFilter(filter=ProductFilter(category=match.group(1).strip()))

    # Greetings are matched on the raw query; stopword stripping could eat them
    if is_greeting(raw_query):
        return Greeting(query=raw_query)

    return Unknown(query=raw_query)
