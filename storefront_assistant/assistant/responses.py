"""
Spoken response sentences for resolved actions.
"""

from storefront_assistant.assistant.actions import (
    Action,
    Greeting,
    ShowCart,
    SortAndFilter,
    SortKey,
    SortOrder,
    Unknown,
)

GREETING_RESPONSE = "Hello! How can I assist you today?"
UNKNOWN_RESPONSE = "I am not sure how to help with that request."
SHOW_CART_RESPONSE = "Opening your shopping cart."
FILTERING_RESPONSE = "Filtering products for you."


def _describe_sort_and_filter(action: SortAndFilter) -> str:
    descending = action.order == SortOrder.DESC

    if action.sort_by == SortKey.PRICE:
        return f"Sorting products by price {'high to low' if descending else 'low to high'}."
    if action.sort_by == SortKey.NAME:
        return f"Sorting products by name {'Z to A' if descending else 'A to Z'}."

    product_filter = action.filter
    if product_filter is not None:
        if product_filter.price_less_than is not None:
            return f"Showing items less than {product_filter.price_less_than} dollars."
        if product_filter.category:
            return f"Here are the {product_filter.category} you asked for."
        if product_filter.search_term:
            return f"Searching for {product_filter.search_term}."

    return FILTERING_RESPONSE


def describe(action: Action) -> str:
    """
    Map an action to the sentence the assistant speaks.

    Greeting and Unknown get fixed sentences; only ShowCart and
    SortAndFilter go through the templates.
    """
    if isinstance(action, Unknown):
        return UNKNOWN_RESPONSE
    if isinstance(action, Greeting):
        return GREETING_RESPONSE

    if isinstance(action, ShowCart):
        return SHOW_CART_RESPONSE
    if isinstance(action, SortAndFilter):
        return _describe_sort_and_filter(action)

    return UNKNOWN_RESPONSE
