"""
Product listing state driven by assistant directives.
"""

from dataclasses import dataclass

from storefront_assistant.assistant.actions import ActionKind, AssistantResult

UNKNOWN_STATUS = "Sorry, I didn't understand that command"


@dataclass
class StorefrontViewState:
    """
    What the storefront page shows: cart drawer, sorting and filters.

    ``apply`` mutates the state from one assistant result and returns the
    status line displayed under the avatar.
    """

    cart_open: bool = False
    sort_by: str | None = None
    order: str | None = None
    max_price: int | None = None
    text_filter: str = ""  # category or search term, whichever came last
    status: str = ""

    def apply(self, result: AssistantResult) -> str:
        """Apply an assistant result and return the new status line."""
        params = result.params or {}
        status = f"Action: {result.action or ''}"

        if result.action == ActionKind.SHOW_CART.value:
            self.cart_open = True
            status = "Opening cart..."

        elif result.action == ActionKind.SORT_AND_FILTER.value:
            sort_by = params.get("sortBy")
            if sort_by in ("price", "name"):
                self.sort_by = sort_by
                self.order = params.get("order", "asc")
                status = f"Sorted by {sort_by}"

            product_filter = params.get("filter") or {}
            if product_filter.get("priceLessThan"):
                self.max_price = product_filter["priceLessThan"]
                status = f"Filtering products under ${self.max_price}"
            if product_filter.get("category"):
                self.text_filter = product_filter["category"]
                status = f"Filtering products: {self.text_filter}"
            if product_filter.get("searchTerm"):
                self.text_filter = product_filter["searchTerm"]
                status = f"Searching for: {self.text_filter}"

        elif result.action == ActionKind.UNKNOWN.value:
            status = UNKNOWN_STATUS

        elif result.action:
            status = f"Command received: {result.action}"

        self.status = status
        return status
