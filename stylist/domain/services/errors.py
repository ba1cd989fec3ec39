class InsufficientInventory(Exception):
    """
    Raised by the outfit engine when fewer than MIN_OUTFIT_PRODUCTS products
    survive occasion filtering. The only outfit failure surfaced to shoppers.
    """

    def __init__(self, occasion: str, available: int):
        self.occasion = occasion
        self.available = available
        super().__init__(
            f"Not enough products to create {occasion} outfits "
            f"({available} qualifying); try a different occasion"
        )


class CompletionError(Exception):
    """Any failure of the text-completion collaborator (transport, timeout, empty reply)."""


class CatalogUnavailable(Exception):
    """The product catalog backend is not configured or not connected."""
