"""Identity of a cart line."""

from typing import NamedTuple, Optional


class LineKey(NamedTuple):
    """A cart line's key: a product plus an optional variant.

    ``variant_id=None`` means "the product without a variant" and only ever
    matches lines that have no variant.
    """

    product_id: int
    variant_id: Optional[int] = None

    def lookup(self) -> dict:
        """ORM filter kwargs selecting exactly this line."""
        if self.variant_id is None:
            return {"product_id": self.product_id, "variant__isnull": True}
        return {"product_id": self.product_id, "variant_id": self.variant_id}

    def as_session_key(self) -> str:
        return f"{self.product_id}:{'' if self.variant_id is None else self.variant_id}"

    @classmethod
    def from_session_key(cls, raw: str) -> "LineKey":
        product, _, variant = raw.partition(":")
        return cls(int(product), int(variant) if variant else None)
