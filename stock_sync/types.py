"""Type definitions for the stock synchronizer.

Branded types (NewType) keep WooCommerce ids and supplier URLs from being
mixed up with plain ints and strings.
"""

from dataclasses import dataclass, field
from typing import Literal, NewType

# Branded types for type safety
ProductId = NewType("ProductId", int)
SupplierUrl = NewType("SupplierUrl", str)


StockStatus = Literal["instock", "outofstock"]
ItemOutcome = Literal["updated", "skipped", "failed"]


def stock_status_for(quantity: int) -> StockStatus:
    """Derive the WooCommerce stock status from a quantity (pure function).

    Args:
        quantity: Non-negative stock quantity

    Returns:
        "instock" if quantity > 0, otherwise "outofstock"

    Raises:
        ValueError: If quantity is negative

    Examples:
        >>> stock_status_for(109)
        'instock'
        >>> stock_status_for(0)
        'outofstock'
    """
    if quantity < 0:
        raise ValueError(f"Stock quantity cannot be negative: {quantity}")
    return "instock" if quantity > 0 else "outofstock"


@dataclass(frozen=True)
class ProductRef:
    """A catalog product that points at a supplier page."""

    id: ProductId
    source_url: SupplierUrl


@dataclass
class ItemResult:
    """Outcome of syncing a single product."""

    product: ProductRef
    outcome: ItemOutcome
    quantity: int | None = None
    error: str | None = None


@dataclass
class SyncReport:
    """Ordered per-product results of one run."""

    results: list[ItemResult] = field(default_factory=list)

    def add(self, result: ItemResult) -> None:
        self.results.append(result)

    @property
    def updated(self) -> list[ItemResult]:
        return [r for r in self.results if r.outcome == "updated"]

    @property
    def skipped(self) -> list[ItemResult]:
        return [r for r in self.results if r.outcome == "skipped"]

    @property
    def failed(self) -> list[ItemResult]:
        return [r for r in self.results if r.outcome == "failed"]

    def summary(self) -> str:
        return (
            f"{len(self.results)} products: {len(self.updated)} updated, "
            f"{len(self.skipped)} skipped, {len(self.failed)} failed"
        )
