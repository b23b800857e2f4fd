"""Stock records and the inventory audit trail.

A ``StockRecord`` tracks how many units of one product can still be
reserved.  Its mutators are meant to be called by the InventoryLedger only,
while the ledger holds that product's lock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ValidationError

DEFAULT_MINIMUM_LEVEL = 10


@dataclass
class StockRecord:
    """Per-product stock level.

    Invariants:
    - ``available_quantity`` is never negative
    - ``minimum_level`` is a warning threshold only; it never blocks a change
    """

    product_id: str
    sku: str
    available_quantity: int = 0
    minimum_level: int = DEFAULT_MINIMUM_LEVEL

    def __post_init__(self) -> None:
        if self.available_quantity < 0:
            raise ValidationError(
                f"Stock for '{self.sku}' cannot be negative, got {self.available_quantity}"
            )

    @property
    def is_low_stock(self) -> bool:
        return self.available_quantity <= self.minimum_level

    def can_supply(self, quantity: int) -> bool:
        return quantity <= self.available_quantity

    def take(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.available_quantity:
            raise ValidationError(
                f"Cannot take {quantity} of '{self.sku}' "
                f"- only {self.available_quantity} available"
            )
        self.available_quantity -= quantity

    def put_back(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        self.available_quantity += quantity

    def adjust(self, delta: int) -> None:
        """Apply a signed manual correction (goods received, shrinkage, ...)."""
        new_quantity = self.available_quantity + delta
        if new_quantity < 0:
            raise ValidationError(
                f"Stock for '{self.sku}' cannot go negative "
                f"({self.available_quantity} {delta:+d})"
            )
        self.available_quantity = new_quantity


class TransactionType(Enum):
    RESERVED = "RESERVED"
    RELEASED = "RELEASED"
    ADJUSTMENT = "ADJUSTMENT"


@dataclass(frozen=True)
class InventoryTransaction:
    """One append-only audit entry for a stock movement."""

    type: TransactionType
    product_id: str
    quantity: int
    order_ref: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
