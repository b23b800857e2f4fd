"""Product aggregate — the catalog side of a product.

Carries identity and the *current* price. Stock levels are deliberately not
here: they live on ``StockRecord`` and only the InventoryLedger changes them.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ValidationError
from wms.domain.model.value_objects import Money


@dataclass
class Product:

    id: str
    sku: str
    name: str
    price: Money

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing orders are unaffected; their lines hold a price snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
