"""Application service: Add Product use case.

Creates the catalog entry and opens its stock record through the ledger,
so the product can be ordered immediately.
"""

from __future__ import annotations

from wms.domain.exceptions import ValidationError
from wms.domain.model.product import Product
from wms.domain.model.value_objects import Money
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.service.inventory_ledger import InventoryLedger


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, ledger: InventoryLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        sku: str,
        name: str,
        price: str,
        quantity: int = 0,
        minimum_level: int | None = None,
    ) -> Product:
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if quantity < 0:
            raise ValidationError("Opening stock cannot be negative")

        if self._product_repo.get_by_sku(sku) is not None:
            raise ValidationError(f"Product with SKU '{sku}' already exists")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(id=next_id, sku=sku.strip(), name=name.strip(), price=money)
        self._product_repo.save(product)
        self._ledger.open_stock(
            product.id, product.sku, quantity=quantity, minimum_level=minimum_level
        )
        return product
