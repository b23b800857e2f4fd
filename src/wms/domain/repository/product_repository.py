"""Abstract repository for the Product catalog.

The order core uses it as its pricing collaborator: the price returned at
order-creation time is the one snapshotted into the order lines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its SKU, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
