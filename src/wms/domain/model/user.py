"""User aggregate — customers who place orders and staff who process them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "ADMIN"
    WAREHOUSE_MANAGER = "WAREHOUSE_MANAGER"
    WAREHOUSE_OPERATOR = "WAREHOUSE_OPERATOR"
    CUSTOMER = "CUSTOMER"


@dataclass
class User:
    """A person known to the warehouse.

    The address fields are the customer's defaults; an order created without
    explicit shipping details ships there.
    """

    id: str
    full_name: str
    email: str
    role: Role = Role.CUSTOMER
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
