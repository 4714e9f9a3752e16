"""Domain models for lumer-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry."""

    item_id: str
    name: str
    price: int
    image: str
    category: str
    description: str = ""


@dataclass(frozen=True)
class Variant:
    """Flavor and topping choice for a customizable item."""

    flavor: str
    toppings: frozenset[str] = field(default_factory=frozenset)

    def signature(self) -> tuple[str, tuple[str, ...]]:
        return (self.flavor, tuple(sorted(self.toppings)))


@dataclass
class PlainLineItem:
    """A cart row for a catalog item without customization."""

    item_id: str
    name: str
    image: str
    unit_price: int
    quantity: int = 1

    def dedup_key(self) -> tuple[str, None]:
        return (self.item_id, None)

    def line_total(self) -> int:
        return self.unit_price * self.quantity

    @classmethod
    def from_menu_item(cls, item: MenuItem) -> PlainLineItem:
        return cls(item_id=item.item_id, name=item.name, image=item.image, unit_price=item.price)


@dataclass
class CustomizedLineItem:
    """A cart row carrying a flavor/topping variant."""

    item_id: str
    name: str
    image: str
    unit_price: int
    variant: Variant
    variant_text: str
    quantity: int = 1

    def dedup_key(self) -> tuple[str, tuple[str, tuple[str, ...]]]:
        return (self.item_id, self.variant.signature())

    def line_total(self) -> int:
        return self.unit_price * self.quantity


LineItem = PlainLineItem | CustomizedLineItem

# (message, severity) sink for user-facing notifications.
Notifier = Callable[[str, str], None]


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"

    @property
    def label(self) -> str:
        if self is PaymentMethod.CASH:
            return "Cash (Bayar di Tempat)"
        return "Transfer Bank BCA"


@dataclass(frozen=True)
class CustomerInfo:
    """Validated checkout data. Sender fields are set only for transfers."""

    name: str
    phone: str
    address: str
    payment_method: PaymentMethod
    sender_bank: str | None = None
    sender_account: str | None = None
