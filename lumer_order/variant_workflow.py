"""Flavor/topping selection for catalog items that need customization."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from lumer_order.cart import CartStore
from lumer_order.data import VariantOptions, variant_options_for, variant_text
from lumer_order.debuglog import NULL_LOG, DebugLog
from lumer_order.errors import WorkflowStateError
from lumer_order.focus import FocusManager, FocusTrap
from lumer_order.models import CustomizedLineItem, MenuItem, Variant

QUANTITY_FIELD = "quantity"
CONFIRM_FIELD = "confirm"


class VariantState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


def flavor_field(flavor: str) -> str:
    return f"flavor:{flavor}"


def topping_field(topping: str) -> str:
    return f"topping:{topping}"


@dataclass
class VariantDraft:
    """In-progress customization of one catalog item."""

    item: MenuItem
    options: VariantOptions
    flavor: str
    toppings: set[str] = field(default_factory=set)
    quantity: int = 1

    def ordered_toppings(self) -> list[str]:
        """Selected toppings in the order the catalog lists them."""
        return [topping for topping in self.options.toppings if topping in self.toppings]

    def summary(self) -> str:
        return variant_text(self.flavor, self.ordered_toppings())


class VariantSelectionWorkflow:
    """Closed -> Open(draft) -> Closed; confirm commits one row to the cart."""

    def __init__(
        self,
        cart: CartStore,
        focus: FocusManager,
        *,
        options_for: Callable[[str], VariantOptions] = variant_options_for,
        log: DebugLog = NULL_LOG,
    ) -> None:
        self.cart = cart
        self.focus = focus
        self.options_for = options_for
        self.log = log
        self.state = VariantState.CLOSED
        self.draft: VariantDraft | None = None
        self.focus_trap: FocusTrap | None = None

    @property
    def is_open(self) -> bool:
        return self.state is VariantState.OPEN

    def open(self, item: MenuItem) -> VariantDraft:
        if self.state is not VariantState.CLOSED:
            raise WorkflowStateError("variant selection is already open")
        options = self.options_for(item.item_id)
        if not options.flavors:
            raise ValueError(f"{item.item_id} has no flavor options")

        fields = [flavor_field(f) for f in options.flavors]
        fields.extend(topping_field(t) for t in options.toppings)
        fields.extend([QUANTITY_FIELD, CONFIRM_FIELD])
        self.focus_trap = self.focus.acquire("variant", fields)

        self.draft = VariantDraft(item=item, options=options, flavor=options.flavors[0])
        self.state = VariantState.OPEN
        self.log.write(f"variant_open id={item.item_id}")
        return self.draft

    def set_flavor(self, flavor: str) -> None:
        draft = self._require_open()
        if flavor not in draft.options.flavors:
            raise ValueError(f"unknown flavor {flavor!r} for {draft.item.item_id}")
        draft.flavor = flavor

    def toggle_topping(self, topping: str) -> bool:
        """Flip a topping; returns whether it is now selected."""
        draft = self._require_open()
        if topping not in draft.options.toppings:
            raise ValueError(f"unknown topping {topping!r} for {draft.item.item_id}")
        if topping in draft.toppings:
            draft.toppings.remove(topping)
            return False
        draft.toppings.add(topping)
        return True

    def set_quantity(self, quantity: int) -> bool:
        """Set the draft quantity; values below 1 are rejected and return False."""
        draft = self._require_open()
        if quantity < 1:
            return False
        draft.quantity = quantity
        return True

    def increase_quantity(self) -> bool:
        return self.set_quantity(self._require_open().quantity + 1)

    def decrease_quantity(self) -> bool:
        return self.set_quantity(self._require_open().quantity - 1)

    def confirm(self) -> CustomizedLineItem:
        draft = self._require_open()
        line = CustomizedLineItem(
            item_id=draft.item.item_id,
            name=draft.item.name,
            image=draft.item.image,
            unit_price=draft.item.price,
            variant=Variant(flavor=draft.flavor, toppings=frozenset(draft.toppings)),
            variant_text=draft.summary(),
            quantity=draft.quantity,
        )
        try:
            self.cart.add_item(line, draft.quantity)
        finally:
            self._close()
        self.log.write(f"variant_confirm id={line.item_id} qty={line.quantity} variant={line.variant_text!r}")
        return line

    def cancel(self) -> None:
        if self.state is VariantState.CLOSED:
            return
        self.log.write("variant_cancel")
        self._close()

    def _require_open(self) -> VariantDraft:
        if self.state is not VariantState.OPEN or self.draft is None:
            raise WorkflowStateError("variant selection is not open")
        return self.draft

    def _close(self) -> None:
        if self.focus_trap is not None:
            self.focus_trap.release()
        self.focus_trap = None
        self.draft = None
        self.state = VariantState.CLOSED
