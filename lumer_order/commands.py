"""Typed commands the UI layer dispatches to the cart and workflows."""

from __future__ import annotations

from enum import Enum

from lumer_order.cart import CartStore
from lumer_order.data import requires_variant
from lumer_order.models import MenuItem
from lumer_order.variant_workflow import VariantSelectionWorkflow


class CartCommand(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    REMOVE = "remove"
    CLEAR = "clear"


class SelectionOutcome(str, Enum):
    ADDED = "added"
    VARIANT_REQUIRED = "variant_required"


def dispatch_cart_command(cart: CartStore, command: CartCommand, index: int | None = None) -> None:
    """Apply a cart row command; row commands without an index do nothing."""
    if command is CartCommand.CLEAR:
        cart.clear()
        return
    if index is None:
        return
    if command is CartCommand.INCREASE:
        cart.increase_quantity(index)
    elif command is CartCommand.DECREASE:
        cart.decrease_quantity(index)
    elif command is CartCommand.REMOVE:
        cart.remove_item(index)


def select_menu_item(
    item: MenuItem,
    cart: CartStore,
    variants: VariantSelectionWorkflow,
) -> SelectionOutcome:
    """Handle an item-selected event from the catalog."""
    if requires_variant(item.item_id):
        variants.open(item)
        return SelectionOutcome.VARIANT_REQUIRED
    cart.add_menu_item(item)
    return SelectionOutcome.ADDED
