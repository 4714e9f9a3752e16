"""Static catalog data and money formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from lumer_order.constant import CATEGORY_LABELS, MENU_ROWS, VARIANT_OPTIONS_BY_ITEM
from lumer_order.models import MenuItem


@dataclass(frozen=True)
class VariantOptions:
    """Flavor and topping choices offered for one catalog item."""

    flavors: tuple[str, ...]
    toppings: tuple[str, ...]


MENU_ITEMS: list[MenuItem] = [
    MenuItem(
        item_id=str(row["id"]),
        name=str(row["name"]),
        price=int(row["price"]),
        image=str(row["image"]),
        category=str(row["category"]),
        description=str(row.get("description", "")),
    )
    for row in MENU_ROWS
]

MENU_BY_ID: dict[str, MenuItem] = {item.item_id: item for item in MENU_ITEMS}

VARIANT_OPTIONS: dict[str, VariantOptions] = {
    item_id: VariantOptions(flavors=tuple(options["flavors"]), toppings=tuple(options["toppings"]))
    for item_id, options in VARIANT_OPTIONS_BY_ITEM.items()
}


def requires_variant(item_id: str) -> bool:
    """Whether a catalog item has to be customized before it is added."""
    return item_id in VARIANT_OPTIONS


def variant_options_for(item_id: str) -> VariantOptions:
    """Get variant options for an item, KeyError when it has none."""
    return VARIANT_OPTIONS[item_id]


def variant_text(flavor: str, toppings: Iterable[str]) -> str:
    """Human-readable variant summary, e.g. `Rasa: Matcha, Topping: Oreo, Keju`."""
    text = f"Rasa: {flavor}"
    topping_list = list(toppings)
    if topping_list:
        text += f", Topping: {', '.join(topping_list)}"
    return text


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category.title())


def format_rupiah(amount: int) -> str:
    """Format an integer rupiah amount as `Rp\u00a012.000` (no-break space, as id-ID currency formatting does)."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}Rp\u00a0{grouped}"
