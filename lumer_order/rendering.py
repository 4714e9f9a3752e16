"""Rich rendering helpers for catalog rows, cart rows and modal choices."""

from __future__ import annotations

from rich.text import Text

from lumer_order.data import category_label, format_rupiah, requires_variant
from lumer_order.models import CustomizedLineItem, LineItem, MenuItem


def badge_style(category: str) -> str:
    """Return a consistent badge style for catalog categories."""
    if category == "speciality":
        return "bold #ffffff on #b23a48"
    if category == "extra":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_menu_label(item: MenuItem) -> Text:
    """Render a catalog row: category tag, name, price."""
    text = Text()
    text.append(f" {category_label(item.category)} ", style=badge_style(item.category))
    text.append(f" {item.name}  ")
    text.append(format_rupiah(item.price), style="bold")
    if requires_variant(item.item_id):
        text.append("  (pilih rasa)", style="dim")
    return text


def format_line_item(item: LineItem) -> Text:
    """Render a cart row with its variant summary and line total."""
    text = Text()
    text.append(item.name, style="bold")
    if isinstance(item, CustomizedLineItem):
        text.append(f"\n      {item.variant_text}", style="italic #dddddd")
    text.append(
        f"\n      {item.quantity}x {format_rupiah(item.unit_price)} = {format_rupiah(item.line_total())}"
    )
    return text


def format_total(total: int, count: int) -> Text:
    text = Text()
    text.append("Total: ", style="bold")
    text.append(format_rupiah(total), style="bold #5fbf72")
    text.append(f"  ({count} item)", style="dim")
    return text


def format_choice(label: str, checked: bool, *, radio: bool = False, focused: bool = False) -> Text:
    """Render a radio `(•)` or checkbox `[x]` row with the focus pointer."""
    pointer = "➤ " if focused else "  "
    if radio:
        mark = "(•)" if checked else "( )"
    else:
        mark = "[x]" if checked else "[ ]"
    return Text(f"{pointer}{mark} {label}", style="bold white" if checked else "white")
