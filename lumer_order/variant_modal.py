"""Flavor/topping selection modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Click, Key
from textual.screen import ModalScreen
from textual.widgets import Static

from lumer_order.data import format_rupiah
from lumer_order.models import CustomizedLineItem
from lumer_order.rendering import format_choice
from lumer_order.variant_workflow import (
    CONFIRM_FIELD,
    QUANTITY_FIELD,
    VariantSelectionWorkflow,
    flavor_field,
    topping_field,
)


class VariantModal(ModalScreen[None]):
    """Centered modal that drives the variant workflow for one catalog item."""

    CSS = """
    VariantModal {
        align: center middle;
        background: $background 60%;
    }

    #variant-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #variant-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #variant-body {
        margin-bottom: 1;
        color: white;
    }

    #variant-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(
        self,
        workflow: VariantSelectionWorkflow,
        on_done: Callable[[CustomizedLineItem | None], None],
    ) -> None:
        super().__init__()
        self.workflow = workflow
        self.on_done = on_done

    def compose(self) -> ComposeResult:
        with Container(id="variant-dialog"):
            yield Static("Pilih Varian", id="variant-title")
            yield Static(id="variant-body")
            yield Static(
                "Tab/↑/↓ pindah, Enter pilih, +/- jumlah, Esc batal",
                id="variant-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        # The modal owns every key while open.
        event.stop()
        trap = self.workflow.focus_trap
        if trap is None:
            return

        if event.key == "escape":
            self.action_cancel()
            return

        if event.key in {"tab", "down"}:
            trap.cycle(1)
        elif event.key in {"shift+tab", "up"}:
            trap.cycle(-1)
        elif event.key in {"enter", "space"}:
            if trap.focused == CONFIRM_FIELD:
                self.action_confirm()
                return
            self._activate_focused()
        elif event.character == "+":
            self.workflow.increase_quantity()
        elif event.character == "-":
            self.workflow.decrease_quantity()
        else:
            return
        self._refresh_content()

    def on_click(self, event: Click) -> None:
        if event.widget is self:
            self.action_cancel()

    def action_confirm(self) -> None:
        line = self.workflow.confirm()
        self.dismiss()
        self.on_done(line)

    def action_cancel(self) -> None:
        self.workflow.cancel()
        self.dismiss()
        self.on_done(None)

    def _activate_focused(self) -> None:
        trap = self.workflow.focus_trap
        if trap is None or trap.focused is None:
            return
        kind, _, value = trap.focused.partition(":")
        if kind == "flavor":
            self.workflow.set_flavor(value)
        elif kind == "topping":
            self.workflow.toggle_topping(value)

    def _refresh_content(self) -> None:
        draft = self.workflow.draft
        trap = self.workflow.focus_trap
        if draft is None or trap is None:
            return
        body = self.query_one("#variant-body", Static)

        content = Text(style="white")
        content.append(draft.item.name, style="bold")
        content.append(f"  {format_rupiah(draft.item.price)}\n\n")

        content.append("Rasa\n", style="underline")
        for flavor in draft.options.flavors:
            focused = trap.focused == flavor_field(flavor)
            content.append_text(format_choice(flavor, flavor == draft.flavor, radio=True, focused=focused))
            content.append("\n")

        content.append("\nTopping\n", style="underline")
        for topping in draft.options.toppings:
            focused = trap.focused == topping_field(topping)
            content.append_text(format_choice(topping, topping in draft.toppings, focused=focused))
            content.append("\n")

        pointer = "➤ " if trap.focused == QUANTITY_FIELD else "  "
        content.append(f"\n{pointer}Jumlah: - {draft.quantity} +\n")
        pointer = "➤ " if trap.focused == CONFIRM_FIELD else "  "
        subtotal = format_rupiah(draft.item.price * draft.quantity)
        content.append(f"{pointer}[ Tambah ke Keranjang · {subtotal} ]", style="bold")

        body.update(content)
