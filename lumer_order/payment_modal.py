"""Checkout modal screen and the post-transfer instruction overlay."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Click, Key
from textual.screen import ModalScreen
from textual.widgets import Static

from lumer_order.config import DEST_ACCOUNT_HOLDER, DEST_ACCOUNT_NUMBER, DEST_BANK
from lumer_order.constant import TRANSFER_INSTRUCTION_ACK, TRANSFER_INSTRUCTION_STEPS, TRANSFER_INSTRUCTION_TITLE
from lumer_order.data import format_rupiah
from lumer_order.errors import CheckoutValidationError, HandoffError
from lumer_order.models import CustomizedLineItem, PaymentMethod
from lumer_order.order_message import OrderMessage
from lumer_order.payment_workflow import (
    ADDRESS_FIELD,
    METHOD_FIELD,
    NAME_FIELD,
    PHONE_FIELD,
    SENDER_ACCOUNT_FIELD,
    SENDER_BANK_FIELD,
    PaymentWorkflow,
)
from lumer_order.rendering import format_choice

FIELD_LABELS: dict[str, str] = {
    NAME_FIELD: "Nama",
    PHONE_FIELD: "No. Telepon",
    ADDRESS_FIELD: "Alamat",
    SENDER_BANK_FIELD: "Bank Pengirim",
    SENDER_ACCOUNT_FIELD: "No. Rekening Pengirim",
}


class PaymentModal(ModalScreen[None]):
    """Collect customer data and the payment method, then confirm the order."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-summary {
        border: tall $surface;
        padding: 0 1;
        margin-bottom: 1;
        color: white;
    }

    #payment-body {
        color: white;
        margin-bottom: 1;
    }

    #payment-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(
        self,
        workflow: PaymentWorkflow,
        on_confirmed: Callable[[OrderMessage, PaymentMethod], None],
    ) -> None:
        super().__init__()
        self.workflow = workflow
        self.on_confirmed = on_confirmed
        self.error = ""
        self.invalid_field: str | None = None

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Checkout", id="payment-title")
            yield Static(id="payment-summary")
            yield Static(id="payment-body")
            yield Static(id="payment-error")
            yield Static(id="payment-help")

    def on_mount(self) -> None:
        self._refresh_summary()
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        trap = self.workflow.focus_trap
        if trap is None:
            return

        if event.key == "escape":
            self.action_close()
            return

        if event.key == "enter":
            self.action_confirm()
            return

        if event.key in {"tab", "down"}:
            trap.cycle(1)
        elif event.key in {"shift+tab", "up"}:
            trap.cycle(-1)
        elif trap.focused == METHOD_FIELD:
            self._handle_method_key(event)
        elif trap.focused is not None:
            self._handle_text_key(trap.focused, event)
        self._refresh_content()

    def on_click(self, event: Click) -> None:
        if event.widget is self:
            self.action_close()

    def action_close(self) -> None:
        self.workflow.close()
        self.dismiss()

    def action_confirm(self) -> None:
        method = self.workflow.method
        try:
            message = self.workflow.confirm()
        except CheckoutValidationError as exc:
            self.error = exc.message
            self.invalid_field = exc.field
            self.app.notify(exc.message, severity="error")
            self._refresh_content()
            return
        except HandoffError as exc:
            self.error = str(exc)
            self.invalid_field = None
            self.app.notify(f"Gagal membuka WhatsApp: {exc}", severity="error")
            self._refresh_content()
            return

        self.dismiss()
        if method is not None:
            self.on_confirmed(message, method)

    def _handle_method_key(self, event: Key) -> None:
        if event.key == "left" or event.character in {"c", "C", "1"}:
            self._select(PaymentMethod.CASH)
        elif event.key == "right" or event.character in {"t", "T", "2"}:
            self._select(PaymentMethod.TRANSFER)
        elif event.character in {"y", "Y"} and self.workflow.method is PaymentMethod.TRANSFER:
            self.workflow.copy_account_number()

    def _select(self, method: PaymentMethod) -> None:
        self.workflow.select_method(method)
        if self.invalid_field == METHOD_FIELD:
            self.error = ""
            self.invalid_field = None

    def _handle_text_key(self, field: str, event: Key) -> None:
        value = self.workflow.form.get(field)
        if event.key == "backspace":
            value = value[:-1]
        elif event.is_printable and event.character:
            value += event.character
        else:
            return
        self.workflow.update_field(field, value)
        if self.invalid_field == field:
            self.error = ""
            self.invalid_field = None

    def _refresh_summary(self) -> None:
        summary = self.workflow.summary
        if summary is None:
            return
        content = Text(style="white")
        for idx, item in enumerate(summary.items):
            if idx > 0:
                content.append("\n")
            content.append(f"{item.quantity}x {item.name}  ")
            content.append(format_rupiah(item.line_total()), style="bold")
            if isinstance(item, CustomizedLineItem):
                content.append(f"\n   {item.variant_text}", style="italic #dddddd")
        content.append("\nTotal: ", style="bold")
        content.append(format_rupiah(summary.total), style="bold #5fbf72")
        self.query_one("#payment-summary", Static).update(content)

    def _refresh_content(self) -> None:
        trap = self.workflow.focus_trap
        if trap is None:
            return
        method = self.workflow.method

        content = Text(style="white")
        content.append("Metode Pembayaran\n", style="underline")
        method_focused = trap.focused == METHOD_FIELD
        content.append_text(
            format_choice(PaymentMethod.CASH.label, method is PaymentMethod.CASH, radio=True, focused=method_focused)
        )
        content.append("   ")
        content.append_text(format_choice(PaymentMethod.TRANSFER.label, method is PaymentMethod.TRANSFER, radio=True))
        if self.invalid_field == METHOD_FIELD:
            content.append("  ←", style="bold #ffb3b3")
        content.append("\n")

        if method is PaymentMethod.TRANSFER:
            content.append(f"\nTransfer ke {DEST_BANK} {DEST_ACCOUNT_NUMBER} a/n {DEST_ACCOUNT_HOLDER}\n", style="#dddddd")

        if method is not None:
            content.append("\n")
            for field in trap.fields:
                if field == METHOD_FIELD:
                    continue
                pointer = "➤ " if trap.focused == field else "  "
                cursor = "|" if trap.focused == field else ""
                style = "bold #ffb3b3" if self.invalid_field == field else "white"
                content.append(f"{pointer}{FIELD_LABELS[field]}: ", style=style)
                content.append(f"{self.workflow.form.get(field)}{cursor}\n")

        self.query_one("#payment-body", Static).update(content)
        self.query_one("#payment-error", Static).update(self.error)

        if method is None:
            help_text = "←/→ atau C/T pilih metode, Esc batal"
        elif method is PaymentMethod.TRANSFER:
            help_text = "Tab pindah kolom, Y salin no. rekening, Enter konfirmasi, Esc batal"
        else:
            help_text = "Tab pindah kolom, Enter konfirmasi, Esc batal"
        self.query_one("#payment-help", Static).update(help_text)


class InstructionModal(ModalScreen[None]):
    """Bank-transfer proof submission steps, shown after the handoff."""

    CSS = """
    InstructionModal {
        align: center middle;
        background: $background 60%;
    }

    #instruction-dialog {
        width: 64;
        height: auto;
        border: round $success;
        background: $panel;
        padding: 1 2;
    }

    #instruction-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #instruction-ack {
        margin-top: 1;
        text-style: bold;
        color: white;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="instruction-dialog"):
            yield Static(TRANSFER_INSTRUCTION_TITLE, id="instruction-title")
            steps = Text(style="white")
            for idx, step in enumerate(TRANSFER_INSTRUCTION_STEPS, start=1):
                if idx > 1:
                    steps.append("\n\n")
                steps.append(f"{idx}. ", style="bold")
                steps.append(step)
            yield Static(steps, id="instruction-body")
            yield Static(f"[ {TRANSFER_INSTRUCTION_ACK} ]  (Enter)", id="instruction-ack")

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"enter", "escape", "space"}:
            self.dismiss()
