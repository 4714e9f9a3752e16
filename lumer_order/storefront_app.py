"""Main Textual app class."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from lumer_order.cart import CartStore
from lumer_order.commands import CartCommand, SelectionOutcome, dispatch_cart_command, select_menu_item
from lumer_order.config import SHOP_NAME, resolve_db_path, resolve_debug_log_path
from lumer_order.data import MENU_ITEMS
from lumer_order.debuglog import DebugLog
from lumer_order.errors import EmptyCartError, FocusError, WorkflowStateError
from lumer_order.focus import FocusManager
from lumer_order.handoff import ClipboardService, Copier, open_order_link, system_clipboard_copy
from lumer_order.models import CustomizedLineItem, MenuItem, PaymentMethod
from lumer_order.order_message import OrderMessage
from lumer_order.payment_modal import InstructionModal, PaymentModal
from lumer_order.payment_workflow import PaymentWorkflow
from lumer_order.persistence import KeyValueStorage
from lumer_order.rendering import format_line_item, format_menu_label, format_total
from lumer_order.variant_modal import VariantModal
from lumer_order.variant_workflow import VariantSelectionWorkflow


class StorefrontApp(App):
    """A Textual storefront for building a cart and sending the order over WhatsApp."""

    TITLE = SHOP_NAME
    SUB_TITLE = "Pudding / Dimsum"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-total {
        height: 1;
        margin-top: 1;
    }

    #status-bar {
        height: 2;
        padding: 0 1;
        color: #dddddd;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    catalog_index = reactive(0)
    cart_index = reactive(None)

    BINDINGS = [
        ("up", "move_catalog(-1)", "Previous menu"),
        ("down", "move_catalog(1)", "Next menu"),
        ("enter", "select_menu_item", "Add to cart"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        *,
        handoff: Callable[[str], None] = open_order_link,
        clipboard_primary: Copier | None = system_clipboard_copy,
        menu: list[MenuItem] | None = None,
        debug_log: DebugLog | None = None,
    ) -> None:
        super().__init__()
        self.menu = list(menu) if menu is not None else list(MENU_ITEMS)
        self.debug_log = debug_log if debug_log is not None else DebugLog(resolve_debug_log_path())

        self.cart = CartStore(
            storage if storage is not None else KeyValueStorage(resolve_db_path()),
            log=self.debug_log,
            notify=self._notify,
        )
        self.focus_scope = FocusManager()
        self.variants = VariantSelectionWorkflow(self.cart, self.focus_scope, log=self.debug_log)
        self.clipboard_service = ClipboardService(
            primary=clipboard_primary,
            fallback=self.copy_to_clipboard,
            notify=self._notify,
            log=self.debug_log,
        )
        self.payment = PaymentWorkflow(
            self.cart,
            self.focus_scope,
            handoff=handoff,
            schedule=self._schedule,
            show_instructions=self._show_instructions,
            clipboard=self.clipboard_service,
            log=self.debug_log,
        )
        self.debug_log.write("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static(id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Keranjang", classes="pane-title")
                yield Static("Keranjang anda kosong.", id="cart-list")
                yield Static(id="cart-total")
        yield Static(
            "↑/↓ pilih menu, Enter tambah. J/K pilih item, +/- jumlah, D hapus, X kosongkan, C checkout. Ctrl+Q keluar.",
            id="status-bar",
        )

    def on_mount(self) -> None:
        self.cart.subscribe(self._on_cart_changed)
        self.cart.load()
        self.debug_log.write(f"on_mount rows={len(self.cart.items)}")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return

        char = event.character
        if not event.is_printable or char is None or len(char) != 1:
            return

        if char in {"+", "="}:
            self._dispatch(CartCommand.INCREASE)
        elif char == "-":
            self._dispatch(CartCommand.DECREASE)
        elif char.lower() == "d":
            self._remove_selected()
        elif char.lower() == "x":
            self._clear_cart()
        elif char.lower() == "j":
            self._move_cart_selection(1)
        elif char.lower() == "k":
            self._move_cart_selection(-1)
        elif char.lower() == "c":
            self.action_checkout()
        else:
            return
        event.stop()

    def action_move_catalog(self, delta: int) -> None:
        if self._modal_open() or not self.menu:
            return
        self.catalog_index = (self.catalog_index + delta) % len(self.menu)
        self._refresh_menu()

    def action_select_menu_item(self) -> None:
        if self._modal_open() or not self.menu:
            return
        item = self.menu[self.catalog_index]
        try:
            outcome = select_menu_item(item, self.cart, self.variants)
        except (WorkflowStateError, FocusError) as exc:
            self.debug_log.write(f"select_blocked id={item.item_id} error={exc!r}")
            return

        if outcome is SelectionOutcome.VARIANT_REQUIRED:
            self.push_screen(VariantModal(self.variants, on_done=self._on_variant_done))
            return

        self.notify(f"{item.name} , Berhasil masuk keranjang!")

    def action_checkout(self) -> None:
        if self._modal_open():
            return
        try:
            self.payment.open()
        except EmptyCartError as exc:
            self.notify(str(exc), severity="error")
            return
        except (WorkflowStateError, FocusError) as exc:
            self.debug_log.write(f"checkout_blocked error={exc!r}")
            return
        self.push_screen(PaymentModal(self.payment, on_confirmed=self._on_order_sent))

    def _on_variant_done(self, line: CustomizedLineItem | None) -> None:
        if line is None:
            return
        self.notify(f"{line.quantity}x {line.name} ({line.variant_text}) ditambahkan ke keranjang!")

    def _on_order_sent(self, message: OrderMessage, method: PaymentMethod) -> None:
        self.debug_log.write(f"order_sent method={method.value} chars={len(message.text)}")
        self.notify("Pesanan berhasil! Anda akan diarahkan ke WhatsApp.")

    def _schedule(self, delay: float, callback: Callable[[], None]) -> object:
        return self.set_timer(delay, callback)

    def _show_instructions(self) -> None:
        self.push_screen(InstructionModal())

    def _notify(self, message: str, severity: str) -> None:
        self.notify(message, severity=severity)  # type: ignore[arg-type]

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def _dispatch(self, command: CartCommand) -> None:
        dispatch_cart_command(self.cart, command, self.cart_index)

    def _remove_selected(self) -> None:
        if self.cart_index is None:
            return
        self._dispatch(CartCommand.REMOVE)
        self.notify("Item dihapus dari keranjang")

    def _clear_cart(self) -> None:
        if self.cart.is_empty():
            return
        self._dispatch(CartCommand.CLEAR)
        self.notify("Semua menu dihapus.")

    def _move_cart_selection(self, delta: int) -> None:
        rows = len(self.cart.items)
        if not rows:
            return

        if self.cart_index is None:
            self.cart_index = 0 if delta > 0 else rows - 1
        else:
            self.cart_index = (self.cart_index + delta) % rows
        self._refresh_cart()

    def _on_cart_changed(self, cart: CartStore) -> None:
        rows = len(cart.items)
        if not rows:
            self.cart_index = None
        elif self.cart_index is None or self.cart_index >= rows:
            self.cart_index = rows - 1
        self._refresh_cart()

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_cart()

    def _visible_rows(self, widget: Static, lines_per_row: int = 1) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height // lines_per_row)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _base_widget(self, selector: str) -> Static:
        # Modals may be on top; the panes live on the base screen.
        return self.screen_stack[0].query_one(selector, Static)

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self._base_widget("#menu-list")
        except (NoMatches, IndexError):
            return

        start, end = self._window_bounds(len(self.menu), self._visible_rows(menu_widget), self.catalog_index)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == self.catalog_index else "  ")
            lines.append_text(format_menu_label(self.menu[idx]))
        if end < len(self.menu):
            lines.append("\n⋮", style="dim")
        menu_widget.update(lines)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self._base_widget("#cart-list")
            total_widget = self._base_widget("#cart-total")
        except (NoMatches, IndexError):
            return

        total_widget.update(format_total(self.cart.total(), self.cart.item_count()))
        items = self.cart.items
        if not items:
            cart_widget.update("Keranjang anda kosong.")
            return

        visible = self._visible_rows(cart_widget, lines_per_row=3)
        start, end = self._window_bounds(len(items), visible, self.cart_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == self.cart_index else "  ")
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_line_item(items[idx]))
        if end < len(items):
            lines.append("\n⋮", style="dim")
        cart_widget.update(lines)
