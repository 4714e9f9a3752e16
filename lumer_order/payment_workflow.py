"""Checkout: customer data, payment method, validation and the order handoff."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, NoReturn

from lumer_order.cart import CartStore
from lumer_order.config import DEST_ACCOUNT_NUMBER, INSTRUCTION_DELAY_SECONDS, WHATSAPP_NUMBER
from lumer_order.debuglog import NULL_LOG, DebugLog
from lumer_order.errors import CheckoutValidationError, EmptyCartError, WorkflowStateError
from lumer_order.focus import FocusManager, FocusTrap
from lumer_order.handoff import ClipboardService
from lumer_order.models import CustomerInfo, LineItem, PaymentMethod
from lumer_order.order_message import OrderMessage, build_order_message

METHOD_FIELD = "payment_method"
NAME_FIELD = "name"
PHONE_FIELD = "phone"
ADDRESS_FIELD = "address"
SENDER_BANK_FIELD = "sender_bank"
SENDER_ACCOUNT_FIELD = "sender_account"

TEXT_FIELDS = (NAME_FIELD, PHONE_FIELD, ADDRESS_FIELD, SENDER_BANK_FIELD, SENDER_ACCOUNT_FIELD)
CASH_FOCUS_FIELDS = (METHOD_FIELD, NAME_FIELD, PHONE_FIELD, ADDRESS_FIELD)
TRANSFER_FOCUS_FIELDS = CASH_FOCUS_FIELDS + (SENDER_BANK_FIELD, SENDER_ACCOUNT_FIELD)

EMPTY_CART_MESSAGE = "Keranjang Anda kosong!"

Scheduler = Callable[[float, Callable[[], None]], object]


class PaymentState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    METHOD_SELECTED = "method_selected"


@dataclass
class CustomerForm:
    """Raw, unvalidated checkout input."""

    name: str = ""
    phone: str = ""
    address: str = ""
    sender_bank: str = ""
    sender_account: str = ""

    def get(self, field: str) -> str:
        if field not in TEXT_FIELDS:
            raise KeyError(field)
        return getattr(self, field)

    def set(self, field: str, value: str) -> None:
        if field not in TEXT_FIELDS:
            raise KeyError(field)
        setattr(self, field, value)


@dataclass(frozen=True)
class CheckoutSummary:
    items: tuple[LineItem, ...]
    total: int


class PaymentWorkflow:
    """
    Closed -> Open -> MethodSelected -> Closed.

    A failed confirmation leaves state and draft untouched and focuses the
    offending field. A successful one hands the order link off, clears the
    cart and closes.
    """

    def __init__(
        self,
        cart: CartStore,
        focus: FocusManager,
        *,
        handoff: Callable[[str], None],
        schedule: Scheduler | None = None,
        show_instructions: Callable[[], None] | None = None,
        clipboard: ClipboardService | None = None,
        recipient: str = WHATSAPP_NUMBER,
        instruction_delay: float = INSTRUCTION_DELAY_SECONDS,
        log: DebugLog = NULL_LOG,
    ) -> None:
        self.cart = cart
        self.focus = focus
        self.handoff = handoff
        self.schedule = schedule
        self.show_instructions = show_instructions
        self.clipboard = clipboard
        self.recipient = recipient
        self.instruction_delay = instruction_delay
        self.log = log

        self.state = PaymentState.CLOSED
        self.method: PaymentMethod | None = None
        self.form = CustomerForm()
        self.summary: CheckoutSummary | None = None
        self.focus_trap: FocusTrap | None = None

    @property
    def is_open(self) -> bool:
        return self.state is not PaymentState.CLOSED

    def open(self) -> CheckoutSummary:
        if self.state is not PaymentState.CLOSED:
            raise WorkflowStateError("checkout is already open")
        if self.cart.is_empty():
            raise EmptyCartError(EMPTY_CART_MESSAGE)

        self.focus_trap = self.focus.acquire("payment", CASH_FOCUS_FIELDS)
        self.summary = CheckoutSummary(items=tuple(self.cart.snapshot()), total=self.cart.total())
        self.form = CustomerForm()
        self.method = None
        self.state = PaymentState.OPEN
        self.log.write(f"payment_open rows={len(self.summary.items)} total={self.summary.total}")
        return self.summary

    def select_method(self, method: PaymentMethod | str) -> None:
        self._require_open()
        self.method = PaymentMethod(method)
        self.state = PaymentState.METHOD_SELECTED
        if self.focus_trap is not None:
            fields = TRANSFER_FOCUS_FIELDS if self.method is PaymentMethod.TRANSFER else CASH_FOCUS_FIELDS
            self.focus_trap.set_fields(fields)
        self.log.write(f"payment_method method={self.method.value}")

    def update_field(self, field: str, value: str) -> None:
        self._require_open()
        self.form.set(field, value)

    def confirm(self, form: CustomerForm | None = None) -> OrderMessage:
        self._require_open()
        if form is not None:
            self.form = form

        customer = self._validated_customer()
        message = build_order_message(self.cart.snapshot(), customer, self.recipient)
        # A failed handoff propagates before anything is committed.
        self.handoff(message.url)
        self.log.write(f"payment_handoff method={customer.payment_method.value} total={self.cart.total()}")

        if customer.payment_method is PaymentMethod.TRANSFER:
            if self.schedule is not None and self.show_instructions is not None:
                self.schedule(self.instruction_delay, self.show_instructions)

        self.cart.clear()
        self._close()
        return message

    def close(self) -> None:
        if self.state is PaymentState.CLOSED:
            return
        self.log.write("payment_close")
        self._close()

    def copy_account_number(self) -> bool:
        if self.clipboard is None:
            return False
        return self.clipboard.copy(DEST_ACCOUNT_NUMBER)

    def _validated_customer(self) -> CustomerInfo:
        if self.method is None:
            self._fail(METHOD_FIELD, "Silakan pilih metode pembayaran!")

        name = self.form.name.strip()
        phone = self.form.phone.strip()
        address = self.form.address.strip()
        if not name:
            self._fail(NAME_FIELD, "Nama harus diisi!")
        if not phone:
            self._fail(PHONE_FIELD, "Nomor telepon harus diisi!")
        if not address:
            self._fail(ADDRESS_FIELD, "Alamat harus diisi!")

        if self.method is PaymentMethod.TRANSFER:
            sender_bank = self.form.sender_bank.strip()
            sender_account = self.form.sender_account.strip()
            if not sender_bank:
                self._fail(SENDER_BANK_FIELD, "Silakan pilih bank pengirim!")
            if not sender_account:
                self._fail(SENDER_ACCOUNT_FIELD, "Nomor rekening pengirim harus diisi!")
            return CustomerInfo(
                name=name,
                phone=phone,
                address=address,
                payment_method=PaymentMethod.TRANSFER,
                sender_bank=sender_bank,
                sender_account=sender_account,
            )

        return CustomerInfo(name=name, phone=phone, address=address, payment_method=PaymentMethod.CASH)

    def _fail(self, field: str, message: str) -> NoReturn:
        if self.focus_trap is not None and field in self.focus_trap.fields:
            self.focus_trap.focus(field)
        self.log.write(f"payment_invalid field={field}")
        raise CheckoutValidationError(field, message)

    def _require_open(self) -> None:
        if self.state is PaymentState.CLOSED:
            raise WorkflowStateError("checkout is not open")

    def _close(self) -> None:
        if self.focus_trap is not None:
            self.focus_trap.release()
        self.focus_trap = None
        self.form = CustomerForm()
        self.method = None
        self.summary = None
        self.state = PaymentState.CLOSED
