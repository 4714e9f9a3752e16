"""Tests for checkout validation, handoff and cart clearing."""

import pytest

from lumer_order.errors import CheckoutValidationError, EmptyCartError, HandoffError, WorkflowStateError
from lumer_order.models import PaymentMethod
from lumer_order.payment_workflow import (
    CustomerForm,
    PaymentState,
    PaymentWorkflow,
    SENDER_ACCOUNT_FIELD,
    TRANSFER_FOCUS_FIELDS,
)
from lumer_order.variant_workflow import VariantSelectionWorkflow


class FakeClipboard:
    def __init__(self):
        self.copied = []

    def copy(self, text):
        self.copied.append(text)
        return True


@pytest.fixture
def workflow(cart, focus, handoff, scheduler):
    shown = []
    wf = PaymentWorkflow(
        cart,
        focus,
        handoff=handoff,
        schedule=scheduler,
        show_instructions=lambda: shown.append(True),
    )
    wf.shown = shown
    return wf


@pytest.fixture
def filled_cart(cart, pudding, cream_cheese, focus):
    cart.add_menu_item(pudding, 2)
    variants = VariantSelectionWorkflow(cart, focus)
    variants.open(cream_cheese)
    variants.toggle_topping("Oreo")
    variants.confirm()
    return cart


def _form(**overrides):
    values = dict(name="Budi", phone="08123456789", address="Jl. Melati 5", sender_bank="", sender_account="")
    values.update(overrides)
    return CustomerForm(**values)


def test_open_refuses_empty_cart(workflow, focus):
    with pytest.raises(EmptyCartError) as exc_info:
        workflow.open()
    assert str(exc_info.value) == "Keranjang Anda kosong!"
    assert workflow.state is PaymentState.CLOSED
    assert focus.active is None


def test_open_snapshots_summary_and_resets_draft(workflow, filled_cart):
    workflow.open()
    workflow.update_field("name", "leftover")
    workflow.close()

    summary = workflow.open()

    assert workflow.state is PaymentState.OPEN
    assert summary.total == 32000
    assert [item.item_id for item in summary.items] == ["menu-1", "menu-3"]
    assert workflow.form == CustomerForm()
    assert workflow.method is None


def test_open_only_from_closed(workflow, filled_cart):
    workflow.open()
    with pytest.raises(WorkflowStateError):
        workflow.open()


def test_confirm_without_method_fails_and_keeps_state(workflow, filled_cart, handoff):
    workflow.open()

    with pytest.raises(CheckoutValidationError) as exc_info:
        workflow.confirm(_form())

    assert exc_info.value.field == "payment_method"
    assert exc_info.value.message == "Silakan pilih metode pembayaran!"
    assert workflow.state is PaymentState.OPEN
    assert len(filled_cart.items) == 2
    assert handoff.urls == []


@pytest.mark.parametrize(
    "overrides, field, message",
    [
        (dict(name="  "), "name", "Nama harus diisi!"),
        (dict(name="", phone=""), "name", "Nama harus diisi!"),
        (dict(phone=""), "phone", "Nomor telepon harus diisi!"),
        (dict(phone="", address=""), "phone", "Nomor telepon harus diisi!"),
        (dict(address=""), "address", "Alamat harus diisi!"),
    ],
)
def test_customer_fields_validated_in_order(workflow, filled_cart, overrides, field, message):
    workflow.open()
    workflow.select_method(PaymentMethod.CASH)

    with pytest.raises(CheckoutValidationError) as exc_info:
        workflow.confirm(_form(**overrides))

    assert exc_info.value.field == field
    assert exc_info.value.message == message
    assert workflow.focus_trap.focused == field
    assert workflow.state is PaymentState.METHOD_SELECTED


def test_transfer_missing_sender_account_fails_on_that_field(workflow, filled_cart, handoff):
    workflow.open()
    workflow.select_method("transfer")

    with pytest.raises(CheckoutValidationError) as exc_info:
        workflow.confirm(_form(sender_bank="BRI", sender_account=""))

    assert exc_info.value.field == SENDER_ACCOUNT_FIELD
    assert exc_info.value.message == "Nomor rekening pengirim harus diisi!"
    assert workflow.focus_trap.focused == SENDER_ACCOUNT_FIELD
    assert handoff.urls == []


def test_transfer_checks_sender_bank_before_account(workflow, filled_cart):
    workflow.open()
    workflow.select_method(PaymentMethod.TRANSFER)

    with pytest.raises(CheckoutValidationError) as exc_info:
        workflow.confirm(_form())

    assert exc_info.value.field == "sender_bank"


def test_failed_confirm_keeps_entered_data(workflow, filled_cart):
    workflow.open()
    workflow.select_method(PaymentMethod.CASH)
    workflow.update_field("name", "Budi")
    workflow.update_field("phone", "0812")

    with pytest.raises(CheckoutValidationError):
        workflow.confirm()

    assert workflow.form.name == "Budi"
    assert workflow.form.phone == "0812"


def test_transfer_adds_sender_fields_to_focus_cycle(workflow, filled_cart):
    workflow.open()
    workflow.select_method(PaymentMethod.TRANSFER)
    assert workflow.focus_trap.fields == TRANSFER_FOCUS_FIELDS

    workflow.select_method(PaymentMethod.CASH)
    assert SENDER_ACCOUNT_FIELD not in workflow.focus_trap.fields


def test_cash_confirm_hands_off_clears_cart_and_closes(workflow, filled_cart, handoff, scheduler, focus):
    workflow.open()
    workflow.select_method(PaymentMethod.CASH)

    message = workflow.confirm(_form(sender_bank="ignored", sender_account="ignored"))

    assert filled_cart.is_empty()
    assert workflow.state is PaymentState.CLOSED
    assert focus.active is None
    assert handoff.urls == [message.url]
    assert message.url.startswith("https://wa.me/6287773033706?text=")
    assert "Pudding Balls Coklat" in message.text
    assert "CreamChesse Pudding" in message.text
    assert "*TOTAL PEMBAYARAN: Rp\u00a032.000*" in message.text
    assert "ignored" not in message.text
    assert scheduler.calls == []


def test_transfer_confirm_schedules_instructions(workflow, filled_cart, scheduler):
    workflow.open()
    workflow.select_method(PaymentMethod.TRANSFER)

    message = workflow.confirm(_form(sender_bank="BRI", sender_account="1234567890"))

    assert "• Bank: BRI" in message.text
    assert len(scheduler.calls) == 1
    delay, callback = scheduler.calls[0]
    assert delay == pytest.approx(0.8)
    callback()
    assert workflow.shown == [True]


def test_handoff_failure_keeps_cart_and_workflow(cart, focus, pudding):
    def failing_handoff(url):
        raise HandoffError("no browser")

    cart.add_menu_item(pudding)
    workflow = PaymentWorkflow(cart, focus, handoff=failing_handoff)
    workflow.open()
    workflow.select_method(PaymentMethod.CASH)

    with pytest.raises(HandoffError):
        workflow.confirm(_form())

    assert len(cart.items) == 1
    assert workflow.state is PaymentState.METHOD_SELECTED
    assert focus.active is workflow.focus_trap


def test_close_discards_draft_and_releases_focus(workflow, filled_cart, focus):
    workflow.open()
    workflow.select_method(PaymentMethod.TRANSFER)
    workflow.update_field("name", "Budi")

    workflow.close()
    workflow.close()

    assert workflow.state is PaymentState.CLOSED
    assert workflow.method is None
    assert workflow.form == CustomerForm()
    assert focus.active is None
    assert len(filled_cart.items) == 2


def test_operations_require_open_workflow(workflow):
    with pytest.raises(WorkflowStateError):
        workflow.select_method(PaymentMethod.CASH)
    with pytest.raises(WorkflowStateError):
        workflow.confirm(_form())


def test_copy_account_number_goes_through_clipboard(cart, focus, handoff):
    clipboard = FakeClipboard()
    workflow = PaymentWorkflow(cart, focus, handoff=handoff, clipboard=clipboard)

    assert workflow.copy_account_number() is True
    assert clipboard.copied == ["3621274994"]
