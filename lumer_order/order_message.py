"""Order transcript formatting and the WhatsApp deep link."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
from urllib.parse import quote

from lumer_order.config import (
    DEST_ACCOUNT_HOLDER,
    DEST_ACCOUNT_NUMBER,
    DEST_BANK,
    SHOP_NAME,
    WHATSAPP_NUMBER,
    WHATSAPP_URL_BASE,
)
from lumer_order.data import format_rupiah
from lumer_order.models import CustomerInfo, CustomizedLineItem, LineItem, PaymentMethod

SEPARATOR = "━" * 16

# Characters encodeURIComponent leaves alone beyond quote()'s own `_.-~`.
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class OrderMessage:
    text: str
    encoded: str
    url: str


def build_order_text(items: Sequence[LineItem], customer: CustomerInfo) -> str:
    """Render the order transcript sent to the shop."""
    total = sum(item.unit_price * item.quantity for item in items)
    is_transfer = customer.payment_method is PaymentMethod.TRANSFER

    out = f"*PESANAN BARU - {SHOP_NAME}*\n\n"
    out += "*Data Customer:*\n"
    out += f"• Nama: {customer.name}\n"
    out += f"• No. Telepon: {customer.phone}\n"
    out += f"• Alamat: {customer.address}\n\n"

    out += f"*Metode Pembayaran:* {customer.payment_method.label}\n\n"

    if is_transfer:
        out += "*Info Transfer Pengirim:*\n"
        out += f"• Bank: {customer.sender_bank}\n"
        out += f"• No. Rekening: {customer.sender_account}\n"
        out += f"• Atas Nama: {customer.name}\n\n"

    out += "*Detail Pesanan:*\n"
    out += f"{SEPARATOR}\n"

    for idx, item in enumerate(items, start=1):
        out += f"{idx}. {item.name}\n"
        if isinstance(item, CustomizedLineItem):
            out += f"   {item.variant_text}\n"
        out += f"   {item.quantity}x {format_rupiah(item.unit_price)} = {format_rupiah(item.line_total())}\n\n"

    out += f"{SEPARATOR}\n"
    out += f"*TOTAL PEMBAYARAN: {format_rupiah(total)}*\n\n"

    if is_transfer:
        out += "*Rekening Tujuan Transfer:*\n"
        out += f"Bank: {DEST_BANK}\n"
        out += f"No. Rek: {DEST_ACCOUNT_NUMBER}\n"
        out += f"A/n: {DEST_ACCOUNT_HOLDER}\n\n"
        out += f"{SEPARATOR}\n"
        out += "*KIRIM BUKTI TRANSFER*\n"
        out += "Mohon kirim foto/screenshot bukti transfer Anda melalui chat ini.\n\n"
        out += "Terima kasih! "

    return out


def encode_order_text(text: str) -> str:
    """Percent-encode text for a URL query value, matching encodeURIComponent."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_order_message(
    items: Sequence[LineItem],
    customer: CustomerInfo,
    recipient: str = WHATSAPP_NUMBER,
) -> OrderMessage:
    text = build_order_text(items, customer)
    encoded = encode_order_text(text)
    return OrderMessage(text=text, encoded=encoded, url=f"{WHATSAPP_URL_BASE}/{recipient}?text={encoded}")
