"""Editable static menu and variant option configuration."""

from __future__ import annotations

# Canonical catalog values consumed by lumer_order.data (which wraps these into MenuItem instances).
MENU_ROWS: list[dict[str, str | int]] = [
    {
        "id": "menu-1",
        "name": "Pudding Balls Coklat",
        "price": 10000,
        "image": "menu-1.jpg",
        "description": "Pudding coklat lembut dengan isian lumer dan rasa manis yang bikin nagih.",
        "category": "speciality",
    },
    {
        "id": "menu-2",
        "name": "Pudding Balls Mangga",
        "price": 10000,
        "image": "menu-2.jpg",
        "description": "Pudding creamy berpadu rasa mangga segar, manis, dan menyegarkan.",
        "category": "speciality",
    },
    {
        "id": "menu-3",
        "name": "CreamChesse Pudding",
        "price": 12000,
        "image": "menu-3.jpg",
        "description": "Pudding cream cheese dengan pilihan rasa dan topping.",
        "category": "speciality",
    },
    {
        "id": "menu-10",
        "name": "Dimsum Original",
        "price": 11000,
        "image": "menu-10.jpg",
        "description": "Dimsum ayam original, kukus lembut.",
        "category": "extra",
    },
    {
        "id": "menu-11",
        "name": "Dimsum Mentai",
        "price": 12000,
        "image": "menu-11.jpg",
        "description": "Dimsum dengan saus mentai bakar.",
        "category": "extra",
    },
    {
        "id": "menu-12",
        "name": "Dimsum Mentai Spicy",
        "price": 13000,
        "image": "menu-12.jpg",
        "description": "Dimsum mentai dengan level pedas.",
        "category": "extra",
    },
    {
        "id": "menu-13",
        "name": "Dimsum Mentai Chese",
        "price": 14000,
        "image": "menu-13.jpg",
        "description": "Dimsum mentai dengan lelehan keju.",
        "category": "extra",
    },
]

# Items that must go through flavor/topping selection before reaching the cart.
VARIANT_OPTIONS_BY_ITEM: dict[str, dict[str, list[str]]] = {
    "menu-3": {
        "flavors": ["Matcha", "Coklat", "Red Velvet", "Taro"],
        "toppings": ["Oreo", "Keju", "Choco Chips", "Almond"],
    },
}

CATEGORY_LABELS: dict[str, str] = {
    "speciality": "Pudding",
    "extra": "Dimsum",
}

TRANSFER_INSTRUCTION_TITLE = "Langkah Selanjutnya"

TRANSFER_INSTRUCTION_STEPS: list[str] = [
    "Transfer sesuai total pembayaran ke rekening BCA yang tertera di chat WhatsApp",
    "Screenshot/foto bukti transfer dari m-banking/ATM",
    "Kirim foto bukti transfer melalui chat WhatsApp: klik tombol 📎 (attachment), pilih Gallery/Photo, kirim foto bukti transfer",
    "Admin akan memverifikasi pembayaran dan memproses pesanan Anda",
]

TRANSFER_INSTRUCTION_ACK = "Mengerti, Saya Akan Mengirim Bukti Transfer!"
