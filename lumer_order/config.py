"""Runtime configuration defaults for storage, logging and the order handoff."""

from __future__ import annotations

import os

DB_PATH = "data/lumer_order.db"
DEBUG_LOG_PATH = "/tmp/lumer-order-debug.log"

# Key the browser storefront used for its localStorage cart snapshot.
CART_STORAGE_KEY = "restoCart"

SHOP_NAME = "Lezat Lumer"
WHATSAPP_NUMBER = "6287773033706"
WHATSAPP_URL_BASE = "https://wa.me"

DEST_BANK = "BCA"
DEST_ACCOUNT_NUMBER = "3621274994"
DEST_ACCOUNT_HOLDER = "Muhammad Faiz Anugrah"

INSTRUCTION_DELAY_SECONDS = 0.8

_DB_PATH_ENV = "LUMER_ORDER_DB_PATH"
_DEBUG_LOG_ENV = "LUMER_ORDER_DEBUG_LOG"


def resolve_db_path() -> str:
    """Storage file path, LUMER_ORDER_DB_PATH wins over the default."""
    override = os.environ.get(_DB_PATH_ENV, "").strip()
    return override or DB_PATH


def resolve_debug_log_path() -> str | None:
    """
    Debug log path.

    LUMER_ORDER_DEBUG_LOG overrides the default; setting it to an empty
    string disables the log.
    """
    if _DEBUG_LOG_ENV not in os.environ:
        return DEBUG_LOG_PATH
    override = os.environ[_DEBUG_LOG_ENV].strip()
    return override or None
