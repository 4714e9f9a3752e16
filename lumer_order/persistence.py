"""SQLite key/value storage and the cart snapshot codec."""

from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Iterable

from lumer_order.data import variant_text
from lumer_order.errors import SnapshotDecodeError
from lumer_order.models import CustomizedLineItem, LineItem, PlainLineItem, Variant


class KeyValueStorage:
    """Durable string-to-string storage in a single SQLite table."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self._bootstrapped = False

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        if not self._bootstrapped:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )
            self._bootstrapped = True
        return conn

    def get_item(self, key: str) -> str | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row[0])

    def set_item(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn:
            with conn:
                conn.execute(
                    """
                    INSERT INTO storage (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )

    def remove_item(self, key: str) -> None:
        with closing(self._connect()) as conn:
            with conn:
                conn.execute("DELETE FROM storage WHERE key = ?", (key,))


def _encode_row(item: LineItem) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": item.item_id,
        "name": item.name,
        "image": item.image,
        "unitPrice": item.unit_price,
        "quantity": item.quantity,
    }
    if isinstance(item, CustomizedLineItem):
        row["variant"] = {
            "flavor": item.variant.flavor,
            "toppings": sorted(item.variant.toppings),
        }
        row["variantText"] = item.variant_text
    return row


def encode_cart_snapshot(items: Iterable[LineItem]) -> str:
    """Serialize cart rows to the JSON array kept under the cart key."""
    return json.dumps([_encode_row(item) for item in items], ensure_ascii=False)


def _as_int(value: Any, name: str, minimum: int) -> int:
    if isinstance(value, bool):
        raise SnapshotDecodeError(f"{name} must be a number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise SnapshotDecodeError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise SnapshotDecodeError(f"{name} must be >= {minimum}, got {value}")
    return value


def _decode_variant(raw: Any) -> Variant:
    if not isinstance(raw, dict):
        raise SnapshotDecodeError(f"variant must be an object, got {raw!r}")
    flavor = raw.get("flavor")
    if not isinstance(flavor, str) or not flavor:
        raise SnapshotDecodeError(f"variant flavor must be a non-empty string, got {flavor!r}")
    toppings = raw.get("toppings")
    if toppings is None:
        toppings = []
    if not isinstance(toppings, list) or not all(isinstance(t, str) for t in toppings):
        raise SnapshotDecodeError(f"variant toppings must be a list of strings, got {toppings!r}")
    return Variant(flavor=flavor, toppings=frozenset(toppings))


def _decode_row(raw: Any) -> LineItem:
    if not isinstance(raw, dict):
        raise SnapshotDecodeError(f"cart row must be an object, got {raw!r}")

    item_id = raw.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise SnapshotDecodeError(f"cart row id must be a non-empty string, got {item_id!r}")

    # Rows saved by the browser storefront use `price` and `variants`.
    price = raw["unitPrice"] if "unitPrice" in raw else raw.get("price")
    unit_price = _as_int(price, "unitPrice", 0)
    quantity = _as_int(raw.get("quantity", 1), "quantity", 1)
    name = str(raw.get("name") or item_id)
    image = str(raw.get("image") or "")

    variant_raw = raw["variant"] if "variant" in raw else raw.get("variants")
    if variant_raw is None:
        return PlainLineItem(item_id=item_id, name=name, image=image, unit_price=unit_price, quantity=quantity)

    variant = _decode_variant(variant_raw)
    text = raw.get("variantText")
    if not isinstance(text, str) or not text:
        text = variant_text(variant.flavor, sorted(variant.toppings))
    return CustomizedLineItem(
        item_id=item_id,
        name=name,
        image=image,
        unit_price=unit_price,
        variant=variant,
        variant_text=text,
        quantity=quantity,
    )


def decode_cart_snapshot(raw: str) -> list[LineItem]:
    """Parse a stored cart snapshot, raising SnapshotDecodeError when malformed."""
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise SnapshotDecodeError(f"cart snapshot is not valid JSON: {exc}") from exc
    if not isinstance(parsed, list):
        raise SnapshotDecodeError(f"cart snapshot must be a JSON array, got {type(parsed).__name__}")
    return [_decode_row(row) for row in parsed]
