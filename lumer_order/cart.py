"""Cart store: ordered line items with dedup, totals and synchronous persistence."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from typing import Callable

from lumer_order.config import CART_STORAGE_KEY
from lumer_order.debuglog import NULL_LOG, DebugLog
from lumer_order.errors import SnapshotDecodeError
from lumer_order.models import LineItem, MenuItem, Notifier, PlainLineItem
from lumer_order.persistence import KeyValueStorage, decode_cart_snapshot, encode_cart_snapshot

CartListener = Callable[["CartStore"], None]


class CartStore:
    """
    Owns the cart rows.

    Every mutating call writes the snapshot to storage and then notifies
    listeners before it returns. Rows are addressed by their display index.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        storage_key: str = CART_STORAGE_KEY,
        log: DebugLog = NULL_LOG,
        notify: Notifier | None = None,
    ) -> None:
        self.storage = storage
        self.storage_key = storage_key
        self.log = log
        self.notify = notify
        self.last_save_ok = True
        self._items: list[LineItem] = []
        self._listeners: list[CartListener] = []

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    def snapshot(self) -> list[LineItem]:
        """Detached copies of the current rows."""
        return [replace(item) for item in self._items]

    def is_empty(self) -> bool:
        return not self._items

    def item_count(self) -> int:
        """Sum of quantities, shown on the cart badge."""
        return sum(item.quantity for item in self._items)

    def total(self) -> int:
        return sum(item.unit_price * item.quantity for item in self._items)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a render listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_item(self, candidate: LineItem, quantity: int = 1) -> None:
        """Merge into the row with the same dedup key, or append a new row. Quantities below 1 count as 1."""
        quantity = max(quantity, 1)
        merged = self._merge(candidate, quantity)
        self.log.write(f"cart_add id={candidate.item_id} qty={quantity} merged={merged} rows={len(self._items)}")
        self._commit()

    def add_menu_item(self, item: MenuItem, quantity: int = 1) -> None:
        self.add_item(PlainLineItem.from_menu_item(item), quantity)

    def remove_item(self, index: int) -> None:
        if not self._valid_index(index):
            return
        removed = self._items.pop(index)
        self.log.write(f"cart_remove index={index} id={removed.item_id} rows={len(self._items)}")
        self._commit()

    def increase_quantity(self, index: int) -> None:
        if not self._valid_index(index):
            return
        self._items[index].quantity += 1
        self._commit()

    def decrease_quantity(self, index: int) -> None:
        if not self._valid_index(index):
            return
        if self._items[index].quantity <= 1:
            self.remove_item(index)
            return
        self._items[index].quantity -= 1
        self._commit()

    def set_quantity(self, index: int, quantity: int) -> None:
        if not self._valid_index(index):
            return
        if quantity <= 0:
            self.remove_item(index)
            return
        self._items[index].quantity = quantity
        self._commit()

    def clear(self) -> None:
        if not self._items:
            return
        self._items = []
        self.log.write("cart_clear")
        self._commit()

    def load(self) -> None:
        """Rehydrate from storage; unreadable or malformed snapshots give an empty cart."""
        self._items = []
        try:
            raw = self.storage.get_item(self.storage_key)
        except (sqlite3.Error, OSError) as exc:
            self.log.write(f"cart_load_failed reason=read error={exc!r}")
            raw = None

        if raw is not None:
            try:
                rows = decode_cart_snapshot(raw)
            except SnapshotDecodeError as exc:
                self.log.write(f"cart_load_failed reason=decode error={exc!r}")
                rows = []
            for row in rows:
                self._merge(row, row.quantity)

        self.log.write(f"cart_load rows={len(self._items)}")
        self._notify_listeners()

    def save(self) -> bool:
        """Write the snapshot; returns False (and reports it) when the write fails."""
        try:
            self.storage.set_item(self.storage_key, encode_cart_snapshot(self._items))
        except (sqlite3.Error, OSError) as exc:
            self.last_save_ok = False
            self.log.write(f"cart_save_failed error={exc!r}")
            if self.notify is not None:
                self.notify("Keranjang gagal disimpan", "error")
            return False
        self.last_save_ok = True
        return True

    def _merge(self, candidate: LineItem, quantity: int) -> bool:
        key = candidate.dedup_key()
        for existing in self._items:
            if existing.dedup_key() == key:
                existing.quantity += quantity
                return True
        self._items.append(replace(candidate, quantity=quantity))
        return False

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def _commit(self) -> None:
        self.save()
        self._notify_listeners()

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            listener(self)
