"""Modal focus scope: one trap at a time, released on every modal exit."""

from __future__ import annotations

from typing import Iterable

from lumer_order.errors import FocusError


class FocusTrap:
    """
    Exclusive focus over an ordered set of field names.

    Tab cycling wraps inside the trap. `release()` is idempotent so every
    exit path of the owning modal can call it unconditionally.
    """

    def __init__(self, manager: FocusManager, owner: str, fields: Iterable[str]) -> None:
        self._manager = manager
        self.owner = owner
        self.fields: tuple[str, ...] = tuple(fields)
        self.focused: str | None = self.fields[0] if self.fields else None
        self.released = False

    def focus(self, field: str) -> None:
        if field not in self.fields:
            raise ValueError(f"{field!r} is not part of the {self.owner} focus trap")
        self.focused = field

    def cycle(self, delta: int) -> str | None:
        """Move focus by delta positions, wrapping at both ends."""
        if not self.fields:
            return None
        if self.focused not in self.fields:
            self.focused = self.fields[0]
            return self.focused
        idx = self.fields.index(self.focused)
        self.focused = self.fields[(idx + delta) % len(self.fields)]
        return self.focused

    def set_fields(self, fields: Iterable[str]) -> None:
        """Replace the cycle; focus is kept when the field survives."""
        self.fields = tuple(fields)
        if self.focused not in self.fields:
            self.focused = self.fields[0] if self.fields else None

    def release(self) -> None:
        if self.released:
            return
        self.released = True
        self._manager._release(self)

    def __enter__(self) -> FocusTrap:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class FocusManager:
    """Hands out focus traps for modal workflows."""

    def __init__(self) -> None:
        self._active: FocusTrap | None = None

    @property
    def active(self) -> FocusTrap | None:
        return self._active

    def acquire(self, owner: str, fields: Iterable[str]) -> FocusTrap:
        if self._active is not None:
            raise FocusError(f"focus is held by {self._active.owner}, cannot open {owner}")
        trap = FocusTrap(self, owner, fields)
        self._active = trap
        return trap

    def _release(self, trap: FocusTrap) -> None:
        if self._active is trap:
            self._active = None
