"""Tests for the modal focus scope."""

import pytest

from lumer_order.errors import FocusError
from lumer_order.focus import FocusManager


def test_acquire_focuses_first_field(focus):
    trap = focus.acquire("payment", ["method", "name", "phone"])
    assert trap.focused == "method"
    assert focus.active is trap


def test_cycle_wraps_both_directions(focus):
    trap = focus.acquire("variant", ["a", "b", "c"])
    assert trap.cycle(1) == "b"
    assert trap.cycle(1) == "c"
    assert trap.cycle(1) == "a"
    assert trap.cycle(-1) == "c"


def test_only_one_trap_at_a_time(focus):
    focus.acquire("variant", ["a"])
    with pytest.raises(FocusError):
        focus.acquire("payment", ["b"])


def test_release_is_idempotent_and_frees_scope(focus):
    trap = focus.acquire("variant", ["a"])
    trap.release()
    trap.release()
    assert focus.active is None
    assert focus.acquire("payment", ["b"]).focused == "b"


def test_stale_release_does_not_free_newer_trap():
    manager = FocusManager()
    old = manager.acquire("variant", ["a"])
    old.release()
    new = manager.acquire("payment", ["b"])
    old.release()
    assert manager.active is new


def test_context_manager_releases_on_error(focus):
    with pytest.raises(RuntimeError):
        with focus.acquire("variant", ["a"]):
            raise RuntimeError("boom")
    assert focus.active is None


def test_set_fields_keeps_surviving_focus(focus):
    trap = focus.acquire("payment", ["method", "name"])
    trap.focus("name")
    trap.set_fields(["method", "name", "bank"])
    assert trap.focused == "name"

    trap.focus("bank")
    trap.set_fields(["method", "name"])
    assert trap.focused == "method"


def test_focus_unknown_field_rejected(focus):
    trap = focus.acquire("payment", ["method"])
    with pytest.raises(ValueError):
        trap.focus("nope")


def test_empty_trap_cycles_to_none(focus):
    trap = focus.acquire("empty", [])
    assert trap.focused is None
    assert trap.cycle(1) is None
