"""Tests for the SQLite key/value storage and the cart snapshot codec."""

import json

import pytest

from lumer_order.errors import SnapshotDecodeError
from lumer_order.models import CustomizedLineItem, PlainLineItem, Variant
from lumer_order.persistence import KeyValueStorage, decode_cart_snapshot, encode_cart_snapshot


def test_storage_set_get_overwrite_remove(tmp_path):
    storage = KeyValueStorage(tmp_path / "nested" / "store.db")

    assert storage.get_item("restoCart") is None
    storage.set_item("restoCart", "[]")
    storage.set_item("restoCart", '[{"id": "menu-1"}]')
    assert storage.get_item("restoCart") == '[{"id": "menu-1"}]'

    storage.remove_item("restoCart")
    assert storage.get_item("restoCart") is None


def test_storage_survives_new_instance(tmp_path):
    KeyValueStorage(tmp_path / "store.db").set_item("k", "v")
    assert KeyValueStorage(tmp_path / "store.db").get_item("k") == "v"


def test_encode_writes_expected_shape():
    items = [
        PlainLineItem(item_id="menu-1", name="Pudding Balls Coklat", image="menu-1.jpg", unit_price=10000, quantity=2),
        CustomizedLineItem(
            item_id="menu-3",
            name="CreamChesse Pudding",
            image="menu-3.jpg",
            unit_price=12000,
            variant=Variant(flavor="Matcha", toppings=frozenset({"Oreo", "Keju"})),
            variant_text="Rasa: Matcha, Topping: Oreo, Keju",
        ),
    ]

    rows = json.loads(encode_cart_snapshot(items))

    assert rows[0] == {
        "id": "menu-1",
        "name": "Pudding Balls Coklat",
        "image": "menu-1.jpg",
        "unitPrice": 10000,
        "quantity": 2,
    }
    assert rows[1]["variant"] == {"flavor": "Matcha", "toppings": ["Keju", "Oreo"]}
    assert rows[1]["variantText"] == "Rasa: Matcha, Topping: Oreo, Keju"
    assert rows[1]["quantity"] == 1


def test_decode_accepts_browser_storefront_rows():
    raw = json.dumps(
        [
            {"id": "menu-2", "name": "Pudding Balls Mangga", "price": 10000.0, "image": "menu-2.jpg", "quantity": 1},
            {
                "id": "menu-3",
                "name": "CreamChesse Pudding",
                "price": 12000,
                "image": "menu-3.jpg",
                "variants": {"flavor": "Taro", "toppings": ["Oreo"]},
                "variantText": "Rasa: Taro, Topping: Oreo",
                "quantity": 2,
            },
        ]
    )

    plain, custom = decode_cart_snapshot(raw)

    assert isinstance(plain, PlainLineItem)
    assert plain.unit_price == 10000
    assert isinstance(custom, CustomizedLineItem)
    assert custom.variant == Variant(flavor="Taro", toppings=frozenset({"Oreo"}))
    assert custom.quantity == 2


def test_decode_treats_missing_toppings_as_empty_set():
    raw = '[{"id": "menu-3", "unitPrice": 12000, "quantity": 1, "variant": {"flavor": "Matcha"}}]'

    (item,) = decode_cart_snapshot(raw)

    assert item.variant.toppings == frozenset()
    assert item.variant_text == "Rasa: Matcha"


def test_decode_defaults_quantity_to_one():
    (item,) = decode_cart_snapshot('[{"id": "menu-1", "unitPrice": 10000}]')
    assert item.quantity == 1


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "menu-1"}',
        '[{"unitPrice": 10000, "quantity": 1}]',
        '[{"id": "menu-1", "unitPrice": -1, "quantity": 1}]',
        '[{"id": "menu-1", "unitPrice": 10000, "quantity": true}]',
        '[{"id": "menu-1", "unitPrice": 10000.5, "quantity": 1}]',
        '[{"id": "menu-1", "unitPrice": 10000, "quantity": 1, "variant": {"toppings": []}}]',
        '[{"id": "menu-1", "unitPrice": 10000, "quantity": 1, "variant": {"flavor": "Matcha", "toppings": "Oreo"}}]',
    ],
)
def test_decode_rejects_malformed_snapshots(raw):
    with pytest.raises(SnapshotDecodeError):
        decode_cart_snapshot(raw)
