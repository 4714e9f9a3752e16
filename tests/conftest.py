import pytest

from lumer_order.cart import CartStore
from lumer_order.data import MENU_BY_ID
from lumer_order.focus import FocusManager
from lumer_order.persistence import KeyValueStorage


class RecordingHandoff:
    def __init__(self):
        self.urls: list[str] = []

    def __call__(self, url: str) -> None:
        self.urls.append(url)


class RecordingScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))
        return None


class RecordingNotifier:
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def __call__(self, message: str, severity: str) -> None:
        self.messages.append((message, severity))


@pytest.fixture
def storage(tmp_path):
    return KeyValueStorage(tmp_path / "cart.db")


@pytest.fixture
def cart(storage):
    return CartStore(storage)


@pytest.fixture
def focus():
    return FocusManager()


@pytest.fixture
def handoff():
    return RecordingHandoff()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def pudding():
    return MENU_BY_ID["menu-1"]


@pytest.fixture
def dimsum():
    return MENU_BY_ID["menu-10"]


@pytest.fixture
def cream_cheese():
    return MENU_BY_ID["menu-3"]
