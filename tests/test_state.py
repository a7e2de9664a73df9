from __future__ import annotations

from tests.conftest import make_device, make_ieee
from zigpy_devices.state import (
    DEVICE_META,
    DeviceMeta,
    DeviceMetaStore,
    TransactionTracker,
    get_device_meta,
)


def test_device_meta_get_set():
    meta = DeviceMeta()
    assert meta.get("configured") is False
    assert meta.get("device_config", "") == ""
    assert meta.get("missing", 5) == 5

    meta.set("device_config", "01W*")
    meta.set("power_source", "Battery")

    assert meta.device_config == "01W*"
    assert meta.extra == {"power_source": "Battery"}


def test_device_meta_store_round_trip():
    store = DeviceMetaStore()
    store["aa"].configured = True
    store["bb"].set("foo", [1, 2])

    restored = DeviceMetaStore.from_dict(store.as_dict())
    assert restored == store
    assert restored["bb"].extra == {"foo": [1, 2]}


def test_get_device_meta_is_per_device():
    first = make_device(ieee=make_ieee(1))
    second = make_device(ieee=make_ieee(2))

    get_device_meta(first).set("foo", 1)

    assert get_device_meta(first).get("foo") == 1
    assert get_device_meta(second).get("foo") is None
    assert str(first.ieee) in DEVICE_META


def test_get_device_meta_dummy_device():
    meta = get_device_meta(None)
    meta.set("foo", 1)

    assert get_device_meta(None).get("foo") is None
    assert len(DEVICE_META) == 0


def test_get_device_meta_custom_store():
    store = DeviceMetaStore()
    device = make_device()

    get_device_meta(device, store).configured = True

    assert store[str(device.ieee)].configured is True
    assert str(device.ieee) not in DEVICE_META


def test_transaction_tracker():
    tracker = TransactionTracker(size=2)

    assert not tracker.seen("dev", 1)
    assert tracker.seen("dev", 1)
    assert not tracker.seen("other", 1)

    assert not tracker.seen("dev", 2)
    assert not tracker.seen("dev", 3)
    # 1 fell out of the history
    assert not tracker.seen("dev", 1)

    assert not tracker.seen("dev", None)
    assert not tracker.seen("dev", None)

    tracker.clear()
    assert not tracker.seen("dev", 3)
