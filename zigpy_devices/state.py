"""Per-device metadata and duplicate message tracking."""

from __future__ import annotations

import collections
import dataclasses
from typing import TYPE_CHECKING, Any, Hashable

if TYPE_CHECKING:
    from zigpy_devices.typing import DeviceType

TRANSACTION_HISTORY_SIZE = 5


@dataclasses.dataclass
class DeviceMeta:
    """Metadata a definition keeps for a single device."""

    device_config: str | None = None
    configured: bool = False
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key in ("device_config", "configured"):
            value = getattr(self, key)
            return default if value is None else value

        return self.extra.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key in ("device_config", "configured"):
            setattr(self, key, value)
        else:
            self.extra[key] = value

    def as_dict(self) -> dict[str, Any]:
        return {
            "device_config": self.device_config,
            "configured": self.configured,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> DeviceMeta:
        return cls(
            device_config=obj.get("device_config"),
            configured=obj.get("configured", False),
            extra=dict(obj.get("extra", {})),
        )


class DeviceMetaStore(dict):
    """Device metadata keyed by IEEE address string."""

    def __missing__(self, key: str) -> DeviceMeta:
        meta = self[key] = DeviceMeta()
        return meta

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {ieee: meta.as_dict() for ieee, meta in self.items()}

    @classmethod
    def from_dict(cls, obj: dict[str, dict[str, Any]]) -> DeviceMetaStore:
        store = cls()
        for ieee, meta in obj.items():
            store[ieee] = DeviceMeta.from_dict(meta)
        return store


class TransactionTracker:
    """Remembers the last few transaction ids seen per key."""

    def __init__(self, size: int = TRANSACTION_HISTORY_SIZE) -> None:
        self._size = size
        self._seen: dict[Hashable, collections.deque] = collections.defaultdict(
            lambda: collections.deque(maxlen=self._size)
        )

    def seen(self, key: Hashable, transaction_id: Hashable | None) -> bool:
        """Record a transaction and return True if it was already recorded."""
        if transaction_id is None:
            return False

        history = self._seen[key]
        if transaction_id in history:
            return True

        history.append(transaction_id)
        return False

    def clear(self) -> None:
        self._seen.clear()


DEVICE_META = DeviceMetaStore()
TRANSACTIONS = TransactionTracker()


def get_device_meta(
    device: DeviceType | None, store: DeviceMetaStore | None = None
) -> DeviceMeta:
    """Return the metadata for a device, or an empty record for a dummy device."""
    if device is None:
        return DeviceMeta()

    if store is None:
        store = DEVICE_META

    return store[str(device.ieee)]
