"""Vendor catalogs, importing this package adds them to the default registry."""

from __future__ import annotations

from zigpy_devices.devices import custom_devices_diy, schneider_electric, sercomm

__all__ = ["custom_devices_diy", "schneider_electric", "sercomm"]
