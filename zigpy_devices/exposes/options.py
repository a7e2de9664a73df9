"""Exposes describing per-device options rather than device state."""

from __future__ import annotations

from zigpy_devices.config import (
    CONF_INVERT_COVER,
    CONF_MEASUREMENT_POLL_INTERVAL,
    CONF_TRANSITION,
)
from zigpy_devices.config.validators import MAX_PRECISION
from zigpy_devices.exposes import Access, Binary, Numeric


def calibration(name: str, calibration_type: str = "absolute") -> Numeric:
    """Offset option for a measurement, either absolute or a percentage."""
    unit = "%" if calibration_type == "percentual" else None
    option = Numeric(f"{name}_calibration", Access.SET).with_description(
        f"Calibrates the {name.replace('_', ' ')} value"
        f" ({calibration_type} offset), takes into effect on next report of device."
    )
    if unit is not None:
        option.with_unit(unit)
    return option


def precision(name: str) -> Numeric:
    return (
        Numeric(f"{name}_precision", Access.SET)
        .with_value_min(0)
        .with_value_max(MAX_PRECISION)
        .with_description(
            f"Number of digits after decimal point for {name.replace('_', ' ')},"
            " takes into effect on next report of device."
        )
    )


def invert_cover() -> Binary:
    return Binary(CONF_INVERT_COVER, Access.SET, True, False).with_description(
        "Inverts the cover position, false: open=100,close=0, true: open=0,close=100"
    )


def measurement_poll_interval(extra_note: str = "") -> Numeric:
    return (
        Numeric(CONF_MEASUREMENT_POLL_INTERVAL, Access.SET)
        .with_value_min(-1)
        .with_unit("s")
        .with_description(
            "This device does not support reporting some values, therefore they are"
            " polled. Set -1 to disable polling." + extra_note
        )
    )


def transition() -> Numeric:
    return (
        Numeric(CONF_TRANSITION, Access.SET)
        .with_value_min(0)
        .with_unit("s")
        .with_description(
            "Controls the transition time (in seconds) of on/off, brightness,"
            " color temperature (if applicable) and color (if applicable) changes."
        )
    )
