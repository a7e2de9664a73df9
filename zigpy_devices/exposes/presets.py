"""Ready made exposes. Every call returns a new object."""

from __future__ import annotations

from typing import Any

from zigpy_devices.const import ENTITY_CATEGORY_CONFIG, ENTITY_CATEGORY_DIAGNOSTIC
from zigpy_devices.exposes import (
    Access,
    Binary,
    Climate,
    Cover,
    Enum,
    Fan,
    Light,
    Numeric,
    Switch,
    Text,
)


def binary(name: str, access: Access, value_on: Any, value_off: Any) -> Binary:
    return Binary(name, access, value_on, value_off)


def numeric(name: str, access: Access) -> Numeric:
    return Numeric(name, access)


def enum(name: str, access: Access, values: list[Any]) -> Enum:
    return Enum(name, access, values)


def text(name: str, access: Access) -> Text:
    return Text(name, access)


def switch() -> Switch:
    return Switch().with_state()


def light_brightness() -> Light:
    return (
        Light()
        .with_state(description="On/off state of this light")
        .with_brightness()
    )


def light_brightness_colorxy() -> Light:
    return light_brightness().with_color_xy()


def cover_position() -> Cover:
    return Cover().with_state().with_position()


def cover_position_tilt() -> Cover:
    return cover_position().with_tilt()


def climate() -> Climate:
    return Climate()


def fan() -> Fan:
    return Fan().with_state()


def action(values: list[str]) -> Enum:
    return Enum("action", Access.STATE, values).with_description(
        "Triggered action (e.g. a button click)"
    )


def battery() -> Numeric:
    return (
        Numeric("battery", Access.STATE_GET)
        .with_unit("%")
        .with_value_min(0)
        .with_value_max(100)
        .with_description("Remaining battery in %")
        .with_category(ENTITY_CATEGORY_DIAGNOSTIC)
    )


def battery_low() -> Binary:
    return (
        Binary("battery_low", Access.STATE, True, False)
        .with_description("Indicates if the battery of this device is almost empty")
        .with_category(ENTITY_CATEGORY_DIAGNOSTIC)
    )


def battery_voltage() -> Numeric:
    return (
        Numeric("voltage", Access.STATE)
        .with_unit("mV")
        .with_description("Voltage of the battery in millivolts")
        .with_category(ENTITY_CATEGORY_DIAGNOSTIC)
    )


def _alarm(name: str, description: str) -> Binary:
    return Binary(name, Access.STATE, True, False).with_description(description)


def contact() -> Binary:
    return Binary("contact", Access.STATE, False, True).with_description(
        "Indicates if the contact is closed (= true) or open (= false)"
    )


def occupancy() -> Binary:
    return _alarm("occupancy", "Indicates whether the device detected occupancy")


def presence() -> Binary:
    return _alarm("presence", "Indicates whether the device detected presence")


def tamper() -> Binary:
    return _alarm("tamper", "Indicates whether the device is tampered")


def water_leak() -> Binary:
    return _alarm("water_leak", "Indicates whether the device detected a water leak")


def gas() -> Binary:
    return _alarm("gas", "Indicates whether the device detected gas")


def smoke() -> Binary:
    return _alarm("smoke", "Indicates whether the device detected smoke")


def sos() -> Binary:
    return _alarm("sos", "SOS alarm").with_label("SOS")


def vibration() -> Binary:
    return _alarm("vibration", "Indicates whether the device detected vibration")


def noise_detected() -> Binary:
    return _alarm("noise_detected", "Indicates whether the device detected noise")


def _measurement(name: str, unit: str, description: str) -> Numeric:
    return (
        Numeric(name, Access.STATE_GET).with_unit(unit).with_description(description)
    )


def temperature() -> Numeric:
    return _measurement("temperature", "°C", "Measured temperature value")


def device_temperature() -> Numeric:
    return _measurement(
        "device_temperature", "°C", "Temperature of the device"
    ).with_category(ENTITY_CATEGORY_DIAGNOSTIC)


def humidity() -> Numeric:
    return _measurement("humidity", "%", "Measured relative humidity")


def pressure() -> Numeric:
    return _measurement("pressure", "hPa", "The measured atmospheric pressure")


def illuminance() -> Numeric:
    return _measurement("illuminance", "lx", "Measured illuminance")


def soil_moisture() -> Numeric:
    return _measurement("soil_moisture", "%", "Measured soil moisture value")


def co2() -> Numeric:
    return _measurement(
        "co2", "ppm", "The measured CO2 (carbon dioxide) value"
    ).with_label("CO2")


def pm25() -> Numeric:
    return _measurement(
        "pm25", "µg/m³", "Measured PM2.5 (particulate matter) concentration"
    ).with_label("PM25")


def voltage() -> Numeric:
    return _measurement("voltage", "V", "Measured electrical potential value")


def current() -> Numeric:
    return _measurement("current", "A", "Instantaneous measured electrical current")


def power() -> Numeric:
    return _measurement("power", "W", "Instantaneous measured power")


def power_apparent() -> Numeric:
    return _measurement(
        "power_apparent", "VA", "Instantaneous measured apparent power"
    )


def power_factor() -> Numeric:
    return Numeric("power_factor", Access.STATE).with_description(
        "Instantaneous measured power factor"
    )


def energy() -> Numeric:
    return _measurement("energy", "kWh", "Sum of consumed energy")


def produced_energy() -> Numeric:
    return _measurement("produced_energy", "kWh", "Sum of produced energy")


def ac_frequency() -> Numeric:
    return _measurement(
        "ac_frequency", "Hz", "Measured electrical AC frequency"
    ).with_label("AC frequency")


def linkquality() -> Numeric:
    return (
        Numeric("linkquality", Access.STATE)
        .with_unit("lqi")
        .with_value_min(0)
        .with_value_max(255)
        .with_description("Link quality (signal strength)")
        .with_category(ENTITY_CATEGORY_DIAGNOSTIC)
    )


def keypad_lockout() -> Enum:
    return Enum(
        "keypad_lockout", Access.ALL, ["unlock", "lock1", "lock2"]
    ).with_description("Enables/disables physical input on the device")


def power_on_behavior(values: list[str] | None = None) -> Enum:
    if values is None:
        values = ["off", "on", "toggle", "previous"]
    return (
        Enum("power_on_behavior", Access.ALL, values)
        .with_description(
            "Controls the behavior when the device is powered on after power loss"
        )
        .with_category(ENTITY_CATEGORY_CONFIG)
    )


def identify() -> Enum:
    return (
        Enum("identify", Access.SET, ["identify"])
        .with_description("Initiate device identification")
        .with_category(ENTITY_CATEGORY_CONFIG)
    )
