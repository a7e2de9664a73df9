"""Routers, sensors and switches running community built firmware."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING, Any, Final

from zigpy.exceptions import ZigbeeException
from zigpy.quirks import CustomCluster
import zigpy.types as t
from zigpy.zcl import ClusterType, foundation
from zigpy.zcl.clusters.closures import DoorLock
from zigpy.zcl.clusters.general import (
    AnalogInput,
    Basic,
    LevelControl,
    MultistateInput,
    OnOff,
    OnOffConfiguration,
    PowerConfiguration,
)
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import UserInterface
from zigpy.zcl.clusters.lighting import Color
from zigpy.zcl.clusters.measurement import (
    PM25,
    CarbonDioxideConcentration,
    IlluminanceMeasurement,
    PressureMeasurement,
    RelativeHumidity,
    SoilMoisture,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices import extend as m
from zigpy_devices import reporting
from zigpy_devices.const import META_DEVICE_CONFIG, REPORT_TYPES, RepInterval
from zigpy_devices.converters import ToZigbee, from_zigbee_converter
from zigpy_devices.converters import from_zigbee as fz
from zigpy_devices.converters import to_zigbee as tz
from zigpy_devices.converters.from_zigbee import (
    MULTISTATE_ACTION,
    PTVO_UNIT_NAMES,
    _cached,
)
from zigpy_devices.definition import DefinitionBuilder
from zigpy_devices.exposes import Access
from zigpy_devices.exposes import presets as e
from zigpy_devices.state import get_device_meta
from zigpy_devices.utils import (
    calibrate_and_precision_round_options,
    device_endpoints,
    get_from_lookup,
    get_key,
    has_cluster,
    lux_from_measured_value,
    postfix_with_endpoint_name,
    precision_round,
    require_cluster,
    to_number,
)

if TYPE_CHECKING:
    from zigpy_devices.converters import ToZigbeeMeta
    from zigpy_devices.exposes import Base, Numeric
    from zigpy_devices.typing import DeviceType, EndpointType, KeyValue

_LOGGER = logging.getLogger(__name__)

VENDOR = "Custom devices (DiY)"

SWITCH_TYPES = {"switch": 0x00, "multi-click": 0x02}
MULTI_ZIG_SW_BUTTONS = range(1, 5)

TI_ROUTER_TRANSMIT_POWER = 0x1337
PTVO_DEVICE_CONFIG = 0x8000

PTVO_ACTIONS = ["single", "double", "triple", "hold", "release"]
PTVO_FALLBACK_CHANNELS = range(1, 9)
PTVO_CONFIG_LINE = re.compile(r"^[0-9A-F]+")
PTVO_VALUE_INDEX = re.compile(r"(\d+)$")

PTVO_ALARMS = {
    "g": e.gas,
    "n": e.noise_detected,
    "o": e.occupancy,
    "p": e.presence,
    "m": e.smoke,
    "s": e.sos,
    "t": e.tamper,
    "v": e.vibration,
    "w": e.water_leak,
}

PTVO_ELECTRICAL_SCALING = {
    "dc_current_divisor": 1000,
    "dc_current_multiplier": 1,
    "dc_power_divisor": 10,
    "dc_power_multiplier": 1,
    "dc_voltage_divisor": 100,
    "dc_voltage_multiplier": 1,
    "ac_voltage_divisor": 100,
    "ac_voltage_multiplier": 1,
    "ac_current_divisor": 1000,
    "ac_current_multiplier": 1,
    "ac_power_divisor": 10,
    "ac_power_multiplier": 1,
}


class TiRouterBasic(CustomCluster, Basic):
    class AttributeDefs(Basic.AttributeDefs):
        transmit_power: Final = foundation.ZCLAttributeDef(
            id=TI_ROUTER_TRANSMIT_POWER, type=t.int8s
        )


class ZigUpOnOff(CustomCluster, OnOff):
    """Relay cluster of the ZigUP, also carrying its sensor readings."""

    class AttributeDefs(OnOff.AttributeDefs):
        cpu_temperature: Final = foundation.ZCLAttributeDef(id=0xA191, type=t.Single)
        external_temperature: Final = foundation.ZCLAttributeDef(
            id=0xA192, type=t.Single
        )
        external_humidity: Final = foundation.ZCLAttributeDef(
            id=0xA193, type=t.Single
        )
        s0_counts: Final = foundation.ZCLAttributeDef(id=0xA194, type=t.uint32_t)
        adc_volt: Final = foundation.ZCLAttributeDef(id=0xA195, type=t.Single)
        dig_input: Final = foundation.ZCLAttributeDef(id=0xA196, type=t.uint8_t)
        reason: Final = foundation.ZCLAttributeDef(id=0xA197, type=t.uint8_t)
        ds18b20: Final = foundation.ZCLAttributeDef(
            id=0xA198, type=t.CharacterString
        )


class ThermometerUserInterface(CustomCluster, UserInterface):
    """Display and comfort settings of the z03mmc firmware."""

    class AttributeDefs(UserInterface.AttributeDefs):
        show_smiley: Final = foundation.ZCLAttributeDef(id=0x0010, type=t.Bool)
        enable_display: Final = foundation.ZCLAttributeDef(id=0x0011, type=t.Bool)
        comfort_temperature_min: Final = foundation.ZCLAttributeDef(
            id=0x0102, type=t.int16s
        )
        comfort_temperature_max: Final = foundation.ZCLAttributeDef(
            id=0x0103, type=t.int16s
        )
        comfort_humidity_min: Final = foundation.ZCLAttributeDef(
            id=0x0104, type=t.uint16_t
        )
        comfort_humidity_max: Final = foundation.ZCLAttributeDef(
            id=0x0105, type=t.uint16_t
        )


class CalibratedTemperatureMeasurement(CustomCluster, TemperatureMeasurement):
    class AttributeDefs(TemperatureMeasurement.AttributeDefs):
        temperature_calibration: Final = foundation.ZCLAttributeDef(
            id=0x0010, type=t.int16s
        )


class CalibratedRelativeHumidity(CustomCluster, RelativeHumidity):
    class AttributeDefs(RelativeHumidity.AttributeDefs):
        humidity_calibration: Final = foundation.ZCLAttributeDef(
            id=0x0010, type=t.int16s
        )


class PvvxUserInterface(CustomCluster, UserInterface):
    """Calibration and comfort settings of the ZigbeeTLc firmware, in whole units."""

    class AttributeDefs(UserInterface.AttributeDefs):
        temperature_calibration: Final = foundation.ZCLAttributeDef(
            id=0x0100, type=t.int8s
        )
        humidity_calibration: Final = foundation.ZCLAttributeDef(
            id=0x0101, type=t.int8s
        )
        comfort_temperature_min: Final = foundation.ZCLAttributeDef(
            id=0x0102, type=t.int8s
        )
        comfort_temperature_max: Final = foundation.ZCLAttributeDef(
            id=0x0103, type=t.int8s
        )
        comfort_humidity_min: Final = foundation.ZCLAttributeDef(
            id=0x0104, type=t.uint8_t
        )
        comfort_humidity_max: Final = foundation.ZCLAttributeDef(
            id=0x0105, type=t.uint8_t
        )


@from_zigbee_converter(Basic.cluster_id, REPORT_TYPES)
def tirouter(definition, msg, options, meta) -> KeyValue:
    result: KeyValue = {"linkquality": msg.linkquality}
    transmit_power = msg.data.get(
        "transmit_power", msg.data.get(TI_ROUTER_TRANSMIT_POWER)
    )
    if transmit_power is not None:
        result["transmit_power"] = transmit_power
    return result


async def _tirouter_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    value = int(to_number(value))
    record = foundation.Attribute(
        attrid=TI_ROUTER_TRANSMIT_POWER,
        value=foundation.TypeValue(
            type=foundation.DataTypeId.int8, value=t.int8s(value)
        ),
    )
    cluster = require_cluster(entity, Basic.cluster_id)
    await cluster.write_attributes_raw([record])
    return {"state": {key: value}}


async def _tirouter_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, Basic.cluster_id)
    await cluster.read_attributes([TI_ROUTER_TRANSMIT_POWER])


tirouter_transmit_power = ToZigbee(
    key="transmit_power", convert_set=_tirouter_set, convert_get=_tirouter_get
)


async def _switch_type_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    raw = get_from_lookup(value, SWITCH_TYPES)
    cluster = require_cluster(entity, OnOffConfiguration.cluster_id)
    await cluster.write_attributes({"switch_type": raw})
    return {"state": {key: get_key(SWITCH_TYPES, raw, value)}}


async def _switch_type_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, OnOffConfiguration.cluster_id)
    await cluster.read_attributes(["switch_type"])


multi_zig_sw_switch_type = ToZigbee(
    key=[f"switch_type_{button}" for button in MULTI_ZIG_SW_BUTTONS],
    convert_set=_switch_type_set,
    convert_get=_switch_type_get,
)


# attribute, property, decimals
ZIGUP_READINGS = (
    ("cpu_temperature", "cpu_temperature", 2),
    ("external_temperature", "external_temperature", 1),
    ("external_humidity", "external_humidity", 1),
    ("s0_counts", "s0_counts", None),
    ("adc_volt", "adc_volt", 3),
    ("dig_input", "dig_input", None),
)
ZIGUP_REASONS = {0: "timer", 1: "key", 2: "dig-in"}


@from_zigbee_converter(OnOff.cluster_id, REPORT_TYPES)
def zigup(definition, msg, options, meta) -> KeyValue | None:
    result: KeyValue = {}
    if "on_off" in msg.data:
        result["state"] = "ON" if msg.data["on_off"] else "OFF"

    for attribute, prop, decimals in ZIGUP_READINGS:
        value = msg.data.get(attribute)
        if value is None:
            continue
        result[prop] = value if decimals is None else precision_round(value, decimals)

    if msg.data.get("reason") is not None:
        result["reason"] = ZIGUP_REASONS.get(int(msg.data["reason"]))

    # one wire sensors report `<sensor id>:<temperature>`
    sensor_id, _, temperature = str(msg.data.get("ds18b20") or "").partition(":")
    if sensor_id and temperature:
        result[sensor_id] = precision_round(to_number(temperature), 2)

    return result or None


ZIGUP_LED_COMMANDS = {
    "off": DoorLock.ServerCommandDefs.lock_door.name,
    "on": DoorLock.ServerCommandDefs.unlock_door.name,
    "toggle": DoorLock.ServerCommandDefs.toggle_door.name,
}


async def _zigup_led_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    # the firmware drives its LED through the door lock commands
    command = get_from_lookup(value, ZIGUP_LED_COMMANDS)
    cluster = require_cluster(entity, DoorLock.cluster_id)
    await getattr(cluster, command)(pin_code="")


zigup_lock = ToZigbee(key="led", convert_set=_zigup_led_set)


async def _ptvo_on_off_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    if not has_cluster(entity, OnOff.cluster_id):
        return
    await tz.on_off.convert_get(entity, key, meta)


ptvo_on_off = ToZigbee(
    key="state", convert_set=tz.on_off.convert_set, convert_get=_ptvo_on_off_get
)


@from_zigbee_converter(
    RelativeHumidity.cluster_id, REPORT_TYPES, options=fz.humidity.options
)
def humidity2(definition, msg, options, meta) -> KeyValue | None:
    """Humidity that drops values outside of 0..100 after calibration."""
    value = msg.data.get("measured_value")
    if value is None:
        return None

    value = calibrate_and_precision_round_options(value / 100, options, "humidity")
    if not 0 <= value <= 100:
        return None
    return {postfix_with_endpoint_name("humidity", msg, definition): value}


@from_zigbee_converter(
    IlluminanceMeasurement.cluster_id, REPORT_TYPES, options=fz.illuminance.options
)
def illuminance2(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None

    lux = calibrate_and_precision_round_options(
        lux_from_measured_value(value), options, "illuminance"
    )
    return {postfix_with_endpoint_name("illuminance", msg, definition): lux}


@from_zigbee_converter(
    PressureMeasurement.cluster_id, REPORT_TYPES, options=fz.pressure.options
)
def pressure2(definition, msg, options, meta) -> KeyValue | None:
    if "scaled_value" in msg.data:
        scale = _cached(msg, PressureMeasurement.cluster_id, "scale", 0)
        value = msg.data["scaled_value"] / 10**scale / 100
    elif "measured_value" in msg.data:
        value = float(msg.data["measured_value"])
    else:
        return None

    value = calibrate_and_precision_round_options(value, options, "pressure")
    return {postfix_with_endpoint_name("pressure", msg, definition): value}


@from_zigbee_converter(PowerConfiguration.cluster_id, REPORT_TYPES)
def multi_zig_sw_battery(definition, msg, options, meta) -> KeyValue | None:
    if "battery_voltage" not in msg.data:
        return None
    voltage = msg.data["battery_voltage"] * 100
    return {"battery": min(100, (voltage - 2200) / 8), "voltage": voltage}


@from_zigbee_converter(MultistateInput.cluster_id, REPORT_TYPES)
def multi_zig_sw_switch_buttons(definition, msg, options, meta) -> KeyValue | None:
    if "present_value" not in msg.data:
        return None

    endpoints = definition.get_endpoints(msg.device)
    button = get_key(endpoints, msg.endpoint.endpoint_id)
    if button is None:
        return None

    action = get_from_lookup(msg.data["present_value"], MULTISTATE_ACTION)
    return {"action": f"{button}_{action}"}


@from_zigbee_converter(OnOffConfiguration.cluster_id, REPORT_TYPES)
def multi_zig_sw_switch_config(definition, msg, options, meta) -> KeyValue | None:
    if "switch_type" not in msg.data:
        return None

    # buttons start on endpoint 2
    button = msg.endpoint.endpoint_id - 1
    prop = postfix_with_endpoint_name(f"switch_type_{button}", msg, definition)
    return {prop: get_key(SWITCH_TYPES, int(msg.data["switch_type"]))}


def _ptvo_config(device: DeviceType | None) -> str:
    return get_device_meta(device).get(META_DEVICE_CONFIG, "")


def _ptvo_config_entries(config: str) -> list[tuple[int, str]]:
    """Endpoint id and the rest of every config line that starts with one."""
    entries = []
    for line in re.split(r"[\r\n]+", config):
        match = PTVO_CONFIG_LINE.match(line)
        if match is None:
            continue
        entries.append((int(match.group(0), 16), line[match.end() :]))
    return entries


def _ptvo_text(name: str) -> Base:
    return (
        e.text(name, Access.ALL)
        .with_endpoint(name)
        .with_property(name)
        .with_description("State or sensor value")
    )


def _ptvo_standard_exposes(
    endpoint: EndpointType,
    exposes: list[Base],
    flags: dict[str, bool],
    device_flags: dict[str, bool],
) -> None:
    """Exposes for the clusters an endpoint has, skipping values already exposed."""
    name = f"l{endpoint.endpoint_id}"
    server = ClusterType.Server

    if has_cluster(endpoint, Color.cluster_id, server):
        exposes.append(e.light_brightness_colorxy().with_endpoint(name))
        flags.update(exposed_onoff=True, exposed_analog=True)
        flags["exposed_colorcontrol"] = True
    elif has_cluster(endpoint, LevelControl.cluster_id, server):
        exposes.append(e.light_brightness().with_endpoint(name))
        flags.update(exposed_onoff=True, exposed_analog=True)
        flags["exposed_levelcontrol"] = True

    if has_cluster(endpoint, OnOff.cluster_id, server) and not flags.get(
        "exposed_onoff"
    ):
        exposes.append(e.switch().with_endpoint(name))

    if has_cluster(endpoint, AnalogInput.cluster_id) and not flags.get(
        "exposed_analog"
    ):
        flags["exposed_analog"] = True
        exposes.append(_ptvo_text(name))

    for cluster_id, preset in (
        (TemperatureMeasurement.cluster_id, e.temperature),
        (RelativeHumidity.cluster_id, e.humidity),
        (PressureMeasurement.cluster_id, e.pressure),
        (IlluminanceMeasurement.cluster_id, e.illuminance),
    ):
        if has_cluster(endpoint, cluster_id, server):
            exposes.append(preset().with_endpoint(name))

    if has_cluster(endpoint, CarbonDioxideConcentration.cluster_id, server):
        exposes.append(e.co2())
    if has_cluster(endpoint, PM25.cluster_id, server):
        exposes.append(e.pm25())

    if has_cluster(endpoint, ElectricalMeasurement.cluster_id, server) and not any(
        flags.get(key)
        for key in ("exposed_voltage", "exposed_current", "exposed_power")
    ):
        exposes.append(e.voltage().with_endpoint(name))
        exposes.append(e.current().with_endpoint(name))
        exposes.append(e.power().with_endpoint(name))

    if has_cluster(endpoint, Metering.cluster_id, server) and not flags.get(
        "exposed_energy"
    ):
        exposes.append(e.energy().with_endpoint(name))

    if has_cluster(endpoint, PowerConfiguration.cluster_id, server):
        device_flags["expose_battery"] = True
    if has_cluster(endpoint, MultistateInput.cluster_id):
        device_flags["expose_action"] = True


def _ptvo_value_name(value_id: str) -> tuple[str | None, str, str]:
    """Name, lookup id and index of a configured value id."""
    if value_id.startswith(("mcpm", "ncpm")):
        try:
            return value_id[:4] + str(int(value_id[4:5], 16)), value_id, ""
        except ValueError:
            return value_id, value_id, ""

    match = PTVO_VALUE_INDEX.search(value_id)
    if match is None:
        return None, value_id, ""
    return None, value_id[: match.start()], match.group(1)


def _ptvo_numeric(
    endpoint_name: str, access: Access, items: list[str], flags: dict[str, bool]
) -> Numeric:
    description = items[1] if len(items) > 1 else ""
    unit = items[2] if len(items) > 2 else ""

    name, value_id, index = _ptvo_value_name(items[0])
    lookup_name = PTVO_UNIT_NAMES.get(value_id)
    if name is None:
        name = lookup_name
    if name is None and index:
        name = f"val{index}"
    if name:
        flags[f"exposed_{name}"] = True

    prop = f"{name}_{endpoint_name}" if name else endpoint_name

    if not description:
        description = (
            lookup_name.replace("_", " ", 1) if lookup_name else "Sensor value"
        )
    description = description[:1].upper() + description[1:]
    if index:
        description = f"{description} {index}"

    if not unit and lookup_name:
        unit = value_id

    flags["exposed_analog"] = True
    return (
        e.numeric(prop, access)
        .with_value_min(-9999999)
        .with_value_max(9999999)
        .with_value_step(1)
        .with_description(description)
        .with_unit(unit)
    )


def ptvo_exposes(device: DeviceType | None, options: dict[str, Any]) -> list[Base]:
    """Exposes of a ptvo device, derived from the config string it reports.

    Every config line starts with a hex endpoint id, followed by an access
    character and `value id,description,unit`. Without a config the clusters of
    each endpoint decide what is exposed.
    """
    exposes: list[Base] = []
    device_flags: dict[str, bool] = {}
    config = _ptvo_config(device)

    if device is None:
        for channel in PTVO_FALLBACK_CHANNELS:
            name = f"l{channel}"
            exposes.append(_ptvo_text(name))
            exposes.append(e.switch().with_endpoint(name))
    elif not config:
        for endpoint in device_endpoints(device):
            _ptvo_standard_exposes(endpoint, exposes, {}, device_flags)
    else:
        entries = _ptvo_config_entries(config)
        configured = {endpoint_id for endpoint_id, _ in entries}
        entries += [
            (endpoint.endpoint_id, "")
            for endpoint in device_endpoints(device)
            if endpoint.endpoint_id not in configured
        ]
        entries.sort(key=lambda entry: f"{entry[0]:02d}{entry[1]}")

        endpoint_flags: dict[str, dict[str, bool]] = {}
        for index, (endpoint_id, rest) in enumerate(entries):
            name = f"l{endpoint_id}"
            flags = endpoint_flags.setdefault(name, {})
            access = Access.STATE_SET if rest[:1] in ("W", "*") else Access.STATE
            value_config = rest[1:]
            items = value_config.split(",") if value_config else []
            value_id = items[0] if items else ""

            if value_id == "*":
                flags["exposed_onoff"] = True
                exposes.append(e.switch().with_endpoint(name))
            elif value_id == "#":
                flags["exposed_onoff"] = True
                code = items[1] if len(items) > 1 else ""
                alarm = PTVO_ALARMS.get(code, e.contact)()
                exposes.append(alarm.with_property("state").with_endpoint(name))
            elif items:
                exposes.append(_ptvo_numeric(name, access, items, flags))

            next_id = entries[index + 1][0] if index + 1 < len(entries) else None
            if next_id == endpoint_id:
                continue
            endpoint = device.endpoints.get(endpoint_id)
            if endpoint is not None:
                _ptvo_standard_exposes(endpoint, exposes, flags, device_flags)

    if device_flags.get("expose_action"):
        exposes.append(e.action(PTVO_ACTIONS))
    if device_flags.get("expose_battery"):
        exposes.append(e.battery())

    return exposes


def ptvo_endpoints(device: DeviceType | None) -> dict[str, int]:
    endpoints = {
        f"l{endpoint.endpoint_id}": endpoint.endpoint_id
        for endpoint in device_endpoints(device)
    }

    config = _ptvo_config(device)
    if not config:
        if not endpoints:
            endpoints = {f"l{channel}": channel for channel in PTVO_FALLBACK_CHANNELS}
    else:
        for endpoint_id, _ in _ptvo_config_entries(config):
            endpoints[f"l{endpoint_id}"] = endpoint_id

    endpoints["action"] = 1
    return endpoints


async def configure_ptvo(device, definition) -> None:
    """Store the device config string and the scaling ptvo firmware uses."""
    control = device.endpoints.get(1)
    if control is not None and has_cluster(control, Basic.cluster_id):
        basic = require_cluster(control, Basic.cluster_id)
        try:
            success, _ = await basic.read_attributes([PTVO_DEVICE_CONFIG])
        except (ZigbeeException, asyncio.TimeoutError) as exc:
            _LOGGER.warning("Failed to read the config of %s: %s", device.ieee, exc)
        else:
            config = success.get(PTVO_DEVICE_CONFIG)
            if config:
                get_device_meta(device).set(META_DEVICE_CONFIG, str(config))

    for endpoint in device_endpoints(device):
        server = ClusterType.Server
        if has_cluster(endpoint, ElectricalMeasurement.cluster_id, server):
            reporting.save_cluster_attributes(
                endpoint, ElectricalMeasurement.cluster_id, PTVO_ELECTRICAL_SCALING
            )
        if has_cluster(endpoint, Metering.cluster_id, server):
            reporting.save_metering_multiplier_divisor(endpoint, 1, 1000)


async def configure_ti_router(device, definition) -> None:
    endpoint = device.endpoints[8]
    await reporting.bind(endpoint, [Basic.cluster_id])
    await reporting.configure(
        endpoint,
        Basic.cluster_id,
        reporting.payload("zcl_version", 0, RepInterval.HOUR, 0),
    )


async def configure_zeeflora(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint,
        [
            PowerConfiguration.cluster_id,
            TemperatureMeasurement.cluster_id,
            SoilMoisture.cluster_id,
        ],
    )
    overrides = {"min": 0, "max": RepInterval.HOUR, "change": 0}
    await reporting.battery_voltage(endpoint, overrides)
    await reporting.battery_percentage_remaining(endpoint, overrides)
    await reporting.temperature(endpoint, overrides)
    await reporting.soil_moisture(endpoint, overrides)


async def configure_b_parasite(device, definition) -> None:
    endpoint = device.endpoints[10]
    await reporting.bind(
        endpoint,
        [
            PowerConfiguration.cluster_id,
            TemperatureMeasurement.cluster_id,
            RelativeHumidity.cluster_id,
            SoilMoisture.cluster_id,
        ],
    )
    await reporting.battery_percentage_remaining(endpoint)
    await reporting.temperature(endpoint)
    await reporting.humidity(endpoint)
    await reporting.soil_moisture(endpoint)


async def configure_multi_zig_sw(device, definition) -> None:
    basic = require_cluster(device.endpoints[1], Basic.cluster_id)
    await basic.read_attributes(["model", "sw_build_id", "power_source"])


async def read_thermometer_settings(device, definition) -> None:
    endpoint = device.endpoints[1]
    # older firmware does not know these attributes
    try:
        await require_cluster(endpoint, UserInterface.cluster_id).read_attributes(
            [0x0010, 0x0011, 0x0102, 0x0103, 0x0104, 0x0105]
        )
        await require_cluster(
            endpoint, TemperatureMeasurement.cluster_id
        ).read_attributes([0x0010])
        await require_cluster(endpoint, RelativeHumidity.cluster_id).read_attributes(
            [0x0010]
        )
    except (ZigbeeException, asyncio.TimeoutError) as exc:
        _LOGGER.debug("Failed to read the settings of %s: %s", device.ieee, exc)


def _multi_switch_exposes() -> list[Base]:
    return [
        *(
            e.enum(f"switch_type_{button}", Access.ALL, list(SWITCH_TYPES))
            .with_endpoint(f"button_{button}")
            .with_description("Switch type of the button")
            for button in MULTI_ZIG_SW_BUTTONS
        ),
        e.battery(),
        e.action(PTVO_ACTIONS),
        e.battery_voltage(),
    ]


def _comfort_numerics(
    cluster_id: int, scale: float | None, step: str, temperature_range: int
) -> list[m.Extend]:
    return [
        m.numeric(
            "comfort_temperature_min",
            cluster_id,
            "comfort_temperature_min",
            f"Comfort parameters/Temperature minimum, in {step}°C steps.",
            unit="°C",
            value_min=-temperature_range,
            value_max=temperature_range,
            scale=scale,
        ),
        m.numeric(
            "comfort_temperature_max",
            cluster_id,
            "comfort_temperature_max",
            f"Comfort parameters/Temperature maximum, in {step}°C steps.",
            unit="°C",
            value_min=-temperature_range,
            value_max=temperature_range,
            scale=scale,
        ),
        m.numeric(
            "comfort_humidity_min",
            cluster_id,
            "comfort_humidity_min",
            f"Comfort parameters/Humidity minimum, in {step}% steps.",
            unit="%",
            value_min=0,
            value_max=100,
            scale=scale,
        ),
        m.numeric(
            "comfort_humidity_max",
            cluster_id,
            "comfort_humidity_max",
            f"Comfort parameters/Humidity maximum, in {step}% steps.",
            unit="%",
            value_min=0,
            value_max=100,
            scale=scale,
        ),
    ]


def _temperature_display_mode() -> m.Extend:
    return m.enum_lookup(
        "temperature_display_mode",
        {"celsius": 0, "fahrenheit": 1},
        UserInterface.cluster_id,
        "temperature_display_mode",
        "The units of the temperature displayed on the device screen.",
    )


def _thermometer_sensors() -> list[m.Extend]:
    return [
        m.battery(),
        m.temperature(reporting_overrides={"min": 10, "max": 300, "change": 10}),
        m.humidity(reporting_overrides={"min": 10, "max": 300, "change": 50}),
    ]


(
    DefinitionBuilder(
        "Silabs series 2 router",
        "Silabs",
        "Silabs series 2 adapter with router firmware",
    )
    .fingerprint("ZGA008", "Aeotec", 200)
    .fingerprint("ZB-GW04", "easyiot", 200)
    .fingerprint("ZB-GW04-1v1", "easyiot", 200)
    .fingerprint("ZB-GW04-1v2", "easyiot", 200)
    .fingerprint("SkyConnect", "NabuCasa", 200)
    .fingerprint("SLZB-06M", "SMLIGHT", 200)
    .fingerprint("SLZB-06MG24", "SMLIGHT", 200)
    .fingerprint("SLZB-06MG26", "SMLIGHT", 200)
    .fingerprint("SLZB-07", "SMLIGHT", 200)
    .fingerprint("SLZB-07MG24", "SMLIGHT", 200)
    .fingerprint("DONGLE-E", "SONOFF", 200)
    .fingerprint("MGM240P", "SparkFun", 200)
    .fingerprint("MGM24", "TubesZB", 200)
    .to_zigbee(tz.factory_reset)
    .exposes(
        e.enum("reset", Access.SET, ["reset"]).with_description(
            "Resets and launches the bootloader for flashing. If USB, ensure the "
            "device is already connected to the machine where you intend to flash "
            "it before triggering this."
        )
    )
    .extend(m.link_quality(configure_reporting=True))
    # the adapter reboots into its bootloader and never answers the reset
    .meta(disable_default_response=True)
    .add_to_registry()
)

(
    DefinitionBuilder("ti.router", VENDOR, "Texas Instruments router")
    .zigbee_model("ti.router")
    .from_zigbee(tirouter)
    .to_zigbee(tirouter_transmit_power)
    .exposes(
        e.numeric("transmit_power", Access.ALL)
        .with_value_min(-20)
        .with_value_max(20)
        .with_value_step(1)
        .with_unit("dBm")
        .with_description(
            "Transmit power, supported from firmware 20221102. The max for CC1352 "
            "is 20 dBm and 5 dBm for CC2652 (any higher value is converted to 5dBm)"
        )
    )
    .extend(m.add_custom_cluster(TiRouterBasic))
    .configure(configure_ti_router)
    .add_to_registry()
)

(
    DefinitionBuilder("CC2530.ROUTER", VENDOR, "CC2530 router")
    .zigbee_model("lumi.router")
    .from_zigbee(fz.cc2530_router_led, fz.cc2530_router_meta, fz.ignore_basic_report)
    .to_zigbee(tz.ptvo_switch_trigger)
    .exposes(e.binary("led", Access.STATE, True, False))
    .add_to_registry()
)

(
    DefinitionBuilder("CC2538.ROUTER.V1", VENDOR, "MODKAM stick СС2538 router")
    .zigbee_model("cc2538.router.v1")
    .from_zigbee(fz.ignore_basic_report)
    .add_to_registry()
)

(
    DefinitionBuilder(
        "CC2538.ROUTER.V2",
        VENDOR,
        "MODKAM stick СС2538 router with temperature sensor",
    )
    .zigbee_model("cc2538.router.v2")
    .from_zigbee(fz.ignore_basic_report, fz.device_temperature)
    .exposes(e.device_temperature())
    .add_to_registry()
)

(
    DefinitionBuilder("ptvo.switch", VENDOR, "Multi-functional device")
    .zigbee_model("ptvo.switch")
    .from_zigbee(
        fz.battery,
        fz.on_off,
        fz.ptvo_multistate_action,
        fz.ptvo_switch_uart,
        fz.ptvo_switch_analog_input,
        fz.brightness,
        fz.ignore_basic_report,
        fz.temperature,
        humidity2,
        pressure2,
        illuminance2,
        fz.electrical_measurement,
        fz.metering,
        fz.co2,
    )
    .to_zigbee(
        tz.ptvo_switch_trigger,
        tz.ptvo_switch_uart,
        tz.ptvo_switch_analog_input,
        tz.ptvo_switch_light_brightness,
        ptvo_on_off,
    )
    .exposes(ptvo_exposes)
    .endpoints(ptvo_endpoints)
    .meta(multi_endpoint=True)
    .configure(configure_ptvo)
    .add_to_registry()
)

(
    DefinitionBuilder(
        "DNCKATSD001", VENDOR, "DNCKAT single key wired wall dimmable light switch"
    )
    .zigbee_model("DNCKAT_D001")
    .extend(m.light())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "DNCKATSW001", VENDOR, "DNCKAT single key wired wall light switch"
    )
    .zigbee_model("DNCKAT_S001")
    .extend(m.on_off())
    .add_to_registry()
)


def _dnckat_switch(
    model: str, zigbee_model: str, description: str, endpoints: dict[str, int]
) -> DefinitionBuilder:
    names = list(endpoints)
    return (
        DefinitionBuilder(model, VENDOR, description)
        .zigbee_model(zigbee_model)
        .from_zigbee(fz.dnckat_buttons)
        .extend(m.device_endpoints(endpoints), m.on_off(endpoint_names=names))
        .exposes(
            e.action(
                [f"{action}_{name}" for name in names for action in ("release", "hold")]
            )
        )
    )


_dnckat_switch(
    "DNCKATSW002",
    "DNCKAT_S002",
    "DNCKAT double key wired wall light switch",
    {"left": 1, "right": 2},
).add_to_registry()

_dnckat_switch(
    "DNCKATSW003",
    "DNCKAT_S003",
    "DNCKAT triple key wired wall light switch",
    {"left": 1, "center": 2, "right": 3},
).add_to_registry()

_dnckat_switch(
    "DNCKATSW004",
    "DNCKAT_S004",
    "DNCKAT quadruple key wired wall light switch",
    {"bottom_left": 1, "bottom_right": 2, "top_left": 3, "top_right": 4},
).add_to_registry()

(
    DefinitionBuilder(
        "ZigUP", VENDOR, "CC2530 based ZigBee relais, switch, sensor and router"
    )
    .zigbee_model("ZigUP")
    .from_zigbee(zigup)
    .to_zigbee(tz.on_off, tz.light_color, zigup_lock)
    .extend(m.add_custom_cluster(ZigUpOnOff))
    .exposes(e.switch())
    .add_to_registry()
)

(
    DefinitionBuilder("ZWallRemote0", VENDOR, "Matts Wall Switch Remote")
    .zigbee_model("ZWallRemote0")
    .from_zigbee(fz.command_toggle)
    .exposes(e.action(["toggle"]))
    .add_to_registry()
)

(
    DefinitionBuilder("ZeeFlora", VENDOR, "Flower sensor with rechargeable battery")
    .zigbee_model("ZeeFlora")
    .from_zigbee(fz.temperature, fz.soil_moisture, fz.battery)
    .meta(multi_endpoint=True)
    .configure(configure_zeeflora)
    .exposes(e.soil_moisture(), e.battery(), e.temperature())
    .extend(m.illuminance())
    .add_to_registry()
)

(
    DefinitionBuilder("EFR32MG21.Router.1", VENDOR, "EFR32MG21 Zigbee bridge router")
    .zigbee_model("UT-01")
    .extend(m.force_power_source("Mains (single phase)"))
    .add_to_registry()
)

(
    DefinitionBuilder("EFR32MG21.Router.2", VENDOR, "EFR32MG21 router")
    .zigbee_model("UT-02")
    .add_to_registry()
)

(
    DefinitionBuilder(
        "b-parasite", VENDOR, "b-parasite open source soil moisture sensor"
    )
    .zigbee_model("b-parasite")
    .from_zigbee(fz.temperature, fz.humidity, fz.battery, fz.soil_moisture)
    .exposes(e.temperature(), e.humidity(), e.battery(), e.soil_moisture())
    .configure(configure_b_parasite)
    .extend(m.illuminance(), m.identify())
    .add_to_registry()
)

multi_switch = (
    DefinitionBuilder(
        "MULTI-ZIG-SW", "smarthjemmet.dk", "Multi switch from Smarthjemmet.dk"
    )
    .zigbee_model("MULTI-ZIG-SW")
    .from_zigbee(
        fz.ignore_basic_report,
        multi_zig_sw_switch_buttons,
        multi_zig_sw_battery,
        multi_zig_sw_switch_config,
    )
    .to_zigbee(multi_zig_sw_switch_type)
    .exposes(*_multi_switch_exposes())
    .meta(multi_endpoint=True)
    .endpoints({f"button_{button}": button + 1 for button in MULTI_ZIG_SW_BUTTONS})
    .configure(configure_multi_zig_sw)
)
multi_switch.add_to_registry()

(
    multi_switch.clone("QUAD-ZIG-SW", "FUGA compatible switch from Smarthjemmet.dk")
    .zigbee_model("QUAD-ZIG-SW")
    .add_to_registry()
)

(
    DefinitionBuilder(
        "LYWSD03MMC",
        VENDOR,
        "Xiaomi temperature & humidity sensor with custom firmware",
    )
    .zigbee_model("LYWSD03MMC")
    .extend(
        m.add_endpoint_cluster(1, input_clusters=(PowerConfiguration.cluster_id,)),
        m.add_custom_cluster(
            CalibratedTemperatureMeasurement, endpoint_id=1, add_if_missing=True
        ),
        m.add_custom_cluster(
            CalibratedRelativeHumidity, endpoint_id=1, add_if_missing=True
        ),
        m.add_custom_cluster(
            ThermometerUserInterface, endpoint_id=1, add_if_missing=True
        ),
        *_thermometer_sensors(),
        _temperature_display_mode(),
        m.binary(
            "show_smiley",
            UserInterface.cluster_id,
            "show_smiley",
            "Whether to show a smiley on the device screen.",
            value_on=("SHOW", 1),
            value_off=("HIDE", 0),
        ),
        m.binary(
            "enable_display",
            UserInterface.cluster_id,
            "enable_display",
            "Whether to turn display on/off.",
            value_on=("ON", 1),
            value_off=("OFF", 0),
        ),
        m.numeric(
            "temperature_calibration",
            TemperatureMeasurement.cluster_id,
            "temperature_calibration",
            "The temperature calibration offset is set in 0.01° steps.",
            unit="°C",
            value_min=-100,
            value_max=100,
            value_step=0.01,
            scale=100,
        ),
        m.numeric(
            "humidity_calibration",
            RelativeHumidity.cluster_id,
            "humidity_calibration",
            "The humidity calibration offset is set in 0.01 % steps.",
            unit="%",
            value_min=-100,
            value_max=100,
            value_step=0.01,
            scale=100,
        ),
        *_comfort_numerics(UserInterface.cluster_id, 100, "0.01", 100),
    )
    .ota()
    .configure(read_thermometer_settings)
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MHO-C401N",
        VENDOR,
        "Xiaomi temperature & humidity sensor with custom firmware",
    )
    .zigbee_model("MHO-C401N")
    .extend(
        m.add_endpoint_cluster(
            1,
            input_clusters=(
                PowerConfiguration.cluster_id,
                TemperatureMeasurement.cluster_id,
                RelativeHumidity.cluster_id,
            ),
            output_clusters=(UserInterface.cluster_id,),
        ),
        m.add_custom_cluster(
            PvvxUserInterface,
            endpoint_id=1,
            add_if_missing=True,
        ),
        *_thermometer_sensors(),
        _temperature_display_mode(),
        m.binary(
            "show_smile",
            UserInterface.cluster_id,
            "schedule_programming_visibility",
            "Whether to show a smile on the device screen.",
            value_on=("HIDE", 1),
            value_off=("SHOW", 0),
        ),
        m.numeric(
            "temperature_calibration",
            UserInterface.cluster_id,
            "temperature_calibration",
            "The temperature calibration, in 0.1° steps. Requires v0.1.1.6 or newer.",
            unit="°C",
            value_min=-12.7,
            value_max=12.7,
            value_step=0.1,
            scale=10,
        ),
        m.numeric(
            "humidity_calibration",
            UserInterface.cluster_id,
            "humidity_calibration",
            "The humidity offset is set in 0.1 % steps. Requires v0.1.1.6 or newer.",
            unit="%",
            value_min=-12.7,
            value_max=12.7,
            value_step=0.1,
            scale=10,
        ),
        *_comfort_numerics(UserInterface.cluster_id, None, "1", 127),
    )
    .ota()
    .add_to_registry()
)


def _counter(endpoint_id: int, counter: int) -> Base:
    return (
        e.numeric(f"l{endpoint_id}", Access.ALL)
        .with_value_min(-999999999)
        .with_value_max(999999999)
        .with_description(
            f"Counter {counter} value. Write zero or positive value to set a counter "
            "value. Write a negative value to set a wakeup interval in minutes"
        )
    )


(
    DefinitionBuilder("ptvo_counter_2ch", VENDOR, "2 channel counter")
    .zigbee_model("ptvo_counter_2ch")
    .from_zigbee(
        fz.ignore_basic_report, fz.battery, fz.ptvo_switch_analog_input, fz.on_off
    )
    .to_zigbee(tz.ptvo_switch_trigger, tz.ptvo_switch_analog_input, tz.on_off)
    .exposes(
        e.battery(),
        _counter(3, 1),
        _counter(5, 2),
        e.switch().with_endpoint("l6"),
        e.battery_voltage(),
    )
    .meta(multi_endpoint=True)
    .endpoints({"l3": 3, "l5": 5, "l6": 6})
    .add_to_registry()
)

(
    DefinitionBuilder(
        "alab.switch", "Alab", "Four channel relay board with four inputs"
    )
    .zigbee_model("alab.switch")
    .extend(
        m.device_endpoints(
            {
                "l1": 1,
                "l2": 2,
                "l3": 3,
                "l4": 4,
                "in1": 5,
                "in2": 6,
                "in3": 7,
                "in4": 8,
            }
        ),
        m.on_off(
            endpoint_names=["l1", "l2", "l3", "l4"],
            power_on_behavior=False,
            configure_reporting=False,
        ),
        m.commands_on_off(endpoint_names=["l1", "l2", "l3", "l4"]),
        m.numeric(
            "input_state",
            AnalogInput.cluster_id,
            "present_value",
            "Input state",
            value_min=0,
            value_max=1,
            endpoint_names=["in1", "in2", "in3", "in4"],
        ),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("FanBee", "Lorenz Brun", "Fan with valve")
    .zigbee_model("FanBee1", "Fanbox2")
    .from_zigbee(fz.on_off, fz.fan_speed)
    .to_zigbee(tz.on_off, tz.fan_speed)
    .exposes(e.fan().with_state().with_speed(0, 254))
    .add_to_registry()
)
