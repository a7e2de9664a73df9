"""Generic outbound converters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from zigpy.zcl import foundation
from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import (
    AnalogInput,
    Basic,
    Identify,
    LevelControl,
    MultistateValue,
    OnOff,
)
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import Fan, Thermostat, UserInterface
from zigpy.zcl.clusters.lighting import Ballast, Color
import zigpy.types as t

from zigpy_devices.config import CONF_INVERT_COVER, CONF_TRANSITION
from zigpy_devices.const import MANUFACTURER_CODE_SCHNEIDER_ELECTRIC
from zigpy_devices.converters import ToZigbee
from zigpy_devices.converters.from_zigbee import (
    CONTROL_SEQUENCE_OF_OPERATION,
    FAN_MODE,
    KEYPAD_LOCKOUT,
    POWER_ON_BEHAVIOR,
    SYSTEM_MODE,
    TEMPERATURE_DISPLAY_MODE,
    WISER_CONTROL_MODE,
    WISER_DIMMER_MODE,
)
from zigpy_devices.exceptions import UnsupportedValue
from zigpy_devices.exposes import options as exposes_options
from zigpy_devices.utils import (
    device_endpoints,
    get_cluster,
    get_from_lookup,
    get_key,
    has_cluster,
    require_cluster,
    to_number,
)

if TYPE_CHECKING:
    from zigpy_devices.converters import ToZigbeeMeta
    from zigpy_devices.typing import EndpointType, KeyValue

_LOGGER = logging.getLogger(__name__)

IDENTIFY_TIMEOUT_DEFAULT = 3


def _reverse(lookup: dict[int, str]) -> dict[str, int]:
    return {value: key for key, value in lookup.items()}


def message_without_endpoint(meta: ToZigbeeMeta) -> dict[str, Any]:
    """The message of a write with the endpoint postfix removed from its keys."""
    if meta.endpoint_name is None:
        return dict(meta.message)

    postfix = f"_{meta.endpoint_name}"
    return {
        key[: -len(postfix)] if key.endswith(postfix) else key: value
        for key, value in meta.message.items()
    }


def transition_time(meta: ToZigbeeMeta) -> int:
    """Transition of a write in tenths of a second."""
    transition = message_without_endpoint(meta).get(
        CONF_TRANSITION, meta.options.get(CONF_TRANSITION, 0)
    )
    return round(to_number(transition or 0) * 10)


def _state_key(meta: ToZigbeeMeta, name: str) -> str:
    if meta.endpoint_name is None:
        return name
    return f"{name}_{meta.endpoint_name}"


async def _on_off_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    message = message_without_endpoint(meta)
    state = str(message.get("state", value if key == "state" else "on")).lower()
    if state not in ("on", "off", "toggle"):
        raise UnsupportedValue(f"State '{state}' is not one of on, off, toggle")

    cluster = require_cluster(entity, OnOff.cluster_id)

    on_time = message.get("on_time")
    off_wait_time = message.get("off_wait_time")
    if state == "on" and (on_time is not None or off_wait_time is not None):
        on_time = to_number(on_time or 0)
        off_wait_time = to_number(off_wait_time or 0)
        await cluster.on_with_timed_off(
            0, round(on_time * 10), round(off_wait_time * 10)
        )
        return {"state": {"state": "ON"}}

    await getattr(cluster, state)()

    if state == "toggle":
        current = meta.state.get(_state_key(meta, "state"))
        if current is None:
            return {}
        return {"state": {"state": "OFF" if current == "ON" else "ON"}}

    return {"state": {"state": state.upper()}}


async def _on_off_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, OnOff.cluster_id)
    await cluster.read_attributes(["on_off"])


on_off = ToZigbee(
    key=("state", "on_time", "off_wait_time"),
    convert_set=_on_off_set,
    convert_get=_on_off_get,
)


def _requested_brightness(message: dict[str, Any]) -> float | None:
    if message.get("brightness") is not None:
        return to_number(message["brightness"])
    if message.get("brightness_percent") is not None:
        return round(to_number(message["brightness_percent"]) * 2.55)
    return None


async def _light_onoff_brightness_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    """Switch a light and move it to a brightness in one step."""
    message = message_without_endpoint(meta)
    state = message.get("state")
    state = str(state).lower() if state is not None else None
    level = _requested_brightness(message)

    if level is None or state in ("off", "toggle"):
        if state is None:
            return {}
        return await _on_off_set(entity, "state", state, meta)

    level = int(min(max(level, 0), 254))
    cluster = require_cluster(entity, LevelControl.cluster_id)
    await cluster.move_to_level_with_on_off(level, transition_time(meta))

    if level == 0:
        return {"state": {"state": "OFF"}}
    return {"state": {"state": "ON", "brightness": level}}


async def _light_onoff_brightness_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    if key == "brightness":
        cluster = require_cluster(entity, LevelControl.cluster_id)
        await cluster.read_attributes(["current_level"])
    elif key == "state":
        await _on_off_get(entity, key, meta)


light_onoff_brightness = ToZigbee(
    key=("state", "brightness", "brightness_percent", "transition"),
    convert_set=_light_onoff_brightness_set,
    convert_get=_light_onoff_brightness_get,
    options=(exposes_options.transition(),),
)


def _srgb_to_linear(channel: float) -> float:
    channel /= 255
    if channel > 0.04045:
        return ((channel + 0.055) / 1.055) ** 2.4
    return channel / 12.92


def rgb_to_xy(red: float, green: float, blue: float) -> tuple[float, float]:
    """CIE 1931 chromaticity of an sRGB color."""
    red, green, blue = (_srgb_to_linear(channel) for channel in (red, green, blue))
    x = red * 0.4124 + green * 0.3576 + blue * 0.1805
    y = red * 0.2126 + green * 0.7152 + blue * 0.0722
    z = red * 0.0193 + green * 0.1192 + blue * 0.9505
    total = x + y + z
    if total == 0:
        return 0.0, 0.0
    return round(x / total, 4), round(y / total, 4)


def _requested_xy(color: dict[str, Any]) -> tuple[float, float] | None:
    if "x" in color and "y" in color:
        return to_number(color["x"]), to_number(color["y"])

    if "hex" in color:
        text = str(color["hex"]).lstrip("#")
        try:
            rgb = bytes.fromhex(text)
        except ValueError as exc:
            raise UnsupportedValue(f"Invalid hex color '{color['hex']}'") from exc
        if len(rgb) != 3:
            raise UnsupportedValue(f"Invalid hex color '{color['hex']}'")
        return rgb_to_xy(*rgb)

    if all(channel in color for channel in ("r", "g", "b")):
        return rgb_to_xy(*(to_number(color[channel]) for channel in ("r", "g", "b")))

    return None


async def _light_color_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    if isinstance(value, str):
        value = {"hex": value}
    if not isinstance(value, dict):
        raise UnsupportedValue(f"Color must be an object, not {value!r}")

    cluster = require_cluster(entity, Color.cluster_id)

    if "hue" in value and "saturation" in value:
        hue = to_number(value["hue"]) % 360
        saturation = min(max(to_number(value["saturation"]), 0), 100)
        await cluster.move_to_hue_and_saturation(
            hue=round(hue * 254 / 360),
            saturation=round(saturation * 2.54),
            transition_time=transition_time(meta),
        )
        return {
            "state": {
                "color": {"hue": hue, "saturation": saturation},
                "color_mode": "hs",
            }
        }

    xy = _requested_xy(value)
    if xy is None:
        raise UnsupportedValue(f"Unsupported color {value!r}")

    x, y = xy
    await cluster.move_to_color(
        color_x=round(x * 65535),
        color_y=round(y * 65535),
        transition_time=transition_time(meta),
    )
    return {"state": {"color": {"x": x, "y": y}, "color_mode": "xy"}}


async def _light_color_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, Color.cluster_id)
    await cluster.read_attributes(
        ["color_mode", "current_x", "current_y", "current_hue", "current_saturation"]
    )


light_color = ToZigbee(
    key="color",
    convert_set=_light_color_set,
    convert_get=_light_color_get,
    options=(exposes_options.transition(),),
)


ON_LEVEL = {"previous": 0xFF}
CURRENT_LEVEL_STARTUP = {"minimum": 0x00, "previous": 0xFF}


async def _level_config_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    if not isinstance(value, dict):
        raise UnsupportedValue(f"level_config must be an object, not {value!r}")

    cluster = require_cluster(entity, LevelControl.cluster_id)
    attributes: dict[str, Any] = {}

    if "on_off_transition_time" in value:
        attributes["on_off_transition_time"] = int(
            to_number(value["on_off_transition_time"])
        )
    if "on_level" in value:
        attributes["on_level"] = get_from_lookup(
            value["on_level"], ON_LEVEL, default=None
        )
        if attributes["on_level"] is None:
            attributes["on_level"] = int(to_number(value["on_level"]))
    if "current_level_startup" in value:
        startup = get_from_lookup(
            value["current_level_startup"], CURRENT_LEVEL_STARTUP, default=None
        )
        if startup is None:
            startup = int(to_number(value["current_level_startup"]))
        attributes["start_up_current_level"] = startup

    if attributes:
        await cluster.write_attributes(attributes)

    return {"state": {"level_config": dict(value)}}


async def _level_config_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, LevelControl.cluster_id)
    await cluster.read_attributes(
        ["on_off_transition_time", "on_level", "start_up_current_level"]
    )


level_config = ToZigbee(
    key="level_config",
    convert_set=_level_config_set,
    convert_get=_level_config_get,
)


def _attribute_converter(
    cluster_id: int,
    attribute: str,
    prop: str,
    lookup: dict[str, int] | None = None,
    manufacturer: int | None = None,
) -> ToZigbee:
    """Converter writing and reading a single attribute, optionally through a lookup."""

    async def convert_set(
        entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
    ) -> KeyValue:
        cluster = require_cluster(entity, cluster_id)
        if lookup is not None:
            raw = get_from_lookup(value, lookup)
            value = get_key(lookup, raw, value)
        else:
            raw = int(to_number(value))
        await cluster.write_attributes({attribute: raw}, manufacturer=manufacturer)
        return {"state": {key: value}}

    async def convert_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
        cluster = require_cluster(entity, cluster_id)
        await cluster.read_attributes([attribute], manufacturer=manufacturer)

    return ToZigbee(key=prop, convert_set=convert_set, convert_get=convert_get)


power_on_behavior = _attribute_converter(
    OnOff.cluster_id,
    "start_up_on_off",
    "power_on_behavior",
    lookup=_reverse(POWER_ON_BEHAVIOR),
)

BALLAST_ATTRIBUTES = {
    "ballast_minimum_level": "min_level",
    "ballast_maximum_level": "max_level",
    "ballast_power_on_level": "power_on_level",
}


async def _ballast_config_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    cluster = require_cluster(entity, Ballast.cluster_id)

    if key == "ballast_config":
        if not isinstance(value, dict):
            raise UnsupportedValue(f"ballast_config must be an object, not {value!r}")
        attributes = {
            BALLAST_ATTRIBUTES[name]: int(to_number(level))
            for name, level in value.items()
            if name in BALLAST_ATTRIBUTES
        }
        await cluster.write_attributes(attributes)
        state = {name: value[name] for name in value if name in BALLAST_ATTRIBUTES}
        return {"state": state}

    await cluster.write_attributes({BALLAST_ATTRIBUTES[key]: int(to_number(value))})
    return {"state": {key: value}}


async def _ballast_config_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    cluster = require_cluster(entity, Ballast.cluster_id)
    if key == "ballast_config":
        await cluster.read_attributes(
            [
                "physical_min_level",
                "physical_max_level",
                "ballast_status",
                *BALLAST_ATTRIBUTES.values(),
            ]
        )
    else:
        await cluster.read_attributes([BALLAST_ATTRIBUTES[key]])


ballast_config = ToZigbee(
    key=("ballast_config", *BALLAST_ATTRIBUTES),
    convert_set=_ballast_config_set,
    convert_get=_ballast_config_get,
)

SCHNEIDER_DIMMER_MODE = {"RC": 1, "RL": 2}


def _control_mode_converter(lookup: dict[str, int]) -> ToZigbee:
    """Dimming mode kept in the manufacturer specific ballast attribute 0xE000."""

    async def convert_set(
        entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
    ) -> KeyValue:
        raw = get_from_lookup(value, lookup)
        record = foundation.Attribute(
            attrid=WISER_CONTROL_MODE,
            value=foundation.TypeValue(
                type=foundation.DataTypeId.enum8, value=t.uint8_t(raw)
            ),
        )
        cluster = require_cluster(entity, Ballast.cluster_id)
        await cluster.write_attributes_raw(
            [record], manufacturer=MANUFACTURER_CODE_SCHNEIDER_ELECTRIC
        )
        return {"state": {key: get_key(lookup, raw, value)}}

    async def convert_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
        cluster = require_cluster(entity, Ballast.cluster_id)
        await cluster.read_attributes(
            [WISER_CONTROL_MODE], manufacturer=MANUFACTURER_CODE_SCHNEIDER_ELECTRIC
        )

    return ToZigbee(key="dimmer_mode", convert_set=convert_set, convert_get=convert_get)


wiser_dimmer_mode = _control_mode_converter(_reverse(WISER_DIMMER_MODE))
schneider_dimmer_mode = _control_mode_converter(SCHNEIDER_DIMMER_MODE)

COVER_COMMANDS = {"open": "up_open", "close": "down_close", "stop": "stop"}


async def _cover_state_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    command = get_from_lookup(value, COVER_COMMANDS)
    cluster = require_cluster(entity, WindowCovering.cluster_id)
    await getattr(cluster, command)()


cover_state = ToZigbee(key="state", convert_set=_cover_state_set)


def _cover_inverted(meta: ToZigbeeMeta) -> bool:
    invert = bool(meta.options.get(CONF_INVERT_COVER, False))
    if meta.definition is not None and meta.definition.meta.cover_inverted:
        invert = not invert
    return invert


async def _cover_position_tilt_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    position = int(to_number(value))
    if not 0 <= position <= 100:
        raise UnsupportedValue(f"{key} must be within 0..100, not {value!r}")

    target = position if _cover_inverted(meta) else 100 - position
    cluster = require_cluster(entity, WindowCovering.cluster_id)
    if key == "position":
        await cluster.go_to_lift_percentage(target)
    else:
        await cluster.go_to_tilt_percentage(target)
    return {"state": {key: position}}


async def _cover_position_tilt_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    cluster = require_cluster(entity, WindowCovering.cluster_id)
    if key == "position":
        await cluster.read_attributes(["current_position_lift_percentage"])
    else:
        await cluster.read_attributes(["current_position_tilt_percentage"])


cover_position_tilt = ToZigbee(
    key=("position", "tilt"),
    convert_set=_cover_position_tilt_set,
    convert_get=_cover_position_tilt_get,
    options=(exposes_options.invert_cover(),),
)


async def _occupied_heating_setpoint_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    # Setpoints move in steps of 0.5 °C
    setpoint = round(to_number(value) * 2) / 2
    cluster = require_cluster(entity, Thermostat.cluster_id)
    await cluster.write_attributes({"occupied_heating_setpoint": round(setpoint * 100)})
    return {"state": {key: setpoint}}


async def _occupied_heating_setpoint_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    cluster = require_cluster(entity, Thermostat.cluster_id)
    await cluster.read_attributes(["occupied_heating_setpoint"])


thermostat_occupied_heating_setpoint = ToZigbee(
    key="occupied_heating_setpoint",
    convert_set=_occupied_heating_setpoint_set,
    convert_get=_occupied_heating_setpoint_get,
)

thermostat_system_mode = _attribute_converter(
    Thermostat.cluster_id, "system_mode", "system_mode", _reverse(SYSTEM_MODE)
)

thermostat_control_sequence_of_operation = _attribute_converter(
    Thermostat.cluster_id,
    "ctrl_sequence_of_oper",
    "control_sequence_of_operation",
    _reverse(CONTROL_SEQUENCE_OF_OPERATION),
)

thermostat_keypad_lockout = _attribute_converter(
    UserInterface.cluster_id,
    "keypad_lockout",
    "keypad_lockout",
    _reverse(KEYPAD_LOCKOUT),
)

thermostat_temperature_display_mode = _attribute_converter(
    UserInterface.cluster_id,
    "temperature_display_mode",
    "temperature_display_mode",
    _reverse(TEMPERATURE_DISPLAY_MODE),
)


def _read_only(cluster_id: int, attribute: str, prop: str) -> ToZigbee:
    async def convert_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
        cluster = require_cluster(entity, cluster_id)
        await cluster.read_attributes([attribute])

    return ToZigbee(key=prop, convert_get=convert_get)


thermostat_local_temperature = _read_only(
    Thermostat.cluster_id, "local_temperature", "local_temperature"
)
thermostat_running_state = _read_only(
    Thermostat.cluster_id, "running_state", "running_state"
)
electrical_measurement_power = _read_only(
    ElectricalMeasurement.cluster_id, "active_power", "power"
)


async def _fan_mode_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    raw = get_from_lookup(value, _reverse(FAN_MODE))
    mode = FAN_MODE[raw]
    cluster = require_cluster(entity, Fan.cluster_id)
    await cluster.write_attributes({"fan_mode": raw})
    return {"state": {"fan_mode": mode, "fan_state": "OFF" if mode == "off" else "ON"}}


async def _fan_mode_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, Fan.cluster_id)
    await cluster.read_attributes(["fan_mode"])


fan_mode = ToZigbee(
    key=("fan_mode", "fan_state"), convert_set=_fan_mode_set, convert_get=_fan_mode_get
)


async def _fan_speed_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    speed = int(min(max(to_number(value), 0), 254))
    cluster = require_cluster(entity, LevelControl.cluster_id)
    await cluster.move_to_level_with_on_off(speed, 0)
    return {"state": {"speed": speed}}


async def _fan_speed_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, LevelControl.cluster_id)
    await cluster.read_attributes(["current_level"])


fan_speed = ToZigbee(
    key="speed", convert_set=_fan_speed_set, convert_get=_fan_speed_get
)


async def _factory_reset_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    cluster = require_cluster(entity, Basic.cluster_id)
    await cluster.reset_fact_default()


factory_reset = ToZigbee(key=("reset", "factory_reset"), convert_set=_factory_reset_set)


async def _identify_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    timeout = meta.options.get("identify_timeout", IDENTIFY_TIMEOUT_DEFAULT)
    cluster = require_cluster(entity, Identify.cluster_id)
    await cluster.identify(int(to_number(timeout)))


identify = ToZigbee(key="identify", convert_set=_identify_set)


async def _ptvo_switch_trigger_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    value = int(to_number(value))
    if not value:
        return None

    cluster = require_cluster(entity, OnOff.cluster_id)
    if key == "trigger":
        await cluster.on_with_timed_off(0, value, 0)
    else:
        await cluster.configure_reporting("on_off", value, value, 0)
    return None


ptvo_switch_trigger = ToZigbee(
    key=("trigger", "interval"), convert_set=_ptvo_switch_trigger_set
)

MULTISTATE_VALUE_STATE_TEXT = 0x000E


async def _ptvo_switch_uart_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    """Send text to the UART of the device through the multistate value cluster."""
    if not value:
        return

    record = foundation.Attribute(
        attrid=MULTISTATE_VALUE_STATE_TEXT,
        value=foundation.TypeValue(
            type=foundation.DataTypeId.string, value=t.CharacterString(str(value))
        ),
    )

    target = entity
    for endpoint in device_endpoints(meta.device):
        if has_cluster(endpoint, MultistateValue.cluster_id):
            target = endpoint
            break

    cluster = require_cluster(target, MultistateValue.cluster_id)
    await cluster.write_attributes_raw([record])


ptvo_switch_uart = ToZigbee(key="action", convert_set=_ptvo_switch_uart_set)


def _ptvo_channel(key: str, meta: ToZigbeeMeta) -> EndpointType | None:
    endpoint_id = int(key[1:])
    if meta.device is None:
        return None
    return meta.device.endpoints.get(endpoint_id)


async def _ptvo_switch_analog_input_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> None:
    endpoint = _ptvo_channel(key, meta)
    if endpoint is None:
        return

    try:
        number = to_number(value)
    except UnsupportedValue:
        _LOGGER.debug("Ignoring non-numeric value %r for %s", value, key)
        return

    level = get_cluster(endpoint, LevelControl.cluster_id)
    if level is not None:
        await level.write_attributes({"current_level": int(number)})
        return

    analog = get_cluster(endpoint, AnalogInput.cluster_id)
    if analog is not None:
        await analog.write_attributes({"present_value": float(number)})


async def _ptvo_switch_analog_input_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    endpoint = _ptvo_channel(key, meta)
    if endpoint is None:
        return

    analog = get_cluster(endpoint, AnalogInput.cluster_id)
    if analog is not None:
        await analog.read_attributes(["present_value", "description"])


ptvo_switch_analog_input = ToZigbee(
    key=tuple(f"l{index}" for index in range(1, 17)),
    convert_set=_ptvo_switch_analog_input_set,
    convert_get=_ptvo_switch_analog_input_get,
)


async def _ptvo_switch_light_brightness_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue | None:
    if key == "transition":
        return None

    require_cluster(entity, LevelControl.cluster_id)
    if _requested_brightness(message_without_endpoint(meta)) == 0:
        return await _on_off_set(entity, "state", "off", meta)
    return await _light_onoff_brightness_set(entity, key, value, meta)


async def _ptvo_switch_light_brightness_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    require_cluster(entity, LevelControl.cluster_id)
    await _light_onoff_brightness_get(entity, key, meta)


ptvo_switch_light_brightness = ToZigbee(
    key=("brightness", "brightness_percent", "transition"),
    convert_set=_ptvo_switch_light_brightness_set,
    convert_get=_ptvo_switch_light_brightness_get,
    options=(exposes_options.transition(),),
)
