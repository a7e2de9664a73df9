"""Schneider Electric, Wiser, Merten, Elko and LK devices."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Final

from zigpy.quirks import CustomCluster
import zigpy.types as t
from zigpy.zcl import foundation
from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import (
    Basic,
    GreenPowerProxy,
    LevelControl,
    OnOff,
    PowerConfiguration,
    Scenes,
)
from zigpy.zcl.clusters.homeautomation import Diagnostic, ElectricalMeasurement
from zigpy.zcl.clusters.hvac import Fan, Thermostat, UserInterface
from zigpy.zcl.clusters.lighting import Ballast
from zigpy.zcl.clusters.measurement import (
    OccupancySensing,
    RelativeHumidity,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices import extend as m
from zigpy_devices import reporting
from zigpy_devices.config import CONF_MEASUREMENT_POLL_INTERVAL
from zigpy_devices.const import (
    ATTRIBUTE_REPORT,
    COMMAND_COMMISSIONING_NOTIFICATION,
    COMMAND_NOTIFICATION,
    ENTITY_CATEGORY_CONFIG,
    EVENT_DEVICE_INTERVIEW,
    EVENT_STOP,
    GREEN_POWER_ENDPOINT_ID,
    MANUFACTURER_CODE_SCHNEIDER_ELECTRIC,
    REPORT_TYPES,
    RepInterval,
)
from zigpy_devices.converters import ToZigbee, from_zigbee_converter
from zigpy_devices.converters import from_zigbee as fz
from zigpy_devices.converters import to_zigbee as tz
from zigpy_devices.definition import DefinitionBuilder, Fingerprint
from zigpy_devices.exposes import Access
from zigpy_devices.exposes import options as exposes_options
from zigpy_devices.exposes import presets as e
from zigpy_devices.extend import Extend
from zigpy_devices.state import get_device_meta
from zigpy_devices.utils import (
    device_endpoints,
    get_from_lookup,
    get_key,
    has_already_processed_message,
    ieee_string,
    map_number_range,
    postfix_with_endpoint_name,
    require_cluster,
    to_number,
)

if TYPE_CHECKING:
    from zigpy_devices.converters import Message, ToZigbeeMeta
    from zigpy_devices.typing import DeviceType, EndpointType, KeyValue

_LOGGER = logging.getLogger(__name__)

VENDOR = "Schneider Electric"

MANUFACTURER = MANUFACTURER_CODE_SCHNEIDER_ELECTRIC

INDICATOR_MODE = {
    "reverse_with_load": 2,
    "consistent_with_load": 0,
    "always_off": 3,
    "always_on": 1,
}

SOCKET_INDICATOR_MODE = {
    "reverse_with_load": 0,
    "consistent_with_load": 1,
    "always_off": 2,
    "always_on": 3,
}

FAN_INDICATOR_MODE = {
    "always_on": 3,
    "on_with_timeout_but_as_locator": 4,
    "on_with_timeout": 5,
}

FAN_INDICATOR_ORIENTATION = {
    "horizontal_left": 2,
    "horizontal_right": 0,
    "vertical_top": 3,
    "vertical_bottom": 1,
}

SWITCH_ACTIONS = {
    "light": 0,
    "light_opposite": 254,
    "dimmer": 1,
    "dimmer_opposite": 253,
    "standard_shutter": 2,
    "standard_shutter_opposite": 252,
    "schneider_shutter": 3,
    "schneider_shutter_opposite": 251,
    "scene": 4,
    "toggle_light": 5,
    "toggle_dimmer": 6,
    "alternate_light": 7,
    "alternate_dimmer": 8,
    "not_used": 127,
}

VISA_INDICATOR_LUMINANCE_LEVEL = {"100": 0, "80": 1, "60": 2, "40": 3, "20": 4, "0": 5}
VISA_INDICATOR_COLOR = {"white": 0, "blue": 1}
VISA_MOTOR_TYPE = {"ac_motor": 0, "pulse_motor": 1}
VISA_CURTAIN_STATUS = {"stop": 0, "opening": 1, "closing": 2}

DIMMING_MODE = {"Auto": 0, "RL-LED": 3}
OCCUPANCY_SENSITIVITY = {"Low": 50, "Medium": 75, "High": 100}
PILOT_MODE = {"contactor": 1, "pilot": 3}
LK_DIMMER_MODE = {1: "RC", 2: "RL"}

# Green Power frames of a PowerTag
POWERTAG_ATTRIBUTE_REPORTING = 0xA1
POWERTAG_RX_AFTER_TX = 1 << 11
POWERTAG_ACK_COMMAND = 0xFE
POWERTAG_ACK_PAYLOAD = b"\xfe\x00"

# (attribute, property, divisor attribute, factor)
POWERTAG_ELECTRICAL_MEASUREMENT = (
    ("rms_voltage", "voltage_phase_a", "ac_voltage_divisor", 1),
    ("rms_voltage_ph_b", "voltage_phase_b", "ac_voltage_divisor", 1),
    ("rms_voltage_ph_c", "voltage_phase_c", "ac_voltage_divisor", 1),
    (0x4B00, "voltage_phase_ab", "ac_voltage_divisor", 1),
    (0x4C00, "voltage_phase_bc", "ac_voltage_divisor", 1),
    (0x4D00, "voltage_phase_ca", "ac_voltage_divisor", 1),
    ("rms_current", "current_phase_a", "ac_current_divisor", 1),
    ("rms_current_ph_b", "current_phase_b", "ac_current_divisor", 1),
    ("rms_current_ph_c", "current_phase_c", "ac_current_divisor", 1),
    ("total_active_power", "power", "power_divisor", 1000),
    ("total_apparent_power", "power_apparent", "power_divisor", 1000),
    ("ac_frequency", "ac_frequency", "ac_frequency_divisor", 1),
    ("active_power", "power_phase_a", "power_divisor", 1000),
    ("active_power_ph_b", "power_phase_b", "power_divisor", 1000),
    ("active_power_ph_c", "power_phase_c", "power_divisor", 1000),
)

POWERTAG_METERING = (
    ("current_summ_delivered", "energy"),
    (0x410C, "energy_phase_a"),
    (0x420C, "energy_phase_b"),
    (0x430C, "energy_phase_c"),
)

THERMOSTAT_POLL_INTERVAL_DEFAULT = 20
META_MEASUREMENT_POLL = "measurement_poll"
META_FACTORY_BINDINGS = "factory_bindings"


class SchneiderLightSwitchConfiguration(CustomCluster):
    cluster_id: Final = 0xFF17
    name: Final = "Schneider Light Switch Configuration"
    ep_attribute: Final = "schneider_light_switch_configuration"

    class AttributeDefs(foundation.BaseAttributeDefs):
        led_indication: Final = foundation.ZCLAttributeDef(
            id=0x0000, type=t.enum8, is_manufacturer_specific=True
        )
        switch_actions: Final = foundation.ZCLAttributeDef(
            id=0x0001, type=t.enum8, is_manufacturer_specific=True
        )


class SchneiderFanSwitchConfiguration(CustomCluster):
    cluster_id: Final = 0xFC85
    name: Final = "Schneider Fan Switch Configuration"
    ep_attribute: Final = "schneider_fan_switch_configuration"

    class AttributeDefs(foundation.BaseAttributeDefs):
        led_indication: Final = foundation.ZCLAttributeDef(
            id=0x0002, type=t.enum8, is_manufacturer_specific=True
        )
        led_orientation: Final = foundation.ZCLAttributeDef(
            id=0x0060, type=t.enum8, is_manufacturer_specific=True
        )


class VisaConfiguration(CustomCluster):
    """Indicator, motor and key settings of the AvatarOn range."""

    cluster_id: Final = 0xFC04
    name: Final = "Visa Configuration"
    ep_attribute: Final = "visa_configuration"

    class AttributeDefs(foundation.BaseAttributeDefs):
        indicator_luminance_level: Final = foundation.ZCLAttributeDef(
            id=0x0000, type=t.uint8_t, is_manufacturer_specific=True
        )
        indicator_color: Final = foundation.ZCLAttributeDef(
            id=0x0001, type=t.uint8_t, is_manufacturer_specific=True
        )
        indicator_mode: Final = foundation.ZCLAttributeDef(
            id=0x0002, type=t.uint8_t, is_manufacturer_specific=True
        )
        motor_type_channel_1: Final = foundation.ZCLAttributeDef(
            id=0x0003, type=t.uint8_t, is_manufacturer_specific=True
        )
        motor_type_channel_2: Final = foundation.ZCLAttributeDef(
            id=0x0004, type=t.uint8_t, is_manufacturer_specific=True
        )
        curtain_status_channel_1: Final = foundation.ZCLAttributeDef(
            id=0x0005, type=t.uint8_t, is_manufacturer_specific=True
        )
        curtain_status_channel_2: Final = foundation.ZCLAttributeDef(
            id=0x0006, type=t.uint8_t, is_manufacturer_specific=True
        )
        key1_event_notification: Final = foundation.ZCLAttributeDef(
            id=0x0020, type=t.uint8_t, is_manufacturer_specific=True
        )
        key2_event_notification: Final = foundation.ZCLAttributeDef(
            id=0x0021, type=t.uint8_t, is_manufacturer_specific=True
        )
        key3_event_notification: Final = foundation.ZCLAttributeDef(
            id=0x0022, type=t.uint8_t, is_manufacturer_specific=True
        )
        key4_event_notification: Final = foundation.ZCLAttributeDef(
            id=0x0023, type=t.uint8_t, is_manufacturer_specific=True
        )


class VisaConfigurationEnum8(VisaConfiguration):
    """Firmware variant sending the indicator settings as enum8."""

    class AttributeDefs(VisaConfiguration.AttributeDefs):
        indicator_luminance_level: Final = foundation.ZCLAttributeDef(
            id=0x0000, type=t.enum8, is_manufacturer_specific=True
        )
        indicator_color: Final = foundation.ZCLAttributeDef(
            id=0x0001, type=t.enum8, is_manufacturer_specific=True
        )
        indicator_mode: Final = foundation.ZCLAttributeDef(
            id=0x0002, type=t.enum8, is_manufacturer_specific=True
        )


class OccupancyConfiguration(CustomCluster):
    cluster_id: Final = 0xFF19
    name: Final = "Occupancy Configuration"
    ep_attribute: Final = "occupancy_configuration"

    class AttributeDefs(foundation.BaseAttributeDefs):
        ambience_light_threshold: Final = foundation.ZCLAttributeDef(
            id=0x0000, type=t.uint16_t, is_manufacturer_specific=True
        )
        occupancy_actions: Final = foundation.ZCLAttributeDef(
            id=0x0001, type=t.enum8, is_manufacturer_specific=True
        )
        unoccupied_level_default: Final = foundation.ZCLAttributeDef(
            id=0x0002, type=t.uint8_t, is_manufacturer_specific=True
        )
        unoccupied_level: Final = foundation.ZCLAttributeDef(
            id=0x0003, type=t.uint8_t, is_manufacturer_specific=True
        )


class SchneiderOccupancySensing(CustomCluster, OccupancySensing):
    class AttributeDefs(OccupancySensing.AttributeDefs):
        sensitivity: Final = foundation.ZCLAttributeDef(
            id=0xE003, type=t.uint8_t, is_manufacturer_specific=True
        )


class SchneiderWindowCovering(CustomCluster, WindowCovering):
    class AttributeDefs(WindowCovering.AttributeDefs):
        lift_duration: Final = foundation.ZCLAttributeDef(
            id=0xE000, type=t.uint16_t, is_manufacturer_specific=True
        )


class SchneiderBallast(CustomCluster, Ballast):
    class AttributeDefs(Ballast.AttributeDefs):
        wiser_control_mode: Final = foundation.ZCLAttributeDef(
            id=0xE000, type=t.enum8, is_manufacturer_specific=True
        )


class SchneiderPilotMode(CustomCluster):
    cluster_id: Final = 0xFF23
    name: Final = "Schneider Pilot Mode"
    ep_attribute: Final = "schneider_pilot_mode"

    class AttributeDefs(foundation.BaseAttributeDefs):
        pilot_mode: Final = foundation.ZCLAttributeDef(
            id=0x0031, type=t.enum8, is_manufacturer_specific=True
        )


class SchneiderGreenPowerProxy(CustomCluster, GreenPowerProxy):
    """Green Power proxy able to answer a PowerTag that waits for a reply."""

    class ClientCommandDefs(GreenPowerProxy.ClientCommandDefs):
        response: Final = foundation.ZCLCommandDef(
            id=0x06,
            schema={
                "options": t.uint8_t,
                "temp_master_short_address": t.NWK,
                "temp_master_tx_channel": t.uint8_t,
                "gpd_src_id": t.uint32_t,
                "gpd_command_id": t.uint8_t,
                "gpd_command_payload": t.SerializableBytes,
            },
            direction=foundation.Direction.Server_to_Client,
        )


def indicator_mode(endpoint: str | None = None) -> Extend:
    description = "Set Indicator Mode."
    if endpoint:
        description = f"Set Indicator Mode for {endpoint} switch."
    return m.enum_lookup(
        "indicator_mode",
        INDICATOR_MODE,
        SchneiderLightSwitchConfiguration.cluster_id,
        "led_indication",
        description,
        endpoint_name=endpoint,
        manufacturer=MANUFACTURER,
    )


def socket_indicator_mode() -> Extend:
    return m.enum_lookup(
        "indicator_mode",
        SOCKET_INDICATOR_MODE,
        SchneiderFanSwitchConfiguration.cluster_id,
        "led_indication",
        "Set indicator mode",
        manufacturer=MANUFACTURER,
    )


def fan_indicator_mode() -> Extend:
    return m.enum_lookup(
        "indicator_mode",
        FAN_INDICATOR_MODE,
        SchneiderFanSwitchConfiguration.cluster_id,
        "led_indication",
        "Set Indicator Mode.",
        manufacturer=MANUFACTURER,
    )


def fan_indicator_orientation() -> Extend:
    return m.enum_lookup(
        "indicator_orientation",
        FAN_INDICATOR_ORIENTATION,
        SchneiderFanSwitchConfiguration.cluster_id,
        "led_orientation",
        "Set Indicator Orientation.",
        manufacturer=MANUFACTURER,
    )


def switch_actions(endpoint: str | None = None) -> Extend:
    description = "Set Switch Action."
    if endpoint:
        description = f"Set Switch Action for {endpoint} Button."
    return m.enum_lookup(
        "switch_actions",
        SWITCH_ACTIONS,
        SchneiderLightSwitchConfiguration.cluster_id,
        "switch_actions",
        description,
        endpoint_name=endpoint,
        manufacturer=MANUFACTURER,
    )


def light_switch_configuration() -> Extend:
    return m.add_custom_cluster(SchneiderLightSwitchConfiguration)


def fan_switch_configuration() -> Extend:
    return m.add_custom_cluster(SchneiderFanSwitchConfiguration)


def visa_configuration(enum_type: bool = False) -> Extend:
    """The Visa configuration cluster, in the enum8 variant when `enum_type`."""
    cluster = VisaConfigurationEnum8 if enum_type else VisaConfiguration
    return m.add_custom_cluster(cluster)


def visa_indicator_luminance_level() -> Extend:
    return m.enum_lookup(
        "indicator_luminance_level",
        VISA_INDICATOR_LUMINANCE_LEVEL,
        VisaConfiguration.cluster_id,
        "indicator_luminance_level",
        "Set indicator luminance Level",
        manufacturer=MANUFACTURER,
    )


def visa_indicator_color() -> Extend:
    return m.enum_lookup(
        "indicator_color",
        VISA_INDICATOR_COLOR,
        VisaConfiguration.cluster_id,
        "indicator_color",
        "Set indicator color",
        manufacturer=MANUFACTURER,
    )


def visa_indicator_mode(values: list[int]) -> Extend:
    """Indicator mode, `values` being the raw values in `INDICATOR_MODE` order."""
    reverse_with_load, consistent_with_load, always_off, always_on = values
    return m.enum_lookup(
        "indicator_mode",
        {
            "reverse_with_load": reverse_with_load,
            "consistent_with_load": consistent_with_load,
            "always_off": always_off,
            "always_on": always_on,
        },
        VisaConfiguration.cluster_id,
        "indicator_mode",
        "Set indicator mode for switch",
        manufacturer=MANUFACTURER,
    )


def visa_motor_type(channel: int) -> Extend:
    return m.enum_lookup(
        f"motor_type_{channel}",
        VISA_MOTOR_TYPE,
        VisaConfiguration.cluster_id,
        f"motor_type_channel_{channel}",
        f"Set motor type for channel {channel}",
        manufacturer=MANUFACTURER,
    )


def visa_curtain_status(channel: int) -> Extend:
    return m.enum_lookup(
        f"curtain_status_{channel}",
        VISA_CURTAIN_STATUS,
        VisaConfiguration.cluster_id,
        f"curtain_status_channel_{channel}",
        f"Set curtain status for channel {channel}",
        access=Access.STATE,
        manufacturer=MANUFACTURER,
    )


def visa_wiser_curtain(endpoint_names: list[str]) -> Extend:
    """Curtain channels driven through the level and on/off clusters."""

    @from_zigbee_converter(LevelControl.cluster_id, REPORT_TYPES)
    def curtain(definition, msg, options, meta) -> KeyValue | None:
        result: KeyValue = {}
        if "on_off_transition_time" in msg.data:
            prop = postfix_with_endpoint_name("transition", msg, definition)
            result[prop] = msg.data["on_off_transition_time"] / 10
        if "current_level" in msg.data:
            prop = postfix_with_endpoint_name("position", msg, definition)
            result[prop] = map_number_range(msg.data["current_level"], 0, 255, 0, 100)
        return result or None

    async def curtain_set(
        entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
    ) -> None:
        cluster = require_cluster(entity, LevelControl.cluster_id)
        if key == "transition":
            await cluster.write_attributes(
                {"on_off_transition_time": round(to_number(value) * 10)}
            )
        else:
            level = map_number_range(to_number(value), 0, 100, 0, 255)
            await cluster.move_to_level_with_on_off(level, 0)

    async def curtain_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
        cluster = require_cluster(entity, LevelControl.cluster_id)
        await cluster.read_attributes(["on_off_transition_time", "current_level"])

    async def state_set(
        entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
    ) -> None:
        command = get_from_lookup(value, {"OPEN": "on", "CLOSE": "off", "STOP": "stop"})
        if command == "stop":
            await require_cluster(entity, LevelControl.cluster_id).stop()
        else:
            await getattr(require_cluster(entity, OnOff.cluster_id), command)()

    exposes = []
    for endpoint_name in endpoint_names:
        exposes.append(
            e.enum("state", Access.SET, ["OPEN", "CLOSE", "STOP"])
            .with_description("State of the curtain")
            .with_endpoint(endpoint_name)
        )
    for endpoint_name in endpoint_names:
        exposes.append(
            e.numeric("position", Access.ALL)
            .with_value_min(0)
            .with_value_max(100)
            .with_unit("%")
            .with_description("Position of the curtain")
            .with_endpoint(endpoint_name)
        )
    for endpoint_name in endpoint_names:
        exposes.append(
            e.numeric("transition", Access.ALL)
            .with_value_min(0)
            .with_value_max(300)
            .with_unit("s")
            .with_description("Transition time in seconds")
            .with_endpoint(endpoint_name)
        )

    return Extend(
        from_zigbee=[curtain],
        to_zigbee=[
            ToZigbee(
                key=("transition", "position"),
                convert_set=curtain_set,
                convert_get=curtain_get,
            ),
            ToZigbee(key="state", convert_set=state_set),
        ],
        exposes=exposes,
    )


def visa_key_event_notification(key: int) -> Extend:
    prop = f"key{key}_event_notification"

    @from_zigbee_converter(VisaConfiguration.cluster_id, ATTRIBUTE_REPORT)
    def key_event(definition, msg, options, meta) -> KeyValue | None:
        if prop not in msg.data:
            return None
        return {prop: msg.data[prop]}

    return Extend(from_zigbee=[key_event])


def dimming_mode() -> list[Extend]:
    return [
        m.add_custom_cluster(SchneiderBallast),
        m.enum_lookup(
            "dimmer_mode",
            DIMMING_MODE,
            Ballast.cluster_id,
            "wiser_control_mode",
            "Auto detects the correct mode for the ballast. RL-LED may have improved"
            " dimming quality for LEDs.",
            manufacturer=MANUFACTURER,
            entity_category=ENTITY_CATEGORY_CONFIG,
        ),
        m.setup_configure_for_reading(
            Ballast.cluster_id, ["wiser_control_mode"], manufacturer=MANUFACTURER
        ),
    ]


def _lux_scale(value: float, direction: str) -> float:
    if direction == "from":
        return round(10 ** ((value - 1) / 10000))
    return round(10000 * math.log10(value) + 1)


def occupancy_configuration() -> list[Extend]:
    """Sensitivity and light threshold of the motion sensing switches."""
    return [
        m.add_custom_cluster(OccupancyConfiguration, add_if_missing=True),
        m.add_custom_cluster(SchneiderOccupancySensing),
        m.enum_lookup(
            "occupancy_sensitivity",
            OCCUPANCY_SENSITIVITY,
            OccupancySensing.cluster_id,
            "sensitivity",
            "Sensitivity of the occupancy sensor",
            manufacturer=MANUFACTURER,
            entity_category=ENTITY_CATEGORY_CONFIG,
        ),
        m.numeric(
            "ambience_light_threshold",
            OccupancyConfiguration.cluster_id,
            "ambience_light_threshold",
            "Threshold above which occupancy will not trigger the light switch.",
            unit="lx",
            value_min=1,
            value_max=2000,
            scale=_lux_scale,
            manufacturer=MANUFACTURER,
            entity_category=ENTITY_CATEGORY_CONFIG,
            reporting_config={
                "min": RepInterval.SECONDS_10,
                "max": RepInterval.HOUR,
                "change": 5,
            },
        ),
        m.setup_configure_for_reading(
            OccupancyConfiguration.cluster_id,
            ["ambience_light_threshold"],
            manufacturer=MANUFACTURER,
        ),
    ]


def ballast_levels(endpoint: str | None = None) -> list:
    exposes = [
        e.numeric("ballast_minimum_level", Access.ALL)
        .with_value_min(1)
        .with_value_max(254)
        .with_description("Specifies the minimum light output of the ballast"),
        e.numeric("ballast_maximum_level", Access.ALL)
        .with_value_min(1)
        .with_value_max(254)
        .with_description("Specifies the maximum light output of the ballast"),
    ]
    if endpoint is not None:
        exposes = [expose.with_endpoint(endpoint) for expose in exposes]
    return exposes


def wiser_dimmer_mode():
    return (
        e.enum("dimmer_mode", Access.ALL, ["auto", "rc", "rl", "rl_led"])
        .with_description(
            "Sets dimming mode to autodetect or fixed RC/RL/RL_LED mode (max load is"
            " reduced in RL_LED)"
        )
    )


def lift_duration():
    return (
        e.numeric("lift_duration", Access.STATE_SET)
        .with_unit("s")
        .with_value_min(0)
        .with_value_max(300)
        .with_description("Duration of lift")
    )


def keypad_lockout():
    return (
        e.binary("keypad_lockout", Access.STATE_SET, "lock1", "unlock")
        .with_description("Enables/disables physical input on the device")
    )


def pilot_mode():
    return (
        e.enum("schneider_pilot_mode", Access.ALL, list(PILOT_MODE))
        .with_description("Controls piloting mode")
    )


def temperature_display_mode():
    return (
        e.enum("temperature_display_mode", Access.ALL, ["celsius", "fahrenheit"])
        .with_description("The temperature format displayed on the thermostat screen")
    )


async def _lift_duration_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    duration = int(to_number(value))
    cluster = require_cluster(entity, WindowCovering.cluster_id)
    await cluster.write_attributes(
        {"lift_duration": duration}, manufacturer=MANUFACTURER
    )
    return {"state": {"lift_duration": duration}}


tz_lift_duration = ToZigbee(key="lift_duration", convert_set=_lift_duration_set)


async def _fan_mode_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue | None:
    # the controller has no plain "on" mode
    if isinstance(value, str) and value.lower() == "on":
        value = "low"
    return await tz.fan_mode.convert_set(entity, key, value, meta)


tz_fan_mode = ToZigbee(
    key=tz.fan_mode.key, convert_set=_fan_mode_set, convert_get=tz.fan_mode.convert_get
)


@from_zigbee_converter(SchneiderPilotMode.cluster_id, REPORT_TYPES)
def fz_pilot_mode(definition, msg, options, meta) -> KeyValue | None:
    if "pilot_mode" not in msg.data:
        return None
    mode = get_key(PILOT_MODE, int(msg.data["pilot_mode"]))
    if mode is None:
        _LOGGER.debug("Unknown pilot mode %s", msg.data["pilot_mode"])
        return None
    return {"schneider_pilot_mode": mode}


async def _pilot_mode_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    raw = get_from_lookup(value, PILOT_MODE)
    cluster = require_cluster(entity, SchneiderPilotMode.cluster_id)
    await cluster.write_attributes({"pilot_mode": raw}, manufacturer=MANUFACTURER)
    return {"state": {"schneider_pilot_mode": get_key(PILOT_MODE, raw)}}


async def _pilot_mode_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
    cluster = require_cluster(entity, SchneiderPilotMode.cluster_id)
    await cluster.read_attributes(["pilot_mode"], manufacturer=MANUFACTURER)


tz_pilot_mode = ToZigbee(
    key="schneider_pilot_mode",
    convert_set=_pilot_mode_set,
    convert_get=_pilot_mode_get,
)


@from_zigbee_converter(Ballast.cluster_id, REPORT_TYPES)
def fz_lk_ballast_configuration(definition, msg, options, meta) -> KeyValue | None:
    """Ballast levels and the RC/RL mode of the LK dimmer, per endpoint."""
    result = fz.ballast_configuration.convert(definition, msg, options, meta) or {}
    mode = msg.data.get("wiser_control_mode", msg.data.get(fz.WISER_CONTROL_MODE))
    if mode is not None:
        result["dimmer_mode"] = LK_DIMMER_MODE.get(int(mode))

    return {
        postfix_with_endpoint_name(prop, msg, definition): value
        for prop, value in result.items()
    } or None


def _scaled(value: Any, factor: int, divisor: Any) -> float:
    return value * factor / (divisor or 1)


def _powertag_values(command_frame: dict[str, Any]) -> KeyValue:
    result: KeyValue = {}
    attributes = command_frame.get("attributes", {})
    cluster_id = command_frame.get("cluster_id")

    if cluster_id == ElectricalMeasurement.cluster_id:
        for attribute, prop, divisor, factor in POWERTAG_ELECTRICAL_MEASUREMENT:
            if attribute in attributes:
                result[prop] = _scaled(
                    attributes[attribute], factor, attributes.get(divisor)
                )

    elif cluster_id == Metering.cluster_id:
        divisor = attributes.get("divisor")
        for attribute, prop in POWERTAG_METERING:
            if attribute in attributes:
                result[prop] = _scaled(attributes[attribute], 1, divisor)
        if "power_factor" in attributes:
            result["power_factor"] = attributes["power_factor"]

    return result


async def acknowledge_powertag(msg: Message) -> None:
    """Answer a PowerTag that keeps its receiver on after sending."""
    device = msg.device
    endpoint = device.endpoints.get(GREEN_POWER_ENDPOINT_ID, msg.endpoint)
    cluster = require_cluster(endpoint, GreenPowerProxy.cluster_id)
    channel = device.application.state.network_info.channel

    _LOGGER.debug("Acknowledging PowerTag frame of %s", device.ieee)
    await cluster.client_command(
        SchneiderGreenPowerProxy.ClientCommandDefs.response.id,
        options=0,
        temp_master_short_address=msg.data["gpp_nwk_addr"],
        temp_master_tx_channel=channel - 11,
        gpd_src_id=msg.data["src_id"],
        gpd_command_id=POWERTAG_ACK_COMMAND,
        gpd_command_payload=t.SerializableBytes(POWERTAG_ACK_PAYLOAD),
    )


@from_zigbee_converter(
    GreenPowerProxy.cluster_id,
    (COMMAND_NOTIFICATION, COMMAND_COMMISSIONING_NOTIFICATION),
)
async def schneider_powertag(definition, msg, options, meta) -> KeyValue | None:
    """Measurements of a PowerTag sent as Green Power notifications."""
    if msg.type != COMMAND_NOTIFICATION:
        return None

    command_id = msg.data.get("command_id")
    if has_already_processed_message(
        msg,
        definition,
        msg.data.get("frame_counter"),
        f"{ieee_string(msg.device)}_{command_id}",
    ):
        return None

    result: KeyValue = {}
    if command_id == POWERTAG_ATTRIBUTE_REPORTING:
        result = _powertag_values(msg.data.get("command_frame", {}))

    if int(msg.data.get("options", 0)) & POWERTAG_RX_AFTER_TX:
        await acknowledge_powertag(msg)

    return result


async def poll_occupied_heating_setpoint(device: DeviceType) -> None:
    """Read the setpoint the thermostat does not report by itself."""
    cluster = require_cluster(device.endpoints[1], Thermostat.cluster_id)
    await cluster.read_attributes(["occupied_heating_setpoint"])


def describe_thermostat_poll(event, data, device, options, definition) -> None:
    """Keep the setpoint poll of a device up to date in its metadata."""
    if device is None:
        return

    meta = get_device_meta(device)
    interval = options.get(
        CONF_MEASUREMENT_POLL_INTERVAL, THERMOSTAT_POLL_INTERVAL_DEFAULT
    )
    if event == EVENT_STOP or interval == -1:
        meta.set(META_MEASUREMENT_POLL, None)
        return

    meta.set(
        META_MEASUREMENT_POLL,
        {
            "interval": interval,
            "endpoint": 1,
            "cluster": Thermostat.cluster_id,
            "attributes": ["occupied_heating_setpoint"],
        },
    )


def record_factory_bindings(event, data, device, options, definition) -> None:
    """Remember the bindings the LK dimmer ships with, for easy removal later."""
    if event != EVENT_DEVICE_INTERVIEW or device is None:
        return

    bindings = []
    for endpoint in device_endpoints(device):
        if 21 <= endpoint.endpoint_id <= 22:
            clusters = [OnOff.cluster_id, LevelControl.cluster_id]
        elif 23 <= endpoint.endpoint_id <= 24:
            clusters = [Scenes.cluster_id]
        else:
            continue
        bindings += [
            {"endpoint": endpoint.endpoint_id, "cluster": cluster_id, "target": 3}
            for cluster_id in clusters
        ]

    get_device_meta(device).set(META_FACTORY_BINDINGS, bindings)


async def configure_cover(device, definition) -> None:
    # endpoint 5 on the modules, endpoint 1 on some Merten inserts
    for endpoint in device_endpoints(device):
        if WindowCovering.cluster_id in endpoint.in_clusters:
            await reporting.bind(endpoint, [WindowCovering.cluster_id])
            await reporting.current_position_lift_percentage(endpoint)
            return


async def configure_radiator_thermostat(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint,
        [
            Basic.cluster_id,
            PowerConfiguration.cluster_id,
            Thermostat.cluster_id,
            Diagnostic.cluster_id,
        ],
    )
    await reporting.battery_voltage(endpoint)
    await reporting.thermostat_temperature(endpoint)
    await reporting.thermostat_occupied_heating_setpoint(endpoint)
    await reporting.thermostat_pi_heating_demand(endpoint)
    # user interface is reported without a binding, the binding table is full
    await reporting.keypad_lockout(endpoint)


def configure_smart_thermostat(measurement_cluster: int | None):
    """Thermostat on endpoint 1 with metering or temperature on endpoint 2."""

    async def configure(device, definition) -> None:
        endpoint1 = device.endpoints[1]
        endpoint2 = device.endpoints[2]
        await reporting.bind(endpoint1, [Thermostat.cluster_id])
        await reporting.thermostat_pi_heating_demand(endpoint1)
        await reporting.thermostat_occupied_heating_setpoint(endpoint1)
        if measurement_cluster == TemperatureMeasurement.cluster_id:
            await reporting.bind(endpoint2, [TemperatureMeasurement.cluster_id])
            await reporting.temperature(endpoint2)
        elif measurement_cluster is not None:
            await reporting.bind(endpoint2, [measurement_cluster])
        await require_cluster(endpoint1, UserInterface.cluster_id).read_attributes(
            ["keypad_lockout", "temperature_display_mode"]
        )

    return configure


async def configure_odace_thermostat(device, definition) -> None:
    endpoint1 = device.endpoints[1]
    await reporting.bind(endpoint1, [Thermostat.cluster_id])
    await reporting.thermostat_pi_heating_demand(endpoint1)
    await reporting.thermostat_occupied_heating_setpoint(endpoint1)
    await reporting.temperature(device.endpoints[2])
    await require_cluster(endpoint1, UserInterface.cluster_id).read_attributes(
        ["keypad_lockout", "temperature_display_mode"]
    )
    endpoint4 = device.endpoints[4]
    await reporting.bind(endpoint4, [OccupancySensing.cluster_id])
    await reporting.occupancy(endpoint4)


def configure_dimmer(endpoint_id: int = 3):
    async def configure(device, definition) -> None:
        endpoint = device.endpoints[endpoint_id]
        await reporting.bind(
            endpoint,
            [OnOff.cluster_id, LevelControl.cluster_id, Ballast.cluster_id],
        )
        await reporting.on_off(endpoint)
        await reporting.brightness(endpoint)

    return configure


async def configure_on_off(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(endpoint, [OnOff.cluster_id])
    await reporting.on_off(endpoint)


async def configure_fan(device, definition) -> None:
    endpoint = device.endpoints[7]
    await reporting.bind(endpoint, [Fan.cluster_id])
    await reporting.fan_mode(endpoint)


async def configure_smart_plug(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint,
        [OnOff.cluster_id, ElectricalMeasurement.cluster_id, Metering.cluster_id],
    )
    await reporting.on_off(endpoint)
    # only active power is reported
    await require_cluster(endpoint, ElectricalMeasurement.cluster_id).read_attributes(
        ["ac_power_multiplier", "ac_power_divisor"]
    )
    await reporting.active_power(endpoint)
    await reporting.read_metering_multiplier_divisor(endpoint)
    await reporting.current_summ_delivered(endpoint, {"min": 60, "change": 1})


def configure_socket(report_energy: bool = False):
    async def configure(device, definition) -> None:
        endpoint = device.endpoints[6]
        await reporting.bind(
            endpoint,
            [OnOff.cluster_id, ElectricalMeasurement.cluster_id, Metering.cluster_id],
        )
        await reporting.on_off(endpoint)
        # only the current scaling can be read
        await require_cluster(
            endpoint, ElectricalMeasurement.cluster_id
        ).read_attributes(["ac_current_divisor", "ac_current_multiplier"])
        await reporting.read_metering_multiplier_divisor(endpoint)
        if report_energy:
            await reporting.current_summ_delivered(endpoint, {"min": 60, "change": 1})

    return configure


async def configure_lk_switch(device, definition) -> None:
    for endpoint in device_endpoints(device):
        if OnOff.cluster_id in endpoint.out_clusters or endpoint.endpoint_id <= 2:
            await reporting.bind(endpoint, [OnOff.cluster_id])
            if endpoint.endpoint_id <= 2:
                await reporting.on_off(endpoint)


async def configure_lk_dimmer(device, definition) -> None:
    await reporting.bind(device.endpoints[3], [Ballast.cluster_id])
    for endpoint in device_endpoints(device):
        if 21 <= endpoint.endpoint_id <= 22:
            await reporting.bind(
                endpoint, [OnOff.cluster_id, LevelControl.cluster_id]
            )
        elif 23 <= endpoint.endpoint_id <= 24:
            await reporting.bind(endpoint, [Scenes.cluster_id])


async def configure_lk_remote(device, definition) -> None:
    # in 2-gang mode the bottom buttons use endpoint 22
    top = device.endpoints[21]
    await reporting.bind(
        top,
        [OnOff.cluster_id, LevelControl.cluster_id, PowerConfiguration.cluster_id],
    )
    await reporting.battery_percentage_remaining(top)
    bottom = device.endpoints[22]
    await reporting.bind(bottom, [OnOff.cluster_id, LevelControl.cluster_id])


async def configure_temperature_humidity(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint,
        [
            TemperatureMeasurement.cluster_id,
            PowerConfiguration.cluster_id,
            RelativeHumidity.cluster_id,
        ],
    )
    await reporting.battery_percentage_remaining(endpoint)
    await reporting.temperature(endpoint)
    await reporting.humidity(endpoint)


async def configure_battery(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(endpoint, [PowerConfiguration.cluster_id])
    await reporting.battery_percentage_remaining(endpoint)


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


# Covers

(
    DefinitionBuilder("CCT5015-0001", VENDOR, "Roller shutter module")
    .zigbee_model("PUCK/SHUTTER/1")
    .from_zigbee(fz.cover_position_tilt)
    .to_zigbee(tz.cover_position_tilt, tz.cover_state, tz_lift_duration)
    .exposes(e.cover_position(), lift_duration())
    .meta(cover_inverted=True)
    .extend(m.add_custom_cluster(SchneiderWindowCovering))
    .configure(configure_cover)
    .add_to_registry()
)

(
    DefinitionBuilder("S520567", VENDOR, "Roller shutter")
    .zigbee_model("NHPB/SHUTTER/1")
    .from_zigbee(fz.cover_position_tilt)
    .to_zigbee(tz.cover_position_tilt, tz.cover_state, tz_lift_duration)
    .exposes(e.cover_position_tilt(), lift_duration())
    .meta(cover_inverted=True)
    .extend(m.add_custom_cluster(SchneiderWindowCovering))
    .configure(configure_cover)
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5113-0300/MEG5165-0000",
        VENDOR,
        "Merten MEG5165 PlusLink Shutter insert with Merten Wiser System M Push"
        " Button (1fold)",
    )
    .zigbee_model("1GANG/SHUTTER/1")
    .from_zigbee(
        fz.cover_position_tilt,
        fz.command_cover_close,
        fz.command_cover_open,
        fz.command_cover_stop,
    )
    .to_zigbee(tz.cover_position_tilt, tz.cover_state, tz_lift_duration)
    .exposes(e.cover_position_tilt(), lift_duration())
    .meta(cover_inverted=True)
    .extend(m.add_custom_cluster(SchneiderWindowCovering))
    .configure(configure_cover)
    .add_to_registry()
)

# Thermostats

(
    DefinitionBuilder("WV704R0A0902", VENDOR, "Wiser radiator thermostat")
    .zigbee_model("iTRV")
    .from_zigbee(
        fz.ignore_basic_report, fz.thermostat, fz.battery, fz.hvac_user_interface
    )
    .to_zigbee(tz.thermostat_occupied_heating_setpoint, tz.thermostat_keypad_lockout)
    .meta(battery_voltage_to_percentage={"min": 2500, "max": 3200})
    .exposes(
        e.climate()
        .with_setpoint("occupied_heating_setpoint", 5, 30, 0.5)
        .with_local_temperature(Access.STATE)
        .with_running_state(["idle", "heat"], Access.STATE)
        .with_pi_heating_demand(),
        e.battery(),
        e.battery_voltage(),
        e.keypad_lockout().with_access(Access.ALL),
    )
    .configure(configure_radiator_thermostat)
    .add_to_registry()
)

(
    DefinitionBuilder("CCTFR6100Z3", VENDOR, "Wiser radiator thermostat")
    .zigbee_model("CCTFR6100")
    .from_zigbee(
        fz.ignore_basic_report, fz.thermostat, fz.battery, fz.hvac_user_interface
    )
    .to_zigbee(tz.thermostat_occupied_heating_setpoint, tz.thermostat_keypad_lockout)
    .exposes(
        e.climate()
        .with_setpoint("occupied_heating_setpoint", 7, 30, 1)
        .with_local_temperature(Access.STATE)
        .with_running_state(["idle", "heat"], Access.STATE)
        .with_pi_heating_demand()
    )
    .configure(configure_radiator_thermostat)
    .add_to_registry()
)

def smart_thermostat(model: str, measurement_cluster: int) -> DefinitionBuilder:
    builder = (
        DefinitionBuilder(model, VENDOR, "Smart thermostat")
        .zigbee_model(model)
        .from_zigbee(
            fz.thermostat, fz.metering, fz_pilot_mode, fz.hvac_user_interface
        )
        .to_zigbee(
            tz.thermostat_occupied_heating_setpoint,
            tz.thermostat_system_mode,
            tz.thermostat_running_state,
            tz.thermostat_local_temperature,
            tz.thermostat_control_sequence_of_operation,
            tz_pilot_mode,
            tz.thermostat_keypad_lockout,
            tz.thermostat_temperature_display_mode,
        )
        .exposes(
            keypad_lockout(),
            pilot_mode(),
            temperature_display_mode(),
            e.climate()
            .with_setpoint("occupied_heating_setpoint", 4, 30, 0.5)
            .with_local_temperature()
            .with_system_mode(["off", "heat"])
            .with_running_state(["idle", "heat"])
            .with_pi_heating_demand(),
        )
        .extend(m.add_custom_cluster(SchneiderPilotMode))
        .configure(configure_smart_thermostat(measurement_cluster))
    )
    if measurement_cluster == TemperatureMeasurement.cluster_id:
        builder.from_zigbee(fz.temperature).exposes(e.temperature())
    return builder


smart_thermostat("EKO07259", Metering.cluster_id).add_to_registry()
smart_thermostat("WDE002497", TemperatureMeasurement.cluster_id).add_to_registry()
smart_thermostat("WDE011680", TemperatureMeasurement.cluster_id).add_to_registry()

(
    DefinitionBuilder("S520619", VENDOR, "Wiser Odace Smart thermostat")
    .zigbee_model("S520619")
    .from_zigbee(
        fz.thermostat,
        fz.metering,
        fz_pilot_mode,
        fz.hvac_user_interface,
        fz.temperature,
        fz.occupancy,
    )
    .to_zigbee(
        tz.thermostat_occupied_heating_setpoint,
        tz.thermostat_system_mode,
        tz.thermostat_local_temperature,
        tz.thermostat_control_sequence_of_operation,
        tz_pilot_mode,
        tz.thermostat_keypad_lockout,
        tz.thermostat_temperature_display_mode,
    )
    .exposes(
        keypad_lockout(),
        pilot_mode(),
        temperature_display_mode(),
        e.climate()
        .with_setpoint("occupied_heating_setpoint", 4, 30, 0.5)
        .with_local_temperature()
        .with_system_mode(["off", "heat", "cool"])
        .with_pi_heating_demand(),
        e.temperature(),
        e.occupancy(),
    )
    .extend(m.add_custom_cluster(SchneiderPilotMode))
    .configure(configure_odace_thermostat)
    .options(exposes_options.measurement_poll_interval())
    .on_event(describe_thermostat_poll)
    .add_to_registry()
)

# Dimmers

(
    DefinitionBuilder("U202DST600ZB", VENDOR, "EZinstall3 2 gang 2x300W dimmer module")
    .zigbee_model("U202DST600ZB")
    .extend(
        m.device_endpoints({"l1": 10, "l2": 11}),
        m.light(endpoint_names=["l1", "l2"], configure_reporting=True),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("U201DST600ZB", VENDOR, "EZinstall3 1 gang 550W dimmer module")
    .zigbee_model("U201DST600ZB")
    .extend(m.light(configure_reporting=True))
    .add_to_registry()
)

(
    DefinitionBuilder("CCT5010-0001", VENDOR, "Micro module dimmer")
    .zigbee_model("PUCK/DIMMER/1")
    .ota()
    .extend(m.light(configure_reporting=True, level_config=True))
    .from_zigbee(fz.wiser_ballast_configuration)
    .to_zigbee(tz.ballast_config, tz.wiser_dimmer_mode)
    .exposes(*ballast_levels(), wiser_dimmer_mode())
    .white_label("Elko", "EKO07090")
    .white_label(VENDOR, "550B1012")
    .add_to_registry()
)

(
    DefinitionBuilder("CCT5010-0003", VENDOR, "Micro module dimmer with neutral lead")
    .zigbee_model("PUCK/UNIDIM/1")
    .ota()
    .extend(m.light(configure_reporting=True, level_config=True))
    .from_zigbee(fz.wiser_ballast_configuration)
    .to_zigbee(tz.ballast_config, tz.wiser_dimmer_mode)
    .exposes(*ballast_levels(), wiser_dimmer_mode())
    .add_to_registry()
)

wiser_dimmer = (
    DefinitionBuilder("WDE002334", VENDOR, "Rotary dimmer")
    .zigbee_model("NHROTARY/DIMMER/1")
    .from_zigbee(
        fz.on_off, fz.brightness, fz.level_config, fz.wiser_ballast_configuration
    )
    .to_zigbee(
        tz.light_onoff_brightness,
        tz.level_config,
        tz.ballast_config,
        tz.wiser_dimmer_mode,
    )
    .exposes(
        e.light_brightness().with_level_config(),
        *ballast_levels(),
        wiser_dimmer_mode(),
    )
    .extend(m.add_custom_cluster(SchneiderBallast))
    .configure(configure_dimmer())
)
wiser_dimmer.add_to_registry()

(
    wiser_dimmer.clone("WDE002960", "Push button dimmer")
    .zigbee_model("NHPB/UNIDIM/1")
    .add_to_registry()
)

(
    DefinitionBuilder("NH3516A", VENDOR, "Rotary dimmer")
    .zigbee_model("NHROTARY/UNIDIM/1")
    .extend(
        m.light(power_on_behavior=False, configure_reporting=True, level_config=True),
        m.lighting_ballast(),
        *dimming_mode(),
    )
    .white_label("Elko", "EKO07278")
    .white_label("Elko", "EKO07279")
    .white_label("Elko", "EKO07280")
    .white_label("Elko", "EKO07281")
    .white_label("Elko", "EKO30198")
    .white_label("Schneider", "WDE002961")
    .white_label("Schneider", "WDE003961")
    .white_label("Schneider", "WDE004961")
    .add_to_registry()
)

(
    DefinitionBuilder("WDE002386", VENDOR, "Push button dimmer")
    .zigbee_model("NHPB/DIMMER/1")
    .from_zigbee(fz.on_off, fz.brightness, fz.level_config, fz.ballast_configuration)
    .to_zigbee(tz.light_onoff_brightness, tz.level_config, tz.ballast_config)
    .exposes(e.light_brightness().with_level_config(), *ballast_levels())
    .configure(configure_dimmer())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "41EPBDWCLMZ/354PBDMBTZ", VENDOR, "Wiser 40/300-Series Module Dimmer"
    )
    .zigbee_model("CH/DIMMER/1")
    .from_zigbee(fz.on_off, fz.brightness, fz.level_config, fz.ballast_configuration)
    .to_zigbee(tz.light_onoff_brightness, tz.level_config, tz.ballast_config)
    .exposes(e.light_brightness(), *ballast_levels())
    .ota()
    .extend(light_switch_configuration(), indicator_mode("smart"))
    .meta(multi_endpoint=True)
    .endpoints({"smart": 21})
    .configure(configure_dimmer())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5116-0300/MEG5171-0000",
        VENDOR,
        "Merten MEG5171 PlusLink Dimmer insert with Merten Wiser System M Push"
        " Button (1fold)",
    )
    .zigbee_model("1GANG/DIMMER/1", "1GANG/DALI/1")
    .from_zigbee(
        fz.on_off, fz.brightness, fz.level_config, fz.wiser_ballast_configuration
    )
    .to_zigbee(
        tz.light_onoff_brightness,
        tz.level_config,
        tz.ballast_config,
        tz.wiser_dimmer_mode,
    )
    .exposes(
        e.light_brightness().with_level_config(),
        *ballast_levels(),
        wiser_dimmer_mode(),
    )
    .extend(
        m.add_custom_cluster(SchneiderBallast),
        light_switch_configuration(),
        indicator_mode(),
        switch_actions(),
    )
    .configure(configure_dimmer())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5126-0300/MEG5171-0000",
        VENDOR,
        "Merten MEG5171 PlusLink Dimmer insert with Merten Wiser System M Push"
        " Button (2fold)",
    )
    .zigbee_model("2GANG/DIMMER/1")
    .from_zigbee(
        fz.on_off, fz.brightness, fz.level_config, fz.wiser_ballast_configuration
    )
    .to_zigbee(
        tz.light_onoff_brightness,
        tz.level_config,
        tz.ballast_config,
        tz.wiser_dimmer_mode,
    )
    .exposes(
        e.light_brightness().with_level_config(),
        *ballast_levels(),
        wiser_dimmer_mode(),
    )
    .extend(
        m.add_custom_cluster(SchneiderBallast),
        light_switch_configuration(),
        indicator_mode("right"),
        indicator_mode("left"),
        switch_actions("right"),
        switch_actions("left"),
    )
    .meta(multi_endpoint=True)
    .endpoints({"right": 21, "left": 22})
    .configure(configure_dimmer())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5126-0300/MEG5172-0000",
        VENDOR,
        "Merten MEG5172 PlusLink Dimmer insert with Merten Wiser System M Push"
        " Button (2fold)",
    )
    .zigbee_model("2GANG/DIMMER/2")
    .from_zigbee(fz.wiser_ballast_configuration)
    .to_zigbee(tz.ballast_config, tz.wiser_dimmer_mode)
    .exposes(*ballast_levels(), wiser_dimmer_mode())
    .extend(
        m.add_custom_cluster(SchneiderBallast),
        m.device_endpoints({"left": 4, "right": 3, "left_btn": 22, "right_btn": 21}),
        m.light(endpoint_names=["left", "right"], configure_reporting=True),
        light_switch_configuration(),
        switch_actions("left_btn"),
        switch_actions("right_btn"),
        indicator_mode("left_btn"),
    )
    .add_to_registry()
)

# Switches

(
    DefinitionBuilder(
        "CCT5011-0001/CCT5011-0002/MEG5011-0001", VENDOR, "Micro module switch"
    )
    .zigbee_model("PUCK/SWITCH/1")
    .ota()
    .extend(m.on_off(power_on_behavior=False))
    .white_label("Elko", "EKO07144")
    .add_to_registry()
)

(
    DefinitionBuilder("CCTFR6730", VENDOR, "Wiser power micromodule")
    .zigbee_model("CCTFR6730")
    .white_label("Elko", "EKO20004")
    .extend(
        m.on_off(power_on_behavior=True),
        m.electricity_meter(cluster="metering"),
        m.identify(),
    )
    .add_to_registry()
)

ch_switch = (
    DefinitionBuilder(
        "41E2PBSWMZ/356PB2MBTZ", VENDOR, "Wiser 40/300-Series module switch 2AX"
    )
    .zigbee_model("CH2AX/SWITCH/1")
    .ota()
    .extend(
        m.on_off(power_on_behavior=False),
        light_switch_configuration(),
        indicator_mode("smart"),
    )
    .meta(multi_endpoint=True)
    .endpoints({"smart": 21})
    .configure(configure_on_off)
)
ch_switch.add_to_registry()

(
    ch_switch.clone(
        "41E10PBSWMZ-VW", "Wiser 40/300-Series module switch 10AX with ControlLink"
    )
    .zigbee_model("CH10AX/SWITCH/1")
    .add_to_registry()
)

(
    DefinitionBuilder(
        "U201SRY2KWZB",
        VENDOR,
        "Ulti 240V 9.1 A 1 gang relay switch impress switch module, amber LED",
    )
    .zigbee_model("U201SRY2KWZB")
    .extend(m.on_off())
    .add_to_registry()
)

(
    DefinitionBuilder(
        "U202SRY2KWZB",
        VENDOR,
        "Ulti 240V 9.1 A 2 gangs relay switch impress switch module, amber LED",
    )
    .zigbee_model("U202SRY2KWZB")
    .extend(
        m.device_endpoints({"l1": 10, "l2": 11}),
        m.on_off(endpoint_names=["l1", "l2"]),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("S520530W", VENDOR, "Odace connectable relay switch 10A")
    .zigbee_model("NHPB/SWITCH/1")
    .extend(m.on_off(power_on_behavior=False))
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5161-0000",
        VENDOR,
        "Merten PlusLink relay insert with Merten Wiser system M push button (1fold)",
    )
    .zigbee_model("1GANG/SWITCH/1")
    .extend(m.on_off(power_on_behavior=False))
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5126-0300",
        VENDOR,
        "Merten MEG5165 PlusLink relais insert with Merten Wiser System M push"
        " button (2fold)",
    )
    .zigbee_model("2GANG/SWITCH/2", "2GANG/SWITCH/1")
    .extend(
        m.device_endpoints({"l1": 1, "l2": 2}),
        m.on_off(endpoint_names=["l1", "l2"], power_on_behavior=False),
    )
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5126-0300_MEG5152-0000",
        VENDOR,
        "Merten MEG5152 switch insert (2fold) with Merten System M push button"
        " (2fold)",
    )
    .zigbee_model("2GANG/ESWITCH/2")
    .extend(
        m.device_endpoints({"left": 1, "right": 2, "left_sw": 21, "right_sw": 22}),
        m.identify(),
        m.on_off(power_on_behavior=False, endpoint_names=["left", "right"]),
        m.commands_on_off(endpoint_names=["left_sw", "right_sw"]),
    )
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5116-0300_MEG5162-0000",
        VENDOR,
        "Merten MEG5162 switch insert (2fold) with Merten System M push button"
        " (1fold)",
    )
    .zigbee_model("1GANG/SWITCH/2")
    .extend(
        m.device_endpoints({"left": 1, "right": 2, "left_sw": 21}),
        m.identify(),
        m.on_off(power_on_behavior=False, endpoint_names=["left", "right"]),
        m.commands_on_off(endpoint_names=["left_sw"]),
    )
    .add_to_registry()
)

(
    DefinitionBuilder(
        "MEG5116-0300_MEG5151-0000",
        VENDOR,
        "Merten MEG5151 switch insert with Merten System M push button (1fold)",
    )
    .zigbee_model("1GANG/ESWITCH/1")
    .extend(
        m.device_endpoints({"switch": 1, "switch_sw": 21}),
        m.identify(),
        m.on_off(power_on_behavior=False),
        m.commands_on_off(endpoint_names=["switch_sw"]),
    )
    .add_to_registry()
)

# Fan controller

(
    DefinitionBuilder(
        "41ECSFWMZ-VW", VENDOR, "Wiser 40/300-Series Module AC Fan Controller"
    )
    .zigbee_model("CHFAN/SWITCH/1")
    .from_zigbee(fz.fan)
    .to_zigbee(tz_fan_mode)
    .exposes(e.fan().with_state().with_modes(["off", "low", "medium", "high", "on"]))
    .ota()
    .extend(
        fan_switch_configuration(),
        fan_indicator_mode(),
        fan_indicator_orientation(),
    )
    .configure(configure_fan)
    .add_to_registry()
)

# Plugs and sockets

(
    DefinitionBuilder("CCT711119", VENDOR, "Wiser smart plug")
    .zigbee_model("SMARTPLUG/1")
    .from_zigbee(
        fz.on_off, fz.electrical_measurement, fz.metering, fz.power_on_behavior
    )
    .to_zigbee(tz.on_off, tz.power_on_behavior, tz.electrical_measurement_power)
    .exposes(
        e.switch(),
        e.power().with_access(Access.STATE_GET),
        e.energy(),
        e.power_on_behavior(["off", "previous", "on"]),
    )
    .configure(configure_smart_plug)
    .add_to_registry()
)


def socket_outlet(
    model: str, zigbee_model: str, description: str, report_energy: bool = False
) -> DefinitionBuilder:
    return (
        DefinitionBuilder(model, VENDOR, description)
        .zigbee_model(zigbee_model)
        .from_zigbee(
            fz.on_off,
            fz.electrical_measurement,
            fz.eko09738_metering,
            fz.power_on_behavior,
        )
        .to_zigbee(tz.on_off, tz.power_on_behavior)
        .exposes(
            e.switch(),
            e.power(),
            e.energy(),
            e.power_on_behavior(["off", "previous", "on"]),
            e.current(),
            e.voltage(),
        )
        .configure(configure_socket(report_energy))
    )


(
    socket_outlet(
        "EKO09738", "SOCKET/OUTLET/2", "Zigbee smart socket with power meter"
    )
    .white_label("Elko", "EKO09738", "SmartStikk")
    .add_to_registry()
)

(
    socket_outlet(
        "EKO09716", "SOCKET/OUTLET/1", "Zigbee smart socket with power meter"
    )
    .extend(fan_switch_configuration(), socket_indicator_mode())
    .add_to_registry()
)

(
    socket_outlet(
        "545D6115",
        "LK/OUTLET/1",
        "LK FUGA wiser wireless socket outlet",
        report_energy=True,
    )
    .add_to_registry()
)

(
    DefinitionBuilder("MUR36014", VENDOR, "Mureva EVlink Smart socket outlet")
    .zigbee_model("EVSCKT/OUTLET/1")
    .extend(m.on_off(power_on_behavior=True), m.electricity_meter())
    .add_to_registry()
)

(
    DefinitionBuilder("3025CSGZ", VENDOR, "Dual connected smart socket")
    .zigbee_model("CH/Socket/2")
    .ota()
    .extend(
        m.device_endpoints({"l1": 1, "l2": 2}),
        m.on_off(endpoint_names=["l1", "l2"]),
    )
    .add_to_registry()
)

# LK FUGA

(
    DefinitionBuilder("545D6514", VENDOR, "LK FUGA wiser wireless double relay")
    .zigbee_model("LK Switch")
    .meta(multi_endpoint=True)
    .from_zigbee(fz.on_off, fz.command_on, fz.command_off)
    .to_zigbee(tz.on_off)
    .endpoints({"l1": 1, "l2": 2, "s1": 21, "s2": 22, "s3": 23, "s4": 24})
    .exposes(
        e.switch().with_endpoint("l1"),
        e.switch().with_endpoint("l2"),
        e.action(["on_s*", "off_s*"]),
    )
    .configure(configure_lk_switch)
    .add_to_registry()
)

(
    DefinitionBuilder("545D6102", VENDOR, "LK FUGA wiser wireless dimmer")
    .zigbee_model("LK Dimmer")
    .from_zigbee(
        fz_lk_ballast_configuration,
        fz.command_recall,
        fz.command_on,
        fz.command_off,
        fz.command_move,
        fz.command_stop,
    )
    .to_zigbee(tz.ballast_config, tz.schneider_dimmer_mode)
    .endpoints({"l1": 3, "s1": 21, "s2": 22, "s3": 23, "s4": 24})
    .meta(multi_endpoint=True)
    .extend(
        m.add_custom_cluster(SchneiderBallast),
        m.light(endpoint_names=["l1"], configure_reporting=True, level_config=True),
    )
    .exposes(
        *ballast_levels("l1"),
        e.enum("dimmer_mode", Access.ALL, ["RC", "RL"])
        .with_description("Controls Capacitive or Inductive Dimming Mode")
        .with_endpoint("l1"),
        e.action(
            [
                "on",
                "off",
                "brightness_move_up",
                "brightness_move_down",
                "brightness_stop",
                "recall_*",
            ]
        ),
    )
    .configure(configure_lk_dimmer)
    .on_event(record_factory_bindings)
    .add_to_registry()
)

(
    DefinitionBuilder(
        "550D6001", VENDOR, "LK FUGA wiser wireless battery 4 button switch"
    )
    .zigbee_model("FLS/AIRLINK/4")
    .from_zigbee(
        fz.command_on, fz.command_off, fz.command_move, fz.command_stop, fz.battery
    )
    .endpoints({"top": 21, "bottom": 22})
    .white_label("Elko", "EKO07117")
    .meta(multi_endpoint=True)
    .exposes(
        e.action(
            _unique(
                [
                    "on_top",
                    "off_top",
                    "on_bottom",
                    "off_bottom",
                    "brightness_move_up_top",
                    "brightness_stop_top",
                    "brightness_move_down_top",
                    "brightness_stop_top",
                    "brightness_move_up_bottom",
                    "brightness_stop_bottom",
                    "brightness_move_down_bottom",
                    "brightness_stop_bottom",
                ]
            )
        ),
        e.battery(),
    )
    .configure(configure_lk_remote)
    .add_to_registry()
)

# Remotes

(
    DefinitionBuilder(
        "WDE002906/MEG5001-0300", VENDOR, "Wiser wireless switch 1-gang or 2-gang"
    )
    .zigbee_model("FLS/SYSTEM-M/4")
    .extend(
        m.battery(),
        m.device_endpoints({"right": 21, "left": 22}),
        light_switch_configuration(),
        switch_actions("right"),
        switch_actions("left"),
        m.commands_on_off(endpoint_names=["right", "left"]),
        m.commands_level_ctrl(endpoint_names=["right", "left"]),
    )
    .add_to_registry()
)

# Sensors

(
    DefinitionBuilder("550B1024", VENDOR, "Temperature & humidity sensor")
    .zigbee_model("CCT593011_AS")
    .from_zigbee(fz.humidity, fz.temperature, fz.battery)
    .exposes(e.battery(), e.temperature(), e.humidity())
    .configure(configure_temperature_humidity)
    .add_to_registry()
)

(
    DefinitionBuilder("NH3526", VENDOR, "Motion sensor with switch")
    .zigbee_model("NHMOTION/SWITCH/1")
    .extend(
        m.on_off(power_on_behavior=False, configure_reporting=True),
        m.illuminance(),
        m.occupancy(pir_config=["otu_delay"]),
        *occupancy_configuration(),
    )
    .white_label("Elko", "EKO06988")
    .white_label("Elko", "EKO06989")
    .white_label("Elko", "EKO06990")
    .white_label("Elko", "EKO06991")
    .white_label("LK", "545D6306")
    .add_to_registry()
)


def motion_dimmer(model: str, zigbee_model: str) -> DefinitionBuilder:
    return (
        DefinitionBuilder(model, VENDOR, "Motion sensor with dimmer")
        .zigbee_model(zigbee_model)
        .extend(
            m.light(
                power_on_behavior=False, configure_reporting=True, level_config=True
            ),
            m.lighting_ballast(),
            m.illuminance(),
            m.occupancy(pir_config=["otu_delay"]),
            *occupancy_configuration(),
            *dimming_mode(),
        )
    )


(
    motion_dimmer("NH3527A", "NHMOTION/DIMMER/1")
    .white_label("Elko", "EKO07250")
    .white_label("Elko", "EKO07251")
    .white_label("Elko", "EKO07252")
    .white_label("Elko", "EKO07253")
    .white_label("Elko", "EKO30199")
    .white_label("Exxact", "WDE002962")
    .white_label("Exxact", "WDE003962")
    .add_to_registry()
)

(
    motion_dimmer("NHMOTION/UNIDIM/1", "NHMOTION/UNIDIM/1")
    .white_label("ELKO", "EKO06984", "SmartPir with push dimmer")
    .white_label("ELKO", "EKO06985", "SmartPir with push dimmer")
    .white_label("ELKO", "EKO06986", "SmartPir with push dimmer")
    .add_to_registry()
)

(
    DefinitionBuilder("CCT595011", VENDOR, "Wiser motion sensor")
    .zigbee_model("CCT595011_AS")
    .from_zigbee(fz.battery, fz.ias_occupancy_only_alarm_2)
    .exposes(e.battery(), e.occupancy())
    .extend(m.illuminance())
    .configure(configure_battery)
    .add_to_registry()
)

(
    DefinitionBuilder("CCT592011", VENDOR, "Wiser water leakage sensor")
    .zigbee_model("CCT592011_AS")
    .from_zigbee(fz.ias_water_leak_alarm_1)
    .exposes(e.battery_low(), e.water_leak(), e.tamper())
    .add_to_registry()
)

(
    DefinitionBuilder("CCT591011_AS", VENDOR, "Wiser window/door sensor")
    .zigbee_model("CCT591011_AS")
    .from_zigbee(fz.ias_contact_alarm_1, fz.ias_contact_alarm_1_report)
    .exposes(e.battery_low(), e.contact(), e.tamper())
    .add_to_registry()
)

# PowerTag

(
    DefinitionBuilder("A9MEM1570", VENDOR, "PowerTag power sensor")
    .fingerprint(model="GreenPower_254", ieee=r"^0x00000000e.......$")
    .from_zigbee(schneider_powertag)
    .extend(
        m.add_custom_cluster(
            SchneiderGreenPowerProxy,
            endpoint_id=GREEN_POWER_ENDPOINT_ID,
            add_if_missing=True,
        )
    )
    .exposes(
        e.power(),
        e.power_apparent(),
        *[
            e.numeric(f"power_phase_{phase}", Access.STATE)
            .with_unit("W")
            .with_description(f"Instantaneous measured power on phase {phase.upper()}")
            for phase in "abc"
        ],
        e.power_factor(),
        e.energy(),
        *[
            e.numeric(f"energy_phase_{phase}", Access.STATE)
            .with_unit("kWh")
            .with_description(f"Sum of consumed energy on phase {phase.upper()}")
            for phase in "abc"
        ],
        e.ac_frequency(),
        *[
            e.numeric(f"voltage_phase_{phase}", Access.STATE)
            .with_unit("V")
            .with_description(
                f"Measured electrical potential value on phase {phase.upper()}"
            )
            for phase in "abc"
        ],
        *[
            e.numeric(f"voltage_phase_{pair}", Access.STATE)
            .with_unit("V")
            .with_description(
                "Measured electrical potential value between phase"
                f" {pair[0].upper()} and {pair[1].upper()}"
            )
            for pair in ("ab", "bc", "ca")
        ],
        *[
            e.numeric(f"current_phase_{phase}", Access.STATE)
            .with_unit("A")
            .with_description(
                f"Instantaneous measured electrical current on phase {phase.upper()}"
            )
            for phase in "abc"
        ],
    )
    .add_to_registry()
)

# Smoke alarm

(
    DefinitionBuilder("W599001", VENDOR, "Wiser smoke alarm")
    .zigbee_model("W599001", "W599501", "755WSA")
    .extend(
        m.battery(voltage=True, voltage_reporting=True),
        m.temperature(),
        m.ias_zone_alarm(
            "smoke",
            zone_attributes=("alarm_1", "tamper", "battery_low", "test"),
            manufacturer_zone_attributes=(
                (
                    1,
                    "heat",
                    "Indicates whether the device has detected high temperature",
                ),
                (11, "hush", "Indicates whether the device is in hush mode"),
            ),
        ),
    )
    .white_label(
        VENDOR,
        "W599501",
        "Wiser smoke alarm",
        fingerprint=[Fingerprint(model="W599501")],
    )
    .white_label(
        VENDOR,
        "755WSA",
        "Clipsal Wiser smoke alarm",
        fingerprint=[Fingerprint(model="755WSA")],
    )
    .add_to_registry()
)

# AvatarOn

(
    DefinitionBuilder("E8331DST300ZB", VENDOR, "Wiser AvatarOn 1G dimmer switch")
    .zigbee_model("E8331DST300ZB")
    .extend(
        m.light(power_on_behavior=False, configure_reporting=True),
        visa_configuration(),
        visa_indicator_luminance_level(),
        visa_indicator_color(),
        visa_indicator_mode([0, 1, 2, 3]),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("E8332DST350ZB", VENDOR, "Wiser AvatarOn 2G dimmer switch")
    .zigbee_model("E8332DST350ZB")
    .extend(
        m.device_endpoints({"l1": 10, "l2": 11}),
        m.light(
            endpoint_names=["l1", "l2"],
            power_on_behavior=False,
            configure_reporting=True,
        ),
        visa_configuration(enum_type=True),
        visa_indicator_luminance_level(),
        visa_indicator_color(),
        visa_indicator_mode([2, 0, 3, 1]),
    )
    .add_to_registry()
)


def avatar_on_switch(model: str, zigbee_model: str, gangs: int, luminance: bool):
    endpoint_names = [f"l{gang}" for gang in range(1, gangs + 1)]
    extends = [
        m.device_endpoints(
            {name: 9 + gang for gang, name in enumerate(endpoint_names, start=1)}
        ),
        m.on_off(endpoint_names=endpoint_names, power_on_behavior=False),
        visa_configuration(),
    ]
    if luminance:
        extends += [visa_indicator_luminance_level(), visa_indicator_color()]
    extends.append(visa_indicator_mode([0, 1, 2, 3]))

    return (
        DefinitionBuilder(model, VENDOR, f"Wiser AvatarOn {gangs}G onoff switch")
        .zigbee_model(zigbee_model)
        .extend(*extends)
        .add_to_registry()
    )


avatar_on_switch("E8331SRY800ZB", "E8331SRY800ZB", 1, luminance=True)
avatar_on_switch("E8331SRY800ZB_NEW", "A3N31SR800ZB_xx_C1", 1, luminance=False)
avatar_on_switch("E8332SRY800ZB", "E8332SRY800ZB", 2, luminance=True)
avatar_on_switch("E8332SRY800ZB_NEW", "A3N32SR800ZB_xx_C1", 2, luminance=False)
avatar_on_switch("E8333SRY800ZB", "E8333SRY800ZB", 3, luminance=True)
avatar_on_switch("E8333SRY800ZB_NEW", "A3N33SR800ZB_xx_C1", 3, luminance=False)

(
    DefinitionBuilder("E8332SCN300ZB", VENDOR, "Wiser AvatarOn 2G curtain switch")
    .zigbee_model("E8332SCN300ZB")
    .extend(
        m.device_endpoints({"l1": 10, "l2": 11}),
        visa_configuration(),
        visa_indicator_luminance_level(),
        visa_indicator_color(),
        visa_indicator_mode([0, 1, 2, 3]),
        visa_wiser_curtain(["l1", "l2"]),
        visa_motor_type(1),
        visa_motor_type(2),
        visa_curtain_status(1),
        visa_curtain_status(2),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("E8334RWMZB", VENDOR, "Wiser AvatarOn 4K Freelocate")
    .zigbee_model("E8334RWMZB")
    .extend(
        visa_configuration(),
        visa_indicator_luminance_level(),
        visa_indicator_color(),
        *[visa_key_event_notification(key) for key in range(1, 5)],
    )
    .add_to_registry()
)
