"""Generic inbound converters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import (
    AnalogInput,
    Basic,
    BinaryOutput,
    BinaryValue,
    DeviceTemperature,
    LevelControl,
    MultistateInput,
    MultistateValue,
    OnOff,
    PowerConfiguration,
    Scenes,
)
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import Fan, Thermostat, UserInterface
from zigpy.zcl.clusters.lighting import Ballast
from zigpy.zcl.clusters.measurement import (
    PM25,
    CarbonDioxideConcentration,
    IlluminanceMeasurement,
    OccupancySensing,
    PressureMeasurement,
    RelativeHumidity,
    SoilMoisture,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.security import IasZone
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices.config import CONF_INVERT_COVER
from zigpy_devices.const import (
    ATTRIBUTE_REPORT,
    COMMAND_DOWN_CLOSE,
    COMMAND_MOVE,
    COMMAND_MOVE_WITH_ON_OFF,
    COMMAND_OFF,
    COMMAND_ON,
    COMMAND_RECALL,
    COMMAND_STATUS_CHANGE_NOTIFICATION,
    COMMAND_STOP,
    COMMAND_STOP_WITH_ON_OFF,
    COMMAND_TOGGLE,
    COMMAND_UP_OPEN,
    REPORT_TYPES,
)
from zigpy_devices.converters import from_zigbee_converter
from zigpy_devices.exposes import options as exposes_options
from zigpy_devices.utils import (
    battery_voltage_to_percentage,
    calibrate_and_precision_round_options,
    get_cluster,
    get_from_lookup,
    has_already_processed_message,
    has_cluster,
    lux_from_measured_value,
    postfix_with_endpoint_name,
    precision_round,
)

if TYPE_CHECKING:
    from zigpy_devices.converters import Message
    from zigpy_devices.definition import Definition
    from zigpy_devices.typing import KeyValue, OptionsType

_LOGGER = logging.getLogger(__name__)

INVALID_MEASUREMENT = -0x8000

POWER_ON_BEHAVIOR = {0: "off", 1: "on", 2: "toggle", 255: "previous"}

SYSTEM_MODE = {
    0: "off",
    1: "auto",
    3: "cool",
    4: "heat",
    5: "emergency_heating",
    6: "precooling",
    7: "fan_only",
    8: "dry",
    9: "sleep",
}

CONTROL_SEQUENCE_OF_OPERATION = {
    0: "cooling_only",
    1: "cooling_with_reheat",
    2: "heating_only",
    3: "heating_with_reheat",
    4: "cooling_and_heating_4-pipes",
    5: "cooling_and_heating_4-pipes_with_reheat",
}

KEYPAD_LOCKOUT = {
    0: "unlock",
    1: "lock1",
    2: "lock2",
    3: "lock3",
    4: "lock4",
    5: "lock5",
}

TEMPERATURE_DISPLAY_MODE = {0: "celsius", 1: "fahrenheit"}

WISER_DIMMER_MODE = {0: "auto", 1: "rc", 2: "rl", 3: "rl_led"}
WISER_CONTROL_MODE = 0xE000

FAN_MODE = {
    0: "off",
    1: "low",
    2: "medium",
    3: "high",
    4: "on",
    5: "auto",
    6: "smart",
}

MULTISTATE_ACTION = {0: "release", 1: "single", 2: "double", 3: "triple", 4: "hold"}

# Unit suffixes reported by ptvo firmware and the property name they map to
PTVO_UNIT_NAMES = {
    "C": "temperature",
    "%": "humidity",
    "m": "altitude",
    "Pa": "pressure",
    "ppm": "quality",
    "psize": "particle_size",
    "V": "voltage",
    "A": "current",
    "Wh": "energy",
    "W": "power",
    "Hz": "frequency",
    "pf": "power_factor",
    "lx": "illuminance",
}


def _with_action_group(payload: KeyValue, msg: Message) -> KeyValue:
    if msg.group_id:
        payload["action_group"] = msg.group_id
    return payload


def _cached(msg: Message, cluster_id: int, name: str, default: Any = None) -> Any:
    """Current value of an attribute: from the message, else from the zigpy cache."""
    if name in msg.data:
        return msg.data[name]

    cluster = get_cluster(msg.endpoint, cluster_id)
    if cluster is None:
        return default

    value = cluster.get(name)
    return default if value is None else value


def _factor(
    msg: Message, cluster_id: int, multiplier_name: str, divisor_name: str
) -> float | None:
    """Multiplier divided by divisor, or None unless both are known."""
    multiplier = _cached(msg, cluster_id, multiplier_name)
    divisor = _cached(msg, cluster_id, divisor_name)
    if multiplier is None or not divisor:
        return None
    return multiplier / divisor


def _action(
    action: str, msg: Message, definition: Definition, extra: KeyValue | None = None
) -> KeyValue | None:
    if has_already_processed_message(msg, definition):
        return None

    payload = {"action": postfix_with_endpoint_name(action, msg, definition)}
    if extra:
        payload.update(extra)
    return _with_action_group(payload, msg)


@from_zigbee_converter(OnOff.cluster_id, REPORT_TYPES)
def on_off(definition, msg, options, meta) -> KeyValue | None:
    if "on_off" not in msg.data:
        return None
    prop = postfix_with_endpoint_name("state", msg, definition)
    return {prop: "ON" if msg.data["on_off"] else "OFF"}


@from_zigbee_converter(OnOff.cluster_id, REPORT_TYPES)
def power_on_behavior(definition, msg, options, meta) -> KeyValue | None:
    if "start_up_on_off" not in msg.data:
        return None
    prop = postfix_with_endpoint_name("power_on_behavior", msg, definition)
    return {prop: get_from_lookup(msg.data["start_up_on_off"], POWER_ON_BEHAVIOR)}


@from_zigbee_converter(LevelControl.cluster_id, REPORT_TYPES)
def brightness(definition, msg, options, meta) -> KeyValue | None:
    if "current_level" not in msg.data:
        return None
    prop = postfix_with_endpoint_name("brightness", msg, definition)
    return {prop: msg.data["current_level"]}


@from_zigbee_converter(LevelControl.cluster_id, REPORT_TYPES)
def level_config(definition, msg, options, meta) -> KeyValue | None:
    keys = ("on_off_transition_time", "on_level", "start_up_current_level")
    if not any(key in msg.data for key in keys):
        return None

    prop = postfix_with_endpoint_name("level_config", msg, definition)
    config = dict(meta.state.get(prop, {}))

    if "on_off_transition_time" in msg.data:
        config["on_off_transition_time"] = msg.data["on_off_transition_time"]

    if "on_level" in msg.data:
        value = msg.data["on_level"]
        config["on_level"] = "previous" if value == 0xFF else value

    if "start_up_current_level" in msg.data:
        value = msg.data["start_up_current_level"]
        if value == 0x00:
            value = "minimum"
        elif value == 0xFF:
            value = "previous"
        config["current_level_startup"] = value

    return {prop: config}


@from_zigbee_converter(PowerConfiguration.cluster_id, REPORT_TYPES)
def battery(definition, msg, options, meta) -> KeyValue | None:
    """Battery percentage, voltage and low battery alarm.

    Devices report the percentage in half percent steps unless the definition says
    otherwise. A voltage only device gets its percentage from the definition's curve.
    """
    result: KeyValue = {}
    data = msg.data

    percentage = data.get("battery_percentage_remaining")
    if percentage is not None and percentage != 0xFF:
        if not definition.meta.battery_dont_divide_percentage:
            percentage = percentage / 2
        result["battery"] = precision_round(min(max(percentage, 0), 100), 0)

    voltage = data.get("battery_voltage")
    if voltage is not None and voltage != 0xFF:
        result["voltage"] = voltage * 100
        curve = definition.meta.battery_voltage_to_percentage
        if curve is not None and "battery" not in result:
            result["battery"] = battery_voltage_to_percentage(voltage * 100, curve)

    alarm = data.get("battery_alarm_state")
    if alarm is not None:
        result["battery_low"] = bool(int(alarm) & 0x0000000F)

    return result or None


def _measurement(
    definition: Definition,
    msg: Message,
    options: OptionsType,
    name: str,
    value: float,
) -> KeyValue:
    value = calibrate_and_precision_round_options(value, options, name)
    return {postfix_with_endpoint_name(name, msg, definition): value}


@from_zigbee_converter(
    TemperatureMeasurement.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.precision("temperature"),
        exposes_options.calibration("temperature"),
    ),
)
def temperature(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None or value == INVALID_MEASUREMENT:
        return None
    return _measurement(definition, msg, options, "temperature", value / 100)


@from_zigbee_converter(DeviceTemperature.cluster_id, REPORT_TYPES)
def device_temperature(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("current_temperature")
    if value is None:
        return None
    return _measurement(definition, msg, options, "device_temperature", value)


@from_zigbee_converter(
    RelativeHumidity.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.precision("humidity"),
        exposes_options.calibration("humidity"),
    ),
)
def humidity(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None

    value = value / 100
    # Some sensors occasionally report values outside of the valid range
    if not 0 <= value <= 100:
        return None
    return _measurement(definition, msg, options, "humidity", value)


@from_zigbee_converter(
    SoilMoisture.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.precision("soil_moisture"),
        exposes_options.calibration("soil_moisture"),
    ),
)
def soil_moisture(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None
    return _measurement(definition, msg, options, "soil_moisture", value / 100)


@from_zigbee_converter(
    IlluminanceMeasurement.cluster_id,
    REPORT_TYPES,
    options=(exposes_options.calibration("illuminance", "percentual"),),
)
def illuminance(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None
    return _measurement(
        definition, msg, options, "illuminance", lux_from_measured_value(value)
    )


@from_zigbee_converter(
    PressureMeasurement.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.precision("pressure"),
        exposes_options.calibration("pressure"),
    ),
)
def pressure(definition, msg, options, meta) -> KeyValue | None:
    if "scaled_value" in msg.data:
        scale = _cached(msg, PressureMeasurement.cluster_id, "scale", 0)
        value = msg.data["scaled_value"] / 10**scale / 100
    elif "measured_value" in msg.data:
        value = msg.data["measured_value"]
    else:
        return None
    return _measurement(definition, msg, options, "pressure", value)


@from_zigbee_converter(CarbonDioxideConcentration.cluster_id, REPORT_TYPES)
def co2(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None
    return _measurement(definition, msg, options, "co2", int(value * 1_000_000))


@from_zigbee_converter(PM25.cluster_id, REPORT_TYPES)
def pm25(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("measured_value")
    if value is None:
        return None
    return _measurement(definition, msg, options, "pm25", value)


@from_zigbee_converter(OccupancySensing.cluster_id, REPORT_TYPES)
def occupancy(definition, msg, options, meta) -> KeyValue | None:
    value = msg.data.get("occupancy")
    if value is None:
        return None
    prop = postfix_with_endpoint_name("occupancy", msg, definition)
    return {prop: bool(int(value) & 0x01)}


def _zone_status(msg: Message) -> int | None:
    value = msg.data.get("zone_status")
    return None if value is None else int(value)


def _ias_alarm_1(name: str, invert: bool = False):
    """Alarm on zone status bit 0 with tamper on bit 2 and battery low on bit 3."""

    def convert(definition, msg, options, meta) -> KeyValue | None:
        zone_status = _zone_status(msg)
        if zone_status is None:
            return None
        alarm = bool(zone_status & 0x01)
        return {
            name: not alarm if invert else alarm,
            "tamper": bool(zone_status & 0x04),
            "battery_low": bool(zone_status & 0x08),
        }

    return convert


IAS_TYPES = (COMMAND_STATUS_CHANGE_NOTIFICATION, ATTRIBUTE_REPORT)

ias_contact_alarm_1 = from_zigbee_converter(
    IasZone.cluster_id, COMMAND_STATUS_CHANGE_NOTIFICATION
)(_ias_alarm_1("contact", invert=True))
ias_contact_alarm_1_report = from_zigbee_converter(IasZone.cluster_id, REPORT_TYPES)(
    _ias_alarm_1("contact", invert=True)
)
ias_water_leak_alarm_1 = from_zigbee_converter(IasZone.cluster_id, IAS_TYPES)(
    _ias_alarm_1("water_leak")
)
ias_occupancy_alarm_1 = from_zigbee_converter(IasZone.cluster_id, IAS_TYPES)(
    _ias_alarm_1("occupancy")
)


@from_zigbee_converter(IasZone.cluster_id, IAS_TYPES)
def ias_occupancy_only_alarm_2(definition, msg, options, meta) -> KeyValue | None:
    zone_status = _zone_status(msg)
    if zone_status is None:
        return None
    return {"occupancy": bool(zone_status & 0x02)}


def _metering(definition, msg, options) -> KeyValue | None:
    if has_already_processed_message(msg, definition):
        return None

    result: KeyValue = {}
    factor = _factor(msg, Metering.cluster_id, "multiplier", "divisor")

    demand = msg.data.get("instantaneous_demand")
    if demand is not None:
        power = demand * factor * 1000 if factor is not None else demand
        result[postfix_with_endpoint_name("power", msg, definition)] = (
            calibrate_and_precision_round_options(power, options, "power")
        )

    if factor is not None:
        delivered = msg.data.get("current_summ_delivered")
        if delivered is not None:
            energy = calibrate_and_precision_round_options(
                delivered * factor, options, "energy"
            )
            result[postfix_with_endpoint_name("energy", msg, definition)] = energy

        received = msg.data.get("current_summ_received")
        if received is not None:
            produced = calibrate_and_precision_round_options(
                received * factor, options, "energy"
            )
            prop = postfix_with_endpoint_name("produced_energy", msg, definition)
            result[prop] = produced

    return result or None


@from_zigbee_converter(
    Metering.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.precision("power"),
        exposes_options.calibration("power", "percentual"),
        exposes_options.precision("energy"),
        exposes_options.calibration("energy", "percentual"),
    ),
)
def metering(definition, msg, options, meta) -> KeyValue | None:
    """Power and energy from the metering cluster, scaled by multiplier/divisor."""
    return _metering(definition, msg, options)


@from_zigbee_converter(Metering.cluster_id, REPORT_TYPES, options=metering.options)
def eko09738_metering(definition, msg, options, meta) -> KeyValue | None:
    """Metering for a socket that reports its power in mW and bogus zero energy."""
    result = _metering(definition, msg, options)
    if not result:
        return result

    energy = postfix_with_endpoint_name("energy", msg, definition)
    if result.get(energy) == 0:
        del result[energy]

    power = postfix_with_endpoint_name("power", msg, definition)
    if power in result:
        result[power] = result[power] / 1000

    return result or None


# attribute, property, multiplier, divisor, calibration/precision option
# fmt: off
ELECTRICAL_MEASUREMENTS = (
    ("active_power", "power", "ac_power_multiplier", "ac_power_divisor", "power"),
    ("active_power_ph_b", "power_phase_b", "ac_power_multiplier", "ac_power_divisor", "power"),
    ("active_power_ph_c", "power_phase_c", "ac_power_multiplier", "ac_power_divisor", "power"),
    ("apparent_power", "power_apparent", "ac_power_multiplier", "ac_power_divisor", "power"),
    ("rms_current", "current", "ac_current_multiplier", "ac_current_divisor", "current"),
    ("rms_current_ph_b", "current_phase_b", "ac_current_multiplier", "ac_current_divisor", "current"),
    ("rms_current_ph_c", "current_phase_c", "ac_current_multiplier", "ac_current_divisor", "current"),
    ("rms_voltage", "voltage", "ac_voltage_multiplier", "ac_voltage_divisor", "voltage"),
    ("rms_voltage_ph_b", "voltage_phase_b", "ac_voltage_multiplier", "ac_voltage_divisor", "voltage"),
    ("rms_voltage_ph_c", "voltage_phase_c", "ac_voltage_multiplier", "ac_voltage_divisor", "voltage"),
    ("ac_frequency", "ac_frequency", "ac_frequency_multiplier", "ac_frequency_divisor", "ac_frequency"),
    ("dc_power", "power", "dc_power_multiplier", "dc_power_divisor", "power"),
    ("dc_current", "current", "dc_current_multiplier", "dc_current_divisor", "current"),
    ("dc_voltage", "voltage", "dc_voltage_multiplier", "dc_voltage_divisor", "voltage"),
)
# fmt: on


@from_zigbee_converter(
    ElectricalMeasurement.cluster_id,
    REPORT_TYPES,
    options=(
        exposes_options.calibration("power", "percentual"),
        exposes_options.precision("power"),
        exposes_options.calibration("current", "percentual"),
        exposes_options.precision("current"),
        exposes_options.calibration("voltage"),
        exposes_options.precision("voltage"),
    ),
)
def electrical_measurement(definition, msg, options, meta) -> KeyValue | None:
    """Electrical measurements scaled by their multiplier/divisor pairs.

    A pair that is not known yet counts as 1.
    """
    if has_already_processed_message(msg, definition):
        return None

    result: KeyValue = {}
    for attr, prop, multiplier_name, divisor_name, option in ELECTRICAL_MEASUREMENTS:
        value = msg.data.get(attr)
        if value is None:
            continue

        multiplier = _cached(msg, ElectricalMeasurement.cluster_id, multiplier_name, 1)
        divisor = _cached(msg, ElectricalMeasurement.cluster_id, divisor_name, 1) or 1
        value = value * multiplier / divisor
        result[postfix_with_endpoint_name(prop, msg, definition)] = (
            calibrate_and_precision_round_options(value, options, option)
        )

    if "power_factor" in msg.data:
        prop = postfix_with_endpoint_name("power_factor", msg, definition)
        result[prop] = precision_round(msg.data["power_factor"] / 100, 2)

    return result or None


@from_zigbee_converter(
    WindowCovering.cluster_id,
    REPORT_TYPES,
    options=(exposes_options.invert_cover(),),
)
def cover_position_tilt(definition, msg, options, meta) -> KeyValue | None:
    """Lift and tilt position, where 100 means fully open unless inverted."""
    invert = bool(options.get(CONF_INVERT_COVER, False))
    if definition.meta.cover_inverted:
        invert = not invert

    result: KeyValue = {}

    lift = msg.data.get("current_position_lift_percentage")
    if lift is not None and 0 <= lift <= 100:
        position = lift if invert else 100 - lift
        result[postfix_with_endpoint_name("position", msg, definition)] = position
        result[postfix_with_endpoint_name("state", msg, definition)] = (
            "OPEN" if position > 0 else "CLOSE"
        )

    tilt = msg.data.get("current_position_tilt_percentage")
    if tilt is not None and 0 <= tilt <= 100:
        result[postfix_with_endpoint_name("tilt", msg, definition)] = (
            tilt if invert else 100 - tilt
        )

    return result or None


def _running_state(value: int) -> str:
    if value & 0x01:
        return "heat"
    if value & 0x02:
        return "cool"
    if value & 0x04:
        return "fan_only"
    return "idle"


@from_zigbee_converter(Thermostat.cluster_id, REPORT_TYPES)
def thermostat(definition, msg, options, meta) -> KeyValue | None:
    result: KeyValue = {}
    data = msg.data

    def key(name: str) -> str:
        return postfix_with_endpoint_name(name, msg, definition)

    for attr in (
        "local_temperature",
        "occupied_heating_setpoint",
        "unoccupied_heating_setpoint",
        "occupied_cooling_setpoint",
        "min_heat_setpoint_limit",
        "max_heat_setpoint_limit",
    ):
        value = data.get(attr)
        if value is not None and value != INVALID_MEASUREMENT:
            result[key(attr)] = precision_round(value / 100, 2)

    if "local_temperature_calibration" in data:
        result[key("local_temperature_calibration")] = precision_round(
            data["local_temperature_calibration"] / 10, 1
        )

    if "occupancy" in data:
        result[key("occupancy")] = bool(int(data["occupancy"]) & 0x01)

    if "pi_heating_demand" in data:
        result[key("pi_heating_demand")] = min(max(data["pi_heating_demand"], 0), 100)

    if "ctrl_sequence_of_oper" in data:
        result[key("control_sequence_of_operation")] = get_from_lookup(
            data["ctrl_sequence_of_oper"], CONTROL_SEQUENCE_OF_OPERATION
        )

    if "system_mode" in data:
        result[key("system_mode")] = get_from_lookup(data["system_mode"], SYSTEM_MODE)

    if "running_state" in data:
        result[key("running_state")] = _running_state(int(data["running_state"]))

    return result or None


@from_zigbee_converter(UserInterface.cluster_id, REPORT_TYPES)
def hvac_user_interface(definition, msg, options, meta) -> KeyValue | None:
    result: KeyValue = {}
    if "keypad_lockout" in msg.data:
        result["keypad_lockout"] = get_from_lookup(
            msg.data["keypad_lockout"], KEYPAD_LOCKOUT
        )
    if "temperature_display_mode" in msg.data:
        result["temperature_display_mode"] = get_from_lookup(
            msg.data["temperature_display_mode"], TEMPERATURE_DISPLAY_MODE
        )
    return result or None


@from_zigbee_converter(Fan.cluster_id, REPORT_TYPES)
def fan(definition, msg, options, meta) -> KeyValue | None:
    if "fan_mode" not in msg.data:
        return None
    mode = get_from_lookup(msg.data["fan_mode"], FAN_MODE)
    return {"fan_mode": mode, "fan_state": "OFF" if mode == "off" else "ON"}


@from_zigbee_converter(LevelControl.cluster_id, REPORT_TYPES)
def fan_speed(definition, msg, options, meta) -> KeyValue | None:
    if "current_level" not in msg.data:
        return None
    return {"speed": msg.data["current_level"]}


@from_zigbee_converter(Ballast.cluster_id, REPORT_TYPES)
def ballast_configuration(definition, msg, options, meta) -> KeyValue | None:
    result: KeyValue = {}
    for attr, prop in (
        ("physical_min_level", "ballast_physical_minimum_level"),
        ("physical_max_level", "ballast_physical_maximum_level"),
        ("min_level", "ballast_minimum_level"),
        ("max_level", "ballast_maximum_level"),
        ("power_on_level", "ballast_power_on_level"),
    ):
        if attr in msg.data:
            result[prop] = msg.data[attr]

    if "ballast_status" in msg.data:
        status = int(msg.data["ballast_status"])
        result["ballast_status_non_operational"] = bool(status & 0x01)
        result["ballast_status_lamp_failure"] = bool(status & 0x02)

    return result or None


@from_zigbee_converter(Ballast.cluster_id, REPORT_TYPES)
def wiser_ballast_configuration(definition, msg, options, meta) -> KeyValue | None:
    """Ballast configuration plus the dimming mode of Wiser dimmers."""
    result = ballast_configuration.convert(definition, msg, options, meta) or {}

    mode = msg.data.get("wiser_control_mode", msg.data.get(WISER_CONTROL_MODE))
    if mode is not None:
        result["dimmer_mode"] = WISER_DIMMER_MODE.get(int(mode))

    return result or None


@from_zigbee_converter(OnOff.cluster_id, COMMAND_ON)
def command_on(definition, msg, options, meta) -> KeyValue | None:
    return _action("on", msg, definition)


@from_zigbee_converter(OnOff.cluster_id, COMMAND_OFF)
def command_off(definition, msg, options, meta) -> KeyValue | None:
    return _action("off", msg, definition)


@from_zigbee_converter(OnOff.cluster_id, COMMAND_TOGGLE)
def command_toggle(definition, msg, options, meta) -> KeyValue | None:
    return _action("toggle", msg, definition)


@from_zigbee_converter(
    LevelControl.cluster_id, (COMMAND_MOVE, COMMAND_MOVE_WITH_ON_OFF)
)
def command_move(definition, msg, options, meta) -> KeyValue | None:
    direction = "down" if msg.data.get("move_mode") else "up"
    return _action(
        f"brightness_move_{direction}",
        msg,
        definition,
        {"action_rate": msg.data.get("rate")},
    )


@from_zigbee_converter(
    LevelControl.cluster_id, (COMMAND_STOP, COMMAND_STOP_WITH_ON_OFF)
)
def command_stop(definition, msg, options, meta) -> KeyValue | None:
    return _action("brightness_stop", msg, definition)


@from_zigbee_converter(Scenes.cluster_id, COMMAND_RECALL)
def command_recall(definition, msg, options, meta) -> KeyValue | None:
    return _action(f"recall_{msg.data.get('scene_id')}", msg, definition)


@from_zigbee_converter(WindowCovering.cluster_id, COMMAND_UP_OPEN)
def command_cover_open(definition, msg, options, meta) -> KeyValue | None:
    return _action("open", msg, definition)


@from_zigbee_converter(WindowCovering.cluster_id, COMMAND_DOWN_CLOSE)
def command_cover_close(definition, msg, options, meta) -> KeyValue | None:
    return _action("close", msg, definition)


@from_zigbee_converter(WindowCovering.cluster_id, COMMAND_STOP)
def command_cover_stop(definition, msg, options, meta) -> KeyValue | None:
    return _action("stop", msg, definition)


@from_zigbee_converter(MultistateInput.cluster_id, REPORT_TYPES)
def ptvo_multistate_action(definition, msg, options, meta) -> KeyValue | None:
    if "present_value" not in msg.data:
        return None
    action = get_from_lookup(msg.data["present_value"], MULTISTATE_ACTION)
    return {"action": postfix_with_endpoint_name(action, msg, definition)}


def ptvo_value_name(unit: str) -> str | None:
    """Property name of a ptvo value from its unit, or None for unknown units."""
    if unit.startswith(("mcpm", "ncpm")):
        index = unit[4:5]
        return unit[:4] + "10" if index == "A" else unit

    name = PTVO_UNIT_NAMES.get(unit)
    if name is None and unit.isdigit():
        name = f"val{unit}"
    return name


@from_zigbee_converter(AnalogInput.cluster_id, REPORT_TYPES)
def ptvo_switch_analog_input(definition, msg, options, meta) -> KeyValue | None:
    """Analog values of a ptvo channel.

    The description attribute carries `unit,device id` when the channel is a sensor.
    """
    if "present_value" not in msg.data:
        return None

    channel = f"l{msg.endpoint.endpoint_id}"
    raw = msg.data["present_value"]
    payload: KeyValue = {channel: precision_round(raw, 3)}

    if has_cluster(msg.endpoint, LevelControl.cluster_id):
        payload[f"brightness_{channel}"] = raw
        return payload

    description = msg.data.get("description")
    if not description:
        return payload

    unit, _, device_id = str(description).partition(",")
    if device_id:
        payload[f"device_{channel}"] = device_id

    if unit:
        value = precision_round(raw, 1)
        if unit == "A" and raw < 1:
            value = precision_round(raw, 3)
        elif unit.startswith(("mcpm", "ncpm")):
            value = precision_round(raw, 2)

        name = ptvo_value_name(unit)
        if name is not None:
            payload[f"{name}_{channel}"] = value

    return payload


def _uart_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = "".join(str(item) for item in value)

    if isinstance(value, (bytes, bytearray)):
        if all(0x20 <= byte < 0x7F for byte in value):
            return value.decode("ascii")
        return value.hex()

    return str(value)


@from_zigbee_converter(MultistateValue.cluster_id, REPORT_TYPES)
def ptvo_switch_uart(definition, msg, options, meta) -> KeyValue | None:
    if "state_text" not in msg.data:
        return None
    return {"action": _uart_text(msg.data["state_text"])}


@from_zigbee_converter(BinaryOutput.cluster_id, REPORT_TYPES)
def cc2530_router_led(definition, msg, options, meta) -> KeyValue | None:
    if "present_value" not in msg.data:
        return None
    return {"led": bool(msg.data["present_value"])}


@from_zigbee_converter(BinaryValue.cluster_id, REPORT_TYPES)
def cc2530_router_meta(definition, msg, options, meta) -> KeyValue | None:
    data = msg.data
    return {
        "description": data.get("description"),
        "type": data.get("inactive_text"),
        "rssi": data.get("present_value"),
    }


@from_zigbee_converter(OnOff.cluster_id, ATTRIBUTE_REPORT)
def dnckat_buttons(definition, msg, options, meta) -> KeyValue | None:
    if "on_off" not in msg.data:
        return None
    action = "release" if msg.data["on_off"] else "hold"
    return {"action": postfix_with_endpoint_name(action, msg, definition)}


@from_zigbee_converter(Basic.cluster_id, REPORT_TYPES)
def ignore_basic_report(definition, msg, options, meta) -> None:
    return None
