"""Reusable bundles of converters, exposes and configure steps."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Union

import attrs
from frozendict import deepfreeze, frozendict
from zigpy.zcl import ClusterType
from zigpy.zcl.clusters.general import (
    Basic,
    LevelControl,
    OnOff,
    PowerConfiguration,
)
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.lighting import Ballast
from zigpy.zcl.clusters.measurement import (
    IlluminanceMeasurement,
    OccupancySensing,
    RelativeHumidity,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.security import IasZone
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices import reporting
from zigpy_devices.const import (
    COMMAND_STATUS_CHANGE_NOTIFICATION,
    ENTITY_CATEGORY_CONFIG,
    ENTITY_CATEGORY_DIAGNOSTIC,
    REPORT_TYPES,
    RepInterval,
)
from zigpy_devices.converters import (
    FromZigbee,
    ToZigbee,
    ToZigbeeMeta,
    default_endpoint,
    from_zigbee_converter,
)
from zigpy_devices.converters import from_zigbee as fz
from zigpy_devices.converters import to_zigbee as tz
from zigpy_devices.definition import AddsCluster, ReplacesCluster
from zigpy_devices.exceptions import EndpointNotFound
from zigpy_devices.exposes import Access, Base, presets
from zigpy_devices.state import get_device_meta
from zigpy_devices.utils import (
    get_endpoint_name,
    get_from_lookup,
    get_key,
    precision_round,
    require_cluster,
    to_number,
)

if TYPE_CHECKING:
    from zigpy.quirks import CustomCluster

    from zigpy_devices.definition import Definition
    from zigpy_devices.typing import (
        ConfigureStep,
        DeviceType,
        EndpointType,
        ExposesFunction,
        KeyValue,
    )

_LOGGER = logging.getLogger(__name__)

Reporting = Union[dict[str, int], bool, None]
Scale = Union[float, Callable[[float, str], float]]


@attrs.define(frozen=True, kw_only=True, repr=True)
class Extend:
    """Converters, exposes and configure steps merged into a definition."""

    from_zigbee: tuple[FromZigbee, ...] = attrs.field(factory=tuple, converter=tuple)
    to_zigbee: tuple[ToZigbee, ...] = attrs.field(factory=tuple, converter=tuple)
    exposes: tuple[Base | ExposesFunction, ...] = attrs.field(
        factory=tuple, converter=tuple
    )
    configure: tuple[ConfigureStep, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    meta: frozendict = attrs.field(factory=frozendict, converter=deepfreeze)
    endpoints: frozendict = attrs.field(factory=frozendict, converter=deepfreeze)
    adds: tuple[AddsCluster | ReplacesCluster, ...] = attrs.field(
        factory=tuple, converter=tuple
    )
    on_event: tuple[Callable[..., Any], ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    options: tuple[Base, ...] = attrs.field(factory=tuple, converter=tuple)


def resolve_endpoints(
    device: DeviceType, definition: Definition, endpoint_names: list[str] | None
) -> list[EndpointType]:
    """Endpoints for a list of endpoint names, or the first endpoint without names."""
    if not endpoint_names:
        return [default_endpoint(device)]

    mapping = definition.get_endpoints(device)
    endpoints = []
    for name in endpoint_names:
        if name not in mapping or mapping[name] not in device.endpoints:
            raise EndpointNotFound(f"Device {device.ieee} has no endpoint '{name}'")
        endpoints.append(device.endpoints[mapping[name]])
    return endpoints


def _with_endpoints(expose: Base, endpoint_names: list[str] | None) -> list[Base]:
    if not endpoint_names:
        return [expose]
    return [expose.clone().with_endpoint(name) for name in endpoint_names]


def _overrides(value: Reporting) -> dict[str, int] | None:
    return value if isinstance(value, dict) else None


def _message_from(msg, definition: Definition, endpoint_names: list[str] | None):
    """Endpoint name of a message, or False if it is not one of `endpoint_names`."""
    if not endpoint_names:
        return None
    name = get_endpoint_name(msg, definition)
    return name if name in endpoint_names else False


def _bind_and_report(
    cluster_id: int,
    helpers: list[Callable[..., Any]],
    reporting_overrides: Reporting = None,
    endpoint_names: list[str] | None = None,
    bind: bool = True,
) -> ConfigureStep:
    async def configure(device: DeviceType, definition: Definition) -> None:
        for endpoint in resolve_endpoints(device, definition, endpoint_names):
            if bind:
                await reporting.bind(endpoint, [cluster_id])
            if reporting_overrides is False:
                continue
            for helper in helpers:
                await helper(endpoint, _overrides(reporting_overrides))

    return configure


def on_off(
    endpoint_names: list[str] | None = None,
    power_on_behavior: bool = True,
    configure_reporting: bool = True,
) -> Extend:
    exposes = _with_endpoints(presets.switch(), endpoint_names)
    from_zigbee_converters = [fz.on_off]
    to_zigbee_converters = [tz.on_off]

    if power_on_behavior:
        exposes += _with_endpoints(presets.power_on_behavior(), endpoint_names)
        from_zigbee_converters.append(fz.power_on_behavior)
        to_zigbee_converters.append(tz.power_on_behavior)

    return Extend(
        from_zigbee=from_zigbee_converters,
        to_zigbee=to_zigbee_converters,
        exposes=exposes,
        configure=[
            _bind_and_report(
                OnOff.cluster_id,
                [reporting.on_off],
                None if configure_reporting else False,
                endpoint_names,
            )
        ],
    )


def light(
    endpoint_names: list[str] | None = None,
    level_config: bool = False,
    power_on_behavior: bool = True,
    configure_reporting: bool = False,
) -> Extend:
    """A dimmable light."""
    expose = presets.light_brightness()
    if level_config:
        expose.with_level_config()

    exposes = _with_endpoints(expose, endpoint_names)
    from_zigbee_converters = [fz.on_off, fz.brightness]
    to_zigbee_converters = [tz.light_onoff_brightness]

    if level_config:
        from_zigbee_converters.append(fz.level_config)
        to_zigbee_converters.append(tz.level_config)

    if power_on_behavior:
        exposes += _with_endpoints(presets.power_on_behavior(), endpoint_names)
        from_zigbee_converters.append(fz.power_on_behavior)
        to_zigbee_converters.append(tz.power_on_behavior)

    configure = []
    if configure_reporting:
        configure = [
            _bind_and_report(
                OnOff.cluster_id, [reporting.on_off], None, endpoint_names
            ),
            _bind_and_report(
                LevelControl.cluster_id, [reporting.brightness], None, endpoint_names
            ),
        ]

    return Extend(
        from_zigbee=from_zigbee_converters,
        to_zigbee=to_zigbee_converters,
        exposes=exposes,
        configure=configure,
    )


def electricity_meter(
    cluster: str = "both",
    produced_energy: bool = False,
    metering_converter: FromZigbee | None = None,
    configure_reporting: bool = True,
    endpoint_names: list[str] | None = None,
) -> Extend:
    """Power, voltage, current and energy.

    `cluster` is `metering`, `electrical` or `both`.
    """
    use_metering = cluster in ("both", "metering")
    use_electrical = cluster in ("both", "electrical")

    from_zigbee_converters: list[FromZigbee] = []
    to_zigbee_converters: list[ToZigbee] = []
    exposes: list[Base] = []
    configure: list[ConfigureStep] = []

    if use_electrical:
        from_zigbee_converters.append(fz.electrical_measurement)
        to_zigbee_converters.append(tz.electrical_measurement_power)
        for expose in (presets.power(), presets.voltage(), presets.current()):
            expose.with_access(Access.STATE_GET)
            exposes += _with_endpoints(expose, endpoint_names)

        async def configure_electrical(device, definition) -> None:
            for endpoint in resolve_endpoints(device, definition, endpoint_names):
                await reporting.bind(endpoint, [ElectricalMeasurement.cluster_id])
                await reporting.read_electrical_measurement_multiplier_divisors(
                    endpoint
                )
                if configure_reporting:
                    await reporting.active_power(endpoint)
                    await reporting.rms_voltage(endpoint)
                    await reporting.rms_current(endpoint)

        configure.append(configure_electrical)

    if use_metering:
        from_zigbee_converters.append(metering_converter or fz.metering)
        if not use_electrical:
            exposes += _with_endpoints(presets.power(), endpoint_names)
        exposes += _with_endpoints(presets.energy(), endpoint_names)
        if produced_energy:
            exposes += _with_endpoints(presets.produced_energy(), endpoint_names)

        async def configure_metering(device, definition) -> None:
            for endpoint in resolve_endpoints(device, definition, endpoint_names):
                await reporting.bind(endpoint, [Metering.cluster_id])
                await reporting.read_metering_multiplier_divisor(endpoint)
                if configure_reporting:
                    await reporting.current_summ_delivered(endpoint)
                    if not use_electrical:
                        await reporting.instantaneous_demand(endpoint)

        configure.append(configure_metering)

    return Extend(
        from_zigbee=from_zigbee_converters,
        to_zigbee=to_zigbee_converters,
        exposes=exposes,
        configure=configure,
    )


def battery(
    percentage: bool = True,
    voltage: bool = False,
    low_status: bool = False,
    voltage_to_percentage: str | dict[str, int] | None = None,
    dont_divide_percentage: bool = False,
    percentage_reporting: bool = True,
    voltage_reporting: bool = False,
) -> Extend:
    exposes: list[Base] = []
    if percentage:
        exposes.append(presets.battery())
    if voltage:
        exposes.append(presets.battery_voltage())
    if low_status:
        exposes.append(presets.battery_low())

    meta: dict[str, Any] = {}
    if voltage_to_percentage is not None:
        meta["battery_voltage_to_percentage"] = voltage_to_percentage
    if dont_divide_percentage:
        meta["battery_dont_divide_percentage"] = True

    helpers = []
    if percentage and percentage_reporting:
        helpers.append(reporting.battery_percentage_remaining)
    if voltage and voltage_reporting:
        helpers.append(reporting.battery_voltage)

    configure = []
    if helpers:
        configure.append(_bind_and_report(PowerConfiguration.cluster_id, helpers))

    return Extend(
        from_zigbee=[fz.battery], exposes=exposes, meta=meta, configure=configure
    )


def _measurement_extend(
    converter: FromZigbee,
    expose: Base,
    cluster_id: int,
    helper: Callable[..., Any],
    reporting_overrides: Reporting,
    endpoint_names: list[str] | None,
) -> Extend:
    return Extend(
        from_zigbee=[converter],
        exposes=_with_endpoints(expose, endpoint_names),
        configure=[
            _bind_and_report(cluster_id, [helper], reporting_overrides, endpoint_names)
        ],
    )


def temperature(
    reporting_overrides: Reporting = None, endpoint_names: list[str] | None = None
) -> Extend:
    return _measurement_extend(
        fz.temperature,
        presets.temperature(),
        TemperatureMeasurement.cluster_id,
        reporting.temperature,
        reporting_overrides,
        endpoint_names,
    )


def humidity(
    reporting_overrides: Reporting = None, endpoint_names: list[str] | None = None
) -> Extend:
    return _measurement_extend(
        fz.humidity,
        presets.humidity(),
        RelativeHumidity.cluster_id,
        reporting.humidity,
        reporting_overrides,
        endpoint_names,
    )


def illuminance(
    reporting_overrides: Reporting = None, endpoint_names: list[str] | None = None
) -> Extend:
    return _measurement_extend(
        fz.illuminance,
        presets.illuminance(),
        IlluminanceMeasurement.cluster_id,
        reporting.illuminance,
        reporting_overrides,
        endpoint_names,
    )


@from_zigbee_converter(OccupancySensing.cluster_id, REPORT_TYPES)
def _occupancy_timeout(definition, msg, options, meta) -> KeyValue | None:
    if "pir_o_to_u_delay" not in msg.data:
        return None
    return {"occupancy_timeout": msg.data["pir_o_to_u_delay"]}


async def _occupancy_timeout_set(
    entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
) -> KeyValue:
    cluster = require_cluster(entity, OccupancySensing.cluster_id)
    value = int(to_number(value))
    await cluster.write_attributes({"pir_o_to_u_delay": value})
    return {"state": {key: value}}


async def _occupancy_timeout_get(
    entity: EndpointType, key: str, meta: ToZigbeeMeta
) -> None:
    cluster = require_cluster(entity, OccupancySensing.cluster_id)
    await cluster.read_attributes(["pir_o_to_u_delay"])


occupancy_timeout = ToZigbee(
    key="occupancy_timeout",
    convert_set=_occupancy_timeout_set,
    convert_get=_occupancy_timeout_get,
)


def occupancy(
    pir_config: list[str] | None = None, reporting_overrides: Reporting = None
) -> Extend:
    """Occupancy, optionally with the PIR occupied to unoccupied delay (`otu_delay`)."""
    from_zigbee_converters = [fz.occupancy]
    to_zigbee_converters = []
    exposes: list[Base] = [presets.occupancy()]

    if pir_config and "otu_delay" in pir_config:
        from_zigbee_converters.append(_occupancy_timeout)
        to_zigbee_converters.append(occupancy_timeout)
        exposes.append(
            presets.numeric("occupancy_timeout", Access.ALL)
            .with_value_min(0)
            .with_value_max(65535)
            .with_unit("s")
            .with_description("Time in seconds after which occupancy is cleared")
        )

    return Extend(
        from_zigbee=from_zigbee_converters,
        to_zigbee=to_zigbee_converters,
        exposes=exposes,
        configure=[
            _bind_and_report(
                OccupancySensing.cluster_id, [reporting.occupancy], reporting_overrides
            )
        ],
    )


def identify() -> Extend:
    return Extend(to_zigbee=[tz.identify], exposes=[presets.identify()])


def device_endpoints(
    endpoints: dict[str, int], multi_endpoint_skip: list[str] | None = None
) -> Extend:
    """Name the endpoints of a device and postfix its properties with them."""
    meta: dict[str, Any] = {"multi_endpoint": True}
    if multi_endpoint_skip:
        meta["multi_endpoint_skip"] = multi_endpoint_skip
    return Extend(endpoints=endpoints, meta=meta)


def _action_values(commands: list[str], endpoint_names: list[str] | None) -> list[str]:
    if not endpoint_names:
        return list(commands)
    return [f"{command}_{name}" for name in endpoint_names for command in commands]


def _bind_output(cluster_id: int, endpoint_names: list[str] | None) -> ConfigureStep:
    async def configure(device: DeviceType, definition: Definition) -> None:
        for endpoint in resolve_endpoints(device, definition, endpoint_names):
            await reporting.bind(endpoint, [cluster_id])

    return configure


def commands_on_off(
    commands: tuple[str, ...] = ("on", "off", "toggle"),
    endpoint_names: list[str] | None = None,
    bind: bool = True,
) -> Extend:
    """Actions for the on/off commands a remote or switch sends."""
    converters = {
        "on": fz.command_on,
        "off": fz.command_off,
        "toggle": fz.command_toggle,
    }
    return Extend(
        from_zigbee=[converters[command] for command in commands],
        exposes=[presets.action(_action_values(list(commands), endpoint_names))],
        configure=[_bind_output(OnOff.cluster_id, endpoint_names)] if bind else [],
    )


def commands_level_ctrl(
    commands: tuple[str, ...] = (
        "brightness_move_up",
        "brightness_move_down",
        "brightness_stop",
    ),
    endpoint_names: list[str] | None = None,
    bind: bool = True,
) -> Extend:
    from_zigbee_converters = []
    if any(command.startswith("brightness_move") for command in commands):
        from_zigbee_converters.append(fz.command_move)
    if "brightness_stop" in commands:
        from_zigbee_converters.append(fz.command_stop)

    return Extend(
        from_zigbee=from_zigbee_converters,
        exposes=[presets.action(_action_values(list(commands), endpoint_names))],
        configure=(
            [_bind_output(LevelControl.cluster_id, endpoint_names)] if bind else []
        ),
    )


def _attribute_extend(
    name: str,
    cluster_id: int,
    attribute: str | int,
    expose: Base,
    decode: Callable[[Any], Any],
    encode: Callable[[Any], tuple[Any, Any]],
    access: Access,
    endpoint_names: list[str] | None,
    manufacturer: int | None,
    reporting_config: dict[str, int] | None,
) -> Extend:
    """Extend mapping one attribute of one cluster to one property.

    `decode` turns a raw attribute value into the property value, `encode` turns
    a requested value into the raw value and the value to report back.
    """

    def convert(definition, msg, options, meta) -> KeyValue | None:
        if attribute not in msg.data:
            return None

        endpoint_name = _message_from(msg, definition, endpoint_names)
        if endpoint_name is False:
            return None

        prop = f"{name}_{endpoint_name}" if endpoint_name else name
        return {prop: decode(msg.data[attribute])}

    from_zigbee_converters = [
        FromZigbee(cluster=cluster_id, type=REPORT_TYPES, convert=convert)
    ]

    async def convert_set(
        entity: EndpointType, key: str, value: Any, meta: ToZigbeeMeta
    ) -> KeyValue:
        raw, state_value = encode(value)
        cluster = require_cluster(entity, cluster_id)
        await cluster.write_attributes({attribute: raw}, manufacturer=manufacturer)
        return {"state": {key: state_value}}

    async def convert_get(entity: EndpointType, key: str, meta: ToZigbeeMeta) -> None:
        cluster = require_cluster(entity, cluster_id)
        await cluster.read_attributes([attribute], manufacturer=manufacturer)

    to_zigbee_converters = []
    if access & (Access.SET | Access.GET):
        to_zigbee_converters.append(
            ToZigbee(
                key=name,
                convert_set=convert_set if access & Access.SET else None,
                convert_get=convert_get if access & Access.GET else None,
            )
        )

    configure = []
    if reporting_config is not None:

        async def configure_reporting(device, definition) -> None:
            config = reporting.payload(
                attribute,
                reporting_config.get("min", 0),
                reporting_config.get("max", RepInterval.HOUR),
                reporting_config.get("change", 1),
            )
            for endpoint in resolve_endpoints(device, definition, endpoint_names):
                await reporting.bind(endpoint, [cluster_id])
                await reporting.configure(
                    endpoint, cluster_id, config, manufacturer=manufacturer
                )

        configure.append(configure_reporting)

    return Extend(
        from_zigbee=from_zigbee_converters,
        to_zigbee=to_zigbee_converters,
        exposes=_with_endpoints(expose, endpoint_names),
        configure=configure,
    )


def enum_lookup(
    name: str,
    lookup: dict[str, int],
    cluster_id: int,
    attribute: str | int,
    description: str,
    access: Access = Access.ALL,
    endpoint_name: str | None = None,
    endpoint_names: list[str] | None = None,
    manufacturer: int | None = None,
    entity_category: str | None = None,
    reporting_config: dict[str, int] | None = None,
) -> Extend:
    """An attribute exposed as an enum through a name to value lookup."""
    if endpoint_name is not None:
        endpoint_names = [endpoint_name]

    expose = presets.enum(name, access, list(lookup)).with_description(description)
    if entity_category is not None:
        expose.with_category(entity_category)

    def decode(raw: Any) -> Any:
        return get_key(lookup, int(raw), raw)

    def encode(value: Any) -> tuple[Any, Any]:
        raw = get_from_lookup(value, lookup)
        return raw, get_key(lookup, raw, value)

    return _attribute_extend(
        name,
        cluster_id,
        attribute,
        expose,
        decode,
        encode,
        access,
        endpoint_names,
        manufacturer,
        reporting_config,
    )


def numeric(
    name: str,
    cluster_id: int,
    attribute: str | int,
    description: str,
    access: Access = Access.ALL,
    unit: str | None = None,
    value_min: float | None = None,
    value_max: float | None = None,
    value_step: float | None = None,
    scale: Scale | None = None,
    precision: int | None = None,
    endpoint_names: list[str] | None = None,
    manufacturer: int | None = None,
    entity_category: str | None = None,
    reporting_config: dict[str, int] | None = None,
) -> Extend:
    """An attribute exposed as a number.

    `scale` divides raw values on the way in and multiplies on the way out. A
    callable gets `(value, "from")` or `(value, "to")` instead.
    """
    expose = presets.numeric(name, access).with_description(description)
    if unit is not None:
        expose.with_unit(unit)
    if value_min is not None:
        expose.with_value_min(value_min)
    if value_max is not None:
        expose.with_value_max(value_max)
    if value_step is not None:
        expose.with_value_step(value_step)
    if entity_category is not None:
        expose.with_category(entity_category)

    def decode(raw: Any) -> Any:
        value = raw
        if callable(scale):
            value = scale(raw, "from")
        elif scale is not None:
            value = raw / scale
        if precision is not None:
            value = precision_round(value, precision)
        return value

    def encode(value: Any) -> tuple[Any, Any]:
        value = to_number(value)
        if callable(scale):
            raw = scale(value, "to")
        elif scale is not None:
            raw = value * scale
        else:
            raw = value
        return int(round(raw)), value

    return _attribute_extend(
        name,
        cluster_id,
        attribute,
        expose,
        decode,
        encode,
        access,
        endpoint_names,
        manufacturer,
        reporting_config,
    )


def binary(
    name: str,
    cluster_id: int,
    attribute: str | int,
    description: str,
    value_on: tuple[Any, int],
    value_off: tuple[Any, int],
    access: Access = Access.ALL,
    endpoint_name: str | None = None,
    manufacturer: int | None = None,
    entity_category: str | None = None,
    reporting_config: dict[str, int] | None = None,
) -> Extend:
    """An attribute exposed as a binary. `value_on`/`value_off` are (value, raw)."""
    expose = presets.binary(name, access, value_on[0], value_off[0]).with_description(
        description
    )
    if entity_category is not None:
        expose.with_category(entity_category)

    lookup = {value_on[0]: value_on[1], value_off[0]: value_off[1]}

    def decode(raw: Any) -> Any:
        return value_on[0] if int(raw) == value_on[1] else value_off[0]

    def encode(value: Any) -> tuple[Any, Any]:
        raw = get_from_lookup(value, lookup)
        return raw, get_key(lookup, raw, value)

    return _attribute_extend(
        name,
        cluster_id,
        attribute,
        expose,
        decode,
        encode,
        access,
        [endpoint_name] if endpoint_name else None,
        manufacturer,
        reporting_config,
    )


# zone status bit of each attribute
IAS_ZONE_ATTRIBUTES = {
    "alarm_1": 0,
    "alarm_2": 1,
    "tamper": 2,
    "battery_low": 3,
    "supervision_reports": 4,
    "restore_reports": 5,
    "trouble": 6,
    "ac_status": 7,
    "test": 8,
    "battery_defect": 9,
}

IAS_ZONE_DESCRIPTIONS = {
    "tamper": "Indicates whether the device is tampered",
    "supervision_reports": (
        "Indicates whether the device issues reports on zone operational status"
    ),
    "restore_reports": (
        "Indicates whether the device issues reports on alarm no longer being present"
    ),
    "trouble": "Indicates whether the device is in trouble",
    "ac_status": "Indicates whether the device mains voltage supply is at fault",
    "test": "Indicates whether the device is currently performing a test",
    "battery_defect": "Indicates whether the device battery is defective",
}

ZONE_TYPE_EXPOSES = {
    "contact": presets.contact,
    "occupancy": presets.occupancy,
    "water_leak": presets.water_leak,
    "smoke": presets.smoke,
    "gas": presets.gas,
    "vibration": presets.vibration,
    "sos": presets.sos,
    "tamper": presets.tamper,
}


def ias_zone_alarm(
    zone_type: str,
    zone_attributes: tuple[str, ...] = ("alarm_1", "tamper", "battery_low"),
    manufacturer_zone_attributes: tuple[tuple[int, str, str], ...] = (),
) -> Extend:
    """IAS zone status bits as binary properties.

    `manufacturer_zone_attributes` holds `(bit, name, description)` for bits a
    vendor assigns its own meaning to.
    """
    bits: dict[str, int] = {}
    exposes: list[Base] = []

    for attr in zone_attributes:
        bit = IAS_ZONE_ATTRIBUTES[attr]
        if attr in ("alarm_1", "alarm_2"):
            name = zone_type if attr == "alarm_1" else f"{zone_type}_alarm_2"
            expose_factory = ZONE_TYPE_EXPOSES.get(zone_type)
            if expose_factory is not None and attr == "alarm_1":
                expose = expose_factory()
            else:
                expose = presets.binary(name, Access.STATE, True, False)
        elif attr == "battery_low":
            name, expose = attr, presets.battery_low()
        elif attr == "tamper":
            name, expose = attr, presets.tamper()
        else:
            name = attr
            expose = presets.binary(name, Access.STATE, True, False).with_description(
                IAS_ZONE_DESCRIPTIONS[attr]
            )
            expose.with_category(ENTITY_CATEGORY_DIAGNOSTIC)
        bits[name] = bit
        exposes.append(expose)

    for bit, name, description in manufacturer_zone_attributes:
        bits[name] = bit
        exposes.append(
            presets.binary(name, Access.STATE, True, False).with_description(
                description
            )
        )

    inverted = {"contact"} if zone_type == "contact" else set()

    def convert(definition, msg, options, meta) -> KeyValue | None:
        zone_status = msg.data.get("zone_status")
        if zone_status is None:
            return None
        zone_status = int(zone_status)
        result = {}
        for name, bit in bits.items():
            value = bool(zone_status & (1 << bit))
            result[name] = not value if name in inverted else value
        return result

    return Extend(
        from_zigbee=[
            FromZigbee(
                cluster=IasZone.cluster_id,
                type=(COMMAND_STATUS_CHANGE_NOTIFICATION, *REPORT_TYPES),
                convert=convert,
            )
        ],
        exposes=exposes,
    )


BALLAST_LEVELS = {
    "ballast_minimum_level": "Minimum light output of the ballast",
    "ballast_maximum_level": "Maximum light output of the ballast",
    "ballast_power_on_level": "Light output of the ballast after power on",
}

BALLAST_PHYSICAL_LEVELS = {
    "ballast_physical_minimum_level": "Minimum light output the ballast can achieve",
    "ballast_physical_maximum_level": "Maximum light output the ballast can achieve",
}


def lighting_ballast() -> Extend:
    exposes: list[Base] = [
        presets.numeric(prop, Access.ALL)
        .with_value_min(1)
        .with_value_max(254)
        .with_description(description)
        .with_category(ENTITY_CATEGORY_CONFIG)
        for prop, description in BALLAST_LEVELS.items()
    ]
    exposes += [
        presets.numeric(prop, Access.STATE_GET)
        .with_description(description)
        .with_category(ENTITY_CATEGORY_DIAGNOSTIC)
        for prop, description in BALLAST_PHYSICAL_LEVELS.items()
    ]

    async def read_ballast(device, definition) -> None:
        endpoint = default_endpoint(device)
        cluster = require_cluster(endpoint, Ballast.cluster_id)
        await cluster.read_attributes(
            ["physical_min_level", "physical_max_level", "min_level", "max_level"]
        )

    return Extend(
        from_zigbee=[fz.ballast_configuration],
        to_zigbee=[tz.ballast_config],
        exposes=exposes,
        configure=[read_ballast],
    )


@from_zigbee_converter(Basic.cluster_id, REPORT_TYPES)
def _linkquality(definition, msg, options, meta) -> KeyValue:
    return {"linkquality": msg.linkquality}


def link_quality(configure_reporting: bool = False) -> Extend:
    """Link quality from Basic cluster reports, optionally reported every hour."""
    configure = []
    if configure_reporting:

        async def configure_zcl_version(device, definition) -> None:
            endpoint = default_endpoint(device)
            await reporting.configure(
                endpoint,
                Basic.cluster_id,
                reporting.payload("zcl_version", RepInterval.HOUR, RepInterval.HOUR, 0),
            )

        configure.append(configure_zcl_version)

    return Extend(
        from_zigbee=[_linkquality],
        exposes=[presets.linkquality()],
        configure=configure,
    )


def force_power_source(power_source: str) -> Extend:
    """Record the power source of a device that reports the wrong one."""

    async def configure(device, definition) -> None:
        get_device_meta(device).set("power_source", power_source)

    def on_event(event, data, device, options, definition) -> None:
        if device is not None:
            get_device_meta(device).set("power_source", power_source)

    return Extend(configure=[configure], on_event=[on_event])


def add_custom_cluster(
    cluster: type[CustomCluster],
    endpoint_id: int | None = None,
    add_if_missing: bool = False,
) -> Extend:
    """Replace a cluster of the device with a custom cluster class."""
    return Extend(
        adds=[
            ReplacesCluster(
                cluster=cluster, endpoint_id=endpoint_id, add_if_missing=add_if_missing
            )
        ]
    )


def add_endpoint_cluster(
    endpoint_id: int,
    input_clusters: tuple[int | type[CustomCluster], ...] = (),
    output_clusters: tuple[int | type[CustomCluster], ...] = (),
) -> Extend:
    adds = [
        AddsCluster(cluster=cluster, endpoint_id=endpoint_id)
        for cluster in input_clusters
    ]
    adds += [
        AddsCluster(
            cluster=cluster, endpoint_id=endpoint_id, cluster_type=ClusterType.Client
        )
        for cluster in output_clusters
    ]
    return Extend(adds=adds)


def setup_configure_for_reading(
    cluster_id: int,
    attributes: list[str | int],
    endpoint_names: list[str] | None = None,
    manufacturer: int | None = None,
) -> Extend:
    """Read attributes while configuring so the cache starts out filled."""

    async def configure(device, definition) -> None:
        for endpoint in resolve_endpoints(device, definition, endpoint_names):
            cluster = require_cluster(endpoint, cluster_id)
            await cluster.read_attributes(attributes, manufacturer=manufacturer)

    return Extend(configure=[configure])
