"""Binding and attribute reporting configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

import attrs
from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import LevelControl, OnOff, PowerConfiguration
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import Fan, Thermostat, UserInterface
from zigpy.zcl.clusters.measurement import (
    IlluminanceMeasurement,
    OccupancySensing,
    RelativeHumidity,
    SoilMoisture,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices.const import RepInterval
from zigpy_devices.utils import require_cluster

if TYPE_CHECKING:
    from zigpy_devices.typing import EndpointType

_LOGGER = logging.getLogger(__name__)

ELECTRICAL_MEASUREMENT_SCALING = (
    "ac_voltage_multiplier",
    "ac_voltage_divisor",
    "ac_current_multiplier",
    "ac_current_divisor",
    "ac_power_multiplier",
    "ac_power_divisor",
)


@attrs.define(frozen=True, kw_only=True, repr=True)
class ReportingConfig:
    attribute: str | int = attrs.field()
    min_interval: int = attrs.field()
    max_interval: int = attrs.field()
    reportable_change: int = attrs.field()


def payload(
    attribute: str | int,
    min_interval: int,
    max_interval: int,
    reportable_change: int,
    overrides: dict[str, int] | None = None,
) -> ReportingConfig:
    """Reporting configuration for one attribute, with optional overrides."""
    overrides = overrides or {}
    return ReportingConfig(
        attribute=attribute,
        min_interval=overrides.get("min", min_interval),
        max_interval=overrides.get("max", max_interval),
        reportable_change=overrides.get("change", reportable_change),
    )


async def bind(endpoint: EndpointType, cluster_ids: list[int]) -> None:
    """Bind clusters of an endpoint to the coordinator."""
    for cluster_id in cluster_ids:
        cluster = require_cluster(endpoint, cluster_id)
        _LOGGER.debug(
            "Binding cluster 0x%04X of endpoint %s", cluster_id, endpoint.endpoint_id
        )
        await cluster.bind()


async def configure(
    endpoint: EndpointType,
    cluster_id: int,
    config: ReportingConfig,
    manufacturer: int | None = None,
) -> None:
    cluster = require_cluster(endpoint, cluster_id)
    await cluster.configure_reporting(
        config.attribute,
        config.min_interval,
        config.max_interval,
        config.reportable_change,
        manufacturer=manufacturer,
    )


ReportingHelper = Callable[..., Awaitable[None]]


def _reporting_helper(
    cluster_id: int,
    attribute: str,
    min_interval: int,
    max_interval: int,
    reportable_change: int,
) -> ReportingHelper:
    async def helper(
        endpoint: EndpointType,
        overrides: dict[str, int] | None = None,
        manufacturer: int | None = None,
    ) -> None:
        config = payload(
            attribute, min_interval, max_interval, reportable_change, overrides
        )
        await configure(endpoint, cluster_id, config, manufacturer=manufacturer)

    helper.__name__ = attribute
    helper.__doc__ = f"Configure reporting of {attribute}."
    return helper


on_off = _reporting_helper(OnOff.cluster_id, "on_off", 0, RepInterval.HOUR, 0)
brightness = _reporting_helper(
    LevelControl.cluster_id, "current_level", RepInterval.SECONDS_5, RepInterval.HOUR, 1
)
battery_voltage = _reporting_helper(
    PowerConfiguration.cluster_id,
    "battery_voltage",
    RepInterval.HOUR,
    RepInterval.MAX,
    0,
)
battery_percentage_remaining = _reporting_helper(
    PowerConfiguration.cluster_id,
    "battery_percentage_remaining",
    RepInterval.HOUR,
    RepInterval.MAX,
    0,
)
temperature = _reporting_helper(
    TemperatureMeasurement.cluster_id,
    "measured_value",
    RepInterval.SECONDS_10,
    RepInterval.HOUR,
    100,
)
humidity = _reporting_helper(
    RelativeHumidity.cluster_id,
    "measured_value",
    RepInterval.SECONDS_10,
    RepInterval.HOUR,
    100,
)
soil_moisture = _reporting_helper(
    SoilMoisture.cluster_id,
    "measured_value",
    RepInterval.SECONDS_10,
    RepInterval.HOUR,
    100,
)
illuminance = _reporting_helper(
    IlluminanceMeasurement.cluster_id,
    "measured_value",
    RepInterval.SECONDS_10,
    RepInterval.HOUR,
    5,
)
occupancy = _reporting_helper(
    OccupancySensing.cluster_id, "occupancy", 0, RepInterval.HOUR, 0
)
instantaneous_demand = _reporting_helper(
    Metering.cluster_id,
    "instantaneous_demand",
    RepInterval.SECONDS_5,
    RepInterval.HOUR,
    1,
)
current_summ_delivered = _reporting_helper(
    Metering.cluster_id,
    "current_summ_delivered",
    RepInterval.SECONDS_5,
    RepInterval.HOUR,
    1,
)
rms_voltage = _reporting_helper(
    ElectricalMeasurement.cluster_id,
    "rms_voltage",
    RepInterval.SECONDS_5,
    RepInterval.HOUR,
    1,
)
rms_current = _reporting_helper(
    ElectricalMeasurement.cluster_id,
    "rms_current",
    RepInterval.SECONDS_5,
    RepInterval.HOUR,
    1,
)
active_power = _reporting_helper(
    ElectricalMeasurement.cluster_id,
    "active_power",
    RepInterval.SECONDS_5,
    RepInterval.HOUR,
    1,
)
current_position_lift_percentage = _reporting_helper(
    WindowCovering.cluster_id,
    "current_position_lift_percentage",
    1,
    RepInterval.MAX,
    1,
)
thermostat_temperature = _reporting_helper(
    Thermostat.cluster_id, "local_temperature", 0, RepInterval.HOUR, 10
)
thermostat_occupied_heating_setpoint = _reporting_helper(
    Thermostat.cluster_id, "occupied_heating_setpoint", 0, RepInterval.HOUR, 10
)
thermostat_pi_heating_demand = _reporting_helper(
    Thermostat.cluster_id, "pi_heating_demand", 0, RepInterval.HOUR, 10
)
fan_mode = _reporting_helper(Fan.cluster_id, "fan_mode", 0, RepInterval.HOUR, 0)
keypad_lockout = _reporting_helper(
    UserInterface.cluster_id, "keypad_lockout", RepInterval.MINUTE, RepInterval.HOUR, 1
)


async def read_metering_multiplier_divisor(endpoint: EndpointType) -> None:
    cluster = require_cluster(endpoint, Metering.cluster_id)
    await cluster.read_attributes(["multiplier", "divisor"])


async def read_electrical_measurement_multiplier_divisors(
    endpoint: EndpointType,
) -> None:
    """Read the AC scaling attributes, a few at a time to keep frames small."""
    cluster = require_cluster(endpoint, ElectricalMeasurement.cluster_id)
    for offset in range(0, len(ELECTRICAL_MEASUREMENT_SCALING), 2):
        await cluster.read_attributes(
            list(ELECTRICAL_MEASUREMENT_SCALING[offset : offset + 2])
        )


def save_cluster_attributes(
    endpoint: EndpointType, cluster_id: int, values: dict[str, Any]
) -> None:
    """Store attribute values in the zigpy cache without talking to the device."""
    cluster = require_cluster(endpoint, cluster_id)
    for name, value in values.items():
        cluster.update_attribute(cluster.find_attribute(name).id, value)


def save_metering_multiplier_divisor(
    endpoint: EndpointType, multiplier: int, divisor: int
) -> None:
    save_cluster_attributes(
        endpoint, Metering.cluster_id, {"multiplier": multiplier, "divisor": divisor}
    )
