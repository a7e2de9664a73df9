"""Sercomm smart plugs and security sensors."""

from __future__ import annotations

from zigpy.zcl.clusters.general import OnOff, PowerConfiguration
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.measurement import TemperatureMeasurement
from zigpy.zcl.clusters.smartenergy import Metering

from zigpy_devices import extend as m
from zigpy_devices import reporting
from zigpy_devices.converters import from_zigbee as fz
from zigpy_devices.converters import to_zigbee as tz
from zigpy_devices.definition import DefinitionBuilder
from zigpy_devices.exposes import presets as e

VENDOR = "Sercomm"

# Telstra plugs report instantaneous demand in µW
METERING_DIVISOR = 1_000_000


async def configure_plug(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(endpoint, [OnOff.cluster_id, Metering.cluster_id])
    await reporting.on_off(endpoint)
    await reporting.instantaneous_demand(endpoint)
    reporting.save_metering_multiplier_divisor(endpoint, 1, METERING_DIVISOR)


async def configure_plug_au(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint,
        [OnOff.cluster_id, Metering.cluster_id, ElectricalMeasurement.cluster_id],
    )
    await reporting.on_off(endpoint)
    await reporting.instantaneous_demand(endpoint)
    await reporting.current_summ_delivered(endpoint)
    reporting.save_metering_multiplier_divisor(endpoint, 1, METERING_DIVISOR)
    await reporting.read_electrical_measurement_multiplier_divisors(endpoint)
    await reporting.rms_voltage(endpoint)
    await reporting.rms_current(endpoint)


async def configure_temperature_battery(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(
        endpoint, [TemperatureMeasurement.cluster_id, PowerConfiguration.cluster_id]
    )
    await reporting.temperature(endpoint)
    await reporting.battery_voltage(endpoint)


async def configure_battery_percentage(device, definition) -> None:
    endpoint = device.endpoints[1]
    await reporting.bind(endpoint, [PowerConfiguration.cluster_id])
    await reporting.battery_percentage_remaining(endpoint)


(
    DefinitionBuilder("SZ-ESW01", VENDOR, "Telstra smart plug")
    .zigbee_model("SZ-ESW01")
    .from_zigbee(fz.on_off, fz.metering)
    .to_zigbee(tz.on_off)
    .exposes(e.switch(), e.power())
    .configure(configure_plug)
    .add_to_registry()
)

(
    DefinitionBuilder("SZ-ESW01-AU", VENDOR, "Telstra smart plug")
    .zigbee_model("SZ-ESW01-AU")
    .from_zigbee(fz.on_off, fz.metering, fz.electrical_measurement)
    .to_zigbee(tz.on_off)
    .exposes(e.switch(), e.power(), e.energy(), e.current(), e.voltage())
    .configure(configure_plug_au)
    .add_to_registry()
)

(
    DefinitionBuilder("SZ-ESW02N-CZ3", VENDOR, "Telstra smart plug")
    .zigbee_model("SZ-ESW02N-CZ3")
    .extend(
        m.on_off(power_on_behavior=False),
        m.electricity_meter(cluster="metering"),
    )
    .add_to_registry()
)

(
    DefinitionBuilder("SZ-ESW02", VENDOR, "Telstra smart plug 2")
    .zigbee_model("SZ-ESW02")
    .from_zigbee(fz.on_off, fz.metering)
    .to_zigbee(tz.on_off)
    .exposes(e.switch(), e.power())
    .configure(configure_plug)
    .add_to_registry()
)

contact_sensor = (
    DefinitionBuilder("XHS2-SE", VENDOR, "Magnetic door & window contact sensor")
    .zigbee_model("XHS2-SE")
    .from_zigbee(fz.ias_contact_alarm_1, fz.temperature, fz.battery)
    .meta(battery_voltage_to_percentage="3V_2100")
    .configure(configure_temperature_battery)
    .exposes(e.contact(), e.battery_low(), e.tamper(), e.temperature(), e.battery())
)
contact_sensor.add_to_registry()

(
    contact_sensor.clone("SZ-DWS04")
    .zigbee_model("SZ-DWS04", "SZ-DWS04N_SF")
    .add_to_registry()
)

(
    contact_sensor.clone("SZ-DWS08")
    .zigbee_model("SZ-DWS08N", "SZ-DWS08", "SZ-DWS08N-CZ3")
    .add_to_registry()
)

(
    DefinitionBuilder("AL-PIR02", VENDOR, "PIR motion sensor")
    .zigbee_model("SZ-PIR02_SF", "SZ-PIR02")
    .from_zigbee(fz.ias_occupancy_alarm_1, fz.battery)
    .meta(battery_voltage_to_percentage="3V_2100")
    .configure(configure_battery_percentage)
    .exposes(e.occupancy(), e.battery_low(), e.tamper(), e.battery())
    .add_to_registry()
)

(
    DefinitionBuilder("SZ-PIR04N", VENDOR, "PIR motion & temperature sensor")
    .zigbee_model("SZ-PIR04N", "SZ-PIR04N_EU")
    .from_zigbee(fz.ias_occupancy_alarm_1, fz.temperature, fz.battery)
    .meta(battery_voltage_to_percentage={"min": 2500, "max": 3200})
    .configure(configure_temperature_battery)
    .exposes(
        e.occupancy(), e.tamper(), e.temperature(), e.battery(), e.battery_voltage()
    )
    .extend(m.illuminance())
    .add_to_registry()
)

(
    DefinitionBuilder("SZ-WTD03", VENDOR, "Water leak detector")
    .zigbee_model("SZ-WTD03")
    .from_zigbee(fz.ias_water_leak_alarm_1, fz.battery)
    .exposes(e.water_leak(), e.battery_low())
    .add_to_registry()
)
