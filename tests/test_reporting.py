from __future__ import annotations

from unittest.mock import call

import pytest
from zigpy.zcl.clusters.general import OnOff
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import UserInterface
from zigpy.zcl.clusters.measurement import TemperatureMeasurement
from zigpy.zcl.clusters.smartenergy import Metering

from tests.conftest import make_device
from zigpy_devices import reporting
from zigpy_devices.exceptions import ClusterNotFound


def test_payload_overrides():
    assert reporting.payload("on_off", 0, 3600, 0) == reporting.ReportingConfig(
        attribute="on_off", min_interval=0, max_interval=3600, reportable_change=0
    )
    assert reporting.payload(
        "measured_value", 10, 3600, 100, {"min": 60, "change": 50}
    ) == reporting.ReportingConfig(
        attribute="measured_value",
        min_interval=60,
        max_interval=3600,
        reportable_change=50,
    )


async def test_bind():
    device = make_device({1: ([OnOff.cluster_id, Metering.cluster_id], [])})
    endpoint = device.endpoints[1]

    await reporting.bind(endpoint, [OnOff.cluster_id, Metering.cluster_id])

    endpoint.in_clusters[OnOff.cluster_id].bind.assert_awaited_once_with()
    endpoint.in_clusters[Metering.cluster_id].bind.assert_awaited_once_with()

    with pytest.raises(ClusterNotFound):
        await reporting.bind(endpoint, [TemperatureMeasurement.cluster_id])


async def test_reporting_helpers():
    device = make_device(
        {1: ([OnOff.cluster_id, TemperatureMeasurement.cluster_id], [])}
    )
    endpoint = device.endpoints[1]

    await reporting.on_off(endpoint)
    endpoint.in_clusters[
        OnOff.cluster_id
    ].configure_reporting.assert_awaited_once_with(
        "on_off", 0, 3600, 0, manufacturer=None
    )

    await reporting.temperature(endpoint, {"max": 600}, manufacturer=0x1234)
    endpoint.in_clusters[
        TemperatureMeasurement.cluster_id
    ].configure_reporting.assert_awaited_once_with(
        "measured_value", 10, 600, 100, manufacturer=0x1234
    )


async def test_keypad_lockout_reporting():
    device = make_device({1: ([UserInterface.cluster_id], [])})
    endpoint = device.endpoints[1]

    await reporting.keypad_lockout(endpoint)
    endpoint.in_clusters[
        UserInterface.cluster_id
    ].configure_reporting.assert_awaited_once_with(
        "keypad_lockout", 60, 3600, 1, manufacturer=None
    )
    assert reporting.keypad_lockout.__name__ == "keypad_lockout"


async def test_read_multiplier_divisors():
    device = make_device(
        {1: ([Metering.cluster_id, ElectricalMeasurement.cluster_id], [])}
    )
    endpoint = device.endpoints[1]

    await reporting.read_metering_multiplier_divisor(endpoint)
    endpoint.in_clusters[
        Metering.cluster_id
    ].read_attributes.assert_awaited_once_with(["multiplier", "divisor"])

    await reporting.read_electrical_measurement_multiplier_divisors(endpoint)
    assert endpoint.in_clusters[
        ElectricalMeasurement.cluster_id
    ].read_attributes.await_args_list == [
        call(["ac_voltage_multiplier", "ac_voltage_divisor"]),
        call(["ac_current_multiplier", "ac_current_divisor"]),
        call(["ac_power_multiplier", "ac_power_divisor"]),
    ]


def test_save_metering_multiplier_divisor():
    device = make_device({1: ([Metering.cluster_id], [])})
    endpoint = device.endpoints[1]

    reporting.save_metering_multiplier_divisor(endpoint, 1, 1_000_000)

    metering = endpoint.in_clusters[Metering.cluster_id]
    assert metering.get("multiplier") == 1
    assert metering.get("divisor") == 1_000_000
    metering.read_attributes.assert_not_awaited()
