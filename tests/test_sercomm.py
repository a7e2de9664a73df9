from __future__ import annotations

from unittest.mock import call

import pytest
from zigpy.zcl.clusters.general import OnOff, PowerConfiguration
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.measurement import TemperatureMeasurement
from zigpy.zcl.clusters.security import IasZone
from zigpy.zcl.clusters.smartenergy import Metering

from tests.conftest import make_device, make_message
from zigpy_devices.converters import convert_message
from zigpy_devices.definition import DEFINITION_REGISTRY, get_definition
from zigpy_devices.devices import sercomm


def plug(model="SZ-ESW01", clusters=(OnOff.cluster_id, Metering.cluster_id)):
    return make_device({1: (list(clusters), [])}, model=model)


@pytest.mark.parametrize(
    "zigbee_model, model",
    [
        ("SZ-ESW01", "SZ-ESW01"),
        ("SZ-ESW01-AU", "SZ-ESW01-AU"),
        ("SZ-ESW02", "SZ-ESW02"),
        ("SZ-DWS04N_SF", "SZ-DWS04"),
        ("SZ-DWS08N-CZ3", "SZ-DWS08"),
        ("SZ-PIR02", "AL-PIR02"),
        ("SZ-PIR04N_EU", "SZ-PIR04N"),
    ],
)
def test_lookup(zigbee_model, model):
    definition = get_definition(make_device({1: ([], [])}, model=zigbee_model))
    assert definition.model == model
    assert definition.vendor == sercomm.VENDOR


async def test_plug_configure_saves_divisor():
    device = plug()
    definition = get_definition(device)
    endpoint = device.endpoints[1]

    await definition.configure_device(device)

    endpoint.in_clusters[OnOff.cluster_id].bind.assert_awaited_once_with()
    metering = endpoint.in_clusters[Metering.cluster_id]
    metering.bind.assert_awaited_once_with()
    metering.configure_reporting.assert_awaited_once_with(
        "instantaneous_demand", 5, 3600, 1, manufacturer=None
    )
    metering.read_attributes.assert_not_awaited()
    assert metering.get("divisor") == sercomm.METERING_DIVISOR

    msg = make_message(device, 1, Metering.cluster_id, {"instantaneous_demand": 25_000})
    assert await convert_message(definition, msg) == {"power": 25.0}


async def test_au_plug_configure():
    device = plug(
        "SZ-ESW01-AU",
        (OnOff.cluster_id, Metering.cluster_id, ElectricalMeasurement.cluster_id),
    )
    definition = get_definition(device)
    endpoint = device.endpoints[1]

    await definition.configure_device(device)

    electrical = endpoint.in_clusters[ElectricalMeasurement.cluster_id]
    assert electrical.read_attributes.await_count == 3
    assert electrical.configure_reporting.await_args_list == [
        call("rms_voltage", 5, 3600, 1, manufacturer=None),
        call("rms_current", 5, 3600, 1, manufacturer=None),
    ]
    exposes = definition.get_exposes()
    assert exposes[0].type == "switch"
    assert [expose.name for expose in exposes[1:]] == [
        "power",
        "energy",
        "current",
        "voltage",
    ]


async def test_extended_plug():
    device = plug("SZ-ESW02N-CZ3")
    definition = get_definition(device)
    metering = device.endpoints[1].in_clusters[Metering.cluster_id]

    await definition.configure_device(device)

    metering.read_attributes.assert_awaited_once_with(["multiplier", "divisor"])
    assert definition.find_to_zigbee("power_on_behavior") is None

    metering.update_attribute(Metering.AttributeDefs.multiplier.id, 1)
    metering.update_attribute(Metering.AttributeDefs.divisor.id, 1000)
    msg = make_message(
        device, 1, Metering.cluster_id, {"current_summ_delivered": 12_340}
    )
    assert await convert_message(definition, msg) == {"energy": 12.34}


async def test_contact_sensor():
    device = make_device(
        {
            1: (
                [
                    IasZone.cluster_id,
                    TemperatureMeasurement.cluster_id,
                    PowerConfiguration.cluster_id,
                ],
                [],
            )
        },
        model="SZ-DWS04",
    )
    definition = get_definition(device)
    assert definition.meta.battery_voltage_to_percentage == "3V_2100"

    msg = make_message(
        device,
        1,
        IasZone.cluster_id,
        {"zone_status": 0b0101},
        type_="commandStatusChangeNotification",
    )
    assert await convert_message(definition, msg) == {
        "contact": False,
        "tamper": True,
        "battery_low": False,
    }

    msg = make_message(
        device, 1, PowerConfiguration.cluster_id, {"battery_voltage": 30}
    )
    assert await convert_message(definition, msg) == {"voltage": 3000, "battery": 100}

    await definition.configure_device(device)
    power = device.endpoints[1].in_clusters[PowerConfiguration.cluster_id]
    power.configure_reporting.assert_awaited_once_with(
        "battery_voltage", 3600, 62000, 0, manufacturer=None
    )


def test_clones_keep_their_own_identity():
    clones = [
        definition
        for definition in DEFINITION_REGISTRY
        if definition.model in ("XHS2-SE", "SZ-DWS04", "SZ-DWS08")
    ]
    assert sorted(definition.model for definition in clones) == [
        "SZ-DWS04",
        "SZ-DWS08",
        "XHS2-SE",
    ]
    assert {definition.zigbee_model for definition in clones} == {
        ("XHS2-SE",),
        ("SZ-DWS04", "SZ-DWS04N_SF"),
        ("SZ-DWS08N", "SZ-DWS08", "SZ-DWS08N-CZ3"),
    }
    assert len({definition.from_zigbee for definition in clones}) == 1
