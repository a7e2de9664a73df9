from __future__ import annotations

from unittest.mock import call

import pytest
from zigpy.quirks import CustomCluster
from zigpy.zcl.clusters.general import (
    Basic,
    LevelControl,
    OnOff,
    OnOffConfiguration,
    PowerConfiguration,
    Scenes,
)
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.hvac import Thermostat
from zigpy.zcl.clusters.lighting import Ballast
from zigpy.zcl.clusters.measurement import OccupancySensing, TemperatureMeasurement
from zigpy.zcl.clusters.security import IasZone
from zigpy.zcl.clusters.smartenergy import Metering

from tests.conftest import make_device, make_message
from zigpy_devices import extend
from zigpy_devices.converters import convert_message, get_value, set_value
from zigpy_devices.definition import DefinitionBuilder
from zigpy_devices.exceptions import ConversionError, EndpointNotFound
from zigpy_devices.exposes import Access
from zigpy_devices.state import get_device_meta


class CustomOnOff(CustomCluster, OnOff):
    pass


def build(registry, *extends, **meta):
    return (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .extend(*extends)
        .meta(**meta)
        .add_to_registry()
    )


def in_cluster(device, cluster_id, endpoint_id=1):
    return device.endpoints[endpoint_id].in_clusters[cluster_id]


async def test_on_off_with_endpoints(registry):
    definition = build(
        registry,
        extend.device_endpoints({"l1": 1, "l2": 2}),
        extend.on_off(endpoint_names=["l1", "l2"]),
    )
    device = make_device({1: ([OnOff.cluster_id], []), 2: ([OnOff.cluster_id], [])})

    exposes = definition.get_exposes(device)
    assert [expose.type for expose in exposes] == ["switch", "switch", "enum", "enum"]
    assert [expose.property for expose in exposes[2:]] == [
        "power_on_behavior_l1",
        "power_on_behavior_l2",
    ]
    assert exposes[1].features[0].property == "state_l2"

    msg = make_message(device, 2, OnOff.cluster_id, {"on_off": 1})
    assert await convert_message(definition, msg) == {"state_l2": "ON"}

    await definition.configure_device(device)
    for endpoint_id in (1, 2):
        on_off = in_cluster(device, OnOff.cluster_id, endpoint_id)
        on_off.bind.assert_awaited_once_with()
        on_off.configure_reporting.assert_awaited_once_with(
            "on_off", 0, 3600, 0, manufacturer=None
        )
    assert get_device_meta(device).configured is True


async def test_on_off_without_reporting(registry):
    definition = build(
        registry, extend.on_off(power_on_behavior=False, configure_reporting=False)
    )
    device = make_device({1: ([OnOff.cluster_id], [])})

    assert len(definition.get_exposes()) == 1
    assert definition.find_to_zigbee("power_on_behavior") is None

    await definition.configure_device(device)
    in_cluster(device, OnOff.cluster_id).bind.assert_awaited_once_with()
    in_cluster(device, OnOff.cluster_id).configure_reporting.assert_not_awaited()


async def test_light(registry):
    definition = build(registry, extend.light(level_config=True))

    light = definition.get_exposes()[0]
    assert light.type == "light"
    assert [feature.name for feature in light.features] == [
        "state",
        "brightness",
        "level_config",
    ]
    assert definition.find_to_zigbee("level_config") is not None
    assert definition.configure == ()


async def test_light_reporting(registry):
    definition = build(registry, extend.light(configure_reporting=True))
    device = make_device({1: ([OnOff.cluster_id, LevelControl.cluster_id], [])})

    await definition.configure_device(device)

    in_cluster(
        device, LevelControl.cluster_id
    ).configure_reporting.assert_awaited_once_with(
        "current_level", 5, 3600, 1, manufacturer=None
    )


async def test_electricity_meter_metering_only(registry):
    definition = build(registry, extend.electricity_meter(cluster="metering"))
    device = make_device({1: ([Metering.cluster_id], [])})

    assert [expose.name for expose in definition.get_exposes()] == ["power", "energy"]

    await definition.configure_device(device)

    metering = in_cluster(device, Metering.cluster_id)
    metering.bind.assert_awaited_once_with()
    metering.read_attributes.assert_awaited_once_with(["multiplier", "divisor"])
    assert metering.configure_reporting.await_args_list == [
        call("current_summ_delivered", 5, 3600, 1, manufacturer=None),
        call("instantaneous_demand", 5, 3600, 1, manufacturer=None),
    ]


async def test_electricity_meter_both(registry):
    definition = build(
        registry,
        extend.electricity_meter(produced_energy=True, configure_reporting=False),
    )
    device = make_device(
        {1: ([Metering.cluster_id, ElectricalMeasurement.cluster_id], [])}
    )

    exposes = definition.get_exposes()
    assert [expose.name for expose in exposes] == [
        "power",
        "voltage",
        "current",
        "energy",
        "produced_energy",
    ]
    assert exposes[0].access == Access.STATE_GET

    await definition.configure_device(device)

    electrical = in_cluster(device, ElectricalMeasurement.cluster_id)
    assert electrical.read_attributes.await_count == 3
    electrical.configure_reporting.assert_not_awaited()
    in_cluster(device, Metering.cluster_id).configure_reporting.assert_not_awaited()

    await get_value(definition, device, "power")
    electrical.read_attributes.assert_awaited_with(["active_power"])


async def test_battery(registry):
    definition = build(
        registry,
        extend.battery(
            voltage=True, voltage_to_percentage="3V_2500", voltage_reporting=True
        ),
    )
    device = make_device({1: ([PowerConfiguration.cluster_id], [])})

    assert definition.meta.battery_voltage_to_percentage == "3V_2500"
    assert [expose.name for expose in definition.get_exposes()] == [
        "battery",
        "voltage",
    ]

    await definition.configure_device(device)
    power = in_cluster(device, PowerConfiguration.cluster_id)
    assert power.configure_reporting.await_args_list == [
        call("battery_percentage_remaining", 3600, 62000, 0, manufacturer=None),
        call("battery_voltage", 3600, 62000, 0, manufacturer=None),
    ]


@pytest.mark.parametrize(
    "overrides, expected",
    [
        (None, [call("measured_value", 10, 3600, 100, manufacturer=None)]),
        ({"min": 30}, [call("measured_value", 30, 3600, 100, manufacturer=None)]),
        (False, []),
    ],
)
async def test_temperature_reporting(registry, overrides, expected):
    definition = build(registry, extend.temperature(reporting_overrides=overrides))
    device = make_device({1: ([TemperatureMeasurement.cluster_id], [])})

    await definition.configure_device(device)

    temperature = in_cluster(device, TemperatureMeasurement.cluster_id)
    temperature.bind.assert_awaited_once_with()
    assert temperature.configure_reporting.await_args_list == expected


async def test_occupancy_timeout(registry):
    definition = build(registry, extend.occupancy(pir_config=["otu_delay"]))
    device = make_device({1: ([OccupancySensing.cluster_id], [])})

    msg = make_message(
        device,
        1,
        OccupancySensing.cluster_id,
        {"occupancy": 1, "pir_o_to_u_delay": 90},
    )
    assert await convert_message(definition, msg) == {
        "occupancy": True,
        "occupancy_timeout": 90,
    }

    result = await set_value(definition, device, "occupancy_timeout", "60")
    assert result == {"state": {"occupancy_timeout": 60}}
    in_cluster(
        device, OccupancySensing.cluster_id
    ).write_attributes.assert_awaited_once_with({"pir_o_to_u_delay": 60})


async def test_enum_lookup(registry):
    definition = build(
        registry,
        extend.device_endpoints({"l1": 1, "l2": 2}),
        extend.enum_lookup(
            "switch_type",
            {"toggle": 0, "momentary": 1},
            OnOffConfiguration.cluster_id,
            "switch_type",
            "Type of the connected switch",
            endpoint_name="l1",
        ),
    )
    device = make_device(
        {
            1: ([OnOffConfiguration.cluster_id], []),
            2: ([OnOffConfiguration.cluster_id], []),
        }
    )

    assert definition.get_exposes()[0].property == "switch_type_l1"

    first = make_message(device, 1, OnOffConfiguration.cluster_id, {"switch_type": 1})
    second = make_message(device, 2, OnOffConfiguration.cluster_id, {"switch_type": 1})
    assert await convert_message(definition, first) == {"switch_type_l1": "momentary"}
    assert await convert_message(definition, second) == {}

    result = await set_value(definition, device, "switch_type_l1", "Toggle")
    assert result == {"state": {"switch_type_l1": "toggle"}}
    in_cluster(
        device, OnOffConfiguration.cluster_id
    ).write_attributes.assert_awaited_once_with({"switch_type": 0}, manufacturer=None)


async def test_numeric(registry):
    definition = build(
        registry,
        extend.numeric(
            "heating_setpoint",
            Thermostat.cluster_id,
            "occupied_heating_setpoint",
            "Heating setpoint",
            unit="°C",
            scale=100,
            precision=1,
            manufacturer=0x105E,
            reporting_config={"min": 0, "max": 600, "change": 10},
        ),
    )
    device = make_device({1: ([Thermostat.cluster_id], [])})
    thermostat = in_cluster(device, Thermostat.cluster_id)

    msg = make_message(
        device, 1, Thermostat.cluster_id, {"occupied_heating_setpoint": 2154}
    )
    assert await convert_message(definition, msg) == {"heating_setpoint": 21.5}

    result = await set_value(definition, device, "heating_setpoint", 19.5)
    assert result == {"state": {"heating_setpoint": 19.5}}
    thermostat.write_attributes.assert_awaited_once_with(
        {"occupied_heating_setpoint": 1950}, manufacturer=0x105E
    )

    await get_value(definition, device, "heating_setpoint")
    thermostat.read_attributes.assert_awaited_once_with(
        ["occupied_heating_setpoint"], manufacturer=0x105E
    )

    await definition.configure_device(device)
    thermostat.configure_reporting.assert_awaited_once_with(
        "occupied_heating_setpoint", 0, 600, 10, manufacturer=0x105E
    )


async def test_numeric_callable_scale_and_read_only(registry):
    def scale(value, direction):
        return value * 2 if direction == "from" else value / 2

    definition = build(
        registry,
        extend.numeric(
            "doubled",
            Basic.cluster_id,
            "app_version",
            "Doubled version",
            access=Access.STATE_GET,
            scale=scale,
        ),
    )
    device = make_device({1: ([Basic.cluster_id], [])})

    msg = make_message(device, 1, Basic.cluster_id, {"app_version": 21})
    assert await convert_message(definition, msg) == {"doubled": 42}

    with pytest.raises(ConversionError, match="can not be set"):
        await set_value(definition, device, "doubled", 10)


async def test_binary_manufacturer_attribute(registry):
    definition = build(
        registry,
        extend.binary(
            "led",
            Basic.cluster_id,
            0xE001,
            "Indicator LED",
            value_on=("ON", 1),
            value_off=("OFF", 0),
            manufacturer=0x105E,
        ),
    )
    device = make_device({1: ([Basic.cluster_id], [])})

    msg = make_message(device, 1, Basic.cluster_id, {0xE001: 1})
    assert await convert_message(definition, msg) == {"led": "ON"}

    result = await set_value(definition, device, "led", "off")
    assert result == {"state": {"led": "OFF"}}
    in_cluster(device, Basic.cluster_id).write_attributes.assert_awaited_once_with(
        {0xE001: 0}, manufacturer=0x105E
    )


async def test_ias_zone_alarm(registry):
    definition = build(
        registry,
        extend.ias_zone_alarm(
            "contact",
            manufacturer_zone_attributes=((11, "lid_open", "Lid is open"),),
        ),
    )
    device = make_device({1: ([IasZone.cluster_id], [])})

    assert [expose.name for expose in definition.get_exposes()] == [
        "contact",
        "tamper",
        "battery_low",
        "lid_open",
    ]

    msg = make_message(
        device,
        1,
        IasZone.cluster_id,
        {"zone_status": 0b1000_0000_1001},
        type_="commandStatusChangeNotification",
    )
    assert await convert_message(definition, msg) == {
        "contact": False,
        "tamper": False,
        "battery_low": True,
        "lid_open": True,
    }


async def test_lighting_ballast(registry):
    definition = build(registry, extend.lighting_ballast())
    device = make_device({1: ([Ballast.cluster_id], [])})

    assert len(definition.get_exposes()) == 5

    await definition.configure_device(device)
    in_cluster(device, Ballast.cluster_id).read_attributes.assert_awaited_once_with(
        ["physical_min_level", "physical_max_level", "min_level", "max_level"]
    )


async def test_link_quality(registry):
    definition = build(registry, extend.link_quality(configure_reporting=True))
    device = make_device({1: ([Basic.cluster_id], [])})

    msg = make_message(device, 1, Basic.cluster_id, {"zcl_version": 3}, linkquality=120)
    assert await convert_message(definition, msg) == {"linkquality": 120}

    await definition.configure_device(device)
    in_cluster(device, Basic.cluster_id).configure_reporting.assert_awaited_once_with(
        "zcl_version", 3600, 3600, 0, manufacturer=None
    )


async def test_force_power_source(registry):
    definition = build(registry, extend.force_power_source("Mains (single phase)"))
    device = make_device({1: ([], [])})

    await definition.handle_event("start", {}, device)
    assert get_device_meta(device).get("power_source") == "Mains (single phase)"

    await definition.handle_event("start", {}, None)


async def test_cluster_changes(registry):
    definition = build(
        registry,
        extend.add_custom_cluster(CustomOnOff, endpoint_id=1, add_if_missing=True),
        extend.add_endpoint_cluster(
            2, input_clusters=(Scenes.cluster_id,), output_clusters=(OnOff.cluster_id,)
        ),
    )
    device = make_device({1: ([Basic.cluster_id], [])})

    definition.setup_device(device)

    assert isinstance(in_cluster(device, OnOff.cluster_id), CustomOnOff)
    assert Scenes.cluster_id in device.endpoints[2].in_clusters
    assert OnOff.cluster_id in device.endpoints[2].out_clusters


async def test_setup_configure_for_reading(registry):
    definition = build(
        registry,
        extend.device_endpoints({"top": 1, "bottom": 2}),
        extend.setup_configure_for_reading(
            Basic.cluster_id, ["sw_build_id"], ["bottom"], manufacturer=0x1234
        ),
    )
    device = make_device({1: ([Basic.cluster_id], []), 2: ([Basic.cluster_id], [])})

    await definition.configure_device(device)

    in_cluster(device, Basic.cluster_id, 1).read_attributes.assert_not_awaited()
    in_cluster(device, Basic.cluster_id, 2).read_attributes.assert_awaited_once_with(
        ["sw_build_id"], manufacturer=0x1234
    )


async def test_commands(registry):
    definition = build(
        registry,
        extend.device_endpoints({"l1": 1}),
        extend.commands_on_off(endpoint_names=["l1"]),
        extend.commands_level_ctrl(("brightness_stop",), bind=False),
    )
    device = make_device({1: ([], [OnOff.cluster_id, LevelControl.cluster_id])})

    actions = [expose.values for expose in definition.get_exposes()]
    assert actions == [["on_l1", "off_l1", "toggle_l1"], ["brightness_stop"]]

    await definition.configure_device(device)
    device.endpoints[1].out_clusters[OnOff.cluster_id].bind.assert_awaited_once_with()
    device.endpoints[1].out_clusters[
        LevelControl.cluster_id
    ].bind.assert_not_awaited()

    msg = make_message(device, 1, OnOff.cluster_id, {}, type_="commandToggle")
    assert await convert_message(definition, msg) == {"action": "toggle_l1"}


async def test_missing_endpoint_name(registry):
    definition = build(registry, extend.temperature(endpoint_names=["l5"]))
    device = make_device({1: ([TemperatureMeasurement.cluster_id], [])})

    with pytest.raises(EndpointNotFound):
        await definition.configure_device(device)


async def test_identify(registry):
    definition = build(registry, extend.identify())
    assert definition.get_exposes()[0].name == "identify"
    assert definition.find_to_zigbee("identify") is not None
