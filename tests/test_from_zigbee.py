from __future__ import annotations

import logging

import pytest
from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import (
    AnalogInput,
    BinaryOutput,
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
    CarbonDioxideConcentration,
    IlluminanceMeasurement,
    OccupancySensing,
    PressureMeasurement,
    RelativeHumidity,
    TemperatureMeasurement,
)
from zigpy.zcl.clusters.security import IasZone
from zigpy.zcl.clusters.smartenergy import Metering

from tests.conftest import make_definition, make_device, make_message
from zigpy_devices.converters import FromZigbee, convert_message
from zigpy_devices.converters import from_zigbee as fz


async def convert(converters, cluster_id, data, endpoint_id=1, **kwargs):
    """Run converters over one message from a device with a single cluster."""
    definition_kwargs = kwargs.pop("definition", {})
    options = kwargs.pop("options", None)
    state = kwargs.pop("state", None)
    type_ = kwargs.pop("type_", "attributeReport")

    device = make_device({endpoint_id: ([cluster_id], [])})
    definition = make_definition(from_zigbee=converters, **definition_kwargs)
    msg = make_message(device, endpoint_id, cluster_id, data, type_=type_, **kwargs)
    return await convert_message(definition, msg, options, state)


async def test_on_off():
    assert await convert([fz.on_off], OnOff.cluster_id, {"on_off": 1}) == {
        "state": "ON"
    }
    assert await convert([fz.on_off], OnOff.cluster_id, {"on_off": 0}) == {
        "state": "OFF"
    }
    assert await convert([fz.on_off], OnOff.cluster_id, {"other": 0}) == {}


async def test_on_off_by_attribute_id():
    result = await convert([fz.on_off], OnOff.cluster_id, {0x0000: True})
    assert result == {"state": "ON"}


async def test_on_off_multi_endpoint():
    result = await convert(
        [fz.on_off],
        OnOff.cluster_id,
        {"on_off": 0},
        endpoint_id=2,
        definition={"endpoints": {"l1": 1, "l2": 2}, "multi_endpoint": True},
    )
    assert result == {"state_l2": "OFF"}


async def test_on_off_ignores_other_message_types():
    result = await convert(
        [fz.on_off], OnOff.cluster_id, {"on_off": 1}, type_="writeResponse"
    )
    assert result == {}


async def test_power_on_behavior():
    result = await convert(
        [fz.power_on_behavior], OnOff.cluster_id, {"start_up_on_off": 255}
    )
    assert result == {"power_on_behavior": "previous"}


async def test_conversion_error_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        result = await convert(
            [fz.power_on_behavior, fz.on_off],
            OnOff.cluster_id,
            {"on_off": 1, "start_up_on_off": 7},
        )

    assert result == {"state": "ON"}
    assert "Failed to convert" in caplog.text


async def test_async_converter():
    async def delayed(definition, msg, options, meta):
        return {"answer": msg.data["on_off"]}

    converter = FromZigbee(
        cluster=OnOff.cluster_id, type="attributeReport", convert=delayed
    )
    result = await convert([converter], OnOff.cluster_id, {"on_off": 42})
    assert result == {"answer": 42}


async def test_brightness_and_level_config():
    result = await convert(
        [fz.brightness, fz.level_config],
        LevelControl.cluster_id,
        {"current_level": 120, "on_level": 0xFF, "start_up_current_level": 0},
        state={"level_config": {"on_off_transition_time": 5}},
    )
    assert result == {
        "brightness": 120,
        "level_config": {
            "on_off_transition_time": 5,
            "on_level": "previous",
            "current_level_startup": "minimum",
        },
    }


async def test_battery():
    result = await convert(
        [fz.battery],
        PowerConfiguration.cluster_id,
        {
            "battery_percentage_remaining": 200,
            "battery_voltage": 30,
            "battery_alarm_state": 1,
        },
    )
    assert result == {"battery": 100, "voltage": 3000, "battery_low": True}


async def test_battery_voltage_curve():
    result = await convert(
        [fz.battery],
        PowerConfiguration.cluster_id,
        {"battery_voltage": 27},
        definition={"battery_voltage_to_percentage": "3V_2500"},
    )
    assert result == {"voltage": 2700, "battery": 40}


async def test_battery_dont_divide_percentage():
    result = await convert(
        [fz.battery],
        PowerConfiguration.cluster_id,
        {"battery_percentage_remaining": 87},
        definition={"battery_dont_divide_percentage": True},
    )
    assert result == {"battery": 87}


async def test_temperature():
    converters = [fz.temperature]
    cluster_id = TemperatureMeasurement.cluster_id

    assert await convert(converters, cluster_id, {"measured_value": 2145}) == {
        "temperature": 21.45
    }
    assert await convert(converters, cluster_id, {"measured_value": -0x8000}) == {}

    result = await convert(
        converters,
        cluster_id,
        {"measured_value": 2140},
        options={"temperature_calibration": 1, "temperature_precision": 1},
    )
    assert result == {"temperature": pytest.approx(22.4)}


async def test_humidity_out_of_range():
    converters = [fz.humidity]
    cluster_id = RelativeHumidity.cluster_id

    assert await convert(converters, cluster_id, {"measured_value": 4550}) == {
        "humidity": 45.5
    }
    assert await convert(converters, cluster_id, {"measured_value": 10500}) == {}


async def test_illuminance():
    result = await convert(
        [fz.illuminance], IlluminanceMeasurement.cluster_id, {"measured_value": 10001}
    )
    assert result == {"illuminance": 10}


async def test_pressure():
    cluster_id = PressureMeasurement.cluster_id

    result = await convert(
        [fz.pressure], cluster_id, {"scaled_value": 10132, "scale": -1}
    )
    assert result == {"pressure": pytest.approx(1013.2)}

    result = await convert([fz.pressure], cluster_id, {"measured_value": 1013})
    assert result == {"pressure": 1013}


async def test_co2_and_occupancy():
    result = await convert(
        [fz.co2], CarbonDioxideConcentration.cluster_id, {"measured_value": 0.0004}
    )
    assert result == {"co2": 400}

    result = await convert(
        [fz.occupancy], OccupancySensing.cluster_id, {"occupancy": 1}
    )
    assert result == {"occupancy": True}


async def test_ias_contact():
    result = await convert(
        [fz.ias_contact_alarm_1],
        IasZone.cluster_id,
        {"zone_status": 0x05},
        type_="commandStatusChangeNotification",
    )
    assert result == {"contact": False, "tamper": True, "battery_low": False}


async def test_ias_occupancy_only_alarm_2():
    result = await convert(
        [fz.ias_occupancy_only_alarm_2],
        IasZone.cluster_id,
        {"zone_status": 0x02},
    )
    assert result == {"occupancy": True}


async def test_metering():
    result = await convert(
        [fz.metering],
        Metering.cluster_id,
        {
            "instantaneous_demand": 150,
            "current_summ_delivered": 12340,
            "current_summ_received": 500,
            "multiplier": 1,
            "divisor": 1000,
        },
    )
    assert result == {
        "power": pytest.approx(150),
        "energy": pytest.approx(12.34),
        "produced_energy": pytest.approx(0.5),
    }


async def test_metering_without_divisor():
    result = await convert(
        [fz.metering],
        Metering.cluster_id,
        {"instantaneous_demand": 150, "current_summ_delivered": 12340},
    )
    assert result == {"power": 150}


async def test_metering_uses_cached_divisor():
    device = make_device({1: ([Metering.cluster_id], [])})
    metering = device.endpoints[1].in_clusters[Metering.cluster_id]
    metering.update_attribute(Metering.AttributeDefs.multiplier.id, 1)
    metering.update_attribute(Metering.AttributeDefs.divisor.id, 100)

    definition = make_definition(from_zigbee=[fz.metering])
    msg = make_message(
        device, 1, Metering.cluster_id, {"current_summ_delivered": 250}
    )
    assert await convert_message(definition, msg) == {"energy": 2.5}


async def test_eko09738_metering():
    result = await convert(
        [fz.eko09738_metering],
        Metering.cluster_id,
        {
            "instantaneous_demand": 150000,
            "current_summ_delivered": 0,
            "multiplier": 1,
            "divisor": 1000,
        },
    )
    assert result == {"power": pytest.approx(150)}


async def test_electrical_measurement():
    result = await convert(
        [fz.electrical_measurement],
        ElectricalMeasurement.cluster_id,
        {
            "active_power": 1234,
            "ac_power_multiplier": 1,
            "ac_power_divisor": 10,
            "rms_voltage": 230,
            "power_factor": 95,
        },
    )
    assert result == {
        "power": pytest.approx(123.4),
        "voltage": 230,
        "power_factor": 0.95,
    }


@pytest.mark.parametrize(
    "options, meta, lift, expected",
    [
        ({}, {}, 30, {"position": 70, "state": "OPEN"}),
        ({}, {}, 100, {"position": 0, "state": "CLOSE"}),
        ({"invert_cover": True}, {}, 30, {"position": 30, "state": "OPEN"}),
        ({}, {"cover_inverted": True}, 30, {"position": 30, "state": "OPEN"}),
        (
            {"invert_cover": True},
            {"cover_inverted": True},
            30,
            {"position": 70, "state": "OPEN"},
        ),
        ({}, {}, 0xFF, {}),
    ],
)
async def test_cover_position(options, meta, lift, expected):
    result = await convert(
        [fz.cover_position_tilt],
        WindowCovering.cluster_id,
        {"current_position_lift_percentage": lift},
        options=options,
        definition=meta,
    )
    assert result == expected


async def test_cover_tilt():
    result = await convert(
        [fz.cover_position_tilt],
        WindowCovering.cluster_id,
        {"current_position_tilt_percentage": 25},
    )
    assert result == {"tilt": 75}


async def test_thermostat():
    result = await convert(
        [fz.thermostat],
        Thermostat.cluster_id,
        {
            "local_temperature": 2150,
            "occupied_heating_setpoint": 2000,
            "local_temperature_calibration": -15,
            "pi_heating_demand": 120,
            "system_mode": 4,
            "running_state": 1,
            "ctrl_sequence_of_oper": 2,
        },
    )
    assert result == {
        "local_temperature": 21.5,
        "occupied_heating_setpoint": 20,
        "local_temperature_calibration": -1.5,
        "pi_heating_demand": 100,
        "system_mode": "heat",
        "running_state": "heat",
        "control_sequence_of_operation": "heating_only",
    }


async def test_thermostat_idle():
    result = await convert(
        [fz.thermostat],
        Thermostat.cluster_id,
        {"running_state": 0, "local_temperature": -0x8000},
    )
    assert result == {"running_state": "idle"}


async def test_hvac_user_interface():
    result = await convert(
        [fz.hvac_user_interface],
        UserInterface.cluster_id,
        {"keypad_lockout": 1, "temperature_display_mode": 0},
    )
    assert result == {"keypad_lockout": "lock1", "temperature_display_mode": "celsius"}


@pytest.mark.parametrize(
    "mode, expected",
    [(0, ("off", "OFF")), (3, ("high", "ON")), (5, ("auto", "ON"))],
)
async def test_fan(mode, expected):
    result = await convert([fz.fan], Fan.cluster_id, {"fan_mode": mode})
    assert result == {"fan_mode": expected[0], "fan_state": expected[1]}


async def test_ballast_configuration():
    result = await convert(
        [fz.ballast_configuration],
        Ballast.cluster_id,
        {"min_level": 10, "max_level": 254, "ballast_status": 0x02},
    )
    assert result == {
        "ballast_minimum_level": 10,
        "ballast_maximum_level": 254,
        "ballast_status_non_operational": False,
        "ballast_status_lamp_failure": True,
    }


async def test_wiser_ballast_configuration():
    result = await convert(
        [fz.wiser_ballast_configuration],
        Ballast.cluster_id,
        {"min_level": 10, 0xE000: 3},
    )
    assert result == {"ballast_minimum_level": 10, "dimmer_mode": "rl_led"}


async def test_command_actions_are_deduplicated():
    device = make_device({1: ([], [OnOff.cluster_id])})
    definition = make_definition(from_zigbee=[fz.command_on, fz.command_off])

    def msg(type_, sequence):
        return make_message(
            device,
            1,
            OnOff.cluster_id,
            {},
            type_=type_,
            group_id=7,
            meta={"zcl_transaction_sequence_number": sequence},
        )

    assert await convert_message(definition, msg("commandOn", 1)) == {
        "action": "on",
        "action_group": 7,
    }
    assert await convert_message(definition, msg("commandOn", 1)) == {}
    assert await convert_message(definition, msg("commandOff", 2)) == {
        "action": "off",
        "action_group": 7,
    }


async def test_command_move_and_stop():
    device = make_device({1: ([], [LevelControl.cluster_id])})
    definition = make_definition(from_zigbee=[fz.command_move, fz.command_stop])

    move = make_message(
        device,
        1,
        LevelControl.cluster_id,
        {"move_mode": 1, "rate": 50},
        type_="commandMoveWithOnOff",
    )
    stop = make_message(device, 1, LevelControl.cluster_id, {}, type_="commandStop")

    assert await convert_message(definition, move) == {
        "action": "brightness_move_down",
        "action_rate": 50,
    }
    assert await convert_message(definition, stop) == {"action": "brightness_stop"}


async def test_command_recall_and_cover():
    device = make_device({1: ([], [Scenes.cluster_id, WindowCovering.cluster_id])})
    definition = make_definition(
        from_zigbee=[fz.command_recall, fz.command_cover_open, fz.command_cover_stop]
    )

    recall = make_message(
        device, 1, Scenes.cluster_id, {"scene_id": 2}, type_="commandRecall"
    )
    up = make_message(device, 1, WindowCovering.cluster_id, {}, type_="commandUpOpen")
    stop = make_message(device, 1, WindowCovering.cluster_id, {}, type_="commandStop")

    assert await convert_message(definition, recall) == {"action": "recall_2"}
    assert await convert_message(definition, up) == {"action": "open"}
    assert await convert_message(definition, stop) == {"action": "stop"}


async def test_ptvo_multistate_action():
    result = await convert(
        [fz.ptvo_multistate_action],
        MultistateInput.cluster_id,
        {"present_value": 2},
        definition={"endpoints": {"l1": 1}, "multi_endpoint": True},
    )
    assert result == {"action": "double_l1"}


@pytest.mark.parametrize(
    "unit, name",
    [
        ("C", "temperature"),
        ("Wh", "energy"),
        ("5", "val5"),
        ("mcpmA", "mcpm10"),
        ("ncpm2", "ncpm2"),
        ("furlong", None),
    ],
)
def test_ptvo_value_name(unit, name):
    assert fz.ptvo_value_name(unit) == name


async def test_ptvo_analog_input_sensor():
    result = await convert(
        [fz.ptvo_switch_analog_input],
        AnalogInput.cluster_id,
        {"present_value": 21.456, "description": "C,28-0000"},
        endpoint_id=3,
    )
    assert result == {
        "l3": 21.456,
        "device_l3": "28-0000",
        "temperature_l3": 21.5,
    }


@pytest.mark.parametrize(
    "unit, prop, expected",
    [
        ("A", "current_l2", 0.457),
        ("pf", "power_factor_l2", 0.5),
        ("mcpm1", "mcpm1_l2", 0.46),
    ],
)
async def test_ptvo_analog_input_small_values(unit, prop, expected):
    result = await convert(
        [fz.ptvo_switch_analog_input],
        AnalogInput.cluster_id,
        {"present_value": 0.4567, "description": unit},
        endpoint_id=2,
    )
    assert result == {"l2": 0.457, prop: expected}


async def test_ptvo_analog_input_brightness():
    device = make_device({4: ([AnalogInput.cluster_id, LevelControl.cluster_id], [])})
    definition = make_definition(from_zigbee=[fz.ptvo_switch_analog_input])
    msg = make_message(device, 4, AnalogInput.cluster_id, {"present_value": 100})

    assert await convert_message(definition, msg) == {"l4": 100, "brightness_l4": 100}


@pytest.mark.parametrize(
    "text, expected",
    [(b"hello", "hello"), (b"\x01\x02", "0102"), ("plain", "plain")],
)
async def test_ptvo_switch_uart(text, expected):
    result = await convert(
        [fz.ptvo_switch_uart], MultistateValue.cluster_id, {"state_text": text}
    )
    assert result == {"action": expected}


async def test_router_and_button_converters():
    result = await convert(
        [fz.cc2530_router_led], BinaryOutput.cluster_id, {"present_value": 1}
    )
    assert result == {"led": True}

    result = await convert([fz.dnckat_buttons], OnOff.cluster_id, {"on_off": 0})
    assert result == {"action": "hold"}
