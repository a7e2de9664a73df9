from __future__ import annotations

from zigpy_devices.exposes import Access, Composite, Numeric
from zigpy_devices.exposes import options as exposes_options
from zigpy_devices.exposes import presets as e


def test_access_flags():
    assert Access.ALL == Access.STATE | Access.SET | Access.GET
    assert Access.STATE_SET & Access.SET
    assert not Access.STATE_GET & Access.SET
    assert int(Access.ALL) == 7


def test_numeric_as_dict():
    expose = (
        e.numeric("transmit_power", Access.ALL)
        .with_value_min(-20)
        .with_value_max(20)
        .with_value_step(1)
        .with_unit("dBm")
        .with_description("Transmit power")
        .with_preset("default", 0, "Default power")
    )

    assert expose.as_dict() == {
        "type": "numeric",
        "name": "transmit_power",
        "label": "Transmit power",
        "property": "transmit_power",
        "description": "Transmit power",
        "access": 7,
        "unit": "dBm",
        "value_min": -20,
        "value_max": 20,
        "value_step": 1,
        "presets": [{"name": "default", "value": 0, "description": "Default power"}],
    }


def test_switch_with_endpoint():
    expose = e.switch().with_endpoint("l2")
    obj = expose.as_dict()

    assert obj["type"] == "switch"
    assert obj["endpoint"] == "l2"
    assert obj["features"] == [
        {
            "type": "binary",
            "name": "state",
            "label": "State",
            "property": "state_l2",
            "endpoint": "l2",
            "description": "On/off state of the switch",
            "access": 7,
            "value_on": "ON",
            "value_off": "OFF",
            "value_toggle": "TOGGLE",
        }
    ]


def test_feature_added_after_endpoint_gets_postfixed():
    light = e.light_brightness().with_endpoint("l1")
    light.with_level_config()

    properties = [feature.property for feature in light.features]
    assert properties == ["state_l1", "brightness_l1", "level_config_l1"]


def test_composite_keeps_inner_properties():
    composite = (
        Composite("level_config", "level_config", Access.ALL)
        .with_feature(Numeric("on_level", Access.ALL))
        .with_endpoint("l3")
    )

    assert composite.property == "level_config_l3"
    assert composite.features[0].property == "on_level"


def test_with_access_cascades_to_features():
    cover = e.cover_position().with_access(Access.STATE)
    assert {feature.access for feature in cover.features} == {Access.STATE}


def test_clone_is_independent():
    original = e.temperature()
    clone = original.clone().with_endpoint("l1")

    assert original.property == "temperature"
    assert clone.property == "temperature_l1"


def test_presets_return_new_objects():
    assert e.battery() is not e.battery()

    first = e.battery()
    first.with_endpoint("x")
    assert e.battery().property == "battery"


def test_fan_and_climate():
    fan = e.fan().with_modes(["off", "low", "high"])
    assert [feature.property for feature in fan.features] == ["fan_state", "fan_mode"]
    assert fan.features[1].values == ["off", "low", "high"]

    climate = (
        e.climate()
        .with_setpoint("occupied_heating_setpoint", 7, 30, 0.5)
        .with_local_temperature()
        .with_system_mode(["off", "heat"])
        .with_running_state(["idle", "heat"])
        .with_pi_heating_demand()
    )
    obj = climate.as_dict()
    assert obj["type"] == "climate"
    assert [feature["property"] for feature in obj["features"]] == [
        "occupied_heating_setpoint",
        "local_temperature",
        "system_mode",
        "running_state",
        "pi_heating_demand",
    ]
    assert obj["features"][0]["value_step"] == 0.5
    assert obj["features"][0]["unit"] == "°C"


def test_category_and_label():
    expose = e.power_on_behavior(["off", "on"])
    obj = expose.as_dict()

    assert obj["category"] == "config"
    assert obj["label"] == "Power on behavior"
    assert obj["values"] == ["off", "on"]


def test_contact_inverts_values():
    contact = e.contact()
    assert contact.value_on is False
    assert contact.value_off is True


def test_option_exposes():
    calibration = exposes_options.calibration("illuminance", "percentual")
    assert calibration.name == "illuminance_calibration"
    assert calibration.unit == "%"
    assert calibration.access == Access.SET

    precision = exposes_options.precision("soil_moisture")
    assert precision.name == "soil_moisture_precision"
    assert precision.value_max == 3
    assert "soil moisture" in precision.description

    poll = exposes_options.measurement_poll_interval(" Extra.")
    assert poll.name == "measurement_poll_interval"
    assert poll.value_min == -1
    assert poll.description.endswith("Extra.")

    assert exposes_options.invert_cover().name == "invert_cover"
    assert exposes_options.transition().unit == "s"
