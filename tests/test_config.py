"""Test configuration."""

import re
import warnings

import pytest
import voluptuous as vol
import zigpy.types as t

from tests.conftest import make_ieee
import zigpy_devices.config as config
import zigpy_devices.config.validators as cv


@pytest.mark.parametrize(
    ("value", "result"),
    [
        (False, False),
        (True, True),
        ("1", True),
        ("yes", True),
        ("YeS", True),
        ("on", True),
        ("enable", True),
        (0, False),
        ("no", False),
        ("ofF", False),
        ("disablE", False),
    ],
)
def test_config_validation_bool(value, result):
    """Test boolean config validation."""
    assert cv.cv_boolean(value) is result

    schema = vol.Schema({vol.Required("value"): cv.cv_boolean})
    validated = schema({"value": value})
    assert validated["value"] is result


@pytest.mark.parametrize("value", ["invalid", "not a bool", None])
def test_config_validation_bool_invalid(value):
    with pytest.raises(vol.Invalid, match="not an on/off option value"):
        cv.cv_boolean(value)


@pytest.mark.parametrize(
    ("value", "result"),
    [(0x105E, 0x105E), ("0x105E", 0x105E), ("4190", 4190)],
)
def test_config_validation_hex_number(value, result):
    assert cv.cv_hex(value) == result


@pytest.mark.parametrize("value", ["0xZZ", "abc", 1.5])
def test_config_validation_hex_number_invalid(value):
    with pytest.raises(vol.Invalid):
        cv.cv_hex(value)


def test_calibration_and_precision():
    assert cv.cv_calibration("-1.5") == -1.5
    assert cv.cv_precision("2") == 2

    with pytest.raises(vol.Invalid):
        cv.cv_calibration("warm")

    with pytest.raises(vol.Invalid):
        cv.cv_calibration(True)

    with pytest.raises(vol.Invalid):
        cv.cv_precision(4)

    with pytest.raises(vol.Invalid):
        cv.cv_precision(-1)


@pytest.mark.parametrize(
    "value",
    [
        "0x0807060504030201",
        "0X0807060504030201",
        "08:07:06:05:04:03:02:01",
        make_ieee(1),
    ],
)
def test_ieee(value):
    assert cv.cv_ieee(value) == "08:07:06:05:04:03:02:01"


@pytest.mark.parametrize("value", ["0x0807", "not an address", 1234])
def test_ieee_invalid(value):
    with pytest.raises(vol.Invalid):
        cv.cv_ieee(value)


def test_ieee_regex():
    pattern = cv.cv_ieee_regex(r"^0x00000000e.......$")
    assert pattern.match("0x00000000e1234567")
    assert not pattern.match("0x0807060504030201")
    assert cv.cv_ieee_regex(pattern) is pattern

    with pytest.raises(vol.Invalid):
        cv.cv_ieee_regex("(unclosed")

    with pytest.raises(vol.Invalid):
        cv.cv_ieee_regex(12)


def test_deprecated_option(caplog):
    schema = vol.Schema(
        {
            vol.Optional("manufacturer"): vol.All(
                cv.cv_hex,
                cv.cv_deprecated("Use the definition manufacturer code"),
            )
        }
    )

    with pytest.warns(DeprecationWarning, match="definition manufacturer code"):
        assert schema({"manufacturer": "0x105E"}) == {"manufacturer": 0x105E}
    assert "Deprecated device option" in caplog.text

    # unset options stay silent
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert schema({}) == {}


def test_device_options_defaults():
    options = config.DEVICE_OPTIONS_SCHEMA({})

    assert options[config.CONF_INVERT_COVER] is False
    # each definition picks its own poll interval
    assert config.CONF_MEASUREMENT_POLL_INTERVAL not in options
    assert options[config.CONF_TRANSITION] == 0


def test_device_options_calibration_and_precision():
    options = config.DEVICE_OPTIONS_SCHEMA(
        {
            "temperature_calibration": "-0.5",
            "humidity_precision": "1",
            "vendor_specific": "kept",
        }
    )

    assert options["temperature_calibration"] == -0.5
    assert options["humidity_precision"] == 1
    assert options["vendor_specific"] == "kept"


@pytest.mark.parametrize(
    "options",
    [
        {"humidity_precision": 5},
        {"temperature_calibration": "warm"},
        {config.CONF_MEASUREMENT_POLL_INTERVAL: -2},
        {config.CONF_INVERT_COVER: "maybe"},
    ],
)
def test_device_options_invalid(options):
    with pytest.raises(vol.Invalid):
        config.DEVICE_OPTIONS_SCHEMA(options)


def test_device_options_legacy_is_deprecated():
    with pytest.warns(DeprecationWarning, match="legacy"):
        options = config.DEVICE_OPTIONS_SCHEMA({config.CONF_LEGACY: "true"})

    assert options[config.CONF_LEGACY] is True


def test_config_schema():
    validated = config.CONFIG_SCHEMA(
        {
            config.CONF_DEVICE_OPTIONS: {
                "0x0807060504030201": {config.CONF_INVERT_COVER: "on"}
            },
            config.CONF_EXCLUDED_MODELS: ["SZ-ESW01"],
        }
    )

    assert validated[config.CONF_EXCLUDED_MODELS] == ["SZ-ESW01"]
    assert validated[config.CONF_DEVICE_OPTIONS] == {
        "08:07:06:05:04:03:02:01": {
            config.CONF_INVERT_COVER: True,
            config.CONF_TRANSITION: 0,
        }
    }

    options = config.device_options(validated, make_ieee(1))
    assert options[config.CONF_INVERT_COVER] is True

    # devices without options get the defaults
    other = t.EUI64.convert("00:11:22:33:44:55:66:77")
    options = config.device_options(validated, other)
    assert options[config.CONF_INVERT_COVER] is False


def test_config_schema_defaults():
    assert config.CONFIG_SCHEMA({}) == {
        config.CONF_DEVICE_OPTIONS: {},
        config.CONF_EXCLUDED_MODELS: [],
    }


def test_option_patterns():
    assert re.match(config.SCHEMA_CALIBRATION.pattern, "soil_moisture_calibration")
    assert not re.match(config.SCHEMA_PRECISION.pattern, "precision")
