"""Config schemas and validation."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from zigpy_devices.config.defaults import (
    CONF_EXCLUDED_MODELS_DEFAULT,
    CONF_INVERT_COVER_DEFAULT,
    CONF_TRANSITION_DEFAULT,
)
from zigpy_devices.config.validators import (
    cv_boolean,
    cv_calibration,
    cv_deprecated,
    cv_ieee,
    cv_precision,
)

CONF_DEVICE_OPTIONS = "device_options"
CONF_EXCLUDED_MODELS = "excluded_models"
CONF_INVERT_COVER = "invert_cover"
CONF_MEASUREMENT_POLL_INTERVAL = "measurement_poll_interval"
CONF_TRANSITION = "transition"

# Deprecated keys
CONF_LEGACY = "legacy"

SCHEMA_CALIBRATION = vol.Match(r"^[a-z0-9_]+_calibration$")
SCHEMA_PRECISION = vol.Match(r"^[a-z0-9_]+_precision$")

DEVICE_OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_INVERT_COVER, default=CONF_INVERT_COVER_DEFAULT): cv_boolean,
        vol.Optional(CONF_MEASUREMENT_POLL_INTERVAL): vol.All(
            vol.Coerce(int), vol.Range(min=-1)
        ),
        vol.Optional(CONF_TRANSITION, default=CONF_TRANSITION_DEFAULT): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional(CONF_LEGACY): vol.All(
            cv_boolean,
            cv_deprecated("The `legacy` device option no longer has any effect"),
        ),
        SCHEMA_CALIBRATION: cv_calibration,
        SCHEMA_PRECISION: cv_precision,
    },
    extra=vol.ALLOW_EXTRA,
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_DEVICE_OPTIONS, default={}): vol.Schema(
            {cv_ieee: DEVICE_OPTIONS_SCHEMA}
        ),
        vol.Optional(CONF_EXCLUDED_MODELS, default=CONF_EXCLUDED_MODELS_DEFAULT): [
            str
        ],
    },
    extra=vol.ALLOW_EXTRA,
)


def device_options(config: dict[str, Any], ieee: Any) -> dict[str, Any]:
    """Validated options for a single device, with defaults filled in."""
    options = config.get(CONF_DEVICE_OPTIONS, {})
    return DEVICE_OPTIONS_SCHEMA(dict(options.get(cv_ieee(ieee), {})))
