from __future__ import annotations

import logging
import re
import typing
import warnings

import voluptuous as vol
import zigpy.types as t

_LOGGER = logging.getLogger(__name__)

MAX_PRECISION = 3


TRUE_OPTION_VALUES = frozenset({"1", "true", "yes", "on", "enable"})
FALSE_OPTION_VALUES = frozenset({"0", "false", "no", "off", "disable"})


def cv_boolean(value: bool | int | str) -> bool:
    """Device option switch, also accepting `on`/`off` style strings."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_OPTION_VALUES:
            return True
        if text in FALSE_OPTION_VALUES:
            return False
    elif isinstance(value, (bool, int)):
        return bool(value)
    raise vol.Invalid(f"{value!r} is not an on/off option value")


def cv_hex(value: int | str) -> int:
    """Convert string with possible hex number into int."""
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise vol.Invalid(f"{value} is not a valid hex number")

    try:
        if value.lower().startswith("0x"):
            value = int(value, base=16)
        else:
            value = int(value)
    except ValueError as err:
        raise vol.Invalid(f"Could not convert '{value}' to number") from err

    return value


def cv_calibration(value: int | float | str) -> float:
    """Validate a calibration offset."""
    if isinstance(value, bool):
        raise vol.Invalid(f"invalid calibration '{value}'")

    try:
        return float(value)
    except (TypeError, ValueError) as err:
        raise vol.Invalid(f"invalid calibration '{value}'") from err


def cv_precision(value: int | str) -> int:
    """Validate the number of decimals a value is rounded to."""
    if isinstance(value, bool):
        raise vol.Invalid(f"invalid precision '{value}'")

    try:
        value = int(value)
    except (TypeError, ValueError) as err:
        raise vol.Invalid(f"invalid precision '{value}'") from err

    if not 0 <= value <= MAX_PRECISION:
        raise vol.Invalid(f"precision must be within (0..{MAX_PRECISION}) range")

    return value


def cv_ieee(value: str | t.EUI64) -> str:
    """Normalize an IEEE address into its colon separated form."""
    if isinstance(value, t.EUI64):
        return str(value)

    if not isinstance(value, str):
        raise vol.Invalid(f"{value!r} is not an IEEE address")

    if value.lower().startswith("0x"):
        digits = value[2:]
        if len(digits) != 16:
            raise vol.Invalid(f"{value!r} is not an IEEE address")
        value = ":".join(digits[i : i + 2] for i in range(0, 16, 2))

    try:
        return str(t.EUI64.convert(value))
    except ValueError as err:
        raise vol.Invalid(f"{value!r} is not an IEEE address") from err


def cv_ieee_regex(value: str | re.Pattern) -> re.Pattern:
    """Compile a regular expression matched against `0x` prefixed IEEE strings."""
    if isinstance(value, re.Pattern):
        return value

    if not isinstance(value, str):
        raise vol.Invalid(f"{value!r} is not a regular expression")

    try:
        return re.compile(value)
    except re.error as err:
        raise vol.Invalid(f"Invalid regular expression {value!r}: {err}") from err


def cv_deprecated(message: str) -> typing.Callable[[typing.Any], typing.Any]:
    """Pass a retired device option through unchanged, warning whenever it is set."""

    def warn_retired_option(value: typing.Any) -> typing.Any:
        _LOGGER.warning("Deprecated device option: %s", message)
        warnings.warn(message, DeprecationWarning, stacklevel=2)
        return value

    return warn_retired_option
