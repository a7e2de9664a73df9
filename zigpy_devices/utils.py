"""Numeric, lookup and device helpers shared by converters."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import math
import numbers
from typing import TYPE_CHECKING, Any, Hashable

from zigpy.zcl import ClusterType
from zigpy.zcl.clusters.general import Basic
from zigpy.zdo import ZDO

from zigpy_devices.exceptions import ClusterNotFound, UnsupportedValue
from zigpy_devices.state import TRANSACTIONS, TransactionTracker
from zigpy_devices.typing import UNDEFINED, UndefinedType

if TYPE_CHECKING:
    from zigpy_devices.converters import Message
    from zigpy_devices.definition import Definition
    from zigpy_devices.typing import ClusterType as Cluster
    from zigpy_devices.typing import DeviceType, EndpointType

_LOGGER = logging.getLogger(__name__)

DEFAULT_PRECISION = {
    "temperature": 2,
    "device_temperature": 0,
    "humidity": 2,
    "pressure": 1,
    "soil_moisture": 2,
    "co2": 0,
    "pm25": 0,
    "illuminance": 0,
    "power": 2,
    "current": 2,
    "voltage": 2,
    "energy": 2,
}

PERCENTUAL_CALIBRATION = ("current", "energy", "power", "illuminance")


def precision_round(number: float, precision: int) -> float:
    return round(number, precision)


def calibrate_and_precision_round_options(
    number: float, options: dict[str, Any], type_: str
) -> float:
    """Apply the `{type}_calibration` and `{type}_precision` options to a value.

    Calibration is an absolute offset for most measurements and a percentage for
    current, energy, power and illuminance.
    """
    calibration = options.get(f"{type_}_calibration", 0) or 0
    if type_ in PERCENTUAL_CALIBRATION:
        number = number + round(number * calibration / 100)
    else:
        number = number + calibration

    precision = options.get(f"{type_}_precision", DEFAULT_PRECISION.get(type_, 2))
    return precision_round(number, precision)


def to_number(value: Any) -> float:
    """Coerce a user supplied value into a number."""
    if isinstance(value, bool):
        raise UnsupportedValue(f"Value {value!r} is not a number")
    if isinstance(value, numbers.Number):
        return value

    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise UnsupportedValue(f"Value {value!r} is not a number") from exc


def get_key(lookup: dict[Any, Any], value: Any, default: Any = None) -> Any:
    """Reverse lookup of a value in a dictionary."""
    for key, candidate in lookup.items():
        if candidate == value:
            return key
    return default


def get_from_lookup(
    value: Any,
    lookup: dict[Any, Any],
    default: Any | UndefinedType = UNDEFINED,
) -> Any:
    """Look up a value, matching string keys case-insensitively."""
    if isinstance(value, str):
        for key, result in lookup.items():
            if isinstance(key, str) and key.lower() == value.lower():
                return result
    elif value in lookup:
        return lookup[value]

    if default is UNDEFINED:
        raise UnsupportedValue(
            f"Value '{value}' is not allowed, expected one of {list(lookup)}"
        )
    return default


def map_number_range(
    value: float,
    from_low: float,
    from_high: float,
    to_low: float,
    to_high: float,
    precision: int = 0,
) -> float:
    mapped = to_low + (value - from_low) * (to_high - to_low) / (from_high - from_low)
    if precision == 0:
        return int(round(mapped))
    return round(mapped, precision)


def to_percentage(value: float, minimum: float, maximum: float) -> int:
    """Clamp a value to a range and express it as a rounded percentage."""
    value = min(max(value, minimum), maximum)
    return round((value - minimum) / (maximum - minimum) * 100)


def battery_voltage_to_percentage(
    voltage: float, curve: str | Mapping[str, int]
) -> int:
    """Estimate the remaining battery percentage from a voltage in mV."""
    if curve == "3V_2100":
        if voltage < 2100:
            percentage = 0
        elif voltage < 2440:
            percentage = 6 - ((2440 - voltage) * 6) / 340
        elif voltage < 2740:
            percentage = 18 - ((2740 - voltage) * 12) / 300
        elif voltage < 2900:
            percentage = 42 - ((2900 - voltage) * 24) / 160
        elif voltage < 3000:
            percentage = 100 - ((3000 - voltage) * 58) / 100
        else:
            percentage = 100
        return round(percentage)

    if curve == "3V_2500":
        return to_percentage(voltage, 2500, 3000)

    if isinstance(curve, Mapping):
        voltage = voltage + curve.get("v_offset", 0)
        return to_percentage(voltage, curve["min"], curve["max"])

    raise UnsupportedValue(f"Unknown battery curve {curve!r}")


def get_cluster(
    endpoint: EndpointType, cluster_id: int, cluster_type: ClusterType | None = None
) -> Cluster | None:
    """Find a cluster on an endpoint, checking input clusters first."""
    if cluster_type in (None, ClusterType.Server):
        if cluster_id in endpoint.in_clusters:
            return endpoint.in_clusters[cluster_id]
    if cluster_type in (None, ClusterType.Client):
        if cluster_id in endpoint.out_clusters:
            return endpoint.out_clusters[cluster_id]
    return None


def require_cluster(
    endpoint: EndpointType, cluster_id: int, cluster_type: ClusterType | None = None
) -> Cluster:
    cluster = get_cluster(endpoint, cluster_id, cluster_type)
    if cluster is None:
        raise ClusterNotFound(
            f"Endpoint {endpoint.endpoint_id} has no cluster 0x{cluster_id:04X}"
        )
    return cluster


def has_cluster(
    endpoint: EndpointType, cluster_id: int, cluster_type: ClusterType | None = None
) -> bool:
    return get_cluster(endpoint, cluster_id, cluster_type) is not None


def device_endpoints(device: DeviceType | None) -> list[EndpointType]:
    """Application endpoints of a device, sorted by id."""
    if device is None:
        return []
    return [
        endpoint
        for endpoint_id, endpoint in sorted(device.endpoints.items())
        if not isinstance(endpoint, ZDO) and endpoint_id != 0
    ]


def get_endpoint_name(msg: Message, definition: Definition) -> str:
    """Name of the endpoint a message came from, or its id as a string."""
    endpoint_id = msg.endpoint.endpoint_id
    endpoints = definition.get_endpoints(msg.device)
    return get_key(endpoints, endpoint_id, str(endpoint_id))


def postfix_with_endpoint_name(value: str, msg: Message, definition: Definition) -> str:
    if (
        value
        and definition.meta.multi_endpoint
        and value not in definition.meta.multi_endpoint_skip
    ):
        endpoints = definition.get_endpoints(msg.device)
        if endpoints:
            # endpoints missing from the map keep the bare property
            endpoint_name = get_key(endpoints, msg.endpoint.endpoint_id)
        else:
            endpoint_name = str(msg.endpoint.endpoint_id)
        if endpoint_name:
            return f"{value}_{endpoint_name}"
    return value


def ieee_string(device: DeviceType) -> str:
    """The IEEE address as `0x` followed by 16 lowercase hex digits."""
    return "0x" + str(device.ieee).replace(":", "").lower()


def application_version(device: DeviceType) -> int | None:
    for endpoint in device_endpoints(device):
        basic = endpoint.in_clusters.get(Basic.cluster_id)
        if basic is not None:
            return basic.get(Basic.AttributeDefs.app_version.name)
    return None


def has_already_processed_message(
    msg: Message,
    definition: Definition,
    transaction_id: Hashable | None | UndefinedType = UNDEFINED,
    key: Hashable | None = None,
    tracker: TransactionTracker | None = None,
) -> bool:
    """Return True if this message was already handled.

    Transactions default to the ZCL sequence number and are tracked per device
    endpoint unless another key is given.
    """
    if definition.meta.publish_duplicate_transaction:
        return False

    if transaction_id is UNDEFINED:
        transaction_id = msg.meta.get("zcl_transaction_sequence_number")

    if key is None:
        key = f"{msg.device.ieee}-{msg.endpoint.endpoint_id}"

    if tracker is None:
        tracker = TRANSACTIONS

    if tracker.seen(key, transaction_id):
        _LOGGER.debug("Skipping duplicate transaction %s for %s", transaction_id, key)
        return True
    return False


def lux_from_measured_value(value: int) -> float:
    """Convert a ZCL illuminance measured value into lux."""
    if value == 0:
        return 0
    return 10 ** ((value - 1) / 10000)


def lux_to_measured_value(value: float) -> int:
    return round(10000 * math.log10(value) + 1)
