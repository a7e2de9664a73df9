"""Converter types and the helpers that dispatch messages through them."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

import attrs

from zigpy_devices.exceptions import ConversionError, EndpointNotFound
from zigpy_devices.typing import KeyValue, OptionsType
from zigpy_devices.utils import device_endpoints

if TYPE_CHECKING:
    from zigpy_devices.typing import (
        ClusterType,
        DefinitionType,
        DeviceType,
        EndpointType,
    )

_LOGGER = logging.getLogger(__name__)

FromZigbeeResult = Union[KeyValue, None, Awaitable[Union[KeyValue, None]]]
FromZigbeeConvert = Callable[
    ["DefinitionType", "Message", OptionsType, "FromZigbeeMeta"], FromZigbeeResult
]
ToZigbeeSet = Callable[
    ["EndpointType", str, Any, "ToZigbeeMeta"], Awaitable[Union[KeyValue, None]]
]
ToZigbeeGet = Callable[["EndpointType", str, "ToZigbeeMeta"], Awaitable[None]]


def _as_tuple(value: Any) -> tuple:
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(value)
    return (value,)


@attrs.define(frozen=True, kw_only=True, repr=True)
class Message:
    """An inbound attribute report, read response or cluster command."""

    type: str = attrs.field()
    cluster: int = attrs.field()
    data: dict[str | int, Any] = attrs.field(factory=dict)
    endpoint: EndpointType = attrs.field(repr=False)
    device: DeviceType = attrs.field(repr=False)
    linkquality: int = attrs.field(default=0)
    group_id: int = attrs.field(default=0)
    meta: dict[str, Any] = attrs.field(factory=dict)

    @classmethod
    def from_cluster(
        cls,
        cluster: ClusterType,
        type: str,  # noqa: A002
        data: dict[str | int, Any],
        **kwargs: Any,
    ) -> Message:
        """Build a message for a cluster, naming the attributes the cluster knows."""
        named: dict[str | int, Any] = {}
        for key, value in data.items():
            if isinstance(key, int) and key in cluster.attributes:
                key = cluster.attributes[key].name
            named[key] = value

        return cls(
            type=type,
            cluster=cluster.cluster_id,
            data=named,
            endpoint=cluster.endpoint,
            device=cluster.endpoint.device,
            **kwargs,
        )


@attrs.define(frozen=True, kw_only=True, repr=True)
class FromZigbeeMeta:
    device: DeviceType | None = attrs.field(default=None, repr=False)
    state: dict[str, Any] = attrs.field(factory=dict)


@attrs.define(frozen=True, kw_only=True, repr=True)
class ToZigbeeMeta:
    device: DeviceType | None = attrs.field(default=None, repr=False)
    definition: DefinitionType | None = attrs.field(default=None, repr=False)
    message: dict[str, Any] = attrs.field(factory=dict)
    options: OptionsType = attrs.field(factory=dict)
    state: dict[str, Any] = attrs.field(factory=dict)
    endpoint_name: str | None = attrs.field(default=None)


@attrs.define(frozen=True, kw_only=True, repr=True)
class FromZigbee:
    """Decodes messages of the given types from one cluster."""

    cluster: int = attrs.field()
    type: tuple[str, ...] = attrs.field(converter=_as_tuple)
    convert: FromZigbeeConvert = attrs.field(repr=False)
    options: tuple = attrs.field(factory=tuple, converter=tuple, repr=False)

    def matches(self, msg: Message) -> bool:
        return msg.cluster == self.cluster and msg.type in self.type


@attrs.define(frozen=True, kw_only=True, repr=True)
class ToZigbee:
    """Encodes writes and reads of the given properties."""

    key: tuple[str, ...] = attrs.field(converter=_as_tuple)
    convert_set: ToZigbeeSet | None = attrs.field(default=None, repr=False)
    convert_get: ToZigbeeGet | None = attrs.field(default=None, repr=False)
    options: tuple = attrs.field(factory=tuple, converter=tuple, repr=False)


def from_zigbee_converter(
    cluster: int, types: str | tuple[str, ...], options: tuple = ()
) -> Callable[[FromZigbeeConvert], FromZigbee]:
    """Decorator turning a convert function into a `FromZigbee` converter."""

    def decorator(func: FromZigbeeConvert) -> FromZigbee:
        return FromZigbee(cluster=cluster, type=types, convert=func, options=options)

    return decorator


def default_endpoint(device: DeviceType) -> EndpointType:
    endpoints = device_endpoints(device)
    if not endpoints:
        raise EndpointNotFound(f"Device {device} has no endpoints")
    return endpoints[0]


async def convert_message(
    definition: DefinitionType,
    msg: Message,
    options: OptionsType | None = None,
    state: dict[str, Any] | None = None,
) -> KeyValue:
    """Run every matching inbound converter and merge their results."""
    options = options if options is not None else {}
    meta = FromZigbeeMeta(device=msg.device, state=state if state is not None else {})
    result: KeyValue = {}

    for converter in definition.find_from_zigbee(msg):
        try:
            converted = converter.convert(definition, msg, options, meta)
            if inspect.isawaitable(converted):
                converted = await converted
        except ConversionError as exc:
            _LOGGER.warning(
                "Failed to convert %s from cluster 0x%04X of %s: %s",
                msg.type,
                msg.cluster,
                definition.model,
                exc,
            )
            continue

        if converted:
            result.update(converted)

    _LOGGER.debug("Converted %s from %s into %s", msg.type, definition.model, result)
    return result


def resolve_entity(
    definition: DefinitionType, device: DeviceType, key: str
) -> tuple[EndpointType, str, str | None]:
    """Split a property such as `state_l2` into its endpoint and base property."""
    endpoints = definition.get_endpoints(device)

    # longest names first, endpoint names may contain underscores
    for name in sorted(endpoints, key=len, reverse=True):
        postfix = f"_{name}"
        if not key.endswith(postfix) or len(key) == len(postfix):
            continue
        prefix = key[: -len(postfix)]
        if not definition.find_to_zigbee(prefix):
            continue

        endpoint_id = endpoints[name]
        try:
            return device.endpoints[endpoint_id], prefix, name
        except KeyError:
            raise EndpointNotFound(
                f"Device {device} has no endpoint {endpoint_id} ({name})"
            ) from None

    return default_endpoint(device), key, None


def _find_converter(definition: DefinitionType, key: str) -> ToZigbee:
    converter = definition.find_to_zigbee(key)
    if converter is None:
        raise ConversionError(f"No converter available for '{key}'")
    return converter


async def set_value(
    definition: DefinitionType,
    device: DeviceType,
    key: str,
    value: Any,
    message: dict[str, Any] | None = None,
    options: OptionsType | None = None,
    state: dict[str, Any] | None = None,
) -> KeyValue:
    """Write a property and return the state the device is expected to have."""
    endpoint, prop, endpoint_name = resolve_entity(definition, device, key)
    converter = _find_converter(definition, prop)
    if converter.convert_set is None:
        raise ConversionError(f"'{key}' can not be set")

    meta = ToZigbeeMeta(
        device=device,
        definition=definition,
        message=message if message is not None else {key: value},
        options=options if options is not None else {},
        state=state if state is not None else {},
        endpoint_name=endpoint_name,
    )
    _LOGGER.debug("Setting %s to %r on endpoint %s", prop, value, endpoint.endpoint_id)
    result = await converter.convert_set(endpoint, prop, value, meta) or {}

    if endpoint_name is not None and "state" in result:
        result["state"] = {
            f"{name}_{endpoint_name}": state_value
            for name, state_value in result["state"].items()
        }

    return result


async def get_value(
    definition: DefinitionType,
    device: DeviceType,
    key: str,
    options: OptionsType | None = None,
    state: dict[str, Any] | None = None,
) -> None:
    """Request a fresh value of a property from the device."""
    endpoint, prop, endpoint_name = resolve_entity(definition, device, key)
    converter = _find_converter(definition, prop)
    if converter.convert_get is None:
        raise ConversionError(f"'{key}' can not be read")

    meta = ToZigbeeMeta(
        device=device,
        definition=definition,
        message={key: None},
        options=options if options is not None else {},
        state=state if state is not None else {},
        endpoint_name=endpoint_name,
    )
    _LOGGER.debug("Reading %s from endpoint %s", prop, endpoint.endpoint_id)
    await converter.convert_get(endpoint, prop, meta)
