"""Typing helpers for zigpy-devices."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

KeyValue = dict[str, Any]
OptionsType = dict[str, Any]

# pylint: disable=invalid-name
ClusterType = "Cluster"
CustomClusterType = "CustomCluster"
DefinitionType = "Definition"
DeviceType = "Device"
EndpointType = "Endpoint"
ExposeType = "Base"


class UndefinedType(enum.Enum):
    """Singleton type for use with not set sentinel values."""

    _singleton = 0


UNDEFINED = UndefinedType._singleton  # noqa: SLF001


if TYPE_CHECKING:
    import zigpy.device
    import zigpy.endpoint
    import zigpy.quirks
    import zigpy.zcl

    import zigpy_devices.definition
    import zigpy_devices.exposes

    ClusterType = zigpy.zcl.Cluster
    CustomClusterType = zigpy.quirks.CustomCluster
    DefinitionType = zigpy_devices.definition.Definition
    DeviceType = zigpy.device.Device
    EndpointType = zigpy.endpoint.Endpoint
    ExposeType = zigpy_devices.exposes.Base

ConfigureStep = Callable[["DeviceType", "DefinitionType"], Awaitable[None]]
ExposesFunction = Callable[
    [Union["DeviceType", None], OptionsType], "list[ExposeType]"
]
EndpointsFunction = Callable[[Union["DeviceType", None]], "dict[str, int]"]
