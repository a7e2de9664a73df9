"""Device definitions and the builder used by the vendor catalogs."""

from __future__ import annotations

from copy import deepcopy
import inspect
import logging
import pathlib
import re
import typing
from typing import TYPE_CHECKING, Any, Callable

import attrs
from frozendict import deepfreeze, frozendict
from zigpy.zcl import ClusterType
from zigpy.zdo import ZDO

from zigpy_devices.config.validators import cv_ieee_regex
from zigpy_devices.exceptions import DefinitionError, EndpointNotFound
from zigpy_devices.exposes import Base
from zigpy_devices.registry import DefinitionRegistry
from zigpy_devices.state import get_device_meta
from zigpy_devices.utils import application_version, device_endpoints, ieee_string

if TYPE_CHECKING:
    from zigpy.quirks import CustomCluster
    from zigpy.zcl import Cluster

    from zigpy_devices.converters import FromZigbee, Message, ToZigbee
    from zigpy_devices.extend import Extend
    from zigpy_devices.typing import (
        ConfigureStep,
        DeviceType,
        EndpointsFunction,
        ExposesFunction,
        OptionsType,
    )

_LOGGER = logging.getLogger(__name__)

UNBUILT_DEFINITION_BUILDERS: list[DefinitionBuilder] = []

EventHandler = Callable[..., Any]


def clean_model(model: str | None) -> str | None:
    """Strip the trailing NUL padding some devices add to their model string."""
    if model is None:
        return None
    return model.rstrip("\x00")


def _optional_ieee_regex(value: str | re.Pattern | None) -> re.Pattern | None:
    return None if value is None else cv_ieee_regex(value)


@attrs.define(frozen=True, kw_only=True, repr=True)
class Fingerprint:
    """Identity fields a device must match. `None` fields match anything."""

    model: str | None = attrs.field(default=None)
    manufacturer: str | None = attrs.field(default=None)
    application_version: int | None = attrs.field(default=None)
    ieee: re.Pattern | None = attrs.field(
        default=None, converter=_optional_ieee_regex
    )
    priority: int = attrs.field(default=0)

    @property
    def specificity(self) -> int:
        return sum(
            value is not None
            for value in (
                self.model,
                self.manufacturer,
                self.application_version,
                self.ieee,
            )
        )

    def matches(self, device: DeviceType) -> bool:
        if self.model is not None and clean_model(device.model) != self.model:
            return False
        if (
            self.manufacturer is not None
            and clean_model(device.manufacturer) != self.manufacturer
        ):
            return False
        if (
            self.application_version is not None
            and application_version(device) != self.application_version
        ):
            return False
        if self.ieee is not None and not self.ieee.match(ieee_string(device)):
            return False
        return True


@attrs.define(frozen=True, kw_only=True, repr=True)
class WhiteLabel:
    """The same device sold under another vendor or model name."""

    vendor: str = attrs.field()
    model: str = attrs.field()
    description: str | None = attrs.field(default=None)
    fingerprint: tuple[Fingerprint, ...] = attrs.field(factory=tuple, converter=tuple)


@attrs.define(frozen=True, kw_only=True, repr=True)
class DefinitionMeta:
    """Flags changing how the generic converters treat a device."""

    multi_endpoint: bool = attrs.field(default=False)
    multi_endpoint_skip: tuple[str, ...] = attrs.field(factory=tuple, converter=tuple)
    cover_inverted: bool = attrs.field(default=False)
    battery_voltage_to_percentage: str | frozendict | None = attrs.field(
        default=None, converter=deepfreeze
    )
    battery_dont_divide_percentage: bool = attrs.field(default=False)
    disable_default_response: bool = attrs.field(default=False)
    publish_duplicate_transaction: bool = attrs.field(default=False)

    def merge(self, overrides: typing.Mapping[str, Any]) -> DefinitionMeta:
        """Returns a copy with the given fields replaced, skip lists are joined."""
        overrides = dict(overrides)
        if "multi_endpoint_skip" in overrides:
            overrides["multi_endpoint_skip"] = tuple(
                dict.fromkeys(
                    (*self.multi_endpoint_skip, *overrides["multi_endpoint_skip"])
                )
            )
        return attrs.evolve(self, **overrides)


def _lowest_endpoint(device: DeviceType):
    endpoints = device_endpoints(device)
    if not endpoints:
        raise EndpointNotFound(f"Device {device} has no endpoints")
    return endpoints[0]


@attrs.define(frozen=True, kw_only=True, repr=True)
class AddsCluster:
    """Adds a cluster to an endpoint unless the endpoint already has it."""

    cluster: int | type[Cluster | CustomCluster] = attrs.field()
    endpoint_id: int | None = attrs.field(default=None)
    cluster_type: ClusterType = attrs.field(default=ClusterType.Server)

    def __call__(self, device: DeviceType) -> None:
        if self.endpoint_id is None:
            endpoint = _lowest_endpoint(device)
        elif self.endpoint_id in device.endpoints:
            endpoint = device.endpoints[self.endpoint_id]
        else:
            endpoint = device.add_endpoint(self.endpoint_id)

        if self.cluster_type == ClusterType.Server:
            clusters, add_cluster = endpoint.in_clusters, endpoint.add_input_cluster
        else:
            clusters, add_cluster = endpoint.out_clusters, endpoint.add_output_cluster

        if isinstance(self.cluster, int):
            cluster_id, cluster = self.cluster, None
        else:
            cluster_id = self.cluster.cluster_id
            cluster = self.cluster(
                endpoint, is_server=self.cluster_type == ClusterType.Server
            )

        if cluster_id in clusters:
            return

        add_cluster(cluster_id, cluster)


@attrs.define(frozen=True, kw_only=True, repr=True)
class ReplacesCluster:
    """Replaces every occurrence of a cluster with a custom cluster class."""

    cluster: type[Cluster | CustomCluster] = attrs.field()
    cluster_types: tuple[ClusterType, ...] = attrs.field(
        default=(ClusterType.Server, ClusterType.Client), converter=tuple
    )
    endpoint_id: int | None = attrs.field(default=None)
    add_if_missing: bool = attrs.field(default=False)

    def __call__(self, device: DeviceType) -> None:
        cluster_id = self.cluster.cluster_id
        replaced = False

        for endpoint_id, endpoint in device.endpoints.items():
            if isinstance(endpoint, ZDO):
                continue
            if self.endpoint_id is not None and endpoint_id != self.endpoint_id:
                continue
            if (
                ClusterType.Server in self.cluster_types
                and cluster_id in endpoint.in_clusters
            ):
                endpoint.in_clusters.pop(cluster_id)
                endpoint.add_input_cluster(cluster_id, self.cluster(endpoint))
                replaced = True
            if (
                ClusterType.Client in self.cluster_types
                and cluster_id in endpoint.out_clusters
            ):
                endpoint.out_clusters.pop(cluster_id)
                endpoint.add_output_cluster(
                    cluster_id, self.cluster(endpoint, is_server=False)
                )
                replaced = True

        if not replaced and self.add_if_missing:
            AddsCluster(
                cluster=self.cluster,
                endpoint_id=self.endpoint_id,
                cluster_type=self.cluster_types[0],
            )(device)


ExposeItem = typing.Union[Base, "ExposesFunction"]


@attrs.define(frozen=True, kw_only=True, repr=True)
class Definition:
    """Everything needed to talk to one device model."""

    model: str = attrs.field()
    vendor: str = attrs.field()
    description: str = attrs.field()
    zigbee_model: tuple[str, ...] = attrs.field(factory=tuple, converter=tuple)
    fingerprint: tuple[Fingerprint, ...] = attrs.field(factory=tuple, converter=tuple)
    from_zigbee: tuple[FromZigbee, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    to_zigbee: tuple[ToZigbee, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    exposes: tuple[ExposeItem, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    configure: tuple[ConfigureStep, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    endpoint: EndpointsFunction | None = attrs.field(default=None, repr=False)
    meta: DefinitionMeta = attrs.field(factory=DefinitionMeta)
    white_label: tuple[WhiteLabel, ...] = attrs.field(factory=tuple, converter=tuple)
    ota: bool = attrs.field(default=False)
    on_event: tuple[EventHandler, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    options: tuple[Base, ...] = attrs.field(factory=tuple, converter=tuple, repr=False)
    adds: tuple[AddsCluster | ReplacesCluster, ...] = attrs.field(
        factory=tuple, converter=tuple, repr=False
    )
    definition_file: pathlib.Path | None = attrs.field(
        default=None, eq=False, repr=False
    )
    definition_file_line: int | None = attrs.field(default=None, eq=False, repr=False)

    def get_exposes(
        self, device: DeviceType | None = None, options: OptionsType | None = None
    ) -> list[Base]:
        """Exposes for a device, or for a dummy device when `device` is None.

        Static exposes are copied, so callers may freely modify the result.
        """
        options = options or {}
        exposes: list[Base] = []
        for item in self.exposes:
            if isinstance(item, Base):
                exposes.append(item.clone())
            else:
                exposes.extend(item(device, options))
        return exposes

    def get_endpoints(self, device: DeviceType | None) -> dict[str, int]:
        if self.endpoint is None:
            return {}
        return dict(self.endpoint(device))

    def get_options(self) -> list[Base]:
        """Options of the definition and of its converters, without duplicates."""
        seen: set[str | None] = set()
        options: list[Base] = []
        converters = (*self.from_zigbee, *self.to_zigbee)
        for option in (
            *self.options,
            *(opt for converter in converters for opt in converter.options),
        ):
            if option.name in seen:
                continue
            seen.add(option.name)
            options.append(option.clone())
        return options

    def setup_device(self, device: DeviceType) -> DeviceType:
        """Apply the cluster additions and replacements to a device."""
        for add in self.adds:
            add(device)
        return device

    async def configure_device(self, device: DeviceType) -> None:
        _LOGGER.debug("Configuring %s as %s", device.ieee, self.model)
        for step in self.configure:
            await step(device, self)
        get_device_meta(device).configured = True

    async def handle_event(
        self,
        event: str,
        data: dict[str, Any],
        device: DeviceType | None,
        options: OptionsType | None = None,
    ) -> None:
        for handler in self.on_event:
            result = handler(event, data, device, options or {}, self)
            if inspect.isawaitable(result):
                await result

    def find_from_zigbee(self, msg: Message) -> list[FromZigbee]:
        return [converter for converter in self.from_zigbee if converter.matches(msg)]

    def find_to_zigbee(self, key: str) -> ToZigbee | None:
        for converter in self.to_zigbee:
            if key in converter.key:
                return converter
        return None


DEFINITION_REGISTRY = DefinitionRegistry()


def _endpoints_function(
    explicit: EndpointsFunction | None, maps: list[dict[str, int]]
) -> EndpointsFunction | None:
    if explicit is None and not maps:
        return None

    merged = frozendict({name: ep for mapping in maps for name, ep in mapping.items()})

    def endpoints(device: DeviceType | None) -> dict[str, int]:
        result = dict(merged)
        if explicit is not None:
            result.update(explicit(device))
        return result

    return endpoints


class DefinitionBuilder:
    """Builds a `Definition` one fluent call at a time."""

    def __init__(
        self,
        model: str,
        vendor: str,
        description: str,
        registry: DefinitionRegistry = DEFINITION_REGISTRY,
    ) -> None:
        self.registry: DefinitionRegistry = registry
        self.model = model
        self.vendor = vendor
        self.description = description
        self.zigbee_models: list[str] = []
        self.fingerprints: list[Fingerprint] = []
        self.from_zigbee_converters: list[FromZigbee] = []
        self.to_zigbee_converters: list[ToZigbee] = []
        self.exposes_items: list[ExposeItem] = []
        self.extends: list[Extend] = []
        self.configure_steps: list[ConfigureStep] = []
        self.endpoint_function: EndpointsFunction | None = None
        self.meta_overrides: dict[str, Any] = {}
        self.white_labels: list[WhiteLabel] = []
        self.supports_ota: bool = False
        self.event_handlers: list[EventHandler] = []
        self.option_exposes: list[Base] = []
        self.cluster_changes: list[AddsCluster | ReplacesCluster] = []

        stack: list[inspect.FrameInfo] = inspect.stack()
        caller: inspect.FrameInfo = stack[1]
        self.definition_file = pathlib.Path(caller.filename)
        self.definition_file_line = caller.lineno

        UNBUILT_DEFINITION_BUILDERS.append(self)

    def zigbee_model(self, *models: str) -> DefinitionBuilder:
        """Add model ids reported by the device and returns self."""
        self.zigbee_models.extend(models)
        return self

    def fingerprint(
        self,
        model: str | None = None,
        manufacturer: str | None = None,
        application_version: int | None = None,
        ieee: str | None = None,
        priority: int = 0,
    ) -> DefinitionBuilder:
        """Add a fingerprint and returns self."""
        self.fingerprints.append(
            Fingerprint(
                model=model,
                manufacturer=manufacturer,
                application_version=application_version,
                ieee=ieee,
                priority=priority,
            )
        )
        return self

    def from_zigbee(self, *converters: FromZigbee) -> DefinitionBuilder:
        """Add inbound converters and returns self."""
        self.from_zigbee_converters.extend(converters)
        return self

    def to_zigbee(self, *converters: ToZigbee) -> DefinitionBuilder:
        """Add outbound converters and returns self."""
        self.to_zigbee_converters.extend(converters)
        return self

    def exposes(self, *exposes: ExposeItem) -> DefinitionBuilder:
        """Add exposes and returns self.

        Each item is either an expose or a function of `(device, options)` that
        returns a list of exposes. A device of None stands for a dummy device.
        """
        self.exposes_items.extend(exposes)
        return self

    def extend(self, *extends: Extend) -> DefinitionBuilder:
        """Add extends and returns self."""
        self.extends.extend(extends)
        return self

    def configure(self, *steps: ConfigureStep) -> DefinitionBuilder:
        """Add configure steps and returns self."""
        self.configure_steps.extend(steps)
        return self

    def endpoints(
        self, endpoints: dict[str, int] | EndpointsFunction
    ) -> DefinitionBuilder:
        """Set the endpoint name map and returns self."""
        if callable(endpoints):
            self.endpoint_function = endpoints
        else:
            mapping = frozendict(endpoints)
            self.endpoint_function = lambda device: dict(mapping)
        return self

    endpoint = endpoints

    def meta(self, **kwargs: Any) -> DefinitionBuilder:
        """Set definition meta flags and returns self."""
        self.meta_overrides.update(kwargs)
        return self

    def white_label(
        self,
        vendor: str,
        model: str,
        description: str | None = None,
        fingerprint: list[Fingerprint] | None = None,
    ) -> DefinitionBuilder:
        """Add a white label and returns self."""
        self.white_labels.append(
            WhiteLabel(
                vendor=vendor,
                model=model,
                description=description,
                fingerprint=fingerprint or (),
            )
        )
        return self

    def ota(self, ota: bool = True) -> DefinitionBuilder:
        """Mark the device as OTA updatable and returns self."""
        self.supports_ota = ota
        return self

    def on_event(self, handler: EventHandler) -> DefinitionBuilder:
        """Add an event handler and returns self."""
        self.event_handlers.append(handler)
        return self

    def options(self, *options: Base) -> DefinitionBuilder:
        """Add option exposes and returns self."""
        self.option_exposes.extend(options)
        return self

    def adds(self, *changes: AddsCluster | ReplacesCluster) -> DefinitionBuilder:
        """Add cluster additions or replacements and returns self."""
        self.cluster_changes.extend(changes)
        return self

    def build(self) -> Definition:
        """Merge the extends into a `Definition`."""
        if not self.zigbee_models and not self.fingerprints:
            raise DefinitionError(
                f"Definition {self.model!r} needs a zigbee model or a fingerprint"
            )

        from_zigbee = list(self.from_zigbee_converters)
        to_zigbee = list(self.to_zigbee_converters)
        exposes = list(self.exposes_items)
        configure = list(self.configure_steps)
        event_handlers = list(self.event_handlers)
        options = list(self.option_exposes)
        adds = list(self.cluster_changes)
        endpoint_maps: list[dict[str, int]] = []
        meta = DefinitionMeta()

        for extend in self.extends:
            from_zigbee.extend(extend.from_zigbee)
            to_zigbee.extend(extend.to_zigbee)
            exposes.extend(extend.exposes)
            configure.extend(extend.configure)
            event_handlers.extend(extend.on_event)
            options.extend(extend.options)
            adds.extend(extend.adds)
            if extend.endpoints:
                endpoint_maps.append(dict(extend.endpoints))
            if extend.meta:
                meta = meta.merge(extend.meta)

        meta = meta.merge(self.meta_overrides)

        return Definition(
            model=self.model,
            vendor=self.vendor,
            description=self.description,
            zigbee_model=self.zigbee_models,
            fingerprint=self.fingerprints,
            from_zigbee=from_zigbee,
            to_zigbee=to_zigbee,
            exposes=exposes,
            configure=configure,
            endpoint=_endpoints_function(self.endpoint_function, endpoint_maps),
            meta=meta,
            white_label=self.white_labels,
            ota=self.supports_ota,
            on_event=event_handlers,
            options=options,
            adds=adds,
            definition_file=self.definition_file,
            definition_file_line=self.definition_file_line,
        )

    def add_to_registry(self) -> Definition:
        """Build the definition and add it to the registry."""
        definition = self.build()
        self.registry.add(definition)

        if self in UNBUILT_DEFINITION_BUILDERS:
            UNBUILT_DEFINITION_BUILDERS.remove(self)

        return definition

    def clone(
        self,
        model: str | None = None,
        description: str | None = None,
        omit_identity: bool = True,
    ) -> DefinitionBuilder:
        """Clone this builder, optionally without its models and fingerprints."""
        new_builder = deepcopy(self, {id(self.registry): self.registry})
        if model is not None:
            new_builder.model = model
        if description is not None:
            new_builder.description = description
        if omit_identity:
            new_builder.zigbee_models = []
            new_builder.fingerprints = []
        UNBUILT_DEFINITION_BUILDERS.append(new_builder)
        return new_builder


def get_definition(device: DeviceType) -> Definition | None:
    """Find the definition of a device in the default registry."""
    return DEFINITION_REGISTRY.get_definition(device)
