"""Expose descriptors: the properties a device makes available to a host."""

from __future__ import annotations

import copy
import enum
from typing import Any


class Access(enum.IntFlag):
    """How a host may interact with an exposed property."""

    STATE = 1
    SET = 2
    GET = 4
    STATE_SET = STATE | SET
    STATE_GET = STATE | GET
    ALL = STATE | SET | GET


def label_from_name(name: str) -> str:
    label = name.replace("_", " ")
    return label[:1].upper() + label[1:]


class Base:
    """Common fields of every expose."""

    type: str = ""

    def __init__(self) -> None:
        self.name: str | None = None
        self.label: str | None = None
        self.property: str | None = None
        self.access: Access | None = None
        self.endpoint: str | None = None
        self.description: str | None = None
        self.category: str | None = None
        self.features: list[Base] = []

    def _set_name(self, name: str, access: Access | None) -> None:
        self.name = name
        self.label = label_from_name(name)
        self.property = name
        self.access = access

    def with_endpoint(self, endpoint: str) -> Base:
        """Sets the endpoint, postfixes the property and returns self."""
        self.endpoint = endpoint
        if self.property is not None:
            self.property = f"{self.property}_{endpoint}"
        for feature in self.features:
            feature.with_endpoint(endpoint)
        return self

    def with_property(self, prop: str) -> Base:
        """Sets the property and returns self."""
        self.property = prop
        return self

    def with_access(self, access: Access) -> Base:
        """Sets the access flags and returns self."""
        self.access = access
        for feature in self.features:
            feature.with_access(access)
        return self

    def with_label(self, label: str) -> Base:
        """Sets the label and returns self."""
        self.label = label
        return self

    def with_description(self, description: str) -> Base:
        """Sets the description and returns self."""
        self.description = description
        return self

    def with_category(self, category: str) -> Base:
        """Sets the entity category and returns self."""
        self.category = category
        return self

    def with_feature(self, feature: Base) -> Base:
        """Adds a feature and returns self."""
        if self.endpoint is not None and feature.endpoint is None:
            feature.with_endpoint(self.endpoint)
        self.features.append(feature)
        return self

    def clone(self) -> Base:
        return copy.deepcopy(self)

    def _extra_dict(self) -> dict[str, Any]:
        return {}

    def as_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {"type": self.type}
        for attr in (
            "name",
            "label",
            "property",
            "endpoint",
            "description",
            "category",
        ):
            value = getattr(self, attr)
            if value is not None:
                obj[attr] = value

        if self.access is not None:
            obj["access"] = int(self.access)

        obj.update(self._extra_dict())

        if self.features:
            obj["features"] = [feature.as_dict() for feature in self.features]

        return obj

    def __repr__(self) -> str:
        return f"<{type(self).__name__} property={self.property!r}>"


class Binary(Base):
    type = "binary"

    def __init__(
        self, name: str, access: Access, value_on: Any, value_off: Any
    ) -> None:
        super().__init__()
        self._set_name(name, access)
        self.value_on = value_on
        self.value_off = value_off
        self.value_toggle: Any = None

    def with_value_toggle(self, value: Any) -> Binary:
        """Sets the toggle value and returns self."""
        self.value_toggle = value
        return self

    def _extra_dict(self) -> dict[str, Any]:
        obj = {"value_on": self.value_on, "value_off": self.value_off}
        if self.value_toggle is not None:
            obj["value_toggle"] = self.value_toggle
        return obj


class Numeric(Base):
    type = "numeric"

    def __init__(self, name: str, access: Access) -> None:
        super().__init__()
        self._set_name(name, access)
        self.unit: str | None = None
        self.value_min: float | None = None
        self.value_max: float | None = None
        self.value_step: float | None = None
        self.presets: list[dict[str, Any]] = []

    def with_unit(self, unit: str) -> Numeric:
        """Sets the unit and returns self."""
        self.unit = unit
        return self

    def with_value_min(self, value: float) -> Numeric:
        """Sets the minimum value and returns self."""
        self.value_min = value
        return self

    def with_value_max(self, value: float) -> Numeric:
        """Sets the maximum value and returns self."""
        self.value_max = value
        return self

    def with_value_step(self, value: float) -> Numeric:
        """Sets the step and returns self."""
        self.value_step = value
        return self

    def with_preset(self, name: str, value: Any, description: str) -> Numeric:
        """Adds a named preset value and returns self."""
        self.presets.append({"name": name, "value": value, "description": description})
        return self

    def _extra_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {}
        for attr in ("unit", "value_min", "value_max", "value_step"):
            value = getattr(self, attr)
            if value is not None:
                obj[attr] = value
        if self.presets:
            obj["presets"] = list(self.presets)
        return obj


class Enum(Base):
    type = "enum"

    def __init__(self, name: str, access: Access, values: list[Any]) -> None:
        super().__init__()
        self._set_name(name, access)
        self.values = list(values)

    def _extra_dict(self) -> dict[str, Any]:
        return {"values": list(self.values)}


class Text(Base):
    type = "text"

    def __init__(self, name: str, access: Access) -> None:
        super().__init__()
        self._set_name(name, access)


class List(Base):
    type = "list"

    def __init__(self, name: str, access: Access, item_type: Base) -> None:
        super().__init__()
        self._set_name(name, access)
        self.item_type = item_type

    def _extra_dict(self) -> dict[str, Any]:
        return {"item_type": self.item_type.as_dict()}


class Composite(Base):
    type = "composite"

    def __init__(self, name: str, prop: str, access: Access) -> None:
        super().__init__()
        self._set_name(name, access)
        self.property = prop

    def with_endpoint(self, endpoint: str) -> Composite:
        # Composite features keep their own property names inside the payload
        self.endpoint = endpoint
        if self.property is not None:
            self.property = f"{self.property}_{endpoint}"
        return self


class Switch(Base):
    type = "switch"

    def with_state(
        self,
        prop: str = "state",
        value_on: Any = "ON",
        value_off: Any = "OFF",
        description: str = "On/off state of the switch",
        access: Access = Access.ALL,
    ) -> Switch:
        """Adds the on/off state feature and returns self."""
        feature = (
            Binary("state", access, value_on, value_off)
            .with_value_toggle("TOGGLE")
            .with_property(prop)
            .with_description(description)
        )
        return self.with_feature(feature)


class Light(Switch):
    type = "light"

    def with_brightness(self) -> Light:
        """Adds a brightness feature and returns self."""
        feature = (
            Numeric("brightness", Access.ALL)
            .with_value_min(0)
            .with_value_max(254)
            .with_description("Brightness of this light")
        )
        return self.with_feature(feature)

    def with_color_xy(self) -> Light:
        """Adds an XY color feature and returns self."""
        feature = (
            Composite("color_xy", "color", Access.ALL)
            .with_feature(Numeric("x", Access.ALL))
            .with_feature(Numeric("y", Access.ALL))
            .with_description("Color of this light in the CIE 1931 color space (x/y)")
        )
        return self.with_feature(feature)

    def with_level_config(self) -> Light:
        """Adds the level control configuration feature and returns self."""
        feature = (
            Composite("level_config", "level_config", Access.ALL)
            .with_feature(
                Numeric("on_off_transition_time", Access.ALL)
                .with_unit("s")
                .with_description("Time in seconds to go from off to on")
            )
            .with_feature(
                Numeric("on_level", Access.ALL)
                .with_value_min(1)
                .with_value_max(254)
                .with_preset("previous", "previous", "Use previous value")
                .with_description("Brightness level when turned on")
            )
            .with_feature(
                Numeric("current_level_startup", Access.ALL)
                .with_value_min(1)
                .with_value_max(254)
                .with_preset("minimum", "minimum", "Use minimum permitted value")
                .with_preset("previous", "previous", "Use previous value")
                .with_description("Brightness level after a power failure")
            )
            .with_description("Configure genLevelCtrl")
        )
        return self.with_feature(feature)


class Cover(Base):
    type = "cover"

    def with_state(self, access: Access = Access.STATE_SET) -> Cover:
        """Adds the open/close/stop state feature and returns self."""
        return self.with_feature(Enum("state", access, ["OPEN", "CLOSE", "STOP"]))

    def with_position(self) -> Cover:
        """Adds a lift position feature and returns self."""
        feature = (
            Numeric("position", Access.ALL)
            .with_value_min(0)
            .with_value_max(100)
            .with_unit("%")
            .with_description("Position of this cover")
        )
        return self.with_feature(feature)

    def with_tilt(self) -> Cover:
        """Adds a tilt feature and returns self."""
        feature = (
            Numeric("tilt", Access.ALL)
            .with_value_min(0)
            .with_value_max(100)
            .with_unit("%")
            .with_description("Tilt of this cover")
        )
        return self.with_feature(feature)


class Climate(Base):
    type = "climate"

    def with_setpoint(
        self,
        prop: str,
        value_min: float,
        value_max: float,
        value_step: float,
        access: Access = Access.ALL,
    ) -> Climate:
        """Adds a temperature setpoint feature and returns self."""
        feature = (
            Numeric(prop, access)
            .with_value_min(value_min)
            .with_value_max(value_max)
            .with_value_step(value_step)
            .with_unit("°C")
            .with_description("Temperature setpoint")
        )
        return self.with_feature(feature)

    def with_local_temperature(self, access: Access = Access.STATE_GET) -> Climate:
        """Adds the measured temperature feature and returns self."""
        feature = (
            Numeric("local_temperature", access)
            .with_unit("°C")
            .with_description("Current temperature measured on the device")
        )
        return self.with_feature(feature)

    def with_local_temperature_calibration(
        self,
        value_min: float = -12.8,
        value_max: float = 12.7,
        value_step: float = 0.1,
        access: Access = Access.ALL,
    ) -> Climate:
        """Adds the temperature offset feature and returns self."""
        feature = (
            Numeric("local_temperature_calibration", access)
            .with_value_min(value_min)
            .with_value_max(value_max)
            .with_value_step(value_step)
            .with_unit("°C")
            .with_description("Offset to add/subtract to the local temperature")
        )
        return self.with_feature(feature)

    def with_system_mode(
        self, modes: list[str], access: Access = Access.ALL
    ) -> Climate:
        """Adds the system mode feature and returns self."""
        feature = Enum("system_mode", access, modes).with_description(
            "Mode of this device"
        )
        return self.with_feature(feature)

    def with_running_state(
        self, states: list[str], access: Access = Access.STATE_GET
    ) -> Climate:
        """Adds the running state feature and returns self."""
        feature = Enum("running_state", access, states).with_description(
            "The current running state"
        )
        return self.with_feature(feature)

    def with_pi_heating_demand(self, access: Access = Access.STATE) -> Climate:
        """Adds the heating demand feature and returns self."""
        feature = (
            Numeric("pi_heating_demand", access)
            .with_value_min(0)
            .with_value_max(100)
            .with_unit("%")
            .with_description(
                "Position of the valve (= demanded heat) where 0% is fully closed"
                " and 100% is fully open"
            )
        )
        return self.with_feature(feature)


class Fan(Base):
    type = "fan"

    def with_state(self, access: Access = Access.STATE_SET) -> Fan:
        """Adds the on/off state feature and returns self."""
        feature = Binary("state", access, "ON", "OFF").with_property("fan_state")
        return self.with_feature(feature)

    def with_modes(self, modes: list[str], access: Access = Access.ALL) -> Fan:
        """Adds the fan mode feature and returns self."""
        feature = Enum("mode", access, modes).with_property("fan_mode")
        return self.with_feature(feature)

    def with_speed(
        self, value_min: int, value_max: int, access: Access = Access.ALL
    ) -> Fan:
        """Adds the fan speed feature and returns self."""
        feature = (
            Numeric("speed", access)
            .with_value_min(value_min)
            .with_value_max(value_max)
        )
        return self.with_feature(feature)
