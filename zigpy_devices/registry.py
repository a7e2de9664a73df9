from __future__ import annotations

import collections
import itertools
import logging
from typing import TYPE_CHECKING, Any, Iterator

import attrs

from zigpy_devices.config import CONF_EXCLUDED_MODELS, CONFIG_SCHEMA
from zigpy_devices.exceptions import MultipleDefinitionsMatchException

if TYPE_CHECKING:
    from zigpy_devices.definition import Definition, Fingerprint, WhiteLabel
    from zigpy_devices.typing import DeviceType

_LOGGER = logging.getLogger(__name__)

FingerprintEntry = tuple["Fingerprint", "Definition", "WhiteLabel | None"]


def _device_model(device: DeviceType) -> str | None:
    if device.model is None:
        return None
    return device.model.rstrip("\x00")


def _as_white_label(definition: Definition, white_label: WhiteLabel) -> Definition:
    return attrs.evolve(
        definition,
        vendor=white_label.vendor,
        model=white_label.model,
        description=white_label.description or definition.description,
    )


class DefinitionRegistry:
    """Definitions indexed by zigbee model and by fingerprint model."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        config = CONFIG_SCHEMA(config or {})
        self._excluded_models: set[str] = {
            model.lower() for model in config[CONF_EXCLUDED_MODELS]
        }
        self._definitions: list[Definition] = []
        self._by_zigbee_model: dict[str, list[Definition]] = collections.defaultdict(
            list
        )
        self._by_fingerprint_model: dict[str | None, list[FingerprintEntry]] = (
            collections.defaultdict(list)
        )

    def add(self, definition: Definition) -> None:
        _LOGGER.debug(
            "Adding definition %s from %s",
            definition.model,
            definition.definition_file,
        )
        self._definitions.append(definition)

        for zigbee_model in definition.zigbee_model:
            self._by_zigbee_model[zigbee_model.lower()].append(definition)

        for fingerprint in definition.fingerprint:
            self._by_fingerprint_model[fingerprint.model].append(
                (fingerprint, definition, None)
            )

        for white_label in definition.white_label:
            for fingerprint in white_label.fingerprint:
                self._by_fingerprint_model[fingerprint.model].append(
                    (fingerprint, definition, white_label)
                )

    def remove(self, definition: Definition) -> None:
        self._definitions.remove(definition)

        for zigbee_model in definition.zigbee_model:
            entries = self._by_zigbee_model[zigbee_model.lower()]
            entries.remove(definition)
            if not entries:
                del self._by_zigbee_model[zigbee_model.lower()]

        for model in list(self._by_fingerprint_model):
            entries = [
                entry
                for entry in self._by_fingerprint_model[model]
                if entry[1] is not definition
            ]
            if entries:
                self._by_fingerprint_model[model] = entries
            else:
                del self._by_fingerprint_model[model]

    def _is_excluded(self, definition: Definition) -> bool:
        return definition.model.lower() in self._excluded_models

    def get_definition(self, device: DeviceType) -> Definition | None:
        """Find the definition of a device.

        Fingerprints are checked first, the most specific one wins and
        `priority` breaks ties. Zigbee models are only consulted when no
        fingerprint matches.
        """
        model = _device_model(device)
        _LOGGER.debug(
            "Looking up definition for %s (manufacturer: %s, model: %s)",
            device.ieee,
            device.manufacturer,
            model,
        )

        candidates = itertools.chain(
            self._by_fingerprint_model.get(model, []) if model is not None else [],
            self._by_fingerprint_model.get(None, []),
        )
        matches = [
            entry
            for entry in candidates
            if entry[0].matches(device) and not self._is_excluded(entry[1])
        ]

        if matches:
            best = max((fp.specificity, fp.priority) for fp, _, _ in matches)
            top = [
                entry
                for entry in matches
                if (entry[0].specificity, entry[0].priority) == best
            ]
            definitions = {id(definition): definition for _, definition, _ in top}
            if len(definitions) > 1:
                raise MultipleDefinitionsMatchException(
                    f"Multiple definitions match {device.ieee}: "
                    f"{[d.model for d in definitions.values()]}"
                )

            _, definition, white_label = top[0]
            if white_label is not None:
                return _as_white_label(definition, white_label)
            return definition

        if model is None:
            return None

        for definition in self._by_zigbee_model.get(model.lower(), []):
            if not self._is_excluded(definition):
                return definition

        return None

    def find_by_model(self, model: str) -> Definition | None:
        """Find a definition by its model or by one of its white label models."""
        model = model.lower()
        for definition in self._definitions:
            if self._is_excluded(definition):
                continue
            if definition.model.lower() == model:
                return definition
            for white_label in definition.white_label:
                if white_label.model.lower() == model:
                    return _as_white_label(definition, white_label)
        return None

    def __contains__(self, definition: Definition) -> bool:
        return any(existing is definition for existing in self._definitions)

    def __iter__(self) -> Iterator[Definition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)
