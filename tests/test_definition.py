from __future__ import annotations

import pathlib
from unittest.mock import AsyncMock, MagicMock

import pytest
from zigpy.quirks import CustomCluster
from zigpy.zcl import ClusterType
from zigpy.zcl.clusters.general import Basic, OnOff, Scenes

from tests.conftest import make_device
from zigpy_devices.converters import FromZigbee, ToZigbee
import zigpy_devices.definition as definition_module
from zigpy_devices.definition import (
    AddsCluster,
    DefinitionBuilder,
    DefinitionMeta,
    Fingerprint,
    ReplacesCluster,
    clean_model,
)
from zigpy_devices.exceptions import DefinitionError, EndpointNotFound
from zigpy_devices.exposes import Access
from zigpy_devices.exposes import options as exposes_options
from zigpy_devices.exposes import presets as e
from zigpy_devices.extend import Extend
from zigpy_devices.state import get_device_meta


@pytest.fixture(autouse=True)
def restore_unbuilt_builders():
    builders = list(definition_module.UNBUILT_DEFINITION_BUILDERS)
    yield
    definition_module.UNBUILT_DEFINITION_BUILDERS[:] = builders


class CustomOnOff(CustomCluster, OnOff):
    pass


def _convert(definition, msg, options, meta):
    return {"state": "ON"}


def test_clean_model():
    assert clean_model("lumi.sensor\x00\x00") == "lumi.sensor"
    assert clean_model(None) is None


def test_fingerprint_specificity_and_match():
    device = make_device(
        {1: ([Basic.cluster_id], [])}, model="GreenPower_254", manufacturer="Acme"
    )
    basic = device.endpoints[1].in_clusters[Basic.cluster_id]
    basic.update_attribute(Basic.AttributeDefs.app_version.id, 3)

    assert Fingerprint().specificity == 0
    assert Fingerprint(model="GreenPower_254", ieee=r"^0x08.*$").specificity == 2

    assert Fingerprint(model="GreenPower_254").matches(device)
    assert Fingerprint(manufacturer="Acme", application_version=3).matches(device)
    assert Fingerprint(ieee=r"^0x0807060504030201$").matches(device)

    assert not Fingerprint(model="Other").matches(device)
    assert not Fingerprint(application_version=4).matches(device)
    assert not Fingerprint(ieee=r"^0x00000000e.......$").matches(device)


def test_build_requires_identity(registry):
    builder = DefinitionBuilder("TEST", "Test", "Test device", registry=registry)

    with pytest.raises(DefinitionError):
        builder.build()

    assert builder in definition_module.UNBUILT_DEFINITION_BUILDERS


def test_builder_add_to_registry(registry):
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST-1", "TEST-2")
        .fingerprint(model="TEST", manufacturer="Test", priority=1)
        .exposes(e.switch())
        .ota()
        .add_to_registry()
    )

    assert definition in registry
    assert len(registry) == 1
    assert definition.zigbee_model == ("TEST-1", "TEST-2")
    assert definition.fingerprint == (
        Fingerprint(model="TEST", manufacturer="Test", priority=1),
    )
    assert definition.ota is True
    assert definition.definition_file == pathlib.Path(__file__)
    assert definition.definition_file_line is not None
    assert not any(
        builder.model == "TEST"
        for builder in definition_module.UNBUILT_DEFINITION_BUILDERS
    )


def test_builder_merges_extends(registry):
    on_off = FromZigbee(
        cluster=OnOff.cluster_id, type="attributeReport", convert=_convert
    )
    state = ToZigbee(key=("state",))
    configure = AsyncMock()

    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .extend(
            Extend(
                from_zigbee=[on_off],
                to_zigbee=[state],
                exposes=[e.switch().with_endpoint("l1")],
                configure=[configure],
                meta={"multi_endpoint": True, "multi_endpoint_skip": ["power"]},
                endpoints={"l1": 1},
            ),
            Extend(endpoints={"l2": 2}, meta={"multi_endpoint_skip": ["energy"]}),
        )
        .endpoints({"l3": 3})
        .meta(cover_inverted=True, multi_endpoint_skip=["power", "voltage"])
        .build()
    )

    assert definition.from_zigbee == (on_off,)
    assert definition.to_zigbee == (state,)
    assert definition.configure == (configure,)
    assert definition.get_endpoints(None) == {"l1": 1, "l2": 2, "l3": 3}
    assert definition.meta == DefinitionMeta(
        multi_endpoint=True,
        multi_endpoint_skip=("power", "energy", "voltage"),
        cover_inverted=True,
    )


def test_builder_clone(registry):
    builder = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .exposes(e.temperature())
    )
    clone = builder.clone(model="TEST2", description="Clone").zigbee_model("TEST2")
    builder.exposes(e.humidity())

    original = builder.add_to_registry()
    cloned = clone.add_to_registry()

    assert cloned.model == "TEST2"
    assert cloned.description == "Clone"
    assert cloned.zigbee_model == ("TEST2",)
    assert [expose.name for expose in cloned.get_exposes()] == ["temperature"]
    assert [expose.name for expose in original.get_exposes()] == [
        "temperature",
        "humidity",
    ]
    assert clone.registry is registry


def test_builder_clone_keep_identity(registry):
    builder = DefinitionBuilder(
        "TEST", "Test", "Test device", registry=registry
    ).zigbee_model("TEST")

    clone = builder.clone(omit_identity=False)
    assert clone.zigbee_models == ["TEST"]


def test_get_exposes(registry):
    def dynamic(device, options):
        count = 2 if device is None else len(device.endpoints) - 1
        return [e.switch().with_endpoint(f"l{i}") for i in range(1, count + 1)]

    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .exposes(e.linkquality(), dynamic)
        .build()
    )

    exposes = definition.get_exposes()
    assert [expose.property for expose in exposes] == ["linkquality", None, None]
    assert [expose.endpoint for expose in exposes[1:]] == ["l1", "l2"]

    # static exposes are copied
    exposes[0].with_endpoint("x")
    assert definition.get_exposes()[0].property == "linkquality"

    device = make_device({1: ([], []), 2: ([], []), 3: ([], [])})
    assert len(definition.get_exposes(device)) == 4


def test_get_options_dedupes(registry):
    converter = FromZigbee(
        cluster=OnOff.cluster_id,
        type="attributeReport",
        convert=_convert,
        options=(exposes_options.transition(), exposes_options.invert_cover()),
    )
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .from_zigbee(converter)
        .options(exposes_options.transition())
        .build()
    )

    assert [option.name for option in definition.get_options()] == [
        "transition",
        "invert_cover",
    ]


def test_get_endpoints_without_map(registry):
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .build()
    )
    assert definition.get_endpoints(None) == {}


def test_callable_endpoints(registry):
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .endpoint(lambda device: {"top": 1, "bottom": 2})
        .build()
    )
    assert definition.get_endpoints(None) == {"top": 1, "bottom": 2}


async def test_configure_device(registry):
    calls = []

    async def first(device, definition):
        calls.append(("first", definition.model))

    async def second(device, definition):
        calls.append(("second", definition.model))

    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .configure(first, second)
        .build()
    )
    device = make_device({1: ([], [])})

    await definition.configure_device(device)

    assert calls == [("first", "TEST"), ("second", "TEST")]
    assert get_device_meta(device).configured is True


async def test_handle_event(registry):
    sync_handler = MagicMock(return_value=None)
    async_handler = AsyncMock()

    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .on_event(sync_handler)
        .on_event(async_handler)
        .build()
    )
    device = make_device({1: ([], [])})

    await definition.handle_event("start", {"foo": 1}, device)

    sync_handler.assert_called_once_with("start", {"foo": 1}, device, {}, definition)
    async_handler.assert_awaited_once_with(
        "start", {"foo": 1}, device, {}, definition
    )


def test_find_converters(registry):
    on_off = FromZigbee(
        cluster=OnOff.cluster_id,
        type=("attributeReport", "readResponse"),
        convert=_convert,
    )
    state = ToZigbee(key=("state", "on_time"))
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .from_zigbee(on_off)
        .to_zigbee(state)
        .build()
    )

    assert definition.find_to_zigbee("on_time") is state
    assert definition.find_to_zigbee("brightness") is None


def test_adds_cluster():
    device = make_device({1: ([Basic.cluster_id], []), 2: ([], [])})

    AddsCluster(cluster=Scenes.cluster_id)(device)
    AddsCluster(
        cluster=OnOff.cluster_id, endpoint_id=2, cluster_type=ClusterType.Client
    )(device)
    AddsCluster(cluster=OnOff.cluster_id, endpoint_id=5)(device)

    assert Scenes.cluster_id in device.endpoints[1].in_clusters
    assert OnOff.cluster_id in device.endpoints[2].out_clusters
    assert OnOff.cluster_id in device.endpoints[5].in_clusters


def test_adds_cluster_keeps_existing():
    device = make_device({1: ([OnOff.cluster_id], [])})
    existing = device.endpoints[1].in_clusters[OnOff.cluster_id]

    AddsCluster(cluster=CustomOnOff)(device)

    assert device.endpoints[1].in_clusters[OnOff.cluster_id] is existing


def test_adds_cluster_without_endpoints():
    with pytest.raises(EndpointNotFound):
        AddsCluster(cluster=OnOff.cluster_id)(make_device())


def test_replaces_cluster():
    device = make_device(
        {1: ([OnOff.cluster_id], [OnOff.cluster_id]), 2: ([OnOff.cluster_id], [])}
    )

    ReplacesCluster(cluster=CustomOnOff, endpoint_id=1)(device)

    assert isinstance(device.endpoints[1].in_clusters[OnOff.cluster_id], CustomOnOff)
    assert isinstance(device.endpoints[1].out_clusters[OnOff.cluster_id], CustomOnOff)
    assert not isinstance(
        device.endpoints[2].in_clusters[OnOff.cluster_id], CustomOnOff
    )


def test_replaces_cluster_add_if_missing():
    device = make_device({1: ([Basic.cluster_id], [])})

    ReplacesCluster(cluster=CustomOnOff)(device)
    assert OnOff.cluster_id not in device.endpoints[1].in_clusters

    ReplacesCluster(cluster=CustomOnOff, add_if_missing=True)(device)
    assert isinstance(device.endpoints[1].in_clusters[OnOff.cluster_id], CustomOnOff)


def test_setup_device(registry):
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .adds(AddsCluster(cluster=Scenes.cluster_id))
        .extend(Extend(adds=[ReplacesCluster(cluster=CustomOnOff)]))
        .build()
    )
    device = make_device({1: ([OnOff.cluster_id], [])})

    assert definition.setup_device(device) is device
    assert Scenes.cluster_id in device.endpoints[1].in_clusters
    assert isinstance(device.endpoints[1].in_clusters[OnOff.cluster_id], CustomOnOff)


def test_definition_meta_merge():
    meta = DefinitionMeta(multi_endpoint_skip=["a"])
    merged = meta.merge({"multi_endpoint_skip": ["b", "a"], "multi_endpoint": True})

    assert merged.multi_endpoint_skip == ("a", "b")
    assert merged.multi_endpoint is True
    assert meta.multi_endpoint is False


def test_definition_meta_battery_curve_is_frozen():
    meta = DefinitionMeta(battery_voltage_to_percentage={"min": 2500, "max": 3000})
    assert hash(meta)
    assert meta.battery_voltage_to_percentage["min"] == 2500


def test_exposes_access_survives_build(registry):
    definition = (
        DefinitionBuilder("TEST", "Test", "Test device", registry=registry)
        .zigbee_model("TEST")
        .exposes(e.numeric("counter", Access.STATE))
        .build()
    )
    assert definition.get_exposes()[0].access == Access.STATE


def test_catalog_leaves_no_unbuilt_builders():
    import zigpy_devices.devices  # noqa: F401

    catalog = pathlib.Path(zigpy_devices.devices.__file__).parent
    assert not [
        builder
        for builder in definition_module.UNBUILT_DEFINITION_BUILDERS
        if builder.definition_file.parent == catalog
    ]
