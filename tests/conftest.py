"""Common fixtures."""
from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
import zigpy.device
import zigpy.endpoint
import zigpy.types as t

from zigpy_devices.converters import Message
from zigpy_devices.definition import Definition, DefinitionMeta, DefinitionRegistry
from zigpy_devices.state import DEVICE_META, TRANSACTIONS

CLUSTER_IO = (
    "bind",
    "configure_reporting",
    "read_attributes",
    "write_attributes",
    "write_attributes_raw",
    "command",
    "client_command",
)


class FailOnBadFormattingHandler(logging.Handler):
    def emit(self, record):
        try:
            record.msg % record.args
        except Exception as e:
            pytest.fail(
                f"Failed to format log message {record.msg!r} with {record.args!r}: {e}"
            )


@pytest.fixture(autouse=True)
def raise_on_bad_log_formatting():
    handler = FailOnBadFormattingHandler()

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    try:
        yield
    finally:
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def clear_device_state():
    DEVICE_META.clear()
    TRANSACTIONS.clear()
    yield
    DEVICE_META.clear()
    TRANSACTIONS.clear()


@pytest.fixture
def registry():
    return DefinitionRegistry()


def make_ieee(start=0):
    return t.EUI64(map(t.uint8_t, range(start, start + 8)))


def mock_cluster_io(cluster):
    """Replace everything that would talk to the network with async mocks."""
    for name in CLUSTER_IO:
        setattr(cluster, name, AsyncMock(return_value=[]))
    cluster.read_attributes = AsyncMock(return_value=({}, {}))
    return cluster


def mock_device_io(device):
    for endpoint_id, endpoint in device.endpoints.items():
        if endpoint_id == 0:
            continue
        for cluster in endpoint.in_clusters.values():
            mock_cluster_io(cluster)
        for cluster in endpoint.out_clusters.values():
            mock_cluster_io(cluster)
    return device


def make_device(
    endpoints=None,
    model=None,
    manufacturer=None,
    ieee=None,
    nwk=0x1234,
    channel=15,
):
    """A device with `{endpoint_id: (input_clusters, output_clusters)}`."""
    app = MagicMock()
    # keep zigpy from attaching database listeners to new clusters
    app._dblistener = None
    app.state.network_info.channel = channel

    device = zigpy.device.Device(app, ieee or make_ieee(1), t.NWK(nwk))
    device.model = model
    device.manufacturer = manufacturer

    for endpoint_id, (inputs, outputs) in (endpoints or {}).items():
        endpoint = device.add_endpoint(endpoint_id)
        endpoint.status = zigpy.endpoint.Status.ZDO_INIT
        endpoint.profile_id = 260
        for cluster_id in inputs:
            endpoint.add_input_cluster(cluster_id)
        for cluster_id in outputs:
            endpoint.add_output_cluster(cluster_id)

    return mock_device_io(device)


def make_message(device, endpoint_id, cluster_id, data, type_="attributeReport", **kw):
    endpoint = device.endpoints[endpoint_id]
    if cluster_id in endpoint.in_clusters:
        cluster = endpoint.in_clusters[cluster_id]
    else:
        cluster = endpoint.out_clusters[cluster_id]
    return Message.from_cluster(cluster, type_, data, **kw)


def make_definition(
    endpoints=None, from_zigbee=(), to_zigbee=(), model="TEST", **meta
):
    """A definition built directly, without going through a registry."""
    return Definition(
        model=model,
        vendor="Test",
        description="Test device",
        zigbee_model=[model],
        from_zigbee=from_zigbee,
        to_zigbee=to_zigbee,
        meta=DefinitionMeta(**meta),
        endpoint=None if endpoints is None else (lambda device: dict(endpoints)),
    )
