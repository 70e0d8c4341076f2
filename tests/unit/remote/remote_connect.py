"""Unit tests for remote viewer session establishment."""

from __future__ import annotations

import pytest

from clawconnect.remote import VncConfig, ViewerLoader, RemoteSessionClient
from clawconnect.session import ConnectionStatus
from tests.helpers.fakes import FakeViewerFactory

CONFIG = VncConfig(host="mac.tailnet.ts.net", username="alice", password="secret")


def _client(factory: FakeViewerFactory) -> RemoteSessionClient:
    return RemoteSessionClient(viewer_factory=factory)


def test_config_builds_url_and_credentials() -> None:
    config = VncConfig(host="wss://mac.local/", port=6081, password="pw", secure=True)
    assert config.host == "mac.local"
    assert config.url == "wss://mac.local:6081"
    assert config.address == "mac.local:6081"
    assert config.credentials() == {"password": "pw"}
    assert "pw" not in repr(config)


def test_config_requires_host() -> None:
    with pytest.raises(ValueError):
        VncConfig(host=" ")


def test_connect_creates_viewer_and_reports_connecting() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    target = object()

    client.connect(CONFIG, target)

    viewer = factory.latest
    assert viewer.target is target
    assert viewer.url == "ws://mac.tailnet.ts.net:6080"
    assert viewer.credentials == {"username": "alice", "password": "secret"}
    assert set(viewer.listeners) == {"connect", "disconnect", "credentialsrequired", "securityfailure"}
    assert client.is_connecting
    assert client.status_message.value == "Connecting to mac.tailnet.ts.net:6080..."
    assert client.status_kind.value == "connecting"


def test_connect_without_credentials_passes_none() -> None:
    factory = FakeViewerFactory()
    _client(factory).connect(VncConfig(host="mac.local"))
    assert factory.latest.credentials is None


def test_display_options_are_applied() -> None:
    factory = FakeViewerFactory()
    _client(factory).connect(CONFIG)
    viewer = factory.latest
    assert viewer.scale_viewport is True
    assert viewer.resize_session is False
    assert viewer.clip_viewport is True
    assert viewer.show_dot_cursor is True
    assert viewer.background == "#0a0a0f"


def test_connect_event_marks_connected() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    client.connect(CONFIG)

    factory.latest.fire("connect")

    assert client.is_connected
    assert client.status_message.value == "Connected to mac.tailnet.ts.net"
    assert client.status_kind.value == "success"
    assert client.reconnect.ever_connected


def test_clean_disconnect_is_not_an_error() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    client.connect(CONFIG)
    factory.latest.fire("connect")

    factory.latest.fire("disconnect", clean=True)

    assert client.status.value is ConnectionStatus.DISCONNECTED
    assert client.status_message.value == "Disconnected"
    assert client.status_kind.value == "info"
    assert not client.reconnect.pending


def test_unclean_drop_before_connect_is_an_error() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    client.connect(CONFIG)

    factory.latest.fire("disconnect", clean=False)

    assert client.status.value is ConnectionStatus.ERROR
    assert "check the viewer proxy" in client.status_message.value
    assert len(factory.viewers) == 1


def test_viewer_construction_failure_sets_error() -> None:
    def broken_factory(target, url, *, credentials=None):
        raise RuntimeError("no canvas")

    client = RemoteSessionClient(viewer_factory=broken_factory)
    client.connect(CONFIG)

    assert client.status.value is ConnectionStatus.ERROR
    assert client.status_message.value == "Failed to connect: no canvas"
    assert client.viewer is None


def test_missing_viewer_module_sets_error() -> None:
    client = RemoteSessionClient(loader=ViewerLoader(import_path="clawconnect_missing_viewer:RFB"))
    client.connect(CONFIG)

    assert client.status.value is ConnectionStatus.ERROR
    assert client.status_message.value.startswith("Failed to connect: Cannot import viewer module")


def test_disconnect_tears_down_viewer() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    client.connect(CONFIG)
    viewer = factory.latest
    viewer.fire("connect")

    client.disconnect()

    assert viewer.disconnected
    assert client.viewer is None
    assert client.status.value is ConnectionStatus.DISCONNECTED
    assert not client.reconnect.enabled


def test_ctrl_alt_del_and_scaling_reach_the_viewer() -> None:
    factory = FakeViewerFactory()
    client = _client(factory)
    client.send_ctrl_alt_del()  # no viewer yet
    client.connect(CONFIG)
    viewer = factory.latest

    client.send_ctrl_alt_del()
    assert viewer.ctrl_alt_del == 1

    assert client.toggle_scale_viewport() is False
    assert viewer.scale_viewport is False
    client.connect(CONFIG)
    assert factory.latest.scale_viewport is False
