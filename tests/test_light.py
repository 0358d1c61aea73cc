from __future__ import annotations

import pytest

from huelight.core.errors import BridgeConnectError, LightDecodeError, LightIndexError
from huelight.core.light import Light, apply_patch, fetch_by_index
from huelight.core.model import LightPatch


def test_fetch_by_index_decodes_light(bridge) -> None:
    light = fetch_by_index(bridge, 2)

    assert isinstance(light, Light)
    assert light.index == 2
    assert light.bridge is bridge
    assert light.name == "Desk"
    assert light.state.on is True
    assert light.state.bri == 120
    assert light.state.xy == (0.3227, 0.329)
    assert light.state.reachable is True
    assert light.modelid == "LCT001"
    assert bridge.calls == [("get", "/api/testuser/lights/2", None)]


def test_fetch_by_index_detects_unavailable_marker(bridge) -> None:
    with pytest.raises(LightIndexError):
        fetch_by_index(bridge, 7)


def test_fetch_by_index_marker_anywhere_in_body_fails(bridge) -> None:
    bridge.lights[1]["name"] = "Lamp not available today"

    with pytest.raises(LightIndexError):
        fetch_by_index(bridge, 1)


def test_fetch_by_index_rejects_non_positive_index_without_request(bridge) -> None:
    with pytest.raises(LightIndexError):
        fetch_by_index(bridge, 0)
    assert bridge.calls == []


def test_fetch_by_index_invalid_json(monkeypatch: pytest.MonkeyPatch, bridge) -> None:
    monkeypatch.setattr(bridge, "get", lambda path: b"<html>gateway error</html>")

    with pytest.raises(LightDecodeError):
        fetch_by_index(bridge, 1)


def test_transport_error_propagates_unchanged(bridge) -> None:
    bridge.fail_get.add(1)

    with pytest.raises(BridgeConnectError, match="connection dropped"):
        fetch_by_index(bridge, 1)


def test_apply_patch_puts_then_rereads(bridge) -> None:
    light = fetch_by_index(bridge, 1)
    bridge.calls.clear()

    apply_patch(light, LightPatch(on=True, bri=80))

    assert bridge.calls == [
        ("put", "/api/testuser/lights/1/state", {"on": True, "bri": 80}),
        ("get", "/api/testuser/lights/1", None),
    ]
    assert light.state.on is True
    assert light.state.bri == 80


def test_apply_patch_preserves_identity(bridge) -> None:
    light = fetch_by_index(bridge, 1)

    for patch in (LightPatch(on=True), LightPatch(on=True, hue=1000, sat=200), LightPatch(on=True, ct=250)):
        apply_patch(light, patch)
        assert light.state.on is True
        assert light.index == 1
        assert light.bridge is bridge


def test_apply_patch_mirrors_server_state_not_the_patch(monkeypatch: pytest.MonkeyPatch, bridge) -> None:
    light = fetch_by_index(bridge, 1)
    original_put = bridge.put

    def put_then_external_change(path, payload):
        body = original_put(path, payload)
        bridge.lights[1]["state"]["bri"] = 10
        bridge.lights[1]["name"] = "Renamed elsewhere"
        return body

    monkeypatch.setattr(bridge, "put", put_then_external_change)
    apply_patch(light, LightPatch(on=True, bri=200))

    assert light.state.bri == 10
    assert light.name == "Renamed elsewhere"


def test_apply_patch_write_failure_leaves_mirror_untouched(bridge) -> None:
    light = fetch_by_index(bridge, 1)
    before = light.snapshot
    bridge.fail_put = True

    with pytest.raises(BridgeConnectError):
        apply_patch(light, LightPatch(on=True))

    assert light.snapshot is before
    assert [verb for verb, _, _ in bridge.calls].count("get") == 1


def test_apply_patch_reread_failure_is_reported(bridge) -> None:
    light = fetch_by_index(bridge, 1)
    before = light.snapshot
    bridge.fail_get.add(1)

    with pytest.raises(BridgeConnectError):
        apply_patch(light, LightPatch(on=True))

    assert light.snapshot is before
    # The write itself went through.
    assert bridge.lights[1]["state"]["on"] is True


def test_set_state_replaces_snapshot_as_a_whole(bridge) -> None:
    light = fetch_by_index(bridge, 2)
    before = light.snapshot

    light.set_state(LightPatch(on=True, sat=10))

    assert light.snapshot is not before
    assert light.snapshot.name == "Desk"
    assert light.state.sat == 10


def test_refresh_reads_current_state(bridge) -> None:
    light = fetch_by_index(bridge, 1)
    bridge.lights[1]["state"]["on"] = True

    assert light.state.on is False
    light.refresh()
    assert light.state.on is True


def test_light_requires_private_keyword_arguments(bridge) -> None:
    with pytest.raises(TypeError):
        Light(1, bridge, fetch_by_index(bridge, 1).snapshot)  # type: ignore[misc]
