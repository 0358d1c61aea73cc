from __future__ import annotations

import copy
import json
import re
from collections.abc import Mapping
from typing import Any

import pytest

from huelight.core.errors import BridgeConnectError

_STATE_PATH_RE = re.compile(r"^/api/([^/]+)/lights/(\d+)/state$")
_LIGHT_PATH_RE = re.compile(r"^/api/([^/]+)/lights/(\d+)$")


def light_payload(name: str, *, on: bool = False, bri: int = 254, xy=(0.3227, 0.329)) -> dict[str, Any]:
    return {
        "state": {
            "on": on,
            "bri": bri,
            "hue": 8418,
            "sat": 140,
            "effect": "none",
            "xy": list(xy),
            "ct": 366,
            "alert": "none",
            "colormode": "ct",
            "reachable": True,
        },
        "type": "Extended color light",
        "name": name,
        "modelid": "LCT001",
        "manufacturername": "Philips",
        "uniqueid": f"00:17:88:01:00:{abs(hash(name)) % 100:02d}-0b",
        "swversion": "5.105.0.21169",
    }


def unavailable_body(index: int) -> bytes:
    return json.dumps(
        [
            {
                "error": {
                    "type": 3,
                    "address": f"/lights/{index}",
                    "description": f"resource, /lights/{index}, not available",
                }
            }
        ]
    ).encode()


class FakeBridge:
    """In-memory bridge that applies state writes like a real one would."""

    def __init__(self, lights: Mapping[int, dict[str, Any]] | None = None, username: str = "testuser") -> None:
        self.username = username
        self.lights: dict[int, dict[str, Any]] = {k: copy.deepcopy(v) for k, v in (lights or {}).items()}
        self.calls: list[tuple[str, str, Any]] = []
        self.fail_get: set[int] = set()
        self.fail_put = False

    def get(self, path: str) -> bytes:
        self.calls.append(("get", path, None))
        match = _LIGHT_PATH_RE.match(path)
        assert match, f"Unexpected GET path: {path}"
        index = int(match.group(2))
        if index in self.fail_get:
            raise BridgeConnectError(f"connection dropped reading light {index}")
        if index not in self.lights:
            return unavailable_body(index)
        return json.dumps(self.lights[index]).encode()

    def put(self, path: str, payload: Mapping[str, Any]) -> bytes:
        self.calls.append(("put", path, dict(payload)))
        if self.fail_put:
            raise BridgeConnectError("connection refused")
        state_match = _STATE_PATH_RE.match(path)
        if state_match:
            index = int(state_match.group(2))
            state = self.lights[index]["state"]
            for key, value in payload.items():
                if key.endswith("_inc"):
                    base = key[: -len("_inc")]
                    state[base] = state.get(base, 0) + value
                else:
                    state[key] = value
            return json.dumps([{"success": {f"/lights/{index}/state/{k}": v}} for k, v in payload.items()]).encode()

        light_match = _LIGHT_PATH_RE.match(path)
        assert light_match, f"Unexpected PUT path: {path}"
        index = int(light_match.group(2))
        self.lights[index].update(payload)
        return json.dumps([{"success": {f"/lights/{index}/name": payload.get("name")}}]).encode()

    def delete(self, path: str) -> bytes:
        self.calls.append(("delete", path, None))
        match = _LIGHT_PATH_RE.match(path)
        assert match, f"Unexpected DELETE path: {path}"
        index = int(match.group(2))
        self.lights.pop(index, None)
        return json.dumps([{"success": f"/lights/{index} deleted"}]).encode()

    def puts(self) -> list[tuple[str, Any]]:
        return [(path, payload) for verb, path, payload in self.calls if verb == "put"]


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge(
        {
            1: light_payload("Lamp", on=False, bri=200),
            2: light_payload("Desk", on=True, bri=120),
        }
    )


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []
    monkeypatch.setattr("huelight.core.light.time.sleep", sleeps.append)
    return sleeps


@pytest.fixture
def make_bridge():
    def _make(names: dict[int, str]) -> FakeBridge:
        return FakeBridge({index: light_payload(name) for index, name in names.items()})

    return _make
