"""Stable public API for building tooling on top of huelight.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from pathlib import Path

from huelight.core.colors import COLORS, resolve_color
from huelight.core.config import BridgeConfig, load_bridge_config
from huelight.core.discovery import MAX_LIGHTS, fetch_by_name, scan_all
from huelight.core.errors import (
    BridgeConnectError,
    BridgeError,
    BridgeRequestError,
    BridgeTimeoutError,
    ColorResolutionError,
    ConfigLoadError,
    ConfigValidationError,
    HuelightError,
    LightDecodeError,
    LightIndexError,
    LightNotFoundError,
    PatchValidationError,
)
from huelight.core.light import Light, apply_patch, fetch_by_index
from huelight.core.model import LightPatch, LightSnapshot, LightState
from huelight.transports.base import Bridge
from huelight.transports.http import HTTPBridge

__all__ = [
    "HuelightError",
    "BridgeError",
    "BridgeConnectError",
    "BridgeRequestError",
    "BridgeTimeoutError",
    "ColorResolutionError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LightDecodeError",
    "LightIndexError",
    "LightNotFoundError",
    "PatchValidationError",
    "COLORS",
    "MAX_LIGHTS",
    "Bridge",
    "BridgeConfig",
    "HTTPBridge",
    "Light",
    "LightPatch",
    "LightSnapshot",
    "LightState",
    "apply_patch",
    "fetch_by_index",
    "fetch_by_name",
    "load_bridge_config",
    "resolve_color",
    "scan_all",
    "Client",
]


class Client:
    """Public client for looking up lights on one bridge.

    The client does not own the bridge it is given; use :meth:`from_config`
    to build one that wraps a fresh :class:`HTTPBridge`.
    """

    def __init__(self, bridge: Bridge) -> None:
        self.bridge = bridge

    @classmethod
    def from_config(
        cls,
        *,
        host: str | None = None,
        username: str | None = None,
        path: Path | None = None,
    ) -> Client:
        config = load_bridge_config(host=host, username=username, path=path)
        return cls(
            HTTPBridge(
                config.host,
                config.username,
                scheme=config.scheme,
                timeout_s=config.timeout_s,
            )
        )

    def lights(self) -> list[Light]:
        return scan_all(self.bridge)

    def light(self, index: int) -> Light:
        return fetch_by_index(self.bridge, index)

    def light_by_name(self, name: str) -> Light:
        return fetch_by_name(self.bridge, name)

    def find(self, ref: str) -> Light:
        """Resolve a light from a numeric index or an exact name."""
        if ref.isdecimal():
            return self.light(int(ref))
        return self.light_by_name(ref)
