"""Sequential light discovery and name lookup."""

from __future__ import annotations

import logging

from huelight.core.errors import HuelightError, LightNotFoundError
from huelight.core.light import Light, fetch_by_index
from huelight.transports.base import Bridge

MAX_LIGHTS = 100
LOGGER = logging.getLogger(__name__)


def scan_all(bridge: Bridge) -> list[Light]:
    """Probe indices 1..MAX_LIGHTS in order and stop at the first one that fails.

    Lights indexed after a gap are not returned even if they exist.
    """
    lights: list[Light] = []
    for index in range(1, MAX_LIGHTS + 1):
        try:
            light = fetch_by_index(bridge, index)
        except HuelightError as exc:
            LOGGER.debug("Scan stopped at index %d: %s", index, exc)
            break
        lights.append(light)
    return lights


def fetch_by_name(bridge: Bridge, name: str) -> Light:
    for light in scan_all(bridge):
        if light.name == name:
            return light
    raise LightNotFoundError(f"Light '{name}' not found")
