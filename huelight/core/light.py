"""Light mirror and the write-then-reread state round trip.

A :class:`Light` holds the last state the bridge confirmed for one light
index. It is never updated from the patch that was sent: every mutation is a
PUT followed by a fresh GET whose snapshot replaces the mirror as a whole.
"""

from __future__ import annotations

import json
import logging
import time

from huelight.core.colors import XY, resolve_color
from huelight.core.errors import LightDecodeError, LightIndexError
from huelight.core.model import LightPatch, LightSnapshot, LightState
from huelight.transports.base import Bridge

UNAVAILABLE_MARKER = b"not available"
BLINK_HIGH = 75
BLINK_LOW = 25
BLINK_STEP_S = 0.5
LOGGER = logging.getLogger(__name__)


def light_path(bridge: Bridge, index: int) -> str:
    return f"/api/{bridge.username}/lights/{index}"


class Light:
    """Mirror of one light resource on a bridge.

    Not meant to be built by callers: instances come from
    :func:`fetch_by_index` or the discovery helpers, which pass the decoded
    snapshot as the private ``_snapshot`` argument. The bridge reference is
    shared, not owned.
    """

    __slots__ = ("_index", "_bridge", "snapshot")

    def __init__(self, *, _index: int, _bridge: Bridge, _snapshot: LightSnapshot) -> None:
        self._index = _index
        self._bridge = _bridge
        self.snapshot = _snapshot

    def __repr__(self) -> str:
        return f"Light(index={self._index}, name={self.name!r}, on={self.state.on})"

    @property
    def index(self) -> int:
        return self._index

    @property
    def bridge(self) -> Bridge:
        return self._bridge

    @property
    def state(self) -> LightState:
        return self.snapshot.state

    @property
    def name(self) -> str:
        return self.snapshot.name

    @property
    def type(self) -> str:
        return self.snapshot.type

    @property
    def modelid(self) -> str:
        return self.snapshot.modelid

    @property
    def manufacturername(self) -> str:
        return self.snapshot.manufacturername

    @property
    def uniqueid(self) -> str:
        return self.snapshot.uniqueid

    @property
    def swversion(self) -> str:
        return self.snapshot.swversion

    def refresh(self) -> None:
        """Re-read this light and replace the mirrored snapshot."""
        fresh = fetch_by_index(self._bridge, self._index)
        self.snapshot = fresh.snapshot

    def set_state(self, patch: LightPatch) -> None:
        apply_patch(self, patch)

    def turn_on(self) -> None:
        apply_patch(self, LightPatch(on=True))

    def turn_off(self) -> None:
        apply_patch(self, LightPatch(on=False))

    def toggle(self) -> None:
        # Decides from the cached flag; call refresh() first for a live decision.
        if self.state.on:
            LOGGER.debug("Toggling light %d off", self._index)
            self.turn_off()
        else:
            LOGGER.debug("Toggling light %d on", self._index)
            self.turn_on()

    def blink(self, duration: int) -> None:
        """Pulse brightness for ``duration`` seconds, then restore power and brightness.

        Alternates between two brightness levels twice per second with power
        forced on. The call blocks until done and cannot be cancelled.
        """
        if duration < 0:
            raise ValueError("Blink duration must be >= 0")

        original_on = self.state.on
        original_bri = self.state.bri
        for step in range(2 * duration):
            bri = BLINK_HIGH if step % 2 == 0 else BLINK_LOW
            LOGGER.debug("Blink step %d on light %d (bri=%d)", step, self._index, bri)
            apply_patch(self, LightPatch(on=True, bri=bri))
            time.sleep(BLINK_STEP_S)

        if self.state.on != original_on or self.state.bri != original_bri:
            LOGGER.debug(
                "Restoring light %d to on=%s bri=%d", self._index, original_on, original_bri
            )
            if original_bri:
                restore = LightPatch(on=original_on, bri=original_bri)
            else:
                # bri=0 reads as unset, so step back down by the current level.
                restore = LightPatch(on=original_on, bri_inc=-self.state.bri)
            apply_patch(self, restore)

    def color_loop(self, activate: bool) -> None:
        effect = "colorloop" if activate else "none"
        apply_patch(self, LightPatch(on=True, effect=effect))

    def set_color(self, color: str | XY) -> None:
        xy = resolve_color(color) if isinstance(color, str) else (float(color[0]), float(color[1]))
        apply_patch(self, LightPatch(on=True, xy=xy))

    def set_brightness(self, bri: int) -> None:
        apply_patch(self, LightPatch(on=True, bri=bri))

    def set_color_temperature(self, ct: int) -> None:
        apply_patch(self, LightPatch(on=True, ct=ct))

    def alert(self, mode: str = "select") -> None:
        apply_patch(self, LightPatch(on=True, alert=mode))

    def set_name(self, name: str) -> None:
        self._bridge.put(light_path(self._bridge, self._index), {"name": name})
        self.refresh()

    def delete(self) -> None:
        # The held snapshot is left as-is; later mutations fail on the bridge side.
        self._bridge.delete(light_path(self._bridge, self._index))


def apply_patch(light: Light, patch: LightPatch) -> None:
    """Send ``patch`` and replace the mirror with the bridge's state read afterwards.

    Bridge errors from the write propagate and leave the mirror untouched. If
    the write succeeds but the confirmatory read fails, that error propagates
    too; the write may still have taken effect.
    """
    bridge = light.bridge
    payload = patch.to_payload()
    LOGGER.debug("PUT light %d state %s", light.index, payload)
    bridge.put(f"{light_path(bridge, light.index)}/state", payload)

    try:
        fresh = fetch_by_index(bridge, light.index)
    except Exception:
        LOGGER.warning("Light %d was written but could not be re-read", light.index)
        raise
    light.snapshot = fresh.snapshot


def fetch_by_index(bridge: Bridge, index: int) -> Light:
    if index < 1:
        raise LightIndexError(f"Light index must be >= 1, got {index}")

    body = bridge.get(light_path(bridge, index))
    if UNAVAILABLE_MARKER in body:
        raise LightIndexError(f"Light index {index} is not available")

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise LightDecodeError(f"Light {index} returned invalid JSON: {exc}") from exc

    return Light(_index=index, _bridge=bridge, _snapshot=LightSnapshot.from_payload(payload))
