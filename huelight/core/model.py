"""Core data models for light state, snapshots, and state patches."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from huelight.core.colors import XY
from huelight.core.errors import LightDecodeError, PatchValidationError

EFFECTS = ("none", "colorloop")
ALERTS = ("none", "select", "lselect")


def _xy(value: Any) -> XY:
    if value is None:
        return 0.0, 0.0
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return float(value[0]), float(value[1])
    raise LightDecodeError(f"Light state 'xy' must be a two-element list, got {value!r}")


@dataclass(frozen=True)
class LightState:
    on: bool = False
    bri: int = 0
    hue: int = 0
    sat: int = 0
    effect: str = ""
    xy: XY = (0.0, 0.0)
    ct: int = 0
    alert: str = ""
    colormode: str = ""
    reachable: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> LightState:
        return cls(
            on=bool(payload.get("on", False)),
            bri=int(payload.get("bri", 0)),
            hue=int(payload.get("hue", 0)),
            sat=int(payload.get("sat", 0)),
            effect=str(payload.get("effect", "")),
            xy=_xy(payload.get("xy")),
            ct=int(payload.get("ct", 0)),
            alert=str(payload.get("alert", "")),
            colormode=str(payload.get("colormode", "")),
            reachable=bool(payload.get("reachable", False)),
        )


@dataclass(frozen=True)
class LightSnapshot:
    """Decoded attribute set of one light resource as returned by the bridge."""

    state: LightState = field(default_factory=LightState)
    type: str = ""
    name: str = ""
    modelid: str = ""
    manufacturername: str = ""
    uniqueid: str = ""
    swversion: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> LightSnapshot:
        if not isinstance(payload, dict):
            raise LightDecodeError("Light resource must decode to a JSON object")
        state = payload.get("state", {})
        if not isinstance(state, dict):
            raise LightDecodeError("Light resource 'state' must be a JSON object")
        try:
            return cls(
                state=LightState.from_payload(state),
                type=str(payload.get("type", "")),
                name=str(payload.get("name", "")),
                modelid=str(payload.get("modelid", "")),
                manufacturername=str(payload.get("manufacturername", "")),
                uniqueid=str(payload.get("uniqueid", "")),
                swversion=str(payload.get("swversion", "")),
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise LightDecodeError(f"Light resource has malformed attributes: {exc}") from exc


_INT_RANGES: dict[str, tuple[int, int]] = {
    "bri": (0, 254),
    "hue": (0, 65535),
    "sat": (0, 254),
    "ct": (0, 65535),
    "transitiontime": (0, 65535),
    "bri_inc": (-254, 254),
    "hue_inc": (-65534, 65534),
    "sat_inc": (-254, 254),
    "ct_inc": (-65534, 65534),
}


@dataclass(frozen=True)
class LightPatch:
    """Sparse description of desired light attributes.

    ``on`` is always sent. Every other field left at its default is omitted
    from the wire payload, so the light keeps its previous value for it.
    """

    on: bool = False
    bri: int = 0
    hue: int = 0
    sat: int = 0
    xy: XY | None = None
    ct: int = 0
    effect: str = ""
    alert: str = ""
    transitiontime: int = 0
    bri_inc: int = 0
    hue_inc: int = 0
    sat_inc: int = 0
    ct_inc: int = 0
    xy_inc: XY | None = None

    def __post_init__(self) -> None:
        for name, (low, high) in _INT_RANGES.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise PatchValidationError(f"{name}={value} outside {low}..{high}")
        if self.xy is not None:
            _check_pair("xy", self.xy, 0.0, 1.0)
        if self.xy_inc is not None:
            _check_pair("xy_inc", self.xy_inc, -0.5, 0.5)
        if self.effect and self.effect not in EFFECTS:
            raise PatchValidationError(
                f"effect='{self.effect}' not supported. Allowed: {', '.join(EFFECTS)}"
            )
        if self.alert and self.alert not in ALERTS:
            raise PatchValidationError(
                f"alert='{self.alert}' not supported. Allowed: {', '.join(ALERTS)}"
            )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"on": self.on}
        for item in fields(self):
            if item.name == "on":
                continue
            value = getattr(self, item.name)
            if value is None or value == 0 or value == "":
                continue
            payload[item.name] = list(value) if isinstance(value, tuple) else value
        return payload


def _check_pair(name: str, pair: XY, low: float, high: float) -> None:
    if len(pair) != 2:
        raise PatchValidationError(f"{name} must have exactly two components")
    for component in pair:
        if not low <= component <= high:
            raise PatchValidationError(f"{name} component {component} outside {low}..{high}")
