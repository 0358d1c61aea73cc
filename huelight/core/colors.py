"""Named CIE xy color constants."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from huelight.core.errors import ColorResolutionError

XY = tuple[float, float]

COLORS: Mapping[str, XY] = MappingProxyType(
    {
        "red": (0.6915, 0.3083),
        "yellow": (0.4023, 0.4725),
        "orange": (0.4693, 0.4007),
        "green": (0.1700, 0.7000),
        "cyan": (0.1610, 0.3549),
        "blue": (0.1530, 0.0480),
        "purple": (0.2363, 0.1334),
        "pink": (0.3645, 0.1914),
        "white": (0.3227, 0.3290),
    }
)


def resolve_color(name: str) -> XY:
    xy = COLORS.get(name.strip().lower())
    if xy is None:
        available = ", ".join(sorted(COLORS))
        raise ColorResolutionError(f"Unknown color '{name}'. Available: {available}")
    return xy
