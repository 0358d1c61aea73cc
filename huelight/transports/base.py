"""Bridge interfaces."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class Bridge(Protocol):
    username: str

    def get(self, path: str) -> bytes:
        """Read a resource and return the raw response body."""

    def put(self, path: str, payload: Mapping[str, Any]) -> bytes:
        """Write a JSON payload to a resource and return the raw response body."""

    def delete(self, path: str) -> bytes:
        """Remove a resource and return the raw response body."""
