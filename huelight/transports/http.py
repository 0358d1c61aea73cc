"""HTTP bridge implementation using requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from huelight.core.errors import (
    BridgeConnectError,
    BridgeError,
    BridgeRequestError,
    BridgeTimeoutError,
)

LOGGER = logging.getLogger(__name__)


class HTTPBridge:
    """Issues get/put/delete against a bridge reachable at ``host``.

    The bridge owns its ``requests.Session``; lights only hold a reference to
    the bridge and never close it.
    """

    def __init__(
        self,
        host: str,
        username: str,
        *,
        scheme: str = "http",
        timeout_s: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.host = host
        self.username = username
        self.scheme = scheme
        self.timeout_s = timeout_s
        self._session = session or requests.Session()

    def __enter__(self) -> HTTPBridge:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def url(self, path: str) -> str:
        return f"{self.scheme}://{self.host}/{path.lstrip('/')}"

    def get(self, path: str) -> bytes:
        return self._request("GET", path)

    def put(self, path: str, payload: Mapping[str, Any]) -> bytes:
        return self._request("PUT", path, payload)

    def delete(self, path: str) -> bytes:
        return self._request("DELETE", path)

    def _request(self, method: str, path: str, payload: Mapping[str, Any] | None = None) -> bytes:
        url = self.url(path)
        LOGGER.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                timeout=self.timeout_s,
            )
        except requests.Timeout as exc:
            raise BridgeTimeoutError(f"{method} {url} timed out after {self.timeout_s}s") from exc
        except requests.ConnectionError as exc:
            raise BridgeConnectError(f"Could not reach bridge at {self.host}: {exc}") from exc
        except requests.RequestException as exc:
            raise BridgeError(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            raise BridgeRequestError(f"{method} {url} returned HTTP {response.status_code}")
        return response.content
