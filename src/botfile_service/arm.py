"""
Minimal Azure Resource Manager client (generic resource GET/PATCH).
"""

from __future__ import annotations

import json
import urllib.parse
from typing import Any

from .errors import ResourceConflictError, ResourceReadError, ResourceWriteError
from .transport import HttpTransport, TransportError, default_transport

MANAGEMENT_URL = "https://management.azure.com"
API_VERSION = "2018-07-12"


class ArmClient:
    def __init__(
        self,
        access_token: str,
        subscription_id: str,
        *,
        transport: HttpTransport | None = None,
    ) -> None:
        self.access_token = access_token
        self.subscription_id = subscription_id
        self.transport = transport or default_transport

    # ----- Helpers -----
    def _url(self, resource_group: str, resource_path: str) -> str:
        return (
            f"{MANAGEMENT_URL}/subscriptions/{urllib.parse.quote(self.subscription_id)}"
            f"/resourceGroups/{urllib.parse.quote(resource_group)}"
            f"/providers/{urllib.parse.quote(resource_path)}"
            f"?{urllib.parse.urlencode({'api-version': API_VERSION})}"
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    # ----- Public APIs -----
    def get_resource(self, resource_group: str, resource_path: str) -> dict[str, Any]:
        try:
            resp = self.transport.request(
                "GET", self._url(resource_group, resource_path), headers=self._headers()
            )
        except TransportError as e:
            raise ResourceReadError(f"GET {resource_path} failed: {e}") from e
        if not resp.ok:
            raise ResourceReadError(f"GET {resource_path} returned HTTP {resp.status}")
        try:
            data = resp.json()
        except ValueError as e:
            raise ResourceReadError(f"GET {resource_path} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise ResourceReadError(f"GET {resource_path} did not return an object")
        return data

    def update_resource(
        self, resource_group: str, resource_path: str, document: dict[str, Any]
    ) -> None:
        """PATCH the whole document back.

        When the document carries an ``etag`` the write is conditional on it,
        so a concurrent change surfaces as ResourceConflictError.
        """
        headers = self._headers()
        headers["Content-Type"] = "application/json; charset=utf-8"
        etag = document.get("etag")
        if isinstance(etag, str) and etag:
            headers["If-Match"] = etag
        body = json.dumps(document, ensure_ascii=False).encode("utf-8")
        try:
            resp = self.transport.request(
                "PATCH", self._url(resource_group, resource_path), headers=headers, data=body
            )
        except TransportError as e:
            raise ResourceWriteError(f"PATCH {resource_path} failed: {e}") from e
        if resp.status == 412:
            raise ResourceConflictError(f"PATCH {resource_path} lost an etag race")
        if not resp.ok:
            raise ResourceWriteError(f"PATCH {resource_path} returned HTTP {resp.status}")
