"""
Typed views over the control-plane documents we consume.

Only the fields actually used are exposed; anything else in the document is
carried through untouched.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from .errors import MalformedResponseError


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedResponseError(f"expected an object at {where}")
    return value


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"expected a non-empty string at {where}")
    return value


@dataclass(frozen=True)
class BotServiceView:
    """Bot service resource: ``properties.endpoint`` and ``properties.msaAppId``."""

    document: dict[str, Any]
    app_id: str

    @classmethod
    def parse(cls, document: dict[str, Any]) -> BotServiceView:
        props = _object(document.get("properties"), "properties")
        app_id = _string(props.get("msaAppId"), "properties.msaAppId")
        return cls(document=document, app_id=app_id)

    @property
    def endpoint(self) -> str | None:
        return self.document["properties"].get("endpoint")

    def with_endpoint(self, endpoint: str) -> dict[str, Any]:
        """Return a copy of the document pointing at ``endpoint``."""
        doc = copy.deepcopy(self.document)
        doc["properties"]["endpoint"] = endpoint
        return doc


@dataclass(frozen=True)
class ChannelKeysView:
    """DirectLine ``listChannelWithKeys`` result: first site's key."""

    secret: str

    @classmethod
    def parse(cls, document: dict[str, Any]) -> ChannelKeysView:
        props = _object(document.get("properties"), "properties")
        inner = _object(props.get("properties"), "properties.properties")
        sites = inner.get("sites")
        if not isinstance(sites, list):
            raise MalformedResponseError("expected a list at properties.properties.sites")
        if not sites:
            raise MalformedResponseError("channel has no sites")
        site = _object(sites[0], "properties.properties.sites[0]")
        return cls(secret=_string(site.get("key"), "properties.properties.sites[0].key"))
