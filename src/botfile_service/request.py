"""
Inbound provisioning parameters and their validation.
"""

from __future__ import annotations

import urllib.parse
from collections.abc import Iterable
from dataclasses import dataclass

from .botfile import BotIdentity
from .errors import ValidationError


def is_http_url(s: str) -> bool:
    try:
        u = urllib.parse.urlparse(s)
        return u.scheme in ("http", "https") and bool(u.netloc)
    except ValueError:
        return False


@dataclass(frozen=True)
class ProvisioningRequest:
    environment: str
    instance: str
    endpoint: str

    @property
    def identity(self) -> BotIdentity:
        return BotIdentity(environment=self.environment, instance=self.instance)


def parse_request(
    environment: str | None,
    instance: str | None,
    endpoint: str | None,
    allowed_environments: Iterable[str],
) -> ProvisioningRequest:
    """Validate raw parameters; values are kept exactly as supplied."""
    if not environment or environment not in tuple(allowed_environments):
        raise ValidationError("environment is not allowed")
    if not instance or not instance.strip():
        raise ValidationError("instance is required")
    if not endpoint or not endpoint.strip():
        raise ValidationError("endpoint is required")
    if not is_http_url(endpoint):
        raise ValidationError("endpoint must be an http(s) URL")
    return ProvisioningRequest(environment=environment, instance=instance, endpoint=endpoint)
