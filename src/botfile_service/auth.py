"""
Client-credentials token exchange against the Azure AD authority.
"""

from __future__ import annotations

import urllib.parse

from .errors import AuthError
from .transport import HttpTransport, TransportError, default_transport

AUTHORITY_URL = "https://login.windows.net"
MANAGEMENT_RESOURCE = "https://management.core.windows.net/"


def token_url(tenant_id: str) -> str:
    return f"{AUTHORITY_URL}/{urllib.parse.quote(tenant_id)}/oauth2/token"


def acquire_token(
    tenant_id: str,
    client_id: str,
    client_secret: str,
    *,
    transport: HttpTransport | None = None,
) -> str:
    """Return a bearer token for the management API.

    One POST, no retry. Raises AuthError when the call fails or the body has
    no usable ``access_token``.
    """
    transport = transport or default_transport
    form = {
        "resource": MANAGEMENT_RESOURCE,
        "client_id": client_id,
        "client_secret": client_secret,
        "grant_type": "client_credentials",
    }
    try:
        resp = transport.post_form(
            token_url(tenant_id), form, headers={"Accept": "application/json"}
        )
    except TransportError as e:
        raise AuthError(f"token request failed: {e}") from e
    if not resp.ok:
        raise AuthError(f"token request returned HTTP {resp.status}")
    try:
        data = resp.json()
    except ValueError as e:
        raise AuthError("token response is not JSON") from e
    token = data.get("access_token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthError("token response has no access_token")
    return token
