"""
Failure kinds of a provisioning run.

Each external call has its own error class so callers can tell them apart
without inspecting messages. Every error is fatal to the current request.
"""

from __future__ import annotations


class ProvisioningError(Exception):
    kind = "provisioning_error"
    status_code = 502

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class ValidationError(ProvisioningError):
    """Inbound parameters are missing or not allowed."""

    kind = "forbidden"
    status_code = 403


class AuthError(ProvisioningError):
    """Client-credentials exchange failed."""

    kind = "auth_failed"


class ResourceReadError(ProvisioningError):
    kind = "resource_read_failed"


class ResourceWriteError(ProvisioningError):
    kind = "resource_write_failed"


class ResourceConflictError(ResourceWriteError):
    """The resource changed between read and write (etag mismatch)."""

    kind = "resource_conflict"
    status_code = 409


class MalformedResponseError(ProvisioningError):
    """A control-plane document lacks a field we depend on."""

    kind = "malformed_response"


class PublishError(ProvisioningError):
    kind = "publish_failed"
