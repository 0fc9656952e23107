"""
AWS Lambda handler: ?env=&instance=&endpoint= -> URI of a fresh .bot file.
"""

from __future__ import annotations

import json
import logging
import time
import urllib.parse
from functools import lru_cache
from typing import Any

from .config import get_settings
from .errors import ProvisioningError
from .logs import configure_logging, log_event
from .provisioner import BotProvisioner
from .publisher import BundlePublisher
from .request import parse_request
from .transport import HttpTransport, default_transport

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _transport(timeout: int) -> HttpTransport:
    if timeout == default_transport.timeout:
        return default_transport
    return HttpTransport(timeout=timeout)


def _rid(context: Any) -> str | None:
    return getattr(context, "aws_request_id", None)


def _response(status: int, body: Any) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _get_query_param(event: dict[str, Any], name: str) -> str | None:
    qs = event.get("queryStringParameters") or {}
    if isinstance(qs, dict):
        val = qs.get(name)
        if val is not None:
            return val
    # Fallback to rawQueryString parsing (API variations)
    raw = event.get("rawQueryString") or ""
    if not raw:
        return None
    values = urllib.parse.parse_qs(raw, keep_blank_values=True).get(name)
    return values[0] if values else None


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    configure_logging()
    settings = get_settings()
    start_ts = time.time()
    rid = _rid(context)

    # 1) Validate before touching anything external
    try:
        request = parse_request(
            _get_query_param(event, "env"),
            _get_query_param(event, "instance"),
            _get_query_param(event, "endpoint"),
            settings.environments,
        )
    except ProvisioningError as e:
        log_event("rejected", rid=rid, reason=str(e))
        return _response(e.status_code, {"error": e.kind})

    missing = settings.missing()
    if missing or settings.invalid:
        log_event("config_error", rid=rid, missing=missing, invalid=list(settings.invalid))
        body: dict[str, Any] = {"error": "config_error", "missing": missing}
        if settings.invalid:
            body["invalid"] = list(settings.invalid)
        return _response(500, body)

    # 2) Update the bot service and build the .bot file
    # 3) Upload it for the user to download
    try:
        provisioner = BotProvisioner(
            settings, transport=_transport(settings.http_timeout_seconds), rid=rid
        )
        bot_file = provisioner.provision(request)
        publisher = BundlePublisher(
            settings.storage_bucket or "",
            url_expires_seconds=settings.storage_url_expires_seconds,
        )
        location = publisher.publish(bot_file, request.environment)
    except ProvisioningError as e:
        log_event(
            "provisioning_failed",
            rid=rid,
            kind=e.kind,
            stage=e.stage,
            error=str(e),
            botName=request.identity.bot_name,
        )
        return _response(e.status_code, {"error": e.kind, "stage": e.stage})
    except Exception as e:
        logger.exception("Provisioning crashed")
        log_event("provisioning_crashed", rid=rid, error=str(e))
        return _response(500, {"error": "internal_error"})

    log_event(
        "ok",
        rid=rid,
        botName=request.identity.bot_name,
        key=location.key,
        ms_total=int((time.time() - start_ts) * 1000),
    )
    return _response(200, location.uri)
