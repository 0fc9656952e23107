"""
Upload finished .bot files to S3.

Every upload gets a fresh uuid4 prefix, so no two requests share a key and a
key is never overwritten. A single put_object either stores the whole object
or nothing.
"""

from __future__ import annotations

import importlib
import logging
import urllib.parse
import uuid
from dataclasses import dataclass
from typing import Any

from .botfile import BOT_FILE_NAME, BotFile
from .errors import PublishError

logger = logging.getLogger(__name__)


def _boto3():
    # Allow tests to monkeypatch module-level `boto3` symbol.
    return globals().get("boto3") or importlib.import_module("boto3")


@dataclass(frozen=True)
class BundleLocation:
    bucket: str
    key: str
    uri: str


def bundle_key(environment: str, random_id: str | None = None) -> str:
    return f"{environment}/{random_id or uuid.uuid4()}/{BOT_FILE_NAME}"


class BundlePublisher:
    def __init__(
        self, bucket: str, *, url_expires_seconds: int = 3600, client: Any = None
    ) -> None:
        self.bucket = bucket
        self.url_expires_seconds = url_expires_seconds
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = _boto3().client("s3")
        return self._client

    def _uri(self, key: str) -> str:
        if self.url_expires_seconds > 0:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.url_expires_seconds,
            )
        base = self.client.meta.endpoint_url.rstrip("/")
        return f"{base}/{self.bucket}/{urllib.parse.quote(key)}"

    def publish(self, bot_file: BotFile, environment: str) -> BundleLocation:
        key = bundle_key(environment)
        body = bot_file.dumps().encode("utf-8")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType="application/json",
            )
            uri = self._uri(key)
        except Exception as exc:
            logger.exception("S3 upload failed")
            raise PublishError(f"failed to upload {key}", stage="publish") from exc
        return BundleLocation(bucket=self.bucket, key=key, uri=uri)
