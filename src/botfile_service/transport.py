"""
Shared HTTP transport using stdlib urllib.

One opener is built per process and reused by every control-plane call.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any

USER_AGENT = "GameATron4000BotFileService/1.0"


class TransportError(RuntimeError):
    """The request never produced an HTTP response."""


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class HttpTransport:
    def __init__(self, timeout: float = 30) -> None:
        self.timeout = timeout
        self._opener = urllib.request.build_opener()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> HttpResponse:
        h = {"User-Agent": USER_AGENT}
        if headers:
            h.update(headers)
        req = urllib.request.Request(url, data=data, headers=h, method=method)
        try:
            with self._opener.open(req, timeout=self.timeout) as resp:  # nosec B310
                return HttpResponse(resp.status, resp.read())
        except urllib.error.HTTPError as e:
            # Non-2xx still carries a body worth reporting.
            body = b""
            if e.fp is not None:
                try:
                    body = e.read()
                except (http.client.HTTPException, OSError):
                    body = b""
                finally:
                    e.close()
            return HttpResponse(e.code, body)
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise TransportError(f"{method} {_safe_url(url)} failed: {e}") from e

    def post_form(
        self, url: str, form: dict[str, str], headers: dict[str, str] | None = None
    ) -> HttpResponse:
        h = {"Content-Type": "application/x-www-form-urlencoded"}
        if headers:
            h.update(headers)
        body = urllib.parse.urlencode(form).encode("utf-8")
        return self.request("POST", url, headers=h, data=body)


def _safe_url(url: str) -> str:
    u = urllib.parse.urlsplit(url)
    return urllib.parse.urlunsplit((u.scheme, u.netloc, u.path, "", ""))


default_transport = HttpTransport()
