import json
import urllib.parse

import pytest

from botfile_service import config
from botfile_service.transport import HttpResponse


def json_response(status, body):
    return HttpResponse(status, json.dumps(body).encode("utf-8"))


class FakeTransport:
    """Answers token / resource calls from a table and records every call."""

    timeout = 30

    def __init__(self, routes):
        self.routes = dict(routes)
        self.calls = []

    @staticmethod
    def _route(method, url):
        if method == "POST" and "/oauth2/token" in url:
            return "token"
        if method == "GET" and "listChannelWithKeys" in url:
            return "secret"
        if method == "GET":
            return "read"
        if method == "PATCH":
            return "write"
        raise AssertionError(f"unexpected {method} {url}")

    def request(self, method, url, *, headers=None, data=None):
        name = self._route(method, url)
        self.calls.append(
            {"name": name, "method": method, "url": url, "headers": headers or {}, "data": data}
        )
        result = self.routes[name]
        if isinstance(result, Exception):
            raise result
        return result

    def post_form(self, url, form, headers=None):
        h = {"Content-Type": "application/x-www-form-urlencoded"}
        h.update(headers or {})
        return self.request(
            "POST", url, headers=h, data=urllib.parse.urlencode(form).encode("utf-8")
        )

    def names(self):
        return [c["name"] for c in self.calls]


class FakeS3:
    def __init__(self, fail=False):
        self.fail = fail
        self.store = {}
        self.meta = type("Meta", (), {"endpoint_url": "https://s3.eu-west-1.amazonaws.com"})()

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str):
        if self.fail:
            raise Exception("AccessDenied")
        self.store[(Bucket, Key)] = Body
        return {}

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        return f"https://{Params['Bucket']}.s3.amazonaws.com/{Params['Key']}?X-Amz-Expires={ExpiresIn}"


@pytest.fixture(autouse=True)
def _fresh_settings():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("GAMEATRON_ENVIRONMENTS", "dev;test")
    monkeypatch.setenv("GAMEATRON_STORAGE_BUCKET", "botfiles")
    monkeypatch.setenv("GAMEATRON_ARM_CLIENT_ID", "client-id")
    monkeypatch.setenv("GAMEATRON_ARM_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("GAMEATRON_TENANT_ID", "tenant-1")
    monkeypatch.setenv("GAMEATRON_SUBSCRIPTION_ID", "sub-1")
    monkeypatch.setenv("GAMEATRON_APP_PASSWORD", "app-pass")
    return monkeypatch


@pytest.fixture
def settings(env):
    return config.load_settings()


@pytest.fixture
def bot_service_doc():
    return {
        "id": "/subscriptions/sub-1/resourceGroups/GameATron4000Environment-dev"
        "/providers/Microsoft.BotService/botServices/GameATron4000-dev-1",
        "name": "GameATron4000-dev-1",
        "location": "global",
        "kind": "bot",
        "properties": {
            "displayName": "GameATron4000-dev-1",
            "endpoint": "https://old.example.test/api/messages",
            "msaAppId": "app-123",
        },
    }


@pytest.fixture
def routes(bot_service_doc):
    return {
        "token": json_response(200, {"access_token": "tok", "token_type": "Bearer"}),
        "read": json_response(200, bot_service_doc),
        "write": json_response(200, bot_service_doc),
        "secret": json_response(
            200,
            {"properties": {"properties": {"sites": [{"siteName": "Default Site", "key": "sek-abc"}]}}},
        ),
    }
