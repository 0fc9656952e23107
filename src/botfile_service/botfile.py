"""
The ``.bot`` file handed to a GameATron 4000 instance.

Field names, nesting and order are consumed by the Bot Framework tooling and
must stay exactly as rendered by ``BotFile.to_dict``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

BOT_NAME = "GameATron4000"
BOT_FILE_NAME = "GameATron4000.Development.bot"
BOT_FILE_VERSION = "2.0"


@dataclass(frozen=True)
class BotIdentity:
    environment: str
    instance: str

    @property
    def resource_group(self) -> str:
        return f"GameATron4000Environment-{self.environment}"

    @property
    def bot_name(self) -> str:
        return f"GameATron4000-{self.environment}-{self.instance}"

    @property
    def resource_path(self) -> str:
        return f"Microsoft.BotService/botServices/{self.bot_name}"

    @property
    def direct_line_keys_path(self) -> str:
        return f"{self.resource_path}/channels/DirectLineChannel/listChannelWithKeys"


@dataclass(frozen=True)
class EndpointService:
    endpoint: str
    app_id: str
    app_password: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "endpoint",
            "name": BOT_NAME,
            "endpoint": self.endpoint,
            "appId": self.app_id,
            "appPassword": self.app_password,
            "id": "1",
        }


@dataclass(frozen=True)
class DirectLineService:
    secret: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "generic",
            "name": "DirectLine",
            "url": "nourl",
            "configuration": {"secret": self.secret},
            "id": "2",
        }


@dataclass(frozen=True)
class BotServiceBinding:
    service_name: str
    tenant_id: str
    subscription_id: str
    resource_group: str
    app_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "abs",
            "name": "bot",
            "serviceName": self.service_name,
            "tenantId": self.tenant_id,
            "subscriptionId": self.subscription_id,
            "resourceGroup": self.resource_group,
            "appId": self.app_id,
            "id": "3",
        }


@dataclass(frozen=True)
class BotFile:
    endpoint: EndpointService
    direct_line: DirectLineService
    bot_service: BotServiceBinding

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": BOT_NAME,
            "description": "",
            "services": [
                self.endpoint.to_dict(),
                self.direct_line.to_dict(),
                self.bot_service.to_dict(),
            ],
            "padlock": "",
            "version": BOT_FILE_VERSION,
        }

    def dumps(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def create_bot_file(
    *,
    endpoint: str,
    app_id: str,
    app_password: str,
    direct_line_secret: str,
    identity: BotIdentity,
    tenant_id: str,
    subscription_id: str,
) -> BotFile:
    return BotFile(
        endpoint=EndpointService(endpoint=endpoint, app_id=app_id, app_password=app_password),
        direct_line=DirectLineService(secret=direct_line_secret),
        bot_service=BotServiceBinding(
            service_name=identity.bot_name,
            tenant_id=tenant_id,
            subscription_id=subscription_id,
            resource_group=identity.resource_group,
            app_id=app_id,
        ),
    )
