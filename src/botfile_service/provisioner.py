"""
Point a pre-registered bot service at a new endpoint and build its .bot file.

The run is strictly linear:

    START -> TOKEN_ACQUIRED -> RESOURCE_READ -> RESOURCE_MUTATED
          -> RESOURCE_WRITTEN -> SECRET_RETRIEVED -> ASSEMBLED

The first failing stage aborts the run. Errors are tagged with the stage they
happened in. A PATCH that already went through is not rolled back.
"""

from __future__ import annotations

import enum
import time

from .arm import ArmClient
from .auth import acquire_token
from .botfile import BotFile, create_bot_file
from .config import Settings
from .errors import ProvisioningError
from .logs import log_event
from .request import ProvisioningRequest
from .resources import BotServiceView, ChannelKeysView
from .transport import HttpTransport, default_transport


class Stage(str, enum.Enum):
    START = "start"
    TOKEN_ACQUIRED = "token_acquired"
    RESOURCE_READ = "resource_read"
    RESOURCE_MUTATED = "resource_mutated"
    RESOURCE_WRITTEN = "resource_written"
    SECRET_RETRIEVED = "secret_retrieved"
    ASSEMBLED = "assembled"


class BotProvisioner:
    def __init__(
        self,
        settings: Settings,
        *,
        transport: HttpTransport | None = None,
        rid: str | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport or default_transport
        self.rid = rid
        self.stage = Stage.START

    def _advance(self, stage: Stage, **fields) -> None:
        self.stage = stage
        log_event("stage", rid=self.rid, stage=stage.value, **fields)

    def provision(self, request: ProvisioningRequest) -> BotFile:
        s = self.settings
        identity = request.identity
        self.stage = Stage.START
        try:
            t0 = time.time()
            token = acquire_token(
                s.tenant_id or "",
                s.arm_client_id or "",
                s.arm_client_secret or "",
                transport=self.transport,
            )
            self._advance(Stage.TOKEN_ACQUIRED, ms=int((time.time() - t0) * 1000))

            arm = ArmClient(token, s.subscription_id or "", transport=self.transport)

            # Get the pre-registered bot service resource.
            bot_service = BotServiceView.parse(
                arm.get_resource(identity.resource_group, identity.resource_path)
            )
            self._advance(
                Stage.RESOURCE_READ,
                botName=identity.bot_name,
                previousEndpoint=bot_service.endpoint,
            )

            updated = bot_service.with_endpoint(request.endpoint)
            self._advance(Stage.RESOURCE_MUTATED)

            arm.update_resource(identity.resource_group, identity.resource_path, updated)
            self._advance(Stage.RESOURCE_WRITTEN)

            # Get the DirectLine secret; must come after the endpoint update.
            channel = ChannelKeysView.parse(
                arm.get_resource(identity.resource_group, identity.direct_line_keys_path)
            )
            self._advance(Stage.SECRET_RETRIEVED)
        except ProvisioningError as e:
            if e.stage is None:
                e.stage = self.stage.value
            raise

        bot_file = create_bot_file(
            endpoint=request.endpoint,
            app_id=bot_service.app_id,
            app_password=s.app_password or "",
            direct_line_secret=channel.secret,
            identity=identity,
            tenant_id=s.tenant_id or "",
            subscription_id=s.subscription_id or "",
        )
        self._advance(Stage.ASSEMBLED)
        return bot_file
