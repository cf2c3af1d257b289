import asyncio
import logging
import uuid

from pydantic import ValidationError

from vaultflow.config import settings
from vaultflow.schemas.vault import AddVaultPayload, DatasourceConfig, ReplyEnvelope
from vaultflow.services.error_service import ErrorHandler
from vaultflow.services.events import VAULT_ADDED, EventEmitter
from vaultflow.services.ipc_service import (
    ADD_VAULT_CONFIG,
    ADD_VAULT_CONFIG_REPLY,
    SHOW_ERROR,
    IpcChannel,
)
from vaultflow.services.ui_state import UIState
from vaultflow.utils.security import check_password_strength

logger = logging.getLogger(__name__)


class AdditionError(Exception):
    pass


class WeakPasswordError(AdditionError):
    def __init__(self):
        super().__init__("Password is too weak")


class AdditionRejectedError(AdditionError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AdditionTimeoutError(AdditionError):
    def __init__(self, timeout: float):
        super().__init__(f"No reply from the vault backend within {timeout:g} seconds")
        self.timeout = timeout


class VaultAdditionService:
    def __init__(
        self,
        channel: IpcChannel,
        state: UIState,
        errors: ErrorHandler,
        events: EventEmitter,
        reply_timeout: float | None = None,
    ):
        self._channel = channel
        self._state = state
        self._errors = errors
        self._events = events
        self._reply_timeout = reply_timeout if reply_timeout is not None else settings.reply_timeout_seconds

    async def add_vault_target(
        self,
        datasource_config: DatasourceConfig,
        password: str,
        create_new: bool,
        file_name_override: str | None = None,
    ) -> str | None:
        """Add a vault and return its source ID.

        Failures are logged and reported through the error handler before
        returning None, so callers only need to check for a falsy result.
        """
        strength = check_password_strength(password)
        try:
            with self._state.busy_scope():
                payload = AddVaultPayload(
                    create_new=create_new,
                    datasource_config=datasource_config,
                    master_password=password,
                    file_name_override=file_name_override,
                    request_id=uuid.uuid4().hex,
                )
                if strength == "weak":
                    logger.info("Password is weak")
                    self._channel.send(SHOW_ERROR, "Password is weak")
                    # Nothing listens for this request's reply, so it is dropped.
                    self._send(payload)
                    raise WeakPasswordError()
                logger.info("Password is strong")
                source_id = await self._request_addition(payload)
        except Exception as err:
            self._errors.handle(err)
            return None

        logger.info("Vault added: %s", source_id)
        self._events.emit(VAULT_ADDED, source_id)
        return source_id

    def _send(self, payload: AddVaultPayload) -> None:
        logger.info("Adding new vault: %s", payload.datasource_config.type)
        self._channel.send(ADD_VAULT_CONFIG, payload.model_dump_json(by_alias=True))

    async def _request_addition(self, payload: AddVaultPayload) -> str:
        request_id = payload.request_id
        reply: asyncio.Future[ReplyEnvelope] = asyncio.get_running_loop().create_future()

        def on_reply(raw):
            if reply.done():
                return
            try:
                if isinstance(raw, (str, bytes)):
                    envelope = ReplyEnvelope.model_validate_json(raw)
                else:
                    envelope = ReplyEnvelope.model_validate(raw)
            except ValidationError:
                logger.warning("Ignoring malformed message on %s", ADD_VAULT_CONFIG_REPLY)
                return
            if envelope.request_id != request_id:
                logger.debug("Ignoring reply for request %s", envelope.request_id)
                return
            reply.set_result(envelope)

        # Listen before sending: an in-process backend may answer synchronously.
        unsubscribe = self._channel.on(ADD_VAULT_CONFIG_REPLY, on_reply)
        try:
            self._send(payload)
            try:
                envelope = await asyncio.wait_for(reply, self._reply_timeout)
            except asyncio.TimeoutError:
                raise AdditionTimeoutError(self._reply_timeout) from None
        finally:
            unsubscribe()

        if not envelope.ok:
            raise AdditionRejectedError(envelope.error or "Vault backend rejected the request")
        if not envelope.source_id:
            raise AdditionRejectedError("Vault backend returned no source ID")
        return envelope.source_id
