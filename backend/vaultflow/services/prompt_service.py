import asyncio
import logging

from vaultflow.config import settings
from vaultflow.schemas.vault import NewVaultChoice, VaultTargetParameters
from vaultflow.services.events import CHOICE, EventEmitter
from vaultflow.services.ipc_service import (
    GET_EXISTING_VAULT_FILENAME,
    GET_NEW_VAULT_FILENAME,
    IpcChannel,
)
from vaultflow.services.ui_state import UIState

logger = logging.getLogger(__name__)


class NewVaultPromptService:
    def __init__(
        self,
        channel: IpcChannel,
        state: UIState,
        events: EventEmitter | None = None,
        filename_timeout: float | None = None,
    ):
        self._channel = channel
        self._state = state
        self._events = events or EventEmitter()
        self._filename_timeout = (
            filename_timeout if filename_timeout is not None else settings.filename_timeout_seconds
        )

    @property
    def waiting(self) -> bool:
        return self._events.listener_count(CHOICE) > 0

    def submit_choice(self, choice: NewVaultChoice) -> bool:
        """Deliver the user's choice to the oldest waiting prompt.

        Returns False if no prompt was waiting.
        """
        return self._events.emit_first(CHOICE, choice)

    async def resolve_vault_target(self) -> VaultTargetParameters | None:
        with self._state.prompt_scope():
            choice = await self._wait_for_choice()

        if not choice:
            logger.info("New vault prompt cancelled")
            return None
        if choice == "new":
            channel, create_new = GET_NEW_VAULT_FILENAME, True
        else:
            channel, create_new = GET_EXISTING_VAULT_FILENAME, False

        filename = await self._channel.invoke(channel, timeout=self._filename_timeout)
        if not filename:
            logger.info("No filename chosen for %s vault", choice)
            return None
        return VaultTargetParameters(filename=filename, create_new=create_new)

    async def _wait_for_choice(self) -> NewVaultChoice:
        choice: asyncio.Future = asyncio.get_running_loop().create_future()

        def on_choice(value):
            if not choice.done():
                choice.set_result(value)

        unsubscribe = self._events.once(CHOICE, on_choice)
        try:
            return await choice
        finally:
            unsubscribe()
