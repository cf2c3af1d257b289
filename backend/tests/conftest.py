import json

import pytest
from fastapi.testclient import TestClient

from vaultflow import dependencies
from vaultflow.main import app
from vaultflow.services.error_service import ErrorHandler
from vaultflow.services.events import EventEmitter
from vaultflow.services.ipc_service import (
    ADD_VAULT_CONFIG,
    ADD_VAULT_CONFIG_REPLY,
    GET_EXISTING_VAULT_FILENAME,
    GET_NEW_VAULT_FILENAME,
    SHOW_ERROR,
    IpcChannel,
)
from vaultflow.services.prompt_service import NewVaultPromptService
from vaultflow.services.ui_state import UIState
from vaultflow.services.vault_service import VaultAdditionService


class FakeVaultBackend:
    """Stands in for the privileged process on an in-process channel."""

    def __init__(self, channel: IpcChannel):
        self.channel = channel
        self.requests: list[dict] = []
        self.errors: list[str] = []
        self.invocations: list[str] = []
        # Reply sent for each add-vault-config request; None means stay silent.
        self.reply: dict | None = {"ok": True, "sourceID": "source-1"}
        self.new_filename: str | None = "vault1.bcup"
        self.existing_filename: str | None = "existing.bcup"

        channel.handle(ADD_VAULT_CONFIG, self._on_add_vault)
        channel.handle(SHOW_ERROR, self.errors.append)
        channel.handle(GET_NEW_VAULT_FILENAME, self._on_new_filename)
        channel.handle(GET_EXISTING_VAULT_FILENAME, self._on_existing_filename)

    def _on_add_vault(self, raw):
        payload = json.loads(raw)
        self.requests.append(payload)
        if self.reply is not None:
            self.respond(payload["requestId"], **self.reply)

    def respond(self, request_id, **envelope):
        return self.channel.reply(ADD_VAULT_CONFIG_REPLY, json.dumps({**envelope, "requestId": request_id}))

    def _on_new_filename(self, _payload):
        self.invocations.append(GET_NEW_VAULT_FILENAME)
        return self.new_filename

    async def _on_existing_filename(self, _payload):
        self.invocations.append(GET_EXISTING_VAULT_FILENAME)
        return self.existing_filename


@pytest.fixture
def channel():
    return IpcChannel()


@pytest.fixture
def backend(channel):
    return FakeVaultBackend(channel)


@pytest.fixture
def ui_state():
    return UIState()


@pytest.fixture
def errors():
    return ErrorHandler(max_notifications=10)


@pytest.fixture
def vault_events():
    return EventEmitter()


@pytest.fixture
def added(vault_events):
    """Source IDs announced on vault-added."""
    seen = []
    vault_events.on("vault-added", seen.append)
    return seen


@pytest.fixture
def addition_service(channel, ui_state, errors, vault_events):
    return VaultAdditionService(channel, ui_state, errors, vault_events, reply_timeout=1.0)


@pytest.fixture
def prompt_service(channel, ui_state):
    return NewVaultPromptService(channel, ui_state)


@pytest.fixture
def override_services(channel, ui_state, errors, addition_service, prompt_service):
    app.dependency_overrides[dependencies.get_ipc_channel] = lambda: channel
    app.dependency_overrides[dependencies.get_ui_state] = lambda: ui_state
    app.dependency_overrides[dependencies.get_error_handler] = lambda: errors
    app.dependency_overrides[dependencies.get_addition_service] = lambda: addition_service
    app.dependency_overrides[dependencies.get_prompt_service] = lambda: prompt_service
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_services):
    return TestClient(app)
