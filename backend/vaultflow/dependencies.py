from vaultflow.services.error_service import ErrorHandler
from vaultflow.services.events import EventEmitter
from vaultflow.services.ipc_service import IpcChannel
from vaultflow.services.prompt_service import NewVaultPromptService
from vaultflow.services.ui_state import UIState
from vaultflow.services.vault_service import VaultAdditionService

ipc_channel = IpcChannel()
ui_state = UIState()
error_handler = ErrorHandler()
vault_events = EventEmitter()
addition_service = VaultAdditionService(ipc_channel, ui_state, error_handler, vault_events)
prompt_service = NewVaultPromptService(ipc_channel, ui_state)


def get_ipc_channel() -> IpcChannel:
    return ipc_channel


def get_ui_state() -> UIState:
    return ui_state


def get_error_handler() -> ErrorHandler:
    return error_handler


def get_addition_service() -> VaultAdditionService:
    return addition_service


def get_prompt_service() -> NewVaultPromptService:
    return prompt_service
