from fastapi import APIRouter, Depends, HTTPException

from vaultflow.dependencies import get_addition_service, get_prompt_service, get_ui_state
from vaultflow.schemas.vault import (
    VaultAddRequest,
    VaultAddResponse,
    VaultChoiceRequest,
    VaultStatusResponse,
    VaultTargetParameters,
)
from vaultflow.services.prompt_service import NewVaultPromptService
from vaultflow.services.ui_state import UIState
from vaultflow.services.vault_service import VaultAdditionService

router = APIRouter(prefix="/vault", tags=["vault"])


@router.get("/status", response_model=VaultStatusResponse)
async def vault_status(state: UIState = Depends(get_ui_state)):
    return VaultStatusResponse(busy=state.busy, prompt_visible=state.prompt_visible)


@router.post("/target", response_model=VaultTargetParameters | None)
async def resolve_target(prompts: NewVaultPromptService = Depends(get_prompt_service)):
    # Long-polls until the UI posts a choice and the backend names a file.
    return await prompts.resolve_vault_target()


@router.post("/prompt/choice")
async def submit_choice(req: VaultChoiceRequest, prompts: NewVaultPromptService = Depends(get_prompt_service)):
    if not prompts.submit_choice(req.choice):
        raise HTTPException(status_code=409, detail="No vault prompt is waiting for a choice")
    return {"message": "Choice received"}


@router.post("/add", response_model=VaultAddResponse)
async def add_vault(req: VaultAddRequest, additions: VaultAdditionService = Depends(get_addition_service)):
    source_id = await additions.add_vault_target(
        req.datasource_config,
        req.master_password,
        req.create_new,
        req.file_name_override,
    )
    if not source_id:
        raise HTTPException(status_code=422, detail="Vault addition failed; see notifications")
    return VaultAddResponse(source_id=source_id)
