from fastapi import APIRouter, Depends, HTTPException

from vaultflow.dependencies import get_ipc_channel
from vaultflow.schemas.ipc import ChannelMessage, InvocationResult, OutboundMessage
from vaultflow.services.ipc_service import IpcChannel

# Used by an out-of-process privileged backend: poll the outbox, push
# messages onto channels, and answer invocations.
router = APIRouter(prefix="/ipc", tags=["ipc"])


@router.get("/outbox", response_model=list[OutboundMessage])
async def drain_outbox(channel: IpcChannel = Depends(get_ipc_channel)):
    return channel.drain_outbox()


@router.post("/channels/{name}")
async def push_message(name: str, req: ChannelMessage, channel: IpcChannel = Depends(get_ipc_channel)):
    delivered = channel.reply(name, req.payload)
    return {"delivered": delivered}


@router.post("/invocations/{invocation_id}")
async def answer_invocation(
    invocation_id: str, req: InvocationResult, channel: IpcChannel = Depends(get_ipc_channel)
):
    if not channel.resolve_invocation(invocation_id, req.result):
        raise HTTPException(status_code=404, detail="Invocation not found or already answered")
    return {"message": "Invocation answered"}
