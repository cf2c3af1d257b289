from typing import Any

from pydantic import BaseModel


class OutboundMessage(BaseModel):
    channel: str
    payload: Any = None
    # Set only for invocations awaiting a result.
    invocation_id: str | None = None


class ChannelMessage(BaseModel):
    payload: Any = None


class InvocationResult(BaseModel):
    result: Any = None
