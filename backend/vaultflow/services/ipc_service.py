import asyncio
import inspect
import logging
import uuid
from collections import deque
from typing import Any, Callable

from vaultflow.schemas.ipc import OutboundMessage
from vaultflow.services.events import EventEmitter, Listener

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]

ADD_VAULT_CONFIG = "add-vault-config"
ADD_VAULT_CONFIG_REPLY = "add-vault-config:reply"
GET_NEW_VAULT_FILENAME = "get-new-vault-filename"
GET_EXISTING_VAULT_FILENAME = "get-existing-vault-filename"
SHOW_ERROR = "show-error"


class ChannelClosedError(RuntimeError):
    pass


class IpcChannel:
    """
    Ordered message channel between this process and the privileged backend.

    The consumer side sends messages, invokes request/response channels and
    listens for pushed messages. The privileged side either registers handlers
    in-process, or collects queued messages from the outbox and answers
    invocations by ID (see the /ipc routes).
    """

    def __init__(self):
        self._listeners = EventEmitter()
        self._handlers: dict[str, Handler] = {}
        self._outbox: deque[OutboundMessage] = deque()
        self._invocations: dict[str, asyncio.Future] = {}
        self._background: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ── Consumer side ────────────────────────────────────────────────

    def send(self, channel: str, payload: Any = None) -> None:
        self._ensure_open()
        handler = self._handlers.get(channel)
        if handler is None:
            self._outbox.append(OutboundMessage(channel=channel, payload=payload))
            return
        result = handler(payload)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._background.add(task)
            task.add_done_callback(self._on_background_done)

    async def invoke(self, channel: str, payload: Any = None, timeout: float | None = None) -> Any:
        self._ensure_open()
        handler = self._handlers.get(channel)
        if handler is not None:
            result = handler(payload)
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(result, timeout)
            return result

        invocation_id = uuid.uuid4().hex
        future = asyncio.get_running_loop().create_future()
        message = OutboundMessage(channel=channel, payload=payload, invocation_id=invocation_id)
        self._invocations[invocation_id] = future
        self._outbox.append(message)
        try:
            return await asyncio.wait_for(future, timeout)
        finally:
            self._invocations.pop(invocation_id, None)
            if message in self._outbox:
                self._outbox.remove(message)

    def on(self, channel: str, listener: Listener) -> Callable[[], None]:
        return self._listeners.on(channel, listener)

    def remove_listener(self, channel: str, listener: Listener) -> None:
        self._listeners.remove_listener(channel, listener)

    def listener_count(self, channel: str) -> int:
        return self._listeners.listener_count(channel)

    # ── Privileged side ──────────────────────────────────────────────

    def handle(self, channel: str, handler: Handler) -> None:
        self._handlers[channel] = handler

    def remove_handler(self, channel: str) -> None:
        self._handlers.pop(channel, None)

    def reply(self, channel: str, payload: Any = None) -> bool:
        """Push a message to listeners. Returns False when nobody was listening."""
        delivered = self._listeners.emit(channel, payload)
        if not delivered:
            logger.debug("Dropped message on %s: no listener", channel)
        return delivered

    def drain_outbox(self) -> list[OutboundMessage]:
        messages = list(self._outbox)
        self._outbox.clear()
        return messages

    def resolve_invocation(self, invocation_id: str, result: Any) -> bool:
        future = self._invocations.get(invocation_id)
        if future is None or future.done():
            return False
        future.set_result(result)
        return True

    def close(self) -> None:
        self._closed = True
        for future in self._invocations.values():
            if not future.done():
                future.set_exception(ChannelClosedError("IPC channel closed"))
        self._invocations.clear()
        self._outbox.clear()

    def _ensure_open(self):
        if self._closed:
            raise ChannelClosedError("IPC channel closed")

    def _on_background_done(self, task: asyncio.Task):
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Privileged handler failed: %s", task.exception())
