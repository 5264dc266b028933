"""Chat dispatcher: routes one uniform send to the right adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from terminator.logging_config import RequestContext
from terminator.model_providers.attachments import compose_prompt
from terminator.model_providers.config import (
    AttachmentRef,
    ChatTurn,
    ModelOption,
    ProviderCredentials,
)
from terminator.model_providers.errors import EmptyMessageError
from terminator.model_providers.registry import ProviderRegistry


@dataclass(frozen=True)
class ChatRequest:
    """Everything needed for one send."""

    selected_model: ModelOption
    credentials: ProviderCredentials
    history: Sequence[ChatTurn] = ()
    draft_text: str = ""
    attachments: Sequence[AttachmentRef] = field(default_factory=tuple)


class ChatDispatcher:
    """Sends chat requests through the adapter matching the selected model.

    One request, one attempt: adapter errors propagate unchanged and
    nothing is retried. Concurrent calls are independent.
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or ProviderRegistry()

    def prepare(self, request: ChatRequest) -> str:
        """Compose the outgoing text from the draft and attachments.

        Raises:
            EmptyMessageError: if the composed text is blank.
        """
        message = compose_prompt(request.draft_text, request.attachments).strip()
        if not message:
            raise EmptyMessageError("Nothing to send", request.selected_model.provider)
        return message

    async def deliver(self, request: ChatRequest, message: str, session_id: str = "") -> str:
        """Send an already prepared ``message`` and return the reply text."""
        model = request.selected_model
        adapter = self.registry.get_provider(model.provider)
        with RequestContext(
            session_id=session_id,
            extra={"provider": model.provider.value, "model": model.model_id},
        ):
            return await adapter.send_message(
                model.model_id,
                request.credentials.key_for(model.provider),
                request.history,
                message,
                request.attachments,
            )

    async def send(self, request: ChatRequest) -> str:
        """Compose, route and send ``request``; return the reply text."""
        return await self.deliver(request, self.prepare(request))
