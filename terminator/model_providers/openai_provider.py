"""OpenAI (GPT) provider implementation."""

from __future__ import annotations

from typing import Optional, Sequence

from terminator.model_providers.base import BaseProvider
from terminator.model_providers.config import (
    NO_RESPONSE,
    ChatTurn,
    ImageAttachment,
    ModelOption,
    Provider,
)
from terminator.model_providers.schemas import (
    ChatCompletionResponse,
    OpenAIModelsResponse,
    parse_payload,
)


class OpenAIProvider(BaseProvider):
    """Provider for OpenAI chat models.

    Also serves as base class for the OpenAI-compatible OpenRouter
    adapters, which share the chat-completions wire format.
    """

    provider_type = Provider.OPENAI

    models_path = "/v1/models"
    chat_path = "/v1/chat/completions"

    def _auth_headers(self, api_key: Optional[str]) -> dict[str, str]:
        if not api_key:
            return {}
        return {"Authorization": f"Bearer {api_key}"}

    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        payload = await self._get_json(
            self.config.url(self.models_path), headers=self._auth_headers(api_key),
        )
        decoded = parse_payload(OpenAIModelsResponse, payload)
        if decoded is None:
            return []
        return [
            ModelOption(provider=self.provider_type, model_id=m.id, display_name=m.id)
            for m in decoded.data
            if "gpt" in m.id or "o" in m.id
        ]

    @staticmethod
    def _user_content(text: str, images: list[ImageAttachment]) -> list[dict]:
        """Text block followed by one ``image_url`` block per image."""
        content: list[dict] = [{"type": "text", "text": text}]
        content.extend(
            {"type": "image_url", "image_url": {"url": image.data_url}}
            for image in images
        )
        return content

    def build_request_body(
        self,
        model_id: str,
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> dict:
        messages = self._history_messages(history)
        messages.append({"role": "user", "content": self._user_content(text, images)})
        return {"model": model_id, "messages": messages}

    async def _send(
        self,
        model_id: str,
        api_key: Optional[str],
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        payload = await self._post_json(
            self.config.url(self.chat_path),
            self.build_request_body(model_id, history, text, images),
            headers=self._auth_headers(api_key),
        )
        decoded = parse_payload(ChatCompletionResponse, payload)
        if decoded is None:
            return NO_RESPONSE
        return decoded.reply_text()
