"""Anthropic (Claude) provider implementation."""

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
    AnthropicMessageResponse,
    AnthropicModelsResponse,
    parse_payload,
)

DEFAULT_ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 1200


class AnthropicProvider(BaseProvider):
    """Provider for Anthropic Claude models via the Messages API."""

    provider_type = Provider.ANTHROPIC

    @property
    def api_version(self) -> str:
        return self.config.extra.get("anthropic_version", DEFAULT_ANTHROPIC_VERSION)

    @property
    def max_tokens(self) -> int:
        return self.config.extra.get("max_tokens", DEFAULT_MAX_TOKENS)

    def _headers(self, api_key: Optional[str]) -> dict[str, str]:
        return {"x-api-key": api_key or "", "anthropic-version": self.api_version}

    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        payload = await self._get_json(self.config.url("/v1/models"), headers=self._headers(api_key))
        decoded = parse_payload(AnthropicModelsResponse, payload)
        if decoded is None:
            return []
        return [
            ModelOption(provider=self.provider_type, model_id=m.id, display_name=m.display_name or m.id)
            for m in decoded.data
        ]

    def build_request_body(
        self,
        model_id: str,
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> dict:
        content: list[dict] = [{"type": "text", "text": text}]
        for image in images:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.mime_type,
                    "data": image.base64,
                },
            })
        messages = self._history_messages(history)
        messages.append({"role": "user", "content": content})
        return {"model": model_id, "max_tokens": self.max_tokens, "messages": messages}

    async def _send(
        self,
        model_id: str,
        api_key: Optional[str],
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        payload = await self._post_json(
            self.config.url("/v1/messages"),
            self.build_request_body(model_id, history, text, images),
            headers=self._headers(api_key),
        )
        decoded = parse_payload(AnthropicMessageResponse, payload)
        if decoded is None:
            return NO_RESPONSE
        return decoded.reply_text()
