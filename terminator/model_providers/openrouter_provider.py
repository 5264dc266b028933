"""OpenRouter providers: OpenAI-compatible API.

Two adapters share the endpoint: the keyed one lists every model, the
free one queries anonymously and keeps only models that cost nothing.
"""

from __future__ import annotations

from typing import Optional

from terminator.model_providers.config import ModelOption, Provider
from terminator.model_providers.openai_provider import OpenAIProvider
from terminator.model_providers.schemas import OpenRouterModelsResponse, parse_payload


class OpenRouterProvider(OpenAIProvider):
    """Provider for OpenRouter with a user API key.

    OpenRouter speaks the OpenAI chat-completions format, so this
    inherits from ``OpenAIProvider`` and only overrides the paths and
    the model listing.
    """

    provider_type = Provider.OPENROUTER

    models_path = "/api/v1/models"
    chat_path = "/api/v1/chat/completions"

    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        payload = await self._get_json(
            self.config.url(self.models_path), headers=self._auth_headers(api_key),
        )
        decoded = parse_payload(OpenRouterModelsResponse, payload)
        if decoded is None:
            return []
        return [
            ModelOption(provider=self.provider_type, model_id=m.id, display_name=m.name or m.id)
            for m in decoded.data
        ]


class OpenRouterFreeProvider(OpenRouterProvider):
    """Anonymous OpenRouter access restricted to free models.

    No API key is needed. Any key passed in is ignored so that an
    OpenRouter key configured for the paid adapter never leaks here.
    """

    provider_type = Provider.OPENROUTER_FREE

    def _auth_headers(self, api_key: Optional[str]) -> dict[str, str]:
        return {}

    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        payload = await self._get_json(self.config.url(self.models_path))
        decoded = parse_payload(OpenRouterModelsResponse, payload)
        if decoded is None:
            return []
        return [
            ModelOption(provider=self.provider_type, model_id=m.id, display_name=m.name or m.id)
            for m in decoded.data
            if m.is_free
        ]
