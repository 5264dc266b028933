"""Google Gemini provider implementation."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import quote

from terminator.model_providers.base import BaseProvider
from terminator.model_providers.config import (
    NO_RESPONSE,
    ChatRole,
    ChatTurn,
    ImageAttachment,
    ModelOption,
    Provider,
)
from terminator.model_providers.errors import InvalidURLError
from terminator.model_providers.schemas import (
    GeminiGenerateResponse,
    GeminiModelsResponse,
    parse_payload,
)

# Characters allowed unescaped in a URL path segment (RFC 3986 pchar plus "/").
_PATH_SAFE = "/:@!$&'()*+,;="


class GeminiProvider(BaseProvider):
    """Provider for Google Gemini models via the Generative Language API.

    The API key travels as the ``key`` query parameter rather than a
    header, and assistant turns use the role name ``model``.
    """

    provider_type = Provider.GEMINI

    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        payload = await self._get_json(
            self.config.url("/v1beta/models"), params={"key": api_key or ""},
        )
        decoded = parse_payload(GeminiModelsResponse, payload)
        if decoded is None:
            return []
        options = []
        for m in decoded.models:
            if "generateContent" not in (m.supported_generation_methods or []):
                continue
            model_id = m.name.removeprefix("models/")
            options.append(ModelOption(provider=self.provider_type, model_id=model_id, display_name=model_id))
        return options

    def generate_url(self, model_id: str) -> str:
        """URL of the generateContent endpoint for ``model_id``.

        Raises:
            InvalidURLError: if the model ID is blank or not encodable.
        """
        if not model_id.strip():
            raise InvalidURLError("Invalid URL: empty Gemini model ID", self.provider_type)
        try:
            escaped = quote(model_id, safe=_PATH_SAFE)
        except UnicodeEncodeError as e:
            raise InvalidURLError(f"Invalid URL for Gemini model {model_id!r}", self.provider_type) from e
        return self.config.url(f"/v1beta/models/{escaped}:generateContent")

    def build_request_body(
        self,
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> dict:
        contents = [
            {
                "role": "model" if turn.role == ChatRole.ASSISTANT else "user",
                "parts": [{"text": turn.text}],
            }
            for turn in history
        ]
        parts: list[dict] = [{"text": text}]
        parts.extend(
            {"inline_data": {"mime_type": image.mime_type, "data": image.base64}}
            for image in images
        )
        contents.append({"role": "user", "parts": parts})
        return {"contents": contents}

    async def _send(
        self,
        model_id: str,
        api_key: Optional[str],
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        url = self.generate_url(model_id)
        payload = await self._post_json(
            url,
            self.build_request_body(history, text, images),
            params={"key": api_key or ""},
        )
        decoded = parse_payload(GeminiGenerateResponse, payload)
        if decoded is None:
            return NO_RESPONSE
        return decoded.reply_text()
