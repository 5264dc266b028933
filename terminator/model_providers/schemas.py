"""Wire response schemas.

Pydantic models for the parts of each provider's JSON that the chat core
reads. Unknown fields are ignored; anything missing or of the wrong type
fails validation, which callers turn into an empty model list or the
``NO_RESPONSE`` sentinel. Chat replies only look at the first choice or
candidate, and text parts that are not strings are skipped rather than
failing the whole reply.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError

from terminator.model_providers.config import NO_RESPONSE

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: type[SchemaT], payload: Any) -> Optional[SchemaT]:
    """Validate ``payload`` against ``schema``; None on any mismatch."""
    if payload is None:
        return None
    try:
        return schema.model_validate(payload)
    except ValidationError:
        return None


def join_text(parts: list[Any]) -> str:
    """Join the string text fields with newlines; sentinel if none."""
    text = "\n".join(p for p in parts if isinstance(p, str))
    return text or NO_RESPONSE


# ─── Model listings ──────────────────────────────────────────────────


class OpenAIModel(BaseModel):
    id: str


class OpenAIModelsResponse(BaseModel):
    data: list[OpenAIModel]


class AnthropicModel(BaseModel):
    id: str
    display_name: Optional[str] = None


class AnthropicModelsResponse(BaseModel):
    data: list[AnthropicModel]


class GeminiModel(BaseModel):
    name: str
    supported_generation_methods: Optional[list[str]] = Field(
        default=None, alias="supportedGenerationMethods"
    )


class GeminiModelsResponse(BaseModel):
    models: list[GeminiModel]


class OpenRouterPricing(BaseModel):
    prompt: Optional[str] = None
    completion: Optional[str] = None


class OpenRouterModel(BaseModel):
    id: str
    name: Optional[str] = None
    pricing: Optional[OpenRouterPricing] = None

    @property
    def is_free(self) -> bool:
        if ":free" in self.id.lower():
            return True
        if self.pricing is None:
            return False
        return self.pricing.prompt == "0" or self.pricing.completion == "0"


class OpenRouterModelsResponse(BaseModel):
    data: list[OpenRouterModel]


# ─── Chat completions (OpenAI / OpenRouter) ──────────────────────────


class ContentPart(BaseModel):
    text: Any = None


class CompletionMessage(BaseModel):
    content: Any = None

    def reply_text(self) -> str:
        if isinstance(self.content, str):
            return self.content
        if isinstance(self.content, list):
            parts = [parse_payload(ContentPart, item) for item in self.content]
            return join_text([part.text for part in parts if part is not None])
        return NO_RESPONSE


class CompletionChoice(BaseModel):
    message: Optional[CompletionMessage] = None


class ChatCompletionResponse(BaseModel):
    choices: list[Any]

    def reply_text(self) -> str:
        first = parse_payload(CompletionChoice, self.choices[0]) if self.choices else None
        if first is None or first.message is None:
            return NO_RESPONSE
        return first.message.reply_text()


# ─── Anthropic messages ──────────────────────────────────────────────


class AnthropicContentBlock(BaseModel):
    type: Any = None
    text: Any = None


class AnthropicMessageResponse(BaseModel):
    content: list[Any]

    def reply_text(self) -> str:
        blocks = [parse_payload(AnthropicContentBlock, item) for item in self.content]
        return join_text([block.text for block in blocks if block is not None])


# ─── Gemini generateContent ──────────────────────────────────────────


class GeminiPart(BaseModel):
    text: Any = None


class GeminiContent(BaseModel):
    parts: list[Any]


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiGenerateResponse(BaseModel):
    candidates: list[Any]

    def reply_text(self) -> str:
        first = parse_payload(GeminiCandidate, self.candidates[0]) if self.candidates else None
        if first is None or first.content is None:
            return NO_RESPONSE
        parts = [parse_payload(GeminiPart, item) for item in first.content.parts]
        return join_text([part.text for part in parts if part is not None])
