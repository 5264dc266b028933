"""Configuration and data types for the multi-provider chat core."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


NO_RESPONSE = "No response"


class Provider(enum.Enum):
    """Supported AI chat backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OPENROUTER = "openrouter"
    OPENROUTER_FREE = "openrouter-free"

    @property
    def title(self) -> str:
        """Human label used in menus and catalog sorting."""
        return _PROVIDER_TITLES[self]

    @property
    def requires_key(self) -> bool:
        return self is not Provider.OPENROUTER_FREE


_PROVIDER_TITLES = {
    Provider.OPENAI: "OpenAI",
    Provider.ANTHROPIC: "Anthropic",
    Provider.GEMINI: "Gemini",
    Provider.OPENROUTER: "OpenRouter",
    Provider.OPENROUTER_FREE: "OpenRouter Free",
}


class ChatRole(enum.Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ModelOption:
    """A selectable model. Identity is ``(provider, model_id)``."""

    provider: Provider
    model_id: str
    display_name: str = field(default="", compare=False)

    def __post_init__(self):
        if not isinstance(self.provider, Provider):
            raise TypeError(f"provider must be a Provider, got {self.provider!r}")
        if not self.display_name:
            object.__setattr__(self, "display_name", self.model_id)

    @property
    def id(self) -> str:
        return f"{self.provider.value}::{self.model_id}"

    @property
    def menu_label(self) -> str:
        return f"{self.provider.title} - {self.display_name}"


@dataclass(frozen=True)
class ProviderCredentials:
    """API keys per provider family. OpenRouter Free needs none."""

    openai: str = ""
    anthropic: str = ""
    gemini: str = ""
    openrouter: str = ""

    def key_for(self, provider: Provider) -> Optional[str]:
        """Return the trimmed key for ``provider`` (None for OpenRouter Free)."""
        if provider == Provider.OPENAI:
            return self.openai.strip()
        if provider == Provider.ANTHROPIC:
            return self.anthropic.strip()
        if provider == Provider.GEMINI:
            return self.gemini.strip()
        if provider == Provider.OPENROUTER:
            return self.openrouter.strip()
        return None

    def is_configured(self, provider: Provider) -> bool:
        if not provider.requires_key:
            return True
        return bool(self.key_for(provider))


@dataclass(frozen=True)
class ChatTurn:
    """One entry of the conversation history."""

    role: ChatRole
    text: str


@dataclass(frozen=True)
class AttachmentRef:
    """Reference to a local file the user attached to a message."""

    path: Path
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))
        if not self.name:
            object.__setattr__(self, "name", self.path.name)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "AttachmentRef":
        return cls(path=Path(path).expanduser())


@dataclass(frozen=True)
class ImageAttachment:
    """An image inlined into an outgoing request."""

    mime_type: str
    base64: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass
class ProviderConfig:
    """Connection configuration for one provider adapter.

    Holds endpoints and timeouts only; API keys travel with each call.
    """

    provider: Provider
    base_url: str
    connect_timeout: float = 10.0
    read_timeout: float = 120.0
    catalog_timeout: float = 20.0
    extra: dict = field(default_factory=dict)

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"
