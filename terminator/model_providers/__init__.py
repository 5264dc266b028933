"""Multi-Provider Chat Core.

Provides a unified interface to OpenAI, Anthropic, Gemini and OpenRouter
(keyed and free tiers): concurrent model discovery, attachment encoding
and one-shot chat sends over raw HTTP.
"""

from terminator.model_providers.config import (
    NO_RESPONSE,
    AttachmentRef,
    ChatRole,
    ChatTurn,
    ImageAttachment,
    ModelOption,
    Provider,
    ProviderConfig,
    ProviderCredentials,
)
from terminator.model_providers.errors import (
    EmptyMessageError,
    InvalidURLError,
    ProviderError,
    TransportError,
)
from terminator.model_providers.base import BaseProvider
from terminator.model_providers.registry import ProviderRegistry, create_provider, default_config
from terminator.model_providers.catalog import (
    ModelCatalog,
    filter_models,
    find_model,
    refresh_catalog,
    resolve_selection,
    sort_models,
    toggle_favorite,
)
from terminator.model_providers.dispatcher import ChatDispatcher, ChatRequest
from terminator.model_providers.session import ChatSession, sort_sessions

__all__ = [
    # Config
    "NO_RESPONSE",
    "Provider",
    "ChatRole",
    "ChatTurn",
    "ModelOption",
    "ProviderCredentials",
    "AttachmentRef",
    "ImageAttachment",
    "ProviderConfig",
    # Errors
    "ProviderError",
    "TransportError",
    "InvalidURLError",
    "EmptyMessageError",
    # Base
    "BaseProvider",
    # Registry
    "ProviderRegistry",
    "create_provider",
    "default_config",
    # Catalog
    "ModelCatalog",
    "refresh_catalog",
    "sort_models",
    "find_model",
    "filter_models",
    "resolve_selection",
    "toggle_favorite",
    # Dispatch
    "ChatDispatcher",
    "ChatRequest",
    "ChatSession",
    "sort_sessions",
]
