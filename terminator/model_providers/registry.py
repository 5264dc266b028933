"""Provider registry: create, cache, and look up adapter instances."""

from __future__ import annotations

from typing import Optional

from terminator.model_providers.base import BaseProvider, ClientFactory
from terminator.model_providers.config import Provider, ProviderConfig
from terminator.settings import Settings, get_settings


# ── Factory ───────────────────────────────────────────────────────────


def default_config(provider: Provider, settings: Optional[Settings] = None) -> ProviderConfig:
    """Connection config for ``provider`` derived from settings."""
    settings = settings or get_settings()
    base_urls = {
        Provider.OPENAI: settings.openai_base_url,
        Provider.ANTHROPIC: settings.anthropic_base_url,
        Provider.GEMINI: settings.gemini_base_url,
        Provider.OPENROUTER: settings.openrouter_base_url,
        Provider.OPENROUTER_FREE: settings.openrouter_base_url,
    }
    extra = {}
    if provider == Provider.ANTHROPIC:
        extra = {
            "anthropic_version": settings.anthropic_version,
            "max_tokens": settings.anthropic_max_tokens,
        }
    return ProviderConfig(
        provider=provider,
        base_url=base_urls[provider],
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.request_timeout,
        catalog_timeout=settings.catalog_timeout,
        extra=extra,
    )


def create_provider(config: ProviderConfig, client_factory: Optional[ClientFactory] = None) -> BaseProvider:
    """Instantiate an adapter from its config."""
    if config.provider == Provider.OPENAI:
        from terminator.model_providers.openai_provider import OpenAIProvider
        return OpenAIProvider(config, client_factory)
    elif config.provider == Provider.ANTHROPIC:
        from terminator.model_providers.anthropic_provider import AnthropicProvider
        return AnthropicProvider(config, client_factory)
    elif config.provider == Provider.GEMINI:
        from terminator.model_providers.gemini_provider import GeminiProvider
        return GeminiProvider(config, client_factory)
    elif config.provider == Provider.OPENROUTER:
        from terminator.model_providers.openrouter_provider import OpenRouterProvider
        return OpenRouterProvider(config, client_factory)
    elif config.provider == Provider.OPENROUTER_FREE:
        from terminator.model_providers.openrouter_provider import OpenRouterFreeProvider
        return OpenRouterFreeProvider(config, client_factory)
    else:
        raise ValueError(f"Unknown provider: {config.provider}")


# ── Registry ──────────────────────────────────────────────────────────


class ProviderRegistry:
    """Holds one adapter per provider, built lazily from settings.

    Adapters are stateless apart from their connection config, so a
    single registry can serve any number of concurrent calls.

    Usage::

        registry = ProviderRegistry()
        adapter = registry.get_provider(Provider.GEMINI)
        reply = await adapter.send_message("gemini-2.0-flash", key, history, "Hi")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self._settings = settings
        self._client_factory = client_factory
        self._configs: dict[Provider, ProviderConfig] = {}
        self._providers: dict[Provider, BaseProvider] = {}

    def configure(self, config: ProviderConfig) -> None:
        """Override the connection config for one provider."""
        self._configs[config.provider] = config
        self._providers.pop(config.provider, None)

    def get_config(self, provider: Provider) -> ProviderConfig:
        if provider not in self._configs:
            self._configs[provider] = default_config(provider, self._settings)
        return self._configs[provider]

    def get_provider(self, provider: Provider) -> BaseProvider:
        """Get the cached adapter for ``provider``."""
        if not isinstance(provider, Provider):
            raise ValueError(f"Unknown provider: {provider!r}")
        if provider not in self._providers:
            self._providers[provider] = create_provider(self.get_config(provider), self._client_factory)
        return self._providers[provider]

    def clear(self) -> None:
        """Drop all configs and cached adapters."""
        self._configs.clear()
        self._providers.clear()
