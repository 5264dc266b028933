"""Model catalog: concurrent model discovery across providers."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Sequence

from terminator.logging_config import PerformanceTimer
from terminator.model_providers.base import BaseProvider
from terminator.model_providers.config import ModelOption, Provider, ProviderCredentials
from terminator.model_providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


def sort_models(options: Iterable[ModelOption]) -> list[ModelOption]:
    """Sort case-insensitively by menu label, then by option ID."""
    return sorted(options, key=lambda o: (o.menu_label.casefold(), o.id))


def find_model(options: Iterable[ModelOption], option_id: Optional[str]) -> Optional[ModelOption]:
    """Look up a model by its ``"<provider>::<model_id>"`` ID."""
    if not option_id:
        return None
    for option in options:
        if option.id == option_id:
            return option
    return None


def filter_models(options: Iterable[ModelOption], query: str) -> list[ModelOption]:
    """Case-insensitive substring match on display name, provider title or model ID.

    A blank query matches everything.
    """
    q = query.strip().casefold()
    if not q:
        return list(options)
    return [
        o for o in options
        if q in o.display_name.casefold()
        or q in o.provider.title.casefold()
        or q in o.model_id.casefold()
    ]


def resolve_selection(options: Sequence[ModelOption], selected_id: Optional[str]) -> Optional[ModelOption]:
    """The selected model if still offered, else the first option (None if empty)."""
    return find_model(options, selected_id) or (options[0] if options else None)


def toggle_favorite(favorite_ids: Sequence[str], option_id: str) -> list[str]:
    """Return ``favorite_ids`` with ``option_id`` removed if present, else appended."""
    if option_id in favorite_ids:
        return [i for i in favorite_ids if i != option_id]
    return [*favorite_ids, option_id]


class ModelCatalog:
    """Builds the merged, sorted model list for a set of credentials.

    OpenRouter Free is always queried; every other provider only when
    its key is set. A provider that fails contributes nothing and never
    affects the others.

    Usage::

        catalog = ModelCatalog()
        options = await catalog.refresh(ProviderCredentials(gemini="..."))
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or ProviderRegistry()

    def providers_to_query(self, credentials: ProviderCredentials) -> list[Provider]:
        return [p for p in Provider if credentials.is_configured(p)]

    async def _list_safely(self, adapter: BaseProvider, api_key: Optional[str]) -> list[ModelOption]:
        try:
            return await adapter.list_models(api_key)
        except Exception:
            logger.exception(f"Unexpected error listing {adapter.provider_type.title} models")
            return []

    async def refresh(self, credentials: ProviderCredentials) -> list[ModelOption]:
        """Query all eligible providers concurrently and merge the results."""
        providers = self.providers_to_query(credentials)
        with PerformanceTimer("catalog refresh"):
            results = await asyncio.gather(*(
                self._list_safely(self.registry.get_provider(p), credentials.key_for(p))
                for p in providers
            ))

        merged = [option for chunk in results for option in chunk]
        logger.info(
            f"Catalog refreshed: {len(merged)} models from {len(providers)} providers",
            extra={"model_count": len(merged)},
        )
        return sort_models(merged)


async def refresh_catalog(
    credentials: ProviderCredentials,
    registry: Optional[ProviderRegistry] = None,
) -> list[ModelOption]:
    """Convenience wrapper around ``ModelCatalog(registry).refresh()``."""
    return await ModelCatalog(registry).refresh(credentials)
