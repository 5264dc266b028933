"""Abstract base class for all provider adapters."""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

import httpx

from terminator.logging_config import log_performance
from terminator.model_providers.attachments import encode_images
from terminator.model_providers.config import (
    AttachmentRef,
    ChatTurn,
    ImageAttachment,
    ModelOption,
    Provider,
    ProviderConfig,
)
from terminator.model_providers.errors import InvalidURLError, ProviderError, TransportError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]


class BaseProvider(abc.ABC):
    """Interface that every provider adapter implements.

    Subclasses handle:
    1. Building the provider-native model listing request and parsing it
    2. Converting history, text and images into the native chat request
    3. Extracting the reply text from the native response

    Listing is fail-soft (any failure yields ``[]``); sending raises
    ``TransportError`` for network failures and non-2xx statuses but
    degrades unparseable bodies to ``NO_RESPONSE``.
    """

    provider_type: Provider

    def __init__(self, config: ProviderConfig, client_factory: Optional[ClientFactory] = None):
        self.config = config
        self._client_factory = client_factory or httpx.AsyncClient

    # ── Abstract methods ──────────────────────────────────────────────

    @abc.abstractmethod
    async def _fetch_models(self, api_key: Optional[str]) -> list[ModelOption]:
        """Request and parse the provider's model list. May raise."""

    @abc.abstractmethod
    async def _send(
        self,
        model_id: str,
        api_key: Optional[str],
        history: Sequence[ChatTurn],
        text: str,
        images: list[ImageAttachment],
    ) -> str:
        """Perform one chat request and return the reply text."""

    # ── Public operations ─────────────────────────────────────────────

    async def list_models(self, api_key: Optional[str] = None) -> list[ModelOption]:
        """List the models this provider offers. Never raises."""
        try:
            models = await self._fetch_models(api_key)
        except (httpx.HTTPError, ProviderError, ValueError) as e:
            logger.warning(f"{self.provider_type.title} model listing failed: {e}")
            return []
        logger.debug(
            f"{self.provider_type.title} listed {len(models)} models",
            extra={"provider": self.provider_type.value, "model_count": len(models)},
        )
        return models

    @log_performance()
    async def send_message(
        self,
        model_id: str,
        api_key: Optional[str],
        history: Sequence[ChatTurn],
        text: str,
        attachments: Sequence[AttachmentRef] = (),
    ) -> str:
        """Send ``text`` (plus image attachments) after ``history``."""
        # File reads and base64 encoding stay off the event loop.
        images = await asyncio.to_thread(encode_images, list(attachments))
        logger.info(
            f"Sending to {self.provider_type.title} model {model_id} "
            f"({len(history)} prior turns, {len(images)} images)"
        )
        return await self._send(model_id, api_key, list(history), text, images)

    # ── Shared helpers ────────────────────────────────────────────────

    def _timeout(self, read_timeout: float) -> httpx.Timeout:
        return httpx.Timeout(read_timeout, connect=self.config.connect_timeout)

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        body: Optional[dict] = None,
        read_timeout: Optional[float] = None,
    ) -> Any:
        """Perform one HTTP exchange and return the decoded JSON body.

        Returns None when a 2xx body is not valid JSON. Raises
        ``TransportError`` for connection problems, timeouts, non-2xx
        statuses and header values (usually a pasted API key) that cannot
        be encoded; ``InvalidURLError`` when the URL cannot be parsed.
        """
        title = self.provider_type.title
        timeout = self._timeout(read_timeout or self.config.read_timeout)
        try:
            async with self._client_factory() as client:
                response = await client.request(
                    method, url, headers=headers, params=params, json=body, timeout=timeout,
                )
        except httpx.InvalidURL as e:
            raise InvalidURLError(f"Invalid URL for {title}: {e}", self.provider_type) from e
        except UnicodeEncodeError as e:
            raise TransportError(
                f"{title} request could not be encoded; check the API key for non-ASCII characters",
                self.provider_type,
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"{title} request timed out", self.provider_type) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{title} request failed: {e}", self.provider_type) from e

        if not response.is_success:
            raise TransportError(
                f"{title} returned HTTP {response.status_code}: {response.text[:300]}",
                self.provider_type,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            logger.warning(f"{title} returned a non-JSON body ({len(response.content)} bytes)")
            return None

    async def _get_json(self, url: str, **kwargs: Any) -> Any:
        return await self._request_json(
            "GET", url, read_timeout=self.config.catalog_timeout, **kwargs,
        )

    async def _post_json(self, url: str, body: dict, **kwargs: Any) -> Any:
        return await self._request_json("POST", url, body=body, **kwargs)

    @staticmethod
    def _history_messages(history: Sequence[ChatTurn]) -> list[dict]:
        """History as ``{"role", "content"}`` pairs (OpenAI/Anthropic style)."""
        return [{"role": turn.role.value, "content": turn.text} for turn in history]
