"""Provider: a configured API client plus the lifecycle coordinator."""

from __future__ import annotations

import logging
from typing import Any

from .adapter import EntityAdapter
from .api import ApiClient
from .config import ProviderConfig
from .lifecycle import LifecycleCoordinator
from .serializer import MutationSerializer

logger = logging.getLogger(__name__)


class Provider:
    """Everything a managed spec needs to reach the remote API."""

    def __init__(
        self,
        client: ApiClient,
        coordinator: LifecycleCoordinator | None = None,
    ) -> None:
        self.client = client
        self.coordinator = coordinator or LifecycleCoordinator(MutationSerializer.shared())
        self._adapters: dict[type, EntityAdapter[Any, Any, Any]] = {}

    @classmethod
    def configure(cls, config: ProviderConfig, **client_kwargs: Any) -> Provider:
        """Build a provider from configuration; raises ValueError without a token."""
        if not config.token:
            raise ValueError("Missing API token; set the provider token or RIVERSPEC_API_TOKEN")
        logger.info("Configuring provider for %s", config.endpoint)
        client = ApiClient(
            config.token,
            endpoint=config.endpoint,
            timeout=config.timeout,
            **client_kwargs,
        )
        return cls(client)

    def adapter[A: EntityAdapter[Any, Any, Any]](self, adapter_type: type[A]) -> A:
        """Return the shared adapter instance for a kind."""
        if adapter_type not in self._adapters:
            self._adapters[adapter_type] = adapter_type(self.client)
        return self._adapters[adapter_type]  # type: ignore[return-value]

    def close(self) -> None:
        self.client.close()
