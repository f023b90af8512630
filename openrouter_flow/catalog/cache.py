# openrouter_flow/catalog/cache.py

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ..llm.client import OpenRouterClient
from ..llm.errors import OpenRouterError
from ..llm.models import FEATURED_MODELS, Model
from ..utils.logger import get_logger

logger = get_logger(__name__)

CACHE_TTL = 5 * 60  # seconds


@dataclass(frozen=True)
class CacheSnapshot:
    entries: Tuple[Model, ...]
    fetched_at: float


class ModelCache:
    """
    Time-boxed cache of the OpenRouter model catalog.

    The snapshot is only ever replaced as a whole, after a successful fetch.
    Failed refreshes fall back to the featured list and leave it alone.
    """

    def __init__(
            self,
            client: OpenRouterClient,
            featured: Sequence[str] = FEATURED_MODELS,
            ttl: float = CACHE_TTL,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.featured = tuple(featured)
        self.ttl = ttl
        self._clock = clock
        self._snapshot: Optional[CacheSnapshot] = None

    @property
    def is_valid(self) -> bool:
        snapshot = self._snapshot
        return (
            snapshot is not None
            and len(snapshot.entries) > 0
            and self._clock() - snapshot.fetched_at < self.ttl
        )

    def fallback_models(self) -> Tuple[Model, ...]:
        """Static list built from the featured identifiers."""
        return tuple(Model.from_id(model_id) for model_id in self.featured)

    async def get_models(self, api_key: Optional[str]) -> Tuple[Model, ...]:
        """
        Return the cached catalog, refreshing it when stale.

        Args:
            api_key: Key used for the refresh; without one the fallback is returned

        Returns:
            Tuple of models
        """
        snapshot = self._snapshot
        if snapshot is not None and snapshot.entries and self._clock() - snapshot.fetched_at < self.ttl:
            return snapshot.entries

        if not api_key:
            return self.fallback_models()

        try:
            models = await self.client.list_models(api_key)
        except OpenRouterError as e:
            logger.error(f"Error fetching models: {e}")
            return self.fallback_models()

        snapshot = CacheSnapshot(entries=tuple(models), fetched_at=self._clock())
        self._snapshot = snapshot
        return snapshot.entries
