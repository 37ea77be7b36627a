"""Price cache.

Holds the price map from the most recent successful refresh together with
the display hints a renderer needs: whether a refresh is in flight, the
current error banner, and when prices were last updated.
"""
from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from common.errors import FetchError
from common.logging_config import get_logger
from portfolio.catalog import asset_ids
from prices.client import PriceClient

logger = get_logger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch current prices. Please try again later."

Listener = Callable[["PriceCache"], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceCache:
    def __init__(self, client: PriceClient, clock: Callable[[], datetime] = _utcnow) -> None:
        self._client = client
        self._clock = clock
        self._prices: Dict[str, float] = {}
        self._refresh_lock = threading.Lock()
        self._listeners: List[Listener] = []
        self.loading = False
        self.error: Optional[str] = None
        self.last_updated: Optional[datetime] = None

    @property
    def prices(self) -> Mapping[str, float]:
        return MappingProxyType(self._prices)

    def price(self, asset_id: str) -> float:
        return self._prices.get(asset_id, 0.0)

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked whenever loading or error state changes."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def refresh(self) -> bool:
        """Fetch prices for every catalog asset and replace the map.

        Calls are serialized, so a slow fetch can never overwrite the result
        of a later one. On failure the previous map is kept and ``error`` is
        set until the next successful refresh. Listeners run outside the
        refresh lock, so they may call ``refresh`` themselves.

        Returns:
            True if the price map was replaced.
        """
        self.loading = True
        self._notify()
        with self._refresh_lock:
            self.loading = True
            started = time.monotonic()
            try:
                prices = self._client.fetch_prices(asset_ids())
            except FetchError as e:
                logger.warning(f"Error fetching prices: {e}")
                self.error = FETCH_ERROR_MESSAGE
                ok = False
            else:
                self._prices = prices
                self.last_updated = self._clock()
                self.error = None
                ok = True
                logger.debug(f"Refreshed {len(prices)} prices in {time.monotonic() - started:.2f}s")
            finally:
                self.loading = False
        self._notify()
        return ok
