"""Tracker application state.

``CryptoTracker`` owns the holding store, the price cache and the refresh
scheduler, and is handed to whatever drives the UI loop. Valuations are
computed on demand from the current holdings and prices.
"""
from __future__ import annotations

from typing import Any, List, Optional

from common.config_loader import TrackerConfig
from common.logging_config import get_logger
from engine.refresh_scheduler import DEFAULT_REFRESH_INTERVAL, RefreshScheduler
from engine.valuation_engine import HoldingValuation, PortfolioSummary, summarize, value_holdings
from portfolio.holding import Holding
from portfolio.store import HoldingStore
from prices.cache import PriceCache
from prices.client import PriceClient
from reporting.export import ExportFile, export_portfolio
from storage.kv_store import JsonFileStore

logger = get_logger(__name__)


class CryptoTracker:
    def __init__(
        self,
        store: HoldingStore,
        cache: PriceCache,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self.store = store
        self.cache = cache
        self.scheduler = RefreshScheduler(self.cache.refresh, interval=refresh_interval)

    @classmethod
    def from_config(cls, cfg: TrackerConfig) -> "CryptoTracker":
        """Wire file-backed storage and the live price API from configuration."""
        store = HoldingStore(JsonFileStore(cfg.storage_path), key=cfg.storage_key)
        client = PriceClient(base_url=cfg.price_api_url, timeout=cfg.request_timeout)
        return cls(store, PriceCache(client), refresh_interval=cfg.refresh_interval)

    def start(self, schedule: bool = True) -> None:
        """Load holdings and, if ``schedule``, begin periodic price refreshes."""
        self.store.load()
        if schedule:
            self.scheduler.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.scheduler.cancel(timeout)

    def refresh_prices(self) -> bool:
        return self.cache.refresh()

    def add_holding(self, asset_id: Any, amount: Any, purchase_price: Any) -> Holding:
        return self.store.add(asset_id, amount, purchase_price)

    def remove_holding(self, holding_id: int) -> bool:
        return self.store.remove(holding_id)

    def valuations(self) -> List[HoldingValuation]:
        return value_holdings(self.store.holdings, self.cache.prices)

    def summary(self) -> PortfolioSummary:
        return summarize(self.valuations())

    def export(self, fmt: str) -> ExportFile:
        return export_portfolio(self.valuations(), fmt)
