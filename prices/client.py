"""
HTTP client for the CoinGecko simple price endpoint.

All supported assets are requested in a single batched call; the response
``{"bitcoin": {"usd": 30000}, ...}`` is flattened to ``{"bitcoin": 30000.0}``.
"""
from __future__ import annotations

import math
from typing import Dict, Iterable, Optional

import requests

from common.config_loader import DEFAULT_PRICE_API_URL
from common.errors import FetchError
from common.logging_config import get_logger

logger = get_logger(__name__)

VS_CURRENCY = "usd"


class PriceClient:
    """Fetches current USD prices for a list of asset identifiers."""

    def __init__(
        self,
        base_url: str = DEFAULT_PRICE_API_URL,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_prices(self, asset_ids: Iterable[str]) -> Dict[str, float]:
        """Return the current USD price per asset id.

        Assets the API does not quote are left out of the result.

        Raises:
            FetchError: on transport failure, a non-success HTTP status, or a
                response body that is not a JSON object.
        """
        ids = ",".join(asset_ids)
        try:
            response = self._session.get(
                self.base_url,
                params={"ids": ids, "vs_currencies": VS_CURRENCY},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FetchError(f"Price request failed: {e}") from e

        if not response.ok:
            raise FetchError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Price response is not valid JSON: {e}", status_code=response.status_code) from e
        if not isinstance(payload, dict):
            raise FetchError("Price response is not a JSON object", status_code=response.status_code)

        prices: Dict[str, float] = {}
        for asset_id, quote in payload.items():
            value = quote.get(VS_CURRENCY) if isinstance(quote, dict) else None
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                logger.debug(f"No {VS_CURRENCY} quote for {asset_id}")
                continue
            if not math.isfinite(value) or value < 0:
                logger.debug(f"Ignoring invalid quote for {asset_id}: {value}")
                continue
            prices[asset_id] = float(value)
        return prices
