"""Holding store.

Owns the ordered list of holdings and mirrors it to a key-value store.
Every mutation rewrites the persisted list in full, so storage always
matches memory. Display order is insertion order.
"""
from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from common.errors import StorageParseError, ValidationError
from common.logging_config import get_logger
from portfolio.catalog import ASSET_CATALOG
from portfolio.holding import Holding
from storage.kv_store import KeyValueStore

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "cryptoHoldings"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_positive(field: str, value: Any) -> float:
    """Coerce a user-supplied amount or price to a positive finite float."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(field, value, "is required")
    if isinstance(value, bool):
        raise ValidationError(field, value, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, value, "must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(field, value, "must be finite")
    if number <= 0:
        raise ValidationError(field, value, "must be greater than zero")
    return number


def validate_request(asset_id: Any, amount: Any, purchase_price: Any) -> Tuple[str, float, float]:
    """Validate the fields of an add request.

    Returns:
        Tuple of (asset_id, amount, purchase_price) with numbers coerced.

    Raises:
        ValidationError: on the first missing or invalid field.
    """
    if not asset_id or not isinstance(asset_id, str):
        raise ValidationError("asset_id", asset_id, "is required")
    if asset_id not in ASSET_CATALOG:
        raise ValidationError("asset_id", asset_id, "is not a supported asset")
    return (
        asset_id,
        _parse_positive("amount", amount),
        _parse_positive("purchase_price", purchase_price),
    )


class HoldingStore:
    """In-memory holding list persisted under a single storage key."""

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._holdings: List[Holding] = []

    @property
    def holdings(self) -> Tuple[Holding, ...]:
        return tuple(self._holdings)

    def __len__(self) -> int:
        return len(self._holdings)

    def get(self, holding_id: int) -> Optional[Holding]:
        for h in self._holdings:
            if h.id == holding_id:
                return h
        return None

    def _decode(self, raw: str) -> List[Holding]:
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise StorageParseError(self._key, f"invalid JSON ({e})") from e
        if not isinstance(data, list):
            raise StorageParseError(self._key, f"expected a list, got {type(data).__name__}")
        holdings = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise StorageParseError(self._key, f"entry {i} is not an object")
            try:
                holdings.append(Holding.from_dict(item))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                raise StorageParseError(self._key, f"entry {i} is malformed ({e!r})") from e
        return holdings

    def load(self) -> List[Holding]:
        """Replace the in-memory list with the persisted one.

        Missing or unreadable data yields an empty list; this never raises.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            self._holdings = []
        else:
            try:
                self._holdings = self._decode(raw)
            except StorageParseError as e:
                logger.warning(f"Ignoring stored holdings: {e}")
                self._holdings = []
        logger.debug(f"Loaded {len(self._holdings)} holdings")
        return list(self._holdings)

    def _commit(self, holdings: List[Holding]) -> None:
        """Persist ``holdings``, then adopt them as the in-memory list."""
        payload = json.dumps([h.to_dict() for h in holdings])
        self._storage.set(self._key, payload)
        self._holdings = holdings

    def _next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        if self._holdings:
            highest = max(h.id for h in self._holdings)
            if candidate <= highest:
                candidate = highest + 1
        return candidate

    def add(self, asset_id: Any, amount: Any, purchase_price: Any) -> Holding:
        """Validate and append a new holding, then persist the list.

        Raises:
            ValidationError: if any field is missing or invalid; nothing is
                stored in that case.
            OSError: if the storage write fails; the in-memory list is left
                unchanged.
        """
        asset_id, amount, purchase_price = validate_request(asset_id, amount, purchase_price)
        now = self._clock()
        holding = Holding(
            id=self._next_id(now),
            asset_id=asset_id,
            amount=amount,
            purchase_price=purchase_price,
            date_added=now,
        )
        self._commit(self._holdings + [holding])
        logger.info(f"Added holding {holding.id}: {amount} {asset_id} @ ${purchase_price:,.2f}")
        return holding

    def remove(self, holding_id: int) -> bool:
        """Remove the holding with ``holding_id``; absent ids are a no-op.

        Returns:
            True if a holding was removed.
        """
        remaining = [h for h in self._holdings if h.id != holding_id]
        removed = len(remaining) != len(self._holdings)
        self._commit(remaining)
        if removed:
            logger.info(f"Removed holding {holding_id}")
        return removed
