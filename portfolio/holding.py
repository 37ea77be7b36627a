from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

@dataclass(frozen=True)
class Holding:
    id: int
    asset_id: str
    amount: float  # units held
    purchase_price: float  # USD per unit
    date_added: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "assetId": self.asset_id,
            "amount": self.amount,
            "purchasePrice": self.purchase_price,
            "dateAdded": self.date_added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Holding":
        """Build a holding from its persisted form.

        Accepts ``cryptoId`` as an alias of ``assetId`` and a trailing ``Z``
        on the timestamp, as written by the browser version of the tracker.

        Raises:
            KeyError, TypeError, ValueError, OverflowError: if the record is
                malformed or its amount or price is not positive.
        """
        asset_id = data["assetId"] if "assetId" in data else data["cryptoId"]
        if not isinstance(asset_id, str):
            raise TypeError(f"assetId must be a string, got {type(asset_id).__name__}")
        stamp = str(data["dateAdded"])
        if stamp.endswith("Z"):
            stamp = stamp[:-1] + "+00:00"
        added = datetime.fromisoformat(stamp)
        if added.tzinfo is None:
            added = added.replace(tzinfo=timezone.utc)
        return cls(
            id=int(data["id"]),
            asset_id=asset_id,
            amount=_positive("amount", data["amount"]),
            purchase_price=_positive("purchasePrice", data["purchasePrice"]),
            date_added=added,
        )

def _positive(name: str, value: Any) -> float:
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return number
