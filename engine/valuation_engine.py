"""Valuation engine.

Pure functions that value holdings against a price map. Assets missing
from the price map are valued at zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Mapping

from portfolio.catalog import get_asset
from portfolio.holding import Holding


@dataclass(frozen=True)
class HoldingValuation:
    """One holding valued at current prices."""

    holding_id: int
    asset_id: str
    name: str
    symbol: str
    amount: float
    purchase_price: float
    current_price: float
    current_value: float
    total_cost: float
    pnl: float
    pnl_percent: float
    date_added: datetime


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: float
    total_cost: float
    total_pnl: float
    holdings_count: int


def pnl_percent(pnl: float, total_cost: float) -> float:
    """P&L as a percentage of cost; zero when there is no cost."""
    return (pnl / total_cost) * 100 if total_cost > 0 else 0.0


def value_holding(holding: Holding, prices: Mapping[str, float]) -> HoldingValuation:
    current_price = float(prices.get(holding.asset_id, 0.0) or 0.0)
    current_value = holding.amount * current_price
    total_cost = holding.amount * holding.purchase_price
    pnl = current_value - total_cost

    asset = get_asset(holding.asset_id)
    return HoldingValuation(
        holding_id=holding.id,
        asset_id=holding.asset_id,
        name=asset.name if asset else holding.asset_id,
        symbol=asset.symbol if asset else holding.asset_id.upper(),
        amount=holding.amount,
        purchase_price=holding.purchase_price,
        current_price=current_price,
        current_value=current_value,
        total_cost=total_cost,
        pnl=pnl,
        pnl_percent=pnl_percent(pnl, total_cost),
        date_added=holding.date_added,
    )


def value_holdings(holdings: Iterable[Holding], prices: Mapping[str, float]) -> List[HoldingValuation]:
    return [value_holding(h, prices) for h in holdings]


def summarize(valuations: Iterable[HoldingValuation]) -> PortfolioSummary:
    rows = list(valuations)
    total_value = sum(v.current_value for v in rows)
    total_cost = sum(v.total_cost for v in rows)
    return PortfolioSummary(
        total_value=total_value,
        total_cost=total_cost,
        total_pnl=total_value - total_cost,
        holdings_count=len(rows),
    )
