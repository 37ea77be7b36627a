"""Tests for the valuation engine and display formatting."""
from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from engine.valuation_engine import pnl_percent, summarize, value_holding, value_holdings
from portfolio.holding import Holding
from reporting.formatting import (
    fmt_amount,
    fmt_money,
    fmt_percent,
    fmt_signed_money,
    fmt_signed_percent,
)
from reporting.summary import EMPTY_STATE, holding_lines, portfolio_summary


T0 = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_holding(asset_id: str = "bitcoin", amount: float = 0.5, price: float = 20000, hid: int = 1) -> Holding:
    return Holding(id=hid, asset_id=asset_id, amount=amount, purchase_price=price, date_added=T0)


class TestValueHolding:
    """Tests for per-holding valuation."""

    def test_bitcoin_scenario(self):
        """0.5 BTC bought at 20000 and priced at 30000 gains 50%."""
        v = value_holding(make_holding(), {"bitcoin": 30000.0})
        assert v.current_value == pytest.approx(15000.0)
        assert v.total_cost == pytest.approx(10000.0)
        assert v.pnl == pytest.approx(5000.0)
        assert v.pnl_percent == pytest.approx(50.0)
        assert (v.name, v.symbol) == ("Bitcoin", "BTC")

    @pytest.mark.parametrize(
        "amount,purchase,price",
        [(0.5, 20000, 30000), (3, 1500, 1200), (1234.5678, 0.07, 0.09), (1e-8, 60000, 61000)],
    )
    def test_pnl_equals_amount_times_price_change(self, amount, purchase, price):
        """P&L should equal amount * (price - purchase price)."""
        v = value_holding(make_holding(amount=amount, price=purchase), {"bitcoin": price})
        assert v.pnl == pytest.approx(amount * (price - purchase))

    def test_missing_price_valued_at_zero(self):
        """An asset absent from the price map should be valued at 0."""
        v = value_holding(make_holding("cardano", 100, 0.5), {"bitcoin": 30000.0})
        assert v.current_price == 0.0
        assert v.current_value == 0.0
        assert v.pnl == pytest.approx(-50.0)
        assert v.pnl_percent == pytest.approx(-100.0)

    def test_pnl_percent_zero_cost(self):
        """Zero cost should give 0%, never NaN or infinity."""
        assert pnl_percent(10.0, 0.0) == 0.0
        assert pnl_percent(0.0, 0.0) == 0.0

    def test_pnl_percent_is_finite_for_tiny_cost(self):
        """Tiny but positive costs should still produce a finite percentage."""
        v = value_holding(make_holding(amount=1e-300, price=1e-10), {"bitcoin": 1.0})
        assert math.isfinite(v.pnl_percent)


class TestSummarize:
    """Tests for aggregate valuation."""

    def test_totals(self):
        """Totals should sum value and cost over all holdings."""
        holdings = [make_holding(), make_holding("ethereum", 2, 1500, hid=2)]
        rows = value_holdings(holdings, {"bitcoin": 30000.0, "ethereum": 1000.0})
        s = summarize(rows)
        assert s.total_value == pytest.approx(17000.0)
        assert s.total_cost == pytest.approx(13000.0)
        assert s.total_pnl == pytest.approx(4000.0)
        assert s.holdings_count == 2

    def test_empty_portfolio(self):
        """No holdings should summarize to zeros."""
        s = summarize([])
        assert (s.total_value, s.total_cost, s.total_pnl, s.holdings_count) == (0, 0, 0, 0)


class TestFormatting:
    """Tests for the display formatting rules."""

    def test_amount_eight_decimals(self):
        assert fmt_amount(0.5) == "0.50000000"

    def test_money(self):
        assert fmt_money(15000) == "$15,000.00"
        assert fmt_money(-12.5) == "-$12.50"

    def test_signed_values(self):
        """Non-negative values get an explicit plus sign."""
        assert fmt_signed_money(5000) == "+$5,000.00"
        assert fmt_signed_money(0) == "+$0.00"
        assert fmt_signed_money(-5000) == "-$5,000.00"
        assert fmt_signed_percent(25) == "+25.00%"
        assert fmt_signed_percent(-12.5) == "-12.50%"
        assert fmt_percent(3.14159) == "3.14%"

    def test_portfolio_summary(self):
        """Summary dict should be display-ready."""
        rows = value_holdings([make_holding()], {"bitcoin": 30000.0})
        assert portfolio_summary(summarize(rows)) == {
            "total_value": "$15,000.00",
            "total_cost": "$10,000.00",
            "total_pnl": "+$5,000.00",
            "total_holdings": 1,
        }

    def test_holding_lines(self):
        """Each holding renders on one line; empty portfolios show a hint."""
        rows = value_holdings([make_holding()], {"bitcoin": 30000.0})
        line = holding_lines(rows)[0]
        assert "Bitcoin" in line
        assert "0.50000000" in line
        assert "+$5,000.00 (+50.00%)" in line
        assert holding_lines([]) == [EMPTY_STATE]
