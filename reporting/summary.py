from __future__ import annotations
from typing import Dict, Any, List, Sequence
from engine.valuation_engine import HoldingValuation, PortfolioSummary
from reporting.formatting import fmt_amount, fmt_money, fmt_signed_money, fmt_signed_percent

EMPTY_STATE = "No holdings yet. Add your first cryptocurrency above!"

def portfolio_summary(summary: PortfolioSummary) -> Dict[str, Any]:
    return {
        "total_value": fmt_money(summary.total_value),
        "total_cost": fmt_money(summary.total_cost),
        "total_pnl": fmt_signed_money(summary.total_pnl),
        "total_holdings": summary.holdings_count,
    }

def holding_lines(valuations: Sequence[HoldingValuation]) -> List[str]:
    if not valuations:
        return [EMPTY_STATE]
    return [
        f"[{v.holding_id}] {v.name:<13} {v.symbol:<5} {fmt_amount(v.amount):>20} "
        f"{fmt_money(v.current_price):>14} {fmt_money(v.current_value):>16} "
        f"{fmt_signed_money(v.pnl)} ({fmt_signed_percent(v.pnl_percent)})"
        for v in valuations
    ]
