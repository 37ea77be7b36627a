"""Portfolio export to CSV and JSON.

Rows carry name, symbol, amount, purchasePrice, currentPrice, currentValue,
totalCost, pnl, pnlPercent and dateAdded. CSV fields that contain commas or
quotes are quoted by pandas; money and percentage columns are fixed to two
decimals while amount keeps its natural precision.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Sequence

import pandas as pd

from common.errors import NothingToExportError
from engine.valuation_engine import HoldingValuation

EXPORT_FORMATS = ("csv", "json")

CSV_COLUMNS = {
    "name": "Name",
    "symbol": "Symbol",
    "amount": "Amount",
    "purchasePrice": "Purchase Price",
    "currentPrice": "Current Price",
    "currentValue": "Current Value",
    "totalCost": "Total Cost",
    "pnl": "Profit/Loss",
    "pnlPercent": "P&L %",
    "dateAdded": "Date Added",
}

FIXED_2DP = ("purchasePrice", "currentPrice", "currentValue", "totalCost", "pnl", "pnlPercent")


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content_type: str
    content: str


def export_rows(valuations: Sequence[HoldingValuation]) -> List[Dict[str, Any]]:
    return [
        {
            "name": v.name,
            "symbol": v.symbol,
            "amount": v.amount,
            "purchasePrice": v.purchase_price,
            "currentPrice": v.current_price,
            "currentValue": v.current_value,
            "totalCost": v.total_cost,
            "pnl": v.pnl,
            "pnlPercent": v.pnl_percent,
            "dateAdded": v.date_added.strftime("%Y-%m-%d"),
        }
        for v in valuations
    ]


def _natural(value: float) -> str:
    """Shortest plain-decimal representation: no exponent, no trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def to_csv(rows: Sequence[Dict[str, Any]]) -> str:
    df = pd.DataFrame(list(rows), columns=list(CSV_COLUMNS))
    df["amount"] = df["amount"].map(_natural)
    for col in FIXED_2DP:
        df[col] = df[col].map(lambda x: f"{x:.2f}")
    df = df.rename(columns=CSV_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n").rstrip("\n")


def to_json(rows: Sequence[Dict[str, Any]]) -> str:
    return json.dumps(list(rows), indent=2)


def export_portfolio(valuations: Sequence[HoldingValuation], fmt: str) -> ExportFile:
    """Serialize valuations for download.

    Raises:
        NothingToExportError: if there are no holdings.
        ValueError: if ``fmt`` is not csv or json.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")
    if not valuations:
        raise NothingToExportError()

    rows = export_rows(valuations)
    if fmt == "csv":
        return ExportFile("crypto-portfolio.csv", "text/csv", to_csv(rows))
    return ExportFile("crypto-portfolio.json", "application/json", to_json(rows))
