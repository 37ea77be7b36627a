from __future__ import annotations

def fmt_amount(value: float) -> str:
    return f"{value:.8f}"

def fmt_money(value: float) -> str:
    return f"${value:,.2f}" if value >= 0 else f"-${-value:,.2f}"

def fmt_signed_money(value: float) -> str:
    """Money with an explicit ``+`` for values >= 0."""
    return f"+{fmt_money(value)}" if value >= 0 else fmt_money(value)

def fmt_percent(value: float) -> str:
    return f"{value:.2f}%"

def fmt_signed_percent(value: float) -> str:
    return f"+{fmt_percent(value)}" if value >= 0 else fmt_percent(value)
