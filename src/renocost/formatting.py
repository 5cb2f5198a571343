"""Display helpers for reports; the engine never formats numbers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£", "BRL": "R$", "MXN": "MX$"}


def format_currency(amount: float, currency: str = "EUR") -> str:
    """Whole-unit currency string, e.g. ``format_currency(1234.5) == "€1,235"``."""

    whole = Decimal(repr(float(amount))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{abs(int(whole)):,}"


def format_quantity(quantity: float, unit: str) -> str:
    """``12.0, "m2"`` -> ``"12 m2"``; ``32.13, "m2"`` -> ``"32.13 m2"``."""

    text = f"{quantity:,.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}".strip()


__all__ = ["format_currency", "format_quantity"]
