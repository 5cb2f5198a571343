"""Currency rounding policy shared by every priced figure."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """Round ``value`` half-up to two decimals.

    The float is converted through its shortest ``repr`` so that values such
    as ``2.675`` round to ``2.68`` the way they are displayed, rather than to
    the binary neighbour ``2.67`` that :func:`round` would pick.
    """

    if value != value or value in (float("inf"), float("-inf")):
        return value
    return float(Decimal(repr(float(value))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def sum_rounded(values) -> float:
    """Sum already-rounded currency figures and round the total once."""

    total = Decimal("0")
    for value in values:
        total += Decimal(repr(float(value)))
    return float(total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))




def round2_product(*factors: float) -> float:
    """Multiply ``factors`` exactly in decimal and round the product half-up.

    A float product such as ``70.5 * 1.21`` lands just below the half cent
    (``85.30499...``); multiplying the decimal forms keeps it at ``85.305``.
    """

    product = Decimal("1")
    for factor in factors:
        product *= Decimal(repr(float(factor)))
    return float(product.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


__all__ = ["round2", "round2_product", "sum_rounded", "TWO_PLACES"]
