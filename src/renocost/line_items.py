"""
Price a single catalog item into a :class:`~renocost.models.LineItem`.

Every monetary step is rounded to cents before it feeds the next one, so the
persisted figures always reconcile exactly:

1. quantity (kept unrounded for costing, reported rounded)
2. location and age factors
3. unit cost after factors
4. cost before waste
5. waste fraction (only when the assembly item opts in)
6. waste amount
7. cost before tax
8. tax amount
9. total cost
"""

from __future__ import annotations

import logging
from typing import Optional

from .factors import age_factor, location_factor
from .geometry import resolve_quantity
from .models import AssemblyItem, CatalogItem, LineItem, RoomDimensions
from .rounding import round2, round2_product, sum_rounded

logger = logging.getLogger(__name__)


def _build_line_item(
    item: CatalogItem,
    quantity: float,
    loc_factor: float,
    age_fac: float,
    waste_pct: float,
    tax_rate: float,
    assembly_code: Optional[str],
    room_index: Optional[int],
) -> LineItem:
    unit_cost_final = round2_product(item.base_unit_cost, loc_factor, age_fac)
    cost_before_waste = round2_product(quantity, unit_cost_final)
    waste_amount = round2_product(cost_before_waste, waste_pct)
    cost_before_tax = sum_rounded([cost_before_waste, waste_amount])
    tax_amount = round2_product(cost_before_tax, tax_rate)
    total_cost = sum_rounded([cost_before_tax, tax_amount])
    return LineItem(
        code=item.code,
        name=item.name,
        cost_type=item.cost_type,
        unit=item.unit,
        quantity=round2(quantity),
        base_unit_cost=item.base_unit_cost,
        location_factor=loc_factor,
        age_factor=age_fac,
        unit_cost_final=unit_cost_final,
        cost_before_waste=cost_before_waste,
        waste_pct=waste_pct,
        waste_amount=waste_amount,
        cost_before_tax=cost_before_tax,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        total_cost=total_cost,
        assembly_code=assembly_code,
        room_index=room_index,
    )


def price_assembly_item(
    assembly_item: AssemblyItem,
    catalog_item: CatalogItem,
    dimensions: RoomDimensions,
    property_location: str,
    property_age: str,
    tax_rate: float,
    assembly_code: Optional[str] = None,
    room_index: Optional[int] = None,
) -> Optional[LineItem]:
    """
    Price one assembly item for one room.

    Returns ``None`` when the rounded quantity is not positive, which is how
    inapplicable items (unknown formulas, zero multipliers) drop out.
    """

    quantity = resolve_quantity(assembly_item.qty_formula, dimensions, assembly_item.qty_multiplier)
    if not round2(quantity) > 0:
        logger.debug(
            "Skipping %s in %s: quantity %s from formula '%s'",
            catalog_item.code,
            assembly_code or "(no assembly)",
            round2(quantity),
            assembly_item.qty_formula,
        )
        return None

    loc = location_factor(property_location, catalog_item.cost_type)
    age = age_factor(property_age, catalog_item.cost_type)
    waste_pct = catalog_item.default_waste_pct if assembly_item.include_waste else 0.0
    return _build_line_item(catalog_item, quantity, loc, age, waste_pct, tax_rate, assembly_code, room_index)


def price_project_item(catalog_item: CatalogItem, quantity: float, tax_rate: float) -> Optional[LineItem]:
    """Price a project-level item: no location/age adjustment and no waste."""

    if not round2(quantity) > 0:
        logger.debug("Skipping project item %s: quantity %s", catalog_item.code, round2(quantity))
        return None
    return _build_line_item(catalog_item, quantity, 1.0, 1.0, 0.0, tax_rate, None, None)


__all__ = ["price_assembly_item", "price_project_item"]
