from __future__ import annotations

from typing import List

import pandas as pd

from .formatting import format_currency
from .models import ItemizedEstimateResult

LINE_ITEM_COLUMNS: List[str] = [
    "ROOM_INDEX",
    "ROOM_TYPE",
    "ASSEMBLY_CODE",
    "CODE",
    "NAME",
    "COST_TYPE",
    "UNIT",
    "QUANTITY",
    "BASE_UNIT_COST",
    "LOCATION_FACTOR",
    "AGE_FACTOR",
    "UNIT_COST_FINAL",
    "COST_BEFORE_WASTE",
    "WASTE_PCT",
    "WASTE_AMOUNT",
    "COST_BEFORE_TAX",
    "TAX_RATE",
    "TAX_AMOUNT",
    "TOTAL_COST",
]

PROJECT_SCOPE = "Project"


def line_items_frame(result: ItemizedEstimateResult) -> pd.DataFrame:
    room_types = {room.room_index: room.room_type for room in result.rooms}
    rows = []
    for li in result.all_line_items:
        rows.append(
            {
                "ROOM_INDEX": li.room_index,
                "ROOM_TYPE": room_types.get(li.room_index, PROJECT_SCOPE),
                "ASSEMBLY_CODE": li.assembly_code or "",
                "CODE": li.code,
                "NAME": li.name,
                "COST_TYPE": li.cost_type,
                "UNIT": li.unit,
                "QUANTITY": li.quantity,
                "BASE_UNIT_COST": li.base_unit_cost,
                "LOCATION_FACTOR": li.location_factor,
                "AGE_FACTOR": li.age_factor,
                "UNIT_COST_FINAL": li.unit_cost_final,
                "COST_BEFORE_WASTE": li.cost_before_waste,
                "WASTE_PCT": li.waste_pct,
                "WASTE_AMOUNT": li.waste_amount,
                "COST_BEFORE_TAX": li.cost_before_tax,
                "TAX_RATE": li.tax_rate,
                "TAX_AMOUNT": li.tax_amount,
                "TOTAL_COST": li.total_cost,
            }
        )
    return pd.DataFrame(rows, columns=LINE_ITEM_COLUMNS)


def rooms_frame(result: ItemizedEstimateResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ROOM_INDEX": room.room_index,
                "ROOM_TYPE": room.room_type,
                "AREA_M2": room.area_m2,
                "PERIMETER_LM": room.perimeter_lm,
                "WALL_AREA_M2": room.wall_area_m2,
                "CEILING_AREA_M2": room.ceiling_area_m2,
                "LINE_ITEMS": len(room.line_items),
                "MATERIALS_COST": room.materials_cost,
                "LABOR_COST": room.labor_cost,
                "SUBTOTAL": room.subtotal,
            }
            for room in result.rooms
        ],
        columns=[
            "ROOM_INDEX",
            "ROOM_TYPE",
            "AREA_M2",
            "PERIMETER_LM",
            "WALL_AREA_M2",
            "CEILING_AREA_M2",
            "LINE_ITEMS",
            "MATERIALS_COST",
            "LABOR_COST",
            "SUBTOTAL",
        ],
    )


def summary_frame(result: ItemizedEstimateResult) -> pd.DataFrame:
    s = result.summary
    m = result.multipliers
    rows = [
        ("Materials", s.materials),
        ("Labor", s.labor),
        ("Equipment", s.equipment),
        ("Overhead", s.overhead),
        ("Contingency", s.contingency),
        ("Subtotal", s.subtotal),
        ("Tax", s.tax_total),
        ("Total", s.total),
        ("Combined project multiplier", m.combined_project),
        (f"Location ({m.location.name} / {m.location.city or '-'})", m.location.value),
        (f"Property age ({m.property_age.label})", m.property_age.value),
        (f"Property type ({m.property_type.label})", m.property_type.value),
        (f"Condition ({m.property_condition.label})", m.property_condition.value),
        (f"Access ({m.access_difficulty.label})", m.access_difficulty.value),
        (f"Urgency ({m.urgency.label})", m.urgency.value),
    ]
    return pd.DataFrame(rows, columns=["FIELD", "VALUE"])


def make_summary_text(result: ItemizedEstimateResult, top_n: int = 5) -> str:
    items_df = line_items_frame(result)
    top = items_df.sort_values("COST_BEFORE_TAX", ascending=False).head(top_n)[
        ["CODE", "NAME", "QUANTITY", "UNIT", "COST_BEFORE_TAX"]
    ]
    s = result.summary
    cur = result.currency
    return (
        f"Project total ({result.pricing_version}): {format_currency(s.total, cur)} "
        f"incl. tax {format_currency(s.tax_total, cur)}.\n"
        f"Materials {format_currency(s.materials, cur)} | Labor {format_currency(s.labor, cur)} | "
        f"Overhead {format_currency(s.overhead, cur)} | Contingency {format_currency(s.contingency, cur)}\n"
        f"Rooms: {result.input_summary.room_count} | Area: {result.input_summary.total_area:,.2f} m2 | "
        f"Line items: {len(result.all_line_items)}\n"
        f"Top cost drivers:\n{top.to_string(index=False)}\n"
    )


__all__ = ["LINE_ITEM_COLUMNS", "line_items_frame", "rooms_frame", "summary_frame", "make_summary_text"]
