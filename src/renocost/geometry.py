"""Room geometry and quantity take-off."""

from __future__ import annotations

from typing import Dict, Optional

from .models import EstimateAssumptions, RoomDimensions, RoomInput

STANDARD_CEILING_BAND = "Standard (2.4 - 2.7m)"

CEILING_HEIGHT_M: Dict[str, float] = {
    STANDARD_CEILING_BAND: 2.55,
    "High (2.8 - 3.2m)": 3.0,
    "Very high (3.3 - 4m)": 3.65,
    "Double height (4m+)": 4.5,
}

DEFAULT_ASSUMPTIONS = EstimateAssumptions()


def ceiling_height_m(band: Optional[str], default: float = DEFAULT_ASSUMPTIONS.default_ceiling_height_m) -> float:
    """
    Resolve a ceiling-height band to metres.

    No selection means the standard band; a selection that matches no band
    falls back to ``default`` instead of failing.
    """

    if band is None or not band.strip():
        return CEILING_HEIGHT_M[STANDARD_CEILING_BAND]
    return CEILING_HEIGHT_M.get(band, default)


def calculate_room_dimensions(
    room: RoomInput,
    assumptions: EstimateAssumptions = DEFAULT_ASSUMPTIONS,
) -> RoomDimensions:
    area = room.width * room.length
    perimeter = 2 * (room.width + room.length)
    height = ceiling_height_m(room.ceiling_height, assumptions.default_ceiling_height_m)
    gross_wall_area = perimeter * height
    return RoomDimensions(
        area_m2=area,
        perimeter_lm=perimeter,
        wall_area_m2=gross_wall_area * (1 - assumptions.wall_openings_pct),
        ceiling_area_m2=area,
        ceiling_height_m=height,
    )


def resolve_quantity(formula: str, dimensions: RoomDimensions, multiplier: float) -> float:
    """
    Evaluate an assembly quantity formula against room dimensions.

    ``fixed`` and ``count`` ignore the geometry and yield the multiplier.
    Unrecognised formulas yield ``0.0`` so the item is treated as not
    applicable.
    """

    if formula == "area":
        return dimensions.area_m2 * multiplier
    if formula == "perimeter":
        return dimensions.perimeter_lm * multiplier
    if formula == "wall_area":
        return dimensions.wall_area_m2 * multiplier
    if formula == "ceiling_area":
        return dimensions.ceiling_area_m2 * multiplier
    if formula in ("fixed", "count"):
        return 1 * multiplier
    return 0.0


__all__ = [
    "CEILING_HEIGHT_M",
    "STANDARD_CEILING_BAND",
    "ceiling_height_m",
    "calculate_room_dimensions",
    "resolve_quantity",
]
