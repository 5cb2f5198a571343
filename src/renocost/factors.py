"""
Per-line-item cost factors.

Location factors differentiate labor, material and all other cost types for
the locations listed in :data:`LOCATION_COST_FACTORS`; every other location
uses :data:`NEUTRAL_FACTORS`. Age factors only ever touch labor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping


@dataclass(frozen=True)
class CategoryFactors:
    labor: float = 1.0
    material: float = 1.0
    other: float = 1.0

    def for_cost_type(self, cost_type: str) -> float:
        if cost_type == "labor":
            return self.labor
        if cost_type == "material":
            return self.material
        return self.other


NEUTRAL_FACTORS = CategoryFactors()

# Regional wage vs. materials skew.
LOCATION_COST_FACTORS: Mapping[str, CategoryFactors] = {
    "Brazil": CategoryFactors(labor=0.65, material=0.80, other=0.75),
    "Other": CategoryFactors(labor=1.15, material=1.08, other=1.10),
}

# Older properties need more preparation work per unit of labor.
LABOR_AGE_FACTORS: Dict[str, float] = {
    "1 - 5 Years": 1.0,
    "6 - 10 Years": 1.0,
    "11 - 15 Years": 1.05,
    "16 - 20 Years": 1.10,
    "21 - 25 Years": 1.18,
    "More than 25 Years": 1.28,
}


def location_factors(location: str, table: Mapping[str, CategoryFactors] = LOCATION_COST_FACTORS) -> CategoryFactors:
    return table.get(location, NEUTRAL_FACTORS)


def location_factor(location: str, cost_type: str) -> float:
    """Location multiplier for one cost type; unknown locations are neutral."""

    return location_factors(location).for_cost_type(cost_type)


def age_factor(property_age: str, cost_type: str) -> float:
    """Property-age multiplier; ``1.0`` for non-labor items and unseen bands."""

    if cost_type != "labor":
        return 1.0
    return LABOR_AGE_FACTORS.get(property_age, 1.0)


__all__ = [
    "CategoryFactors",
    "NEUTRAL_FACTORS",
    "LOCATION_COST_FACTORS",
    "LABOR_AGE_FACTORS",
    "location_factors",
    "location_factor",
    "age_factor",
]
