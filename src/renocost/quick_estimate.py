"""
Area-rate quick estimate.

A coarse alternative to the itemized engine: each room costs
``area x BASE_RATE_PER_M2`` scaled by the country, property age, room type
and finish multipliers, with a minimum fee per room.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .models import MultiplierValue, ProjectInput, RoomInput, to_jsonable
from .pricing_tables import (
    BASE_RATE_PER_M2,
    BUILT_IN_FURNITURE_MULTIPLIERS,
    DEFAULT_CURRENCY,
    FLOOR_FINISH_MULTIPLIERS,
    LOCATION_MULTIPLIERS,
    MIN_ROOM_FEE,
    PRICING_VERSION,
    PROPERTY_AGE_MULTIPLIERS,
    ROOM_TYPE_MULTIPLIERS,
    WALL_FINISH_MULTIPLIERS,
    get_multiplier,
)
from .rounding import round2


@dataclass(frozen=True)
class QuickRoomEstimate:
    room_type: MultiplierValue
    area: float
    floor_finish: MultiplierValue
    wall_finish: MultiplierValue
    built_in_furniture: MultiplierValue
    base_room_cost: float
    adjusted_room_cost: float
    final_room_cost: float


@dataclass(frozen=True)
class QuickEstimateResult:
    subtotal: float
    total: float
    currency: str
    rooms: Tuple[QuickRoomEstimate, ...]
    location: MultiplierValue
    property_age: MultiplierValue
    base_rate_per_m2: float = BASE_RATE_PER_M2
    min_room_fee: float = MIN_ROOM_FEE
    pricing_version: str = PRICING_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return to_jsonable(self)


def estimate_room_quick(room: RoomInput, location_multiplier: float, age_multiplier: float) -> QuickRoomEstimate:
    area = room.width * room.length
    room_type = MultiplierValue(room.room_type, get_multiplier(ROOM_TYPE_MULTIPLIERS, room.room_type))
    floor = MultiplierValue(room.floor_finish, get_multiplier(FLOOR_FINISH_MULTIPLIERS, room.floor_finish))
    wall = MultiplierValue(room.wall_finish, get_multiplier(WALL_FINISH_MULTIPLIERS, room.wall_finish))
    furniture = MultiplierValue(
        room.built_in_furniture,
        get_multiplier(BUILT_IN_FURNITURE_MULTIPLIERS, room.built_in_furniture),
    )

    base = area * BASE_RATE_PER_M2
    adjusted = (
        base
        * location_multiplier
        * age_multiplier
        * room_type.value
        * floor.value
        * wall.value
        * furniture.value
    )
    return QuickRoomEstimate(
        room_type=room_type,
        area=area,
        floor_finish=floor,
        wall_finish=wall,
        built_in_furniture=furniture,
        base_room_cost=base,
        adjusted_room_cost=adjusted,
        final_room_cost=max(adjusted, MIN_ROOM_FEE),
    )


def calculate_quick_estimate(project: ProjectInput) -> QuickEstimateResult:
    """
    Quick estimate for ``project``.

    Only the country multiplier applies here (no city refinement). The
    subtotal sums the adjusted room costs; the total sums the fee-floored
    ones, so ``total >= subtotal``.
    """

    location = MultiplierValue(
        project.property_location,
        get_multiplier(LOCATION_MULTIPLIERS, project.property_location),
    )
    age = MultiplierValue(project.property_age, get_multiplier(PROPERTY_AGE_MULTIPLIERS, project.property_age))
    rooms = tuple(estimate_room_quick(room, location.value, age.value) for room in project.rooms)
    return QuickEstimateResult(
        subtotal=round2(sum(room.adjusted_room_cost for room in rooms)),
        total=round2(sum(room.final_room_cost for room in rooms)),
        currency=DEFAULT_CURRENCY,
        rooms=rooms,
        location=location,
        property_age=age,
    )


__all__ = ["QuickRoomEstimate", "QuickEstimateResult", "calculate_quick_estimate", "estimate_room_quick"]
