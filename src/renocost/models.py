from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

COST_TYPES: Tuple[str, ...] = ("material", "labor", "equipment", "subcontract", "tax", "overhead")
QTY_FORMULAS: Tuple[str, ...] = ("area", "perimeter", "wall_area", "ceiling_area", "fixed", "count")
NO_BUILT_IN = "None"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_jsonable(value: Any) -> Any:
    """Convert engine dataclasses into plain JSON types with camelCase keys."""

    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def _pick(payload: Mapping[str, Any], camel: str, default: Any = None) -> Any:
    if camel in payload:
        return payload[camel]
    snake = "".join("_" + ch.lower() if ch.isupper() else ch for ch in camel)
    return payload.get(snake, default)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class CatalogItem:
    """A single priceable unit of material, labor or equipment."""

    code: str
    name: str
    unit: str
    cost_type: str
    base_unit_cost: float
    default_waste_pct: float = 0.0


@dataclass(frozen=True)
class AssemblyItem:
    catalog_code: str
    qty_formula: str
    qty_multiplier: float = 1.0
    include_waste: bool = False


@dataclass(frozen=True)
class Assembly:
    """Ordered recipe of catalog items triggered by one selected option."""

    code: str
    name: str
    applies_to: str
    applies_to_value: str
    items: Tuple[AssemblyItem, ...] = ()

    @property
    def key(self) -> Tuple[str, str]:
        return (self.applies_to, self.applies_to_value)


@dataclass(frozen=True)
class RoomInput:
    room_type: str
    width: float
    length: float
    floor_finish: str = ""
    wall_finish: str = ""
    built_in_furniture: str = NO_BUILT_IN
    ceiling_height: Optional[str] = None
    electrical_scope: Optional[str] = None
    plumbing_scope: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RoomInput":
        return cls(
            room_type=str(_pick(payload, "roomType", "")),
            width=float(_pick(payload, "width")),
            length=float(_pick(payload, "length")),
            floor_finish=str(_pick(payload, "floorFinish", "") or ""),
            wall_finish=str(_pick(payload, "wallFinish", "") or ""),
            built_in_furniture=str(_pick(payload, "builtInFurniture", NO_BUILT_IN) or NO_BUILT_IN),
            ceiling_height=_optional_text(_pick(payload, "ceilingHeight")),
            electrical_scope=_optional_text(_pick(payload, "electricalScope")),
            plumbing_scope=_optional_text(_pick(payload, "plumbingScope")),
        )


@dataclass(frozen=True)
class ProjectInput:
    """Structured project description consumed by the estimation engine."""

    property_location: str
    property_age: str
    rooms: Tuple[RoomInput, ...]
    property_city: str = ""
    property_type: Optional[str] = None
    property_condition: Optional[str] = None
    access_difficulty: Optional[str] = None
    urgency: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProjectInput":
        rooms = tuple(RoomInput.from_dict(room) for room in _pick(payload, "rooms", []) or [])
        return cls(
            property_location=str(_pick(payload, "propertyLocation", "") or ""),
            property_age=str(_pick(payload, "propertyAge", "") or ""),
            rooms=rooms,
            property_city=str(_pick(payload, "propertyCity", "") or ""),
            property_type=_optional_text(_pick(payload, "propertyType")),
            property_condition=_optional_text(_pick(payload, "propertyCondition")),
            access_difficulty=_optional_text(_pick(payload, "accessDifficulty")),
            urgency=_optional_text(_pick(payload, "urgency")),
        )


@dataclass(frozen=True)
class RoomDimensions:
    area_m2: float
    perimeter_lm: float
    wall_area_m2: float
    ceiling_area_m2: float
    ceiling_height_m: float


@dataclass(frozen=True)
class LineItem:
    """One priced unit of work; every currency field is already rounded."""

    code: str
    name: str
    cost_type: str
    unit: str
    quantity: float
    base_unit_cost: float
    location_factor: float
    age_factor: float
    unit_cost_final: float
    cost_before_waste: float
    waste_pct: float
    waste_amount: float
    cost_before_tax: float
    tax_rate: float
    tax_amount: float
    total_cost: float
    assembly_code: Optional[str] = None
    room_index: Optional[int] = None


@dataclass(frozen=True)
class RoomBreakdown:
    room_index: int
    room_type: str
    area_m2: float
    perimeter_lm: float
    wall_area_m2: float
    ceiling_area_m2: float
    line_items: Tuple[LineItem, ...]
    materials_cost: float
    labor_cost: float
    subtotal: float


@dataclass(frozen=True)
class EstimateSummary:
    materials: float
    labor: float
    equipment: float
    overhead: float
    contingency: float
    tax_total: float
    subtotal: float
    total: float


@dataclass(frozen=True)
class EstimateAssumptions:
    """Fixed constants of one pricing regime; a single regime per estimate."""

    default_ceiling_height_m: float = 2.6
    wall_openings_pct: float = 0.10
    overhead_pct: float = 0.15
    contingency_pct: float = 0.08
    tax_rate: float = 0.21


@dataclass(frozen=True)
class MultiplierValue:
    label: str
    value: float


@dataclass(frozen=True)
class LocationMultiplier:
    name: str
    city: str
    value: float


@dataclass(frozen=True)
class EstimateMultipliers:
    location: LocationMultiplier
    property_age: MultiplierValue
    property_type: MultiplierValue
    property_condition: MultiplierValue
    access_difficulty: MultiplierValue
    urgency: MultiplierValue

    @property
    def combined_project(self) -> float:
        # location is already applied per line item
        return (
            self.property_type.value
            * self.property_condition.value
            * self.access_difficulty.value
            * self.urgency.value
        )


@dataclass(frozen=True)
class InputSummary:
    country: str
    city: str
    property_age: str
    property_type: str
    property_condition: str
    access_difficulty: str
    urgency: str
    total_area: float
    room_count: int


@dataclass(frozen=True)
class EstimateDiagnostic:
    """Non-fatal note about input the engine had to skip."""

    kind: str
    message: str
    room_index: Optional[int] = None
    category: Optional[str] = None
    assembly_code: Optional[str] = None
    catalog_code: Optional[str] = None


@dataclass(frozen=True)
class ItemizedEstimateResult:
    pricing_version: str
    currency: str
    assumptions: EstimateAssumptions
    summary: EstimateSummary
    rooms: Tuple[RoomBreakdown, ...]
    project_line_items: Tuple[LineItem, ...]
    all_line_items: Tuple[LineItem, ...]
    multipliers: EstimateMultipliers
    input_summary: InputSummary
    diagnostics: Tuple[EstimateDiagnostic, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        return to_jsonable(self)
