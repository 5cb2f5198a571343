"""
Itemized bill-of-quantities estimator.

``calculate_itemized_estimate`` is the single entry point: it is a pure
function of the :class:`~renocost.models.ProjectInput`, the catalog and
assembly registry snapshot it is handed, and the assumption constants. It
performs no I/O; skipped inputs are reported through ``result.diagnostics``
and DEBUG logging rather than exceptions.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .assemblies import DEFAULT_REGISTRY, AssemblyRegistry
from .catalog import CLEANUP_CODE, DEFAULT_CATALOG, PROTECTION_CODE, SITE_SETUP_CODE, Catalog
from .geometry import calculate_room_dimensions
from .line_items import price_assembly_item, price_project_item
from .models import (
    NO_BUILT_IN,
    QTY_FORMULAS,
    EstimateAssumptions,
    EstimateDiagnostic,
    EstimateMultipliers,
    EstimateSummary,
    InputSummary,
    ItemizedEstimateResult,
    LineItem,
    LocationMultiplier,
    MultiplierValue,
    ProjectInput,
    RoomBreakdown,
    RoomInput,
)
from .pricing_tables import (
    ACCESS_DIFFICULTY_MULTIPLIERS,
    DEFAULT_CURRENCY,
    PRICING_VERSION,
    PROPERTY_AGE_MULTIPLIERS,
    PROPERTY_CONDITION_MULTIPLIERS,
    PROPERTY_TYPE_MULTIPLIERS,
    URGENCY_MULTIPLIERS,
    get_location_multiplier,
    get_multiplier,
)
from .rounding import round2, sum_rounded

logger = logging.getLogger(__name__)

# Labels echoed when an optional project attribute was not supplied.
DEFAULT_PROPERTY_TYPE_LABEL = "Apartment"
DEFAULT_CONDITION_LABEL = "Average"
DEFAULT_ACCESS_LABEL = "Easy"
DEFAULT_URGENCY_LABEL = "Standard"


def _selections(room: RoomInput) -> List[tuple[str, str]]:
    chosen = []
    if room.floor_finish:
        chosen.append(("floorFinish", room.floor_finish))
    if room.wall_finish:
        chosen.append(("wallFinish", room.wall_finish))
    if room.built_in_furniture and room.built_in_furniture != NO_BUILT_IN:
        chosen.append(("builtInFurniture", room.built_in_furniture))
    return chosen


def _cost_type_total(items: List[LineItem], cost_type: str) -> float:
    return sum_rounded(li.cost_before_tax for li in items if li.cost_type == cost_type)


def estimate_room(
    room: RoomInput,
    room_index: int,
    property_location: str,
    property_age: str,
    *,
    catalog: Catalog = DEFAULT_CATALOG,
    registry: AssemblyRegistry = DEFAULT_REGISTRY,
    assumptions: Optional[EstimateAssumptions] = None,
    diagnostics: Optional[List[EstimateDiagnostic]] = None,
    logger: logging.Logger = logger,
) -> RoomBreakdown:
    """
    Price one room by expanding its floor, wall and built-in selections.

    At most one assembly is resolved per category; the built-in category is
    skipped for the ``"None"`` sentinel. Line items keep category order and
    then assembly item order. Room totals are pre-tax.
    """

    assumptions = assumptions or EstimateAssumptions()
    notes = diagnostics if diagnostics is not None else []
    dimensions = calculate_room_dimensions(room, assumptions)
    line_items: List[LineItem] = []

    for category, value in _selections(room):
        assembly = registry.find(category, value)
        if assembly is None:
            logger.debug("Room %d: no assembly for %s=%r", room_index, category, value)
            notes.append(
                EstimateDiagnostic(
                    kind="missing_assembly",
                    message=f"No assembly defined for {category} '{value}'",
                    room_index=room_index,
                    category=category,
                )
            )
            continue
        logger.debug("Room %d: %s=%r -> %s", room_index, category, value, assembly.code)
        for assembly_item in assembly.items:
            catalog_item = catalog.get(assembly_item.catalog_code)
            if catalog_item is None:
                logger.debug("Room %d: catalog item %s missing", room_index, assembly_item.catalog_code)
                notes.append(
                    EstimateDiagnostic(
                        kind="missing_catalog_item",
                        message=f"Catalog item '{assembly_item.catalog_code}' not found",
                        room_index=room_index,
                        category=category,
                        assembly_code=assembly.code,
                        catalog_code=assembly_item.catalog_code,
                    )
                )
                continue
            if assembly_item.qty_formula not in QTY_FORMULAS:
                notes.append(
                    EstimateDiagnostic(
                        kind="unknown_formula",
                        message=f"Unknown quantity formula '{assembly_item.qty_formula}'",
                        room_index=room_index,
                        category=category,
                        assembly_code=assembly.code,
                        catalog_code=assembly_item.catalog_code,
                    )
                )
            line_item = price_assembly_item(
                assembly_item,
                catalog_item,
                dimensions,
                property_location,
                property_age,
                assumptions.tax_rate,
                assembly_code=assembly.code,
                room_index=room_index,
            )
            if line_item is not None:
                line_items.append(line_item)

    return RoomBreakdown(
        room_index=room_index,
        room_type=room.room_type,
        area_m2=dimensions.area_m2,
        perimeter_lm=dimensions.perimeter_lm,
        wall_area_m2=dimensions.wall_area_m2,
        ceiling_area_m2=dimensions.ceiling_area_m2,
        line_items=tuple(line_items),
        materials_cost=_cost_type_total(line_items, "material"),
        labor_cost=_cost_type_total(line_items, "labor"),
        subtotal=sum_rounded(li.cost_before_tax for li in line_items),
    )


def _project_line_items(
    total_floor_area: float,
    catalog: Catalog,
    tax_rate: float,
    notes: List[EstimateDiagnostic],
) -> List[LineItem]:
    items: List[LineItem] = []
    for code, quantity in (
        (SITE_SETUP_CODE, 1.0),
        (PROTECTION_CODE, total_floor_area),
        (CLEANUP_CODE, total_floor_area),
    ):
        catalog_item = catalog.get(code)
        if catalog_item is None:
            notes.append(
                EstimateDiagnostic(
                    kind="missing_catalog_item",
                    message=f"Project catalog item '{code}' not found",
                    catalog_code=code,
                )
            )
            continue
        line_item = price_project_item(catalog_item, quantity, tax_rate)
        if line_item is not None:
            items.append(line_item)
    return items


def resolve_multipliers(project: ProjectInput) -> EstimateMultipliers:
    """Look up every project-level multiplier, echoing the label it came from."""

    return EstimateMultipliers(
        location=LocationMultiplier(
            name=project.property_location,
            city=project.property_city,
            value=get_location_multiplier(project.property_location, project.property_city),
        ),
        property_age=MultiplierValue(
            project.property_age,
            get_multiplier(PROPERTY_AGE_MULTIPLIERS, project.property_age),
        ),
        property_type=MultiplierValue(
            project.property_type or DEFAULT_PROPERTY_TYPE_LABEL,
            get_multiplier(PROPERTY_TYPE_MULTIPLIERS, project.property_type),
        ),
        property_condition=MultiplierValue(
            project.property_condition or DEFAULT_CONDITION_LABEL,
            get_multiplier(PROPERTY_CONDITION_MULTIPLIERS, project.property_condition),
        ),
        access_difficulty=MultiplierValue(
            project.access_difficulty or DEFAULT_ACCESS_LABEL,
            get_multiplier(ACCESS_DIFFICULTY_MULTIPLIERS, project.access_difficulty),
        ),
        urgency=MultiplierValue(
            project.urgency or DEFAULT_URGENCY_LABEL,
            get_multiplier(URGENCY_MULTIPLIERS, project.urgency),
        ),
    )


def summarize(
    line_items: List[LineItem],
    combined_multiplier: float,
    assumptions: EstimateAssumptions,
) -> EstimateSummary:
    """
    Roll pre-tax line costs into the project summary.

    Only material, labor and equipment feed the adjusted subtotal. Each
    reported figure is rounded on its own from the unrounded chain.
    """

    materials = sum(li.cost_before_tax for li in line_items if li.cost_type == "material")
    labor = sum(li.cost_before_tax for li in line_items if li.cost_type == "labor")
    equipment = sum(li.cost_before_tax for li in line_items if li.cost_type == "equipment")

    adjusted = (materials + labor + equipment) * combined_multiplier
    overhead = adjusted * assumptions.overhead_pct
    contingency = adjusted * assumptions.contingency_pct
    subtotal = adjusted + overhead + contingency
    tax_total = subtotal * assumptions.tax_rate
    return EstimateSummary(
        materials=round2(materials),
        labor=round2(labor),
        equipment=round2(equipment),
        overhead=round2(overhead),
        contingency=round2(contingency),
        tax_total=round2(tax_total),
        subtotal=round2(subtotal),
        total=round2(subtotal + tax_total),
    )


def calculate_itemized_estimate(
    project: ProjectInput,
    *,
    catalog: Catalog = DEFAULT_CATALOG,
    registry: AssemblyRegistry = DEFAULT_REGISTRY,
    assumptions: Optional[EstimateAssumptions] = None,
    logger: logging.Logger = logger,
) -> ItemizedEstimateResult:
    """Produce the full itemized estimate for ``project``."""

    assumptions = assumptions or EstimateAssumptions()
    diagnostics: List[EstimateDiagnostic] = []

    rooms: List[RoomBreakdown] = []
    for index, room in enumerate(project.rooms):
        rooms.append(
            estimate_room(
                room,
                index,
                project.property_location,
                project.property_age,
                catalog=catalog,
                registry=registry,
                assumptions=assumptions,
                diagnostics=diagnostics,
                logger=logger,
            )
        )

    total_floor_area = sum(room.area_m2 for room in rooms)
    project_items = _project_line_items(total_floor_area, catalog, assumptions.tax_rate, diagnostics)
    all_items: List[LineItem] = [li for room in rooms for li in room.line_items]
    all_items.extend(project_items)

    multipliers = resolve_multipliers(project)
    summary = summarize(all_items, multipliers.combined_project, assumptions)
    logger.debug(
        "Estimate: %d rooms, %d line items, combined multiplier %.4f, total %.2f",
        len(rooms),
        len(all_items),
        multipliers.combined_project,
        summary.total,
    )

    return ItemizedEstimateResult(
        pricing_version=PRICING_VERSION,
        currency=DEFAULT_CURRENCY,
        assumptions=assumptions,
        summary=summary,
        rooms=tuple(rooms),
        project_line_items=tuple(project_items),
        all_line_items=tuple(all_items),
        multipliers=multipliers,
        input_summary=InputSummary(
            country=project.property_location,
            city=project.property_city,
            property_age=project.property_age,
            property_type=multipliers.property_type.label,
            property_condition=multipliers.property_condition.label,
            access_difficulty=multipliers.access_difficulty.label,
            urgency=multipliers.urgency.label,
            total_area=round2(total_floor_area),
            room_count=len(project.rooms),
        ),
        diagnostics=tuple(diagnostics),
    )


__all__ = [
    "calculate_itemized_estimate",
    "estimate_room",
    "resolve_multipliers",
    "summarize",
]
