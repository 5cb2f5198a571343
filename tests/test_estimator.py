import json
from dataclasses import replace

import pytest

from renocost.assemblies import DEFAULT_REGISTRY, AssemblyRegistry
from renocost.catalog import DEFAULT_CATALOG, Catalog
from renocost.estimator import calculate_itemized_estimate, estimate_room
from renocost.models import Assembly, AssemblyItem, EstimateAssumptions, ProjectInput, RoomInput
from renocost.rounding import round2, round2_product

HARDWOOD_CODES = [
    "FLOOR_DEMO",
    "FLOOR_PREP",
    "FLOOR_UNDERLAY",
    "FLOOR_HARDWOOD_SUPPLY",
    "FLOOR_HARDWOOD_LABOR",
    "FLOOR_SKIRTING_SUPPLY",
    "FLOOR_SKIRTING_LABOR",
]
PAINT_CODES = ["WALL_PREP", "WALL_PRIMER", "WALL_PAINT_SUPPLY", "WALL_PAINT_LABOR"]


def test_living_room_scenario(living_room_project):
    result = calculate_itemized_estimate(living_room_project)
    assert result.pricing_version == "v1.1"
    assert result.currency == "EUR"

    (room,) = result.rooms
    assert room.area_m2 == 12.0
    assert room.perimeter_lm == 14.0
    assert room.wall_area_m2 == pytest.approx(32.13)
    assert [li.code for li in room.line_items] == HARDWOOD_CODES + PAINT_CODES

    hardwood = room.line_items[:7]
    assert [li.quantity for li in hardwood] == [12.0, 12.0, 12.0, 12.0, 12.0, 14.0, 14.0]
    assert [li.cost_before_tax for li in hardwood] == [144.0, 96.0, 56.7, 726.0, 336.0, 120.96, 84.0]
    assert all(li.assembly_code == "FLOOR_HARDWOOD" for li in hardwood)

    paint = room.line_items[7:]
    assert [li.quantity for li in paint] == [32.13, 32.13, 64.26, 32.13]
    assert all(li.assembly_code == "WALL_PAINT_STANDARD" for li in paint)

    assert [li.code for li in result.project_line_items] == ["PROJ_SITE_SETUP", "PROJ_PROTECTION", "PROJ_CLEANUP"]
    assert [li.quantity for li in result.project_line_items] == [1.0, 12.0, 12.0]
    assert [li.cost_before_tax for li in result.project_line_items] == [250.0, 30.0, 48.0]

    assert result.multipliers.location.value == 1.0
    assert result.multipliers.combined_project == 1.0
    assert result.diagnostics == ()


def test_total_reconstructs_from_summary(living_room_project):
    result = calculate_itemized_estimate(living_room_project)
    s = result.summary
    base = s.materials + s.labor + s.equipment
    assert s.total == pytest.approx(round2(base * 1.23 * 1.21), abs=0.02)
    assert s.overhead == pytest.approx(round2(base * 0.15), abs=0.01)
    assert s.contingency == pytest.approx(round2(base * 0.08), abs=0.01)
    assert s.total == pytest.approx(s.subtotal + s.tax_total, abs=0.01)


ROOM_SIZES = (1.0, 1.85, 2.35, 3.33, 4.17, 5.5, 6.99)


@pytest.mark.parametrize("width", ROOM_SIZES)
def test_line_item_tax_identity_and_positive_quantities(living_room_payload, width):
    living_room_payload["rooms"][0]["floorFinish"] = "Tile (Porcelain)"
    living_room_payload["rooms"][0]["builtInFurniture"] = "Kitchen Cabinets (Standard)"
    for length in ROOM_SIZES:
        living_room_payload["rooms"][0].update(width=width, length=length)
        result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
        for li in result.all_line_items:
            assert li.quantity > 0
            assert li.total_cost == round2_product(li.cost_before_tax, 1 + li.tax_rate), (li.code, width, length)


def test_non_integer_room_costs_from_unrounded_quantity(living_room_payload):
    living_room_payload["rooms"][0].update(width=3.33, length=4.17)
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    by_code = {li.code: li for li in result.all_line_items}
    assert by_code["FLOOR_HARDWOOD_SUPPLY"].quantity == 13.89
    assert by_code["FLOOR_HARDWOOD_SUPPLY"].cost_before_waste == 763.74
    assert by_code["PROJ_PROTECTION"].quantity == 13.89
    assert by_code["PROJ_PROTECTION"].cost_before_tax == 34.72


def test_room_subtotals_match_line_items(living_room_payload):
    living_room_payload["rooms"].append(
        {
            "roomType": "Bathroom",
            "width": 2.35,
            "length": 1.85,
            "floorFinish": "Tile (Porcelain)",
            "wallFinish": "Tile",
            "builtInFurniture": "Bathroom Vanity",
            "ceilingHeight": "High (2.8 - 3.2m)",
        }
    )
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    for room in result.rooms:
        total = sum(li.cost_before_tax for li in room.line_items)
        assert abs(room.subtotal - total) <= 0.01 * max(len(room.line_items), 1)
        assert room.materials_cost + room.labor_cost == pytest.approx(room.subtotal, abs=0.01)
    assert len(result.all_line_items) == sum(len(r.line_items) for r in result.rooms) + 3
    assert result.input_summary.room_count == 2
    assert result.input_summary.total_area == round2(12.0 + 2.35 * 1.85)


def test_bathroom_vanity_is_fixed_quantity(living_room_payload):
    living_room_payload["rooms"][0]["builtInFurniture"] = "Bathroom Vanity"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    vanity = [li for li in result.all_line_items if li.assembly_code == "BUILTIN_VANITY"]
    assert [(li.code, li.quantity, li.cost_before_tax) for li in vanity] == [
        ("BUILTIN_VANITY_SUPPLY", 1.0, 450.0),
        ("BUILTIN_VANITY_INSTALL", 1.0, 180.0),
    ]


def test_no_built_in_sentinel_excludes_furniture(living_room_project):
    result = calculate_itemized_estimate(living_room_project)
    assert not any(li.code.startswith("BUILTIN_") for li in result.all_line_items)
    assert not any(d.category == "builtInFurniture" for d in result.diagnostics)


def test_estimate_is_deterministic(living_room_project):
    first = calculate_itemized_estimate(living_room_project)
    second = calculate_itemized_estimate(living_room_project)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_unknown_enumerations_are_neutral(living_room_payload):
    baseline = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    living_room_payload["propertyType"] = "Castle"
    living_room_payload["urgency"] = "Yesterday"
    odd = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    assert odd.summary == baseline.summary
    assert odd.multipliers.property_type.label == "Castle"
    assert odd.multipliers.property_type.value == 1.0


def test_missing_optional_attributes_echo_default_labels(living_room_payload):
    for key in ("propertyType", "propertyCondition", "accessDifficulty", "urgency"):
        living_room_payload.pop(key)
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    echo = result.input_summary
    assert (echo.property_type, echo.property_condition, echo.access_difficulty, echo.urgency) == (
        "Apartment",
        "Average",
        "Easy",
        "Standard",
    )
    assert result.multipliers.combined_project == 1.0


def test_project_multipliers_scale_adjusted_subtotal(living_room_payload):
    living_room_payload["propertyType"] = "Villa"
    living_room_payload["urgency"] = "Urgent (2-4 weeks)"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    combined = result.multipliers.combined_project
    assert combined == pytest.approx(1.20 * 1.15)
    s = result.summary
    assert s.overhead == pytest.approx((s.materials + s.labor + s.equipment) * combined * 0.15, abs=0.01)


def test_location_echo_is_country_times_city(living_room_payload):
    living_room_payload["propertyCity"] = "Madrid"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    assert result.multipliers.location.value == pytest.approx(1.15)

    living_room_payload["propertyLocation"] = "Narnia"
    living_room_payload["propertyCity"] = "Major city"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    assert result.multipliers.location.value == pytest.approx(1.20)


def test_location_factor_applies_per_line_item(living_room_payload):
    living_room_payload["propertyLocation"] = "Brazil"
    living_room_payload["propertyCity"] = "Curitiba"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    demo = result.rooms[0].line_items[0]
    assert demo.code == "FLOOR_DEMO"
    assert demo.location_factor == 0.65
    assert all(li.location_factor == 1.0 for li in result.project_line_items)


def test_unknown_finish_is_reported_not_raised(living_room_payload):
    living_room_payload["rooms"][0]["floorFinish"] = "Bamboo"
    result = calculate_itemized_estimate(ProjectInput.from_dict(living_room_payload))
    assert [li.code for li in result.rooms[0].line_items] == PAINT_CODES
    (note,) = result.diagnostics
    assert note.kind == "missing_assembly"
    assert note.category == "floorFinish"
    assert note.room_index == 0


def test_custom_registry_diagnostics():
    registry = AssemblyRegistry(
        [
            Assembly(
                "FLOOR_ODD",
                "Odd floor",
                "floorFinish",
                "Odd",
                (
                    AssemblyItem("FLOOR_DEMO", "area"),
                    AssemblyItem("FLOOR_GHOST", "area"),
                    AssemblyItem("FLOOR_PREP", "volume"),
                ),
            )
        ]
    )
    room = RoomInput("Living Room", 4.0, 3.0, floor_finish="Odd", wall_finish="")
    notes = []
    breakdown = estimate_room(room, 0, "Spain", "6 - 10 Years", registry=registry, diagnostics=notes)
    assert [li.code for li in breakdown.line_items] == ["FLOOR_DEMO"]
    assert [n.kind for n in notes] == ["missing_catalog_item", "unknown_formula"]
    assert notes[0].catalog_code == "FLOOR_GHOST"


def test_missing_project_catalog_item_is_skipped(living_room_project):
    catalog = Catalog(item for code, item in DEFAULT_CATALOG.items() if code != "PROJ_SITE_SETUP")
    result = calculate_itemized_estimate(living_room_project, catalog=catalog)
    assert [li.code for li in result.project_line_items] == ["PROJ_PROTECTION", "PROJ_CLEANUP"]
    assert [d.catalog_code for d in result.diagnostics] == ["PROJ_SITE_SETUP"]


def test_assumptions_are_injectable(living_room_project):
    assumptions = EstimateAssumptions(tax_rate=0.0)
    result = calculate_itemized_estimate(living_room_project, assumptions=assumptions)
    assert result.summary.tax_total == 0.0
    assert result.summary.total == result.summary.subtotal
    assert all(li.tax_amount == 0.0 for li in result.all_line_items)
    assert result.assumptions == assumptions


def test_inputs_are_not_mutated(living_room_project):
    snapshot = replace(living_room_project)
    catalog_snapshot = dict(DEFAULT_CATALOG)
    registry_snapshot = dict(DEFAULT_REGISTRY)
    calculate_itemized_estimate(living_room_project)
    assert living_room_project == snapshot
    assert dict(DEFAULT_CATALOG) == catalog_snapshot
    assert dict(DEFAULT_REGISTRY) == registry_snapshot


def test_to_dict_uses_camel_case_contract(living_room_project):
    payload = calculate_itemized_estimate(living_room_project).to_dict()
    assert payload["pricingVersion"] == "v1.1"
    assert set(payload["summary"]) == {
        "materials",
        "labor",
        "equipment",
        "overhead",
        "contingency",
        "taxTotal",
        "subtotal",
        "total",
    }
    assert payload["assumptions"]["wallOpeningsPct"] == 0.10
    assert payload["allLineItems"][0]["costBeforeTax"] == 144.0
    assert payload["multipliers"]["location"]["city"] == "Other city"
    assert payload["inputSummary"]["roomCount"] == 1
    json.dumps(payload)


def test_injected_logger_receives_debug(living_room_project, caplog):
    import logging

    custom = logging.getLogger("renocost.tests.injected")
    with caplog.at_level(logging.DEBUG, logger="renocost.tests.injected"):
        calculate_itemized_estimate(living_room_project, logger=custom)
    assert any(record.name == "renocost.tests.injected" for record in caplog.records)
