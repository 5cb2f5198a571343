from renocost.catalog import DEFAULT_CATALOG
from renocost.line_items import price_assembly_item, price_project_item
from renocost.models import AssemblyItem, RoomDimensions
from renocost.rounding import round2, round2_product, sum_rounded

DIMS = RoomDimensions(area_m2=12.0, perimeter_lm=14.0, wall_area_m2=32.13, ceiling_area_m2=12.0, ceiling_height_m=2.55)


def _price(code, formula="area", multiplier=1.0, waste=False, location="Spain", age="6 - 10 Years"):
    return price_assembly_item(
        AssemblyItem(code, formula, multiplier, waste),
        DEFAULT_CATALOG[code],
        DIMS,
        location,
        age,
        0.21,
        assembly_code="TEST",
        room_index=0,
    )


def test_labor_item_without_waste():
    li = _price("FLOOR_DEMO")
    assert li.quantity == 12.0
    assert li.unit_cost_final == 12.0
    assert li.cost_before_waste == 144.0
    assert li.waste_pct == 0.0
    assert li.waste_amount == 0.0
    assert li.cost_before_tax == 144.0
    assert li.tax_amount == 30.24
    assert li.total_cost == 174.24
    assert li.assembly_code == "TEST"
    assert li.room_index == 0


def test_waste_applies_only_when_opted_in():
    with_waste = _price("FLOOR_HARDWOOD_SUPPLY", waste=True)
    assert with_waste.waste_pct == 0.10
    assert with_waste.cost_before_waste == 660.0
    assert with_waste.waste_amount == 66.0
    assert with_waste.cost_before_tax == 726.0

    without = _price("FLOOR_HARDWOOD_SUPPLY", waste=False)
    assert without.waste_pct == 0.0
    assert without.cost_before_tax == 660.0


def test_perimeter_item_with_waste():
    li = _price("FLOOR_SKIRTING_SUPPLY", formula="perimeter", waste=True)
    assert li.quantity == 14.0
    assert li.waste_amount == 8.96
    assert li.cost_before_tax == 120.96


def test_location_and_age_factors_compound_on_labor():
    li = _price("FLOOR_DEMO", location="Brazil", age="More than 25 Years")
    assert li.location_factor == 0.65
    assert li.age_factor == 1.28
    assert li.unit_cost_final == 9.98
    assert li.cost_before_waste == round2(12 * 9.98)


def test_age_factor_skips_material():
    li = _price("FLOOR_HARDWOOD_SUPPLY", location="Brazil", age="More than 25 Years")
    assert li.age_factor == 1.0
    assert li.unit_cost_final == 44.0


def test_cost_uses_unrounded_quantity():
    dims = RoomDimensions(
        area_m2=3.33 * 4.17,
        perimeter_lm=2 * (3.33 + 4.17),
        wall_area_m2=15.0 * 2.55 * 0.9,
        ceiling_area_m2=3.33 * 4.17,
        ceiling_height_m=2.55,
    )
    li = price_assembly_item(
        AssemblyItem("FLOOR_HARDWOOD_SUPPLY", "area", 1.0, False),
        DEFAULT_CATALOG["FLOOR_HARDWOOD_SUPPLY"],
        dims,
        "Spain",
        "6 - 10 Years",
        0.21,
    )
    assert li.quantity == 13.89
    assert li.cost_before_waste == 763.74


def test_project_item_uses_unrounded_area():
    li = price_project_item(DEFAULT_CATALOG["PROJ_PROTECTION"], 3.33 * 4.17, 0.21)
    assert li.quantity == 13.89
    assert li.cost_before_tax == 34.72


def test_half_cent_tax_rounds_up():
    li = price_project_item(DEFAULT_CATALOG["PROJ_PROTECTION"], 28.2, 0.21)
    assert li.cost_before_tax == 70.5
    assert li.tax_amount == 14.81
    assert li.total_cost == 85.31
    assert li.total_cost == round2_product(li.cost_before_tax, 1 + li.tax_rate)


def test_non_positive_quantity_emits_nothing():
    assert _price("FLOOR_DEMO", multiplier=0.0) is None
    assert _price("FLOOR_DEMO", formula="volume") is None
    assert _price("FLOOR_DEMO", multiplier=0.0001) is None


def test_every_step_reconciles():
    li = _price("WALL_PRIMER", formula="wall_area", waste=True)
    assert li.waste_amount == round2_product(li.cost_before_waste, li.waste_pct)
    assert li.cost_before_tax == sum_rounded([li.cost_before_waste, li.waste_amount])
    assert li.tax_amount == round2_product(li.cost_before_tax, li.tax_rate)
    assert li.total_cost == sum_rounded([li.cost_before_tax, li.tax_amount])


def test_project_item_has_no_adjustments():
    li = price_project_item(DEFAULT_CATALOG["PROJ_CLEANUP"], 12.0, 0.21)
    assert li.location_factor == 1.0
    assert li.age_factor == 1.0
    assert li.waste_pct == 0.0
    assert li.cost_before_tax == 48.0
    assert li.total_cost == round2(48.0 * 1.21)
    assert li.assembly_code is None
    assert li.room_index is None
    assert price_project_item(DEFAULT_CATALOG["PROJ_CLEANUP"], 0.0, 0.21) is None
