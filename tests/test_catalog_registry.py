import pytest

from renocost.assemblies import ASSEMBLIES, DEFAULT_REGISTRY, AssemblyRegistry, normalize_formula
from renocost.catalog import CATALOG_ITEMS, DEFAULT_CATALOG, Catalog, CatalogError
from renocost.models import QTY_FORMULAS, Assembly, AssemblyItem, CatalogItem


def test_default_catalog_contents():
    assert len(DEFAULT_CATALOG) == 58
    assert len(DEFAULT_CATALOG.by_cost_type("labor")) + len(DEFAULT_CATALOG.by_cost_type("material")) == 58
    hardwood = DEFAULT_CATALOG["FLOOR_HARDWOOD_SUPPLY"]
    assert (hardwood.unit, hardwood.cost_type, hardwood.base_unit_cost, hardwood.default_waste_pct) == (
        "m2",
        "material",
        55.0,
        0.10,
    )
    assert DEFAULT_CATALOG.get("NOPE") is None


def test_catalog_rejects_duplicates_and_bad_items():
    item = CATALOG_ITEMS[0]
    with pytest.raises(CatalogError, match="Duplicate"):
        Catalog([item, item])
    with pytest.raises(CatalogError, match="cost type"):
        Catalog([CatalogItem("X", "X", "m2", "magic", 1.0)])
    with pytest.raises(CatalogError, match="positive"):
        Catalog([CatalogItem("X", "X", "m2", "labor", 0.0)])
    with pytest.raises(CatalogError, match="waste"):
        Catalog([CatalogItem("X", "X", "m2", "material", 1.0, 1.0)])


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG["NEW"] = CATALOG_ITEMS[0]  # type: ignore[index]


def test_default_registry_is_consistent():
    assert len(DEFAULT_REGISTRY) == 31
    assert len(DEFAULT_REGISTRY.for_category("floorFinish")) == 12
    assert len(DEFAULT_REGISTRY.for_category("wallFinish")) == 10
    assert len(DEFAULT_REGISTRY.for_category("builtInFurniture")) == 9
    assert DEFAULT_REGISTRY.missing_catalog_codes(DEFAULT_CATALOG) == {}
    assert DEFAULT_REGISTRY.find("builtInFurniture", "None") is None
    assert all(item.qty_formula in QTY_FORMULAS for a in ASSEMBLIES for item in a.items)


def test_registry_rejects_duplicate_keys_and_codes():
    a = Assembly("A", "A", "floorFinish", "Hardwood", (AssemblyItem("FLOOR_DEMO", "area"),))
    b = Assembly("B", "B", "floorFinish", "Hardwood", ())
    with pytest.raises(CatalogError, match="both apply"):
        AssemblyRegistry([a, b])
    c = Assembly("A", "Other", "wallFinish", "Tile", ())
    with pytest.raises(CatalogError, match="Duplicate assembly code"):
        AssemblyRegistry([a, c])


def test_registry_requires_canonical_formulas():
    raw = Assembly("A", "A", "floorFinish", "X", (AssemblyItem("FLOOR_DEMO", "area_m2"),))
    with pytest.raises(CatalogError, match="non-canonical"):
        AssemblyRegistry([raw])


@pytest.mark.parametrize(
    "raw, expected",
    [("area_m2", "area"), ("perimeter_lm", "perimeter"), ("Wall_Area_M2", "wall_area"), ("room_count", "count"), ("fixed", "fixed")],
)
def test_normalize_formula(raw, expected):
    assert normalize_formula(raw) == expected
