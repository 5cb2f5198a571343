"""
Assembly recipes mapping a selected finish or furniture option to catalog items.

Each assembly is keyed by ``(applies_to, applies_to_value)``, for example
``("floorFinish", "Hardwood")``. The registry rejects duplicate keys when it
is built so a lookup can never be ambiguous.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .catalog import Catalog, CatalogError
from .models import Assembly, AssemblyItem

# Column names used by the pricing database; accepted when loading price books.
FORMULA_ALIASES: Dict[str, str] = {
    "area_m2": "area",
    "perimeter_lm": "perimeter",
    "wall_area_m2": "wall_area",
    "ceiling_area_m2": "ceiling_area",
    "room_count": "count",
}


def normalize_formula(value: str) -> str:
    text = (value or "").strip().lower()
    return FORMULA_ALIASES.get(text, text)


def _area(code: str, multiplier: float = 1.0, waste: bool = False) -> AssemblyItem:
    return AssemblyItem(code, "area", multiplier, waste)


def _perimeter(code: str, multiplier: float = 1.0, waste: bool = False) -> AssemblyItem:
    return AssemblyItem(code, "perimeter", multiplier, waste)


def _walls(code: str, multiplier: float = 1.0, waste: bool = False) -> AssemblyItem:
    return AssemblyItem(code, "wall_area", multiplier, waste)


def _fixed(code: str, multiplier: float = 1.0) -> AssemblyItem:
    return AssemblyItem(code, "fixed", multiplier, False)


FLOOR = "floorFinish"
WALL = "wallFinish"
BUILT_IN = "builtInFurniture"

ASSEMBLIES: Tuple[Assembly, ...] = (
    # Flooring
    Assembly("FLOOR_HARDWOOD", "Hardwood Floor Installation", FLOOR, "Hardwood", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_UNDERLAY", waste=True),
        _area("FLOOR_HARDWOOD_SUPPLY", waste=True),
        _area("FLOOR_HARDWOOD_LABOR"),
        _perimeter("FLOOR_SKIRTING_SUPPLY", waste=True),
        _perimeter("FLOOR_SKIRTING_LABOR"),
    )),
    Assembly("FLOOR_LAMINATE", "Laminate Floor Installation", FLOOR, "Laminate", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_UNDERLAY", waste=True),
        _area("FLOOR_LAMINATE_SUPPLY", waste=True),
        _area("FLOOR_LAMINATE_LABOR"),
        _perimeter("FLOOR_SKIRTING_SUPPLY", waste=True),
        _perimeter("FLOOR_SKIRTING_LABOR"),
    )),
    Assembly("FLOOR_TILE_CERAMIC", "Ceramic Tile Floor Installation", FLOOR, "Tile (Ceramic)", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_TILE_SUPPLY", waste=True),
        _area("FLOOR_TILE_ADHESIVE", waste=True),
        _area("FLOOR_TILE_LABOR"),
    )),
    Assembly("FLOOR_TILE_PORCELAIN", "Porcelain Tile Floor Installation", FLOOR, "Tile (Porcelain)", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_TILE_SUPPLY", 1.15, waste=True),
        _area("FLOOR_TILE_ADHESIVE", waste=True),
        _area("FLOOR_TILE_LABOR", 1.1),
    )),
    Assembly("FLOOR_VINYL", "Vinyl / LVT Floor Installation", FLOOR, "Vinyl / LVT", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_VINYL_SUPPLY", waste=True),
        _area("FLOOR_VINYL_LABOR"),
    )),
    Assembly("FLOOR_CARPET", "Carpet Installation", FLOOR, "Carpet", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_CARPET_SUPPLY", waste=True),
        _area("FLOOR_CARPET_UNDERPAD", waste=True),
        _area("FLOOR_CARPET_LABOR"),
    )),
    Assembly("FLOOR_CONCRETE", "Polished Concrete Floor", FLOOR, "Polished Concrete", (
        _area("FLOOR_CONCRETE_POLISH"),
        _area("FLOOR_CONCRETE_SEALER", waste=True),
    )),
    Assembly("FLOOR_MARBLE", "Marble Floor Installation", FLOOR, "Marble", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_MARBLE_SUPPLY", waste=True),
        _area("FLOOR_MARBLE_LABOR"),
    )),
    Assembly("FLOOR_ENGWOOD", "Engineered Wood Installation", FLOOR, "Engineered Wood", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_UNDERLAY", waste=True),
        _area("FLOOR_ENGWOOD_SUPPLY", waste=True),
        _area("FLOOR_ENGWOOD_LABOR"),
        _perimeter("FLOOR_SKIRTING_SUPPLY", waste=True),
        _perimeter("FLOOR_SKIRTING_LABOR"),
    )),
    Assembly("FLOOR_NATURAL_STONE", "Natural Stone Floor Installation", FLOOR, "Natural Stone", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_MARBLE_SUPPLY", 0.9, waste=True),
        _area("FLOOR_MARBLE_LABOR"),
    )),
    Assembly("FLOOR_MICROCEMENT", "Microcement Floor Installation", FLOOR, "Microcement", (
        _area("FLOOR_PREP", 1.5),
        _area("WALL_PLASTER_SUPPLY", 1.3, waste=True),
        _area("WALL_PLASTER_LABOR", 1.5),
        _area("FLOOR_CONCRETE_SEALER", 2.0, waste=True),
    )),
    Assembly("FLOOR_TERRAZZO", "Terrazzo Floor Installation", FLOOR, "Terrazzo", (
        _area("FLOOR_DEMO"),
        _area("FLOOR_PREP"),
        _area("FLOOR_MARBLE_SUPPLY", 1.1, waste=True),
        _area("FLOOR_MARBLE_LABOR", 1.2),
        _area("FLOOR_CONCRETE_POLISH", 0.8),
    )),
    # Walls
    Assembly("WALL_PAINT_STANDARD", "Wall Painting (Standard)", WALL, "Paint (Standard)", (
        _walls("WALL_PREP"),
        _walls("WALL_PRIMER", waste=True),
        _walls("WALL_PAINT_SUPPLY", 2.0, waste=True),
        _walls("WALL_PAINT_LABOR"),
    )),
    Assembly("WALL_PAINT_PREMIUM", "Wall Painting (Premium)", WALL, "Paint (Premium)", (
        _walls("WALL_PREP"),
        _walls("WALL_PRIMER", waste=True),
        _walls("WALL_PAINT_SUPPLY", 2.5, waste=True),
        _walls("WALL_PAINT_LABOR", 1.2),
    )),
    Assembly("WALL_WALLPAPER", "Wallpaper Installation", WALL, "Wallpaper", (
        _walls("WALL_PREP"),
        _walls("WALL_PAPER_SUPPLY", waste=True),
        _walls("WALL_PAPER_ADHESIVE", waste=True),
        _walls("WALL_PAPER_LABOR"),
    )),
    Assembly("WALL_TILE", "Wall Tiling", WALL, "Tile", (
        _walls("WALL_PREP"),
        _walls("WALL_TILE_SUPPLY", waste=True),
        _walls("WALL_TILE_ADHESIVE", waste=True),
        _walls("WALL_TILE_LABOR"),
    )),
    Assembly("WALL_WOOD_PANEL", "Wood Paneling", WALL, "Wood Paneling", (
        _walls("WALL_PREP"),
        _walls("WALL_PANEL_SUPPLY", waste=True),
        _walls("WALL_PANEL_LABOR"),
    )),
    Assembly("WALL_EXPOSED_BRICK", "Exposed Brick", WALL, "Exposed Brick", (
        _walls("WALL_BRICK_EXPOSE"),
        _walls("WALL_BRICK_SEAL", waste=True),
    )),
    Assembly("WALL_TEXTURED_PLASTER", "Textured Plaster", WALL, "Textured Plaster", (
        _walls("WALL_PREP"),
        _walls("WALL_PLASTER_SUPPLY", waste=True),
        _walls("WALL_PLASTER_LABOR"),
    )),
    Assembly("WALL_STONE_VENEER", "Stone Veneer", WALL, "Stone Veneer", (
        _walls("WALL_PREP"),
        _walls("WALL_STONE_SUPPLY", waste=True),
        _walls("WALL_STONE_LABOR"),
    )),
    Assembly("WALL_MICROCEMENT", "Microcement Wall Finish", WALL, "Microcement", (
        _walls("WALL_PREP", 1.2),
        _walls("WALL_PLASTER_SUPPLY", 1.3, waste=True),
        _walls("WALL_PLASTER_LABOR", 1.4),
        _walls("WALL_BRICK_SEAL", 2.0, waste=True),
    )),
    Assembly("WALL_ACOUSTIC", "Acoustic Panels", WALL, "Acoustic Panels", (
        _walls("WALL_PREP", 0.5),
        _walls("WALL_PANEL_SUPPLY", 1.1, waste=True),
        _walls("WALL_PANEL_LABOR", 0.9),
    )),
    # Built-ins
    Assembly("BUILTIN_BASIC", "Basic Cabinets", BUILT_IN, "Basic Cabinets", (
        _perimeter("BUILTIN_BASIC_CABINET", 0.3),
        _perimeter("BUILTIN_BASIC_INSTALL", 0.3),
    )),
    Assembly("BUILTIN_CLOSET", "Custom Closets", BUILT_IN, "Custom Closets", (
        _area("BUILTIN_CLOSET_SYSTEM", 0.15),
        _area("BUILTIN_CLOSET_INSTALL", 0.15),
    )),
    Assembly("BUILTIN_SHELVING", "Built-in Shelving", BUILT_IN, "Built-in Shelving", (
        _perimeter("BUILTIN_SHELF_SUPPLY", 0.25),
        _perimeter("BUILTIN_SHELF_INSTALL", 0.25),
    )),
    Assembly("BUILTIN_KITCHEN_STD", "Kitchen Cabinets (Standard)", BUILT_IN, "Kitchen Cabinets (Standard)", (
        _perimeter("BUILTIN_KITCHEN_CAB", 0.5),
        _perimeter("BUILTIN_KITCHEN_INSTALL", 0.5),
    )),
    Assembly("BUILTIN_KITCHEN_PREM", "Kitchen Cabinets (Premium)", BUILT_IN, "Kitchen Cabinets (Premium)", (
        _perimeter("BUILTIN_KITCHEN_CAB", 0.7),
        _perimeter("BUILTIN_KITCHEN_INSTALL", 0.7),
    )),
    Assembly("BUILTIN_VANITY", "Bathroom Vanity", BUILT_IN, "Bathroom Vanity", (
        _fixed("BUILTIN_VANITY_SUPPLY"),
        _fixed("BUILTIN_VANITY_INSTALL"),
    )),
    Assembly("BUILTIN_ENTERTAINMENT", "Entertainment Center", BUILT_IN, "Entertainment Center", (
        _perimeter("BUILTIN_ENTERTAIN_UNIT", 0.2),
        _perimeter("BUILTIN_ENTERTAIN_INSTALL", 0.2),
    )),
    Assembly("BUILTIN_HOME_OFFICE", "Home Office Desk & Storage", BUILT_IN, "Home Office Desk & Storage", (
        _perimeter("BUILTIN_SHELF_SUPPLY", 0.35),
        _perimeter("BUILTIN_SHELF_INSTALL", 0.35),
        _perimeter("BUILTIN_BASIC_CABINET", 0.2),
        _perimeter("BUILTIN_BASIC_INSTALL", 0.2),
    )),
    Assembly("BUILTIN_FULL_CUSTOM", "Full Custom Joinery", BUILT_IN, "Full Custom Joinery", (
        _area("BUILTIN_CUSTOM_JOINERY", 0.25),
        _area("BUILTIN_CUSTOM_INSTALL", 0.25),
    )),
)


class AssemblyRegistry(Mapping[Tuple[str, str], Assembly]):
    """Assemblies keyed by ``(category, value)``; built once and read-only."""

    def __init__(self, assemblies: Iterable[Assembly]) -> None:
        by_key: Dict[Tuple[str, str], Assembly] = {}
        codes = set()
        for assembly in assemblies:
            if assembly.key in by_key:
                existing = by_key[assembly.key]
                raise CatalogError(
                    f"Assemblies '{existing.code}' and '{assembly.code}' both apply to "
                    f"{assembly.applies_to}={assembly.applies_to_value!r}"
                )
            if assembly.code in codes:
                raise CatalogError(f"Duplicate assembly code '{assembly.code}'")
            for item in assembly.items:
                if normalize_formula(item.qty_formula) != item.qty_formula:
                    raise CatalogError(
                        f"Assembly '{assembly.code}' uses non-canonical formula '{item.qty_formula}'"
                    )
            codes.add(assembly.code)
            by_key[assembly.key] = assembly
        self._by_key = MappingProxyType(by_key)

    def __getitem__(self, key: Tuple[str, str]) -> Assembly:
        return self._by_key[key]

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._by_key)

    def __len__(self) -> int:
        return len(self._by_key)

    def find(self, category: str, value: str) -> Optional[Assembly]:
        return self._by_key.get((category, value))

    def for_category(self, category: str) -> list[Assembly]:
        return [assembly for (applies_to, _), assembly in self._by_key.items() if applies_to == category]

    def missing_catalog_codes(self, catalog: Catalog) -> Dict[str, list[str]]:
        """Return ``{assembly_code: [catalog codes not in catalog]}`` for drift checks."""

        missing: Dict[str, list[str]] = {}
        for assembly in self._by_key.values():
            absent = [item.catalog_code for item in assembly.items if item.catalog_code not in catalog]
            if absent:
                missing[assembly.code] = absent
        return missing


DEFAULT_REGISTRY = AssemblyRegistry(ASSEMBLIES)


__all__ = [
    "ASSEMBLIES",
    "AssemblyRegistry",
    "DEFAULT_REGISTRY",
    "FORMULA_ALIASES",
    "normalize_formula",
]
