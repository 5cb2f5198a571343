"""
Static price catalog of priceable work items.

Base unit costs are in the default currency (EUR) per unit. The catalog is
built once at import time and is never mutated; external price books produce
a fresh :class:`Catalog` instead of patching this one.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from .models import COST_TYPES, CatalogItem


class CatalogError(ValueError):
    """Raised when catalog or assembly data is inconsistent at load time."""


def _check_item(item: CatalogItem) -> None:
    if not item.code:
        raise CatalogError("Catalog item without a code")
    if item.cost_type not in COST_TYPES:
        raise CatalogError(f"Catalog item '{item.code}' has unknown cost type '{item.cost_type}'")
    if not item.base_unit_cost > 0:
        raise CatalogError(f"Catalog item '{item.code}' must have a positive base unit cost")
    if not 0 <= item.default_waste_pct < 1:
        raise CatalogError(f"Catalog item '{item.code}' waste fraction must be in [0, 1)")


class Catalog(Mapping[str, CatalogItem]):
    """Read-only mapping of catalog code to :class:`CatalogItem`."""

    def __init__(self, items: Iterable[CatalogItem]) -> None:
        by_code = {}
        for item in items:
            _check_item(item)
            if item.code in by_code:
                raise CatalogError(f"Duplicate catalog code '{item.code}'")
            by_code[item.code] = item
        self._items = MappingProxyType(by_code)

    def __getitem__(self, code: str) -> CatalogItem:
        return self._items[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, code: str, default: Optional[CatalogItem] = None) -> Optional[CatalogItem]:  # type: ignore[override]
        return self._items.get(code, default)

    def by_cost_type(self, cost_type: str) -> list[CatalogItem]:
        return [item for item in self._items.values() if item.cost_type == cost_type]


CATALOG_ITEMS: tuple[CatalogItem, ...] = (
    # Flooring
    CatalogItem("FLOOR_DEMO", "Floor demolition & disposal", "m2", "labor", 12.00, 0),
    CatalogItem("FLOOR_PREP", "Floor surface preparation", "m2", "labor", 8.00, 0),
    CatalogItem("FLOOR_UNDERLAY", "Floor underlay material", "m2", "material", 4.50, 0.05),
    CatalogItem("FLOOR_HARDWOOD_SUPPLY", "Hardwood flooring supply", "m2", "material", 55.00, 0.10),
    CatalogItem("FLOOR_HARDWOOD_LABOR", "Hardwood installation labor", "m2", "labor", 28.00, 0),
    CatalogItem("FLOOR_LAMINATE_SUPPLY", "Laminate flooring supply", "m2", "material", 22.00, 0.08),
    CatalogItem("FLOOR_LAMINATE_LABOR", "Laminate installation labor", "m2", "labor", 18.00, 0),
    CatalogItem("FLOOR_TILE_SUPPLY", "Floor tile supply", "m2", "material", 35.00, 0.12),
    CatalogItem("FLOOR_TILE_ADHESIVE", "Tile adhesive & grout", "m2", "material", 8.00, 0.05),
    CatalogItem("FLOOR_TILE_LABOR", "Floor tile installation labor", "m2", "labor", 35.00, 0),
    CatalogItem("FLOOR_VINYL_SUPPLY", "Vinyl flooring supply", "m2", "material", 18.00, 0.08),
    CatalogItem("FLOOR_VINYL_LABOR", "Vinyl installation labor", "m2", "labor", 15.00, 0),
    CatalogItem("FLOOR_CARPET_SUPPLY", "Carpet supply", "m2", "material", 25.00, 0.10),
    CatalogItem("FLOOR_CARPET_UNDERPAD", "Carpet underpad", "m2", "material", 6.00, 0.05),
    CatalogItem("FLOOR_CARPET_LABOR", "Carpet installation labor", "m2", "labor", 12.00, 0),
    CatalogItem("FLOOR_CONCRETE_POLISH", "Concrete polishing", "m2", "labor", 45.00, 0),
    CatalogItem("FLOOR_CONCRETE_SEALER", "Concrete sealer", "m2", "material", 8.00, 0.05),
    CatalogItem("FLOOR_MARBLE_SUPPLY", "Marble flooring supply", "m2", "material", 120.00, 0.12),
    CatalogItem("FLOOR_MARBLE_LABOR", "Marble installation labor", "m2", "labor", 55.00, 0),
    CatalogItem("FLOOR_ENGWOOD_SUPPLY", "Engineered wood flooring supply", "m2", "material", 42.00, 0.10),
    CatalogItem("FLOOR_ENGWOOD_LABOR", "Engineered wood installation labor", "m2", "labor", 24.00, 0),
    CatalogItem("FLOOR_SKIRTING_SUPPLY", "Skirting/baseboard supply", "lm", "material", 8.00, 0.08),
    CatalogItem("FLOOR_SKIRTING_LABOR", "Skirting installation labor", "lm", "labor", 6.00, 0),
    # Walls
    CatalogItem("WALL_PREP", "Wall surface preparation", "m2", "labor", 6.00, 0),
    CatalogItem("WALL_PRIMER", "Wall primer", "m2", "material", 3.50, 0.07),
    CatalogItem("WALL_PAINT_SUPPLY", "Wall paint supply", "m2", "material", 4.00, 0.07),
    CatalogItem("WALL_PAINT_LABOR", "Wall painting labor (2 coats)", "m2", "labor", 8.00, 0),
    CatalogItem("WALL_PAPER_SUPPLY", "Wallpaper supply", "m2", "material", 18.00, 0.10),
    CatalogItem("WALL_PAPER_ADHESIVE", "Wallpaper adhesive", "m2", "material", 2.00, 0.05),
    CatalogItem("WALL_PAPER_LABOR", "Wallpaper installation labor", "m2", "labor", 15.00, 0),
    CatalogItem("WALL_TILE_SUPPLY", "Wall tile supply", "m2", "material", 32.00, 0.12),
    CatalogItem("WALL_TILE_ADHESIVE", "Wall tile adhesive & grout", "m2", "material", 7.00, 0.05),
    CatalogItem("WALL_TILE_LABOR", "Wall tile installation labor", "m2", "labor", 38.00, 0),
    CatalogItem("WALL_PANEL_SUPPLY", "Wood paneling supply", "m2", "material", 45.00, 0.10),
    CatalogItem("WALL_PANEL_LABOR", "Wood paneling installation labor", "m2", "labor", 28.00, 0),
    CatalogItem("WALL_BRICK_EXPOSE", "Brick exposure work", "m2", "labor", 35.00, 0),
    CatalogItem("WALL_BRICK_SEAL", "Brick sealer", "m2", "material", 6.00, 0.05),
    CatalogItem("WALL_PLASTER_SUPPLY", "Textured plaster supply", "m2", "material", 12.00, 0.08),
    CatalogItem("WALL_PLASTER_LABOR", "Textured plaster application", "m2", "labor", 22.00, 0),
    CatalogItem("WALL_STONE_SUPPLY", "Stone veneer supply", "m2", "material", 65.00, 0.10),
    CatalogItem("WALL_STONE_LABOR", "Stone veneer installation", "m2", "labor", 45.00, 0),
    # Built-ins
    CatalogItem("BUILTIN_BASIC_CABINET", "Basic cabinet supply", "lm", "material", 180.00, 0),
    CatalogItem("BUILTIN_BASIC_INSTALL", "Basic cabinet installation", "lm", "labor", 85.00, 0),
    CatalogItem("BUILTIN_CLOSET_SYSTEM", "Custom closet system", "m2", "material", 220.00, 0),
    CatalogItem("BUILTIN_CLOSET_INSTALL", "Custom closet installation", "m2", "labor", 95.00, 0),
    CatalogItem("BUILTIN_SHELF_SUPPLY", "Built-in shelving supply", "lm", "material", 65.00, 0),
    CatalogItem("BUILTIN_SHELF_INSTALL", "Built-in shelving installation", "lm", "labor", 45.00, 0),
    CatalogItem("BUILTIN_KITCHEN_CAB", "Kitchen cabinet supply", "lm", "material", 350.00, 0),
    CatalogItem("BUILTIN_KITCHEN_INSTALL", "Kitchen cabinet installation", "lm", "labor", 120.00, 0),
    CatalogItem("BUILTIN_VANITY_SUPPLY", "Bathroom vanity supply", "item", "material", 450.00, 0),
    CatalogItem("BUILTIN_VANITY_INSTALL", "Bathroom vanity installation", "item", "labor", 180.00, 0),
    CatalogItem("BUILTIN_ENTERTAIN_UNIT", "Entertainment center", "lm", "material", 280.00, 0),
    CatalogItem("BUILTIN_ENTERTAIN_INSTALL", "Entertainment center installation", "lm", "labor", 110.00, 0),
    CatalogItem("BUILTIN_CUSTOM_JOINERY", "Full custom joinery", "m2", "material", 450.00, 0),
    CatalogItem("BUILTIN_CUSTOM_INSTALL", "Full custom installation", "m2", "labor", 180.00, 0),
    # Project-level
    CatalogItem("PROJ_SITE_SETUP", "Site setup & protection", "fixed", "labor", 250.00, 0),
    CatalogItem("PROJ_PROTECTION", "Surface protection materials", "m2", "material", 2.50, 0),
    CatalogItem("PROJ_CLEANUP", "Final cleanup & disposal", "m2", "labor", 4.00, 0),
)

SITE_SETUP_CODE = "PROJ_SITE_SETUP"
PROTECTION_CODE = "PROJ_PROTECTION"
CLEANUP_CODE = "PROJ_CLEANUP"

DEFAULT_CATALOG = Catalog(CATALOG_ITEMS)


__all__ = [
    "Catalog",
    "CatalogError",
    "CATALOG_ITEMS",
    "DEFAULT_CATALOG",
    "SITE_SETUP_CODE",
    "PROTECTION_CODE",
    "CLEANUP_CODE",
]
