"""
External price books.

A price book replaces the built-in catalog and assemblies for one run. Three
layouts are accepted:

* a JSON document with ``catalog`` and ``assemblies`` lists,
* the same document in YAML,
* a directory holding ``catalog_items.csv``, ``assemblies.csv`` and
  ``assembly_items.csv`` exported from the pricing database.

Rows with ``is_active`` false are dropped and ``sort_order`` decides item
order inside an assembly. Database formula names such as ``area_m2`` are
normalized on load. Inconsistent data raises :class:`CatalogError`; the
returned :class:`PriceBook` is an immutable snapshot.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd
import yaml

from .assemblies import DEFAULT_REGISTRY, AssemblyRegistry, normalize_formula
from .catalog import DEFAULT_CATALOG, Catalog, CatalogError
from .models import QTY_FORMULAS, Assembly, AssemblyItem, CatalogItem

logger = logging.getLogger(__name__)

CATALOG_CSV = "catalog_items.csv"
ASSEMBLIES_CSV = "assemblies.csv"
ASSEMBLY_ITEMS_CSV = "assembly_items.csv"

_BOOLEAN_TRUE = {"1", "true", "yes", "on", "t", "y"}


@dataclass(frozen=True)
class PriceBook:
    catalog: Catalog
    assemblies: AssemblyRegistry
    source: Optional[Path] = None


DEFAULT_PRICE_BOOK = PriceBook(DEFAULT_CATALOG, DEFAULT_REGISTRY)


def _get(row: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in row:
            value = row[name]
            if value is None:
                continue
            if isinstance(value, float) and pd.isna(value):
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
    return default


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if not text:
        return default
    return text in _BOOLEAN_TRUE


def _as_float(value: Any, field: str, context: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise CatalogError(f"{context}: '{field}' must be numeric, got {value!r}") from None


def _sort_key(row: Mapping[str, Any]) -> int:
    value = _get(row, "sort_order", "sortOrder", default=0)
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _is_active(row: Mapping[str, Any]) -> bool:
    return _as_bool(_get(row, "is_active", "isActive"), True)


def _catalog_item(row: Mapping[str, Any]) -> CatalogItem:
    code = str(_get(row, "code", default="")).strip()
    context = f"Catalog item '{code or '?'}'"
    return CatalogItem(
        code=code,
        name=str(_get(row, "name", default=code)),
        unit=str(_get(row, "unit", default="")),
        cost_type=str(_get(row, "cost_type", "costType", default="")).strip(),
        base_unit_cost=_as_float(_get(row, "base_unit_cost", "baseUnitCost"), "base_unit_cost", context),
        default_waste_pct=_as_float(
            _get(row, "default_waste_pct", "defaultWastePct", default=0.0), "default_waste_pct", context
        ),
    )


def _assembly_item(row: Mapping[str, Any], assembly_code: str) -> AssemblyItem:
    context = f"Assembly '{assembly_code}'"
    catalog_code = str(_get(row, "catalog_code", "catalogCode", default="")).strip()
    if not catalog_code:
        raise CatalogError(f"{context}: item without a catalog code")
    return AssemblyItem(
        catalog_code=catalog_code,
        qty_formula=normalize_formula(str(_get(row, "qty_formula", "qtyFormula", default=""))),
        qty_multiplier=_as_float(
            _get(row, "qty_multiplier", "qtyMultiplier", default=1.0), "qty_multiplier", context
        ),
        include_waste=_as_bool(_get(row, "include_waste", "includeWaste"), False),
    )


def _assembly(row: Mapping[str, Any], item_rows: Iterable[Mapping[str, Any]]) -> Assembly:
    code = str(_get(row, "code", default="")).strip()
    if not code:
        raise CatalogError("Assembly without a code")
    active_items = sorted((r for r in item_rows if _is_active(r)), key=_sort_key)
    return Assembly(
        code=code,
        name=str(_get(row, "name", default=code)),
        applies_to=str(_get(row, "applies_to", "appliesTo", default="")).strip(),
        applies_to_value=str(_get(row, "applies_to_value", "appliesToValue", default="")).strip(),
        items=tuple(_assembly_item(r, code) for r in active_items),
    )


def build_price_book(
    catalog_rows: Iterable[Mapping[str, Any]],
    assembly_rows: Iterable[Mapping[str, Any]],
    item_rows_by_assembly: Mapping[str, List[Mapping[str, Any]]],
    source: Optional[Path] = None,
) -> PriceBook:
    """Assemble a validated :class:`PriceBook` from raw table rows."""

    catalog = Catalog(_catalog_item(row) for row in catalog_rows if _is_active(row))
    active_assemblies = sorted((row for row in assembly_rows if _is_active(row)), key=_sort_key)
    registry = AssemblyRegistry(
        _assembly(row, item_rows_by_assembly.get(str(_get(row, "code", default="")).strip(), []))
        for row in active_assemblies
    )

    for assembly in registry.values():
        for item in assembly.items:
            if item.qty_formula not in QTY_FORMULAS:
                logger.warning(
                    "Price book assembly %s uses unknown formula '%s' for %s; it will price as zero",
                    assembly.code,
                    item.qty_formula,
                    item.catalog_code,
                )
    for assembly_code, codes in registry.missing_catalog_codes(catalog).items():
        logger.warning("Price book assembly %s references missing catalog codes: %s", assembly_code, ", ".join(codes))

    logger.info(
        "Loaded price book%s: %d catalog items, %d assemblies",
        f" from {source}" if source else "",
        len(catalog),
        len(registry),
    )
    return PriceBook(catalog=catalog, assemblies=registry, source=source)


def _from_document(document: Any, source: Path) -> PriceBook:
    if not isinstance(document, Mapping):
        raise CatalogError(f"Price book {source} must be a mapping with 'catalog' and 'assemblies'")
    catalog_rows = document.get("catalog") or []
    assembly_rows = document.get("assemblies") or []
    if not isinstance(catalog_rows, list) or not isinstance(assembly_rows, list):
        raise CatalogError(f"Price book {source}: 'catalog' and 'assemblies' must be lists")
    items_by_assembly: Dict[str, List[Mapping[str, Any]]] = {}
    for row in assembly_rows:
        if not isinstance(row, Mapping):
            raise CatalogError(f"Price book {source}: assembly entries must be mappings")
        items_by_assembly[str(row.get("code", "")).strip()] = list(row.get("items") or [])
    return build_price_book(catalog_rows, assembly_rows, items_by_assembly, source)


def _read_csv_rows(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        raise CatalogError(f"Price book table missing: {path}")
    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    frame.columns = [str(col).strip() for col in frame.columns]
    return frame.to_dict(orient="records")


def _from_directory(directory: Path) -> PriceBook:
    catalog_rows = _read_csv_rows(directory / CATALOG_CSV)
    assembly_rows = _read_csv_rows(directory / ASSEMBLIES_CSV)
    items_by_assembly: Dict[str, List[Mapping[str, Any]]] = {}
    for row in _read_csv_rows(directory / ASSEMBLY_ITEMS_CSV):
        code = str(_get(row, "assembly_code", "assemblyCode", default="")).strip()
        items_by_assembly.setdefault(code, []).append(row)
    known = {str(_get(row, "code", default="")).strip() for row in assembly_rows}
    orphans = sorted(set(items_by_assembly) - known)
    if orphans:
        raise CatalogError(f"assembly_items.csv references unknown assemblies: {', '.join(orphans)}")
    return build_price_book(catalog_rows, assembly_rows, items_by_assembly, directory)


def load_price_book(path: Path | str) -> PriceBook:
    """Load a price book from a JSON/YAML file or a CSV directory."""

    source = Path(path).expanduser().resolve()
    if source.is_dir():
        return _from_directory(source)
    if not source.exists():
        raise CatalogError(f"Price book not found: {source}")
    text = source.read_text(encoding="utf-8")
    suffix = source.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            document = yaml.safe_load(text)
        elif suffix == ".json":
            document = json.loads(text)
        else:
            raise CatalogError(f"Unsupported price book format: {source.name}")
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogError(f"Unable to parse price book {source}: {exc}") from exc
    return _from_document(document, source)


__all__ = ["PriceBook", "DEFAULT_PRICE_BOOK", "build_price_book", "load_price_book"]
