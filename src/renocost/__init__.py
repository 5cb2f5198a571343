"""Itemized renovation cost estimation (bill of quantities)."""

from .assemblies import DEFAULT_REGISTRY, AssemblyRegistry
from .catalog import DEFAULT_CATALOG, Catalog, CatalogError
from .estimator import calculate_itemized_estimate, estimate_room
from .models import EstimateAssumptions, ItemizedEstimateResult, ProjectInput, RoomInput
from .price_book import PriceBook, load_price_book
from .quick_estimate import calculate_quick_estimate
from .validation import ProjectInputError, validate_project_payload

__all__ = [
    "AssemblyRegistry",
    "Catalog",
    "CatalogError",
    "DEFAULT_CATALOG",
    "DEFAULT_REGISTRY",
    "EstimateAssumptions",
    "ItemizedEstimateResult",
    "PriceBook",
    "ProjectInput",
    "ProjectInputError",
    "RoomInput",
    "calculate_itemized_estimate",
    "calculate_quick_estimate",
    "estimate_room",
    "load_price_book",
    "validate_project_payload",
]
