"""
Enumerated option tables and project-level multipliers.

Keys are the exact option labels shown to users; lookups that miss fall back
to a neutral ``1.0`` rather than failing.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

PRICING_VERSION = "v1.1"
DEFAULT_CURRENCY = "EUR"
BASE_RATE_PER_M2 = 450.0
MIN_ROOM_FEE = 600.0

OTHER_COUNTRY = "Other"

LOCATION_MULTIPLIERS: Dict[str, float] = {
    "Spain": 1.00,
    "Brazil": 0.75,
    "Portugal": 0.92,
    "Mexico": 0.70,
    "USA": 1.45,
    "UK": 1.35,
    "France": 1.20,
    "Germany": 1.25,
    "Italy": 1.15,
    OTHER_COUNTRY: 1.10,
}

# Keep tuple structure to preserve order for UI display
CITIES_BY_COUNTRY: Dict[str, Tuple[Tuple[str, float], ...]] = {
    "Spain": (
        ("Madrid", 1.15),
        ("Barcelona", 1.20),
        ("Valencia", 0.95),
        ("Sevilla", 0.90),
        ("Bilbao", 1.05),
        ("Málaga", 0.92),
        ("Alicante", 0.88),
        ("Other city", 1.00),
    ),
    "Brazil": (
        ("São Paulo", 1.25),
        ("Rio de Janeiro", 1.20),
        ("Brasília", 1.10),
        ("Salvador", 0.90),
        ("Belo Horizonte", 0.95),
        ("Curitiba", 1.00),
        ("Other city", 0.90),
    ),
    "Portugal": (
        ("Lisboa", 1.20),
        ("Porto", 1.10),
        ("Faro", 0.95),
        ("Braga", 0.90),
        ("Other city", 0.92),
    ),
    "Mexico": (
        ("Ciudad de México", 1.25),
        ("Monterrey", 1.15),
        ("Guadalajara", 1.05),
        ("Cancún", 1.20),
        ("Other city", 0.90),
    ),
    "USA": (
        ("New York", 1.40),
        ("Los Angeles", 1.30),
        ("Miami", 1.25),
        ("San Francisco", 1.45),
        ("Chicago", 1.15),
        ("Houston", 1.00),
        ("Other city", 1.10),
    ),
    "UK": (
        ("London", 1.40),
        ("Manchester", 1.05),
        ("Birmingham", 1.00),
        ("Edinburgh", 1.10),
        ("Other city", 0.95),
    ),
    "France": (
        ("Paris", 1.35),
        ("Lyon", 1.05),
        ("Marseille", 1.00),
        ("Nice", 1.15),
        ("Other city", 0.95),
    ),
    "Germany": (
        ("Berlin", 1.15),
        ("Munich", 1.30),
        ("Frankfurt", 1.20),
        ("Hamburg", 1.10),
        ("Other city", 1.00),
    ),
    "Italy": (
        ("Milan", 1.25),
        ("Rome", 1.15),
        ("Florence", 1.10),
        ("Venice", 1.20),
        ("Other city", 0.95),
    ),
    OTHER_COUNTRY: (
        ("Major city", 1.20),
        ("Medium city", 1.00),
        ("Small town", 0.85),
    ),
}

PROPERTY_AGE_MULTIPLIERS: Dict[str, float] = {
    "1 - 5 Years": 0.95,
    "6 - 10 Years": 1.00,
    "11 - 15 Years": 1.06,
    "16 - 20 Years": 1.12,
    "21 - 25 Years": 1.20,
    "More than 25 Years": 1.32,
}

PROPERTY_TYPE_MULTIPLIERS: Dict[str, float] = {
    "Apartment": 1.00,
    "Penthouse": 1.15,
    "Townhouse": 1.05,
    "Detached House": 1.08,
    "Villa": 1.20,
    "Loft / Industrial": 1.12,
    "Studio": 0.95,
    "Duplex": 1.10,
}

PROPERTY_CONDITION_MULTIPLIERS: Dict[str, float] = {
    "Newly built (minor customization)": 0.75,
    "Good condition (cosmetic refresh)": 0.90,
    "Average (needs updating)": 1.00,
    "Below average (significant work)": 1.15,
    "Poor (major renovation)": 1.35,
    "Gut renovation required": 1.55,
}

ACCESS_DIFFICULTY_MULTIPLIERS: Dict[str, float] = {
    "Easy (ground floor / elevator)": 1.00,
    "Moderate (stairs up to 3rd floor)": 1.05,
    "Difficult (4th+ floor, no elevator)": 1.12,
    "Very difficult (restricted access)": 1.20,
    "Historic building restrictions": 1.25,
}

URGENCY_MULTIPLIERS: Dict[str, float] = {
    "Flexible timeline (3+ months)": 0.95,
    "Standard (1-3 months)": 1.00,
    "Urgent (2-4 weeks)": 1.15,
    "Very urgent (under 2 weeks)": 1.35,
}

ROOM_TYPE_MULTIPLIERS: Dict[str, float] = {
    "Entire Property": 0.92,
    "Living Room": 1.00,
    "Dining Room": 0.98,
    "Kitchen": 1.45,
    "Bathroom": 1.55,
    "Bedroom": 0.95,
    "Master Bedroom": 1.02,
    "Balcony / Terrace": 1.10,
    "Home Office": 0.97,
    "Walk-in Closet": 0.90,
    "Laundry Room": 1.25,
    "Hallway / Corridor": 0.85,
    "Entrance Hall": 0.88,
    "Garage": 0.75,
    "Basement": 0.80,
}

FLOOR_FINISH_MULTIPLIERS: Dict[str, float] = {
    "Hardwood": 1.25,
    "Laminate": 0.95,
    "Tile (Ceramic)": 1.10,
    "Tile (Porcelain)": 1.20,
    "Vinyl / LVT": 0.85,
    "Carpet": 0.90,
    "Polished Concrete": 0.92,
    "Marble": 1.55,
    "Engineered Wood": 1.10,
    "Natural Stone": 1.45,
    "Microcement": 1.30,
    "Terrazzo": 1.40,
}

WALL_FINISH_MULTIPLIERS: Dict[str, float] = {
    "Paint (Standard)": 0.90,
    "Paint (Premium)": 1.00,
    "Wallpaper": 1.10,
    "Tile": 1.30,
    "Wood Paneling": 1.25,
    "Exposed Brick": 1.15,
    "Textured Plaster": 1.12,
    "Stone Veneer": 1.35,
    "Microcement": 1.28,
    "Acoustic Panels": 1.20,
}

BUILT_IN_FURNITURE_MULTIPLIERS: Dict[str, float] = {
    "None": 1.00,
    "Basic Cabinets": 1.08,
    "Custom Closets": 1.12,
    "Built-in Shelving": 1.07,
    "Kitchen Cabinets (Standard)": 1.18,
    "Kitchen Cabinets (Premium)": 1.35,
    "Bathroom Vanity": 1.10,
    "Entertainment Center": 1.10,
    "Home Office Desk & Storage": 1.15,
    "Full Custom Joinery": 1.30,
}

CEILING_HEIGHT_MULTIPLIERS: Dict[str, float] = {
    "Standard (2.4 - 2.7m)": 1.00,
    "High (2.8 - 3.2m)": 1.08,
    "Very high (3.3 - 4m)": 1.18,
    "Double height (4m+)": 1.35,
}

ELECTRICAL_SCOPE_MULTIPLIERS: Dict[str, float] = {
    "No changes": 0.95,
    "Minor updates (outlets, switches)": 1.00,
    "Moderate (new circuits, lighting)": 1.10,
    "Major rewiring": 1.25,
    "Full electrical overhaul": 1.40,
}

PLUMBING_SCOPE_MULTIPLIERS: Dict[str, float] = {
    "No changes": 1.00,
    "Fixture replacement only": 1.05,
    "Minor relocations": 1.15,
    "Major changes": 1.30,
    "Full replumb": 1.50,
}

PROPERTY_LOCATIONS: List[str] = list(LOCATION_MULTIPLIERS)
PROPERTY_AGES: List[str] = list(PROPERTY_AGE_MULTIPLIERS)
PROPERTY_TYPES: List[str] = list(PROPERTY_TYPE_MULTIPLIERS)
PROPERTY_CONDITIONS: List[str] = list(PROPERTY_CONDITION_MULTIPLIERS)
ACCESS_DIFFICULTIES: List[str] = list(ACCESS_DIFFICULTY_MULTIPLIERS)
URGENCY_OPTIONS: List[str] = list(URGENCY_MULTIPLIERS)
ROOM_TYPES: List[str] = list(ROOM_TYPE_MULTIPLIERS)
FLOOR_FINISHES: List[str] = list(FLOOR_FINISH_MULTIPLIERS)
WALL_FINISHES: List[str] = list(WALL_FINISH_MULTIPLIERS)
FURNITURE_OPTIONS: List[str] = list(BUILT_IN_FURNITURE_MULTIPLIERS)
CEILING_HEIGHTS: List[str] = list(CEILING_HEIGHT_MULTIPLIERS)
ELECTRICAL_SCOPES: List[str] = list(ELECTRICAL_SCOPE_MULTIPLIERS)
PLUMBING_SCOPES: List[str] = list(PLUMBING_SCOPE_MULTIPLIERS)


def get_multiplier(table: Mapping[str, float], key: str | None, fallback: float = 1.0) -> float:
    """Return ``table[key]`` or ``fallback`` when the key is unknown or missing."""

    if key is None:
        return fallback
    return float(table.get(key, fallback))


def _cities_for(country: str) -> Tuple[Tuple[str, float], ...]:
    return CITIES_BY_COUNTRY.get(country) or CITIES_BY_COUNTRY[OTHER_COUNTRY]


def get_cities_for_country(country: str) -> List[str]:
    """City names offered for ``country``; unknown countries get the generic list."""

    return [name for name, _ in _cities_for(country)]


def get_city_multiplier(country: str, city: str) -> float:
    for name, multiplier in _cities_for(country):
        if name == city:
            return multiplier
    return 1.0


def get_location_multiplier(country: str, city: str) -> float:
    """Compound country x city multiplier used for display and the quick estimate."""

    return get_multiplier(LOCATION_MULTIPLIERS, country) * get_city_multiplier(country, city)


__all__ = [
    "PRICING_VERSION",
    "DEFAULT_CURRENCY",
    "BASE_RATE_PER_M2",
    "MIN_ROOM_FEE",
    "LOCATION_MULTIPLIERS",
    "CITIES_BY_COUNTRY",
    "PROPERTY_AGE_MULTIPLIERS",
    "PROPERTY_TYPE_MULTIPLIERS",
    "PROPERTY_CONDITION_MULTIPLIERS",
    "ACCESS_DIFFICULTY_MULTIPLIERS",
    "URGENCY_MULTIPLIERS",
    "ROOM_TYPE_MULTIPLIERS",
    "FLOOR_FINISH_MULTIPLIERS",
    "WALL_FINISH_MULTIPLIERS",
    "BUILT_IN_FURNITURE_MULTIPLIERS",
    "CEILING_HEIGHT_MULTIPLIERS",
    "ELECTRICAL_SCOPE_MULTIPLIERS",
    "PLUMBING_SCOPE_MULTIPLIERS",
    "get_multiplier",
    "get_cities_for_country",
    "get_city_multiplier",
    "get_location_multiplier",
]
