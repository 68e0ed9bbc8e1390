"""
Catalog helpers that work on an already-fetched plant list:
mode/search filtering, care plan text and slug generation.
"""
import re
from typing import Iterable, Protocol, TypeVar

from agroguide.db.models.enums import PlantCategoryEnum

# Browsing mode -> stored plant category
MODE_CATEGORIES = {
    "home": PlantCategoryEnum.HOME,
    "agriculture": PlantCategoryEnum.AGRI,
    "agri": PlantCategoryEnum.AGRI,
}

EMPTY_RESULT_MESSAGE = "No plants found matching your search criteria."

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


class PlantLike(Protocol):
    common_name: str
    scientific_name: str | None
    category: str


P = TypeVar("P", bound=PlantLike)


def category_for_mode(mode: str) -> PlantCategoryEnum:
    try:
        return MODE_CATEGORIES[mode.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown mode '{mode}'. Use 'home' or 'agriculture'.")


def matches_query(plant: PlantLike, query: str) -> bool:
    """Case-insensitive substring match on common or scientific name"""
    needle = query.lower()
    if needle in plant.common_name.lower():
        return True
    return bool(plant.scientific_name) and needle in plant.scientific_name.lower()


def filter_plants(plants: Iterable[P], mode: str = "home", query: str = "") -> list[P]:
    """
    Filter a fetched plant list by browsing mode and free-text query.

    Linear scan over the whole list; input order is preserved. An empty
    query keeps every plant of the mode.

    Args:
        plants: plants already fetched from the database
        mode: "home" or "agriculture"
        query: free text matched against common and scientific names

    Returns:
        The matching plants
    """
    category = category_for_mode(mode)
    query = query or ""
    return [
        plant for plant in plants
        if plant.category == category and matches_query(plant, query)
    ]


def generate_slug(name: str) -> str:
    slug = _SLUG_INVALID.sub("-", name.strip().lower()).strip("-")
    return slug or "plant"


def build_care_plan(plant) -> str:
    """Plain-text care plan a user can copy to the clipboard"""
    title = plant.common_name
    if plant.scientific_name:
        title = f"{title} ({plant.scientific_name})"

    lines = [
        f"🌱 {title} Care Plan",
        "",
        f"💧 Watering: {plant.watering_schedule or 'Not specified'}",
        f"☀️ Sunlight: {plant.sunlight or 'Not specified'}",
        f"🌱 Soil: {plant.soil or 'Not specified'}",
        f"🌿 Fertilizer: {plant.fertilizer or 'Not specified'}",
        "",
        f"🚨 Common Issues: {', '.join(plant.diseases or []) or 'None listed'}",
        f"💡 Solutions: {', '.join(plant.remedies or []) or 'None listed'}",
        "",
        f"📅 Harvest Time: {plant.harvesting or 'N/A'}",
    ]
    return "\n".join(lines)
