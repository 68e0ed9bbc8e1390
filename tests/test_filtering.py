from types import SimpleNamespace

import pytest

from agroguide.services.plants.filtering import (
    build_care_plan,
    category_for_mode,
    filter_plants,
    generate_slug,
)


def _plant(common_name, category="home", scientific_name=None, **care):
    return SimpleNamespace(
        common_name=common_name,
        scientific_name=scientific_name,
        category=category,
        watering_schedule=care.get("watering_schedule"),
        sunlight=care.get("sunlight"),
        soil=care.get("soil"),
        fertilizer=care.get("fertilizer"),
        diseases=care.get("diseases"),
        remedies=care.get("remedies"),
        harvesting=care.get("harvesting"),
    )


CATALOG = [
    _plant("Aloe Vera", "home", "Aloe barbadensis"),
    _plant("Monstera", "home", "Monstera deliciosa"),
    _plant("Snake Plant", "home", None),
    _plant("Tomato", "agri", "Solanum lycopersicum"),
    _plant("Wheat", "agri", "Triticum aestivum"),
]


def test_home_mode_returns_only_home_rows():
    result = filter_plants(CATALOG, "home", "")
    assert [p.common_name for p in result] == ["Aloe Vera", "Monstera", "Snake Plant"]
    assert all(p.category == "home" for p in result)


def test_agriculture_mode_maps_to_agri_category():
    result = filter_plants(CATALOG, "agriculture", "")
    assert [p.common_name for p in result] == ["Tomato", "Wheat"]
    assert filter_plants(CATALOG, "agri", "") == result


def test_query_matches_common_or_scientific_name_case_insensitively():
    assert [p.common_name for p in filter_plants(CATALOG, "home", "MONST")] == ["Monstera"]
    assert [p.common_name for p in filter_plants(CATALOG, "home", "barbadensis")] == ["Aloe Vera"]
    assert [p.common_name for p in filter_plants(CATALOG, "agriculture", "solanum")] == ["Tomato"]


def test_query_does_not_cross_modes():
    assert filter_plants(CATALOG, "home", "tomato") == []


def test_missing_scientific_name_only_matches_common_name():
    assert [p.common_name for p in filter_plants(CATALOG, "home", "snake")] == ["Snake Plant"]
    assert filter_plants(CATALOG, "home", "sansevieria") == []


def test_no_match_returns_empty_list():
    assert filter_plants(CATALOG, "home", "cactus") == []


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        category_for_mode("garden")


@pytest.mark.parametrize("name,slug", [
    ("Aloe Vera", "aloe-vera"),
    ("  Bird's Nest Fern ", "bird-s-nest-fern"),
    ("Tomato (Cherry)", "tomato-cherry"),
    ("!!!", "plant"),
])
def test_generate_slug(name, slug):
    assert generate_slug(name) == slug


def test_care_plan_lists_care_fields():
    plant = _plant(
        "Tomato", "agri", "Solanum lycopersicum",
        watering_schedule="Daily in summer",
        sunlight="Full sun",
        diseases=["Blight", "Wilt"],
        remedies=["Copper spray"],
        harvesting="70-85 days",
    )
    plan = build_care_plan(plant)
    assert plan.splitlines()[0] == "🌱 Tomato (Solanum lycopersicum) Care Plan"
    assert "💧 Watering: Daily in summer" in plan
    assert "☀️ Sunlight: Full sun" in plan
    assert "🚨 Common Issues: Blight, Wilt" in plan
    assert "💡 Solutions: Copper spray" in plan
    assert "📅 Harvest Time: 70-85 days" in plan


def test_care_plan_fallbacks():
    plan = build_care_plan(_plant("Snake Plant"))
    assert plan.splitlines()[0] == "🌱 Snake Plant Care Plan"
    assert "🌱 Soil: Not specified" in plan
    assert "🚨 Common Issues: None listed" in plan
    assert "📅 Harvest Time: N/A" in plan
