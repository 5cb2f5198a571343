import pytest

from renocost.models import ProjectInput
from renocost.quick_estimate import calculate_quick_estimate


def test_quick_estimate_single_room(living_room_project):
    result = calculate_quick_estimate(living_room_project)
    (room,) = result.rooms
    assert room.base_room_cost == 12 * 450
    assert room.floor_finish.value == 1.25
    assert room.wall_finish.value == 0.90
    assert room.adjusted_room_cost == pytest.approx(6075.0)
    assert result.subtotal == pytest.approx(6075.0)
    assert result.total == pytest.approx(6075.0)
    assert result.currency == "EUR"


def test_minimum_room_fee_applies_to_total_only(living_room_payload):
    living_room_payload["rooms"].append(
        {
            "roomType": "Hallway / Corridor",
            "width": 1,
            "length": 1,
            "floorFinish": "Laminate",
            "wallFinish": "Paint (Standard)",
            "builtInFurniture": "None",
        }
    )
    result = calculate_quick_estimate(ProjectInput.from_dict(living_room_payload))
    hallway = result.rooms[1]
    assert hallway.adjusted_room_cost == pytest.approx(450 * 0.85 * 0.95 * 0.90)
    assert hallway.final_room_cost == 600.0
    assert result.subtotal == pytest.approx(6075.0 + 327.04, abs=0.01)
    assert result.total == pytest.approx(6675.0)
    assert result.total >= result.subtotal


def test_quick_estimate_uses_country_multiplier_only(living_room_payload):
    living_room_payload["propertyLocation"] = "USA"
    living_room_payload["propertyCity"] = "San Francisco"
    result = calculate_quick_estimate(ProjectInput.from_dict(living_room_payload))
    assert result.location.value == 1.45
    assert result.subtotal == pytest.approx(6075.0 * 1.45, abs=0.01)


def test_quick_estimate_serializes(living_room_project):
    payload = calculate_quick_estimate(living_room_project).to_dict()
    assert payload["baseRatePerM2"] == 450.0
    assert payload["minRoomFee"] == 600.0
    assert payload["rooms"][0]["roomType"] == {"label": "Living Room", "value": 1.0}
