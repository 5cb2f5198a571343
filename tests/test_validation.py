import pytest

from renocost.validation import ProjectInputError, collect_errors, validate_project_payload


def test_valid_payload_converts(living_room_payload):
    project = validate_project_payload(living_room_payload)
    assert project.property_location == "Spain"
    assert project.rooms[0].width == 4.0
    assert project.rooms[0].built_in_furniture == "None"
    assert project.rooms[0].ceiling_height is None


def test_snake_case_keys_are_accepted(living_room_payload):
    room = living_room_payload["rooms"][0]
    room["floor_finish"] = room.pop("floorFinish")
    project = validate_project_payload(living_room_payload)
    assert project.rooms[0].floor_finish == "Hardwood"


def test_missing_rooms_is_rejected(living_room_payload):
    living_room_payload.pop("rooms")
    with pytest.raises(ProjectInputError) as excinfo:
        validate_project_payload(living_room_payload)
    assert any("rooms" in message for message in excinfo.value.messages)


def test_empty_rooms_is_rejected(living_room_payload):
    living_room_payload["rooms"] = []
    assert collect_errors(living_room_payload)


@pytest.mark.parametrize("width", [0, -2, 150, "4"])
def test_room_dimensions_are_range_checked(living_room_payload, width):
    living_room_payload["rooms"][0]["width"] = width
    messages = collect_errors(living_room_payload)
    assert messages
    assert messages[0].startswith("input.rooms[0].width")


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_dimensions_are_rejected(living_room_payload, value):
    living_room_payload["rooms"][0]["length"] = value
    with pytest.raises(ProjectInputError) as excinfo:
        validate_project_payload(living_room_payload)
    assert any("finite" in message for message in excinfo.value.messages)


def test_error_collects_every_problem(living_room_payload):
    living_room_payload.pop("propertyAge")
    living_room_payload["rooms"][0]["length"] = 0
    with pytest.raises(ProjectInputError) as excinfo:
        validate_project_payload(living_room_payload)
    assert len(excinfo.value.messages) == 2
    assert "; " in str(excinfo.value)
