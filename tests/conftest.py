from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from renocost.models import ProjectInput

LIVING_ROOM_PAYLOAD: Dict[str, Any] = {
    "propertyLocation": "Spain",
    "propertyCity": "Other city",
    "propertyAge": "6 - 10 Years",
    "propertyType": "Apartment",
    "propertyCondition": "Average (needs updating)",
    "accessDifficulty": "Easy (ground floor / elevator)",
    "urgency": "Standard (1-3 months)",
    "rooms": [
        {
            "roomType": "Living Room",
            "width": 4,
            "length": 3,
            "floorFinish": "Hardwood",
            "wallFinish": "Paint (Standard)",
            "builtInFurniture": "None",
        }
    ],
}


@pytest.fixture
def living_room_payload() -> Dict[str, Any]:
    return copy.deepcopy(LIVING_ROOM_PAYLOAD)


@pytest.fixture
def living_room_project(living_room_payload) -> ProjectInput:
    return ProjectInput.from_dict(living_room_payload)


@pytest.fixture
def input_file(tmp_path: Path, living_room_payload) -> Path:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(living_room_payload), encoding="utf-8")
    return path
