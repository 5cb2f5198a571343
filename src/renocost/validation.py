"""Caller-side validation of raw project payloads before they reach the engine."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping

from jsonschema import Draft7Validator

from .models import ProjectInput

logger = logging.getLogger(__name__)

MAX_ROOM_DIMENSION_M = 100.0

_OPTIONAL_TEXT = {"type": ["string", "null"]}

PROJECT_INPUT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Renovation project input",
    "type": "object",
    "required": ["propertyLocation", "propertyAge", "rooms"],
    "properties": {
        "propertyLocation": {"type": "string", "minLength": 1},
        "propertyCity": _OPTIONAL_TEXT,
        "propertyAge": {"type": "string", "minLength": 1},
        "propertyType": _OPTIONAL_TEXT,
        "propertyCondition": _OPTIONAL_TEXT,
        "accessDifficulty": _OPTIONAL_TEXT,
        "urgency": _OPTIONAL_TEXT,
        "rooms": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["roomType", "width", "length"],
                "properties": {
                    "roomType": {"type": "string", "minLength": 1},
                    "width": {"type": "number", "exclusiveMinimum": 0, "maximum": MAX_ROOM_DIMENSION_M},
                    "length": {"type": "number", "exclusiveMinimum": 0, "maximum": MAX_ROOM_DIMENSION_M},
                    "floorFinish": _OPTIONAL_TEXT,
                    "wallFinish": _OPTIONAL_TEXT,
                    "builtInFurniture": _OPTIONAL_TEXT,
                    "ceilingHeight": _OPTIONAL_TEXT,
                    "electricalScope": _OPTIONAL_TEXT,
                    "plumbingScope": _OPTIONAL_TEXT,
                },
            },
        },
    },
}

_VALIDATOR = Draft7Validator(PROJECT_INPUT_SCHEMA)


class ProjectInputError(ValueError):
    """Raised when a project payload fails validation; ``messages`` lists every problem."""

    def __init__(self, messages: List[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or "Invalid project input")


def _path_label(path) -> str:
    parts = [f"[{p}]" if isinstance(p, int) else f".{p}" for p in path]
    return "input" + "".join(parts)


def collect_errors(payload: Any) -> List[str]:
    """Return human-readable validation messages for ``payload`` (empty when valid)."""

    messages = [
        f"{_path_label(error.absolute_path)}: {error.message}"
        for error in sorted(_VALIDATOR.iter_errors(payload), key=lambda e: list(map(str, e.absolute_path)))
    ]
    if isinstance(payload, Mapping) and isinstance(payload.get("rooms"), list):
        for index, room in enumerate(payload["rooms"]):
            if not isinstance(room, Mapping):
                continue
            for key in ("width", "length"):
                value = room.get(key)
                if isinstance(value, float) and not math.isfinite(value):
                    messages.append(f"input.rooms[{index}].{key}: must be a finite number")
    return messages


def validate_project_payload(payload: Any) -> ProjectInput:
    """Validate a decoded JSON payload and convert it into a :class:`ProjectInput`."""

    messages = collect_errors(payload)
    if messages:
        for message in messages:
            logger.debug("Invalid project input: %s", message)
        raise ProjectInputError(messages)
    return ProjectInput.from_dict(payload)


__all__ = ["PROJECT_INPUT_SCHEMA", "ProjectInputError", "collect_errors", "validate_project_payload"]
