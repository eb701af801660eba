"""JSON payload schema for export requests and conversion to domain values."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from jsonschema import Draft202012Validator, ValidationError

from archimate_exchange.models.elements import (
    Element,
    Relationship,
    elements_from_dicts,
    relationships_from_dicts,
)
from archimate_exchange.xml_export.exporter import ExportOptions

PAYLOAD_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["elements"],
    "properties": {
        "elements": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                    "type": {"type": "string"},
                },
                "additionalProperties": True,
            },
        },
        "relationships": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "source", "target", "type"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "source": {"type": "string"},
                    "target": {"type": "string"},
                    "type": {"type": "string"},
                },
                "additionalProperties": True,
            },
        },
        "options": {"type": "object"},
    },
    "additionalProperties": False,
}

_VALIDATOR = Draft202012Validator(PAYLOAD_SCHEMA)


@dataclass
class ExportPayload:
    elements: List[Element] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    options: ExportOptions = field(default_factory=ExportOptions)


def validate_payload(payload: Dict[str, Any]) -> None:
    try:
        _VALIDATOR.validate(payload)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path)
        where = f" at {location}" if location else ""
        raise ValueError(f"Payload validation failed{where}: {exc.message}") from exc


def payload_from_dict(payload: Dict[str, Any]) -> ExportPayload:
    """Schema-check a raw payload and build elements, relationships and options.

    Unknown element or relationship type tags raise the matching
    ``Unknown*TypeError`` naming the offending id.
    """
    validate_payload(payload)
    return ExportPayload(
        elements=elements_from_dicts(payload["elements"]),
        relationships=relationships_from_dicts(payload.get("relationships", [])),
        options=ExportOptions.model_validate(payload.get("options", {})),
    )


def payload_from_json(text: str) -> ExportPayload:
    return payload_from_dict(json.loads(text))
