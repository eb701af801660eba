"""Immutable element and relationship values.

A single ``Element`` model carries its type tag; the layer is always derived
from the type through ``ELEMENT_LAYERS`` and is never stored on its own.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, computed_field

from archimate_exchange.errors import UnknownElementTypeError, UnknownRelationshipTypeError
from archimate_exchange.models.archimate import ELEMENT_LAYERS, ElementType, Layer, RelationshipType


class Element(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ElementType

    @computed_field  # type: ignore[misc]
    @property
    def layer(self) -> Layer:
        return ELEMENT_LAYERS[self.type]


class Relationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    type: RelationshipType


def _coerce_element_type(value: ElementType | str, element_id: str | None = None) -> ElementType:
    if isinstance(value, ElementType):
        return value
    try:
        return ElementType(value)
    except ValueError as exc:
        raise UnknownElementTypeError(str(value), element_id) from exc


def _coerce_relationship_type(value: RelationshipType | str, relationship_id: str | None = None) -> RelationshipType:
    if isinstance(value, RelationshipType):
        return value
    try:
        return RelationshipType(value)
    except ValueError as exc:
        raise UnknownRelationshipTypeError(str(value), relationship_id) from exc


def create_element(element_type: ElementType | str, element_id: str, name: str) -> Element:
    return Element(id=element_id, name=name, type=_coerce_element_type(element_type, element_id))


def create_relationship(
    relationship_id: str,
    source: str,
    target: str,
    relationship_type: RelationshipType | str,
) -> Relationship:
    return Relationship(
        id=relationship_id,
        source=source,
        target=target,
        type=_coerce_relationship_type(relationship_type, relationship_id),
    )


def elements_from_dicts(items: Iterable[Mapping[str, str]]) -> List[Element]:
    return [create_element(item["type"], item["id"], item.get("name", "")) for item in items]


def relationships_from_dicts(items: Iterable[Mapping[str, str]]) -> List[Relationship]:
    return [
        create_relationship(item["id"], item["source"], item["target"], item["type"])
        for item in items
    ]
