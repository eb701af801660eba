"""Sparse relationship compatibility matrix.

Maps (source element type, target element type) to the relationship types
permitted between them. A missing pair permits nothing.
"""
from __future__ import annotations

from typing import FrozenSet, Mapping

from archimate_exchange.models.archimate import ElementType, RelationshipType

CompatibilityMatrix = Mapping[ElementType, Mapping[ElementType, FrozenSet[RelationshipType]]]

_STRUCTURAL = frozenset({RelationshipType.COMPOSITION, RelationshipType.AGGREGATION})

VALIDATION_MATRIX: CompatibilityMatrix = {
    ElementType.BUSINESS_ACTOR: {
        ElementType.BUSINESS_ROLE: frozenset({RelationshipType.ASSIGNMENT}),
    },
    ElementType.APPLICATION_COMPONENT: {
        ElementType.APPLICATION_COMPONENT: _STRUCTURAL,
    },
    ElementType.VALUE_STREAM: {
        ElementType.VALUE_STREAM: _STRUCTURAL,
    },
    ElementType.LOCATION: {
        ElementType.LOCATION: _STRUCTURAL,
    },
}


def allowed_relationships(
    source_type: ElementType,
    target_type: ElementType,
    matrix: CompatibilityMatrix = VALIDATION_MATRIX,
) -> FrozenSet[RelationshipType]:
    return frozenset(matrix.get(source_type, {}).get(target_type, frozenset()))
