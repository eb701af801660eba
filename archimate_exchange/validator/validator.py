"""Relationship legality checks against the compatibility matrix."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.validator.validation_matrix import (
    VALIDATION_MATRIX,
    CompatibilityMatrix,
    allowed_relationships,
)


@dataclass(frozen=True)
class Violation:
    message: str
    source: Element
    target: Element
    relationship: Relationship


class Validator:
    def __init__(self, matrix: Optional[CompatibilityMatrix] = None):
        self.matrix = VALIDATION_MATRIX if matrix is None else matrix

    def validate(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> List[Violation]:
        """Report every relationship the matrix does not permit.

        Relationships whose source or target is unknown are skipped; reference
        integrity is checked by the exporter and the document validator.
        """
        violations: List[Violation] = []
        element_map: Dict[str, Element] = {element.id: element for element in elements}

        for relationship in relationships:
            source = element_map.get(relationship.source)
            target = element_map.get(relationship.target)
            if source is None or target is None:
                continue

            allowed = allowed_relationships(source.type, target.type, self.matrix)
            if relationship.type not in allowed:
                violations.append(
                    Violation(
                        message=(
                            f"Invalid relationship type '{relationship.type.value}' between "
                            f"'{source.type.value}' and '{target.type.value}'"
                        ),
                        source=source,
                        target=target,
                        relationship=relationship,
                    )
                )

        return violations
