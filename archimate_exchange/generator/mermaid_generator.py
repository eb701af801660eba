"""Render an element/relationship graph as a Mermaid flowchart."""
from __future__ import annotations

from typing import Dict, List, Sequence

from archimate_exchange.models.archimate import RelationshipType
from archimate_exchange.models.elements import Element, Relationship

DEFAULT_ARROW = "-->"

RELATIONSHIP_ARROWS: Dict[RelationshipType, str] = {
    RelationshipType.COMPOSITION: "--*",
    RelationshipType.AGGREGATION: "--o",
    RelationshipType.ASSIGNMENT: "-->",
    RelationshipType.REALIZATION: "--|>",
    RelationshipType.SERVING: "-->",
    RelationshipType.ACCESS: "..>",
    RelationshipType.INFLUENCE: "..>",
    RelationshipType.TRIGGERING: "-->",
    RelationshipType.FLOW: "-->",
    RelationshipType.SPECIALIZATION: "--|>",
    RelationshipType.ASSOCIATION: "---",
    RelationshipType.JUNCTION: "---",
}


def _label(name: str) -> str:
    return (name or "").replace('"', "#quot;")


class MermaidGenerator:
    def generate(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> str:
        lines: List[str] = ["graph TD;"]
        for element in elements:
            lines.append(f'  {element.id}["{_label(element.name)}"];')
        for rel in relationships:
            arrow = RELATIONSHIP_ARROWS.get(rel.type, DEFAULT_ARROW)
            lines.append(f"  {rel.source} {arrow} {rel.target};")
        return "\n".join(lines) + "\n"
