"""Relationship fragment generation for the ArchiMate exchange format."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence
from xml.etree import ElementTree as ET

from pydantic import BaseModel, Field

from archimate_exchange.errors import DanglingReferenceError
from archimate_exchange.models.archimate import RELATIONSHIP_ORDER, RelationshipType
from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.xml_export.xml_utils import XSI_TYPE, instantiate, load_template, q, serialize_fragments

logger = logging.getLogger(__name__)

RELATIONSHIP_VERBS: Dict[RelationshipType, str] = {
    RelationshipType.COMPOSITION: "composes",
    RelationshipType.AGGREGATION: "aggregates",
    RelationshipType.ASSIGNMENT: "is assigned to",
    RelationshipType.REALIZATION: "realizes",
    RelationshipType.SERVING: "serves",
    RelationshipType.ACCESS: "accesses",
    RelationshipType.INFLUENCE: "influences",
    RelationshipType.TRIGGERING: "triggers",
    RelationshipType.FLOW: "flows to",
    RelationshipType.SPECIALIZATION: "specializes",
    RelationshipType.ASSOCIATION: "associates with",
    RelationshipType.JUNCTION: "joins with",
}


class RelationshipGenerationOptions(BaseModel):
    model_config = {"populate_by_name": True}

    include_names: bool = Field(False, alias="includeNames")
    validate_references: bool = Field(False, alias="validateReferences")
    group_by_type: bool = Field(False, alias="groupByType")


class RelationshipXmlGenerator:
    def __init__(self) -> None:
        self._template = load_template("relationship.xml")

    def generate_relationship(
        self,
        relationship: Relationship,
        options: Optional[RelationshipGenerationOptions] = None,
        elements: Optional[Sequence[Element]] = None,
    ) -> ET.Element:
        options = options or RelationshipGenerationOptions()
        if options.validate_references and elements is not None:
            self.validate_references(relationship, elements)

        node = instantiate(self._template)
        node.set("identifier", relationship.id)
        node.set("source", relationship.source)
        node.set("target", relationship.target)
        node.set(XSI_TYPE, relationship.type.value)

        name_node = node.find(q("name"))
        name = self.relationship_name(relationship, options, elements)
        if name:
            name_node.text = name
        else:
            node.remove(name_node)
        return node

    def generate_relationships(
        self,
        relationships: Sequence[Relationship],
        options: Optional[RelationshipGenerationOptions] = None,
        elements: Optional[Sequence[Element]] = None,
    ) -> List[ET.Element]:
        options = options or RelationshipGenerationOptions()
        if not relationships:
            return []

        if not options.group_by_type:
            return [self.generate_relationship(rel, options, elements) for rel in relationships]

        grouped: Dict[RelationshipType, List[Relationship]] = {}
        for rel in relationships:
            grouped.setdefault(rel.type, []).append(rel)

        nodes: List[ET.Element] = []
        for rel_type in RELATIONSHIP_ORDER:
            typed = grouped.get(rel_type)
            if not typed:
                continue
            nodes.append(ET.Comment(f" {rel_type.value.upper()} RELATIONSHIPS "))
            nodes.extend(self.generate_relationship(rel, options, elements) for rel in typed)
        return nodes

    def to_xml(
        self,
        relationships: Sequence[Relationship],
        options: Optional[RelationshipGenerationOptions] = None,
        elements: Optional[Sequence[Element]] = None,
    ) -> str:
        return serialize_fragments(self.generate_relationships(relationships, options, elements))

    def relationship_name(
        self,
        relationship: Relationship,
        options: RelationshipGenerationOptions,
        elements: Optional[Sequence[Element]] = None,
    ) -> str:
        # Exchange-format relationships are usually unnamed.
        if not options.include_names:
            return ""

        if elements is not None:
            source = next((e for e in elements if e.id == relationship.source), None)
            target = next((e for e in elements if e.id == relationship.target), None)
            if source is not None and target is not None:
                verb = RELATIONSHIP_VERBS.get(relationship.type, "relates to")
                return f"{source.name} {verb} {target.name}"

        return f"{relationship.type.value} relationship"

    @staticmethod
    def validate_references(relationship: Relationship, elements: Sequence[Element]) -> None:
        element_ids = {element.id for element in elements}
        if relationship.source not in element_ids:
            raise DanglingReferenceError(relationship.id, "source", relationship.source)
        if relationship.target not in element_ids:
            raise DanglingReferenceError(relationship.id, "target", relationship.target)

    @staticmethod
    def relationship_statistics(relationships: Sequence[Relationship]) -> Dict[str, object]:
        by_type: Dict[str, int] = {}
        referenced = set()
        for rel in relationships:
            by_type[rel.type.value] = by_type.get(rel.type.value, 0) + 1
            referenced.add(rel.source)
            referenced.add(rel.target)
        return {"total": len(relationships), "by_type": by_type, "unique_elements": len(referenced)}

    @staticmethod
    def find_orphaned_relationships(relationships: Sequence[Relationship], elements: Sequence[Element]) -> List[str]:
        element_ids = {element.id for element in elements}
        orphaned = [
            rel.id for rel in relationships
            if rel.source not in element_ids or rel.target not in element_ids
        ]
        if orphaned:
            logger.debug("Orphaned relationships: %s", ", ".join(orphaned))
        return orphaned
