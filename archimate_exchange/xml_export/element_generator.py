"""Element fragment generation for the ArchiMate exchange format."""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence
from xml.etree import ElementTree as ET

from pydantic import BaseModel, Field

from archimate_exchange.models.archimate import LAYER_ORDER, Layer
from archimate_exchange.models.elements import Element
from archimate_exchange.xml_export.xml_utils import XSI_TYPE, instantiate, load_template, q, serialize_fragments

logger = logging.getLogger(__name__)

LAYER_DESCRIPTIONS: Dict[Layer, str] = {
    Layer.MOTIVATION: "represents the context or change drivers for the enterprise",
    Layer.STRATEGY: "represents the strategic direction and choices of the enterprise",
    Layer.BUSINESS: "represents business processes, functions, events, and actors",
    Layer.APPLICATION: "represents application components, services, and interfaces",
    Layer.TECHNOLOGY: "represents technology infrastructure and platforms",
    Layer.PHYSICAL: "represents physical elements like equipment and facilities",
    Layer.IMPLEMENTATION: "represents implementation and migration planning elements",
}

_TEMPLATE_TOKEN_RE = re.compile(r"\{\{(ELEMENT_TYPE|ELEMENT_NAME|ELEMENT_LAYER)\}\}")


class ElementGenerationOptions(BaseModel):
    model_config = {"populate_by_name": True}

    include_documentation: bool = Field(False, alias="includeDocumentation")
    documentation_template: Optional[str] = Field(None, alias="documentationTemplate")
    group_by_layer: bool = Field(False, alias="groupByLayer")


class ElementXmlGenerator:
    def __init__(self) -> None:
        self._template = load_template("element.xml")

    def generate_element(self, element: Element, options: Optional[ElementGenerationOptions] = None) -> ET.Element:
        options = options or ElementGenerationOptions()
        node = instantiate(self._template)
        node.set("identifier", element.id)
        node.set(XSI_TYPE, element.type.value)
        node.find(q("name")).text = element.name
        node.find(q("documentation")).text = self.generate_documentation(element, options)
        return node

    def generate_elements(
        self,
        elements: Sequence[Element],
        options: Optional[ElementGenerationOptions] = None,
    ) -> List[ET.Element]:
        """Element fragments in input order, or grouped by layer with a comment per group."""
        options = options or ElementGenerationOptions()
        if not elements:
            return []

        if not options.group_by_layer:
            return [self.generate_element(element, options) for element in elements]

        grouped: Dict[Layer, List[Element]] = {}
        for element in elements:
            grouped.setdefault(element.layer, []).append(element)

        nodes: List[ET.Element] = []
        for layer in LAYER_ORDER:
            layer_elements = grouped.get(layer)
            if not layer_elements:
                continue
            nodes.append(ET.Comment(f" {layer.value.upper()} LAYER ELEMENTS "))
            for element in sorted(layer_elements, key=lambda e: e.type.value):
                nodes.append(self.generate_element(element, options))
        logger.debug("Generated %d element fragments grouped by layer", len(elements))
        return nodes

    def to_xml(self, elements: Sequence[Element], options: Optional[ElementGenerationOptions] = None) -> str:
        return serialize_fragments(self.generate_elements(elements, options))

    def generate_documentation(self, element: Element, options: ElementGenerationOptions) -> str:
        if not options.include_documentation:
            return f"{element.type.value} element: {element.name}"

        if options.documentation_template:
            values = {
                "ELEMENT_TYPE": element.type.value,
                "ELEMENT_NAME": element.name,
                "ELEMENT_LAYER": element.layer.value,
            }
            # single pass, so substituted values are never re-scanned for tokens
            return _TEMPLATE_TOKEN_RE.sub(lambda m: values[m.group(1)], options.documentation_template)

        description = LAYER_DESCRIPTIONS.get(element.layer, "represents an enterprise architecture element")
        return f"{element.type.value} '{element.name}' {description} in the {element.layer.value} layer"

    @staticmethod
    def element_statistics(elements: Sequence[Element]) -> Dict[str, object]:
        by_layer: Dict[str, int] = {}
        by_type: Dict[str, int] = {}
        for element in elements:
            by_layer[element.layer.value] = by_layer.get(element.layer.value, 0) + 1
            by_type[element.type.value] = by_type.get(element.type.value, 0) + 1
        return {"total": len(elements), "by_layer": by_layer, "by_type": by_type}
