"""Assembles element, relationship and view fragments into one exchange document."""
from __future__ import annotations

import logging
import time
from typing import Optional, Sequence
from xml.etree import ElementTree as ET

from pydantic import BaseModel, Field

from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.xml_export.color_theme import ColorTheme
from archimate_exchange.xml_export.element_generator import ElementGenerationOptions, ElementXmlGenerator
from archimate_exchange.xml_export.layout_engine import LayoutEngine
from archimate_exchange.xml_export.relationship_generator import (
    RelationshipGenerationOptions,
    RelationshipXmlGenerator,
)
from archimate_exchange.xml_export.view_generator import ViewOptions, ViewXmlGenerator
from archimate_exchange.xml_export.xml_utils import (
    instantiate,
    load_template,
    q,
    serialize,
    text_child,
)

logger = logging.getLogger(__name__)


def default_model_id() -> str:
    return f"model-{int(time.time() * 1000)}"


class ModelExportOptions(BaseModel):
    model_config = {"protected_namespaces": ()}

    model_id: Optional[str] = None
    model_name: str = "ArchiMate Model"
    model_purpose: Optional[str] = None
    include_views: bool = True
    view_name: str = "ArchiMate View"
    view_id: Optional[str] = None
    view_documentation: Optional[str] = None
    element_options: ElementGenerationOptions = Field(default_factory=ElementGenerationOptions)
    relationship_options: RelationshipGenerationOptions = Field(default_factory=RelationshipGenerationOptions)


class ModelXmlGenerator:
    def __init__(self, color_theme: Optional[ColorTheme] = None, layout_engine: Optional[LayoutEngine] = None):
        self._template = load_template("model.xml")
        self.element_generator = ElementXmlGenerator()
        self.relationship_generator = RelationshipXmlGenerator()
        self.view_generator = ViewXmlGenerator(color_theme, layout_engine)

    def set_color_theme(self, color_theme: ColorTheme) -> None:
        self.view_generator.set_color_theme(color_theme)

    def set_layout_engine(self, layout_engine: LayoutEngine) -> None:
        self.view_generator.set_layout_engine(layout_engine)

    def build(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        options: Optional[ModelExportOptions] = None,
    ) -> ET.Element:
        options = options or ModelExportOptions()
        model_id = options.model_id or default_model_id()

        root = instantiate(self._template)
        root.set("identifier", model_id)
        root.find(q("name")).text = options.model_name
        if options.model_purpose:
            root.append(text_child("documentation", options.model_purpose))

        element_nodes = self.element_generator.generate_elements(elements, options.element_options)
        if element_nodes:
            block = ET.SubElement(root, q("elements"))
            block.extend(element_nodes)

        relationship_nodes = self.relationship_generator.generate_relationships(
            relationships, options.relationship_options, elements
        )
        if relationship_nodes:
            block = ET.SubElement(root, q("relationships"))
            block.extend(relationship_nodes)

        if options.include_views:
            view_options = ViewOptions(
                view_id=options.view_id or f"view-{model_id}",
                view_name=options.view_name,
                documentation=options.view_documentation,
            )
            view = self.view_generator.generate_view(elements, relationships, view_options)
            diagrams = ET.SubElement(ET.SubElement(root, q("views")), q("diagrams"))
            diagrams.append(view)

        logger.debug(
            "Assembled model %s: %d elements, %d relationships, views=%s",
            model_id, len(elements), len(relationships), options.include_views,
        )
        return root

    def generate(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        options: Optional[ModelExportOptions] = None,
    ) -> str:
        return serialize(self.build(elements, relationships, options))
