"""Diagram view generation: positioned nodes and routed connections."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from pydantic import BaseModel

from archimate_exchange.errors import MissingVisualElementError
from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.xml_export.color_theme import ColorMapping, ColorTheme, hex_to_rgb
from archimate_exchange.xml_export.layout_engine import Dimensions, LayoutEngine, LayoutResult, Position
from archimate_exchange.xml_export.xml_utils import (
    format_number,
    instantiate,
    load_template,
    q,
    set_rgb,
    text_child,
)

# Connections whose centre-to-centre distance exceeds this get a midpoint bend point.
BENDPOINT_DISTANCE_THRESHOLD = 200

DEFAULT_POSITION = Position(100, 100)
DEFAULT_DIMENSIONS = Dimensions(120, 55)


class ViewOptions(BaseModel):
    view_id: Optional[str] = None
    view_name: str = "ArchiMate View"
    documentation: Optional[str] = None


@dataclass(frozen=True)
class VisualElement:
    id: str
    element_ref: str
    x: float
    y: float
    width: float
    height: float
    colors: ColorMapping

    @property
    def center(self) -> Position:
        return Position(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class VisualConnection:
    id: str
    relationship_ref: str
    source: str
    target: str
    bendpoints: Tuple[Position, ...] = field(default_factory=tuple)
    line_color: str = "#000000"
    line_width: int = 1


class ViewXmlGenerator:
    def __init__(self, color_theme: Optional[ColorTheme] = None, layout_engine: Optional[LayoutEngine] = None):
        self.color_theme = color_theme or ColorTheme.archimate()
        self.layout_engine = layout_engine or LayoutEngine()
        self._view_template = load_template("view.xml")
        self._node_template = load_template("visual-element.xml")
        self._connection_template = load_template("visual-connection.xml")

    def set_color_theme(self, color_theme: ColorTheme) -> None:
        self.color_theme = color_theme

    def set_layout_engine(self, layout_engine: LayoutEngine) -> None:
        self.layout_engine = layout_engine

    def generate_view(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        options: Optional[ViewOptions] = None,
        view_id: Optional[str] = None,
    ) -> ET.Element:
        options = options or ViewOptions()
        layout = self.layout_engine.generate_layout(elements, relationships)
        visual_elements = self.create_visual_elements(elements, layout)
        visual_connections = self.create_visual_connections(relationships, visual_elements)

        view = instantiate(self._view_template)
        view.set("identifier", options.view_id or view_id or "view")
        view.find(q("name")).text = options.view_name
        if options.documentation:
            view.append(text_child("documentation", options.documentation))

        for visual in visual_elements:
            view.append(self._render_node(visual))
        for connection in visual_connections:
            view.append(self._render_connection(connection))
        return view

    def create_visual_elements(self, elements: Sequence[Element], layout: LayoutResult) -> List[VisualElement]:
        visuals: List[VisualElement] = []
        for element in elements:
            position = layout.positions.get(element.id, DEFAULT_POSITION)
            dimensions = layout.dimensions.get(element.id, DEFAULT_DIMENSIONS)
            visuals.append(
                VisualElement(
                    id=f"visual-{element.id}",
                    element_ref=element.id,
                    x=position.x,
                    y=position.y,
                    width=dimensions.width,
                    height=dimensions.height,
                    colors=self.color_theme.colors_for(element.type),
                )
            )
        return visuals

    def create_visual_connections(
        self,
        relationships: Sequence[Relationship],
        visual_elements: Sequence[VisualElement],
    ) -> List[VisualConnection]:
        by_element: Dict[str, VisualElement] = {visual.element_ref: visual for visual in visual_elements}
        connections: List[VisualConnection] = []
        for relationship in relationships:
            source = by_element.get(relationship.source)
            target = by_element.get(relationship.target)
            if source is None or target is None:
                raise MissingVisualElementError(relationship.id)
            connections.append(
                VisualConnection(
                    id=f"connection-{relationship.id}",
                    relationship_ref=relationship.id,
                    source=source.id,
                    target=target.id,
                    bendpoints=self.calculate_bendpoints(source, target),
                )
            )
        return connections

    @staticmethod
    def calculate_bendpoints(source: VisualElement, target: VisualElement) -> Tuple[Position, ...]:
        start, end = source.center, target.center
        distance = math.hypot(end.x - start.x, end.y - start.y)
        if distance > BENDPOINT_DISTANCE_THRESHOLD:
            return (Position((start.x + end.x) / 2, (start.y + end.y) / 2),)
        return ()

    def view_statistics(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> Dict[str, object]:
        layout = self.layout_engine.generate_layout(elements, relationships)
        layer_distribution: Dict[str, int] = {}
        for element in elements:
            layer_distribution[element.layer.value] = layer_distribution.get(element.layer.value, 0) + 1
        return {
            "element_count": len(elements),
            "relationship_count": len(relationships),
            "layer_distribution": layer_distribution,
            "dimensions": {"width": layout.viewport.width, "height": layout.viewport.height},
        }

    def _render_node(self, visual: VisualElement) -> ET.Element:
        node = instantiate(self._node_template)
        node.set("identifier", visual.id)
        node.set("elementRef", visual.element_ref)
        node.set("x", format_number(visual.x))
        node.set("y", format_number(visual.y))
        node.set("w", format_number(visual.width))
        node.set("h", format_number(visual.height))

        style = node.find(q("style"))
        set_rgb(style.find(q("fillColor")), visual.colors.rgb("fill"))
        set_rgb(style.find(q("lineColor")), visual.colors.rgb("line"))
        set_rgb(style.find(f"{q('font')}/{q('color')}"), visual.colors.rgb("text"))
        return node

    def _render_connection(self, connection: VisualConnection) -> ET.Element:
        node = instantiate(self._connection_template)
        node.set("identifier", connection.id)
        node.set("relationshipRef", connection.relationship_ref)
        node.set("source", connection.source)
        node.set("target", connection.target)

        style = node.find(q("style"))
        style.set("lineWidth", str(connection.line_width))
        set_rgb(style.find(q("lineColor")), hex_to_rgb(connection.line_color))

        for bend in connection.bendpoints:
            bendpoint = ET.SubElement(node, q("bendpoint"))
            bendpoint.set("x", format_number(bend.x))
            bendpoint.set("y", format_number(bend.y))
        return node
