"""Deterministic layered layout for ArchiMate views.

Elements are placed in one row per layer, rows stacked top-down in canonical
layer order, elements left-to-right within a row sorted by type.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from archimate_exchange.models.archimate import LAYER_ORDER, ElementType, Layer
from archimate_exchange.models.elements import Element, Relationship


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class LayoutConfiguration:
    grid_spacing: int = 20
    layer_vertical_spacing: int = 120
    element_spacing: int = 40
    default_element_size: Dimensions = Dimensions(120, 55)
    layer_order: Tuple[Layer, ...] = LAYER_ORDER
    viewport_padding: int = 60


@dataclass
class LayoutResult:
    positions: Dict[str, Position] = field(default_factory=dict)
    dimensions: Dict[str, Dimensions] = field(default_factory=dict)
    viewport: Dimensions = Dimensions(0, 0)


# Names longer than this widen the box to NAME_CHAR_WIDTH per character.
NAME_LENGTH_THRESHOLD = 15
NAME_CHAR_WIDTH = 8

TYPE_MINIMUM_SIZES: Mapping[ElementType, Dimensions] = {
    ElementType.BUSINESS_ACTOR: Dimensions(140, 60),
    ElementType.BUSINESS_PROCESS: Dimensions(160, 60),
    ElementType.APPLICATION_COMPONENT: Dimensions(150, 70),
    ElementType.APPLICATION_SERVICE: Dimensions(140, 60),
    ElementType.DATA_OBJECT: Dimensions(100, 50),
    ElementType.NODE: Dimensions(130, 65),
    ElementType.DEVICE: Dimensions(120, 55),
}


class LayoutEngine:
    def __init__(self, config: Optional[LayoutConfiguration] = None):
        self.config = config or LayoutConfiguration()

    @classmethod
    def with_overrides(cls, **overrides) -> "LayoutEngine":
        """Build an engine from the default configuration with some fields replaced."""
        if "default_element_size" in overrides and not isinstance(overrides["default_element_size"], Dimensions):
            size = overrides["default_element_size"]
            overrides["default_element_size"] = Dimensions(size["width"], size["height"])
        if "layer_order" in overrides:
            overrides["layer_order"] = tuple(Layer(layer) for layer in overrides["layer_order"])
        return cls(replace(LayoutConfiguration(), **overrides))

    def generate_layout(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> LayoutResult:
        """Layer-by-layer horizontal arrangement. Relationships do not affect placement."""
        by_layer = self._group_by_layer(elements)
        result = LayoutResult()

        current_y: float = self.config.viewport_padding
        max_width: float = 0
        for layer in self.config.layer_order:
            layer_elements = by_layer.get(layer)
            if not layer_elements:
                continue
            next_y, max_x = self._layout_layer(layer_elements, current_y, result)
            current_y = next_y
            max_width = max(max_width, max_x)

        result.viewport = Dimensions(
            width=max_width + self.config.viewport_padding,
            height=current_y + self.config.viewport_padding,
        )
        return result

    def generate_relationship_aware_layout(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
    ) -> LayoutResult:
        basic = self.generate_layout(elements, relationships)
        connections = self._build_connection_map(relationships)
        positions = self.optimize_for_connections(basic.positions, connections, basic.dimensions)
        return LayoutResult(positions=positions, dimensions=basic.dimensions, viewport=basic.viewport)

    def optimize_for_connections(
        self,
        positions: Mapping[str, Position],
        connections: Mapping[str, Set[str]],
        dimensions: Mapping[str, Dimensions],
    ) -> Dict[str, Position]:
        """Extension point for connection-aware refinement. Currently returns positions unchanged."""
        return dict(positions)

    def element_dimensions(self, element: Element) -> Dimensions:
        width = self.config.default_element_size.width
        height = self.config.default_element_size.height

        name_length = len(element.name)
        if name_length > NAME_LENGTH_THRESHOLD:
            width = max(width, name_length * NAME_CHAR_WIDTH)

        minimum = TYPE_MINIMUM_SIZES.get(element.type)
        if minimum is not None:
            return Dimensions(max(width, minimum.width), max(height, minimum.height))
        return Dimensions(width, height)

    def element_center(self, element_id: str, layout: LayoutResult) -> Optional[Position]:
        position = layout.positions.get(element_id)
        dimensions = layout.dimensions.get(element_id)
        if position is None or dimensions is None:
            return None
        return Position(position.x + dimensions.width / 2, position.y + dimensions.height / 2)

    def layout_statistics(self, layout: LayoutResult) -> Dict[str, float]:
        total = len(layout.positions)

        positions = sorted(layout.positions.values(), key=lambda p: p.x)
        spacing_total: float = 0
        spacing_count = 0
        for previous, current in zip(positions, positions[1:]):
            if abs(current.y - previous.y) < self.config.layer_vertical_spacing / 2:
                spacing_total += current.x - previous.x
                spacing_count += 1

        element_area = sum(d.width * d.height for d in layout.dimensions.values())
        viewport_area = layout.viewport.width * layout.viewport.height
        return {
            "total_elements": total,
            "average_spacing": spacing_total / spacing_count if spacing_count else 0,
            # elements per 10,000 square units
            "density_ratio": total / viewport_area * 10000 if viewport_area else 0,
            "viewport_utilization": element_area / viewport_area if viewport_area else 0,
        }

    def _layout_layer(self, elements: List[Element], start_y: float, result: LayoutResult) -> Tuple[float, float]:
        current_x: float = self.config.viewport_padding
        max_height: float = 0

        for element in sorted(elements, key=lambda e: e.type.value):
            dims = self.element_dimensions(element)
            result.positions[element.id] = Position(current_x, start_y)
            result.dimensions[element.id] = dims
            current_x += dims.width + self.config.element_spacing
            max_height = max(max_height, dims.height)

        next_y = start_y + max_height + self.config.layer_vertical_spacing
        return next_y, current_x - self.config.element_spacing

    @staticmethod
    def _group_by_layer(elements: Sequence[Element]) -> Dict[Layer, List[Element]]:
        grouped: Dict[Layer, List[Element]] = {}
        for element in elements:
            grouped.setdefault(element.layer, []).append(element)
        return grouped

    @staticmethod
    def _build_connection_map(relationships: Sequence[Relationship]) -> Dict[str, Set[str]]:
        connections: Dict[str, Set[str]] = {}
        for rel in relationships:
            connections.setdefault(rel.source, set()).add(rel.target)
            connections.setdefault(rel.target, set()).add(rel.source)
        return connections
