from archimate_exchange.models.archimate import LAYER_ORDER
from archimate_exchange.models.elements import create_element, create_relationship
from archimate_exchange.xml_export.layout_engine import (
    Dimensions,
    LayoutConfiguration,
    LayoutEngine,
    Position,
)


def _mixed_elements():
    return [
        create_element("Node", "n1", "App Server"),
        create_element("BusinessProcess", "p1", "Handle Order"),
        create_element("Goal", "g1", "Grow"),
        create_element("ApplicationComponent", "c1", "CRM"),
        create_element("BusinessActor", "a1", "Customer"),
        create_element("WorkPackage", "w1", "Migration"),
    ]


def test_layout_is_deterministic():
    engine = LayoutEngine()
    first = engine.generate_layout(_mixed_elements(), [])
    second = LayoutEngine().generate_layout(_mixed_elements(), [])
    assert first.positions == second.positions
    assert first.dimensions == second.dimensions
    assert first.viewport == second.viewport


def test_layers_are_stacked_in_canonical_order():
    elements = _mixed_elements()
    layout = LayoutEngine().generate_layout(elements, [])
    rank = {layer: index for index, layer in enumerate(LAYER_ORDER)}
    for a in elements:
        for b in elements:
            if rank[a.layer] < rank[b.layer]:
                assert layout.positions[a.id].y < layout.positions[b.id].y


def test_elements_in_a_row_are_sorted_by_type_and_share_y():
    layout = LayoutEngine().generate_layout(_mixed_elements(), [])
    actor, process = layout.positions["a1"], layout.positions["p1"]
    assert actor.y == process.y
    assert actor.x < process.x


def test_first_row_starts_at_padding():
    layout = LayoutEngine().generate_layout([create_element("Goal", "g", "Grow")], [])
    assert layout.positions["g"] == Position(60, 60)
    assert layout.dimensions["g"] == Dimensions(120, 55)
    assert layout.viewport == Dimensions(180 + 60, 60 + 55 + 120 + 60)


def test_empty_input_yields_padding_only_viewport():
    layout = LayoutEngine().generate_layout([], [])
    assert layout.positions == {}
    assert layout.viewport == Dimensions(60, 120)


def test_type_minimum_and_long_name_sizing():
    engine = LayoutEngine()
    assert engine.element_dimensions(create_element("BusinessActor", "a", "Customer")) == Dimensions(140, 60)
    # 16 characters -> 128 wide, raised to the BusinessProcess minimum of 160
    assert engine.element_dimensions(create_element("BusinessProcess", "b", "Order Processing")) == Dimensions(160, 60)
    long_name = "A very long capability name"
    assert engine.element_dimensions(create_element("Capability", "c", long_name)).width == len(long_name) * 8


def test_business_pair_centres_are_within_routing_threshold():
    engine = LayoutEngine()
    elements = [
        create_element("BusinessActor", "a", "Customer"),
        create_element("BusinessProcess", "b", "Order Processing"),
    ]
    layout = engine.generate_layout(elements, [])
    a, b = engine.element_center("a", layout), engine.element_center("b", layout)
    assert a == Position(130, 90)
    assert b == Position(320, 90)
    assert engine.element_center("missing", layout) is None


def test_relationships_do_not_affect_placement():
    engine = LayoutEngine()
    elements = _mixed_elements()
    relationships = [create_relationship("r1", "a1", "p1", "Triggering")]
    assert engine.generate_layout(elements, relationships).positions == engine.generate_layout(elements, []).positions
    aware = engine.generate_relationship_aware_layout(elements, relationships)
    assert aware.positions == engine.generate_layout(elements, []).positions


def test_custom_layer_order_is_honoured():
    engine = LayoutEngine.with_overrides(layer_order=["Technology", "Business"])
    elements = [
        create_element("BusinessActor", "a", "Customer"),
        create_element("Node", "n", "Host"),
        create_element("Goal", "g", "Grow"),
    ]
    layout = engine.generate_layout(elements, [])
    assert layout.positions["n"].y < layout.positions["a"].y
    # layers outside the configured order are not placed
    assert "g" not in layout.positions


def test_with_overrides_accepts_size_mapping():
    engine = LayoutEngine.with_overrides(element_spacing=10, default_element_size={"width": 100, "height": 40})
    assert engine.config.element_spacing == 10
    assert engine.config.default_element_size == Dimensions(100, 40)
    assert engine.config.layer_order == LayoutConfiguration().layer_order


def test_layout_statistics():
    engine = LayoutEngine()
    elements = [
        create_element("Goal", "g1", "Grow"),
        create_element("Goal", "g2", "Retain"),
    ]
    stats = engine.layout_statistics(engine.generate_layout(elements, []))
    assert stats["total_elements"] == 2
    assert stats["average_spacing"] == 160
    assert 0 < stats["viewport_utilization"] < 1
    assert stats["density_ratio"] > 0
