import pytest
from pydantic import ValidationError

from archimate_exchange.errors import UnknownElementTypeError, UnknownRelationshipTypeError
from archimate_exchange.models.archimate import (
    ELEMENT_LAYERS,
    ElementType,
    Layer,
    element_types_in_layer,
    layer_of,
)
from archimate_exchange.models.elements import (
    create_element,
    create_relationship,
    elements_from_dicts,
    relationships_from_dicts,
)


def test_every_element_type_belongs_to_exactly_one_layer():
    assert set(ELEMENT_LAYERS) == set(ElementType)
    total = sum(len(element_types_in_layer(layer)) for layer in Layer)
    assert total == len(ElementType)


def test_layer_is_derived_from_type():
    element = create_element("ApplicationComponent", "c1", "CRM")
    assert element.layer == Layer.APPLICATION
    assert layer_of(ElementType.LOCATION) == Layer.PHYSICAL
    assert element.model_dump()["layer"] == Layer.APPLICATION


def test_unknown_element_type_names_the_element():
    with pytest.raises(UnknownElementTypeError) as excinfo:
        create_element("Spaceship", "x1", "Enterprise")
    assert "Spaceship" in str(excinfo.value)
    assert excinfo.value.element_id == "x1"


def test_unknown_relationship_type_names_the_relationship():
    with pytest.raises(UnknownRelationshipTypeError) as excinfo:
        create_relationship("r9", "a", "b", "Teleports")
    assert excinfo.value.relationship_id == "r9"
    assert isinstance(excinfo.value, ValueError)


def test_values_are_immutable():
    element = create_element("Goal", "g", "Grow")
    with pytest.raises(ValidationError):
        element.name = "Shrink"


def test_element_types_in_layer_is_case_insensitive():
    assert element_types_in_layer("strategy") == [
        ElementType.RESOURCE,
        ElementType.CAPABILITY,
        ElementType.COURSE_OF_ACTION,
        ElementType.VALUE_STREAM,
    ]
    with pytest.raises(ValueError):
        element_types_in_layer("Orbital")


def test_from_dicts_helpers():
    elements = elements_from_dicts([{"id": "a", "name": "Customer", "type": "BusinessActor"}, {"id": "b", "type": "Goal"}])
    assert [e.type for e in elements] == [ElementType.BUSINESS_ACTOR, ElementType.GOAL]
    assert elements[1].name == ""
    relationships = relationships_from_dicts([{"id": "r1", "source": "a", "target": "b", "type": "Influence"}])
    assert relationships[0].source == "a"
