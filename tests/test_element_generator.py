from xml.etree import ElementTree as ET

from archimate_exchange.models.elements import create_element
from archimate_exchange.xml_export.element_generator import ElementGenerationOptions, ElementXmlGenerator
from archimate_exchange.xml_export.xml_utils import XSI_TYPE, q


def _elements():
    return [
        create_element("Node", "n1", "App Server"),
        create_element("BusinessProcess", "p1", "Handle Order"),
        create_element("BusinessActor", "a1", "Customer"),
        create_element("Goal", "g1", "Grow"),
    ]


def test_generate_element_sets_identifier_type_and_name():
    node = ElementXmlGenerator().generate_element(create_element("BusinessActor", "a1", "Customer"))
    assert node.get("identifier") == "a1"
    assert node.get(XSI_TYPE) == "BusinessActor"
    assert node.find(q("name")).text == "Customer"
    assert node.find(q("documentation")).text == "BusinessActor element: Customer"


def test_layer_sentence_documentation():
    options = ElementGenerationOptions(include_documentation=True)
    node = ElementXmlGenerator().generate_element(create_element("Node", "n1", "App Server"), options)
    assert node.find(q("documentation")).text == (
        "Node 'App Server' represents technology infrastructure and platforms in the Technology layer"
    )


def test_documentation_template_is_substituted_once():
    options = ElementGenerationOptions(
        include_documentation=True,
        documentation_template="{{ELEMENT_NAME}} ({{ELEMENT_TYPE}}, {{ELEMENT_LAYER}})",
    )
    element = create_element("Goal", "g1", "{{ELEMENT_TYPE}}")
    text = ElementXmlGenerator().generate_documentation(element, options)
    assert text == "{{ELEMENT_TYPE}} (Goal, Motivation)"


def test_input_order_is_kept_without_grouping():
    nodes = ElementXmlGenerator().generate_elements(_elements())
    assert [n.get("identifier") for n in nodes] == ["n1", "p1", "a1", "g1"]


def test_grouping_orders_layers_and_adds_comments():
    nodes = ElementXmlGenerator().generate_elements(_elements(), ElementGenerationOptions(group_by_layer=True))
    comments = [n.text for n in nodes if n.tag is ET.Comment]
    assert comments == [" MOTIVATION LAYER ELEMENTS ", " BUSINESS LAYER ELEMENTS ", " TECHNOLOGY LAYER ELEMENTS "]
    ids = [n.get("identifier") for n in nodes if n.tag is not ET.Comment]
    assert ids == ["g1", "a1", "p1", "n1"]


def test_to_xml_escapes_markup_in_names():
    xml = ElementXmlGenerator().to_xml([create_element("Goal", "g1", "R&D <core>")])
    assert "R&amp;D &lt;core&gt;" in xml
    assert "<core>" not in xml


def test_empty_input_yields_nothing():
    assert ElementXmlGenerator().generate_elements([]) == []
    assert ElementXmlGenerator().to_xml([]) == ""


def test_element_statistics():
    stats = ElementXmlGenerator.element_statistics(_elements())
    assert stats["total"] == 4
    assert stats["by_layer"] == {"Technology": 1, "Business": 2, "Motivation": 1}
    assert stats["by_type"]["BusinessActor"] == 1
