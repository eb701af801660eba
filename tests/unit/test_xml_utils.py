from xml.etree import ElementTree as ET

from archimate_exchange.xml_export.xml_utils import (
    ARCHIMATE_NAMESPACE,
    XSI_NAMESPACE,
    XSI_TYPE,
    q,
    serialize,
    serialize_fragments,
)


def _node(identifier: str) -> ET.Element:
    node = ET.Element(q("element"), {"identifier": identifier, XSI_TYPE: "BusinessActor"})
    ET.SubElement(node, q("name")).text = "R&D <Lab>"
    return node


def test_serialize_uses_default_namespace_with_plain_attributes():
    xml = serialize(_node("a"))
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<element ')
    assert f'xmlns="{ARCHIMATE_NAMESPACE}"' in xml
    assert f'xmlns:xsi="{XSI_NAMESPACE}"' in xml
    assert 'identifier="a"' in xml
    assert 'xsi:type="BusinessActor"' in xml
    assert "ns0:" not in xml
    assert "R&amp;D &lt;Lab&gt;" in xml

    parsed = ET.fromstring(xml)
    assert parsed.tag == q("element")
    assert parsed.find(q("name")).text == "R&D <Lab>"


def test_serialize_fragments_keeps_comments():
    text = serialize_fragments([ET.Comment(" BUSINESS "), _node("a"), _node("b")])
    assert text.startswith("<!-- BUSINESS -->\n<element ")
    assert text.count("<element ") == 2
