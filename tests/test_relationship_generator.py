import pytest
from xml.etree import ElementTree as ET

from archimate_exchange.errors import DanglingReferenceError
from archimate_exchange.models.elements import create_element, create_relationship
from archimate_exchange.xml_export.relationship_generator import (
    RelationshipGenerationOptions,
    RelationshipXmlGenerator,
)
from archimate_exchange.xml_export.xml_utils import XSI_TYPE, q

ELEMENTS = [
    create_element("BusinessActor", "a", "Customer"),
    create_element("BusinessProcess", "b", "Order Processing"),
    create_element("ApplicationService", "s", "Ordering API"),
]

RELATIONSHIPS = [
    create_relationship("r1", "a", "b", "Triggering"),
    create_relationship("r2", "s", "b", "Serving"),
    create_relationship("r3", "a", "s", "Association"),
    create_relationship("r4", "b", "s", "Triggering"),
]


def test_relationship_fragment_attributes_and_no_name_by_default():
    node = RelationshipXmlGenerator().generate_relationship(RELATIONSHIPS[0])
    assert node.get("identifier") == "r1"
    assert node.get("source") == "a"
    assert node.get("target") == "b"
    assert node.get(XSI_TYPE) == "Triggering"
    assert node.find(q("name")) is None


def test_names_use_verb_table_with_element_context():
    options = RelationshipGenerationOptions(include_names=True)
    node = RelationshipXmlGenerator().generate_relationship(RELATIONSHIPS[1], options, ELEMENTS)
    assert node.find(q("name")).text == "Ordering API serves Order Processing"


def test_names_fall_back_without_context():
    options = RelationshipGenerationOptions(include_names=True)
    generator = RelationshipXmlGenerator()
    assert generator.relationship_name(RELATIONSHIPS[0], options) == "Triggering relationship"
    assert generator.relationship_name(RELATIONSHIPS[0], RelationshipGenerationOptions()) == ""


def test_grouping_follows_canonical_relationship_order():
    nodes = RelationshipXmlGenerator().generate_relationships(
        RELATIONSHIPS, RelationshipGenerationOptions(group_by_type=True)
    )
    comments = [n.text for n in nodes if n.tag is ET.Comment]
    assert comments == [" SERVING RELATIONSHIPS ", " TRIGGERING RELATIONSHIPS ", " ASSOCIATION RELATIONSHIPS "]
    ids = [n.get("identifier") for n in nodes if n.tag is not ET.Comment]
    assert ids == ["r2", "r1", "r4", "r3"]


def test_dangling_reference_fails_hard_when_validating():
    options = RelationshipGenerationOptions(validate_references=True)
    dangling = create_relationship("r9", "a", "ghost", "Flow")
    with pytest.raises(DanglingReferenceError) as excinfo:
        RelationshipXmlGenerator().generate_relationships([RELATIONSHIPS[0], dangling], options, ELEMENTS)
    assert excinfo.value.relationship_id == "r9"
    assert excinfo.value.end == "target"
    assert "ghost" in str(excinfo.value)


def test_dangling_reference_is_ignored_without_validation():
    dangling = create_relationship("r9", "a", "ghost", "Flow")
    nodes = RelationshipXmlGenerator().generate_relationships([dangling], elements=ELEMENTS)
    assert nodes[0].get("target") == "ghost"


def test_statistics_and_orphans():
    generator = RelationshipXmlGenerator()
    stats = generator.relationship_statistics(RELATIONSHIPS)
    assert stats == {"total": 4, "by_type": {"Triggering": 2, "Serving": 1, "Association": 1}, "unique_elements": 3}
    orphan = create_relationship("r9", "ghost", "b", "Flow")
    assert generator.find_orphaned_relationships(RELATIONSHIPS + [orphan], ELEMENTS) == ["r9"]


def test_to_xml_escapes_generated_names():
    elements = [
        create_element("BusinessActor", "a", 'Tom & "Jerry"'),
        create_element("BusinessRole", "b", "<Admin>"),
    ]
    rel = create_relationship("r1", "a", "b", "Assignment")
    xml = RelationshipXmlGenerator().to_xml([rel], RelationshipGenerationOptions(include_names=True), elements)
    assert "Tom &amp; \"Jerry\" is assigned to &lt;Admin&gt;" in xml
