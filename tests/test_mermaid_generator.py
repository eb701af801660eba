from archimate_exchange.generator.mermaid_generator import MermaidGenerator
from archimate_exchange.models.elements import create_element, create_relationship


def test_flowchart_lines_and_arrows():
    elements = [
        create_element("ApplicationComponent", "crm", "CRM"),
        create_element("ApplicationComponent", "db", "Customer DB"),
        create_element("DataObject", "rec", "Record"),
    ]
    relationships = [
        create_relationship("r1", "crm", "db", "Composition"),
        create_relationship("r2", "crm", "rec", "Access"),
        create_relationship("r3", "db", "rec", "Association"),
        create_relationship("r4", "crm", "db", "Serving"),
    ]
    text = MermaidGenerator().generate(elements, relationships)
    assert text.splitlines() == [
        "graph TD;",
        '  crm["CRM"];',
        '  db["Customer DB"];',
        '  rec["Record"];',
        "  crm --* db;",
        "  crm ..> rec;",
        "  db --- rec;",
        "  crm --> db;",
    ]
    assert text.endswith("\n")


def test_quotes_in_names_are_escaped():
    text = MermaidGenerator().generate([create_element("Goal", "g", 'The "best" goal')], [])
    assert 'g["The #quot;best#quot; goal"];' in text
