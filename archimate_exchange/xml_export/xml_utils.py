"""Shared XML helpers: namespaces, fragment templates and serialization."""
from __future__ import annotations

import copy
from pathlib import Path
from typing import Iterable, Union
from xml.etree import ElementTree as ET

from archimate_exchange.errors import TemplateLoadError
from archimate_exchange.utils.file_utils import read_text_file

ARCHIMATE_NAMESPACE = "http://www.opengroup.org/xsd/archimate/3.0/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
SCHEMA_LOCATION = "http://www.opengroup.org/xsd/archimate/3.1/archimate3_Diagram.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

XSI_TYPE = f"{{{XSI_NAMESPACE}}}type"
XML_LANG = f"{{{XML_NAMESPACE}}}lang"

TEMPLATE_DIR = Path(__file__).parent / "templates"

ET.register_namespace("", ARCHIMATE_NAMESPACE)
ET.register_namespace("xsi", XSI_NAMESPACE)


def q(tag: str) -> str:
    """Qualify a tag with the ArchiMate exchange namespace."""
    return f"{{{ARCHIMATE_NAMESPACE}}}{tag}"


def strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def load_template(name: str, template_dir: Path = TEMPLATE_DIR) -> ET.Element:
    path = template_dir / name
    try:
        return ET.fromstring(read_text_file(path))
    except (OSError, ET.ParseError) as exc:
        raise TemplateLoadError(f"Failed to load template {name}: {exc}") from exc


def instantiate(template: ET.Element) -> ET.Element:
    return copy.deepcopy(template)


def format_number(value: Union[int, float]) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def set_rgb(node: ET.Element, rgb: tuple[int, int, int]) -> None:
    r, g, b = rgb
    node.set("r", str(r))
    node.set("g", str(g))
    node.set("b", str(b))


def text_child(tag: str, text: str, lang: bool = True) -> ET.Element:
    node = ET.Element(q(tag))
    if lang:
        node.set(XML_LANG, "en")
    node.text = text
    return node


def serialize(root: ET.Element, declaration: bool = True) -> str:
    """Serialize a fragment tree in one pass; all escaping is done by ElementTree."""
    tree = copy.deepcopy(root)
    ET.indent(tree, space="  ")
    body = ET.tostring(tree, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n" if declaration else body


def serialize_fragments(nodes: Iterable[ET.Element]) -> str:
    """Serialize sibling fragments (elements, relationships, comments) without a root."""
    parts = []
    for node in nodes:
        if node.tag is ET.Comment:
            parts.append(f"<!--{node.text}-->")
        else:
            parts.append(serialize(node, declaration=False))
    return "\n".join(parts)
