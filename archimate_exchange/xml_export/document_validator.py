"""Standalone checks for ArchiMate exchange documents.

Works on serialized text (or a parsed tree) without an XSD: well-formedness,
root structure, namespace declarations, identifier uniqueness, relationship
references and type vocabulary. Every finding is collected; nothing raises.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union
from xml.etree import ElementTree as ET

from archimate_exchange.models.archimate import ELEMENT_TYPE_NAMES, RELATIONSHIP_TYPE_NAMES
from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.utils.file_utils import read_text_file
from archimate_exchange.xml_export.xml_utils import (
    ARCHIMATE_NAMESPACE,
    SCHEMA_LOCATION,
    XSI_NAMESPACE,
    XSI_TYPE,
    strip_ns,
)

ERROR_KINDS = ("schema", "structure", "reference", "namespace", "uniqueness")
WARNING_KINDS = ("best-practice", "compatibility")

_RELATIONSHIP_TAGS = {"relationship", "connection"}


@dataclass
class ValidationIssue:
    kind: str
    message: str
    element: Optional[str] = None
    details: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class ValidationWarning:
    kind: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    def error(self, kind: str, message: str, **extra) -> None:
        self.errors.append(ValidationIssue(kind, message, **extra))
        self.is_valid = False

    def warn(self, kind: str, message: str, suggestion: Optional[str] = None) -> None:
        self.warnings.append(ValidationWarning(kind, message, suggestion))


def _identifier(node: ET.Element) -> Optional[str]:
    return node.get("identifier") or node.get("id")


def _normalize_type(value: str) -> str:
    return value.rsplit(":", 1)[-1]


def _is_relationship_node(node: ET.Element) -> bool:
    if strip_ns(node.tag) in _RELATIONSHIP_TAGS:
        return True
    return "Relationship" in (node.get(XSI_TYPE) or "")


def _uses_xsi(root: ET.Element) -> bool:
    """Whether any attribute in the tree is qualified with the schema-instance namespace."""
    prefix = f"{{{XSI_NAMESPACE}}}"
    return any(name.startswith(prefix) for node in _elements(root) for name in node.attrib)


def _parse_with_namespaces(text: str) -> Tuple[ET.Element, Dict[str, str]]:
    """Parse text and return the root plus the namespace declarations made on it."""
    namespaces: Dict[str, str] = {}
    root: Optional[ET.Element] = None
    for event, payload in ET.iterparse(io.BytesIO(text.encode("utf-8")), events=("start-ns", "start")):
        if event == "start-ns" and root is None:
            prefix, uri = payload
            namespaces[prefix] = uri
        elif event == "start" and root is None:
            root = payload
    return root, namespaces


class XmlDocumentValidator:
    def validate_xml_string(self, text: str) -> ValidationResult:
        result = self._check_well_formedness(text)
        if not result.is_valid:
            return result

        try:
            root, namespaces = _parse_with_namespaces(text)
        except ET.ParseError as exc:
            line, column = getattr(exc, "position", (None, None))
            result.error("structure", "Failed to parse XML document", details=str(exc), line=line, column=column)
            return result

        tree_result = self.validate_tree(root, namespaces)
        result.errors.extend(tree_result.errors)
        result.warnings.extend(tree_result.warnings)
        result.is_valid = not result.errors
        return result

    def validate_xml_file(self, path: Union[str, Path]) -> ValidationResult:
        try:
            text = read_text_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            result = ValidationResult()
            result.error("structure", f"Failed to read file: {path}", details=str(exc))
            return result
        return self.validate_xml_string(text)

    def validate_tree(self, root: ET.Element, namespaces: Optional[Dict[str, str]] = None) -> ValidationResult:
        result = ValidationResult()
        self._check_structure(root, result)
        self._check_namespaces(root, namespaces or {}, result)
        self._check_uniqueness(root, result)
        self._check_references(root, result)
        self._check_types(root, result)
        return result

    def validate_model(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> ValidationResult:
        """Uniqueness and reference checks on in-memory values."""
        result = ValidationResult()
        element_ids = set()
        for element in elements:
            if element.id in element_ids:
                result.error("uniqueness", f"Duplicate element ID: {element.id}", element=element.name)
            element_ids.add(element.id)

        relationship_ids = set()
        for rel in relationships:
            if rel.id in relationship_ids:
                result.error("uniqueness", f"Duplicate relationship ID: {rel.id}", element=rel.id)
            relationship_ids.add(rel.id)

        for rel in relationships:
            if rel.source not in element_ids:
                result.error("reference", f"Relationship references unknown source element: {rel.source}", element=rel.id)
            if rel.target not in element_ids:
                result.error("reference", f"Relationship references unknown target element: {rel.target}", element=rel.id)
        return result

    @staticmethod
    def summary(result: ValidationResult) -> str:
        lines = ["Validation passed" if result.is_valid else "Validation failed"]
        if result.errors:
            lines.append(f"{len(result.errors)} error(s):")
            for issue in result.errors:
                location = ""
                if issue.line:
                    location = f" (line {issue.line}" + (f":{issue.column}" if issue.column else "") + ")"
                owner = f" [{issue.element}]" if issue.element else ""
                lines.append(f"  - [{issue.kind}] {issue.message}{location}{owner}")
                if issue.details:
                    lines.append(f"    {issue.details}")
        if result.warnings:
            lines.append(f"{len(result.warnings)} warning(s):")
            for warning in result.warnings:
                lines.append(f"  - [{warning.kind}] {warning.message}")
                if warning.suggestion:
                    lines.append(f"    Suggestion: {warning.suggestion}")
        return "\n".join(lines)

    def _check_well_formedness(self, text: str) -> ValidationResult:
        result = ValidationResult()
        stripped = (text or "").strip()
        if not stripped:
            result.error("structure", "Empty XML document")
            return result

        if not stripped.startswith("<?xml"):
            result.warn(
                "best-practice",
                "Missing XML declaration",
                '<?xml version="1.0" encoding="UTF-8"?> should open the document',
            )

        opening, closing = stripped.count("<"), stripped.count(">")
        if opening != closing:
            result.error(
                "structure",
                "Mismatched XML tags",
                details=f"Found {opening} opening brackets and {closing} closing brackets",
            )
        return result

    def _check_structure(self, root: ET.Element, result: ValidationResult) -> None:
        local = strip_ns(root.tag)
        if local != "model":
            result.error("structure", "Invalid root element", details=f"Expected 'model' but found '{local}'")
        if not root.get("identifier"):
            result.error("structure", "Missing required attribute: identifier", element="model")
        if not any(strip_ns(node.tag) == "name" for node in _elements(root)):
            result.warn("best-practice", "Model should have a name element", "Add a <name> element to the model")

    def _check_namespaces(self, root: ET.Element, namespaces: Dict[str, str], result: ValidationResult) -> None:
        default_ns = namespaces.get("")
        if default_ns is None and root.tag.startswith("{"):
            default_ns = root.tag[1:].split("}")[0]
        if default_ns != ARCHIMATE_NAMESPACE:
            result.error(
                "namespace",
                "Invalid ArchiMate namespace",
                element="model",
                details=f"Expected '{ARCHIMATE_NAMESPACE}' but found '{default_ns}'",
            )

        if namespaces:
            xsi_declared = namespaces.get("xsi") == XSI_NAMESPACE
        else:
            xsi_declared = _uses_xsi(root)
        if not xsi_declared:
            result.warn("compatibility", "Missing or incorrect XSI namespace", f'Declare xmlns:xsi="{XSI_NAMESPACE}"')

        schema_location = root.get(f"{{{XSI_NAMESPACE}}}schemaLocation") or ""
        if SCHEMA_LOCATION not in schema_location:
            result.warn("compatibility", "Missing or incorrect schema location", "Add xsi:schemaLocation")

    def _check_uniqueness(self, root: ET.Element, result: ValidationResult) -> None:
        seen = set()
        duplicates: List[str] = []
        for node in _elements(root):
            identifier = _identifier(node)
            if not identifier:
                continue
            if identifier in seen and identifier not in duplicates:
                duplicates.append(identifier)
            seen.add(identifier)
        for identifier in duplicates:
            result.error(
                "uniqueness",
                f"Duplicate element identifier: {identifier}",
                element=identifier,
                details="All identifiers must be unique within the model",
            )

    def _check_references(self, root: ET.Element, result: ValidationResult) -> None:
        targets = {
            _identifier(node)
            for node in _elements(root)
            if _identifier(node) and not _is_relationship_node(node)
        }
        for node in _elements(root):
            if not _is_relationship_node(node):
                continue
            owner = _identifier(node) or "unnamed relationship"
            for end in ("source", "target"):
                ref = node.get(end)
                if ref and ref not in targets:
                    result.error("reference", f"Relationship references unknown {end} element: {ref}", element=owner)

    def _check_types(self, root: ET.Element, result: ValidationResult) -> None:
        for node in _elements(root):
            tag = strip_ns(node.tag)
            declared = node.get(XSI_TYPE)
            if tag not in ("element", "relationship") or not declared:
                continue
            name = _normalize_type(declared)
            owner = _identifier(node)
            if tag == "relationship" or name.endswith("Relationship"):
                base = name[: -len("Relationship")] if name.endswith("Relationship") else name
                if name not in RELATIONSHIP_TYPE_NAMES and base not in RELATIONSHIP_TYPE_NAMES:
                    result.error("schema", f"Invalid relationship type: {declared}", element=owner or "unnamed relationship")
            elif name not in ELEMENT_TYPE_NAMES:
                result.error("schema", f"Invalid element type: {declared}", element=owner or "unnamed element")


def _elements(root: ET.Element) -> Iterator[ET.Element]:
    # ElementTree yields comments through iter(); keep real elements only
    return (node for node in root.iter() if isinstance(node.tag, str))
