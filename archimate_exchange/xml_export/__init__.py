"""ArchiMate Open Exchange export.

Components:
- layout_engine: deterministic layered placement of view nodes
- color_theme: per-type fill/line/text colours and presets
- element_generator / relationship_generator / view_generator: XML fragments
- model_generator: assembles fragments into one document
- exporter: pre-export checks, configuration and statistics
- document_validator: standalone checks on serialized documents
"""

from archimate_exchange.xml_export.color_theme import ColorMapping, ColorTheme
from archimate_exchange.xml_export.document_validator import ValidationResult, XmlDocumentValidator
from archimate_exchange.xml_export.exporter import (
    ExportOptions,
    ExportResult,
    XmlExporter,
    create_xml_exporter,
    export_to_xml,
)
from archimate_exchange.xml_export.layout_engine import (
    Dimensions,
    LayoutConfiguration,
    LayoutEngine,
    LayoutResult,
    Position,
)

__all__ = [
    "ColorMapping",
    "ColorTheme",
    "ValidationResult",
    "XmlDocumentValidator",
    "ExportOptions",
    "ExportResult",
    "XmlExporter",
    "create_xml_exporter",
    "export_to_xml",
    "Dimensions",
    "LayoutConfiguration",
    "LayoutEngine",
    "LayoutResult",
    "Position",
]
