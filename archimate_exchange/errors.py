"""Exception hierarchy for model construction, generation and export."""
from __future__ import annotations

from typing import Any, Optional


class ArchimateExportError(Exception):
    """Base class for errors raised by this package."""


class UnknownElementTypeError(ArchimateExportError, ValueError):
    def __init__(self, type_name: str, element_id: Optional[str] = None):
        suffix = f" for element '{element_id}'" if element_id else ""
        super().__init__(f"Unknown element type: {type_name}{suffix}")
        self.type_name = type_name
        self.element_id = element_id


class UnknownRelationshipTypeError(ArchimateExportError, ValueError):
    def __init__(self, type_name: str, relationship_id: Optional[str] = None):
        suffix = f" for relationship '{relationship_id}'" if relationship_id else ""
        super().__init__(f"Unknown relationship type: {type_name}{suffix}")
        self.type_name = type_name
        self.relationship_id = relationship_id


class UnknownThemeError(ArchimateExportError, ValueError):
    def __init__(self, theme_name: str):
        super().__init__(f"Unknown color theme: {theme_name}")
        self.theme_name = theme_name


class TemplateLoadError(ArchimateExportError):
    """Raised when a fragment template cannot be read or parsed."""


class DanglingReferenceError(ArchimateExportError):
    """Raised when a relationship points at an element that is not in the model."""

    def __init__(self, relationship_id: str, end: str, element_id: str):
        super().__init__(
            f"Relationship {relationship_id} references non-existent {end} element: {element_id}"
        )
        self.relationship_id = relationship_id
        self.end = end
        self.element_id = element_id


class MissingVisualElementError(ArchimateExportError):
    def __init__(self, relationship_id: str):
        super().__init__(f"Missing visual elements for relationship {relationship_id}")
        self.relationship_id = relationship_id


class ModelValidationError(ArchimateExportError):
    """Raised when strict pre-export validation finds blocking errors."""

    def __init__(self, message: str, result: Any):
        super().__init__(message)
        self.result = result


class ExportError(ArchimateExportError):
    """Wraps any failure while assembling the document."""
