"""Export orchestration: pre-export checks, visual configuration, assembly, statistics."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from archimate_exchange.errors import ExportError, ModelValidationError
from archimate_exchange.models.elements import Element, Relationship
from archimate_exchange.utils.config import settings
from archimate_exchange.xml_export.color_theme import ColorTheme, ThemeSpec
from archimate_exchange.xml_export.element_generator import ElementGenerationOptions
from archimate_exchange.xml_export.layout_engine import LayoutEngine
from archimate_exchange.xml_export.model_generator import ModelExportOptions, ModelXmlGenerator
from archimate_exchange.xml_export.relationship_generator import RelationshipGenerationOptions
from archimate_exchange.xml_export.view_generator import ViewOptions
from archimate_exchange.xml_export.xml_utils import serialize

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class ExportOptions(BaseModel):
    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    model_id: Optional[str] = Field(None, alias="modelId")
    model_name: Optional[str] = Field(None, alias="modelName")
    model_purpose: Optional[str] = Field(None, alias="modelPurpose")
    include_views: bool = Field(True, alias="includeViews")
    view_name: Optional[str] = Field(None, alias="viewName")
    view_id: Optional[str] = Field(None, alias="viewId")
    # preset name, custom type -> colors table, or a ColorTheme instance
    color_theme: Any = Field(None, alias="colorTheme")
    layout_configuration: Optional[Dict[str, Any]] = Field(None, alias="layoutConfiguration")
    element_options: ElementGenerationOptions = Field(default_factory=ElementGenerationOptions, alias="elementOptions")
    relationship_options: RelationshipGenerationOptions = Field(
        default_factory=RelationshipGenerationOptions, alias="relationshipOptions"
    )
    validate_model: bool = Field(False, alias="validateModel")
    strict_validation: bool = Field(False, alias="strictValidation")
    include_statistics: bool = Field(False, alias="includeStatistics")


@dataclass
class ExportResult:
    document: str = ""
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    statistics: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "document": self.document,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }
        if self.statistics is not None:
            payload["statistics"] = self.statistics
        return payload


def _duplicates(ids: Sequence[str]) -> List[str]:
    """Ids seen more than once, each reported once in first-repeat order."""
    seen = set()
    reported: List[str] = []
    for item in ids:
        if item in seen and item not in reported:
            reported.append(item)
        seen.add(item)
    return reported


def _layout_overrides(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_RE.sub("_", key).lower(): value for key, value in config.items()}


class XmlExporter:
    def __init__(self, color_theme: Optional[ThemeSpec] = None, layout_config: Optional[Mapping[str, Any]] = None):
        self.color_theme = ColorTheme.resolve(color_theme) if color_theme is not None else ColorTheme.archimate()
        self.layout_engine = LayoutEngine.with_overrides(**_layout_overrides(layout_config or {}))
        self.model_generator = ModelXmlGenerator(self.color_theme, self.layout_engine)
        self.element_generator = self.model_generator.element_generator
        self.relationship_generator = self.model_generator.relationship_generator

    @property
    def view_generator(self):
        return self.model_generator.view_generator

    def export_model(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        options: Optional[ExportOptions] = None,
    ) -> ExportResult:
        """Validate (optionally), assemble the document, and collect statistics.

        Raises ModelValidationError when strict validation finds blocking
        problems, and ExportError when document assembly fails.

        A ``color_theme`` or ``layout_configuration`` given in ``options`` is
        applied to the exporter itself and stays in effect for later calls.
        """
        options = options or ExportOptions()
        result = ExportResult()
        logger.info("Exporting model: %d elements, %d relationships", len(elements), len(relationships))

        if options.validate_model:
            warnings, errors = self.validate_model_inputs(elements, relationships, options.strict_validation)
            result.warnings.extend(warnings)
            result.errors.extend(errors)
            for message in warnings:
                logger.warning("Pre-export check: %s", message)
            if errors and options.strict_validation:
                raise ModelValidationError(f"Model validation failed: {', '.join(errors)}", result)

        try:
            self._configure_visualization(options)
            result.document = self.model_generator.generate(elements, relationships, self._model_options(options))
        except Exception as exc:
            logger.exception("Export failed")
            message = f"Export failed: {exc}"
            result.errors.append(message)
            raise ExportError(message) from exc

        if options.include_statistics:
            result.statistics = self.collect_statistics(elements, relationships, options.include_views)

        logger.info("Export finished: %d characters, %d warnings", len(result.document), len(result.warnings))
        return result

    def export_elements_only(
        self,
        elements: Sequence[Element],
        options: Optional[ElementGenerationOptions] = None,
    ) -> str:
        options = options or ElementGenerationOptions(group_by_layer=True, include_documentation=True)
        return self.element_generator.to_xml(elements, options)

    def export_relationships_only(
        self,
        relationships: Sequence[Relationship],
        elements: Optional[Sequence[Element]] = None,
        options: Optional[RelationshipGenerationOptions] = None,
    ) -> str:
        options = options or RelationshipGenerationOptions(group_by_type=True, validate_references=True)
        return self.relationship_generator.to_xml(relationships, options, elements)

    def export_views_only(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        options: Optional[ViewOptions] = None,
    ) -> str:
        options = options or ViewOptions(view_id="exported-view", view_name="Exported View")
        view = self.view_generator.generate_view(elements, relationships, options)
        return serialize(view, declaration=False)

    def set_color_theme(self, theme: ThemeSpec) -> None:
        self.color_theme = ColorTheme.resolve(theme)
        self.model_generator.set_color_theme(self.color_theme)

    def set_layout_configuration(self, config: Mapping[str, Any]) -> None:
        self.layout_engine = LayoutEngine.with_overrides(**_layout_overrides(config))
        self.model_generator.set_layout_engine(self.layout_engine)

    def model_statistics(self, elements: Sequence[Element], relationships: Sequence[Relationship]) -> Dict[str, Any]:
        return self.collect_statistics(elements, relationships, include_views=True)

    def validate_model_inputs(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        strict: bool = False,
    ) -> tuple[List[str], List[str]]:
        warnings: List[str] = []
        errors: List[str] = []
        blocking = errors if strict else warnings

        if not elements:
            warnings.append("Model contains no elements")

        orphaned = self.relationship_generator.find_orphaned_relationships(relationships, elements)
        if orphaned:
            blocking.append(f"Found {len(orphaned)} orphaned relationships: {', '.join(orphaned)}")

        duplicate_elements = _duplicates([element.id for element in elements])
        if duplicate_elements:
            blocking.append(f"Duplicate element IDs found: {', '.join(duplicate_elements)}")

        duplicate_relationships = _duplicates([rel.id for rel in relationships])
        if duplicate_relationships:
            blocking.append(f"Duplicate relationship IDs found: {', '.join(duplicate_relationships)}")

        unnamed = [element.id for element in elements if not element.name.strip()]
        if unnamed:
            warnings.append(f"Found {len(unnamed)} elements without names: {', '.join(unnamed)}")

        return warnings, errors

    def collect_statistics(
        self,
        elements: Sequence[Element],
        relationships: Sequence[Relationship],
        include_views: bool = True,
    ) -> Dict[str, Any]:
        statistics: Dict[str, Any] = {
            "elements": self.element_generator.element_statistics(elements),
            "relationships": self.relationship_generator.relationship_statistics(relationships),
        }
        if include_views:
            view_stats = self.view_generator.view_statistics(elements, relationships)
            statistics["views"] = {
                "element_count": view_stats["element_count"],
                "relationship_count": view_stats["relationship_count"],
                "dimensions": view_stats["dimensions"],
            }
        return statistics

    def _configure_visualization(self, options: ExportOptions) -> None:
        if options.color_theme:
            self.set_color_theme(options.color_theme)
        if options.layout_configuration:
            self.set_layout_configuration(options.layout_configuration)

    def _model_options(self, options: ExportOptions) -> ModelExportOptions:
        return ModelExportOptions(
            model_id=options.model_id,
            model_name=options.model_name or settings.default_model_name,
            model_purpose=options.model_purpose,
            include_views=options.include_views,
            view_name=options.view_name or settings.default_view_name,
            view_id=options.view_id,
            view_documentation=f"Generated view: {options.view_name}" if options.view_name else None,
            element_options=options.element_options,
            relationship_options=options.relationship_options,
        )


def create_xml_exporter(
    color_theme: Optional[ThemeSpec] = None,
    layout_config: Optional[Mapping[str, Any]] = None,
) -> XmlExporter:
    return XmlExporter(color_theme or settings.default_color_theme, layout_config)


def export_to_xml(
    elements: Sequence[Element],
    relationships: Sequence[Relationship],
    options: Optional[ExportOptions] = None,
) -> str:
    """One-shot export returning only the document text."""
    result = create_xml_exporter().export_model(elements, relationships, options)
    if result.errors:
        raise ExportError(f"Export failed: {', '.join(result.errors)}")
    return result.document
