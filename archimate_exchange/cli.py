"""CLI interface."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from archimate_exchange.errors import ArchimateExportError, ModelValidationError
from archimate_exchange.generator.mermaid_generator import MermaidGenerator
from archimate_exchange.models.archimate import LAYER_ORDER, RelationshipType, element_types_in_layer
from archimate_exchange.schemas import ExportPayload, payload_from_json
from archimate_exchange.utils.config import settings
from archimate_exchange.utils.file_utils import ensure_dir, read_text_file, write_text_file
from archimate_exchange.validator.validator import Validator
from archimate_exchange.xml_export.document_validator import XmlDocumentValidator
from archimate_exchange.xml_export.exporter import XmlExporter

app = typer.Typer(add_completion=False)


@app.callback()
def main(log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level.")):
    """Validate, lay out and export ArchiMate models."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_payload(path: Path) -> ExportPayload:
    try:
        return payload_from_json(read_text_file(path))
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in {path}: {exc}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def export(
    payload: Path = typer.Argument(..., help="JSON file with elements, relationships and options."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the document to this path."),
    output_name: Optional[str] = typer.Option(None, "--output-name", help="Write <output_dir>/<name>.xml."),
    theme: Optional[str] = typer.Option(None, "--theme", help="archimate, monochrome or high-contrast."),
    strict: bool = typer.Option(False, "--strict", help="Block export on orphans and duplicate ids."),
    stats: bool = typer.Option(False, "--stats", help="Print statistics as JSON to stderr."),
    no_views: bool = typer.Option(False, "--no-views", help="Omit the diagram view."),
):
    """Export a payload to an ArchiMate Open Exchange document."""
    data = _load_payload(payload)
    updates = {}
    if theme:
        updates["color_theme"] = theme
    if strict:
        updates.update(validate_model=True, strict_validation=True)
    if stats:
        updates["include_statistics"] = True
    if no_views:
        updates["include_views"] = False
    options = data.options.model_copy(update=updates)

    try:
        exporter = XmlExporter(options.color_theme or settings.default_color_theme)
        result = exporter.export_model(data.elements, data.relationships, options)
    except ModelValidationError as exc:
        for message in exc.result.errors:
            typer.echo(f"error: {message}", err=True)
        raise typer.Exit(code=1)
    except ArchimateExportError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    for message in result.warnings:
        typer.echo(f"warning: {message}", err=True)
    if result.statistics is not None:
        typer.echo(json.dumps(result.statistics, indent=2), err=True)

    if output_name:
        output = ensure_dir(settings.output_dir) / f"{output_name}.xml"
    if output:
        write_text_file(output, result.document)
        typer.echo(f"Wrote {output}", err=True)
    else:
        typer.echo(result.document, nl=False)


@app.command()
def validate(payload: Path = typer.Argument(..., help="JSON payload to check against the relationship matrix.")):
    """Check every relationship against the compatibility matrix."""
    data = _load_payload(payload)
    violations = Validator().validate(data.elements, data.relationships)
    if not violations:
        typer.echo("No invalid relationships found")
        return
    for violation in violations:
        typer.echo(f"{violation.relationship.id}: {violation.message}")
    raise typer.Exit(code=1)


@app.command()
def check(document: Path = typer.Argument(..., help="Exchange document to check.")):
    """Run the standalone document checks on an XML file."""
    validator = XmlDocumentValidator()
    result = validator.validate_xml_file(document)
    typer.echo(validator.summary(result))
    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def types(layer: Optional[str] = typer.Option(None, "--layer", help="Only list element types of this layer.")):
    """List the element and relationship vocabulary."""
    if layer:
        try:
            element_types = element_types_in_layer(layer)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        for element_type in element_types:
            typer.echo(element_type.value)
        return

    for each in LAYER_ORDER:
        typer.echo(f"{each.value}:")
        for element_type in element_types_in_layer(each):
            typer.echo(f"  {element_type.value}")
    typer.echo("Relationships:")
    for rel_type in RelationshipType:
        typer.echo(f"  {rel_type.value}")


@app.command()
def mermaid(payload: Path = typer.Argument(..., help="JSON payload to render.")):
    """Print a Mermaid flowchart of the payload."""
    data = _load_payload(payload)
    typer.echo(MermaidGenerator().generate(data.elements, data.relationships), nl=False)


if __name__ == "__main__":
    app()
