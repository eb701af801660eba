import json

from typer.testing import CliRunner

from archimate_exchange.cli import app

runner = CliRunner()

PAYLOAD = {
    "elements": [
        {"id": "a", "name": "Customer", "type": "BusinessActor"},
        {"id": "b", "name": "Order Processing", "type": "BusinessProcess"},
    ],
    "relationships": [{"id": "r1", "source": "a", "target": "b", "type": "Triggering"}],
    "options": {"modelId": "m1", "modelName": "Orders"},
}


def _write_payload(tmp_path, payload=PAYLOAD):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_export_writes_document(tmp_path):
    out = tmp_path / "out" / "model.xml"
    result = runner.invoke(app, ["export", str(_write_payload(tmp_path)), "--output", str(out)])
    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<?xml")
    assert 'identifier="m1"' in text
    assert "<views>" in text


def test_export_to_stdout_without_views(tmp_path):
    result = runner.invoke(app, ["export", str(_write_payload(tmp_path)), "--no-views"])
    assert result.exit_code == 0
    assert "<relationships>" in result.stdout
    assert "<views>" not in result.stdout


def test_export_strict_blocks_on_orphans(tmp_path):
    payload = dict(PAYLOAD, relationships=[{"id": "r9", "source": "a", "target": "ghost", "type": "Flow"}])
    out = tmp_path / "model.xml"
    result = runner.invoke(app, ["export", str(_write_payload(tmp_path, payload)), "--strict", "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()


def test_export_rejects_unknown_theme(tmp_path):
    result = runner.invoke(app, ["export", str(_write_payload(tmp_path)), "--theme", "neon"])
    assert result.exit_code == 1


def test_export_rejects_malformed_payload(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["export", str(path)])
    assert result.exit_code != 0


def test_validate_reports_matrix_violations(tmp_path):
    result = runner.invoke(app, ["validate", str(_write_payload(tmp_path))])
    assert result.exit_code == 1
    assert "r1: Invalid relationship type 'Triggering'" in result.stdout


def test_validate_passes_for_allowed_pair(tmp_path):
    payload = {
        "elements": [
            {"id": "a", "name": "Clerk", "type": "BusinessActor"},
            {"id": "r", "name": "Handler", "type": "BusinessRole"},
        ],
        "relationships": [{"id": "x", "source": "a", "target": "r", "type": "Assignment"}],
    }
    result = runner.invoke(app, ["validate", str(_write_payload(tmp_path, payload))])
    assert result.exit_code == 0
    assert "No invalid relationships found" in result.stdout


def test_check_round_trips_an_exported_document(tmp_path):
    out = tmp_path / "model.xml"
    runner.invoke(app, ["export", str(_write_payload(tmp_path)), "-o", str(out)])
    result = runner.invoke(app, ["check", str(out)])
    assert result.exit_code == 0
    assert result.stdout.startswith("Validation passed")


def test_check_fails_for_broken_document(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<model>", encoding="utf-8")
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "Validation failed" in result.stdout


def test_types_lists_layer_filter():
    result = runner.invoke(app, ["types", "--layer", "strategy"])
    assert result.exit_code == 0
    assert result.stdout.split() == ["Resource", "Capability", "CourseOfAction", "ValueStream"]


def test_types_lists_everything():
    result = runner.invoke(app, ["types"])
    assert result.exit_code == 0
    assert "Motivation:" in result.stdout
    assert "  Junction" in result.stdout


def test_mermaid_command(tmp_path):
    result = runner.invoke(app, ["mermaid", str(_write_payload(tmp_path))])
    assert result.exit_code == 0
    assert result.stdout.startswith("graph TD;")
    assert "  a --> b;" in result.stdout
