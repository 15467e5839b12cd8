"""Tests for the validate-workflow command."""

import json
import logging
from pathlib import Path

from workflow_backbone.scripts.validate_workflow import (
    EXIT_INVALID,
    EXIT_MALFORMED,
    EXIT_OK,
    main,
)

FIXTURES = Path(__file__).parent / "fixtures"


def write_document(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def audit_document() -> dict:
    with open(FIXTURES / "audit_workflow.json", encoding="utf-8") as f:
        return json.load(f)


class TestValidateWorkflowCommand:
    """Test exit codes and the normalized output file."""

    def test_valid_document(self, caplog):
        caplog.set_level(logging.INFO)
        assert main([str(FIXTURES / "audit_workflow.json")]) == EXIT_OK
        assert "Workflow is valid" in caplog.text

    def test_writes_normalized_document(self, tmp_path):
        output = tmp_path / "out" / "normalized.json"
        code = main([str(FIXTURES / "legacy_final_result.json"), "--output", str(output)])
        assert code == EXIT_OK
        written = json.loads(output.read_text(encoding="utf-8"))
        assert "resultado_final" in written
        assert "formato_resultado_final" not in written

    def test_indent_option(self, tmp_path):
        output = tmp_path / "normalized.json"
        main([str(FIXTURES / "audit_workflow.json"), "--output", str(output), "--indent", "4"])
        assert output.read_text(encoding="utf-8").startswith('{\n    "documentos_anexados"')

    def test_invalid_workflow(self, tmp_path, caplog):
        data = audit_document()
        data["grafo"]["arestas"] = [a for a in data["grafo"]["arestas"] if a["destino"] != "END"]
        path = write_document(tmp_path / "workflow.json", data)
        assert main([str(path)]) == EXIT_INVALID
        assert "MissingTerminal" in caplog.text

    def test_malformed_document(self, tmp_path):
        data = audit_document()
        del data["grafo"]["nos"][0]["saida"]
        path = write_document(tmp_path / "workflow.json", data)
        assert main([str(path)]) == EXIT_MALFORMED

    def test_unreadable_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main([str(path)]) == EXIT_MALFORMED

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "absent.json")]) == EXIT_MALFORMED
