"""CLI reflection integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_reflector.cli import cli, main
from schema_reflector.schema_management import SCHEMA_VERSION

TARGET = "cli_sample_models:Invoice"


def test_reflect_prints_schema_to_stdout(capsys) -> None:
    exit_code = main(["reflect", TARGET])
    captured = capsys.readouterr()

    document = json.loads(captured.out)
    assert exit_code == 0
    assert document["$schema"] == SCHEMA_VERSION
    assert document["$ref"] == "#/$defs/Invoice"
    assert list(document["$defs"]) == ["Customer", "Invoice"]
    assert document["$defs"]["Invoice"]["properties"]["total"] == {
        "type": "number",
        "minimum": 0,
    }
    assert "warning: Invoice.total: ignored 'maximum=lots'" in captured.err


def test_reflect_applies_configuration_file(tmp_path: Path) -> None:
    config_path = tmp_path / "schema-reflector.yaml"
    config_path.write_text(
        "\n".join(
            [
                'base_schema_id: "https://example.com/schemas"',
                "expanded_struct: true",
                'key_namer: "cli_sample_models:upper_key"',
            ]
        ),
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["reflect", TARGET, "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    document = json.loads(result.stdout)
    assert document["$id"] == "https://example.com/schemas/invoice"
    assert list(document["properties"]) == ["NUMBER", "TOTAL", "CUSTOMER"]
    assert document["properties"]["CUSTOMER"] == {"$ref": "#/$defs/Customer"}
    assert document["$defs"]["Customer"]["required"] == ["NAME"]


def test_reflect_writes_output_file(tmp_path: Path) -> None:
    output_path = tmp_path / "invoice.schema.json"
    runner = CliRunner()

    result = runner.invoke(
        cli, ["reflect", TARGET, "--output", str(output_path), "--indent", "0"]
    )

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.stdout
    written = output_path.read_text(encoding="utf-8")
    assert json.loads(written)["$ref"] == "#/$defs/Invoice"


def test_generate_config_command_writes_template(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-reflector.yaml"
    runner = CliRunner()

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0, result.output
    assert output_path.exists()
    assert "base_schema_id:" in output_path.read_text(encoding="utf-8")
    assert str(output_path.resolve()) in result.output
