"""CLI smoke tests."""

from click.testing import CliRunner
from schema_reflector.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "reflect" in result.output


def test_reflect_help_describes_target_format() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["reflect", "--help"])

    assert result.exit_code == 0
    assert "package.module:TypeName" in result.output
    assert "--indent" in result.output
