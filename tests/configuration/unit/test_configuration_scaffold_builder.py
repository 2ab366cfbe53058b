"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from schema_reflector.configuration import load_reflector_config
from schema_reflector.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_lists_every_option() -> None:
    scaffold = build_placeholder_configuration()

    assert "Reflector configuration template" in scaffold
    for option in (
        "base_schema_id:",
        "anonymous:",
        "assign_anchor:",
        "allow_additional_properties:",
        "required_from_jsonschema_tags:",
        "without_reference:",
        "expanded_struct:",
        "embedded_as_reference:",
        "field_name_tag:",
        "# ignored_types:",
        "# lookup:",
        "# mapper:",
        "# namer:",
        "# key_namer:",
        "# additional_fields:",
        "# comment_map:",
    ):
        assert option in scaffold
    assert "<OPTIONAL" in scaffold


def test_write_placeholder_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-reflector.yaml"

    written_path = write_placeholder_configuration(output_path)
    config = load_reflector_config(written_path)

    assert written_path == output_path.resolve()
    assert config.base_schema_id == "https://example.com/schemas"
    assert config.field_name_tag == "json"
    assert not config.do_not_reference


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
