"""Reflector option composition tests."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import pytest
from schema_reflector.configuration import (
    ReflectorConfig,
    new_reflector_config,
    with_additional_fields,
    with_additional_properties_allowed,
    with_anonymous,
    with_assign_anchor,
    with_base_schema_id,
    with_comment_map,
    with_embedded_as_reference,
    with_expanded_struct,
    with_field_name_tag,
    with_ignored_types,
    with_key_namer,
    with_lookup,
    with_mapper,
    with_namer,
    with_required_from_jsonschema_tags,
    without_reference,
)


@dataclass
class Secret:
    value: str


def test_defaults() -> None:
    config = ReflectorConfig()

    assert config.base_schema_id is None
    assert not config.anonymous
    assert not config.assign_anchor
    assert not config.allow_additional_properties
    assert not config.required_from_jsonschema_tags
    assert not config.do_not_reference
    assert not config.expanded_struct
    assert not config.embedded_as_reference
    assert config.field_name_tag == "json"
    assert config.ignored_types == ()
    assert config.comment_map == {}


def test_every_option_sets_its_field() -> None:
    def lookup(_):
        return None

    def mapper(_):
        return None

    def namer(cls):
        return cls.__name__

    def provider(_):
        return []

    config = new_reflector_config(
        with_base_schema_id("https://example.com/schemas"),
        with_anonymous(),
        with_assign_anchor(),
        with_additional_properties_allowed(),
        with_required_from_jsonschema_tags(),
        without_reference(),
        with_expanded_struct(),
        with_field_name_tag("yaml"),
        with_ignored_types(Secret),
        with_lookup(lookup),
        with_mapper(mapper),
        with_namer(namer),
        with_key_namer(str.lower),
        with_additional_fields(provider),
        with_comment_map({"app.User": "A user"}),
        with_embedded_as_reference(),
    )

    assert config.base_schema_id == "https://example.com/schemas"
    assert config.anonymous
    assert config.assign_anchor
    assert config.allow_additional_properties
    assert config.required_from_jsonschema_tags
    assert config.do_not_reference
    assert config.expanded_struct
    assert config.field_name_tag == "yaml"
    assert config.ignored_types == (Secret,)
    assert config.lookup is lookup
    assert config.mapper is mapper
    assert config.namer is namer
    assert config.key_namer is str.lower
    assert config.additional_fields is provider
    assert config.comment_map == {"app.User": "A user"}
    assert config.embedded_as_reference


def test_later_options_override_earlier_ones() -> None:
    config = new_reflector_config(with_field_name_tag("yaml"), with_field_name_tag("toml"))

    assert config.field_name_tag == "toml"


def test_ignored_instances_are_stored_as_types() -> None:
    config = new_reflector_config(with_ignored_types(Secret(value="x"), int))

    assert config.ignored_types == (Secret, int)
    assert config.is_ignored(Secret)
    assert not config.is_ignored(str)


def test_configuration_is_immutable() -> None:
    config = ReflectorConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.anonymous = True  # type: ignore[misc]


def test_comment_map_is_copied() -> None:
    comments = {"app.User": "A user"}
    config = new_reflector_config(with_comment_map(comments))

    comments["app.User"] = "Changed"

    assert config.comment_map == {"app.User": "A user"}
