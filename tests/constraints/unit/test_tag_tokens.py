"""Field tag tokenization tests."""

from __future__ import annotations

from schema_reflector.constraints import parse_extras, parse_name_tag, split_tag_tokens
from schema_reflector.constraints.tag_tokens import split_token


def test_name_tag_options() -> None:
    assert parse_name_tag(None).name is None
    assert parse_name_tag("-").omit
    assert parse_name_tag("user_id,omitempty").name == "user_id"
    assert parse_name_tag("user_id,omitempty").omit_empty
    assert parse_name_tag(",inline").inline
    assert parse_name_tag(",inline").name is None


def test_dash_with_options_is_a_field_name() -> None:
    tag = parse_name_tag("-,")

    assert not tag.omit
    assert tag.name == "-"


def test_split_tag_tokens_honors_escaped_commas() -> None:
    tokens = split_tag_tokens(r"description=Hello\, world, minLength=2 ,,")

    assert tokens == ["description=Hello, world", "minLength=2"]


def test_split_tag_tokens_keeps_other_backslashes() -> None:
    assert split_tag_tokens(r"pattern=^\d+$") == [r"pattern=^\d+$"]
    assert split_tag_tokens(None) == []


def test_split_token_distinguishes_flags_from_values() -> None:
    assert split_token("readOnly") == ("readOnly", None)
    assert split_token("default=") == ("default", "")
    assert split_token("pattern=a=b") == ("pattern", "a=b")


def test_parse_extras_collects_repeated_keys() -> None:
    extras = parse_extras("x-order=1,x-tag=a,x-tag=b,flag")

    assert extras == {"x-order": "1", "x-tag": ["a", "b"]}
