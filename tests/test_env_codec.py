"""Tests for the stack env codec."""

import pytest

from stackctl.core.env_codec import (
    PAIR_SHAPE,
    RECORD_SHAPE,
    decode_variant,
    encode_stack_env,
    parse_stack_env,
)
from stackctl.exceptions import ParseError
from stackctl.models.env import StackEnvVar


@pytest.mark.parametrize("raw", [None, b"", "", "   ", b"null", "null"])
def test_missing_env_is_empty(raw) -> None:
    assert parse_stack_env(raw) == []


def test_empty_array_is_legitimately_empty() -> None:
    assert parse_stack_env(b"[]") == []


def test_pair_shape() -> None:
    raw = b'[{"name": "DB_HOST", "value": "db"}, {"name": "DEBUG", "value": ""}]'

    assert parse_stack_env(raw) == [
        StackEnvVar("DB_HOST", "db"),
        StackEnvVar("DEBUG", ""),
    ]


def test_both_encodings_normalize_to_same_list() -> None:
    pair = parse_stack_env(b'[{"name": "X", "value": "y"}]')
    record = parse_stack_env(b'[{"Name": "X", "Value": "y"}]')

    assert pair == record == [StackEnvVar("X", "y")]


def test_degenerate_pair_decode_falls_back_to_record_shape() -> None:
    # Pair decode sees two entries with no name/value at all
    raw = '[{"Name": "A", "Value": "1"}, {"Name": "B", "Value": "2"}]'

    assert decode_variant(
        [{"Name": "A", "Value": "1"}], PAIR_SHAPE
    ) == [StackEnvVar("", "")]
    assert parse_stack_env(raw) == [StackEnvVar("A", "1"), StackEnvVar("B", "2")]


def test_order_is_preserved() -> None:
    raw = [{"name": n, "value": str(i)} for i, n in enumerate(["Z", "A", "M"])]

    assert [e.name for e in parse_stack_env(raw)] == ["Z", "A", "M"]


def test_accepts_already_decoded_value() -> None:
    assert parse_stack_env([{"Name": "K", "Value": "v"}]) == [StackEnvVar("K", "v")]


def test_null_fields_read_as_empty() -> None:
    assert parse_stack_env('[{"name": "K", "value": null}]') == [StackEnvVar("K", "")]


def test_record_shape_decode_of_all_empty_entries_is_returned_as_is() -> None:
    assert parse_stack_env("[{}]") == [StackEnvVar("", "")]


@pytest.mark.parametrize(
    "raw",
    [
        b"{not json",
        b'{"name": "X", "value": "y"}',
        b'["X=y"]',
        b'[{"Name": "X", "Value": 3}]',
    ],
)
def test_undecodable_env_raises_parse_error(raw) -> None:
    with pytest.raises(ParseError):
        parse_stack_env(raw)


def test_mistyped_pair_value_with_empty_record_decode_raises() -> None:
    # pair decode fails on the number, record decode only sees empty fields
    with pytest.raises(ParseError):
        parse_stack_env(b'[{"name": "PORT", "value": 8080}]')


def test_record_variant_rejects_non_list() -> None:
    with pytest.raises(ParseError):
        decode_variant({"Name": "X"}, RECORD_SHAPE)


def test_encode_uses_pair_shape() -> None:
    env = [StackEnvVar("A", "1"), StackEnvVar("B", "")]

    assert encode_stack_env(env) == [
        {"name": "A", "value": "1"},
        {"name": "B", "value": ""},
    ]
    assert parse_stack_env(encode_stack_env(env)) == env
