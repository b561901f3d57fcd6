"""Tests for JavaScript literal rendering."""

import ast
import json

import pytest
from hypothesis import given, strategies as st

from manifest_compiler.codegen.literals import (
    comment_text,
    format_boolean,
    format_flow_value,
    format_number,
    format_string,
    format_value,
    value_type,
)


@pytest.mark.unit
def test_format_string_escapes():
    """Quotes, backslashes and control characters are escaped."""
    raw = 'It\'s a "test"\nline2'
    literal = format_string(raw)

    assert literal == "'It\\'s a \"test\"\\nline2'"
    # Single-quoted JS escapes used here are valid Python escapes too
    assert ast.literal_eval(literal) == raw


@pytest.mark.unit
def test_format_string_tabs_and_backslashes():
    assert format_string("a\tb\\c\r") == "'a\\tb\\\\c\\r'"


_literal_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")) | st.sampled_from("\n\r\t\\'\"")
)


@pytest.mark.unit
@given(_literal_text)
def test_format_string_round_trip(raw):
    """Any string survives as a single-quoted literal."""
    literal = format_string(raw)
    assert literal.startswith("'") and literal.endswith("'")
    assert "\n" not in literal
    assert ast.literal_eval(literal) == raw


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (42, "42"),
        (-7, "-7"),
        (1.0, "1"),
        (2.5, "2.5"),
        (float("nan"), "NaN"),
        (float("inf"), "Infinity"),
        (float("-inf"), "-Infinity"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.unit
def test_format_boolean():
    assert format_boolean(True) == "true"
    assert format_boolean(False) == "false"


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        ("hi", "'hi'"),
        (3, "3"),
        (True, "true"),
        (False, "false"),
        ([1, "a"], '[1,"a"]'),
        ({"a": 1}, '{"a":1}'),
    ],
)
def test_format_value_by_type(value, expected):
    """The value's own type picks the literal form."""
    assert format_value(value) == expected


@pytest.mark.unit
def test_value_type_does_not_treat_bool_as_number():
    assert value_type(True) == "boolean"
    assert value_type(1) == "number"
    assert value_type(None) is None


@pytest.mark.unit
def test_format_flow_value_uses_json_strings():
    """Flow arguments use double-quoted strings."""
    assert format_flow_value("Hi!") == '"Hi!"'
    assert format_flow_value('say "hi"') == json.dumps('say "hi"')
    assert format_flow_value(5) == "5"
    assert format_flow_value(False) == "false"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("httpRequest", "httpRequest"),
        ("a\nb\r\nc", "a b c"),
        ("x\u2028y\u2029z", "x y z"),
        ("end */ here", "end *\\/ here"),
    ],
)
def test_comment_text(raw, expected):
    assert comment_text(raw) == expected
