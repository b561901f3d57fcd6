"""Tests for identifier sanitizers."""

import pytest
from hypothesis import given, strategies as st

from manifest_compiler.codegen.identifiers import (
    capitalize,
    is_blank,
    sanitize_component_name,
    sanitize_prop_name,
)


# ============================================================================
# Component Names
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Button", "Button"),
        ("user card", "Usercard"),
        ("my-widget!", "Mywidget"),
        ("123abc", "_123abc"),
        ("", "Component"),
        ("!!!", "Component"),
        ("_private", "_private"),
    ],
)
def test_sanitize_component_name(raw, expected):
    """Test PascalCase component names."""
    assert sanitize_component_name(raw) == expected


@pytest.mark.unit
@given(st.text())
def test_sanitize_component_name_idempotent(raw):
    """Sanitizing twice changes nothing."""
    once = sanitize_component_name(raw)
    assert sanitize_component_name(once) == once


@pytest.mark.unit
@given(st.text())
def test_sanitize_component_name_is_identifier(raw):
    """Result is always a usable component identifier."""
    name = sanitize_component_name(raw)
    assert name.isidentifier()
    assert not name[0].islower()


# ============================================================================
# Prop Names
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("label", "label"),
        ("background-color", "backgroundColor"),
        ("aria label", "arialabel"),
        ("9lives", "_9lives"),
        ("$value", "$value"),
        ("", "prop"),
        ("---", "prop"),
        ("class", "className"),
        ("for", "htmlFor"),
        ("default", "_default"),
        ("return", "_return"),
    ],
)
def test_sanitize_prop_name(raw, expected):
    """Test prop identifiers."""
    assert sanitize_prop_name(raw) == expected


@pytest.mark.unit
@given(st.text())
def test_sanitize_prop_name_idempotent(raw):
    """Sanitizing twice changes nothing."""
    once = sanitize_prop_name(raw)
    assert sanitize_prop_name(once) == once


@pytest.mark.unit
def test_capitalize():
    assert capitalize("count") == "Count"
    assert capitalize("") == ""
    assert capitalize("isOpen") == "IsOpen"


@pytest.mark.unit
def test_is_blank():
    assert is_blank(None)
    assert is_blank("   ")
    assert not is_blank(" x ")
