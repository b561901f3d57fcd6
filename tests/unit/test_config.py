"""Tests for settings and generation options."""

import os
from unittest.mock import patch

import pytest

from manifest_compiler.core import Settings
from manifest_compiler.codegen import FormatterConfig, GenerationOptions


# ============================================================================
# Settings Tests
# ============================================================================

@pytest.mark.unit
def test_settings_defaults():
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.component_path == "src/components"
    assert settings.file_extension == ".jsx"
    assert settings.enable_formatting is True
    assert settings.max_manifest_size == 512 * 1024
    assert settings.max_manifest_depth == 32


@pytest.mark.unit
def test_settings_from_env():
    env = {
        "CODEGEN_COMPONENT_PATH": "web/components",
        "CODEGEN_FILE_EXTENSION": ".tsx",
        "CODEGEN_ENABLE_FORMATTING": "false",
        "CODEGEN_JSON_LOGS": "true",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = Settings(_env_file=None)

    assert settings.component_path == "web/components"
    assert settings.file_extension == ".tsx"
    assert settings.enable_formatting is False
    assert settings.json_logs is True


@pytest.mark.unit
def test_settings_reject_unknown_extension():
    with pytest.raises(Exception):
        Settings(_env_file=None, file_extension=".vue")


# ============================================================================
# GenerationOptions Tests
# ============================================================================

@pytest.mark.unit
def test_options_defaults():
    options = GenerationOptions()

    assert options.include_default_export is True
    assert options.include_react_import is True
    assert options.formatter == FormatterConfig()
    assert options.formatter.single_quote is True
    assert options.formatter.trailing_comma == "es5"


@pytest.mark.unit
def test_options_from_settings():
    settings = Settings(_env_file=None, component_path="out", include_react_import=False)

    options = GenerationOptions.from_settings(settings)

    assert options.component_path == "out"
    assert options.include_react_import is False


@pytest.mark.unit
def test_options_merge_only_explicit_fields():
    base = GenerationOptions(component_path="app", file_extension=".tsx")

    merged = base.merge({"includeDefaultExport": False})

    assert merged.include_default_export is False
    assert merged.component_path == "app"
    assert merged.file_extension == ".tsx"


@pytest.mark.unit
def test_options_merge_formatter_key_wise():
    base = GenerationOptions(formatter=FormatterConfig(semi=False, tab_width=4))

    merged = base.merge({"prettierConfig": {"printWidth": 100}})

    assert merged.formatter.semi is False
    assert merged.formatter.tab_width == 4
    assert merged.formatter.print_width == 100


@pytest.mark.unit
def test_options_merge_none_returns_self():
    base = GenerationOptions()

    assert base.merge(None) is base


@pytest.mark.unit
def test_options_frozen():
    with pytest.raises(Exception):
        GenerationOptions().component_path = "x"


@pytest.mark.unit
def test_options_dump_camel_case():
    dumped = GenerationOptions().model_dump(by_alias=True)

    assert "includeDefaultExport" in dumped
    assert dumped["prettierConfig"]["singleQuote"] is True
