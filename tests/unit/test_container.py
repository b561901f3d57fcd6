"""Tests for the dependency injection container."""

import pytest

from manifest_compiler.core import Settings, create_container
from manifest_compiler.codegen import (
    CodeGenerator,
    Formatter,
    PassthroughFormatter,
    PrettierFormatter,
)
from manifest_compiler.manifest import ManifestParser


@pytest.mark.unit
def test_container_wires_generator():
    settings = Settings(_env_file=None, enable_formatting=False, component_path="web/ui")
    container = create_container(settings)

    generator = container.get(CodeGenerator)

    assert generator is container.get(CodeGenerator)
    assert isinstance(generator.formatter, PassthroughFormatter)
    assert generator.options.component_path == "web/ui"
    assert container.get(Settings) is settings


@pytest.mark.unit
def test_container_uses_prettier_when_enabled():
    settings = Settings(_env_file=None, enable_formatting=True, prettier_bin="/opt/bin/prettier")

    formatter = create_container(settings).get(Formatter)

    assert isinstance(formatter, PrettierFormatter)
    assert formatter.binary == "/opt/bin/prettier"


@pytest.mark.unit
def test_container_parser_limits():
    settings = Settings(_env_file=None, max_manifest_size=1024, max_manifest_depth=4)

    parser = create_container(settings).get(ManifestParser)

    assert parser.max_size == 1024
    assert parser.max_depth == 4
