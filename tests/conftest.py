"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone
from typing import Any

import pytest

from manifest_compiler.core import get_settings
from manifest_compiler.codegen import (
    BuilderContext,
    CodeGenerator,
    CommentHeaderBuilder,
    GenerationOptions,
    PassthroughFormatter,
)
from manifest_compiler.manifest import Component, Manifest


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["CODEGEN_LOG_LEVEL"] = "DEBUG"
    os.environ["CODEGEN_ENABLE_FORMATTING"] = "false"
    get_settings.cache_clear()


# ============================================================================
# Manifest Fixtures
# ============================================================================

FIXED_TIME = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def build_component(component_id: str, display_name: str, type: str = "div", **fields: Any) -> Component:
    """Build a component from camelCase manifest fields."""
    return Component.model_validate(
        {"id": component_id, "displayName": display_name, "type": type, **fields}
    )


def build_manifest(*components: Component, flows: dict[str, Any] | None = None) -> Manifest:
    return Manifest.model_validate(
        {"components": {c.id: c for c in components}, "flows": flows or {}}
    )


@pytest.fixture
def make_component():
    """Factory: make_component(id, display_name, type="div", **camelCaseFields)."""
    return build_component


@pytest.fixture
def make_manifest():
    """Factory: make_manifest(*components, flows=None)."""
    return build_manifest


@pytest.fixture
def make_context():
    """Factory for a builder context around one component."""

    def _make(component: Component, manifest: Manifest | None = None, **kwargs: Any) -> BuilderContext:
        return BuilderContext(
            component=component,
            manifest=manifest or build_manifest(component),
            **kwargs,
        )

    return _make


@pytest.fixture
def button_manifest_data() -> dict[str, Any]:
    """Button bound to a click flow that shows an alert."""
    return {
        "schemaVersion": "1.0.0",
        "components": {
            "btn-1": {
                "id": "btn-1",
                "displayName": "Button",
                "type": "button",
                "properties": {
                    "label": {"type": "static", "value": "Click", "dataType": "string"},
                },
                "styling": {"baseClasses": ["btn"]},
                "children": [],
            },
        },
        "flows": {
            "flow-1": {
                "id": "flow-1",
                "name": "Say Hi",
                "trigger": {"componentId": "btn-1", "type": "onClick"},
                "nodes": [
                    {"id": "n-event", "type": "event", "config": {"eventType": "onClick"}},
                    {
                        "id": "n-alert",
                        "type": "alert",
                        "config": {"message": {"type": "static", "value": "Hi!"}},
                    },
                ],
                "edges": [{"id": "e-1", "source": "n-event", "target": "n-alert"}],
            },
        },
    }


@pytest.fixture
def button_manifest(button_manifest_data) -> Manifest:
    return Manifest.model_validate(button_manifest_data)


@pytest.fixture
def card_manifest() -> Manifest:
    """Container with two children and a dangling reference."""
    card = build_component(
        "card", "User Card", children=["header", "body", "header", "ghost"],
        styling={"baseClasses": ["card", "  ", "shadow"]},
    )
    header = build_component("header", "Header", type="h2")
    body = build_component("body", "Body", type="p")
    return build_manifest(card, header, body)


# ============================================================================
# Generator Fixtures
# ============================================================================

@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def generator(fixed_clock) -> CodeGenerator:
    """Generator with a fixed clock and no external formatter."""
    return CodeGenerator(
        comment_builder=CommentHeaderBuilder(clock=fixed_clock),
        formatter=PassthroughFormatter(),
        options=GenerationOptions(),
    )
