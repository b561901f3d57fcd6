"""
Manifest model and ingestion.
Typed components and logic flows, validated once when a manifest is loaded.
"""

from .models import (
    ActionNode,
    AlertNode,
    Component,
    ComponentProperty,
    ComponentStyling,
    ConsoleNode,
    EventNode,
    Flow,
    FlowEdge,
    FlowNode,
    FlowTrigger,
    Manifest,
    PropProperty,
    SetStateNode,
    StaticProperty,
    StaticValue,
    UnknownNode,
)
from .parser import ManifestParser, parse_manifest, load_manifest, validate_manifest
from .changes import ChangeDetector, ChangeSet, fingerprint_component

__all__ = [
    "ActionNode",
    "AlertNode",
    "Component",
    "ComponentProperty",
    "ComponentStyling",
    "ConsoleNode",
    "EventNode",
    "Flow",
    "FlowEdge",
    "FlowNode",
    "FlowTrigger",
    "Manifest",
    "PropProperty",
    "SetStateNode",
    "StaticProperty",
    "StaticValue",
    "UnknownNode",
    "ManifestParser",
    "parse_manifest",
    "load_manifest",
    "validate_manifest",
    "ChangeDetector",
    "ChangeSet",
    "fingerprint_component",
]
