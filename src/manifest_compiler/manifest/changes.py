"""Hash-based change detection for incremental generation."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from manifest_compiler.core import get_logger
from manifest_compiler.core.hash import Algorithm, hash_json
from .models import Component, Manifest

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChangeSet:
    """Component ids grouped by how they changed since the last snapshot."""

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> list[str]:
        """Ids that need regeneration (added first, then modified)."""
        return [*self.added, *self.modified]

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.removed)


ComponentSource = Union[Manifest, Mapping[str, Component]]


def _dependencies(component: Component, manifest: Manifest) -> dict[str, Any]:
    """Manifest data outside the component that still shapes its file."""
    children: dict[str, str | None] = {}
    for child_id in component.children:
        child = manifest.components.get(child_id)
        children[child_id] = child.display_name if child is not None else None

    flows = [
        flow.model_dump(mode="json", by_alias=True)
        for flow in manifest.flows.values()
        if flow.trigger.component_id == component.id
    ]
    return {"children": children, "flows": flows}


def fingerprint_component(
    component: Component,
    algorithm: Algorithm = Algorithm.XXHASH64,
    manifest: Manifest | None = None,
) -> str:
    """
    Deterministic digest of everything that affects generated code.

    Given the manifest, the digest also covers the flows the component
    triggers (click binding and handlers) and its children's display names
    (imports and child tags).
    """
    payload: dict[str, Any] = {"component": component.model_dump(mode="json", by_alias=True)}
    if manifest is not None:
        payload.update(_dependencies(component, manifest))
    return hash_json(payload, algorithm)


def _unpack(source: ComponentSource) -> tuple[Mapping[str, Component], Manifest | None]:
    if isinstance(source, Manifest):
        return source.components, source
    return source, None


class ChangeDetector:
    """
    Remembers component fingerprints between generation runs.

    The first `detect` reports every component as added; call `update` after
    a successful generation to move the snapshot forward. Pass the whole
    `Manifest` so that flow edits and child renames count as modifications;
    a bare component mapping only tracks the components themselves.
    """

    def __init__(self, algorithm: Algorithm = Algorithm.XXHASH64) -> None:
        self.algorithm = algorithm
        self._hashes: dict[str, str] = {}

    def detect(self, source: ComponentSource) -> ChangeSet:
        components, manifest = _unpack(source)
        added: list[str] = []
        modified: list[str] = []

        for component_id, component in components.items():
            cached = self._hashes.get(component_id)
            if cached is None:
                added.append(component_id)
            elif cached != fingerprint_component(component, self.algorithm, manifest):
                modified.append(component_id)

        removed = [cid for cid in self._hashes if cid not in components]

        changes = ChangeSet(added=added, modified=modified, removed=removed)
        logger.debug(
            "changes_detected",
            added=len(added),
            modified=len(modified),
            removed=len(removed),
        )
        return changes

    def update(self, source: ComponentSource, only: list[str] | None = None) -> None:
        """Record fingerprints for `only` (default: all) and forget removed ids."""
        components, manifest = _unpack(source)
        for component_id in [cid for cid in self._hashes if cid not in components]:
            del self._hashes[component_id]

        ids = only if only is not None else list(components)
        for component_id in ids:
            component = components.get(component_id)
            if component is not None:
                self._hashes[component_id] = fingerprint_component(
                    component, self.algorithm, manifest
                )

    def clear(self) -> None:
        self._hashes.clear()

    def __len__(self) -> int:
        return len(self._hashes)

    def __contains__(self, component_id: str) -> bool:
        return component_id in self._hashes
