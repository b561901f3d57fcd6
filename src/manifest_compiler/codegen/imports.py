"""Import block builder."""

from manifest_compiler.core import get_logger
from .identifiers import is_blank, sanitize_component_name
from .types import BuilderContext, ImportBuildResult

logger = get_logger(__name__)

REACT_IMPORT = "import React from 'react';"


def claimed_names(context: BuilderContext) -> dict[str, str]:
    """Identifier -> component id map, seeded with the component's own name."""
    component = context.component
    return {sanitize_component_name(component.display_name): component.id}


def resolve_child_name(
    context: BuilderContext, child_id: str, claimed: dict[str, str]
) -> str | None:
    """
    Identifier a child is imported and rendered under.

    Returns None, after reporting a diagnostic, when the child is missing,
    has a blank display name, or sanitizes to an identifier another
    component already holds in this file. `claimed` is updated in place.
    """
    component = context.component
    child = context.manifest.components.get(child_id)
    if child is None:
        context.diagnostics.warn(
            "child_not_found",
            f'Child component "{child_id}" not found for "{component.display_name}"',
            component_id=component.id,
        )
        return None
    if is_blank(child.display_name):
        context.diagnostics.warn(
            "child_name_blank",
            f'Child component "{child_id}" has no display name',
            component_id=component.id,
        )
        return None

    name = sanitize_component_name(child.display_name)
    owner = claimed.setdefault(name, child_id)
    if owner != child_id or child_id == component.id:
        context.diagnostics.warn(
            "duplicate_component_name",
            f'Child component "{child_id}" is named "{name}", already used by "{owner}"',
            component_id=component.id,
        )
        return None
    return name


class ImportBuilder:
    """Builds the import statements for one component file"""

    def build(self, context: BuilderContext) -> ImportBuildResult:
        """
        Build imports for the framework and every resolvable child.

        Args:
            context: Builder context for the component

        Returns:
            ImportBuildResult with the import block and imported names
        """
        component = context.component
        lines: list[str] = []
        imported: list[str] = []

        if context.options.include_react_import:
            lines.append(REACT_IMPORT)

        seen: set[str] = set()
        claimed = claimed_names(context)
        for child_id in component.children:
            if not child_id or child_id in seen:
                continue
            seen.add(child_id)

            name = resolve_child_name(context, child_id, claimed)
            if name is None:
                continue
            lines.append(f"import {{ {name} }} from './{name}';")
            imported.append(name)

        logger.debug("imports_built", component_id=component.id, count=len(imported))
        return ImportBuildResult(code="\n".join(lines), imported_components=imported)
