"""Props destructuring builder."""

from manifest_compiler.core import get_logger
from manifest_compiler.manifest import ComponentProperty
from .identifiers import sanitize_prop_name
from .literals import format_value, value_type
from .types import BuilderContext, PropsBuildResult

logger = get_logger(__name__)


def property_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive order with the raw name as tie-breaker."""
    return (name.casefold(), name)


class PropsBuilder:
    """
    Builds the destructuring parameter of a component function.

    Properties are sorted by name and rendered as `name = default`, or as a
    bare `name` when no default can be resolved. A bound event handler is
    appended last without a default.
    """

    def build(self, context: BuilderContext) -> PropsBuildResult:
        component = context.component
        entries: list[str] = []
        names: list[str] = []
        taken: dict[str, str] = {}

        for prop_name in sorted(component.properties, key=property_sort_key):
            prop = component.properties[prop_name]
            safe_name = sanitize_prop_name(prop_name)

            if safe_name in taken:
                context.diagnostics.warn(
                    "duplicate_prop_name",
                    f'Property "{prop_name}" collides with "{taken[safe_name]}" as "{safe_name}"',
                    component_id=component.id,
                )
                continue
            taken[safe_name] = prop_name

            names.append(prop_name)
            entries.append(self._render(prop_name, safe_name, prop, context))

        if context.click_handler:
            if context.click_handler in taken:
                context.diagnostics.warn(
                    "duplicate_prop_name",
                    f'Event prop "{context.click_handler}" shadows property '
                    f'"{taken[context.click_handler]}"',
                    component_id=component.id,
                )
                index = names.index(taken[context.click_handler])
                del names[index]
                del entries[index]
            names.append(context.click_handler)
            entries.append(context.click_handler)

        if not entries:
            return PropsBuildResult(code="", prop_names=[], has_props=False)

        logger.debug("props_built", component_id=component.id, count=len(entries))
        return PropsBuildResult(
            code="{ " + ", ".join(entries) + " }",
            prop_names=names,
            has_props=True,
        )

    def _render(
        self,
        prop_name: str,
        safe_name: str,
        prop: ComponentProperty,
        context: BuilderContext,
    ) -> str:
        if not prop.has_default:
            return safe_name

        value = prop.default_value
        actual = value_type(value)
        if value is not None and actual != prop.data_type:
            context.diagnostics.warn(
                "prop_type_mismatch",
                f'Property "{prop_name}" declares {prop.data_type} but its default is {actual}',
                component_id=context.component.id,
            )
        return f"{safe_name} = {format_value(value)}"
